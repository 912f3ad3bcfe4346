"""
Coach intent schemas.

A free-text coach request ("3500m swim tomorrow, add it to my calendar")
is parsed into a :class:`CoachIntent` by a per-locale parser.
"""

import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.plan import PlanOptions


class IntentSport(str, Enum):
    SWIM = "SWIM"
    RUN = "RUN"
    BIKE = "BIKE"
    STRENGTH = "STRENGTH"
    UNKNOWN = "UNKNOWN"


class IntentMode(str, Enum):
    GENERATE = "generate"
    CHANGE = "change"
    ADD_TO_CALENDAR = "add_to_calendar"
    GENERATE_AND_ADD = "generate_and_add"


class CoachIntent(BaseModel):
    model_config = ConfigDict(frozen=True)

    sport: IntentSport = IntentSport.UNKNOWN
    target_date: Optional[datetime.date] = None
    swim_meters: Optional[int] = Field(None, gt=0)
    duration_min: Optional[int] = Field(None, gt=0)
    mode: IntentMode = IntentMode.GENERATE
    confidence: int = Field(..., ge=0, le=100)

    @property
    def adds_to_calendar(self) -> bool:
        return self.mode in (IntentMode.ADD_TO_CALENDAR, IntentMode.GENERATE_AND_ADD)


class IntentCheck(BaseModel):
    """Whether a generated plan honours what the user asked for."""

    valid: bool
    mismatch_reason: Optional[str] = None
    off_by_meters: Optional[int] = None


# ---------------------------------------------------------------------------
# API
# ---------------------------------------------------------------------------

class CoachIntentRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=2000)
    locale: Optional[str] = Field(None, description="Parser locale; defaults to the server setting")


class CoachIntentResponse(BaseModel):
    intent: CoachIntent
    check: IntentCheck
    options: PlanOptions
    plan_text: str
    total_meters: int = 0
    workout_id: Optional[int] = Field(None, description="Set when the plan was added to the calendar")
