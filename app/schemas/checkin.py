"""
Check-in API schemas.

The request body is the check-in form itself
(:class:`~app.schemas.signals.CheckInSignals`); the response reports
what the check-in did to today's workout.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field

from app.schemas.decision import Decision
from app.schemas.readiness import ReadinessFactor, ReadinessResult

CheckInOutcomeKind = Literal["applied", "proposed", "none"]


class CheckInOutcome(BaseModel):
    readiness: ReadinessResult
    top_factors: list[ReadinessFactor] = Field(default_factory=list)
    decision: Optional[Decision] = Field(None, description="Absent when no workout is planned for the day")
    workout_id: Optional[int] = None
    outcome: CheckInOutcomeKind = "none"
    locked: bool = False
    proposal_id: Optional[int] = Field(None, description="New or already pending proposal for the workout")
    applied_patch_id: Optional[int] = None
