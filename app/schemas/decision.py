"""
Decision schemas.

A decision is a closed sum type: one variant per action, each carrying
only the fields meaningful for that action.  Pydantic discriminates the
union on ``action``.
"""

import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class WorkoutMeta(BaseModel):
    """The scheduled workout a decision is about."""

    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    type: str = Field(..., description="run, bike, swim, strength, rest or other")
    title: str = ""
    duration_min: Optional[int] = Field(None, ge=0)
    date: Optional[datetime.date] = None


class _DecisionBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Guardrailed explanation shown to the athlete")
    reason: str = Field(..., description="Concrete signal the decision is tied to")
    confidence: int = Field(..., ge=0, le=100)

    @property
    def proposes_change(self) -> bool:
        return True


class Proceed(_DecisionBase):
    action: Literal["PROCEED"] = "PROCEED"

    @property
    def proposes_change(self) -> bool:
        return False


class ReduceIntensity(_DecisionBase):
    action: Literal["REDUCE_INTENSITY"] = "REDUCE_INTENSITY"
    intensity_pct_low: int = 80
    intensity_pct_high: int = 85


class Shorten(_DecisionBase):
    action: Literal["SHORTEN"] = "SHORTEN"
    duration_factor: float = Field(0.7, gt=0.0, le=1.0)
    intensity_pct_low: int = 85
    intensity_pct_high: int = 90


class SwapRecovery(_DecisionBase):
    action: Literal["SWAP_RECOVERY"] = "SWAP_RECOVERY"
    recovery_min_low: int = 30
    recovery_min_high: int = 45


class Rest(_DecisionBase):
    action: Literal["REST"] = "REST"


Decision = Annotated[
    Union[Proceed, ReduceIntensity, Shorten, SwapRecovery, Rest],
    Field(discriminator="action"),
]
