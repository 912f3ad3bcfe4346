"""
Signal snapshot schemas.

A :class:`SignalSnapshot` gathers every reading available for one user on
one date.  Check-in data is authoritative; diary and load signals are the
fallback used to estimate readiness when no check-in was submitted.

All models are frozen: a snapshot is produced once by the persistence
layer and never mutated afterwards.
"""

import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MuscleSoreness(str, Enum):
    """Self-reported muscle soreness."""
    NONE = "NONE"
    MILD = "MILD"
    MODERATE = "MODERATE"
    SEVERE = "SEVERE"


# Soreness expressed on the 1-5 scale shared with the diary signals.
SORENESS_SCALE: dict[MuscleSoreness, int] = {
    MuscleSoreness.NONE: 1,
    MuscleSoreness.MILD: 2,
    MuscleSoreness.MODERATE: 4,
    MuscleSoreness.SEVERE: 5,
}

# Soreness expressed on a 0-100 scale (used by the adjustment trigger).
SORENESS_100: dict[MuscleSoreness, int] = {
    MuscleSoreness.NONE: 0,
    MuscleSoreness.MILD: 30,
    MuscleSoreness.MODERATE: 60,
    MuscleSoreness.SEVERE: 85,
}


class CheckInSignals(BaseModel):
    """Morning check-in form."""

    model_config = ConfigDict(frozen=True)

    sleep_duration_hrs: float = Field(
        ..., ge=0.0, le=24.0,
        description="Hours slept last night",
    )
    sleep_quality: int = Field(..., ge=1, le=5, description="1 = terrible, 5 = excellent")
    physical_fatigue: int = Field(..., ge=1, le=5, description="1 = fresh, 5 = exhausted")
    muscle_soreness: MuscleSoreness
    mental_readiness: int = Field(..., ge=1, le=5)
    motivation: int = Field(..., ge=1, le=5)
    stress_level: int = Field(..., ge=1, le=5, description="1 = calm, 5 = very stressed")
    notes: Optional[str] = Field(None, max_length=1000)

    @property
    def fatigue_100(self) -> int:
        """Physical fatigue rescaled to 0-100."""
        return round((self.physical_fatigue - 1) / 4 * 100)

    @property
    def soreness_100(self) -> int:
        return SORENESS_100[self.muscle_soreness]


class DiarySignals(BaseModel):
    """Fallback wellness diary values (1-5 scales, hours for sleep)."""

    model_config = ConfigDict(frozen=True)

    mood: Optional[int] = Field(None, ge=1, le=5)
    energy: Optional[int] = Field(None, ge=1, le=5)
    sleep_hrs: Optional[float] = Field(None, ge=0.0, le=24.0)
    sleep_qual: Optional[int] = Field(None, ge=1, le=5)
    stress: Optional[int] = Field(None, ge=1, le=5)
    soreness: Optional[int] = Field(None, ge=1, le=5)


class LoadSignals(BaseModel):
    """Training load metrics (acute, chronic, balance)."""

    model_config = ConfigDict(frozen=True)

    atl: Optional[float] = Field(None, ge=0.0, description="Acute training load")
    ctl: Optional[float] = Field(None, ge=0.0, description="Chronic training load")
    tsb: Optional[float] = Field(None, description="Training stress balance (CTL - ATL)")


class HrvSignals(BaseModel):
    """Morning HRV against the athlete's own baseline."""

    model_config = ConfigDict(frozen=True)

    hrv: float = Field(..., gt=0.0, description="Today's RMSSD (ms)")
    hrv_baseline: float = Field(..., gt=0.0, description="Rolling baseline RMSSD (ms)")


class SignalSnapshot(BaseModel):
    """Every readiness input available for one user on one date."""

    model_config = ConfigDict(frozen=True)

    user_id: Optional[int] = None
    date: Optional[datetime.date] = None
    checkin: Optional[CheckInSignals] = None
    diary: Optional[DiarySignals] = None
    load: Optional[LoadSignals] = None
    hrv: Optional[HrvSignals] = None
