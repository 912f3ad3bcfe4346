"""
Daily signal models: check-ins, diary entries and training load.

Each table holds at most one row per user per day.
"""

import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


class DailyCheckIn(SQLModel, table=True):
    """Morning check-in; the authoritative readiness source."""

    __tablename__ = "daily_checkins"
    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_checkin_user_date"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", nullable=False, index=True)
    date: datetime.date = Field(nullable=False, index=True)

    sleep_duration_hrs: float = Field(nullable=False)
    sleep_quality: int = Field(nullable=False)
    physical_fatigue: int = Field(nullable=False)
    muscle_soreness: str = Field(max_length=16, nullable=False)
    mental_readiness: int = Field(nullable=False)
    motivation: int = Field(nullable=False)
    stress_level: int = Field(nullable=False)
    notes: Optional[str] = Field(default=None, max_length=1000)

    # Result of scoring this check-in
    readiness_score: Optional[int] = Field(default=None)

    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)


class DiaryEntry(SQLModel, table=True):
    """Free-form diary values, used when there is no check-in."""

    __tablename__ = "diary_entries"
    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_diary_user_date"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", nullable=False, index=True)
    date: datetime.date = Field(nullable=False, index=True)

    mood: Optional[int] = Field(default=None)
    energy: Optional[int] = Field(default=None)
    sleep_hrs: Optional[float] = Field(default=None)
    sleep_qual: Optional[int] = Field(default=None)
    stress: Optional[int] = Field(default=None)
    soreness: Optional[int] = Field(default=None)

    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)


class LoadMetric(SQLModel, table=True):
    """Daily training load (ATL/CTL/TSB) and optional HRV."""

    __tablename__ = "load_metrics"
    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_load_user_date"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", nullable=False, index=True)
    date: datetime.date = Field(nullable=False, index=True)

    atl: Optional[float] = Field(default=None)
    ctl: Optional[float] = Field(default=None)
    tsb: Optional[float] = Field(default=None)
    hrv: Optional[float] = Field(default=None)
    hrv_baseline: Optional[float] = Field(default=None)

    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
