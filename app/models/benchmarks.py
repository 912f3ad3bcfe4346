"""
Benchmark database model.

Personal records used to turn plans into concrete pace/power targets.
One row per user.
"""

import datetime
from typing import Optional

from sqlmodel import Field, SQLModel


class Benchmarks(SQLModel, table=True):
    __tablename__ = "benchmarks"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", nullable=False, unique=True, index=True)

    # Swim
    swim_css_sec_per_100: Optional[float] = Field(default=None)
    swim_400_time_sec: Optional[float] = Field(default=None)
    swim_100_time_sec: Optional[float] = Field(default=None)

    # Run
    run_5k_time_sec: Optional[float] = Field(default=None)
    run_10k_time_sec: Optional[float] = Field(default=None)
    run_threshold_sec_per_km: Optional[float] = Field(default=None)
    run_hm_time_sec: Optional[float] = Field(default=None)
    run_marathon_time_sec: Optional[float] = Field(default=None)

    # Bike
    ftp: Optional[int] = Field(default=None)
    bike_best_20min_watts: Optional[int] = Field(default=None)

    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
