"""
Benchmark schemas.

Personal records used to turn generic prescriptions into concrete
pace/power targets.  Every field is optional: missing benchmarks degrade
generation to zone/RPE targets, they never make it fail.

Time fields accept seconds or clock strings (``"19:45"``, ``"1:32:10"``).
"""

import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.atlas.timefmt import parse_time_to_seconds

_TIME_FIELDS = (
    "swim_css_sec_per_100",
    "swim_400_time_sec",
    "swim_100_time_sec",
    "run_5k_time_sec",
    "run_10k_time_sec",
    "run_threshold_sec_per_km",
    "run_hm_time_sec",
    "run_marathon_time_sec",
)


class BenchmarkSet(BaseModel):
    """Per-sport personal records for one athlete."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    swim_css_sec_per_100: Optional[float] = Field(None, gt=0, description="Critical swim speed (s/100m)")
    swim_400_time_sec: Optional[float] = Field(None, gt=0)
    swim_100_time_sec: Optional[float] = Field(None, gt=0)

    run_5k_time_sec: Optional[float] = Field(None, gt=0)
    run_10k_time_sec: Optional[float] = Field(None, gt=0)
    run_threshold_sec_per_km: Optional[float] = Field(None, gt=0)
    run_hm_time_sec: Optional[float] = Field(None, gt=0)
    run_marathon_time_sec: Optional[float] = Field(None, gt=0)

    ftp: Optional[int] = Field(None, gt=0, le=2000, description="Functional threshold power (W)")
    bike_best_20min_watts: Optional[int] = Field(None, gt=0, le=2000)

    @field_validator(*_TIME_FIELDS, mode="before")
    @classmethod
    def _parse_clock(cls, value: Any) -> Any:
        if isinstance(value, str) and ":" in value:
            seconds = parse_time_to_seconds(value)
            if seconds is None:
                raise ValueError(f"Invalid time '{value}', expected m:ss or h:mm:ss")
            return seconds
        return value

    @property
    def effective_ftp(self) -> Optional[int]:
        """FTP, else 95% of the best 20-minute power."""
        if self.ftp:
            return self.ftp
        if self.bike_best_20min_watts:
            return round(self.bike_best_20min_watts * 0.95)
        return None

    @property
    def effective_css(self) -> Optional[float]:
        """CSS, else the 400m PR pace, else the 100m PR pace."""
        if self.swim_css_sec_per_100:
            return self.swim_css_sec_per_100
        if self.swim_400_time_sec:
            return self.swim_400_time_sec / 4
        if self.swim_100_time_sec:
            return self.swim_100_time_sec
        return None


class BenchmarkUpdate(BenchmarkSet):
    """Benchmarks as submitted; ``swim_pr`` is a free-text swim record."""

    swim_pr: Optional[str] = Field(
        None, max_length=100, description="Swim PR such as '400m in 6:20' or '100m 85 sec'",
    )


class BenchmarkResponse(BenchmarkSet):
    updated_at: Optional[datetime.datetime] = None
