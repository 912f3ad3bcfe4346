"""
Readiness schemas.

Readiness is a 0-100 estimate of how well the athlete can train today,
derived from a neutral baseline of 70 plus one capped delta per signal:

    score = clamp(70 + Σ delta_i, 0, 100)

Status bands:

    OPTIMAL   score ≥ 70
    CAUTION   score ≥ 45
    FATIGUED  otherwise

``score=None`` with ``source=None`` is the "no data" result.  It is a
valid outcome that callers render as a call-to-action, never a score.
"""

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ReadinessStatus(str, Enum):
    OPTIMAL = "OPTIMAL"
    CAUTION = "CAUTION"
    FATIGUED = "FATIGUED"


class ReadinessFactor(BaseModel):
    """One signal's contribution to the readiness score."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Signal name, e.g. sleep_quality")
    impact: float = Field(..., description="Signed points added to the baseline")
    description: str = Field(..., description="Human-readable explanation")
    value: Optional[float] = Field(
        None,
        description="Raw signal value the impact was computed from",
    )


class ReadinessResult(BaseModel):
    """Output of the readiness scorer."""

    model_config = ConfigDict(frozen=True)

    score: Optional[int] = Field(None, ge=0, le=100)
    status: Optional[ReadinessStatus] = None
    factors: list[ReadinessFactor] = Field(default_factory=list)
    confidence: int = Field(
        0, ge=0, le=100,
        description="Share of the possible signals that were present",
    )
    confidence_level: Literal["high", "medium", "low"] = "low"
    source: Optional[Literal["checkin", "estimated"]] = None
    missing: list[str] = Field(default_factory=list)

    @property
    def has_data(self) -> bool:
        return self.score is not None

    def factor(self, name: str) -> Optional[ReadinessFactor]:
        """Return the factor called *name*, if it was scored."""
        for f in self.factors:
            if f.name == name:
                return f
        return None

    def top_factors(self, limit: int = 5) -> list[ReadinessFactor]:
        """Most impactful factors, already ordered by the scorer."""
        return self.factors[:limit]
