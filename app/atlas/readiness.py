"""
Readiness scoring: signals → 0-100 score, confidence, ranked factors.

Model
-----
Start from a neutral baseline (70) and add one signed, independently
capped delta per present signal:

    sleep_quality      (q - 3) × 8                     ±16
    sleep_duration     clamp((h - 7.5) × 4, -12, +8)
    mood               (m - 3) × 6                     ±12
    energy             (e - 3) × 6                     ±12
    stress             (3 - s) × 5                     ±10
    soreness           (3 - s) × 6                     ±12
    training_balance   clamp(tsb × 0.8, -15, +15)
    load_ratio         ATL/CTL banded                  -10 .. +3
    hrv                clamp(Δ% × 0.5, -15, +10)

    score = clamp(round(baseline + Σ delta), 0, 100)

Missing signals contribute nothing: the score is only ever computed from
what is there.  Confidence reflects how much was there:

    confidence = min(100, round(n_signals / max_signals × 100 + 20))

Design choices
--------------
1. **One source at a time**: a check-in is authoritative for its date.
   Diary + load signals are only used to *estimate* readiness when no
   check-in exists.  The two are never blended.
2. **Check-in → shared scale**: check-in answers are mapped onto the
   same 1-5 mood/energy/stress/soreness scale as the diary so both paths
   share one set of delta functions.
3. **Deterministic ordering**: factors are stable-sorted by absolute
   impact; ties keep the signal definition order above.
4. **No data is a result**: with no signals at all the scorer returns
   ``score=None`` rather than the baseline.
"""

from __future__ import annotations

import logging
import statistics
from typing import Callable, Optional

from pydantic import BaseModel, Field

from app.atlas.errors import ErrorCode
from app.schemas.readiness import (
    ReadinessFactor,
    ReadinessResult,
    ReadinessStatus,
)
from app.schemas.signals import (
    SORENESS_SCALE,
    CheckInSignals,
    DiarySignals,
    HrvSignals,
    LoadSignals,
    SignalSnapshot,
)

logger = logging.getLogger(__name__)

# ======================================================================
# Configuration
# ======================================================================


class ReadinessConfig(BaseModel):
    """Tunables for readiness scoring."""

    baseline: float = Field(default=70.0)
    optimal_threshold: int = Field(default=70)
    caution_threshold: int = Field(default=45)
    max_signals: int = Field(
        default=8,
        description="Signal count that maps to full data coverage",
    )
    high_confidence: int = Field(default=70)
    medium_confidence: int = Field(default=40)


DEFAULT_READINESS_CONFIG = ReadinessConfig()


# ======================================================================
# Helpers
# ======================================================================


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _label_status(score: int, cfg: ReadinessConfig) -> ReadinessStatus:
    if score >= cfg.optimal_threshold:
        return ReadinessStatus.OPTIMAL
    if score >= cfg.caution_threshold:
        return ReadinessStatus.CAUTION
    return ReadinessStatus.FATIGUED


def _confidence(n_signals: int, cfg: ReadinessConfig) -> int:
    return min(100, round(n_signals / cfg.max_signals * 100 + 20))


def _confidence_level(confidence: int, cfg: ReadinessConfig) -> str:
    if confidence >= cfg.high_confidence:
        return "high"
    if confidence >= cfg.medium_confidence:
        return "medium"
    return "low"


# ======================================================================
# Per-signal deltas
# ======================================================================
#
# Each function maps a raw value to ``(impact, description)``.


def _sleep_quality(q: float) -> tuple[float, str]:
    if q >= 4:
        desc = "Good sleep quality"
    elif q <= 2:
        desc = "Poor sleep quality"
    else:
        desc = "Average sleep"
    return (q - 3) * 8, desc


def _sleep_duration(h: float) -> tuple[float, str]:
    impact = _clamp((h - 7.5) * 4, -12, 8)
    if h < 6.5:
        desc = f"Only {h:.1f}h sleep"
    elif h >= 8:
        desc = f"Long sleep ({h:.1f}h)"
    else:
        desc = f"{h:.1f}h sleep"
    return impact, desc


def _mood(m: float) -> tuple[float, str]:
    if m >= 4:
        desc = "Positive mood"
    elif m <= 2:
        desc = "Low mood"
    else:
        desc = "Neutral mood"
    return (m - 3) * 6, desc


def _energy(e: float) -> tuple[float, str]:
    if e >= 4:
        desc = "High energy"
    elif e <= 2:
        desc = "Low energy"
    else:
        desc = "Normal energy"
    return (e - 3) * 6, desc


def _stress(s: float) -> tuple[float, str]:
    if s <= 2:
        desc = "Low stress"
    elif s >= 4:
        desc = "High stress"
    else:
        desc = "Moderate stress"
    return (3 - s) * 5, desc


def _soreness(s: float) -> tuple[float, str]:
    if s <= 1:
        desc = "Fresh muscles"
    elif s >= 4:
        desc = "Significant soreness"
    else:
        desc = "Some soreness"
    return (3 - s) * 6, desc


def _training_balance(tsb: float) -> tuple[float, str]:
    if tsb > 5:
        desc = "Well recovered"
    elif tsb < -10:
        desc = "Accumulated fatigue"
    else:
        desc = "Normal training load"
    return _clamp(tsb * 0.8, -15, 15), desc


def _load_ratio(ratio: float) -> tuple[float, str]:
    if ratio > 1.4:
        return -10, "High acute load"
    if ratio > 1.2:
        return -5, "Elevated acute load"
    if ratio < 0.6:
        return -3, "Low recent training"
    return 3, "Balanced load"


def _hrv(pct_diff: float) -> tuple[float, str]:
    if pct_diff > 5:
        desc = "HRV above baseline"
    elif pct_diff < -5:
        desc = "HRV below baseline"
    else:
        desc = "HRV normal"
    return _clamp(pct_diff * 0.5, -15, 10), desc


# Definition order doubles as the tie-break order.
_SIGNALS: list[tuple[str, Callable[[float], tuple[float, str]]]] = [
    ("sleep_quality", _sleep_quality),
    ("sleep_duration", _sleep_duration),
    ("mood", _mood),
    ("energy", _energy),
    ("stress", _stress),
    ("soreness", _soreness),
    ("training_balance", _training_balance),
    ("load_ratio", _load_ratio),
    ("hrv", _hrv),
]


# ======================================================================
# Signal extraction
# ======================================================================


def _checkin_values(checkin: CheckInSignals) -> dict[str, Optional[float]]:
    """Map check-in answers onto the shared 1-5 signal scale."""
    return {
        "sleep_quality": checkin.sleep_quality,
        "sleep_duration": checkin.sleep_duration_hrs,
        "mood": statistics.mean([checkin.mental_readiness, checkin.motivation]),
        "energy": 6 - checkin.physical_fatigue,
        "stress": checkin.stress_level,
        "soreness": SORENESS_SCALE[checkin.muscle_soreness],
    }


def _fallback_values(
    diary: Optional[DiarySignals],
    load: Optional[LoadSignals],
) -> dict[str, Optional[float]]:
    values: dict[str, Optional[float]] = {}
    if diary is not None:
        values.update({
            "sleep_quality": diary.sleep_qual,
            "sleep_duration": diary.sleep_hrs,
            "mood": diary.mood,
            "energy": diary.energy,
            "stress": diary.stress,
            "soreness": diary.soreness,
        })
    if load is not None:
        values["training_balance"] = load.tsb
        if load.atl is not None and load.ctl:
            values["load_ratio"] = load.atl / load.ctl
    return values


def _hrv_value(hrv: Optional[HrvSignals]) -> Optional[float]:
    if hrv is None:
        return None
    return (hrv.hrv - hrv.hrv_baseline) / hrv.hrv_baseline * 100


def _score_values(
    values: dict[str, Optional[float]],
    cfg: ReadinessConfig,
) -> tuple[float, list[ReadinessFactor]]:
    """Sum the deltas of every present signal.

    Returns:
        ``(raw_score, factors)`` with factors sorted by absolute impact.
    """
    total = cfg.baseline
    factors: list[ReadinessFactor] = []

    for name, delta_fn in _SIGNALS:
        value = values.get(name)
        if value is None:
            continue
        impact, description = delta_fn(float(value))
        total += impact
        factors.append(ReadinessFactor(
            name=name,
            impact=round(impact, 1),
            description=description,
            value=round(float(value), 2),
        ))

    # sorted() is stable: equal impacts keep definition order.
    factors = sorted(factors, key=lambda f: abs(f.impact), reverse=True)
    return total, factors


# ======================================================================
# Main entry point
# ======================================================================


def score_readiness(
    snapshot: SignalSnapshot,
    config: Optional[ReadinessConfig] = None,
) -> ReadinessResult:
    """Score readiness for one user/date.

    Args:
        snapshot: Signals for the date.  ``checkin`` wins over the
            diary/load fallback when present.
        config: Optional config override.

    Returns:
        :class:`ReadinessResult`.  When no signal is present the result
        has ``score=None`` and ``missing=["checkin"]``.
    """
    cfg = config or DEFAULT_READINESS_CONFIG

    if snapshot.checkin is not None:
        values = _checkin_values(snapshot.checkin)
        source = "checkin"
    else:
        values = _fallback_values(snapshot.diary, snapshot.load)
        source = "estimated"
    values["hrv"] = _hrv_value(snapshot.hrv)

    present = sum(1 for v in values.values() if v is not None)
    if present == 0:
        logger.debug("%s: no readiness signals for this date", ErrorCode.INSUFFICIENT_DATA.value)
        return ReadinessResult(
            score=None,
            status=None,
            factors=[],
            confidence=0,
            confidence_level="low",
            source=None,
            missing=["checkin"],
        )

    raw, factors = _score_values(values, cfg)
    score = int(_clamp(round(raw), 0, 100))
    confidence = _confidence(present, cfg)

    missing = [] if source == "checkin" else ["checkin"]

    return ReadinessResult(
        score=score,
        status=_label_status(score, cfg),
        factors=factors,
        confidence=confidence,
        confidence_level=_confidence_level(confidence, cfg),
        source=source,
        missing=missing,
    )
