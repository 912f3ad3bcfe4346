"""
Benchmark → target conversions.

Turns personal records into per-discipline pace and power ranges:

    run   easy      base + 45..75 s/km   (base = 10k, else HM, else marathon pace)
          tempo     base + 15..30 s/km
          intervals 5k pace - 10..0 s/km
    bike  Z2 60-75%, tempo 80-90%, threshold 95-105%, VO2 110-120% of FTP
    swim  easy CSS+15..25, moderate CSS+8..15, hard CSS-8..CSS  (s/100m)

Every helper returns ``None`` when the benchmark it needs is missing so
callers can fall back to zone/RPE targets.
"""

from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel

from app.schemas.benchmarks import BenchmarkSet
from app.schemas.plan import PaceIntensity, PowerIntensity

HM_KM = 21.0975
MARATHON_KM = 42.195


# ======================================================================
# Pace helpers
# ======================================================================


def pace_range(low_sec: float, high_sec: float, unit: str) -> PaceIntensity:
    lo, hi = sorted((max(0, round(low_sec)), max(0, round(high_sec))))
    return PaceIntensity(low_sec=lo, high_sec=hi, unit=unit)


# ======================================================================
# Run
# ======================================================================


class RunPaces(BaseModel):
    easy: Optional[PaceIntensity] = None
    tempo: Optional[PaceIntensity] = None
    intervals: Optional[PaceIntensity] = None
    recovery: Optional[PaceIntensity] = None


def _per_km(total_sec: Optional[float], km: float) -> Optional[float]:
    if total_sec is None or total_sec <= 0:
        return None
    return total_sec / km


def run_pace_zones(b: Optional[BenchmarkSet]) -> RunPaces:
    if b is None:
        return RunPaces()

    pace_10k = _per_km(b.run_10k_time_sec, 10)
    pace_5k = _per_km(b.run_5k_time_sec, 5)
    pace_hm = _per_km(b.run_hm_time_sec, HM_KM)
    pace_marathon = _per_km(b.run_marathon_time_sec, MARATHON_KM)
    threshold = b.run_threshold_sec_per_km

    easy_base = next((p for p in (pace_10k, pace_hm, pace_marathon) if p is not None), None)
    tempo_base = next((p for p in (pace_10k, pace_hm) if p is not None), None)

    paces = RunPaces()
    if easy_base is not None:
        paces.easy = pace_range(easy_base + 45, easy_base + 75, "/km")
    if tempo_base is not None:
        paces.tempo = pace_range(tempo_base + 15, tempo_base + 30, "/km")
    elif threshold:
        paces.tempo = pace_range(threshold + 5, threshold + 20, "/km")
    if pace_5k is not None:
        paces.intervals = pace_range(max(0.0, pace_5k - 10), pace_5k, "/km")
    if pace_10k is not None:
        paces.recovery = pace_range(pace_10k + 60, pace_10k + 90, "/km")
    return paces


# ======================================================================
# Bike
# ======================================================================


class BikeZones(BaseModel):
    z2: PowerIntensity
    tempo: PowerIntensity
    threshold: PowerIntensity
    vo2: PowerIntensity
    recovery: PowerIntensity


def _power(ftp: float, low: float, high: float) -> PowerIntensity:
    return PowerIntensity(min_w=round(ftp * low), max_w=round(ftp * high))


def bike_power_zones(b: Optional[BenchmarkSet]) -> Optional[BikeZones]:
    ftp = b.effective_ftp if b else None
    if not ftp:
        return None
    return BikeZones(
        z2=_power(ftp, 0.60, 0.75),
        tempo=_power(ftp, 0.80, 0.90),
        threshold=_power(ftp, 0.95, 1.05),
        vo2=_power(ftp, 1.10, 1.20),
        recovery=_power(ftp, 0.55, 0.70),
    )


# ======================================================================
# Swim
# ======================================================================


class SwimPaces(BaseModel):
    easy: PaceIntensity
    moderate: PaceIntensity
    hard: PaceIntensity
    recovery: PaceIntensity


def swim_pace_zones(b: Optional[BenchmarkSet]) -> Optional[SwimPaces]:
    css = b.effective_css if b else None
    if not css:
        return None
    return SwimPaces(
        easy=pace_range(css + 15, css + 25, "/100m"),
        moderate=pace_range(css + 8, css + 15, "/100m"),
        hard=pace_range(max(0.0, css - 8), css, "/100m"),
        recovery=pace_range(css + 20, css + 30, "/100m"),
    )


class SwimPR(BaseModel):
    distance_m: int
    time_sec: int


class SwimPRPaces(BaseModel):
    css_like_per_100: float
    aerobic_per_100: float
    threshold_per_100: float
    vo2_per_100: float


_PR_DISTANCE = re.compile(r"\b(\d{2,4})\s*m\b")
_PR_MIN_SEC = re.compile(r"(\d+)\s*[:m]\s*(\d+)\s*(?:s|sec|min)?", re.IGNORECASE)
_PR_SEC_ONLY = re.compile(r"\b(\d{2,4})\s*(?:s|sec|seconds?)\b", re.IGNORECASE)


def parse_swim_pr(text: str) -> Optional[SwimPR]:
    """Parse a swim PR such as ``"400m in 6:20"`` or ``"100m 85 sec"``."""
    if not text:
        return None
    lower = text.strip().lower()

    dist = _PR_DISTANCE.search(lower)
    if not dist:
        return None
    distance = int(dist.group(1))
    if not 50 <= distance <= 5000:
        return None

    # Look for the time after the distance first so "400m" is never read
    # as a time, then fall back to text before it ("4:40 for 400m").
    for segment in (lower[dist.end():], lower[:dist.start()]):
        min_sec = _PR_MIN_SEC.search(segment)
        if min_sec and int(min_sec.group(2)) < 60:
            return SwimPR(
                distance_m=distance,
                time_sec=int(min_sec.group(1)) * 60 + int(min_sec.group(2)),
            )
        sec_only = _PR_SEC_ONLY.search(segment)
        if sec_only and 0 < int(sec_only.group(1)) < 7200:
            return SwimPR(distance_m=distance, time_sec=int(sec_only.group(1)))
    return None


def compute_swim_paces(pr: SwimPR) -> SwimPRPaces:
    """Per-100m pace estimates from a PR (400m in 4:40 → ~70 s/100m)."""
    per_100 = pr.time_sec / pr.distance_m * 100
    return SwimPRPaces(
        css_like_per_100=round(per_100, 1),
        aerobic_per_100=round(per_100 + 10, 1),
        threshold_per_100=round(per_100 + 3, 1),
        vo2_per_100=round(per_100 - 3, 1),
    )
