"""
Prescription generator: workout type + benchmarks → structured plan.

Timing
------
Total duration ``w`` (minutes) is split into::

    warm-up   max(8, round(w × 0.15))
    cool-down max(5, round(w × 0.10))
    main set  max(10, w - warm - cool)            (planned)
              max(10, round((w - warm - cool) × 0.75))   (adjusted)

Session kind
------------
Inferred from the workout title, defaulting to the easiest kind:

    run    intervals | tempo | easy
    bike   vo2 | threshold | tempo | endurance
    swim   technique | hard | steady

Targets
-------
Benchmarks become concrete pace/power ranges (see :mod:`app.atlas.zones`).
Without benchmarks every block falls back to a zone or RPE target, so
generation never fails for lack of data.

Adjustment
----------
``adjust=True`` builds a separate, strictly easier plan: shorter main
set, no hard repeats, easy targets only.  The planned version is never
modified; callers choose which one to apply.

Swim volume scales with the main-set duration (≈ 50 m per minute) or,
when a target total is given, with that target; the total is then made
exact with :func:`app.atlas.exact_total.enforce_exact_total`.
"""

from __future__ import annotations

import re
from typing import NamedTuple, Optional

from app.atlas.exact_total import enforce_exact_total
from app.atlas.plan_format import format_intensity
from app.atlas.zones import bike_power_zones, run_pace_zones, swim_pace_zones
from app.schemas.benchmarks import BenchmarkSet
from app.schemas.plan import (
    Block,
    PlanOptions,
    RpeIntensity,
    Section,
    SectionType,
    StructuredPlan,
    ZoneIntensity,
)

# ======================================================================
# Configuration
# ======================================================================

WORKOUT_TYPES = ("run", "bike", "swim", "strength", "rest", "other")
DEFAULT_DURATION_MIN = 60

# Adjustment trigger thresholds.
ADJUST_READINESS_BELOW = 60
ADJUST_FATIGUE_ABOVE = 75
ADJUST_SORENESS_ABOVE = 70

# Swim main-set volume per main-set minute, and bounds.
_SWIM_M_PER_MIN = 50
_SWIM_MAIN_MIN_M = 400
_SWIM_MAIN_MAX_M = 4000

SAFETY_NOTE = (
    "Stop if you feel sharp pain, dizziness, or unusual fatigue; "
    "keep form smooth and stay hydrated."
)

_RUN_INTERVALS = re.compile(r"\b(interval|intervals|vo2|speed|reps|track)\b")
_RUN_TEMPO = re.compile(r"\b(tempo|threshold|prog|progression)\b")
_BIKE_VO2 = re.compile(r"\b(vo2|interval|intervals|anaerobic|max)\b")
_BIKE_THRESHOLD = re.compile(r"\b(threshold|ftp)\b")
_BIKE_TEMPO = re.compile(r"\b(tempo|sweet spot)\b")
_SWIM_TECHNIQUE = re.compile(r"\b(tech|drill|drills|technique)\b")
_SWIM_HARD = re.compile(r"\b(interval|intervals|sprint|hard|fast)\b")


class _Draft(NamedTuple):
    plan: StructuredPlan
    label: str
    targets: dict[str, str]


# ======================================================================
# Helpers
# ======================================================================


def normalize_workout_type(value: Optional[str]) -> str:
    t = (value or "").strip().lower()
    aliases = {"running": "run", "cycling": "bike", "ride": "bike", "swimming": "swim", "gym": "strength"}
    t = aliases.get(t, t)
    return t if t in WORKOUT_TYPES else "other"


def infer_run_kind(title: str) -> str:
    t = (title or "").lower()
    if _RUN_INTERVALS.search(t):
        return "intervals"
    if _RUN_TEMPO.search(t):
        return "tempo"
    return "easy"


def infer_bike_kind(title: str) -> str:
    t = (title or "").lower()
    if _BIKE_VO2.search(t):
        return "vo2"
    if _BIKE_THRESHOLD.search(t):
        return "threshold"
    if _BIKE_TEMPO.search(t):
        return "tempo"
    return "endurance"


def infer_swim_kind(title: str) -> str:
    t = (title or "").lower()
    if _SWIM_TECHNIQUE.search(t):
        return "technique"
    if _SWIM_HARD.search(t):
        return "hard"
    return "steady"


def split_duration(duration_min: int, adjust: bool = False) -> tuple[int, int, int]:
    """Return ``(warm, main, cool)`` minutes."""
    warm = max(8, round(duration_min * 0.15))
    cool = max(5, round(duration_min * 0.1))
    if adjust:
        main = max(10, round((duration_min - warm - cool) * 0.75))
    else:
        main = max(10, duration_min - warm - cool)
    return warm, main, cool


def _clamp_int(value: float, low: int, high: int) -> int:
    return max(low, min(high, int(value)))


def _section(type_: SectionType, title: str, *blocks: dict) -> Section:
    return Section(
        id=type_,
        type=type_,
        title=title,
        blocks=tuple(
            Block(id=f"{type_}-{i}", **spec) for i, spec in enumerate(blocks, start=1)
        ),
    )


def _plan(objective: str, *sections: Section) -> StructuredPlan:
    return StructuredPlan(version=2, objective=objective, sections=tuple(sections))


def _rpe(value: int, high: Optional[int] = None) -> RpeIntensity:
    return RpeIntensity(min=value, max=high)


def _zone(zone: str) -> ZoneIntensity:
    return ZoneIntensity(zone=zone)


# ======================================================================
# Planned sessions
# ======================================================================


def _planned_run(title: str, w: int, b: Optional[BenchmarkSet]) -> _Draft:
    kind = infer_run_kind(title)
    warm, main, cool = split_duration(w)
    paces = run_pace_zones(b)

    if paces.easy:
        warm_block = dict(duration_sec=warm * 60, intensity=paces.easy, notes="easy jog + mobility")
        cool_block = dict(duration_sec=cool * 60, intensity=paces.easy, notes="easy")
    else:
        warm_block = dict(duration_sec=warm * 60, intensity=_zone("Z2"), notes="easy jog (RPE 3/10)")
        cool_block = dict(duration_sec=cool * 60, intensity=_zone("Z1"), notes="easy")

    if kind == "intervals":
        if paces.intervals:
            work = 180 if main >= 28 else 120 if main >= 18 else 60
            reps = _clamp_int(main * 60 // (work * 2), 4, 10)
            main_blocks = [dict(
                reps=reps, duration_sec=work, rest_sec=work, intensity=paces.intervals,
                notes="strong but controlled; recover easy jog",
            )]
        else:
            main_blocks = [dict(
                reps=6, duration_sec=120, rest_sec=120, intensity=_rpe(8),
                notes="hard but smooth; keep form",
            )]
        objective, label = "Speed endurance • quality reps", "run intervals"
    elif kind == "tempo":
        if paces.tempo:
            reps = 3 if main >= 35 else 2
            main_blocks = [dict(
                reps=reps, duration_sec=600 if reps == 3 else 480, rest_sec=300,
                intensity=paces.tempo,
                notes="controlled tempo; breathing strong but steady",
            )]
        else:
            main_blocks = [dict(
                duration_sec=main * 60, intensity=_zone("Z3"), notes="steady tempo (RPE 6/10)",
            )]
        objective, label = "Controlled tempo • smooth form", "tempo run"
    else:
        if paces.easy:
            main_blocks = [dict(
                duration_sec=main * 60, intensity=paces.easy, notes="conversational; relaxed cadence",
            )]
        else:
            main_blocks = [dict(
                duration_sec=main * 60, intensity=_zone("Z2"), notes="conversational (RPE 3–4/10)",
            )]
        objective, label = "Aerobic base • relaxed cadence", "easy run"

    targets: dict[str, str] = {}
    if paces.easy:
        targets["run_pace"] = format_intensity(paces.easy)
    if paces.tempo:
        targets["run_tempo"] = format_intensity(paces.tempo)
    if paces.intervals:
        targets["run_intervals"] = format_intensity(paces.intervals)

    plan = _plan(
        objective,
        _section("warmup", "Warm-up", warm_block),
        _section("main", "Main set", *main_blocks),
        _section("cooldown", "Cool-down", cool_block),
    )
    return _Draft(plan, label, targets)


def _planned_bike(title: str, w: int, b: Optional[BenchmarkSet]) -> _Draft:
    kind = infer_bike_kind(title)
    warm, main, cool = split_duration(w)
    zones = bike_power_zones(b)

    if zones:
        warm_block = dict(duration_sec=warm * 60, intensity=zones.z2, notes="easy spin • build cadence")
        cool_block = dict(duration_sec=cool * 60, intensity=zones.z2, notes="easy spin")
    else:
        warm_block = dict(duration_sec=warm * 60, intensity=_zone("Z2"), notes="easy spin (RPE 3/10)")
        cool_block = dict(duration_sec=cool * 60, intensity=_zone("Z1"), notes="easy spin")

    if kind == "vo2":
        if zones:
            reps = 5 if main >= 40 else 4
            main_blocks = [dict(
                reps=reps, duration_sec=180, rest_sec=180, intensity=zones.vo2,
                notes="VO2 • high but smooth power",
            )]
            leftover = max(0, main - round(reps * 6))
            if leftover > 6:
                main_blocks.append(dict(
                    duration_sec=leftover * 60, intensity=zones.z2, notes="easy endurance",
                ))
        else:
            main_blocks = [dict(duration_sec=main * 60, intensity=_rpe(8), notes="hard but controlled")]
        objective, label = "VO2 stimulus • controlled surges", "VO2 ride"
    elif kind == "threshold":
        if zones:
            reps = 3 if main >= 50 else 2
            main_blocks = [dict(
                reps=reps, duration_sec=600 if reps == 3 else 720, rest_sec=300,
                intensity=zones.threshold, notes="threshold • steady pressure",
            )]
        else:
            main_blocks = [dict(
                duration_sec=main * 60, intensity=_zone("Z4"), notes="threshold feel (RPE 7/10)",
            )]
        objective, label = "Threshold • steady pressure", "threshold ride"
    elif kind == "tempo":
        if zones and main >= 50:
            main_blocks = [dict(
                reps=2, duration_sec=900, rest_sec=300, intensity=zones.tempo,
                notes="tempo • smooth power, no surges",
            )]
        elif zones:
            main_blocks = [dict(
                duration_sec=main * 60, intensity=zones.tempo, notes="tempo • smooth power, no surges",
            )]
        else:
            main_blocks = [dict(
                duration_sec=main * 60, intensity=_zone("Z3"), notes="tempo feel (RPE 6/10)",
            )]
        objective, label = "Tempo • aerobic strength", "tempo ride"
    else:
        if zones:
            main_blocks = [dict(
                duration_sec=main * 60, intensity=zones.z2, notes="endurance • relaxed cadence",
            )]
        else:
            main_blocks = [dict(
                duration_sec=main * 60, intensity=_zone("Z2"), notes="endurance (RPE 3–4/10)",
            )]
        objective, label = "Endurance • smooth cadence", "endurance ride"

    targets: dict[str, str] = {}
    if zones:
        targets["bike_power"] = f"{format_intensity(zones.z2)} (Z2)"
        targets["bike_tempo"] = format_intensity(zones.tempo)
        targets["bike_threshold"] = format_intensity(zones.threshold)

    plan = _plan(
        objective,
        _section("warmup", "Warm-up", warm_block),
        _section("main", "Main set", *main_blocks),
        _section("cooldown", "Cool-down", cool_block),
    )
    return _Draft(plan, label, targets)


def _swim_main_meters(main_min: int, fixed_m: int, target_meters: Optional[int]) -> int:
    """Main-set volume rounded down to 100 m."""
    if target_meters:
        meters = target_meters - fixed_m
    else:
        meters = main_min * _SWIM_M_PER_MIN
    return _clamp_int(meters // 100 * 100, _SWIM_MAIN_MIN_M, _SWIM_MAIN_MAX_M)


def _planned_swim(
    title: str, w: int, b: Optional[BenchmarkSet], target_meters: Optional[int],
) -> _Draft:
    kind = infer_swim_kind(title)
    _, main, _ = split_duration(w)
    paces = swim_pace_zones(b)

    easy = paces.easy if paces else _rpe(3)
    steady = paces.moderate if paces else _rpe(6)
    hard = paces.hard if paces else _rpe(8)

    warm_blocks = [
        dict(distance_m=200, intensity=easy, notes="easy swim"),
        dict(reps=4, distance_m=50, rest_sec=20, intensity=_rpe(4), notes="drills (kick / scull / catch)"),
    ]
    cool_blocks = [dict(distance_m=200, intensity=easy, notes="easy")]
    main_m = _swim_main_meters(main, 600, target_meters)

    if kind == "technique":
        main_blocks = [
            dict(reps=8, distance_m=50, rest_sec=20, intensity=_rpe(4), notes="technique focus"),
            dict(
                reps=max(2, (main_m - 400) // 100), distance_m=100, rest_sec=20,
                intensity=paces.easy if paces else _rpe(4), notes="smooth, long strokes",
            ),
        ]
        objective, label = "Technique • efficiency", "swim technique"
    elif kind == "hard":
        main_blocks = [
            dict(
                reps=_clamp_int((main_m - 200) // 50, 8, 30), distance_m=50, rest_sec=20,
                intensity=hard, notes="strong 50s • consistent splits",
            ),
            dict(distance_m=200, intensity=easy, notes="easy flush"),
        ]
        objective, label = "Swim speed • maintain form", "swim intervals"
    else:
        main_blocks = [dict(
            reps=max(4, main_m // 100), distance_m=100, rest_sec=20,
            intensity=steady, notes="steady aerobic",
        )]
        objective, label = "Aerobic swim • smooth rhythm", "steady swim"

    targets: dict[str, str] = {}
    if paces:
        targets["swim_easy"] = format_intensity(paces.easy)
        targets["swim_moderate"] = format_intensity(paces.moderate)
        targets["swim_hard"] = format_intensity(paces.hard)

    plan = _plan(
        objective,
        _section("warmup", "Warm-up", *warm_blocks),
        _section("main", "Main set", *main_blocks),
        _section("cooldown", "Cool-down", *cool_blocks),
    )
    return _Draft(plan, label, targets)


def _planned_strength(w: int) -> _Draft:
    warm, _, cool = split_duration(w)
    plan = _plan(
        "Strength • movement quality",
        _section("warmup", "Warm-up", dict(
            duration_sec=warm * 60, intensity=_rpe(2), notes="mobility + activation",
        )),
        _section("strength", "Strength", dict(
            reps=4, duration_sec=360, rest_sec=90, intensity=_rpe(7),
            notes="squat + hinge + push + pull (moderate load)",
        )),
        _section("cooldown", "Cool-down", dict(
            duration_sec=cool * 60, intensity=_rpe(2), notes="breathing + stretch",
        )),
    )
    return _Draft(plan, "strength session", {})


def _rest_plan() -> _Draft:
    plan = _plan(
        "Recovery • keep the habit",
        Section(
            id="main",
            type="main",
            title="Optional",
            blocks=(Block(
                id="main-1", duration_sec=1200, intensity=_rpe(2),
                notes="walk / easy mobility (optional)",
            ),),
        ),
    )
    return _Draft(plan, "rest day", {})


def _planned_other(w: int) -> _Draft:
    warm, main, cool = split_duration(w)
    plan = _plan(
        "Steady session • by feel",
        _section("warmup", "Warm-up", dict(duration_sec=warm * 60, intensity=_rpe(3), notes="easy build")),
        _section("main", "Main set", dict(duration_sec=main * 60, intensity=_rpe(5), notes="steady work")),
        _section("cooldown", "Cool-down", dict(duration_sec=cool * 60, intensity=_rpe(3), notes="easy")),
    )
    return _Draft(plan, "workout", {})


# ======================================================================
# Adjusted sessions
# ======================================================================


def _adjusted_run(w: int, b: Optional[BenchmarkSet]) -> _Draft:
    warm, main, cool = split_duration(w, adjust=True)
    recovery = run_pace_zones(b).recovery

    if recovery:
        warm_block = dict(duration_sec=warm * 60, intensity=recovery, notes="very easy jog")
        main_block = dict(duration_sec=main * 60, intensity=recovery, notes="keep it easy, walk breaks OK")
    else:
        warm_block = dict(duration_sec=warm * 60, intensity=_zone("Z1"), notes="very easy (RPE 2–3/10)")
        main_block = dict(duration_sec=main * 60, intensity=_zone("Z2"), notes="keep it easy (RPE 3/10)")

    plan = _plan(
        "Easy aerobic • recover",
        _section("warmup", "Warm-up", warm_block),
        _section("main", "Main set", main_block),
        _section("cooldown", "Cool-down", dict(duration_sec=cool * 60, intensity=_zone("Z1"), notes="easy")),
    )
    targets = {"run_pace": format_intensity(recovery)} if recovery else {}
    return _Draft(plan, "easy run", targets)


def _adjusted_bike(w: int, b: Optional[BenchmarkSet]) -> _Draft:
    warm, main, cool = split_duration(w, adjust=True)
    zones = bike_power_zones(b)

    if zones:
        warm_block = dict(duration_sec=warm * 60, intensity=zones.recovery, notes="easy spin")
        main_block = dict(duration_sec=main * 60, intensity=zones.recovery, notes="endurance only • no surges")
    else:
        warm_block = dict(duration_sec=warm * 60, intensity=_zone("Z1"), notes="easy spin (RPE 2–3/10)")
        main_block = dict(duration_sec=main * 60, intensity=_zone("Z2"), notes="endurance only (RPE 3/10)")

    plan = _plan(
        "Recovery spin • stay consistent",
        _section("warmup", "Warm-up", warm_block),
        _section("main", "Main set", main_block),
        _section("cooldown", "Cool-down", dict(duration_sec=cool * 60, intensity=_zone("Z1"), notes="easy")),
    )
    targets = {"bike_power": format_intensity(zones.recovery)} if zones else {}
    return _Draft(plan, "recovery ride", targets)


def _adjusted_swim(w: int, b: Optional[BenchmarkSet]) -> _Draft:
    _, main, _ = split_duration(w, adjust=True)
    paces = swim_pace_zones(b)
    easy = paces.recovery if paces else _rpe(3)
    aerobic = paces.recovery if paces else _rpe(4)

    main_m = _swim_main_meters(main, 700, None)
    plan = _plan(
        "Technique + easy aerobic • recover",
        _section(
            "warmup", "Warm-up",
            dict(distance_m=200, intensity=easy, notes="easy swim"),
            dict(reps=6, distance_m=50, rest_sec=20, intensity=_rpe(4), notes="drills • smooth"),
        ),
        _section("main", "Main set", dict(
            reps=max(2, min(6, main_m // 100)), distance_m=100, rest_sec=20, intensity=aerobic, notes="easy aerobic",
        )),
        _section("cooldown", "Cool-down", dict(distance_m=200, intensity=easy, notes="easy")),
    )
    targets = {"swim_easy": format_intensity(paces.recovery)} if paces else {}
    return _Draft(plan, "easy swim", targets)


def _adjusted_other(w: int) -> _Draft:
    warm, main, cool = split_duration(w, adjust=True)
    plan = _plan(
        "Keep it easy today • recover",
        _section("warmup", "Warm-up", dict(duration_sec=warm * 60, intensity=_rpe(3), notes="easy build")),
        _section("main", "Main set", dict(duration_sec=main * 60, intensity=_rpe(4), notes="steady easy")),
        _section("cooldown", "Cool-down", dict(duration_sec=cool * 60, intensity=_rpe(3), notes="easy")),
    )
    return _Draft(plan, "easy session", {})


# ======================================================================
# Dispatch
# ======================================================================


def _draft(
    workout_type: str,
    duration_min: Optional[int],
    benchmarks: Optional[BenchmarkSet],
    adjust: bool,
    title: str,
    target_meters: Optional[int],
) -> _Draft:
    t = normalize_workout_type(workout_type)
    w = duration_min if duration_min and duration_min > 0 else DEFAULT_DURATION_MIN

    if t == "rest":
        return _rest_plan()
    if adjust:
        if t == "run":
            return _adjusted_run(w, benchmarks)
        if t == "bike":
            return _adjusted_bike(w, benchmarks)
        if t == "swim":
            return _adjusted_swim(w, benchmarks)
        return _adjusted_other(w)

    if t == "run":
        return _planned_run(title, w, benchmarks)
    if t == "bike":
        return _planned_bike(title, w, benchmarks)
    if t == "swim":
        return _planned_swim(title, w, benchmarks, target_meters)
    if t == "strength":
        return _planned_strength(w)
    return _planned_other(w)


def _finalize(draft: _Draft, target_meters: Optional[int]) -> StructuredPlan:
    if target_meters and draft.plan.total_meters:
        return enforce_exact_total(draft.plan, target_meters)
    return draft.plan


# ======================================================================
# Main entry points
# ======================================================================


def generate_plan(
    workout_type: str,
    duration_min: Optional[int],
    benchmarks: Optional[BenchmarkSet] = None,
    adjust: bool = False,
    title: str = "",
    target_meters: Optional[int] = None,
) -> StructuredPlan:
    """Build a structured plan.

    Args:
        workout_type: ``run|bike|swim|strength|rest|other`` (aliases
            and unknown types fall back to ``other``).
        duration_min: Total session length; defaults to 60 when missing.
        benchmarks: Optional personal records for concrete targets.
        adjust: Build the easier alternative instead of the planned one.
        title: Workout title used to infer the session kind.
        target_meters: Exact total distance to enforce (swim).

    Returns:
        A new :class:`StructuredPlan`.
    """
    draft = _draft(workout_type, duration_min, benchmarks, adjust, title, target_meters)
    return _finalize(draft, target_meters)


def should_adjust(
    readiness_score: Optional[int] = None,
    fatigue_100: Optional[int] = None,
    soreness_100: Optional[int] = None,
) -> bool:
    """Low readiness, high fatigue or high soreness call for the easier plan."""
    if readiness_score is not None and readiness_score < ADJUST_READINESS_BELOW:
        return True
    if fatigue_100 is not None and fatigue_100 > ADJUST_FATIGUE_ABOVE:
        return True
    if soreness_100 is not None and soreness_100 > ADJUST_SORENESS_ABOVE:
        return True
    return False


def _adjustment_reason(
    readiness_score: Optional[int],
    fatigue_100: Optional[int],
    soreness_100: Optional[int],
) -> str:
    bits: list[str] = []
    if readiness_score is not None and readiness_score < ADJUST_READINESS_BELOW:
        bits.append(f"readiness {readiness_score}/100")
    if fatigue_100 is not None and fatigue_100 > ADJUST_FATIGUE_ABOVE:
        bits.append(f"fatigue {fatigue_100}/100")
    if soreness_100 is not None and soreness_100 > ADJUST_SORENESS_ABOVE:
        bits.append(f"soreness {soreness_100}/100")
    why = ", ".join(bits) or "low readiness signals"
    return (
        f"Based on today's check-in ({why}), I reduced intensity and "
        "simplified the main set."
    )


def generate_plan_options(
    workout_type: str,
    duration_min: Optional[int],
    title: str = "",
    benchmarks: Optional[BenchmarkSet] = None,
    readiness_score: Optional[int] = None,
    fatigue_100: Optional[int] = None,
    soreness_100: Optional[int] = None,
    target_meters: Optional[int] = None,
) -> PlanOptions:
    """Planned plan plus, when today's signals call for it, an easier one."""
    planned = _draft(workout_type, duration_min, benchmarks, False, title, target_meters)
    trigger = should_adjust(readiness_score, fatigue_100, soreness_100)
    adjusted = (
        _draft(workout_type, duration_min, benchmarks, True, title, None).plan
        if trigger else None
    )

    if trigger:
        reason = _adjustment_reason(readiness_score, fatigue_100, soreness_100)
    elif planned.targets:
        reason = (
            "Used your benchmarks to set concrete pace/power targets. Adjust "
            "slightly by feel if conditions (weather/terrain) differ."
        )
    else:
        reason = (
            "Benchmarks are missing, so I used zones and RPE targets. Add "
            "benchmarks to unlock pace/power targets."
        )

    summary = [f"Planned: {planned.label}."]
    if trigger:
        summary.append("Adjusted version available (reduced intensity + simplified main set).")
    else:
        summary.append("No adjustment needed from today's check-in.")
    if not planned.targets and normalize_workout_type(workout_type) in ("run", "bike", "swim"):
        summary.append("Add benchmarks to unlock pace targets.")

    return PlanOptions(
        planned=_finalize(planned, target_meters),
        adjusted=adjusted,
        label=planned.label,
        reason=reason,
        summary="\n".join(summary),
        safety_note=SAFETY_NOTE,
        targets_used=planned.targets,
    )
