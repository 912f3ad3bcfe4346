"""
Check-in adaptation: a decision becomes a concrete workout patch.

    PROCEED            no patch
    REDUCE_INTENSITY   adjusted plan, same duration
    SHORTEN            adjusted plan at round(duration × factor), new duration
    SWAP_RECOVERY      "Recovery …" session of 30-45 min with an easy plan
    REST               rest day, duration 0, rest plan

Every patch also stamps AI metadata (reason, confidence, source
``"checkin"``) so the workout shows why it changed.
"""

from __future__ import annotations

from typing import Optional

from app.atlas.plan_format import export_plan_to_text
from app.atlas.prescription import DEFAULT_DURATION_MIN, generate_plan, normalize_workout_type
from app.schemas.benchmarks import BenchmarkSet
from app.schemas.decision import (
    Decision,
    ReduceIntensity,
    Rest,
    Shorten,
    SwapRecovery,
    WorkoutMeta,
)
from app.schemas.patch import (
    AiMetadataChange,
    FieldChange,
    PatchOperation,
    PrescriptionChange,
    ScheduleChange,
)
from app.schemas.plan import StructuredPlan

SOURCE = "checkin"

_ACTION_LABELS = {
    "REDUCE_INTENSITY": "Reduce intensity",
    "SHORTEN": "Shorten",
    "SWAP_RECOVERY": "Swap to recovery",
    "REST": "Rest day",
}

_RECOVERY_TITLES = {
    "run": "Recovery run",
    "bike": "Recovery ride",
    "swim": "Recovery swim",
}


def prescription_change(plan: StructuredPlan) -> PrescriptionChange:
    return PrescriptionChange(
        description_md=export_plan_to_text(plan),
        prescription_json=plan.model_dump(mode="json"),
    )


def _duration(workout: WorkoutMeta) -> int:
    return workout.duration_min or DEFAULT_DURATION_MIN


def _recovery_minutes(decision: SwapRecovery, workout: WorkoutMeta) -> int:
    """Half the planned session, kept inside the recovery range."""
    half = round(_duration(workout) / 2)
    return max(decision.recovery_min_low, min(decision.recovery_min_high, half))


def _changes_for(
    decision: Decision,
    workout: WorkoutMeta,
    benchmarks: Optional[BenchmarkSet],
) -> list[FieldChange]:
    if isinstance(decision, ReduceIntensity):
        plan = generate_plan(
            workout.type, _duration(workout), benchmarks, adjust=True, title=workout.title,
        )
        return [prescription_change(plan)]

    if isinstance(decision, Shorten):
        minutes = max(10, round(_duration(workout) * decision.duration_factor))
        plan = generate_plan(
            workout.type, minutes, benchmarks, adjust=True, title=workout.title,
        )
        return [ScheduleChange(duration_min=minutes), prescription_change(plan)]

    if isinstance(decision, SwapRecovery):
        minutes = _recovery_minutes(decision, workout)
        sport = normalize_workout_type(workout.type)
        plan = generate_plan(sport, minutes, benchmarks, adjust=True)
        title = _RECOVERY_TITLES.get(sport, "Recovery session")
        return [ScheduleChange(title=title, duration_min=minutes), prescription_change(plan)]

    if isinstance(decision, Rest):
        plan = generate_plan("rest", 0)
        return [
            ScheduleChange(type="rest", title="Rest day", duration_min=0, tss=0),
            prescription_change(plan),
        ]

    raise TypeError(f"Unsupported decision: {type(decision).__name__}")


def patch_for_decision(
    decision: Decision,
    workout: WorkoutMeta,
    benchmarks: Optional[BenchmarkSet] = None,
) -> Optional[PatchOperation]:
    """Build the workout patch for a decision, or ``None`` for PROCEED."""
    if not decision.proposes_change:
        return None

    changes = _changes_for(decision, workout, benchmarks)
    changes.append(AiMetadataChange(
        ai_generated=True,
        ai_reason=decision.reason,
        ai_confidence=decision.confidence,
        source=SOURCE,
    ))
    return PatchOperation(changes=tuple(changes))


def summarize_decision(decision: Decision, workout: WorkoutMeta) -> str:
    """One-line proposal summary, e.g. ``Shorten: Tempo run (2026-03-02)``."""
    label = _ACTION_LABELS.get(decision.action, decision.action.replace("_", " ").title())
    title = workout.title or normalize_workout_type(workout.type).capitalize()
    if workout.date:
        return f"{label}: {title} ({workout.date.isoformat()})"
    return f"{label}: {title}"
