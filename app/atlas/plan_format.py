"""
Render a :class:`StructuredPlan` as Markdown.

Output shape::

    ## Objective
    Aerobic swim • smooth rhythm

    ## Warm-up
    - 200 m — 2:05–2:15/100m — easy swim
    - 4×50 m — RPE 4 • rest 0:20 — drills (kick / scull / catch)

Distances are always written in meters so the text stays parseable by
:func:`app.atlas.exact_total.parse_swim_meters`.
"""

from typing import Optional

from app.atlas.timefmt import format_duration, format_mm_ss
from app.schemas.plan import (
    Block,
    HeartRateIntensity,
    Intensity,
    PaceIntensity,
    PowerIntensity,
    RpeIntensity,
    StructuredPlan,
    ZoneIntensity,
)

_DEFAULT_TITLES = {
    "warmup": "Warm-up",
    "main": "Main set",
    "cooldown": "Cool-down",
    "strength": "Strength",
    "technique": "Technique",
}


def format_intensity(intensity: Intensity) -> str:
    if isinstance(intensity, ZoneIntensity):
        return intensity.zone
    if isinstance(intensity, RpeIntensity):
        if intensity.max is not None and intensity.max != intensity.min:
            return f"RPE {intensity.min}–{intensity.max}"
        return f"RPE {intensity.min}"
    if isinstance(intensity, PaceIntensity):
        return (
            f"{format_mm_ss(intensity.low_sec)}–{format_mm_ss(intensity.high_sec)}"
            f"{intensity.unit}"
        )
    if isinstance(intensity, PowerIntensity):
        return f"{intensity.min_w}–{intensity.max_w} W"
    if isinstance(intensity, HeartRateIntensity):
        return f"{intensity.min_bpm}–{intensity.max_bpm} bpm"
    raise TypeError(f"Unsupported intensity {type(intensity).__name__}")


def _format_main(block: Block) -> Optional[str]:
    if block.distance_m:
        base = f"{block.distance_m} m"
    elif block.duration_sec:
        base = format_duration(block.duration_sec)
    else:
        return None
    if block.reps and block.reps > 1:
        return f"{block.reps}×{base}"
    return base


def format_block_line(block: Block) -> str:
    parts: list[str] = []

    main = _format_main(block)
    if main:
        parts.append(main)

    meta = [format_intensity(block.intensity)]
    if block.rest_sec:
        meta.append(f"rest {format_duration(block.rest_sec)}")
    parts.append(" • ".join(meta))

    notes = (block.notes or "").strip()
    if notes and notes != main:
        parts.append(notes)

    return " — ".join(parts)


def export_plan_to_text(plan: StructuredPlan) -> str:
    chunks: list[str] = []

    if plan.objective.strip():
        chunks.append(f"## Objective\n{plan.objective.strip()}")

    for section in plan.sections:
        if not section.blocks:
            continue
        title = section.title.strip() or _DEFAULT_TITLES[section.type]
        lines = "\n".join(f"- {format_block_line(b)}" for b in section.blocks)
        chunks.append(f"## {title}\n{lines}")

    return "\n\n".join(chunks).strip()
