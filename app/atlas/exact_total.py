"""
Exact-target enforcement for swim distance.

After a plan is composed its realized total is recomputed from the
blocks.  When it differs from the requested total, one deterministic,
local edit is attempted:

    too long   lower one repeat count (N×d with d | Δ, ≥ 1 rep left),
               else shorten one single-distance block (≥ 50 m left)
    too short  raise one repeat count (d | Δ, at most doubling it),
               else lengthen one single-distance block,
               else (text only) append an easy swim of Δ meters

Candidates are scanned from the last block to the first, so cool-down
and main-set blocks are edited before the warm-up.  Deltas that are not
a multiple of 25 m (one pool length) or exceed 1000 m are considered
unsafe: the input is returned unchanged and an ``UNSAFE_ADJUSTMENT`` is
logged.  Already-correct input is always returned untouched, which makes
the routine idempotent.

In text, lines mentioning a total (``TOTAL METERS: 3200``, ``Total 3200 m``)
are not counted; their number is rewritten to the target along with the
edit so the text never claims a total its blocks do not add up to.

The output never mentions that an edit happened.
"""

from __future__ import annotations

import logging
import re
from typing import Optional, Union

from app.atlas.errors import ErrorCode
from app.schemas.plan import Block, RpeIntensity, StructuredPlan

logger = logging.getLogger(__name__)

POOL_LENGTH_M = 25
MAX_DELTA_M = 1000
MAX_APPENDED_M = 400
MIN_BLOCK_M = 50

# "4×50 m", "8 x 100m", "3×400", "200 m", "1500 meters".  Pace suffixes
# ("/100m"), clock times ("0:20") and bare numbers ("RPE 4") never count.
_METERS = re.compile(
    r"(?<![\w/:.])"
    r"(?:(?P<reps>\d+)\s*[x×*]\s*)?"
    r"(?P<dist>\d+)"
    r"(?P<unit>\s*(?:m|meters?|metres?)\b)?"
    r"(?![\d:.,]|\s*(?:min|sec|s\b|km|w\b|%))",
    re.IGNORECASE,
)
_TOTAL_LINE = re.compile(r"\btotal\b", re.IGNORECASE)
_CLAIMED_TOTAL = re.compile(r"total\s+meters?\s*:\s*(\d+)", re.IGNORECASE)


# ======================================================================
# Text parsing
# ======================================================================


class _Token:
    """One distance mention inside a text line."""

    __slots__ = ("line", "reps", "dist", "reps_span", "dist_span")

    def __init__(self, line: int, match: re.Match):
        self.line = line
        self.reps = int(match.group("reps")) if match.group("reps") else None
        self.dist = int(match.group("dist"))
        self.reps_span = match.span("reps") if self.reps is not None else None
        self.dist_span = match.span("dist")

    @property
    def meters(self) -> int:
        return (self.reps or 1) * self.dist


def _tokens(text: str) -> list[_Token]:
    tokens: list[_Token] = []
    for i, line in enumerate(text.split("\n")):
        if _TOTAL_LINE.search(line):
            continue
        for match in _METERS.finditer(line):
            has_reps = match.group("reps") is not None
            if not (has_reps or match.group("unit")):
                continue
            dist = int(match.group("dist"))
            if 0 < dist < 10000:
                tokens.append(_Token(i, match))
    return tokens


def parse_swim_meters(text: str) -> Optional[int]:
    """Total meters mentioned in *text*, or ``None`` if there are none."""
    total = sum(t.meters for t in _tokens(text or ""))
    return total or None


def claimed_total_meters(text: str) -> Optional[int]:
    """Value of an explicit ``TOTAL METERS: n`` line, if present."""
    match = _CLAIMED_TOTAL.search(text or "")
    return int(match.group(1)) if match else None


# ======================================================================
# Safety
# ======================================================================


def _is_safe_delta(delta: int) -> bool:
    return delta % POOL_LENGTH_M == 0 and abs(delta) <= MAX_DELTA_M


def _log_unsafe(current: int, target: int, why: str) -> None:
    logger.warning(
        "%s: cannot move total from %sm to %sm (%s); returning original",
        ErrorCode.UNSAFE_ADJUSTMENT.value, current, target, why,
    )


# ======================================================================
# Text edits
# ======================================================================


def _replace_span(line: str, span: tuple[int, int], value: int) -> str:
    start, end = span
    return line[:start] + str(value) + line[end:]


def _edit_text(text: str, tokens: list[_Token], delta: int) -> Optional[str]:
    """Apply one edit removing (delta > 0) or adding (delta < 0) meters."""
    lines = text.split("\n")
    amount = abs(delta)
    reducing = delta > 0

    for t in reversed(tokens):
        if t.reps is None or amount % t.dist:
            continue
        step = amount // t.dist
        new_reps = t.reps - step if reducing else t.reps + step
        if reducing and new_reps < 1:
            continue
        if not reducing and step > t.reps:
            continue
        lines[t.line] = _replace_span(lines[t.line], t.reps_span, new_reps)
        return "\n".join(lines)

    for t in reversed(tokens):
        if t.reps is not None:
            continue
        new_dist = t.dist - amount if reducing else t.dist + amount
        if new_dist < MIN_BLOCK_M:
            continue
        lines[t.line] = _replace_span(lines[t.line], t.dist_span, new_dist)
        return "\n".join(lines)

    if not reducing and amount <= MAX_APPENDED_M:
        # Goes after the last block, ahead of any closing total lines
        lines = text.rstrip("\n").split("\n")
        at = len(lines)
        while at > 0 and (not lines[at - 1].strip() or _TOTAL_LINE.search(lines[at - 1])):
            at -= 1
        lines.insert(at, f"- {amount} m easy")
        return "\n".join(lines)
    return None


def _total_spans(line: str) -> list[tuple[int, int]]:
    claim = _CLAIMED_TOTAL.search(line)
    if claim:
        return [claim.span(1)]
    return [
        m.span("dist") for m in _METERS.finditer(line)
        if m.group("unit") and m.group("reps") is None
    ]


def _rewrite_totals(text: str, target: int) -> Optional[str]:
    """Point every total line at *target*; ``None`` if one is ambiguous."""
    lines = text.split("\n")
    changed = False
    for i, line in enumerate(lines):
        if not _TOTAL_LINE.search(line):
            continue
        spans = _total_spans(line)
        if len(spans) > 1:
            return None
        if spans and int(line[spans[0][0]:spans[0][1]]) != target:
            lines[i] = _replace_span(line, spans[0], target)
            changed = True
    return "\n".join(lines) if changed else text


def _enforce_text(text: str, target: int) -> str:
    tokens = _tokens(text)
    current = sum(t.meters for t in tokens)
    if not tokens:
        _log_unsafe(0, target, "no distances found")
        return text
    delta = current - target
    if delta == 0:
        edited = text
    elif not _is_safe_delta(delta):
        _log_unsafe(current, target, f"delta {delta}m")
        return text
    else:
        edited = _edit_text(text, tokens, delta)
        if edited is None or parse_swim_meters(edited) != target:
            _log_unsafe(current, target, "no single-block edit fits")
            return text

    synced = _rewrite_totals(edited, target)
    if synced is None:
        _log_unsafe(current, target, "total line cannot be rewritten")
        return text
    return synced


# ======================================================================
# Plan edits
# ======================================================================


def _edit_plan(plan: StructuredPlan, delta: int) -> Optional[StructuredPlan]:
    amount = abs(delta)
    reducing = delta > 0
    blocks = [(si, bi, b) for si, bi, b in plan.iter_blocks() if b.distance_m]

    for si, bi, block in reversed(blocks):
        if block.reps is None or amount % block.distance_m:
            continue
        step = amount // block.distance_m
        new_reps = block.reps - step if reducing else block.reps + step
        if reducing and new_reps < 1:
            continue
        if not reducing and step > block.reps:
            continue
        return plan.replace_block(si, bi, block.model_copy(update={"reps": new_reps}))

    for si, bi, block in reversed(blocks):
        if block.reps not in (None, 1):
            continue
        new_dist = block.distance_m - amount if reducing else block.distance_m + amount
        if new_dist < MIN_BLOCK_M:
            continue
        return plan.replace_block(si, bi, block.model_copy(update={"distance_m": new_dist}))

    if not reducing and amount <= MAX_APPENDED_M and plan.sections:
        last = len(plan.sections) - 1
        extra = Block(
            id=f"{plan.sections[last].id}-{len(plan.sections[last].blocks) + 1}",
            distance_m=amount,
            intensity=RpeIntensity(min=3),
            notes="easy",
        )
        return plan.append_block(last, extra)
    return None


def _enforce_plan(plan: StructuredPlan, target: int) -> StructuredPlan:
    current = plan.total_meters
    delta = current - target
    if delta == 0:
        return plan
    if current == 0:
        _log_unsafe(0, target, "no distance blocks")
        return plan
    if not _is_safe_delta(delta):
        _log_unsafe(current, target, f"delta {delta}m")
        return plan

    edited = _edit_plan(plan, delta)
    if edited is None or edited.total_meters != target:
        _log_unsafe(current, target, "no single-block edit fits")
        return plan
    return edited


# ======================================================================
# Main entry point
# ======================================================================


def enforce_exact_total(
    value: Union[StructuredPlan, str],
    target_meters: int,
) -> Union[StructuredPlan, str]:
    """Make the total distance of *value* exactly *target_meters*.

    Args:
        value: A structured plan or plan text.
        target_meters: Requested total.

    Returns:
        The edited plan/text, or *value* unchanged when it already
        matches or no safe single-block edit reaches the target.
    """
    if isinstance(value, StructuredPlan):
        return _enforce_plan(value, target_meters)
    if isinstance(value, str):
        return _enforce_text(value, target_meters)
    raise TypeError(f"Cannot enforce a total on {type(value).__name__}")
