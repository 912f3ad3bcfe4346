"""
Decision mapping: readiness → one action from a fixed vocabulary.

Score bands (first match wins):

    score ≥ 70   PROCEED
    score ≥ 50   REDUCE_INTENSITY
    score ≥ 40   SHORTEN
    score ≥ 30   SWAP_RECOVERY
    otherwise    REST

Individual red flags can only make the decision *more* conservative:

    severe soreness   → at least SWAP_RECOVERY
    stress ≥ 4        → at least REDUCE_INTENSITY
    sleep < 6h        → at least REDUCE_INTENSITY

Every decision text passes through :func:`apply_guardrails`, so it always
carries a "because" clause and, below 70% confidence, states the
confidence percentage.
"""

from __future__ import annotations

import logging
from typing import Optional

from app.atlas.guardrails import apply_guardrails
from app.schemas.decision import (
    Decision,
    Proceed,
    ReduceIntensity,
    Rest,
    Shorten,
    SwapRecovery,
    WorkoutMeta,
)
from app.schemas.readiness import ReadinessFactor, ReadinessResult

logger = logging.getLogger(__name__)

# ======================================================================
# Configuration
# ======================================================================

# Ordered from least to most conservative.
ACTION_SEVERITY: list[str] = [
    "PROCEED",
    "REDUCE_INTENSITY",
    "SHORTEN",
    "SWAP_RECOVERY",
    "REST",
]

_SCORE_BANDS: list[tuple[int, str]] = [
    (70, "PROCEED"),
    (50, "REDUCE_INTENSITY"),
    (40, "SHORTEN"),
    (30, "SWAP_RECOVERY"),
]

SEVERE_SORENESS = 5
HIGH_STRESS = 4
SHORT_SLEEP_HRS = 6.0

_MIN_CONFIDENCE = 35
_MAX_CONFIDENCE = 95
_NO_DATA_CONFIDENCE = 20


# ======================================================================
# Mapping helpers
# ======================================================================


def _band_action(score: int) -> str:
    for threshold, action in _SCORE_BANDS:
        if score >= threshold:
            return action
    return "REST"


def _red_flags(readiness: ReadinessResult) -> list[tuple[str, str]]:
    """Return ``(minimum_action, reason)`` for each red flag present."""
    flags: list[tuple[str, str]] = []

    soreness = readiness.factor("soreness")
    if soreness and soreness.value is not None and soreness.value >= SEVERE_SORENESS:
        flags.append(("SWAP_RECOVERY", "your muscle soreness is severe"))

    stress = readiness.factor("stress")
    if stress and stress.value is not None and stress.value >= HIGH_STRESS:
        flags.append(("REDUCE_INTENSITY", f"your stress is high ({stress.value:g}/5)"))

    sleep = readiness.factor("sleep_duration")
    if sleep and sleep.value is not None and sleep.value < SHORT_SLEEP_HRS:
        flags.append(("REDUCE_INTENSITY", f"you only slept {sleep.value:.1f}h"))

    return flags


def _describe(factor: ReadinessFactor) -> str:
    text = factor.description
    return text[0].lower() + text[1:] if text else factor.name


def _reason_for(
    action: str,
    readiness: ReadinessResult,
    flag_reason: Optional[str],
) -> str:
    """Pick the concrete signal the decision is tied to."""
    if flag_reason:
        return flag_reason

    wanted_negative = action != "PROCEED"
    for f in readiness.factors:
        if (f.impact < 0) == wanted_negative and f.impact != 0:
            return f"of {_describe(f)}"

    if readiness.factors:
        return f"of {_describe(readiness.factors[0])}"
    return f"your readiness is {readiness.score}/100"


def _decision_confidence(action: str, readiness: ReadinessResult) -> int:
    """Data coverage minus a penalty per factor pointing the other way."""
    if action == "PROCEED":
        conflicting = sum(1 for f in readiness.factors if f.impact < 0)
    else:
        conflicting = sum(1 for f in readiness.factors if f.impact > 0)
    raw = readiness.confidence - 5 * conflicting
    return max(_MIN_CONFIDENCE, min(_MAX_CONFIDENCE, raw))


def _workout_label(workout: WorkoutMeta) -> str:
    if workout.title:
        return workout.title
    return f"today's {workout.type} session"


# ======================================================================
# Text templates
# ======================================================================


def _build(
    action: str,
    workout: WorkoutMeta,
    reason: str,
    confidence: int,
) -> Decision:
    label = _workout_label(workout)

    if action == "PROCEED":
        text = f"Go ahead with {label} as planned because {reason}."
        return Proceed(
            text=apply_guardrails(text, reason, confidence),
            reason=reason,
            confidence=confidence,
        )

    if action == "REDUCE_INTENSITY":
        decision = ReduceIntensity(text="", reason=reason, confidence=confidence)
        text = (
            f"Keep {label} but hold it to about "
            f"{decision.intensity_pct_low}–{decision.intensity_pct_high}% of the planned "
            f"intensity because {reason}."
        )
        return decision.model_copy(update={"text": apply_guardrails(text, reason, confidence)})

    if action == "SHORTEN":
        decision = Shorten(text="", reason=reason, confidence=confidence)
        if workout.duration_min:
            target = f"about {round(workout.duration_min * decision.duration_factor)} minutes"
        else:
            target = f"about {round(decision.duration_factor * 100)}% of the planned duration"
        text = (
            f"Cut {label} to {target} at "
            f"{decision.intensity_pct_low}–{decision.intensity_pct_high}% intensity "
            f"because {reason}."
        )
        return decision.model_copy(update={"text": apply_guardrails(text, reason, confidence)})

    if action == "SWAP_RECOVERY":
        decision = SwapRecovery(text="", reason=reason, confidence=confidence)
        text = (
            f"Swap {label} for {decision.recovery_min_low}–{decision.recovery_min_high} "
            f"minutes of easy recovery because {reason}."
        )
        return decision.model_copy(update={"text": apply_guardrails(text, reason, confidence)})

    if action == "REST":
        text = f"Take a rest day instead of {label} because {reason}."
        return Rest(
            text=apply_guardrails(text, reason, confidence),
            reason=reason,
            confidence=confidence,
        )

    raise ValueError(f"Unknown action '{action}'")


# ======================================================================
# Main entry point
# ======================================================================


def decide(readiness: ReadinessResult, workout: WorkoutMeta) -> Decision:
    """Map a readiness result onto one decision for *workout*.

    Args:
        readiness: Output of :func:`~app.atlas.readiness.score_readiness`.
        workout: The scheduled workout the decision applies to.

    Returns:
        One :data:`~app.schemas.decision.Decision` variant with
        guardrailed text.
    """
    if not readiness.has_data:
        reason = "there is no check-in for today yet, so there is nothing to adjust"
        text = f"Keep {_workout_label(workout)} as planned because {reason}."
        return Proceed(
            text=apply_guardrails(text, reason, _NO_DATA_CONFIDENCE),
            reason=reason,
            confidence=_NO_DATA_CONFIDENCE,
        )

    if workout.type == "rest":
        reason = "today is already a rest day"
        confidence = readiness.confidence
        text = f"Enjoy the rest day because {reason}; there is nothing to scale back."
        return Proceed(
            text=apply_guardrails(text, reason, confidence),
            reason=reason,
            confidence=confidence,
        )

    action = _band_action(readiness.score)
    flag_reason: Optional[str] = None
    for minimum, flag in _red_flags(readiness):
        if ACTION_SEVERITY.index(minimum) >= ACTION_SEVERITY.index(action):
            action = minimum
            flag_reason = flag

    reason = _reason_for(action, readiness, flag_reason)
    confidence = _decision_confidence(action, readiness)

    logger.debug(
        "Decision %s for score=%s (reason: %s, confidence %s%%)",
        action, readiness.score, reason, confidence,
    )
    return _build(action, workout, reason, confidence)
