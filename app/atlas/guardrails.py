"""
Text guardrails for athlete-facing explanations.

Two structural postconditions hold for every string returned by
:func:`apply_guardrails`:

1. It contains an explicit ``because`` clause.
2. When confidence is below 70 it states the confidence as a percentage.

Low-confidence text is also stripped of overconfident wording.
"""

import re

UNCERTAINTY_THRESHOLD = 70

_BECAUSE = re.compile(r"\bbecause\b", re.IGNORECASE)

_OVERCONFIDENT = [
    re.compile(r"\bwill definitely\b", re.IGNORECASE),
    re.compile(r"\bdefinitely\b", re.IGNORECASE),
    re.compile(r"\bguaranteed\b", re.IGNORECASE),
    re.compile(r"\bfor sure\b", re.IGNORECASE),
    re.compile(r"\babsolutely\b", re.IGNORECASE),
    re.compile(r"\bno doubt\b", re.IGNORECASE),
    re.compile(r"\bcertainly\b", re.IGNORECASE),
    re.compile(r"\bwithout question\b", re.IGNORECASE),
]


def _sentence(text: str) -> str:
    text = text.strip()
    if text and text[-1] not in ".!?":
        text += "."
    return text


def ensure_because(text: str, reason: str) -> str:
    """Append ``This is because <reason>.`` unless a because clause exists."""
    if _BECAUSE.search(text):
        return text
    reason = reason.strip().rstrip(".") or "of today's signals"
    return f"{_sentence(text)} This is because {reason}."


def uncertainty_phrase(confidence: int) -> str:
    if confidence < 40:
        return (
            f"I'm only {confidence}% confident here. "
            "If this doesn't feel right, trust how your body feels."
        )
    if confidence < UNCERTAINTY_THRESHOLD:
        return f"I'm about {confidence}% confident in this suggestion."
    return ""


def soften_overconfidence(text: str, confidence: int) -> str:
    if confidence >= UNCERTAINTY_THRESHOLD:
        return text
    for pattern in _OVERCONFIDENT:
        text = pattern.sub("likely", text)
    return text


def ensure_confidence_stated(text: str, confidence: int) -> str:
    """Append an uncertainty phrase when confidence < 70 and none is stated."""
    if confidence >= UNCERTAINTY_THRESHOLD or f"{confidence}%" in text:
        return text
    return f"{_sentence(text)} {uncertainty_phrase(confidence)}"


def apply_guardrails(text: str, reason: str, confidence: int) -> str:
    """Run every guardrail over *text*."""
    text = soften_overconfidence(text, confidence)
    text = ensure_because(text, reason)
    return ensure_confidence_stated(text, confidence)
