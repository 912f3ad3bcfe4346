"""Check a generated plan against the intent it was generated for."""

from __future__ import annotations

import datetime
from typing import Optional

from app.schemas.intent import CoachIntent, IntentCheck, IntentSport

_SPORT_TYPES = {
    IntentSport.SWIM: "swim",
    IntentSport.RUN: "run",
    IntentSport.BIKE: "bike",
    IntentSport.STRENGTH: "strength",
}


def intent_workout_type(intent: CoachIntent) -> str:
    return _SPORT_TYPES.get(intent.sport, "other")


def validate_plan_matches_intent(
    intent: CoachIntent,
    sport: str,
    date: Optional[datetime.date],
    total_meters: int,
) -> IntentCheck:
    """First mismatch wins: sport, then date, then swim volume."""
    expected = _SPORT_TYPES.get(intent.sport)
    if expected and sport != expected:
        return IntentCheck(
            valid=False,
            mismatch_reason=f"Sport mismatch: user asked {expected}, got {sport}",
        )

    if intent.target_date and date != intent.target_date:
        got = date.isoformat() if date else "no date"
        return IntentCheck(
            valid=False,
            mismatch_reason=(
                f"Date mismatch: user asked {intent.target_date.isoformat()}, got {got}"
            ),
        )

    if intent.swim_meters and total_meters != intent.swim_meters:
        return IntentCheck(
            valid=False,
            mismatch_reason=(
                f"Swim meters mismatch: user asked {intent.swim_meters}m, "
                f"got {total_meters}m"
            ),
            off_by_meters=total_meters - intent.swim_meters,
        )

    return IntentCheck(valid=True)
