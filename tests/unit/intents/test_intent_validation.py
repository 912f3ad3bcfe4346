"""Tests for checking generated plans against the parsed intent."""

import datetime

import pytest

from app.atlas.intents.validation import intent_workout_type, validate_plan_matches_intent
from app.schemas.intent import CoachIntent, IntentSport

DAY = datetime.date(2026, 3, 3)


def _make_intent(**overrides) -> CoachIntent:
    defaults = dict(sport=IntentSport.SWIM, target_date=DAY, swim_meters=3000, confidence=80)
    defaults.update(overrides)
    return CoachIntent(**defaults)


class TestIntentWorkoutType:

    @pytest.mark.parametrize("sport,expected", [
        (IntentSport.SWIM, "swim"),
        (IntentSport.RUN, "run"),
        (IntentSport.BIKE, "bike"),
        (IntentSport.STRENGTH, "strength"),
        (IntentSport.UNKNOWN, "other"),
    ])
    def test_mapping(self, sport, expected):
        assert intent_workout_type(_make_intent(sport=sport)) == expected


class TestValidatePlan:

    def test_valid(self):
        check = validate_plan_matches_intent(_make_intent(), "swim", DAY, 3000)
        assert check.valid
        assert check.mismatch_reason is None

    def test_sport_mismatch(self):
        check = validate_plan_matches_intent(_make_intent(), "run", DAY, 3000)
        assert not check.valid
        assert check.mismatch_reason == "Sport mismatch: user asked swim, got run"

    def test_date_mismatch(self):
        check = validate_plan_matches_intent(_make_intent(), "swim", datetime.date(2026, 3, 4), 3000)
        assert check.mismatch_reason == "Date mismatch: user asked 2026-03-03, got 2026-03-04"

    def test_missing_date(self):
        check = validate_plan_matches_intent(_make_intent(), "swim", None, 3000)
        assert check.mismatch_reason == "Date mismatch: user asked 2026-03-03, got no date"

    def test_meters_mismatch(self):
        check = validate_plan_matches_intent(_make_intent(), "swim", DAY, 3200)
        assert check.mismatch_reason == "Swim meters mismatch: user asked 3000m, got 3200m"
        assert check.off_by_meters == 200

    def test_first_mismatch_wins(self):
        check = validate_plan_matches_intent(_make_intent(), "bike", None, 0)
        assert check.mismatch_reason.startswith("Sport mismatch")

    def test_unconstrained_intent(self):
        intent = _make_intent(sport=IntentSport.UNKNOWN, target_date=None, swim_meters=None)
        assert validate_plan_matches_intent(intent, "other", None, 0).valid
