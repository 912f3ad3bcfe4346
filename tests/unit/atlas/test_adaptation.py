"""
Unit tests for turning decisions into workout patches.
"""

import datetime

import pytest

from app.atlas.adaptation import patch_for_decision, summarize_decision
from app.schemas.decision import (
    Proceed,
    ReduceIntensity,
    Rest,
    Shorten,
    SwapRecovery,
    WorkoutMeta,
)
from app.schemas.plan import StructuredPlan


# ======================================================================
# Helpers
# ======================================================================


def _make_workout(**overrides) -> WorkoutMeta:
    defaults = dict(
        id=1,
        type="run",
        title="Tempo run",
        duration_min=50,
        date=datetime.date(2026, 3, 2),
    )
    defaults.update(overrides)
    return WorkoutMeta(**defaults)


def _decision(cls, **kwargs):
    return cls(text="because", reason="of low energy", confidence=75, **kwargs)


# ======================================================================
# patch_for_decision
# ======================================================================


class TestPatchForDecision:

    def test_proceed_has_no_patch(self):
        assert patch_for_decision(_decision(Proceed), _make_workout()) is None

    def test_reduce_keeps_duration(self):
        patch = patch_for_decision(_decision(ReduceIntensity), _make_workout())
        values = patch.values()
        assert "duration_min" not in values
        assert values["description_md"].startswith("## Objective\nEasy aerobic")
        plan = StructuredPlan.model_validate(values["prescription_json"])
        assert plan.sections[1].blocks[0].duration_sec == 28 * 60

    def test_shorten_scales_duration(self):
        patch = patch_for_decision(_decision(Shorten), _make_workout())
        assert patch.values()["duration_min"] == 35

    def test_shorten_floor(self):
        patch = patch_for_decision(_decision(Shorten), _make_workout(duration_min=10))
        assert patch.values()["duration_min"] == 10

    @pytest.mark.parametrize("workout_type,duration,title,minutes", [
        ("run", 50, "Recovery run", 30),
        ("bike", 120, "Recovery ride", 45),
        ("swim", 80, "Recovery swim", 40),
        ("strength", 60, "Recovery session", 30),
    ])
    def test_swap_recovery(self, workout_type, duration, title, minutes):
        workout = _make_workout(type=workout_type, duration_min=duration)
        values = patch_for_decision(_decision(SwapRecovery), workout).values()
        assert values["title"] == title
        assert values["duration_min"] == minutes

    def test_rest(self):
        values = patch_for_decision(_decision(Rest), _make_workout()).values()
        assert values["type"] == "rest"
        assert values["title"] == "Rest day"
        assert values["duration_min"] == 0
        assert values["tss"] == 0
        assert "walk / easy mobility" in values["description_md"]

    def test_ai_metadata(self):
        values = patch_for_decision(_decision(Shorten), _make_workout()).values()
        assert values["ai_generated"] is True
        assert values["ai_reason"] == "of low energy"
        assert values["ai_confidence"] == 75
        assert values["source"] == "checkin"

    def test_date_never_touched(self):
        for cls in (ReduceIntensity, Shorten, SwapRecovery, Rest):
            patch = patch_for_decision(_decision(cls), _make_workout())
            assert "date" not in patch.touched_fields()


# ======================================================================
# summarize_decision
# ======================================================================


class TestSummarizeDecision:

    def test_with_date(self):
        summary = summarize_decision(_decision(Shorten), _make_workout())
        assert summary == "Shorten: Tempo run (2026-03-02)"

    def test_untitled_without_date(self):
        summary = summarize_decision(_decision(SwapRecovery), _make_workout(title="", date=None))
        assert summary == "Swap to recovery: Run"

    def test_rest_label(self):
        assert summarize_decision(_decision(Rest), _make_workout()).startswith("Rest day: ")
