"""
Unit tests for exact-target swim distance enforcement.
"""

import logging

import pytest

from app.atlas.exact_total import (
    claimed_total_meters,
    enforce_exact_total,
    parse_swim_meters,
)
from app.schemas.plan import Block, RpeIntensity, Section, StructuredPlan

SWIM_TEXT = (
    "## Warm-up\n"
    "- 400 m easy\n"
    "\n"
    "## Main set\n"
    "- 8×100 m — RPE 6 • rest 0:15\n"
    "- 4×200 m — 1:50–2:00/100m • rest 0:20\n"
    "\n"
    "## Cool-down\n"
    "- 400 m easy"
)


# ======================================================================
# Helpers
# ======================================================================


def _make_block(block_id, reps=None, distance_m=None) -> Block:
    return Block(id=block_id, reps=reps, distance_m=distance_m, intensity=RpeIntensity(min=4))


def _make_plan(*main_blocks, warm=200, cool=200) -> StructuredPlan:
    return StructuredPlan(sections=(
        Section(id="warmup", type="warmup", title="Warm-up", blocks=(
            _make_block("warmup-1", distance_m=warm),
        )),
        Section(id="main", type="main", title="Main set", blocks=tuple(main_blocks)),
        Section(id="cooldown", type="cooldown", title="Cool-down", blocks=(
            _make_block("cooldown-1", distance_m=cool),
        )),
    ))


# ======================================================================
# Parsing
# ======================================================================


class TestParseSwimMeters:

    def test_swim_text(self):
        assert parse_swim_meters(SWIM_TEXT) == 2400

    @pytest.mark.parametrize("text,expected", [
        ("3 x 400", 1200),
        ("1500 meters steady", 1500),
        ("- 200 m — 1:45–1:55/100m", 200),
        ("RPE 4 for 10 min", None),
        ("", None),
    ])
    def test_tokens(self, text, expected):
        assert parse_swim_meters(text) == expected

    def test_total_lines_ignored(self):
        text = SWIM_TEXT + "\n\nTOTAL METERS: 2400"
        assert parse_swim_meters(text) == 2400
        assert claimed_total_meters(text) == 2400

    def test_no_claimed_total(self):
        assert claimed_total_meters(SWIM_TEXT) is None


# ======================================================================
# Text enforcement
# ======================================================================


class TestEnforceText:

    def test_already_exact_untouched(self):
        assert enforce_exact_total(SWIM_TEXT, 2400) is SWIM_TEXT

    def test_too_long_lowers_last_repeat(self):
        result = enforce_exact_total(SWIM_TEXT, 2200)
        assert "- 3×200 m" in result
        assert "- 8×100 m" in result
        assert parse_swim_meters(result) == 2200

    def test_too_short_raises_divisible_repeat(self):
        result = enforce_exact_total(SWIM_TEXT, 2500)
        assert "- 9×100 m" in result
        assert "- 4×200 m" in result
        assert parse_swim_meters(result) == 2500

    def test_single_block_lengthened(self):
        result = enforce_exact_total(SWIM_TEXT, 2425)
        assert result.endswith("- 425 m easy")
        assert parse_swim_meters(result) == 2425

    def test_append_easy_swim(self):
        result = enforce_exact_total("- 4×150 m", 650)
        assert result == "- 4×150 m\n- 50 m easy"

    def test_idempotent(self):
        once = enforce_exact_total(SWIM_TEXT, 2200)
        assert enforce_exact_total(once, 2200) == once

    def test_edit_is_silent(self):
        result = enforce_exact_total(SWIM_TEXT, 2200)
        assert "adjust" not in result.lower()
        assert "total" not in result.lower()

    @pytest.mark.parametrize("target", [2410, 4000, 100])
    def test_unsafe_delta_returns_original(self, target, caplog):
        with caplog.at_level(logging.WARNING, logger="app.atlas.exact_total"):
            assert enforce_exact_total(SWIM_TEXT, target) == SWIM_TEXT
        assert "UNSAFE_ADJUSTMENT" in caplog.text

    def test_no_distances(self):
        assert enforce_exact_total("Easy 30 min by feel", 1000) == "Easy 30 min by feel"


class TestEnforceTextTotals:
    """Total lines follow the edit instead of keeping the old number."""

    CLAIMED_TEXT = (
        "## Warm-up\n"
        "- 400 m easy\n"
        "\n"
        "## Main set\n"
        "- 8×100 m — RPE 6\n"
        "- 4×400 m — RPE 7\n"
        "\n"
        "## Cool-down\n"
        "- 400 m easy\n"
        "\n"
        "TOTAL METERS: 3200"
    )

    def test_claim_rewritten_with_edit(self):
        result = enforce_exact_total(self.CLAIMED_TEXT, 3000)
        assert "- 6×100 m" in result
        assert parse_swim_meters(result) == 3000
        assert claimed_total_meters(result) == 3000
        assert "TOTAL METERS: 3000" in result
        assert "correction" not in result.lower()

    def test_stale_claim_fixed_when_blocks_match(self):
        result = enforce_exact_total(SWIM_TEXT + "\n\nTOTAL METERS: 2600", 2400)
        assert result == SWIM_TEXT + "\n\nTOTAL METERS: 2400"

    def test_matching_claim_untouched(self):
        text = SWIM_TEXT + "\n\nTOTAL METERS: 2400"
        assert enforce_exact_total(text, 2400) is text

    def test_total_with_unit(self):
        result = enforce_exact_total(SWIM_TEXT + "\nTotal 2400 m", 2200)
        assert result.endswith("Total 2200 m")
        assert parse_swim_meters(result) == 2200

    def test_appended_block_goes_before_total(self):
        result = enforce_exact_total("- 4×150 m\n\nTOTAL METERS: 600", 650)
        assert result == "- 4×150 m\n- 50 m easy\n\nTOTAL METERS: 650"

    def test_ambiguous_total_line_returns_original(self, caplog):
        text = SWIM_TEXT + "\nTotal 2400 m, last week 2000 m"
        with caplog.at_level(logging.WARNING, logger="app.atlas.exact_total"):
            assert enforce_exact_total(text, 2200) == text
        assert "UNSAFE_ADJUSTMENT" in caplog.text


# ======================================================================
# Plan enforcement
# ======================================================================


class TestEnforcePlan:

    def test_already_exact_untouched(self):
        plan = _make_plan(_make_block("main-1", reps=10, distance_m=100))
        assert enforce_exact_total(plan, 1400) is plan

    def test_reduce_repeat(self):
        plan = _make_plan(_make_block("main-1", reps=24, distance_m=100))
        result = enforce_exact_total(plan, 2600)
        assert result.total_meters == 2600
        assert result.sections[1].blocks[0].reps == 22

    def test_raise_repeat_at_most_doubles(self):
        plan = _make_plan(_make_block("main-1", reps=2, distance_m=100))
        result = enforce_exact_total(plan, 1000)
        # +400 would more than double the 2×100, so the cool-down grows instead
        assert result.sections[1].blocks[0].reps == 2
        assert result.sections[2].blocks[0].distance_m == 600
        assert result.total_meters == 1000

    def test_single_block_shortened(self):
        plan = _make_plan(_make_block("main-1", reps=4, distance_m=200))
        result = enforce_exact_total(plan, 1150)
        assert result.sections[2].blocks[0].distance_m == 150
        assert result.total_meters == 1150

    def test_min_block_respected(self):
        plan = _make_plan(_make_block("main-1", reps=3, distance_m=300), warm=100, cool=100)
        # -75 fits no repeat and would leave a single block under 50 m
        assert enforce_exact_total(plan, 1025) is plan

    def test_append_block(self):
        plan = StructuredPlan(sections=(
            Section(id="main", type="main", title="Main set", blocks=(
                _make_block("main-1", reps=4, distance_m=150),
            )),
        ))
        result = enforce_exact_total(plan, 650)
        extra = result.sections[0].blocks[-1]
        assert extra.id == "main-2"
        assert extra.distance_m == 50
        assert result.total_meters == 650

    def test_input_not_mutated(self):
        plan = _make_plan(_make_block("main-1", reps=24, distance_m=100))
        enforce_exact_total(plan, 2600)
        assert plan.total_meters == 2800

    def test_plan_without_distance(self):
        plan = StructuredPlan(sections=(
            Section(id="main", type="main", title="Main set", blocks=(
                Block(id="main-1", duration_sec=600, intensity=RpeIntensity(min=3)),
            )),
        ))
        assert enforce_exact_total(plan, 1000) is plan

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            enforce_exact_total(1000, 1000)
