"""
Unit tests for the text guardrails.
"""

import pytest

from app.atlas.guardrails import (
    apply_guardrails,
    ensure_because,
    ensure_confidence_stated,
    soften_overconfidence,
    uncertainty_phrase,
)


class TestEnsureBecause:

    def test_appends_reason(self):
        text = ensure_because("Take it easy today", "you slept 5h")
        assert text == "Take it easy today. This is because you slept 5h."

    def test_keeps_existing_clause(self):
        text = "Rest because you are sore."
        assert ensure_because(text, "ignored") == text

    def test_case_insensitive(self):
        text = "Because you are sore, rest."
        assert ensure_because(text, "ignored") == text

    def test_empty_reason(self):
        text = ensure_because("Rest.", "")
        assert text == "Rest. This is because of today's signals."


class TestUncertainty:

    @pytest.mark.parametrize("confidence,fragment", [
        (20, "only 20% confident"),
        (39, "only 39% confident"),
        (40, "about 40% confident"),
        (69, "about 69% confident"),
    ])
    def test_phrase(self, confidence, fragment):
        assert fragment in uncertainty_phrase(confidence)

    def test_no_phrase_at_threshold(self):
        assert uncertainty_phrase(70) == ""

    def test_stated_once(self):
        text = ensure_confidence_stated("Rest because X.", 50)
        assert text.count("50%") == 1
        assert ensure_confidence_stated(text, 50) == text

    def test_high_confidence_untouched(self):
        assert ensure_confidence_stated("Rest because X.", 80) == "Rest because X."


class TestSoftenOverconfidence:

    def test_softens_below_threshold(self):
        text = soften_overconfidence("This will definitely help.", 50)
        assert text == "This likely help."
        assert "definitely" not in soften_overconfidence("Definitely rest.", 50).lower()

    def test_keeps_wording_when_confident(self):
        assert soften_overconfidence("This is guaranteed.", 90) == "This is guaranteed."


class TestApplyGuardrails:

    def test_all_postconditions(self):
        text = apply_guardrails("You will certainly feel better", "your HRV is low", 45)
        assert "because your HRV is low" in text
        assert "45%" in text
        assert "certainly" not in text

    @pytest.mark.parametrize("confidence", [0, 35, 69, 70, 95])
    def test_because_always_present(self, confidence):
        assert "because" in apply_guardrails("Go", "reason", confidence)
