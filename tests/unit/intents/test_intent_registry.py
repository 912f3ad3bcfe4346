"""Tests for the intent parser registry and the parser interface."""

import datetime

import pytest

import app.atlas.intents  # noqa: F401  (registers the built-in parsers)
from app.atlas.intents.base import IntentParser
from app.atlas.intents.english import EnglishIntentParser
from app.atlas.intents.registry import IntentParserRegistry
from app.schemas.intent import CoachIntent, IntentSport


class _FixedParser(IntentParser):
    """Minimal parser that always asks for a swim."""

    @property
    def locale(self) -> str:
        return "xx"

    def parse(self, message, today):
        return CoachIntent(sport=IntentSport.SWIM, target_date=today, confidence=50)


@pytest.fixture
def clean_registry():
    saved = dict(IntentParserRegistry._parsers)
    IntentParserRegistry.clear()
    yield IntentParserRegistry
    IntentParserRegistry.clear()
    IntentParserRegistry._parsers.update(saved)


class TestBuiltIns:

    def test_english_registered(self):
        assert "en" in IntentParserRegistry.available_locales()
        assert isinstance(IntentParserRegistry.get_or_raise("en"), EnglishIntentParser)

    def test_is_intent_parser(self):
        assert isinstance(EnglishIntentParser(), IntentParser)


class TestRegistry:

    def test_register_and_get(self, clean_registry):
        parser = _FixedParser()
        clean_registry.register(parser)
        assert clean_registry.get("xx") is parser
        assert clean_registry.available_locales() == ["xx"]

    def test_duplicate_rejected(self, clean_registry):
        clean_registry.register(_FixedParser())
        with pytest.raises(ValueError):
            clean_registry.register(_FixedParser())

    def test_unknown_locale(self, clean_registry):
        assert clean_registry.get("fr") is None
        with pytest.raises(KeyError):
            clean_registry.get_or_raise("fr")

    def test_custom_parser_used(self, clean_registry):
        clean_registry.register(_FixedParser())
        intent = clean_registry.get_or_raise("xx").parse("anything", datetime.date(2026, 3, 2))
        assert intent.sport == IntentSport.SWIM
        assert intent.target_date == datetime.date(2026, 3, 2)


class TestInterface:

    def test_abstract(self):
        with pytest.raises(TypeError):
            IntentParser()
