"""
Coach intent parsers.

Import this module to register all available parsers.
New locales are added by:
  1. Creating a parser class implementing :class:`IntentParser`
  2. Adding a registration line below
"""

from app.atlas.intents.base import IntentParser
from app.atlas.intents.english import EnglishIntentParser
from app.atlas.intents.registry import IntentParserRegistry
from app.atlas.intents.validation import intent_workout_type, validate_plan_matches_intent

IntentParserRegistry.register(EnglishIntentParser())

__all__ = [
    "IntentParser",
    "IntentParserRegistry",
    "intent_workout_type",
    "validate_plan_matches_intent",
]
