"""
Intent parser registry.

Parsers are registered at import time (see :mod:`app.atlas.intents`)
and looked up by locale.
"""

from __future__ import annotations

from typing import Optional

from app.atlas.intents.base import IntentParser


class IntentParserRegistry:
    """Singleton registry of available intent parsers."""

    _parsers: dict[str, IntentParser] = {}

    @classmethod
    def register(cls, parser: IntentParser) -> None:
        """Register a parser.

        Raises :class:`ValueError` if the locale is already taken.
        """
        if parser.locale in cls._parsers:
            raise ValueError(f"Intent parser '{parser.locale}' already registered")
        cls._parsers[parser.locale] = parser

    @classmethod
    def get(cls, locale: str) -> Optional[IntentParser]:
        return cls._parsers.get(locale)

    @classmethod
    def get_or_raise(cls, locale: str) -> IntentParser:
        """Get a parser by *locale*.

        Raises :class:`KeyError` if not found.
        """
        parser = cls._parsers.get(locale)
        if not parser:
            raise KeyError(
                f"Intent parser '{locale}' not registered. "
                f"Available: {list(cls._parsers.keys())}"
            )
        return parser

    @classmethod
    def available_locales(cls) -> list[str]:
        return sorted(cls._parsers.keys())

    @classmethod
    def clear(cls) -> None:
        """Remove all parsers.  Useful for testing."""
        cls._parsers.clear()
