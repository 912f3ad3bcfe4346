"""
Abstract base class for coach intent parsers.

One parser per locale turns a free-text request into a
:class:`CoachIntent`.  Parsers are pure: the caller supplies ``today``
so relative dates ("tomorrow") resolve deterministically.
"""

import datetime
from abc import ABC, abstractmethod

from app.schemas.intent import CoachIntent


class IntentParser(ABC):
    """Abstract base class that every intent parser must implement."""

    @property
    @abstractmethod
    def locale(self) -> str:
        """Locale code, e.g. ``'en'``."""
        ...

    @abstractmethod
    def parse(self, message: str, today: datetime.date) -> CoachIntent:
        """Parse *message* into a structured intent.

        Never raises on unrecognised input; unknown parts stay unset and
        lower the intent's confidence instead.
        """
        ...
