"""
English coach intent parser.

Recognised pieces (case-insensitive):

    sport      swim / run / bike / strength keywords
    date       "today", "tomorrow", a weekday ("on friday"), ISO date
    volume     "3500m", "3500 meters", "3.5km" (swims, at most 20 km)
    duration   "45 min" (clamped to 10-180), "1.5h" (at most 4 h)
    mode       change / add to calendar / generate (+ add)

A distance with no sport keyword is read as a swim.
"""

from __future__ import annotations

import datetime
import re
from typing import Optional

from app.atlas.intents.base import IntentParser
from app.schemas.intent import CoachIntent, IntentMode, IntentSport

BASE_CONFIDENCE = 80
UNKNOWN_SPORT_CONFIDENCE = 60
UNDATED_ADD_CONFIDENCE = 70

MAX_SWIM_KM = 20
MIN_DURATION_MIN = 10
MAX_DURATION_MIN = 180
MAX_DURATION_HOURS = 4

_SPORTS: list[tuple[IntentSport, re.Pattern]] = [
    (IntentSport.SWIM, re.compile(r"\b(swim|swims|swimming|pool|freestyle|laps)\b")),
    (IntentSport.RUN, re.compile(r"\b(run|runs|running|jog|jogging|track)\b")),
    (IntentSport.BIKE, re.compile(r"\b(bike|biking|ride|riding|cycling|cycle|spin|zwift)\b")),
    (IntentSport.STRENGTH, re.compile(r"\b(strength|gym|weights|lifting|lift)\b")),
]

_METERS = re.compile(r"\b(\d{2,5})\s*(?:m|meters?|metres?)\b")
_KM = re.compile(r"\b(\d+(?:\.\d+)?)\s*(?:km|kilometers?|kilometres?)\b")
_MINUTES = re.compile(r"\b(\d{1,3})\s*(?:min|mins|minutes?)\b")
_HOURS = re.compile(r"\b(\d+(?:\.\d+)?)\s*(?:h|hr|hrs|hours?)\b")
_ISO_DATE = re.compile(r"\b(\d{4}-\d{2}-\d{2})\b")

_WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
_WEEKDAY = re.compile(r"\b(?:on\s+)?(?:next\s+)?(" + "|".join(_WEEKDAYS) + r")\b")

_ADD = re.compile(
    r"\b(add|put|save|schedule)\b.{0,20}\b(calendar|schedule|plan|it)\b"
    r"|\badd to (?:my )?(?:calendar|schedule)\b"
)
_GENERATE = re.compile(r"\b(generate|create|make|build|give me|write|design|plan)\b")
_CHANGE = re.compile(r"\b(change|modify|adjust|swap|replace|update|edit|easier|harder)\b")


def _sport(text: str) -> IntentSport:
    for sport, pattern in _SPORTS:
        if pattern.search(text):
            return sport
    return IntentSport.UNKNOWN


def _swim_meters(text: str) -> Optional[int]:
    m = _METERS.search(text)
    if m:
        return int(m.group(1))
    km = _KM.search(text)
    if km:
        value = float(km.group(1))
        if 0 < value <= MAX_SWIM_KM:
            return round(value * 1000)
    return None


def _duration(text: str) -> Optional[int]:
    m = _MINUTES.search(text)
    if m:
        return max(MIN_DURATION_MIN, min(MAX_DURATION_MIN, int(m.group(1))))
    h = _HOURS.search(text)
    if h:
        hours = float(h.group(1))
        if 0 < hours <= MAX_DURATION_HOURS:
            return round(hours * 60)
    return None


def _target_date(text: str, today: datetime.date) -> Optional[datetime.date]:
    if "tomorrow" in text:
        return today + datetime.timedelta(days=1)
    if "today" in text or "tonight" in text:
        return today
    iso = _ISO_DATE.search(text)
    if iso:
        try:
            return datetime.date.fromisoformat(iso.group(1))
        except ValueError:
            return None
    day = _WEEKDAY.search(text)
    if day:
        ahead = (_WEEKDAYS.index(day.group(1)) - today.weekday()) % 7
        return today + datetime.timedelta(days=ahead or 7)
    return None


def _mode(text: str) -> IntentMode:
    adds = bool(_ADD.search(text))
    if adds and _GENERATE.search(text):
        return IntentMode.GENERATE_AND_ADD
    if _CHANGE.search(text):
        return IntentMode.CHANGE
    if adds:
        return IntentMode.ADD_TO_CALENDAR
    return IntentMode.GENERATE


class EnglishIntentParser(IntentParser):

    @property
    def locale(self) -> str:
        return "en"

    def parse(self, message: str, today: datetime.date) -> CoachIntent:
        text = (message or "").lower()

        sport = _sport(text)
        meters = None
        if sport in (IntentSport.SWIM, IntentSport.UNKNOWN):
            meters = _swim_meters(text)
            if meters and sport is IntentSport.UNKNOWN:
                sport = IntentSport.SWIM

        target_date = _target_date(text, today)
        mode = _mode(text)

        confidence = BASE_CONFIDENCE
        if sport is IntentSport.UNKNOWN:
            confidence = UNKNOWN_SPORT_CONFIDENCE
        elif mode is IntentMode.ADD_TO_CALENDAR and target_date is None:
            confidence = UNDATED_ADD_CONFIDENCE

        return CoachIntent(
            sport=sport,
            target_date=target_date,
            swim_meters=meters,
            duration_min=_duration(text),
            mode=mode,
            confidence=confidence,
        )
