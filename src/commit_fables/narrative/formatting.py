"""Style-independent formatting shared by every story template."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from functools import lru_cache
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from ..enrichment.persona import DeveloperPersona
    from ..stats import LanguageShare


@dataclass(frozen=True)
class TimeSpan:
    """First and last commit instants of a story."""

    start: datetime
    end: datetime

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def days(self) -> int:
        """Calendar days covered, counting both ends."""
        return (self.end.date() - self.start.date()).days + 1


def plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def join_words(words: Sequence[str]) -> str:
    """Join as "a", "a and b" or "a, b and c"."""
    words = list(words)
    if not words:
        return ""
    if len(words) == 1:
        return words[0]
    return f"{', '.join(words[:-1])} and {words[-1]}"


def format_duration(delta: timedelta) -> str:
    """Human duration such as "3 months and 12 days" or "5 hours".

    Months are 30 days and years 365 days; only the two or three largest
    non-zero units are kept.
    """
    total_seconds = int(delta.total_seconds())
    if total_seconds < 60:
        return "less than a minute"

    days = delta.days
    if days == 0:
        hours, remainder = divmod(total_seconds, 3600)
        minutes = remainder // 60
        parts = []
        if hours:
            parts.append(plural(hours, "hour"))
        if minutes and hours < 6:
            parts.append(plural(minutes, "minute"))
        return join_words(parts)

    years, days = divmod(days, 365)
    months, days = divmod(days, 30)
    parts = []
    if years:
        parts.append(plural(years, "year"))
    if months:
        parts.append(plural(months, "month"))
    if days:
        parts.append(plural(days, "day"))
    return join_words(parts)


def time_of_day(hour: int) -> str:
    """Bucket an hour into night / morning / afternoon / evening.

    Uses the persona hour bands, with 17:00-22:00 as evening.
    """
    if hour >= 22 or hour < 6:
        return "night"
    if hour < 12:
        return "morning"
    if hour < 17:
        return "afternoon"
    return "evening"


def format_date(value: datetime) -> str:
    """Render a date as "January 5, 2024"."""
    return f"{value:%B} {value.day}, {value.year}"


def format_percentage(value: float) -> str:
    """Render a 0-1 ratio as "83%"."""
    return f"{round(value * 100)}%"


def format_languages(languages: Sequence[LanguageShare]) -> str:
    return join_words([f"{lang.name} ({lang.percentage:.0f}%)" for lang in languages])


def article(word: str) -> str:
    return "an" if word[:1].lower() in "aeiou" else "a"


@lru_cache(maxsize=128)
def describe_persona(persona: DeveloperPersona) -> str:
    """Describe a persona, e.g. "a consistent and dedicated night owl".

    Derived only from type and traits, so every block that mentions the
    persona uses the exact same phrase.
    """
    noun = persona.display_name.lower()
    adjectives = [trait.value for trait in persona.traits]
    phrase = f"{join_words(adjectives)} {noun}" if adjectives else noun
    return f"{article(phrase)} {phrase}"
