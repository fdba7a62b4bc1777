"""Tests for style-independent formatting helpers."""

from datetime import datetime, timedelta, timezone

import pytest

from commit_fables.enrichment.persona import DeveloperPersona, PersonaTrait, PersonaType
from commit_fables.narrative.formatting import (
    TimeSpan,
    describe_persona,
    format_date,
    format_duration,
    format_languages,
    format_percentage,
    join_words,
    time_of_day,
)
from commit_fables.stats import LanguageShare


class TestFormatDuration:
    """Tests for human duration text."""

    @pytest.mark.parametrize(
        "delta,expected",
        [
            (timedelta(seconds=30), "less than a minute"),
            (timedelta(minutes=1), "1 minute"),
            (timedelta(hours=5), "5 hours"),
            (timedelta(hours=2, minutes=30), "2 hours and 30 minutes"),
            (timedelta(hours=7, minutes=30), "7 hours"),
            (timedelta(days=1), "1 day"),
            (timedelta(days=4, hours=3), "4 days"),
            (timedelta(days=102), "3 months and 12 days"),
            (timedelta(days=400), "1 year, 1 month and 5 days"),
            (timedelta(days=730), "2 years"),
        ],
    )
    def test_format(self, delta, expected):
        assert format_duration(delta) == expected


class TestTimeOfDay:
    @pytest.mark.parametrize(
        "hour,expected",
        [(0, "night"), (5, "night"), (6, "morning"), (11, "morning"),
         (12, "afternoon"), (16, "afternoon"), (17, "evening"), (21, "evening"), (22, "night")],
    )
    def test_buckets(self, hour, expected):
        assert time_of_day(hour) == expected


class TestSmallHelpers:
    def test_join_words(self):
        assert join_words([]) == ""
        assert join_words(["a"]) == "a"
        assert join_words(["a", "b"]) == "a and b"
        assert join_words(["a", "b", "c"]) == "a, b and c"

    def test_format_date(self):
        assert format_date(datetime(2024, 1, 5, 23, 0, tzinfo=timezone.utc)) == "January 5, 2024"

    def test_format_percentage(self):
        assert format_percentage(0.8352) == "84%"
        assert format_percentage(1.0) == "100%"

    def test_format_languages(self):
        shares = [LanguageShare("Python", 60.0), LanguageShare("Go", 40.0)]
        assert format_languages(shares) == "Python (60%) and Go (40%)"

    def test_time_span_days(self):
        span = TimeSpan(
            datetime(2024, 1, 1, 23, 0, tzinfo=timezone.utc),
            datetime(2024, 1, 5, 23, 0, tzinfo=timezone.utc),
        )
        assert span.days == 5
        assert span.duration == timedelta(days=4)


class TestDescribePersona:
    """Tests for the shared persona phrase."""

    def test_with_traits(self):
        persona = DeveloperPersona(
            PersonaType.NIGHT_OWL, 1.0, (PersonaTrait.CONSISTENT, PersonaTrait.DEDICATED)
        )
        assert describe_persona(persona) == "a consistent and dedicated night owl"

    def test_article_for_vowel(self):
        assert describe_persona(DeveloperPersona(PersonaType.EARLY_BIRD, 0.6)) == "an early bird"
        persona = DeveloperPersona(PersonaType.STEADY_CODER, 0.6, (PersonaTrait.ADAPTABLE,))
        assert describe_persona(persona) == "an adaptable steady coder"

    def test_confidence_does_not_change_phrase(self):
        low = DeveloperPersona(PersonaType.WEEKEND_WARRIOR, 0.51)
        high = DeveloperPersona(PersonaType.WEEKEND_WARRIOR, 0.99)
        assert describe_persona(low) == describe_persona(high) == "a weekend warrior"
