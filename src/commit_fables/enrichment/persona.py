"""Developer persona classifier.

Infers a behavioral archetype from when commits were made:
- Night Owl: mostly commits between 22:00 and 06:00
- Early Bird: mostly commits between 06:00 and 12:00
- Steady Coder: mostly commits from 12:00 onwards (evenings included)
- Weekend Warrior: more than half of all commits on Saturday/Sunday
"""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass
from datetime import tzinfo
from enum import Enum
from typing import TYPE_CHECKING, Sequence

from ..config import EngineConfig

if TYPE_CHECKING:
    from ..commits.base import CommitEvent


class PersonaType(str, Enum):
    """Closed set of developer personas."""

    NIGHT_OWL = "night-owl"
    EARLY_BIRD = "early-bird"
    STEADY_CODER = "steady-coder"
    WEEKEND_WARRIOR = "weekend-warrior"


class PersonaTrait(str, Enum):
    """Secondary signals layered on top of the persona type."""

    CONSISTENT = "consistent"
    DEDICATED = "dedicated"
    ADAPTABLE = "adaptable"
    BALANCED = "balanced"


# Display info for each persona: (display_name, emoji)
PERSONA_DISPLAY: dict[PersonaType, tuple[str, str]] = {
    PersonaType.NIGHT_OWL: ("Night Owl", "🦉"),
    PersonaType.EARLY_BIRD: ("Early Bird", "🌅"),
    PersonaType.STEADY_CODER: ("Steady Coder", "⌨️"),
    PersonaType.WEEKEND_WARRIOR: ("Weekend Warrior", "⚔️"),
}

# Order used to break plurality ties between hour bands
HOUR_BANDS = (PersonaType.NIGHT_OWL, PersonaType.EARLY_BIRD, PersonaType.STEADY_CODER)


@dataclass(frozen=True)
class DeveloperPersona:
    """Inferred persona with how strongly the data supports it."""

    type: PersonaType
    confidence: float
    traits: tuple[PersonaTrait, ...] = ()

    @property
    def display_name(self) -> str:
        return PERSONA_DISPLAY[self.type][0]

    @property
    def emoji(self) -> str:
        return PERSONA_DISPLAY[self.type][1]

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "confidence": round(self.confidence, 4),
            "traits": [trait.value for trait in self.traits],
        }


NEUTRAL_PERSONA = DeveloperPersona(type=PersonaType.STEADY_CODER, confidence=0.0, traits=())


def hour_band(hour: int) -> PersonaType:
    """Map an hour (0-23) to its persona band."""
    if hour >= 22 or hour < 6:
        return PersonaType.NIGHT_OWL
    if hour < 12:
        return PersonaType.EARLY_BIRD
    # 17:00-22:00 has no persona of its own and counts as steady
    return PersonaType.STEADY_CODER


def circular_hour_stddev(hours: Sequence[float]) -> float:
    """Circular standard deviation of clock hours, in hours.

    Treats the clock as a circle so 23:30 and 00:30 are one hour apart.
    """
    if not hours:
        return 0.0

    angles = [h / 24 * 2 * math.pi for h in hours]
    mean_cos = sum(math.cos(a) for a in angles) / len(angles)
    mean_sin = sum(math.sin(a) for a in angles) / len(angles)
    resultant = math.hypot(mean_cos, mean_sin)
    if resultant >= 1.0:
        return 0.0
    if resultant <= 0.0:
        return math.inf
    return math.sqrt(-2 * math.log(resultant)) * 24 / (2 * math.pi)


def derive_traits(
    commits: Sequence[CommitEvent], config: EngineConfig, tz: tzinfo
) -> tuple[PersonaTrait, ...]:
    """Derive persona traits from secondary timing signals.

    Returns traits in PersonaTrait declaration order.
    """
    if not commits:
        return ()

    traits: list[PersonaTrait] = []
    local_times = [c.local_time(tz) for c in commits]

    # Consistent: commits cluster around the same time of day
    hours = [t.hour + t.minute / 60 for t in local_times]
    if len(hours) >= 2 and circular_hour_stddev(hours) <= config.consistent_hour_stddev:
        traits.append(PersonaTrait.CONSISTENT)

    # Dedicated: lots of commits packed into a short span
    span_days = (local_times[-1].date() - local_times[0].date()).days + 1
    if (
        len(commits) >= config.dedicated_min_commits
        and len(commits) / span_days >= config.dedicated_commits_per_day
    ):
        traits.append(PersonaTrait.DEDICATED)

    # Adaptable: active across many days of the week
    weekdays = {t.weekday() for t in local_times}
    if len(weekdays) >= config.adaptable_min_weekdays:
        traits.append(PersonaTrait.ADAPTABLE)

    # Balanced: weekday/weekend split close to even
    weekend_share = sum(1 for t in local_times if t.weekday() >= 5) / len(local_times)
    if abs(weekend_share - 0.5) <= config.balanced_weekend_tolerance:
        traits.append(PersonaTrait.BALANCED)

    return tuple(traits)


def classify_persona(
    commits: Sequence[CommitEvent], config: EngineConfig | None = None
) -> DeveloperPersona:
    """Classify the developer persona from chronologically sorted commits.

    Args:
        commits: Normalized commits, oldest first
        config: Thresholds; defaults to EngineConfig()

    Returns:
        DeveloperPersona; the neutral steady-coder persona for no commits
    """
    if not commits:
        return NEUTRAL_PERSONA

    config = config or EngineConfig()
    tz = config.tz
    total = len(commits)

    traits = derive_traits(commits, config, tz)

    weekend_count = sum(1 for c in commits if c.is_weekend(tz))
    if weekend_count / total > 0.5:
        return DeveloperPersona(
            type=PersonaType.WEEKEND_WARRIOR,
            confidence=weekend_count / total,
            traits=traits,
        )

    band_counts = Counter(hour_band(c.hour_of_day(tz)) for c in commits)
    best = max(HOUR_BANDS, key=lambda band: band_counts.get(band, 0))

    return DeveloperPersona(
        type=best,
        confidence=band_counts[best] / total,
        traits=traits,
    )
