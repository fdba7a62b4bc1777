"""Achievement extraction.

Turns unusually large or significant patterns into milestone callouts.
A pattern qualifies on significance alone or on size alone.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Sequence

from ..config import EngineConfig
from .patterns import CommitPatternType

if TYPE_CHECKING:
    from .patterns import CommitPattern

# type: (title, description template); {count} is the pattern size and
# {type_count} the number of its commits that have the pattern type
ACHIEVEMENT_TEMPLATES: dict[CommitPatternType, tuple[str, str]] = {
    CommitPatternType.FEATURE: ("Feature Forge", "Shipped a major feature across {count} commits"),
    CommitPatternType.REFACTOR: ("Master Architect", "Reshaped the codebase across {type_count} refactoring commits"),
    CommitPatternType.BUGFIX: ("Bug Slayer", "Squashed bugs relentlessly across {type_count} fixes"),
    CommitPatternType.DOCS: ("Chronicler", "Documented the project across {count} commits"),
    CommitPatternType.TEST: ("Quality Guardian", "Hardened the test suite across {count} commits"),
    CommitPatternType.CHORE: ("Keeper of the Forge", "Kept the project running smoothly across {type_count} maintenance commits"),
    CommitPatternType.STYLE: ("Polisher", "Polished the code style across {count} commits"),
    CommitPatternType.PERF: ("Speed Demon", "Made things faster across {type_count} performance commits"),
    CommitPatternType.REVERT: ("Course Corrector", "Rolled back missteps across {type_count} reverts"),
    CommitPatternType.MERGE: ("Grand Unifier", "Brought branches together across {type_count} merges"),
    CommitPatternType.RELEASE: ("Launch Commander", "Cut releases across {count} commits"),
}


@dataclass(frozen=True)
class Achievement:
    """A milestone unlocked by a single pattern."""

    id: str
    title: str
    description: str
    source_pattern_id: str
    unlocked_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "source_pattern_id": self.source_pattern_id,
            "unlocked_at": self.unlocked_at.isoformat(),
        }


def qualifies(pattern: CommitPattern, config: EngineConfig) -> bool:
    return (
        pattern.significance >= config.achievement_significance
        or pattern.size >= config.achievement_min_commits
    )


def build_achievement(pattern: CommitPattern) -> Achievement:
    title, description = ACHIEVEMENT_TEMPLATES[pattern.type]
    return Achievement(
        id=f"achievement-{pattern.id}",
        title=title,
        description=description.format(count=pattern.size, type_count=pattern.dominant_count),
        source_pattern_id=pattern.id,
        unlocked_at=pattern.end_time,
    )


def extract_achievements(
    patterns: Sequence[CommitPattern], config: EngineConfig | None = None
) -> list[Achievement]:
    """Emit one Achievement per qualifying pattern, in pattern order.

    Args:
        patterns: Detected patterns
        config: Thresholds; defaults to EngineConfig()

    Returns:
        List of Achievement objects earned (possibly empty)
    """
    config = config or EngineConfig()
    return [build_achievement(p) for p in patterns if qualifies(p, config)]
