"""Commit pattern detection.

Splits a chronological commit stream into patterns: runs of commits that
belong together in time and share a dominant conventional-commit type.
Each pattern gets a significance score in [0, 1].
"""

from __future__ import annotations

import math
import re
from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Sequence

from loguru import logger

from ..config import EngineConfig
from ..errors import PatternInvariantError

if TYPE_CHECKING:
    from ..commits.base import CommitEvent


class CommitPatternType(str, Enum):
    """Closed set of commit/pattern types."""

    FEATURE = "feature"
    REFACTOR = "refactor"
    BUGFIX = "bugfix"
    DOCS = "docs"
    TEST = "test"
    CHORE = "chore"
    STYLE = "style"
    PERF = "perf"
    REVERT = "revert"
    MERGE = "merge"
    RELEASE = "release"


# Conventional-commit prefix -> type
PREFIX_TYPES: dict[str, CommitPatternType] = {
    "feat": CommitPatternType.FEATURE,
    "feature": CommitPatternType.FEATURE,
    "fix": CommitPatternType.BUGFIX,
    "bugfix": CommitPatternType.BUGFIX,
    "hotfix": CommitPatternType.BUGFIX,
    "refactor": CommitPatternType.REFACTOR,
    "docs": CommitPatternType.DOCS,
    "doc": CommitPatternType.DOCS,
    "test": CommitPatternType.TEST,
    "tests": CommitPatternType.TEST,
    "chore": CommitPatternType.CHORE,
    "build": CommitPatternType.CHORE,
    "ci": CommitPatternType.CHORE,
    "style": CommitPatternType.STYLE,
    "perf": CommitPatternType.PERF,
    "revert": CommitPatternType.REVERT,
    "release": CommitPatternType.RELEASE,
}

# "feat(api)!: ..." -> prefix "feat"
PREFIX_RE = re.compile(r"^(?P<prefix>[a-zA-Z]+)(?:\([^)]*\))?!?\s*:")
# "v1.2.3", "1.2.3-rc.1", "Release 1.2", "Bump version to 2.0.0"
SEMVER_RE = re.compile(
    r"^(?:(?:release|version|bump(?: version)?(?: to)?)\s+)?v?\d+\.\d+(?:\.\d+)?(?:[-+][0-9A-Za-z.-]+)?\b",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class CommitPattern:
    """A chronological cluster of commits treated as one narrative unit."""

    id: str
    type: CommitPatternType
    commit_ids: tuple[str, ...]
    start_time: datetime
    end_time: datetime
    significance: float
    description: str
    additions: int = 0
    deletions: int = 0
    files_changed: int = 0
    # Commits of the dominant type; None means all of them
    type_count: int | None = None

    @property
    def size(self) -> int:
        return len(self.commit_ids)

    @property
    def elapsed_hours(self) -> float:
        return (self.end_time - self.start_time).total_seconds() / 3600

    @property
    def dominant_count(self) -> int:
        return self.size if self.type_count is None else self.type_count

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type.value,
            "commit_ids": list(self.commit_ids),
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "significance": round(self.significance, 4),
            "description": self.description,
            "additions": self.additions,
            "deletions": self.deletions,
            "files_changed": self.files_changed,
            "type_count": self.dominant_count,
        }


def parse_commit_type(message: str) -> CommitPatternType:
    """Classify a commit message by its conventional-commit prefix.

    Falls back to chore when nothing is recognizable.
    """
    subject = message.strip().split("\n", 1)[0].strip() if message else ""
    if not subject:
        return CommitPatternType.CHORE

    if subject.startswith("Merge"):
        return CommitPatternType.MERGE
    if subject.startswith('Revert "'):
        return CommitPatternType.REVERT

    match = PREFIX_RE.match(subject)
    if match:
        prefix_type = PREFIX_TYPES.get(match.group("prefix").lower())
        if prefix_type:
            return prefix_type

    if SEMVER_RE.match(subject):
        return CommitPatternType.RELEASE

    return CommitPatternType.CHORE


def dominant_type(types: Sequence[CommitPatternType]) -> CommitPatternType:
    """Majority type; ties go to the type of the earliest commit."""
    if not types:
        raise PatternInvariantError("Cannot take the dominant type of an empty cluster")

    counts = Counter(types)
    top = max(counts.values())
    return next(commit_type for commit_type in types if counts[commit_type] == top)


def compute_significance(
    pattern_type: CommitPatternType,
    size: int,
    elapsed_hours: float,
    config: EngineConfig,
) -> float:
    """Score a cluster by size, density and type importance.

    Saturates into [0, 1] via ``1 - exp(-k * score)``.
    """
    density = size / max(elapsed_hours, 1.0)
    score = config.type_weight(pattern_type.value) * (
        config.size_weight * size
        + config.density_weight * min(density, config.density_cap)
    )
    significance = 1.0 - math.exp(-config.significance_k * score)
    return min(max(significance, 0.0), 1.0)


def format_span(hours: float) -> str:
    """Short, style-neutral rendering of a pattern's elapsed time."""
    if hours < 1:
        return "less than an hour"
    if hours < 48:
        whole = round(hours)
        return f"{whole} hour" if whole == 1 else f"{whole} hours"
    days = round(hours / 24)
    return f"{days} days"


def describe_pattern(
    pattern_type: CommitPatternType, size: int, elapsed_hours: float, type_count: int | None = None
) -> str:
    """Build a summary like "7 feature commits over 3 hours".

    Mixed clusters only credit the dominant type with its own commits,
    e.g. "4 commits (2 feature) over 1 hour".
    """
    if size == 1:
        return f"1 {pattern_type.value} commit"
    if type_count is None or type_count == size:
        summary = f"{size} {pattern_type.value} commits"
    else:
        summary = f"{size} commits ({type_count} {pattern_type.value})"
    return f"{summary} over {format_span(elapsed_hours)}"


def build_pattern(
    index: int, commits: Sequence[CommitEvent], types: Sequence[CommitPatternType], config: EngineConfig
) -> CommitPattern:
    pattern_type = dominant_type(types)
    type_count = types.count(pattern_type)
    start_time = commits[0].timestamp
    end_time = commits[-1].timestamp
    elapsed_hours = (end_time - start_time).total_seconds() / 3600

    return CommitPattern(
        id=f"pattern-{index}",
        type=pattern_type,
        commit_ids=tuple(c.id for c in commits),
        start_time=start_time,
        end_time=end_time,
        significance=compute_significance(pattern_type, len(commits), elapsed_hours, config),
        description=describe_pattern(pattern_type, len(commits), elapsed_hours, type_count),
        additions=sum(c.additions for c in commits),
        deletions=sum(c.deletions for c in commits),
        files_changed=sum(c.files_changed for c in commits),
        type_count=type_count,
    )


def verify_partition(commits: Sequence[CommitEvent], patterns: Sequence[CommitPattern]) -> None:
    """Raise PatternInvariantError unless patterns partition the commits."""
    seen: list[str] = []
    for pattern in patterns:
        if not pattern.commit_ids:
            raise PatternInvariantError(f"{pattern.id} has no commits", {"pattern": pattern.id})
        if pattern.start_time > pattern.end_time:
            raise PatternInvariantError(
                f"{pattern.id} ends before it starts", {"pattern": pattern.id}
            )
        seen.extend(pattern.commit_ids)

    expected = [c.id for c in commits]
    if seen != expected:
        duplicates = sorted(cid for cid, n in Counter(seen).items() if n > 1)
        missing = sorted(set(expected) - set(seen))
        raise PatternInvariantError(
            "Patterns do not partition the commits",
            {"duplicates": duplicates, "missing": missing},
        )


def detect_patterns(
    commits: Sequence[CommitEvent], config: EngineConfig | None = None
) -> list[CommitPattern]:
    """Group chronologically sorted commits into patterns.

    A new pattern starts when the idle gap to the previous commit exceeds
    ``config.idle_gap_hours`` or when the next commit would flip the open
    pattern's dominant type.

    Args:
        commits: Normalized commits, oldest first
        config: Thresholds; defaults to EngineConfig()

    Returns:
        Patterns in chronological order, covering every commit exactly once
    """
    config = config or EngineConfig()
    patterns: list[CommitPattern] = []

    open_commits: list[CommitEvent] = []
    open_types: list[CommitPatternType] = []

    for commit in commits:
        commit_type = parse_commit_type(commit.message)

        if open_commits:
            gap_hours = (commit.timestamp - open_commits[-1].timestamp).total_seconds() / 3600
            flips = dominant_type(open_types + [commit_type]) != dominant_type(open_types)
            if gap_hours > config.idle_gap_hours or flips:
                patterns.append(build_pattern(len(patterns) + 1, open_commits, open_types, config))
                open_commits, open_types = [], []

        open_commits.append(commit)
        open_types.append(commit_type)

    if open_commits:
        patterns.append(build_pattern(len(patterns) + 1, open_commits, open_types, config))

    verify_partition(commits, patterns)
    logger.debug(f"Detected {len(patterns)} patterns from {len(commits)} commits")

    return patterns
