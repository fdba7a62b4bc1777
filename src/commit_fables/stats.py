"""Stats aggregation for stories."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Mapping, Sequence

from .commits.base import CommitEvent
from .config import EngineConfig


@dataclass(frozen=True)
class LanguageShare:
    """Share of activity attributed to one language."""

    name: str
    percentage: float  # 0-100

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "percentage": self.percentage}


@dataclass(frozen=True)
class RepositoryMetadata:
    """Repository facts supplied by the VCS client, used for titles and languages."""

    name: str
    owner: str | None = None
    url: str | None = None
    description: str | None = None
    # Language -> bytes of code, as GitHub's languages endpoint reports it
    languages: Mapping[str, int] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RepositoryMetadata:
        languages = data.get("languages") or {}
        if isinstance(languages, list):
            # A plain list carries no sizes; weight them equally
            languages = {name: 1 for name in languages if isinstance(name, str)}
        elif not isinstance(languages, Mapping):
            languages = {}
        return cls(
            name=str(data.get("name") or "repository"),
            owner=data.get("owner"),
            url=data.get("url") or data.get("html_url"),
            description=data.get("description"),
            languages={
                str(k): v
                for k, v in languages.items()
                if isinstance(v, (int, float)) and not isinstance(v, bool) and v > 0
            },
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "owner": self.owner,
            "url": self.url,
            "description": self.description,
            "languages": dict(self.languages),
        }


@dataclass(frozen=True)
class StoryStats:
    """Aggregated statistics for a story."""

    total_commits: int = 0
    period_start: datetime | None = None
    period_end: datetime | None = None
    top_languages: tuple[LanguageShare, ...] = ()

    total_additions: int = 0
    total_deletions: int = 0
    total_files_changed: int = 0

    active_days: int = 0
    longest_streak_days: int = 0
    contributors: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "total_commits": self.total_commits,
            "period_start": self.period_start.isoformat() if self.period_start else None,
            "period_end": self.period_end.isoformat() if self.period_end else None,
            "top_languages": [lang.to_dict() for lang in self.top_languages],
            "total_additions": self.total_additions,
            "total_deletions": self.total_deletions,
            "total_files_changed": self.total_files_changed,
            "active_days": self.active_days,
            "longest_streak_days": self.longest_streak_days,
            "contributors": list(self.contributors),
        }


def compute_streaks(active_dates: Sequence[date]) -> tuple[int, int]:
    """Compute streak statistics from the days that saw commits.

    Correctly handles gaps between active days.

    Returns:
        (longest_streak, active_days)
    """
    date_objects = sorted(set(active_dates))
    if not date_objects:
        return 0, 0

    longest_streak = 1
    temp_streak = 1

    for i in range(1, len(date_objects)):
        if (date_objects[i] - date_objects[i - 1]).days == 1:
            temp_streak += 1
            longest_streak = max(longest_streak, temp_streak)
        else:
            temp_streak = 1

    return longest_streak, len(date_objects)


def shares_from_counts(counts: Mapping[str, float], limit: int) -> list[LanguageShare]:
    """Convert raw weights to percentage shares, largest first (ties by name)."""
    total = sum(counts.values())
    if total <= 0:
        return []

    ranked = sorted(counts.items(), key=lambda x: (-x[1], x[0]))[:limit]
    return [LanguageShare(name=name, percentage=round(weight / total * 100, 1)) for name, weight in ranked]


def compute_top_languages(
    commits: Sequence[CommitEvent],
    repository: RepositoryMetadata | None = None,
    limit: int = 5,
) -> list[LanguageShare]:
    """Rank languages by share of commits carrying that language hint.

    Falls back to the repository's byte counts when no commit has a hint.
    """
    counts = Counter(c.language_hint for c in commits if c.language_hint)
    if counts:
        return shares_from_counts(counts, limit)
    if repository and repository.languages:
        return shares_from_counts(repository.languages, limit)
    return []


def aggregate_stats(
    commits: Sequence[CommitEvent],
    repository: RepositoryMetadata | None = None,
    config: EngineConfig | None = None,
) -> StoryStats:
    """Aggregate statistics from chronologically sorted commits.

    Args:
        commits: Normalized commits, oldest first
        repository: Optional metadata used as language fallback
        config: Supplies the time zone and language limit

    Returns:
        StoryStats with all computed statistics
    """
    config = config or EngineConfig()
    top_languages = tuple(
        compute_top_languages(commits, repository, config.top_languages_limit)
    )
    if not commits:
        return StoryStats(top_languages=top_languages)

    # dict keeps first-seen order
    contributors = dict.fromkeys(c.author for c in commits)
    longest_streak, active_days = compute_streaks(
        [c.local_time(config.tz).date() for c in commits]
    )

    return StoryStats(
        total_commits=len(commits),
        period_start=commits[0].timestamp,
        period_end=commits[-1].timestamp,
        top_languages=top_languages,
        total_additions=sum(c.additions for c in commits),
        total_deletions=sum(c.deletions for c in commits),
        total_files_changed=sum(c.files_changed for c in commits),
        active_days=active_days,
        longest_streak_days=longest_streak,
        contributors=tuple(contributors),
    )
