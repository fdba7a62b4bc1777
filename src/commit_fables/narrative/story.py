"""Story assembly.

Runs the whole pipeline (normalize, classify, detect, extract, render)
and packages the result as an immutable Story.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from loguru import logger

from ..commits.normalizer import normalize_commits
from ..config import EngineConfig
from ..enrichment.achievements import Achievement, extract_achievements
from ..enrichment.patterns import CommitPattern, detect_patterns
from ..enrichment.persona import DeveloperPersona, classify_persona
from ..errors import SettingsValidationError
from ..settings import StorySettings, StoryStyle
from ..stats import RepositoryMetadata, StoryStats, aggregate_stats
from .formatting import TimeSpan, article
from .templates import get_template


@dataclass(frozen=True)
class Story:
    """The finished narrative and the facts it was rendered from."""

    id: str
    title: str
    description: str
    intro: str
    content: tuple[str, ...]
    conclusion: str
    persona: DeveloperPersona
    stats: StoryStats
    style: StoryStyle
    created_at: datetime

    settings: StorySettings | None = None
    patterns: tuple[CommitPattern, ...] = ()
    achievements: tuple[Achievement, ...] = ()
    diagnostics: tuple[str, ...] = ()

    @property
    def text(self) -> str:
        """All content blocks as one document."""
        return "\n\n".join(self.content)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "intro": self.intro,
            "content": list(self.content),
            "conclusion": self.conclusion,
            "persona": self.persona.to_dict(),
            "stats": self.stats.to_dict(),
            "style": self.style.value,
            "created_at": self.created_at.isoformat(),
            "settings": self.settings.to_dict() if self.settings else None,
            "patterns": [p.to_dict() for p in self.patterns],
            "achievements": [a.to_dict() for a in self.achievements],
            "diagnostics": list(self.diagnostics),
        }


def story_title(style: StoryStyle, persona: DeveloperPersona, repository: RepositoryMetadata | None) -> str:
    """Title like "The Epic of the Night Owl: my-repo"."""
    title = f"The {style.value.title()} of the {persona.display_name}"
    if repository:
        title = f"{title}: {repository.name}"
    return title


def story_description(style: StoryStyle, stats: StoryStats) -> str:
    if not stats.total_commits:
        return f"{article(style.value).title()} {style.value} story of a quiet period with no commits."

    days = (stats.period_end.date() - stats.period_start.date()).days + 1
    commits = "commit" if stats.total_commits == 1 else "commits"
    day_word = "day" if days == 1 else "days"
    return f"{article(style.value).title()} {style.value} story spanning {stats.total_commits} {commits} over {days} {day_word}."


def story_id(
    commit_ids: Iterable[str], settings: StorySettings, content: Iterable[str]
) -> str:
    """Deterministic id derived from inputs and rendered content."""
    digest = hashlib.sha1()
    payload = {
        "commits": list(commit_ids),
        "settings": settings.to_dict(),
        "content": list(content),
    }
    digest.update(json.dumps(payload, sort_keys=True).encode("utf-8"))
    return digest.hexdigest()[:16]


def assemble_story(
    commits: Iterable[Any] | None,
    settings: StorySettings | Mapping[str, Any],
    repository: RepositoryMetadata | Mapping[str, Any] | None = None,
    *,
    config: EngineConfig | None = None,
    created_at: datetime | None = None,
) -> Story:
    """Generate a Story from raw commit records.

    Args:
        commits: Raw records (any supported shape) or CommitEvents
        settings: StorySettings or a request-body mapping
        repository: Optional metadata for the title and language fallback
        config: Engine thresholds; defaults to EngineConfig()
        created_at: Timestamp to stamp on the story; defaults to now (UTC)

    Returns:
        The assembled Story

    Raises:
        SettingsValidationError: if settings are outside the allowed values
    """
    if isinstance(settings, Mapping):
        settings = StorySettings.from_dict(settings)
    elif not isinstance(settings, StorySettings):
        raise SettingsValidationError(
            f"settings must be StorySettings or a mapping, got {type(settings).__name__}"
        )
    if isinstance(repository, Mapping):
        repository = RepositoryMetadata.from_dict(repository)

    config = config or EngineConfig()
    template = get_template(settings.style, settings, config.tz)

    normalized = normalize_commits(commits)
    events = normalized.commits

    persona = classify_persona(events, config)
    patterns = detect_patterns(events, config)
    achievements = extract_achievements(patterns, config)
    stats = aggregate_stats(events, repository, config)

    if events:
        intro = template.intro(len(events), persona, stats.top_languages)
        blocks = [intro]
        by_pattern: dict[str, list[Achievement]] = {}
        for achievement in achievements:
            by_pattern.setdefault(achievement.source_pattern_id, []).append(achievement)
        for pattern in patterns:
            blocks.append(template.pattern(pattern))
            for achievement in by_pattern.get(pattern.id, []):
                blocks.append(template.achievement(achievement.description))
        conclusion = template.conclusion(TimeSpan(stats.period_start, stats.period_end), persona)
        blocks.append(conclusion)
    else:
        intro = template.quiet_period()
        conclusion = template.quiet_conclusion()
        blocks = [intro, conclusion]

    content = tuple(blocks)
    logger.debug(
        f"Assembled {settings.style.value} story: {len(events)} commits, "
        f"{len(patterns)} patterns, {len(achievements)} achievements"
    )

    return Story(
        id=story_id((c.id for c in events), settings, content),
        title=story_title(settings.style, persona, repository),
        description=story_description(settings.style, stats),
        intro=intro,
        content=content,
        conclusion=conclusion,
        persona=persona,
        stats=stats,
        style=settings.style,
        created_at=created_at or datetime.now(timezone.utc),
        settings=settings,
        patterns=tuple(patterns),
        achievements=tuple(achievements),
        diagnostics=normalized.diagnostics,
    )
