"""Turn raw commit records of any supported shape into sorted CommitEvents."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import timezone
from typing import Any, Callable, Iterable, Mapping

from loguru import logger

from ..errors import MalformedCommitError
from .base import CommitEvent
from .flat import looks_like_flat, parse_flat_commit
from .github import looks_like_github, parse_github_commit
from .gitlab import looks_like_gitlab, parse_gitlab_commit

# Checked in order; the first matching shape parses the record
RECORD_PARSERS: list[tuple[str, Callable[[Mapping[str, Any]], bool], Callable[[Mapping[str, Any]], CommitEvent]]] = [
    ("github", looks_like_github, parse_github_commit),
    ("gitlab", looks_like_gitlab, parse_gitlab_commit),
    ("flat", looks_like_flat, parse_flat_commit),
]


@dataclass(frozen=True)
class NormalizedCommits:
    """Valid commits in chronological order plus one diagnostic per skipped record."""

    commits: tuple[CommitEvent, ...] = ()
    diagnostics: tuple[str, ...] = field(default_factory=tuple)

    @property
    def skipped(self) -> int:
        return len(self.diagnostics)


def normalize_record(record: Any) -> CommitEvent:
    """Normalize a single record, raising MalformedCommitError if it cannot be."""
    if isinstance(record, CommitEvent):
        return replace(record, timestamp=record.timestamp.astimezone(timezone.utc))

    if not isinstance(record, Mapping):
        raise MalformedCommitError(
            f"Commit record must be a mapping, got {type(record).__name__}"
        )

    for _name, matches, parse in RECORD_PARSERS:
        if matches(record):
            try:
                return parse(record)
            except (KeyError, TypeError, AttributeError) as e:
                raise MalformedCommitError(f"Commit record has the wrong shape: {e}") from e

    raise MalformedCommitError(
        "Commit record matches no known shape",
        {"keys": sorted(str(k) for k in record)},
    )


def normalize_commits(records: Iterable[Any] | None) -> NormalizedCommits:
    """Validate raw records and return them as CommitEvents sorted by time.

    Malformed or duplicate records are skipped; each skip is logged and
    recorded in ``diagnostics``. An empty result is valid.
    """
    commits: list[CommitEvent] = []
    diagnostics: list[str] = []
    seen_ids: set[str] = set()

    for index, record in enumerate(records or []):
        try:
            commit = normalize_record(record)
        except MalformedCommitError as e:
            diagnostic = f"record {index}: {e}"
            logger.warning(f"Skipping commit {diagnostic}")
            diagnostics.append(diagnostic)
            continue

        if commit.id in seen_ids:
            diagnostic = f"record {index}: duplicate commit id {commit.id}"
            logger.warning(f"Skipping commit {diagnostic}")
            diagnostics.append(diagnostic)
            continue

        seen_ids.add(commit.id)
        commits.append(commit)

    # sorted() is stable, so equal timestamps keep input order
    commits = sorted(commits, key=lambda c: c.timestamp)

    logger.debug(f"Normalized {len(commits)} commits ({len(diagnostics)} skipped)")

    return NormalizedCommits(commits=tuple(commits), diagnostics=tuple(diagnostics))
