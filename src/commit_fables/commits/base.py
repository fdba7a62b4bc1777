"""Base commit model and utilities shared across record parsers."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from pathlib import PurePosixPath
from typing import Any

from ..errors import MalformedCommitError

UNKNOWN_AUTHOR = "Unknown Developer"

# File extension -> language, used when a record carries no explicit language
EXTENSION_LANGUAGES: dict[str, str] = {
    ".py": "Python",
    ".pyi": "Python",
    ".ts": "TypeScript",
    ".tsx": "TypeScript",
    ".js": "JavaScript",
    ".jsx": "JavaScript",
    ".mjs": "JavaScript",
    ".go": "Go",
    ".rs": "Rust",
    ".java": "Java",
    ".kt": "Kotlin",
    ".rb": "Ruby",
    ".php": "PHP",
    ".cs": "C#",
    ".c": "C",
    ".h": "C",
    ".cpp": "C++",
    ".cc": "C++",
    ".hpp": "C++",
    ".swift": "Swift",
    ".scala": "Scala",
    ".dart": "Dart",
    ".css": "CSS",
    ".scss": "SCSS",
    ".html": "HTML",
    ".vue": "Vue",
    ".svelte": "Svelte",
    ".sh": "Shell",
    ".sql": "SQL",
    ".md": "Markdown",
}


@dataclass(frozen=True)
class CommitEvent:
    """Uniform commit model every record parser must produce.

    Timestamps are always timezone-aware UTC. Line and file counts are
    never negative.
    """

    id: str
    message: str
    author: str
    timestamp: datetime
    additions: int = 0
    deletions: int = 0
    files_changed: int = 0
    language_hint: str | None = None

    def __post_init__(self):
        if not self.id:
            raise MalformedCommitError("Commit id is empty")
        if self.timestamp.tzinfo is None:
            raise MalformedCommitError(
                f"Commit {self.id} has a naive timestamp", {"id": self.id}
            )
        for name in ("additions", "deletions", "files_changed"):
            if getattr(self, name) < 0:
                raise MalformedCommitError(
                    f"Commit {self.id} has negative {name}", {"id": self.id}
                )

    @property
    def subject(self) -> str:
        """Return the first line of the commit message."""
        return self.message.strip().split("\n", 1)[0].strip()

    def local_time(self, tz: tzinfo | None = None) -> datetime:
        return self.timestamp.astimezone(tz or timezone.utc)

    def hour_of_day(self, tz: tzinfo | None = None) -> int:
        """Return the hour (0-23) the commit was made in the given zone."""
        return self.local_time(tz).hour

    def day_of_week(self, tz: tzinfo | None = None) -> int:
        """Return day of week (0=Monday, 6=Sunday)."""
        return self.local_time(tz).weekday()

    def is_weekend(self, tz: tzinfo | None = None) -> bool:
        return self.day_of_week(tz) >= 5

    @property
    def date_str(self) -> str:
        """Return the UTC date as YYYY-MM-DD string."""
        return self.timestamp.strftime("%Y-%m-%d")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "message": self.message,
            "author": self.author,
            "timestamp": self.timestamp.isoformat(),
            "additions": self.additions,
            "deletions": self.deletions,
            "files_changed": self.files_changed,
            "language_hint": self.language_hint,
        }


def parse_iso_timestamp(ts: Any) -> datetime | None:
    """Parse an ISO8601 string or datetime into an aware UTC datetime.

    Naive values are taken as UTC.
    """
    if isinstance(ts, datetime):
        parsed = ts
    elif isinstance(ts, str) and ts.strip():
        try:
            # Handle Z suffix
            parsed = datetime.fromisoformat(ts.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def require_timestamp(value: Any, record_id: str) -> datetime:
    timestamp = parse_iso_timestamp(value)
    if timestamp is None:
        raise MalformedCommitError(
            f"Commit {record_id} has no parseable date: {value!r}",
            {"id": record_id, "date": value},
        )
    return timestamp


def require_id(value: Any) -> str:
    if isinstance(value, int) and not isinstance(value, bool):
        value = str(value)
    if not isinstance(value, str) or not value.strip():
        raise MalformedCommitError(f"Commit record has no usable id: {value!r}")
    return value.strip()


def require_message(value: Any, record_id: str) -> str:
    if not isinstance(value, str):
        raise MalformedCommitError(
            f"Commit {record_id} has no message", {"id": record_id}
        )
    return value


def count_field(value: Any, name: str, record_id: str) -> int:
    """Validate a non-negative integer stat, treating missing as 0."""
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedCommitError(
            f"Commit {record_id} has non-integer {name}: {value!r}",
            {"id": record_id, name: value},
        )
    if value < 0:
        raise MalformedCommitError(
            f"Commit {record_id} has negative {name}: {value}",
            {"id": record_id, name: value},
        )
    return value


def author_name(value: Any) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return UNKNOWN_AUTHOR


def detect_language(paths: list[str]) -> str | None:
    """Guess the dominant language from changed file paths.

    Most frequent known extension wins; ties go to the first seen.
    """
    languages = [
        EXTENSION_LANGUAGES[suffix]
        for suffix in (PurePosixPath(p).suffix.lower() for p in paths if isinstance(p, str))
        if suffix in EXTENSION_LANGUAGES
    ]
    if not languages:
        return None

    # Counter preserves insertion order, so most_common breaks ties by first seen
    return Counter(languages).most_common(1)[0][0]


def language_field(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None
