"""Parse flat commit records (the product's ``CommitData`` shape).

Example::

    {"id": "a1b2c3", "message": "feat: add login", "author": "dana",
     "date": "2024-01-02T23:30:00Z", "additions": 450, "deletions": 20,
     "files": 6, "language": "TypeScript"}
"""

from __future__ import annotations

from typing import Any, Mapping

from .base import (
    CommitEvent,
    author_name,
    count_field,
    detect_language,
    language_field,
    require_id,
    require_message,
    require_timestamp,
)


def looks_like_flat(record: Mapping[str, Any]) -> bool:
    return "date" in record or "timestamp" in record


def parse_flat_commit(record: Mapping[str, Any]) -> CommitEvent:
    """Build a CommitEvent from a flat record.

    ``files`` may be a count or a list of changed paths.
    """
    commit_id = require_id(record.get("id", record.get("sha")))
    message = require_message(record.get("message"), commit_id)
    timestamp = require_timestamp(record.get("date", record.get("timestamp")), commit_id)

    files = record.get("files")
    paths: list[str] = []
    if isinstance(files, list):
        paths = [f for f in files if isinstance(f, str)]
        files_changed = len(files)
    else:
        files_changed = count_field(files, "files", commit_id)

    return CommitEvent(
        id=commit_id,
        message=message,
        author=author_name(record.get("author")),
        timestamp=timestamp,
        additions=count_field(record.get("additions"), "additions", commit_id),
        deletions=count_field(record.get("deletions"), "deletions", commit_id),
        files_changed=files_changed,
        language_hint=language_field(record.get("language")) or detect_language(paths),
    )
