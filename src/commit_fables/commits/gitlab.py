"""Parse commits as returned by the GitLab REST API (``GET /projects/:id/repository/commits``)."""

from __future__ import annotations

from typing import Any, Mapping

from ..errors import MalformedCommitError
from .base import (
    CommitEvent,
    author_name,
    count_field,
    language_field,
    require_id,
    require_message,
    require_timestamp,
)


def looks_like_gitlab(record: Mapping[str, Any]) -> bool:
    return "author_name" in record and (
        "authored_date" in record or "created_at" in record
    )


def parse_gitlab_commit(record: Mapping[str, Any]) -> CommitEvent:
    """Build a CommitEvent from a GitLab commit payload (``with_stats=true``)."""
    commit_id = require_id(record.get("id"))
    timestamp = require_timestamp(
        record.get("authored_date") or record.get("created_at"), commit_id
    )

    stats = record.get("stats") or {}
    if not isinstance(stats, Mapping):
        raise MalformedCommitError(f"Commit {commit_id} has malformed stats", {"id": commit_id})

    return CommitEvent(
        id=commit_id,
        message=require_message(record.get("message", record.get("title")), commit_id),
        author=author_name(record.get("author_name")),
        timestamp=timestamp,
        additions=count_field(stats.get("additions"), "additions", commit_id),
        deletions=count_field(stats.get("deletions"), "deletions", commit_id),
        files_changed=count_field(stats.get("files"), "files", commit_id),
        language_hint=language_field(record.get("language")),
    )
