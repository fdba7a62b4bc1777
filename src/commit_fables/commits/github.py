"""Parse commits as returned by the GitHub REST API (``GET /repos/{o}/{r}/commits/{sha}``)."""

from __future__ import annotations

from typing import Any, Mapping

from ..errors import MalformedCommitError
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


def looks_like_github(record: Mapping[str, Any]) -> bool:
    return isinstance(record.get("commit"), Mapping)


def parse_github_commit(record: Mapping[str, Any]) -> CommitEvent:
    """Build a CommitEvent from a GitHub commit payload.

    The author date is preferred over the committer date, as GitHub's own
    UI does. ``stats`` and ``files`` are only present on single-commit
    responses; list responses yield zero line counts.
    """
    commit_id = require_id(record.get("sha"))
    commit = record["commit"]

    author = commit.get("author") or {}
    committer = commit.get("committer") or {}
    if not isinstance(author, Mapping) or not isinstance(committer, Mapping):
        raise MalformedCommitError(
            f"Commit {commit_id} has a malformed author block", {"id": commit_id}
        )

    timestamp = require_timestamp(author.get("date") or committer.get("date"), commit_id)
    message = require_message(commit.get("message"), commit_id)

    stats = record.get("stats") or {}
    if not isinstance(stats, Mapping):
        raise MalformedCommitError(f"Commit {commit_id} has malformed stats", {"id": commit_id})

    files = record.get("files") or []
    if not isinstance(files, list):
        raise MalformedCommitError(f"Commit {commit_id} has malformed files", {"id": commit_id})
    paths = [
        f.get("filename")
        for f in files
        if isinstance(f, Mapping) and isinstance(f.get("filename"), str)
    ]

    return CommitEvent(
        id=commit_id,
        message=message,
        author=author_name(author.get("name")),
        timestamp=timestamp,
        additions=count_field(stats.get("additions"), "additions", commit_id),
        deletions=count_field(stats.get("deletions"), "deletions", commit_id),
        files_changed=len(files),
        language_hint=language_field(record.get("language")) or detect_language(paths),
    )
