"""Commit record parsers and normalization."""

from .base import CommitEvent, parse_iso_timestamp
from .flat import parse_flat_commit
from .github import parse_github_commit
from .gitlab import parse_gitlab_commit
from .normalizer import NormalizedCommits, normalize_commits, normalize_record

__all__ = [
    "CommitEvent",
    "NormalizedCommits",
    "normalize_commits",
    "normalize_record",
    "parse_flat_commit",
    "parse_github_commit",
    "parse_gitlab_commit",
    "parse_iso_timestamp",
]
