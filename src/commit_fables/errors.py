"""Typed exception hierarchy for commit-fables.

Hierarchy
---------
CommitFablesError (base)
├── MalformedCommitError     – a raw commit record could not be normalized
├── SettingsValidationError  – caller passed settings outside the closed sets
├── ConfigError              – engine configuration file/values are invalid
└── PatternInvariantError    – pattern detection broke the partition invariant

``MalformedCommitError`` never escapes the normalizer: it is turned into a
diagnostic and the record is skipped. The other three propagate.
"""

from __future__ import annotations

from typing import Any


class CommitFablesError(Exception):
    """Base exception for commit-fables."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.context = context or {}


class MalformedCommitError(CommitFablesError):
    """A raw commit record is missing required fields or has the wrong shape."""

    pass


class SettingsValidationError(CommitFablesError, ValueError):
    """Story settings contain a value outside the allowed set."""

    pass


class ConfigError(CommitFablesError, ValueError):
    """Engine configuration could not be loaded or validated."""

    pass


class PatternInvariantError(CommitFablesError, AssertionError):
    """Detected patterns do not partition the normalized commits."""

    pass
