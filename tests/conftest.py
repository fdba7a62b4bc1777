"""Shared fixtures: commit factories and the canonical scenario datasets."""

from datetime import datetime, timedelta, timezone

import pytest

from commit_fables.commits import CommitEvent


def _make_commit(cid, when, message="feat: work", author="dana", **kwargs):
    return CommitEvent(id=cid, message=message, author=author, timestamp=when, **kwargs)


@pytest.fixture
def make_commit():
    """Factory for CommitEvents with sensible defaults."""
    return _make_commit


@pytest.fixture
def night_owl_commits():
    """Five feature commits at 23:00 UTC on consecutive weekdays."""
    return [
        _make_commit(
            f"owl-{day}",
            datetime(2024, 1, day, 23, 0, tzinfo=timezone.utc),
            message=f"feat: auth step {day}",
            additions=100,
            deletions=10,
            files_changed=3,
            language_hint="TypeScript",
        )
        for day in range(1, 6)
    ]


@pytest.fixture
def bugfix_marathon():
    """Twelve fixes inside two hours on a Tuesday afternoon."""
    start = datetime(2024, 1, 2, 14, 0, tzinfo=timezone.utc)
    return [
        _make_commit(
            f"fix-{i}",
            start + timedelta(minutes=10 * i),
            message=f"fix: crash #{i}",
            additions=5,
            deletions=3,
            files_changed=1,
        )
        for i in range(12)
    ]


@pytest.fixture
def weekend_commits():
    """Three Saturday commits and one Tuesday commit."""
    return [
        _make_commit("sat-1", datetime(2024, 1, 6, 10, 0, tzinfo=timezone.utc)),
        _make_commit("sat-2", datetime(2024, 1, 6, 11, 0, tzinfo=timezone.utc)),
        _make_commit("sat-3", datetime(2024, 1, 6, 15, 0, tzinfo=timezone.utc)),
        _make_commit("tue-1", datetime(2024, 1, 9, 10, 0, tzinfo=timezone.utc)),
    ]


@pytest.fixture
def mixed_history():
    """Forty commits with varied types and gaps, for invariant checks."""
    prefixes = ["feat", "fix", "docs", "refactor", "test", "chore", "style", "perf"]
    start = datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc)
    commits = []
    offset = timedelta()
    for i in range(40):
        # Mostly short gaps with an occasional multi-day break
        offset += timedelta(hours=70) if i % 9 == 8 else timedelta(minutes=25 + (i * 37) % 180)
        prefix = prefixes[(i * 3 + i // 4) % len(prefixes)]
        commits.append(
            _make_commit(
                f"mix-{i:02d}",
                start + offset,
                message=f"{prefix}: change {i}",
                additions=(i * 13) % 200,
                deletions=(i * 7) % 50,
                files_changed=1 + i % 4,
            )
        )
    return commits
