"""Tests for commit type parsing and pattern detection."""

from datetime import datetime, timedelta, timezone

import pytest

from commit_fables.config import EngineConfig
from commit_fables.enrichment.patterns import (
    CommitPattern,
    CommitPatternType,
    compute_significance,
    describe_pattern,
    detect_patterns,
    dominant_type,
    parse_commit_type,
    verify_partition,
)
from commit_fables.errors import PatternInvariantError


class TestParseCommitType:
    """Tests for conventional-commit classification."""

    @pytest.mark.parametrize(
        "message,expected",
        [
            ("feat: add login", CommitPatternType.FEATURE),
            ("feat(api)!: drop v1 endpoints", CommitPatternType.FEATURE),
            ("fix: null pointer", CommitPatternType.BUGFIX),
            ("Fix: typo in handler", CommitPatternType.BUGFIX),
            ("hotfix(prod): restore cache", CommitPatternType.BUGFIX),
            ("refactor: split module", CommitPatternType.REFACTOR),
            ("docs: update README", CommitPatternType.DOCS),
            ("test: cover parser", CommitPatternType.TEST),
            ("chore: bump deps", CommitPatternType.CHORE),
            ("ci: cache wheels", CommitPatternType.CHORE),
            ("style: black", CommitPatternType.STYLE),
            ("perf: faster hashing", CommitPatternType.PERF),
            ("revert: feat: add login", CommitPatternType.REVERT),
            ('Revert "feat: add login"', CommitPatternType.REVERT),
            ("Merge pull request #42 from dana/login", CommitPatternType.MERGE),
            ("Merge branch 'main' into dev", CommitPatternType.MERGE),
            ("v1.2.3", CommitPatternType.RELEASE),
            ("1.0.0-rc.1", CommitPatternType.RELEASE),
            ("Release 2.0", CommitPatternType.RELEASE),
            ("release: 3.1.0", CommitPatternType.RELEASE),
            ("Bump version to 2.4.1", CommitPatternType.RELEASE),
            ("update readme", CommitPatternType.CHORE),
            ("1.5x faster startup", CommitPatternType.CHORE),
            ("wip: stuff", CommitPatternType.CHORE),
            ("", CommitPatternType.CHORE),
        ],
    )
    def test_parse(self, message, expected):
        assert parse_commit_type(message) == expected

    def test_only_subject_line_counts(self):
        assert parse_commit_type("update things\n\nfeat: hidden in body") == CommitPatternType.CHORE


class TestDominantType:
    def test_majority(self):
        types = [CommitPatternType.BUGFIX, CommitPatternType.FEATURE, CommitPatternType.FEATURE]
        assert dominant_type(types) == CommitPatternType.FEATURE

    def test_tie_goes_to_earliest(self):
        types = [CommitPatternType.BUGFIX, CommitPatternType.FEATURE]
        assert dominant_type(types) == CommitPatternType.BUGFIX

    def test_empty_raises(self):
        with pytest.raises(PatternInvariantError):
            dominant_type([])


class TestSignificance:
    """Tests for significance scoring."""

    def test_bounded(self):
        config = EngineConfig()
        for size in (1, 5, 50, 5000):
            for hours in (0.0, 0.5, 10.0, 1000.0):
                value = compute_significance(CommitPatternType.FEATURE, size, hours, config)
                assert 0.0 <= value <= 1.0

    def test_type_weight_matters(self):
        config = EngineConfig()
        feature = compute_significance(CommitPatternType.FEATURE, 5, 2.0, config)
        style = compute_significance(CommitPatternType.STYLE, 5, 2.0, config)
        assert feature > style

    def test_density_matters(self):
        config = EngineConfig()
        dense = compute_significance(CommitPatternType.BUGFIX, 6, 1.0, config)
        sparse = compute_significance(CommitPatternType.BUGFIX, 6, 60.0, config)
        assert dense > sparse

    def test_marathon_is_significant(self, bugfix_marathon):
        (pattern,) = detect_patterns(bugfix_marathon)
        assert pattern.significance >= 0.8


class TestDescribePattern:
    def test_multi_commit(self):
        assert describe_pattern(CommitPatternType.FEATURE, 7, 3.0) == "7 feature commits over 3 hours"

    def test_single_commit(self):
        assert describe_pattern(CommitPatternType.DOCS, 1, 0.0) == "1 docs commit"

    def test_short_span(self):
        assert describe_pattern(CommitPatternType.BUGFIX, 3, 0.25) == "3 bugfix commits over less than an hour"

    def test_multi_day_span(self):
        assert describe_pattern(CommitPatternType.FEATURE, 5, 96.0) == "5 feature commits over 4 days"

    def test_mixed_cluster_credits_only_dominant_commits(self):
        text = describe_pattern(CommitPatternType.FEATURE, 4, 0.5, type_count=2)
        assert text == "4 commits (2 feature) over less than an hour"

    def test_pure_cluster_with_type_count(self):
        assert describe_pattern(CommitPatternType.BUGFIX, 3, 2.0, type_count=3) == "3 bugfix commits over 2 hours"


class TestDetectPatterns:
    """Tests for the pattern sweep."""

    def test_empty(self):
        assert detect_patterns([]) == []

    def test_night_owl_is_one_feature_pattern(self, night_owl_commits):
        patterns = detect_patterns(night_owl_commits)
        assert len(patterns) == 1
        pattern = patterns[0]
        assert pattern.type == CommitPatternType.FEATURE
        assert pattern.size == 5
        assert pattern.id == "pattern-1"
        assert pattern.start_time == night_owl_commits[0].timestamp
        assert pattern.end_time == night_owl_commits[-1].timestamp
        assert pattern.additions == 500
        assert pattern.deletions == 50
        assert pattern.files_changed == 15

    def test_bugfix_marathon(self, bugfix_marathon):
        patterns = detect_patterns(bugfix_marathon)
        assert len(patterns) == 1
        assert patterns[0].type == CommitPatternType.BUGFIX
        assert patterns[0].size == 12

    def test_idle_gap_splits(self, make_commit):
        start = datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)
        commits = [
            make_commit("a", start),
            make_commit("b", start + timedelta(hours=1)),
            make_commit("c", start + timedelta(days=3)),
        ]
        patterns = detect_patterns(commits)
        assert [p.commit_ids for p in patterns] == [("a", "b"), ("c",)]
        assert [p.id for p in patterns] == ["pattern-1", "pattern-2"]

    def test_idle_gap_from_config(self, night_owl_commits):
        patterns = detect_patterns(night_owl_commits, EngineConfig(idle_gap_hours=12))
        assert len(patterns) == 5

    def test_dominant_type_flip_splits(self, make_commit):
        """Two features then three fixes: the third fix flips the majority."""
        start = datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)
        messages = ["feat: a", "feat: b", "fix: c", "fix: d", "fix: e"]
        commits = [
            make_commit(f"c{i}", start + timedelta(minutes=5 * i), message=message)
            for i, message in enumerate(messages)
        ]
        patterns = detect_patterns(commits)
        assert [p.type for p in patterns] == [CommitPatternType.FEATURE, CommitPatternType.BUGFIX]
        assert patterns[0].commit_ids == ("c0", "c1", "c2", "c3")
        assert patterns[1].commit_ids == ("c4",)

    def test_mixed_cluster_description(self, make_commit):
        """Alternating features and fixes are not all called features."""
        start = datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)
        messages = ["feat: a", "fix: b", "feat: c", "fix: d"]
        commits = [
            make_commit(f"c{i}", start + timedelta(minutes=10 * i), message=message)
            for i, message in enumerate(messages)
        ]
        (pattern,) = detect_patterns(commits)
        assert pattern.type == CommitPatternType.FEATURE
        assert pattern.size == 4
        assert pattern.dominant_count == 2
        assert pattern.description == "4 commits (2 feature) over less than an hour"
        assert pattern.to_dict()["type_count"] == 2

    def test_partition_invariant(self, mixed_history):
        patterns = detect_patterns(mixed_history)
        flattened = [cid for p in patterns for cid in p.commit_ids]
        assert flattened == [c.id for c in mixed_history]
        for pattern in patterns:
            assert pattern.size >= 1
            assert pattern.start_time <= pattern.end_time
            assert 0.0 <= pattern.significance <= 1.0

    def test_chronological_order(self, mixed_history):
        patterns = detect_patterns(mixed_history)
        for earlier, later in zip(patterns, patterns[1:]):
            assert earlier.end_time <= later.start_time

    def test_deterministic(self, mixed_history):
        assert detect_patterns(mixed_history) == detect_patterns(mixed_history)


class TestVerifyPartition:
    def _pattern(self, pid, ids, start, end):
        return CommitPattern(
            id=pid,
            type=CommitPatternType.FEATURE,
            commit_ids=tuple(ids),
            start_time=start,
            end_time=end,
            significance=0.5,
            description="x",
        )

    def test_missing_commit(self, night_owl_commits):
        first, last = night_owl_commits[0].timestamp, night_owl_commits[-1].timestamp
        pattern = self._pattern("p", [c.id for c in night_owl_commits[:-1]], first, last)
        with pytest.raises(PatternInvariantError) as exc_info:
            verify_partition(night_owl_commits, [pattern])
        assert exc_info.value.context["missing"] == ["owl-5"]

    def test_duplicate_commit(self, night_owl_commits):
        first, last = night_owl_commits[0].timestamp, night_owl_commits[-1].timestamp
        ids = [c.id for c in night_owl_commits]
        patterns = [self._pattern("p1", ids, first, last), self._pattern("p2", ids[:1], first, first)]
        with pytest.raises(PatternInvariantError) as exc_info:
            verify_partition(night_owl_commits, patterns)
        assert exc_info.value.context["duplicates"] == ["owl-1"]

    def test_reversed_times(self, night_owl_commits):
        first, last = night_owl_commits[0].timestamp, night_owl_commits[-1].timestamp
        pattern = self._pattern("p", [c.id for c in night_owl_commits], last, first)
        with pytest.raises(PatternInvariantError):
            verify_partition(night_owl_commits, [pattern])
