"""Tests for conventional commit classification."""

from __future__ import annotations

import pytest

from ccrelease.config.models import CommitsConfig
from ccrelease.core.commits import (
    RECOGNIZED_TYPES,
    CommitRecord,
    CommitType,
    RawCommit,
    classify,
    classify_commits,
    filter_skip_release_commits,
    validate_subject,
)


class TestClassify:
    """Tests for classify()."""

    def test_feat_with_scope(self):
        """Parse a feat commit with scope."""
        record = classify(RawCommit("abc1234", "feat(auth): add JWT login"))

        assert record == CommitRecord(
            hash="abc1234",
            subject="feat(auth): add JWT login",
            body="",
            type=CommitType.FEAT,
            scope="auth",
            description="add JWT login",
            breaking=False,
        )

    def test_simple_fix(self):
        """Parse a fix commit without scope."""
        record = classify(RawCommit("abc1234", "fix: patch leak"))

        assert record.type is CommitType.FIX
        assert record.scope == ""
        assert record.description == "patch leak"
        assert record.is_conventional

    def test_no_space_after_colon(self):
        """Whitespace after the colon is optional."""
        record = classify(RawCommit("abc1234", "docs:typo"))

        assert record.type is CommitType.DOCS
        assert record.description == "typo"

    def test_non_conventional(self):
        """Non-conventional subjects degrade to other."""
        record = classify(RawCommit("abc1234", "Updated the readme file"))

        assert record.type is CommitType.OTHER
        assert record.scope == ""
        assert record.description == "Updated the readme file"
        assert not record.is_conventional

    @pytest.mark.parametrize(
        "subject",
        [
            "feat: ",
            "feat:",
            "feat(api):   ",
            "FEAT: uppercase type",
            "Feat: capitalized type",
            "feature: unknown type",
            "feat!: bang is not recognized",
            "feat(): empty scope",
            "feat(a)(b): two groups",
            "feat add colon missing",
            "",
        ],
    )
    def test_unmatched_subjects_are_other(self, subject: str):
        """Subjects that do not fully match are classified other, unchanged."""
        record = classify(RawCommit("abc1234", subject))

        assert record.type is CommitType.OTHER
        assert record.scope == ""
        assert record.description == subject

    def test_scope_only_first_group(self):
        """Only the parenthetical right after the type is the scope."""
        record = classify(RawCommit("abc1234", "fix(parser): handle (nested) input"))

        assert record.scope == "parser"
        assert record.description == "handle (nested) input"

    @pytest.mark.parametrize("commit_type", list(RECOGNIZED_TYPES))
    def test_all_recognized_types(self, commit_type: CommitType):
        """Every recognized type is parsed."""
        record = classify(RawCommit("abc1234", f"{commit_type}: some change"))

        assert record.type is commit_type

    def test_breaking_in_body(self):
        """BREAKING CHANGE in the body marks the commit breaking."""
        record = classify(
            RawCommit("abc1234", "refactor: cleanup", "BREAKING CHANGE: removed foo()")
        )

        assert record.breaking
        assert record.type is CommitType.REFACTOR

    def test_breaking_independent_of_type(self):
        """A non-conventional commit can still be breaking."""
        record = classify(RawCommit("abc1234", "rewrite everything", "BREAKING CHANGE"))

        assert record.breaking
        assert record.type is CommitType.OTHER

    def test_breaking_marker_case_sensitive(self):
        """The marker is matched case-sensitively."""
        record = classify(RawCommit("abc1234", "fix: x", "breaking change: lowercase"))

        assert not record.breaking

    def test_breaking_marker_in_subject_ignored(self):
        """Only the body is searched for the marker."""
        record = classify(RawCommit("abc1234", "fix: mention BREAKING CHANGE"))

        assert not record.breaking

    def test_custom_breaking_marker(self):
        """A custom marker replaces the default."""
        record = classify(RawCommit("abc1234", "fix: x", "BREAKING-CHANGE: y"), "BREAKING-CHANGE")

        assert record.breaking

    def test_deterministic(self):
        """Same input yields equal records."""
        raw = RawCommit("abc1234", "perf(db): faster queries", "details")

        assert classify(raw) == classify(raw)


class TestClassifyCommits:
    """Tests for classify_commits()."""

    def test_preserves_order(self, sample_commits: list[RawCommit]):
        """Records come back in input order."""
        records = classify_commits(sample_commits)

        assert [r.hash for r in records] == [c.hash for c in sample_commits]

    def test_uses_config_marker(self):
        """The configured marker is used."""
        config = CommitsConfig(breaking_marker="BREAKS:")
        records = classify_commits([RawCommit("a", "fix: x", "BREAKS: api")], config)

        assert records[0].breaking


class TestFilterSkipReleaseCommits:
    """Tests for filter_skip_release_commits()."""

    def test_filter_with_skip_release_marker(self):
        """Commits with [skip release] are filtered out."""
        commits = [
            RawCommit("a", "feat: add feature"),
            RawCommit("b", "fix: bug fix [skip release]"),
            RawCommit("c", "docs: update readme"),
        ]
        filtered = filter_skip_release_commits(commits, ["[skip release]"])

        assert [c.hash for c in filtered] == ["a", "c"]

    def test_filter_case_insensitive(self):
        """Skip markers are matched case-insensitively."""
        commits = [
            RawCommit("a", "feat: add feature [SKIP RELEASE]"),
            RawCommit("b", "docs: update readme"),
        ]
        filtered = filter_skip_release_commits(commits, ["[skip release]"])

        assert [c.hash for c in filtered] == ["b"]

    def test_filter_marker_in_body(self):
        """Skip markers in the body are also detected."""
        commits = [
            RawCommit("a", "feat: add feature", "Some details [no release]"),
            RawCommit("b", "fix: bug fix"),
        ]
        filtered = filter_skip_release_commits(commits, ["[no release]"])

        assert [c.hash for c in filtered] == ["b"]

    def test_filter_empty_patterns_returns_all(self):
        """Empty patterns list returns all commits."""
        commits = [RawCommit("a", "feat: add feature [skip release]")]

        assert filter_skip_release_commits(commits, []) == commits


class TestValidateSubject:
    """Tests for validate_subject()."""

    def test_valid(self):
        result = validate_subject("feat(api): add endpoint", "abc1234")

        assert result.is_valid
        assert result.error is None
        assert result.record is not None
        assert result.record.scope == "api"

    def test_empty(self):
        result = validate_subject("   ")

        assert not result.is_valid
        assert result.error == "Commit subject cannot be empty"

    def test_unknown_type(self):
        result = validate_subject("feature: add endpoint")

        assert not result.is_valid
        assert "Invalid commit type 'feature'" in result.error

    def test_uppercase_type(self):
        result = validate_subject("FIX: something")

        assert not result.is_valid
        assert "Invalid commit type 'FIX'" in result.error

    def test_missing_description(self):
        result = validate_subject("fix: ")

        assert not result.is_valid
        assert "non-empty description" in result.error

    def test_empty_scope(self):
        result = validate_subject("fix(): something")

        assert not result.is_valid
        assert "Scope must not be empty" in result.error

    def test_bang(self):
        result = validate_subject("feat!: drop python 3.10")

        assert not result.is_valid
        assert "BREAKING CHANGE" in result.error

    def test_free_text(self):
        result = validate_subject("Merge branch 'main'")

        assert not result.is_valid
        assert "conventional commit format" in result.error

    @pytest.mark.parametrize("subject", ["feat:x", "fix(core):handle nulls", "docs:\ttypo"])
    def test_missing_space_after_colon(self, subject: str):
        """Classification accepts these subjects; validation does not."""
        result = validate_subject(subject)

        assert classify(RawCommit("abc1234", subject)).is_conventional
        assert not result.is_valid
        assert "Missing space after ':'" in result.error
        assert result.record is not None

    def test_extra_spaces_after_colon(self):
        assert validate_subject("fix:  extra space").is_valid
