"""
Tests for IssueMatcher -- NEW / OUTSTANDING / FIXED classification

Tests verify:
- Pairing is keyed by (file, category, fingerprint) and one-to-one
- Duplicates pair in order; surplus current issues are NEW
- Unmatchable issues never pair
- A snapshot compared with itself is all OUTSTANDING
- Result order: current issues first, then FIXED in reference order
"""

import pytest

from scopeprint.core.errors import ErrorKind
from scopeprint.core.issues import Issues
from scopeprint.core.matcher import Classification, IssueMatcher

from tests.factories import make_issue


def stamped(fingerprint, **kwargs):
    return make_issue(**kwargs).with_fingerprint(fingerprint)


@pytest.fixture
def matcher():
    return IssueMatcher()


class TestClassification:
    """Basic classification."""

    def test_identical_issue_is_outstanding(self, matcher):
        reference = Issues([stamped("aa", line=10)])
        current = Issues([stamped("aa", line=12)])

        report = matcher.classify(reference, current)

        assert [r.status for r in report.results] == [Classification.OUTSTANDING]
        assert report.results[0].issue.line == 12
        assert report.results[0].paired.line == 10

    def test_new_and_fixed(self, matcher):
        reference = Issues([stamped("aa")])
        current = Issues([stamped("bb")])

        report = matcher.classify(reference, current)

        assert len(report.new) == 1
        assert report.new[0].issue.fingerprint == "bb"
        assert len(report.fixed) == 1
        assert report.fixed[0].issue.fingerprint == "aa"
        assert report.fixed[0].paired is None

    def test_empty_inputs(self, matcher):
        report = matcher.classify(Issues(), Issues())
        assert report.results == []
        assert report.counts() == {"new": 0, "outstanding": 0, "fixed": 0}


class TestPairing:
    """One-to-one pairing rules."""

    def test_duplicates_pair_one_to_one(self, matcher):
        """Two equal reference issues against three equal current ones."""
        reference = Issues([stamped("aa", line=1), stamped("aa", line=2)])
        current = Issues([stamped("aa", line=5), stamped("aa", line=6), stamped("aa", line=7)])

        report = matcher.classify(reference, current)

        statuses = [r.status for r in report.results]
        assert statuses == [Classification.OUTSTANDING, Classification.OUTSTANDING, Classification.NEW]
        assert [r.paired.line for r in report.outstanding] == [1, 2]

    def test_surplus_reference_is_fixed(self, matcher):
        reference = Issues([stamped("aa", line=1), stamped("aa", line=2)])
        current = Issues([stamped("aa", line=9)])

        report = matcher.classify(reference, current)

        assert len(report.outstanding) == 1
        assert [r.issue.line for r in report.fixed] == [2]

    def test_same_fingerprint_different_file_does_not_pair(self, matcher):
        reference = Issues([stamped("aa", file_name="A.java")])
        current = Issues([stamped("aa", file_name="B.java")])

        report = matcher.classify(reference, current)

        assert report.counts() == {"new": 1, "outstanding": 0, "fixed": 1}

    def test_same_fingerprint_different_category_does_not_pair(self, matcher):
        reference = Issues([stamped("aa", category="Coding")])
        current = Issues([stamped("aa", category="Javadoc")])

        report = matcher.classify(reference, current)

        assert report.counts() == {"new": 1, "outstanding": 0, "fixed": 1}

    def test_message_and_line_do_not_affect_pairing(self, matcher):
        reference = Issues([stamped("aa", line=3, message="old text")])
        current = Issues([stamped("aa", line=30, message="new text")])

        assert matcher.classify(reference, current).counts()["outstanding"] == 1


class TestUnmatchable:
    """Issues without fingerprints."""

    def test_unmatchable_current_is_new(self, matcher):
        reference = Issues([make_issue().as_unmatchable(ErrorKind.PARSE_ERROR)])
        current = Issues([make_issue().as_unmatchable(ErrorKind.PARSE_ERROR)])

        report = matcher.classify(reference, current)

        assert report.counts() == {"new": 1, "outstanding": 0, "fixed": 1}

    def test_unmatchable_does_not_consume_reference(self, matcher):
        reference = Issues([stamped("aa")])
        current = Issues([make_issue().as_unmatchable(ErrorKind.MISSING_SCOPE), stamped("aa")])

        report = matcher.classify(reference, current)

        assert [r.status for r in report.results] == [Classification.NEW, Classification.OUTSTANDING]


class TestProperties:
    """Whole-report properties."""

    def test_self_comparison_is_all_outstanding(self, matcher):
        issues = Issues([
            stamped("aa", line=1),
            stamped("aa", line=2),
            stamped("bb", file_name="Other.java"),
        ])

        report = matcher.classify(issues, issues)

        assert all(r.status is Classification.OUTSTANDING for r in report.results)
        assert len(report.results) == 3

    def test_every_issue_classified_exactly_once(self, matcher):
        reference = Issues([stamped("aa"), stamped("bb"), stamped("cc")])
        current = Issues([stamped("bb"), stamped("dd")])

        report = matcher.classify(reference, current)
        counts = report.counts()

        assert counts["new"] + counts["outstanding"] == len(current)
        assert counts["fixed"] + counts["outstanding"] == len(reference)

    def test_result_order(self, matcher):
        """Current issues keep input order; FIXED follow in reference order."""
        reference = Issues([stamped("r1"), stamped("shared"), stamped("r2")])
        current = Issues([stamped("c1"), stamped("shared")])

        report = matcher.classify(reference, current)

        assert [r.issue.fingerprint for r in report.results] == ["c1", "shared", "r1", "r2"]
        assert [r.status for r in report.results] == [
            Classification.NEW, Classification.OUTSTANDING, Classification.FIXED, Classification.FIXED,
        ]

    def test_to_dict(self, matcher):
        report = matcher.classify(Issues([stamped("aa", line=4)]), Issues([stamped("aa", line=6)]))

        data = report.to_dict()

        assert data["summary"] == {"new": 0, "outstanding": 1, "fixed": 0}
        assert data["issues"][0]["status"] == "outstanding"
        assert data["issues"][0]["line"] == 6
        assert data["issues"][0]["reference_line"] == 4
