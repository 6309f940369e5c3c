"""
Tests for Issue and Issues -- the warning record and its collection

Tests verify:
- Blank text fields normalize to empty strings
- Fingerprint attach/unmatchable marking returns new values
- Grouping by file keeps first-seen order and original indices
- Dict round-trip keeps severity and error kind
"""

from dataclasses import FrozenInstanceError

import pytest

from scopeprint.core.errors import ErrorKind
from scopeprint.core.issues import Issue, Issues, Severity

from tests.factories import make_issue


class TestSeverity:
    """Severity label mapping."""

    @pytest.mark.parametrize("label,expected", [
        ("notice", Severity.LOW),
        ("Info", Severity.LOW),
        ("warning", Severity.NORMAL),
        ("WARNING", Severity.NORMAL),
        ("error", Severity.HIGH),
        ("", Severity.HIGH),
        (None, Severity.HIGH),
    ])
    def test_from_label(self, label, expected):
        assert Severity.from_label(label) is expected

    def test_ordering(self):
        assert Severity.LOW < Severity.NORMAL < Severity.HIGH


class TestIssue:
    """Single issue behaviour."""

    def test_blank_fields_become_empty(self):
        """Whitespace-only and None text fields normalize to ''."""
        issue = Issue(file_name="  ", category=None, type="\t", message="text")

        assert issue.file_name == ""
        assert issue.category == ""
        assert issue.type == ""
        assert issue.message == "text"

    def test_new_issue_is_not_matchable(self):
        assert not make_issue().matchable

    def test_with_fingerprint_returns_copy(self):
        issue = make_issue()
        stamped = issue.with_fingerprint("abc123")

        assert stamped.fingerprint == "abc123"
        assert stamped.matchable
        assert issue.fingerprint is None

    def test_as_unmatchable_clears_fingerprint(self):
        """Marking unmatchable drops any previous fingerprint."""
        issue = make_issue().with_fingerprint("abc123").as_unmatchable(ErrorKind.PARSE_ERROR)

        assert issue.fingerprint is None
        assert issue.fingerprint_error is ErrorKind.PARSE_ERROR
        assert not issue.matchable

    def test_dict_round_trip(self):
        issue = make_issue(severity=Severity.LOW, module_name="core").with_fingerprint("ff00")

        assert Issue.from_dict(issue.to_dict()) == issue

    def test_dict_round_trip_unmatchable(self):
        issue = make_issue().as_unmatchable(ErrorKind.INVALID_ANCHOR)
        data = issue.to_dict()

        assert data["fingerprint_error"] == "invalid_anchor"
        assert Issue.from_dict(data).fingerprint_error is ErrorKind.INVALID_ANCHOR

    def test_from_dict_accepts_tool_severity_label(self):
        issue = Issue.from_dict({"file_name": "a.java", "line": 3, "severity": "warning"})
        assert issue.severity is Severity.NORMAL

    def test_frozen(self):
        issue = make_issue()
        with pytest.raises(FrozenInstanceError):
            issue.line = 99


class TestIssues:
    """Collection behaviour."""

    def test_group_by_file_keeps_first_seen_order(self):
        issues = Issues([
            make_issue(file_name="b.java", line=1),
            make_issue(file_name="a.java", line=2),
            make_issue(file_name="b.java", line=3),
        ])

        groups = issues.group_by_file()

        assert list(groups) == ["b.java", "a.java"]
        assert groups["b.java"] == [0, 2]
        assert groups["a.java"] == [1]

    def test_files(self):
        issues = Issues([make_issue(file_name="x.java"), make_issue(file_name="y.java"), make_issue(file_name="x.java")])
        assert issues.files() == ["x.java", "y.java"]

    def test_add_extend_len_getitem(self):
        issues = Issues()
        issues.add(make_issue(line=1))
        issues.extend([make_issue(line=2), make_issue(line=3)])

        assert len(issues) == 3
        assert issues[1].line == 2
        assert [i.line for i in issues] == [1, 2, 3]

    def test_dicts_round_trip(self):
        issues = Issues([make_issue(line=1), make_issue(line=2).with_fingerprint("aa")])
        restored = Issues.from_dicts(issues.to_dicts())

        assert restored.all() == issues.all()
