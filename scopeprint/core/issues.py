"""
Issues -- Immutable warning records produced by tool parsers

An Issue is created by a parser, passes through the filter, and gets a
fingerprint attached exactly once. Attaching returns a new Issue; the
original is never mutated.

Usage:
    issue = Issue(file_name="src/Foo.java", line=7, category="Javadoc")
    issue = issue.with_fingerprint("ab12...")
    issues = Issues([issue])
"""

from collections import OrderedDict
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Any, Dict, Iterable, Iterator, List, Optional

from .errors import ErrorKind


class Severity(IntEnum):
    """Ordered severity: LOW < NORMAL < HIGH."""
    LOW = 1
    NORMAL = 2
    HIGH = 3

    @classmethod
    def from_label(cls, label: Optional[str]) -> 'Severity':
        """
        Map a tool's severity label to a Severity.

        Unknown or blank labels map to HIGH.
        """
        key = (label or "").strip().lower()
        if key in ("notice", "info", "low"):
            return cls.LOW
        if key in ("warning", "normal", "medium"):
            return cls.NORMAL
        return cls.HIGH


_TEXT_FIELDS = ("file_name", "package_name", "module_name", "category", "type", "message")


@dataclass(frozen=True)
class Issue:
    """
    A single warning reported by an analysis tool.

    Attributes:
        file_name: Path of the file the warning is about
        line: Primary (anchor) line number, 1-based
        category: Tool-specific warning category
        type: Tool-specific warning type (e.g. check name)
        message: Human-readable text
        severity: LOW, NORMAL or HIGH
        package_name: Namespace/package, if the tool reports one
        module_name: Build module, if the tool reports one
        fingerprint: Hex digest, None until computed
        fingerprint_error: Why no fingerprint could be computed
    """
    file_name: str = ""
    line: int = 0
    category: str = ""
    type: str = ""
    message: str = ""
    severity: Severity = Severity.NORMAL
    package_name: str = ""
    module_name: str = ""
    fingerprint: Optional[str] = None
    fingerprint_error: Optional[ErrorKind] = None

    def __post_init__(self):
        for name in _TEXT_FIELDS:
            value = getattr(self, name)
            if value is None or (isinstance(value, str) and not value.strip()):
                object.__setattr__(self, name, "")

    @property
    def matchable(self) -> bool:
        """True once a fingerprint has been attached."""
        return self.fingerprint is not None

    def with_fingerprint(self, fingerprint: str) -> 'Issue':
        """Return a copy carrying the given fingerprint."""
        return replace(self, fingerprint=fingerprint, fingerprint_error=None)

    def as_unmatchable(self, kind: ErrorKind) -> 'Issue':
        """Return a copy marked as impossible to fingerprint."""
        return replace(self, fingerprint=None, fingerprint_error=kind)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file_name": self.file_name,
            "line": self.line,
            "category": self.category,
            "type": self.type,
            "message": self.message,
            "severity": self.severity.name,
            "package_name": self.package_name,
            "module_name": self.module_name,
            "fingerprint": self.fingerprint,
            "fingerprint_error": self.fingerprint_error.value if self.fingerprint_error else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Issue':
        error = data.get("fingerprint_error")
        severity = data.get("severity", Severity.NORMAL.name)
        return cls(
            file_name=data.get("file_name", ""),
            line=int(data.get("line", 0) or 0),
            category=data.get("category", ""),
            type=data.get("type", ""),
            message=data.get("message", ""),
            severity=Severity[severity] if severity in Severity.__members__ else Severity.from_label(severity),
            package_name=data.get("package_name", ""),
            module_name=data.get("module_name", ""),
            fingerprint=data.get("fingerprint"),
            fingerprint_error=ErrorKind(error) if error else None,
        )


class Issues:
    """
    Ordered collection of issues.

    Duplicates are allowed: two issues may share every field including
    the fingerprint.
    """

    def __init__(self, issues: Optional[Iterable[Issue]] = None):
        self._issues: List[Issue] = list(issues or [])

    def add(self, issue: Issue) -> None:
        self._issues.append(issue)

    def extend(self, issues: Iterable[Issue]) -> None:
        self._issues.extend(issues)

    def all(self) -> List[Issue]:
        """Return a copy of the issues in insertion order."""
        return list(self._issues)

    def files(self) -> List[str]:
        """Distinct file names in first-seen order."""
        return list(OrderedDict.fromkeys(issue.file_name for issue in self._issues))

    def group_by_file(self) -> Dict[str, List[int]]:
        """
        Group issue positions by file name.

        Returns:
            Ordered dict of file name -> indices into this collection
        """
        groups: Dict[str, List[int]] = OrderedDict()
        for index, issue in enumerate(self._issues):
            groups.setdefault(issue.file_name, []).append(index)
        return groups

    def to_dicts(self) -> List[Dict[str, Any]]:
        return [issue.to_dict() for issue in self._issues]

    @classmethod
    def from_dicts(cls, rows: Iterable[Dict[str, Any]]) -> 'Issues':
        return cls(Issue.from_dict(row) for row in rows)

    def __iter__(self) -> Iterator[Issue]:
        return iter(self._issues)

    def __len__(self) -> int:
        return len(self._issues)

    def __getitem__(self, index: int) -> Issue:
        return self._issues[index]

    def __repr__(self) -> str:
        return f"Issues({len(self._issues)} issues)"
