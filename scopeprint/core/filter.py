"""
IssueFilter -- Include/exclude regex predicate over issue properties

An issue survives the filter iff:
- no include pattern exists, or at least one include pattern matches, and
- no exclude pattern matches.

Patterns match the whole property value (re.fullmatch). Patterns are
compiled when the filter is built, so a bad pattern fails before any
issue is processed.

Usage:
    issue_filter = (
        IssueFilter.builder()
        .include(IssueProperty.CATEGORY, ["Javadoc"])
        .exclude(IssueProperty.FILE_NAME, [r".*Test\\.java"])
        .build()
    )
    kept = issue_filter.filter(issues)
"""

import logging
import re
from enum import Enum
from typing import Iterable, List, Pattern, Tuple, TYPE_CHECKING

from .errors import MalformedFilterRegexError
from .issues import Issue, Issues

if TYPE_CHECKING:
    from ..config import FilterConfig

logger = logging.getLogger(__name__)


class IssueProperty(Enum):
    """Issue attributes a filter pattern can address."""
    FILE_NAME = "file_name"
    PACKAGE_NAME = "package_name"
    MODULE_NAME = "module_name"
    CATEGORY = "category"
    TYPE = "type"

    def value_of(self, issue: Issue) -> str:
        return getattr(issue, self.value)

    @classmethod
    def from_name(cls, name: str) -> 'IssueProperty':
        """Resolve 'category', 'CATEGORY' or 'file-name' style names."""
        key = name.strip().lower().replace("-", "_")
        for prop in cls:
            if prop.value == key:
                return prop
        valid = ", ".join(p.value for p in cls)
        raise ValueError(f"Unknown issue property '{name}'. Valid: {valid}")


Rule = Tuple[IssueProperty, Pattern]


def _compile(pattern: str) -> Pattern:
    try:
        return re.compile(pattern)
    except re.error as e:
        raise MalformedFilterRegexError(pattern, e) from e


class IssueFilter:
    """Immutable filter built from ordered include and exclude rules."""

    def __init__(self, includes: Iterable[Rule] = (), excludes: Iterable[Rule] = ()):
        self._includes: Tuple[Rule, ...] = tuple(includes)
        self._excludes: Tuple[Rule, ...] = tuple(excludes)

    @staticmethod
    def builder() -> 'IssueFilterBuilder':
        return IssueFilterBuilder()

    @classmethod
    def from_settings(cls, settings: 'FilterConfig') -> 'IssueFilter':
        """
        Build from the `filters` configuration section.

        Args:
            settings: FilterConfig with include/exclude maps of
                property name -> list of patterns

        Raises:
            MalformedFilterRegexError: If any pattern is invalid
            ValueError: If a property name is unknown
        """
        builder = cls.builder()
        for name, patterns in settings.include.items():
            builder.include(IssueProperty.from_name(name), patterns)
        for name, patterns in settings.exclude.items():
            builder.exclude(IssueProperty.from_name(name), patterns)
        return builder.build()

    @property
    def is_empty(self) -> bool:
        return not self._includes and not self._excludes

    def accepts(self, issue: Issue) -> bool:
        """Check a single issue against the include and exclude rules."""
        if self._includes and not any(
            pattern.fullmatch(prop.value_of(issue)) for prop, pattern in self._includes
        ):
            return False
        return not any(
            pattern.fullmatch(prop.value_of(issue)) for prop, pattern in self._excludes
        )

    def filter(self, issues: Issues) -> Issues:
        """
        Return a new collection holding the accepted issues.

        The input collection is left untouched.
        """
        kept = Issues(issue for issue in issues if self.accepts(issue))
        if len(kept) != len(issues):
            logger.debug("Filter dropped %d of %d issues", len(issues) - len(kept), len(issues))
        return kept


class IssueFilterBuilder:
    """Collects rules in order and compiles each pattern immediately."""

    def __init__(self):
        self._includes: List[Rule] = []
        self._excludes: List[Rule] = []

    def include(self, prop: IssueProperty, patterns: Iterable[str]) -> 'IssueFilterBuilder':
        compiled = [(prop, _compile(p)) for p in _as_list(patterns)]
        self._includes.extend(compiled)
        return self

    def exclude(self, prop: IssueProperty, patterns: Iterable[str]) -> 'IssueFilterBuilder':
        compiled = [(prop, _compile(p)) for p in _as_list(patterns)]
        self._excludes.extend(compiled)
        return self

    def build(self) -> IssueFilter:
        return IssueFilter(self._includes, self._excludes)


def _as_list(patterns) -> List[str]:
    if isinstance(patterns, str):
        return [patterns]
    return [str(p) for p in patterns]
