"""
Core -- Data layer for scopeprint

Contains the foundational data structures:
- Issues: Immutable warning records and their collection
- Errors: Failure taxonomy (ErrorKind) and exceptions
- Filter: Include/exclude regex predicate over issues
- Matcher: NEW / OUTSTANDING / FIXED classification
- Parsing: Syntax trees via tree-sitter
"""

from .errors import (
    ErrorKind, ScopeprintError, ParseError, MissingScopeError,
    InvalidAnchorError, MalformedFilterRegexError, ConfigError,
)
from .issues import Severity, Issue, Issues
from .filter import IssueFilter, IssueFilterBuilder, IssueProperty
from .matcher import IssueMatcher, Classification, ClassificationResult, MatchReport

__all__ = [
    'ErrorKind', 'ScopeprintError', 'ParseError', 'MissingScopeError',
    'InvalidAnchorError', 'MalformedFilterRegexError', 'ConfigError',
    'Severity', 'Issue', 'Issues',
    'IssueFilter', 'IssueFilterBuilder', 'IssueProperty',
    'IssueMatcher', 'Classification', 'ClassificationResult', 'MatchReport',
]
