"""
Errors -- Failure taxonomy for fingerprinting

Every failure the pipeline can produce carries an ErrorKind:
- PARSE_ERROR: tree unobtainable (fatal for one file, never for the batch)
- MISSING_SCOPE: no scope could be selected for an issue
- INVALID_ANCHOR: anchor line outside the file
- MALFORMED_FILTER_REGEX: bad regex given to the issue filter

Per-issue kinds degrade the issue to unmatchable; only
MALFORMED_FILTER_REGEX is raised to the caller.
"""

import re
from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Failure categories attached to issues and diagnostics."""
    PARSE_ERROR = "parse_error"
    MISSING_SCOPE = "missing_scope"
    INVALID_ANCHOR = "invalid_anchor"
    MALFORMED_FILTER_REGEX = "malformed_filter_regex"


class ScopeprintError(Exception):
    """Base class for all fingerprinting failures."""

    kind: ErrorKind = ErrorKind.PARSE_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ParseError(ScopeprintError):
    """Source text could not be turned into a syntax tree."""

    kind = ErrorKind.PARSE_ERROR

    def __init__(self, message: str, file_name: str = ""):
        super().__init__(message)
        self.file_name = file_name


class MissingScopeError(ScopeprintError):
    """No scope of any granularity could be selected."""

    kind = ErrorKind.MISSING_SCOPE


class InvalidAnchorError(ScopeprintError):
    """Anchor line is below 1 or past the end of the file."""

    kind = ErrorKind.INVALID_ANCHOR

    def __init__(self, line: int, line_count: int):
        super().__init__(f"Line {line} is outside the file (1..{line_count})")
        self.line = line
        self.line_count = line_count


class MalformedFilterRegexError(ScopeprintError, ValueError):
    """An include/exclude pattern does not compile."""

    kind = ErrorKind.MALFORMED_FILTER_REGEX

    def __init__(self, pattern: str, cause: Optional[re.error] = None):
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Invalid filter regex '{pattern}'{detail}")
        self.pattern = pattern
        self.cause = cause


class ConfigError(ValueError):
    """Configuration value rejected during validation."""
