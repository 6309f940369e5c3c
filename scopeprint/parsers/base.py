"""
IssueParser -- Base classes for tool output parsers

Parsers turn raw tool output into Issues. They do not validate what a
tool reports beyond normalizing blank fields to empty strings (done by
Issue itself).
"""

import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from ..core.issues import Issue, Issues

logger = logging.getLogger(__name__)


class IssueParser(ABC):
    """Parses one tool's report format."""

    name: str = ""

    @abstractmethod
    def parse(self, text: str) -> Issues:
        """Parse report text into issues."""

    def parse_file(self, path: Path, encoding: str = "utf-8") -> Issues:
        """Read and parse a report file."""
        text = Path(path).read_text(encoding=encoding, errors="replace")
        issues = self.parse(text)
        logger.info("%s: %d issues from %s", self.name, len(issues), path)
        return issues


class RegexpDocumentParser(IssueParser):
    """
    Parser driven by one regex applied to the whole document.

    Subclasses supply the pattern and build an Issue from each match.
    Multi-line mode lets a single match span continuation lines.
    """

    def __init__(self, pattern: str, multiline: bool = True):
        flags = re.MULTILINE if multiline else 0
        self._pattern = re.compile(pattern, flags)

    def parse(self, text: str) -> Issues:
        issues = Issues()
        for match in self._pattern.finditer(text.replace("\r\n", "\n")):
            issue = self.create_issue(match)
            if issue is not None:
                issues.add(issue)
        return issues

    @abstractmethod
    def create_issue(self, match: 're.Match') -> Optional[Issue]:
        """Build an Issue from one regex match, or None to skip it."""


def line_number(value: Optional[str]) -> int:
    """Parse a reported line number; anything unparsable becomes 0."""
    try:
        return int(value) if value else 0
    except ValueError:
        return 0
