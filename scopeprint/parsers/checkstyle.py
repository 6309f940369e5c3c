"""
CheckstyleParser -- Issues from Checkstyle XML reports

Report shape:
    <checkstyle>
      <file name="src/Foo.java">
        <error line="7" severity="warning" message="..."
               source="com.puppycrawl.tools.checkstyle.checks.javadoc.JavadocStyleCheck"/>
      </file>
    </checkstyle>

The check class name gives the issue type ("JavadocStyle") and its
package gives the category ("Javadoc").
"""

import logging
import xml.etree.ElementTree as ET
from typing import Tuple

from ..core.errors import ParseError
from ..core.issues import Issue, Issues, Severity
from .base import IssueParser, line_number

logger = logging.getLogger(__name__)


def split_source(source: str) -> Tuple[str, str]:
    """
    Derive (category, type) from a check's fully-qualified class name.

    Example:
        "com.puppycrawl.tools.checkstyle.checks.coding.MagicNumberCheck"
        -> ("Coding", "MagicNumber")
    """
    parts = [p for p in (source or "").split(".") if p]
    if not parts:
        return "", ""

    check = parts[-1]
    if check.endswith("Check") and len(check) > len("Check"):
        check = check[:-len("Check")]

    category = parts[-2].capitalize() if len(parts) > 1 and parts[-2] != "checks" else ""
    return category, check


class CheckstyleParser(IssueParser):
    """Parser for Checkstyle XML output."""

    name = "checkstyle"

    def parse(self, text: str) -> Issues:
        """
        Parse a Checkstyle XML report.

        Raises:
            ParseError: If the report is not well-formed XML
        """
        try:
            root = ET.fromstring(text)
        except ET.ParseError as e:
            raise ParseError(f"Malformed Checkstyle report: {e}") from e

        issues = Issues()
        for file_element in root.iter("file"):
            file_name = file_element.get("name", "")
            for error in file_element.iter("error"):
                category, check = split_source(error.get("source", ""))
                issues.add(Issue(
                    file_name=file_name,
                    line=line_number(error.get("line")),
                    category=category,
                    type=check,
                    message=error.get("message", ""),
                    severity=Severity.from_label(error.get("severity")),
                ))

        logger.debug("Checkstyle report: %d issues", len(issues))
        return issues
