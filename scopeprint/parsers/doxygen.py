"""
DoxygenParser -- Issues from Doxygen warning logs

Three message shapes are recognized:
- file warnings: "/abs/path/foo.cpp:12: Warning: text" (or C:\\...)
- function warnings: "<Foo::bar>:12: Warning: text" (label optional)
- global messages: "Notice: text", "Warning: text", "Error: text"

File and function warnings may continue over several lines. A
continuation line must not start like an absolute path or a function,
so it may not begin with '/' or '<', may not have ':' second or '/'
third, and must be at least three characters long.
"""

import re
from typing import Optional

from ..core.issues import Issue, Severity
from .base import RegexpDocumentParser, line_number

WARNING_CATEGORY = "Doxygen warning"
WARNING_TYPE = "doxygen"

DOXYGEN_WARNING_PATTERN = (
    r"^(?:(?:((?:/|[A-Za-z]:).+?):(-?\d+): (Warning|Error)"
    r"|<.+>:-?\d+(?:: (Warning|Error))?): (.+(?:\n[^/<\n][^:\n][^/\n].+)*)"
    r"|(Notice|Warning|Error): (.+))$"
)

FILE_NAME_GROUP = 1
FILE_LINE_GROUP = 2
FILE_TYPE_GROUP = 3
FUNC_TYPE_GROUP = 4
LOCAL_MESSAGE_GROUP = 5
GLOBAL_TYPE_GROUP = 6
GLOBAL_MESSAGE_GROUP = 7


class DoxygenParser(RegexpDocumentParser):
    """Parser for Doxygen warnings."""

    name = "doxygen"

    def __init__(self):
        super().__init__(DOXYGEN_WARNING_PATTERN, multiline=True)

    def create_issue(self, match: 're.Match') -> Optional[Issue]:
        file_name = ""
        line = 0

        local_message = match.group(LOCAL_MESSAGE_GROUP)
        global_message = match.group(GLOBAL_MESSAGE_GROUP)

        if local_message and local_message.strip():
            message = local_message
            if match.group(FILE_NAME_GROUP):
                file_name = match.group(FILE_NAME_GROUP)
                line = line_number(match.group(FILE_LINE_GROUP))
                severity = Severity.from_label(match.group(FILE_TYPE_GROUP))
            else:
                severity = Severity.from_label(match.group(FUNC_TYPE_GROUP))
        elif global_message and global_message.strip():
            message = global_message
            severity = Severity.from_label(match.group(GLOBAL_TYPE_GROUP))
        else:
            message = "Unknown doxygen error."
            severity = Severity.HIGH

        return Issue(
            file_name=file_name,
            line=line,
            category=WARNING_CATEGORY,
            type=WARNING_TYPE,
            message=message,
            severity=severity,
        )
