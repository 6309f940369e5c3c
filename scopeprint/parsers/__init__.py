"""
Parsers -- Tool output to Issues

Usage:
    from scopeprint.parsers import get_parser

    issues = get_parser("checkstyle").parse_file(Path("checkstyle-result.xml"))
"""

from typing import Dict, List, Type

from .base import IssueParser, RegexpDocumentParser
from .checkstyle import CheckstyleParser
from .doxygen import DoxygenParser

PARSERS: Dict[str, Type[IssueParser]] = {
    CheckstyleParser.name: CheckstyleParser,
    DoxygenParser.name: DoxygenParser,
}


def get_parser(name: str) -> IssueParser:
    """
    Instantiate a parser by name.

    Raises:
        ValueError: If no parser has that name
    """
    parser_cls = PARSERS.get(name.lower())
    if parser_cls is None:
        raise ValueError(f"Unknown parser '{name}'. Valid: {', '.join(sorted(PARSERS))}")
    return parser_cls()


def available_parsers() -> List[str]:
    return sorted(PARSERS)


__all__ = [
    'IssueParser', 'RegexpDocumentParser', 'CheckstyleParser', 'DoxygenParser',
    'PARSERS', 'get_parser', 'available_parsers',
]
