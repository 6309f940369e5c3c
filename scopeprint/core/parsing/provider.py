"""
TreeSitterProvider -- Source text to SyntaxTree via tree-sitter.

Parses with tree-sitter-language-pack grammars and copies the result into
a SyntaxTree arena: comments are dropped, line numbers become 1-based and
only leaf tokens keep their text.

A tree containing ERROR or MISSING nodes is rejected with ParseError, so
every tree handed to scope selection is complete.

Usage:
    from scopeprint.core.parsing import TreeSitterProvider, default_registry

    provider = TreeSitterProvider(default_registry())
    tree = provider.parse_file(Path("src/Foo.java"), source)
"""

import logging
import threading
from pathlib import Path
from typing import Dict, Optional, TYPE_CHECKING

from ..errors import ParseError
from .config import LanguageConfig
from .registry import ParserRegistry, default_registry
from .tree import SyntaxTree, SyntaxTreeBuilder

if TYPE_CHECKING:
    from tree_sitter import Node, Parser

logger = logging.getLogger(__name__)

# Lazy import for tree-sitter to allow graceful degradation
_language_pack_available = None


def _check_language_pack() -> bool:
    """Check if tree-sitter-language-pack is available."""
    global _language_pack_available
    if _language_pack_available is None:
        try:
            import tree_sitter_language_pack  # noqa: F401
            _language_pack_available = True
        except ImportError:
            _language_pack_available = False
    return _language_pack_available


def count_lines(source: str) -> int:
    """Number of lines in `source`; a trailing newline does not open a new line."""
    return len(source.splitlines())


class TreeSitterProvider:
    """
    Syntax tree provider backed by tree-sitter.

    tree-sitter parsers are not thread-safe, so each worker thread lazily
    gets its own parser per grammar. Produced trees are immutable and may
    be shared across threads.
    """

    def __init__(self, registry: Optional[ParserRegistry] = None):
        """
        Initialize provider with parser registry.

        Args:
            registry: ParserRegistry providing language configs.
                Defaults to all built-in languages.
        """
        self.registry: ParserRegistry = registry or default_registry()
        self._local = threading.local()

    def _get_parser(self, tree_sitter_name: str) -> 'Parser':
        """
        Get this thread's tree-sitter parser for a grammar.

        Raises:
            ParseError: If tree-sitter or the grammar is unavailable
        """
        parsers: Dict[str, 'Parser'] = getattr(self._local, "parsers", None)
        if parsers is None:
            parsers = self._local.parsers = {}

        if tree_sitter_name in parsers:
            return parsers[tree_sitter_name]

        if not _check_language_pack():
            raise ParseError("tree-sitter-language-pack is not installed")

        from tree_sitter_language_pack import get_parser
        try:
            parser = get_parser(tree_sitter_name)
        except Exception as e:
            raise ParseError(f"Cannot load tree-sitter grammar '{tree_sitter_name}': {e}") from e

        parsers[tree_sitter_name] = parser
        return parser

    def parse_file(self, file_path: Path, source: str) -> SyntaxTree:
        """
        Parse a file, choosing the language from its extension.

        Raises:
            ParseError: If the extension is unsupported or parsing fails
        """
        config = self.registry.get_config(Path(file_path))
        if config is None:
            raise ParseError(f"Unsupported file type: {file_path}", file_name=str(file_path))
        try:
            return self.parse(source, config)
        except ParseError as e:
            e.file_name = str(file_path)
            raise

    def parse(self, source: str, config: LanguageConfig) -> SyntaxTree:
        """
        Parse source text into a SyntaxTree.

        Args:
            source: File content
            config: Language of the content

        Returns:
            Comment-free SyntaxTree

        Raises:
            ParseError: If the content is too large or does not parse cleanly
        """
        data = source.encode("utf-8")
        if len(data) > config.max_file_size:
            raise ParseError(
                f"File exceeds {config.max_file_size} bytes ({len(data)} bytes)"
            )

        parser = self._get_parser(config.tree_sitter_name)
        ts_tree = parser.parse(data)
        root = ts_tree.root_node
        if root.has_error:
            raise ParseError(f"Syntax errors in {config.name} source")

        tree = self._convert(root, data, config, count_lines(source))
        logger.debug("Parsed %s source: %r", config.name, tree)
        return tree

    def _convert(self, root: 'Node', data: bytes, config: LanguageConfig, line_count: int) -> SyntaxTree:
        """Copy a tree-sitter tree into an arena, skipping comment subtrees."""
        builder = SyntaxTreeBuilder(config, line_count)
        builder.add(
            root.type,
            start_line=1,
            end_line=max(line_count, 1),
            end_column=root.end_point[1],
        )

        stack = [(child, 0) for child in reversed(root.children)]
        while stack:
            node, parent = stack.pop()
            if node.type in config.comment_kinds:
                continue

            start_row, start_col = node.start_point[0], node.start_point[1]
            end_row, end_col = node.end_point[0], node.end_point[1]
            # A span ending at column 0 stops before that line begins.
            end_line = end_row if end_col == 0 and end_row > start_row else end_row + 1

            index = builder.add(
                node.type,
                start_line=start_row + 1,  # tree-sitter is 0-indexed
                end_line=end_line,
                parent=parent,
                text=_leaf_text(node, data),
                start_column=start_col,
                end_column=end_col,
            )
            stack.extend((child, index) for child in reversed(node.children))

        return builder.build()

    def is_available(self) -> bool:
        """Check if tree-sitter parsing is available."""
        return _check_language_pack()


def _leaf_text(node: 'Node', data: bytes) -> Optional[str]:
    if node.child_count:
        return None
    return data[node.start_byte:node.end_byte].decode("utf-8", errors="replace")
