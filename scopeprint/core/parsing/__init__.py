"""
Parsing module -- Syntax trees for scope selection via tree-sitter.

This module provides:
- LanguageConfig: Per-language table of structural node kinds
- ParserRegistry: Extension-based routing
- SyntaxTree / SyntaxNode: Read-only, index-addressed node arena
- TreeSitterProvider: Source text to SyntaxTree

Usage:
    from scopeprint.core.parsing import TreeSitterProvider

    provider = TreeSitterProvider()
    tree = provider.parse_file(Path("src/Foo.java"), source)
    node = tree.deepest_at_line(7)
"""

from .config import LanguageConfig
from .registry import ParserRegistry, default_registry
from .tree import SyntaxNode, SyntaxTree, SyntaxTreeBuilder
from .provider import TreeSitterProvider, count_lines

__all__ = [
    'LanguageConfig',
    'ParserRegistry',
    'default_registry',
    'SyntaxNode',
    'SyntaxTree',
    'SyntaxTreeBuilder',
    'TreeSitterProvider',
    'count_lines',
]
