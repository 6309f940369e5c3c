"""
SyntaxTree -- Read-only arena of syntax nodes

Nodes live in a flat list and refer to each other by integer index, so
a tree holds no reference cycles and can be shared freely between
threads once built. Index 0 is always the root.

Comments never appear in a tree: the provider drops them before the
builder sees them.

Usage:
    builder = SyntaxTreeBuilder(JAVA_CONFIG, line_count=12)
    root = builder.add("program", 1, 12)
    cls = builder.add("class_declaration", 1, 12, parent=root)
    builder.add("identifier", 1, 1, parent=cls, text="Foo")
    tree = builder.build()
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Set, Tuple

from .config import LanguageConfig


@dataclass(frozen=True)
class SyntaxNode:
    """
    One node of a syntax tree.

    Attributes:
        index: Position in the owning tree's arena
        kind: Grammar node type (e.g. "method_declaration", "{")
        parent: Index of the parent node, None for the root
        children: Indices of child nodes in source order
        start_line: First line covered, 1-based
        end_line: Last line covered, 1-based
        start_column: Column of the first character, 0-based
        end_column: Column after the last character, 0-based
        text: Literal token text for leaves, None for inner nodes
    """
    index: int
    kind: str
    parent: Optional[int]
    children: Tuple[int, ...]
    start_line: int
    end_line: int
    start_column: int = 0
    end_column: int = 0
    text: Optional[str] = None

    def spans(self, line: int) -> bool:
        return self.start_line <= line <= self.end_line

    @property
    def is_leaf(self) -> bool:
        return not self.children


class SyntaxTree:
    """Immutable tree over a node arena. Build with SyntaxTreeBuilder."""

    def __init__(self, nodes: List[SyntaxNode], language: LanguageConfig, line_count: int):
        self._nodes: Tuple[SyntaxNode, ...] = tuple(nodes)
        self.language = language
        self.line_count = line_count

    @property
    def root(self) -> Optional[SyntaxNode]:
        return self._nodes[0] if self._nodes else None

    @property
    def is_empty(self) -> bool:
        return not self._nodes

    def node(self, index: int) -> SyntaxNode:
        return self._nodes[index]

    def children(self, index: int) -> List[SyntaxNode]:
        return [self._nodes[i] for i in self._nodes[index].children]

    def parent(self, index: int) -> Optional[SyntaxNode]:
        parent = self._nodes[index].parent
        return self._nodes[parent] if parent is not None else None

    def ancestors(self, index: int, include_self: bool = False) -> Iterator[SyntaxNode]:
        """Yield ancestors from the closest up to the root."""
        current: Optional[int] = index if include_self else self._nodes[index].parent
        while current is not None:
            node = self._nodes[current]
            yield node
            current = node.parent

    def find_ancestor(self, index: int, kinds: Iterable[str], include_self: bool = True) -> Optional[SyntaxNode]:
        """
        Find the nearest ancestor whose kind is in `kinds`.

        Args:
            index: Node to start from
            kinds: Accepted node kinds
            include_self: Whether the start node itself may match

        Returns:
            The matching node, or None if no ancestor matches
        """
        wanted: Set[str] = set(kinds)
        for node in self.ancestors(index, include_self=include_self):
            if node.kind in wanted:
                return node
        return None

    def walk(self, index: int = 0, opaque: Iterable[str] = ()) -> Iterator[SyntaxNode]:
        """
        Pre-order traversal of the subtree rooted at `index`.

        Nodes whose kind is in `opaque` are yielded but not descended into.
        """
        if not self._nodes:
            return
        skip: Set[str] = set(opaque)
        stack = [index]
        while stack:
            node = self._nodes[stack.pop()]
            yield node
            if node.kind not in skip:
                stack.extend(reversed(node.children))

    def deepest_at_line(self, line: int) -> Optional[SyntaxNode]:
        """
        Find the deepest node whose line span contains `line`.

        Descends from the root, taking the first child that spans the
        line at every level. Falls back to the root when no child does.
        """
        if not self._nodes:
            return None
        node = self._nodes[0]
        while True:
            nxt = next((c for c in self.children(node.index) if c.spans(line)), None)
            if nxt is None:
                return node
            node = nxt

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"SyntaxTree({self.language.name}, {len(self._nodes)} nodes, {self.line_count} lines)"


class SyntaxTreeBuilder:
    """
    Incremental builder for SyntaxTree.

    Nodes must be added parent-first; the first node added is the root.
    """

    def __init__(self, language: LanguageConfig, line_count: int):
        self._language = language
        self._line_count = line_count
        self._rows: List[dict] = []
        self._children: List[List[int]] = []

    def add(
        self,
        kind: str,
        start_line: int,
        end_line: int,
        parent: Optional[int] = None,
        text: Optional[str] = None,
        start_column: int = 0,
        end_column: int = 0,
    ) -> int:
        """
        Append a node and return its index.

        Raises:
            ValueError: If a root already exists and no parent is given
        """
        index = len(self._rows)
        if parent is None and index != 0:
            raise ValueError("Only the first node may omit its parent")
        self._rows.append({
            "kind": kind,
            "parent": parent,
            "start_line": start_line,
            "end_line": end_line,
            "start_column": start_column,
            "end_column": end_column,
            "text": text,
        })
        self._children.append([])
        if parent is not None:
            self._children[parent].append(index)
        return index

    def build(self) -> SyntaxTree:
        nodes = [
            SyntaxNode(index=i, children=tuple(self._children[i]), **row)
            for i, row in enumerate(self._rows)
        ]
        return SyntaxTree(nodes, self._language, self._line_count)
