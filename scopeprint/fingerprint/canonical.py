"""
Canonicalizer -- Kind-only token stream of a scope fragment

Walks each fragment root in pre-order and records node kinds only.
Identifier names and literal values never reach the stream, so renaming
a variable or changing a constant leaves it untouched, while adding,
removing or reordering nodes changes it.
Literal kinds of the language are emitted as one token each, without
their fragment and escape children.
"""

from dataclasses import dataclass
from typing import Tuple

from ..core.parsing.tree import SyntaxTree
from .selectors import ScopeFragment

SEPARATOR = " "


@dataclass(frozen=True)
class CanonicalTokenStream:
    """Ordered node kinds of a fragment."""
    tokens: Tuple[str, ...]

    def text(self) -> str:
        """Tokens joined by a single space; empty fragment gives ''."""
        return SEPARATOR.join(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)


def canonicalize(tree: SyntaxTree, fragment: ScopeFragment) -> CanonicalTokenStream:
    """
    Canonicalize a fragment of `tree`.

    Args:
        tree: Tree the fragment was selected from
        fragment: Selected scope

    Returns:
        CanonicalTokenStream covering every fragment root in order
    """
    literals = tree.language.literal_kinds
    tokens = []
    for root in fragment.nodes:
        tokens.extend(node.kind for node in tree.walk(root, opaque=literals))
    return CanonicalTokenStream(tuple(tokens))
