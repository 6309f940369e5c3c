"""
Scope Selectors -- Choose the syntactic unit a warning is about

Every variant is a pure function of (tree, anchor node). A variant that
finds nothing of its kind hands over to the next broader one:

    METHOD            -> CLASS -> FILE
    METHOD_OR_CLASS   -> CLASS -> FILE
    INSTANCE_VARIABLE -> CLASS -> FILE
    ENVIRONMENT       -> METHOD_OR_CLASS
    NAME_PACKAGE      -> FILE

The result is never None: a file with no declarations at all yields an
empty ScopeFragment, which callers report as MISSING_SCOPE.

Usage:
    fragment = select_scope(tree, line=7, kind=ScopeKind.METHOD)
    if fragment.is_missing:
        ...
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Tuple

from ..core.errors import InvalidAnchorError
from ..core.parsing.tree import SyntaxTree

logger = logging.getLogger(__name__)


class ScopeKind(Enum):
    """Granularity of the syntactic unit selected for a warning."""
    METHOD = "method"
    METHOD_OR_CLASS = "method_or_class"
    CLASS = "class"
    FILE = "file"
    INSTANCE_VARIABLE = "instance_variable"
    ENVIRONMENT = "environment"
    NAME_PACKAGE = "name_package"

    @classmethod
    def from_name(cls, name: str) -> 'ScopeKind':
        """Resolve 'method-or-class', 'METHOD_OR_CLASS' and similar spellings."""
        key = name.strip().lower().replace("-", "_")
        for kind in cls:
            if kind.value == key:
                return kind
        valid = ", ".join(k.value for k in cls)
        raise ValueError(f"Unknown scope '{name}'. Valid: {valid}")


# Kinds a request may resolve to without counting as a fallback
_EXPECTED = {
    ScopeKind.METHOD_OR_CLASS: {ScopeKind.METHOD, ScopeKind.CLASS},
}


@dataclass(frozen=True)
class ScopeFragment:
    """
    Root nodes of a selected scope, in source order.

    Attributes:
        nodes: Indices into the tree's node arena
        kind: Granularity actually selected
        requested: Granularity asked for
    """
    nodes: Tuple[int, ...]
    kind: ScopeKind
    requested: ScopeKind

    @property
    def is_missing(self) -> bool:
        return not self.nodes

    @property
    def degraded(self) -> bool:
        return self.kind is not self.requested and self.kind not in _EXPECTED.get(self.requested, ())


Area = Tuple[Tuple[int, ...], ScopeKind]


# =============================================================================
# Variants
# =============================================================================

def _file(tree: SyntaxTree, anchor: int) -> Area:
    return tree.node(0).children, ScopeKind.FILE


def _class(tree: SyntaxTree, anchor: int) -> Area:
    lang = tree.language
    type_node = tree.find_ancestor(anchor, lang.type_kinds)
    if type_node is None:
        return _file(tree, anchor)

    outer = tree.find_ancestor(type_node.index, lang.type_kinds, include_self=False)
    if outer is not None:
        return (type_node.index,), ScopeKind.CLASS

    header = tuple(
        child.index for child in tree.children(0) if child.kind in lang.header_kinds
    )
    return header + (type_node.index,), ScopeKind.CLASS


def _method(tree: SyntaxTree, anchor: int) -> Area:
    method = tree.find_ancestor(anchor, tree.language.method_kinds)
    if method is None:
        return _class(tree, anchor)
    return (method.index,), ScopeKind.METHOD


def _method_or_class(tree: SyntaxTree, anchor: int) -> Area:
    return _method(tree, anchor)


def _instance_variable(tree: SyntaxTree, anchor: int) -> Area:
    lang = tree.language
    type_node = tree.find_ancestor(anchor, lang.type_kinds)
    if type_node is None:
        return _class(tree, anchor)

    fields: List[int] = []
    for body in tree.children(type_node.index):
        if body.kind not in lang.body_kinds:
            continue
        for member in tree.children(body.index):
            if member.kind in lang.field_kinds:
                fields.append(member.index)
            elif member.kind in lang.body_kinds:
                fields.extend(
                    m.index for m in tree.children(member.index) if m.kind in lang.field_kinds
                )

    if not fields:
        return _class(tree, anchor)
    return tuple(fields), ScopeKind.INSTANCE_VARIABLE


def _environment(tree: SyntaxTree, anchor: int) -> Area:
    lang = tree.language
    boundaries = lang.declaration_kinds

    for node in tree.ancestors(anchor, include_self=True):
        if node.kind in lang.control_kinds:
            return (node.index,), ScopeKind.ENVIRONMENT

        if node.kind in lang.block_kinds:
            owner = tree.parent(node.index)
            while owner is not None and owner.kind in lang.clause_kinds:
                owner = tree.parent(owner.index)
            if owner is not None and owner.kind in lang.control_kinds:
                return (owner.index,), ScopeKind.ENVIRONMENT
            if owner is not None and owner.kind in lang.type_kinds:
                break
            return (node.index,), ScopeKind.ENVIRONMENT

        if node.kind in boundaries:
            break

    return _method_or_class(tree, anchor)


def _name_package(tree: SyntaxTree, anchor: int) -> Area:
    packages = tuple(
        child.index for child in tree.children(0) if child.kind in tree.language.package_kinds
    )
    if not packages:
        return _file(tree, anchor)
    return packages, ScopeKind.NAME_PACKAGE


SELECTORS: Dict[ScopeKind, Callable[[SyntaxTree, int], Area]] = {
    ScopeKind.METHOD: _method,
    ScopeKind.METHOD_OR_CLASS: _method_or_class,
    ScopeKind.CLASS: _class,
    ScopeKind.FILE: _file,
    ScopeKind.INSTANCE_VARIABLE: _instance_variable,
    ScopeKind.ENVIRONMENT: _environment,
    ScopeKind.NAME_PACKAGE: _name_package,
}


# =============================================================================
# Entry point
# =============================================================================

def select_scope(tree: SyntaxTree, line: int, kind: ScopeKind) -> ScopeFragment:
    """
    Select the scope of `kind` around an anchor line.

    Args:
        tree: Parsed, comment-free syntax tree
        line: Anchor line, 1-based
        kind: Requested granularity

    Returns:
        ScopeFragment; empty (is_missing) if nothing could be selected

    Raises:
        InvalidAnchorError: If line is below 1 or past the last line
    """
    if tree.is_empty:
        return ScopeFragment((), ScopeKind.FILE, kind)
    if line < 1 or line > tree.line_count:
        raise InvalidAnchorError(line, tree.line_count)

    anchor = tree.deepest_at_line(line)
    nodes, resolved = SELECTORS[kind](tree, anchor.index)
    fragment = ScopeFragment(tuple(nodes), resolved, kind)

    if fragment.degraded:
        logger.debug("Scope %s at line %d fell back to %s", kind.value, line, resolved.value)
    return fragment
