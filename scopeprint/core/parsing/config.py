"""
Parsing configuration data structures.

Defines LanguageConfig -- the table of tree-sitter node kinds that play a
structural role (method, type, field, package, control statement...)
in one language. Scope selection is driven entirely by these tables.

Design principle: New languages are added via config, not code changes.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Set


@dataclass(frozen=True)
class LanguageConfig:
    """
    Configuration for parsing a specific programming language.

    Attributes:
        name: Human-readable name (e.g., "Java", "Python")
        tree_sitter_name: Grammar name for tree-sitter (e.g., "java")
        extensions: File extensions this config handles (e.g., {'.java'})
        method_kinds: Method, constructor and function declarations
        type_kinds: Class, interface, enum and record declarations
        body_kinds: Member containers of a type declaration
        field_kinds: Member declarations counted as instance variables
        package_kinds: Package / namespace declarations
        import_kinds: Import declarations (part of the file header)
        control_kinds: Conditional, loop and exception statements
        clause_kinds: Sub-parts of control statements (else, catch...)
        block_kinds: Compound statements
        comment_kinds: Nodes dropped from the tree entirely
        literal_kinds: Literals emitted as a single token, contents ignored
        max_file_size: Skip files larger than this (bytes, default 300KB)
    """
    # Identity
    name: str
    tree_sitter_name: str
    extensions: FrozenSet[str]

    # Structural roles
    method_kinds: FrozenSet[str] = field(default_factory=frozenset)
    type_kinds: FrozenSet[str] = field(default_factory=frozenset)
    body_kinds: FrozenSet[str] = field(default_factory=frozenset)
    field_kinds: FrozenSet[str] = field(default_factory=frozenset)
    package_kinds: FrozenSet[str] = field(default_factory=frozenset)
    import_kinds: FrozenSet[str] = field(default_factory=frozenset)
    control_kinds: FrozenSet[str] = field(default_factory=frozenset)
    clause_kinds: FrozenSet[str] = field(default_factory=frozenset)
    block_kinds: FrozenSet[str] = field(default_factory=frozenset)
    comment_kinds: FrozenSet[str] = field(default_factory=frozenset)
    literal_kinds: FrozenSet[str] = field(default_factory=frozenset)

    max_file_size: int = 300_000  # 300KB default

    @property
    def declaration_kinds(self) -> Set[str]:
        """Kinds that end an upward search for a statement window."""
        return set(self.method_kinds) | set(self.type_kinds) | set(self.package_kinds)

    @property
    def header_kinds(self) -> Set[str]:
        """Kinds that make up the file header preceding a top-level type."""
        return set(self.package_kinds) | set(self.import_kinds)

    def matches_extension(self, ext: str) -> bool:
        """Check if this config handles the given extension."""
        return ext.lower() in self.extensions
