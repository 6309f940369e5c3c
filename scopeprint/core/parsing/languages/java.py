"""
Java language configuration for scope selection.

Node kinds follow the tree-sitter-java grammar. Java is the primary
target: its package declaration, field declarations and statement blocks
map one-to-one onto every scope variant.
"""

from ..config import LanguageConfig


JAVA_CONFIG = LanguageConfig(
    name="Java",
    tree_sitter_name="java",
    extensions=frozenset({".java"}),
    method_kinds=frozenset({
        "method_declaration",
        "constructor_declaration",
        "compact_constructor_declaration",
    }),
    type_kinds=frozenset({
        "class_declaration",
        "interface_declaration",
        "enum_declaration",
        "record_declaration",
        "annotation_type_declaration",
    }),
    body_kinds=frozenset({
        "class_body",
        "interface_body",
        "enum_body",
        "enum_body_declarations",
        "annotation_type_body",
    }),
    field_kinds=frozenset({
        "field_declaration",
        "constant_declaration",
    }),
    package_kinds=frozenset({"package_declaration"}),
    import_kinds=frozenset({"import_declaration"}),
    control_kinds=frozenset({
        "if_statement",
        "for_statement",
        "enhanced_for_statement",
        "while_statement",
        "do_statement",
        "try_statement",
        "try_with_resources_statement",
        "switch_expression",
        "synchronized_statement",
    }),
    clause_kinds=frozenset({"catch_clause", "finally_clause"}),
    block_kinds=frozenset({
        "block",
        "constructor_body",
        "switch_block",
    }),
    comment_kinds=frozenset({"line_comment", "block_comment"}),
    literal_kinds=frozenset({
        "string_literal",
        "text_block",
        "character_literal",
    }),
)
