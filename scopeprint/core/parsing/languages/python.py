"""
Python language configuration for scope selection.

Python has no package declaration, so name/package scope always
degrades to file scope. Class-level assignments (expression statements
directly in a class body) count as instance variables.
"""

from ..config import LanguageConfig


PYTHON_CONFIG = LanguageConfig(
    name="Python",
    tree_sitter_name="python",
    extensions=frozenset({".py", ".pyi"}),
    method_kinds=frozenset({"function_definition"}),
    type_kinds=frozenset({"class_definition"}),
    body_kinds=frozenset({"block"}),
    field_kinds=frozenset({"expression_statement"}),
    import_kinds=frozenset({
        "import_statement",
        "import_from_statement",
        "future_import_statement",
    }),
    control_kinds=frozenset({
        "if_statement",
        "for_statement",
        "while_statement",
        "try_statement",
        "with_statement",
        "match_statement",
    }),
    clause_kinds=frozenset({
        "elif_clause",
        "else_clause",
        "except_clause",
        "except_group_clause",
        "finally_clause",
        "case_clause",
    }),
    block_kinds=frozenset({"block"}),
    comment_kinds=frozenset({"comment"}),
    literal_kinds=frozenset({"string", "concatenated_string"}),
)
