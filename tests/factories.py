"""
Test Data Factory -- Hand-built syntax trees and issues

Builds trees directly through SyntaxTreeBuilder so selector, canonicalizer
and engine tests run without tree-sitter installed.

The sample tree mirrors this Java file (line numbers shift by `offset`):

     1  package com.example;
     2  import java.util.List;
     3  public class Foo {
     4      private int count = 0;
     5      private String name;
     6      public void run() {
     7          if (count > 0) {
     8              count++;
     9          }
    10      }
    11  }

Usage:
    tree = sample_tree()
    tree = sample_tree(offset=2, names=SampleNames(field="total"))
    issue = make_issue(line=8, category="MagicNumber")
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Optional, Set

import pytest

from scopeprint.core.errors import ParseError
from scopeprint.core.issues import Issue
from scopeprint.core.parsing.languages import JAVA_CONFIG
from scopeprint.core.parsing.tree import SyntaxTree, SyntaxTreeBuilder

SAMPLE_LINES = 11


def _has_tree_sitter() -> bool:
    try:
        from tree_sitter_language_pack import get_parser
        get_parser("java")
        get_parser("python")
        return True
    except Exception:
        return False


requires_tree_sitter = pytest.mark.skipif(
    not _has_tree_sitter(),
    reason="tree-sitter Java and Python grammars not available"
)


@dataclass(frozen=True)
class SampleNames:
    """Identifiers of the sample file; changing them models a rename."""
    package: str = "example"
    cls: str = "Foo"
    field: str = "count"
    other_field: str = "name"
    method: str = "run"


class TreeWriter:
    """Small wrapper over SyntaxTreeBuilder with line offsetting."""

    def __init__(self, line_count: int, offset: int = 0):
        self.builder = SyntaxTreeBuilder(JAVA_CONFIG, line_count)
        self.offset = offset

    def node(self, kind: str, start: int, end: int, parent: Optional[int]) -> int:
        return self.builder.add(kind, start + self.offset, end + self.offset, parent)

    def leaf(self, kind: str, line: int, parent: int, text: Optional[str] = None) -> int:
        return self.builder.add(kind, line + self.offset, line + self.offset, parent, text=text or kind)

    def build(self) -> SyntaxTree:
        return self.builder.build()


def sample_tree(offset: int = 0, names: SampleNames = SampleNames(), with_if: bool = True) -> SyntaxTree:
    """
    Build the sample Java tree.

    Args:
        offset: Blank lines inserted above the package declaration
        names: Identifier spellings
        with_if: False replaces the if statement by a bare statement
    """
    w = TreeWriter(SAMPLE_LINES + offset, offset)
    root = w.builder.add("program", 1, SAMPLE_LINES + offset)

    package = w.node("package_declaration", 1, 1, root)
    w.leaf("package", 1, package)
    w.leaf("identifier", 1, package, names.package)
    w.leaf(";", 1, package)

    imp = w.node("import_declaration", 2, 2, root)
    w.leaf("import", 2, imp)
    scoped = w.node("scoped_identifier", 2, 2, imp)
    w.leaf("identifier", 2, scoped, "java")
    w.leaf(".", 2, scoped)
    w.leaf("identifier", 2, scoped, "List")
    w.leaf(";", 2, imp)

    cls = w.node("class_declaration", 3, 11, root)
    modifiers = w.node("modifiers", 3, 3, cls)
    w.leaf("public", 3, modifiers)
    w.leaf("class", 3, cls)
    w.leaf("identifier", 3, cls, names.cls)
    body = w.node("class_body", 3, 11, cls)
    w.leaf("{", 3, body)

    field = w.node("field_declaration", 4, 4, body)
    modifiers = w.node("modifiers", 4, 4, field)
    w.leaf("private", 4, modifiers)
    w.leaf("integral_type", 4, field, "int")
    declarator = w.node("variable_declarator", 4, 4, field)
    w.leaf("identifier", 4, declarator, names.field)
    w.leaf("=", 4, declarator)
    w.leaf("decimal_integer_literal", 4, declarator, "0")
    w.leaf(";", 4, field)

    field = w.node("field_declaration", 5, 5, body)
    modifiers = w.node("modifiers", 5, 5, field)
    w.leaf("private", 5, modifiers)
    w.leaf("type_identifier", 5, field, "String")
    declarator = w.node("variable_declarator", 5, 5, field)
    w.leaf("identifier", 5, declarator, names.other_field)
    w.leaf(";", 5, field)

    method = w.node("method_declaration", 6, 10, body)
    modifiers = w.node("modifiers", 6, 6, method)
    w.leaf("public", 6, modifiers)
    w.leaf("void_type", 6, method, "void")
    w.leaf("identifier", 6, method, names.method)
    params = w.node("formal_parameters", 6, 6, method)
    w.leaf("(", 6, params)
    w.leaf(")", 6, params)
    block = w.node("block", 6, 10, method)
    w.leaf("{", 6, block)

    if with_if:
        stmt = w.node("if_statement", 7, 9, block)
        w.leaf("if", 7, stmt)
        cond = w.node("parenthesized_expression", 7, 7, stmt)
        w.leaf("(", 7, cond)
        binary = w.node("binary_expression", 7, 7, cond)
        w.leaf("identifier", 7, binary, names.field)
        w.leaf(">", 7, binary)
        w.leaf("decimal_integer_literal", 7, binary, "0")
        w.leaf(")", 7, cond)
        inner = w.node("block", 7, 9, stmt)
        w.leaf("{", 7, inner)
        expr = w.node("expression_statement", 8, 8, inner)
        update = w.node("update_expression", 8, 8, expr)
        w.leaf("identifier", 8, update, names.field)
        w.leaf("++", 8, update)
        w.leaf(";", 8, expr)
        w.leaf("}", 9, inner)
    else:
        expr = w.node("expression_statement", 7, 9, block)
        update = w.node("update_expression", 7, 9, expr)
        w.leaf("identifier", 7, update, names.field)
        w.leaf("++", 7, update)
        w.leaf(";", 9, expr)

    w.leaf("}", 10, block)
    w.leaf("}", 11, body)
    return w.build()


def package_only_tree() -> SyntaxTree:
    """`package com.example;` followed by nothing (package-info style)."""
    w = TreeWriter(1)
    root = w.builder.add("program", 1, 1)
    package = w.node("package_declaration", 1, 1, root)
    w.leaf("package", 1, package)
    w.leaf("identifier", 1, package, "example")
    w.leaf(";", 1, package)
    return w.build()


def class_without_package_tree() -> SyntaxTree:
    """`class Bare { int x; }` on three lines, no package or imports."""
    w = TreeWriter(3)
    root = w.builder.add("program", 1, 3)
    cls = w.node("class_declaration", 1, 3, root)
    w.leaf("class", 1, cls)
    w.leaf("identifier", 1, cls, "Bare")
    body = w.node("class_body", 1, 3, cls)
    w.leaf("{", 1, body)
    field = w.node("field_declaration", 2, 2, body)
    w.leaf("integral_type", 2, field, "int")
    declarator = w.node("variable_declarator", 2, 2, field)
    w.leaf("identifier", 2, declarator, "x")
    w.leaf(";", 2, field)
    w.leaf("}", 3, body)
    return w.build()


def empty_tree(line_count: int = 1) -> SyntaxTree:
    """A file holding nothing but comments: a root with no children."""
    w = TreeWriter(line_count)
    w.builder.add("program", 1, line_count)
    return w.build()


def make_issue(**overrides) -> Issue:
    """Issue with sensible defaults for the sample file."""
    values = dict(
        file_name="src/Foo.java",
        line=8,
        category="Coding",
        type="MagicNumber",
        message="'0' is a magic number.",
    )
    values.update(overrides)
    return Issue(**values)


class FakeProvider:
    """
    Stands in for TreeSitterProvider: returns prepared trees by file name.

    Args:
        trees: file name -> tree
        failing: file names whose parse raises ParseError
        crashing: file names whose parse raises RuntimeError
    """

    def __init__(
        self,
        trees: Optional[Dict[str, SyntaxTree]] = None,
        failing: Iterable[str] = (),
        crashing: Iterable[str] = (),
    ):
        self.trees = dict(trees or {})
        self.failing: Set[str] = set(failing)
        self.crashing: Set[str] = set(crashing)
        self.calls = []

    def parse_file(self, file_path: Path, source: str) -> SyntaxTree:
        name = Path(file_path).as_posix()
        self.calls.append(name)
        if name in self.crashing:
            raise RuntimeError("grammar download failed")
        if name in self.failing or name not in self.trees:
            raise ParseError(f"Cannot parse {name}", file_name=name)
        return self.trees[name]
