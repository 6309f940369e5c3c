"""
Tests for canonicalization and hashing

Tests verify:
- Streams hold node kinds in pre-order, never identifier text
- Renames and line shifts leave the stream unchanged
- Structural edits change it
- Digest determinism, context separation and algorithm choice
"""

import hashlib

import pytest

from scopeprint.core.errors import ConfigError
from scopeprint.core.parsing.languages import JAVA_CONFIG
from scopeprint.core.parsing.tree import SyntaxTreeBuilder
from scopeprint.fingerprint.canonical import CanonicalTokenStream, canonicalize
from scopeprint.fingerprint.hasher import SUPPORTED_ALGORITHMS, FingerprintHasher
from scopeprint.fingerprint.selectors import ScopeFragment, ScopeKind, select_scope

from tests.factories import SampleNames, sample_tree


def stream_at(tree, line, kind):
    return canonicalize(tree, select_scope(tree, line, kind))


class TestCanonicalize:
    """Kind-only token streams."""

    def test_environment_stream(self):
        tree = sample_tree()

        stream = stream_at(tree, 8, ScopeKind.ENVIRONMENT)

        assert stream.text() == (
            "if_statement if parenthesized_expression ( binary_expression identifier > "
            "decimal_integer_literal ) block { expression_statement update_expression "
            "identifier ++ ; }"
        )

    def test_multiple_roots_concatenate_in_order(self):
        tree = sample_tree()

        stream = stream_at(tree, 4, ScopeKind.INSTANCE_VARIABLE)

        assert stream.tokens[0] == "field_declaration"
        assert stream.tokens.count("field_declaration") == 2
        assert stream.tokens[-1] == ";"

    def test_no_identifier_text(self):
        tree = sample_tree(names=SampleNames(field="veryDistinctName"))

        stream = stream_at(tree, 8, ScopeKind.FILE)

        assert "veryDistinctName" not in stream.text()

    def test_rename_invariance(self):
        renamed = SampleNames(package="other", cls="Bar", field="total", other_field="label", method="go")

        for kind in ScopeKind:
            assert stream_at(sample_tree(), 8, kind) == stream_at(sample_tree(names=renamed), 8, kind)

    def test_line_shift_invariance(self):
        for kind in ScopeKind:
            assert stream_at(sample_tree(), 8, kind) == stream_at(sample_tree(offset=5), 13, kind)

    def test_structural_change_alters_stream(self):
        assert stream_at(sample_tree(), 8, ScopeKind.METHOD) != stream_at(sample_tree(with_if=False), 8, ScopeKind.METHOD)

    def test_empty_fragment(self):
        tree = sample_tree()
        stream = canonicalize(tree, ScopeFragment((), ScopeKind.FILE, ScopeKind.METHOD))

        assert len(stream) == 0
        assert stream.text() == ""

    def test_stream_len(self):
        assert len(CanonicalTokenStream(("a", "b"))) == 2


class TestFingerprintHasher:
    """Digest function."""

    def test_default_is_sha256(self):
        hasher = FingerprintHasher()

        assert hasher.algorithm == "sha256"
        assert hasher.hash("a b c") == hashlib.sha256(b"a b c").hexdigest()

    def test_deterministic(self):
        hasher = FingerprintHasher()
        assert hasher.hash("x y") == hasher.hash("x y")

    def test_context_changes_digest(self):
        hasher = FingerprintHasher()

        plain = hasher.hash("x y")
        with_context = hasher.hash("x y", context="core")

        assert plain != with_context
        assert with_context == hashlib.sha256(b"core\nx y").hexdigest()

    @pytest.mark.parametrize("algorithm", SUPPORTED_ALGORITHMS)
    def test_supported_algorithms(self, algorithm):
        hasher = FingerprintHasher(algorithm)
        digest = hasher.hash("class_declaration")

        assert len(digest) == hasher.digest_size * 2
        assert digest == digest.lower()

    @pytest.mark.parametrize("algorithm", ["md5", "crc32", "sha1"])
    def test_rejects_weak_or_unknown(self, algorithm):
        with pytest.raises(ConfigError):
            FingerprintHasher(algorithm)

    def test_algorithm_list(self):
        assert SUPPORTED_ALGORITHMS == ("sha256", "sha384", "sha512", "sha3_256", "blake2b")

    @pytest.mark.parametrize("algorithm", ["sha3_512", "blake2s"])
    def test_rejects_unlisted_hashlib_algorithms(self, algorithm):
        with pytest.raises(ConfigError):
            FingerprintHasher(algorithm)

    def test_different_algorithms_differ(self):
        assert FingerprintHasher("sha256").hash("a") != FingerprintHasher("sha512").hash("a")


def call_with_string(*parts):
    """Tree for `log("...");` with the string literal split into `parts`."""
    builder = SyntaxTreeBuilder(JAVA_CONFIG, 1)
    root = builder.add("program", 1, 1)
    stmt = builder.add("expression_statement", 1, 1, root)
    call = builder.add("method_invocation", 1, 1, stmt)
    builder.add("identifier", 1, 1, call, text="log")
    args = builder.add("argument_list", 1, 1, call)
    builder.add("(", 1, 1, args, text="(")
    literal = builder.add("string_literal", 1, 1, args)
    builder.add('"', 1, 1, literal, text='"')
    for kind in parts:
        builder.add(kind, 1, 1, literal, text="x")
    builder.add('"', 1, 1, literal, text='"')
    builder.add(")", 1, 1, args, text=")")
    builder.add(";", 1, 1, stmt, text=";")
    return builder.build()


class TestLiterals:
    """String contents never reach the stream."""

    def test_literal_is_one_token(self):
        stream = stream_at(call_with_string("string_fragment"), 1, ScopeKind.FILE)

        assert stream.text() == (
            "expression_statement method_invocation identifier argument_list "
            "( string_literal ) ;"
        )

    @pytest.mark.parametrize("parts", [
        (),
        ("string_fragment",),
        ("string_fragment", "escape_sequence"),
        ("escape_sequence", "string_fragment", "escape_sequence"),
    ])
    def test_value_invariance(self, parts):
        base = stream_at(call_with_string("string_fragment"), 1, ScopeKind.FILE)

        assert stream_at(call_with_string(*parts), 1, ScopeKind.FILE) == base
