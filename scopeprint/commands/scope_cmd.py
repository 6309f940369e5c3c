"""
ScopeCommand -- Show the scope, canonical stream and fingerprint of one line

Debugging aid for category routing: answers "what would a warning on
this line be fingerprinted with?"
"""

from typing import Optional

from ..commands.base import BaseCommand
from ..core.errors import InvalidAnchorError, ParseError
from ..core.issues import Issue
from ..fingerprint import ScopeKind

COMMAND_NAME = 'scope'

MAX_STREAM_TOKENS = 40


class ScopeCommand(BaseCommand):
    """Command that inspects scope selection for a single anchor."""

    def run(
        self,
        file: str,
        line: int,
        category: Optional[str] = None,
        scope: Optional[str] = None,
        full: bool = False,
    ) -> int:
        engine = self.engine()
        if scope:
            kind = ScopeKind.from_name(scope)
        else:
            kind = engine.categories.scope_for(Issue(file_name=file, line=line, category=category or ""))

        try:
            tree = engine.tree_for(file, engine.read_source(file))
            inspection = engine.inspect(tree, line, kind)
        except (ParseError, InvalidAnchorError) as e:
            print(f"Error: {e.message}")
            return 1

        fragment = inspection.fragment
        tokens = inspection.stream.tokens
        shown = tokens if full else tokens[:MAX_STREAM_TOKENS]
        suffix = "" if len(shown) == len(tokens) else f" ... (+{len(tokens) - len(shown)} more)"

        print(f"Requested: {fragment.requested.value}")
        print(f"Selected:  {fragment.kind.value}{' (fallback)' if fragment.degraded else ''}")
        if fragment.is_missing:
            print("Scope:     missing")
            return 1

        roots = ", ".join(
            f"{tree.node(i).kind}@{tree.node(i).start_line}-{tree.node(i).end_line}" for i in fragment.nodes
        )
        print(f"Roots:     {roots}")
        print(f"Tokens:    {len(tokens)}")
        print(f"Stream:    {' '.join(shown)}{suffix}")
        print(f"Fingerprint: {inspection.fingerprint}")
        return 0


def register_parser(subparsers):
    """Register scope command parser."""
    p = subparsers.add_parser('scope', help='Inspect the scope selected for one line')
    p.add_argument('file', help='Source file')
    p.add_argument('line', type=int, help='Anchor line (1-based)')
    group = p.add_mutually_exclusive_group()
    group.add_argument('--category', '-c', help='Warning category or check name')
    group.add_argument('--scope', choices=[k.value for k in ScopeKind], help='Scope kind to use directly')
    p.add_argument('--full', action='store_true', help='Print the whole canonical stream')
    return p


def handle(cli, args):
    """Handle scope command dispatch."""
    return ScopeCommand(cli).run(
        file=args.file,
        line=args.line,
        category=args.category,
        scope=args.scope,
        full=args.full,
    )
