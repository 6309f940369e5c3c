"""
CompareCommand -- Classify a current snapshot against a reference snapshot
"""

from ..commands.base import BaseCommand
from ..core.matcher import IssueMatcher
from ..output import SnapshotError, load_snapshot, render_json, render_match_summary


class CompareCommand(BaseCommand):
    """Command that reports NEW, OUTSTANDING and FIXED issues."""

    def run(
        self,
        reference: str,
        current: str,
        output_format: str = "summary",
        verbose: bool = False,
        fail_on_new: bool = False,
    ) -> int:
        """
        Compare two snapshots.

        Returns:
            Exit code: 1 on unreadable snapshots, or when fail_on_new is
            set and new issues exist; 0 otherwise
        """
        try:
            reference_issues = load_snapshot(self.resolve(reference))
            current_issues = load_snapshot(self.resolve(current))
        except SnapshotError as e:
            print(f"Error: {e}")
            return 1

        report = IssueMatcher().classify(reference_issues, current_issues)

        if output_format == "json":
            print(render_json(report.to_dict()))
        else:
            print(render_match_summary(report, verbose=verbose))

        if fail_on_new and report.new:
            return 1
        return 0


def register_parser(subparsers):
    """Register compare command parser."""
    p = subparsers.add_parser('compare', help='Classify issues as new, outstanding or fixed')
    p.add_argument('reference', help='Snapshot of the previous scan')
    p.add_argument('current', help='Snapshot of the latest scan')
    p.add_argument('--format', dest='output_format', choices=['summary', 'json'], default='summary',
                   help='Output format (default: summary)')
    p.add_argument('--all', '-a', dest='show_all', action='store_true', help='Also list outstanding issues')
    p.add_argument('--fail-on-new', action='store_true', help='Exit with 1 when new issues exist')
    return p


def handle(cli, args):
    """Handle compare command dispatch."""
    return CompareCommand(cli).run(
        reference=args.reference,
        current=args.current,
        output_format=args.output_format,
        verbose=args.show_all,
        fail_on_new=args.fail_on_new,
    )
