"""
FingerprintCommand -- Parse a tool report and fingerprint its issues

Flow: report file -> parser -> configured filter -> engine -> snapshot
"""

from typing import Optional

from ..commands.base import BaseCommand
from ..core.errors import ParseError
from ..core.filter import IssueFilter
from ..output import render_fingerprint_summary, render_json, save_snapshot
from ..parsers import available_parsers, get_parser

COMMAND_NAME = 'fingerprint'


class FingerprintCommand(BaseCommand):
    """Command that turns a tool report into a fingerprinted snapshot."""

    def run(
        self,
        report: str,
        parser_name: str,
        source_root: Optional[str] = None,
        output: Optional[str] = None,
        output_format: str = "summary",
        apply_filters: bool = True,
    ) -> int:
        """
        Fingerprint the issues of one report.

        Args:
            report: Path of the tool's report file
            parser_name: Parser for the report format
            source_root: Directory the report's file names are relative to
            output: Snapshot file to write; printed as JSON when omitted
            output_format: "summary" or "json" for stdout
            apply_filters: Apply the configured include/exclude filters

        Returns:
            Exit code
        """
        config = self.config
        try:
            issues = get_parser(parser_name).parse_file(
                self.resolve(report), encoding=config.fingerprint.encoding
            )
        except (OSError, ParseError) as e:
            print(f"Error: cannot read report {report}: {e}")
            return 1

        if apply_filters:
            issues = IssueFilter.from_settings(config.filters).filter(issues)

        root = self.resolve(source_root) if source_root else self.project_dir
        result = self.engine(root).fingerprint(issues)

        if output:
            save_snapshot(self.resolve(output), result.issues)

        if output_format == "json":
            print(render_json(result.to_dict()))
        else:
            print(render_fingerprint_summary(result))
            if output:
                print(f"Snapshot written to {output}")
        return 0


def register_parser(subparsers):
    """Register fingerprint command parser."""
    p = subparsers.add_parser('fingerprint', help='Fingerprint the issues of a tool report')
    p.add_argument('report', help='Tool report file (e.g. checkstyle-result.xml)')
    p.add_argument('--parser', dest='parser_name', required=True, choices=available_parsers(),
                   help='Report format')
    p.add_argument('--source-root', '-s',
                   help='Directory the report file names are relative to (default: project)')
    p.add_argument('--output', '-o', help='Write a snapshot file')
    p.add_argument('--format', dest='output_format', choices=['summary', 'json'], default='summary',
                   help='Output format (default: summary)')
    p.add_argument('--no-filter', action='store_true', help='Ignore configured filters')
    return p


def handle(cli, args):
    """Handle fingerprint command dispatch."""
    return FingerprintCommand(cli).run(
        report=args.report,
        parser_name=args.parser_name,
        source_root=args.source_root,
        output=args.output,
        output_format=args.output_format,
        apply_filters=not args.no_filter,
    )

