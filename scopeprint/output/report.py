"""
Report rendering -- Plain-text summaries and JSON for piping
"""

from typing import Any, Dict, List

import orjson

from ..core.matcher import Classification, MatchReport
from ..fingerprint.engine import FingerprintReport

_STATUS_LABELS = {
    Classification.NEW: "NEW",
    Classification.OUTSTANDING: "OUTSTANDING",
    Classification.FIXED: "FIXED",
}


def render_json(data: Dict[str, Any], compact: bool = False) -> str:
    """Serialize a to_dict() payload."""
    option = 0 if compact else orjson.OPT_INDENT_2
    return orjson.dumps(data, option=option).decode("utf-8")


def _short(fingerprint: str) -> str:
    return fingerprint[:12] if fingerprint else "-"


def render_match_summary(report: MatchReport, verbose: bool = False) -> str:
    """
    Human-readable comparison summary.

    Args:
        report: Result of IssueMatcher.classify()
        verbose: Also list OUTSTANDING issues

    Returns:
        Multi-line text
    """
    counts = report.counts()
    lines: List[str] = [
        f"New: {counts['new']}  Outstanding: {counts['outstanding']}  Fixed: {counts['fixed']}",
    ]

    for result in report.results:
        if result.status is Classification.OUTSTANDING and not verbose:
            continue
        issue = result.issue
        location = f"{issue.file_name}:{issue.line}" if issue.file_name else "(global)"
        lines.append(
            f"  {_STATUS_LABELS[result.status]:<11} {location} "
            f"[{issue.category or issue.type}] {issue.message} ({_short(issue.fingerprint)})"
        )

    return "\n".join(lines)


def render_fingerprint_summary(report: FingerprintReport) -> str:
    """Human-readable fingerprinting summary with file diagnostics."""
    lines = [
        f"Issues: {len(report.issues)}  Fingerprinted: {report.fingerprinted}  "
        f"Unmatchable: {report.unmatchable}",
    ]
    for diagnostic in report.diagnostics:
        lines.append(f"  {diagnostic.kind.value}: {diagnostic.file_name}: {diagnostic.message}")
    return "\n".join(lines)
