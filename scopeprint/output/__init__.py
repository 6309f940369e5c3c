"""
Output -- Snapshot persistence and report rendering
"""

from .snapshot import SnapshotError, dump_snapshot, load_snapshot, save_snapshot
from .report import render_fingerprint_summary, render_json, render_match_summary

__all__ = [
    'SnapshotError', 'dump_snapshot', 'load_snapshot', 'save_snapshot',
    'render_fingerprint_summary', 'render_json', 'render_match_summary',
]
