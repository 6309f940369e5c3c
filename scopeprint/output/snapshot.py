"""
Snapshots -- Persist fingerprinted issues between scans

A snapshot is one JSON document:
    {"version": 1, "issues": [{...Issue.to_dict()...}, ...]}

The `compare` command loads two snapshots and classifies them.
"""

from pathlib import Path

import orjson

from ..core.issues import Issues

SNAPSHOT_VERSION = 1


class SnapshotError(ValueError):
    """Snapshot file unreadable or of an unknown version."""


def dump_snapshot(issues: Issues) -> bytes:
    return orjson.dumps(
        {"version": SNAPSHOT_VERSION, "issues": issues.to_dicts()},
        option=orjson.OPT_INDENT_2,
    )


def save_snapshot(path: Path, issues: Issues) -> None:
    """Write issues to a snapshot file, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(dump_snapshot(issues))


def load_snapshot(path: Path) -> Issues:
    """
    Read a snapshot file.

    Raises:
        SnapshotError: If the file is missing, malformed or from a newer version
    """
    try:
        data = orjson.loads(Path(path).read_bytes())
    except (OSError, orjson.JSONDecodeError) as e:
        raise SnapshotError(f"Cannot read snapshot {path}: {e}") from e

    if not isinstance(data, dict) or "issues" not in data:
        raise SnapshotError(f"Not a snapshot: {path}")
    version = data.get("version")
    if version != SNAPSHOT_VERSION:
        raise SnapshotError(f"Unsupported snapshot version {version!r} in {path}")

    return Issues.from_dicts(data["issues"])
