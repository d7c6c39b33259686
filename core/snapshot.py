"""Snapshot loading for the dashboard.

Reads the JSON files written by the export commands and assembles them into a
single Snapshot dict. The v2 files are required; the v1 files (bridge rules and
v1 scenes) are only needed for switch scene cycles and default to empty.
"""

import json
from pathlib import Path

import click

from core.config import EXPORT_DIR, DASHBOARD_FILES, load_json_file
from models.types import Snapshot

REQUIRED_KEYS = ('lights', 'rooms', 'scenes', 'devices')


def _read_snapshot_file(path: Path) -> dict | None:
    """Read one snapshot file, reporting unreadable files."""
    try:
        return load_json_file(path)
    except (OSError, json.JSONDecodeError) as e:
        click.echo(f"Error reading {path.name}: {e}", err=True)
        return None


def load_snapshot(export_dir: Path = EXPORT_DIR) -> Snapshot | None:
    """Load the exported bridge data.

    Args:
        export_dir: Directory containing the snapshot files

    Returns:
        Snapshot dict, or None if a required file is missing or unreadable
    """
    snapshot = {}

    for key, file_name in DASHBOARD_FILES.items():
        data = _read_snapshot_file(export_dir / file_name)

        if data is None:
            if key in REQUIRED_KEYS:
                click.secho(f"✗ Missing snapshot file: {file_name}", fg='red', err=True)
                click.echo("Run 'hue-dashboard export' to fetch data from the bridge.", err=True)
                return None
            data = {}

        # v1 files are kept whole: bridge.json has several top-level keys
        if key in ('bridge', 'scenes_v1'):
            snapshot[key] = data
        else:
            snapshot[key] = data.get(key) or {}

    return snapshot
