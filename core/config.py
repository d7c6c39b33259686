"""Configuration management and 1Password integration.

This module handles:
- Export and backup directory locations
- Snapshot file names for the v1 and v2 exports
- Loading/saving JSON files
- 1Password CLI availability check
"""

import json
import os
import subprocess
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent

# Snapshot directory (override with HUE_DASHBOARD_EXPORT_DIR)
EXPORT_DIR = Path(os.getenv('HUE_DASHBOARD_EXPORT_DIR', PROJECT_ROOT / 'config'))
BACKUPS_DIR = EXPORT_DIR.parent / 'backups'
USER_CONFIG_FILE = Path.home() / '.hue_dashboard' / 'config.json'

# Files written by each export, keyed by the top-level key they hold
V2_SNAPSHOT_FILES = {
    'lights': 'lights-v2.json',
    'rooms': 'rooms-v2.json',
    'scenes': 'scenes-v2.json',
    'devices': 'devices-v2.json',
}
V1_SNAPSHOT_FILES = {
    'lights': 'lights.json',
    'rooms': 'rooms.json',
    'scenes': 'scenes.json',
    'sensors': 'sensors.json',
    'bridge': 'bridge.json',
}

# Snapshot consumed by the dashboard: key -> file name
DASHBOARD_FILES = {
    'lights': 'lights-v2.json',
    'rooms': 'rooms-v2.json',
    'scenes': 'scenes-v2.json',
    'devices': 'devices-v2.json',
    'bridge': 'bridge.json',
    'scenes_v1': 'scenes.json',
}

APP_NAME = 'hue-dashboard'
REQUEST_TIMEOUT = 10


def is_op_available() -> bool:
    """Check if 1Password CLI is available."""
    try:
        result = subprocess.run(['op', '--version'],
                              capture_output=True,
                              timeout=2)
        return result.returncode == 0
    except (subprocess.TimeoutExpired, FileNotFoundError):
        return False


def load_json_file(path: Path) -> dict | None:
    """Load a JSON file.

    Returns:
        Parsed data, or None if the file doesn't exist
    """
    if not path.exists():
        return None
    with open(path, 'r') as f:
        return json.load(f)


def save_json_file(path: Path, data: dict):
    """Save data to a JSON file (indent 2), creating parent directories.

    Args:
        path: File to write
        data: JSON-serialisable data
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        json.dump(data, f, indent=2)
