"""Snapshot export of Hue Bridge configuration.

This module fetches bridge data through HueController, reshapes it into the
snapshot files the dashboard reads, writes them to the export directory and
copies them into a timestamped backup directory. It also reports snapshot
age and resource counts.
"""

import shutil
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import TYPE_CHECKING
import click

from core.config import (
    EXPORT_DIR,
    BACKUPS_DIR,
    V1_SNAPSHOT_FILES,
    V2_SNAPSHOT_FILES,
    load_json_file,
    save_json_file,
)

if TYPE_CHECKING:
    from core.controller import HueController

STALE_AFTER_HOURS = 24


def reshape_light_v2(light: dict) -> dict:
    """Reshape a v2 light into the exported form with a flat 'state' dict."""
    metadata = light.get('metadata', {})
    dimming = light.get('dimming')
    colour_temperature = light.get('color_temperature')
    colour = light.get('color')
    xy = (colour or {}).get('xy')

    return {
        'id': light['id'],
        'id_v1': light.get('id_v1'),
        'name': metadata.get('name'),
        'archetype': metadata.get('archetype'),
        'function': metadata.get('function'),
        'state': {
            'on': light.get('on', {}).get('on', False),
            'brightness': (dimming or {}).get('brightness') or None,
            'color_temperature': (colour_temperature or {}).get('mirek') or None,
            'color_xy': {'x': xy['x'], 'y': xy['y']} if xy else None,
        },
        'capabilities': {
            'dimming': dimming or None,
            'color_temperature': colour_temperature or None,
            'color': colour or None,
        },
        'type': light.get('type'),
        'mode': light.get('mode'),
    }


def reshape_room_v2(room: dict) -> dict:
    """Reshape a v2 room into the exported form."""
    metadata = room.get('metadata', {})
    return {
        'id': room['id'],
        'id_v1': room.get('id_v1'),
        'name': metadata.get('name'),
        'archetype': metadata.get('archetype'),
        'children': room.get('children', []),
        'services': room.get('services', []),
        'type': room.get('type'),
    }


def reshape_scene_v2(scene: dict) -> dict:
    """Reshape a v2 scene into the exported form."""
    metadata = scene.get('metadata', {})
    return {
        'id': scene['id'],
        'id_v1': scene.get('id_v1'),
        'name': metadata.get('name'),
        'image': metadata.get('image'),
        'group': scene.get('group'),
        'actions': scene.get('actions', []),
        'speed': scene.get('speed'),
        'auto_dynamic': scene.get('auto_dynamic'),
        'type': scene.get('type'),
        'status': scene.get('status'),
    }


def reshape_device_v2(device: dict) -> dict:
    """Reshape a v2 device into the exported form."""
    metadata = device.get('metadata', {})
    return {
        'id': device['id'],
        'id_v1': device.get('id_v1'),
        'name': metadata.get('name'),
        'archetype': metadata.get('archetype'),
        'product_data': device.get('product_data', {}),
        'services': device.get('services', []),
        'type': device.get('type'),
    }


def reshape_light_v1(light_id: str, light: dict) -> dict:
    """Reshape a v1 light into the exported form."""
    state = light.get('state', {})
    return {
        'id': light_id,
        'name': light.get('name'),
        'type': light.get('type'),
        'modelid': light.get('modelid'),
        'manufacturername': light.get('manufacturername'),
        'productname': light.get('productname') or '',
        'state': {
            'on': state.get('on', False),
            'brightness': state.get('bri') or None,
            'hue': state.get('hue') or None,
            'saturation': state.get('sat') or None,
            'xy': state.get('xy') or None,
            'color_temperature': state.get('ct') or None,
            'colormode': state.get('colormode') or None,
            'reachable': state.get('reachable'),
        },
        'uniqueid': light.get('uniqueid'),
        'swversion': light.get('swversion'),
    }


def reshape_group_v1(group_id: str, group: dict) -> dict:
    """Reshape a v1 group (room, zone, ...) into the exported form."""
    return {
        'id': group_id,
        'name': group.get('name'),
        'type': group.get('type'),
        'class': group.get('class') or 'Other',
        'lights': group.get('lights', []),
        'state': group.get('state'),
        'recycle': group.get('recycle'),
        'action': group.get('action'),
    }


def reshape_scene_v1(scene_id: str, scene: dict) -> dict:
    """Reshape a v1 scene into the exported form (used for switch cycle names)."""
    return {
        'id': scene_id,
        'name': scene.get('name'),
        'type': scene.get('type'),
        'group': scene.get('group') or '0',
        'lights': scene.get('lights', []),
        'owner': scene.get('owner'),
        'recycle': scene.get('recycle'),
        'locked': scene.get('locked'),
        'appdata': scene.get('appdata'),
        'picture': scene.get('picture') or '',
        'image': scene.get('image') or '',
        'lastupdated': scene.get('lastupdated'),
        'version': scene.get('version'),
    }


def backup_timestamp(now: datetime | None = None) -> str:
    """UTC timestamp safe for directory names, e.g. '2025-01-31T09-15-02-123Z'."""
    now = now or datetime.now(timezone.utc)
    return now.strftime('%Y-%m-%dT%H-%M-%S-') + f"{now.microsecond // 1000:03d}Z"


def create_backup(file_names: list[str], prefix: str = 'backup',
                  export_dir: Path = EXPORT_DIR, backups_dir: Path = BACKUPS_DIR) -> Path | None:
    """Copy exported files into backups/<prefix>-<timestamp>/.

    Files missing from the export directory are skipped.

    Returns:
        Path to the backup directory, or None if it couldn't be written
    """
    backup_dir = backups_dir / f"{prefix}-{backup_timestamp()}"

    try:
        backup_dir.mkdir(parents=True, exist_ok=True)
        for file_name in file_names:
            source = export_dir / file_name
            if source.exists():
                shutil.copyfile(source, backup_dir / file_name)
    except OSError as e:
        click.secho(f"✗ Backup to {backup_dir} failed: {e}", fg='red', err=True)
        return None

    return backup_dir


def _write_snapshot(export_dir: Path, file_name: str, key: str, items: dict, label: str) -> bool:
    """Write {key: items} to a snapshot file, or warn if there is nothing to write."""
    if not items:
        click.secho(f"⚠ No {label} found", fg='yellow')
        return False

    try:
        save_json_file(export_dir / file_name, {key: items})
    except OSError as e:
        click.secho(f"✗ Could not write {file_name}: {e}", fg='red', err=True)
        return False
    click.secho(f"✓ Exported {len(items)} {label} to {file_name}", fg='green')
    return True


def export_v2(controller: 'HueController', export_dir: Path = EXPORT_DIR) -> list[str]:
    """Export lights, rooms, scenes and devices from the v2 API.

    Args:
        controller: Connected HueController
        export_dir: Directory to write the snapshot files to

    Returns:
        Names of the files written
    """
    click.secho("Exporting configuration (API v2)...", fg='cyan')

    sources = [
        ('lights', controller.get_lights, reshape_light_v2),
        ('rooms', controller.get_rooms, reshape_room_v2),
        ('scenes', controller.get_scenes, reshape_scene_v2),
        ('devices', controller.get_devices, reshape_device_v2),
    ]

    written = []
    for key, fetch, reshape in sources:
        items = {item['id']: reshape(item) for item in fetch() if 'id' in item}
        file_name = V2_SNAPSHOT_FILES[key]
        if _write_snapshot(export_dir, file_name, key, items, key):
            written.append(file_name)
    return written


def export_v1(controller: 'HueController', export_dir: Path = EXPORT_DIR) -> list[str]:
    """Export lights, groups, scenes, sensors and bridge rules from the v1 API.

    Returns:
        Names of the files written (empty if the v1 configuration couldn't be fetched)
    """
    click.secho("Exporting configuration (API v1)...", fg='cyan')

    config = controller.get_full_config_v1()
    if not config:
        click.secho("✗ Failed to fetch bridge configuration", fg='red')
        return []

    lights = {i: reshape_light_v1(i, light) for i, light in (config.get('lights') or {}).items()}
    rooms = {i: reshape_group_v1(i, group) for i, group in (config.get('groups') or {}).items()}
    scenes = {i: reshape_scene_v1(i, scene) for i, scene in (config.get('scenes') or {}).items()}
    sensors = {i: {'id': i, **sensor} for i, sensor in (config.get('sensors') or {}).items()}

    written = []
    for key, items, label in [
        ('lights', lights, 'lights'),
        ('rooms', rooms, 'rooms/groups'),
        ('scenes', scenes, 'scenes'),
        ('sensors', sensors, 'sensors'),
    ]:
        file_name = V1_SNAPSHOT_FILES[key]
        if _write_snapshot(export_dir, file_name, key, items, label):
            written.append(file_name)

    bridge_config = {
        'config': config.get('config'),
        'schedules': config.get('schedules'),
        'rules': config.get('rules'),
        'resourcelinks': config.get('resourcelinks'),
    }
    try:
        save_json_file(export_dir / V1_SNAPSHOT_FILES['bridge'], bridge_config)
    except OSError as e:
        click.secho(f"✗ Could not write {V1_SNAPSHOT_FILES['bridge']}: {e}", fg='red', err=True)
        return written
    click.secho(f"✓ Exported bridge configuration to {V1_SNAPSHOT_FILES['bridge']}", fg='green')
    written.append(V1_SNAPSHOT_FILES['bridge'])

    return written


def export_all(controller: 'HueController', api: str = 'all',
               export_dir: Path = EXPORT_DIR, backups_dir: Path = BACKUPS_DIR) -> bool:
    """Run the requested exports and back up what was written.

    Args:
        controller: Connected HueController
        api: 'v1', 'v2' or 'all'

    Returns:
        True if at least one file was written
    """
    written_any = False

    if api in ('v2', 'all'):
        written = export_v2(controller, export_dir)
        if written:
            backup_dir = create_backup(written, 'backup-v2', export_dir, backups_dir)
            if backup_dir:
                click.echo(f"Backup saved to {backup_dir}")
            written_any = True

    if api in ('v1', 'all'):
        written = export_v1(controller, export_dir)
        if written:
            backup_dir = create_backup(written, 'backup', export_dir, backups_dir)
            if backup_dir:
                click.echo(f"Backup saved to {backup_dir}")
            written_any = True

    return written_any


def get_export_info(export_dir: Path = EXPORT_DIR) -> dict:
    """Get information about the current snapshot files.

    Returns:
        Dictionary with exists, last_updated (ISO timestamp of the newest file),
        age_hours, is_stale, counts of exported resources and missing files
    """
    all_files = {**{f: k for k, f in V2_SNAPSHOT_FILES.items()},
                 **{f: k for k, f in V1_SNAPSHOT_FILES.items()}}
    present = [f for f in all_files if (export_dir / f).exists()]

    if not present:
        return {
            'exists': False,
            'last_updated': None,
            'age_hours': None,
            'is_stale': True,
            'counts': {},
            'missing': sorted(all_files),
        }

    newest = max((export_dir / f).stat().st_mtime for f in present)
    last_updated = datetime.fromtimestamp(newest)
    age = datetime.now() - last_updated

    counts = {}
    for file_name in present:
        key = all_files[file_name]
        if key == 'bridge':
            continue
        try:
            data = load_json_file(export_dir / file_name) or {}
        except ValueError:
            click.echo(f"Warning: {file_name} is not valid JSON", err=True)
            continue
        counts[file_name] = len(data.get(key) or {})

    return {
        'exists': True,
        'last_updated': last_updated.isoformat(),
        'age_hours': age.total_seconds() / 3600,
        'is_stale': age > timedelta(hours=STALE_AFTER_HOURS),
        'counts': counts,
        'missing': sorted(f for f in all_files if f not in present),
    }
