"""
Helper functions for dashboard commands.

Shared utilities used across multiple dashboard commands:
- Snapshot loading for commands
- Room membership of devices and lights
- Colour swatches
- Generic table display
"""

import click
from core.snapshot import load_snapshot
from models.colour import hex_to_rgb
from models.types import Snapshot
from models.utils import display_width, find_resource, find_similar_strings, resource_name

UNASSIGNED = 'Unassigned'


def get_snapshot() -> Snapshot | None:
    """Load the snapshot for a dashboard command (reports missing files)."""
    return load_snapshot()


def lookup_or_suggest(resources: dict[str, dict], query: str, kind: str) -> dict | None:
    """Find a resource by ID or name, printing suggestions when nothing matches.

    Args:
        resources: Exported resources keyed by ID
        query: ID or (partial) name typed by the user
        kind: Singular resource name for messages (e.g. 'light')
    """
    resource = find_resource(resources, query)
    if resource:
        return resource

    click.secho(f"✗ No {kind} matches '{query}'", fg='red')
    names = [resource_name(r, '') for r in resources.values()]
    suggestions = find_similar_strings(query, [n for n in names if n])
    if suggestions:
        click.echo(click.style("Did you mean one of these?", fg='yellow'))
        for name in suggestions:
            click.secho(f"  • {name}", fg='green')
    return None


def room_devices(room: dict, devices: dict[str, dict]) -> list[dict]:
    """Devices listed as children of a room."""
    return [
        devices[child['rid']]
        for child in room.get('children', [])
        if child.get('rtype') == 'device' and child.get('rid') in devices
    ]


def room_light_ids(room: dict, devices: dict[str, dict]) -> list[str]:
    """IDs of the lights in a room.

    Rooms list their devices; each device lists its light services. Lights
    listed directly as room children are included too.
    """
    light_ids = []
    for device in room_devices(room, devices):
        for service in device.get('services', []):
            if service.get('rtype') == 'light':
                light_ids.append(service.get('rid'))

    for child in room.get('children', []):
        if child.get('rtype') == 'light' and child.get('rid') not in light_ids:
            light_ids.append(child.get('rid'))
    return light_ids


def room_lights(room: dict, devices: dict[str, dict], lights: dict[str, dict]) -> list[dict]:
    """Exported lights in a room, in room order."""
    return [lights[light_id] for light_id in room_light_ids(room, devices) if light_id in lights]


def build_light_room_index(snapshot: Snapshot) -> dict[str, str]:
    """Map each light ID to the name of the room it is in."""
    index = {}
    for room in snapshot['rooms'].values():
        for light_id in room_light_ids(room, snapshot['devices']):
            index.setdefault(light_id, resource_name(room))
    return index


def find_device_room(device_id: str, rooms: dict[str, dict]) -> str:
    """Name of the room a device belongs to, or 'Unassigned'."""
    for room in rooms.values():
        if any(child.get('rid') == device_id for child in room.get('children', [])):
            return resource_name(room)
    return UNASSIGNED


def should_include_room(room_name: str, room_filter: str | None) -> bool:
    """Check if a row should be shown for a room filter (case-insensitive substring)."""
    if not room_filter:
        return True
    return room_filter.lower() in room_name.lower()


def swatch(hex_colour: str) -> str:
    """A two-character true-colour block for a hex colour."""
    return click.style('██', fg=tuple(hex_to_rgb(hex_colour)))


def palette(hex_colours: list[str]) -> str:
    """Swatches for several colours side by side."""
    return ''.join(swatch(c) for c in hex_colours)


def _cell_text(row: dict, col: dict) -> tuple[str, int]:
    """Styled text for a table cell and its display width."""
    key = col['key']
    value = row.get(key, '')

    if col.get('swatch'):
        colours = value if isinstance(value, list) else ([value] if value else [])
        return palette(colours), 2 * len(colours)

    text = str(value)
    width = display_width(text) if col.get('emoji') else len(text)
    return click.style(text, fg=col.get('color', 'white')), width


def display_table(
    rows: list[dict],
    columns: list[dict],
    title: str,
    group_key: str | None = 'room'
) -> None:
    """Display a table, optionally grouping rows by one column.

    Args:
        rows: List of dicts containing row data
        columns: List of column definitions with keys:
            - 'key': field name in row dict
            - 'header': column header text
            - 'color': click colour name (default: 'white')
            - 'emoji': True if the column contains emojis (uses display_width)
            - 'swatch': True if the value is a hex colour or list of hex colours
        title: Table title (e.g., "=== Lights ===")
        group_key: Column whose value is only shown on the first row of each
            group, or None for no grouping

    Example:
        columns = [
            {'key': 'room', 'header': 'Room'},
            {'key': 'colour', 'header': 'Colour', 'swatch': True},
            {'key': 'name', 'header': 'Light', 'emoji': True},
        ]
    """
    if not rows:
        return

    cells = [[_cell_text(row, col) for col in columns] for row in rows]
    widths = [
        max([len(col['header'])] + [cells[r][c][1] for r in range(len(rows))])
        for c, col in enumerate(columns)
    ]

    click.echo()
    click.secho(title, fg='cyan', bold=True)
    click.echo()

    header = ' │ '.join(col['header'].ljust(widths[c]) for c, col in enumerate(columns))
    click.secho(header, fg='cyan', bold=True)
    click.secho('─┼─'.join('─' * w for w in widths), fg='cyan')

    previous_group = None
    for row, row_cells in zip(rows, cells):
        parts = []
        for c, col in enumerate(columns):
            text, width = row_cells[c]
            if group_key and col['key'] == group_key:
                value = str(row.get(group_key, ''))
                if value != previous_group:
                    text = click.style(value, fg='bright_blue')
                else:
                    text = ''
                    width = 0
            parts.append(text + ' ' * (widths[c] - width))
        if group_key:
            previous_group = str(row.get(group_key, ''))
        click.echo(' │ '.join(parts))


def display_field(label: str, value, width: int = 14) -> None:
    """Print one 'Label: value' line of a detail view."""
    click.echo(f"  {click.style((label + ':').ljust(width), fg='cyan')} {value}")
