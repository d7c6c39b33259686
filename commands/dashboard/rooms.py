"""Room commands - show rooms with their devices, lights and scenes."""

import click
from models.colour import get_light_colour, format_brightness
from models.icons import get_room_icon, get_light_icon, get_device_icon
from models.scenes import scenes_for_room, scene_emoji, get_scene_colours
from models.utils import resource_name
from .helpers import (
    get_snapshot,
    lookup_or_suggest,
    room_devices,
    room_lights,
    display_table,
    display_field,
    swatch,
    palette,
)


@click.command(name='rooms')
def rooms_command():
    """List rooms with light, device and scene counts."""
    snapshot = get_snapshot()
    if not snapshot:
        return

    rows = []
    for room_id, room in snapshot['rooms'].items():
        lights = room_lights(room, snapshot['devices'], snapshot['lights'])
        rows.append({
            'name': f"{get_room_icon(room.get('archetype'))} {resource_name(room)}",
            'lights': len(lights),
            'on': sum(1 for light in lights if (light.get('state') or {}).get('on')),
            'devices': len(room_devices(room, snapshot['devices'])),
            'scenes': len(scenes_for_room(snapshot['scenes'], room_id)),
            'sort_name': resource_name(room).lower(),
        })

    if not rows:
        click.echo("No rooms found.")
        return

    rows.sort(key=lambda r: r['sort_name'])

    display_table(rows, [
        {'key': 'name', 'header': 'Room', 'emoji': True, 'color': 'green'},
        {'key': 'lights', 'header': 'Lights'},
        {'key': 'on', 'header': 'On', 'color': 'yellow'},
        {'key': 'devices', 'header': 'Devices'},
        {'key': 'scenes', 'header': 'Scenes'},
    ], "=== Rooms ===", group_key=None)
    click.echo()


@click.command(name='room')
@click.argument('query')
def room_command(query: str):
    """Show one room with its devices, lights and scenes.

    QUERY is the room's ID or name.
    """
    snapshot = get_snapshot()
    if not snapshot:
        return

    room = lookup_or_suggest(snapshot['rooms'], query, 'room')
    if not room:
        return

    devices = room_devices(room, snapshot['devices'])
    lights = room_lights(room, snapshot['devices'], snapshot['lights'])
    scenes = scenes_for_room(snapshot['scenes'], room.get('id'))

    click.echo()
    click.secho(f"=== {get_room_icon(room.get('archetype'))} {resource_name(room)} ===", fg='cyan', bold=True)
    click.echo()
    display_field('ID', room.get('id'))
    display_field('Archetype', room.get('archetype') or 'other')

    click.echo()
    click.secho(f"Lights ({len(lights)}):", fg='cyan', bold=True)
    for light in lights:
        state = light.get('state') or {}
        status = format_brightness(state.get('brightness')) if state.get('on') else 'off'
        click.echo(f"  {swatch(get_light_colour(light))} {get_light_icon(light.get('archetype'))} "
                   f"{resource_name(light)} {click.style(status, fg='bright_black')}")
    if not lights:
        click.echo("  (none)")

    click.echo()
    click.secho(f"Devices ({len(devices)}):", fg='cyan', bold=True)
    for device in devices:
        product = (device.get('product_data') or {}).get('product_name', '')
        click.echo(f"  {get_device_icon(device)} {resource_name(device)} {click.style(product, fg='bright_black')}")
    if not devices:
        click.echo("  (none)")

    click.echo()
    click.secho(f"Scenes ({len(scenes)}):", fg='cyan', bold=True)
    for scene in scenes:
        name = resource_name(scene)
        click.echo(f"  {scene_emoji(name)} {name} {palette(get_scene_colours(scene))}")
    if not scenes:
        click.echo("  (none)")
    click.echo()
