"""Overview command - a one-screen summary of the exported setup."""

import click
from core.export import get_export_info
from models.colour import get_light_colour
from models.icons import get_room_icon
from models.scenes import scenes_for_room
from models.switch_cycles import parse_switch_scene_cycles
from models.utils import resource_name
from .helpers import get_snapshot, room_lights, palette


@click.command(name='overview')
def overview_command():
    """Show counts, rooms and switch scene cycles at a glance."""
    snapshot = get_snapshot()
    if not snapshot:
        return

    lights = snapshot['lights']
    lights_on = sum(1 for light in lights.values() if (light.get('state') or {}).get('on'))
    cycles = parse_switch_scene_cycles(snapshot['bridge'], snapshot['scenes_v1'])

    click.echo()
    click.secho("=== Hue Overview ===", fg='cyan', bold=True)
    click.echo()

    info = get_export_info()
    if info['exists'] and info['is_stale']:
        click.secho(f"⚠ Snapshot is {info['age_hours'] / 24:.1f} days old. Run 'hue-dashboard export' to refresh.",
                    fg='yellow')
        click.echo()

    counts = [
        ("Lights", f"{len(lights)} ({lights_on} on)"),
        ("Rooms", len(snapshot['rooms'])),
        ("Scenes", len(snapshot['scenes'])),
        ("Devices", len(snapshot['devices'])),
        ("Switch cycles", len(cycles)),
    ]
    label_width = max(len(label) for label, _ in counts)
    for label, value in counts:
        click.echo(f"  {label:<{label_width}}  {click.style(str(value), fg='green')}")

    rooms = sorted(snapshot['rooms'].values(), key=lambda r: resource_name(r).lower())
    if rooms:
        click.echo()
        click.secho("Rooms:", fg='cyan', bold=True)
        for room in rooms:
            room_light_list = room_lights(room, snapshot['devices'], lights)
            scene_count = len(scenes_for_room(snapshot['scenes'], room.get('id')))
            colours = palette([get_light_colour(light) for light in room_light_list])
            click.echo(f"  {get_room_icon(room.get('archetype'))} {resource_name(room)} "
                       f"{click.style(f'{len(room_light_list)} lights, {scene_count} scenes', fg='bright_black')} "
                       f"{colours}")

    if cycles:
        click.echo()
        click.secho("Switch scene cycles:", fg='cyan', bold=True)
        for cycle in cycles:
            names = ' → '.join(scene['name'] for scene in cycle['scenes'])
            click.echo(f"  🎚️ {cycle['switch_name']}: {click.style(names, fg='bright_black')}")
    click.echo()
