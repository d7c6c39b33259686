"""
Light commands.

Commands for viewing lights with their current colour, brightness and
colour temperature.
"""

import click
from models.colour import get_light_colour, format_brightness, format_temperature, temperature_swatch
from models.icons import get_light_icon
from models.utils import resource_name
from .helpers import (
    UNASSIGNED,
    get_snapshot,
    lookup_or_suggest,
    build_light_room_index,
    should_include_room,
    display_table,
    display_field,
    swatch,
)


def light_row(light: dict, room_name: str) -> dict:
    """Table row for one exported light."""
    state = light.get('state') or {}
    is_on = bool(state.get('on'))
    return {
        'room': room_name,
        'colour': get_light_colour(light),
        'name': f"{get_light_icon(light.get('archetype'))} {resource_name(light)}",
        'status': 'ON' if is_on else 'OFF',
        'brightness': format_brightness(state.get('brightness')) if is_on else '',
        'temperature': format_temperature(state.get('color_temperature')),
    }


@click.command(name='lights')
@click.option('--room', '-r', help='Filter lights by room name')
def lights_command(room: str | None):
    """Display lights with their colour, brightness and temperature.

    Shows every exported light with a true-colour swatch of its current
    colour, organised by room.

    \b
    Examples:
      hue-dashboard lights              # All lights
      hue-dashboard lights -r lounge    # Only lounge lights
    """
    snapshot = get_snapshot()
    if not snapshot:
        return

    room_index = build_light_room_index(snapshot)

    rows = []
    for light_id, light in snapshot['lights'].items():
        room_name = room_index.get(light_id, UNASSIGNED)
        if should_include_room(room_name, room):
            rows.append(light_row(light, room_name))

    if not rows:
        if room:
            click.echo(f"No lights found matching room '{room}'.")
        else:
            click.echo("No lights found.")
        return

    rows.sort(key=lambda r: (r['room'] == UNASSIGNED, r['room'], r['name']))

    display_table(rows, [
        {'key': 'room', 'header': 'Room'},
        {'key': 'colour', 'header': 'Col', 'swatch': True},
        {'key': 'name', 'header': 'Light', 'emoji': True},
        {'key': 'status', 'header': 'Status', 'color': 'green'},
        {'key': 'brightness', 'header': 'Bright'},
        {'key': 'temperature', 'header': 'Temp', 'color': 'bright_black'},
    ], "=== Lights ===")

    on_count = sum(1 for r in rows if r['status'] == 'ON')
    click.echo()
    click.secho("Summary:", fg='cyan', bold=True)
    click.echo(f"  Total lights: {len(rows)} ({on_count} on)")
    click.echo()


@click.command(name='light')
@click.argument('query')
def light_command(query: str):
    """Show one light with its state and capabilities.

    QUERY is the light's ID or name (case-insensitive, partial names work
    when they are unique).
    """
    snapshot = get_snapshot()
    if not snapshot:
        return

    light = lookup_or_suggest(snapshot['lights'], query, 'light')
    if not light:
        return

    state = light.get('state') or {}
    capabilities = light.get('capabilities') or {}
    colour = get_light_colour(light)
    mirek = state.get('color_temperature')
    room_name = build_light_room_index(snapshot).get(light.get('id'), UNASSIGNED)

    click.echo()
    click.secho(f"=== {get_light_icon(light.get('archetype'))} {resource_name(light)} ===", fg='cyan', bold=True)
    click.echo()
    display_field('ID', light.get('id'))
    display_field('Room', room_name)
    display_field('Archetype', light.get('archetype') or 'Unknown')
    display_field('Status', click.style('ON', fg='green', bold=True) if state.get('on') else click.style('OFF', fg='red'))
    display_field('Colour', f"{swatch(colour)} {colour}")
    display_field('Brightness', format_brightness(state.get('brightness')))
    display_field('Temperature', f"{swatch(temperature_swatch(mirek))} {format_temperature(mirek)}")

    colour_xy = state.get('color_xy')
    if colour_xy:
        display_field('Colour (xy)', f"x={colour_xy.get('x')}, y={colour_xy.get('y')}")

    click.echo()
    click.secho("Capabilities:", fg='cyan', bold=True)
    dimming = capabilities.get('dimming')
    if dimming:
        click.echo(f"  • Dimming (minimum {dimming.get('min_dim_level', 0)}%)")
    temperature = capabilities.get('color_temperature')
    if temperature:
        schema = temperature.get('mirek_schema') or {}
        minimum = schema.get('mirek_minimum')
        maximum = schema.get('mirek_maximum')
        if minimum and maximum:
            click.echo(f"  • Colour temperature ({format_temperature(maximum)} to {format_temperature(minimum)})")
        else:
            click.echo("  • Colour temperature")
    colour_capability = capabilities.get('color')
    if colour_capability:
        gamut = colour_capability.get('gamut_type')
        click.echo(f"  • Full colour (gamut {gamut})" if gamut else "  • Full colour")
    if not (dimming or temperature or colour_capability):
        click.echo("  On/off only")
    click.echo()
