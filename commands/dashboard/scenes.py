"""
Scene commands.

Commands for viewing scenes with their colour palettes and the light
actions they apply.
"""

import click
from models.icons import get_light_icon
from models.scenes import (
    count_affected_lights,
    describe_action,
    get_action_colour,
    get_scene_colours,
    light_actions,
    scene_emoji,
    scene_room_id,
)
from models.utils import resource_name, create_name_lookup
from .helpers import (
    get_snapshot,
    lookup_or_suggest,
    should_include_room,
    display_table,
    display_field,
    swatch,
    palette,
)

OTHER_GROUP = 'Zone/Other'


def scene_room_name(scene: dict, room_names: dict[str, str]) -> str:
    """Name of the room a scene belongs to, or 'Zone/Other'."""
    return room_names.get(scene_room_id(scene) or '', OTHER_GROUP)


@click.command(name='scenes')
@click.option('--room', '-r', help='Filter scenes by room name')
def scenes_command(room: str | None):
    """List scenes with their colour palette and number of lights.

    \b
    Examples:
      hue-dashboard scenes              # All scenes
      hue-dashboard scenes -r bedroom   # Only bedroom scenes
    """
    snapshot = get_snapshot()
    if not snapshot:
        return

    room_names = create_name_lookup(snapshot['rooms'])

    rows = []
    for scene in snapshot['scenes'].values():
        room_name = scene_room_name(scene, room_names)
        if not should_include_room(room_name, room):
            continue
        name = resource_name(scene)
        rows.append({
            'room': room_name,
            'name': f"{scene_emoji(name)} {name}",
            'colours': get_scene_colours(scene),
            'lights': count_affected_lights(scene),
            'sort_name': name.lower(),
        })

    if not rows:
        if room:
            click.echo(f"No scenes found matching room '{room}'.")
        else:
            click.echo("No scenes found.")
        return

    rows.sort(key=lambda r: (r['room'] == OTHER_GROUP, r['room'], r['sort_name']))

    display_table(rows, [
        {'key': 'room', 'header': 'Room'},
        {'key': 'name', 'header': 'Scene', 'emoji': True},
        {'key': 'colours', 'header': 'Colours', 'swatch': True},
        {'key': 'lights', 'header': 'Lights', 'color': 'bright_black'},
    ], "=== Scenes ===")

    click.echo()
    click.echo(f"Total scenes: {len(rows)}")
    click.echo()


@click.command(name='scene')
@click.argument('query')
def scene_command(query: str):
    """Show one scene and the action it applies to each light.

    QUERY is the scene's ID or name.
    """
    snapshot = get_snapshot()
    if not snapshot:
        return

    scene = lookup_or_suggest(snapshot['scenes'], query, 'scene')
    if not scene:
        return

    name = resource_name(scene)
    room_names = create_name_lookup(snapshot['rooms'])

    click.echo()
    click.secho(f"=== {scene_emoji(name)} {name} ===", fg='cyan', bold=True)
    click.echo()
    display_field('ID', scene.get('id'))
    display_field('Room', scene_room_name(scene, room_names))
    display_field('Colours', palette(get_scene_colours(scene)) or 'none')
    display_field('Lights', count_affected_lights(scene))
    if scene.get('speed') is not None:
        display_field('Speed', f"{scene['speed']:.2f}")
    if scene.get('auto_dynamic') is not None:
        display_field('Auto-dynamic', 'Yes' if scene['auto_dynamic'] else 'No')

    actions = light_actions(scene)
    click.echo()
    click.secho(f"Light actions ({len(actions)}):", fg='cyan', bold=True)
    for action in actions:
        light = snapshot['lights'].get(action['target'].get('rid'), {})
        icon = get_light_icon(light.get('archetype'))
        light_name = resource_name(light, 'Unknown light')
        click.echo(f"  {swatch(get_action_colour(action))} {icon} {light_name}: "
                   f"{click.style(describe_action(action), fg='bright_black')}")
    if not actions:
        click.echo("  (none)")
    click.echo()
