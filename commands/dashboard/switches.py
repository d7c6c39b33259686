"""
Switch commands.

Shows dimmer switches and the scenes their ON button cycles through,
reconstructed from the bridge rules in the v1 export.
"""

import click
from models.icons import get_device_icon
from models.scenes import scene_emoji
from models.switch_cycles import parse_switch_scene_cycles, find_cycle_for_device
from models.types import SwitchSceneCycle
from models.utils import resource_name
from .helpers import get_snapshot, find_device_room

SWITCH_KEYWORDS = ('switch', 'dimmer', 'tap dial')


def is_switch_device(device: dict) -> bool:
    """Check if a device is a wall switch or dimmer, from its product or name."""
    product_name = (device.get('product_data') or {}).get('product_name', '')
    text = f"{product_name} {resource_name(device, '')}".lower()
    return any(keyword in text for keyword in SWITCH_KEYWORDS)


def format_cycle(cycle: SwitchSceneCycle) -> list[str]:
    """Lines describing a switch's scene cycle.

    The power-on scene (order 0) is listed first, then the cycle steps.
    """
    power_on = [s for s in cycle['scenes'] if s['order'] == 0]
    steps = [s for s in cycle['scenes'] if s['order'] != 0]

    lines = []
    for scene in power_on:
        lines.append(f"{click.style('Power on:', fg='yellow')} {scene_emoji(scene['name'])} {scene['name']}")
    if steps:
        arrow = click.style(' → ', fg='bright_black')
        cycle_text = arrow.join(f"{s['order']}. {scene_emoji(s['name'])} {s['name']}" for s in steps)
        lines.append(f"{click.style('Cycle:', fg='yellow')}    {cycle_text}")
    return lines


@click.command(name='switches')
def switches_command():
    """Display dimmer switches and the scenes they cycle through.

    Scene cycles come from the bridge rules in the v1 export. Run
    'hue-dashboard export --api v1' if no cycles are shown.
    """
    snapshot = get_snapshot()
    if not snapshot:
        return

    cycles = parse_switch_scene_cycles(snapshot['bridge'], snapshot['scenes_v1'])
    switches = sorted(
        (d for d in snapshot['devices'].values() if is_switch_device(d)),
        key=lambda d: resource_name(d).lower()
    )

    click.echo()
    click.secho("=== Switches ===", fg='cyan', bold=True)
    click.echo()

    if not switches and not cycles:
        click.echo("No switches found.")
        click.echo()
        return

    matched_ids = set()
    for device in switches:
        name = resource_name(device)
        room_name = find_device_room(device.get('id'), snapshot['rooms'])
        click.echo(f"{get_device_icon(device)} {click.style(name, fg='green', bold=True)} "
                   f"{click.style(f'({room_name})', fg='bright_blue')}")

        cycle = find_cycle_for_device(cycles, name)
        if cycle:
            matched_ids.add(cycle['switch_id'])
            for line in format_cycle(cycle):
                click.echo(f"   {line}")
        else:
            click.secho("   No scene cycle configured", fg='bright_black')
        click.echo()

    # Cycles whose rules name a switch that isn't in the device export
    for cycle in cycles:
        if cycle['switch_id'] in matched_ids:
            continue
        click.echo(f"🎚️ {click.style(cycle['switch_name'], fg='green', bold=True)}")
        for line in format_cycle(cycle):
            click.echo(f"   {line}")
        click.echo()

    click.secho("Summary:", fg='cyan', bold=True)
    click.echo(f"  Switches: {len(switches)}")
    click.echo(f"  Scene cycles: {len(cycles)}")
    if not cycles:
        click.echo("  (export with --api v1 to include bridge rules)")
    click.echo()
