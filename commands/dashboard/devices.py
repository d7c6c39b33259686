"""
Device listing commands.

Commands for viewing devices (bulbs, switches, sensors, the bridge) and the
services each one provides.
"""

import click
from models.colour import get_light_colour
from models.icons import get_device_icon, get_service_icon
from models.switch_cycles import parse_switch_scene_cycles, find_cycle_for_device
from models.utils import resource_name
from .helpers import (
    UNASSIGNED,
    get_snapshot,
    lookup_or_suggest,
    find_device_room,
    display_table,
    display_field,
    swatch,
)
from .switches import format_cycle


@click.command(name='devices')
def devices_command():
    """Display all devices with their product and room.

    \b
    Example:
      hue-dashboard devices
    """
    snapshot = get_snapshot()
    if not snapshot:
        return

    rows = []
    for device_id, device in snapshot['devices'].items():
        product_data = device.get('product_data') or {}
        rows.append({
            'room': find_device_room(device_id, snapshot['rooms']),
            'name': f"{get_device_icon(device)} {resource_name(device)}",
            'product': product_data.get('product_name', 'Unknown'),
            'model': product_data.get('model_id', 'Unknown'),
            'services': len(device.get('services') or []),
            'sort_name': resource_name(device).lower(),
        })

    if not rows:
        click.echo("No devices found.")
        return

    rows.sort(key=lambda r: (r['room'] == UNASSIGNED, r['room'], r['sort_name']))

    display_table(rows, [
        {'key': 'room', 'header': 'Room'},
        {'key': 'name', 'header': 'Device', 'emoji': True},
        {'key': 'product', 'header': 'Product'},
        {'key': 'model', 'header': 'Model', 'color': 'bright_black'},
        {'key': 'services', 'header': 'Services', 'color': 'bright_black'},
    ], "=== Devices ===")

    # Summary by product
    product_counts = {}
    for row in rows:
        product_counts[row['product']] = product_counts.get(row['product'], 0) + 1

    click.echo()
    click.secho("Summary:", fg='cyan', bold=True)
    click.echo(f"  Total devices: {len(rows)}")
    for product in sorted(product_counts):
        count = product_counts[product]
        click.echo(f"  {product}: {count}")
    click.echo()


@click.command(name='device')
@click.argument('query')
def device_command(query: str):
    """Show one device with its product details and services.

    QUERY is the device's ID or name.
    """
    snapshot = get_snapshot()
    if not snapshot:
        return

    device = lookup_or_suggest(snapshot['devices'], query, 'device')
    if not device:
        return

    name = resource_name(device)
    product_data = device.get('product_data') or {}

    click.echo()
    click.secho(f"=== {get_device_icon(device)} {name} ===", fg='cyan', bold=True)
    click.echo()
    display_field('ID', device.get('id'))
    display_field('Room', find_device_room(device.get('id'), snapshot['rooms']))
    display_field('Product', product_data.get('product_name', 'Unknown'))
    display_field('Model', product_data.get('model_id', 'Unknown'))
    display_field('Manufacturer', product_data.get('manufacturer_name', 'Unknown'))
    display_field('Software', product_data.get('software_version', 'Unknown'))
    if 'certified' in product_data:
        display_field('Certified', 'Yes' if product_data['certified'] else 'No')

    services = device.get('services') or []
    click.echo()
    click.secho(f"Services ({len(services)}):", fg='cyan', bold=True)
    for service in services:
        rtype = service.get('rtype', 'unknown')
        line = f"  {get_service_icon(rtype)} {rtype}"
        light = snapshot['lights'].get(service.get('rid'))
        if light:
            line += f"  {swatch(get_light_colour(light))} {resource_name(light)}"
        click.echo(line)
    if not services:
        click.echo("  (none)")

    cycles = parse_switch_scene_cycles(snapshot['bridge'], snapshot['scenes_v1'])
    cycle = find_cycle_for_device(cycles, name)
    if cycle:
        click.echo()
        click.secho("Scene cycle:", fg='cyan', bold=True)
        for line in format_cycle(cycle):
            click.echo(f"  {line}")
    click.echo()
