#!/usr/bin/env python3
"""
Hue Dashboard CLI
Export Philips Hue Bridge configuration and browse it in the terminal.
"""

import click

from commands.setup import ColouredGroup, help_command, discover_command, configure_command, setup_command
from commands.export import export_command, export_info_command
from commands.dashboard import (
    overview_command,
    lights_command,
    light_command,
    rooms_command,
    room_command,
    scenes_command,
    scene_command,
    devices_command,
    device_command,
    switches_command,
)


@click.group(
    cls=ColouredGroup,
    context_settings={
        'help_option_names': ['-h', '--help'],
        'max_content_width': 999  # Very wide to prevent wrapping on wide terminals
    }
)
@click.version_option(version='0.1.0', prog_name='Hue Dashboard')
def cli():
    """Hue Dashboard CLI - Read-only view of your Philips Hue setup.

Export bridge data once with 'export', then browse lights, rooms, scenes,
devices and switch scene cycles offline from the JSON snapshots.

Authentication: Environment → 1Password → Local config (~/.hue_dashboard/config.json) → Interactive setup
Run 'configure' for first-time setup or 'setup' to check configuration.

Use 'help' for a quick reference of all commands.
Use 'COMMAND -h' or 'COMMAND --help' for detailed help on a specific command."""
    pass


# Register setup and help commands
cli.add_command(help_command)
cli.add_command(discover_command)
cli.add_command(configure_command)
cli.add_command(setup_command)

# Register export commands
cli.add_command(export_command)
cli.add_command(export_info_command)

# Register dashboard commands
cli.add_command(overview_command)
cli.add_command(lights_command)
cli.add_command(light_command)
cli.add_command(rooms_command)
cli.add_command(room_command)
cli.add_command(scenes_command)
cli.add_command(scene_command)
cli.add_command(devices_command)
cli.add_command(device_command)
cli.add_command(switches_command)


if __name__ == '__main__':
    cli()
