"""
Setup and help commands for Hue Dashboard CLI.

Contains the custom Click group class for coloured help output and typo
suggestions, plus the bridge discovery and credential commands.
"""

import os
from dataclasses import dataclass

import click
from core.config import EXPORT_DIR, USER_CONFIG_FILE
from models.utils import similarity_score


@dataclass(frozen=True)
class CommandSection:
    """Represents a section in the help command."""
    name: str
    icon: str
    commands: list[tuple[str, str]]


COMMAND_SECTIONS = [
    CommandSection(
        name="BRIDGE SETUP",
        icon="🔌",
        commands=[
            ("discover", "Find Hue bridges on your network"),
            ("configure", "Pair with a bridge and save credentials"),
            ("configure --reconfigure", "Pair again even if credentials exist"),
            ("setup", "Show credential sources and test connection"),
        ]
    ),
    CommandSection(
        name="EXPORT",
        icon="💾",
        commands=[
            ("export", "Export v1 and v2 data to JSON snapshots"),
            ("export --api v2", "Export v2 data only (lights, rooms, scenes, devices)"),
            ("export --api v1", "Export v1 data only (rules, sensors, v1 scenes)"),
            ("export-info", "Show snapshot age and resource counts"),
        ]
    ),
    CommandSection(
        name="DASHBOARD",
        icon="📋",
        commands=[
            ("overview", "Counts, rooms, scenes and switch cycles at a glance"),
            ("lights", "Lights with colour swatch, brightness and temperature"),
            ("lights -r <room>", "Lights filtered by room"),
            ("light <name|id>", "One light with its capabilities"),
            ("rooms", "Rooms with icons and light counts"),
            ("room <name|id>", "One room's devices, lights and scenes"),
            ("scenes", "Scenes with colour palette and light counts"),
            ("scenes -r <room>", "Scenes filtered by room"),
            ("scene <name|id>", "One scene's light actions"),
            ("devices", "Devices with icons and product details"),
            ("device <name|id>", "One device's services"),
            ("switches", "Dimmer switches and the scenes they cycle through"),
        ]
    ),
]


class ColouredGroup(click.Group):
    """Click group with coloured help output and suggestions for mistyped commands."""

    def resolve_command(self, ctx, args):
        """Resolve command, suggesting similar names for typos."""
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            if 'No such command' not in str(e):
                raise

            cmd_name = args[0] if args else ''
            suggestions = self._get_suggestions(ctx, cmd_name)
            if not suggestions:
                raise

            message = f"Error: No such command '{cmd_name}'.\n\n"
            message += click.style("Did you mean one of these?\n", fg='yellow')
            for suggestion in suggestions:
                message += click.style(f"  • {suggestion}\n", fg='green')
            raise click.UsageError(message)

    def _get_suggestions(self, ctx, cmd_name, max_suggestions=3):
        """Visible commands most similar to cmd_name, best first."""
        if not cmd_name:
            return []

        scored = []
        for name in self.list_commands(ctx):
            command = self.get_command(ctx, name)
            if command is None or command.hidden:
                continue
            score = similarity_score(cmd_name, name)
            if score > 0:
                scored.append((score, name))

        scored.sort(reverse=True, key=lambda x: x[0])
        return [name for _, name in scored[:max_suggestions]]

    def format_usage(self, ctx, formatter):
        """Format the usage line with colour."""
        formatter.write_paragraph()
        formatter.write_text(
            click.style('Usage: ', fg='cyan', bold=True) +
            click.style(f'{ctx.command_path} [OPTIONS] COMMAND [ARGS]...', fg='white')
        )

    def format_options(self, ctx, formatter):
        """Format options, then commands, with colour."""
        records = [r for r in (p.get_help_record(ctx) for p in self.get_params(ctx)) if r]

        if records:
            formatter.write_paragraph()
            formatter.write_text(click.style('Options:', fg='yellow', bold=True))
            with formatter.indentation():
                for opt_name, opt_help in records:
                    formatter.write_text(
                        click.style(opt_name, fg='green') + '  ' + click.style(opt_help, fg='white')
                    )

        self.format_commands(ctx, formatter)

    def format_commands(self, ctx, formatter):
        """Format the command list with aligned, dimmed descriptions."""
        commands = []
        for name in self.list_commands(ctx):
            command = self.get_command(ctx, name)
            if command is None or command.hidden:
                continue
            commands.append((name, command.get_short_help_str(limit=500)))

        if not commands:
            return

        formatter.write_paragraph()
        formatter.write_text(click.style('Commands:', fg='yellow', bold=True))
        width = max(max(len(name) for name, _ in commands), 20)
        with formatter.indentation():
            for name, help_text in commands:
                formatter.write_text(
                    click.style(name.ljust(width), fg='green') + '  ' +
                    click.style(help_text, fg='white', dim=True)
                )


@click.command(name='help')
def help_command():
    """Display help and common commands."""
    click.secho("\n╔══════════════════════════════════════════════════════════════════════╗", fg='cyan', bold=True)
    click.secho("║                   Hue Dashboard - Quick Reference                    ║", fg='cyan', bold=True)
    click.secho("╚══════════════════════════════════════════════════════════════════════╝", fg='cyan', bold=True)
    click.echo()

    for section in COMMAND_SECTIONS:
        click.secho(f"{section.icon} {section.name}", fg='yellow', bold=True)
        for cmd, desc in section.commands:
            click.echo("  ", nl=False)
            click.secho(cmd, fg='green', nl=False)
            click.echo(" " * (30 - len(cmd)) + "  " + desc)
        click.echo()

    click.secho("📖 For detailed help on any command:", fg='cyan')
    click.echo(f"  hue-dashboard {click.style('<command> -h', fg='white', bold=True)}")
    click.echo()


@click.command(name='discover')
def discover_command():
    """Find Hue bridges on your network.

    Queries the Philips discovery service and checks that each bridge found
    answers on its local address.
    """
    from core.auth import discover_bridges, validate_bridge

    click.echo()
    click.secho("=== Hue Bridges ===", fg='cyan', bold=True)
    click.echo()

    bridges = discover_bridges()
    if not bridges:
        click.secho("⚠ No bridges found", fg='yellow')
        click.echo("Check your router's DHCP client list for a device named 'Philips hue'.")
        click.echo()
        return

    for bridge in bridges:
        ip = bridge.get('internalipaddress', 'Unknown')
        name = bridge.get('name') or 'Philips hue'
        if validate_bridge(ip):
            status = click.style('✓ reachable', fg='green')
        else:
            status = click.style('✗ not responding', fg='red')
        click.echo(f"  {click.style(ip, fg='green', bold=True)}  {name}  ID: {bridge.get('id', 'Unknown')}  {status}")
    click.echo()


@click.command(name='configure')
@click.option('--reconfigure', is_flag=True, help='Force reconfiguration even if credentials exist')
def configure_command(reconfigure):
    """Interactive bridge configuration and authentication setup.

    Finds your bridge (or asks for its IP), pairs with it using the link
    button and saves the API key to ~/.hue_dashboard/config.json. If you
    prefer 1Password, the credentials are shown so you can add them to
    your vault item instead.
    """
    from core.auth import (
        choose_bridge_ip,
        validate_bridge,
        create_user_via_link_button,
        save_auth_to_user_config,
        load_auth_from_user_config,
    )

    click.echo()
    click.secho("=== Hue Dashboard - Bridge Configuration ===", fg='cyan', bold=True)
    click.echo()

    if not reconfigure:
        existing = load_auth_from_user_config()
        if existing:
            click.echo(f"✓ Credentials already configured for bridge {existing['bridge_ip']}")
            click.echo()
            if not click.confirm("Reconfigure anyway?", default=False):
                return
            click.echo()

    click.echo("Step 1: Finding your bridge...")
    bridge_ip = choose_bridge_ip()
    if not bridge_ip:
        click.echo("Configuration cancelled.")
        return

    if not validate_bridge(bridge_ip):
        click.secho(f"✗ Cannot connect to bridge at {bridge_ip}", fg='red')
        click.echo("Please check the IP address and ensure the bridge is online.")
        return
    click.echo()

    click.echo("Step 2: Creating API credentials...")
    api_token = create_user_via_link_button(bridge_ip)
    if not api_token:
        click.secho("✗ Failed to create API credentials", fg='red')
        return
    click.echo()

    if click.confirm("Store the credentials in 1Password instead of a local file?", default=False):
        vault = os.getenv('HUE_1PASSWORD_VAULT', 'Private')
        item = os.getenv('HUE_1PASSWORD_ITEM', 'Hue')
        click.echo()
        click.echo("Add these fields to your 1Password item:")
        click.echo(f"  Vault: {click.style(vault, fg='cyan')}")
        click.echo(f"  Item:  {click.style(item, fg='cyan')}")
        click.echo()
        click.echo(f"  {click.style('bridge-ip', fg='yellow')} → {click.style(bridge_ip, fg='green', bold=True)}")
        click.echo(f"  {click.style('API-token', fg='yellow')} → {click.style(api_token, fg='green', bold=True)}")
        click.echo()
        return

    click.echo("Step 3: Saving credentials...")
    if save_auth_to_user_config(bridge_ip, api_token):
        click.secho(f"✓ Configuration saved to {USER_CONFIG_FILE}", fg='green')
        click.echo("Run 'hue-dashboard export' to fetch your bridge data.")
    else:
        click.secho(f"✗ Failed to save to {USER_CONFIG_FILE}", fg='red')
    click.echo()


@click.command(name='setup')
def setup_command():
    """Show current bridge configuration and test connection.

    \b
    Credential sources (priority order):
    1. Environment (HUE_BRIDGE_IP and HUE_API_KEY)
    2. 1Password (env: HUE_1PASSWORD_VAULT, HUE_1PASSWORD_ITEM)
    3. Local config file (~/.hue_dashboard/config.json)
    4. Interactive setup (run 'configure' command)
    """
    from core.controller import HueController
    from core.auth import load_auth_from_env, load_auth_from_1password, load_auth_from_user_config
    from core.config import is_op_available

    click.echo()
    click.secho("=== Hue Bridge Configuration ===", fg='cyan', bold=True)
    click.echo()

    click.echo(click.style("1. Environment", fg='cyan', bold=True))
    env_creds = load_auth_from_env()
    if env_creds:
        click.echo(f"   Status:      {click.style('✓ Configured', fg='green')}")
        click.echo(f"   Bridge IP:   {env_creds['bridge_ip']}")
    else:
        click.echo(f"   Status:      {click.style('✗ HUE_BRIDGE_IP / HUE_API_KEY not set', fg='yellow')}")
    click.echo()

    click.echo(click.style("2. 1Password", fg='cyan', bold=True))
    vault = os.getenv('HUE_1PASSWORD_VAULT', 'Private')
    item = os.getenv('HUE_1PASSWORD_ITEM', 'Hue')
    op_creds = None
    if not is_op_available():
        click.echo(f"   Status:      {click.style('✗ CLI not installed', fg='yellow')}")
    else:
        op_creds = load_auth_from_1password()
        if op_creds:
            click.echo(f"   Status:      {click.style('✓ Configured', fg='green')}")
            click.echo(f"   Bridge IP:   {op_creds['bridge_ip']}")
        else:
            click.echo(f"   Status:      {click.style('⚠ CLI available, credentials not found', fg='yellow')}")
            click.echo("   Note:        Add 'bridge-ip' and 'API-token' fields to your item")
        click.echo(f"   Vault/Item:  {vault} / {item}")
    click.echo()

    click.echo(click.style("3. Local Configuration", fg='cyan', bold=True))
    local_creds = load_auth_from_user_config()
    if local_creds:
        click.echo(f"   Status:      {click.style('✓ Available', fg='green')}")
        click.echo(f"   Bridge IP:   {local_creds['bridge_ip']}")
    else:
        click.echo(f"   Status:      {click.style('✗ Not configured', fg='yellow')}")
    click.echo(f"   Path:        {USER_CONFIG_FILE}")
    click.echo()

    click.echo(click.style("4. Snapshots", fg='cyan', bold=True))
    click.echo(f"   Path:        {EXPORT_DIR}")
    click.echo()

    if not (env_creds or op_creds or local_creds):
        click.secho("⚠ No authentication configured", fg='yellow', bold=True)
        click.echo("Run 'hue-dashboard configure' to set up authentication.")
        click.echo()
        return

    click.echo(click.style("Connection Test", fg='cyan', bold=True))
    controller = HueController()
    if controller.connect(interactive=False):
        bridge = controller.get_bridge()
        if bridge:
            click.echo(f"  Bridge ID:  {bridge.get('bridge_id', 'Unknown')}")
    else:
        click.secho("✗ Connection failed", fg='red', bold=True)
        click.echo("Try reconfiguring: hue-dashboard configure --reconfigure")
    click.echo()
