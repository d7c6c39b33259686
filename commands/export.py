"""Export CLI commands.

This module provides CLI commands for exporting Hue Bridge data to the JSON
snapshot files the dashboard reads, and for inspecting those snapshots.
"""

from datetime import datetime
import click

from core.config import EXPORT_DIR
from core.controller import HueController
from core.export import export_all, get_export_info


@click.command(name='export')
@click.option('--api', type=click.Choice(['v1', 'v2', 'all']), default='all', show_default=True,
              help='Which bridge API to export from')
def export_command(api: str):
    """Export bridge data to JSON snapshot files.

    The v2 export writes lights, rooms, scenes and devices. The v1 export
    writes lights, groups, scenes, sensors and the bridge rules used to
    reconstruct switch scene cycles. Every export is also copied into a
    timestamped directory under backups/.

    \b
    Examples:
      hue-dashboard export              # Both APIs
      hue-dashboard export --api v2     # v2 only
    """
    controller = HueController()
    if not controller.connect():
        return

    click.echo()
    click.secho("=== Exporting Hue Bridge Data ===", fg='cyan', bold=True)
    click.echo()

    if export_all(controller, api):
        click.echo()
        click.secho("✓ Export complete", fg='green')
        click.echo(f"  Snapshots: {EXPORT_DIR}")
    else:
        click.secho("✗ Nothing was exported", fg='red')
    click.echo()


def format_age(age_hours: float) -> str:
    """Human readable snapshot age."""
    if age_hours < 1:
        return f"{int(age_hours * 60)} minutes"
    if age_hours < 24:
        return f"{age_hours:.1f} hours"
    return f"{age_hours / 24:.1f} days"


@click.command(name='export-info')
def export_info_command():
    """Show snapshot status and information.

    Displays when the snapshots were last exported, how old they are, and
    how many resources each file holds.
    """
    click.echo()
    click.secho("=== Snapshot Information ===", fg='cyan', bold=True)
    click.echo()

    info = get_export_info()

    if not info['exists']:
        click.secho("No snapshots found", fg='red')
        click.echo(f"Snapshot directory: {EXPORT_DIR}")
        click.echo()
        click.echo("Run 'hue-dashboard export' to create them.")
        click.echo()
        return

    formatted = datetime.fromisoformat(info['last_updated']).strftime('%d %b %Y at %H:%M:%S')
    click.echo(f"Last updated:  {click.style(formatted, fg='green')}")

    age_colour = 'red' if info['is_stale'] else 'green'
    click.echo(f"Snapshot age:  {click.style(format_age(info['age_hours']), fg=age_colour)}")
    if info['is_stale']:
        click.echo(f"Status:        {click.style('STALE (>24 hours old)', fg='red')}")
    else:
        click.echo(f"Status:        {click.style('Fresh', fg='green')}")

    counts = info['counts']
    if counts:
        click.secho("\nExported Resources:", fg='cyan')
        label_width = max(len(name) for name in counts)
        number_width = max(len(str(n)) for n in counts.values())
        for file_name in sorted(counts):
            click.echo(f"  {file_name:<{label_width}} {counts[file_name]:>{number_width}}")

    if info['missing']:
        click.secho("\nMissing:", fg='yellow')
        for file_name in info['missing']:
            click.echo(f"  {file_name}")

    click.echo(f"\n{click.style('Snapshot directory:', fg='cyan')} {EXPORT_DIR}\n")
