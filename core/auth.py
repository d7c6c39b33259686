"""
Bridge authentication.

Finds bridges on the local network, pairs with one through its link button,
and loads saved credentials. Credentials are looked up in order from the
environment, 1Password and ~/.hue_dashboard/config.json before falling back
to interactive pairing.
"""

import os
import subprocess
import time

import click
import requests
from requests.packages.urllib3.exceptions import InsecureRequestWarning

from core.config import (
    USER_CONFIG_FILE,
    APP_NAME,
    REQUEST_TIMEOUT,
    is_op_available,
    load_json_file,
    save_json_file,
)
from models.types import AuthCredentials, DiscoveredBridge

# Bridges serve a self-signed certificate
requests.packages.urllib3.disable_warnings(InsecureRequestWarning)

DISCOVERY_URL = 'https://discovery.meethue.com/'
VALIDATE_TIMEOUT = 3
LINK_BUTTON_NOT_PRESSED = 101
MAX_PAIRING_ATTEMPTS = 30

# 1Password item field -> credential key
OP_FIELDS = {'bridge-ip': 'bridge_ip', 'API-token': 'api_token'}


def discover_bridges() -> list[DiscoveredBridge]:
    """Ask the Philips discovery service which bridges share this network.

    Returns:
        Bridges (id, internalipaddress, optional name) sorted by IP address.
        Empty if the service is unreachable, rate limited or returns junk.
    """
    try:
        response = requests.get(DISCOVERY_URL, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        found = response.json()
    except requests.exceptions.HTTPError as e:
        if e.response is not None and e.response.status_code == 429:
            click.secho("⚠ Too many discovery requests, Philips is rate limiting this network", fg='yellow')
            click.echo("Wait a few minutes or enter the bridge IP by hand.")
        else:
            click.echo(f"Discovery service error: {e}", err=True)
        return []
    except requests.exceptions.RequestException as e:
        click.echo(f"Discovery service unreachable: {e}", err=True)
        return []
    except ValueError:
        click.echo("Discovery service sent an unreadable response", err=True)
        return []

    if not isinstance(found, list):
        return []
    return sorted(found, key=lambda bridge: bridge.get('internalipaddress', ''))


def validate_bridge(bridge_ip: str) -> bool:
    """True if bridge_ip answers /api/0/config with a bridge ID."""
    try:
        response = requests.get(f"https://{bridge_ip}/api/0/config", verify=False, timeout=VALIDATE_TIMEOUT)
        config = response.json()
    except (requests.exceptions.RequestException, ValueError):
        return False
    return isinstance(config, dict) and bool(config.get('bridgeid'))


def select_bridge_interactive(bridges: list[DiscoveredBridge]) -> str | None:
    """Let the user pick one of several discovered bridges.

    Returns:
        IP of the chosen bridge, or None if the user enters 0 or aborts
    """
    if not bridges:
        return None

    click.echo()
    click.secho(f"{len(bridges)} bridges found:", fg='cyan', bold=True)
    for number, bridge in enumerate(bridges, 1):
        label = bridge.get('name') or 'Philips hue'
        click.echo(f"  {click.style(str(number), fg='green', bold=True)}. "
                   f"{bridge.get('internalipaddress', '?')}  {label}  "
                   f"{click.style(bridge.get('id', ''), fg='bright_black')}")
    click.echo()

    try:
        number = click.prompt("Bridge number (0 to cancel)", type=click.IntRange(0, len(bridges)), default=1)
    except click.Abort:
        click.echo("\nCancelled.", err=True)
        return None

    if number == 0:
        return None
    return bridges[number - 1].get('internalipaddress')


def _show_link_button_banner():
    click.echo()
    click.secho("┌─────────────────────────────────────────────────┐", fg='yellow', bold=True)
    click.secho("│  Press the round link button on the bridge now  │", fg='yellow', bold=True)
    click.secho(f"│  Pairing is attempted for {MAX_PAIRING_ATTEMPTS} seconds afterwards  │", fg='yellow', bold=True)
    click.secho("└─────────────────────────────────────────────────┘", fg='yellow', bold=True)
    click.echo()


def create_user_via_link_button(bridge_ip: str, app_name: str = APP_NAME) -> str | None:
    """Register this application with the bridge and return its new API key.

    After the user confirms the button press, the bridge is asked for a key
    once a second. Error 101 (button not pressed yet) is retried up to
    MAX_PAIRING_ATTEMPTS times; any other error stops immediately.

    Args:
        bridge_ip: Bridge IP address
        app_name: devicetype sent to the bridge

    Returns:
        The API key (the bridge calls it 'username'), or None
    """
    _show_link_button_banner()
    click.pause("Press Enter once the button has been pressed...")

    url = f"https://{bridge_ip}/api"
    body = {"devicetype": app_name, "generateclientkey": True}

    for attempt in range(MAX_PAIRING_ATTEMPTS):
        try:
            reply = requests.post(url, json=body, verify=False, timeout=2).json()
        except requests.exceptions.Timeout:
            continue
        except requests.exceptions.RequestException as e:
            click.echo(f"Could not reach {bridge_ip}: {e}", err=True)
            return None
        except ValueError:
            click.echo("Bridge sent an unreadable response", err=True)
            return None

        first = reply[0] if isinstance(reply, list) and reply else {}
        if not isinstance(first, dict):
            continue

        success = first.get('success')
        if isinstance(success, dict):
            click.secho("✓ Paired with the bridge", fg='green', bold=True)
            return success.get('username')

        error = first.get('error')
        if not isinstance(error, dict):
            continue
        if error.get('type') != LINK_BUTTON_NOT_PRESSED:
            click.echo(f"Pairing refused: {error.get('description', 'unknown error')}", err=True)
            return None

        click.secho(f"⏳ Waiting for the link button ({attempt + 1}/{MAX_PAIRING_ATTEMPTS})", fg='bright_black')
        time.sleep(1)

    click.secho(f"✗ The link button was not pressed within {MAX_PAIRING_ATTEMPTS} seconds", fg='red')
    return None


def load_auth_from_env() -> AuthCredentials | None:
    """Credentials from HUE_BRIDGE_IP and HUE_API_KEY (both must be set)."""
    bridge_ip = os.getenv('HUE_BRIDGE_IP')
    api_token = os.getenv('HUE_API_KEY')
    if bridge_ip and api_token:
        return {'bridge_ip': bridge_ip, 'api_token': api_token}
    return None


def load_auth_from_user_config() -> AuthCredentials | None:
    """Credentials saved by 'configure' in ~/.hue_dashboard/config.json."""
    try:
        saved = load_json_file(USER_CONFIG_FILE)
    except (ValueError, OSError) as e:
        click.echo(f"Warning: ignoring unreadable {USER_CONFIG_FILE}: {e}", err=True)
        return None

    if not isinstance(saved, dict):
        return None

    bridge_ip = saved.get('bridge_ip')
    api_token = saved.get('api_token')
    if isinstance(bridge_ip, str) and isinstance(api_token, str) and bridge_ip and api_token:
        return {'bridge_ip': bridge_ip, 'api_token': api_token}
    return None


def save_auth_to_user_config(bridge_ip: str, api_token: str) -> bool:
    """Write credentials to the local config file, readable by the user only.

    Other keys already in the file are preserved.

    Returns:
        True if the file was written
    """
    try:
        existing = load_json_file(USER_CONFIG_FILE) or {}
    except (ValueError, OSError):
        existing = {}

    existing.update({'bridge_ip': bridge_ip, 'api_token': api_token, 'app_name': APP_NAME})

    try:
        save_json_file(USER_CONFIG_FILE, existing)
        os.chmod(USER_CONFIG_FILE, 0o600)
    except OSError as e:
        click.echo(f"Error: could not write {USER_CONFIG_FILE}: {e}", err=True)
        return False
    return True


def load_auth_from_1password() -> AuthCredentials | None:
    """Credentials from a 1Password item via the op CLI.

    The item is HUE_1PASSWORD_ITEM (default "Hue") in vault
    HUE_1PASSWORD_VAULT (default "Private"), with fields "bridge-ip" and
    "API-token".
    """
    if not is_op_available():
        return None

    vault = os.getenv('HUE_1PASSWORD_VAULT', 'Private')
    item = os.getenv('HUE_1PASSWORD_ITEM', 'Hue')

    credentials = {}
    for field, key in OP_FIELDS.items():
        try:
            result = subprocess.run(
                ['op', 'item', 'get', item, '--vault', vault, '--fields', field, '--reveal'],
                capture_output=True,
                text=True,
                timeout=10
            )
        except (subprocess.TimeoutExpired, OSError) as e:
            click.echo(f"Warning: 1Password lookup failed: {e}", err=True)
            return None

        value = result.stdout.strip() if result.returncode == 0 else ''
        if not value:
            return None
        credentials[key] = value

    return credentials


def choose_bridge_ip() -> str | None:
    """Find the bridge to pair with, asking the user when it isn't obvious."""
    click.echo("Looking for Hue bridges...")
    bridges = discover_bridges()

    if len(bridges) == 1:
        bridge_ip = bridges[0].get('internalipaddress')
        click.secho(f"✓ Using bridge at {bridge_ip}", fg='green')
        return bridge_ip

    if bridges:
        return select_bridge_interactive(bridges)

    click.secho("⚠ Discovery found no bridges", fg='yellow')
    if click.confirm("Type the bridge IP address instead?", default=True):
        return click.prompt("Bridge IP address", type=str).strip()
    return None


def pair_new_bridge() -> AuthCredentials | None:
    """Interactive pairing: choose a bridge, check it, press the button, save."""
    bridge_ip = choose_bridge_ip()
    if not bridge_ip:
        click.echo("No bridge selected.")
        return None

    if not validate_bridge(bridge_ip):
        click.secho(f"✗ No Hue bridge answered at {bridge_ip}", fg='red')
        return None

    api_token = create_user_via_link_button(bridge_ip)
    if not api_token:
        return None

    if save_auth_to_user_config(bridge_ip, api_token):
        click.secho(f"✓ Credentials saved to {USER_CONFIG_FILE}", fg='green')
    else:
        click.secho("⚠ Credentials work but were not saved; you'll be asked again next time", fg='yellow')

    return {'bridge_ip': bridge_ip, 'api_token': api_token}


def get_auth_credentials(interactive: bool = True) -> AuthCredentials | None:
    """Find credentials, trying each source in priority order.

    1. Environment (HUE_BRIDGE_IP / HUE_API_KEY)
    2. 1Password
    3. ~/.hue_dashboard/config.json
    4. Interactive pairing, only if interactive is True

    Returns:
        Dict with 'bridge_ip' and 'api_token', or None
    """
    sources = [
        ('environment', load_auth_from_env),
        ('1Password', load_auth_from_1password),
        (str(USER_CONFIG_FILE), load_auth_from_user_config),
    ]
    for label, load in sources:
        credentials = load()
        if credentials:
            click.echo(f"✓ Credentials from {label}")
            return credentials

    if not interactive:
        return None

    click.echo()
    click.secho("No saved bridge credentials.", fg='yellow', bold=True)
    if not click.confirm("Pair with a bridge now?", default=True):
        return None
    return pair_new_bridge()
