"""HueController class for reading Hue Bridge configuration.

This module contains the controller class that handles all communication
with the Philips Hue Bridge. It only reads: v2 resources (lights, rooms,
scenes, devices) and the v1 full configuration (rules, sensors, v1 scenes).
"""

import click
import requests
from requests.packages.urllib3.exceptions import InsecureRequestWarning

from core.config import REQUEST_TIMEOUT

# Disable SSL warnings for self-signed certificate
requests.packages.urllib3.disable_warnings(InsecureRequestWarning)


class HueController:
    """Manages a read-only connection to a Philips Hue Bridge (API v1 and v2)."""

    def __init__(self, bridge_ip: str | None = None, api_token: str | None = None):
        """Initialise HueController.

        Args:
            bridge_ip: Bridge IP address (optional, loaded during connect() if not provided)
            api_token: API authentication token (optional, loaded during connect() if not provided)
        """
        self.bridge_ip = bridge_ip
        self.api_token = api_token
        self.session = requests.Session()
        self.session.verify = False  # Accept self-signed certificate

        # Memory cache for v2 resources, keyed by resource type
        self._resource_cache: dict[str, list[dict]] = {}

    @property
    def base_url(self) -> str | None:
        """Base URL for the v2 (CLIP) API."""
        return f"https://{self.bridge_ip}/clip/v2" if self.bridge_ip else None

    def _request(self, endpoint: str) -> list[dict] | None:
        """GET a v2 API endpoint and return its 'data' list.

        Returns:
            The data list, or None on network/HTTP errors or when the bridge
            reports errors in the response envelope
        """
        if not self.base_url:
            click.echo("Error: Bridge URL not set. Call connect() first.", err=True)
            return None

        url = f"{self.base_url}{endpoint}"
        headers = {"hue-application-key": self.api_token}

        try:
            response = self.session.get(url, headers=headers, timeout=REQUEST_TIMEOUT, verify=False)
            response.raise_for_status()
            result = response.json()
        except requests.exceptions.RequestException as e:
            click.echo(f"API request error for {endpoint}: {e}", err=True)
            if getattr(e, 'response', None) is not None:
                click.echo(f"Response body: {e.response.text}", err=True)
            return None
        except ValueError as e:
            click.echo(f"Invalid JSON from {endpoint}: {e}", err=True)
            return None

        # v2 API returns {errors: [], data: [...]}
        if isinstance(result, dict):
            errors = result.get('errors') or []
            if errors:
                descriptions = ', '.join(str(err.get('description', err)) for err in errors)
                click.echo(f"API errors for {endpoint}: {descriptions}", err=True)
                return None
            return result.get('data') or []
        return result

    def get_full_config_v1(self) -> dict | None:
        """Get the complete v1 configuration (lights, groups, scenes, sensors, rules, ...)."""
        if not self.bridge_ip or not self.api_token:
            click.echo("Error: Not connected to bridge. Call connect() first.", err=True)
            return None

        url = f"https://{self.bridge_ip}/api/{self.api_token}"
        try:
            response = self.session.get(url, timeout=REQUEST_TIMEOUT, verify=False)
            response.raise_for_status()
            result = response.json()
        except requests.exceptions.RequestException as e:
            click.echo(f"Failed to fetch v1 configuration: {e}", err=True)
            return None
        except ValueError as e:
            click.echo(f"Invalid JSON in v1 configuration: {e}", err=True)
            return None

        # v1 reports errors (e.g. unauthorised user) as a list
        if isinstance(result, list):
            description = result[0].get('error', {}).get('description', 'Unknown error') if result else 'Empty response'
            click.echo(f"Bridge rejected v1 request: {description}", err=True)
            return None
        return result

    def connect(self, interactive: bool = True) -> bool:
        """Connect to the Hue Bridge using authentication priority system.

        Authentication priority:
        1. Use bridge_ip/api_token if provided to __init__()
        2. Environment, 1Password, local config file, interactive setup
           (see core.auth.get_auth_credentials)

        Returns:
            True if connected successfully, False otherwise
        """
        from core.auth import get_auth_credentials

        if self.api_token and self.bridge_ip:
            click.echo(f"Using provided credentials for bridge {self.bridge_ip}")
        else:
            credentials = get_auth_credentials(interactive=interactive)

            if not credentials:
                click.echo("Error: Could not obtain authentication credentials.")
                click.echo("Run 'hue-dashboard configure' for interactive setup.")
                return False

            self.bridge_ip = credentials['bridge_ip']
            self.api_token = credentials['api_token']

        # Test connection by getting bridge resource
        result = self._request('/resource/bridge')

        if not result:
            click.echo(f"Error: Failed to connect to bridge at {self.bridge_ip}")
            click.echo("Check that the bridge IP and API key are correct.")
            return False

        click.secho(f"✓ Connected to Hue Bridge at {self.bridge_ip}", fg='green')
        return True

    def _get_resource(self, resource_type: str) -> list[dict]:
        """Fetch a v2 resource list, using the memory cache when available."""
        if resource_type in self._resource_cache:
            return self._resource_cache[resource_type]

        if not self.api_token:
            return []
        result = self._request(f'/resource/{resource_type}')
        if result is None:
            return []

        self._resource_cache[resource_type] = result
        return result

    def get_lights(self) -> list[dict]:
        """Get all lights with their current state (v2 API)."""
        return self._get_resource('light')

    def get_rooms(self) -> list[dict]:
        """Get all rooms (v2 API)."""
        return self._get_resource('room')

    def get_scenes(self) -> list[dict]:
        """Get all scenes (v2 API)."""
        return self._get_resource('scene')

    def get_devices(self) -> list[dict]:
        """Get all devices (v2 API)."""
        return self._get_resource('device')

    def get_bridge(self) -> dict | None:
        """Get the bridge resource (v2 API)."""
        bridges = self._get_resource('bridge')
        return bridges[0] if bridges else None

    def clear_cache(self):
        """Forget fetched resources so the next call hits the bridge."""
        self._resource_cache = {}
