"""Type definitions for Hue Dashboard.

This module provides TypedDict definitions for structured data types used across
the application, improving type safety and IDE autocompletion.
"""

from typing import NamedTuple, TypedDict


class RGB(NamedTuple):
    """Display colour with each channel in the range 0-255."""
    r: int
    g: int
    b: int


class AuthCredentials(TypedDict):
    """Authentication credentials for Hue Bridge."""
    bridge_ip: str
    api_token: str


class DiscoveredBridge(TypedDict):
    """Bridge information from N-UPnP discovery."""
    id: str
    internalipaddress: str
    name: str | None


class CycleScene(TypedDict):
    """One step of a switch scene cycle. Order 0 is the power-on scene."""
    scene_id: str
    name: str
    order: int


class SwitchSceneCycle(TypedDict):
    """Scenes a dimmer switch's ON button steps through, sorted by order."""
    switch_id: str
    switch_name: str
    scenes: list[CycleScene]


class Snapshot(TypedDict):
    """Exported bridge data as loaded from the JSON snapshot files."""
    lights: dict[str, dict]
    rooms: dict[str, dict]
    scenes: dict[str, dict]
    devices: dict[str, dict]
    bridge: dict  # contents of bridge.json (config, schedules, rules, resourcelinks)
    scenes_v1: dict  # contents of scenes.json ({'scenes': {...}})
