"""
Dashboard command module.

Read-only views of the exported bridge snapshot.

Structure:
- helpers.py: Shared helper functions (snapshot loading, room membership, tables, swatches)
- overview.py: One-screen summary (1 command)
- lights.py: Light commands (2 commands)
- rooms.py: Room commands (2 commands)
- scenes.py: Scene commands (2 commands)
- devices.py: Device commands (2 commands)
- switches.py: Switch scene cycle command (1 command)
"""

from .overview import overview_command

from .lights import lights_command, light_command

from .rooms import rooms_command, room_command

from .scenes import scenes_command, scene_command

from .devices import devices_command, device_command

from .switches import switches_command

# Re-export helpers
from .helpers import (
    get_snapshot,
    lookup_or_suggest,
    room_devices,
    room_light_ids,
    room_lights,
    build_light_room_index,
    find_device_room,
    should_include_room,
    swatch,
    palette,
    display_table,
)

__all__ = [
    # Helper functions
    'get_snapshot',
    'lookup_or_suggest',
    'room_devices',
    'room_light_ids',
    'room_lights',
    'build_light_room_index',
    'find_device_room',
    'should_include_room',
    'swatch',
    'palette',
    'display_table',

    # Commands
    'overview_command',
    'lights_command',
    'light_command',
    'rooms_command',
    'room_command',
    'scenes_command',
    'scene_command',
    'devices_command',
    'device_command',
    'switches_command',
]
