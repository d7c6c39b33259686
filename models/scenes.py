"""Scene analysis for display.

Derives representative colours, light counts and emoji for scenes exported
from the v2 API (scenes-v2.json). Scene actions look like:

    {'target': {'rid': ..., 'rtype': 'light'},
     'action': {'on': {'on': True}, 'dimming': {'brightness': 80.0},
                'color': {'xy': {'x': 0.45, 'y': 0.41}},
                'color_temperature': {'mirek': 366}}}
"""

from models.colour import InvalidColourInput, xy_to_hex, mirek_to_hex, format_temperature
from models.icons import SCENE_EMOJI_RULES, DEFAULT_SCENE_EMOJI, first_match

DEFAULT_ON_COLOUR = '#fbbf24'  # Light turned on with no colour info
SCENE_NEUTRAL_COLOUR = '#6b7280'  # Light turned off, or no info
MAX_SCENE_COLOURS = 5


def light_actions(scene: dict) -> list[dict]:
    """Get the scene's actions that target individual lights, in stored order."""
    return [
        action for action in scene.get('actions') or []
        if isinstance(action, dict) and (action.get('target') or {}).get('rtype') == 'light'
    ]


def get_action_colour(action: dict) -> str:
    """Get the display colour for a single scene action."""
    data = action.get('action') or {}
    brightness = (data.get('dimming') or {}).get('brightness') or 100
    xy = (data.get('color') or {}).get('xy')
    mirek = (data.get('color_temperature') or {}).get('mirek')

    try:
        if xy:
            return xy_to_hex(xy.get('x', 0), xy.get('y', 0), brightness)
        if mirek:
            return mirek_to_hex(mirek, brightness)
    except InvalidColourInput:
        return SCENE_NEUTRAL_COLOUR

    if (data.get('on') or {}).get('on'):
        return DEFAULT_ON_COLOUR
    return SCENE_NEUTRAL_COLOUR


def get_scene_colours(scene: dict, max_colours: int = MAX_SCENE_COLOURS) -> list[str]:
    """Get up to max_colours representative colours for a scene.

    One colour per light action, in stored order, without de-duplication.
    """
    return [get_action_colour(action) for action in light_actions(scene)[:max_colours]]


def count_affected_lights(scene: dict) -> int:
    """Count the scene's actions that target a light (group targets don't count)."""
    return len(light_actions(scene))


def scene_emoji(name: str | None) -> str:
    """Pick an emoji for a scene from keywords in its name."""
    return first_match(name, SCENE_EMOJI_RULES, DEFAULT_SCENE_EMOJI)


def scene_room_id(scene: dict) -> str | None:
    """Get the room ID a scene belongs to, or None for zone/other scenes."""
    group = scene.get('group') or {}
    if group.get('rtype') == 'room':
        return group.get('rid')
    return None


def scenes_for_room(scenes: dict[str, dict], room_id: str) -> list[dict]:
    """Get all scenes belonging to a room, sorted by name."""
    room_scenes = [s for s in scenes.values() if scene_room_id(s) == room_id]
    return sorted(room_scenes, key=lambda s: s.get('name', '').lower())


def describe_action(action: dict) -> str:
    """Describe a scene action, e.g. 'ON, 80%, 2732K' or 'ON, 50%, xy(0.45, 0.41)'."""
    data = action.get('action') or {}
    on_state = (data.get('on') or {}).get('on')
    brightness = (data.get('dimming') or {}).get('brightness')
    mirek = (data.get('color_temperature') or {}).get('mirek')
    xy = (data.get('color') or {}).get('xy')

    parts = []
    if on_state is not None:
        parts.append('ON' if on_state else 'OFF')
    if brightness is not None:
        parts.append(f"{brightness:.0f}%")
    if mirek:
        parts.append(format_temperature(mirek))
    if xy:
        parts.append(f"xy({xy.get('x', 0):.2f}, {xy.get('y', 0):.2f})")

    return ', '.join(parts) if parts else 'No settings'
