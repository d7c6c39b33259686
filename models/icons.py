"""Icon lookup tables for rooms, lights, devices, services and scenes.

Keyword tables are ordered lists of (keywords, glyph) pairs evaluated top to
bottom; the first entry with a keyword contained in the name wins. Archetype
tables are exact-key dicts with an explicit default.
"""

# Scene names: first matching keyword wins
SCENE_EMOJI_RULES = [
    (('galaxy',), '🌌'),
    (('candle',), '🕯️'),
    (('bright', 'energize'), '☀️'),
    (('relax', 'rest'), '🧘'),
    (('concentrate', 'read'), '📚'),
    (('party', 'dance'), '🎉'),
    (('night', 'dimmed'), '🌙'),
    (('tropical', 'sunset'), '🌅'),
    (('spring', 'blossom'), '🌸'),
    (('autumn', 'fall'), '🍂'),
    (('winter', 'snow'), '❄️'),
    (('ocean', 'blue'), '🌊'),
    (('forest', 'green'), '🌲'),
    (('savanna', 'yellow'), '🦁'),
    (('modern', 'soho', 'fairfax'), '🏙️'),
]
DEFAULT_SCENE_EMOJI = '🎨'

# Device product names / archetypes: first matching keyword wins
DEVICE_ICON_RULES = [
    (('bridge',), '🌉'),
    (('button',), '🔘'),
    (('dimmer',), '🎛️'),
    (('motion',), '🏃'),
    (('switch',), '🔄'),
    (('sensor',), '📡'),
    (('light',), '💡'),
    (('strip',), '📏'),
    (('bulb',), '💡'),
]
DEFAULT_DEVICE_ICON = '📱'

ROOM_ICONS = {
    'living_room': '🛋️',
    'kitchen': '🍳',
    'dining': '🍽️',
    'bedroom': '🛏️',
    'kids_bedroom': '🧸',
    'bathroom': '🛁',
    'nursery': '👶',
    'recreation': '🎮',
    'office': '💼',
    'gym': '🏋️',
    'hallway': '🚪',
    'toilet': '🚽',
    'front_door': '🚪',
    'garage': '🚗',
    'terrace': '🌿',
    'garden': '🌱',
    'driveway': '🚗',
    'carport': '🏠',
    'home': '🏠',
    'downstairs': '⬇️',
    'upstairs': '⬆️',
    'top_floor': '🔝',
    'attic': '🏠',
    'guest_room': '🛏️',
    'staircase': '🪜',
    'lounge': '🛋️',
    'man_cave': '🍺',
    'computer': '💻',
    'studio': '🎨',
    'music': '🎵',
    'tv': '📺',
    'reading': '📚',
    'closet': '👔',
    'storage': '📦',
    'laundry_room': '🧺',
    'balcony': '🌅',
    'porch': '🏡',
    'barbecue': '🔥',
    'pool': '🏊',
}
DEFAULT_ROOM_ICON = '🏠'

LIGHT_ARCHETYPE_ICONS = {
    'table_shade': '🛋️',
    'hue_lightstrip': '💡',
    'flexible_lamp': '🔦',
    'pendant_round': '💡',
    'ceiling_round': '🔆',
    'wall_lantern': '🏮',
    'recessed_ceiling': '💡',
    'recessed_floor': '🔅',
    'single_spot': '🔦',
    'double_spot': '🔦',
    'table_wash': '🛋️',
    'wall_wash': '🏮',
    'luster': '✨',
    'pendants': '💡',
    'floor_shade': '🏮',
    'desk': '🪑',
    'wall_shade': '🏮',
}
DEFAULT_LIGHT_ICON = '💡'

SERVICE_ICONS = {
    'light': '💡',
    'button': '🔘',
    'relative_rotary': '🔄',
    'temperature': '🌡️',
    'light_level': '🔆',
    'motion': '🚶',
    'device_power': '🔋',
    'zigbee_connectivity': '📡',
    'entertainment': '🎭',
    'homekit': '🏠',
    'matter': '🔗',
    'grouped_light': '💡',
}
DEFAULT_SERVICE_ICON = '⚙️'


def first_match(name: str | None, rules: list[tuple[tuple[str, ...], str]], default: str) -> str:
    """Return the glyph of the first rule with a keyword contained in name.

    Matching is a case-insensitive substring test.
    """
    name_lower = (name or '').lower()
    for keywords, glyph in rules:
        if any(keyword in name_lower for keyword in keywords):
            return glyph
    return default


def get_room_icon(archetype: str | None) -> str:
    """Get the icon for a room archetype (e.g. 'living_room')."""
    return ROOM_ICONS.get((archetype or '').lower(), DEFAULT_ROOM_ICON)


def get_light_icon(archetype: str | None) -> str:
    """Get the icon for a light archetype (e.g. 'ceiling_round')."""
    return LIGHT_ARCHETYPE_ICONS.get((archetype or '').lower(), DEFAULT_LIGHT_ICON)


def get_service_icon(rtype: str | None) -> str:
    """Get the icon for a device service type (e.g. 'device_power')."""
    return SERVICE_ICONS.get(rtype or '', DEFAULT_SERVICE_ICON)


def get_device_icon(device: dict) -> str:
    """Get the icon for a device from its archetype and product name."""
    archetype = device.get('archetype') or device.get('metadata', {}).get('archetype', '')
    product_name = device.get('product_data', {}).get('product_name', '')
    return first_match(f"{archetype} {product_name}", DEVICE_ICON_RULES, DEFAULT_DEVICE_ICON)
