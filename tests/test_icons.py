"""Tests for icon lookup tables in models/icons.py"""

import pytest
from models.icons import (
    DEFAULT_DEVICE_ICON,
    DEFAULT_LIGHT_ICON,
    DEFAULT_ROOM_ICON,
    DEFAULT_SCENE_EMOJI,
    DEFAULT_SERVICE_ICON,
    SCENE_EMOJI_RULES,
    first_match,
    get_device_icon,
    get_light_icon,
    get_room_icon,
    get_service_icon,
)


class TestFirstMatch:
    """Test ordered keyword matching."""

    def test_first_rule_wins(self):
        """When two rules match, the earlier one is used."""
        # 'bright' comes before 'night' in the scene table
        assert first_match('Bright night', SCENE_EMOJI_RULES, DEFAULT_SCENE_EMOJI) == '☀️'

    def test_case_insensitive_substring(self):
        """Keywords match anywhere in the name, ignoring case."""
        assert first_match('Evening RELAXATION', SCENE_EMOJI_RULES, DEFAULT_SCENE_EMOJI) == '🧘'

    def test_default_when_no_match(self):
        """Unknown names get the default."""
        assert first_match('Movie time', SCENE_EMOJI_RULES, DEFAULT_SCENE_EMOJI) == DEFAULT_SCENE_EMOJI

    def test_none_name(self):
        """A missing name gets the default."""
        assert first_match(None, SCENE_EMOJI_RULES, DEFAULT_SCENE_EMOJI) == DEFAULT_SCENE_EMOJI


class TestArchetypeIcons:
    """Test archetype lookups with explicit defaults."""

    @pytest.mark.parametrize('archetype,expected', [
        ('living_room', '🛋️'),
        ('kitchen', '🍳'),
        ('bedroom', '🛏️'),
        ('something_new', DEFAULT_ROOM_ICON),
        (None, DEFAULT_ROOM_ICON),
    ])
    def test_room_icons(self, archetype, expected):
        """Room archetypes map to icons."""
        assert get_room_icon(archetype) == expected

    def test_light_icons(self):
        """Light archetypes map to icons with a bulb default."""
        assert get_light_icon('ceiling_round') == '🔆'
        assert get_light_icon('unknown_archetype') == DEFAULT_LIGHT_ICON

    def test_service_icons(self):
        """Service types map to icons with a gear default."""
        assert get_service_icon('device_power') == '🔋'
        assert get_service_icon('mystery') == DEFAULT_SERVICE_ICON


class TestDeviceIcons:
    """Test device icon selection from archetype and product name."""

    def test_dimmer_before_switch(self):
        """A dimmer switch matches 'dimmer' before 'switch'."""
        device = {'archetype': 'unknown_archetype', 'product_data': {'product_name': 'Hue dimmer switch'}}
        assert get_device_icon(device) == '🎛️'

    def test_bridge(self):
        """The bridge is recognised by its archetype."""
        assert get_device_icon({'archetype': 'bridge_v2', 'product_data': {}}) == '🌉'

    def test_raw_v2_metadata(self):
        """Raw v2 devices with metadata.archetype are supported."""
        device = {'metadata': {'archetype': 'sultan_bulb'}, 'product_data': {'product_name': 'Hue white lamp'}}
        assert get_device_icon(device) == '💡'

    def test_default(self):
        """Unrecognised devices get the default icon."""
        assert get_device_icon({'product_data': {'product_name': 'Secure doorbell'}}) == DEFAULT_DEVICE_ICON
