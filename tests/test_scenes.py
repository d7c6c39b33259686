"""Tests for scene analysis in models/scenes.py"""

from models.colour import mirek_to_hex, xy_to_hex
from models.scenes import (
    DEFAULT_ON_COLOUR,
    SCENE_NEUTRAL_COLOUR,
    count_affected_lights,
    describe_action,
    get_action_colour,
    get_scene_colours,
    light_actions,
    scene_emoji,
    scene_room_id,
    scenes_for_room,
)


def make_action(rtype='light', **action):
    return {'target': {'rid': 'x', 'rtype': rtype}, 'action': action}


class TestActionColour:
    """Test colours derived from single scene actions."""

    def test_xy_with_brightness(self):
        """xy colour is converted at the action's brightness."""
        action = make_action(dimming={'brightness': 50}, color={'xy': {'x': 0.5, 'y': 0.4}})
        assert get_action_colour(action) == xy_to_hex(0.5, 0.4, 50)

    def test_temperature(self):
        """Colour temperature is used when there is no xy."""
        action = make_action(color_temperature={'mirek': 447})
        assert get_action_colour(action) == mirek_to_hex(447, 100)

    def test_on_without_colour(self):
        """A light switched on with no colour shows the default on colour."""
        assert get_action_colour(make_action(on={'on': True})) == DEFAULT_ON_COLOUR

    def test_off(self):
        """A light switched off shows the neutral colour."""
        assert get_action_colour(make_action(on={'on': False})) == SCENE_NEUTRAL_COLOUR

    def test_invalid_xy(self):
        """Invalid xy shows the neutral colour."""
        action = make_action(color={'xy': {'x': 0.1, 'y': 0}})
        assert get_action_colour(action) == SCENE_NEUTRAL_COLOUR

    def test_null_sub_objects(self):
        """Null dimming/colour entries don't break the lookup."""
        action = make_action(on={'on': True}, dimming=None, color=None, color_temperature=None)
        assert get_action_colour(action) == DEFAULT_ON_COLOUR


class TestSceneColours:
    """Test scene palettes and light counts."""

    def test_only_light_targets_count(self):
        """Group targets are excluded from colours and counts."""
        scene = {'actions': [
            make_action(on={'on': True}),
            make_action('grouped_light', on={'on': True}),
            make_action(on={'on': False}),
        ]}
        assert count_affected_lights(scene) == 2
        assert len(light_actions(scene)) == 2
        assert get_scene_colours(scene) == [DEFAULT_ON_COLOUR, SCENE_NEUTRAL_COLOUR]

    def test_no_light_actions(self):
        """A scene without light actions has no colours."""
        scene = {'actions': [make_action('grouped_light', on={'on': True})]}
        assert count_affected_lights(scene) == 0
        assert get_scene_colours(scene) == []

    def test_missing_actions(self):
        """Scenes without an actions list are empty."""
        assert get_scene_colours({}) == []
        assert count_affected_lights({'actions': None}) == 0

    def test_colours_capped(self):
        """At most five colours are returned, in stored order, with duplicates kept."""
        scene = {'actions': [make_action(on={'on': True}) for _ in range(7)]}
        assert get_scene_colours(scene) == [DEFAULT_ON_COLOUR] * 5
        assert get_scene_colours(scene, max_colours=2) == [DEFAULT_ON_COLOUR] * 2


class TestSceneLookups:
    """Test scene emoji, room membership and action descriptions."""

    def test_scene_emoji(self):
        """Scene names pick an emoji by keyword."""
        assert scene_emoji('Tropical twilight') == '🌅'
        assert scene_emoji('Movie') == '🎨'

    def test_scene_room_id(self, sample_scenes):
        """Room scenes report their room; zone scenes report None."""
        assert scene_room_id(sample_scenes['scene-1']) == 'room-1'
        assert scene_room_id({'group': {'rid': 'zone-1', 'rtype': 'zone'}}) is None
        assert scene_room_id({}) is None

    def test_scenes_for_room(self, sample_scenes):
        """Scenes are filtered by room."""
        scenes = scenes_for_room(sample_scenes, 'room-1')
        assert [s['name'] for s in scenes] == ['Relax']
        assert scenes_for_room(sample_scenes, 'room-9') == []

    def test_describe_action(self):
        """Actions are summarised for display."""
        action = make_action(on={'on': True}, dimming={'brightness': 80}, color_temperature={'mirek': 366})
        assert describe_action(action) == 'ON, 80%, 2732K'
        assert describe_action(make_action()) == 'No settings'
