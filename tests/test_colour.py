"""Tests for colour conversion in models/colour.py"""

import re

import pytest
from models.colour import (
    COOL_SWATCH,
    DEFAULT_MIREK,
    NEUTRAL_GREY,
    NEUTRAL_SWATCH,
    OFF_COLOUR,
    WARM_SWATCH,
    InvalidColourInput,
    format_brightness,
    format_temperature,
    get_light_colour,
    hex_to_rgb,
    mirek_to_hex,
    mirek_to_rgb,
    rgb_to_hex,
    temperature_swatch,
    xy_to_hex,
    xy_to_rgb,
)
from models.types import RGB

HEX_PATTERN = re.compile(r'^#[0-9a-f]{6}$')


class TestXyToRgb:
    """Test CIE xy to RGB conversion."""

    def test_d65_white_point_is_near_white(self):
        """The D65 white point should come out almost white."""
        r, g, b = xy_to_rgb(0.3127, 0.3290, 100)
        assert b == 255
        assert r >= 240
        assert g >= 240

    def test_saturated_red(self):
        """A red xy point should normalise to full red with little else."""
        r, g, b = xy_to_rgb(0.7, 0.3, 100)
        assert r == 255
        assert g < 20
        assert b == 0

    def test_zero_brightness_is_black(self):
        """Brightness 0 gives black."""
        assert xy_to_rgb(0.5, 0.4, 0) == RGB(0, 0, 0)

    def test_y_zero_raises(self):
        """y = 0 is invalid input rather than a division error."""
        with pytest.raises(InvalidColourInput):
            xy_to_rgb(0.0, 0.0, 100)

    def test_x_plus_y_above_one_is_tolerated(self):
        """A negative z (x + y > 1) still produces valid channels."""
        rgb = xy_to_rgb(0.7, 0.6, 100)
        assert all(0 <= c <= 255 for c in rgb)

    @pytest.mark.parametrize('x,y', [(0.01, 0.01), (0.15, 0.06), (0.3, 0.3), (0.17, 0.7), (0.99, 0.01), (0.5, 0.5)])
    @pytest.mark.parametrize('brightness', [0, 1, 50, 100])
    def test_channels_always_in_range(self, x, y, brightness):
        """Every channel is an integer in 0-255."""
        rgb = xy_to_rgb(x, y, brightness)
        assert all(isinstance(c, int) and 0 <= c <= 255 for c in rgb)

    @pytest.mark.parametrize('x,y', [(0.3127, 0.329), (0.7, 0.3), (0.17, 0.7), (0.15, 0.06), (0.45, 0.41)])
    def test_brighter_never_darker(self, x, y):
        """At a fixed xy, raising brightness never lowers a channel."""
        previous = xy_to_rgb(x, y, 0)
        for brightness in range(5, 101, 5):
            rgb = xy_to_rgb(x, y, brightness)
            assert all(now >= before for now, before in zip(rgb, previous))
            previous = rgb

    def test_hex_format(self):
        """xy_to_hex produces a lowercase #rrggbb string."""
        assert HEX_PATTERN.match(xy_to_hex(0.3, 0.3))


class TestMirekToRgb:
    """Test colour temperature to RGB conversion."""

    def test_warm_white_has_full_red(self):
        """Warm temperatures keep red at maximum."""
        r, g, b = mirek_to_rgb(DEFAULT_MIREK, 100)
        assert r == 255
        assert g > b

    def test_very_warm_has_no_blue(self):
        """Below 1900K there is no blue component."""
        r, g, b = mirek_to_rgb(1000, 100)
        assert r == 255
        assert b == 0

    def test_cool_has_full_blue(self):
        """At or above 6600K blue is at maximum and red drops."""
        r, g, b = mirek_to_rgb(100, 100)
        assert b == 255
        assert r < 255

    def test_brightness_scales_channels(self):
        """Lower brightness never makes a channel brighter."""
        full = mirek_to_rgb(250, 100)
        half = mirek_to_rgb(250, 50)
        assert all(h <= f for h, f in zip(half, full))
        assert mirek_to_rgb(250, 0) == RGB(0, 0, 0)

    @pytest.mark.parametrize('mirek', [1, 50, 153, 250, 366, 454, 500, 1000, 5000])
    def test_channels_always_in_range(self, mirek):
        """Every channel is an integer in 0-255."""
        rgb = mirek_to_rgb(mirek, 100)
        assert all(isinstance(c, int) and 0 <= c <= 255 for c in rgb)

    @pytest.mark.parametrize('mirek', [0, -10])
    def test_non_positive_mirek_raises(self, mirek):
        """Zero or negative mirek is invalid input."""
        with pytest.raises(InvalidColourInput):
            mirek_to_rgb(mirek)


class TestHexConversion:
    """Test hex helpers."""

    def test_rgb_to_hex(self):
        """Channels are zero padded and lowercase."""
        assert rgb_to_hex(255, 0, 16) == '#ff0010'

    def test_hex_to_rgb(self):
        """Hex strings parse back to channels."""
        assert hex_to_rgb('#ff0010') == RGB(255, 0, 16)

    def test_mirek_to_hex_format(self):
        """mirek_to_hex produces a #rrggbb string."""
        assert HEX_PATTERN.match(mirek_to_hex(366, 40))


class TestGetLightColour:
    """Test the display colour chosen for an exported light."""

    def test_off_light_ignores_colour(self):
        """Off lights always show the off colour."""
        light = {'state': {'on': False, 'brightness': 100, 'color_xy': {'x': 0.7, 'y': 0.3}}}
        assert get_light_colour(light) == OFF_COLOUR

    def test_xy_preferred_over_temperature(self):
        """xy colour wins over colour temperature."""
        light = {'state': {'on': True, 'brightness': 100, 'color_xy': {'x': 0.7, 'y': 0.3},
                           'color_temperature': 153}}
        assert get_light_colour(light) == xy_to_hex(0.7, 0.3, 100)

    def test_temperature_used_without_xy(self):
        """Colour temperature is used when there is no xy colour."""
        light = {'state': {'on': True, 'brightness': 60, 'color_temperature': 300}}
        assert get_light_colour(light) == mirek_to_hex(300, 60)

    def test_default_warm_white(self):
        """Lights with no colour information show a warm white."""
        light = {'state': {'on': True}}
        assert get_light_colour(light) == mirek_to_hex(DEFAULT_MIREK, 100)

    def test_missing_brightness_uses_full(self):
        """Missing brightness counts as 100."""
        light = {'state': {'on': True, 'brightness': None, 'color_temperature': 300}}
        assert get_light_colour(light) == mirek_to_hex(300, 100)

    def test_accepts_state_dict(self):
        """The state dict can be passed directly."""
        assert get_light_colour({'on': False}) == OFF_COLOUR

    def test_invalid_xy_falls_back_to_grey(self):
        """y = 0 gives the neutral grey instead of an error."""
        light = {'state': {'on': True, 'color_xy': {'x': 0.0, 'y': 0.0}}}
        assert get_light_colour(light) == NEUTRAL_GREY


class TestFormatting:
    """Test brightness/temperature formatting and swatches."""

    def test_format_brightness(self):
        """Brightness rounds to a whole percentage."""
        assert format_brightness(79.6) == '80%'
        assert format_brightness(None) == '0%'

    def test_format_temperature(self):
        """Mirek is shown as Kelvin."""
        assert format_temperature(366) == '2732K'
        assert format_temperature(None) == 'N/A'
        assert format_temperature(0) == 'N/A'

    @pytest.mark.parametrize('mirek,expected', [
        (366, WARM_SWATCH),
        (250, NEUTRAL_SWATCH),
        (153, COOL_SWATCH),
        (None, NEUTRAL_SWATCH),
    ])
    def test_temperature_swatch(self, mirek, expected):
        """Temperatures map to warm, neutral or cool swatches."""
        assert temperature_swatch(mirek) == expected
