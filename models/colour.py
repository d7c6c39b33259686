"""Colour conversion for Hue light and scene display.

Converts the colour encodings used by the bridge into display colours:
- CIE 1931 xy chromaticity + brightness (colour lights)
- Colour temperature in mirek + brightness (white ambiance lights)

All functions are pure. Invalid input that would divide by zero (y=0, mirek=0)
raises InvalidColourInput; the display helpers turn that into NEUTRAL_GREY.
"""

import math

from models.types import RGB

# Fixed display colours
OFF_COLOUR = '#374151'
NEUTRAL_GREY = OFF_COLOUR
DEFAULT_MIREK = 366  # ~2730K warm white

# Coarse swatches for quick grouping by colour temperature
WARM_SWATCH = '#ffb366'
NEUTRAL_SWATCH = '#fff3e6'
COOL_SWATCH = '#b3d9ff'


class InvalidColourInput(ValueError):
    """Raised when a colour value cannot be converted (e.g. y=0 or mirek=0)."""


def _to_channel(value: float) -> int:
    """Round half up and clamp a 0-255 float to an integer channel."""
    return max(0, min(255, int(math.floor(value + 0.5))))


def _gamma(channel: float) -> float:
    """Apply sRGB gamma encoding to a linear channel value."""
    if channel <= 0.0031308:
        return 12.92 * channel
    return 1.055 * math.pow(channel, 1.0 / 2.4) - 0.055


def xy_to_rgb(x: float, y: float, brightness: float = 100) -> RGB:
    """Convert CIE xy coordinates and brightness to RGB.

    Args:
        x: CIE x coordinate (0-1)
        y: CIE y coordinate (0-1, must not be 0)
        brightness: Brightness percentage (0-100)

    Returns:
        RGB with each channel in 0-255

    Raises:
        InvalidColourInput: If y is 0
    """
    if y == 0:
        raise InvalidColourInput(f"Cannot convert xy({x}, {y}): y must not be 0")

    z = 1.0 - x - y
    Y = max(brightness, 0) / 100.0
    X = (Y / y) * x
    Z = (Y / y) * z

    # XYZ to linear sRGB (wide gamut D65)
    r = X * 1.656492 - Y * 0.354851 - Z * 0.255038
    g = -X * 0.707196 + Y * 1.655397 + Z * 0.036152
    b = X * 0.051713 - Y * 0.121364 + Z * 1.011530

    r, g, b = _gamma(r), _gamma(g), _gamma(b)

    # Normalise before clamping so saturated colours keep their hue
    max_value = max(r, g, b)
    if max_value > 1:
        r, g, b = r / max_value, g / max_value, b / max_value

    return RGB(*(_to_channel(max(0.0, min(1.0, c)) * 255) for c in (r, g, b)))


def mirek_to_rgb(mirek: float, brightness: float = 100) -> RGB:
    """Convert colour temperature (mirek) and brightness to RGB.

    Uses Tanner Helland's blackbody approximation. Channels are clamped to
    0-255 both before and after the brightness scaling.

    Raises:
        InvalidColourInput: If mirek is zero or negative
    """
    if mirek <= 0:
        raise InvalidColourInput(f"Cannot convert {mirek} mirek: must be positive")

    kelvin = 1_000_000 / mirek

    if kelvin >= 6600:
        r = 329.698727466 * math.pow(kelvin / 100 - 60, -0.1332047592)
        g = 288.1221695283 * math.pow(kelvin / 100 - 60, -0.0755148492)
        b = 255.0
    else:
        r = 255.0
        g = 99.4708025861 * math.log(kelvin / 100) - 161.1195681661
        if kelvin < 1900:
            b = 0.0
        else:
            b = 138.5177312231 * math.log(kelvin / 100 - 10) - 305.0447927307

    multiplier = max(brightness, 0) / 100
    return RGB(*(_to_channel(max(0.0, min(255.0, c)) * multiplier) for c in (r, g, b)))


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Convert RGB channels to a lowercase '#rrggbb' string."""
    return f"#{int(r):02x}{int(g):02x}{int(b):02x}"


def xy_to_hex(x: float, y: float, brightness: float = 100) -> str:
    """Convert CIE xy coordinates and brightness to a hex colour."""
    return rgb_to_hex(*xy_to_rgb(x, y, brightness))


def mirek_to_hex(mirek: float, brightness: float = 100) -> str:
    """Convert colour temperature and brightness to a hex colour."""
    return rgb_to_hex(*mirek_to_rgb(mirek, brightness))


def hex_to_rgb(hex_colour: str) -> RGB:
    """Parse a '#rrggbb' string back into RGB (used for terminal swatches)."""
    value = hex_colour.lstrip('#')
    return RGB(int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


def get_light_colour(light: dict) -> str:
    """Get the display colour for an exported light.

    Off lights are always OFF_COLOUR. Otherwise xy colour is preferred over
    colour temperature, falling back to a default warm white. Brightness
    defaults to 100 when absent.

    Args:
        light: Light record from lights-v2.json (with a 'state' dict), or the
            state dict itself

    Returns:
        Hex colour string
    """
    state = light.get('state', light) or {}

    if not state.get('on'):
        return OFF_COLOUR

    brightness = state.get('brightness') or 100

    try:
        colour_xy = state.get('color_xy')
        if colour_xy:
            return xy_to_hex(colour_xy.get('x', 0), colour_xy.get('y', 0), brightness)

        mirek = state.get('color_temperature')
        if mirek:
            return mirek_to_hex(mirek, brightness)

        return mirek_to_hex(DEFAULT_MIREK, brightness)
    except InvalidColourInput:
        return NEUTRAL_GREY


def temperature_swatch(mirek: float | None) -> str:
    """Map a colour temperature to one of three fixed swatches (warm/neutral/cool)."""
    if not mirek or mirek <= 0:
        return NEUTRAL_SWATCH

    kelvin = 1_000_000 / mirek
    if kelvin < 3000:
        return WARM_SWATCH
    if kelvin > 5000:
        return COOL_SWATCH
    return NEUTRAL_SWATCH


def format_brightness(brightness: float | None) -> str:
    """Format brightness as a percentage. Missing brightness shows as 0%."""
    if brightness is None:
        return '0%'
    return f"{int(math.floor(brightness + 0.5))}%"


def format_temperature(mirek: float | None) -> str:
    """Format a mirek value as Kelvin (e.g. '2703K'), or 'N/A' if missing."""
    if not mirek or mirek <= 0:
        return 'N/A'
    return f"{int(math.floor(1_000_000 / mirek + 0.5))}K"
