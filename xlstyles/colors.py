"""RGB colour helpers for style and theme colours."""

from __future__ import annotations

import colorsys

__all__ = ["get_palette_color", "theme_color"]


def get_palette_color(color: str) -> str:
    """Return an opaque ARGB code for an RGB colour such as ``#a1b2c3``."""
    return "FF" + color.upper().replace("#", "")


def _parse_rgb(base_color: str) -> tuple[int, int, int]:
    """Split the first six hex digits of a colour into its channels."""
    if len(base_color) < 6:
        raise ValueError(f"colour code too short: {base_color!r}")
    try:
        return tuple(int(base_color[i : i + 2], 16) for i in (0, 2, 4))  # type: ignore[return-value]
    except ValueError as exc:
        raise ValueError(f"invalid colour code: {base_color!r}") from exc


def _channel(value: float) -> int:
    return max(0, min(255, round(value * 255)))


def theme_color(base_color: str, tint: float) -> str:
    """Apply a theme tint to an RGB colour and return its ARGB code.

    A tint of zero returns the colour unchanged; negative tints darken it
    and positive tints lighten it, by scaling its luminance.
    Raises ValueError when the colour is not a six-digit hex code.
    """
    if tint == 0:
        return "FF" + base_color
    red, green, blue = _parse_rgb(base_color)
    hue, lightness, saturation = colorsys.rgb_to_hls(red / 255, green / 255, blue / 255)
    if tint < 0:
        lightness *= 1 + tint
    else:
        lightness = lightness * (1 - tint) + tint
    red_f, green_f, blue_f = colorsys.hls_to_rgb(hue, lightness, saturation)
    return "FF{:02X}{:02X}{:02X}".format(_channel(red_f), _channel(green_f), _channel(blue_f))