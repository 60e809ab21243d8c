# swatch_tint/harmony.py
from __future__ import annotations

"""
Colour relationships (HSL hue rotations) and WCAG contrast helpers.
"""

from typing import Dict, List, Union

from .colour_convert import hsl_to_rgb, rgb_to_hsl
from .core_types import ColourLike, HexStr, RGBTuple, clamp_channel, rgb_to_hex, to_rgb


def rotate_hue(colour: ColourLike, degrees: float) -> RGBTuple:
    """Rotate hue by degrees, keeping saturation and lightness."""
    h, s, l = rgb_to_hsl(to_rgb(colour))
    return hsl_to_rgb(((h + degrees) % 360.0, s, l))


def opposite(colour: ColourLike) -> RGBTuple:
    """180 degree hue rotation."""
    return rotate_hue(colour, 180.0)


def split_complements(colour: ColourLike) -> List[RGBTuple]:
    """Hues at +150 and +210 degrees."""
    return [rotate_hue(colour, 150.0), rotate_hue(colour, 210.0)]


def triad(colour: ColourLike) -> List[RGBTuple]:
    """Hues at +120 and +240 degrees."""
    return [rotate_hue(colour, 120.0), rotate_hue(colour, 240.0)]


def analogous(colour: ColourLike, angle: float = 30.0) -> List[RGBTuple]:
    """[hue - angle, colour, hue + angle]."""
    rgb = to_rgb(colour)
    return [rotate_hue(rgb, -angle), rgb, rotate_hue(rgb, angle)]


def complementary_rgb(colour: ColourLike) -> RGBTuple:
    """Per-channel inversion 255 - c."""
    r, g, b = to_rgb(colour)
    return (255 - r, 255 - g, 255 - b)


def adjust_brightness(colour: ColourLike, factor: float) -> RGBTuple:
    """Scale every channel by factor, rounded and clamped."""
    r, g, b = to_rgb(colour)
    return (clamp_channel(r * factor), clamp_channel(g * factor), clamp_channel(b * factor))


def relative_luminance(colour: ColourLike) -> float:
    """WCAG 2.0 relative luminance (linearised, 0.03928 threshold)."""

    def _lin(c: int) -> float:
        v = c / 255.0
        return v / 12.92 if v <= 0.03928 else ((v + 0.055) / 1.055) ** 2.4

    r, g, b = to_rgb(colour)
    return 0.2126 * _lin(r) + 0.7152 * _lin(g) + 0.0722 * _lin(b)


def contrast_ratio(colour_a: ColourLike, colour_b: ColourLike) -> float:
    """WCAG contrast ratio in [1, 21]."""
    la = relative_luminance(colour_a)
    lb = relative_luminance(colour_b)
    lighter, darker = max(la, lb), min(la, lb)
    return (lighter + 0.05) / (darker + 0.05)


def text_colour_for(background: ColourLike) -> HexStr:
    """'#FFFFFF' or '#000000', whichever contrasts more with background."""
    white_c = contrast_ratio(background, (255, 255, 255))
    black_c = contrast_ratio(background, (0, 0, 0))
    return "#FFFFFF" if white_c > black_c else "#000000"


def relationships(colour: ColourLike) -> Dict[str, Union[HexStr, List[HexStr]]]:
    """Opposite, split complements and triad as hex strings."""
    return {
        "opposite": rgb_to_hex(opposite(colour)),
        "split_complements": [rgb_to_hex(c) for c in split_complements(colour)],
        "triad": [rgb_to_hex(c) for c in triad(colour)],
    }


__all__ = [
    "rotate_hue",
    "opposite",
    "split_complements",
    "triad",
    "analogous",
    "complementary_rgb",
    "adjust_brightness",
    "relative_luminance",
    "contrast_ratio",
    "text_colour_for",
    "relationships",
]
