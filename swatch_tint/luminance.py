# swatch_tint/luminance.py
from __future__ import annotations

"""
Luminance formulas.

Each method maps an sRGB triple (0..255 per channel) to a scalar in [0, 1]:

  NATURAL            ITU-R BT.709 weights  (0.2126 R + 0.7152 G + 0.0722 B) / 255
  VIBRANT / AVERAGE  plain channel mean    (R + G + B) / (3 * 255)
  BALANCED / WEIGHTED  NTSC/PAL BT.601     (0.299 R + 0.587 G + 0.114 B) / 255

The "enhance" adjustment is not part of any formula. It is an EnhanceCurve
applied to the scalar afterwards (luminance ** 0.8 by default).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Tuple, Union

import numpy as np

from .constants import ENHANCE_GAMMA
from .core_types import UnknownLuminanceMethodError

LuminanceTransform = Callable[[np.ndarray], np.ndarray]


class LuminanceMethod(Enum):
    NATURAL = "natural"
    VIBRANT = "vibrant"
    BALANCED = "balanced"
    # Aliases
    AVERAGE = "vibrant"
    WEIGHTED = "balanced"

    def calculate(self, r: float, g: float, b: float) -> float:
        """Scalar luminance in [0, 1] for one pixel."""
        return float(self.calculate_array(np.array([r, g, b], dtype=np.float64)))

    def calculate_array(self, rgb: np.ndarray) -> np.ndarray:
        """
        Vectorised luminance over an array[...,3] of 0..255 channels.
        Returns float64 array[...] clipped to [0, 1].
        """
        try:
            (wr, wg, wb), divisor = _LUMINANCE_WEIGHTS[self]
        except KeyError:  # pragma: no cover
            raise UnknownLuminanceMethodError(self.value) from None
        arr = np.asarray(rgb, dtype=np.float64)
        value = (wr * arr[..., 0] + wg * arr[..., 1] + wb * arr[..., 2]) / divisor
        return np.clip(value, 0.0, 1.0)


# (channel weights, divisor) per canonical member; aliases share their entry.
_LUMINANCE_WEIGHTS: Dict[LuminanceMethod, Tuple[Tuple[float, float, float], float]] = {
    LuminanceMethod.NATURAL: ((0.2126, 0.7152, 0.0722), 255.0),
    LuminanceMethod.VIBRANT: ((1.0, 1.0, 1.0), 3.0 * 255.0),
    LuminanceMethod.BALANCED: ((0.299, 0.587, 0.114), 255.0),
}


def method_names() -> List[str]:
    """Accepted identifiers, aliases included, lower-case."""
    return [name.lower() for name in LuminanceMethod.__members__]


def parse_luminance_method(value: Union[str, LuminanceMethod]) -> LuminanceMethod:
    """
    Resolve a method from untyped input (CLI flag, JSON field).
    Case-insensitive; aliases resolve to their canonical member.
    """
    if isinstance(value, LuminanceMethod):
        return value
    if not isinstance(value, str):
        raise UnknownLuminanceMethodError(
            f"luminance method must be a string, got {type(value).__name__}"
        )
    key = value.strip().upper()
    try:
        return LuminanceMethod[key]
    except KeyError:
        raise UnknownLuminanceMethodError(
            f"unknown luminance method {value!r}; expected one of: {', '.join(method_names())}"
        ) from None


@dataclass(frozen=True)
class EnhanceCurve:
    """Power curve applied to a luminance scalar. gamma < 1 brightens midtones."""

    gamma: float = ENHANCE_GAMMA

    def __post_init__(self) -> None:
        if not np.isfinite(self.gamma) or self.gamma <= 0.0:
            raise ValueError(f"enhance gamma must be > 0, got {self.gamma}")

    def __call__(self, luminance: np.ndarray) -> np.ndarray:
        lum = np.clip(np.asarray(luminance, dtype=np.float64), 0.0, 1.0)
        return np.power(lum, self.gamma)


def compose(*transforms: LuminanceTransform) -> LuminanceTransform:
    """Chain luminance transforms left to right."""

    def _apply(luminance: np.ndarray) -> np.ndarray:
        out = luminance
        for fn in transforms:
            out = fn(out)
        return out

    return _apply


__all__ = [
    "LuminanceMethod",
    "LuminanceTransform",
    "EnhanceCurve",
    "method_names",
    "parse_luminance_method",
    "compose",
]
