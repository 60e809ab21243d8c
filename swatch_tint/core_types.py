# swatch_tint/core_types.py
from __future__ import annotations

"""
Core type aliases, small value objects, error types, and hex/RGB helpers.
"""

import re
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

# Basic aliases

RGBTuple = Tuple[int, int, int]
HslTuple = Tuple[float, float, float]  # (hue degrees [0,360), sat [0,1], light [0,1])
HexStr = str
ColourLike = Union[HexStr, Sequence[int]]

U8Image = NDArray[np.uint8]  # (H, W, 4) RGBA
Lab = NDArray[np.float64]  # (..., 3) CIE Lab
Lch = NDArray[np.float64]  # (..., 3) CIE LCh

_HEX_RE = re.compile(r"^[0-9a-fA-F]{6}$")

# Errors


class ColourFormatError(ValueError):
    """Malformed hex string or RGB sequence."""


class BitmapShapeError(ValueError):
    """Pixel buffer does not match the declared dimensions."""


class UnknownLuminanceMethodError(ValueError):
    """Luminance method identifier is not in the formula table."""


class UnknownMatchPolicyError(ValueError):
    """Match policy identifier is not supported."""


class CatalogError(ValueError):
    """Catalog record is missing required fields."""


# Value objects


@dataclass(frozen=True)
class Bitmap:
    """
    RGBA image held as a (H, W, 4) uint8 array in row-major order.

    Build from a raw buffer with Bitmap.from_buffer(); the buffer length must be
    width * height * 4.
    """

    width: int
    height: int
    rgba: U8Image = field(repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise BitmapShapeError(
                f"bitmap dimensions must be positive, got {self.width}x{self.height}"
            )
        arr = self.rgba
        if not isinstance(arr, np.ndarray) or arr.dtype != np.uint8:
            raise BitmapShapeError("bitmap pixels must be a uint8 array")
        if arr.shape != (self.height, self.width, 4):
            raise BitmapShapeError(
                f"expected pixel array of shape {(self.height, self.width, 4)}, "
                f"got {arr.shape}"
            )

    @classmethod
    def from_buffer(
        cls, width: int, height: int, buffer: Union[bytes, bytearray, memoryview, Sequence[int]]
    ) -> "Bitmap":
        """Copy a flat RGBA byte buffer into a Bitmap, checking its length first."""
        if isinstance(buffer, (bytes, bytearray, memoryview)):
            flat = np.frombuffer(bytes(buffer), dtype=np.uint8)
        else:
            flat = np.asarray(buffer)
            if flat.ndim != 1:
                raise BitmapShapeError("buffer must be one-dimensional")
            if flat.size and (flat.min() < 0 or flat.max() > 255):
                raise BitmapShapeError("buffer values must lie in 0..255")
            flat = flat.astype(np.uint8)
        expected = int(width) * int(height) * 4
        if width <= 0 or height <= 0 or flat.size != expected:
            raise BitmapShapeError(
                f"buffer length {flat.size} does not match {width}x{height}x4 = {expected}"
            )
        return cls(int(width), int(height), flat.reshape(int(height), int(width), 4).copy())

    @classmethod
    def from_array(cls, rgba: np.ndarray) -> "Bitmap":
        """Wrap a (H, W, 4) uint8 array (copied)."""
        arr = np.asarray(rgba)
        if arr.ndim != 3 or arr.shape[-1] != 4:
            raise BitmapShapeError(f"expected (H,W,4) array, got shape {arr.shape}")
        if arr.dtype != np.uint8:
            raise BitmapShapeError("expected uint8 (H,W,4) array")
        return cls(int(arr.shape[1]), int(arr.shape[0]), arr.copy())

    def to_bytes(self) -> bytes:
        """Flat RGBA bytes, row-major."""
        return self.rgba.tobytes()

    def pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        r, g, b, a = (int(v) for v in self.rgba[y, x])
        return (r, g, b, a)


@dataclass(frozen=True)
class CatalogColour:
    """Named reference colour. The RGB row is derived from hex on construction."""

    hex: HexStr
    name: str
    family: Optional[str] = None
    tags: Tuple[str, ...] = ()
    rgb: RGBTuple = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        canonical = normalise_hex(self.hex)
        object.__setattr__(self, "hex", canonical)
        object.__setattr__(self, "tags", tuple(self.tags))
        object.__setattr__(self, "rgb", hex_to_rgb(canonical))


@dataclass(frozen=True)
class MatchResult:
    """One ranked catalog match. Derived per call, never stored."""

    hex: HexStr
    name: str
    distance: float
    confidence: float
    family: Optional[str] = None
    index: int = 0  # position in the input catalog


# Small helpers


def clamp_value(value: float, lo: float, hi: float) -> float:
    """Clamp value to [lo, hi]."""
    return lo if value < lo else hi if value > hi else value


def clamp_channel(value: float) -> int:
    """Round half up and clamp to a 0..255 channel."""
    return int(clamp_value(float(np.floor(float(value) + 0.5)), 0.0, 255.0))


def _strip_hex(hex_str: str) -> str:
    if not isinstance(hex_str, str):
        raise ColourFormatError(f"hex colour must be a string, got {type(hex_str).__name__}")
    s = hex_str
    if s.startswith("#"):
        s = s[1:]
    if len(s) == 3:
        s = "".join(ch * 2 for ch in s)
    if not _HEX_RE.fullmatch(s):
        raise ColourFormatError(f"invalid hex colour {hex_str!r}; expected '#rgb' or '#rrggbb'")
    return s


def hex_to_rgb(hex_str: str) -> RGBTuple:
    """
    Parse 'rgb', '#rgb', 'rrggbb' or '#rrggbb' (case-insensitive) into an RGB tuple.
    Raises ColourFormatError on anything else.
    """
    s = _strip_hex(hex_str)
    return (int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16))


def rgb_to_hex(rgb: Sequence[float]) -> HexStr:
    """RGB triple to canonical upper-case '#RRGGBB'. Channels are clamped to 0..255."""
    r, g, b = coerce_to_rgb_tuple(rgb)
    return f"#{r:02X}{g:02X}{b:02X}"


def normalise_hex(hex_str: str) -> HexStr:
    """Canonical '#RRGGBB' form of any accepted hex spelling."""
    return "#" + _strip_hex(hex_str).upper()


def is_valid_hex(hex_str: object) -> bool:
    """True when hex_str parses as a 3- or 6-digit hex colour."""
    if not isinstance(hex_str, str):
        return False
    try:
        _strip_hex(hex_str)
    except ColourFormatError:
        return False
    return True


def coerce_to_rgb_tuple(value: Union[Sequence[float], NDArray[np.generic]]) -> RGBTuple:
    """
    Coerce a 3-length sequence or array to a clamped (int, int, int) RGB tuple.
    """
    if isinstance(value, str):
        raise ColourFormatError("expected an RGB sequence, got a string")
    flat = np.asarray(value, dtype=np.float64).reshape(-1)
    if flat.size != 3:
        raise ColourFormatError(f"RGB needs exactly 3 channels, got {flat.size}")
    if not np.all(np.isfinite(flat)):
        raise ColourFormatError("RGB channels must be finite numbers")
    return (clamp_channel(flat[0]), clamp_channel(flat[1]), clamp_channel(flat[2]))


def to_rgb(colour: ColourLike) -> RGBTuple:
    """Accept a hex string or an RGB sequence and return an RGB tuple."""
    if isinstance(colour, str):
        return hex_to_rgb(colour)
    return coerce_to_rgb_tuple(colour)


__all__ = [
    # aliases / types
    "RGBTuple",
    "HslTuple",
    "HexStr",
    "ColourLike",
    "U8Image",
    "Lab",
    "Lch",
    # errors
    "ColourFormatError",
    "BitmapShapeError",
    "UnknownLuminanceMethodError",
    "UnknownMatchPolicyError",
    "CatalogError",
    # value objects
    "Bitmap",
    "CatalogColour",
    "MatchResult",
    # helpers
    "clamp_value",
    "clamp_channel",
    "hex_to_rgb",
    "rgb_to_hex",
    "normalise_hex",
    "is_valid_hex",
    "coerce_to_rgb_tuple",
    "to_rgb",
]
