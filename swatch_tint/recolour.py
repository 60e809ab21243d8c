# swatch_tint/recolour.py
from __future__ import annotations

"""
Luminance-preserving recolouring.

Every visible pixel (alpha > 0) is replaced by target * luminance(pixel), using a
single scalar for all three channels, so hue and saturation come from the target
colour and shading comes from the source artwork. Pixels with alpha == 0 are
copied through untouched (colour and alpha). Alpha is never modified.

Exports:
  recolourise(bitmap, target, method, *, enhance=None, workers=1) -> Bitmap
  recolourise_rgba(rgba, target, method, *, enhance=None, workers=1) -> U8Image
  recolourise_buffer(width, height, buffer, target, method, *, enhance=None) -> bytes
  recolourise_pixel(r, g, b, a, target, method, *, enhance=None) -> (r, g, b, a)
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence, Tuple, Union

import numpy as np

from .constants import DEFAULT_LUMINANCE_METHOD, THREADED_MIN_ROWS
from .core_types import Bitmap, BitmapShapeError, ColourLike, U8Image, to_rgb
from .luminance import LuminanceMethod, LuminanceTransform, parse_luminance_method
from .utils import split_rows_into_parts

MethodLike = Union[str, LuminanceMethod]


def _scale_target(
    target_rgb: np.ndarray, luminance: np.ndarray
) -> np.ndarray:
    """round(target * luminance) per channel, half up, clamped to 0..255."""
    scaled = np.floor(target_rgb[None, :] * luminance[:, None] + 0.5)
    return np.clip(scaled, 0.0, 255.0).astype(np.uint8)


def _recolour_block(
    rgba: U8Image,
    target_rgb: np.ndarray,
    method: LuminanceMethod,
    enhance: Optional[LuminanceTransform],
) -> U8Image:
    """Recolour one contiguous block of rows. Returns a new array."""
    out = rgba.copy()
    visible = rgba[..., 3] > 0
    if not np.any(visible):
        return out
    luminance = method.calculate_array(rgba[..., :3][visible])
    if enhance is not None:
        luminance = np.clip(np.asarray(enhance(luminance), dtype=np.float64), 0.0, 1.0)
    out[..., :3][visible] = _scale_target(target_rgb, luminance)
    return out


def _check_rgba(rgba: np.ndarray) -> U8Image:
    if not isinstance(rgba, np.ndarray):
        raise BitmapShapeError("expected a numpy RGBA array")
    if rgba.dtype != np.uint8 or rgba.ndim != 3 or rgba.shape[-1] != 4:
        raise BitmapShapeError(
            f"expected uint8 (H,W,4) RGBA array, got {rgba.dtype} {rgba.shape}"
        )
    if rgba.shape[0] == 0 or rgba.shape[1] == 0:
        raise BitmapShapeError("RGBA array has no pixels")
    return rgba


def recolourise_rgba(
    rgba: np.ndarray,
    target: ColourLike,
    method: MethodLike = DEFAULT_LUMINANCE_METHOD,
    *,
    enhance: Optional[LuminanceTransform] = None,
    workers: int = 1,
) -> U8Image:
    """
    Array form of recolourise().

    Args:
      rgba: uint8 [H,W,4]
      target: '#RRGGBB' / '#RGB' string or RGB triple
      method: LuminanceMethod or its name
      enhance: optional transform applied to the luminance scalar
      workers: threads; rows are split when workers > 1 and H >= THREADED_MIN_ROWS
    Returns:
      uint8 [H,W,4], a new array
    """
    src = _check_rgba(rgba)
    target_rgb = np.asarray(to_rgb(target), dtype=np.float64)
    resolved = parse_luminance_method(method)

    height = int(src.shape[0])
    if workers <= 1 or height < THREADED_MIN_ROWS:
        return _recolour_block(src, target_rgb, resolved, enhance)

    chunks = split_rows_into_parts(height, workers)
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [
            pool.submit(_recolour_block, src[s:e], target_rgb, resolved, enhance)
            for s, e in chunks
        ]
        parts = [f.result() for f in futures]
    return np.vstack(parts)


def recolourise(
    bitmap: Bitmap,
    target: ColourLike,
    method: MethodLike = DEFAULT_LUMINANCE_METHOD,
    *,
    enhance: Optional[LuminanceTransform] = None,
    workers: int = 1,
) -> Bitmap:
    """Recolour a Bitmap to target. Returns a new Bitmap of the same size."""
    if not isinstance(bitmap, Bitmap):
        raise BitmapShapeError(f"expected a Bitmap, got {type(bitmap).__name__}")
    out = recolourise_rgba(
        bitmap.rgba, target, method, enhance=enhance, workers=workers
    )
    return Bitmap(bitmap.width, bitmap.height, out)


def recolourise_buffer(
    width: int,
    height: int,
    buffer: Union[bytes, bytearray, memoryview, Sequence[int]],
    target: ColourLike,
    method: MethodLike = DEFAULT_LUMINANCE_METHOD,
    *,
    enhance: Optional[LuminanceTransform] = None,
) -> bytes:
    """Raw-buffer form: flat RGBA bytes in, flat RGBA bytes out."""
    bitmap = Bitmap.from_buffer(width, height, buffer)
    return recolourise(bitmap, target, method, enhance=enhance).to_bytes()


def recolourise_pixel(
    r: int,
    g: int,
    b: int,
    a: int,
    target: ColourLike,
    method: MethodLike = DEFAULT_LUMINANCE_METHOD,
    *,
    enhance: Optional[LuminanceTransform] = None,
) -> Tuple[int, int, int, int]:
    """Single-pixel reference of the recolouring rule."""
    resolved = parse_luminance_method(method)
    target_rgb = np.asarray(to_rgb(target), dtype=np.float64)
    for channel, value in zip("rgba", (r, g, b, a)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise BitmapShapeError(f"pixel channel {channel} must be an integer, got {value!r}")
        if not 0 <= value <= 255:
            raise BitmapShapeError(f"pixel channel {channel} must lie in 0..255, got {value}")
    if a == 0:
        return (int(r), int(g), int(b), 0)
    luminance = np.array([resolved.calculate(r, g, b)], dtype=np.float64)
    if enhance is not None:
        luminance = np.clip(np.asarray(enhance(luminance), dtype=np.float64), 0.0, 1.0)
    nr, ng, nb = (int(v) for v in _scale_target(target_rgb, luminance)[0])
    return (nr, ng, nb, a)


__all__ = [
    "recolourise",
    "recolourise_rgba",
    "recolourise_buffer",
    "recolourise_pixel",
]
