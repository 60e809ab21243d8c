# swatch_tint/colour_convert.py
from __future__ import annotations

"""
Colour conversions and metrics (sRGB, D65).

Exports:
  rgb_to_linear(srgb)
  rgb_to_lab(rgb)
  lab_to_lch(lab)
  delta_e76(lab1, lab2)
  delta_e2000_pair(lab1, lab2)
  delta_e2000_vec(src_lab, cand_lab)
  rgb_to_hsl(rgb)
  hsl_to_rgb(hsl)
"""

import math
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from .core_types import HslTuple, Lab, Lch, RGBTuple, coerce_to_rgb_tuple

# Reference white (D65)
_XN, _YN, _ZN = 0.95047, 1.00000, 1.08883


# sRGB to linear


def rgb_to_linear(srgb: np.ndarray) -> np.ndarray:
    """
    Convert sRGB (non-linear 0..1) to linear RGB (0..1). Vectorised.
    Uses the standard 0.04045 threshold.
    """
    srgb_f = np.asarray(srgb, dtype=np.float64)
    return np.where(srgb_f <= 0.04045, srgb_f / 12.92, ((srgb_f + 0.055) / 1.055) ** 2.4)


# sRGB to Lab (D65)


def rgb_to_lab(rgb: Sequence[int] | np.ndarray) -> Lab:
    """
    sRGB to CIE Lab (D65).
    Input channels are 0..255 (any numeric dtype). Preserves shape (...,3).
    Returns float64.
    """
    rgb_f = np.asarray(rgb, dtype=np.float64)
    if rgb_f.shape[-1] != 3:
        raise ValueError(f"expected (...,3) RGB input, got shape {rgb_f.shape}")
    rgb_f = rgb_f / 255.0

    r_lin = rgb_to_linear(rgb_f[..., 0])
    g_lin = rgb_to_linear(rgb_f[..., 1])
    b_lin = rgb_to_linear(rgb_f[..., 2])

    # Linear RGB -> XYZ (D65)
    X = 0.4124564 * r_lin + 0.3575761 * g_lin + 0.1804375 * b_lin
    Y = 0.2126729 * r_lin + 0.7151522 * g_lin + 0.0721750 * b_lin
    Z = 0.0193339 * r_lin + 0.1191920 * g_lin + 0.9503041 * b_lin

    x, y, z = X / _XN, Y / _YN, Z / _ZN
    e, k = 216.0 / 24389.0, 24389.0 / 27.0

    def f(t: np.ndarray) -> np.ndarray:
        return np.where(t > e, np.cbrt(t), (k * t + 16.0) / 116.0)

    fx, fy, fz = f(x), f(y), f(z)

    out = np.empty(rgb_f.shape, dtype=np.float64)
    out[..., 0] = 116.0 * fy - 16.0
    out[..., 1] = 500.0 * (fx - fy)
    out[..., 2] = 200.0 * (fy - fz)
    return out


# Lab to LCh


def lab_to_lch(lab: Lab) -> Lch:
    """
    Lab[...,3] to LCh[...,3] (degrees in [0,360)).
    Shape preserved.
    """
    lab_f = np.asarray(lab, dtype=np.float64)
    orig_shape = lab_f.shape
    flat = lab_f.reshape(-1, 3)
    C = np.hypot(flat[:, 1], flat[:, 2])
    h = (np.degrees(np.arctan2(flat[:, 2], flat[:, 1])) + 360.0) % 360.0
    return np.stack([flat[:, 0], C, h], axis=1).reshape(orig_shape)


# Distances


def delta_e76(lab1: np.ndarray, lab2: np.ndarray) -> NDArray[np.float64]:
    """Euclidean (CIE76) distance between Lab rows; broadcasts over leading axes."""
    diff = np.asarray(lab1, dtype=np.float64) - np.asarray(lab2, dtype=np.float64)
    return np.sqrt(np.sum(diff * diff, axis=-1))


def delta_e2000_pair(
    lab1: Sequence[float] | NDArray[np.floating],
    lab2: Sequence[float] | NDArray[np.floating],
) -> float:
    """
    CIEDE2000 distance between two Lab colours.
    Scalar reference implementation.
    """
    L1, a1, b1 = float(lab1[0]), float(lab1[1]), float(lab1[2])
    L2, a2, b2 = float(lab2[0]), float(lab2[1]), float(lab2[2])

    C1 = math.hypot(a1, b1)
    C2 = math.hypot(a2, b2)
    C_bar = 0.5 * (C1 + C2)
    G = 0.5 * (1.0 - math.sqrt((C_bar**7) / (C_bar**7 + 25.0**7)))

    a1p = (1.0 + G) * a1
    a2p = (1.0 + G) * a2
    C1p = math.hypot(a1p, b1)
    C2p = math.hypot(a2p, b2)

    def _hue(a_val: float, b_val: float) -> float:
        if a_val == 0.0 and b_val == 0.0:
            return 0.0
        ang = math.degrees(math.atan2(b_val, a_val))
        return ang + 360.0 if ang < 0.0 else ang

    h1p = _hue(a1p, b1)
    h2p = _hue(a2p, b2)

    dLp = L2 - L1
    dCp = C2p - C1p

    dhp = h2p - h1p
    if C1p * C2p == 0.0:
        dhp = 0.0
    elif dhp > 180.0:
        dhp -= 360.0
    elif dhp < -180.0:
        dhp += 360.0

    dHp = 2.0 * math.sqrt(C1p * C2p) * math.sin(math.radians(dhp / 2.0))

    L_bar = 0.5 * (L1 + L2)
    C_bar_p = 0.5 * (C1p + C2p)

    if C1p * C2p == 0.0:
        h_bar_p = h1p + h2p
    else:
        h_sum = h1p + h2p
        h_diff = abs(h1p - h2p)
        if h_diff <= 180.0:
            h_bar_p = 0.5 * h_sum
        elif h_sum < 360.0:
            h_bar_p = 0.5 * (h_sum + 360.0)
        else:
            h_bar_p = 0.5 * (h_sum - 360.0)

    T = (
        1.0
        - 0.17 * math.cos(math.radians(h_bar_p - 30.0))
        + 0.24 * math.cos(math.radians(2.0 * h_bar_p))
        + 0.32 * math.cos(math.radians(3.0 * h_bar_p + 6.0))
        - 0.20 * math.cos(math.radians(4.0 * h_bar_p - 63.0))
    )

    d_theta = 30.0 * math.exp(-(((h_bar_p - 275.0) / 25.0) ** 2.0))
    R_c = 2.0 * math.sqrt((C_bar_p**7) / (C_bar_p**7 + 25.0**7))

    S_l = 1.0 + (0.015 * ((L_bar - 50.0) ** 2.0)) / math.sqrt(
        20.0 + ((L_bar - 50.0) ** 2.0)
    )
    S_c = 1.0 + 0.045 * C_bar_p
    S_h = 1.0 + 0.015 * C_bar_p * T
    R_t = -math.sin(math.radians(2.0 * d_theta)) * R_c

    kL = kC = kH = 1.0
    dE = math.sqrt(
        max(
            0.0,
            (dLp / (kL * S_l)) ** 2
            + (dCp / (kC * S_c)) ** 2
            + (dHp / (kH * S_h)) ** 2
            + R_t * (dCp / (kC * S_c)) * (dHp / (kH * S_h)),
        )
    )
    return float(dE)


def delta_e2000_vec(src_lab: Lab, cand_lab: Lab) -> NDArray[np.float64]:
    """
    Row-wise CIEDE2000 for one source Lab vs many candidate Labs.

    Args:
      src_lab: Lab [3]
      cand_lab: Lab [N,3]
    Returns:
      float64 array [N]
    """
    s = np.asarray(src_lab, dtype=np.float64).reshape(3)
    cands = np.asarray(cand_lab, dtype=np.float64).reshape(-1, 3)
    out = np.empty((cands.shape[0],), dtype=np.float64)
    for i in range(cands.shape[0]):
        out[i] = delta_e2000_pair(s, cands[i])
    return out


# HSL


def rgb_to_hsl(rgb: Sequence[float]) -> HslTuple:
    """
    RGB (0..255) to HSL as (hue degrees [0,360), saturation [0,1], lightness [0,1]).
    No rounding, so hsl_to_rgb(rgb_to_hsl(x)) reproduces x.
    """
    r8, g8, b8 = coerce_to_rgb_tuple(rgb)
    r, g, b = r8 / 255.0, g8 / 255.0, b8 / 255.0
    hi = max(r, g, b)
    lo = min(r, g, b)
    light = (hi + lo) / 2.0
    if hi == lo:
        return (0.0, 0.0, light)

    d = hi - lo
    sat = d / (2.0 - hi - lo) if light > 0.5 else d / (hi + lo)
    if hi == r:
        hue = (g - b) / d + (6.0 if g < b else 0.0)
    elif hi == g:
        hue = (b - r) / d + 2.0
    else:
        hue = (r - g) / d + 4.0
    return ((hue * 60.0) % 360.0, sat, light)


def _hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0.0:
        t += 1.0
    if t > 1.0:
        t -= 1.0
    if t < 1.0 / 6.0:
        return p + (q - p) * 6.0 * t
    if t < 0.5:
        return q
    if t < 2.0 / 3.0:
        return p + (q - p) * (2.0 / 3.0 - t) * 6.0
    return p


def hsl_to_rgb(hsl: Sequence[float]) -> RGBTuple:
    """HSL (hue degrees, any range; sat and light in [0,1]) to an RGB tuple."""
    hue, sat, light = float(hsl[0]), float(hsl[1]), float(hsl[2])
    h = (hue % 360.0) / 360.0
    s = min(1.0, max(0.0, sat))
    l = min(1.0, max(0.0, light))

    if s == 0.0:
        r = g = b = l
    else:
        q = l * (1.0 + s) if l < 0.5 else l + s - l * s
        p = 2.0 * l - q
        r = _hue_to_channel(p, q, h + 1.0 / 3.0)
        g = _hue_to_channel(p, q, h)
        b = _hue_to_channel(p, q, h - 1.0 / 3.0)
    return coerce_to_rgb_tuple((r * 255.0, g * 255.0, b * 255.0))


__all__ = [
    "rgb_to_linear",
    "rgb_to_lab",
    "lab_to_lch",
    "delta_e76",
    "delta_e2000_pair",
    "delta_e2000_vec",
    "rgb_to_hsl",
    "hsl_to_rgb",
]
