# swatch_tint/constants.py
"""
Tunables shared across the project.

- Luminance defaults (method name, enhance curve exponent)
- Matching defaults (policy, confidence scale, result count)
- Batch / threading knobs
"""
from __future__ import annotations

from typing import List, Tuple

# ==========
# Luminance
# ==========
DEFAULT_LUMINANCE_METHOD: str = "natural"
# Exponent applied on top of the base luminance when "enhance" is on.
# Values below 1 lift midtones; 1.0 is the identity.
ENHANCE_GAMMA: float = 0.8

# =========
# Matching
# =========
DEFAULT_MATCH_POLICY: str = "lab"
# confidence = 100 - distance * CONFIDENCE_SCALE, clamped to [0, 100].
# With Lab distances a difference of 50 (e.g. navy vs royal blue is ~25)
# reaches zero confidence.
CONFIDENCE_SCALE: float = 2.0
MAX_MATCHES: int = 3
MIN_CONFIDENCE: float = 0.0
MAX_CONFIDENCE: float = 100.0

# Weighted RGB distance channel weights (luma-style).
RGB_WEIGHTS: Tuple[float, float, float] = (0.30, 0.59, 0.11)

# =================
# Batch / threading
# =================
BATCH_CHUNK_SIZE: int = 5
THREADED_MIN_ROWS: int = 256
ARCHIVE_PREFIX: str = "SWATCH"

# Family order used by sort_catalog(..., by="family").
FAMILY_ORDER: List[str] = [
    "neutral",
    "grey",
    "red",
    "orange",
    "yellow",
    "green",
    "blue",
    "purple",
    "pink",
    "brown",
]

__all__ = [
    "DEFAULT_LUMINANCE_METHOD",
    "ENHANCE_GAMMA",
    "DEFAULT_MATCH_POLICY",
    "CONFIDENCE_SCALE",
    "MAX_MATCHES",
    "MIN_CONFIDENCE",
    "MAX_CONFIDENCE",
    "RGB_WEIGHTS",
    "BATCH_CHUNK_SIZE",
    "THREADED_MIN_ROWS",
    "ARCHIVE_PREFIX",
    "FAMILY_ORDER",
]
