# swatch_tint/__init__.py
"""
swatch_tint package.

Purpose:
  Recolour garment artwork to arbitrary colours while keeping its shading, and
  match arbitrary colours against a catalog of named swatches. See tint_cli.py
  for the command line.

Public API:
  recolourise     : luminance-preserving recolour of an RGBA Bitmap.
  recolour_many   : same source, many target colours, in parallel.
  find_nearest    : ranked catalog matches with distance and confidence.
  LuminanceMethod : NATURAL / VIBRANT (AVERAGE) / BALANCED (WEIGHTED).
  MatchPolicy     : LAB / DE2000 / WEIGHTED_RGB.
  colour_convert  : hex/RGB/HSL/Lab conversions and Delta-E metrics.
  catalog         : built-in garment catalog, loading, search, sort.
  image_io        : Pillow decode/encode, base64, zip archives.

Quick start:
  from swatch_tint import Bitmap, recolourise, find_nearest, build_catalog
  out = recolourise(Bitmap.from_buffer(w, h, rgba_bytes), "#D50032", "natural")
  matches = find_nearest("#FEFEFE", build_catalog())
"""

__version__ = "0.3.0"

# Re-export namespaces for convenience.
from . import batch
from . import catalog
from . import colour_convert
from . import core_types
from . import harmony
from . import image_io
from . import luminance
from . import match
from . import recolour
from . import utils

from .batch import recolour_catalog_async, recolour_many  # noqa: E402,F401
from .catalog import GARMENT_CATALOG, build_catalog  # noqa: E402,F401
from .core_types import (  # noqa: E402,F401
    Bitmap,
    BitmapShapeError,
    CatalogColour,
    CatalogError,
    ColourFormatError,
    MatchResult,
    UnknownLuminanceMethodError,
    UnknownMatchPolicyError,
    hex_to_rgb,
    rgb_to_hex,
)
from .luminance import EnhanceCurve, LuminanceMethod  # noqa: E402,F401
from .match import MatchPolicy, find_nearest  # noqa: E402,F401
from .recolour import recolourise  # noqa: E402,F401

__all__ = [
    "__version__",
    "batch",
    "catalog",
    "colour_convert",
    "core_types",
    "harmony",
    "image_io",
    "luminance",
    "match",
    "recolour",
    "utils",
    "recolour_many",
    "recolour_catalog_async",
    "GARMENT_CATALOG",
    "build_catalog",
    "Bitmap",
    "BitmapShapeError",
    "CatalogColour",
    "CatalogError",
    "ColourFormatError",
    "MatchResult",
    "UnknownLuminanceMethodError",
    "UnknownMatchPolicyError",
    "hex_to_rgb",
    "rgb_to_hex",
    "EnhanceCurve",
    "LuminanceMethod",
    "MatchPolicy",
    "find_nearest",
    "recolourise",
]
