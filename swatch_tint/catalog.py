# swatch_tint/catalog.py
from __future__ import annotations

"""
Colour catalog definitions and helpers.

Exports:
  GARMENT_CATALOG: list[tuple[hex, name, family, tags]]
  build_catalog(rows=GARMENT_CATALOG) -> list[CatalogColour]
  catalog_from_records(records) -> list[CatalogColour]
  load_catalog_json(path) -> list[CatalogColour]
  catalog_rgb_array(catalog) -> uint8 [N,3]
  catalog_families(catalog) -> list[str]
  search_catalog(catalog, term="", family=None, tags=()) -> list[CatalogColour]
  sort_catalog(catalog, by="index") -> list[CatalogColour]

The catalog is an ordered list supplied by the caller; nothing here mutates it.
"""

import json
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from .colour_convert import lab_to_lch, rgb_to_lab
from .constants import FAMILY_ORDER
from .core_types import CatalogColour, CatalogError, ColourFormatError

CatalogRow = Tuple[str, str, Optional[str], Tuple[str, ...]]

GARMENT_CATALOG: List[CatalogRow] = [
    ("#FFFFFF", "White", "neutral", ()),
    ("#F5F5F5", "Ash Grey", "neutral", ()),
    ("#EDECEA", "Antique White", "neutral", ("antique",)),
    ("#25282A", "Black", "neutral", ()),
    ("#CABFAD", "Sand", "neutral", ()),
    ("#BFB3A2", "Natural", "neutral", ()),
    ("#D4C8B9", "Prairie Dust", "neutral", ()),
    ("#97999B", "Sport Grey", "grey", ()),
    ("#D7D2CB", "Ice Grey", "grey", ()),
    ("#75787B", "Graphite Heather", "grey", ("heather",)),
    ("#425563", "Dark Heather", "grey", ("heather",)),
    ("#66676C", "Charcoal", "grey", ()),
    ("#8B8B8B", "Gravel", "grey", ()),
    ("#A6A6A6", "RS Sport Grey", "grey", ()),
    ("#D50032", "Red", "red", ()),
    ("#BC243C", "Cardinal Red", "red", ()),
    ("#D50149", "Cherry Red", "red", ()),
    ("#B91C4E", "Antique Cherry Red", "red", ("antique",)),
    ("#A94D64", "Heather Cardinal", "red", ("heather",)),
    ("#FF4D6B", "Neon Red", "red", ("neon",)),
    ("#C41E3A", "Cardinal", "red", ()),
    ("#D73B3E", "Rusty Red", "red", ()),
    ("#FF4400", "Orange", "orange", ()),
    ("#FF6B35", "Safety Orange", "orange", ("safety",)),
    ("#E95C42", "Coral Silk", "orange", ()),
    ("#D06B53", "Heather Orange", "orange", ("heather",)),
    ("#FF7F50", "Coral", "orange", ()),
    ("#FF9966", "Sunset", "orange", ()),
    ("#FFB347", "Tangerine", "orange", ()),
    ("#D4AF37", "Gold", "yellow", ()),
    ("#FED141", "Daisy", "yellow", ()),
    ("#FFD100", "Yellow", "yellow", ()),
    ("#F7C846", "Vegas Gold", "yellow", ()),
    ("#FFE5B4", "Cornsilk", "yellow", ()),
    ("#FFD700", "Safety Yellow", "yellow", ("safety",)),
    ("#FFDB58", "Mustard", "yellow", ()),
    ("#F0E68C", "Khaki", "yellow", ()),
    ("#00805E", "Kelly Green", "green", ()),
    ("#006B54", "Forest Green", "green", ()),
    ("#4B5F54", "Military Green", "green", ()),
    ("#7E7F74", "Heather Military Green", "green", ("heather",)),
    ("#00A776", "Irish Green", "green", ()),
    ("#00B388", "Jade Dome", "green", ()),
    ("#93C6B7", "Mint Green", "green", ()),
    ("#39FF14", "Neon Green", "green", ("neon",)),
    ("#90EE90", "Light Green", "green", ()),
    ("#228B22", "Deep Forest", "green", ()),
    ("#224D8F", "Royal", "blue", ()),
    ("#1B365D", "Navy", "blue", ()),
    ("#4D6995", "Heather Indigo", "blue", ("heather",)),
    ("#333F48", "Heather Navy", "blue", ("heather",)),
    ("#00A3E0", "Sapphire", "blue", ()),
    ("#0085CA", "Carolina Blue", "blue", ()),
    ("#5C8AB1", "Indigo Blue", "blue", ()),
    ("#A5C6D7", "Light Blue", "blue", ()),
    ("#1E90FF", "Dodger Blue", "blue", ()),
    ("#4169E1", "Royal Blue", "blue", ()),
    ("#00BFFF", "Deep Sky Blue", "blue", ()),
    ("#4B286D", "Purple", "purple", ()),
    ("#663399", "Dark Purple", "purple", ()),
    ("#9B4F96", "Lilac", "purple", ()),
    ("#C1A7D6", "Orchid", "purple", ()),
    ("#E0B0FF", "Heather Purple", "purple", ("heather",)),
    ("#9370DB", "Medium Purple", "purple", ()),
    ("#BA55D3", "Medium Orchid", "purple", ()),
    ("#DDA0DD", "Plum", "purple", ()),
    ("#E31C79", "Heliconia", "pink", ()),
    ("#DE3D83", "Azalea", "pink", ()),
    ("#FFB6C1", "Light Pink", "pink", ()),
    ("#FFC0CB", "Safety Pink", "pink", ("safety",)),
    ("#FF69B4", "Hot Pink", "pink", ()),
    ("#FF1493", "Deep Pink", "pink", ()),
    ("#FF77FF", "Neon Pink", "pink", ("neon",)),
    ("#4E3629", "Dark Chocolate", "brown", ()),
    ("#6E4C3D", "Brown", "brown", ()),
    ("#8B7355", "Light Brown", "brown", ()),
    ("#C3A6A0", "Heather Brown", "brown", ("heather",)),
    ("#D2B48C", "Tan", "brown", ()),
    ("#DEB887", "Burlywood", "brown", ()),
    ("#A0522D", "Sienna", "brown", ()),
]


def build_catalog(rows: Sequence[CatalogRow] = GARMENT_CATALOG) -> List[CatalogColour]:
    """Convert (hex, name, family, tags) rows into CatalogColour entries."""
    return [
        CatalogColour(hex=hx, name=name, family=family, tags=tuple(tags))
        for hx, name, family, tags in rows
    ]


def _record_to_colour(index: int, record: Mapping[str, Any]) -> CatalogColour:
    if not isinstance(record, Mapping):
        raise CatalogError(f"catalog record {index} is not an object")
    hx = record.get("hex")
    name = record.get("name")
    if not hx or not name:
        raise CatalogError(f"catalog record {index} needs both 'hex' and 'name'")
    tags = record.get("tags") or ()
    if isinstance(tags, str):
        tags = (tags,)
    family = record.get("family")
    try:
        return CatalogColour(
            hex=str(hx),
            name=str(name),
            family=str(family) if family else None,
            tags=tuple(str(t) for t in tags),
        )
    except ColourFormatError as exc:
        raise CatalogError(f"catalog record {index} ({name}): {exc}") from exc


def catalog_from_records(records: Iterable[Mapping[str, Any]]) -> List[CatalogColour]:
    """
    Build a catalog from {hex, name, family?, tags?} mappings, keeping order.
    Duplicate hex values are kept as separate entries.
    """
    return [_record_to_colour(i, rec) for i, rec in enumerate(records)]


def load_catalog_json(path: Path) -> List[CatalogColour]:
    """
    Load a catalog from a JSON file holding either a list of records or
    an object with a "colors"/"colours" list.
    """
    with open(path, "r", encoding="utf-8") as fh:
        data = json.load(fh)
    if isinstance(data, Mapping):
        data = data.get("colours", data.get("colors"))
    if not isinstance(data, list):
        raise CatalogError(f"{path}: expected a list of catalog records")
    return catalog_from_records(data)


def catalog_rgb_array(catalog: Sequence[CatalogColour]) -> np.ndarray:
    """(N,3) uint8 array of catalog RGB rows, in catalog order."""
    out = np.empty((len(catalog), 3), dtype=np.uint8)
    for i, colour in enumerate(catalog):
        out[i] = colour.rgb
    return out


def catalog_families(catalog: Sequence[CatalogColour]) -> List[str]:
    """Distinct families in first-seen order."""
    seen: List[str] = []
    for colour in catalog:
        if colour.family and colour.family not in seen:
            seen.append(colour.family)
    return seen


def search_catalog(
    catalog: Sequence[CatalogColour],
    term: str = "",
    family: Optional[str] = None,
    tags: Iterable[str] = (),
) -> List[CatalogColour]:
    """
    Filter the catalog.

    term   : case-insensitive substring of name, hex, family, or any tag
    family : exact family match
    tags   : every listed tag must be present
    """
    needle = term.strip().lower()
    required = [t.lower() for t in tags]
    out: List[CatalogColour] = []
    for colour in catalog:
        colour_tags = [t.lower() for t in colour.tags]
        if needle:
            haystack = [colour.name.lower(), colour.hex.lower(), (colour.family or "").lower()]
            if not any(needle in h for h in haystack) and not any(
                needle in t for t in colour_tags
            ):
                continue
        if family is not None and colour.family != family:
            continue
        if any(t not in colour_tags for t in required):
            continue
        out.append(colour)
    return out


def sort_catalog(catalog: Sequence[CatalogColour], by: str = "index") -> List[CatalogColour]:
    """
    Return a sorted copy of the catalog.

    by:
      - "index":  input order
      - "name":   alphabetical by name
      - "family": FAMILY_ORDER, then name; unknown families last
      - "hue":    LCh hue angle, near-neutrals (chroma < 8) first by lightness
    """
    items = list(catalog)
    if by == "index":
        return items
    if by == "name":
        return sorted(items, key=lambda c: c.name.lower())
    if by == "family":
        rank = {fam: i for i, fam in enumerate(FAMILY_ORDER)}
        return sorted(
            items,
            key=lambda c: (rank.get(c.family or "", len(FAMILY_ORDER)), c.name.lower()),
        )
    if by == "hue":
        if not items:
            return items
        lch = lab_to_lch(rgb_to_lab(catalog_rgb_array(items)))
        keys = [
            (0, float(row[0]), 0.0) if row[1] < 8.0 else (1, float(row[2]), float(row[0]))
            for row in lch
        ]
        order = sorted(range(len(items)), key=lambda i: keys[i])
        return [items[i] for i in order]
    raise ValueError(f"unknown sort key {by!r}; expected index, name, family or hue")


__all__ = [
    "GARMENT_CATALOG",
    "build_catalog",
    "catalog_from_records",
    "load_catalog_json",
    "catalog_rgb_array",
    "catalog_families",
    "search_catalog",
    "sort_catalog",
]
