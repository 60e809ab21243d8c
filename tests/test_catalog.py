"""Catalog data, loading, search and sort."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from swatch_tint.catalog import (
    GARMENT_CATALOG,
    build_catalog,
    catalog_families,
    catalog_from_records,
    catalog_rgb_array,
    load_catalog_json,
    search_catalog,
    sort_catalog,
)
from swatch_tint.core_types import CatalogError


def test_builtin_catalog_is_well_formed() -> None:
    catalog = build_catalog()
    assert len(catalog) == len(GARMENT_CATALOG) == 80
    assert catalog[0].name == "White" and catalog[0].hex == "#FFFFFF"
    assert catalog_rgb_array(catalog).shape == (80, 3)
    assert catalog_families(catalog)[:3] == ["neutral", "grey", "red"]


def test_records_keep_order_and_optional_fields() -> None:
    catalog = catalog_from_records(
        [
            {"hex": "abc", "name": "Pale"},
            {"hex": "#112233", "name": "Deep", "family": "blue", "tags": "heather"},
        ]
    )
    assert [c.hex for c in catalog] == ["#AABBCC", "#112233"]
    assert catalog[0].family is None
    assert catalog[1].tags == ("heather",)


@pytest.mark.parametrize(
    "record", [{"name": "No hex"}, {"hex": "#FFFFFF"}, {"hex": "#XYZXYZ", "name": "Bad"}, "x"]
)
def test_bad_records_raise(record) -> None:
    with pytest.raises(CatalogError):
        catalog_from_records([record])


def test_load_catalog_json(tmp_path: Path) -> None:
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"colors": [{"hex": "#000000", "name": "Black"}]}))
    assert [c.name for c in load_catalog_json(path)] == ["Black"]

    path.write_text(json.dumps([{"hex": "#FFFFFF", "name": "White"}]))
    assert [c.name for c in load_catalog_json(path)] == ["White"]

    path.write_text(json.dumps({"other": 1}))
    with pytest.raises(CatalogError):
        load_catalog_json(path)


def test_search_by_text_family_and_tags() -> None:
    catalog = build_catalog()
    assert {c.name for c in search_catalog(catalog, "navy")} == {"Navy", "Heather Navy"}
    assert all(c.family == "pink" for c in search_catalog(catalog, family="pink"))
    heathers = search_catalog(catalog, tags=["heather"])
    assert heathers and all("heather" in c.tags for c in heathers)
    assert [c.name for c in search_catalog(catalog, "#d50032")] == ["Red"]
    assert search_catalog(catalog, "neon", family="green")[0].name == "Neon Green"


def test_sort_orders() -> None:
    catalog = build_catalog()
    assert sort_catalog(catalog) == catalog
    names = [c.name for c in sort_catalog(catalog, "name")]
    assert names == sorted(names, key=str.lower)
    by_family = sort_catalog(catalog, "family")
    assert by_family[0].family == "neutral" and by_family[-1].family == "brown"
    by_hue = sort_catalog(catalog, "hue")
    assert len(by_hue) == len(catalog)
    assert by_hue[0].name == "Black"
    with pytest.raises(ValueError):
        sort_catalog(catalog, "price")
