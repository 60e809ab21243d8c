"""Nearest catalog colour matching."""

from __future__ import annotations

import math

import numpy as np
import pytest

from swatch_tint.catalog import build_catalog, catalog_from_records
from swatch_tint.core_types import CatalogColour, UnknownMatchPolicyError
from swatch_tint.match import (
    MatchPolicy,
    colour_distances,
    confidence_for,
    find_nearest,
    find_similar,
    parse_match_policy,
    unique_by_hex,
)

BW = catalog_from_records(
    [{"hex": "#FFFFFF", "name": "White"}, {"hex": "#000000", "name": "Black"}]
)


@pytest.mark.parametrize("policy", list(MatchPolicy))
def test_exact_catalog_colour_ranks_first_with_full_confidence(policy: MatchPolicy) -> None:
    catalog = build_catalog()
    for i in (0, 17, 50, len(catalog) - 1):
        result = find_nearest(catalog[i].rgb, catalog, policy=policy)
        assert result[0].hex == catalog[i].hex
        assert result[0].distance == 0.0
        assert result[0].confidence == 100.0


def test_near_white_matches_white() -> None:
    result = find_nearest("#FEFEFE", BW)
    assert [m.name for m in result] == ["White", "Black"]
    assert result[0].distance < 1.0
    assert result[0].confidence > 97.0
    assert result[1].confidence == 0.0


def test_result_length_and_ordering() -> None:
    catalog = build_catalog()
    result = find_nearest("#3366CC", catalog, limit=10)
    assert len(result) == 10
    distances = [m.distance for m in result]
    assert distances == sorted(distances)
    assert find_nearest("#3366CC", BW, limit=10) == find_nearest("#3366CC", BW, limit=2)
    assert len(find_nearest("#3366CC", catalog)) == 3


def test_empty_catalog_and_zero_limit() -> None:
    assert find_nearest("#123456", []) == []
    assert find_nearest("#123456", BW, limit=0) == []


def test_bad_limit_and_scale_are_rejected() -> None:
    with pytest.raises(ValueError):
        find_nearest("#123456", BW, limit=-1)
    with pytest.raises(ValueError):
        find_nearest("#123456", BW, limit=2.5)  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        find_nearest("#123456", BW, confidence_scale=-1.0)


def test_duplicates_are_kept_and_ties_follow_catalog_order() -> None:
    catalog = [
        CatalogColour("#FF0000", "Red A"),
        CatalogColour("#00FF00", "Green"),
        CatalogColour("#FF0000", "Red B"),
    ]
    result = find_nearest("#FF0000", catalog, limit=3)
    assert [m.name for m in result] == ["Red A", "Red B", "Green"]
    assert [m.index for m in result] == [0, 2, 1]
    assert [m.name for m in unique_by_hex(result)] == ["Red A", "Green"]


def test_weighted_rgb_distance() -> None:
    dist = colour_distances((10, 20, 30), np.array([[0, 0, 0]], dtype=np.uint8), MatchPolicy.WEIGHTED_RGB)
    assert dist[0] == pytest.approx(math.sqrt(3.0**2 + 11.8**2 + 3.3**2))


def test_lab_and_de2000_agree_on_obvious_cases() -> None:
    catalog = build_catalog()
    for policy in (MatchPolicy.LAB, MatchPolicy.DE2000):
        assert find_nearest("#D50033", catalog, limit=1, policy=policy)[0].name == "Red"
        assert find_nearest("#1B375E", catalog, limit=1, policy=policy)[0].name == "Navy"


def test_confidence_mapping() -> None:
    assert confidence_for(0.0) == 100.0
    assert confidence_for(10.0) == 80.0
    assert confidence_for(80.0) == 0.0
    assert confidence_for(10.0, scale=0.5) == 95.0


def test_policy_parsing() -> None:
    assert parse_match_policy("LAB") is MatchPolicy.LAB
    assert parse_match_policy("weighted-rgb") is MatchPolicy.WEIGHTED_RGB
    assert parse_match_policy("de2000") is MatchPolicy.DE2000
    with pytest.raises(UnknownMatchPolicyError):
        parse_match_policy("cmc")
    with pytest.raises(UnknownMatchPolicyError):
        find_nearest("#FFFFFF", BW, policy="hsv")


def test_find_similar_returns_catalog_records() -> None:
    catalog = build_catalog()
    similar = find_similar("#FFFFFF", catalog, limit=2)
    assert similar[0] is catalog[0]
    assert all(isinstance(c, CatalogColour) for c in similar)
