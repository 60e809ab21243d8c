# swatch_tint/match.py
from __future__ import annotations

"""
Nearest catalog colour matching.

Policies:
  LAB           Euclidean distance in CIE Lab (CIE76 Delta-E). Default.
  DE2000        CIEDE2000 Delta-E. Slower, closer to perceived difference.
  WEIGHTED_RGB  sqrt((0.30 dR)^2 + (0.59 dG)^2 + (0.11 dB)^2) on 0..255 channels.

Results are sorted by distance ascending; ties keep catalog order. Confidence is
100 - distance * confidence_scale, clamped to [0, 100].
"""

from enum import Enum
from typing import List, Sequence, Union

import numpy as np

from .catalog import catalog_rgb_array
from .colour_convert import delta_e2000_vec, delta_e76, rgb_to_lab
from .constants import (
    CONFIDENCE_SCALE,
    DEFAULT_MATCH_POLICY,
    MAX_CONFIDENCE,
    MAX_MATCHES,
    MIN_CONFIDENCE,
    RGB_WEIGHTS,
)
from .core_types import (
    CatalogColour,
    ColourLike,
    MatchResult,
    RGBTuple,
    UnknownMatchPolicyError,
    clamp_value,
    to_rgb,
)


class MatchPolicy(Enum):
    LAB = "lab"
    DE2000 = "de2000"
    WEIGHTED_RGB = "weighted_rgb"


PolicyLike = Union[str, MatchPolicy]


def parse_match_policy(value: PolicyLike) -> MatchPolicy:
    """Resolve a policy from untyped input; accepts member names or values."""
    if isinstance(value, MatchPolicy):
        return value
    if not isinstance(value, str):
        raise UnknownMatchPolicyError(
            f"match policy must be a string, got {type(value).__name__}"
        )
    key = value.strip().lower().replace("-", "_")
    for policy in MatchPolicy:
        if key in (policy.value, policy.name.lower()):
            return policy
    choices = ", ".join(p.value for p in MatchPolicy)
    raise UnknownMatchPolicyError(
        f"unknown match policy {value!r}; expected one of: {choices}"
    )


def colour_distances(
    target_rgb: RGBTuple, candidates_rgb: np.ndarray, policy: MatchPolicy
) -> np.ndarray:
    """
    Distance from target to every candidate row.

    Args:
      target_rgb: (r, g, b)
      candidates_rgb: uint8 [N,3]
      policy: MatchPolicy
    Returns:
      float64 [N], >= 0. Rows identical to the target are exactly 0.
    """
    cands = np.asarray(candidates_rgb, dtype=np.float64).reshape(-1, 3)
    target = np.asarray(target_rgb, dtype=np.float64).reshape(3)
    if cands.shape[0] == 0:
        return np.zeros((0,), dtype=np.float64)

    if policy is MatchPolicy.WEIGHTED_RGB:
        diff = (cands - target[None, :]) * np.asarray(RGB_WEIGHTS, dtype=np.float64)
        dist = np.sqrt(np.sum(diff * diff, axis=1))
    else:
        lab = rgb_to_lab(np.vstack([target[None, :], cands]))
        if policy is MatchPolicy.LAB:
            dist = delta_e76(lab[1:], lab[0][None, :])
        elif policy is MatchPolicy.DE2000:
            dist = delta_e2000_vec(lab[0], lab[1:])
        else:  # pragma: no cover
            raise UnknownMatchPolicyError(policy.value)

    dist = np.maximum(dist, 0.0)
    dist[np.all(cands == target[None, :], axis=1)] = 0.0
    return dist


def confidence_for(distance: float, scale: float = CONFIDENCE_SCALE) -> float:
    """Map a distance to a 0..100 confidence score."""
    return float(
        clamp_value(MAX_CONFIDENCE - float(distance) * scale, MIN_CONFIDENCE, MAX_CONFIDENCE)
    )


def find_nearest(
    target: ColourLike,
    catalog: Sequence[CatalogColour],
    limit: int = MAX_MATCHES,
    policy: PolicyLike = DEFAULT_MATCH_POLICY,
    confidence_scale: float = CONFIDENCE_SCALE,
) -> List[MatchResult]:
    """
    Rank catalog colours by distance to target.

    Returns min(limit, len(catalog)) results, closest first. An empty catalog
    yields an empty list. Duplicate hex entries are returned as separate results.
    """
    if isinstance(limit, bool) or not isinstance(limit, (int, np.integer)):
        raise ValueError(f"limit must be an integer, got {limit!r}")
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")
    if not np.isfinite(confidence_scale) or confidence_scale < 0.0:
        raise ValueError(f"confidence_scale must be >= 0, got {confidence_scale}")
    resolved = parse_match_policy(policy)
    target_rgb = to_rgb(target)

    if len(catalog) == 0 or limit == 0:
        return []

    dist = colour_distances(target_rgb, catalog_rgb_array(catalog), resolved)
    order = np.argsort(dist, kind="stable")[: int(limit)]

    results: List[MatchResult] = []
    for idx in order.tolist():
        colour = catalog[idx]
        d = float(dist[idx])
        results.append(
            MatchResult(
                hex=colour.hex,
                name=colour.name,
                distance=d,
                confidence=confidence_for(d, confidence_scale),
                family=colour.family,
                index=idx,
            )
        )
    return results


def unique_by_hex(matches: Sequence[MatchResult]) -> List[MatchResult]:
    """Drop later results whose hex was already seen, keeping order."""
    seen = set()
    out: List[MatchResult] = []
    for match in matches:
        if match.hex in seen:
            continue
        seen.add(match.hex)
        out.append(match)
    return out


def find_similar(
    target: ColourLike,
    catalog: Sequence[CatalogColour],
    limit: int = MAX_MATCHES,
    policy: PolicyLike = DEFAULT_MATCH_POLICY,
) -> List[CatalogColour]:
    """Catalog entries closest to target, as catalog records."""
    return [catalog[m.index] for m in find_nearest(target, catalog, limit, policy)]


__all__ = [
    "MatchPolicy",
    "parse_match_policy",
    "colour_distances",
    "confidence_for",
    "find_nearest",
    "unique_by_hex",
    "find_similar",
]
