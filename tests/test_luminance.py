"""Luminance formula table and enhance curve."""

from __future__ import annotations

import numpy as np
import pytest

from swatch_tint.core_types import UnknownLuminanceMethodError
from swatch_tint.luminance import (
    EnhanceCurve,
    LuminanceMethod,
    compose,
    method_names,
    parse_luminance_method,
)

CANONICAL = [LuminanceMethod.NATURAL, LuminanceMethod.VIBRANT, LuminanceMethod.BALANCED]


@pytest.mark.parametrize("method", CANONICAL)
def test_white_is_one_and_black_is_zero(method: LuminanceMethod) -> None:
    assert method.calculate(255, 255, 255) == pytest.approx(1.0)
    assert method.calculate(0, 0, 0) == 0.0


def test_formula_coefficients() -> None:
    assert LuminanceMethod.NATURAL.calculate(100, 150, 200) == pytest.approx(
        (0.2126 * 100 + 0.7152 * 150 + 0.0722 * 200) / 255
    )
    assert LuminanceMethod.VIBRANT.calculate(100, 150, 200) == pytest.approx(450 / 765)
    assert LuminanceMethod.BALANCED.calculate(100, 150, 200) == pytest.approx(
        (0.299 * 100 + 0.587 * 150 + 0.114 * 200) / 255
    )


@pytest.mark.parametrize("method", CANONICAL)
def test_array_form_matches_scalar(method: LuminanceMethod) -> None:
    rng = np.random.default_rng(3)
    rgb = rng.integers(0, 256, size=(32, 3))
    vec = method.calculate_array(rgb)
    expected = [method.calculate(*row) for row in rgb.tolist()]
    assert vec == pytest.approx(np.array(expected))
    assert np.all((vec >= 0.0) & (vec <= 1.0))


def test_aliases_resolve_to_canonical_members() -> None:
    assert LuminanceMethod.AVERAGE is LuminanceMethod.VIBRANT
    assert LuminanceMethod.WEIGHTED is LuminanceMethod.BALANCED
    assert parse_luminance_method("average") is LuminanceMethod.VIBRANT
    assert parse_luminance_method(" Weighted ") is LuminanceMethod.BALANCED
    assert parse_luminance_method("NATURAL") is LuminanceMethod.NATURAL
    assert parse_luminance_method(LuminanceMethod.NATURAL) is LuminanceMethod.NATURAL


def test_method_names_include_aliases() -> None:
    assert set(method_names()) == {"natural", "vibrant", "balanced", "average", "weighted"}


@pytest.mark.parametrize("bad", ["luma", "", 3, None])
def test_unknown_method_is_reported(bad) -> None:
    with pytest.raises(UnknownLuminanceMethodError):
        parse_luminance_method(bad)


def test_enhance_curve_lifts_midtones_and_keeps_ends() -> None:
    curve = EnhanceCurve()
    out = curve(np.array([0.0, 0.25, 0.5, 1.0]))
    assert out[0] == 0.0
    assert out[-1] == 1.0
    assert out[1] > 0.25 and out[2] > 0.5
    assert out[2] == pytest.approx(0.5**0.8)


def test_enhance_curve_rejects_bad_gamma() -> None:
    with pytest.raises(ValueError):
        EnhanceCurve(0.0)


def test_compose_applies_in_order() -> None:
    halve = lambda lum: lum * 0.5  # noqa: E731
    chain = compose(EnhanceCurve(2.0), halve)
    assert chain(np.array([0.5])) == pytest.approx(np.array([0.125]))


def test_scalar_and_array_share_one_table() -> None:
    rgb = np.array([[100, 150, 200], [255, 255, 255], [0, 0, 0]], dtype=np.uint8)
    for method in LuminanceMethod:
        scalar = [method.calculate(*row) for row in rgb.tolist()]
        assert method.calculate_array(rgb).tolist() == scalar
    assert LuminanceMethod.AVERAGE is LuminanceMethod.VIBRANT
    assert LuminanceMethod.WEIGHTED is LuminanceMethod.BALANCED
