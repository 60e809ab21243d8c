"""Many-colour recolouring."""

from __future__ import annotations

import numpy as np
import pytest

from swatch_tint.catalog import build_catalog
from swatch_tint.core_types import Bitmap, CatalogColour, UnknownLuminanceMethodError
from swatch_tint.image_io import decode_bitmap, encode_png
from swatch_tint.batch import archive_name, recolour_catalog_async, recolour_many
from swatch_tint.recolour import recolourise


@pytest.fixture
def shirt() -> Bitmap:
    rng = np.random.default_rng(7)
    arr = rng.integers(0, 256, size=(8, 6, 4), dtype=np.uint8)
    arr[0, :, 3] = 0
    return Bitmap.from_array(arr)


def test_archive_name() -> None:
    assert archive_name("#d50032") == "SWATCH_D50032.png"
    assert archive_name((255, 0, 0), prefix="HEX", label="tee") == "HEX-tee_FF0000.png"
    assert archive_name(CatalogColour("#1B365D", "Navy")) == "SWATCH_1B365D.png"


@pytest.mark.parametrize("jobs", [1, 4])
def test_recolour_many_keeps_target_order(shirt: Bitmap, jobs: int) -> None:
    targets = ["#FF0000", (0, 255, 0), CatalogColour("#0000FF", "Blue")]
    outs = recolour_many(shirt, targets, "balanced", jobs=jobs)
    assert len(outs) == 3
    for target, out in zip([(255, 0, 0), (0, 255, 0), (0, 0, 255)], outs):
        assert out.to_bytes() == recolourise(shirt, target, "balanced").to_bytes()


def test_recolour_many_validates_method_first(shirt: Bitmap) -> None:
    with pytest.raises(UnknownLuminanceMethodError):
        recolour_many(shirt, ["#FF0000"], "sepia")


@pytest.mark.asyncio
async def test_catalog_render_in_chunks(shirt: Bitmap) -> None:
    catalog = build_catalog()[:7]
    calls = []

    def progress(done: int, total: int) -> None:
        calls.append((done, total))

    entries = await recolour_catalog_async(
        shirt, catalog, "natural", chunk_size=3, label="front", progress=progress
    )
    assert calls == [(3, 7), (6, 7), (7, 7)]
    assert [name for name, _ in entries] == [
        f"SWATCH-front_{c.hex.lstrip('#')}.png" for c in catalog
    ]
    first = decode_bitmap(entries[0][1])
    assert np.array_equal(first.rgba, recolourise(shirt, catalog[0].rgb, "natural").rgba)


@pytest.mark.asyncio
async def test_catalog_render_from_png_bytes(shirt: Bitmap) -> None:
    entries = await recolour_catalog_async(encode_png(shirt), ["#808080"], "vibrant")
    assert entries[0][0] == "SWATCH_808080.png"
    expected = recolourise(shirt, "#808080", "vibrant")
    assert decode_bitmap(entries[0][1]).to_bytes() == expected.to_bytes()
