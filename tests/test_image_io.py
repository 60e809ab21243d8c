"""Image decode / encode boundary."""

from __future__ import annotations

import base64
import io
import zipfile
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from swatch_tint.core_types import Bitmap
from swatch_tint.image_io import (
    decode_bitmap,
    encode_png,
    encode_png_async,
    is_image_file,
    load_bitmap,
    read_bitmap_async,
    save_bitmap,
    to_base64,
    to_data_url,
    write_archive,
)


def _sample() -> Bitmap:
    arr = np.zeros((3, 4, 4), dtype=np.uint8)
    arr[..., 0] = 200
    arr[..., 1] = np.arange(4, dtype=np.uint8)[None, :] * 40
    arr[..., 3] = 255
    arr[0, 0] = (9, 8, 7, 0)
    return Bitmap.from_array(arr)


def test_png_round_trip_keeps_every_byte() -> None:
    bmp = _sample()
    back = decode_bitmap(encode_png(bmp))
    assert (back.width, back.height) == (4, 3)
    assert np.array_equal(back.rgba, bmp.rgba)


def test_rgb_images_gain_opaque_alpha() -> None:
    buf = io.BytesIO()
    Image.new("RGB", (2, 2), (10, 20, 30)).save(buf, format="PNG")
    bmp = decode_bitmap(buf.getvalue())
    assert bmp.pixel(1, 1) == (10, 20, 30, 255)


def test_save_and_load(tmp_path: Path) -> None:
    dst = save_bitmap(tmp_path / "shirt.webp", _sample())
    assert dst.suffix == ".png"
    assert is_image_file(dst)
    assert np.array_equal(load_bitmap(dst).rgba, _sample().rgba)
    junk = tmp_path / "junk.png"
    junk.write_bytes(b"not an image")
    assert not is_image_file(junk)


def test_base64_and_data_url() -> None:
    bmp = _sample()
    assert base64.b64decode(to_base64(bmp)) == encode_png(bmp)
    assert to_data_url(bmp).startswith("data:image/png;base64,")


def test_write_archive(tmp_path: Path) -> None:
    bmp = _sample()
    path = write_archive(tmp_path / "out.zip", [("a.png", bmp), ("b.png", encode_png(bmp))])
    with zipfile.ZipFile(path) as zf:
        assert zf.namelist() == ["a.png", "b.png"]
        assert np.array_equal(decode_bitmap(zf.read("a.png")).rgba, bmp.rgba)


@pytest.mark.asyncio
async def test_async_read_from_path_and_bytes(tmp_path: Path) -> None:
    bmp = _sample()
    png = await encode_png_async(bmp)
    path = tmp_path / "x.png"
    path.write_bytes(png)
    from_path = await read_bitmap_async(path)
    from_bytes = await read_bitmap_async(png)
    assert np.array_equal(from_path.rgba, bmp.rgba)
    assert np.array_equal(from_bytes.rgba, bmp.rgba)
