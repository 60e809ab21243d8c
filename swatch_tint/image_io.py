# swatch_tint/image_io.py
from __future__ import annotations

"""
Image boundary: decode files/bytes into RGBA Bitmaps (sRGB) and encode them back.

Alpha is kept as-is (no binarisation); recolouring relies on alpha == 0 marking
pixels outside the garment surface. The awaitable wrappers run the blocking
Pillow work in a worker thread so async callers never block their event loop.
"""

import asyncio
import base64
import io
import zipfile
from pathlib import Path
from typing import Iterable, Tuple, Union

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

try:
    from PIL import ImageCms  # ICC conversion if profile present
except ImportError:  # pragma: no cover
    ImageCms = None  # type: ignore[assignment]

from .core_types import Bitmap

IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".webp"}


def _convert_to_srgb_rgba(im: Image.Image) -> Image.Image:
    im = ImageOps.exif_transpose(im)
    icc_bytes = im.info.get("icc_profile")

    if icc_bytes and ImageCms is not None:
        try:
            src_prof = ImageCms.ImageCmsProfile(io.BytesIO(icc_bytes))
            dst_prof = ImageCms.createProfile("sRGB")
            im2 = ImageCms.profileToProfile(
                im.convert("RGBA"),
                src_prof,
                dst_prof,
                renderingIntent=ImageCms.Intent.PERCEPTUAL,
                outputMode="RGBA",
            )
            if im2 is not None:
                return im2
        except (OSError, ImageCms.PyCMSError):
            pass

    return im.convert("RGBA")


def _image_to_bitmap(im: Image.Image) -> Bitmap:
    arr = np.array(_convert_to_srgb_rgba(im), dtype=np.uint8)
    return Bitmap.from_array(arr)


def load_bitmap(path: Path) -> Bitmap:
    """Read any Pillow-readable image file as an sRGB RGBA Bitmap."""
    with Image.open(path) as im:
        return _image_to_bitmap(im)


def decode_bitmap(data: bytes) -> Bitmap:
    """Decode PNG/WebP/JPEG bytes to an RGBA Bitmap."""
    with Image.open(io.BytesIO(data)) as im:
        return _image_to_bitmap(im)


def encode_png(bitmap: Bitmap) -> bytes:
    """Encode a Bitmap as PNG bytes."""
    buf = io.BytesIO()
    Image.fromarray(bitmap.rgba).save(buf, format="PNG")
    return buf.getvalue()


def save_bitmap(path: Path, bitmap: Bitmap) -> Path:
    """Write a Bitmap as PNG. A non-.png suffix is replaced."""
    if path.suffix.lower() != ".png":
        path = path.with_suffix(".png")
    path.write_bytes(encode_png(bitmap))
    return path


def to_base64(bitmap: Bitmap) -> str:
    """PNG bytes of bitmap, base64 encoded (ASCII)."""
    return base64.b64encode(encode_png(bitmap)).decode("ascii")


def to_data_url(bitmap: Bitmap) -> str:
    """'data:image/png;base64,...' URL for bitmap."""
    return f"data:image/png;base64,{to_base64(bitmap)}"


def is_image_file(path: Path) -> bool:
    try:
        with Image.open(path) as im:
            im.seek(0)
            im.load()
        return True
    except (UnidentifiedImageError, OSError):
        return False


def write_archive(
    path: Path, entries: Iterable[Tuple[str, Union[bytes, Bitmap]]]
) -> Path:
    """
    Write (filename, payload) pairs into a deflate-compressed zip.
    Bitmap payloads are PNG encoded.
    """
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=5) as zf:
        for name, payload in entries:
            data = encode_png(payload) if isinstance(payload, Bitmap) else payload
            zf.writestr(name, data)
    return path


async def read_bitmap_async(source: Union[Path, bytes]) -> Bitmap:
    """Awaitable decode of a file path or raw image bytes."""
    if isinstance(source, (bytes, bytearray)):
        return await asyncio.to_thread(decode_bitmap, bytes(source))
    return await asyncio.to_thread(load_bitmap, Path(source))


async def encode_png_async(bitmap: Bitmap) -> bytes:
    """Awaitable PNG encode."""
    return await asyncio.to_thread(encode_png, bitmap)


__all__ = [
    "IMAGE_SUFFIXES",
    "load_bitmap",
    "decode_bitmap",
    "encode_png",
    "save_bitmap",
    "to_base64",
    "to_data_url",
    "is_image_file",
    "write_archive",
    "read_bitmap_async",
    "encode_png_async",
]
