# swatch_tint/batch.py
from __future__ import annotations

"""
Batch recolouring: one source bitmap, many target colours.

Every (bitmap, colour) pair is an independent recolourise() call with its own
output buffer, so pairs run concurrently without coordination. Cancelling a
batch means not submitting (or not awaiting) the remaining pairs.

Exports:
  recolour_many(bitmap, targets, method, *, enhance=None, jobs=2) -> list[Bitmap]
  recolour_catalog_async(source, catalog, method, ...) -> list[(filename, png bytes)]
  archive_name(colour, prefix=ARCHIVE_PREFIX, label="") -> str
"""

import asyncio
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple, Union

from .constants import ARCHIVE_PREFIX, BATCH_CHUNK_SIZE, DEFAULT_LUMINANCE_METHOD
from .core_types import Bitmap, CatalogColour, ColourLike, normalise_hex, rgb_to_hex, to_rgb
from .image_io import encode_png, read_bitmap_async
from .luminance import LuminanceTransform, parse_luminance_method
from .recolour import MethodLike, recolourise
from .utils import chunked, debug_log, format_seconds_compact, key_value_pairs_to_string

Target = Union[ColourLike, CatalogColour]
ProgressCallback = Callable[[int, int], None]


def _target_colour(target: Target) -> ColourLike:
    if isinstance(target, CatalogColour):
        return target.rgb
    return target


def _target_hex(target: Target) -> str:
    if isinstance(target, CatalogColour):
        return target.hex
    if isinstance(target, str):
        return normalise_hex(target)
    return rgb_to_hex(to_rgb(target))


def archive_name(target: Target, prefix: str = ARCHIVE_PREFIX, label: str = "") -> str:
    """'<PREFIX>[-<label>]_<RRGGBB>.png'."""
    stem = f"{prefix}-{label}" if label else prefix
    return f"{stem}_{_target_hex(target).lstrip('#')}.png"


def recolour_many(
    bitmap: Bitmap,
    targets: Sequence[Target],
    method: MethodLike = DEFAULT_LUMINANCE_METHOD,
    *,
    enhance: Optional[LuminanceTransform] = None,
    jobs: int = 2,
) -> List[Bitmap]:
    """
    Recolour bitmap once per target. Results follow the order of targets.
    Method and targets are validated before any work is submitted.
    """
    resolved = parse_luminance_method(method)
    colours = [to_rgb(_target_colour(t)) for t in targets]
    if jobs <= 1 or len(colours) <= 1:
        return [recolourise(bitmap, c, resolved, enhance=enhance) for c in colours]

    with ThreadPoolExecutor(max_workers=jobs) as ex:
        futures = [
            ex.submit(recolourise, bitmap, c, resolved, enhance=enhance) for c in colours
        ]
        return [f.result() for f in futures]


def _render_png(
    bitmap: Bitmap,
    colour: ColourLike,
    method: MethodLike,
    enhance: Optional[LuminanceTransform],
) -> bytes:
    return encode_png(recolourise(bitmap, colour, method, enhance=enhance))


async def recolour_catalog_async(
    source: Union[Path, bytes, Bitmap],
    catalog: Sequence[Target],
    method: MethodLike = DEFAULT_LUMINANCE_METHOD,
    *,
    enhance: Optional[LuminanceTransform] = None,
    chunk_size: int = BATCH_CHUNK_SIZE,
    prefix: str = ARCHIVE_PREFIX,
    label: str = "",
    progress: Optional[ProgressCallback] = None,
    debug: bool = False,
) -> List[Tuple[str, bytes]]:
    """
    Decode source (unless already a Bitmap), then render one PNG per catalog
    colour, chunk_size colours at a time in worker threads.

    progress(done, total) is called after every chunk.
    Returns [(archive filename, png bytes), ...] in catalog order.
    """
    resolved = parse_luminance_method(method)
    targets = list(catalog)
    colours = [to_rgb(_target_colour(t)) for t in targets]
    bitmap = source if isinstance(source, Bitmap) else await read_bitmap_async(source)

    t_start = time.perf_counter()
    total = len(targets)
    done = 0
    out: List[Tuple[str, bytes]] = []
    for chunk in chunked(list(zip(targets, colours)), chunk_size):
        payloads = await asyncio.gather(
            *(
                asyncio.to_thread(_render_png, bitmap, colour, resolved, enhance)
                for _target, colour in chunk
            )
        )
        for (target, _colour), png in zip(chunk, payloads):
            out.append((archive_name(target, prefix, label), png))
        done += len(chunk)
        if progress is not None:
            progress(done, total)

    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Colours", total),
                    ("Chunk", chunk_size),
                    ("Size", f"{bitmap.width}x{bitmap.height}"),
                    ("Time", format_seconds_compact(time.perf_counter() - t_start)),
                ]
            )
        )
    return out


__all__ = [
    "Target",
    "ProgressCallback",
    "archive_name",
    "recolour_many",
    "recolour_catalog_async",
]
