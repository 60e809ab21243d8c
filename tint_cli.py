#!/usr/bin/env python3
"""
tint_cli.py
Recolour garment artwork and match colours against a swatch catalog.

Usage:
  python tint_cli.py recolour INPUT [--colour HEX ...] [--catalog PATH] [--family F]
                     [--method natural|vibrant|balanced] [--enhance [GAMMA]]
                     [--outdir DIR] [--zip FILE] [--jobs N] [--workers N] [--debug]
  python tint_cli.py match HEX [--catalog PATH] [--limit N] [--policy lab|de2000|weighted_rgb]
  python tint_cli.py catalog [--search TERM] [--family F] [--tag T ...] [--sort KEY]

Recolour:
  Every visible pixel becomes target * luminance(pixel). Transparent pixels are
  copied unchanged. Without --colour, every catalog colour is rendered.

Output:
  PNG files named <stem>_<RRGGBB>.png next to INPUT (or in --outdir), or a
  single zip archive with --zip.

Notes:
  The built-in garment catalog is used unless --catalog points at a JSON file.
  CPU bound. ThreadPoolExecutor is used across target colours.
"""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
import time
from pathlib import Path
from typing import List, Optional, Sequence

from swatch_tint.batch import recolour_catalog_async, recolour_many
from swatch_tint.catalog import (
    build_catalog,
    catalog_families,
    load_catalog_json,
    search_catalog,
    sort_catalog,
)
from swatch_tint.constants import (
    CONFIDENCE_SCALE,
    DEFAULT_LUMINANCE_METHOD,
    DEFAULT_MATCH_POLICY,
    ENHANCE_GAMMA,
    MAX_MATCHES,
)
from swatch_tint.core_types import CatalogColour, normalise_hex
from swatch_tint.harmony import relationships
from swatch_tint.image_io import (
    IMAGE_SUFFIXES,
    is_image_file,
    load_bitmap,
    save_bitmap,
    write_archive,
)
from swatch_tint.luminance import EnhanceCurve, method_names
from swatch_tint.match import MatchPolicy, find_nearest
from swatch_tint.recolour import recolourise
from swatch_tint.utils import (
    debug_log,
    enable_line_buffered_stdout,
    error,
    format_seconds_compact,
    key_value_pairs_to_string,
    log,
    print_banner,
    print_config_line,
    print_progress_line,
    warn,
)

# CLI args & small helpers


def _default_workers() -> int:
    """Leave a few cores free for the system; returns a sensible worker count."""
    n = os.cpu_count() or 4
    reserve = 1 if n <= 6 else 2 if n <= 12 else 3 if n <= 18 else 4
    return max(1, n - reserve)


def build_parser() -> argparse.ArgumentParser:
    """Argument parser with recolour / match / catalog sub-commands."""
    parser = argparse.ArgumentParser(
        prog="swatch-tint",
        description="Recolour artwork with shading preserved and match catalog colours.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    rec = sub.add_parser("recolour", help="Recolour an image or folder of images")
    rec.add_argument("src", type=Path, help="Input image or folder")
    rec.add_argument(
        "--colour",
        action="append",
        default=None,
        help="Target colour (#RRGGBB or #RGB). Repeat for several. Default: whole catalog.",
    )
    rec.add_argument("--catalog", type=Path, default=None, help="Catalog JSON file")
    rec.add_argument("--family", default=None, help="Only catalog colours of this family")
    rec.add_argument(
        "--method",
        choices=method_names(),
        default=DEFAULT_LUMINANCE_METHOD,
        help="Luminance formula.",
    )
    rec.add_argument(
        "--enhance",
        nargs="?",
        const=ENHANCE_GAMMA,
        type=float,
        default=None,
        help=f"Lift midtones with luminance**GAMMA (default GAMMA {ENHANCE_GAMMA}).",
    )
    rec.add_argument("--outdir", type=Path, default=None, help="Output directory")
    rec.add_argument("--zip", type=Path, default=None, help="Write one zip archive instead")
    rec.add_argument("--jobs", type=int, default=_default_workers(), help="Colours in parallel")
    rec.add_argument(
        "--workers", type=int, default=1, help="Row threads per image (single colour only)"
    )
    rec.add_argument("--debug", action="store_true", help="Verbose details")

    mat = sub.add_parser("match", help="Nearest catalog colours for a hex colour")
    mat.add_argument("colour", help="Colour to match (#RRGGBB or #RGB)")
    mat.add_argument("--catalog", type=Path, default=None, help="Catalog JSON file")
    mat.add_argument("--limit", type=int, default=MAX_MATCHES, help="Number of matches")
    mat.add_argument(
        "--policy",
        choices=[p.value for p in MatchPolicy],
        default=DEFAULT_MATCH_POLICY,
        help="Distance metric.",
    )
    mat.add_argument(
        "--scale", type=float, default=CONFIDENCE_SCALE, help="Confidence drop per unit distance"
    )
    mat.add_argument("--relations", action="store_true", help="Also print hue relationships")

    cat = sub.add_parser("catalog", help="List or search the catalog")
    cat.add_argument("--catalog", type=Path, default=None, help="Catalog JSON file")
    cat.add_argument("--search", default="", help="Text in name, hex, family or tags")
    cat.add_argument("--family", default=None, help="Exact family")
    cat.add_argument("--tag", action="append", default=[], help="Required tag (repeatable)")
    cat.add_argument(
        "--sort", choices=["index", "name", "family", "hue"], default="index", help="Order"
    )
    return parser


def _load_catalog(path: Optional[Path]) -> List[CatalogColour]:
    return load_catalog_json(path) if path is not None else build_catalog()


def _resolve_targets(args: argparse.Namespace) -> List[CatalogColour]:
    """Explicit --colour values win; otherwise the (filtered) catalog."""
    if args.colour:
        return [CatalogColour(hex=hx, name=normalise_hex(hx)) for hx in args.colour]
    catalog = _load_catalog(args.catalog)
    if args.family:
        catalog = search_catalog(catalog, family=args.family)
    return catalog


def _collect_images(src: Path) -> List[Path]:
    if not src.is_dir():
        return [src]
    files: List[Path] = []
    for p in sorted(src.iterdir(), key=lambda p: p.name.lower()):
        if not p.is_file() or p.suffix.lower() not in IMAGE_SUFFIXES:
            continue
        if not is_image_file(p):
            warn(f"skipping unreadable image: {p.name}")
            continue
        files.append(p)
    return files


# Sub-commands


def _recolour_one(
    path: Path, targets: Sequence[CatalogColour], args: argparse.Namespace
) -> None:
    """Recolour one image to every target and save PNGs."""
    t_start = time.perf_counter()
    print_banner(path.name)
    bitmap = load_bitmap(path)
    visible = int((bitmap.rgba[..., 3] > 0).sum())
    if visible == 0:
        warn(f"{path.name}: fully transparent, output equals input")
    if args.debug:
        debug_log(
            key_value_pairs_to_string(
                [("Loaded", f"{bitmap.width}x{bitmap.height}"), ("Visible", visible)]
            )
        )

    enhance = EnhanceCurve(args.enhance) if args.enhance is not None else None
    if len(targets) == 1:
        outputs = [
            recolourise(bitmap, targets[0].rgb, args.method, enhance=enhance, workers=args.workers)
        ]
    else:
        outputs = recolour_many(bitmap, targets, args.method, enhance=enhance, jobs=args.jobs)

    outdir = args.outdir or path.parent
    outdir.mkdir(parents=True, exist_ok=True)
    for target, out in zip(targets, outputs):
        dst = save_bitmap(outdir / f"{path.stem}_{target.hex.lstrip('#')}.png", out)
        log(f"  {target.hex}  {target.name} -> {dst.name}")
    log(f"Wrote {len(outputs)} file(s) in {format_seconds_compact(time.perf_counter() - t_start)}")


def _recolour_zip(
    images: Sequence[Path], targets: Sequence[CatalogColour], args: argparse.Namespace
) -> None:
    """Render every (image, colour) pair into one zip archive."""
    enhance = EnhanceCurve(args.enhance) if args.enhance is not None else None
    entries = []
    for path in images:
        print_banner(path.name)

        def _progress(done: int, total: int) -> None:
            print_progress_line(f"{path.name}: {done}/{total} colours", final=done == total)

        entries.extend(
            asyncio.run(
                recolour_catalog_async(
                    path,
                    targets,
                    args.method,
                    enhance=enhance,
                    label=path.stem,
                    progress=_progress,
                    debug=args.debug,
                )
            )
        )
    write_archive(args.zip, entries)
    log(f"Wrote {args.zip.name} ({len(entries)} images)")


def cmd_recolour(args: argparse.Namespace) -> int:
    src = args.src
    if not src.exists():
        error(f"not found: {src}")
        return 2
    targets = _resolve_targets(args)
    if not targets:
        error("no target colours selected")
        return 2
    images = _collect_images(src)

    print_config_line(
        "recolour",
        [
            ("Method", args.method),
            ("Enhance", args.enhance if args.enhance is not None else False),
            ("Colours", len(targets)),
            ("Images", len(images)),
            ("Jobs", args.jobs),
        ],
        debug=False,
    )

    if args.zip is not None:
        _recolour_zip(images, targets, args)
        return 0
    for path in images:
        _recolour_one(path, targets, args)
    return 0


def cmd_match(args: argparse.Namespace) -> int:
    catalog = _load_catalog(args.catalog)
    target = normalise_hex(args.colour)
    matches = find_nearest(target, catalog, args.limit, args.policy, args.scale)
    log(f"Nearest to {target} ({args.policy}, {len(catalog)} catalog colours):")
    for m in matches:
        log(f"  {m.hex}  {m.name}: distance={m.distance:.2f}  confidence={m.confidence:.1f}%")
    if args.relations:
        rel = relationships(target)
        log(f"Opposite: {rel['opposite']}")
        log(f"Split complements: {', '.join(rel['split_complements'])}")
        log(f"Triad: {', '.join(rel['triad'])}")
    return 0


def cmd_catalog(args: argparse.Namespace) -> int:
    catalog = _load_catalog(args.catalog)
    rows = sort_catalog(
        search_catalog(catalog, args.search, args.family, args.tag), by=args.sort
    )
    for c in rows:
        tags = f"  [{', '.join(c.tags)}]" if c.tags else ""
        log(f"  {c.hex}  {c.name}  ({c.family or '-'}){tags}")
    log(
        key_value_pairs_to_string(
            [("Shown", len(rows)), ("Total", len(catalog)), ("Families", len(catalog_families(catalog)))]
        )
    )
    return 0


# Entry point


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point. Returns the process exit status."""
    enable_line_buffered_stdout()
    args = build_parser().parse_args(argv)
    handlers = {"recolour": cmd_recolour, "match": cmd_match, "catalog": cmd_catalog}
    try:
        return handlers[args.command](args)
    except (ValueError, OSError) as exc:
        error(str(exc))
        return 2


if __name__ == "__main__":
    sys.exit(main())
