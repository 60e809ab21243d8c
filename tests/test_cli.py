"""Command line entry point."""

from __future__ import annotations

import json
import zipfile
from pathlib import Path

import numpy as np
import pytest

from swatch_tint.core_types import Bitmap
from swatch_tint.image_io import load_bitmap, save_bitmap
from tint_cli import main


@pytest.fixture
def art(tmp_path: Path) -> Path:
    arr = np.full((4, 5, 4), 255, dtype=np.uint8)
    arr[1:3, 1:4, :3] = 128
    arr[0, 0, 3] = 0
    return save_bitmap(tmp_path / "tee.png", Bitmap.from_array(arr))


def test_match_prints_nearest(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["match", "#fefefe", "--limit", "2"]) == 0
    out = capsys.readouterr().out
    assert "Nearest to #FEFEFE" in out
    assert "White" in out


def test_match_bad_hex_exits_2(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["match", "#12345"]) == 2
    assert "[error]" in capsys.readouterr().err


def test_recolour_single_colour(art: Path, tmp_path: Path) -> None:
    outdir = tmp_path / "out"
    assert main(["recolour", str(art), "--colour", "#ff0000", "--outdir", str(outdir)]) == 0
    result = load_bitmap(outdir / "tee_FF0000.png")
    assert result.pixel(0, 0)[3] == 0
    assert result.pixel(4, 3) == (255, 0, 0, 255)
    r, g, b, a = result.pixel(2, 2)
    assert (g, b, a) == (0, 0, 255)
    assert 0 < r < 255


def test_recolour_to_zip(art: Path, tmp_path: Path) -> None:
    dst = tmp_path / "all.zip"
    argv = ["recolour", str(art), "--colour", "#1B365D", "--colour", "#FFF", "--zip", str(dst)]
    assert main(argv) == 0
    with zipfile.ZipFile(dst) as zf:
        assert zf.namelist() == ["SWATCH-tee_1B365D.png", "SWATCH-tee_FFFFFF.png"]


def test_recolour_missing_input(tmp_path: Path) -> None:
    assert main(["recolour", str(tmp_path / "nope.png"), "--colour", "#FF0000"]) == 2


def test_catalog_listing_from_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "colours.json"
    path.write_text(
        json.dumps(
            [
                {"hex": "#000000", "name": "Ink", "family": "black"},
                {"hex": "#FF0000", "name": "Signal", "family": "red", "tags": ["bright"]},
            ]
        )
    )
    assert main(["catalog", "--catalog", str(path), "--tag", "bright"]) == 0
    out = capsys.readouterr().out
    assert "Signal" in out
    assert "Ink" not in out


def test_transparent_input_warns(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    src = save_bitmap(tmp_path / "blank.png", Bitmap.from_array(np.zeros((2, 2, 4), np.uint8)))
    assert main(["recolour", str(src), "--colour", "#00FF00"]) == 0
    assert "[warn] blank.png: fully transparent" in capsys.readouterr().out
    assert load_bitmap(tmp_path / "blank_00FF00.png").to_bytes() == bytes(16)


def test_folder_input_skips_unreadable_files(
    art: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / "broken.png").write_bytes(b"not an image")
    (tmp_path / "notes.txt").write_text("ignored")
    outdir = tmp_path / "out"
    assert main(["recolour", str(tmp_path), "--colour", "#00FF00", "--outdir", str(outdir)]) == 0
    assert "[warn] skipping unreadable image: broken.png" in capsys.readouterr().out
    assert sorted(p.name for p in outdir.iterdir()) == ["tee_00FF00.png"]
