"""Tests for worldviz.tiler.cli — the wv-tile entry point."""

import json
import logging

import numpy as np
import pytest
from PIL import Image

from worldviz.tiler.cli import build_parser, main


@pytest.fixture(autouse=True)
def _reset_logger():
    yield
    root = logging.getLogger("worldviz")
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(logging.NOTSET)
    root.propagate = True


@pytest.fixture()
def world_png(tmp_path):
    arr = np.random.default_rng(1).integers(0, 4, (5, 7, 3), dtype=np.uint8) * 60
    path = tmp_path / "world.png"
    Image.fromarray(arr).save(path)
    return path


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args(["--image", "a.png", "--out", "t"])
        assert args.tile_size == 256
        assert args.tile_w is None and args.tile_h is None
        assert args.oversample == 1
        assert args.workers == 1

    def test_verbose_and_quiet_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--image", "a", "--out", "t", "-v", "-q"])


class TestMain:
    def test_tiles_written(self, tmp_path, world_png):
        out = tmp_path / "tiles"
        main(["--image", str(world_png), "--out", str(out), "--tile_size", "4", "--no_progress", "-q"])
        assert len(list(out.glob("world.png.*.png"))) == 2 * 2

    def test_non_square_tiles_and_json(self, tmp_path, world_png):
        out = tmp_path / "tiles"
        summary = tmp_path / "run.json"
        main([
            "--image", str(world_png), "--out", str(out),
            "--tile_w", "3", "--tile_h", "2",
            "--json", str(summary), "--no_progress", "-q",
        ])
        data = json.loads(summary.read_text())
        assert (data["rows"], data["cols"]) == (3, 3)
        assert len(data["tiles"]) == 9
        with Image.open(data["tiles"][0]) as img:
            assert img.size == (3, 2)

    def test_oversample_then_tile(self, tmp_path, world_png):
        out = tmp_path / "tiles"
        main([
            "--image", str(world_png), "--out", str(out),
            "--tile_size", "7", "--oversample", "2", "--no_progress", "-q",
        ])
        assert (out / "world.x2.png").exists()
        # 14×10 source into 7×7 tiles
        assert len(list(out.glob("world.x2.png.*.png"))) == 2 * 2

    def test_color_report(self, tmp_path, world_png, capsys):
        main([
            "--image", str(world_png), "--out", str(tmp_path / "t"),
            "--tile_size", "8", "--colors", "3", "--no_progress",
        ])
        err = capsys.readouterr().err
        assert "distinct color(s)" in err
        assert "#" in err

    def test_missing_image_exits_non_zero(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main(["--image", str(tmp_path / "nope.png"), "--out", str(tmp_path / "t"), "-q"])
        assert exc.value.code not in (0, None)
        assert "wv-tile" in str(exc.value.code)

    def test_bad_tile_size_exits_non_zero(self, tmp_path, world_png):
        with pytest.raises(SystemExit) as exc:
            main(["--image", str(world_png), "--out", str(tmp_path / "t"), "--tile_size", "0", "-q"])
        assert exc.value.code not in (0, None)

    @pytest.mark.parametrize("flag", ["--tile_w", "--tile_h"])
    def test_zero_tile_dimension_exits_non_zero(self, tmp_path, world_png, flag):
        out = tmp_path / "t"
        with pytest.raises(SystemExit) as exc:
            main(["--image", str(world_png), "--out", str(out), flag, "0", "--no_progress", "-q"])
        assert exc.value.code not in (0, None)
        assert "wv-tile" in str(exc.value.code)
        assert not list(out.glob("*.png"))

    def test_unwritable_json_exits_with_diagnostic(self, tmp_path, world_png):
        bad = tmp_path / "no_such_dir" / "run.json"
        with pytest.raises(SystemExit) as exc:
            main([
                "--image", str(world_png), "--out", str(tmp_path / "t"),
                "--tile_size", "4", "--json", str(bad), "--no_progress", "-q",
            ])
        assert str(exc.value.code).startswith("wv-tile:")
