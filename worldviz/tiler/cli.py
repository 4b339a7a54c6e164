"""CLI entry point: wv-tile

Cut a rendered world map into fixed-size PNG tiles for a tiled map viewer.

Examples
--------
# 256×256 tiles into ./tiles
wv-tile --image world.png --out tiles

# Non-square tiles, 4 encoder threads, progress bar
wv-tile --image world.png --out tiles --tile_w 512 --tile_h 256 --workers 4

# Upscale 2× first and report the 10 most common colors
wv-tile --image world.png --out tiles --oversample 2 --colors 10 -v
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from worldviz.tiler.color.catalog import ColorInfo
from worldviz.tiler.color.model import color_to_hex
from worldviz.tiler.config import make_tiler_config
from worldviz.tiler.errors import TilerError
from worldviz.tiler.histogram import color_histogram
from worldviz.tiler.log import DEFAULT, QUIET, VERBOSE, configure_logging
from worldviz.tiler.raster.codec import PngReader
from worldviz.tiler.raster.oversample import oversample_image
from worldviz.tiler.tiling.engine import tile_image

logger = logging.getLogger("worldviz.tiler.cli")


def _report_colors(path: Path, n: int) -> None:
    with PngReader(path) as reader:
        hist = color_histogram(reader)
    total = hist.total()
    logger.info("%d distinct color(s) in %s; top %d:", len(hist), path.name, n)
    for color, count in hist.most_common(n):
        info = ColorInfo(color_to_hex(color), color)
        logger.info(
            "  %s  %6.2f%%  h=%.1f s=%.3f l=%.3f",
            info.hex, 100.0 * count / total, info.h, info.s, info.l,
        )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="wv-tile",
        description="Cut a large raster image into fixed-size PNG tiles",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    p.add_argument("--image", required=True, help="Source image (PNG)")
    p.add_argument("--out", required=True, help="Output directory for tiles")
    p.add_argument("--tile_size", type=int, default=256, help="Square tile size in pixels")
    p.add_argument("--tile_w", type=int, default=None, help="Tile width (overrides --tile_size)")
    p.add_argument("--tile_h", type=int, default=None, help="Tile height (overrides --tile_size)")
    p.add_argument(
        "--oversample", type=int, default=1,
        help="Upscale the source by this integer factor before tiling",
    )
    p.add_argument("--workers", type=int, default=1, help="Encoder threads per band")
    p.add_argument("--description", default=None, help="PNG Description text chunk")
    p.add_argument(
        "--colors", type=int, default=0,
        help="Log the N most frequent source colors",
    )
    p.add_argument("--json", default=None, help="Write a JSON summary of the run here")
    p.add_argument("--no_progress", action="store_true", help="Disable the progress bar")
    verbosity = p.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true")
    verbosity.add_argument("-q", "--quiet", action="store_true")
    return p


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(VERBOSE if args.verbose else QUIET if args.quiet else DEFAULT)

    overrides = {
        "workers": max(1, args.workers),
        "progress": not args.no_progress,
    }
    if args.description is not None:
        overrides["description"] = args.description
    cfg = make_tiler_config(args.tile_size, **overrides)
    tile_w = args.tile_w if args.tile_w is not None else cfg.tile_width
    tile_h = args.tile_h if args.tile_h is not None else cfg.tile_height

    source = Path(args.image)
    out_dir = Path(args.out)
    try:
        if args.oversample > 1:
            out_dir.mkdir(parents=True, exist_ok=True)
            source = oversample_image(
                source, out_dir / f"{source.stem}.x{args.oversample}.png",
                args.oversample, config=cfg,
            )
        if args.colors > 0:
            _report_colors(source, args.colors)
        result = tile_image(source, tile_w, tile_h, out_dir, config=cfg)
        print(
            f"{result.source.name}: {result.grid.rows}x{result.grid.cols} tile(s) → {out_dir}",
            file=sys.stderr,
        )
        if args.json:
            Path(args.json).write_text(json.dumps(result.to_dict(), indent=2))
            print(f"JSON → {args.json}", file=sys.stderr)
    except (TilerError, OSError) as exc:
        sys.exit(f"wv-tile: {exc}")


if __name__ == "__main__":
    main()
