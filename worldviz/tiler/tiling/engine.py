"""Band-buffered decomposition of a large raster into fixed-size PNG tiles.

Only the tiles of the current tile-row ("band") are held in memory.  Each
source row is scattered into the band's tile buffers; once the last row of a
band has been copied, every tile of the band is encoded and the buffers are
dropped before the next band starts.

Tile files are named ``<source basename>.<tile row>.<tile col>.png`` and are
always exactly ``tile_width × tile_height``; tiles on the right and bottom
edges are zero-padded.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from contextlib import ExitStack
from dataclasses import dataclass, field
from pathlib import Path

from tqdm import tqdm

from worldviz.tiler.config import TilerConfig
from worldviz.tiler.errors import InvalidParameter, IOFailure
from worldviz.tiler.raster.codec import PngReader, PngWriter
from worldviz.tiler.tiling.buffer import TileBuffer
from worldviz.tiler.tiling.grid import TileGrid


@dataclass
class TileResult:
    """Outcome of one successful tiling run."""

    source: Path
    grid: TileGrid
    channels: int
    tiles: list[Path] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "source": str(self.source),
            "width": self.grid.width,
            "height": self.grid.height,
            "tile_width": self.grid.tile_width,
            "tile_height": self.grid.tile_height,
            "rows": self.grid.rows,
            "cols": self.grid.cols,
            "channels": self.channels,
            "tiles": [str(p) for p in self.tiles],
        }


class PngTiler:
    """Cut one source raster into a grid of PNG tiles.

    Example::

        result = PngTiler("world.png", 256, 256, "tiles/").do_tile()
        print(result.grid.rows, result.grid.cols, len(result.tiles))
    """

    def __init__(
        self,
        filename: Path | str,
        tile_width: int,
        tile_height: int,
        out_dir: Path | str,
        *,
        config: TilerConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        if tile_width <= 0 or tile_height <= 0:
            raise InvalidParameter(
                f"Tile size must be positive, got {tile_width}x{tile_height}"
            )
        self.filename = Path(filename)
        self.tile_width = tile_width
        self.tile_height = tile_height
        self.out_dir = Path(out_dir)
        self.config = config or TilerConfig(tile_width=tile_width, tile_height=tile_height)
        self.log = logger or logging.getLogger(__name__)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _make_out_dir(self) -> None:
        try:
            self.out_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise IOFailure(
                f"Cannot create output directory {self.out_dir}: {exc}"
            ) from exc

    def _open_band(
        self, stack: ExitStack, grid: TileGrid, band: int, channels: int
    ) -> tuple[list[TileBuffer], list[PngWriter]]:
        buffers: list[TileBuffer] = []
        writers: list[PngWriter] = []
        for col in range(grid.cols):
            path = self.out_dir / grid.tile_filename(self.filename, band, col)
            writer = PngWriter(
                path,
                self.tile_width,
                self.tile_height,
                channels,
                config=self.config,
            )
            stack.enter_context(writer)
            writers.append(writer)
            buffers.append(TileBuffer(self.tile_width, self.tile_height, channels))
        return buffers, writers

    @staticmethod
    def _scatter_row(
        grid: TileGrid, buffers: list[TileBuffer], row, local_y: int
    ) -> None:
        for col, buf in enumerate(buffers):
            x0, x1 = grid.col_span(col)
            buf.put_row(local_y, row[x0:x1])

    def _flush_band(
        self, buffers: list[TileBuffer], writers: list[PngWriter]
    ) -> None:
        if self.config.workers > 1 and len(writers) > 1:
            with ThreadPoolExecutor(max_workers=self.config.workers) as pool:
                futures = [
                    pool.submit(writer.write_rows, buf.rows())
                    for writer, buf in zip(writers, buffers)
                ]
                for future in futures:
                    future.result()
        else:
            for writer, buf in zip(writers, buffers):
                writer.write_rows(buf.rows())
        for writer in writers:
            self.log.debug("Wrote tile %s", writer.path)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def do_tile(self) -> TileResult:
        """Decode the source and write every tile; raises ``TilerError`` on failure."""
        self._make_out_dir()

        with PngReader(self.filename) as src:
            grid = TileGrid(src.width, src.height, self.tile_width, self.tile_height)
            channels = src.channels
            result = TileResult(source=self.filename, grid=grid, channels=channels)
            self.log.info(
                "Tiling %s (%dx%d, %s) into %dx%d tiles of %dx%d -> %s",
                self.filename.name, grid.width, grid.height,
                "RGBA" if src.has_alpha else "RGB",
                grid.cols, grid.rows, self.tile_width, self.tile_height,
                self.out_dir,
            )

            for band in tqdm(
                range(grid.rows),
                desc=f"Tiling {self.filename.name}",
                unit="band",
                disable=not self.config.progress,
            ):
                # Writers of a band are closed on every exit path
                with ExitStack() as stack:
                    buffers, writers = self._open_band(stack, grid, band, channels)
                    for sy in grid.band_rows(band):
                        self._scatter_row(
                            grid, buffers, src.row(sy), sy % self.tile_height
                        )
                    self._flush_band(buffers, writers)
                result.tiles.extend(w.path for w in writers)
                del buffers, writers

        self.log.info("Wrote %d tile(s) for %s", len(result.tiles), self.filename.name)
        return result


def tile_image(
    source: Path | str,
    tile_width: int,
    tile_height: int,
    out_dir: Path | str,
    *,
    config: TilerConfig | None = None,
    logger: logging.Logger | None = None,
) -> TileResult:
    """Functional wrapper around ``PngTiler(...).do_tile()``."""
    return PngTiler(
        source, tile_width, tile_height, out_dir, config=config, logger=logger
    ).do_tile()
