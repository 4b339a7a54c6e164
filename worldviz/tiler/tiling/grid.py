"""Row-major grid arithmetic for fixed-size tiles over a source raster."""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path

from worldviz.tiler.errors import InvalidParameter


@dataclass(frozen=True)
class TileGrid:
    """Fixed-size tiles covering a ``width × height`` image.

    Edge tiles keep the full tile size; the part outside the image is padding.
    """

    width: int
    height: int
    tile_width: int
    tile_height: int

    def __post_init__(self) -> None:
        if self.tile_width <= 0 or self.tile_height <= 0:
            raise InvalidParameter(
                f"Tile size must be positive, got {self.tile_width}x{self.tile_height}"
            )
        if self.width < 0 or self.height < 0:
            raise InvalidParameter(f"Invalid image size {self.width}x{self.height}")

    @property
    def cols(self) -> int:
        return math.ceil(self.width / self.tile_width)

    @property
    def rows(self) -> int:
        return math.ceil(self.height / self.tile_height)

    @property
    def count(self) -> int:
        return self.rows * self.cols

    def band_rows(self, band: int) -> range:
        """Source rows that fall inside tile-row *band* (clipped to the image)."""
        y0 = band * self.tile_height
        return range(y0, min(y0 + self.tile_height, self.height))

    def col_span(self, col: int) -> tuple[int, int]:
        """Return the ``[x0, x1)`` source columns covered by tile column *col*."""
        x0 = col * self.tile_width
        return x0, min(x0 + self.tile_width, self.width)

    @staticmethod
    def tile_filename(source: Path | str, row: int, col: int) -> str:
        return f"{Path(source).name}.{row}.{col}.png"
