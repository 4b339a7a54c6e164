"""Per-tile pixel storage used while one band is being assembled."""

from __future__ import annotations

from typing import Iterator

import numpy as np


class TileBuffer:
    """Zero-initialised ``tile_height × tile_width × channels`` pixel block."""

    __slots__ = ("width", "height", "channels", "pixels")

    def __init__(self, width: int, height: int, channels: int) -> None:
        self.width = width
        self.height = height
        self.channels = channels
        self.pixels = np.zeros((height, width, channels), dtype=np.uint8)

    def put_row(self, y: int, run: np.ndarray) -> None:
        """Copy a ``(n, channels)`` pixel run into local row *y* starting at x=0."""
        if not 0 <= y < self.height:
            raise IndexError(f"Tile row {y} outside tile of height {self.height}")
        n = run.shape[0]
        if n > self.width:
            raise IndexError(f"Pixel run of {n} exceeds tile width {self.width}")
        if run.shape[1:] != (self.channels,):
            raise ValueError(
                f"Pixel run has shape {run.shape}, expected (n, {self.channels})"
            )
        self.pixels[y, :n] = run

    def rows(self) -> Iterator[np.ndarray]:
        yield from self.pixels

    @property
    def nbytes(self) -> int:
        return self.pixels.nbytes
