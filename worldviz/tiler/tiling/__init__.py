"""worldviz.tiler.tiling — band-buffered tile decomposition.

Quick start
-----------
>>> from worldviz.tiler.tiling import tile_image
>>> result = tile_image("world.png", 256, 256, "tiles/")
>>> len(result.tiles) == result.grid.rows * result.grid.cols
True
"""

from worldviz.tiler.tiling.buffer import TileBuffer
from worldviz.tiler.tiling.engine import PngTiler, TileResult, tile_image
from worldviz.tiler.tiling.grid import TileGrid

__all__ = [
    "PngTiler",
    "TileResult",
    "tile_image",
    "TileGrid",
    "TileBuffer",
]
