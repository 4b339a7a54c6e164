"""worldviz.tiler — cut rendered world maps into fixed-size PNG tiles.

Quick start
-----------
>>> from worldviz.tiler import tile_image
>>> result = tile_image("world.png", 256, 256, "tiles/")

Color helpers
-------------
>>> from worldviz.tiler import hsl_ramp, ColorInfo
>>> palette = hsl_ramp(10, 0, 120, 1, 1, 0.5, 0.5)
"""

from worldviz.tiler._version import __version__
from worldviz.tiler.color import ColorInfo, hsl_ramp, hsl_to_rgb, make_hsl_ramp, rgb_to_hsl
from worldviz.tiler.config import TilerConfig, make_tiler_config
from worldviz.tiler.errors import FormatFailure, InvalidParameter, IOFailure, TilerError
from worldviz.tiler.tiling import PngTiler, TileGrid, TileResult, tile_image

__all__ = [
    "__version__",
    # Tiling
    "PngTiler",
    "TileGrid",
    "TileResult",
    "tile_image",
    # Color
    "ColorInfo",
    "rgb_to_hsl",
    "hsl_to_rgb",
    "make_hsl_ramp",
    "hsl_ramp",
    # Config
    "TilerConfig",
    "make_tiler_config",
    # Errors
    "TilerError",
    "IOFailure",
    "FormatFailure",
    "InvalidParameter",
]
