"""Color model and named-color catalog.

Quick access::

    from worldviz.tiler.color import rgb_to_hsl, hsl_to_rgb, make_hsl_ramp, ColorInfo
"""

from worldviz.tiler.color.catalog import ColorInfo, render_legend, sort_by_lightness
from worldviz.tiler.color.model import (
    color_to_hex,
    hsl_ramp,
    hsl_to_rgb,
    make_hsl_ramp,
    pack_rgb,
    rgb_to_hsl,
    unpack_rgb,
)

__all__ = [
    # Conversion
    "rgb_to_hsl",
    "hsl_to_rgb",
    "pack_rgb",
    "unpack_rgb",
    "color_to_hex",
    # Ramps
    "make_hsl_ramp",
    "hsl_ramp",
    # Catalog
    "ColorInfo",
    "sort_by_lightness",
    "render_legend",
]
