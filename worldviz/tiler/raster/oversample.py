"""Integer nearest-neighbour upscaling of a raster file."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from worldviz.tiler.config import TilerConfig
from worldviz.tiler.errors import InvalidParameter
from worldviz.tiler.raster.codec import PngReader, PngWriter

logger = logging.getLogger(__name__)


def oversample_image(
    src: Path | str,
    dest: Path | str,
    factor: int,
    config: TilerConfig | None = None,
) -> Path:
    """Write *src* scaled up by *factor* in both axes to *dest*.

    Every source pixel becomes a ``factor × factor`` block, so block edges
    stay crisp when the result is later cut into tiles.
    """
    if factor < 1:
        raise InvalidParameter(f"Oversample factor must be >= 1, got {factor}")

    dest = Path(dest)
    with PngReader(src) as reader:
        pixels = reader.pixels
        if factor > 1:
            pixels = np.repeat(np.repeat(pixels, factor, axis=0), factor, axis=1)
        h, w, c = pixels.shape
        logger.info(
            "Oversampling %s x%d: %dx%d -> %dx%d",
            reader.path.name, factor, reader.width, reader.height, w, h,
        )
        with PngWriter(
            dest, w, h, c,
            description=f"Oversampled x{factor} from {reader.path.name}",
            config=config,
        ) as writer:
            writer.write_array(pixels)
    return dest
