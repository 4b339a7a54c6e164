"""Raster codec adapter and whole-image helpers."""

from worldviz.tiler.raster.codec import PngReader, PngWriter
from worldviz.tiler.raster.oversample import oversample_image

__all__ = ["PngReader", "PngWriter", "oversample_image"]
