"""Tiler configuration dataclass and factory function."""

from dataclasses import dataclass, replace

from worldviz.tiler._version import __version__


@dataclass
class TilerConfig:
    # Tile geometry (pixels)
    tile_width: int = 256
    tile_height: int = 256

    # PNG encoding: level 1 is much faster than the zlib default at a small
    # cost in file size; Pillow picks the scan-line filter
    compress_level: int = 1

    # PNG text chunks written into every tile
    program: str = f"worldviz-tiler {__version__}"
    description: str = "World map tile"
    url: str = "https://github.com/worldviz/worldviz-tiler"

    # Execution
    workers: int = 1        # >1 encodes the tiles of one band concurrently
    progress: bool = False  # tqdm bar over bands

    def text_chunks(self, description: str | None = None) -> dict[str, str]:
        """Return the PNG text metadata as an ordered name/value mapping."""
        return {
            "Program": self.program,
            "Description": description if description is not None else self.description,
            "URL": self.url,
        }


def make_tiler_config(tile_size: int = 256, **overrides) -> TilerConfig:
    """Return a TilerConfig for square tiles of *tile_size* pixels.

    Any other field can be overridden by keyword, e.g.
    ``make_tiler_config(512, workers=4)``.
    """
    cfg = TilerConfig(tile_width=tile_size, tile_height=tile_size)
    return replace(cfg, **overrides) if overrides else cfg
