"""PNG decode/encode adapter over Pillow and numpy.

``PngReader`` materialises a whole source raster as a ``(height, width,
channels)`` uint8 array and exposes it row by row.  ``PngWriter`` owns one
output file from creation until ``close()`` and encodes a full set of scan
lines in a single ``write_rows()`` call.

Both classes are context managers; ``close()`` is idempotent so they can be
registered on a ``contextlib.ExitStack`` and still be closed explicitly.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO, Iterable

import numpy as np
from PIL import Image, PngImagePlugin, UnidentifiedImageError

from worldviz.tiler.config import TilerConfig
from worldviz.tiler.errors import FormatFailure, InvalidParameter, IOFailure

logger = logging.getLogger(__name__)

_MODES = {3: "RGB", 4: "RGBA"}


def _normalise_mode(img: Image.Image) -> Image.Image:
    """Return *img* as RGB, or RGBA when the source carries any alpha."""
    if img.mode == "RGBA":
        return img
    if img.mode in ("LA", "PA") or (img.mode == "P" and "transparency" in img.info):
        return img.convert("RGBA")
    if img.mode == "RGB":
        return img
    if img.mode.startswith("I"):
        # 16-bit grayscale: keep the high byte instead of clipping to 255
        wide = np.asarray(img).astype(np.int64)
        gray = (np.clip(wide, 0, 0xFFFF) >> 8).astype(np.uint8)
        return Image.fromarray(gray).convert("RGB")
    return img.convert("RGB")


class PngReader:
    """Decode a raster file fully into memory.

    >>> with PngReader("world.png") as src:
    ...     first = src.row(0)   # (width, channels) read-only view
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._pixels: np.ndarray | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def open(self) -> PngReader:
        if self._pixels is not None:
            return self
        # World maps routinely exceed the decompression-bomb guard; lift it
        # for this decode only
        guard = Image.MAX_IMAGE_PIXELS
        Image.MAX_IMAGE_PIXELS = None
        try:
            with Image.open(self.path) as img:
                img = _normalise_mode(img)
                pixels = np.asarray(img, dtype=np.uint8)
        except UnidentifiedImageError as exc:
            raise FormatFailure(f"Not a readable image: {self.path}") from exc
        except (FileNotFoundError, PermissionError, IsADirectoryError) as exc:
            raise IOFailure(f"Failed to open input file ({self.path}): {exc}") from exc
        except OSError as exc:
            # Truncated/corrupt data surfaces as a plain OSError from the decoder
            raise FormatFailure(f"Failed to decode {self.path}: {exc}") from exc
        finally:
            Image.MAX_IMAGE_PIXELS = guard

        pixels.setflags(write=False)
        self._pixels = pixels
        logger.debug(
            "Decoded %s: %dx%d, %d channel(s)",
            self.path, self.width, self.height, self.channels,
        )
        return self

    def close(self) -> None:
        self._pixels = None

    @property
    def is_open(self) -> bool:
        return self._pixels is not None

    def __enter__(self) -> PngReader:
        return self.open()

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def pixels(self) -> np.ndarray:
        if self._pixels is None:
            raise RuntimeError(f"PngReader for {self.path} is not open")
        return self._pixels

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def channels(self) -> int:
        return int(self.pixels.shape[2])

    @property
    def has_alpha(self) -> bool:
        return self.channels == 4

    def row(self, y: int) -> np.ndarray:
        """Return source row *y* as a read-only ``(width, channels)`` view."""
        if not 0 <= y < self.height:
            raise IndexError(f"Row {y} outside image of height {self.height}")
        return self.pixels[y]

    def row_bytes(self, y: int) -> bytes:
        return self.row(y).tobytes()


class PngWriter:
    """Encode exactly *height* scan lines into a new PNG file.

    The output file is created when the writer is opened, so a bad
    destination is reported before any pixels are produced.
    """

    def __init__(
        self,
        path: Path | str,
        width: int,
        height: int,
        channels: int,
        *,
        description: str | None = None,
        config: TilerConfig | None = None,
    ) -> None:
        if width <= 0 or height <= 0:
            raise InvalidParameter(f"Invalid PNG size {width}x{height}")
        if channels not in _MODES:
            raise InvalidParameter(f"Unsupported channel count: {channels}")
        self.path = Path(path)
        self.width = width
        self.height = height
        self.channels = channels
        self._config = config or TilerConfig()
        self._description = description
        self._fp: BinaryIO | None = None
        self.written = False

    def open(self) -> PngWriter:
        if self._fp is None:
            try:
                self._fp = open(self.path, "wb")
            except OSError as exc:
                raise IOFailure(
                    f"Failed to open output file ({self.path}): {exc}"
                ) from exc
        return self

    def close(self) -> None:
        if self._fp is not None:
            self._fp.close()
            self._fp = None

    @property
    def is_open(self) -> bool:
        return self._fp is not None

    def __enter__(self) -> PngWriter:
        return self.open()

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _pnginfo(self) -> PngImagePlugin.PngInfo:
        info = PngImagePlugin.PngInfo()
        for key, value in self._config.text_chunks(self._description).items():
            info.add_text(key, value)
        return info

    def write_rows(self, rows: Iterable[bytes | bytearray | memoryview | np.ndarray]) -> None:
        """Encode *rows* (top to bottom) and close the file."""
        self.open()
        try:
            row_len = self.width * self.channels
            data = bytearray()
            count = 0
            for row in rows:
                buf = row.tobytes() if isinstance(row, np.ndarray) else bytes(row)
                if len(buf) != row_len:
                    raise InvalidParameter(
                        f"Scan line {count} is {len(buf)} bytes, expected {row_len}"
                    )
                data += buf
                count += 1
            if count != self.height:
                raise InvalidParameter(
                    f"Got {count} scan lines for a PNG of height {self.height}"
                )
            img = Image.frombytes(
                _MODES[self.channels], (self.width, self.height), bytes(data)
            )
            try:
                img.save(
                    self._fp,
                    format="PNG",
                    pnginfo=self._pnginfo(),
                    compress_level=self._config.compress_level,
                )
            except OSError as exc:
                raise IOFailure(f"Failed to write {self.path}: {exc}") from exc
            self.written = True
        finally:
            self.close()

    def write_array(self, pixels: np.ndarray) -> None:
        """Encode a ``(height, width, channels)`` array; see ``write_rows``."""
        if pixels.shape != (self.height, self.width, self.channels):
            raise InvalidParameter(
                f"Array shape {pixels.shape} does not match "
                f"{(self.height, self.width, self.channels)}"
            )
        self.write_rows(pixels)
