"""Frequency counting for reports (e.g. the most common colors of a map)."""

from __future__ import annotations

from collections import Counter
from typing import Hashable, Iterable

import numpy as np

from worldviz.tiler.raster.codec import PngReader


class Histogram:
    """Count occurrences of hashable keys and export them sorted by count."""

    def __init__(self, keys: Iterable[Hashable] = ()) -> None:
        self._counts: Counter = Counter()
        self.update(keys)

    def add(self, key: Hashable, count: int = 1) -> None:
        self._counts[key] += count

    def update(self, keys: Iterable[Hashable]) -> None:
        self._counts.update(keys)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._counts

    def __getitem__(self, key: Hashable) -> int:
        return self._counts[key]

    def __len__(self) -> int:
        return len(self._counts)

    def total(self) -> int:
        return sum(self._counts.values())

    def sort(self, order: int = 1) -> list[tuple[Hashable, int]]:
        """Return ``(key, count)`` pairs; ``order > 0`` most frequent first.

        Keys with equal counts keep the order in which they were first seen.
        """
        return sorted(self._counts.items(), key=lambda kv: kv[1], reverse=order > 0)

    def most_common(self, n: int) -> list[tuple[Hashable, int]]:
        return self.sort(1)[:n]


def color_histogram(reader: PngReader) -> Histogram:
    """Count packed ``0xRRGGBB`` values over every row of an open *reader*."""
    hist = Histogram()
    for y in range(reader.height):
        row = reader.row(y).astype(np.uint32)
        packed = (row[:, 0] << 16) | (row[:, 1] << 8) | row[:, 2]
        values, counts = np.unique(packed, return_counts=True)
        for value, count in zip(values.tolist(), counts.tolist()):
            hist.add(value, count)
    return hist
