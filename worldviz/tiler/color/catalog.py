"""Named color entries and the dark-to-light legend built from them."""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from typing import Iterable

from worldviz.tiler.color.model import color_to_hex, rgb_to_hsl, unpack_rgb

# Entries darker than this get the "darkBlock" style so their text stays legible
DARK_LIGHTNESS = 0.2


@dataclass(frozen=True)
class ColorInfo:
    """A human-readable name attached to a packed color and its HSL triple."""

    name: str
    color: int
    r: int = field(init=False)
    g: int = field(init=False)
    b: int = field(init=False)
    h: float = field(init=False)
    s: float = field(init=False)
    l: float = field(init=False)

    def __post_init__(self) -> None:
        r, g, b = unpack_rgb(self.color)
        h, s, l = rgb_to_hsl(r, g, b)
        for k, v in (("r", r), ("g", g), ("b", b), ("h", h), ("s", s), ("l", l)):
            object.__setattr__(self, k, v)

    @property
    def hsl(self) -> tuple[float, float, float]:
        return (self.h, self.s, self.l)

    @property
    def is_dark(self) -> bool:
        return self.l < DARK_LIGHTNESS

    @property
    def hex(self) -> str:
        return color_to_hex(self.color)

    def to_html(self) -> str:
        css = "colorBlock darkBlock" if self.is_dark else "colorBlock"
        return (
            f'<div class="{css}" style="background-color:{self.hex}">'
            f"{html.escape(self.name)} (0x{self.color & 0xFFFFFF:06x}) "
            f"[ h={self.h:f} s={self.s:f} l={self.l:f} ]</div>\n"
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "hex": self.hex,
            "color": self.color,
            "h": round(self.h, 4),
            "s": round(self.s, 4),
            "l": round(self.l, 4),
            "dark": self.is_dark,
        }


def sort_by_lightness(entries: Iterable[ColorInfo]) -> list[ColorInfo]:
    """Return *entries* ordered dark to light; equal lightness keeps input order."""
    return sorted(entries, key=lambda e: e.l)


def render_legend(entries: Iterable[ColorInfo]) -> str:
    """Concatenate the HTML blocks of *entries*, darkest first."""
    return "".join(e.to_html() for e in sort_by_lightness(entries))
