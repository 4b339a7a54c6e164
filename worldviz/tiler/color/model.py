"""Packed-RGB helpers, RGB <-> HSL conversion and HSL color ramps.

Hue is expressed in degrees ``[0, 360)``; saturation and lightness in
``[0, 1]``.  Packed colors are plain ints laid out as ``R<<16 | G<<8 | B``.
"""

from __future__ import annotations

from typing import MutableSequence

from worldviz.tiler.errors import InvalidParameter

HSL = tuple[float, float, float]
RGB = tuple[int, int, int]


def _clamp8(v: float) -> int:
    return max(0, min(255, int(round(v))))


def _clamp01(v: float) -> float:
    return max(0.0, min(1.0, v))


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


# ── packed colors ────────────────────────────────────────────────────────────


def pack_rgb(r: int, g: int, b: int) -> int:
    """Pack three 8-bit channels into a single ``0xRRGGBB`` int."""
    for name, v in (("red", r), ("green", g), ("blue", b)):
        if not 0 <= v <= 255:
            raise InvalidParameter(f"{name} channel out of range [0, 255]: {v}")
    return (r << 16) | (g << 8) | b


def unpack_rgb(color: int) -> RGB:
    """Split a packed color into ``(r, g, b)``; any alpha byte is ignored."""
    return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


def color_to_hex(color: int) -> str:
    r, g, b = unpack_rgb(color)
    return f"#{r:02x}{g:02x}{b:02x}"


# ── conversion ───────────────────────────────────────────────────────────────


def rgb_to_hsl(r: int, g: int, b: int) -> HSL:
    """Convert 8-bit RGB channels to ``(hue_degrees, saturation, lightness)``."""
    rf, gf, bf = r / 255.0, g / 255.0, b / 255.0
    hi = max(rf, gf, bf)
    lo = min(rf, gf, bf)
    l = (hi + lo) / 2.0

    if hi == lo:
        return 0.0, 0.0, l

    d = hi - lo
    s = d / (2.0 - hi - lo) if l > 0.5 else d / (hi + lo)
    if hi == rf:
        h = (gf - bf) / d + (6.0 if gf < bf else 0.0)
    elif hi == gf:
        h = (bf - rf) / d + 2.0
    else:
        h = (rf - gf) / d + 4.0
    return (h * 60.0) % 360.0, s, l


def _hue_to_channel(p: float, q: float, t: float) -> float:
    t %= 1.0
    if t < 1.0 / 6.0:
        return p + (q - p) * 6.0 * t
    if t < 0.5:
        return q
    if t < 2.0 / 3.0:
        return p + (q - p) * (2.0 / 3.0 - t) * 6.0
    return p


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:
    """Convert ``(hue_degrees, saturation, lightness)`` to 8-bit RGB channels."""
    s = _clamp01(s)
    l = _clamp01(l)
    if s == 0.0:
        v = _clamp8(l * 255.0)
        return v, v, v

    hn = (h % 360.0) / 360.0
    q = l * (1.0 + s) if l < 0.5 else l + s - l * s
    p = 2.0 * l - q
    return (
        _clamp8(_hue_to_channel(p, q, hn + 1.0 / 3.0) * 255.0),
        _clamp8(_hue_to_channel(p, q, hn) * 255.0),
        _clamp8(_hue_to_channel(p, q, hn - 1.0 / 3.0) * 255.0),
    )


# ── ramps ────────────────────────────────────────────────────────────────────


def make_hsl_ramp(
    palette: MutableSequence[int],
    start: int,
    stop: int,
    h1: float,
    h2: float,
    s1: float,
    s2: float,
    l1: float,
    l2: float,
) -> None:
    """Fill ``palette[start..stop]`` (inclusive) with an HSL-interpolated ramp.

    Hue, saturation and lightness are interpolated independently; index
    ``start`` gets ``(h1, s1, l1)`` and index ``stop`` gets ``(h2, s2, l2)``.
    Entries outside the range are left untouched.
    """
    if start < 0 or stop < start:
        raise InvalidParameter(f"Invalid ramp range: start={start} stop={stop}")
    if stop >= len(palette):
        raise InvalidParameter(
            f"Ramp stop index {stop} is outside a palette of {len(palette)} entries"
        )

    span = stop - start
    for i in range(start, stop + 1):
        t = (i - start) / span if span else 0.0
        r, g, b = hsl_to_rgb(_lerp(h1, h2, t), _lerp(s1, s2, t), _lerp(l1, l2, t))
        palette[i] = (r << 16) | (g << 8) | b


def hsl_ramp(
    count: int,
    h1: float,
    h2: float,
    s1: float,
    s2: float,
    l1: float,
    l2: float,
) -> list[int]:
    """Return a fresh list of *count* packed colors ramping from one HSL to another."""
    if count <= 0:
        return []
    palette = [0] * count
    make_hsl_ramp(palette, 0, count - 1, h1, h2, s1, s2, l1, l2)
    return palette
