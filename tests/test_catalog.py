"""Tests for worldviz.tiler.color.catalog — ColorInfo and legend ordering."""

import dataclasses

import pytest

from worldviz.tiler.color.catalog import ColorInfo, render_legend, sort_by_lightness


class TestColorInfo:
    def test_channels_and_hsl(self):
        info = ColorInfo("grass", 0x00FF00)
        assert (info.r, info.g, info.b) == (0, 255, 0)
        assert info.hsl == pytest.approx((120.0, 1.0, 0.5))
        assert info.hex == "#00ff00"

    def test_immutable(self):
        info = ColorInfo("water", 0x0000FF)
        with pytest.raises(dataclasses.FrozenInstanceError):
            info.l = 0.9

    def test_dark_threshold(self):
        assert ColorInfo("void", 0x000000).is_dark
        assert ColorInfo("night", 0x202020).is_dark  # l ≈ 0.125
        assert not ColorInfo("stone", 0x808080).is_dark


class TestToHtml:
    def test_dark_block(self):
        out = ColorInfo("void", 0x000000).to_html()
        assert 'class="colorBlock darkBlock"' in out
        assert "background-color:#000000" in out
        assert "(0x000000)" in out

    def test_light_block(self):
        out = ColorInfo("snow", 0xFFFFFF).to_html()
        assert 'class="colorBlock"' in out
        assert "darkBlock" not in out
        assert "snow (0xffffff)" in out
        assert "[ h=0.000000 s=0.000000 l=1.000000 ]" in out

    def test_name_escaped(self):
        out = ColorInfo("<b>lava</b>", 0xFF4000).to_html()
        assert "&lt;b&gt;lava&lt;/b&gt;" in out

    def test_to_dict_fields(self):
        d = ColorInfo("sand", 0xE0D090).to_dict()
        assert set(d) == {"name", "hex", "color", "h", "s", "l", "dark"}
        assert d["hex"] == "#e0d090"
        assert d["dark"] is False


class TestSortByLightness:
    def test_dark_to_light(self):
        entries = [ColorInfo("white", 0xFFFFFF), ColorInfo("black", 0), ColorInfo("gray", 0x808080)]
        assert [e.name for e in sort_by_lightness(entries)] == ["black", "gray", "white"]

    def test_stable_for_equal_lightness(self):
        # Pure red, green and blue all have l == 0.5
        entries = [
            ColorInfo("green", 0x00FF00),
            ColorInfo("red", 0xFF0000),
            ColorInfo("black", 0x000000),
            ColorInfo("blue", 0x0000FF),
        ]
        names = [e.name for e in sort_by_lightness(entries)]
        assert names == ["black", "green", "red", "blue"]

    def test_does_not_mutate_input(self):
        entries = [ColorInfo("white", 0xFFFFFF), ColorInfo("black", 0)]
        sort_by_lightness(entries)
        assert entries[0].name == "white"


class TestRenderLegend:
    def test_order_and_count(self):
        out = render_legend([ColorInfo("snow", 0xFFFFFF), ColorInfo("void", 0)])
        assert out.count("<div") == 2
        assert out.index("void") < out.index("snow")

    def test_empty(self):
        assert render_legend([]) == ""
