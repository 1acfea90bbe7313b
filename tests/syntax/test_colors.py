"""Tests for color keyword lookup, hex parsing and rendering."""

import pytest

from less_census.syntax.colors import is_named_color, parse_hex_color, render_color
from less_census.syntax.nodes import RGBColor, format_number


class TestNamedColors:
    def test_lookup_is_case_insensitive(self):
        assert is_named_color("red")
        assert is_named_color("AliceBlue")

    def test_non_colors(self):
        assert not is_named_color("transparent")
        assert not is_named_color("currentcolor")
        assert not is_named_color("auto")


class TestParseHexColor:
    """Hex literals in their four lengths."""

    @pytest.mark.parametrize(
        "text, channels",
        [
            ("#f00", (255, 0, 0)),
            ("#FF0000", (255, 0, 0)),
            ("#336699", (51, 102, 153)),
            ("#abc", (170, 187, 204)),
        ],
    )
    def test_channels(self, text, channels):
        color = parse_hex_color(text)
        assert (color.red, color.green, color.blue) == channels
        assert color.alpha == 1.0
        assert color.source == text

    def test_alpha_from_eight_digits(self):
        color = parse_hex_color("#ff000080")
        assert color.alpha == 0.5

    def test_alpha_from_four_digits(self):
        color = parse_hex_color("#000f")
        assert color.alpha == 1.0

    @pytest.mark.parametrize("text", ["#main", "#12345", "#ff00zz", "#"])
    def test_ids_are_not_colors(self, text):
        assert parse_hex_color(text) is None


class TestRenderColor:
    """Equivalent spellings render to the same key."""

    def test_compresses_to_three_digits(self):
        assert render_color(parse_hex_color("#FF0000")) == "#f00"
        assert render_color(parse_hex_color("#ff0000")) == "#f00"
        assert render_color(parse_hex_color("#f00")) == "#f00"

    def test_keeps_six_digits_when_not_compressible(self):
        assert render_color(parse_hex_color("#123456")) == "#123456"

    def test_translucent_renders_as_rgba(self):
        assert render_color(parse_hex_color("#ff000080")) == "rgba(255,0,0,0.5)"

    def test_fully_transparent(self):
        assert render_color(RGBColor(0, 0, 0, 0.0)) == "rgba(0,0,0,0)"


class TestFormatNumber:
    @pytest.mark.parametrize(
        "value, text",
        [(10.0, "10"), (0.5, "0.5"), (-2.0, "-2"), (1.25, "1.25")],
    )
    def test_format(self, value, text):
        assert format_number(value) == text
