"""Tests for light state rendering."""

import pytest

from hue_cli.display import (
    Show,
    format_light_detail,
    format_light_table,
    mired_to_kelvin,
    name_column_width,
)
from hue_cli.light_manager import kelvin_to_mired
from hue_cli.models import Light, LightState


def make_light(name, **state):
    return Light(name=name, state=LightState(**state))


class TestShow:
    """Test the optional-value formatter."""

    def test_present_value(self):
        assert f"{Show(42)}" == "42"

    def test_absent_value(self):
        assert f"{Show(None)}" == "N/A"

    def test_padding_applies_to_placeholder(self):
        assert f"{Show(None):5}" == "N/A  "
        assert f"{Show(7):5}" == "    7"

    def test_tuple_prints_as_list(self):
        assert f"{Show((0.3, 0.4))}" == "[0.3, 0.4]"

    def test_zero_is_not_absent(self):
        assert str(Show(0)) == "0"

    def test_booleans_print_lowercase(self):
        assert str(Show(True)) == "true"
        assert f"{Show(False):6}" == "false "


class TestColorTemperature:
    """Set and display conversions use different constants."""

    def test_kelvin_to_mired(self):
        assert kelvin_to_mired(2700) == round(10_000_000 / 2700) == 3704

    def test_mired_to_kelvin(self):
        assert mired_to_kelvin(366) == round(1_000_000 / 366) == 2732

    def test_not_inverses(self):
        sent = kelvin_to_mired(2700)
        assert mired_to_kelvin(sent) == 270
        assert mired_to_kelvin(sent) != 2700

    def test_absent_or_zero_mired(self):
        assert mired_to_kelvin(None) is None
        assert mired_to_kelvin(0) is None

    def test_non_positive_kelvin_rejected(self):
        with pytest.raises(ValueError):
            kelvin_to_mired(0)


class TestLightTable:
    """Test the all-lights table."""

    def test_name_width_is_longest_name(self):
        lights = {
            1: make_light("ab", on=True),
            2: make_light("abcdefg", on=True),
            3: make_light("abc", on=False),
        }
        assert name_column_width(lights) == 7

    def test_name_width_floor(self):
        assert name_column_width({}) == 4
        assert name_column_width({1: make_light("a")}) == 4

    def test_empty_table_is_header_only(self):
        assert format_light_table({}) == "id name on  bri hue   sat ct    colormode xy"

    def test_rows(self, color_light, dimmable_light):
        table = format_light_table({2: dimmable_light, 1: color_light})
        lines = table.splitlines()

        width = len("Living Room Light")
        assert lines[0] == f"id {'name':{width}} on  bri hue   sat ct    colormode xy"
        assert lines[1] == (
            f" 1 {'Living Room Light':{width}} on  200  8418 140 2732K ct        "
            "[0.4573, 0.41]"
        )
        assert lines[2] == (
            f" 2 {'Kitchen':{width}} off 100 N/A   N/A N/A   N/A       N/A"
        )

    def test_missing_optional_fields_render_na(self):
        table = format_light_table({5: make_light("Bulb", on=True)})
        row = table.splitlines()[1]

        assert row.split() == ["5", "Bulb", "on", "N/A", "N/A", "N/A", "N/A", "N/A", "N/A"]


class TestLightDetail:
    """Test the single-light view."""

    def test_full_light(self, color_light):
        assert format_light_detail(1, color_light).splitlines() == [
            "id: 1",
            "name: Living Room Light",
            "state:",
            "    on: true",
            "    bri: 200",
            "    hue: 8418",
            "    sat: 140",
            "    effect: none",
            "    ct: 2732K",
            "    alert: none",
            "    colormode: ct",
            "    xy: [0.4573, 0.41]",
            "    reachable: true",
        ]

    def test_unreachable_light_off(self):
        lines = format_light_detail(3, make_light("Lamp", on=False)).splitlines()

        assert "    on: false" in lines
        assert "    reachable: false" in lines

    def test_missing_fields_render_na(self, dimmable_light):
        detail = format_light_detail(2, dimmable_light)

        for key in ("hue", "sat", "effect", "ct", "colormode", "xy"):
            assert f"    {key}: N/A" in detail.splitlines()
        assert "    bri: 100" in detail.splitlines()
