"""Tests for the status presenter."""
from __future__ import annotations

from dataclasses import replace

import pytest

from alpicool_fridge_ble import (
    BatterySaver,
    RunMode,
    StatusReport,
    TemperatureUnit,
    decode,
    format_temperature,
    format_voltage,
    present,
    render_lines,
)


@pytest.fixture
def report(status_frame) -> StatusReport:
    return decode(status_frame)


class TestFormatting:
    """Tests for the formatting helpers."""

    def test_format_temperature_celsius(self):
        assert format_temperature(-4, TemperatureUnit.CELSIUS) == "-4°C"

    def test_format_temperature_fahrenheit(self):
        assert format_temperature(39, TemperatureUnit.FAHRENHEIT) == "39°F"

    def test_format_voltage_two_decimals(self):
        assert format_voltage(12.8) == "12.80 V"
        assert format_voltage(0.0) == "0.00 V"


class TestPresent:
    """Tests for mapping a StatusReport to labels."""

    def test_sample_report(self, report):
        view = present(report)
        assert view.locked == "YES"
        assert view.powered_on == "ON"
        assert view.run_mode == "Eco"
        assert view.bat_saver == "High"
        assert view.unit == "°C"
        assert view.left_target == "-4°C"
        assert view.left_current == "-5°C"
        assert view.temp_max == "20°C"
        assert view.temp_min == "-20°C"
        assert view.bat_percent == "85%"

    def test_voltage_rendering(self, report):
        """bat_vol_int=12, bat_vol_dec=8 renders as 12.80 V."""
        view = present(report)
        assert view.battery_voltage == pytest.approx(12.8)
        assert view.battery_voltage_text == "12.80 V"

    def test_unlocked_and_off(self, report):
        view = present(replace(report, locked=False, powered_on=False))
        assert view.locked == "NO"
        assert view.powered_on == "OFF"

    def test_run_mode_labels(self, report):
        assert present(replace(report, run_mode=RunMode.MAX)).run_mode == "Max"
        assert present(replace(report, run_mode=RunMode.ECO)).run_mode == "Eco"
        assert present(replace(report, run_mode=RunMode.UNKNOWN)).run_mode == "Unknown"

    def test_bat_saver_labels(self, report):
        labels = {
            BatterySaver.LOW: "Low",
            BatterySaver.MID: "Mid",
            BatterySaver.HIGH: "High",
            BatterySaver.UNKNOWN: "Unknown",
        }
        for level, label in labels.items():
            assert present(replace(report, bat_saver=level)).bat_saver == label

    def test_fahrenheit_suffix(self, report):
        view = present(replace(report, unit=TemperatureUnit.FAHRENHEIT, left_target=39))
        assert view.unit == "°F"
        assert view.left_target == "39°F"
        assert view.left_current == "-5°F"

    def test_voltage_tenths(self, report):
        view = present(replace(report, bat_vol_int=13, bat_vol_dec=2))
        assert view.battery_voltage_text == "13.20 V"


class TestRenderLines:
    """Tests for the console line rendering."""

    def test_lines(self, report):
        lines = render_lines(present(report))
        assert lines[0] == " -> locked: YES"
        assert " -> runMode: Eco" in lines
        assert " -> leftTarget: -4°C" in lines
        assert " -> batPercent: 85%" in lines
        assert lines[-1] == " -> batVoltage: 12.80 V"
