"""Human-readable rendering of a decoded fridge status."""
from __future__ import annotations

from dataclasses import dataclass

from .const import BAT_SAVER_NAMES, RUN_MODE_NAMES, UNIT_SUFFIXES, UNKNOWN_NAME
from .protocol import StatusReport, TemperatureUnit


@dataclass(frozen=True)
class StatusView:
    """Display-ready labels for a StatusReport."""

    locked: str
    powered_on: str
    run_mode: str
    bat_saver: str
    unit: str
    left_target: str
    left_current: str
    temp_max: str
    temp_min: str
    bat_percent: str
    battery_voltage: float
    battery_voltage_text: str


def format_temperature(value: int, unit: TemperatureUnit) -> str:
    return f"{value}{UNIT_SUFFIXES[unit]}"


def format_voltage(volts: float) -> str:
    return f"{volts:.2f} V"


def present(report: StatusReport) -> StatusView:
    """Map a StatusReport onto display labels."""
    volts = report.battery_voltage
    return StatusView(
        locked="YES" if report.locked else "NO",
        powered_on="ON" if report.powered_on else "OFF",
        run_mode=RUN_MODE_NAMES.get(report.run_mode, UNKNOWN_NAME),
        bat_saver=BAT_SAVER_NAMES.get(report.bat_saver, UNKNOWN_NAME),
        unit=UNIT_SUFFIXES[report.unit],
        left_target=format_temperature(report.left_target, report.unit),
        left_current=format_temperature(report.left_current, report.unit),
        temp_max=format_temperature(report.temp_max, report.unit),
        temp_min=format_temperature(report.temp_min, report.unit),
        bat_percent=f"{report.bat_percent}%",
        battery_voltage=volts,
        battery_voltage_text=format_voltage(volts),
    )


def render_lines(view: StatusView) -> list[str]:
    """Per-field status lines, one label per line."""
    return [
        f" -> locked: {view.locked}",
        f" -> poweredOn: {view.powered_on}",
        f" -> runMode: {view.run_mode}",
        f" -> batSaver: {view.bat_saver}",
        f" -> leftTarget: {view.left_target}",
        f" -> leftCurrent: {view.left_current}",
        f" -> tempRange: {view.temp_min} .. {view.temp_max}",
        f" -> batPercent: {view.bat_percent}",
        f" -> batVoltage: {view.battery_voltage_text}",
    ]
