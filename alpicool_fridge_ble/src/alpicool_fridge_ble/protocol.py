"""FEFE frame codec for compressor fridge BLE communication.

Frames on the wire look like:

    FE FE [declared length] [command] [payload ...] [checksum hi] [checksum lo]

The checksum is the 16-bit big-endian sum of every byte before it.
Outbound Bind and Query commands are fixed byte templates with no
checksum appended. Inbound frames with command 0x01 carry the
single-zone status payload (18 bytes).

This module has no dependency on the BLE transport.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from enum import IntEnum
from typing import Any

from .const import (
    BAT_SAVER_HIGH,
    BAT_SAVER_LOW,
    BAT_SAVER_MID,
    CMD_BIND,
    CMD_QUERY,
    FRAME_CHECKSUM_LEN,
    FRAME_HEADER_LEN,
    FRAME_SYNC,
    MIN_STATUS_FRAME_LEN,
    OFFSET_BAT_PERCENT,
    OFFSET_BAT_SAVER,
    OFFSET_BAT_VOL_DEC,
    OFFSET_BAT_VOL_INT,
    OFFSET_LEFT_CURRENT,
    OFFSET_LEFT_RET_DIFF,
    OFFSET_LEFT_TARGET,
    OFFSET_LEFT_TC_COLD,
    OFFSET_LEFT_TC_HALT,
    OFFSET_LEFT_TC_HOT,
    OFFSET_LEFT_TC_MID,
    OFFSET_LOCKED,
    OFFSET_POWERED_ON,
    OFFSET_RUN_MODE,
    OFFSET_START_DELAY,
    OFFSET_TEMP_MAX,
    OFFSET_TEMP_MIN,
    OFFSET_UNIT,
    REQUEST_BIND,
    REQUEST_QUERY,
    RESPONSE_QUERY,
    RUN_MODE_ECO,
    RUN_MODE_MAX,
    SINGLE_ZONE_PAYLOAD_LEN,
    UNIT_CELSIUS,
    UNIT_FAHRENHEIT,
)
from .exceptions import (
    BadSyncError,
    ChecksumMismatchError,
    DecodeError,
    TooShortError,
    UnsupportedCommandError,
)

# ---------------------------------------------------------------------------
# Helper functions
# ---------------------------------------------------------------------------

def _s8(value: int) -> int:
    """Convert an unsigned byte to a signed 8-bit value."""
    return value - 256 if value > 127 else value


def checksum(data: bytes | bytearray) -> int:
    """Return the 16-bit additive checksum of ``data``."""
    return sum(data) & 0xFFFF


# ---------------------------------------------------------------------------
# Decoded field types
# ---------------------------------------------------------------------------

class RunMode(IntEnum):
    """Compressor power mode."""

    UNKNOWN = -1
    MAX = RUN_MODE_MAX
    ECO = RUN_MODE_ECO

    @classmethod
    def from_byte(cls, value: int) -> RunMode:
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class BatterySaver(IntEnum):
    """Low-voltage cutoff profile."""

    UNKNOWN = -1
    LOW = BAT_SAVER_LOW
    MID = BAT_SAVER_MID
    HIGH = BAT_SAVER_HIGH

    @classmethod
    def from_byte(cls, value: int) -> BatterySaver:
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class TemperatureUnit(IntEnum):
    """Display unit. Any non-zero byte means Fahrenheit."""

    CELSIUS = UNIT_CELSIUS
    FAHRENHEIT = UNIT_FAHRENHEIT

    @classmethod
    def from_byte(cls, value: int) -> TemperatureUnit:
        return cls.CELSIUS if value == UNIT_CELSIUS else cls.FAHRENHEIT


@dataclass(frozen=True)
class StatusReport:
    """Single-zone fridge status decoded from a query response."""

    locked: bool
    powered_on: bool
    run_mode: RunMode
    bat_saver: BatterySaver
    left_target: int
    temp_max: int
    temp_min: int
    left_ret_diff: int
    start_delay: int
    unit: TemperatureUnit
    left_tc_hot: int
    left_tc_mid: int
    left_tc_cold: int
    left_tc_halt: int
    left_current: int
    bat_percent: int
    bat_vol_int: int
    bat_vol_dec: int

    @property
    def battery_voltage(self) -> float:
        """Battery voltage, with ``bat_vol_dec`` read as tenths of a volt."""
        return self.bat_vol_int + self.bat_vol_dec / 10.0

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Encode / decode
# ---------------------------------------------------------------------------

def build_bind() -> bytes:
    """Return the Bind command sent right after connecting."""
    return CMD_BIND


def build_query() -> bytes:
    """Return the periodic status Query command."""
    return CMD_QUERY


def decode(data: bytes | bytearray) -> StatusReport:
    """Validate a query-response frame and decode its payload.

    Raises:
        TooShortError: fewer than 24 bytes.
        BadSyncError: the frame does not start with FE FE.
        UnsupportedCommandError: command byte is not 0x01.
        ChecksumMismatchError: trailing checksum does not match.
    """
    length = len(data)
    if length < MIN_STATUS_FRAME_LEN:
        raise TooShortError(length, MIN_STATUS_FRAME_LEN)
    if bytes(data[0:2]) != FRAME_SYNC:
        raise BadSyncError(bytes(data[0:2]))

    # data[2] is the declared length; it is carried but not checked
    command = data[3]
    if command != RESPONSE_QUERY:
        raise UnsupportedCommandError(command)

    body_end = length - FRAME_CHECKSUM_LEN
    received = (data[body_end] << 8) | data[body_end + 1]
    expected = checksum(data[:body_end])
    if expected != received:
        raise ChecksumMismatchError(expected, received)

    payload = data[FRAME_HEADER_LEN:FRAME_HEADER_LEN + SINGLE_ZONE_PAYLOAD_LEN]

    return StatusReport(
        locked=payload[OFFSET_LOCKED] == 1,
        powered_on=payload[OFFSET_POWERED_ON] == 1,
        run_mode=RunMode.from_byte(payload[OFFSET_RUN_MODE]),
        bat_saver=BatterySaver.from_byte(payload[OFFSET_BAT_SAVER]),
        left_target=_s8(payload[OFFSET_LEFT_TARGET]),
        temp_max=_s8(payload[OFFSET_TEMP_MAX]),
        temp_min=_s8(payload[OFFSET_TEMP_MIN]),
        left_ret_diff=payload[OFFSET_LEFT_RET_DIFF],
        start_delay=payload[OFFSET_START_DELAY],
        unit=TemperatureUnit.from_byte(payload[OFFSET_UNIT]),
        left_tc_hot=_s8(payload[OFFSET_LEFT_TC_HOT]),
        left_tc_mid=_s8(payload[OFFSET_LEFT_TC_MID]),
        left_tc_cold=_s8(payload[OFFSET_LEFT_TC_COLD]),
        left_tc_halt=_s8(payload[OFFSET_LEFT_TC_HALT]),
        left_current=_s8(payload[OFFSET_LEFT_CURRENT]),
        bat_percent=payload[OFFSET_BAT_PERCENT],
        bat_vol_int=payload[OFFSET_BAT_VOL_INT],
        bat_vol_dec=payload[OFFSET_BAT_VOL_DEC],
    )


def try_decode(
    data: bytes | bytearray,
) -> tuple[StatusReport | None, DecodeError | None]:
    """Decode ``data``, returning the failure as a value instead of raising."""
    try:
        return decode(data), None
    except DecodeError as err:
        return None, err


# ---------------------------------------------------------------------------
# Protocol handler
# ---------------------------------------------------------------------------

class FridgeProtocol(ABC):
    """Abstract base class for fridge BLE protocol handlers."""

    protocol_mode: int = 0
    name: str = "Unknown"

    @abstractmethod
    def decode(self, data: bytes | bytearray) -> StatusReport:
        """Decode a status frame or raise a DecodeError subclass."""

    @abstractmethod
    def build_command(self, command: int) -> bytes:
        """Build an outbound command frame."""

    def build_bind(self) -> bytes:
        return self.build_command(REQUEST_BIND)

    def build_query(self) -> bytes:
        return self.build_command(REQUEST_QUERY)

    def parse(self, data: bytes | bytearray) -> dict[str, Any] | None:
        """Decode ``data`` into a dict.

        Returns:
            dict with decoded values, or None if the frame was rejected.
        """
        try:
            report = self.decode(data)
        except DecodeError:
            return None
        return report.as_dict()


class ProtocolFEFE(FridgeProtocol):
    """FEFE single-zone protocol (mode=1, 24+ byte status frames)."""

    protocol_mode = 1
    name = "FEFE"

    def decode(self, data: bytes | bytearray) -> StatusReport:
        return decode(data)

    def build_command(self, command: int) -> bytes:
        """Build a Bind or Query frame.

        Set commands are not implemented; any other request code raises
        ValueError.
        """
        if command == REQUEST_BIND:
            return build_bind()
        if command == REQUEST_QUERY:
            return build_query()
        raise ValueError(f"Unsupported request code: {command}")
