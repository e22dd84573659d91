"""Shared test fixtures for FEFE fridge tests.

Frames are built by hand here rather than through the library so the
tests do not depend on the code under test for their input data.
"""
from __future__ import annotations

import pytest

# Single-zone payload, offsets 0..17
SAMPLE_PAYLOAD = bytes([
    0x01,  # locked
    0x01,  # powered on
    0x01,  # run mode: Eco
    0x02,  # battery saver: High
    0xFC,  # left target: -4
    0x14,  # temp max: 20
    0xEC,  # temp min: -20
    0x02,  # return differential
    0x03,  # start delay
    0x00,  # unit: Celsius
    0xFF,  # TC hot: -1
    0x00,  # TC mid: 0
    0x01,  # TC cold: 1
    0xFE,  # TC halt: -2
    0xFB,  # left current: -5
    0x55,  # battery percent: 85
    0x0C,  # battery volts, integer part: 12
    0x08,  # battery volts, tenths: 8
])


def build_frame(
    payload: bytes = SAMPLE_PAYLOAD,
    command: int = 0x01,
    declared_length: int = 0x14,
    sync: bytes = b"\xfe\xfe",
) -> bytes:
    """Build an inbound frame with a correct big-endian checksum."""
    body = bytearray(sync) + bytearray([declared_length, command]) + bytearray(payload)
    total = sum(body) & 0xFFFF
    return bytes(body + bytearray([total >> 8, total & 0xFF]))


@pytest.fixture
def make_frame():
    """Factory for checksummed inbound frames."""
    return build_frame


@pytest.fixture
def sample_payload() -> bytes:
    return SAMPLE_PAYLOAD


@pytest.fixture
def status_frame() -> bytes:
    """A valid 24-byte single-zone status frame."""
    return build_frame()
