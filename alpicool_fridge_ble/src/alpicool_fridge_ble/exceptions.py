"""Exceptions raised by the fridge BLE library."""
from __future__ import annotations

from enum import Enum


class FridgeBleError(Exception):
    """Base class for all library errors."""


class DecodeErrorKind(Enum):
    """Reason a frame was rejected by the decoder."""

    TOO_SHORT = "too_short"
    BAD_SYNC = "bad_sync"
    UNSUPPORTED_COMMAND = "unsupported_command"
    CHECKSUM_MISMATCH = "checksum_mismatch"


class DecodeError(FridgeBleError):
    """A frame could not be decoded into a status report."""

    kind: DecodeErrorKind


class TooShortError(DecodeError):
    """Frame is shorter than a single-zone status frame."""

    kind = DecodeErrorKind.TOO_SHORT

    def __init__(self, length: int, minimum: int) -> None:
        super().__init__(f"Frame too short: {length} bytes, need at least {minimum}")
        self.length = length
        self.minimum = minimum


class BadSyncError(DecodeError):
    """Frame does not start with the FE FE sync bytes."""

    kind = DecodeErrorKind.BAD_SYNC

    def __init__(self, sync: bytes) -> None:
        super().__init__(f"Bad sync bytes: {sync.hex(' ').upper()}")
        self.sync = sync


class UnsupportedCommandError(DecodeError):
    """Frame carries a command code this decoder does not handle."""

    kind = DecodeErrorKind.UNSUPPORTED_COMMAND

    def __init__(self, command: int) -> None:
        super().__init__(f"Unsupported command code: 0x{command:02X}")
        self.command = command


class ChecksumMismatchError(DecodeError):
    """Trailing checksum does not match the frame contents."""

    kind = DecodeErrorKind.CHECKSUM_MISMATCH

    def __init__(self, expected: int, received: int) -> None:
        super().__init__(
            f"Checksum mismatch: computed 0x{expected:04X}, frame has 0x{received:04X}"
        )
        self.expected = expected
        self.received = received


class TransportError(FridgeBleError):
    """Error raised at the BLE transport boundary."""


class TransportConnectFailedError(TransportError):
    """Connecting to the fridge failed."""


class EndpointNotFoundError(TransportError):
    """The service or one of its characteristics is missing."""


class ConfigError(FridgeBleError):
    """Driver configuration is invalid."""
