"""alpicool-fridge-ble: Protocol driver for FEFE compressor fridges over BLE.

Covers Alpicool and rebadged single-zone fridges that advertise as
``WT-0001`` and speak the FEFE framing protocol:
  - frame codec (16-bit additive checksum, Bind/Query commands,
    single-zone status decoding)
  - session state machine (discover, connect, bind, poll, receive)
  - status presenter (human-readable labels)
  - bleak-based transport and asyncio driver loop
"""
from .exceptions import (
    BadSyncError,
    ChecksumMismatchError,
    ConfigError,
    DecodeError,
    DecodeErrorKind,
    EndpointNotFoundError,
    FridgeBleError,
    TooShortError,
    TransportConnectFailedError,
    TransportError,
    UnsupportedCommandError,
)
from .presenter import StatusView, format_temperature, format_voltage, present, render_lines
from .protocol import (
    BatterySaver,
    FridgeProtocol,
    ProtocolFEFE,
    RunMode,
    StatusReport,
    TemperatureUnit,
    _s8,
    build_bind,
    build_query,
    checksum,
    decode,
    try_decode,
)
from .session import (
    ConnectFailed,
    Connected,
    DeviceFound,
    Disconnected,
    EndpointsResolved,
    FridgeSession,
    SessionPhase,
    TransportEvent,
)

__all__ = [
    "BadSyncError",
    "BatterySaver",
    "ChecksumMismatchError",
    "ConfigError",
    "ConnectFailed",
    "Connected",
    "DecodeError",
    "DecodeErrorKind",
    "DeviceFound",
    "Disconnected",
    "EndpointNotFoundError",
    "EndpointsResolved",
    "FridgeBleError",
    "FridgeProtocol",
    "FridgeSession",
    "ProtocolFEFE",
    "RunMode",
    "SessionPhase",
    "StatusReport",
    "StatusView",
    "TemperatureUnit",
    "TooShortError",
    "TransportConnectFailedError",
    "TransportError",
    "TransportEvent",
    "UnsupportedCommandError",
    "_s8",
    "build_bind",
    "build_query",
    "checksum",
    "decode",
    "format_temperature",
    "format_voltage",
    "present",
    "render_lines",
    "try_decode",
]
