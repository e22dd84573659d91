"""Session state machine for a FEFE fridge connection.

The session tracks the connection phase, decides when Bind and Query
frames are due, and owns the single-slot buffer holding the most recent
notification. It never talks to the BLE stack directly: transport
activity arrives as events and outbound frames leave through the
``send_frame`` callable supplied by the owner.
"""
from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Union

from .const import QUERY_INTERVAL_MS
from .exceptions import TransportError
from .protocol import FridgeProtocol, ProtocolFEFE

_LOGGER = logging.getLogger(__name__)


def _monotonic_ms() -> int:
    return time.monotonic_ns() // 1_000_000


class SessionPhase(Enum):
    """Connection phase of a fridge session."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    BOUND = "bound"
    POLLING = "polling"


# ---------------------------------------------------------------------------
# Transport events
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DeviceFound:
    """Scanning found the target fridge."""

    address: str
    name: str | None = None


@dataclass(frozen=True)
class Connected:
    """The BLE link is up; endpoints are not resolved yet."""


@dataclass(frozen=True)
class EndpointsResolved:
    """Write and notify characteristics were found."""

    write_endpoint: Any = None
    notify_endpoint: Any = None


@dataclass(frozen=True)
class ConnectFailed:
    """Connecting or resolving endpoints failed."""

    error: TransportError | None = None


@dataclass(frozen=True)
class Disconnected:
    """The BLE link dropped."""


TransportEvent = Union[
    DeviceFound, Connected, EndpointsResolved, ConnectFailed, Disconnected
]

_CONNECTED_PHASES = (SessionPhase.CONNECTING, SessionPhase.BOUND, SessionPhase.POLLING)


class FridgeSession:
    """Connection lifecycle and command timing for one fridge."""

    def __init__(
        self,
        send_frame: Callable[[bytes], None],
        *,
        query_interval_ms: int = QUERY_INTERVAL_MS,
        clock: Callable[[], int] = _monotonic_ms,
        protocol: FridgeProtocol | None = None,
    ) -> None:
        self._send_frame = send_frame
        self._query_interval_ms = query_interval_ms
        self._clock = clock
        self._protocol = protocol or ProtocolFEFE()

        self._phase = SessionPhase.DISCONNECTED
        self._last_query_ms: int | None = None
        self._address: str | None = None
        self._write_endpoint: Any = None
        self._notify_endpoint: Any = None

        # Single-slot mailbox shared with the notification callback
        self._pending_lock = threading.Lock()
        self._pending: bytes | None = None

    # -- properties ---------------------------------------------------------

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def last_query_ms(self) -> int | None:
        return self._last_query_ms

    @property
    def query_interval_ms(self) -> int:
        return self._query_interval_ms

    @property
    def address(self) -> str | None:
        """Address of the device found by the last scan."""
        return self._address

    @property
    def write_endpoint(self) -> Any:
        return self._write_endpoint

    @property
    def notify_endpoint(self) -> Any:
        return self._notify_endpoint

    @property
    def has_pending(self) -> bool:
        with self._pending_lock:
            return self._pending is not None

    # -- transition function ------------------------------------------------

    def handle_event(self, event: TransportEvent) -> SessionPhase:
        """Apply a transport event and return the resulting phase.

        Events that make no sense in the current phase are logged and
        ignored; this method never raises.
        """
        if isinstance(event, DeviceFound):
            self._handle_device_found(event)
        elif isinstance(event, Connected):
            self._handle_connected()
        elif isinstance(event, EndpointsResolved):
            self._handle_endpoints_resolved(event)
        elif isinstance(event, ConnectFailed):
            self._handle_connect_failed(event)
        elif isinstance(event, Disconnected):
            self._handle_disconnected()
        else:
            _LOGGER.warning("Ignoring unknown transport event: %r", event)
        return self._phase

    def _handle_device_found(self, event: DeviceFound) -> None:
        if self._phase is not SessionPhase.DISCONNECTED:
            _LOGGER.debug(
                "Ignoring device %s found while %s", event.address, self._phase.value
            )
            return
        self._address = event.address
        self._set_phase(SessionPhase.CONNECTING)

    def _handle_connected(self) -> None:
        if self._phase is not SessionPhase.CONNECTING:
            _LOGGER.debug("Ignoring connect event while %s", self._phase.value)
            return
        _LOGGER.debug("Link to %s is up", self._address)

    def _handle_endpoints_resolved(self, event: EndpointsResolved) -> None:
        if self._phase not in (SessionPhase.DISCONNECTED, SessionPhase.CONNECTING):
            _LOGGER.debug("Ignoring endpoint resolution while %s", self._phase.value)
            return
        self._write_endpoint = event.write_endpoint
        self._notify_endpoint = event.notify_endpoint
        self._set_phase(SessionPhase.BOUND)

        self._send("bind", self._protocol.build_bind())
        # No query issued on this link yet, so the next tick sends one
        self._last_query_ms = None

    def _handle_connect_failed(self, event: ConnectFailed) -> None:
        if self._phase is not SessionPhase.CONNECTING:
            _LOGGER.debug("Ignoring connect failure while %s", self._phase.value)
            return
        _LOGGER.debug("Connect to %s failed: %s", self._address, event.error)
        self._reset()

    def _handle_disconnected(self) -> None:
        if self._phase not in _CONNECTED_PHASES:
            return
        _LOGGER.debug("Disconnected from %s", self._address)
        self._reset()

    def _reset(self) -> None:
        self._write_endpoint = None
        self._notify_endpoint = None
        self._set_phase(SessionPhase.DISCONNECTED)

    def _set_phase(self, phase: SessionPhase) -> None:
        if phase is not self._phase:
            _LOGGER.debug("Session phase %s -> %s", self._phase.value, phase.value)
            self._phase = phase

    # -- capability wrappers ------------------------------------------------

    def on_device_found(self, address: str, name: str | None = None) -> SessionPhase:
        return self.handle_event(DeviceFound(address, name))

    def on_connected(self) -> SessionPhase:
        return self.handle_event(Connected())

    def on_endpoints_resolved(
        self, write_endpoint: Any = None, notify_endpoint: Any = None
    ) -> SessionPhase:
        return self.handle_event(EndpointsResolved(write_endpoint, notify_endpoint))

    def on_connect_failed(self, error: TransportError | None = None) -> SessionPhase:
        return self.handle_event(ConnectFailed(error))

    def on_disconnected(self) -> SessionPhase:
        return self.handle_event(Disconnected())

    # -- timing -------------------------------------------------------------

    def tick(self, now_ms: int | None = None) -> bool:
        """Issue a Query if one is due. Returns True when a Query was sent."""
        if self._phase not in (SessionPhase.BOUND, SessionPhase.POLLING):
            return False
        now = self._clock() if now_ms is None else now_ms
        if (
            self._last_query_ms is not None
            and now - self._last_query_ms < self._query_interval_ms
        ):
            return False

        self._last_query_ms = now
        self._send("query", self._protocol.build_query())
        self._set_phase(SessionPhase.POLLING)
        return True

    def _send(self, label: str, frame: bytes) -> None:
        _LOGGER.debug("Sending %s: %s", label, frame.hex(" ").upper())
        try:
            self._send_frame(frame)
        except Exception:
            _LOGGER.warning("Failed to hand %s frame to transport", label, exc_info=True)

    # -- notification mailbox -----------------------------------------------

    def on_notification(self, data: bytes | bytearray) -> None:
        """Store the latest notification, replacing any undrained one."""
        with self._pending_lock:
            self._pending = bytes(data)

    def drain_pending(self) -> bytes | None:
        """Take and clear the pending notification, if any."""
        with self._pending_lock:
            data, self._pending = self._pending, None
        return data
