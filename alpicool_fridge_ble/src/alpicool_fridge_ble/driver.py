"""Asyncio driver loop tying the BLE transport to the fridge session.

One tick scans or connects as needed, issues due commands, then decodes
the most recent notification. No error stops the loop: decode failures
are logged and dropped, and transport failures send the session back to
scanning on the next tick.
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any, Callable

from bleak.backends.device import BLEDevice

from .config import validate_config
from .const import (
    CONF_ADDRESS,
    CONF_DEVICE_NAME,
    CONF_NOTIFY_UUID,
    CONF_QUERY_INTERVAL,
    CONF_SCAN_TIMEOUT,
    CONF_SERVICE_UUID,
    CONF_TICK_INTERVAL,
    CONF_WRITE_UUID,
)
from .exceptions import DecodeError, TransportError
from .presenter import present, render_lines
from .protocol import StatusReport, decode
from .session import FridgeSession, SessionPhase
from .transport import BleakFridgeTransport

_LOGGER = logging.getLogger(__name__)


def _log_status(report: StatusReport) -> None:
    _LOGGER.info("Single-zone fridge status:")
    for line in render_lines(present(report)):
        _LOGGER.info(line)


class FridgeDriver:
    """Poll a single FEFE fridge over BLE."""

    def __init__(
        self,
        config: Mapping[str, Any] | None = None,
        *,
        transport: BleakFridgeTransport | None = None,
        status_callback: Callable[[StatusReport], None] | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self._config = validate_config(config)
        self._transport = transport or BleakFridgeTransport(
            self._config[CONF_DEVICE_NAME],
            address=self._config.get(CONF_ADDRESS),
            service_uuid=self._config[CONF_SERVICE_UUID],
            write_uuid=self._config[CONF_WRITE_UUID],
            notify_uuid=self._config[CONF_NOTIFY_UUID],
        )
        self._status_callback = status_callback or _log_status

        self._outbox: list[bytes] = []
        session_kwargs: dict[str, Any] = {
            "query_interval_ms": self._config[CONF_QUERY_INTERVAL],
        }
        if clock is not None:
            session_kwargs["clock"] = clock
        self.session = FridgeSession(self._outbox.append, **session_kwargs)

        self._device: BLEDevice | None = None
        self.last_status: StatusReport | None = None
        self.decode_failures = 0

    @property
    def config(self) -> dict[str, Any]:
        return self._config

    @property
    def transport(self) -> BleakFridgeTransport:
        return self._transport

    async def async_tick(self) -> StatusReport | None:
        """Run one pass of the driver loop.

        Returns the status decoded during this tick, if any.
        """
        if self.session.phase is SessionPhase.DISCONNECTED:
            await self._async_scan()

        if self.session.phase is SessionPhase.CONNECTING:
            await self._async_connect()

        self.session.tick()
        await self._async_flush()

        return self.process_pending()

    async def _async_scan(self) -> None:
        device = await self._transport.async_find_device(self._config[CONF_SCAN_TIMEOUT])
        if device is None:
            return
        self._device = device
        self.session.on_device_found(device.address, device.name)

    async def _async_connect(self) -> None:
        if self._device is None:
            _LOGGER.warning("No scanned device to connect to, rescanning")
            self.session.on_connect_failed()
            return
        try:
            await self._transport.async_connect(
                self._device,
                self.session.on_notification,
                self.session.on_disconnected,
            )
            self.session.on_connected()
            write_char, notify_char = await self._transport.async_resolve_endpoints()
        except TransportError as err:
            _LOGGER.warning("Connection to %s failed: %s", self._device.address, err)
            self.session.on_connect_failed(err)
            return
        _LOGGER.info("Connected to fridge %s", self._device.address)
        self.session.on_endpoints_resolved(write_char, notify_char)

    async def _async_flush(self) -> None:
        while self._outbox:
            frame = self._outbox.pop(0)
            try:
                await self._transport.async_write(frame)
            except TransportError as err:
                _LOGGER.warning("Failed to send %s: %s", frame.hex(" ").upper(), err)
                self._outbox.clear()
                try:
                    await self._transport.async_disconnect()
                finally:
                    self.session.on_disconnected()
                return

    def process_pending(self) -> StatusReport | None:
        """Decode the pending notification, if one arrived since the last call."""
        data = self.session.drain_pending()
        if data is None:
            return None
        try:
            report = decode(data)
        except DecodeError as err:
            self.decode_failures += 1
            _LOGGER.warning(
                "Error decoding or not a query response (%s). Raw bytes: %s",
                err,
                data.hex(" ").upper(),
            )
            return None
        self.last_status = report
        self._status_callback(report)
        return report

    async def async_run(self, stop_event: asyncio.Event | None = None) -> None:
        """Tick until ``stop_event`` is set, then disconnect."""
        stop_event = stop_event or asyncio.Event()
        tick_interval = self._config[CONF_TICK_INTERVAL]
        try:
            while not stop_event.is_set():
                try:
                    await self.async_tick()
                except Exception:
                    _LOGGER.exception("Unexpected error in driver tick")
                try:
                    await asyncio.wait_for(stop_event.wait(), timeout=tick_interval)
                except asyncio.TimeoutError:
                    pass
        finally:
            await self.async_stop()

    async def async_stop(self) -> None:
        """Drop the BLE link."""
        try:
            await self._transport.async_disconnect()
        finally:
            self.session.on_disconnected()
