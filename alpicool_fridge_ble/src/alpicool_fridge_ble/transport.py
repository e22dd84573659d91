"""BLE transport for FEFE fridges built on bleak."""
from __future__ import annotations

import logging
from typing import Callable

from bleak import BleakScanner
from bleak.backends.characteristic import BleakGATTCharacteristic
from bleak.backends.device import BLEDevice
from bleak.backends.scanner import AdvertisementData
from bleak.exc import BleakError
from bleak_retry_connector import BLEAK_RETRY_EXCEPTIONS as BLEAK_EXCEPTIONS
from bleak_retry_connector import BleakClientWithServiceCache, establish_connection

from .const import (
    NOTIFY_CHAR_UUID,
    SCAN_TIMEOUT,
    SERVICE_UUID,
    TARGET_DEVICE_NAME,
    WRITE_CHAR_UUID,
)
from .exceptions import EndpointNotFoundError, TransportConnectFailedError, TransportError

_LOGGER = logging.getLogger(__name__)


class BleakFridgeTransport:
    """Scan for, connect to and exchange frames with one fridge."""

    def __init__(
        self,
        device_name: str = TARGET_DEVICE_NAME,
        *,
        address: str | None = None,
        service_uuid: str = SERVICE_UUID,
        write_uuid: str = WRITE_CHAR_UUID,
        notify_uuid: str = NOTIFY_CHAR_UUID,
    ) -> None:
        self._device_name = device_name
        self._address = address.upper() if address else None
        self._service_uuid = service_uuid
        self._write_uuid = write_uuid
        self._notify_uuid = notify_uuid

        self._device: BLEDevice | None = None
        self._client: BleakClientWithServiceCache | None = None
        self._write_char: BleakGATTCharacteristic | None = None
        self._notify_char: BleakGATTCharacteristic | None = None
        self._notification_callback: Callable[[bytes], None] | None = None
        self._disconnected_callback: Callable[[], None] | None = None
        self._expected_disconnect = False

    @property
    def name(self) -> str:
        if self._device is not None:
            return self._device.name or self._device.address
        return self._device_name

    @property
    def is_connected(self) -> bool:
        return self._client is not None and self._client.is_connected

    @property
    def write_char(self) -> BleakGATTCharacteristic | None:
        return self._write_char

    @property
    def notify_char(self) -> BleakGATTCharacteristic | None:
        return self._notify_char

    def _matches(self, device: BLEDevice, advertisement: AdvertisementData) -> bool:
        if self._address is not None:
            return device.address.upper() == self._address
        return (device.name or advertisement.local_name) == self._device_name

    async def async_find_device(self, timeout: float = SCAN_TIMEOUT) -> BLEDevice | None:
        """Scan for the fridge. Returns None if it was not seen."""
        _LOGGER.debug("Scanning %.1fs for %s", timeout, self._address or self._device_name)
        try:
            device = await BleakScanner.find_device_by_filter(self._matches, timeout=timeout)
        except BleakError as err:
            _LOGGER.warning("BLE scan failed: %s", err)
            return None
        if device is not None:
            _LOGGER.info("Found fridge %s (%s)", device.name, device.address)
        return device

    async def async_connect(
        self,
        device: BLEDevice,
        notification_callback: Callable[[bytes], None],
        disconnected_callback: Callable[[], None] | None = None,
    ) -> None:
        """Connect to ``device``.

        Raises:
            TransportConnectFailedError: if the link could not be established.
        """
        self._device = device
        self._notification_callback = notification_callback
        self._disconnected_callback = disconnected_callback
        self._expected_disconnect = False
        _LOGGER.debug("%s: Connecting", self.name)
        try:
            self._client = await establish_connection(
                BleakClientWithServiceCache,
                device,
                self.name,
                self._disconnected,
                use_services_cache=True,
                ble_device_callback=lambda: device,
            )
        except BLEAK_EXCEPTIONS as err:
            raise TransportConnectFailedError(
                f"Failed to connect to {device.address}: {err}"
            ) from err
        _LOGGER.debug("%s: Connected", self.name)

    async def async_resolve_endpoints(
        self,
    ) -> tuple[BleakGATTCharacteristic, BleakGATTCharacteristic]:
        """Find the write and notify characteristics and subscribe.

        Raises:
            EndpointNotFoundError: the service or a characteristic is missing.
                The link is dropped before raising.
            TransportError: if not connected.
        """
        if self._client is None:
            raise TransportError("Not connected")

        service = self._client.services.get_service(self._service_uuid)
        if service is None:
            raise await self._resolution_failed(f"Service {self._service_uuid} not found")
        write_char = service.get_characteristic(self._write_uuid)
        if write_char is None:
            raise await self._resolution_failed(
                f"Characteristic {self._write_uuid} not found"
            )
        notify_char = service.get_characteristic(self._notify_uuid)
        if notify_char is None:
            raise await self._resolution_failed(
                f"Characteristic {self._notify_uuid} not found"
            )

        self._write_char = write_char
        self._notify_char = notify_char

        if "notify" in notify_char.properties:
            try:
                await self._client.start_notify(notify_char, self._notification_handler)
            except BLEAK_EXCEPTIONS as err:
                await self.async_disconnect()
                raise TransportConnectFailedError(
                    f"Failed to subscribe to {self._notify_uuid}: {err}"
                ) from err
            _LOGGER.debug("%s: Subscribed to notifications", self.name)
        else:
            _LOGGER.warning(
                "%s: Characteristic %s does not support notify", self.name, self._notify_uuid
            )
        return write_char, notify_char

    async def _resolution_failed(self, message: str) -> EndpointNotFoundError:
        """Drop the link and return the error for the caller to raise."""
        _LOGGER.debug("%s: %s", self.name, message)
        await self.async_disconnect()
        return EndpointNotFoundError(message)

    async def async_write(self, frame: bytes) -> None:
        """Write ``frame`` without response.

        Raises:
            TransportError: if not connected or the write failed.
        """
        if self._client is None or self._write_char is None:
            raise TransportError("Write characteristic missing")
        _LOGGER.debug("%s: Writing %s", self.name, frame.hex(" ").upper())
        try:
            await self._client.write_gatt_char(self._write_char, frame, response=False)
        except BLEAK_EXCEPTIONS as err:
            raise TransportError(f"Write failed: {err}") from err

    async def async_disconnect(self) -> None:
        client = self._client
        notify_char = self._notify_char
        self._expected_disconnect = True
        self._client = None
        self._write_char = None
        self._notify_char = None
        if client is None or not client.is_connected:
            return
        _LOGGER.debug("%s: Disconnecting", self.name)
        if notify_char is not None and "notify" in notify_char.properties:
            try:
                await client.stop_notify(notify_char)
            except BLEAK_EXCEPTIONS:
                _LOGGER.debug("%s: stop_notify failed", self.name, exc_info=True)
        try:
            await client.disconnect()
        except BLEAK_EXCEPTIONS:
            _LOGGER.debug("%s: disconnect failed", self.name, exc_info=True)

    def _notification_handler(
        self, _sender: BleakGATTCharacteristic, data: bytearray
    ) -> None:
        _LOGGER.debug("%s: Notification received: %s", self.name, data.hex(" ").upper())
        if self._notification_callback is not None:
            self._notification_callback(bytes(data))

    def _disconnected(self, client: BleakClientWithServiceCache) -> None:
        if self._expected_disconnect:
            _LOGGER.debug("%s: Disconnected from device", self.name)
        else:
            _LOGGER.warning("%s: Device unexpectedly disconnected", self.name)
        self._client = None
        self._write_char = None
        self._notify_char = None
        if self._disconnected_callback is not None:
            self._disconnected_callback()
