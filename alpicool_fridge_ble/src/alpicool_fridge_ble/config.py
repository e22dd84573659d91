"""Driver configuration schema."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import voluptuous as vol
from bleak.uuids import normalize_uuid_str

from .const import (
    CONF_ADDRESS,
    CONF_DEVICE_NAME,
    CONF_NOTIFY_UUID,
    CONF_QUERY_INTERVAL,
    CONF_SCAN_TIMEOUT,
    CONF_SERVICE_UUID,
    CONF_TICK_INTERVAL,
    CONF_WRITE_UUID,
    NOTIFY_CHAR_UUID,
    QUERY_INTERVAL_MS,
    SCAN_TIMEOUT,
    SERVICE_UUID,
    TARGET_DEVICE_NAME,
    TICK_INTERVAL,
    WRITE_CHAR_UUID,
)
from .exceptions import ConfigError


def uuid(value: Any) -> str:
    """Validate a GATT identifier and expand it to a 128-bit UUID string.

    Accepts a 16-bit int (0x1234), a 4 or 8 hex digit string, or a full
    UUID string.
    """
    if isinstance(value, bool):
        raise vol.Invalid(f"Invalid UUID: {value!r}")
    if isinstance(value, int):
        if not 0 <= value <= 0xFFFF:
            raise vol.Invalid(f"16-bit UUID out of range: {value}")
        value = f"{value:04x}"
    if not isinstance(value, str):
        raise vol.Invalid(f"Invalid UUID: {value!r}")
    try:
        return normalize_uuid_str(value.strip())
    except ValueError as err:
        raise vol.Invalid(f"Invalid UUID: {value!r}") from err


CONFIG_SCHEMA = vol.Schema({
    vol.Optional(CONF_DEVICE_NAME, default=TARGET_DEVICE_NAME): vol.All(
        str, vol.Length(min=1)
    ),
    vol.Optional(CONF_ADDRESS): vol.All(str, vol.Upper),
    vol.Optional(CONF_SERVICE_UUID, default=SERVICE_UUID): uuid,
    vol.Optional(CONF_WRITE_UUID, default=WRITE_CHAR_UUID): uuid,
    vol.Optional(CONF_NOTIFY_UUID, default=NOTIFY_CHAR_UUID): uuid,
    vol.Optional(CONF_QUERY_INTERVAL, default=QUERY_INTERVAL_MS): vol.All(
        vol.Coerce(int), vol.Range(min=1)
    ),
    vol.Optional(CONF_SCAN_TIMEOUT, default=SCAN_TIMEOUT): vol.All(
        vol.Coerce(float), vol.Range(min=0, min_included=False)
    ),
    vol.Optional(CONF_TICK_INTERVAL, default=TICK_INTERVAL): vol.All(
        vol.Coerce(float), vol.Range(min=0, min_included=False)
    ),
})


def validate_config(config: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Apply defaults and validate driver options.

    Raises:
        ConfigError: if any option is invalid.
    """
    try:
        return CONFIG_SCHEMA(dict(config or {}))
    except vol.Invalid as err:
        raise ConfigError(str(err)) from err
