"""Protocol constants for FEFE compressor fridge BLE communication.

These constants are used by the frame codec, the session state machine
and the BLE transport. They have no dependency on the transport library.
"""
from typing import Final

# Advertised name of the fridge's BLE module
TARGET_DEVICE_NAME: Final = "WT-0001"

# 16-bit GATT identifiers
SERVICE_ID: Final = 0x1234
WRITE_CHAR_ID: Final = 0x1235
NOTIFY_CHAR_ID: Final = 0x1236

# Same identifiers expanded onto the Bluetooth base UUID
SERVICE_UUID: Final = "00001234-0000-1000-8000-00805f9b34fb"
WRITE_CHAR_UUID: Final = "00001235-0000-1000-8000-00805f9b34fb"
NOTIFY_CHAR_UUID: Final = "00001236-0000-1000-8000-00805f9b34fb"

# Frame layout
FRAME_SYNC: Final = b"\xfe\xfe"
FRAME_HEADER_LEN: Final = 4        # sync(2) + declared length(1) + command(1)
FRAME_CHECKSUM_LEN: Final = 2
SINGLE_ZONE_PAYLOAD_LEN: Final = 18
MIN_STATUS_FRAME_LEN: Final = (
    FRAME_HEADER_LEN + SINGLE_ZONE_PAYLOAD_LEN + FRAME_CHECKSUM_LEN
)  # 24

# Request codes accepted by build_command
REQUEST_BIND: Final = 0x00
REQUEST_QUERY: Final = 0x01

# Inbound command codes
RESPONSE_QUERY: Final = 0x01

# Outbound commands (literal templates, no checksum appended)
CMD_BIND: Final = bytes.fromhex("fefe03010200ff")
CMD_QUERY: Final = bytes.fromhex("fefe03010200")

# Timing
QUERY_INTERVAL_MS: Final = 60000
SCAN_TIMEOUT: Final = 5.0     # seconds
TICK_INTERVAL: Final = 0.1    # seconds

# Payload offsets (relative to the first payload byte)
OFFSET_LOCKED: Final = 0
OFFSET_POWERED_ON: Final = 1
OFFSET_RUN_MODE: Final = 2
OFFSET_BAT_SAVER: Final = 3
OFFSET_LEFT_TARGET: Final = 4
OFFSET_TEMP_MAX: Final = 5
OFFSET_TEMP_MIN: Final = 6
OFFSET_LEFT_RET_DIFF: Final = 7
OFFSET_START_DELAY: Final = 8
OFFSET_UNIT: Final = 9
OFFSET_LEFT_TC_HOT: Final = 10
OFFSET_LEFT_TC_MID: Final = 11
OFFSET_LEFT_TC_COLD: Final = 12
OFFSET_LEFT_TC_HALT: Final = 13
OFFSET_LEFT_CURRENT: Final = 14
OFFSET_BAT_PERCENT: Final = 15
OFFSET_BAT_VOL_INT: Final = 16
OFFSET_BAT_VOL_DEC: Final = 17

# Run modes
RUN_MODE_MAX: Final = 0
RUN_MODE_ECO: Final = 1

RUN_MODE_NAMES: Final = {
    RUN_MODE_MAX: "Max",
    RUN_MODE_ECO: "Eco",
}

# Battery saver (low-voltage cutoff) levels
BAT_SAVER_LOW: Final = 0
BAT_SAVER_MID: Final = 1
BAT_SAVER_HIGH: Final = 2

BAT_SAVER_NAMES: Final = {
    BAT_SAVER_LOW: "Low",
    BAT_SAVER_MID: "Mid",
    BAT_SAVER_HIGH: "High",
}

UNKNOWN_NAME: Final = "Unknown"

# Temperature units
UNIT_CELSIUS: Final = 0
UNIT_FAHRENHEIT: Final = 1

UNIT_SUFFIXES: Final = {
    UNIT_CELSIUS: "°C",
    UNIT_FAHRENHEIT: "°F",
}

# Configuration keys
CONF_DEVICE_NAME: Final = "device_name"
CONF_ADDRESS: Final = "address"
CONF_SERVICE_UUID: Final = "service_uuid"
CONF_WRITE_UUID: Final = "write_uuid"
CONF_NOTIFY_UUID: Final = "notify_uuid"
CONF_QUERY_INTERVAL: Final = "query_interval"
CONF_SCAN_TIMEOUT: Final = "scan_timeout"
CONF_TICK_INTERVAL: Final = "tick_interval"
