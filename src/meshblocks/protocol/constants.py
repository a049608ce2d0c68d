"""GATT identifiers and frame header constants for MESH blocks."""

from __future__ import annotations

from typing import Final

# GATT service and characteristics
SERVICE_UUID: Final = "72c90001-57a9-4d40-b746-534e22ec9f9e"
WRITE_WO_RESPONSE_UUID: Final = "72c90002-57a9-4d40-b746-534e22ec9f9e"
NOTIFY_UUID: Final = "72c90003-57a9-4d40-b746-534e22ec9f9e"
WRITE_UUID: Final = "72c90004-57a9-4d40-b746-534e22ec9f9e"
INDICATE_UUID: Final = "72c90005-57a9-4d40-b746-534e22ec9f9e"

NAME_PREFIX: Final = "MESH-100"

# Frame categories (byte 0)
CATEGORY_BASE: Final = 0x00
CATEGORY_BLOCK: Final = 0x01

# Base subcommands (byte 1)
BASE_BATTERY: Final = 0x00
BASE_STATUS_BUTTON: Final = 0x01
BASE_IDENTIFY: Final = 0x02

# Frame lengths including the checksum byte
IDENTIFY_FRAME_LENGTH: Final = 16
BATTERY_FRAME_LENGTH: Final = 4
STATUS_BUTTON_FRAME_LENGTH: Final = 4

BATTERY_LEVEL_SCALE: Final = 10  # reported level unit is 10 percent
