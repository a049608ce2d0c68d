from __future__ import annotations

from enum import IntEnum
from typing import Final

from ..protocol.constants import NAME_PREFIX


class BlockType(IntEnum):
    """Block type codes reported in the identification frame."""
    LED = 0x00
    MOVE = 0x01
    BUTTON = 0x02
    GPIO = 0x09
    MOTION = 0x10
    BRIGHTNESS = 0x11
    TEMP_HUMID = 0x12


class LedPattern(IntEnum):
    """Lighting patterns accepted by the LED block."""
    BLINK = 1
    FIREFLY = 2


_BLOCK_TYPE_NAMES: Final[dict[BlockType, str]] = {
    BlockType.LED: "LED",
    BlockType.MOVE: "Move",
    BlockType.BUTTON: "Button",
    BlockType.GPIO: "GPIO",
    BlockType.MOTION: "Motion",
    BlockType.BRIGHTNESS: "Brightness",
    BlockType.TEMP_HUMID: "Temperature & Humidity",
}

# Advertised name suffix per block type, e.g. "MESH-100BU" for buttons
_NAME_SUFFIXES: Final[dict[BlockType, str]] = {
    BlockType.LED: "LE",
    BlockType.MOVE: "AC",
    BlockType.BUTTON: "BU",
    BlockType.GPIO: "GP",
    BlockType.MOTION: "MD",
    BlockType.BRIGHTNESS: "PA",
    BlockType.TEMP_HUMID: "TH",
}


def get_block_type_name(block_type: BlockType | int) -> str | None:
    """Get human-readable block type name, if known."""
    try:
        return _BLOCK_TYPE_NAMES[BlockType(block_type)]
    except (ValueError, KeyError):
        return None


def get_name_prefix(block_type: BlockType | int) -> str:
    """Get the advertised BLE name prefix for a block type.

    Raises:
        ValueError: If the block type is unknown
    """
    return NAME_PREFIX + _NAME_SUFFIXES[BlockType(block_type)]


def block_type_from_name(name: str | None) -> BlockType | None:
    """Guess the block type from an advertised device name."""
    if not name or not name.startswith(NAME_PREFIX):
        return None
    suffix = name[len(NAME_PREFIX):len(NAME_PREFIX) + 2]
    for block_type, known in _NAME_SUFFIXES.items():
        if suffix == known:
            return block_type
    return None
