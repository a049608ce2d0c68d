"""Brightness block (MESH-100PA), ambient light and proximity."""

from __future__ import annotations

from ..events import DecodedEvent, EventKind
from ..models.enums import BlockType
from ..protocol.constants import CATEGORY_BLOCK
from ..protocol.frames import DispatchKey
from ..protocol.values import uint_le
from .variant import VariantDecoder

BRIGHTNESS_KEY = DispatchKey(CATEGORY_BLOCK, 0x00, 13)

PROXIMITY_SCALE = 10


class BrightnessDecoder(VariantDecoder):
    """Decodes brightness (lux) and proximity readings.

    Format:
        [0x01][0x00][request_id][mode][brightness:2 LE][proximity:2 LE][reserved:4][checksum]
    """

    block_type = BlockType.BRIGHTNESS

    def _decoders(self):
        return {BRIGHTNESS_KEY: self._decode_brightness}

    @staticmethod
    def _decode_brightness(frame: bytes) -> DecodedEvent:
        return DecodedEvent(
            EventKind.BRIGHTNESS,
            {
                "request_id": frame[2],
                "mode": frame[3],
                "brightness": uint_le(frame[4:6]),
                "proximity": uint_le(frame[6:8]) * PROXIMITY_SCALE,
            },
        )
