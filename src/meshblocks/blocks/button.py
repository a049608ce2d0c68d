"""Button block (MESH-100BU)."""

from __future__ import annotations

from ..events import DecodedEvent, EventKind
from ..models.enums import BlockType
from ..protocol.constants import CATEGORY_BLOCK
from ..protocol.frames import DispatchKey
from .variant import VariantDecoder

BUTTON_KEY = DispatchKey(CATEGORY_BLOCK, 0x00, 4)


class ButtonDecoder(VariantDecoder):
    """Decodes button presses.

    ``status`` is the press kind reported by the block
    (1 = single press, 2 = long press, 3 = double press).
    """

    block_type = BlockType.BUTTON

    def _decoders(self):
        return {BUTTON_KEY: self._decode_button}

    @staticmethod
    def _decode_button(frame: bytes) -> DecodedEvent:
        return DecodedEvent(EventKind.BUTTON, {"status": frame[2]})
