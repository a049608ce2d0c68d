"""Motion block (MESH-100MD), a pyroelectric motion sensor."""

from __future__ import annotations

from ..events import DecodedEvent, EventKind
from ..models.enums import BlockType
from ..protocol.constants import CATEGORY_BLOCK
from ..protocol.frames import DispatchKey
from .variant import VariantDecoder

MOTION_KEY = DispatchKey(CATEGORY_BLOCK, 0x00, 6)


class MotionDecoder(VariantDecoder):
    """Decodes motion notifications.

    The three payload bytes are passed through unchanged; use
    ``event.args`` to read them positionally.
    """

    block_type = BlockType.MOTION

    def _decoders(self):
        return {MOTION_KEY: self._decode_motion}

    @staticmethod
    def _decode_motion(frame: bytes) -> DecodedEvent:
        return DecodedEvent(
            EventKind.MOTION,
            {"request_id": frame[2], "state": frame[3], "mode": frame[4]},
        )
