"""Move block (MESH-100AC), a three-axis accelerometer."""

from __future__ import annotations

from ..events import DecodedEvent, EventKind
from ..models.enums import BlockType
from ..protocol.constants import CATEGORY_BLOCK
from ..protocol.frames import DispatchKey
from ..protocol.values import scaled_accel
from .variant import VariantDecoder

MOVE_FRAME_LENGTH = 17

TAP_KEY = DispatchKey(CATEGORY_BLOCK, 0x00, MOVE_FRAME_LENGTH)
SHAKE_KEY = DispatchKey(CATEGORY_BLOCK, 0x01, MOVE_FRAME_LENGTH)
FLIP_KEY = DispatchKey(CATEGORY_BLOCK, 0x02, MOVE_FRAME_LENGTH)
ORIENTATION_KEY = DispatchKey(CATEGORY_BLOCK, 0x03, MOVE_FRAME_LENGTH)


def decode_acceleration(frame: bytes) -> dict[str, float]:
    """Decode the x, y, z acceleration (in g) at bytes 2-7."""
    return {
        "x": scaled_accel(frame[2:4]),
        "y": scaled_accel(frame[4:6]),
        "z": scaled_accel(frame[6:8]),
    }


class MoveDecoder(VariantDecoder):
    """Decodes tap, shake, flip and orientation notifications."""

    block_type = BlockType.MOVE

    def _decoders(self):
        return {
            TAP_KEY: self._motion_event(EventKind.TAP),
            SHAKE_KEY: self._motion_event(EventKind.SHAKE),
            FLIP_KEY: self._motion_event(EventKind.FLIP),
            ORIENTATION_KEY: self._decode_orientation,
        }

    @staticmethod
    def _motion_event(kind: EventKind):
        def decode(frame: bytes) -> DecodedEvent:
            return DecodedEvent(kind, decode_acceleration(frame))
        return decode

    @staticmethod
    def _decode_orientation(frame: bytes) -> DecodedEvent:
        # Orientation code shares byte 2 with the low byte of x
        fields = {"orientation": frame[2]}
        fields.update(decode_acceleration(frame))
        return DecodedEvent(EventKind.ORIENTATION, fields)
