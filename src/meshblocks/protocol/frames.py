"""Frame classification by dispatch key."""

from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple

from ..exceptions import LengthError
from .checksum import MIN_FRAME_LENGTH


class DispatchKey(NamedTuple):
    """Routing key of a frame: leading two bytes plus total length."""

    category: int
    subcommand: int
    length: int

    def __str__(self) -> str:
        return f"0x{self.category:02x},0x{self.subcommand:02x},len={self.length}"


def classify(frame: Sequence[int]) -> DispatchKey:
    """Build the dispatch key of a frame.

    Only the category byte, subcommand byte and frame length are used, so two
    frames with different payloads but the same header and length share a key.

    Raises:
        LengthError: If the frame is shorter than 3 bytes
    """
    if len(frame) < MIN_FRAME_LENGTH:
        raise LengthError(
            f"Frame too short: {len(frame)} bytes (need at least {MIN_FRAME_LENGTH})",
            bytes(frame),
        )
    return DispatchKey(frame[0], frame[1], len(frame))
