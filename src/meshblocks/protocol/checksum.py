"""Single-byte additive checksum used by every MESH frame.

Frame layout::

    [category:1][subcommand:1][payload:N][checksum:1]

The checksum is the sum of all preceding bytes, modulo 256.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..exceptions import ChecksumError, LengthError

MIN_FRAME_LENGTH = 3


def checksum(body: Sequence[int]) -> int:
    """Return the additive checksum of ``body``."""
    return sum(body) & 0xFF


def verify(frame: Sequence[int]) -> bool:
    """Check the trailing checksum byte of a frame.

    Args:
        frame: Complete frame including the checksum byte

    Returns:
        True if the checksum matches

    Raises:
        LengthError: If the frame is shorter than 3 bytes
    """
    if len(frame) < MIN_FRAME_LENGTH:
        raise LengthError(
            f"Frame too short: {len(frame)} bytes (need at least {MIN_FRAME_LENGTH})",
            bytes(frame),
        )
    last = frame[-1]
    return (sum(frame) - last) & 0xFF == last


def ensure_valid(frame: Sequence[int]) -> None:
    """Raise unless ``frame`` carries a correct checksum.

    Raises:
        LengthError: If the frame is shorter than 3 bytes
        ChecksumError: If the checksum byte is wrong
    """
    if not verify(frame):
        raise ChecksumError(bytes(frame), expected=checksum(frame[:-1]), actual=frame[-1])


def append(body: Sequence[int]) -> bytes:
    """Return ``body`` followed by its checksum byte.

    Raises:
        ValueError: If ``body`` lacks the category and subcommand bytes
    """
    if len(body) < MIN_FRAME_LENGTH - 1:
        raise ValueError(
            f"Frame body too short: {len(body)} bytes (need category and subcommand)"
        )
    data = bytes(body)
    return data + bytes([checksum(data)])
