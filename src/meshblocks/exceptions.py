"""Exceptions raised by the MESH block protocol library."""

from __future__ import annotations


class MeshBlockError(Exception):
    """Base exception for all meshblocks errors."""


class BLEConnectionError(MeshBlockError):
    """Connecting to or talking with a block over BLE failed."""


class BLETimeoutError(BLEConnectionError):
    """A BLE operation did not complete in time."""


class ProtocolError(MeshBlockError):
    """The block sent data that does not follow the frame protocol."""


class FrameError(ProtocolError):
    """A single received frame could not be used.

    Attributes:
        frame: The offending raw frame
    """

    def __init__(self, message: str, frame: bytes = b""):
        super().__init__(message)
        self.frame = bytes(frame)


class LengthError(FrameError):
    """Frame is shorter than the 3-byte minimum."""


FrameTooShortError = LengthError


class ChecksumError(FrameError):
    """Trailing checksum byte does not match the frame contents."""

    def __init__(self, frame: bytes, expected: int, actual: int):
        super().__init__(
            f"Checksum mismatch: expected 0x{expected:02x}, got 0x{actual:02x}",
            frame,
        )
        self.expected = expected
        self.actual = actual


class UnrecognizedFrameError(FrameError):
    """No decoder is registered for the frame's dispatch key."""
