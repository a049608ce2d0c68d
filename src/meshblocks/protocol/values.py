"""Decoders turning payload byte windows into domain values.

All multi-byte fields on the wire are little-endian. Callers pass slices of
the right width; these helpers do not validate lengths.
"""

from __future__ import annotations

from collections.abc import Sequence

ACCEL_SCALE = 1024.0   # raw counts per g
TEMP_SCALE = 10.0      # raw counts per degree Celsius


def uint_le(data: Sequence[int]) -> int:
    """Unsigned little-endian integer of any width."""
    return int.from_bytes(bytes(data), "little")


def int_le16(data: Sequence[int]) -> int:
    """Signed (two's complement) little-endian 16-bit integer."""
    return int.from_bytes(bytes(data), "little", signed=True)


def scaled_accel(data: Sequence[int]) -> float:
    """Acceleration in g from a 2-byte signed field."""
    return int_le16(data) / ACCEL_SCALE


def scaled_temp(data: Sequence[int]) -> float:
    """Temperature in degrees Celsius from a 2-byte signed field."""
    return int_le16(data) / TEMP_SCALE


def version_string(data: Sequence[int]) -> str:
    """Dotted version string, one component per byte (e.g. ``1.2.3``)."""
    return ".".join(str(b) for b in data)


def ratio255(value: int) -> float:
    """Map a 0-255 level to 0.0-1.0."""
    return value / 255.0


def pack_uint_le(value: int, size: int) -> bytes:
    """Encode an unsigned integer as ``size`` little-endian bytes.

    Raises:
        ValueError: If the value does not fit
    """
    if not 0 <= value < (1 << (8 * size)):
        raise ValueError(f"value out of range: {value} (must fit in {size} unsigned bytes)")
    return value.to_bytes(size, byteorder="little")


def pack_int_le16(value: int) -> bytes:
    """Encode a signed 16-bit little-endian integer.

    Raises:
        ValueError: If the value does not fit
    """
    if not -0x8000 <= value <= 0x7FFF:
        raise ValueError(f"value out of range: {value} (must be -32768-32767)")
    return value.to_bytes(2, byteorder="little", signed=True)
