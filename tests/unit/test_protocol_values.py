"""Test payload value decoders."""

import pytest

from meshblocks.protocol.values import (
    int_le16,
    pack_int_le16,
    pack_uint_le,
    ratio255,
    scaled_accel,
    scaled_temp,
    uint_le,
    version_string,
)


class TestIntegers:
    """Test little-endian integer decoding."""

    def test_uint_le(self):
        """Test unsigned little-endian reconstruction."""
        assert uint_le(b"\x2a\x00\x00\x00") == 42
        assert uint_le(b"\x01\x02") == 0x0201
        assert uint_le(b"\xff\xff\xff\xff") == 0xFFFFFFFF

    def test_uint_le_empty(self):
        """Test empty window decodes to zero."""
        assert uint_le(b"") == 0

    def test_int_le16_positive(self):
        """Test positive 16-bit values are unchanged."""
        assert int_le16(b"\xff\x7f") == 0x7FFF
        assert int_le16(b"\x00\x04") == 1024

    def test_int_le16_negative(self):
        """Test two's complement sign fix."""
        assert int_le16(b"\x00\x80") == -0x8000
        assert int_le16(b"\xff\xff") == -1
        assert int_le16(b"\xc9\xff") == -55


class TestScaling:
    """Test fixed-point scaling helpers."""

    def test_scaled_accel(self):
        """Test acceleration in g."""
        assert scaled_accel(b"\x00\x04") == 1.0
        assert scaled_accel(b"\x00\x08") == 2.0
        assert scaled_accel(b"\x00\xfc") == -1.0
        assert scaled_accel(b"\x00\x02") == 0.5

    def test_scaled_temp(self):
        """Test temperature in degrees Celsius."""
        assert scaled_temp(b"\xfd\x00") == pytest.approx(25.3)
        assert scaled_temp(b"\xc9\xff") == pytest.approx(-5.5)

    def test_ratio255(self):
        """Test 0-255 level mapping."""
        assert ratio255(0) == 0.0
        assert ratio255(255) == 1.0
        assert ratio255(51) == pytest.approx(0.2)

    def test_version_string(self):
        """Test dotted version string."""
        assert version_string(b"\x01\x02\x03") == "1.2.3"
        assert version_string([1, 10, 255]) == "1.10.255"


class TestPacking:
    """Test inverse encoders used by command builders."""

    def test_pack_uint_le(self):
        """Test unsigned packing."""
        assert pack_uint_le(0x0201, 2) == b"\x01\x02"
        assert uint_le(pack_uint_le(123456, 4)) == 123456

    def test_pack_uint_le_out_of_range(self):
        """Test values that do not fit are rejected."""
        with pytest.raises(ValueError, match="out of range"):
            pack_uint_le(0x10000, 2)
        with pytest.raises(ValueError, match="out of range"):
            pack_uint_le(-1, 2)

    def test_pack_int_le16(self):
        """Test signed packing."""
        assert pack_int_le16(-55) == b"\xc9\xff"
        assert pack_int_le16(253) == b"\xfd\x00"

    def test_pack_int_le16_out_of_range(self):
        """Test values outside int16 are rejected."""
        with pytest.raises(ValueError, match="out of range"):
            pack_int_le16(0x8000)
