"""Outgoing command frames for MESH blocks.

Every builder returns a complete frame with the checksum byte appended,
ready to hand to ``BLEConnection.write``.
"""

from __future__ import annotations

from collections.abc import Sequence

from .checksum import append
from .constants import CATEGORY_BASE, CATEGORY_BLOCK
from .values import TEMP_SCALE, pack_int_le16, pack_uint_le


def encode_write(body: Sequence[int], append_checksum: bool = True) -> bytes:
    """Encode a command body for writing.

    Args:
        body: Command bytes starting with category and subcommand
        append_checksum: Append the additive checksum byte (default: True)

    Returns:
        Bytes to write to the block

    Raises:
        ValueError: If a checksum is appended to a body without category and subcommand
    """
    if append_checksum:
        return append(body)
    return bytes(body)


def _u8(name: str, value: int) -> int:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{name} out of range: {value} (must be 0-255)")
    return value


def _u16(name: str, value: int) -> bytes:
    if not 0 <= value <= 0xFFFF:
        raise ValueError(f"{name} out of range: {value} (must be 0-65535)")
    return pack_uint_le(value, 2)


# Base commands, understood by every block

def build_status_bar_command(red: bool, green: bool, blue: bool, status_bar: bool = True) -> bytes:
    """Light the status bar LEDs.

    Format:
        [0x00][0x00][red][green][blue][status_bar][checksum]
    """
    return encode_write([CATEGORY_BASE, 0x00, int(red), int(green), int(blue), int(status_bar)])


def build_enable_block_command(enabled: bool = True) -> bytes:
    """Enable or disable the block-specific functions."""
    return encode_write([CATEGORY_BASE, 0x02, int(enabled)])


def build_request_status_command() -> bytes:
    """Ask the block to answer with its identification frame."""
    return encode_write([CATEGORY_BASE, 0x03, 0x00])


def build_status_bar_enable_command(enabled: bool) -> bytes:
    """Enable or disable the status bar."""
    return encode_write([CATEGORY_BASE, 0x04, int(enabled)])


def build_power_off_command() -> bytes:
    """Switch the block off."""
    return encode_write([CATEGORY_BASE, 0x05, 0x00])


# LED block

def build_led_command(
        red: int,
        green: int,
        blue: int,
        on_time: int,
        on_cycle: int,
        off_cycle: int,
        pattern: int,
) -> bytes:
    """Build an LED lighting command.

    Args:
        red: Red intensity
        green: Green intensity
        blue: Blue intensity
        on_time: Total lighting duration in milliseconds
        on_cycle: On period within one cycle in milliseconds
        off_cycle: Off period within one cycle in milliseconds
        pattern: Lighting pattern (see ``LedPattern``)

    Format:
        [0x01][0x00][red:2][green:2][blue:2][on_time:2][on_cycle:2][off_cycle:2][pattern:1][checksum]
        All 2-byte fields are little-endian.
    """
    body = bytes([CATEGORY_BLOCK, 0x00])
    body += _u16("red", red) + _u16("green", green) + _u16("blue", blue)
    body += _u16("on_time", on_time) + _u16("on_cycle", on_cycle) + _u16("off_cycle", off_cycle)
    body += bytes([_u8("pattern", pattern)])
    return encode_write(body)


# Motion block

def build_motion_mode_command(request_id: int, mode: int, keep: int, judge: int) -> bytes:
    """Configure motion detection.

    Format:
        [0x01][0x00][request_id][mode][keep:2][judge:2][checksum]
    """
    body = bytes([CATEGORY_BLOCK, 0x00, _u8("request_id", request_id), _u8("mode", mode)])
    return encode_write(body + _u16("keep", keep) + _u16("judge", judge))


# Brightness block

def build_brightness_mode_command(request_id: int, mode: int) -> bytes:
    """Configure brightness/proximity measurement.

    Format:
        [0x01][0x00][request_id][0x00 x10][0x02 x3][mode][checksum]
    """
    body = [CATEGORY_BLOCK, 0x00, _u8("request_id", request_id)]
    body += [0x00] * 10 + [0x02] * 3
    body.append(_u8("mode", mode))
    return encode_write(body)


# Temperature & humidity block

def build_temphumid_mode_command(
        request_id: int,
        temp_upper: float,
        temp_lower: float,
        humid_upper: int,
        humid_lower: int,
        temp_condition: int,
        humid_condition: int,
        mode: int,
) -> bytes:
    """Configure temperature/humidity measurement and thresholds.

    Temperatures are given in degrees Celsius and sent in tenths of a degree.

    Format:
        [0x01][0x00][request_id][temp_upper:2][temp_lower:2]
        [humid_upper:2][humid_lower:2][temp_cond][humid_cond][mode][checksum]
    """
    body = bytes([CATEGORY_BLOCK, 0x00, _u8("request_id", request_id)])
    body += pack_int_le16(round(temp_upper * TEMP_SCALE))
    body += pack_int_le16(round(temp_lower * TEMP_SCALE))
    body += pack_int_le16(humid_upper) + pack_int_le16(humid_lower)
    body += bytes([
        _u8("temp_condition", temp_condition),
        _u8("humid_condition", humid_condition),
        _u8("mode", mode),
    ])
    return encode_write(body)


# GPIO block

def build_gpio_setup_command(
        digital_rising: int = 0,
        digital_falling: int = 0,
        digital_output: int = 0,
        pwm: int = 0,
        power: int = 0,
        analog_rising: int = 0,
        analog_falling: int = 0,
        analog_condition: int = 0,
) -> bytes:
    """Configure GPIO inputs, outputs and notification triggers.

    Digital fields are pin bitmasks.

    Format:
        [0x01][0x01][dig_rise][dig_fall][dig_out][pwm][power][ana_rise][ana_fall][ana_cond][checksum]
    """
    return encode_write([
        CATEGORY_BLOCK, 0x01,
        _u8("digital_rising", digital_rising),
        _u8("digital_falling", digital_falling),
        _u8("digital_output", digital_output),
        _u8("pwm", pwm),
        _u8("power", power),
        _u8("analog_rising", analog_rising),
        _u8("analog_falling", analog_falling),
        _u8("analog_condition", analog_condition),
    ])


def build_digital_input_request(request_id: int, pins: int) -> bytes:
    """Request the digital input state of ``pins`` (bitmask)."""
    return encode_write([CATEGORY_BLOCK, 0x02, _u8("request_id", request_id), _u8("pins", pins)])


def build_analog_input_request(request_id: int, mode: int) -> bytes:
    """Request the analog input level."""
    return encode_write([CATEGORY_BLOCK, 0x03, _u8("request_id", request_id), _u8("mode", mode)])


def build_power_output_request(request_id: int) -> bytes:
    """Request the power output state."""
    return encode_write([CATEGORY_BLOCK, 0x04, _u8("request_id", request_id), 0x00])


def build_digital_output_request(request_id: int, pins: int) -> bytes:
    """Request the digital output state of ``pins`` (bitmask)."""
    return encode_write([CATEGORY_BLOCK, 0x05, _u8("request_id", request_id), _u8("pins", pins)])


def build_pwm_output_request(request_id: int) -> bytes:
    """Request the PWM output level."""
    return encode_write([CATEGORY_BLOCK, 0x06, _u8("request_id", request_id), 0x02])
