"""MESH frame protocol implementation."""

from .checksum import append, checksum, ensure_valid, verify
from .commands import (
    build_analog_input_request,
    build_brightness_mode_command,
    build_digital_input_request,
    build_digital_output_request,
    build_enable_block_command,
    build_gpio_setup_command,
    build_led_command,
    build_motion_mode_command,
    build_power_off_command,
    build_power_output_request,
    build_pwm_output_request,
    build_request_status_command,
    build_status_bar_command,
    build_status_bar_enable_command,
    build_temphumid_mode_command,
    encode_write,
)
from .constants import (
    INDICATE_UUID,
    NAME_PREFIX,
    NOTIFY_UUID,
    SERVICE_UUID,
    WRITE_UUID,
    WRITE_WO_RESPONSE_UUID,
)
from .frames import DispatchKey, classify
from .values import (
    int_le16,
    ratio255,
    scaled_accel,
    scaled_temp,
    uint_le,
    version_string,
)

__all__ = [
    "SERVICE_UUID",
    "WRITE_UUID",
    "WRITE_WO_RESPONSE_UUID",
    "NOTIFY_UUID",
    "INDICATE_UUID",
    "NAME_PREFIX",
    "append",
    "checksum",
    "ensure_valid",
    "verify",
    "DispatchKey",
    "classify",
    "uint_le",
    "int_le16",
    "scaled_accel",
    "scaled_temp",
    "version_string",
    "ratio255",
    "encode_write",
    "build_status_bar_command",
    "build_enable_block_command",
    "build_request_status_command",
    "build_status_bar_enable_command",
    "build_power_off_command",
    "build_led_command",
    "build_motion_mode_command",
    "build_brightness_mode_command",
    "build_temphumid_mode_command",
    "build_gpio_setup_command",
    "build_digital_input_request",
    "build_analog_input_request",
    "build_power_output_request",
    "build_digital_output_request",
    "build_pwm_output_request",
]
