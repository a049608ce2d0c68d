"""Test block-specific notification decoders."""

from __future__ import annotations

import logging

import pytest

from meshblocks.blocks import (
    VARIANT_DECODERS,
    BaseFrameInterpreter,
    BrightnessDecoder,
    ButtonDecoder,
    GpioDecoder,
    LedDecoder,
    MotionDecoder,
    MoveDecoder,
    TempHumidDecoder,
    decoder_for,
)
from meshblocks.events import DecodedEvent, EventKind
from meshblocks.exceptions import UnrecognizedFrameError
from meshblocks.models.enums import BlockType
from meshblocks.protocol.checksum import append


def _identification_frame(block_type: int) -> bytes:
    return append(bytes([0x00, 0x02, block_type]) + bytes(11) + bytes([100]))


def _frame(*body: int, length: int | None = None) -> bytes:
    """Build a frame, zero-padding the body so the frame has ``length`` bytes."""
    data = bytes(body)
    if length is not None:
        data = data.ljust(length - 1, b"\x00")
    return append(data)


def _connected(decoder_cls):
    """Interpreter with ``decoder_cls`` attached and the matching block detected."""
    interpreter = BaseFrameInterpreter()
    decoder = decoder_cls(interpreter)
    seen: list[DecodedEvent] = []
    for kind in EventKind:
        if kind not in (EventKind.INDICATE, EventKind.NOTIFY, EventKind.DISCONNECT):
            interpreter.bus.subscribe(kind, seen.append)
    interpreter.bus.publish(EventKind.INDICATE, _identification_frame(decoder_cls.block_type))
    seen.clear()
    return interpreter, decoder, seen


class TestActivation:
    """Test variant activation by the detection signal."""

    def test_inactive_before_detection(self):
        """Test block frames are ignored until the block is identified."""
        interpreter = BaseFrameInterpreter()
        decoder = ButtonDecoder(interpreter)
        seen = []
        interpreter.bus.subscribe(EventKind.BUTTON, seen.append)

        interpreter.bus.publish(EventKind.NOTIFY, _frame(0x01, 0x00, 0x01))

        assert not decoder.active
        assert seen == []

    def test_active_after_detection(self):
        """Test matching detection activates the variant."""
        interpreter, decoder, seen = _connected(ButtonDecoder)

        interpreter.bus.publish(EventKind.NOTIFY, _frame(0x01, 0x00, 0x01))

        assert decoder.active
        assert seen == [DecodedEvent(EventKind.BUTTON, {"status": 1})]

    def test_mismatched_block_type(self, caplog):
        """Test detection of another block type leaves the variant inactive."""
        interpreter = BaseFrameInterpreter()
        decoder = ButtonDecoder(interpreter)

        with caplog.at_level(logging.WARNING, logger="meshblocks.blocks.variant"):
            interpreter.bus.publish(EventKind.INDICATE, _identification_frame(BlockType.MOVE))

        assert not decoder.active
        assert "expects block type 0x02" in caplog.text

    def test_created_after_detection(self):
        """Test a variant created after detection activates immediately."""
        interpreter = BaseFrameInterpreter()
        interpreter.bus.publish(EventKind.INDICATE, _identification_frame(BlockType.GPIO))

        decoder = GpioDecoder(interpreter)

        assert decoder.active
        assert interpreter.variant is decoder

    def test_on_detected_callback(self):
        """Test the constructor callback receives the block type once."""
        interpreter = BaseFrameInterpreter()
        detections = []
        ButtonDecoder(interpreter, on_detected=detections.append)

        interpreter.bus.publish(EventKind.INDICATE, _identification_frame(BlockType.BUTTON))
        interpreter.bus.publish(EventKind.NOTIFY, _identification_frame(BlockType.BUTTON))

        assert detections == [BlockType.BUTTON]

    def test_disconnect_deactivates(self):
        """Test the variant waits for a new detection after disconnect."""
        interpreter, decoder, seen = _connected(ButtonDecoder)

        interpreter.bus.publish(EventKind.DISCONNECT)
        interpreter.bus.publish(EventKind.NOTIFY, _frame(0x01, 0x00, 0x01))
        assert not decoder.active
        assert seen == []

        interpreter.bus.publish(EventKind.INDICATE, _identification_frame(BlockType.BUTTON))
        assert decoder.active

    def test_replaced_variant_detached(self, caplog):
        """Test a replaced variant no longer reacts to detection."""
        interpreter = BaseFrameInterpreter()
        old = ButtonDecoder(interpreter)
        new = MoveDecoder(interpreter)

        with caplog.at_level(logging.WARNING, logger="meshblocks.blocks.variant"):
            interpreter.bus.publish(EventKind.INDICATE, _identification_frame(BlockType.MOVE))

        assert interpreter.variant is new
        assert new.active
        assert not old.active
        assert "expects block type" not in caplog.text

    def test_block_frames_ignored_on_indicate(self):
        """Test variants only decode notify frames."""
        interpreter, _, seen = _connected(ButtonDecoder)
        interpreter.bus.publish(EventKind.INDICATE, _frame(0x01, 0x00, 0x01))
        assert seen == []

    def test_base_table_wins(self):
        """Test base frames are still decoded by the base table."""
        interpreter, _, seen = _connected(ButtonDecoder)
        interpreter.bus.publish(EventKind.NOTIFY, _frame(0x00, 0x00, 0x05))
        assert seen == [DecodedEvent(EventKind.BATTERY_LEVEL, {"battery_level": 50})]

    def test_unknown_block_frame_ignored(self):
        """Test unknown keys are dropped silently by an active variant."""
        interpreter, _, seen = _connected(ButtonDecoder)
        interpreter.bus.publish(EventKind.NOTIFY, _frame(0x01, 0x00, 0x01, 0x02))
        assert seen == []

    def test_strict_decode_unrecognized(self):
        """Test decode() raises for keys outside the table."""
        interpreter = BaseFrameInterpreter()
        with pytest.raises(UnrecognizedFrameError, match="ButtonDecoder"):
            ButtonDecoder(interpreter).decode(_frame(0x01, 0x09, 0x00))


class TestButton:
    """Test Button block decoding."""

    @pytest.mark.parametrize("status", [1, 2, 3])
    def test_button(self, status):
        """Test button status byte."""
        interpreter, decoder, seen = _connected(ButtonDecoder)
        interpreter.bus.publish(EventKind.NOTIFY, _frame(0x01, 0x00, status))
        assert seen == [DecodedEvent(EventKind.BUTTON, {"status": status})]


class TestMove:
    """Test Move block decoding."""

    def test_tap(self):
        """Test tap acceleration decoding."""
        interpreter, _, seen = _connected(MoveDecoder)

        frame = _frame(0x01, 0x00, 0x00, 0x04, 0x00, 0x08, 0x00, 0x00, length=17)
        assert len(frame) == 17
        interpreter.bus.publish(EventKind.NOTIFY, frame)

        assert seen == [DecodedEvent(EventKind.TAP, {"x": 1.0, "y": 2.0, "z": 0.0})]

    @pytest.mark.parametrize(
        ("subcommand", "kind"),
        [(0x01, EventKind.SHAKE), (0x02, EventKind.FLIP)],
    )
    def test_shake_and_flip(self, subcommand, kind):
        """Test shake and flip share the tap decoding."""
        interpreter, _, seen = _connected(MoveDecoder)
        frame = _frame(0x01, subcommand, 0x00, 0xFC, 0x00, 0x02, 0x00, 0x04, length=17)
        interpreter.bus.publish(EventKind.NOTIFY, frame)
        assert seen == [DecodedEvent(kind, {"x": -1.0, "y": 0.5, "z": 1.0})]

    def test_orientation(self):
        """Test orientation code plus acceleration."""
        _, decoder, _ = _connected(MoveDecoder)
        frame = _frame(0x01, 0x03, 0x03, 0x00, 0x00, 0x00, 0x00, 0x04, length=17)

        event = decoder.decode(frame)

        assert event.kind == EventKind.ORIENTATION
        assert event["orientation"] == 3
        assert event["x"] == pytest.approx(3 / 1024.0)
        assert event["z"] == 1.0

    def test_wrong_length_ignored(self):
        """Test a tap header with another length is not a tap."""
        interpreter, _, seen = _connected(MoveDecoder)
        interpreter.bus.publish(EventKind.NOTIFY, _frame(0x01, 0x00, 0x00, 0x04, length=16))
        assert seen == []

    def test_decode_is_repeatable(self):
        """Test decoding the same frame twice yields identical events."""
        _, decoder, _ = _connected(MoveDecoder)
        frame = _frame(0x01, 0x00, 0x10, 0x04, 0x00, 0x08, length=17)
        assert decoder.decode(frame) == decoder.decode(frame)


class TestMotion:
    """Test Motion block decoding."""

    def test_motion(self):
        """Test the three payload bytes are passed through in order."""
        interpreter, _, seen = _connected(MotionDecoder)
        interpreter.bus.publish(EventKind.NOTIFY, _frame(0x01, 0x00, 0x03, 0x01, 0x02))

        assert len(seen) == 1
        assert seen[0].kind == EventKind.MOTION
        assert seen[0].args == (3, 1, 2)


class TestBrightness:
    """Test Brightness block decoding."""

    def test_brightness(self):
        """Test brightness and scaled proximity."""
        interpreter, _, seen = _connected(BrightnessDecoder)
        frame = _frame(0x01, 0x00, 0x07, 0x10, 0x2C, 0x01, 0x0C, 0x00, length=13)
        interpreter.bus.publish(EventKind.NOTIFY, frame)

        assert seen == [
            DecodedEvent(
                EventKind.BRIGHTNESS,
                {"request_id": 7, "mode": 0x10, "brightness": 300, "proximity": 120},
            )
        ]


class TestTempHumid:
    """Test TempHumid block decoding."""

    def test_temphumid(self):
        """Test temperature scaling and raw humidity."""
        interpreter, _, seen = _connected(TempHumidDecoder)
        interpreter.bus.publish(
            EventKind.NOTIFY, _frame(0x01, 0x00, 0x07, 0x01, 0xFD, 0x00, 0x2D, 0x00)
        )

        event = seen[0]
        assert event.kind == EventKind.TEMPHUMID
        assert event["request_id"] == 7
        assert event["mode"] == 1
        assert event["temperature"] == pytest.approx(25.3)
        assert event["humidity"] == 45

    def test_negative_temperature(self):
        """Test below-zero temperatures."""
        _, decoder, _ = _connected(TempHumidDecoder)
        event = decoder.decode(_frame(0x01, 0x00, 0x00, 0x00, 0xC9, 0xFF, 0x00, 0x00))
        assert event["temperature"] == pytest.approx(-5.5)


class TestGpio:
    """Test GPIO block decoding."""

    @pytest.fixture
    def decoder(self):
        _, decoder, _ = _connected(GpioDecoder)
        return decoder

    def test_digital_changed(self, decoder):
        event = decoder.decode(_frame(0x01, 0x00, 0x01, 0x00))
        assert event == DecodedEvent(EventKind.DIGITAL_CHANGED, {"pin": 1, "edge": 0})

    def test_analog_changed(self, decoder):
        event = decoder.decode(_frame(0x01, 0x01, 0x02, 0x00, 0x00, 0xFF))
        assert event == DecodedEvent(EventKind.ANALOG_CHANGED, {"pin": 2, "level": 1.0})

    @pytest.mark.parametrize(("raw", "level"), [(0x00, True), (0x01, False)])
    def test_digital_input(self, decoder, raw, level):
        """Test digital input reads True when the pin is low."""
        event = decoder.decode(_frame(0x01, 0x02, 0x05, 0x01, raw))
        assert event == DecodedEvent(
            EventKind.DIGITAL_INPUT, {"request_id": 5, "pin": 1, "level": level}
        )

    def test_analog_input(self, decoder):
        event = decoder.decode(_frame(0x01, 0x03, 0x05, 0x00, 51, 0x02))
        assert event.kind == EventKind.ANALOG_INPUT
        assert event["level"] == pytest.approx(0.2)
        assert event["mode"] == 2

    @pytest.mark.parametrize(
        ("subcommand", "kind"),
        [(0x04, EventKind.POWER_OUTPUT), (0x05, EventKind.DIGITAL_OUTPUT)],
    )
    def test_boolean_outputs(self, decoder, subcommand, kind):
        """Test power/digital output levels are True when non-zero."""
        assert decoder.decode(_frame(0x01, subcommand, 0x01, 0x02, 0x01))["level"] is True
        event = decoder.decode(_frame(0x01, subcommand, 0x01, 0x02, 0x00))
        assert event == DecodedEvent(kind, {"request_id": 1, "pin": 2, "level": False})

    def test_pwm_output(self, decoder):
        event = decoder.decode(_frame(0x01, 0x06, 0x09, 0x00, 0xFF))
        assert event == DecodedEvent(
            EventKind.PWM_OUTPUT, {"request_id": 9, "pin": 0, "level": 1.0}
        )

    def test_published_on_bus(self):
        """Test GPIO events reach bus subscribers."""
        interpreter, _, seen = _connected(GpioDecoder)
        interpreter.bus.publish(EventKind.NOTIFY, _frame(0x01, 0x00, 0x02, 0x01))
        assert seen == [DecodedEvent(EventKind.DIGITAL_CHANGED, {"pin": 2, "edge": 1})]


class TestLed:
    """Test LED block (write-only)."""

    def test_led_decodes_nothing(self):
        """Test LED has no notify decoders."""
        interpreter, decoder, seen = _connected(LedDecoder)
        assert decoder.keys == frozenset()
        assert decoder.active
        interpreter.bus.publish(EventKind.NOTIFY, _frame(0x01, 0x00, 0x01))
        assert seen == []


class TestRegistry:
    """Test variant lookup by block type."""

    def test_every_block_type_has_a_decoder(self):
        assert set(VARIANT_DECODERS) == set(BlockType)

    def test_decoder_for(self):
        assert decoder_for(0x02) is ButtonDecoder
        assert decoder_for(BlockType.TEMP_HUMID) is TempHumidDecoder

    def test_decoder_for_unknown(self):
        with pytest.raises(ValueError):
            decoder_for(0x7F)

    def test_keys_unique_within_variant(self):
        """Test each variant maps a key to one decoder."""
        interpreter = BaseFrameInterpreter()
        gpio = GpioDecoder(interpreter)
        assert len(gpio.keys) == 7
