"""GPIO block (MESH-100GP)."""

from __future__ import annotations

from ..events import DecodedEvent, EventKind
from ..models.enums import BlockType
from ..protocol.constants import CATEGORY_BLOCK
from ..protocol.frames import DispatchKey
from ..protocol.values import ratio255
from .variant import VariantDecoder

DIGITAL_CHANGED_KEY = DispatchKey(CATEGORY_BLOCK, 0x00, 5)
ANALOG_CHANGED_KEY = DispatchKey(CATEGORY_BLOCK, 0x01, 7)
DIGITAL_INPUT_KEY = DispatchKey(CATEGORY_BLOCK, 0x02, 6)
ANALOG_INPUT_KEY = DispatchKey(CATEGORY_BLOCK, 0x03, 7)
POWER_OUTPUT_KEY = DispatchKey(CATEGORY_BLOCK, 0x04, 6)
DIGITAL_OUTPUT_KEY = DispatchKey(CATEGORY_BLOCK, 0x05, 6)
PWM_OUTPUT_KEY = DispatchKey(CATEGORY_BLOCK, 0x06, 6)


class GpioDecoder(VariantDecoder):
    """Decodes GPIO input change notifications and state request answers.

    Analog and PWM levels are reported as 0.0-1.0. A digital input reads
    True when the pin is pulled low.
    """

    block_type = BlockType.GPIO

    def _decoders(self):
        return {
            DIGITAL_CHANGED_KEY: self._decode_digital_changed,
            ANALOG_CHANGED_KEY: self._decode_analog_changed,
            DIGITAL_INPUT_KEY: self._decode_digital_input,
            ANALOG_INPUT_KEY: self._decode_analog_input,
            POWER_OUTPUT_KEY: self._output_event(EventKind.POWER_OUTPUT, lambda b: b != 0),
            DIGITAL_OUTPUT_KEY: self._output_event(EventKind.DIGITAL_OUTPUT, lambda b: b != 0),
            PWM_OUTPUT_KEY: self._output_event(EventKind.PWM_OUTPUT, ratio255),
        }

    @staticmethod
    def _decode_digital_changed(frame: bytes) -> DecodedEvent:
        return DecodedEvent(EventKind.DIGITAL_CHANGED, {"pin": frame[2], "edge": frame[3]})

    @staticmethod
    def _decode_analog_changed(frame: bytes) -> DecodedEvent:
        return DecodedEvent(
            EventKind.ANALOG_CHANGED,
            {"pin": frame[2], "level": ratio255(frame[5])},
        )

    @staticmethod
    def _decode_digital_input(frame: bytes) -> DecodedEvent:
        return DecodedEvent(
            EventKind.DIGITAL_INPUT,
            {"request_id": frame[2], "pin": frame[3], "level": frame[4] == 0},
        )

    @staticmethod
    def _decode_analog_input(frame: bytes) -> DecodedEvent:
        return DecodedEvent(
            EventKind.ANALOG_INPUT,
            {
                "request_id": frame[2],
                "pin": frame[3],
                "level": ratio255(frame[4]),
                "mode": frame[5],
            },
        )

    @staticmethod
    def _output_event(kind: EventKind, level):
        # request_id, pin, level at bytes 2-4
        def decode(frame: bytes) -> DecodedEvent:
            return DecodedEvent(
                kind,
                {"request_id": frame[2], "pin": frame[3], "level": level(frame[4])},
            )
        return decode
