"""Frame handling shared by all MESH blocks."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from ..events import DecodedEvent, EventBus, EventKind, OneShotSignal
from ..exceptions import FrameError, UnrecognizedFrameError
from ..models.enums import get_block_type_name
from ..protocol.checksum import ensure_valid
from ..protocol.constants import (
    BASE_BATTERY,
    BASE_IDENTIFY,
    BASE_STATUS_BUTTON,
    BATTERY_FRAME_LENGTH,
    BATTERY_LEVEL_SCALE,
    CATEGORY_BASE,
    IDENTIFY_FRAME_LENGTH,
    STATUS_BUTTON_FRAME_LENGTH,
)
from ..protocol.frames import DispatchKey, classify
from ..protocol.values import uint_le, version_string

if TYPE_CHECKING:
    from .variant import VariantDecoder

_LOGGER = logging.getLogger(__name__)

IDENTIFY_KEY = DispatchKey(CATEGORY_BASE, BASE_IDENTIFY, IDENTIFY_FRAME_LENGTH)
BATTERY_KEY = DispatchKey(CATEGORY_BASE, BASE_BATTERY, BATTERY_FRAME_LENGTH)
STATUS_BUTTON_KEY = DispatchKey(CATEGORY_BASE, BASE_STATUS_BUTTON, STATUS_BUTTON_FRAME_LENGTH)

# Base frames accepted per channel
_CHANNEL_KEYS: dict[EventKind, frozenset[DispatchKey]] = {
    EventKind.INDICATE: frozenset({IDENTIFY_KEY}),
    EventKind.NOTIFY: frozenset({IDENTIFY_KEY, BATTERY_KEY, STATUS_BUTTON_KEY}),
}


def decode_identification(frame: bytes) -> list[DecodedEvent]:
    """Decode the 16-byte identification frame.

    Format:
        [0x00][0x02][block_type][serial:4 LE][version:3][reserved:4][battery][reserved][checksum]
    """
    return [
        DecodedEvent(EventKind.BLOCK_TYPE, {"block_type": frame[2]}),
        DecodedEvent(EventKind.SERIAL_NUMBER, {"serial_number": uint_le(frame[3:7])}),
        DecodedEvent(EventKind.VERSION, {"version": version_string(frame[7:10])}),
        DecodedEvent(
            EventKind.BATTERY_LEVEL,
            {"battery_level": frame[14] * BATTERY_LEVEL_SCALE},
        ),
    ]


def decode_battery(frame: bytes) -> list[DecodedEvent]:
    """Decode a standalone battery status frame."""
    return [
        DecodedEvent(
            EventKind.BATTERY_LEVEL,
            {"battery_level": frame[2] * BATTERY_LEVEL_SCALE},
        )
    ]


def decode_status_button(frame: bytes) -> list[DecodedEvent]:
    """Decode a status (power) button frame."""
    return [DecodedEvent(EventKind.STATUS_BUTTON, {"status": frame[2]})]


_BASE_DECODERS = {
    IDENTIFY_KEY: decode_identification,
    BATTERY_KEY: decode_battery,
    STATUS_BUTTON_KEY: decode_status_button,
}


class BaseFrameInterpreter:
    """Verifies incoming frames and decodes the commands common to all blocks.

    The interpreter subscribes to the raw ``indicate``/``notify`` kinds of its
    bus. Each frame is checked, classified and matched against the base table
    first and then against the attached variant decoder; the first match wins
    and frames nobody knows are ignored.

    It also owns the per-connection block identity: the first identification
    frame moves it from unidentified to identified and fires ``detected``
    exactly once. A ``disconnect`` event resets it.

    Usage:
        interpreter = BaseFrameInterpreter()
        ButtonDecoder(interpreter)
        interpreter.bus.subscribe(EventKind.BUTTON, print)
        interpreter.bus.publish(EventKind.NOTIFY, frame)
    """

    def __init__(self, bus: EventBus | None = None):
        self.bus = bus if bus is not None else EventBus()
        self.detected = OneShotSignal(EventKind.BLOCK_TYPE_DETECTED.value)
        self._block_type: int | None = None
        self._variant: VariantDecoder | None = None

        self.bus.subscribe(EventKind.INDICATE, self.handle_indicate)
        self.bus.subscribe(EventKind.NOTIFY, self.handle_notify)
        self.bus.subscribe(EventKind.DISCONNECT, self.reset)

    @property
    def block_type(self) -> int | None:
        """Block type of the connected block, or None until identified."""
        return self._block_type

    @property
    def is_identified(self) -> bool:
        return self._block_type is not None

    @property
    def variant(self) -> VariantDecoder | None:
        """Variant decoder consulted after the base table."""
        return self._variant

    def attach(self, variant: VariantDecoder) -> None:
        """Install the variant decoder for this connection."""
        if self._variant is not None and self._variant is not variant:
            _LOGGER.debug("Replacing variant decoder %r with %r", self._variant, variant)
            self._variant.detach()
        self._variant = variant

    def handle_indicate(self, frame: Sequence[int]) -> None:
        """Bus listener for frames received on the indicate characteristic."""
        self._handle(EventKind.INDICATE, frame)

    def handle_notify(self, frame: Sequence[int]) -> None:
        """Bus listener for frames received on the notify characteristic."""
        self._handle(EventKind.NOTIFY, frame)

    def _handle(self, channel: EventKind, frame: Sequence[int]) -> None:
        try:
            self.process(channel, frame)
        except FrameError as e:
            _LOGGER.warning(
                "Dropping %s frame %s: %s: %s",
                channel.value,
                bytes(e.frame).hex(),
                type(e).__name__,
                e,
            )

    def decode(self, channel: EventKind, frame: Sequence[int]) -> list[DecodedEvent]:
        """Decode a base frame without touching session state or the bus.

        Raises:
            UnrecognizedFrameError: If the frame is not a base frame for ``channel``
        """
        data = bytes(frame)
        key = classify(data)
        if key not in _CHANNEL_KEYS.get(EventKind(channel), frozenset()):
            raise UnrecognizedFrameError(f"Not a base frame: {key}", data)
        return _BASE_DECODERS[key](data)

    def process(self, channel: EventKind, frame: Sequence[int]) -> list[DecodedEvent]:
        """Verify, decode and publish one frame.

        Args:
            channel: EventKind.INDICATE or EventKind.NOTIFY
            frame: Raw frame including the checksum byte

        Returns:
            Events published for this frame, in publication order

        Raises:
            LengthError: If the frame is shorter than 3 bytes
            ChecksumError: If the checksum byte is wrong
        """
        channel = EventKind(channel)
        data = bytes(frame)
        ensure_valid(data)
        key = classify(data)
        _LOGGER.debug("%s frame %s (%s)", channel.value, data.hex(), key)

        try:
            events = self.decode(channel, data)
        except UnrecognizedFrameError:
            events = self._decode_variant(channel, data)

        for event in events:
            self.bus.publish_event(event)

        if key == IDENTIFY_KEY:
            detection = self._identify(data[2])
            if detection is not None:
                events.append(detection)

        return events

    def _decode_variant(self, channel: EventKind, data: bytes) -> list[DecodedEvent]:
        variant = self._variant
        if channel != EventKind.NOTIFY or variant is None or not variant.active:
            _LOGGER.debug("Ignoring unrecognized %s frame %s", channel.value, data.hex())
            return []
        try:
            return [variant.decode(data)]
        except UnrecognizedFrameError as e:
            _LOGGER.debug("Ignoring %s frame: %s", channel.value, e)
            return []

    def _identify(self, block_type: int) -> DecodedEvent | None:
        """Record the block type; return the detection event on first identification."""
        if self._block_type is not None:
            if block_type != self._block_type:
                _LOGGER.warning(
                    "Block re-announced as type 0x%02x, keeping 0x%02x",
                    block_type,
                    self._block_type,
                )
            return None

        self._block_type = block_type
        _LOGGER.info(
            "Block detected: type 0x%02x (%s)",
            block_type,
            get_block_type_name(block_type) or "unknown",
        )
        self.detected.fire(block_type)
        event = DecodedEvent(EventKind.BLOCK_TYPE_DETECTED, {"block_type": block_type})
        self.bus.publish_event(event)
        return event

    def reset(self) -> None:
        """Forget the block identity (connection closed)."""
        _LOGGER.debug("Resetting block identity")
        self._block_type = None
        self.detected.reset()
        if self._variant is not None:
            self._variant.deactivate()
