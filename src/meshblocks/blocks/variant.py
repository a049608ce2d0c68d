"""Common machinery for block-specific notification decoders."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, ClassVar

from ..events import DecodedEvent
from ..exceptions import UnrecognizedFrameError
from ..models.enums import BlockType
from ..protocol.frames import DispatchKey, classify

if TYPE_CHECKING:
    from .base import BaseFrameInterpreter

_LOGGER = logging.getLogger(__name__)

FrameDecoder = Callable[[bytes], DecodedEvent]


class VariantDecoder:
    """Decodes the notify frames specific to one block type.

    A variant attaches itself to a BaseFrameInterpreter and connects to its
    one-time detection signal. It only decodes once that signal fired with the
    variant's own block type.

    Subclasses set ``block_type`` and implement ``_decoders()``.
    """

    block_type: ClassVar[BlockType]

    def __init__(
            self,
            interpreter: BaseFrameInterpreter,
            on_detected: Callable[[int], Any] | None = None,
    ):
        """Attach to ``interpreter``.

        Args:
            interpreter: Base interpreter of the connection
            on_detected: Optional callback receiving the detected block type
        """
        self.interpreter = interpreter
        self._active = False
        self._table: Mapping[DispatchKey, FrameDecoder] = self._decoders()

        interpreter.attach(self)
        if on_detected is not None:
            interpreter.detected.connect(on_detected)
        interpreter.detected.connect(self._on_detected)

        if interpreter.detected.fired:
            self._on_detected(interpreter.detected.value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(active={self._active})"

    def _decoders(self) -> Mapping[DispatchKey, FrameDecoder]:
        return {}

    @property
    def keys(self) -> frozenset[DispatchKey]:
        """Dispatch keys handled by this variant."""
        return frozenset(self._table)

    @property
    def active(self) -> bool:
        """True once the matching block type was detected on this connection."""
        return self._active

    def _on_detected(self, block_type: int) -> None:
        if block_type == self.block_type:
            self._active = True
            _LOGGER.debug("%s active", type(self).__name__)
        else:
            _LOGGER.warning(
                "%s expects block type 0x%02x but block reported 0x%02x",
                type(self).__name__,
                self.block_type,
                block_type,
            )

    def deactivate(self) -> None:
        self._active = False

    def detach(self) -> None:
        """Stop following the interpreter's detection signal."""
        self.interpreter.detected.disconnect(self._on_detected)
        self._active = False

    def decode(self, frame: Sequence[int]) -> DecodedEvent:
        """Decode one verified frame into an event.

        Raises:
            UnrecognizedFrameError: If the frame's key is not in this variant's table
        """
        data = bytes(frame)
        key = classify(data)
        decoder = self._table.get(key)
        if decoder is None:
            raise UnrecognizedFrameError(
                f"{type(self).__name__} has no decoder for {key}", data
            )
        return decoder(data)
