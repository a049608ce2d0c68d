"""MESH BLE Block Protocol Package.

  Pure Python package for decoding and driving MESH BLE sensor/actuator blocks.
  """

from .blocks import (
    BaseFrameInterpreter,
    BrightnessDecoder,
    ButtonDecoder,
    GpioDecoder,
    LedDecoder,
    MotionDecoder,
    MoveDecoder,
    TempHumidDecoder,
    VariantDecoder,
    decoder_for,
)
from .device import MeshBlock
from .discovery import discover_blocks
from .events import DecodedEvent, EventBus, EventKind, OneShotSignal
from .exceptions import (
    BLEConnectionError,
    BLETimeoutError,
    ChecksumError,
    FrameError,
    FrameTooShortError,
    LengthError,
    MeshBlockError,
    ProtocolError,
    UnrecognizedFrameError,
)
from .models.enums import (
    BlockType,
    LedPattern,
    block_type_from_name,
    get_block_type_name,
    get_name_prefix,
)
from .protocol import NAME_PREFIX, SERVICE_UUID, DispatchKey, classify, encode_write, verify

__version__ = "0.1.0"

__all__ = [
    # Main API
    "MeshBlock",
    "discover_blocks",
    # Events
    "EventBus",
    "EventKind",
    "DecodedEvent",
    "OneShotSignal",
    # Decoders
    "BaseFrameInterpreter",
    "VariantDecoder",
    "ButtonDecoder",
    "LedDecoder",
    "MoveDecoder",
    "MotionDecoder",
    "BrightnessDecoder",
    "TempHumidDecoder",
    "GpioDecoder",
    "decoder_for",
    # Exceptions
    "MeshBlockError",
    "BLEConnectionError",
    "BLETimeoutError",
    "ProtocolError",
    "FrameError",
    "LengthError",
    "FrameTooShortError",
    "ChecksumError",
    "UnrecognizedFrameError",
    # Models
    "BlockType",
    "LedPattern",
    "get_block_type_name",
    "get_name_prefix",
    "block_type_from_name",
    # Protocol
    "DispatchKey",
    "classify",
    "verify",
    "encode_write",
    # Constants
    "SERVICE_UUID",
    "NAME_PREFIX",
]
