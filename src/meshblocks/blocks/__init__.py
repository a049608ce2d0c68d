"""Frame interpreters for the MESH block family."""

from __future__ import annotations

from ..models.enums import BlockType
from .base import BaseFrameInterpreter
from .brightness import BrightnessDecoder
from .button import ButtonDecoder
from .gpio import GpioDecoder
from .led import LedDecoder
from .motion import MotionDecoder
from .move import MoveDecoder
from .temphumid import TempHumidDecoder
from .variant import VariantDecoder

VARIANT_DECODERS: dict[BlockType, type[VariantDecoder]] = {
    cls.block_type: cls
    for cls in (
        LedDecoder,
        MoveDecoder,
        ButtonDecoder,
        GpioDecoder,
        MotionDecoder,
        BrightnessDecoder,
        TempHumidDecoder,
    )
}


def decoder_for(block_type: BlockType | int) -> type[VariantDecoder]:
    """Return the variant decoder class for a block type.

    Raises:
        ValueError: If the block type is unknown
    """
    return VARIANT_DECODERS[BlockType(block_type)]


__all__ = [
    "BaseFrameInterpreter",
    "VariantDecoder",
    "ButtonDecoder",
    "LedDecoder",
    "MoveDecoder",
    "MotionDecoder",
    "BrightnessDecoder",
    "TempHumidDecoder",
    "GpioDecoder",
    "VARIANT_DECODERS",
    "decoder_for",
]
