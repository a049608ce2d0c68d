"""LED block (MESH-100LE).

The LED block sends no block-specific notifications; it is driven with
``build_led_command``.
"""

from __future__ import annotations

from ..models.enums import BlockType
from .variant import VariantDecoder


class LedDecoder(VariantDecoder):
    """LED block: no block-specific notifications to decode."""

    block_type = BlockType.LED
