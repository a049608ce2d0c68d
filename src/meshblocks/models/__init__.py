"""Data models for MESH blocks."""

from .enums import (
    BlockType,
    LedPattern,
    block_type_from_name,
    get_block_type_name,
    get_name_prefix,
)

__all__ = [
    "BlockType",
    "LedPattern",
    "block_type_from_name",
    "get_block_type_name",
    "get_name_prefix",
]
