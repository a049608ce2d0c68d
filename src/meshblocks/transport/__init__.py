"""BLE transport for MESH blocks."""

from .connection import BLEConnection

__all__ = ["BLEConnection"]
