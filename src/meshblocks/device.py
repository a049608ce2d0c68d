"""Main MESH block device class."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

from .blocks import BaseFrameInterpreter, VariantDecoder, decoder_for
from .events import Callback, EventBus, EventKind
from .models.enums import BlockType, get_block_type_name
from .protocol import (
    build_enable_block_command,
    build_power_off_command,
    build_request_status_command,
    build_status_bar_command,
    encode_write,
)
from .transport import BLEConnection

if TYPE_CHECKING:
    from bleak.backends.device import BLEDevice

_LOGGER = logging.getLogger(__name__)


class MeshBlock:
    """A MESH block connected over BLE.

    Main API: subscribe to decoded events and send commands.

    Usage:
        # Variant chosen from the block's identification frame
        async with MeshBlock("AA:BB:CC:DD:EE:FF") as block:
            block.on(EventKind.BUTTON, lambda event: print(event["status"]))
            await asyncio.sleep(60)

        # Variant fixed up front
        async with MeshBlock(mac, block_type=BlockType.MOVE) as block:
            block.on(EventKind.TAP, handle_tap)
    """

    def __init__(
            self,
            mac_address: str,
            block_type: BlockType | int | None = None,
            ble_device: BLEDevice | None = None,
            on_detected: Callable[[int], Any] | None = None,
            timeout: float = 10.0,
            max_attempts: int = 4,
            use_services_cache: bool = True,
            auto_enable: bool = True,
    ):
        """Initialize MESH block.

        Args:
            mac_address: Device MAC address
            block_type: Expected block type; None selects the decoder on detection
            ble_device: Optional BLEDevice from a scan or HA bluetooth integration
            on_detected: Optional callback receiving the block type once per connection
            timeout: BLE connection timeout in seconds (default: 10)
            max_attempts: Maximum connection attempts (default: 4)
            use_services_cache: Enable GATT service caching (default: True)
            auto_enable: Enable the block functions right after connecting (default: True)
        """
        self.mac_address = mac_address
        self.auto_enable = auto_enable
        self.bus = EventBus()
        self.interpreter = BaseFrameInterpreter(self.bus)
        self._connection = BLEConnection(
            mac_address,
            self.bus,
            ble_device=ble_device,
            timeout=timeout,
            max_attempts=max_attempts,
            use_services_cache=use_services_cache,
        )

        if block_type is not None:
            decoder_for(block_type)(self.interpreter, on_detected)
        else:
            if on_detected is not None:
                self.interpreter.detected.connect(on_detected)
            self.interpreter.detected.connect(self._select_variant)

    async def __aenter__(self) -> MeshBlock:
        """Connect and enable the block."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Disconnect from block."""
        await self.disconnect()

    async def connect(self) -> None:
        await self._connection.connect()
        if self.auto_enable:
            await self.enable()

    async def disconnect(self) -> None:
        await self._connection.disconnect()

    @property
    def is_connected(self) -> bool:
        return self._connection.is_connected

    @property
    def block_type(self) -> int | None:
        """Block type reported by the block, or None until identified."""
        return self.interpreter.block_type

    @property
    def variant(self) -> VariantDecoder | None:
        """Decoder for the block-specific notifications."""
        return self.interpreter.variant

    def _select_variant(self, block_type: int) -> None:
        if self.interpreter.variant is not None:
            return
        try:
            decoder_cls = decoder_for(block_type)
        except ValueError:
            _LOGGER.warning("Unknown block type 0x%02x, only base frames decoded", block_type)
            return
        _LOGGER.debug(
            "Selected %s for %s block",
            decoder_cls.__name__,
            get_block_type_name(block_type),
        )
        decoder_cls(self.interpreter)

    def on(self, kind: EventKind | str, callback: Callback) -> Callback:
        """Subscribe ``callback`` to events of ``kind``."""
        return self.bus.subscribe(kind, callback)

    def off(self, kind: EventKind | str, callback: Callback) -> None:
        """Unsubscribe ``callback`` from events of ``kind``."""
        self.bus.unsubscribe(kind, callback)

    async def write(self, body: Sequence[int], append_checksum: bool = True) -> None:
        """Send a command without waiting for a write response.

        Args:
            body: Command bytes starting with category and subcommand
            append_checksum: Append the checksum byte (default: True)
        """
        await self._connection.write(encode_write(body, append_checksum), response=False)

    async def write_with_response(self, body: Sequence[int], append_checksum: bool = True) -> None:
        """Send a command through the acknowledged write characteristic."""
        await self._connection.write(encode_write(body, append_checksum), response=True)

    async def enable(self) -> None:
        """Enable the block functions (needed before notifications are sent)."""
        await self._connection.write(build_enable_block_command(True), response=True)

    async def request_status(self) -> None:
        """Ask the block to resend its identification frame."""
        await self._connection.write(build_request_status_command(), response=True)

    async def set_status_bar(self, red: bool, green: bool, blue: bool) -> None:
        await self._connection.write(build_status_bar_command(red, green, blue), response=False)

    async def power_off(self) -> None:
        _LOGGER.info("Powering off %s", self.mac_address)
        await self._connection.write(build_power_off_command(), response=True)
