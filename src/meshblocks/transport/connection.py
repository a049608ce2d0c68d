"""BLE connection management."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from bleak import BleakClient, BleakScanner
from bleak_retry_connector import BleakClientWithServiceCache, establish_connection

from ..events import EventBus, EventKind
from ..exceptions import BLEConnectionError, BLETimeoutError
from ..protocol.constants import (
    INDICATE_UUID,
    NOTIFY_UUID,
    SERVICE_UUID,
    WRITE_UUID,
    WRITE_WO_RESPONSE_UUID,
)

if TYPE_CHECKING:
    from bleak.backends.characteristic import BleakGATTCharacteristic
    from bleak.backends.device import BLEDevice

_LOGGER = logging.getLogger(__name__)


class BLEConnection:
    """Manages the BLE connection to one MESH block.

    Features:
    - Automatic retry logic with bleak-retry-connector
    - Service caching for faster reconnections
    - Context manager for automatic cleanup
    - Indications and notifications published on an EventBus as raw frames
    - A single ``disconnect`` event per connection
    """

    def __init__(
            self,
            mac_address: str,
            bus: EventBus,
            ble_device: BLEDevice | None = None,
            timeout: float = 10.0,
            max_attempts: int = 4,
            use_services_cache: bool = True,
    ):
        """Initialize BLE connection manager.

        Args:
            mac_address: Device MAC address
            bus: Bus receiving indicate/notify frames and the disconnect event
            ble_device: Optional BLEDevice from a scan or Home Assistant bluetooth integration
            timeout: Connection timeout in seconds (default: 10)
            max_attempts: Maximum connection attempts for bleak-retry-connector (default: 4)
            use_services_cache: Enable GATT service caching for faster reconnections (default: True)
        """
        self.mac_address = mac_address
        self.bus = bus
        self.ble_device = ble_device
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.use_services_cache = use_services_cache

        self._client: BleakClient | None = None
        self._write_char: BleakGATTCharacteristic | None = None
        self._write_wo_response_char: BleakGATTCharacteristic | None = None
        self._disconnect_published = True

    async def __aenter__(self) -> BLEConnection:
        """Connect to device (context manager entry)."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Disconnect from device (context manager exit)."""
        await self.disconnect()

    async def connect(self) -> None:
        """Establish BLE connection and subscribe to indications/notifications.

        Raises:
            BLEConnectionError: If connection fails
            BLETimeoutError: If connection times out
        """
        if self._client and self._client.is_connected:
            return  # Already connected

        try:
            _LOGGER.debug(
                "Connecting to %s with bleak-retry-connector (max_attempts=%d)",
                self.mac_address,
                self.max_attempts
            )

            if self.ble_device:
                device = self.ble_device
            else:
                device = await BleakScanner.find_device_by_address(
                    self.mac_address,
                    timeout=self.timeout
                )
                if device is None:
                    raise BLEConnectionError(
                        f"Device {self.mac_address} not found during scan"
                    )

            self._client = await establish_connection(
                client_class=BleakClientWithServiceCache,
                device=device,
                name=device.name or self.mac_address,
                disconnected_callback=self._disconnected_callback,
                max_attempts=self.max_attempts,
                use_services_cache=self.use_services_cache,
                timeout=self.timeout,
            )

            self._disconnect_published = False
            _LOGGER.info("Connected to %s", self.mac_address)

            await self._setup_characteristics()

        except asyncio.TimeoutError as e:
            raise BLETimeoutError(
                f"Connection timeout after {self.timeout}s"
            ) from e
        except BLEConnectionError:
            raise
        except Exception as e:
            raise BLEConnectionError(
                f"Failed to connect: {e}"
            ) from e

    async def disconnect(self) -> None:
        """Disconnect from device."""
        if self._client and self._client.is_connected:
            try:
                _LOGGER.debug("Disconnecting from %s", self.mac_address)
                await self._client.disconnect()
            except Exception as e:
                _LOGGER.warning("Error during disconnect: %s", e)
            finally:
                self._client = None
        self._publish_disconnect()

    async def _setup_characteristics(self) -> None:
        """Resolve the MESH characteristics and start indications/notifications.

        Raises:
            BLEConnectionError: If service/characteristic not found
        """
        if not self._client or not self._client.is_connected:
            raise BLEConnectionError("Not connected")

        service = self._client.services.get_service(SERVICE_UUID)
        if not service:
            raise BLEConnectionError(
                f"Service {SERVICE_UUID} not found"
            )

        def characteristic(uuid: str) -> BleakGATTCharacteristic:
            char = service.get_characteristic(uuid)
            if char is None:
                raise BLEConnectionError(f"Characteristic {uuid} not found")
            return char

        self._write_char = characteristic(WRITE_UUID)
        self._write_wo_response_char = characteristic(WRITE_WO_RESPONSE_UUID)

        await self._client.start_notify(characteristic(INDICATE_UUID), self._indicate_callback)
        await self._client.start_notify(characteristic(NOTIFY_UUID), self._notify_callback)

        _LOGGER.debug("Indications and notifications started")

    def _indicate_callback(self, sender, data: bytearray) -> None:
        self.bus.publish(EventKind.INDICATE, bytes(data))

    def _notify_callback(self, sender, data: bytearray) -> None:
        self.bus.publish(EventKind.NOTIFY, bytes(data))

    def _disconnected_callback(self, client: BleakClient) -> None:
        _LOGGER.info("Disconnected from %s", self.mac_address)
        self._publish_disconnect()

    def _publish_disconnect(self) -> None:
        if self._disconnect_published:
            return
        self._disconnect_published = True
        self.bus.publish(EventKind.DISCONNECT)

    async def write(self, data: bytes, response: bool = False) -> None:
        """Write an encoded command frame to the block.

        Args:
            data: Command bytes to write (checksum already appended)
            response: Use the write-with-response characteristic (default: False)

        Raises:
            BLEConnectionError: If not connected or write fails
        """
        if not self._client or not self._client.is_connected:
            raise BLEConnectionError("Not connected")

        char = self._write_char if response else self._write_wo_response_char
        if char is None:
            raise BLEConnectionError("Characteristics not set up")

        _LOGGER.debug("Writing %s (response=%s)", data.hex(), response)
        try:
            await self._client.write_gatt_char(char, data, response=response)
        except Exception as e:
            raise BLEConnectionError(f"Write failed: {e}") from e

    @property
    def is_connected(self) -> bool:
        """Check if currently connected to device."""
        return self._client is not None and self._client.is_connected
