"""Discovery of MESH blocks over BLE."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from bleak import BleakScanner

from .models.enums import BlockType, block_type_from_name
from .protocol.constants import NAME_PREFIX, SERVICE_UUID

if TYPE_CHECKING:
    from bleak.backends.device import BLEDevice

_LOGGER = logging.getLogger(__name__)


async def discover_blocks(
        timeout: float = 10.0,
        name_prefix: str = NAME_PREFIX,
) -> dict[str, tuple[BLEDevice, BlockType | None]]:
    """Scan for MESH blocks.

    A device is kept when its name starts with ``name_prefix``. With the
    default prefix, devices advertising the MESH service UUID are kept too.

    Args:
        timeout: Scan duration in seconds (default: 10)
        name_prefix: Advertised name prefix, e.g. "MESH-100BU" for buttons only

    Returns:
        Mapping of device address to (BLEDevice, block type guessed from the name)
    """
    _LOGGER.debug("Scanning for MESH blocks (%.1fs, prefix=%s)", timeout, name_prefix)
    found = await BleakScanner.discover(timeout=timeout, return_adv=True)

    blocks: dict[str, tuple[BLEDevice, BlockType | None]] = {}
    for address, (device, advertisement) in found.items():
        name = device.name or advertisement.local_name or ""
        service_uuids = [uuid.lower() for uuid in advertisement.service_uuids]
        keep = name.startswith(name_prefix)
        # A narrower prefix selects one block kind, so the shared service UUID is not enough
        if not keep and name_prefix == NAME_PREFIX:
            keep = SERVICE_UUID in service_uuids
        if not keep:
            continue
        blocks[address] = (device, block_type_from_name(name))

    _LOGGER.info("Found %d MESH block(s)", len(blocks))
    return blocks
