"""Connect to MESH blocks and print every decoded event.

Usage:
    uv run python examples/listen_blocks.py --scan
    uv run python examples/listen_blocks.py AA:BB:CC:DD:EE:FF --duration 60
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from collections import Counter
from datetime import datetime

from meshblocks import (
    DecodedEvent,
    EventKind,
    MeshBlock,
    discover_blocks,
    get_block_type_name,
)

_RAW_KINDS = {EventKind.INDICATE, EventKind.NOTIFY, EventKind.DISCONNECT}


def _timestamp() -> str:
    return datetime.now().strftime("%H:%M:%S")


def _print_event(address: str, event: DecodedEvent) -> None:
    """Print one decoded event."""
    fields = " ".join(f"{name}={value}" for name, value in event.fields.items())
    print(f"[{_timestamp()}] {address} {event.kind.value} {fields}")


async def scan(duration: float) -> None:
    """List nearby blocks."""
    blocks = await discover_blocks(timeout=duration)
    if not blocks:
        print("No MESH blocks found")
    for address, (device, block_type) in sorted(blocks.items()):
        kind = get_block_type_name(block_type) if block_type is not None else "unknown"
        print(f"{address}  {device.name}  {kind}")


async def listen(address: str, duration: float) -> None:
    """Connect to one block and print its events."""
    counts: Counter[str] = Counter()

    def on_event(event: DecodedEvent) -> None:
        counts[event.kind.value] += 1
        _print_event(address, event)

    def on_detected(block_type: int) -> None:
        print(f"[{_timestamp()}] {address} detected {get_block_type_name(block_type) or hex(block_type)}")

    block = MeshBlock(address, on_detected=on_detected)
    for kind in EventKind:
        if kind not in _RAW_KINDS:
            block.on(kind, on_event)
    block.on(EventKind.DISCONNECT, lambda: print(f"[{_timestamp()}] {address} disconnected"))

    async with block:
        await block.request_status()
        if duration > 0:
            await asyncio.sleep(duration)
        else:
            while block.is_connected:
                await asyncio.sleep(1)

    print("\nSummary:")
    print(f"  block_type={block.block_type}")
    print(f"  events_seen={dict(counts)}")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Scan for MESH blocks or print decoded events from one block."
    )
    parser.add_argument("address", nargs="?", help="Block MAC address")
    parser.add_argument(
        "--scan",
        action="store_true",
        help="Scan for blocks instead of connecting.",
    )
    parser.add_argument(
        "--duration",
        type=float,
        default=30.0,
        help="Scan/listen duration in seconds (0 = run until Ctrl+C). Default: 30",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)
    try:
        if args.scan or not args.address:
            asyncio.run(scan(duration=args.duration or 10.0))
        else:
            asyncio.run(listen(args.address, duration=args.duration))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
