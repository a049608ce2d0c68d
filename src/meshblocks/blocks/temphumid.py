"""Temperature & humidity block (MESH-100TH)."""

from __future__ import annotations

from ..events import DecodedEvent, EventKind
from ..models.enums import BlockType
from ..protocol.constants import CATEGORY_BLOCK
from ..protocol.frames import DispatchKey
from ..protocol.values import int_le16, scaled_temp
from .variant import VariantDecoder

TEMPHUMID_KEY = DispatchKey(CATEGORY_BLOCK, 0x00, 9)


class TempHumidDecoder(VariantDecoder):
    """Decodes temperature (degrees Celsius) and relative humidity (percent).

    Format:
        [0x01][0x00][request_id][mode][temperature:2 LE, 0.1C][humidity:2 LE][checksum]
    """

    block_type = BlockType.TEMP_HUMID

    def _decoders(self):
        return {TEMPHUMID_KEY: self._decode_temphumid}

    @staticmethod
    def _decode_temphumid(frame: bytes) -> DecodedEvent:
        return DecodedEvent(
            EventKind.TEMPHUMID,
            {
                "request_id": frame[2],
                "mode": frame[3],
                "temperature": scaled_temp(frame[4:6]),
                "humidity": int_le16(frame[6:8]),
            },
        )
