"""CRC-16/CCITT-FALSE checksum used by the tag 63 field."""
from __future__ import annotations

CRC16_POLY = 0x1021
CRC16_INIT = 0xFFFF
CRC_FIELD_PREFIX = "6304"


def crc16_ccitt(data: str | bytes) -> str:
    """Compute CRC-16/CCITT-FALSE over the UTF-8 bytes of ``data``.

    MSB first, no reflection and no final XOR. Returns 4 uppercase hex digits.
    """

    raw = data.encode("utf-8") if isinstance(data, str) else data
    checksum = CRC16_INIT
    for byte in raw:
        checksum ^= byte << 8
        for _ in range(8):
            if checksum & 0x8000:
                checksum = (checksum << 1) ^ CRC16_POLY
            else:
                checksum <<= 1
        checksum &= 0xFFFF
    return f"{checksum:04X}"


def crc_matches(payload: str) -> bool:
    """Check the trailing 4 hex digits of a full payload against its prefix."""

    if len(payload) < 8 or payload[-8:-4] != CRC_FIELD_PREFIX:
        return False
    return crc16_ccitt(payload[:-4]) == payload[-4:].upper()
