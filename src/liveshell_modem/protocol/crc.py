# protocol/crc.py
from __future__ import annotations

from typing import Iterable

CRC16_POLY = 0x1021


def crc16_ccitt_update(crc: int, value: int) -> int:
    """
    Feed one byte into a running CRC-16/CCITT.
      poly=0x1021, MSB-first, refin=false refout=false xorout=0x0000

    The caller owns the running state; start it at 0 before the first byte.
    """
    crc = (crc ^ ((value & 0xFF) << 8)) & 0xFFFF
    for _ in range(8):
        if crc & 0x8000:
            crc = ((crc << 1) ^ CRC16_POLY) & 0xFFFF
        else:
            crc = (crc << 1) & 0xFFFF
    return crc


def crc16_ccitt(data: Iterable[int], *, init: int = 0x0000) -> int:
    """
    CRC-16/CCITT over a whole buffer (init=0 gives CRC-16/XMODEM).
      Check("123456789") = 0x31C3
    """
    crc = init & 0xFFFF
    for b in data:
        crc = crc16_ccitt_update(crc, b)
    return crc
