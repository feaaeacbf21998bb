# tests/unit/protocol/test_crc.py
from __future__ import annotations

from liveshell_modem.protocol.crc import crc16_ccitt, crc16_ccitt_update


def test_crc16_ccitt_known_vector():
    assert crc16_ccitt(b"123456789") == 0x31C3


def test_crc16_ccitt_single_byte_vector():
    assert crc16_ccitt(b"A") == 0x58E5


def test_crc_empty_is_zero():
    # init=0, no xorout
    assert crc16_ccitt(b"") == 0x0000


def test_running_update_matches_whole_buffer():
    data = b"[ETHER]\n[LOCAL]\n"
    crc = 0
    for b in data:
        crc = crc16_ccitt_update(crc, b)
    assert crc == crc16_ccitt(data)


def test_update_masks_to_16_bits():
    crc = 0
    for b in bytes(range(256)) * 4:
        crc = crc16_ccitt_update(crc, b)
        assert 0 <= crc <= 0xFFFF
