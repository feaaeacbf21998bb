# src/liveshell_modem/protocol/framing.py
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .crc import crc16_ccitt_update

INT16_SCALE = 32768


@dataclass(frozen=True)
class FrameParams:
    """
    Fixed framing / modulation parameters of the device's audio link.

      - 12 idle (1) bits before and after the frame
      - 8N1 byte framing, data bits MSB first, CRC-16/CCITT trailer
      - 32 samples per bit, mark = fs/4, space = fs/8
      - whole frame repeated 3 times back to back

    Amplitude is expressed on the int16 grid (3276 / 32768 ~= 0.1 full scale)
    because the wave table is quantized to it.
    """
    preamble_bits: int = 12
    postamble_bits: int = 12
    samples_per_bit: int = 32
    repeat_count: int = 3
    amplitude_int16: int = 3276
    mark_divisor: int = 4
    space_divisor: int = 8

    @property
    def amplitude(self) -> float:
        return self.amplitude_int16 / INT16_SCALE

    @property
    def mark_cycles_per_bit(self) -> int:
        return _cycles_per_bit(self.samples_per_bit, self.mark_divisor)

    @property
    def space_cycles_per_bit(self) -> int:
        return _cycles_per_bit(self.samples_per_bit, self.space_divisor)

    def mark_hz(self, sample_rate: int) -> float:
        return sample_rate / self.mark_divisor

    def space_hz(self, sample_rate: int) -> float:
        return sample_rate / self.space_divisor

    def baud_rate(self, sample_rate: int) -> float:
        return sample_rate / self.samples_per_bit


FRAME_PARAMS = FrameParams()

BITS_PER_FRAMED_BYTE = 10  # start + 8 data + stop
CRC_BYTES = 2


def _cycles_per_bit(samples_per_bit: int, divisor: int) -> int:
    # Whole cycles only, so every bit ends where the next one starts (phase 0).
    if divisor <= 0 or samples_per_bit % divisor != 0:
        raise ValueError(
            f"samples_per_bit must be divisible by the tone divisor. "
            f"Got samples_per_bit={samples_per_bit}, divisor={divisor}."
        )
    return samples_per_bit // divisor


def _push_framed_byte(out: list[int], value: int) -> None:
    out.append(0)
    for i in range(7, -1, -1):
        out.append((value >> i) & 1)
    out.append(1)


def frame(payload: bytes, params: FrameParams = FRAME_PARAMS) -> np.ndarray:
    """
    payload -> 0/1 bitstream (uint8)

      [1 x preamble] [0 b7..b0 1]*len(payload) [0 crc_hi 1] [0 crc_lo 1] [1 x postamble]

    The CRC covers the payload only. An empty payload still carries the CRC
    bytes (CRC of nothing = 0x0000).
    """
    bits: list[int] = [1] * params.preamble_bits

    crc = 0
    for b in payload:
        _push_framed_byte(bits, b)
        crc = crc16_ccitt_update(crc, b)

    _push_framed_byte(bits, (crc >> 8) & 0xFF)
    _push_framed_byte(bits, crc & 0xFF)

    bits.extend([1] * params.postamble_bits)
    return np.asarray(bits, dtype=np.uint8)


def frame_bit_len(payload_len: int, params: FrameParams = FRAME_PARAMS) -> int:
    if payload_len < 0:
        raise ValueError("payload_len out of range")
    return params.preamble_bits + BITS_PER_FRAMED_BYTE * (payload_len + CRC_BYTES) + params.postamble_bits
