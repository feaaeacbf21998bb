from __future__ import annotations

import numpy as np

from liveshell_modem.modem.audio.wave_table import wave_table
from liveshell_modem.protocol.framing import FRAME_PARAMS, FrameParams


def _validate_bits(bits: np.ndarray) -> np.ndarray:
    b = np.asarray(bits, dtype=np.uint8)
    if b.ndim != 1:
        raise ValueError("bits must be 1-D")
    if np.any((b != 0) & (b != 1)):
        raise ValueError("bits must contain only 0/1")
    return b


def bits_to_pcm(bits: list[int] | np.ndarray, params: FrameParams = FRAME_PARAMS) -> np.ndarray:
    """
    One pass of the bitstream -> float32 PCM.

    Each bit becomes one precomputed bit-period waveform. Both tones hold a
    whole number of cycles per bit, so the signal is phase-continuous
    without tracking phase across bits.
    """
    b = _validate_bits(bits)
    table = wave_table(params)

    # rows: 0 -> space, 1 -> mark
    waves = np.stack([table.space, table.mark])
    return waves[b].reshape(-1)


def modulate(bits: list[int] | np.ndarray, params: FrameParams = FRAME_PARAMS) -> np.ndarray:
    """
    Bitstream -> float32 PCM, repeated `repeat_count` times back to back
    with no gap so the receiver gets several chances to lock on.

    len(out) == len(bits) * samples_per_bit * repeat_count
    """
    once = bits_to_pcm(bits, params)
    return np.tile(once, params.repeat_count)


def samples_len(bit_count: int, params: FrameParams = FRAME_PARAMS) -> int:
    return bit_count * params.samples_per_bit * params.repeat_count
