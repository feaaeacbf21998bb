from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

import numpy as np

from liveshell_modem.protocol.framing import FRAME_PARAMS, INT16_SCALE, FrameParams


@dataclass(frozen=True, eq=False)
class WaveTable:
    """One bit period of each tone. Arrays are read-only; share freely."""
    space: np.ndarray  # bit 0
    mark: np.ndarray   # bit 1


def _tone(params: FrameParams, cycles_per_bit: int) -> np.ndarray:
    k = np.arange(params.samples_per_bit, dtype=np.float64)
    s = np.sin(2.0 * np.pi * k * cycles_per_bit / params.samples_per_bit)
    # Quantized on the int16 grid so exported WAV samples match the device reference exactly.
    q = np.round(params.amplitude_int16 * s) / INT16_SCALE
    out = q.astype(np.float32)
    out.setflags(write=False)
    return out


@lru_cache(maxsize=8)
def _cached_table(params: FrameParams) -> WaveTable:
    return WaveTable(
        space=_tone(params, params.space_cycles_per_bit),
        mark=_tone(params, params.mark_cycles_per_bit),
    )


def wave_table(params: FrameParams = FRAME_PARAMS) -> WaveTable:
    """
    Cached per FrameParams (frozen dataclass -> hashable). Built once,
    never mutated afterwards.
    """
    return _cached_table(params)
