from __future__ import annotations

import io
import wave

import numpy as np

WAV_HEADER_LEN = 44


def float_to_int16(pcm: np.ndarray) -> np.ndarray:
    """
    Clamp to [-1, 1] then scale asymmetrically to cover the whole
    two's-complement range: negatives * 32768, non-negatives * 32767.
    Truncates toward zero.
    """
    x = np.clip(np.asarray(pcm, dtype=np.float64), -1.0, 1.0)
    scaled = np.where(x < 0.0, x * 32768.0, x * 32767.0)
    return np.trunc(scaled).astype(np.int16)


def to_wav_bytes(pcm: np.ndarray, sample_rate: int) -> bytes:
    """
    Float PCM -> canonical 44-byte-header RIFF/WAVE (PCM, mono, 16-bit LE).
    """
    if int(sample_rate) <= 0:
        raise ValueError(f"sample_rate must be positive, got {sample_rate}")

    pcm_i16 = float_to_int16(pcm)

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)  # int16
        wf.setframerate(int(sample_rate))
        wf.writeframes(pcm_i16.tobytes())
    return buf.getvalue()
