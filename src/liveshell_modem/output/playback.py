# src/liveshell_modem/output/playback.py
"""
Audio output sink.

The encoder itself never touches an audio device. This module owns the
device handle, and only for the duration of `output_stream(...)`: the stream
is opened for exactly the sample rate of the buffer being played and closed
when the block exits.
"""
from __future__ import annotations

from contextlib import contextmanager
import logging
from typing import Any, Iterator, Optional

import numpy as np

from liveshell_modem.errors import PlaybackError
from liveshell_modem.modem.pipeline import EncodedAudio

log = logging.getLogger(__name__)


def _import_sounddevice():
    try:
        import sounddevice
    except (ImportError, OSError) as e:
        # OSError: the PortAudio shared library could not be loaded.
        raise PlaybackError(f"audio output unavailable: {e}") from e
    return sounddevice


@contextmanager
def output_stream(sample_rate: int, *, device: Optional[Any] = None) -> Iterator[Any]:
    """Open a mono float32 output stream at `sample_rate`; closed on exit."""
    sd = _import_sounddevice()
    try:
        stream = sd.OutputStream(samplerate=int(sample_rate), channels=1, dtype="float32", device=device)
    except sd.PortAudioError as e:
        raise PlaybackError(f"could not open output device at {sample_rate} Hz: {e}") from e

    log.debug("opened output stream @ %d Hz (device=%r)", sample_rate, device)
    try:
        with stream:
            yield stream
    except sd.PortAudioError as e:
        raise PlaybackError(f"audio output failed: {e}") from e
    finally:
        log.debug("closed output stream @ %d Hz", sample_rate)


def play_pcm(samples: np.ndarray, sample_rate: int, *, device: Optional[Any] = None) -> None:
    """Blocks until every sample has been handed to the device."""
    frames = np.ascontiguousarray(np.asarray(samples, dtype=np.float32).reshape(-1, 1))
    with output_stream(sample_rate, device=device) as stream:
        stream.write(frames)
    log.info("played %d samples @ %d Hz", frames.shape[0], sample_rate)


def play(audio: EncodedAudio, *, device: Optional[Any] = None) -> None:
    play_pcm(audio.samples, audio.sample_rate, device=device)
