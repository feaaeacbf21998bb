# src/liveshell_modem/modem/pipeline.py
from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
import json
import logging

import numpy as np

from liveshell_modem.config.settings import Configuration
from liveshell_modem.containers.wav import to_wav_bytes
from liveshell_modem.modem.audio.fsk_tx import modulate
from liveshell_modem.protocol.framing import FRAME_PARAMS, FrameParams, frame
from liveshell_modem.protocol.line_protocol import serialize

log = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class EncodedAudio:
    """
    Result of one encode call: the PCM buffer plus what went into it.
    Hand `samples` / `sample_rate` to a playback sink or `to_wav()` to a file sink.
    """
    samples: np.ndarray
    sample_rate: int
    payload: str
    bit_count: int

    @property
    def duration_s(self) -> float:
        return self.samples.shape[0] / float(self.sample_rate)

    def to_wav(self) -> bytes:
        return to_wav_bytes(self.samples, self.sample_rate)


# ----------------------------
# Debug dump helpers
# ----------------------------

def _pack_bits(bits: np.ndarray) -> bytes:
    """Pack bits (MSB-first) into bytes for debug dumps."""
    return np.packbits(np.asarray(bits, dtype=np.uint8)).tobytes()


def _dump_bytes(debug_dir: Path | None, name: str, data: bytes) -> None:
    if debug_dir is None:
        return
    debug_dir.mkdir(parents=True, exist_ok=True)
    (debug_dir / name).write_bytes(data)


def _dump_text(debug_dir: Path | None, name: str, text: str) -> None:
    if debug_dir is None:
        return
    debug_dir.mkdir(parents=True, exist_ok=True)
    (debug_dir / name).write_text(text, encoding="utf-8")


def _dump_npy(debug_dir: Path | None, name: str, arr: np.ndarray) -> None:
    if debug_dir is None:
        return
    debug_dir.mkdir(parents=True, exist_ok=True)
    np.save(str(debug_dir / name), arr)


# ----------------------------
# Pipeline
# ----------------------------

def tx_bytes_to_pcm(payload: bytes, *, params: FrameParams = FRAME_PARAMS) -> tuple[np.ndarray, np.ndarray]:
    """bytes -> (framed bits, PCM). No configuration involved."""
    bits = frame(payload, params)
    return bits, modulate(bits, params)


def encode(
    config: Configuration,
    *,
    params: FrameParams = FRAME_PARAMS,
    debug_dir: str | Path | None = None,
    verbose: bool = False,
) -> EncodedAudio:
    """
    Full TX pipeline: Configuration -> line protocol text -> framed bits -> PCM

    ConfigurationError is raised before any framing or modulation happens.
    If debug_dir is provided, writes stage artifacts to that folder.
    """
    dbg = Path(debug_dir) if debug_dir is not None else None

    text = serialize(config)
    payload = text.encode("utf-8")
    sample_rate = config.sample_rate
    _dump_text(dbg, "00_payload.txt", text)

    bits, pcm = tx_bytes_to_pcm(payload, params=params)
    _dump_bytes(dbg, "01_bits.packed", _pack_bits(bits))
    _dump_npy(dbg, "02_pcm.npy", pcm)

    audio = EncodedAudio(samples=pcm, sample_rate=sample_rate, payload=text, bit_count=int(bits.size))
    if dbg is not None:
        _dump_bytes(dbg, "03_pcm.wav", audio.to_wav())

    if verbose and dbg is not None:
        _dump_text(
            dbg,
            "manifest_tx.json",
            json.dumps(
                {
                    "direction": "tx",
                    "device_model": config.device_model.value,
                    "sample_rate": sample_rate,
                    "baud_rate": params.baud_rate(sample_rate),
                    "frame_params": asdict(params),
                    "payload_len": len(payload),
                    "bit_count": audio.bit_count,
                    "sample_count": int(pcm.shape[0]),
                    "duration_s": audio.duration_s,
                },
                indent=2,
                sort_keys=True,
            ),
        )

    log.debug(
        "encoded %d payload bytes -> %d bits -> %d samples @ %d Hz (%.2f s)",
        len(payload), audio.bit_count, pcm.shape[0], sample_rate, audio.duration_s,
    )
    return audio
