from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Optional, Union

from liveshell_modem.errors import ExportError
from liveshell_modem.modem.pipeline import EncodedAudio

log = logging.getLogger(__name__)

PathLike = Union[str, Path]


def default_filename(platform_id: str, timestamp_ms: Optional[int] = None) -> str:
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"liveshell_{platform_id}_{timestamp_ms}.wav"


def write_bytes(path: PathLike, data: bytes) -> Path:
    p = Path(path)
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(data)
    except OSError as e:
        raise ExportError(f"could not write {p}: {e}") from e
    return p


def export_wav(audio: EncodedAudio, path: PathLike) -> Path:
    """Write `audio` as a 16-bit mono WAV. Returns the path written."""
    p = write_bytes(path, audio.to_wav())
    log.info("wrote %s (%.2f s @ %d Hz)", p, audio.duration_s, audio.sample_rate)
    return p
