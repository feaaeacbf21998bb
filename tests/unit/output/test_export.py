from __future__ import annotations

from pathlib import Path

import pytest

from liveshell_modem.errors import ExportError
from liveshell_modem.modem.pipeline import encode
from liveshell_modem.output.export import default_filename, export_wav


def test_default_filename():
    assert default_filename("youtube", timestamp_ms=1700000000123) == "liveshell_youtube_1700000000123.wav"
    name = default_filename("custom")
    assert name.startswith("liveshell_custom_") and name.endswith(".wav")


def test_export_wav_writes_bytes(tmp_path: Path, ethernet_dhcp_config):
    audio = encode(ethernet_dhcp_config)
    p = export_wav(audio, tmp_path / "nested" / "out.wav")
    assert p.exists()
    assert p.read_bytes() == audio.to_wav()


def test_export_wav_failure_is_export_error(tmp_path: Path, ethernet_dhcp_config):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x")
    with pytest.raises(ExportError, match="could not write"):
        export_wav(encode(ethernet_dhcp_config), blocker / "out.wav")
