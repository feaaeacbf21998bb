from __future__ import annotations

import json
from pathlib import Path

from liveshell_modem import cli
from liveshell_modem.modem.pipeline import encode
from liveshell_modem.output import playback


def test_presets_lists_catalog(capsys):
    assert cli.main(["presets"]) == cli.EXIT_OK
    out = capsys.readouterr().out
    assert "youtube" in out
    assert "rtmp://a.rtmp.youtube.com/live2" in out


def test_encode_writes_wav(tmp_path: Path, ethernet_dhcp_config):
    out = tmp_path / "cfg.wav"
    rc = cli.main(["encode", "--platform", "youtube", "--stream-key", "abcd-1234", "-o", str(out)])
    assert rc == cli.EXIT_OK
    assert out.read_bytes() == encode(ethernet_dhcp_config).to_wav()


def test_encode_from_settings_file_with_override(tmp_path: Path):
    settings = tmp_path / "settings.json"
    settings.write_text(
        json.dumps(
            {
                "connection": {"type": "wifi", "ssid": "studio", "password": "pw"},
                "streaming": {"rtmp_url": "rtmp://live-tyo.twitch.tv/app", "stream_key": "live_1"},
                "device_model": "LiveShell2",
            }
        ),
        encoding="utf-8",
    )
    out = tmp_path / "cfg.wav"
    dbg = tmp_path / "dbg"
    rc = cli.main(["encode", "--config", str(settings), "--device", "LiveShellX", "-o", str(out), "--debug-dir", str(dbg)])
    assert rc == cli.EXIT_OK
    assert int.from_bytes(out.read_bytes()[24:28], "little") == 48000

    payload = (dbg / "00_payload.txt").read_text(encoding="utf-8")
    assert payload.startswith("[WLAN1]\nESSID=studio\nWEP=pw\n[LOCAL]\n")
    assert "app=app playPath=live_1" in payload


def test_missing_stream_key_exits_with_config_error(tmp_path: Path):
    out = tmp_path / "cfg.wav"
    rc = cli.main(["encode", "--platform", "youtube", "-o", str(out)])
    assert rc == cli.EXIT_CONFIG_ERROR
    assert not out.exists()


def test_unreadable_settings_file_is_config_error(tmp_path: Path):
    rc = cli.main(["encode", "--config", str(tmp_path / "missing.json")])
    assert rc == cli.EXIT_CONFIG_ERROR


def test_play_failure_exits_with_output_error(monkeypatch):
    def _boom():
        from liveshell_modem.errors import PlaybackError

        raise PlaybackError("audio output unavailable: no backend")

    monkeypatch.setattr(playback, "_import_sounddevice", _boom)
    rc = cli.main(["encode", "--rtmp-url", "rtmp://h/app", "--stream-key", "k", "--no-file", "--play"])
    assert rc == cli.EXIT_OUTPUT_ERROR


def test_settings_file_with_list_top_level_is_config_error(tmp_path: Path):
    settings = tmp_path / "settings.json"
    settings.write_text("[]", encoding="utf-8")
    rc = cli.main(["encode", "--config", str(settings), "--no-file"])
    assert rc == cli.EXIT_CONFIG_ERROR


def test_settings_file_with_string_section_is_config_error(tmp_path: Path):
    settings = tmp_path / "settings.json"
    settings.write_text(
        json.dumps({"connection": "wifi", "streaming": {"rtmp_url": "rtmp://h/app", "stream_key": "k"}}),
        encoding="utf-8",
    )
    rc = cli.main(["encode", "--config", str(settings), "--no-file"])
    assert rc == cli.EXIT_CONFIG_ERROR


def test_settings_file_with_null_ssid_is_config_error(tmp_path: Path):
    settings = tmp_path / "settings.json"
    settings.write_text(
        json.dumps(
            {
                "connection": {"type": "wifi", "ssid": None},
                "streaming": {"rtmp_url": "rtmp://h/app", "stream_key": "k"},
            }
        ),
        encoding="utf-8",
    )
    out = tmp_path / "cfg.wav"
    rc = cli.main(["encode", "--config", str(settings), "-o", str(out)])
    assert rc == cli.EXIT_CONFIG_ERROR
    assert not out.exists()
