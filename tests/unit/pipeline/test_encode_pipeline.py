from __future__ import annotations

import dataclasses
import json

import numpy as np
import pytest

from liveshell_modem.config.settings import Configuration, DeviceModel, Ethernet, Streaming, WiFi
from liveshell_modem.containers.wav import WAV_HEADER_LEN
from liveshell_modem.errors import ConfigurationError
from liveshell_modem.modem.pipeline import encode, tx_bytes_to_pcm
from liveshell_modem.protocol.framing import FRAME_PARAMS, frame_bit_len
from liveshell_modem.protocol.line_protocol import serialize


def _expected_samples(payload_len: int) -> int:
    return frame_bit_len(payload_len) * FRAME_PARAMS.samples_per_bit * FRAME_PARAMS.repeat_count


def test_end_to_end_ethernet_dhcp_youtube(ethernet_dhcp_config):
    audio = encode(ethernet_dhcp_config)

    payload_len = len(serialize(ethernet_dhcp_config).encode("utf-8"))
    assert audio.payload == serialize(ethernet_dhcp_config)
    assert audio.sample_rate == 44100
    assert audio.bit_count == frame_bit_len(payload_len)
    assert audio.samples.dtype == np.float32
    assert audio.samples.size == _expected_samples(payload_len)
    assert audio.duration_s > 0.0
    assert audio.duration_s == pytest.approx(audio.samples.size / 44100)


def test_duration_proportional_to_payload(ethernet_dhcp_config):
    short = encode(ethernet_dhcp_config)
    longer_cfg = dataclasses.replace(
        ethernet_dhcp_config,
        streaming=dataclasses.replace(ethernet_dhcp_config.streaming, stream_key="abcd-1234" + "x" * 40),
    )
    longer = encode(longer_cfg)

    # 40 more payload bytes -> 40 more framed bytes per repeat
    extra = 40 * 10 * FRAME_PARAMS.samples_per_bit * FRAME_PARAMS.repeat_count
    assert longer.samples.size - short.samples.size == extra


def test_device_model_selects_sample_rate(ethernet_dhcp_config):
    cfg = dataclasses.replace(ethernet_dhcp_config, device_model=DeviceModel.LIVESHELL_2)
    audio = encode(cfg)
    assert audio.sample_rate == 16000
    # sample count does not depend on rate, only duration does
    assert audio.samples.size == encode(ethernet_dhcp_config).samples.size


def test_to_wav(wifi_static_config):
    audio = encode(wifi_static_config)
    data = audio.to_wav()
    assert len(data) == WAV_HEADER_LEN + 2 * audio.samples.size
    assert int.from_bytes(data[24:28], "little") == 48000


def test_configuration_error_before_any_work(tmp_path):
    cfg = Configuration(connection=WiFi(ssid=""), streaming=Streaming(rtmp_url="rtmp://h/app", stream_key="k"))
    dbg = tmp_path / "dbg"
    with pytest.raises(ConfigurationError):
        encode(cfg, debug_dir=dbg)
    assert not dbg.exists()


def test_bad_rtmp_url_is_configuration_error():
    cfg = Configuration(connection=Ethernet(), streaming=Streaming(rtmp_url="https://youtube.com", stream_key="k"))
    with pytest.raises(ConfigurationError, match="RTMP URL"):
        encode(cfg)


def test_debug_dir_artifacts(tmp_path, ethernet_dhcp_config):
    dbg = tmp_path / "dbg"
    audio = encode(ethernet_dhcp_config, debug_dir=dbg, verbose=True)

    assert (dbg / "00_payload.txt").read_text(encoding="utf-8") == audio.payload
    packed = (dbg / "01_bits.packed").read_bytes()
    assert len(packed) == (audio.bit_count + 7) // 8
    assert np.array_equal(np.load(dbg / "02_pcm.npy"), audio.samples)
    assert (dbg / "03_pcm.wav").read_bytes() == audio.to_wav()

    manifest = json.loads((dbg / "manifest_tx.json").read_text(encoding="utf-8"))
    assert manifest["sample_rate"] == 44100
    assert manifest["bit_count"] == audio.bit_count
    assert manifest["frame_params"]["samples_per_bit"] == 32


def test_tx_bytes_to_pcm_empty_payload():
    bits, pcm = tx_bytes_to_pcm(b"")
    assert bits.size == frame_bit_len(0)
    assert pcm.size == _expected_samples(0)


def test_manifest_baud_rate(tmp_path, wifi_static_config):
    dbg = tmp_path / "dbg"
    encode(wifi_static_config, debug_dir=dbg, verbose=True)
    manifest = json.loads((dbg / "manifest_tx.json").read_text(encoding="utf-8"))
    assert manifest["baud_rate"] == 48000 / 32


def test_encode_with_undecodable_argv_text(tmp_path):
    cfg = Configuration(connection=WiFi(ssid="st\udcfcdio"), streaming=Streaming(rtmp_url="rtmp://h/app", stream_key="k"))
    dbg = tmp_path / "dbg"
    audio = encode(cfg, debug_dir=dbg)
    assert "ESSID=st�dio\n" in audio.payload
    assert (dbg / "00_payload.txt").read_text(encoding="utf-8") == audio.payload
    payload_len = len(audio.payload.encode("utf-8"))
    assert audio.bit_count == frame_bit_len(payload_len)
