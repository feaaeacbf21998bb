from pathlib import Path

from liveshell_modem.config.presets import get_preset
from liveshell_modem.config.settings import Configuration, Dhcp, EncryptionScheme, Streaming, WiFi
from liveshell_modem.modem.pipeline import encode
from liveshell_modem.output.export import export_wav


if __name__ == "__main__":
    preset = get_preset("youtube")

    cfg = Configuration(
        connection=WiFi(ssid="studio", password="changeme", encryption_scheme=EncryptionScheme.WPA),
        ip_mode=Dhcp(),
        streaming=Streaming(rtmp_url=preset.rtmp_url, stream_key="xxxx-xxxx-xxxx-xxxx"),
    )

    audio = encode(cfg, debug_dir="tests/output/reference/config_tx", verbose=True)
    print(audio.payload)

    out = Path("tests/output/reference/liveshell_config.wav")
    export_wav(audio, out)
    print(f"Wrote {out} ({audio.duration_s:.2f} s @ {audio.sample_rate} Hz)")
