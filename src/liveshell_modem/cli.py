#!/usr/bin/env python3
# src/liveshell_modem/cli.py
#
# Usage:
#   liveshell-modem presets
#   liveshell-modem encode --platform youtube --stream-key abcd-1234 -o out.wav
#   liveshell-modem encode --wifi-ssid home --wifi-password secret \
#       --static-ip 192.168.0.10 --subnet-mask 255.255.255.0 \
#       --gateway 192.168.0.1 --dns 192.168.0.1 \
#       --rtmp-url rtmp://live-tyo.twitch.tv/app --stream-key live_xxx --play
#   liveshell-modem encode --config settings.json --device LiveShellX -o out.wav
#
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from liveshell_modem.config.presets import PLATFORM_PRESETS, get_preset, preset_ids
from liveshell_modem.config.settings import (
    Configuration,
    DeviceModel,
    Dhcp,
    EncryptionScheme,
    Ethernet,
    RtmpAuth,
    StaticIp,
    Streaming,
    WiFi,
)
from liveshell_modem.errors import ConfigurationError, ExportError, PlaybackError
from liveshell_modem.modem.pipeline import encode
from liveshell_modem.output.export import default_filename, export_wav
from liveshell_modem.output.playback import play

log = logging.getLogger("liveshell_modem")

EXIT_OK = 0
EXIT_OUTPUT_ERROR = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="liveshell-modem",
        description="Encode LiveShell network + RTMP settings into a configuration sound (FSK WAV).",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    sub.add_parser("presets", help="list streaming platform presets")

    e = sub.add_parser("encode", help="build the configuration sound")
    e.add_argument("--config", type=Path, help="JSON settings file (flags below override it)")
    e.add_argument("--device", choices=[m.value for m in DeviceModel], help="target device model")

    net = e.add_argument_group("network")
    net.add_argument("--wifi-ssid", help="use WiFi with this SSID (default: Ethernet)")
    net.add_argument("--wifi-password", default="")
    net.add_argument("--wifi-stealth", action="store_true", help="stealth (hidden SSID) mode")
    net.add_argument(
        "--wifi-encryption",
        choices=[s.value for s in EncryptionScheme],
        default=EncryptionScheme.WPA.value,
    )
    net.add_argument("--static-ip", help="static address (needs --subnet-mask, --gateway, --dns)")
    net.add_argument("--subnet-mask", default="")
    net.add_argument("--gateway", default="")
    net.add_argument("--dns", default="")

    st = e.add_argument_group("streaming")
    st.add_argument("--platform", choices=preset_ids(), help="prefill --rtmp-url from a preset")
    st.add_argument("--rtmp-url")
    st.add_argument("--stream-key")
    st.add_argument("--one-time", action="store_true", help="stream key is single-use")
    st.add_argument("--auth-user", default="")
    st.add_argument("--auth-password", default="")

    out = e.add_argument_group("output")
    out.add_argument("-o", "--output", type=Path, help="WAV path (default: liveshell_<platform>_<ms>.wav)")
    out.add_argument("--play", action="store_true", help="play through the default audio output")
    out.add_argument("--no-file", action="store_true", help="do not write a WAV file")
    out.add_argument("--debug-dir", type=Path, help="dump every pipeline stage here")
    return p


def _load_base_config(path: Optional[Path]) -> Optional[Configuration]:
    if path is None:
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"could not read settings file {path}: {e}") from e
    return Configuration.from_dict(data)


def config_from_args(args: argparse.Namespace) -> Configuration:
    base = _load_base_config(args.config)

    if args.wifi_ssid is not None:
        connection = WiFi(
            ssid=args.wifi_ssid,
            password=args.wifi_password,
            stealth_mode=args.wifi_stealth,
            encryption_scheme=EncryptionScheme(args.wifi_encryption),
        )
    elif base is not None:
        connection = base.connection
    else:
        connection = Ethernet()

    if args.static_ip is not None:
        ip_mode = StaticIp(address=args.static_ip, subnet_mask=args.subnet_mask, gateway=args.gateway, dns=args.dns)
    elif base is not None:
        ip_mode = base.ip_mode
    else:
        ip_mode = Dhcp()

    streaming = base.streaming if base is not None else Streaming()
    if args.platform is not None:
        streaming = replace(streaming, rtmp_url=get_preset(args.platform).rtmp_url)
    if args.rtmp_url is not None:
        streaming = replace(streaming, rtmp_url=args.rtmp_url)
    if args.stream_key is not None:
        streaming = replace(streaming, stream_key=args.stream_key)
    if args.one_time:
        streaming = replace(streaming, one_time=True)
    if args.auth_user or args.auth_password:
        streaming = replace(streaming, auth=RtmpAuth(username=args.auth_user, password=args.auth_password))

    if args.device is not None:
        device_model = DeviceModel.parse(args.device)
    elif base is not None:
        device_model = base.device_model
    else:
        device_model = DeviceModel.LIVESHELL_PRO

    return Configuration(connection=connection, streaming=streaming, ip_mode=ip_mode, device_model=device_model)


def cmd_presets(args: argparse.Namespace) -> int:
    for p in PLATFORM_PRESETS:
        line = f"{p.id:<10} {p.name:<16} {p.rtmp_url or '-'}"
        if p.note:
            line += f"  ({p.note})"
        print(line)
    return EXIT_OK


def cmd_encode(args: argparse.Namespace) -> int:
    cfg = config_from_args(args)
    audio = encode(cfg, debug_dir=args.debug_dir, verbose=args.verbose)
    log.info(
        "%s: %d payload bytes, %d bits, %.2f s @ %d Hz",
        cfg.device_model.value, len(audio.payload.encode("utf-8")), audio.bit_count,
        audio.duration_s, audio.sample_rate,
    )

    if not args.no_file:
        path = args.output or Path(default_filename(args.platform or "custom"))
        export_wav(audio, path)
        print(path)

    if args.play:
        play(audio)
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(message)s",
    )

    handler = {"presets": cmd_presets, "encode": cmd_encode}[args.command]
    try:
        return handler(args)
    except ConfigurationError as e:
        log.error("invalid settings: %s", e)
        return EXIT_CONFIG_ERROR
    except (PlaybackError, ExportError) as e:
        log.error("%s", e)
        return EXIT_OUTPUT_ERROR


if __name__ == "__main__":
    sys.exit(main())
