# src/liveshell_modem/protocol/line_protocol.py
"""
Configuration -> device line protocol.

The device parses newline-separated `[SECTION]` headers and `KEY=value`
lines. Output has to match byte for byte, including the `flashver=`
literal and the JSON field order inside `LIVE=`.

    [WLAN1]
    ESSID=home
    PSK=secret
    IP=192.168.0.10;192.168.0.1;255.255.255.0
    DNS=192.168.0.1
    [LOCAL]
    LIVE={"type":0,"rtmp":{"onetime":false,"url":"rtmp://... playPath=..."}}
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any

from liveshell_modem.config.settings import (
    Configuration,
    EncryptionScheme,
    Ethernet,
    StaticIp,
    Streaming,
    WiFi,
)
from liveshell_modem.errors import ConfigurationError

log = logging.getLogger(__name__)

SECTION_WLAN = "[WLAN1]"
SECTION_ETHER = "[ETHER]"
SECTION_LOCAL = "[LOCAL]"

# Two literal backslashes before each "20"; json.dumps doubles them again.
FLASHVER = r"FME/3.0\\20(compatible;\\20FMSc/1.0)"

LIVE_TYPE_RTMP = 0

# Lone surrogates (e.g. surrogateescape-decoded argv) cannot be UTF-8 encoded.
_SURROGATE_RE = re.compile("[\ud800-\udfff]")

_URL_CHARS = r"\-A-Za-z0-9.@_~!#$&'()*+,:;=?\[\]"
RTMP_URL_RE = re.compile(
    rf"(rtmps?://[{_URL_CHARS}]+)(?:/([{_URL_CHARS}/]+))?"
)


# ----------------------------
# Network section
# ----------------------------

def _ip_lines(ip_mode: Any) -> str:
    if not isinstance(ip_mode, StaticIp):
        return ""
    if not ip_mode.complete:
        log.warning("static IP settings incomplete; omitting IP/DNS lines (device will use DHCP)")
        return ""
    return f"IP={ip_mode.address};{ip_mode.gateway};{ip_mode.subnet_mask}\nDNS={ip_mode.dns}\n"


def _wifi_security_lines(wifi: WiFi) -> str:
    if wifi.password == "" or wifi.encryption_scheme == EncryptionScheme.NONE:
        return ""
    if wifi.stealth_mode and wifi.encryption_scheme == EncryptionScheme.WPA:
        return f"PSK={wifi.password}\n"
    out = f"WEP={wifi.password}\n"
    if wifi.stealth_mode and wifi.encryption_scheme == EncryptionScheme.WEP_SHARED:
        out += "MODE=SHARED\n"
    return out


def build_network_section(config: Configuration) -> str:
    conn = config.connection
    if isinstance(conn, WiFi):
        if not conn.ssid:
            raise ConfigurationError("WiFi connection requires an SSID")
        out = f"{SECTION_WLAN}\nESSID={conn.ssid}\n"
        out += _wifi_security_lines(conn)
        return out + _ip_lines(config.ip_mode)

    if isinstance(conn, Ethernet):
        return f"{SECTION_ETHER}\n" + _ip_lines(config.ip_mode)

    raise ConfigurationError(f"unsupported connection type: {type(conn).__name__}")


# ----------------------------
# Streaming section
# ----------------------------

def split_rtmp_url(rtmp_url: str) -> tuple[str, str | None]:
    """Split `rtmp[s]://authority[/app]` into (base, app). app is None if absent."""
    m = RTMP_URL_RE.fullmatch(rtmp_url)
    if m is None:
        raise ConfigurationError(f"RTMP URL not in the form rtmp[s]://host[/app]: {rtmp_url!r}")
    return m.group(1), m.group(2)


def build_rtmp_url(streaming: Streaming) -> str:
    """Space-delimited librtmp-style property string the device hands to its RTMP client."""
    if not streaming.rtmp_url or not streaming.stream_key:
        raise ConfigurationError("RTMP streaming requires both a URL and a stream key")

    base, app = split_rtmp_url(streaming.rtmp_url)

    url = base
    if app:
        url += f" app={app}"
    url += f" playPath={streaming.stream_key}"
    url += f" flashver={FLASHVER}"

    if streaming.auth is not None and streaming.auth.complete:
        url += f" pubUser={streaming.auth.username} pubPasswd={streaming.auth.password}"
    return url


def build_live_object(streaming: Streaming) -> dict[str, Any]:
    return {
        "type": LIVE_TYPE_RTMP,
        "rtmp": {
            "onetime": bool(streaming.one_time),
            "url": build_rtmp_url(streaming),
        },
    }


def build_live_line(streaming: Streaming) -> str:
    live = json.dumps(build_live_object(streaming), separators=(",", ":"), ensure_ascii=False)
    return f"LIVE={live}\n"


# ----------------------------
# Public API
# ----------------------------

def serialize(config: Configuration) -> str:
    """
    Build the full plaintext payload for one Configuration.

    Raises ConfigurationError if the connection or streaming settings cannot
    be encoded. Both sections are validated before anything is returned.
    Lone surrogates are replaced with U+FFFD so the text always encodes as UTF-8.
    """
    network = build_network_section(config)
    live = build_live_line(config.streaming)
    text = f"{network}{SECTION_LOCAL}\n{live}"
    return _SURROGATE_RE.sub("\ufffd", text)


def serialize_bytes(config: Configuration) -> bytes:
    return serialize(config).encode("utf-8")
