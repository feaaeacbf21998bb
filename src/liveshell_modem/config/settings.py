# src/liveshell_modem/config/settings.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Union

from liveshell_modem.errors import ConfigurationError


class DeviceModel(str, Enum):
    """Target device family. Selects the playback / WAV sample rate."""

    LIVESHELL_2 = "LiveShell2"
    LIVESHELL_PRO = "LiveShellPro"
    LIVESHELL_X = "LiveShellX"

    @property
    def sample_rate(self) -> int:
        return SAMPLE_RATES[self]

    @classmethod
    def parse(cls, value: Union[str, "DeviceModel"]) -> "DeviceModel":
        try:
            return cls(value)
        except ValueError:
            known = ", ".join(m.value for m in cls)
            raise ConfigurationError(f"unknown device model {value!r} (expected one of: {known})") from None


SAMPLE_RATES: Mapping[DeviceModel, int] = {
    DeviceModel.LIVESHELL_2: 16000,
    DeviceModel.LIVESHELL_PRO: 44100,
    DeviceModel.LIVESHELL_X: 48000,
}

DEFAULT_DEVICE_MODEL = DeviceModel.LIVESHELL_PRO


class EncryptionScheme(str, Enum):
    WPA = "WPA"
    WEP_OPEN = "WEP_Open"
    WEP_SHARED = "WEP_Shared"
    NONE = "None"


# ----------------------------
# Connection variants
# ----------------------------

@dataclass(frozen=True)
class Ethernet:
    pass


@dataclass(frozen=True)
class WiFi:
    ssid: str
    password: str = ""
    stealth_mode: bool = False
    encryption_scheme: EncryptionScheme = EncryptionScheme.WPA


Connection = Union[Ethernet, WiFi]


# ----------------------------
# IP addressing variants
# ----------------------------

@dataclass(frozen=True)
class Dhcp:
    pass


@dataclass(frozen=True)
class StaticIp:
    """
    Static addressing. The device only accepts the four values together;
    if any is empty the serializer leaves the whole IP/DNS block out.
    """
    address: str = ""
    subnet_mask: str = ""
    gateway: str = ""
    dns: str = ""

    @property
    def complete(self) -> bool:
        return bool(self.address and self.subnet_mask and self.gateway and self.dns)


IpMode = Union[Dhcp, StaticIp]


# ----------------------------
# Streaming destination
# ----------------------------

@dataclass(frozen=True)
class RtmpAuth:
    username: str = ""
    password: str = ""

    @property
    def complete(self) -> bool:
        return bool(self.username and self.password)


@dataclass(frozen=True)
class Streaming:
    rtmp_url: str = ""
    stream_key: str = ""
    one_time: bool = False
    auth: Optional[RtmpAuth] = None


@dataclass(frozen=True)
class Configuration:
    """
    Everything the device needs to get online and start streaming.

    Built fresh for every encode call and never mutated. Use `from_dict`
    to load the JSON settings shape accepted by the CLI:

        {
          "connection": {"type": "wifi", "ssid": "...", "password": "...",
                         "stealth_mode": false, "encryption_scheme": "WPA"},
          "ip": {"mode": "static", "address": "...", "subnet_mask": "...",
                 "gateway": "...", "dns": "..."},
          "streaming": {"rtmp_url": "...", "stream_key": "...", "one_time": false,
                        "auth": {"username": "...", "password": "..."}},
          "device_model": "LiveShellPro"
        }
    """
    connection: Connection
    streaming: Streaming
    ip_mode: IpMode = field(default_factory=Dhcp)
    device_model: DeviceModel = DEFAULT_DEVICE_MODEL

    @property
    def sample_rate(self) -> int:
        return self.device_model.sample_rate

    @staticmethod
    def from_dict(d: Mapping[str, Any]) -> "Configuration":
        if not isinstance(d, Mapping):
            raise ConfigurationError(f"settings must be a JSON object, got {type(d).__name__}")
        return Configuration(
            connection=_connection_from_dict(_section(d, "connection")),
            streaming=_streaming_from_dict(_section(d, "streaming")),
            ip_mode=_ip_mode_from_dict(_section(d, "ip")),
            device_model=DeviceModel.parse(_text(d, "device_model") or DEFAULT_DEVICE_MODEL),
        )


# ----------------------------
# JSON field readers
# ----------------------------

def _section(d: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    v = d.get(key)
    if v is None:
        return {}
    if not isinstance(v, Mapping):
        raise ConfigurationError(f"{key!r} must be a JSON object, got {type(v).__name__}")
    return v


def _text(d: Mapping[str, Any], key: str) -> str:
    """null / missing -> "". Numbers are kept as written; anything else is rejected."""
    v = d.get(key)
    if v is None:
        return ""
    if isinstance(v, str):
        return v
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(v)
    raise ConfigurationError(f"{key!r} must be a string, got {type(v).__name__}")


def _flag(d: Mapping[str, Any], key: str) -> bool:
    v = d.get(key)
    if v is None:
        return False
    if isinstance(v, bool):
        return v
    raise ConfigurationError(f"{key!r} must be true or false, got {v!r}")


def _connection_from_dict(d: Mapping[str, Any]) -> Connection:
    kind = (_text(d, "type") or "ethernet").lower()
    if kind == "ethernet":
        return Ethernet()
    if kind == "wifi":
        scheme = _text(d, "encryption_scheme") or EncryptionScheme.WPA.value
        try:
            scheme = EncryptionScheme(scheme)
        except ValueError:
            raise ConfigurationError(f"unknown WiFi encryption scheme {scheme!r}") from None
        return WiFi(
            ssid=_text(d, "ssid"),
            password=_text(d, "password"),
            stealth_mode=_flag(d, "stealth_mode"),
            encryption_scheme=scheme,
        )
    raise ConfigurationError(f"unknown connection type {kind!r} (expected 'ethernet' or 'wifi')")


def _ip_mode_from_dict(d: Mapping[str, Any]) -> IpMode:
    mode = (_text(d, "mode") or "dhcp").lower()
    if mode == "dhcp":
        return Dhcp()
    if mode == "static":
        return StaticIp(
            address=_text(d, "address"),
            subnet_mask=_text(d, "subnet_mask"),
            gateway=_text(d, "gateway"),
            dns=_text(d, "dns"),
        )
    raise ConfigurationError(f"unknown ip mode {mode!r} (expected 'dhcp' or 'static')")


def _streaming_from_dict(d: Mapping[str, Any]) -> Streaming:
    auth_d = _section(d, "auth")
    auth = None
    if auth_d:
        auth = RtmpAuth(username=_text(auth_d, "username"), password=_text(auth_d, "password"))
    return Streaming(
        rtmp_url=_text(d, "rtmp_url"),
        stream_key=_text(d, "stream_key"),
        one_time=_flag(d, "one_time"),
        auth=auth,
    )
