from __future__ import annotations

import pytest

from liveshell_modem.config.settings import (
    Configuration,
    DeviceModel,
    Dhcp,
    EncryptionScheme,
    Ethernet,
    StaticIp,
    Streaming,
    WiFi,
)


@pytest.fixture
def ethernet_dhcp_config() -> Configuration:
    return Configuration(
        connection=Ethernet(),
        ip_mode=Dhcp(),
        streaming=Streaming(rtmp_url="rtmp://a.rtmp.youtube.com/live2", stream_key="abcd-1234"),
    )


@pytest.fixture
def wifi_static_config() -> Configuration:
    return Configuration(
        connection=WiFi(ssid="studio", password="hunter22", encryption_scheme=EncryptionScheme.WPA),
        ip_mode=StaticIp(address="192.168.0.10", subnet_mask="255.255.255.0", gateway="192.168.0.1", dns="8.8.8.8"),
        streaming=Streaming(rtmp_url="rtmp://live-tyo.twitch.tv/app", stream_key="live_123"),
        device_model=DeviceModel.LIVESHELL_X,
    )
