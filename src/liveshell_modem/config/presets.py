# src/liveshell_modem/config/presets.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from liveshell_modem.errors import ConfigurationError


@dataclass(frozen=True)
class PlatformPreset:
    """Catalog entry used to prefill the RTMP URL. Carries no behavior."""
    id: str
    name: str
    rtmp_url: str = ""
    note: Optional[str] = None


# Empty rtmp_url means the platform hands out a per-account / per-broadcast URL.
PLATFORM_PRESETS: tuple[PlatformPreset, ...] = (
    PlatformPreset(
        id="youtube",
        name="YouTube Live",
        rtmp_url="rtmp://a.rtmp.youtube.com/live2",
        note="Get the stream key from YouTube Studio.",
    ),
    PlatformPreset(
        id="tiktok",
        name="TikTok LIVE",
        note="Get the RTMP URL and key from TikTok LIVE Studio settings (requires 1,000+ followers).",
    ),
    PlatformPreset(
        id="twitch",
        name="Twitch",
        rtmp_url="rtmp://live-tyo.twitch.tv/app",
        note="Tokyo ingest. Other regions: live.twitch.tv/app",
    ),
    PlatformPreset(
        id="kick",
        name="Kick",
        note="Get the RTMP URL (rtmps://...) and key from the Kick settings page.",
    ),
    PlatformPreset(
        id="twicas",
        name="TwitCasting",
        rtmp_url="rtmp://rtmp03.twitcasting.tv/live",
        note="Get the key from the tool broadcast settings.",
    ),
    PlatformPreset(
        id="niconico",
        name="Niconico Live",
        note="The RTMP URL changes for every broadcast.",
    ),
    PlatformPreset(
        id="custom",
        name="Custom",
    ),
)


def preset_ids() -> list[str]:
    return [p.id for p in PLATFORM_PRESETS]


def get_preset(preset_id: str) -> PlatformPreset:
    for p in PLATFORM_PRESETS:
        if p.id == preset_id:
            return p
    raise ConfigurationError(f"unknown platform preset {preset_id!r} (expected one of: {', '.join(preset_ids())})")
