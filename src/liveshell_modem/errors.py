# src/liveshell_modem/errors.py
from __future__ import annotations


class LiveShellModemError(Exception):
    """Base class for every error this package raises on purpose."""


class ConfigurationError(LiveShellModemError, ValueError):
    """
    The settings cannot be turned into a line-protocol payload.

    Raised before any encoding work starts: WiFi without an SSID, a missing
    RTMP URL / stream key, an RTMP URL the device would not parse, or an
    unknown device model / platform preset.
    """


class PlaybackError(LiveShellModemError, RuntimeError):
    """The audio output backend could not be opened or failed while writing."""


class ExportError(LiveShellModemError, OSError):
    """The WAV file could not be written to disk."""
