"""
Audio device discovery through PortAudio (sounddevice).
"""

from __future__ import annotations

from typing import Any, List, Optional

from loguru import logger

from hisendesk.core.errors import DeviceEnumerationError
from hisendesk.devices.base import AudioBackend

UNKNOWN_DEVICE = "Unknown"


def _load_sounddevice():
    """Import sounddevice; it raises OSError when the PortAudio library is missing."""
    try:
        import sounddevice
    except OSError as e:
        raise DeviceEnumerationError("audio", f"PortAudio library unavailable: {e}") from e
    return sounddevice


class SoundDeviceBackend(AudioBackend):
    """
    Audio backend using the host's default PortAudio API.

    PortAudio takes its device list once at initialization, so refresh()
    re-initializes it; devices plugged in since then show up on the next
    enumeration. Only devices of the default host API are listed (Windows
    exposes each device again under MME, DirectSound, WASAPI and WDM-KS).
    """

    def refresh(self) -> None:
        sd = _load_sounddevice()
        try:
            # sounddevice has no public re-scan call
            sd._terminate()
            sd._initialize()
        except sd.PortAudioError as e:
            raise DeviceEnumerationError("audio", f"PortAudio re-initialization failed: {e}") from e

    def _devices(self) -> List[Any]:
        sd = _load_sounddevice()
        try:
            hostapi = sd.default.hostapi
            return [device for device in sd.query_devices() if device.get("hostapi") == hostapi]
        except sd.PortAudioError as e:
            raise DeviceEnumerationError("audio", str(e)) from e

    def _names(self, channel_key: str) -> List[str]:
        return [
            device.get("name") or UNKNOWN_DEVICE
            for device in self._devices()
            if device.get(channel_key, 0) > 0
        ]

    def _default(self, kind: str) -> Optional[str]:
        sd = _load_sounddevice()
        try:
            device = sd.query_devices(kind=kind)
        except (sd.PortAudioError, ValueError) as e:
            logger.debug(f"No default {kind} device: {e}")
            return None
        return device.get("name") or UNKNOWN_DEVICE

    def input_devices(self) -> List[str]:
        return self._names("max_input_channels")

    def output_devices(self) -> List[str]:
        return self._names("max_output_channels")

    def default_input(self) -> Optional[str]:
        return self._default("input")

    def default_output(self) -> Optional[str]:
        return self._default("output")
