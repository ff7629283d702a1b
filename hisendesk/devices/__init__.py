"""
Device enumeration components.
"""

from hisendesk.devices.audio import SoundDeviceBackend
from hisendesk.devices.base import AudioBackend, CameraBackend
from hisendesk.devices.camera import (
    LinuxCameraBackend,
    MacCameraBackend,
    NullCameraBackend,
    WindowsCameraBackend,
    default_camera_backend,
)
from hisendesk.devices.enumerator import AudioDevices, list_audio_devices, list_cameras

__all__ = [
    "AudioBackend",
    "CameraBackend",
    "SoundDeviceBackend",
    "LinuxCameraBackend",
    "MacCameraBackend",
    "NullCameraBackend",
    "WindowsCameraBackend",
    "default_camera_backend",
    "AudioDevices",
    "list_audio_devices",
    "list_cameras",
]
