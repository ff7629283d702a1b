"""
Audio and camera enumeration.
"""

from typing import List, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from hisendesk.devices.audio import SoundDeviceBackend
from hisendesk.devices.base import AudioBackend, CameraBackend
from hisendesk.devices.camera import default_camera_backend


class AudioDevices(BaseModel):
    """Audio devices as reported by the platform audio layer."""

    model_config = ConfigDict(frozen=True)

    inputs: List[str] = Field(default_factory=list)
    outputs: List[str] = Field(default_factory=list)
    default_input: Optional[str] = None
    default_output: Optional[str] = None


def list_audio_devices(backend: Optional[AudioBackend] = None) -> AudioDevices:
    """
    Enumerate audio devices at call time.

    Args:
        backend: Audio layer to query (defaults to PortAudio via sounddevice)

    Returns:
        AudioDevices snapshot

    Raises:
        DeviceEnumerationError: if the platform enumeration fails
    """
    backend = backend or SoundDeviceBackend()
    backend.refresh()
    devices = AudioDevices(
        inputs=backend.input_devices(),
        outputs=backend.output_devices(),
        default_input=backend.default_input(),
        default_output=backend.default_output(),
    )
    logger.debug(f"Audio devices: {len(devices.inputs)} input(s), {len(devices.outputs)} output(s)")
    return devices


def list_cameras(backend: Optional[CameraBackend] = None) -> List[str]:
    """
    Enumerate attached cameras at call time.

    Raises:
        DeviceEnumerationError: if the platform enumeration fails
    """
    backend = backend or default_camera_backend()
    names = list(backend.camera_names())
    logger.debug(f"Cameras: {len(names)} found")
    return names
