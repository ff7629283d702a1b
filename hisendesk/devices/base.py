"""
Device backend interfaces.
"""

from abc import ABC, abstractmethod
from typing import List, Optional


class AudioBackend(ABC):
    """Platform audio layer able to list devices and report defaults."""

    def refresh(self) -> None:
        """
        Re-read the platform's device list before an enumeration.

        Raises:
            DeviceEnumerationError: if the platform layer cannot be reloaded
        """

    @abstractmethod
    def input_devices(self) -> List[str]:
        """
        Names of devices that can capture audio.

        Raises:
            DeviceEnumerationError: if the platform query fails
        """
        pass

    @abstractmethod
    def output_devices(self) -> List[str]:
        """
        Names of devices that can play audio.

        Raises:
            DeviceEnumerationError: if the platform query fails
        """
        pass

    @abstractmethod
    def default_input(self) -> Optional[str]:
        """Name of the default input device, or None when there is none."""
        pass

    @abstractmethod
    def default_output(self) -> Optional[str]:
        """Name of the default output device, or None when there is none."""
        pass


class CameraBackend(ABC):
    """Platform facility able to list attached cameras."""

    @abstractmethod
    def camera_names(self) -> List[str]:
        """
        Names of the currently attached cameras.

        Raises:
            DeviceEnumerationError: if the platform query fails
        """
        pass
