"""
Camera discovery.
Cross-platform (Linux, macOS, Windows).
"""

from __future__ import annotations

import json
import platform
import re
from pathlib import Path
from typing import List, Optional

from hisendesk.core.errors import DeviceEnumerationError
from hisendesk.core.executor import CommandExecutor
from hisendesk.devices.base import CameraBackend

V4L_SYSFS = Path("/sys/class/video4linux")

WINDOWS_CAMERA_QUERY = (
    "Get-CimInstance Win32_PnPEntity "
    "| Where-Object { $_.PNPClass -in 'Camera','Image' } "
    "| Select-Object -ExpandProperty Name "
    "| ConvertTo-Json"
)


class NullCameraBackend(CameraBackend):
    """Backend for platforms without camera discovery."""

    def camera_names(self) -> List[str]:
        return []


class LinuxCameraBackend(CameraBackend):
    """Read V4L2 device names from sysfs."""

    def __init__(self, sysfs_root: Path = V4L_SYSFS):
        self.sysfs_root = sysfs_root

    @staticmethod
    def _node_index(node: Path) -> int:
        match = re.search(r"(\d+)$", node.name)
        return int(match.group(1)) if match else -1

    @staticmethod
    def _is_primary_node(node: Path) -> bool:
        """True for the first node of a device; UVC cameras add a metadata node with index 1."""
        try:
            return int((node / "index").read_text(encoding="utf-8").strip()) == 0
        except (FileNotFoundError, ValueError):
            return True

    def camera_names(self) -> List[str]:
        if not self.sysfs_root.exists():
            return []
        try:
            nodes = sorted(
                (p for p in self.sysfs_root.iterdir() if p.name.startswith("video")),
                key=self._node_index,
            )
            names = [
                (node / "name").read_text(encoding="utf-8").strip()
                for node in nodes
                if self._is_primary_node(node)
            ]
        except OSError as e:
            raise DeviceEnumerationError("camera", str(e)) from e
        return [name for name in names if name]


class MacCameraBackend(CameraBackend):
    """Query cameras with system_profiler."""

    def __init__(self, executor: Optional[CommandExecutor] = None):
        self.executor = executor or CommandExecutor()

    def camera_names(self) -> List[str]:
        result = self.executor.run_command(["system_profiler", "SPCameraDataType", "-json"])
        if not result.success:
            raise DeviceEnumerationError("camera", result.stderr.strip() or "system_profiler failed")
        try:
            data = json.loads(result.stdout)
        except ValueError as e:
            raise DeviceEnumerationError("camera", f"unreadable system_profiler output: {e}") from e
        if not isinstance(data, dict):
            return []
        cameras = data.get("SPCameraDataType") or []
        return [c["_name"] for c in cameras if isinstance(c, dict) and c.get("_name")]


class WindowsCameraBackend(CameraBackend):
    """Query camera and imaging PnP devices through PowerShell."""

    def __init__(self, executor: Optional[CommandExecutor] = None):
        self.executor = executor or CommandExecutor()

    def camera_names(self) -> List[str]:
        result = self.executor.run_command(["powershell", "-NoProfile", "-Command", WINDOWS_CAMERA_QUERY])
        if not result.success:
            raise DeviceEnumerationError("camera", result.stderr.strip() or "PowerShell query failed")
        output = result.stdout.strip()
        if not output:
            return []
        try:
            data = json.loads(output)
        except ValueError as e:
            raise DeviceEnumerationError("camera", f"unreadable PowerShell output: {e}") from e
        # ConvertTo-Json emits a bare string for a single result
        names = data if isinstance(data, list) else [data]
        return [name for name in names if isinstance(name, str) and name]


def default_camera_backend(executor: Optional[CommandExecutor] = None) -> CameraBackend:
    """Pick the camera backend for the running platform."""
    os_type = platform.system()
    if os_type == "Linux":
        return LinuxCameraBackend()
    if os_type == "Darwin":
        return MacCameraBackend(executor)
    if os_type == "Windows":
        return WindowsCameraBackend(executor)
    return NullCameraBackend()
