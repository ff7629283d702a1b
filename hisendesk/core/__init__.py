"""
Core functionality components.
"""

from hisendesk.core.config import AppConfig
from hisendesk.core.errors import DeviceEnumerationError, HisenDeskError, ProbeError
from hisendesk.core.executor import CommandExecutor, CommandResult
from hisendesk.core.system_info import (
    CpuCore,
    GpuInfo,
    NetworkInterface,
    SystemInfo,
    get_system_info,
)

__all__ = [
    "AppConfig",
    "HisenDeskError",
    "DeviceEnumerationError",
    "ProbeError",
    "CommandExecutor",
    "CommandResult",
    "CpuCore",
    "GpuInfo",
    "NetworkInterface",
    "SystemInfo",
    "get_system_info",
]
