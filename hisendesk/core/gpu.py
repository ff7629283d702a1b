"""
Graphics adapter discovery.
Cross-platform (macOS, Windows); other platforms report no adapters.
"""

from __future__ import annotations

import json
import platform
from typing import Any, Optional

from loguru import logger

from hisendesk.core.executor import CommandExecutor


def _vram_from_bytes(value: Any) -> Optional[str]:
    """Format an AdapterRAM byte count as 'N MB', or None when unknown."""
    try:
        size = int(value)
    except (TypeError, ValueError):
        return None
    if size <= 0:
        return None
    return f"{size // 1024 // 1024} MB"


def parse_macos_gpu_json(json_str: str) -> list[dict[str, Optional[str]]]:
    """Parse `system_profiler SPDisplaysDataType -json` output."""
    try:
        data = json.loads(json_str)
    except ValueError:
        return []
    if not isinstance(data, dict):
        return []

    gpus = []
    for display in data.get("SPDisplaysDataType") or []:
        if not isinstance(display, dict):
            continue
        gpus.append(
            {
                "name": display.get("sppci_model") or display.get("_name") or "Unknown GPU",
                "vendor": display.get("sppci_vendor") or display.get("spdisplays_vendor") or "Unknown",
                "vram": display.get("sppci_vram") or display.get("spdisplays_vram"),
            }
        )
    return gpus


def parse_windows_gpu_csv(csv_str: str) -> list[dict[str, Optional[str]]]:
    """
    Parse `wmic path win32_VideoController get Name,AdapterRAM,DriverVersion /format:csv`.

    wmic sorts the columns: Node,AdapterRAM,DriverVersion,Name.
    """
    gpus = []
    for line in csv_str.splitlines():
        parts = [part.strip() for part in line.split(",")]
        if len(parts) < 4:
            continue
        adapter_ram, name = parts[1], parts[3]
        if not name or name == "Name":
            continue
        gpus.append({"name": name, "vendor": "Unknown", "vram": _vram_from_bytes(adapter_ram)})
    return gpus


def parse_windows_gpu_powershell(json_str: str) -> list[dict[str, Optional[str]]]:
    """Parse ConvertTo-Json output, which is a single object or an array."""
    try:
        data = json.loads(json_str)
    except ValueError:
        return []
    items = data if isinstance(data, list) else [data]

    gpus = []
    for item in items:
        if not isinstance(item, dict):
            continue
        gpus.append(
            {
                "name": item.get("Name") or "Unknown GPU",
                "vendor": "Unknown",
                "vram": _vram_from_bytes(item.get("AdapterRAM")),
            }
        )
    return gpus


def list_gpus(executor: Optional[CommandExecutor] = None) -> list[dict[str, Optional[str]]]:
    """
    List graphics adapters as dicts with name, vendor and vram.
    Returns an empty list when the platform tool is unavailable.
    """
    executor = executor or CommandExecutor()
    os_type = platform.system()

    if os_type == "Darwin":
        result = executor.run_command(["system_profiler", "SPDisplaysDataType", "-json"])
        return parse_macos_gpu_json(result.stdout) if result.success else []

    if os_type == "Windows":
        result = executor.run_command(
            ["wmic", "path", "win32_VideoController", "get", "Name,AdapterRAM,DriverVersion", "/format:csv"]
        )
        if result.success:
            return parse_windows_gpu_csv(result.stdout)
        logger.debug("wmic unavailable, falling back to PowerShell for GPU info")
        result = executor.run_command(
            [
                "powershell",
                "-Command",
                "Get-WmiObject Win32_VideoController | Select-Object Name, AdapterRAM | ConvertTo-Json",
            ]
        )
        return parse_windows_gpu_powershell(result.stdout) if result.success else []

    return []
