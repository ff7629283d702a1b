"""
Host system information.

Every call re-reads the host; nothing is cached. Facts the platform does
not expose are reported as None rather than as sentinel values.
"""

from __future__ import annotations

import platform
import time
from pathlib import Path
from typing import List, Optional

import psutil
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from hisendesk.core.executor import CommandExecutor
from hisendesk.core.gpu import list_gpus

CPU_SAMPLE_INTERVAL = 0.2


class NetworkInterface(BaseModel):
    """Cumulative traffic counters of one network interface."""

    model_config = ConfigDict(frozen=True)

    name: str
    received: int = Field(ge=0)
    transmitted: int = Field(ge=0)


class CpuCore(BaseModel):
    """Usage of one logical CPU."""

    model_config = ConfigDict(frozen=True)

    name: str
    usage: float
    frequency: Optional[int] = None  # MHz


class GpuInfo(BaseModel):
    """Graphics adapter."""

    model_config = ConfigDict(frozen=True)

    name: str
    vendor: str
    vram: Optional[str] = None


class SystemInfo(BaseModel):
    """
    Snapshot of host facts.

    Memory and swap are in kilobytes, uptime in seconds. used <= total is
    expected but reported as measured.
    """

    model_config = ConfigDict(frozen=True)

    os_name: Optional[str] = None
    hostname: Optional[str] = None
    kernel_version: Optional[str] = None
    os_version: Optional[str] = None
    cpu_brand: str = ""
    cpu_physical_cores: Optional[int] = None
    cpu_logical_cores: int = 0
    cpu_arch: str = ""
    cpu_usage: float = 0.0
    cpu_cores: List[CpuCore] = Field(default_factory=list)
    total_memory: int = Field(default=0, ge=0)
    used_memory: int = Field(default=0, ge=0)
    total_swap: int = Field(default=0, ge=0)
    used_swap: int = Field(default=0, ge=0)
    uptime: int = Field(default=0, ge=0)
    network_ifaces: List[NetworkInterface] = Field(default_factory=list)
    gpus: List[GpuInfo] = Field(default_factory=list)


def _none_if_blank(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _os_release() -> dict[str, str]:
    try:
        return platform.freedesktop_os_release()
    except OSError:
        return {}


def _os_name(os_type: str) -> Optional[str]:
    if os_type == "Linux":
        return _none_if_blank(_os_release().get("NAME")) or "Linux"
    if os_type == "Darwin":
        return "macOS"
    return _none_if_blank(os_type)


def _os_version(os_type: str) -> Optional[str]:
    if os_type == "Linux":
        return _none_if_blank(_os_release().get("VERSION_ID"))
    if os_type == "Darwin":
        return _none_if_blank(platform.mac_ver()[0])
    return _none_if_blank(platform.version())


def _cpu_brand(os_type: str, executor: CommandExecutor) -> str:
    """CPU model string; empty when the platform does not say."""
    if os_type == "Linux":
        try:
            text = Path("/proc/cpuinfo").read_text(encoding="utf-8", errors="replace")
        except OSError:
            text = ""
        # x86 reports "model name", some ARM kernels only "Hardware" or "Processor"
        for key in ("model name", "Hardware", "Processor"):
            for line in text.splitlines():
                name, _, value = line.partition(":")
                if name.strip() == key and value.strip():
                    return value.strip()
    elif os_type == "Darwin":
        result = executor.run_command(["sysctl", "-n", "machdep.cpu.brand_string"], timeout=5)
        if result.success and result.stdout.strip():
            return result.stdout.strip()
    return platform.processor().strip()


def _cpu_frequencies(count: int) -> List[Optional[int]]:
    try:
        freqs = psutil.cpu_freq(percpu=True) or []
    except (AttributeError, NotImplementedError, OSError):
        freqs = []
    if len(freqs) == count:
        return [int(f.current) if f.current else None for f in freqs]
    if len(freqs) == 1:
        return [int(freqs[0].current) if freqs[0].current else None] * count
    return [None] * count


def _cpu_cores(sample_interval: float) -> List[CpuCore]:
    usages = psutil.cpu_percent(interval=sample_interval, percpu=True)
    freqs = _cpu_frequencies(len(usages))
    return [
        CpuCore(name=f"cpu{index}", usage=usage, frequency=freq)
        for index, (usage, freq) in enumerate(zip(usages, freqs))
    ]


def _network_interfaces() -> List[NetworkInterface]:
    try:
        counters = psutil.net_io_counters(pernic=True)
    except OSError as e:
        logger.warning(f"Network counters unavailable: {e}")
        return []
    return [
        NetworkInterface(name=name, received=stats.bytes_recv, transmitted=stats.bytes_sent)
        for name, stats in counters.items()
    ]


def _gpus(executor: CommandExecutor) -> List[GpuInfo]:
    return [GpuInfo(**gpu) for gpu in list_gpus(executor)]


def get_system_info(
    executor: Optional[CommandExecutor] = None,
    sample_interval: float = CPU_SAMPLE_INTERVAL,
) -> SystemInfo:
    """Collect a fresh snapshot of host facts."""
    executor = executor or CommandExecutor()
    os_type = platform.system()

    memory = psutil.virtual_memory()
    swap = psutil.swap_memory()
    cores = _cpu_cores(sample_interval)
    uptime = max(0, int(time.time() - psutil.boot_time()))

    info = SystemInfo(
        os_name=_os_name(os_type),
        hostname=_none_if_blank(platform.node()),
        kernel_version=_none_if_blank(platform.release()),
        os_version=_os_version(os_type),
        cpu_brand=_cpu_brand(os_type, executor),
        cpu_physical_cores=psutil.cpu_count(logical=False),
        cpu_logical_cores=psutil.cpu_count(logical=True) or len(cores),
        cpu_arch=platform.machine(),
        cpu_usage=sum(c.usage for c in cores) / len(cores) if cores else 0.0,
        cpu_cores=cores,
        total_memory=memory.total // 1024,
        used_memory=memory.used // 1024,
        total_swap=swap.total // 1024,
        used_swap=swap.used // 1024,
        uptime=uptime,
        network_ifaces=_network_interfaces(),
        gpus=_gpus(executor),
    )

    if info.used_memory > info.total_memory or info.used_swap > info.total_swap:
        logger.warning("Memory counters changed while being read; reporting them as measured")
    logger.debug(f"System info collected for {info.hostname}")
    return info
