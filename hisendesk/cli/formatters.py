"""
Rich formatting utilities for CLI output.
"""

from typing import Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from hisendesk.__version__ import __version__
from hisendesk.core.errors import DeviceEnumerationError
from hisendesk.core.system_info import SystemInfo
from hisendesk.devices.enumerator import AudioDevices
from hisendesk.modules.network_test import NetTestResult

MISSING = "-"


def print_header(console: Console) -> None:
    """Print application header."""
    header_text = f"""
    ╔═══════════════════════════════════════════════════════╗
    ║                                                       ║
    ║        Hisen Desk - Desktop Diagnostics Tool          ║
    ║                    Version {__version__:<27}║
    ║                                                       ║
    ╚═══════════════════════════════════════════════════════╝
    """

    console.print(header_text, style="bold cyan")


def format_optional(value: Optional[object]) -> str:
    """Render an absent value as '-'."""
    return MISSING if value is None else str(value)


def format_kb_as_mb(kilobytes: int) -> str:
    return f"{round(kilobytes / 1024)} MB"


def format_uptime(seconds: int) -> str:
    return f"{seconds // 3600} h"


def format_bytes(num: float) -> str:
    suffixes = ["B", "KiB", "MiB", "GiB", "TiB"]
    value = float(num)
    for suffix in suffixes:
        if value < 1024 or suffix == suffixes[-1]:
            return f"{value:.0f} {suffix}" if suffix == "B" else f"{value:.1f} {suffix}"
        value /= 1024
    return f"{value:.1f} {suffixes[-1]}"


def format_latency(latency_ms: Optional[float]) -> str:
    return MISSING if latency_ms is None else f"{latency_ms:.0f} ms"


def format_mbps(mbps: Optional[float]) -> str:
    return MISSING if mbps is None else f"{mbps:.2f} Mbps"


def print_system_info(info: SystemInfo, console: Console) -> None:
    """Print host system information."""
    table = Table(title="System Information", show_header=False, box=None)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Operating System", format_optional(info.os_name))
    table.add_row("Hostname", format_optional(info.hostname))
    table.add_row("Kernel Version", format_optional(info.kernel_version))
    table.add_row("OS Version", format_optional(info.os_version))
    table.add_row("CPU", info.cpu_brand or MISSING)
    table.add_row("Architecture", info.cpu_arch or MISSING)
    table.add_row(
        "Cores (physical / logical)",
        f"{format_optional(info.cpu_physical_cores)} / {info.cpu_logical_cores}",
    )
    table.add_row("CPU Usage", f"{info.cpu_usage:.0f}%")
    table.add_row("Memory", f"{format_kb_as_mb(info.used_memory)} / {format_kb_as_mb(info.total_memory)}")
    table.add_row("Swap", f"{format_kb_as_mb(info.used_swap)} / {format_kb_as_mb(info.total_swap)}")
    table.add_row("Uptime", format_uptime(info.uptime))
    for gpu in info.gpus:
        vram = f" ({gpu.vram})" if gpu.vram else ""
        table.add_row("GPU", f"{gpu.name}{vram}")

    console.print()
    console.print(table)

    if info.network_ifaces:
        ifaces = Table(title="Network Interfaces", show_header=True, box=None, padding=(0, 2))
        ifaces.add_column("Interface", style="cyan")
        ifaces.add_column("Received", justify="right")
        ifaces.add_column("Transmitted", justify="right")
        for iface in info.network_ifaces:
            ifaces.add_row(iface.name, format_bytes(iface.received), format_bytes(iface.transmitted))
        console.print()
        console.print(ifaces)
    console.print()


def print_audio_devices(devices: AudioDevices, console: Console) -> None:
    """Print audio inputs and outputs side by side."""
    table = Table(title="Audio Devices", show_header=True, box=None, padding=(0, 2))
    table.add_column("Input", style="white")
    table.add_column("Output", style="white")

    for row in range(max(len(devices.inputs), len(devices.outputs))):
        table.add_row(
            _device_cell(devices.inputs, row, devices.default_input),
            _device_cell(devices.outputs, row, devices.default_output),
        )
    if table.row_count == 0:
        table.add_row("[dim]none[/dim]", "[dim]none[/dim]")

    console.print(table)
    console.print(
        f"[dim]Default input: {format_optional(devices.default_input)}; "
        f"default output: {format_optional(devices.default_output)}[/dim]"
    )
    console.print()


def _device_cell(names: Sequence[str], row: int, default: Optional[str]) -> str:
    if row >= len(names):
        return ""
    name = names[row]
    return f"[bold]{name}[/bold] [green]✓[/green]" if name == default else name


def print_cameras(cameras: Sequence[str], console: Console) -> None:
    """Print attached cameras."""
    console.print("[bold]Cameras[/bold]")
    if not cameras:
        console.print("  [dim]No camera detected[/dim]")
    for name in cameras:
        console.print(f"  • {name}")
    console.print()


def print_device_error(error: DeviceEnumerationError, console: Console) -> None:
    """Show an enumeration failure in place of the section."""
    console.print(f"[bold yellow]⚠️  {error.kind.capitalize()} devices unavailable:[/bold yellow] {error.reason}")
    console.print()


def format_net_test_result(result: NetTestResult, console: Console) -> None:
    """Format and display a network test result."""
    status_icon, status_color = ("✓", "green") if result.error is None else ("⚠", "yellow")

    content: list[str] = [
        f"[bold]External IP:[/bold] {format_optional(result.external_ip)}",
        f"[bold]HTTP Latency:[/bold] {format_latency(result.http_latency_ms)}",
        f"[bold]Download:[/bold] {format_mbps(result.download_mbps)}",
        f"[bold]Upload:[/bold] {format_mbps(result.upload_mbps)}",
    ]
    if result.error:
        content.append(f"\n[bold red]Errors:[/bold red] {result.error}")

    console.print()
    console.print(
        Panel(
            "\n".join(content),
            title=f"{status_icon} Network Test Results",
            border_style=status_color,
            expand=False,
        )
    )

    interpretation = get_interpretation(result)
    if interpretation:
        console.print(Panel(interpretation, title="💡 What this means", border_style="dim"))


def get_interpretation(result: NetTestResult) -> str:
    """
    Generate a short, plain-language interpretation of a network test.
    Returns empty string if no interpretation is available.
    """
    if result.http_latency_ms is None and result.download_mbps is None:
        if result.external_ip is None:
            return (
                "In plain terms: none of the test endpoints could be reached. "
                "Check that you are connected and that no proxy or firewall blocks HTTPS."
            )
        return "In plain terms: the internet is reachable, but the latency and speed endpoints did not answer."

    parts: list[str] = []
    latency = result.http_latency_ms
    if latency is not None:
        if latency < 100:
            parts.append(f"A web request took {latency:.0f} ms, which feels instant.")
        elif latency < 300:
            parts.append(f"A web request took {latency:.0f} ms; pages should load normally.")
        else:
            parts.append(f"A web request took {latency:.0f} ms; browsing will feel sluggish.")
    if result.download_mbps is not None:
        parts.append(
            f"Downloads ran at about {result.download_mbps:.1f} Mbps. "
            "This is a single small transfer, so treat it as a reference figure only."
        )
    return "In plain terms: " + " ".join(parts)
