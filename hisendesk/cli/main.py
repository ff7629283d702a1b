"""
Main CLI application using Typer.
"""

from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Any, Callable, Optional

import questionary
from questionary import Choice
import typer
from rich.console import Console
from rich.live import Live
from rich.spinner import Spinner

from hisendesk.cli.formatters import (
    format_net_test_result,
    print_audio_devices,
    print_cameras,
    print_device_error,
    print_header,
    print_system_info,
)
from hisendesk.core.config import AppConfig
from hisendesk.core.errors import DeviceEnumerationError
from hisendesk.core.system_info import SystemInfo, get_system_info
from hisendesk.devices import AudioDevices, list_audio_devices, list_cameras
from hisendesk.modules.network_test import NetTestResult, run_network_test
from hisendesk.storage.logger import setup_logging

app = typer.Typer(
    name="hisendesk",
    help="Desktop Diagnostics Tool",
    add_completion=False,
)

console = Console()

FORMATS = ("rich", "json")


def _init_context(log_dir: Optional[Path], verbose: bool, **overrides: Any):
    """
    Initialize shared objects: config and logger.
    Uses optional config file (~/.hisendesk.yaml or ./.hisendesk.yaml) for defaults when CLI does not set values.
    """
    config = AppConfig.from_sources(log_dir=log_dir, verbose=verbose or None, **overrides)
    logger = setup_logging(config.log_dir, config.verbose)
    return config, logger


def _check_format(output_format: str) -> None:
    if output_format not in FORMATS:
        console.print(f"[red]Unknown format: {output_format}[/red] [dim](use 'rich' or 'json')[/dim]")
        raise typer.Exit(2)


def _print_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2))


def _run_with_spinner(func: Callable[[], Any], text: str) -> Any:
    """Run a blocking query in a worker thread while animating a spinner."""
    _result_holder: list = []
    _error_holder: list = []

    def _run() -> None:
        try:
            _result_holder.append(func())
        except Exception as e:
            _error_holder.append(e)

    _t = threading.Thread(target=_run)
    _t.start()
    with Live(Spinner("dots", text=f"[dim]{text}[/dim]"), console=console, refresh_per_second=8, transient=True):
        while _t.is_alive():
            _t.join(timeout=0.05)
    if _error_holder:
        raise _error_holder[0]
    return _result_holder[0]


def _collect_devices(
    logger,
) -> tuple[Optional[AudioDevices], Optional[list[str]], dict[str, DeviceEnumerationError]]:
    """Enumerate audio devices and cameras; a failing section is None and its error is kept by kind."""
    errors: dict[str, DeviceEnumerationError] = {}
    audio: Optional[AudioDevices] = None
    cameras: Optional[list[str]] = None
    try:
        audio = list_audio_devices()
    except DeviceEnumerationError as e:
        logger.error(str(e))
        errors[e.kind] = e
    try:
        cameras = list_cameras()
    except DeviceEnumerationError as e:
        logger.error(str(e))
        errors[e.kind] = e
    return audio, cameras, errors


def _show_devices(
    audio: Optional[AudioDevices],
    cameras: Optional[list[str]],
    errors: dict[str, DeviceEnumerationError],
) -> None:
    if audio is not None:
        print_audio_devices(audio, console)
    elif "audio" in errors:
        print_device_error(errors["audio"], console)
    if cameras is not None:
        print_cameras(cameras, console)
    elif "camera" in errors:
        print_device_error(errors["camera"], console)


def _refresh(logger) -> None:
    """Query and show system information and devices."""
    info: SystemInfo = _run_with_spinner(get_system_info, "Reading system information…")
    print_system_info(info, console)
    _show_devices(*_collect_devices(logger))


def _network_test(config: AppConfig) -> NetTestResult:
    console.print("\n[bold cyan]Running network test...[/bold cyan]")
    console.print("[dim]  External IP, HTTP latency and a ~3 MB download. Figures are for reference only.[/dim]")
    return _run_with_spinner(lambda: run_network_test(config), "Measuring…")


def _run_interactive(log_dir: Optional[Path], verbose: bool) -> None:
    """Run the interactive menu (default `hisendesk` / `hisendesk main`)."""
    print_header(console)

    config, logger = _init_context(log_dir, verbose)
    _refresh(logger)

    while True:
        choice = show_main_menu()

        if choice is None or choice == "Exit":
            console.print("\n[bold cyan]👋 Thank you for using Hisen Desk![/bold cyan]")
            logger.info("Hisen Desk exited normally")
            break

        if choice == "Refresh":
            _refresh(logger)
        elif choice == "Network Test":
            # The menu blocks until the test returns, so only one test runs at a time
            format_net_test_result(_network_test(config), console)


def show_main_menu() -> Optional[str]:
    """Display main menu and return user choice (with short descriptions)."""
    choices = [
        Choice("Refresh — Re-read system information and devices", value="Refresh"),
        Choice("Network Test — External IP, latency and download speed", value="Network Test"),
        Choice("Exit", value="Exit"),
    ]

    return questionary.select("Select an action:", choices=choices).ask()


@app.callback(invoke_without_command=True)
def _default(
    ctx: typer.Context,
    log_dir: Optional[Path] = typer.Option(
        None,
        "--log-dir",
        "-l",
        help="Directory for log files",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
):
    """
    Hisen Desk - Desktop Diagnostics Tool.
    Run with no command for the interactive menu, or use a subcommand for a single query.
    """
    if version:
        from hisendesk import __version__
        console.print(f"hisendesk {__version__}")
        raise typer.Exit(0)
    if ctx.invoked_subcommand is None:
        _run_interactive(log_dir, verbose)


@app.command("main")
def main_cmd(
    log_dir: Optional[Path] = typer.Option(
        None,
        "--log-dir",
        "-l",
        help="Directory for log files",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
):
    """
    Interactive menu (same as running hisendesk with no command).
    """
    _run_interactive(log_dir, verbose)


@app.command()
def info(
    log_dir: Optional[Path] = typer.Option(
        None,
        "--log-dir",
        "-l",
        help="Directory for log files",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
    output_format: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: 'rich' (default) or 'json'",
    ),
):
    """
    Show host system information.
    """
    _check_format(output_format)
    _init_context(log_dir, verbose)

    if output_format == "json":
        _print_json(get_system_info().model_dump(mode="json"))
        return
    print_system_info(_run_with_spinner(get_system_info, "Reading system information…"), console)


@app.command()
def devices(
    log_dir: Optional[Path] = typer.Option(
        None,
        "--log-dir",
        "-l",
        help="Directory for log files",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
    output_format: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: 'rich' (default) or 'json'",
    ),
):
    """
    List audio devices and cameras.
    """
    _check_format(output_format)
    _config, logger = _init_context(log_dir, verbose)
    audio, cameras, errors = _collect_devices(logger)

    if output_format == "json":
        _print_json(
            {
                "audio": audio.model_dump(mode="json") if audio is not None else None,
                "cameras": cameras,
                "errors": {kind: error.reason for kind, error in errors.items()},
            }
        )
        return
    _show_devices(audio, cameras, errors)


@app.command()
def nettest(
    log_dir: Optional[Path] = typer.Option(
        None,
        "--log-dir",
        "-l",
        help="Directory for log files",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
    output_format: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: 'rich' (default) or 'json'",
    ),
    timeout: Optional[int] = typer.Option(
        None,
        "--timeout",
        "-t",
        min=1,
        help="Per-request timeout in seconds (default 10)",
    ),
    upload: Optional[bool] = typer.Option(
        None,
        "--upload/--no-upload",
        help="Also measure upload speed (off by default)",
    ),
):
    """
    Run the network test: external IP, HTTP latency and download speed.
    """
    _check_format(output_format)
    config, _logger = _init_context(log_dir, verbose, timeout=timeout, upload_probe=upload)

    if output_format == "json":
        _print_json(run_network_test(config).model_dump(mode="json"))
        return
    format_net_test_result(_network_test(config), console)


@app.command()
def glossary(
    term: Optional[str] = typer.Argument(
        None,
        help="Term to look up (e.g. latency, swap, mbps). Omit to list all terms.",
    ),
):
    """
    Explain terms used in the reports. Run with no argument to list all terms.
    """
    from hisendesk.cli.glossary_content import get_glossary_entry, list_glossary_terms
    from rich.panel import Panel

    if term is None or term.strip() == "":
        terms = list_glossary_terms()
        console.print("[bold cyan]📖 Glossary terms[/bold cyan]\n")
        console.print("[dim]Run: hisendesk glossary <term> for definition[/dim]\n")
        console.print(", ".join(terms))
        return
    entry = get_glossary_entry(term)
    if entry is None:
        console.print(f"[red]Unknown term: {term}[/red]")
        console.print("[dim]Run [cyan]hisendesk glossary[/cyan] to list terms.[/dim]")
        raise typer.Exit(1)
    display_name, definition = entry
    console.print()
    console.print(Panel(definition.strip(), title=f"📖 {display_name}", border_style="cyan", expand=False))


@app.command()
def examples():
    """
    Show common usage examples.
    """
    from rich.table import Table

    console.print("\n[bold cyan]📚 Hisen Desk Examples[/bold cyan]\n")

    examples_table = Table(show_header=True, box=None)
    examples_table.add_column("Scenario", style="cyan", width=30)
    examples_table.add_column("Command", style="white")
    examples_table.add_column("What it does", style="dim")

    examples_data = [
        (
            "Interactive menu",
            "hisendesk",
            "Shows system info and devices, then lets you refresh or test the network",
        ),
        (
            "Check the machine",
            "hisendesk info",
            "OS, CPU, memory, swap, uptime, GPUs and interface counters",
        ),
        (
            "Find a microphone",
            "hisendesk devices",
            "Lists audio inputs/outputs, defaults and cameras",
        ),
        (
            "Is the internet slow?",
            "hisendesk nettest",
            "External IP, HTTP latency and an approximate download speed",
        ),
        (
            "Include upload speed",
            "hisendesk nettest --upload",
            "Adds a 500 KB upload to the network test",
        ),
        (
            "JSON output for scripts",
            "hisendesk info --format json",
            "Outputs machine-readable JSON",
        ),
        (
            "Look up a term",
            "hisendesk glossary latency",
            "Explains terms used in the reports",
        ),
    ]

    for scenario, cmd, desc in examples_data:
        examples_table.add_row(scenario, f"[bold]{cmd}[/bold]", desc)

    console.print(examples_table)
    console.print()


if __name__ == "__main__":
    app()
