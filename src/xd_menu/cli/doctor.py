"""``xd doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment satisfies xd-menu's requirements.

This module lives in the CLI layer; it may import from ``infra``
and renders via Rich.  It only collects and displays diagnostic data.
"""

from __future__ import annotations

import platform
import sys

from xd_menu.cli import exit_codes
from xd_menu.cli.console import console
from xd_menu.exceptions import XdError
from xd_menu.infra.binary_detector import BinaryStatus, detect_binary
from xd_menu.infra.config_loader import default_config_dir
from xd_menu.version import __version__

Check = tuple[str, str, str]


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _xd_version_check() -> Check:
    """Return (label, value, status) for the xd-menu version row."""
    return "xd-menu", __version__, "[green]OK[/green]"


def _python_version_check() -> Check:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _binary_check(status: BinaryStatus, *, required: bool) -> Check:
    """Return (label, value, status) for a program probed on PATH."""
    if status.found:
        path_str = str(status.path) if status.path else "found"
        return status.name, path_str, "[green]OK[/green]"
    if required:
        return status.name, "not found", "[red]FAIL[/red]"
    return status.name, "not found", "[yellow]WARN[/yellow]"


def _questionary_check() -> Check:
    """Return (label, value, status) for the terminal picker dependency."""
    try:
        import questionary
    except ImportError:
        return "questionary", "NOT INSTALLED", "[yellow]WARN[/yellow]"
    version = getattr(questionary, "__version__", "unknown")
    return "questionary", str(version), "[green]OK[/green]"


def _config_dir_check() -> Check:
    """Return (label, value, status) for the configuration directory row."""
    try:
        directory = default_config_dir()
    except XdError as exc:
        return "config", str(exc), "[red]FAIL[/red]"
    if directory.is_dir():
        return "config", str(directory), "[green]OK[/green]"
    return "config", f"{directory} (created on first run)", "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[Check]) -> None:
    """Render doctor output without Rich."""
    print("\nxd doctor", file=sys.stderr)
    print("=" * 64, file=sys.stderr)
    print(f"{'Component':<12} {'Value':<40} {'Status':<8}", file=sys.stderr)
    print("-" * 64, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<12} {value:<40} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


def _print_install_guidance(status: BinaryStatus, rich_available: bool) -> None:
    if status.found or not status.install_commands:
        return
    if rich_available:
        console.print(f"[yellow]{status.name} is not installed.[/yellow]")
        console.print("Install using one of the following commands:\n")
        for cmd in status.install_commands:
            console.print(f"  [bold]{cmd}[/bold]")
        console.print()
    else:
        print(f"{status.name} is not installed.", file=sys.stderr)
        print("Install using one of the following commands:\n", file=sys.stderr)
        for cmd in status.install_commands:
            print(f"  {cmd}", file=sys.stderr)
        print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor() -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check fails,
        :data:`exit_codes.GENERAL_ERROR` otherwise.
    """
    bash_status = detect_binary("bash")
    dmenu_status = detect_binary("dmenu")

    checks = [
        _xd_version_check(),
        _python_version_check(),
        _binary_check(bash_status, required=True),
        _binary_check(dmenu_status, required=False),
        _questionary_check(),
        _config_dir_check(),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)

    rich_available = True
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        rich_available = False

    if rich_available:
        table = Table(
            title="xd doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=12)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)

        for label, value, status in checks:
            table.add_row(label, value, status)

        console.print()
        console.print(table)
        console.print()
    else:
        _print_plain_doctor_table(checks)

    for status_obj in (bash_status, dmenu_status):
        _print_install_guidance(status_obj, rich_available)

    if has_failure:
        if rich_available:
            console.print("[bold red]Some checks failed.[/bold red]")
        else:
            print("Some checks failed.", file=sys.stderr)
        return exit_codes.GENERAL_ERROR

    if rich_available:
        console.print("[bold green]All checks passed.[/bold green]")
    else:
        print("All checks passed.", file=sys.stderr)
    return exit_codes.SUCCESS
