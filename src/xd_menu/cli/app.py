"""CLI application entry point and command routing for xd-menu.

This module is the **sole error boundary** for the entire application.
It catches :class:`~xd_menu.exceptions.XdError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via
Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here; loading, picking, executing and
  navigating are delegated to the core and infrastructure layers.
* Everything after a literal ``--`` is handed to the picker program
  unchanged; it is never read from global state.
* A failed menu command was already shown through the picker, so
  :class:`~xd_menu.exceptions.FatalExecutionError` is only logged here.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from xd_menu.cli import exit_codes
from xd_menu.cli.console import console
from xd_menu.exceptions import FatalExecutionError, XdError
from xd_menu.utils.log import get_logger, setup_logging
from xd_menu.version import __version__

logger = get_logger(__name__)

ROOT_LABEL: str = "xd"
PICKER_ARGS_SEPARATOR: str = "--"


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    The CLI supports:
    * ``xd``                  — open the menu
    * ``xd -- -l 10 -fn mono`` — open the menu, extra args go to dmenu
    * ``xd doctor``           — environment diagnostics
    * ``xd --version``
    """
    parser = argparse.ArgumentParser(
        prog="xd",
        description="Interactive command launcher driven by a YAML menu tree.",
        epilog="Arguments after '--' are passed to the picker program.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        metavar="PATH",
        help="Path to the configuration file (default: every *.yaml in $XDG_CONFIG_HOME/xd).",
    )
    parser.add_argument(
        "--command",
        default="",
        metavar="NAME",
        help="Start inside the top-level submenu called NAME.",
    )
    parser.add_argument(
        "--picker",
        choices=("dmenu", "terminal"),
        default="dmenu",
        help="Selection front-end (default: dmenu).",
    )
    parser.add_argument(
        "--dmenu-program",
        default="dmenu",
        metavar="PROGRAM",
        help="dmenu-compatible program to run (default: dmenu).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        metavar="LEVEL",
        help="Logging level (default: $XD_LOG_LEVEL or WARNING).",
    )
    parser.add_argument(
        "target",
        nargs="?",
        default=None,
        help="'doctor' runs diagnostics instead of opening the menu.",
    )
    return parser


def _split_picker_args(argv: Sequence[str]) -> tuple[list[str], list[str]]:
    """Split *argv* at the first ``--`` into (own args, picker args)."""
    args = list(argv)
    if PICKER_ARGS_SEPARATOR not in args:
        return args, []
    index = args.index(PICKER_ARGS_SEPARATOR)
    return args[:index], args[index + 1:]


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_navigate(args: argparse.Namespace, picker_args: list[str]) -> int:
    """Load the tree and run one navigation.

    Flow:
    1. Load and validate the command tree.
    2. Build the picker and executor.
    3. Navigate from the root until an action runs or the user leaves.
    """
    from xd_menu.core.navigator import Navigator
    from xd_menu.infra.config_loader import load_config
    from xd_menu.infra.dmenu_picker import DmenuPicker
    from xd_menu.infra.shell_executor import ShellExecutor
    from xd_menu.infra.terminal_picker import TerminalPicker

    commands = load_config(args.config, args.command)
    if not commands:
        logger.warning("configuration holds no commands, nothing to show")
        return exit_codes.SUCCESS

    if args.picker == "terminal":
        if picker_args:
            logger.warning("ignoring picker arguments %s for the terminal picker", picker_args)
        picker = TerminalPicker()
    else:
        picker = DmenuPicker(args.dmenu_program, extra_args=picker_args)

    navigator = Navigator(picker, ShellExecutor())
    result = navigator.navigate(commands, ROOT_LABEL)
    logger.info("navigation finished: %s", result.outcome.value)
    return exit_codes.SUCCESS


def _handle_doctor() -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from xd_menu.cli.doctor import run_doctor

    return run_doctor()


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the xd CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    own_args, picker_args = _split_picker_args(
        sys.argv[1:] if argv is None else argv,
    )
    parser = _build_parser()
    args = parser.parse_args(own_args)
    if args.target not in (None, "doctor"):
        parser.error(f"unknown command: {args.target!r}")
    setup_logging(args.log_level)

    if args.target == "doctor":
        return _handle_doctor()

    return _handle_navigate(args, picker_args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except FatalExecutionError as exc:
        logger.error("'%s' failed, exiting", exc.command)
        sys.exit(exit_codes.GENERAL_ERROR)
    except XdError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
