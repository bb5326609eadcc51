"""Infrastructure: external program detection and platform guidance.

Locates the programs xd-menu shells out to (``dmenu``, ``bash``) and
provides platform-specific installation guidance when one is missing.

Rules
-----
* Detection via :func:`shutil.which` only — no subprocess.
* No automatic installation.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import platform
import shutil
from dataclasses import dataclass
from pathlib import Path


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class BinaryStatus:
    """Result of a PATH probe for one program.

    Attributes
    ----------
    name : str
        Program name that was looked up.
    found : bool
        Whether the program was located on PATH.
    path : Path | None
        Absolute path to the binary, or ``None``.
    install_commands : tuple[str, ...]
        Suggested shell commands for installing the program on the
        current platform.  Empty when it is already present.
    """

    name: str
    found: bool
    path: Path | None
    install_commands: tuple[str, ...]


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_binary(name: str) -> BinaryStatus:
    """Probe PATH for *name*.

    Returns a :class:`BinaryStatus` regardless of whether the program is
    present — the caller decides whether to abort or merely warn.
    """
    result = shutil.which(name)

    if result is not None:
        resolved = Path(result).resolve()
        return BinaryStatus(
            name=name,
            found=True,
            path=resolved,
            install_commands=(),
        )

    return BinaryStatus(
        name=name,
        found=False,
        path=None,
        install_commands=_platform_install_commands(name),
    )


def install_hint(status: BinaryStatus) -> str | None:
    """Render the install commands of *status* as a hint block."""
    if not status.install_commands:
        return None
    lines = [f"Install {status.name} using one of:"]
    lines.extend(f"  {cmd}" for cmd in status.install_commands)
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Platform-specific install guidance
# ---------------------------------------------------------------------------

# Package name per package manager, when it differs from the program name.
_PACKAGE_NAMES: dict[str, dict[str, str]] = {
    "dmenu": {"apt": "suckless-tools"},
}


def _package(name: str, manager: str) -> str:
    return _PACKAGE_NAMES.get(name, {}).get(manager, name)


def _platform_install_commands(name: str) -> tuple[str, ...]:
    """Return install commands for *name* appropriate for the current OS."""
    system = platform.system().lower()
    if system == "linux":
        return (
            f"sudo apt install {_package(name, 'apt')}",
            f"sudo dnf install {_package(name, 'dnf')}",
            f"sudo pacman -S {_package(name, 'pacman')}",
        )
    if system == "darwin":
        return (f"brew install {_package(name, 'brew')}",)
    if system.endswith("bsd"):
        return (f"pkg install {_package(name, 'pkg')}",)
    # Fallback: generic guidance.
    return (f"Please install {name} with your system package manager",)
