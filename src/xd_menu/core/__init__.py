"""Core layer — the command tree and the navigation engine.

Rules
-----
* No ``print()`` calls.
* No subprocess, filesystem or terminal I/O; the picker and executor
  are injected.
* No imports from ``cli`` or ``infra``.
"""

from xd_menu.core.models import (
    EXIT_OPTION,
    PLACEHOLDER,
    Command,
    NavigationResult,
    NodeKind,
    Outcome,
    build_tree,
)
from xd_menu.core.navigator import Navigator
from xd_menu.core.protocols import Executor, Picker

__all__: list[str] = [
    "EXIT_OPTION",
    "PLACEHOLDER",
    "Command",
    "Executor",
    "NavigationResult",
    "Navigator",
    "NodeKind",
    "Outcome",
    "Picker",
    "build_tree",
]
