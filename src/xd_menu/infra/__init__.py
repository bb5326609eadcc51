"""Infrastructure layer — external system integration.

This layer wraps every interaction with the operating system: the
picker program, the shell, PATH probing and the YAML configuration.
Raw ``OSError`` / ``yaml`` exceptions are caught here and re-raised as
:class:`~xd_menu.exceptions.XdError` subclasses.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from xd_menu.infra.binary_detector import BinaryStatus, detect_binary
from xd_menu.infra.config_loader import default_config_dir, load_config
from xd_menu.infra.dmenu_picker import DmenuPicker
from xd_menu.infra.shell_executor import ShellExecutor
from xd_menu.infra.terminal_picker import TerminalPicker

__all__: list[str] = [
    "BinaryStatus",
    "DmenuPicker",
    "ShellExecutor",
    "TerminalPicker",
    "default_config_dir",
    "detect_binary",
    "load_config",
]
