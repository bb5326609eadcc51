"""Shell backed implementation of :class:`~xd_menu.core.protocols.Executor`.

This module is the **only** place in the codebase that runs the
commands defined in the menu tree.  Every failure is mapped to
:class:`~xd_menu.exceptions.ExecutionFailedError`.
"""

from __future__ import annotations

import subprocess

from xd_menu.exceptions import ExecutionFailedError
from xd_menu.utils.log import get_logger

logger = get_logger(__name__)

# Undecodable bytes survive as surrogates and are restored when the value
# is passed back to a subprocess.
OUTPUT_ENCODING: str = "utf-8"
OUTPUT_ERRORS: str = "surrogateescape"


class ShellExecutor:
    """Concrete :class:`Executor` running ``<shell> -c <command>``.

    stdout and stderr are merged, as a terminal user would see them.
    """

    def __init__(self, shell: str = "bash") -> None:
        self.shell: str = shell

    def run(self, command: str) -> str:
        """Run *command* and return its combined output.

        Raises
        ------
        ExecutionFailedError
            On a non-zero exit status (message: the output, or
            ``exit status N`` when there was none) or when the shell
            cannot be started.
        """
        logger.info("executing command -> %s", command)
        try:
            completed = subprocess.run(
                [self.shell, "-c", command],
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding=OUTPUT_ENCODING,
                errors=OUTPUT_ERRORS,
                check=False,
            )
        except OSError as exc:
            raise ExecutionFailedError(str(exc), command=command) from exc

        output = completed.stdout or ""
        if completed.returncode != 0:
            raise ExecutionFailedError(
                output or f"exit status {completed.returncode}",
                command=command,
                returncode=completed.returncode,
            )
        return output
