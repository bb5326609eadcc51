"""dmenu backed implementation of :class:`~xd_menu.core.protocols.Picker`.

This module is the **only** place in the codebase that spawns the
selection program.  ``OSError`` / non-zero exits are mapped to
:class:`~xd_menu.exceptions.PickerError` subclasses here; dmenu's
Escape (exit status 1 with no output) is reported as a cancellation.
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence

from xd_menu.exceptions import PickerError, PickerNotFoundError
from xd_menu.infra.binary_detector import detect_binary, install_hint
from xd_menu.infra.shell_executor import OUTPUT_ENCODING, OUTPUT_ERRORS
from xd_menu.utils.log import get_logger

logger = get_logger(__name__)

# dmenu exits with this status when the user presses Escape.
_CANCEL_EXIT_STATUS: int = 1


class DmenuPicker:
    """Concrete :class:`Picker` that runs ``dmenu`` (or a compatible program).

    Usage::

        picker = DmenuPicker(extra_args=("-l", "10"))
        choice = picker.pick("xd", ["System", "Exit"])

    Parameters
    ----------
    program:
        Executable to run.  Any dmenu-compatible selector works
        (``rofi -dmenu`` style wrappers, ``bemenu``, ...).
    extra_args:
        Arguments placed right after the program name, before the
        ``-i -p LABEL`` flags added by this class.
    """

    def __init__(
        self,
        program: str = "dmenu",
        extra_args: Sequence[str] = (),
    ) -> None:
        self.program: str = program
        self.extra_args: tuple[str, ...] = tuple(extra_args)

    def build_argv(self, label: str) -> list[str]:
        """Return the full argument vector for a prompt labelled *label*."""
        return [self.program, *self.extra_args, "-i", "-p", label]

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def pick(self, label: str, options: Sequence[str]) -> str | None:
        """Show *options* (or a free-text prompt) and return the answer.

        Raises
        ------
        PickerNotFoundError
            When the program is not on PATH.
        PickerError
            When the program exits abnormally for another reason.
        """
        argv = self.build_argv(label)
        stdin = "\n".join(options)

        try:
            completed = subprocess.run(
                argv,
                input=stdin,
                capture_output=True,
                text=True,
                encoding=OUTPUT_ENCODING,
                errors=OUTPUT_ERRORS,
                check=False,
            )
        except FileNotFoundError as exc:
            raise PickerNotFoundError(
                f"{self.program} is not installed or not on PATH.",
                hint=install_hint(detect_binary(self.program)),
            ) from exc
        except OSError as exc:
            raise PickerError(f"Could not start {self.program}: {exc}") from exc

        selection = completed.stdout.strip()
        if completed.returncode == 0:
            return selection
        if completed.returncode == _CANCEL_EXIT_STATUS and not selection:
            logger.debug("%s dismissed at '%s'", self.program, label)
            return None

        detail = completed.stderr.strip() or f"exit status {completed.returncode}"
        raise PickerError(
            f"{self.program} failed: {detail}",
            hint=f"prompt: {label!r}, options: {list(options)!r}",
        )
