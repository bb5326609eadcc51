"""Custom exception hierarchy for xd-menu.

All exceptions that cross layer boundaries must inherit from
:class:`XdError`.  Raw ``OSError`` / ``subprocess`` / YAML exceptions
must never propagate beyond the infrastructure layer — they are caught
there and re-raised as a typed subclass defined here.

Hierarchy
---------
XdError
├── ConfigError
│   └── DuplicateCommandNameError
├── PickerError
│   └── PickerNotFoundError
├── ExecutionFailedError
│   └── FatalExecutionError
└── EnvironmentError
"""

from __future__ import annotations


class XdError(Exception):
    """Base exception for all xd-menu errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Configuration / command tree ------------------------------------------

class ConfigError(XdError):
    """Raised when the command tree cannot be loaded or is invalid."""


class DuplicateCommandNameError(ConfigError):
    """Raised when two siblings share a name (or a sibling is named ``Exit``)."""


# --- Picker ------------------------------------------------------------------

class PickerError(XdError):
    """Raised when the selection prompt fails for a reason other than cancel."""


class PickerNotFoundError(PickerError):
    """Raised when the picker program cannot be located on PATH."""


# --- Execution ---------------------------------------------------------------

class ExecutionFailedError(XdError):
    """Raised by an executor when a shell command fails.

    The message is the command's combined output, or the invocation
    error when the command produced no output.
    """

    def __init__(
        self,
        message: str,
        *,
        command: str = "",
        returncode: int | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.command: str = command
        self.returncode: int | None = returncode


class FatalExecutionError(ExecutionFailedError):
    """Terminal outcome of a navigation run whose command failed.

    Raised by the navigator after the failure has been shown to the user.
    The CLI maps it to a non-zero exit status; embedders may catch it.
    """


# --- Environment / tooling ---------------------------------------------------

class EnvironmentError(XdError):
    """Raised when a required runtime dependency is not available."""
