"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
The navigator depends ONLY on these protocols — never on concrete
implementations — so tests and alternative front-ends can plug in
their own picker or executor.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol


class Picker(Protocol):
    """Contract for interactive selection prompts.

    Any object that implements :meth:`pick` with the correct signature
    satisfies this protocol structurally (no explicit inheritance
    required).
    """

    def pick(self, label: str, options: Sequence[str]) -> str | None:
        """Block until the user answers and return the answer.

        Parameters
        ----------
        label:
            Prompt text shown to the user (usually the breadcrumb).
        options:
            Choices to select from.  An **empty** sequence requests
            free-text input instead of a selection.

        Returns
        -------
        str | None
            The chosen option or the typed text.  ``None`` when the user
            dismissed the prompt; this is distinct from every literal
            option, including ``"Exit"``.

        Raises
        ------
        PickerError
            When the prompt itself cannot be shown.
        """
        ...  # pragma: no cover


class Executor(Protocol):
    """Contract for shell command runners."""

    def run(self, command: str) -> str:
        """Run *command* synchronously and return its combined output.

        Raises
        ------
        ExecutionFailedError
            On a non-zero exit status or when the command cannot be
            spawned.  The message carries the command's diagnostic
            output.
        """
        ...  # pragma: no cover
