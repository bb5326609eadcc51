"""questionary backed implementation of :class:`~xd_menu.core.protocols.Picker`.

An in-terminal alternative to dmenu, useful over SSH or without an X
session.  questionary is imported lazily so that the dmenu path keeps
working when it is not installed.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from xd_menu.exceptions import EnvironmentError


def _import_questionary() -> Any:
    """Import questionary lazily for interactive selection."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


class TerminalPicker:
    """Concrete :class:`Picker` rendering prompts with questionary.

    ``questionary``'s ``.ask()`` returns ``None`` on Ctrl+C / Esc, which
    maps directly onto the protocol's cancellation value.
    """

    def pick(self, label: str, options: Sequence[str]) -> str | None:
        questionary = _import_questionary()

        if not options:
            answer: str | None = questionary.text(f"{label}:").ask()
            return answer.strip() if answer is not None else None

        return questionary.select(
            label,
            choices=list(options),
            use_arrow_keys=True,
            use_shortcuts=False,
        ).ask()
