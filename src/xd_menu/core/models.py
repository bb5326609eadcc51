"""Domain models for xd-menu.

The command tree is built from **frozen** dataclasses — immutable value
objects with no behaviour beyond classification and lookup.  Placeholder
substitution never mutates a node; it produces new ones (see
:mod:`xd_menu.core.substitution`), so a subtree can be revisited in the
same run with its original templates.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from xd_menu.exceptions import ConfigError, DuplicateCommandNameError


PLACEHOLDER: str = "$selected"
"""Token in ``cmd`` / ``list`` templates replaced by the captured value."""

EXIT_OPTION: str = "Exit"
"""Synthetic option appended to every selection list."""

BREADCRUMB_SEPARATOR: str = " > "


# ---------------------------------------------------------------------------
# Node classification
# ---------------------------------------------------------------------------

class NodeKind(enum.Enum):
    """What selecting a node does, in precedence order."""

    PROMPT = "prompt"
    LIST = "list"
    SUBMENU = "submenu"
    ACTION = "action"
    EMPTY = "empty"


# ---------------------------------------------------------------------------
# Command node
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Command:
    """A single node of the menu tree.

    Absent fields are empty strings / an empty tuple, never ``None``.
    """

    name: str
    """Display label, unique among siblings."""

    cmd: str = ""
    """Shell command template; may contain ``$selected``."""

    list: str = ""
    """Shell command whose output lines become the options of this node."""

    prompt: str = ""
    """Free-text prompt label; requests raw text instead of a selection."""

    commands: tuple[Command, ...] = ()
    """Ordered children.  Non-empty means this node is a submenu."""

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ConfigError(
                "Every command needs a non-empty name.",
                hint=f"Offending entry: cmd={self.cmd!r} list={self.list!r}",
            )
        if not isinstance(self.commands, tuple):
            object.__setattr__(self, "commands", tuple(self.commands))
        validate_sibling_names(self.commands, parent=self.name)

    @property
    def kind(self) -> NodeKind:
        """Classify by precedence: prompt, list, commands, cmd."""
        if self.prompt:
            return NodeKind.PROMPT
        if self.list:
            return NodeKind.LIST
        if self.commands:
            return NodeKind.SUBMENU
        if self.cmd:
            return NodeKind.ACTION
        return NodeKind.EMPTY


# ---------------------------------------------------------------------------
# Tree helpers
# ---------------------------------------------------------------------------

def validate_sibling_names(
    commands: Iterable[Command],
    *,
    parent: str | None = None,
) -> None:
    """Raise :class:`DuplicateCommandNameError` on a name collision.

    A sibling named ``Exit`` collides with the synthetic exit option.
    """
    where = f" under '{parent}'" if parent else " at the top level"
    seen: set[str] = set()
    for command in commands:
        if command.name == EXIT_OPTION:
            raise DuplicateCommandNameError(
                f"Command name '{EXIT_OPTION}' is reserved{where}.",
                hint="Rename the entry; 'Exit' is always added to every menu.",
            )
        if command.name in seen:
            raise DuplicateCommandNameError(
                f"Duplicate command name '{command.name}'{where}.",
                hint="Sibling names must be unique so a selection maps to one entry.",
            )
        seen.add(command.name)


def build_tree(commands: Iterable[Command]) -> tuple[Command, ...]:
    """Validate a root sequence and freeze it into a tuple."""
    root = tuple(commands)
    validate_sibling_names(root)
    return root


def find_child(commands: Sequence[Command], name: str) -> Command | None:
    """Return the sibling called *name*, or ``None`` when there is none."""
    return next((command for command in commands if command.name == name), None)


def extend_breadcrumb(breadcrumb: str, *parts: str) -> str:
    """Join *parts* onto *breadcrumb* with the menu separator."""
    return BREADCRUMB_SEPARATOR.join((breadcrumb, *parts))


# ---------------------------------------------------------------------------
# Navigation result
# ---------------------------------------------------------------------------

class Outcome(enum.Enum):
    """How a navigation run ended."""

    EXITED = "exited"
    """User picked the synthetic ``Exit`` option."""

    CANCELLED = "cancelled"
    """Picker was dismissed, or free-text input was empty."""

    EXECUTED = "executed"
    """A command ran successfully."""

    UNRESOLVED = "unresolved"
    """The picker returned text that matches no sibling."""

    NOOP = "noop"
    """A node with nothing to do was selected."""


@dataclass(frozen=True, slots=True)
class NavigationResult:
    """Terminal, non-error outcome of :meth:`Navigator.navigate`."""

    outcome: Outcome
    command: str | None = None
    """Command string that was executed, for ``EXECUTED``."""

    output: str | None = None
    """Combined output of the executed command, for ``EXECUTED``."""

    @property
    def executed(self) -> bool:
        return self.outcome is Outcome.EXECUTED
