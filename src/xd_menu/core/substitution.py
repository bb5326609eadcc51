"""Pure placeholder substitution.

Every function in this module is a **pure** transformation — no I/O,
no mutation of its inputs.  Substitution is lazy: binding a value only
rewrites the immediate children, grandchildren keep their templates
until their own level is reached.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence

from xd_menu.core.models import PLACEHOLDER, Command


def substitute(template: str, value: str) -> str:
    """Replace every literal ``$selected`` in *template* with *value*."""
    return template.replace(PLACEHOLDER, value)


def bind_child(child: Command, value: str) -> Command:
    """Return a copy of *child* with *value* bound into its templates.

    ``list`` receives the substituted ``cmd``, not a substituted copy of
    its own ``list``.  A child that only had a ``list`` therefore loses
    it once bound.
    """
    bound = substitute(child.cmd, value)
    return dataclasses.replace(child, cmd=bound, list=bound)


def bind_children(children: Sequence[Command], value: str) -> tuple[Command, ...]:
    """Bind *value* into each of *children*, preserving order."""
    return tuple(bind_child(child, value) for child in children)
