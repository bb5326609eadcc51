"""Core navigation engine — walks the command tree through a picker.

The :class:`Navigator` depends on a :class:`~xd_menu.core.protocols.Picker`
and an :class:`~xd_menu.core.protocols.Executor` injected at construction
time (dependency inversion), keeping the core free of any subprocess or
terminal code.

Each call frame performs exactly one picker interaction and at most one
executor call before recursing or returning.  There is no loop back to
a parent menu: once a frame returns, every caller returns too.

Guarantees
----------
* The command tree passed in is never mutated.
* Only :class:`~xd_menu.exceptions.XdError` subclasses escape.
* An execution failure is shown through the picker, then surfaces as
  :class:`~xd_menu.exceptions.FatalExecutionError`.
"""

from __future__ import annotations

from collections.abc import Sequence

from xd_menu.core.models import (
    EXIT_OPTION,
    Command,
    NavigationResult,
    NodeKind,
    Outcome,
    extend_breadcrumb,
    find_child,
)
from xd_menu.core.protocols import Executor, Picker
from xd_menu.core.substitution import bind_children, substitute
from xd_menu.exceptions import (
    ExecutionFailedError,
    FatalExecutionError,
    PickerError,
    XdError,
)
from xd_menu.utils.log import get_logger

logger = get_logger(__name__)

ERROR_LABEL: str = "Error"


class Navigator:
    """Recursive menu traversal over an immutable command tree.

    Parameters
    ----------
    picker:
        Any object satisfying the :class:`Picker` protocol.
    executor:
        Any object satisfying the :class:`Executor` protocol.
    """

    def __init__(self, picker: Picker, executor: Executor) -> None:
        self._picker: Picker = picker
        self._executor: Executor = executor

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def navigate(
        self,
        commands: Sequence[Command],
        breadcrumb: str,
    ) -> NavigationResult:
        """Show *commands* plus ``Exit`` and act on the user's choice.

        Raises
        ------
        FatalExecutionError
            When the command finally executed (or a list command) fails.
        PickerError
            When the picker cannot be shown.
        """
        options = [command.name for command in commands]
        options.append(EXIT_OPTION)

        selected = self._picker.pick(breadcrumb, options)
        if selected is None:
            logger.debug("menu '%s' cancelled", breadcrumb)
            return NavigationResult(Outcome.CANCELLED)
        if selected == EXIT_OPTION:
            logger.debug("exit chosen at '%s'", breadcrumb)
            return NavigationResult(Outcome.EXITED)

        node = find_child(commands, selected)
        if node is None:
            logger.debug("selection %r matches no entry at '%s'", selected, breadcrumb)
            return NavigationResult(Outcome.UNRESOLVED)

        kind = node.kind
        logger.debug("'%s' selected at '%s' (%s)", node.name, breadcrumb, kind.value)

        if kind is NodeKind.PROMPT:
            return self._navigate_prompt(node, breadcrumb)
        if kind is NodeKind.LIST:
            return self._navigate_list(node, breadcrumb)
        if kind is NodeKind.SUBMENU:
            return self.navigate(node.commands, extend_breadcrumb(breadcrumb, node.name))
        if kind is NodeKind.ACTION:
            return self._execute(node.cmd)
        return NavigationResult(Outcome.NOOP)

    # ------------------------------------------------------------------
    # Value-capturing flows
    # ------------------------------------------------------------------

    def _navigate_prompt(self, node: Command, breadcrumb: str) -> NavigationResult:
        """Ask for free text and bind it into the node's descendants."""
        label = extend_breadcrumb(breadcrumb, node.name, node.prompt)
        text = self._picker.pick(label, [])
        if not text:
            logger.debug("empty input for '%s', nothing to do", node.name)
            return NavigationResult(Outcome.CANCELLED)
        return self._apply_value(node, text, breadcrumb)

    def _navigate_list(self, node: Command, breadcrumb: str) -> NavigationResult:
        """Run the node's list command and let the user pick a line."""
        output = self._run(node.list)
        items = output.splitlines()
        items.append(EXIT_OPTION)

        selected = self._picker.pick(extend_breadcrumb(breadcrumb, node.name), items)
        if selected is None:
            return NavigationResult(Outcome.CANCELLED)
        if selected == EXIT_OPTION:
            return NavigationResult(Outcome.EXITED)
        return self._apply_value(node, selected, breadcrumb)

    def _apply_value(
        self,
        node: Command,
        value: str,
        breadcrumb: str,
    ) -> NavigationResult:
        """Recurse into bound children, or run the node's own command."""
        if node.commands:
            children = bind_children(node.commands, value)
            return self.navigate(children, extend_breadcrumb(breadcrumb, node.name))
        if node.cmd:
            return self._execute(substitute(node.cmd, value))
        return NavigationResult(Outcome.NOOP)

    # ------------------------------------------------------------------
    # Executor delegation (safe boundary)
    # ------------------------------------------------------------------

    def _execute(self, command: str) -> NavigationResult:
        output = self._run(command)
        return NavigationResult(Outcome.EXECUTED, command=command, output=output)

    def _run(self, command: str) -> str:
        """Call the executor; turn any failure into a fatal outcome."""
        try:
            return self._executor.run(command)
        except ExecutionFailedError as exc:
            raise self._fatal(command, exc) from exc
        except XdError:
            raise
        except Exception as exc:
            wrapped = ExecutionFailedError(
                f"Unexpected executor error: {exc}",
                command=command,
            )
            raise self._fatal(command, wrapped) from exc

    def _fatal(self, command: str, exc: ExecutionFailedError) -> FatalExecutionError:
        """Show *exc* through the picker and build the terminal error."""
        text = str(exc)
        logger.error("command failed -> %s: %s", command, text)
        try:
            self._picker.pick(ERROR_LABEL, [f"Error: {text}", EXIT_OPTION])
        except PickerError as picker_exc:
            logger.warning("could not display the failure: %s", picker_exc)
        return FatalExecutionError(
            text,
            command=command,
            returncode=exc.returncode,
            hint=exc.hint,
        )
