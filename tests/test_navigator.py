"""Tests for the navigation engine (core/navigator.py).

The picker and executor are scripted fakes; one list-flow group runs
real ``bash`` commands (``printf`` only).

Coverage:
* Exit / cancellation at every level.
* Dispatch precedence: prompt → list → submenu → cmd.
* Free-text and dynamic-list flows, including empty input / output.
* Placeholder propagation without mutating the tree.
* Execution failures surfacing as ``FatalExecutionError``.
"""

from __future__ import annotations

import shutil

import pytest
from conftest import FakeExecutor, FakePicker

from xd_menu.core.models import Command, NavigationResult, Outcome
from xd_menu.core.navigator import ERROR_LABEL, Navigator
from xd_menu.exceptions import (
    ExecutionFailedError,
    FatalExecutionError,
    PickerError,
)
from xd_menu.infra.shell_executor import ShellExecutor


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

def _system_tree() -> tuple[Command, ...]:
    return (
        Command(
            name="System",
            commands=(
                Command(name="Reboot", cmd="reboot"),
                Command(name="Shutdown", cmd="shutdown now"),
            ),
        ),
    )


def _run(
    tree: tuple[Command, ...],
    answers: list[str | None],
    executor: FakeExecutor | None = None,
) -> tuple[NavigationResult, FakePicker, FakeExecutor]:
    picker = FakePicker(answers)
    executor = executor or FakeExecutor()
    result = Navigator(picker, executor).navigate(tree, "xd")
    return result, picker, executor


# ---------------------------------------------------------------------------
# Top-level dispatch
# ---------------------------------------------------------------------------

class TestNavigate:
    def test_root_options_include_exit(self) -> None:
        _, picker, _ = _run(_system_tree(), ["Exit"])
        assert picker.calls == [("xd", ["System", "Exit"])]

    def test_exit_at_root_executes_nothing(self) -> None:
        result, _, executor = _run(_system_tree(), ["Exit"])
        assert result.outcome is Outcome.EXITED
        assert executor.calls == []

    def test_exit_in_submenu_executes_nothing(self) -> None:
        result, _, executor = _run(_system_tree(), ["System", "Exit"])
        assert result.outcome is Outcome.EXITED
        assert executor.calls == []

    def test_cancel_executes_nothing(self) -> None:
        result, picker, executor = _run(_system_tree(), [None])
        assert result.outcome is Outcome.CANCELLED
        assert len(picker.calls) == 1
        assert executor.calls == []

    def test_submenu_then_action_executes_once(self) -> None:
        result, picker, executor = _run(_system_tree(), ["System", "Reboot"])

        assert executor.calls == ["reboot"]
        assert result.outcome is Outcome.EXECUTED
        assert result.command == "reboot"
        assert picker.calls[1] == ("xd > System", ["Reboot", "Shutdown", "Exit"])

    def test_action_output_is_returned(self) -> None:
        executor = FakeExecutor(outputs={"uptime": "up 3 days\n"})
        tree = (Command(name="Uptime", cmd="uptime"),)
        result, _, _ = _run(tree, ["Uptime"], executor)
        assert result.output == "up 3 days\n"

    def test_action_runs_template_verbatim(self) -> None:
        tree = (Command(name="Echo", cmd="echo $selected"),)
        _, _, executor = _run(tree, ["Echo"])
        assert executor.calls == ["echo $selected"]

    def test_unknown_selection_is_noop(self) -> None:
        result, _, executor = _run(_system_tree(), ["typed by hand"])
        assert result.outcome is Outcome.UNRESOLVED
        assert executor.calls == []

    def test_empty_node_is_noop(self) -> None:
        result, picker, executor = _run((Command(name="Nothing"),), ["Nothing"])
        assert result.outcome is Outcome.NOOP
        assert len(picker.calls) == 1
        assert executor.calls == []

    def test_breadcrumb_grows_per_level(self) -> None:
        tree = (
            Command(
                name="A",
                commands=(Command(name="B", commands=(Command(name="C", cmd="c"),)),),
            ),
        )
        _, picker, _ = _run(tree, ["A", "B", "C"])
        assert [label for label, _ in picker.calls] == ["xd", "xd > A", "xd > A > B"]


# ---------------------------------------------------------------------------
# Precedence
# ---------------------------------------------------------------------------

class TestPrecedence:
    def test_prompt_beats_cmd(self) -> None:
        tree = (Command(name="Rename", prompt="New name", cmd="rename $selected"),)
        _, picker, executor = _run(tree, ["Rename", None])

        assert picker.calls[1] == ("xd > Rename > New name", [])
        assert executor.calls == []

    def test_list_beats_commands(self) -> None:
        tree = (
            Command(
                name="Pick",
                list="ls",
                commands=(Command(name="Go", cmd="go"),),
            ),
        )
        _, _, executor = _run(tree, ["Pick", "Exit"])
        assert executor.calls == ["ls"]

    def test_commands_beat_cmd(self) -> None:
        tree = (
            Command(
                name="Menu",
                cmd="should-not-run",
                commands=(Command(name="Leaf", cmd="leaf"),),
            ),
        )
        _, picker, executor = _run(tree, ["Menu", "Exit"])
        assert picker.calls[1] == ("xd > Menu", ["Leaf", "Exit"])
        assert executor.calls == []


# ---------------------------------------------------------------------------
# Free-text flow
# ---------------------------------------------------------------------------

class TestPromptFlow:
    def test_text_substituted_into_own_cmd(self) -> None:
        tree = (Command(name="Rename", prompt="New name", cmd="rename $selected"),)
        result, _, executor = _run(tree, ["Rename", "foo"])

        assert executor.calls == ["rename foo"]
        assert result.outcome is Outcome.EXECUTED

    def test_empty_text_is_cancellation(self) -> None:
        tree = (Command(name="Rename", prompt="New name", cmd="rename $selected"),)
        result, _, executor = _run(tree, ["Rename", ""])

        assert result.outcome is Outcome.CANCELLED
        assert executor.calls == []

    def test_empty_text_does_not_recurse(self) -> None:
        tree = (
            Command(
                name="Search",
                prompt="Query",
                commands=(Command(name="Web", cmd="open $selected"),),
            ),
        )
        _, picker, _ = _run(tree, ["Search", ""])
        assert len(picker.calls) == 2

    def test_text_bound_into_children(self) -> None:
        tree = (
            Command(
                name="Search",
                prompt="Query",
                commands=(
                    Command(name="Web", cmd="open https://example.com/?q=$selected"),
                    Command(name="Man", cmd="man $selected"),
                ),
            ),
        )
        _, picker, executor = _run(tree, ["Search", "grep", "Man", "Exit"])

        assert picker.calls[2] == ("xd > Search", ["Web", "Man", "Exit"])
        # the bound child now carries its command in ``list`` as well
        assert executor.calls == ["man grep"]

    def test_prompt_without_cmd_or_children_is_noop(self) -> None:
        tree = (Command(name="Ask", prompt="Anything"),)
        result, _, executor = _run(tree, ["Ask", "hello"])
        assert result.outcome is Outcome.NOOP
        assert executor.calls == []


# ---------------------------------------------------------------------------
# Dynamic-list flow
# ---------------------------------------------------------------------------

class TestListFlow:
    def _connect_tree(self) -> tuple[Command, ...]:
        return (
            Command(
                name="Connect",
                list="echo dev1\necho dev2",
                commands=(Command(name="Go", cmd="connect $selected"),),
            ),
        )

    def test_options_come_from_list_output(self) -> None:
        executor = FakeExecutor(outputs={"echo dev1\necho dev2": "dev1\ndev2\n"})
        _, picker, _ = _run(self._connect_tree(), ["Connect", "Exit"], executor)
        assert picker.calls[1] == ("xd > Connect", ["dev1", "dev2", "Exit"])

    def test_bound_child_command_runs_as_list(self) -> None:
        executor = FakeExecutor(outputs={
            "echo dev1\necho dev2": "dev1\ndev2\n",
            "connect dev1": "connected\n",
        })
        result, picker, _ = _run(
            self._connect_tree(), ["Connect", "dev1", "Go"], executor,
        )

        assert picker.calls[2] == ("xd > Connect", ["Go", "Exit"])
        assert executor.calls == ["echo dev1\necho dev2", "connect dev1"]
        # The bound child's list mirrors its cmd, so its output is offered.
        assert picker.calls[3] == ("xd > Connect > Go", ["connected", "Exit"])
        assert result.outcome is Outcome.CANCELLED

    def test_empty_output_offers_only_exit(self) -> None:
        _, picker, _ = _run(self._connect_tree(), ["Connect", "Exit"])
        assert picker.calls[1] == ("xd > Connect", ["Exit"])

    def test_exit_from_list_executes_only_list(self) -> None:
        result, _, executor = _run(self._connect_tree(), ["Connect", "Exit"])
        assert result.outcome is Outcome.EXITED
        assert executor.calls == ["echo dev1\necho dev2"]

    def test_cancel_from_list(self) -> None:
        result, _, _ = _run(self._connect_tree(), ["Connect", None])
        assert result.outcome is Outcome.CANCELLED

    def test_item_substituted_into_own_cmd(self) -> None:
        executor = FakeExecutor(outputs={"nmcli -t -f NAME c": "home\nwork\n"})
        tree = (
            Command(name="Wifi", list="nmcli -t -f NAME c", cmd="nmcli c up $selected"),
        )
        result, _, executor = _run(tree, ["Wifi", "work"], executor)

        assert executor.calls == ["nmcli -t -f NAME c", "nmcli c up work"]
        assert result.command == "nmcli c up work"

    def test_list_without_cmd_or_children_is_noop(self) -> None:
        executor = FakeExecutor(outputs={"ls": "a\n"})
        tree = (Command(name="Files", list="ls"),)
        result, _, _ = _run(tree, ["Files", "a"], executor)
        assert result.outcome is Outcome.NOOP


@pytest.mark.skipif(shutil.which("bash") is None, reason="bash not installed")
class TestListFlowRealShell:
    def test_undecodable_list_output_still_offers_items(self) -> None:
        tree = (
            Command(name="Files", list=r"printf 'caf\xe9\nok\n'", cmd="echo $selected"),
        )
        picker = FakePicker(["Files", "ok"])
        result = Navigator(picker, ShellExecutor()).navigate(tree, "xd")

        assert picker.calls[1] == ("xd > Files", ["caf\udce9", "ok", "Exit"])
        assert result.outcome is Outcome.EXECUTED
        assert result.command == "echo ok"
        assert result.output == "ok\n"


# ---------------------------------------------------------------------------
# Immutability of the tree
# ---------------------------------------------------------------------------

class TestTreeIsNotMutated:
    def test_original_children_keep_placeholder(self) -> None:
        child = Command(name="Go", cmd="go $selected")
        tree = (Command(name="Ask", prompt="Where", commands=(child,)),)

        _run(tree, ["Ask", "home", "Exit"])

        assert tree[0].commands[0] is child
        assert child.cmd == "go $selected"
        assert child.list == ""

    def test_shared_subtree_rebinds_on_each_visit(self) -> None:
        ask = Command(
            name="Ask",
            prompt="Where",
            commands=(Command(name="Go", cmd="go $selected"),),
        )
        tree = (
            Command(name="First", commands=(ask,)),
            Command(name="Second", commands=(ask,)),
        )
        executor = FakeExecutor()
        navigator = Navigator(
            FakePicker(["First", "Ask", "home", "Go", "Exit"]), executor,
        )
        navigator.navigate(tree, "xd")

        navigator = Navigator(
            FakePicker(["Second", "Ask", "work", "Go", "Exit"]), executor,
        )
        navigator.navigate(tree, "xd")

        assert executor.calls == ["go home", "go work"]


# ---------------------------------------------------------------------------
# Execution failures
# ---------------------------------------------------------------------------

class TestExecutionFailure:
    def test_failure_is_shown_then_fatal(self) -> None:
        executor = FakeExecutor(failures={"reboot": "permission denied"})
        picker = FakePicker(["System", "Reboot"])

        with pytest.raises(FatalExecutionError) as exc_info:
            Navigator(picker, executor).navigate(_system_tree(), "xd")

        assert picker.calls[-1] == (ERROR_LABEL, ["Error: permission denied", "Exit"])
        assert exc_info.value.command == "reboot"
        assert exc_info.value.returncode == 1
        assert str(exc_info.value) == "permission denied"

    def test_fatal_is_chained_to_executor_error(self) -> None:
        executor = FakeExecutor(failures={"reboot": "nope"})
        with pytest.raises(FatalExecutionError) as exc_info:
            Navigator(FakePicker(["System", "Reboot"]), executor).navigate(
                _system_tree(), "xd",
            )
        assert isinstance(exc_info.value.__cause__, ExecutionFailedError)

    def test_list_command_failure_is_fatal(self) -> None:
        executor = FakeExecutor(failures={"ls /missing": "No such file"})
        tree = (Command(name="Files", list="ls /missing", cmd="cat $selected"),)

        with pytest.raises(FatalExecutionError, match="No such file"):
            _run(tree, ["Files"], executor)

    def test_unexpected_executor_error_is_wrapped(self) -> None:
        class Exploding:
            def run(self, command: str) -> str:
                raise RuntimeError("kaboom")

        picker = FakePicker(["System", "Reboot"])
        with pytest.raises(FatalExecutionError, match="Unexpected") as exc_info:
            Navigator(picker, Exploding()).navigate(_system_tree(), "xd")
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_picker_failure_while_reporting_still_fatal(self) -> None:
        class BrokenOnError(FakePicker):
            def pick(self, label: str, options: list[str]) -> str | None:
                if label == ERROR_LABEL:
                    raise PickerError("display gone")
                return super().pick(label, options)

        executor = FakeExecutor(failures={"reboot": "denied"})
        with pytest.raises(FatalExecutionError, match="denied"):
            Navigator(BrokenOnError(["System", "Reboot"]), executor).navigate(
                _system_tree(), "xd",
            )

    def test_picker_error_propagates(self) -> None:
        class Broken:
            def pick(self, label: str, options: list[str]) -> str | None:
                raise PickerError("no display")

        with pytest.raises(PickerError):
            Navigator(Broken(), FakeExecutor()).navigate(_system_tree(), "xd")
