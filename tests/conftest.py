"""Shared pytest fixtures and configuration for the xd-menu test suite.

Guidelines
----------
* No real picker is ever shown; no menu command is really executed.
* The picker and executor are replaced by the scripted fakes below.
* Tests must not depend on the user's config directory.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from pathlib import Path

import pytest

from xd_menu.exceptions import ExecutionFailedError


class FakePicker:
    """Scripted :class:`Picker`: returns queued answers, records every call."""

    def __init__(self, answers: Iterable[str | None] = ()) -> None:
        self.answers: list[str | None] = list(answers)
        self.calls: list[tuple[str, list[str]]] = []

    def pick(self, label: str, options: Sequence[str]) -> str | None:
        self.calls.append((label, list(options)))
        if not self.answers:
            return None
        return self.answers.pop(0)


class FakeExecutor:
    """Scripted :class:`Executor`: canned outputs and failures per command."""

    def __init__(
        self,
        outputs: Mapping[str, str] | None = None,
        failures: Mapping[str, str] | None = None,
    ) -> None:
        self.outputs: dict[str, str] = dict(outputs or {})
        self.failures: dict[str, str] = dict(failures or {})
        self.calls: list[str] = []

    def run(self, command: str) -> str:
        self.calls.append(command)
        if command in self.failures:
            raise ExecutionFailedError(
                self.failures[command], command=command, returncode=1,
            )
        return self.outputs.get(command, "")


@pytest.fixture
def config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point ``$XDG_CONFIG_HOME`` at an empty temporary directory."""
    home = tmp_path / "config-home"
    home.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home))
    return home


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """Undo :func:`setup_logging` so ``caplog`` sees package records."""
    logger = logging.getLogger("xd_menu")

    def reset() -> None:
        logger.handlers.clear()
        logger.propagate = True
        logger.setLevel(logging.NOTSET)

    reset()
    yield
    reset()
