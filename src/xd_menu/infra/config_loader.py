"""Infrastructure: locate, bootstrap and parse the YAML command tree.

Lookup order
------------
1. An explicit file (``--config PATH``) — read alone.
2. ``$XDG_CONFIG_HOME/xd`` (``~/.config/xd`` when unset).  A missing
   directory is created with a default ``xd.yaml``; every ``*.yaml``
   file inside is read in name order and the roots are concatenated.
   Unreadable files in the directory are skipped with a warning.

This module is the **only** place that imports ``yaml``.  YAML and
``OSError`` exceptions are re-raised as
:class:`~xd_menu.exceptions.ConfigError`.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from xd_menu.core.models import Command, build_tree
from xd_menu.exceptions import ConfigError
from xd_menu.utils.log import get_logger

logger = get_logger(__name__)

CONFIG_DIR_NAME: str = "xd"
DEFAULT_CONFIG_FILE: str = "xd.yaml"

DEFAULT_CONFIG: str = """\
- name: System
  commands:
    - name: Reboot
      cmd: reboot
    - name: Shutdown
      cmd: shutdown now
    - name: Suspend
      cmd: systemctl suspend
"""

_STRING_FIELDS: tuple[str, ...] = ("cmd", "list", "prompt")
_KNOWN_FIELDS: frozenset[str] = frozenset(("name", "commands", *_STRING_FIELDS))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def default_config_dir() -> Path:
    """Return ``$XDG_CONFIG_HOME/xd``, falling back to ``~/.config/xd``."""
    base = os.getenv("XDG_CONFIG_HOME")
    if not base:
        try:
            base = str(Path.home() / ".config")
        except RuntimeError as exc:
            raise ConfigError(f"Failed to get home directory: {exc}") from exc
    return Path(base) / CONFIG_DIR_NAME


def load_config(
    config_path: str | Path | None = None,
    command: str = "",
) -> tuple[Command, ...]:
    """Load the root command sequence.

    Parameters
    ----------
    config_path:
        Explicit file to read.  When ``None``, the default config
        directory is used (and bootstrapped if missing).
    command:
        When set, return only the children of the top-level submenu
        named *command* (case-insensitive) instead of the whole tree.

    Raises
    ------
    ConfigError
        For an unreadable or invalid explicit file, an unusable config
        directory, duplicate sibling names, or an unknown *command*.
    """
    if config_path:
        commands = read_config(Path(config_path), command)
    else:
        commands = _read_config_dir(ensure_config_dir(), command)

    root = build_tree(commands)
    if command and not root:
        raise ConfigError(
            f"No submenu named '{command}' found in the configuration.",
            hint="--command selects a top-level entry that has nested commands.",
        )
    return root


def ensure_config_dir(config_dir: Path | None = None) -> Path:
    """Create *config_dir* with a default ``xd.yaml`` if it does not exist."""
    directory = config_dir or default_config_dir()
    if directory.exists():
        return directory

    logger.info("creating default configuration in %s", directory)
    try:
        directory.mkdir(parents=True, exist_ok=True)
        (directory / DEFAULT_CONFIG_FILE).write_text(DEFAULT_CONFIG, encoding="utf-8")
    except OSError as exc:
        raise ConfigError(
            f"Failed to create config directory {directory}: {exc}",
        ) from exc
    return directory


def read_config(path: Path, command: str = "") -> list[Command]:
    """Read one YAML file, optionally narrowed to a submenu's children."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to load config {path}: {exc}") from exc

    try:
        data: Any = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(
            f"Failed to parse config file {path}: {exc}",
            hint="The file must be a YAML list of commands.",
        ) from exc

    commands = parse_commands(data, source=str(path))
    if not command:
        return commands

    wanted = command.lower()
    for entry in commands:
        if entry.name.lower() == wanted and entry.commands:
            return list(entry.commands)
    return []


# ---------------------------------------------------------------------------
# Raw YAML → domain model
# ---------------------------------------------------------------------------

def parse_commands(data: Any, *, source: str = "<config>") -> list[Command]:
    """Convert a parsed YAML document into :class:`Command` nodes."""
    if data is None:
        return []
    if not isinstance(data, list):
        raise ConfigError(
            f"{source}: expected a list of commands, got {type(data).__name__}.",
        )
    return [_parse_command(entry, source) for entry in data]


def _parse_command(raw: Any, source: str) -> Command:
    if not isinstance(raw, Mapping):
        raise ConfigError(
            f"{source}: every command must be a mapping, got {raw!r}.",
        )

    name = raw.get("name")
    if name is None or str(name) == "":
        raise ConfigError(f"{source}: command without a name: {dict(raw)!r}.")

    unknown = set(raw) - _KNOWN_FIELDS
    if unknown:
        logger.debug("%s: ignoring unknown keys %s on '%s'", source, sorted(unknown), name)

    fields = {key: _as_text(raw.get(key)) for key in _STRING_FIELDS}
    children = parse_commands(raw.get("commands"), source=source)
    return Command(name=str(name), commands=tuple(children), **fields)


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


# ---------------------------------------------------------------------------
# Directory merge
# ---------------------------------------------------------------------------

def _read_config_dir(config_dir: Path, command: str) -> list[Command]:
    try:
        files = sorted(
            entry for entry in config_dir.iterdir()
            if entry.is_file() and entry.suffix == ".yaml"
        )
    except OSError as exc:
        raise ConfigError(
            f"Could not read config dir {config_dir}: {exc}",
        ) from exc

    commands: list[Command] = []
    for path in files:
        try:
            commands.extend(read_config(path, command))
        except ConfigError as exc:
            logger.warning("could not read configuration file %s: %s", path.name, exc)
    return commands
