"""Read-only command registry consumed by the router.

The registry is populated by a build step outside this package; at
runtime it only answers lookups. :class:`StaticCommandRegistry` is the
in-memory implementation used by consumers and tests.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path
from types import MappingProxyType
from typing import Protocol

from slashroute.config.discovery import load_toml
from slashroute.domain.commands import Command


class CommandRegistry(Protocol):
    """Lookup of command definitions by name."""

    def lookup(self, name: str) -> Command | None: ...


class StaticCommandRegistry:
    """Immutable name -> Command mapping.

    Raises:
        ValueError: Two commands share a name.
    """

    def __init__(self, commands: Iterable[Command] = ()) -> None:
        table: dict[str, Command] = {}
        for command in commands:
            if command.name in table:
                msg = f"Duplicate command name: {command.name!r}"
                raise ValueError(msg)
            table[command.name] = command
        self._commands = MappingProxyType(table)

    @classmethod
    def from_toml(cls, path: Path) -> StaticCommandRegistry:
        """Load ``[[commands]]`` tables from a command definition file."""
        data = load_toml(path)
        return cls(Command.model_validate(entry) for entry in data.get("commands", []))

    def lookup(self, name: str) -> Command | None:
        return self._commands.get(name)

    def names(self) -> list[str]:
        return sorted(self._commands)

    def __iter__(self) -> Iterator[Command]:
        return iter(self._commands.values())

    def __len__(self) -> int:
        return len(self._commands)

    def __contains__(self, name: object) -> bool:
        return name in self._commands
