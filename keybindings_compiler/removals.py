"""
(C) 2026 Joseph Tingiris (joseph.tingiris@gmail.com)

Retract host-default keybindings.

A removal is a (chord, command) pair. VS Code unbinds a default when it sees
the command prefixed with `-`, with no when clause. Removals live beside the
binding table and never take part in its duplicate check: a chord may both
gain a new binding and lose an old default.
"""

from __future__ import annotations

from typing import Iterator

from keybindings_compiler.debug import debug_echo

REMOVAL_PREFIX = "-"


def removal_command(command: str) -> str:
    """Return the retraction form of a command name."""
    return f"{REMOVAL_PREFIX}{command}"


class RemovalOverlay:
    """Chord -> commands to retract, in registration order."""

    def __init__(self) -> None:
        self._removals: dict[str, list[str]] = {}

    def register_removal(self, chord: str, command: str) -> None:
        if not chord:
            raise ValueError("cannot register a removal for an empty chord")
        if not command:
            raise ValueError(f"removal at {chord!r} needs a command name")
        if command.startswith(REMOVAL_PREFIX):
            raise ValueError(f"removal at {chord!r} takes the plain command name, got {command!r}")
        commands = self._removals.setdefault(chord, [])
        if command in commands:
            return
        commands.append(command)
        debug_echo(2, "removal", chord, f"key={chord!r} retracts {command!r}")

    def removals_for(self, chord: str) -> tuple[str, ...]:
        return tuple(self._removals.get(chord, ()))

    def chords(self) -> list[str]:
        return list(self._removals)

    def items(self) -> Iterator[tuple[str, str]]:
        for chord, commands in self._removals.items():
            for command in commands:
                yield chord, command

    def copy(self) -> RemovalOverlay:
        clone = RemovalOverlay()
        clone._removals = {chord: list(commands) for chord, commands in self._removals.items()}
        return clone

    def __len__(self) -> int:
        return sum(len(commands) for commands in self._removals.values())
