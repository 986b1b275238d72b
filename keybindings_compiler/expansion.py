"""
(C) 2026 Joseph Tingiris (joseph.tingiris@gmail.com)

Synthesize one "type this character" binding per printable key.

While the capture context is active, every key on a standard US layout (and
its shifted form) is routed through `TYPE_COMMAND` so the extension sees each
keystroke. Writing those ~94 bindings by hand invites typos; they are
generated here instead and checked against the authored table as they go in.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from keybindings_compiler.actions import Invoke, invoke
from keybindings_compiler.debug import debug_echo
from keybindings_compiler.errors import ExpansionCollision, MismatchedExpansionSet
from keybindings_compiler.keys import shift
from keybindings_compiler.table import BindingTable
from keybindings_compiler.when import WhenNode, atom, serialize

TYPE_CONTEXT = "keynav.typing"
TYPE_COMMAND = "type"

# unshifted keys by keyboard row (order matters! index i pairs with SHIFTED_CHARACTERS[i])
CHARACTERS = (
    "`1234567890-="
    "qwertyuiop[]\\"
    "asdfghjkl;'"
    "zxcvbnm,./"
)

SHIFTED_CHARACTERS = (
    "~!@#$%^&*()_+"
    "QWERTYUIOP{}|"
    'ASDFGHJKL:"'
    "ZXCVBNM<>?"
)


@dataclass(frozen=True)
class TypingExpansion:
    """One generated binding per character, all under the same condition."""

    condition: WhenNode
    command: str = TYPE_COMMAND
    characters: str = CHARACTERS
    shifted: str = SHIFTED_CHARACTERS
    shift_modifier: str = "shift"

    def validate(self) -> None:
        if len(self.characters) != len(self.shifted):
            raise MismatchedExpansionSet(
                f"{len(self.characters)} unshifted characters but {len(self.shifted)} shifted ones",
                condition=serialize(self.condition),
            )
        seen: set[str] = set()
        for ch in self.characters:
            if ch in seen:
                raise ExpansionCollision(
                    "character listed twice in the expansion set",
                    chord=ch,
                    condition=serialize(self.condition),
                )
            seen.add(ch)

    def bindings(self) -> Iterator[tuple[str, WhenNode, Invoke]]:
        """Yield (chord, condition, action) for every key, unshifted then shifted."""
        self.validate()
        for plain, shifted in zip(self.characters, self.shifted):
            yield plain, self.condition, invoke(self.command, {"text": plain})
            yield self._shift(plain), self.condition, invoke(self.command, {"text": shifted})

    def apply(self, table: BindingTable) -> int:
        """Register every generated binding into `table`; return how many."""
        count = 0
        for chord, condition, action in self.bindings():
            table.register(chord, condition, action, error=ExpansionCollision)
            count += 1
        debug_echo(1, "expand", None, f"generated {count} {self.command!r} bindings when={serialize(self.condition)!r}")
        return count

    def _shift(self, key: str) -> str:
        if self.shift_modifier == "shift":
            return shift(key)
        return f"{self.shift_modifier}+{key}"


def typing_expansion(context: str = TYPE_CONTEXT, command: str = TYPE_COMMAND) -> TypingExpansion:
    """The default expansion: every key under one capture context."""
    return TypingExpansion(atom(context), command=command)
