"""
(C) 2026 Joseph Tingiris (joseph.tingiris@gmail.com)

Linearize a keymap into the ordered keybinding records VS Code consumes.

Behavior

- Runs the typing expansion (if any) into a copy of the authored table, so the
  caller's table is never changed.
- Walks the union of binding and removal chords in lexicographic order.
- Per chord: when clauses in lexicographic order, each emitted under every
  alias of the chord; suppressed entries are skipped. Removals for the chord
  follow its bindings, also under every alias.
- Drops exact duplicate records (key, when, command, args).

Any `KeybindingsError` propagates; there is no partial output.
"""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass, field
from typing import Any, Iterable

from keybindings_compiler.actions import Suppress, render
from keybindings_compiler.aliases import AliasExpander
from keybindings_compiler.debug import debug_echo
from keybindings_compiler.errors import DuplicateBinding
from keybindings_compiler.expansion import TypingExpansion
from keybindings_compiler.removals import RemovalOverlay, removal_command
from keybindings_compiler.table import BindingTable

# identity command for a suppressed slot; never emitted
SUPPRESSED = "(suppressed)"


@dataclass(frozen=True)
class Keybinding:
    """One output record of the `contributes.keybindings` array."""

    key: str
    command: str
    when: str = ""
    args: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        # empty fields are omitted, same as the manifest's other records
        out: dict[str, Any] = {}
        if self.key:
            out["key"] = self.key
        if self.command:
            out["command"] = self.command
        if self.when:
            out["when"] = self.when
        if self.args:
            out["args"] = self.args
        return out

    def identity(self) -> tuple[str, str, str, str]:
        """Exact-duplicate identity, args included."""
        return (self.key, self.when, self.command, _args_key(self.args))

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> Keybinding:
        return cls(
            key=str(obj.get("key", "") or ""),
            command=str(obj.get("command", "") or ""),
            when=str(obj.get("when", "") or ""),
            args=obj.get("args") or None,
        )


@dataclass
class Keymap:
    """Everything one compile reads: authored bindings, removals, typing expansion."""

    table: BindingTable = field(default_factory=BindingTable)
    removals: RemovalOverlay = field(default_factory=RemovalOverlay)
    expansion: TypingExpansion | None = None


def compile_keybindings(
    table: BindingTable,
    removals: RemovalOverlay | None = None,
    expansion: TypingExpansion | None = None,
    expander: AliasExpander | None = None,
) -> tuple[Keybinding, ...]:
    """Compile a table (plus removals and expansion) into ordered records."""
    if expander is None:
        expander = AliasExpander()
    if removals is None:
        removals = RemovalOverlay()

    working = table.copy()
    if expansion is not None:
        expansion.apply(working)

    chords = sorted(set(working.chords()) | set(removals.chords()))
    debug_echo(1, "linearize", None, f"linearizing {len(chords)} chords ({len(working)} rules, {len(removals)} removals)")

    records: list[Keybinding] = []
    seen: set[tuple[str, str, str, str]] = set()
    # (key, when) -> (source chord, record identity); removals never conflict
    claimed: dict[tuple[str, str], tuple[str, tuple[str, str, str, str]]] = {}

    def emit(record: Keybinding) -> None:
        ident = record.identity()
        if ident in seen:
            debug_echo(3, "linearize", record.key, f"dropping duplicate record {record.to_dict()!r}")
            return
        seen.add(ident)
        records.append(record)

    for chord in chords:
        aliases = expander.aliases_of(chord)
        slot = working.lookup(chord)
        for when in sorted(slot):
            action = slot[when]
            if isinstance(action, Suppress):
                # never emitted, but its slot stays taken under every alias
                for alias in aliases:
                    _claim(claimed, chord, alias, when, (alias, when, SUPPRESSED, ""))
                debug_echo(3, "linearize", chord, f"skipping suppressed key={chord!r} when={when!r}")
                continue
            command, args = render(action)
            for alias in aliases:
                record = Keybinding(key=alias, command=command, when=when, args=copy.deepcopy(args))
                _claim(claimed, chord, alias, when, record.identity())
                emit(record)
        for command in removals.removals_for(chord):
            for alias in aliases:
                emit(Keybinding(key=alias, command=removal_command(command)))

    debug_echo(1, "linearize", None, f"emitted {len(records)} records")
    return tuple(records)


def compile_keymap(keymap: Keymap, expander: AliasExpander | None = None) -> tuple[Keybinding, ...]:
    return compile_keybindings(keymap.table, keymap.removals, keymap.expansion, expander)


def dumps_keybindings(records: Iterable[Keybinding]) -> str:
    """Render records as an indented JSON array.

    Non-ASCII text is written as-is; control characters stay escaped.
    """
    payload = [record.to_dict() for record in records]
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"


def _args_key(args: dict[str, Any] | None) -> str:
    if not args:
        return ""
    return json.dumps(args, sort_keys=True, ensure_ascii=False)


def _claim(claimed: dict, chord: str, key: str, when: str, ident: tuple[str, str, str, str]) -> None:
    """Fail when an alias spelling lands on another chord's (key, when) with a different action."""
    slot = (key, when)
    previous = claimed.get(slot)
    if previous is None:
        claimed[slot] = (chord, ident)
        return
    source, previous_ident = previous
    if previous_ident != ident:
        raise DuplicateBinding(
            f"alias of {chord!r} collides with the binding from {source!r} ({previous_ident[2]} vs {ident[2]})",
            chord=key,
            condition=when,
        )
