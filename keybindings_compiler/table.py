"""
(C) 2026 Joseph Tingiris (joseph.tingiris@gmail.com)

The binding table: chord -> {serialized when clause -> action}.

There are two ways to put entries into a table and they do not mix:

- `BindingTable.register` is strict. A second rule for the same chord and
  when clause raises `DuplicateBinding`, naming both.
- `merge_tables` layers whole tables. Later tables win per (chord, when);
  use it to combine authoring layers, never to paper over a duplicate in one.
"""

from __future__ import annotations

from collections import OrderedDict
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from keybindings_compiler.actions import SUPPRESS, Action, Invoke, RawInject, Sequence, Suppress, invoke
from keybindings_compiler.debug import debug_echo
from keybindings_compiler.errors import DuplicateBinding
from keybindings_compiler.when import ALWAYS, WhenNode, atom, not_, require_simple_context, serialize, when_key

# context keys used by the named splits
QMK_CONTEXT = "keynav.qmk"
PANEL_CONTEXT = "activePanel"
RECORDING_CONTEXT = "keynav.recording"

BindingPairs = list[tuple[WhenNode, Action]]


class BindingTable:
    """Strict chord -> when -> action table."""

    def __init__(self) -> None:
        self._entries: dict[str, dict[str, Action]] = {}
        # condition objects by (chord, when), kept for diagnostics and copies
        self._conditions: dict[tuple[str, str], WhenNode] = {}

    def register(self, chord: str, condition: WhenNode, action: Action, error: type[DuplicateBinding] = DuplicateBinding) -> None:
        """Add one rule; raise `error` if (chord, when) is already taken."""
        if not chord:
            raise ValueError("cannot register an empty chord")
        if not isinstance(action, (Invoke, Sequence, RawInject, Suppress)):
            raise TypeError(f"expected an action, got {action!r}")
        when = serialize(condition)
        slot = self._entries.setdefault(chord, {})
        if when in slot:
            raise error(f"already bound to {_describe(slot[when])}, cannot also bind {_describe(action)}", chord=chord, condition=when)
        slot[when] = action
        self._conditions[(chord, when)] = condition
        debug_echo(2, "register", chord, f"key={chord!r} when={when!r} -> {_describe(action)}")

    def register_all(self, chord: str, pairs: Iterable[tuple[WhenNode, Action]]) -> None:
        for condition, action in pairs:
            self.register(chord, condition, action)

    def lookup(self, chord: str) -> Mapping[str, Action]:
        return MappingProxyType(self._entries.get(chord, {}))

    def condition(self, chord: str, when: str) -> WhenNode:
        return self._conditions[(chord, when)]

    def chords(self) -> list[str]:
        return list(self._entries)

    def items(self) -> Iterator[tuple[str, str, Action]]:
        for chord, slot in self._entries.items():
            for when, action in slot.items():
                yield chord, when, action

    def copy(self) -> BindingTable:
        clone = BindingTable()
        clone._entries = {chord: dict(slot) for chord, slot in self._entries.items()}
        clone._conditions = dict(self._conditions)
        return clone

    def __contains__(self, item: object) -> bool:
        if isinstance(item, str):
            return bool(self._entries.get(item))
        try:
            chord, condition = item  # type: ignore[misc]
        except (TypeError, ValueError):
            return False
        return when_key(condition) in self._entries.get(chord, {})

    def __len__(self) -> int:
        return sum(len(slot) for slot in self._entries.values())

    def __repr__(self) -> str:
        return f"BindingTable({len(self._entries)} chords, {len(self)} rules)"


def merge_tables(*tables: BindingTable) -> BindingTable:
    """Overlay tables left to right; the last table wins per (chord, when)."""
    layered: "OrderedDict[tuple[str, str], tuple[WhenNode, Action]]" = OrderedDict()
    for table in tables:
        for chord, when, action in table.items():
            key = (chord, when)
            if key in layered:
                debug_echo(2, "register", chord, f"overlay replaces key={chord!r} when={when!r}")
            layered[key] = (table.condition(chord, when), action)

    merged = BindingTable()
    for (chord, _), (condition, action) in layered.items():
        merged.register(chord, condition, action)
    return merged


def only(action: Action | str) -> BindingPairs:
    """Bind unconditionally."""
    if isinstance(action, str):
        action = invoke(action)
    return [(ALWAYS, action)]


def contextual_split(context: str, when_true: Action | None, when_false: Action | None) -> BindingPairs:
    """Run `when_true` if `context` is set and `when_false` otherwise.

    A `None` side becomes an explicit suppress, so the slot is still claimed.
    """
    require_simple_context(context)
    cond = atom(context)
    return [
        (cond, SUPPRESS if when_true is None else when_true),
        (not_(cond), SUPPRESS if when_false is None else when_false),
    ]


def keyboard_split(basic: Action | None, qmk: Action | None) -> BindingPairs:
    return contextual_split(QMK_CONTEXT, qmk, basic)


def panel_split(panel: Action | None, other: Action | None) -> BindingPairs:
    """Run `panel` while the panel is active (visible, not necessarily focused)."""
    return contextual_split(PANEL_CONTEXT, panel, other)


def recording_split(recording: Action | None, other: Action | None) -> BindingPairs:
    return contextual_split(RECORDING_CONTEXT, recording, other)


def _describe(action: Action) -> str:
    if isinstance(action, Suppress):
        return "suppress"
    command, _ = action.render()
    return command
