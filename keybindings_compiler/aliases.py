"""
(C) 2026 Joseph Tingiris (joseph.tingiris@gmail.com)

Derive the alternate spellings a chord must also be bound under.

A leader chord such as `ctrl+x s` can be typed two ways: release `ctrl` before
pressing `s`, or keep holding it (`ctrl+x ctrl+s`). VS Code treats those as
different keys, so every binding and every removal on a leader chord is
emitted under both spellings.
"""

from __future__ import annotations

from keybindings_compiler.debug import debug_echo
from keybindings_compiler.keys import CTRL_X, presses, split_press

DEFAULT_LEADERS: tuple[str, ...] = (CTRL_X,)


class AliasExpander:
    """Expand leader chords into their hold-modifier spelling."""

    def __init__(self, leaders: tuple[str, ...] | list[str] = DEFAULT_LEADERS):
        self.leaders = tuple(dict.fromkeys(leaders))
        for lead in self.leaders:
            mods, _ = split_press(lead)
            if not mods:
                raise ValueError(f"leader {lead!r} has no modifier to hold")

    def aliases_of(self, chord: str) -> tuple[str, ...]:
        """Return every spelling of `chord`, the chord itself first."""
        parts = presses(chord)
        if len(parts) != 2 or parts[0] not in self.leaders:
            return (chord,)

        lead, follower = parts
        lead_mods, _ = split_press(lead)
        follower_mods, _ = split_press(follower)
        missing = [m for m in lead_mods if m not in follower_mods]
        if not missing:
            return (chord,)

        alias = f"{lead} {'+'.join(missing)}+{follower}"
        debug_echo(3, "alias", chord, f"{chord!r} -> {alias!r}")
        return (chord, alias)


_DEFAULT_EXPANDER = AliasExpander()


def aliases_of(chord: str) -> tuple[str, ...]:
    """Aliases of `chord` under the default leaders."""
    return _DEFAULT_EXPANDER.aliases_of(chord)
