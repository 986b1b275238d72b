"""
(C) 2026 Joseph Tingiris (joseph.tingiris@gmail.com)

Build-time errors raised while authoring or compiling a keymap.

Every error names the rule it enforces and, where known, the chord and the
serialized when clause that triggered it. None of them are recoverable inside a
single compile; fix the table and run the compiler again.
"""

from __future__ import annotations


class KeybindingsError(ValueError):
    """Base class for keymap build errors."""

    rule = "KeybindingsError"

    def __init__(self, message: str, chord: str | None = None, condition: str | None = None):
        self.chord = chord
        self.condition = condition
        self.detail = message
        super().__init__(self._format())

    def _format(self) -> str:
        where = []
        if self.chord is not None:
            where.append(f"key={self.chord!r}")
        if self.condition is not None:
            where.append(f"when={self.condition!r}")
        if where:
            return f"{self.rule}: {self.detail} ({', '.join(where)})"
        return f"{self.rule}: {self.detail}"


class DuplicateBinding(KeybindingsError):
    """Two rules claim the same chord and when clause."""

    rule = "DuplicateBinding"


class ExpansionCollision(DuplicateBinding):
    """A synthesized binding lands on a chord and when clause already in the table."""

    rule = "ExpansionCollision"


class InvalidNegation(KeybindingsError):
    """Negation of a compound expression, the always atom, or a `!=` comparison."""

    rule = "InvalidNegation"


class MismatchedExpansionSet(KeybindingsError):
    """Unshifted and shifted character sets are not positionally aligned."""

    rule = "MismatchedExpansionSet"


class InvalidContextKey(KeybindingsError):
    """A contextual split was asked to branch on something other than a bare context key."""

    rule = "InvalidContextKey"
