"""
(C) 2026 Joseph Tingiris (joseph.tingiris@gmail.com)

Spell VS Code key chords.

A chord is a plain string: presses separated by one space, modifiers joined to
the literal with `+` (`"ctrl+x s"`, `"ctrl+shift+a"`). The helpers here only
build strings; they never reorder modifiers, so the spelling you build is the
spelling that is emitted.
"""

from __future__ import annotations

UP = "up"
DOWN = "down"
LEFT = "left"
RIGHT = "right"
PAGEUP = "pageup"
PAGEDOWN = "pagedown"
BACKSPACE = "backspace"
DELETE = "delete"
HOME = "home"
END = "end"
INSERT = "insert"
TAB = "tab"
ENTER = "enter"

# the emacs-style prefix key
CTRL_X = "ctrl+x"


def ctrl(key: str) -> str:
    return f"ctrl+{key}"


def alt(key: str) -> str:
    return f"alt+{key}"


def shift(key: str) -> str:
    return f"shift+{key}"


def leader(follower: str, prefix: str = CTRL_X) -> str:
    """Return the two-press chord `prefix follower`."""
    return f"{prefix} {follower}"


def ctrl_x(follower: str) -> str:
    return leader(follower, CTRL_X)


def presses(chord: str) -> list[str]:
    """Split a chord into its presses."""
    return [p for p in chord.split(" ") if p]


def split_press(press: str) -> tuple[list[str], str]:
    """Split one press into (modifiers, literal).

    The literal may itself be `+` (`"ctrl++"`), so only the separators before
    the last token count.
    """
    if press == "+":
        return ([], "+")
    if press.endswith("++"):
        head = press[:-2]
        return ([m for m in head.split("+") if m], "+")
    bits = press.split("+")
    return ([m for m in bits[:-1] if m], bits[-1])
