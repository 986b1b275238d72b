"""
(C) 2026 Joseph Tingiris (joseph.tingiris@gmail.com)

Leveled, filterable debug output on stderr.

Settings come from repeated `--debug` values: a numeric level (`--debug 3`), a
category filter (`--debug target=alias`), or a chord filter
(`--debug chord="ctrl+x s"`). A bare `--debug` means level 1.
"""

from __future__ import annotations

import sys

# color default output value, options: 'auto'|'always'|'never'
COLOR: str = 'auto'

# debug defaults
DEBUG_LEVEL: int = 0  # off
DEBUG_TARGET_CATEGORY: str | None = None  # set via --debug target=['register', 'expand', 'alias', ...]
DEBUG_TARGET_CHORD: str = ""  # set via --debug chord=

DEBUG_CATEGORIES = ('register', 'expand', 'alias', 'linearize', 'removal', 'check')


def configure(values: list[str] | None, color: str = 'auto') -> None:
    """Apply `--debug` and `--color` values to the module settings."""
    global COLOR, DEBUG_LEVEL, DEBUG_TARGET_CATEGORY, DEBUG_TARGET_CHORD

    if color not in ('auto', 'always', 'never'):
        raise ValueError(f"invalid color mode {color!r}")
    COLOR = color

    level = 0
    category = None
    chord = ""
    for raw in values or []:
        value = (raw or '').strip()
        if not value:
            level = max(level, 1)
            continue
        if value.isdigit():
            level = int(value)
            continue
        name, sep, rest = value.partition('=')
        if not sep:
            raise ValueError(f"invalid --debug value {raw!r}")
        if name in ('target', 'category'):
            if rest != 'all' and rest not in DEBUG_CATEGORIES:
                raise ValueError(f"unknown debug target {rest!r}; choose from {', '.join(DEBUG_CATEGORIES)}")
            category = rest
        elif name in ('chord', 'key'):
            chord = rest
        else:
            raise ValueError(f"invalid --debug value {raw!r}")
        # a filter without a level still turns debugging on
        level = max(level, 1)

    DEBUG_LEVEL = level
    DEBUG_TARGET_CATEGORY = category
    DEBUG_TARGET_CHORD = chord


def reset() -> None:
    configure(None)


def _color_enabled() -> bool:
    if COLOR == 'never':
        return False
    if COLOR == 'always':
        return True
    try:
        # auto (default)
        return sys.stderr.isatty()
    except (AttributeError, ValueError):
        return False


def debug_color(text: str, level: int) -> str:
    if not _color_enabled():
        return text

    # simple level -> color mapping
    colors = {
        1: '\x1b[33m',
        2: '\x1b[36m',
        3: '\x1b[35m',
        4: '\x1b[34m',
    }

    code = colors.get(level, '\x1b[37m')
    return f"{code}{text}\x1b[0m"


def debug_echo(level: int, category: str, chord: str | None, msg: str) -> None:
    """Emit a filtered, leveled debug message to stderr.

    Messages are emitted when `level` <= `DEBUG_LEVEL` and category/chord
    filters (if set) match.
    """
    if DEBUG_LEVEL <= 0:
        return
    if level > DEBUG_LEVEL:
        return
    if DEBUG_TARGET_CATEGORY and DEBUG_TARGET_CATEGORY != 'all' and category != DEBUG_TARGET_CATEGORY:
        return
    if DEBUG_TARGET_CHORD:
        if not chord:
            return
        if chord != DEBUG_TARGET_CHORD:
            return
    out = f"[DEBUG:{level}:{category}] {msg}"
    out = debug_color(out, level)
    sys.stderr.write(out + '\n')
