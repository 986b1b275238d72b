"""
(C) 2026 Joseph Tingiris (joseph.tingiris@gmail.com)

Compare compiled keybindings against a checked-in JSONC copy.

The checked-in file may carry comments and trailing commas (VS Code writes
`keybindings.json` as JSONC), so it is parsed with `json5`. Differences are
reported as readable lines; an empty list means content and order match.
"""

from __future__ import annotations

import difflib
import json
from typing import Iterable

import json5

from keybindings_compiler.compiler import Keybinding
from keybindings_compiler.debug import debug_echo


def load_keybindings(text: str) -> list[Keybinding]:
    """Parse a JSONC keybindings array into records."""
    try:
        data = json5.loads(text)
    except ValueError as exc:
        raise ValueError(f"failed to parse keybindings JSONC: {exc}") from exc

    # accept a whole manifest too and use its contributes.keybindings
    if isinstance(data, dict):
        contributes = data.get("contributes") or {}
        if not isinstance(contributes, dict):
            raise ValueError("manifest 'contributes' is not an object")
        data = contributes.get("keybindings")
    if not isinstance(data, list):
        raise ValueError("expected a top-level array of keybinding objects")

    records: list[Keybinding] = []
    for idx, obj in enumerate(data):
        if not isinstance(obj, dict):
            raise ValueError(f"keybinding #{idx} is not an object: {obj!r}")
        records.append(Keybinding.from_dict(obj))
    debug_echo(1, "check", None, f"loaded {len(records)} checked-in keybindings")
    return records


def _line(record: Keybinding) -> str:
    return json.dumps(record.to_dict(), sort_keys=True, ensure_ascii=False)


def diff_keybindings(expected: Iterable[Keybinding], actual: Iterable[Keybinding]) -> list[str]:
    """Return `+`/`-` lines for records only on one side and `~` lines for reordering."""
    want = [_line(r) for r in expected]
    have = [_line(r) for r in actual]
    if want == have:
        return []

    out: list[str] = []
    if sorted(want) == sorted(have):
        # same records, different order
        for idx, (w, h) in enumerate(zip(want, have)):
            if w != h:
                out.append(f"~ index {idx}: expected {w} got {h}")
    else:
        # `+` is compiled but missing from the file, `-` is in the file only
        matcher = difflib.SequenceMatcher(a=have, b=want, autojunk=False)
        for tag, i1, i2, j1, j2 in matcher.get_opcodes():
            if tag == "equal":
                continue
            for line in have[i1:i2]:
                out.append(f"- {line}")
            for line in want[j1:j2]:
                out.append(f"+ {line}")
    for line in out:
        debug_echo(2, "check", None, line)
    return out


def check_against(path_text: str, compiled: Iterable[Keybinding]) -> list[str]:
    """Diff compiled records against the text of a checked-in file."""
    return diff_keybindings(compiled, load_keybindings(path_text))
