"""
(C) 2026 Joseph Tingiris (joseph.tingiris@gmail.com)

Compile a keymap into a VS Code keybindings JSON array.

Usage
    keybindings-compile [OPTIONS]

Options
    -o, --out FILE            Write the JSON array to FILE instead of stdout.
    -k, --keymap MOD:FUNC     Keymap factory to compile (default: keybindings_compiler.keymap:build_keymap).
    -l, --leader KEY          Extra leader key whose chords get a hold-modifier alias (repeatable).
    --no-typing               Skip the generated per-character typing bindings.
    -c, --check FILE          Compare the compiled output with a checked-in JSONC file.
    -d, --debug [VALUE]       Repeatable; a numeric level, `target=CATEGORY`, or `chord=KEY`.
    --color MODE              ANSI color for debug output: auto (default), always, never.
    -h, --help                Show usage/help and exit with code 99.

Examples
    keybindings-compile > keybindings.json
    keybindings-compile --check keybindings.json
    keybindings-compile -d 3 -d target=alias --no-typing

Behavior
    - Compilation is all-or-nothing: a duplicate binding, an invalid negation, or a
      broken expansion set prints one error and writes nothing.
    - Output is deterministic; the same keymap always produces the same bytes.
    - Diagnostics and drift reports go to stderr.

Exit codes
    0   Success
    1   --check found differences
    2   Compile error or file read/write error
    99  Usage/help displayed or invalid arguments
"""

from __future__ import annotations

import argparse
import dataclasses
import importlib
import sys
from pathlib import Path
from typing import List

from keybindings_compiler import debug
from keybindings_compiler.aliases import DEFAULT_LEADERS, AliasExpander
from keybindings_compiler.compiler import Keymap, compile_keymap, dumps_keybindings
from keybindings_compiler.drift import check_against
from keybindings_compiler.errors import KeybindingsError
from keybindings_compiler.table import BindingTable

ABORTING_EXIT_CODE = 1
ERROR_EXIT_CODE = 2
USAGE_EXIT_CODE = 99

DEFAULT_KEYMAP = "keybindings_compiler.keymap:build_keymap"


def load_keymap(target: str) -> Keymap:
    """Import `module:function` and call it for a keymap (or a bare table)."""
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"keymap must look like module:function, got {target!r}")
    module = importlib.import_module(module_name)
    factory = getattr(module, attr, None)
    if factory is None or not callable(factory):
        raise ValueError(f"{target!r} is not a callable keymap factory")
    built = factory()
    if isinstance(built, BindingTable):
        return Keymap(table=built)
    if not isinstance(built, Keymap):
        raise ValueError(f"{target!r} returned {type(built).__name__}, expected Keymap or BindingTable")
    return built


def build_parser() -> argparse.ArgumentParser:
    leaders_csv = ", ".join(DEFAULT_LEADERS)
    parser = argparse.ArgumentParser(
        prog="keybindings-compile",
        description="Compile a keymap into a VS Code keybindings JSON array.",
        epilog=(
            "Examples:\n"
            "  %(prog)s > keybindings.json\n"
            "\n"
            "  %(prog)s --check keybindings.json\n"
            "\n"
            "  %(prog)s -d 3 -d target=alias --no-typing\n"
            "\n"
            f"Default leaders: {leaders_csv}\n"
            "\n"
            f"Debug targets: {', '.join(debug.DEBUG_CATEGORIES)}\n"
        ),
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "-o",
        "--out",
        type=Path,
        default=None,
        metavar="FILE",
        help="Write output to FILE (default: stdout).",
    )
    parser.add_argument(
        "-k",
        "--keymap",
        default=DEFAULT_KEYMAP,
        metavar="MOD:FUNC",
        help=f"Keymap factory to compile (default: {DEFAULT_KEYMAP}).",
    )
    parser.add_argument(
        "-l",
        "--leader",
        action="append",
        default=[],
        metavar="KEY",
        help="Additional leader key (repeatable).",
    )
    parser.add_argument(
        "--no-typing",
        action="store_true",
        help="Skip the generated typing bindings.",
    )
    parser.add_argument(
        "-c",
        "--check",
        type=Path,
        default=None,
        metavar="FILE",
        help="Compare compiled output with a checked-in JSONC file.",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="append",
        nargs="?",
        const="",
        default=[],
        metavar="VALUE",
        help="Debug level or filter: N, target=CATEGORY, chord=KEY (repeatable).",
    )
    parser.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default="auto",
        help="ANSI coloring of debug output (default: auto).",
    )
    return parser


def main(argv: List[str] | None = None) -> int:
    """CLI entrypoint."""
    argv = sys.argv[1:] if argv is None else argv
    parser = build_parser()

    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        code = exc.code if exc.code is not None else 2
        try:
            numeric_code = int(code)
            if numeric_code in (0, 2):
                return USAGE_EXIT_CODE
            return numeric_code
        except (TypeError, ValueError):
            return USAGE_EXIT_CODE

    try:
        debug.configure(args.debug, color=args.color)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return USAGE_EXIT_CODE

    try:
        expander = AliasExpander(DEFAULT_LEADERS + tuple(args.leader))
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return USAGE_EXIT_CODE

    try:
        keymap = load_keymap(args.keymap)
        if args.no_typing:
            keymap = dataclasses.replace(keymap, expansion=None)
        records = compile_keymap(keymap, expander=expander)
    except KeybindingsError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return ERROR_EXIT_CODE
    except Exception as exc:
        print(f"error: failed to build keymap {args.keymap!r}: {type(exc).__name__}: {exc}", file=sys.stderr)
        return ERROR_EXIT_CODE

    output_text = dumps_keybindings(records)

    if args.out is not None:
        try:
            args.out.write_text(output_text, encoding="utf-8")
        except OSError as exc:
            print(f"error: failed to write '{args.out}': {exc}", file=sys.stderr)
            return ERROR_EXIT_CODE
    elif args.check is None:
        sys.stdout.write(output_text)

    if args.check is not None:
        try:
            checked_in = args.check.read_text(encoding="utf-8")
        except OSError as exc:
            print(f"error: failed to read '{args.check}': {exc}", file=sys.stderr)
            return ERROR_EXIT_CODE
        try:
            drift = check_against(checked_in, records)
        except Exception as exc:
            print(f"error: {args.check}: {exc}", file=sys.stderr)
            return ERROR_EXIT_CODE
        if drift:
            print(f"{args.check}: {len(drift)} difference(s) from compiled keymap", file=sys.stderr)
            for line in drift:
                print(line, file=sys.stderr)
            return ABORTING_EXIT_CODE
        print(f"{args.check}: up to date ({len(records)} keybindings)", file=sys.stderr)

    return 0
