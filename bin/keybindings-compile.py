#!/usr/bin/env python3
"""
(C) 2026 Joseph Tingiris (joseph.tingiris@gmail.com)

Compile the keymap into a VS Code keybindings JSON array.

See `keybindings_compiler/cli.py` (or `--help`) for options and exit codes.
"""
import os
import sys

# run from a checkout without installing
sys.path.insert(0, os.path.normpath(os.path.join(os.path.dirname(os.path.abspath(__file__)), '..')))

from keybindings_compiler.cli import main  # noqa: E402


if __name__ == "__main__":
    raise SystemExit(main())
