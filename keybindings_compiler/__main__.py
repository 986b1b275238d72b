"""
(C) 2026 Joseph Tingiris (joseph.tingiris@gmail.com)
"""

from keybindings_compiler.cli import main

raise SystemExit(main())
