"""
(C) 2026 Joseph Tingiris (joseph.tingiris@gmail.com)

Compile declarative keybinding tables into VS Code `contributes.keybindings`.
"""

from keybindings_compiler.actions import (
    SUPPRESS,
    Invoke,
    RawInject,
    Sequence,
    Step,
    Suppress,
    invoke,
    notification,
    raw_inject,
    sequence,
    step,
    suppress,
)
from keybindings_compiler.aliases import DEFAULT_LEADERS, AliasExpander, aliases_of
from keybindings_compiler.compiler import Keybinding, Keymap, compile_keybindings, compile_keymap, dumps_keybindings
from keybindings_compiler.errors import (
    DuplicateBinding,
    ExpansionCollision,
    InvalidContextKey,
    InvalidNegation,
    KeybindingsError,
    MismatchedExpansionSet,
)
from keybindings_compiler.expansion import TypingExpansion, typing_expansion
from keybindings_compiler.removals import REMOVAL_PREFIX, RemovalOverlay
from keybindings_compiler.table import BindingTable, contextual_split, merge_tables, only
from keybindings_compiler.when import ALWAYS, and_, atom, cmp, not_, or_, serialize

__version__ = "0.1.0"
