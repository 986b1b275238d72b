"""
(C) 2026 Joseph Tingiris (joseph.tingiris@gmail.com)

The default emacs-style keymap.

`build_keymap()` is a pure function: every call builds and returns a fresh
`Keymap`, nothing is shared between calls. Sections are plain functions that
register into the table they are handed, so a duplicated chord in any section
fails the build with `DuplicateBinding` instead of silently shadowing.
"""

from __future__ import annotations

from keybindings_compiler.actions import invoke, notification, raw_inject, sequence, step
from keybindings_compiler.compiler import Keymap
from keybindings_compiler.expansion import typing_expansion
from keybindings_compiler.keys import (
    BACKSPACE,
    DELETE,
    DOWN,
    END,
    ENTER,
    HOME,
    INSERT,
    LEFT,
    PAGEDOWN,
    PAGEUP,
    RIGHT,
    TAB,
    UP,
    alt,
    ctrl,
    ctrl_x,
    shift,
)
from keybindings_compiler.removals import RemovalOverlay
from keybindings_compiler.table import (
    QMK_CONTEXT,
    RECORDING_CONTEXT,
    BindingTable,
    keyboard_split,
    only,
    panel_split,
    recording_split,
)
from keybindings_compiler.when import and_, atom, cmp, not_, or_

#
# contexts
#

QMK = atom(QMK_CONTEXT)
RECORDING = atom(RECORDING_CONTEXT)
FIND_MODE = atom("keynav.findMode")
IN_QUICK_OPEN = atom("inQuickOpen")
EDITOR_TEXT_FOCUS = atom("editorTextFocus")
EDITOR_FOCUS = atom("editorFocus")
SUGGEST_VISIBLE = atom("suggestWidgetVisible")
SIDE_BAR_FOCUS = atom("sideBarFocus")
PANEL_FOCUS = atom("panelFocus")

#
# shared actions
#

REVEAL_IN_NEW_EDITOR = sequence(
    "workbench.action.splitEditorRight",
    "editor.action.revealDefinition",
)


def _close_panel_then(command: str):
    """Close the panel first so the follow-up opens in the editor area."""
    return sequence(
        "workbench.action.closePanel",
        step(invoke(command), delay=50),
    )


def _find_bindings(table: BindingTable) -> None:
    table.register_all(ctrl("f"), [
        (and_(QMK, RECORDING), invoke("keynav.record.findNext")),
        (and_(QMK, not_(RECORDING)), invoke("keynav.find")),
        (and_(not_(QMK), IN_QUICK_OPEN), invoke("workbench.action.quickPickManyToggle")),
        (and_(not_(QMK), not_(IN_QUICK_OPEN)), invoke("keynav.cursorRight")),
    ])
    table.register_all(ctrl("s"), [
        (and_(not_(QMK), not_(RECORDING)), invoke("keynav.find")),
        (QMK, invoke("keynav.cursorRight")),
        (and_(not_(QMK), RECORDING), invoke("keynav.record.findNext")),
    ])
    table.register_all(ctrl("r"), only("keynav.reverseFind"))
    table.register_all(alt("s"), only("editor.action.startFindReplaceAction"))
    table.register(shift(ENTER), FIND_MODE, invoke("editor.action.previousMatchFindAction"))
    table.register(ENTER, FIND_MODE, invoke("editor.action.nextMatchFindAction"))
    table.register_all(alt("r"), only("toggleSearchEditorRegex"))
    table.register_all(alt("c"), only("toggleSearchEditorCaseSensitive"))

    in_search_editor = atom("inSearchEditor")
    search_viewlet_focus = atom("searchViewletFocus")
    table.register_all(alt("f4"), [
        (and_(QMK, EDITOR_FOCUS), invoke("toggleFindWholeWord")),
        (and_(QMK, in_search_editor), invoke("toggleSearchEditorWholeWord")),
        (and_(QMK, search_viewlet_focus), invoke("toggleSearchWholeWord")),
        (
            and_(and_(and_(QMK, not_(EDITOR_FOCUS)), not_(in_search_editor)), not_(search_viewlet_focus)),
            invoke("toggleSearchWholeWord"),
        ),
    ])


def _cursor_bindings(table: BindingTable) -> None:
    plain_editing = and_(EDITOR_TEXT_FOCUS, not_(SUGGEST_VISIBLE))
    suggesting = and_(EDITOR_TEXT_FOCUS, SUGGEST_VISIBLE)

    vertical = {
        ctrl("p"): ("keynav.cursorUp", "selectPrevSuggestion", "workbench.action.quickOpenNavigatePreviousInFilePicker", "editor.action.previousMatchFindAction"),
        UP: ("keynav.cursorUp", "selectPrevSuggestion", "workbench.action.quickOpenNavigatePreviousInFilePicker", None),
        ctrl("n"): ("keynav.cursorDown", "selectNextSuggestion", "workbench.action.quickOpenNavigateNextInFilePicker", "editor.action.nextMatchFindAction"),
        DOWN: ("keynav.cursorDown", "selectNextSuggestion", "workbench.action.quickOpenNavigateNextInFilePicker", None),
    }
    for chord, (move, suggest, quick_open, find_match) in vertical.items():
        table.register(chord, plain_editing, invoke(move))
        table.register(chord, suggesting, invoke(suggest))
        table.register(chord, IN_QUICK_OPEN, invoke(quick_open))
        if find_match:
            table.register(chord, FIND_MODE, invoke(find_match))

    for chord, move in ((LEFT, "keynav.cursorLeft"), (ctrl("b"), "keynav.cursorLeft"), (RIGHT, "keynav.cursorRight")):
        table.register(chord, IN_QUICK_OPEN, invoke("workbench.action.quickPickManyToggle"))
        table.register(chord, not_(IN_QUICK_OPEN), invoke(move))

    table.register_all(HOME, only("keynav.cursorHome"))
    table.register_all(ctrl("a"), keyboard_split(invoke("keynav.cursorHome"), invoke("editor.action.selectAll")))
    table.register_all(ctrl(shift("a")), only("editor.action.selectAll"))
    table.register_all(ctrl(shift(HOME)), only("editor.action.selectAll"))
    table.register_all(shift(HOME), only("editor.action.selectAll"))
    table.register_all(END, only("keynav.cursorEnd"))
    table.register_all(ctrl("e"), only("keynav.cursorEnd"))
    table.register_all(alt("f"), only("keynav.cursorWordRight"))
    table.register_all(ctrl(RIGHT), only("keynav.cursorWordRight"))
    table.register_all(alt("b"), only("keynav.cursorWordLeft"))
    table.register_all(ctrl(LEFT), only("keynav.cursorWordLeft"))
    table.register_all(ctrl_x("p"), only("keynav.cursorTop"))
    table.register_all(ctrl_x("l"), only("workbench.action.gotoLine"))
    table.register_all(PAGEUP, only("keynav.jump"))
    table.register_all(ctrl("v"), only("keynav.fall"))
    table.register_all(PAGEDOWN, only("keynav.fall"))

    # ctrl+g backs out of whatever is open, innermost first
    not_quick_open = not_(IN_QUICK_OPEN)
    not_suggesting = not_(SUGGEST_VISIBLE)
    table.register_all(ctrl("g"), [
        (and_(and_(not_(SIDE_BAR_FOCUS), not_quick_open), not_suggesting), invoke("keynav.ctrlG")),
        (and_(and_(SIDE_BAR_FOCUS, not_quick_open), not_suggesting), invoke("workbench.action.focusActiveEditorGroup")),
        (and_(IN_QUICK_OPEN, not_suggesting), invoke("workbench.action.closeQuickOpen")),
        (SUGGEST_VISIBLE, invoke("hideSuggestWidget")),
    ])


def _editing_bindings(table: BindingTable) -> None:
    table.register_all(ctrl("w"), only("keynav.yank"))
    table.register_all(ctrl("y"), only("keynav.paste"))
    table.register_all(ctrl("k"), only("keynav.kill"))
    table.register_all(ctrl("j"), panel_split(
        invoke("workbench.action.previousPanelView"),
        invoke("keynav.toggleMarkMode"),
    ))
    table.register_all(ctrl("l"), panel_split(
        invoke("workbench.action.nextPanelView"),
        invoke("keynav.jump"),
    ))
    table.register_all(ctrl("/"), panel_split(None, invoke("keynav.undo")))
    table.register_all(ctrl("h"), only("keynav.deleteLeft"))
    table.register_all(BACKSPACE, only("keynav.deleteLeft"))
    table.register_all(ctrl("d"), only("keynav.deleteRight"))
    table.register_all(DELETE, only("keynav.deleteRight"))
    table.register_all(alt("h"), only("keynav.deleteWordLeft"))
    table.register_all(alt(BACKSPACE), only("keynav.deleteWordLeft"))
    # the terminal never sees ctrl+backspace on a qmk board, so send the byte ourselves
    table.register_all(ctrl(BACKSPACE), [
        (and_(QMK, PANEL_FOCUS), raw_inject("\u0008")),
        (or_(not_(QMK), not_(PANEL_FOCUS)), invoke("keynav.deleteWordLeft")),
    ])
    table.register_all(alt("d"), only("keynav.deleteWordRight"))
    table.register_all(alt(DELETE), only("keynav.deleteWordRight"))
    table.register_all(ctrl(DELETE), only("keynav.deleteWordRight"))
    table.register_all(alt("x"), only("workbench.action.showCommands"))
    table.register_all(ctrl(";"), only("editor.action.commentLine"))
    table.register_all(ctrl_x(TAB), only("keynav.format"))
    table.register_all(ctrl("i"), only("editor.action.indentLines"))
    table.register_all(ctrl_x("i"), only("editor.action.organizeImports"))
    table.register_all(ctrl_x("y"), only("editor.action.clipboardPasteAction"))
    # ctrl+x ctrl+y on a qmk board
    table.register_all(ctrl_x(shift(INSERT)), only("editor.action.clipboardPasteAction"))
    table.register_all(alt("y"), only("editor.action.clipboardPasteAction"))
    table.register(shift(PAGEUP), EDITOR_FOCUS, invoke("editor.action.selectHighlights"))


def _file_bindings(table: BindingTable) -> None:
    table.register_all(ctrl_x("s"), only("workbench.action.files.save"))
    table.register_all(ctrl_x("f"), panel_split(
        _close_panel_then("workbench.action.quickOpen"),
        invoke("workbench.action.quickOpen"),
    ))
    table.register_all(ctrl_x("v"), only(sequence(
        "workbench.action.splitEditorDown",
        "workbench.action.focusPreviousGroup",
    )))
    table.register_all(ctrl_x("h"), only(sequence(
        "workbench.action.splitEditorRight",
        "workbench.action.focusPreviousGroup",
    )))
    table.register_all(ctrl(shift("n")), only("workbench.action.files.newUntitledFile"))
    table.register_all(ctrl_x("d"), only("editor.action.revealDefinition"))
    table.register_all(ctrl(shift("d")), only(REVEAL_IN_NEW_EDITOR))
    table.register_all(shift(DELETE), only(REVEAL_IN_NEW_EDITOR))

    previous_group = panel_split(
        invoke("workbench.action.terminal.focusPrevious"),
        invoke("workbench.action.focusPreviousGroup"),
    )
    next_group = panel_split(
        invoke("workbench.action.terminal.focusNext"),
        invoke("workbench.action.focusNextGroup"),
    )
    for chord in (ctrl(PAGEUP), ctrl("u"), ctrl(shift(TAB))):
        table.register_all(chord, previous_group)
    for chord in (ctrl(PAGEDOWN), ctrl("o"), ctrl(TAB)):
        table.register_all(chord, next_group)


def _recording_bindings(table: BindingTable) -> None:
    table.register_all(ctrl_x("x"), only("keynav.record.startRecording"))
    table.register_all(alt("e"), recording_split(
        invoke("keynav.record.endRecording"),
        invoke("keynav.record.playRecording"),
    ))
    table.register_all(alt(shift("e")), recording_split(
        invoke("keynav.record.saveRecordingAs"),
        invoke("keynav.record.playNamedRecording"),
    ))
    table.register_all(ctrl(shift("s")), [
        (and_(not_(QMK), RECORDING), invoke("keynav.record.find")),
        (and_(not_(QMK), not_(RECORDING)), invoke("workbench.action.findInFiles")),
    ])
    table.register_all(ctrl(shift("f")), [
        (and_(QMK, RECORDING), invoke("keynav.record.find")),
        (and_(QMK, not_(RECORDING)), invoke("workbench.action.findInFiles")),
    ])


def _panel_bindings(table: BindingTable) -> None:
    table.register_all(ctrl_x("q"), only("workbench.action.toggleSidebarVisibility"))
    table.register_all(ctrl_x("z"), only("workbench.action.togglePanel"))
    # killing a terminal takes ctrl+shift+q; plain ctrl+q only says so
    table.register_all(ctrl("q"), panel_split(
        notification("Run ctrl+shift+q to kill the terminal"),
        invoke("workbench.action.closeEditorsAndGroup"),
    ))
    table.register_all(ctrl(shift("q")), panel_split(invoke("workbench.action.terminal.kill"), None))
    table.register_all(ctrl_x("n"), panel_split(
        invoke("workbench.action.terminal.rename"),
        invoke("keynav.cursorBottom"),
    ))
    table.register_all(ctrl("t"), panel_split(
        invoke("workbench.action.closePanel"),
        invoke("workbench.action.toggleMaximizedPanel"),
    ))
    table.register_all(ctrl(shift("t")), only("workbench.action.terminal.newInActiveWorkspace"))
    table.register_all(alt("t"), only("workbench.action.terminal.newInActiveWorkspace"))
    table.register_all(alt(shift("t")), only("workbench.action.terminal.newWithProfile"))
    # ctrl+x ctrl+c never reaches the terminal on its own
    table.register_all(ctrl_x("c"), panel_split(raw_inject("\u0018\u0003"), None))


def _settings_bindings(table: BindingTable) -> None:
    for chord, command in (
        (ctrl("."), "workbench.action.openGlobalKeybindings"),
        (ctrl_x("."), "workbench.action.openGlobalKeybindingsFile"),
        (ctrl(","), "workbench.action.openSettings"),
        (ctrl_x(","), "workbench.action.openSettingsJson"),
    ):
        table.register_all(chord, panel_split(_close_panel_then(command), invoke(command)))


def _misc_bindings(table: BindingTable) -> None:
    table.register(ctrl_x("m"), cmp("editorLangId", "'markdown'"), invoke("markdown.showPreviewToSide"))
    table.register_all(alt("z"), only("git.revertSelectedRanges"))
    table.register_all(alt("p"), only("workbench.action.editor.previousChange"))
    table.register_all(alt("n"), only("workbench.action.editor.nextChange"))
    table.register_all(ctrl_x("t"), only("go.test.package"))
    table.register_all(ctrl_x("r"), only("workbench.action.reloadWindow"))
    # keep alt+g from focusing the menu bar
    table.register_all(alt("g"), only("noop"))
    table.register_all(ctrl_x("o"), only("workbench.action.openRecent"))
    table.register_all(ctrl_x("k"), only("keynav.toggleQMK"))
    table.register_all(ctrl_x("e"), only("workbench.extensions.action.checkForUpdates"))


def _default_removals(removals: RemovalOverlay) -> None:
    removals.register_removal(ctrl("p"), "workbench.action.quickOpen")
    removals.register_removal(ctrl("n"), "workbench.action.files.newUntitledFile")


SECTIONS = (
    _find_bindings,
    _cursor_bindings,
    _editing_bindings,
    _file_bindings,
    _recording_bindings,
    _panel_bindings,
    _settings_bindings,
    _misc_bindings,
)


def build_table() -> BindingTable:
    table = BindingTable()
    for section in SECTIONS:
        section(table)
    return table


def build_keymap(typing: bool = True) -> Keymap:
    """Build the default keymap; `typing=False` leaves out the typing expansion."""
    removals = RemovalOverlay()
    _default_removals(removals)
    return Keymap(
        table=build_table(),
        removals=removals,
        expansion=typing_expansion() if typing else None,
    )

