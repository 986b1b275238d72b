#!/usr/bin/env python3
"""
(C) 2026 Joseph Tingiris (joseph.tingiris@gmail.com)

Tests for `BindingTable`, `merge_tables`, and the contextual split helpers.
"""

import unittest

from keybindings_compiler.actions import SUPPRESS, invoke
from keybindings_compiler.errors import DuplicateBinding, InvalidContextKey
from keybindings_compiler.table import (
    PANEL_CONTEXT,
    BindingTable,
    contextual_split,
    keyboard_split,
    merge_tables,
    only,
    panel_split,
)
from keybindings_compiler.when import ALWAYS, and_, atom, not_


class RegisterTests(unittest.TestCase):
    def test_lookup(self):
        table = BindingTable()
        table.register("up", atom("editorFocus"), invoke("moveUp"))
        self.assertEqual(dict(table.lookup("up")), {"editorFocus": invoke("moveUp")})
        self.assertEqual(dict(table.lookup("down")), {})
        self.assertIn("up", table)
        self.assertIn(("up", atom("editorFocus")), table)
        self.assertIn(("up", "editorFocus"), table)
        self.assertNotIn(("up", ALWAYS), table)

    def test_duplicate_raises(self):
        table = BindingTable()
        table.register("up", atom("editorFocus"), invoke("moveUp"))
        with self.assertRaises(DuplicateBinding) as ctx:
            table.register("up", atom("editorFocus"), invoke("scrollUp"))
        self.assertEqual(ctx.exception.chord, "up")
        self.assertEqual(ctx.exception.condition, "editorFocus")
        self.assertIn("moveUp", str(ctx.exception))
        self.assertIn("scrollUp", str(ctx.exception))

    def test_duplicate_detected_by_serialized_string(self):
        table = BindingTable()
        table.register("k", and_(and_(atom("a"), atom("b")), atom("c")), invoke("x"))
        with self.assertRaises(DuplicateBinding):
            table.register("k", and_(atom("a"), and_(atom("b"), atom("c"))), invoke("y"))

    def test_suppress_still_claims_slot(self):
        table = BindingTable()
        table.register("up", ALWAYS, SUPPRESS)
        with self.assertRaises(DuplicateBinding):
            table.register("up", ALWAYS, invoke("moveUp"))

    def test_failed_register_leaves_table_unchanged(self):
        table = BindingTable()
        table.register("up", ALWAYS, invoke("moveUp"))
        with self.assertRaises(DuplicateBinding):
            table.register("up", ALWAYS, invoke("scrollUp"))
        self.assertEqual(len(table), 1)
        self.assertEqual(table.lookup("up")[""], invoke("moveUp"))

    def test_rejects_non_actions(self):
        table = BindingTable()
        with self.assertRaises(TypeError):
            table.register("up", ALWAYS, "moveUp")
        with self.assertRaises(ValueError):
            table.register("", ALWAYS, invoke("moveUp"))

    def test_copy_is_independent(self):
        table = BindingTable()
        table.register("up", ALWAYS, invoke("moveUp"))
        clone = table.copy()
        clone.register("down", ALWAYS, invoke("moveDown"))
        self.assertNotIn("down", table)
        self.assertEqual(len(clone), 2)


class MergeTests(unittest.TestCase):
    def test_last_wins(self):
        base = BindingTable()
        base.register("up", ALWAYS, invoke("moveUp"))
        base.register("down", ALWAYS, invoke("moveDown"))
        overlay = BindingTable()
        overlay.register("up", ALWAYS, invoke("scrollUp"))
        merged = merge_tables(base, overlay)
        self.assertEqual(merged.lookup("up")[""], invoke("scrollUp"))
        self.assertEqual(merged.lookup("down")[""], invoke("moveDown"))

    def test_inputs_untouched(self):
        base = BindingTable()
        base.register("up", ALWAYS, invoke("moveUp"))
        overlay = BindingTable()
        overlay.register("up", ALWAYS, invoke("scrollUp"))
        merge_tables(base, overlay)
        self.assertEqual(base.lookup("up")[""], invoke("moveUp"))

    def test_different_conditions_coexist(self):
        a = BindingTable()
        a.register("up", atom("x"), invoke("one"))
        b = BindingTable()
        b.register("up", not_(atom("x")), invoke("two"))
        self.assertEqual(len(merge_tables(a, b)), 2)


class SplitTests(unittest.TestCase):
    def test_only(self):
        self.assertEqual(only("save"), [(ALWAYS, invoke("save"))])

    def test_contextual_split(self):
        pairs = contextual_split("activePanel", invoke("a"), invoke("b"))
        self.assertEqual(pairs, [(atom("activePanel"), invoke("a")), (not_(atom("activePanel")), invoke("b"))])

    def test_missing_side_is_suppress(self):
        pairs = panel_split(None, invoke("b"))
        self.assertIs(pairs[0][1], SUPPRESS)
        self.assertEqual(pairs[0][0], atom(PANEL_CONTEXT))

    def test_keyboard_split_branches_on_qmk(self):
        pairs = keyboard_split(invoke("basic"), invoke("qmk"))
        self.assertEqual([(c.to_str(), a.command) for c, a in pairs], [("keynav.qmk", "qmk"), ("!keynav.qmk", "basic")])

    def test_rejects_compound_context(self):
        with self.assertRaises(InvalidContextKey):
            contextual_split("a && b", invoke("a"), invoke("b"))


if __name__ == "__main__":
    unittest.main()
