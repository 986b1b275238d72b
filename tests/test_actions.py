#!/usr/bin/env python3
"""
(C) 2026 Joseph Tingiris (joseph.tingiris@gmail.com)

Tests for action construction and rendering in `keybindings_compiler.actions`.
"""

import unittest

from keybindings_compiler.actions import (
    MULTI_COMMAND,
    NOTIFICATION_COMMAND,
    SEND_SEQUENCE,
    SUPPRESS,
    Suppress,
    invoke,
    notification,
    raw_inject,
    render,
    sequence,
    step,
    suppress,
)


class InvokeTests(unittest.TestCase):
    def test_plain(self):
        self.assertEqual(render(invoke("cursorUp")), ("cursorUp", None))

    def test_args_are_copied(self):
        args = {"text": "a"}
        action = invoke("type", args)
        args["text"] = "b"
        self.assertEqual(render(action), ("type", {"text": "a"}))

    def test_empty_name_rejected(self):
        with self.assertRaises(ValueError):
            invoke("")


class SequenceTests(unittest.TestCase):
    def test_renders_as_multi_command(self):
        command, args = render(sequence("a", invoke("b", {"x": 1})))
        self.assertEqual(command, MULTI_COMMAND)
        self.assertEqual(args, {"sequence": [
            {"command": "a"},
            {"command": "b", "args": {"x": 1}},
        ]})

    def test_step_hints(self):
        _, args = render(sequence("a", step(invoke("b"), asynchronous=True, delay=50)))
        self.assertEqual(args["sequence"][1], {"command": "b", "async": True, "delay": 50})

    def test_nested_sequence_inlined_one_level(self):
        inner = sequence("b", "c")
        outer = sequence("a", inner, "d")
        self.assertEqual([s.action.command for s in outer.steps], ["a", "b", "c", "d"])

    def test_doubly_nested_sequence_is_still_flat(self):
        innermost = sequence("c", "d")
        middle = sequence("b", innermost)
        outer = sequence("a", middle, "e")
        _, args = render(outer)
        self.assertEqual([s["command"] for s in args["sequence"]], ["a", "b", "c", "d", "e"])

    def test_raw_inject_step(self):
        _, args = render(sequence("a", raw_inject("\u0003")))
        self.assertEqual(args["sequence"][1], {"command": SEND_SEQUENCE, "args": {"text": "\u0003"}})

    def test_empty_sequence_rejected(self):
        with self.assertRaises(ValueError):
            sequence()

    def test_suppress_in_sequence_rejected(self):
        with self.assertRaises(ValueError):
            sequence("a", SUPPRESS)

    def test_bad_step(self):
        with self.assertRaises(ValueError):
            step(SUPPRESS)
        with self.assertRaises(ValueError):
            step(invoke("a"), delay=-1)


class OtherActionTests(unittest.TestCase):
    def test_raw_inject(self):
        self.assertEqual(render(raw_inject("\u0008")), (SEND_SEQUENCE, {"text": "\u0008"}))

    def test_notification(self):
        self.assertEqual(render(notification("hi")), (NOTIFICATION_COMMAND, {"message": "hi"}))

    def test_suppress_is_singleton(self):
        self.assertIs(suppress(), SUPPRESS)
        self.assertIs(Suppress(), SUPPRESS)

    def test_suppress_has_no_command(self):
        with self.assertRaises(ValueError):
            render(SUPPRESS)


if __name__ == "__main__":
    unittest.main()
