#!/usr/bin/env python3
"""
(C) 2026 Joseph Tingiris (joseph.tingiris@gmail.com)

Focused CLI tests for `keybindings-compile`.
"""

import json
import os
import subprocess
import sys
import tempfile
import unittest
from textwrap import dedent


SCRIPT = os.path.normpath(
    os.path.join(os.path.dirname(__file__), "..", "bin", "keybindings-compile.py")
)
REPO_ROOT = os.path.normpath(os.path.join(os.path.dirname(__file__), ".."))


def run_compile(args: list[str] | None = None, extra_path: str | None = None) -> subprocess.CompletedProcess[bytes]:
    """Run the compiler as a module with optional args and an extra import path."""
    cmd = [sys.executable, "-m", "keybindings_compiler"]
    if args:
        cmd.extend(args)
    env = None
    if extra_path:
        env = dict(os.environ)
        env["PYTHONPATH"] = os.pathsep.join(p for p in (REPO_ROOT, extra_path, env.get("PYTHONPATH")) if p)
    return subprocess.run(
        cmd,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        cwd=REPO_ROOT,
        env=env,
    )


BROKEN_KEYMAP = dedent(
    """
    from keybindings_compiler.table import BindingTable
    from keybindings_compiler.when import ALWAYS


    def broken_keymap():
        table = BindingTable()
        table.register("up", ALWAYS, "moveUp")
        return table
    """
)


class KeybindingsCompileCliTests(unittest.TestCase):
    """CLI behavior tests for keybindings-compile."""

    def test_help_exits_99(self) -> None:
        proc = run_compile(["--help"])
        self.assertEqual(proc.returncode, 99)
        self.assertIn("usage:", proc.stdout.decode("utf-8").lower())

    def test_bad_option_exits_99(self) -> None:
        proc = run_compile(["--no-such-option"])
        self.assertEqual(proc.returncode, 99)

    def test_bad_debug_value_exits_99(self) -> None:
        proc = run_compile(["-d", "target=nowhere"])
        self.assertEqual(proc.returncode, 99)
        self.assertIn("unknown debug target", proc.stderr.decode("utf-8"))

    def test_default_keymap_to_stdout(self) -> None:
        proc = run_compile()
        self.assertEqual(proc.returncode, 0, msg=proc.stderr.decode("utf-8"))
        data = json.loads(proc.stdout.decode("utf-8"))
        self.assertIsInstance(data, list)
        self.assertIn({"key": "ctrl+x ctrl+s", "command": "workbench.action.files.save"}, data)
        self.assertTrue(any(obj.get("when") == "keynav.typing" for obj in data))

    def test_no_typing(self) -> None:
        proc = run_compile(["--no-typing"])
        self.assertEqual(proc.returncode, 0)
        data = json.loads(proc.stdout.decode("utf-8"))
        self.assertFalse(any(obj.get("when") == "keynav.typing" for obj in data))

    def test_output_is_stable(self) -> None:
        first = run_compile()
        second = run_compile()
        self.assertEqual(first.stdout, second.stdout)

    def test_out_then_check(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "keybindings.json")
            proc = run_compile(["--out", path])
            self.assertEqual(proc.returncode, 0)
            self.assertEqual(proc.stdout, b"")

            proc = run_compile(["--check", path])
            self.assertEqual(proc.returncode, 0, msg=proc.stderr.decode("utf-8"))
            self.assertIn("up to date", proc.stderr.decode("utf-8"))

            proc = run_compile(["--no-typing", "--check", path])
            self.assertEqual(proc.returncode, 1)
            self.assertIn("- ", proc.stderr.decode("utf-8"))

    def test_check_missing_file_exits_2(self) -> None:
        proc = run_compile(["--check", os.path.join(REPO_ROOT, "no-such-file.json")])
        self.assertEqual(proc.returncode, 2)
        self.assertIn("error:", proc.stderr.decode("utf-8"))

    def test_bad_keymap_exits_2(self) -> None:
        for target in ("no_such_module:build", "keybindings_compiler.keymap:nothing", "nocolon"):
            proc = run_compile(["--keymap", target])
            self.assertEqual(proc.returncode, 2, msg=target)

    def test_keymap_raising_type_error_exits_2(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with open(os.path.join(tmp, "broken_keymaps.py"), "w", encoding="utf-8") as handle:
                handle.write(BROKEN_KEYMAP)
            proc = run_compile(["-k", "broken_keymaps:broken_keymap"], extra_path=tmp)
        self.assertEqual(proc.returncode, 2)
        stderr = proc.stderr.decode("utf-8")
        self.assertIn("error:", stderr)
        self.assertIn("TypeError", stderr)
        self.assertNotIn("Traceback", stderr)
        self.assertEqual(proc.stdout, b"")

    def test_check_manifest_with_bad_contributes_exits_2(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "package.json")
            with open(path, "w", encoding="utf-8") as handle:
                handle.write('{"contributes": ["not", "an", "object"]}')
            proc = run_compile(["--no-typing", "--check", path])
        self.assertEqual(proc.returncode, 2)
        self.assertIn("contributes", proc.stderr.decode("utf-8"))
        self.assertNotIn("Traceback", proc.stderr.decode("utf-8"))

    def test_bare_table_keymap(self) -> None:
        proc = run_compile(["--keymap", "keybindings_compiler.keymap:build_table"])
        self.assertEqual(proc.returncode, 0)
        data = json.loads(proc.stdout.decode("utf-8"))
        self.assertFalse(any(obj["command"].startswith("-") for obj in data))

    def test_debug_goes_to_stderr(self) -> None:
        proc = run_compile(["--no-typing", "-d", "1", "-d", "target=linearize", "--color", "never"])
        self.assertEqual(proc.returncode, 0)
        self.assertIn("[DEBUG:1:linearize]", proc.stderr.decode("utf-8"))
        json.loads(proc.stdout.decode("utf-8"))

    def test_script_shim(self) -> None:
        proc = subprocess.run(
            [sys.executable, SCRIPT, "--no-typing"],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            cwd=REPO_ROOT,
        )
        self.assertEqual(proc.returncode, 0)
        self.assertEqual(proc.stdout, run_compile(["--no-typing"]).stdout)


if __name__ == "__main__":
    unittest.main()
