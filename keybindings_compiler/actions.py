"""
(C) 2026 Joseph Tingiris (joseph.tingiris@gmail.com)

Actions a keybinding can run.

- `invoke`: one command with an optional args bag.
- `sequence`: an ordered macro, rendered as one `MULTI_COMMAND` invocation.
- `raw_inject`: literal text sent to the active terminal.
- `suppress`: an explicit "bind nothing here" marker; it occupies its
  (chord, when) slot in the table but never reaches the output.

Actions are plain immutable data; nothing runs at construction time.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

# extension command that runs a list of steps in order
MULTI_COMMAND = "keynav.multiCommand.execute"

# built-in command that writes text to the active terminal
SEND_SEQUENCE = "workbench.action.terminal.sendSequence"

NOTIFICATION_COMMAND = "keynav.message.info"


@dataclass(frozen=True)
class Invoke:
    command: str
    args: dict[str, Any] | None = None

    def render(self) -> tuple[str, dict[str, Any] | None]:
        return self.command, copy.deepcopy(self.args)


@dataclass(frozen=True)
class RawInject:
    text: str

    def render(self) -> tuple[str, dict[str, Any] | None]:
        return SEND_SEQUENCE, {"text": self.text}


@dataclass(frozen=True)
class Step:
    """One sequence element with its timing hints."""

    action: Invoke | RawInject
    asynchronous: bool = False
    delay: int = 0

    def to_dict(self) -> dict[str, Any]:
        command, args = self.action.render()
        out: dict[str, Any] = {"command": command}
        if args:
            out["args"] = args
        if self.asynchronous:
            out["async"] = True
        if self.delay:
            out["delay"] = self.delay
        return out


@dataclass(frozen=True)
class Sequence:
    steps: tuple[Step, ...] = field(default_factory=tuple)

    def render(self) -> tuple[str, dict[str, Any] | None]:
        return MULTI_COMMAND, {"sequence": [s.to_dict() for s in self.steps]}


class Suppress:
    """Explicitly inert binding; distinct from having no entry at all."""

    _instance: Suppress | None = None

    def __new__(cls) -> Suppress:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SUPPRESS"

    def __reduce__(self):
        return (Suppress, ())


SUPPRESS = Suppress()

Action = Invoke | Sequence | RawInject | Suppress


def invoke(command: str, args: dict[str, Any] | None = None) -> Invoke:
    if not command:
        raise ValueError("invoke() requires a command name")
    return Invoke(command, copy.deepcopy(args) if args is not None else None)


def raw_inject(text: str) -> RawInject:
    return RawInject(text)


def suppress() -> Suppress:
    return SUPPRESS


def step(action: Invoke | RawInject, asynchronous: bool = False, delay: int = 0) -> Step:
    """Attach timing hints to one sequence element.

    `asynchronous` continues with the next step without waiting; `delay` is the
    number of milliseconds to wait before this step runs.
    """
    if not isinstance(action, (Invoke, RawInject)):
        raise ValueError(f"step() takes an invoke or raw_inject action, got {action!r}")
    if delay < 0:
        raise ValueError(f"step delay must not be negative, got {delay}")
    return Step(action, asynchronous=asynchronous, delay=delay)


def sequence(*elements: Invoke | RawInject | Step | Sequence | str) -> Sequence:
    """Build an ordered macro.

    A `Sequence` element is inlined one level deep, in place. Every
    `Sequence` is flat by construction, so one level is all there ever is.
    Bare strings are shorthand for `invoke(name)`.
    """
    steps: list[Step] = []
    for element in elements:
        if isinstance(element, str):
            steps.append(Step(invoke(element)))
        elif isinstance(element, Sequence):
            steps.extend(element.steps)
        elif isinstance(element, Step):
            steps.append(element)
        elif isinstance(element, (Invoke, RawInject)):
            steps.append(Step(element))
        else:
            raise ValueError(f"cannot sequence {element!r}")
    if not steps:
        raise ValueError("sequence() requires at least one step")
    return Sequence(tuple(steps))


def notification(message: str) -> Invoke:
    """Show an info message instead of running anything."""
    return invoke(NOTIFICATION_COMMAND, {"message": message})


def render(action: Action) -> tuple[str, dict[str, Any] | None]:
    """Return the (command, args) pair an action compiles to."""
    if isinstance(action, Suppress):
        raise ValueError("a suppressed binding has no command")
    return action.render()
