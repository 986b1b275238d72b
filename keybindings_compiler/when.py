"""
(C) 2026 Joseph Tingiris (joseph.tingiris@gmail.com)

Build VS Code `when` clauses programmatically.

Conditions are small immutable trees rendered to exactly one string. There is
no parser and no simplification: `and_(and_(a, b), c)` renders `a && b && c`,
`and_(a, or_(b, c))` renders `a && b || c`, and no parentheses are ever added.
Callers build the precedence they want, left to right, the way VS Code
evaluates it.

The empty atom (`ALWAYS`) is the unconditional sentinel. It renders as the
empty string and joins like any other operand.
"""

from __future__ import annotations

import re

from keybindings_compiler.errors import InvalidContextKey, InvalidNegation

# a contextual split may only branch on a bare context key
SIMPLE_CONTEXT_REGEX = re.compile(r"^[a-zA-Z\.]+$")


class WhenNode:
    """Base node type for when-expression trees."""

    __slots__ = ()

    def to_str(self) -> str:
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WhenNode):
            return NotImplemented
        return type(self) is type(other) and self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._identity()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_str()!r})"

    def _identity(self) -> tuple:
        raise NotImplementedError


class WhenLeaf(WhenNode):
    """A context name, optionally negated."""

    __slots__ = ("name", "negated")

    def __init__(self, name: str, negated: bool = False):
        self.name = name
        self.negated = negated

    def to_str(self) -> str:
        if self.negated:
            return f"!{self.name}"
        return self.name

    def _identity(self) -> tuple:
        return (self.name, self.negated)


class WhenCompare(WhenNode):
    """`key == literal` or `key != literal` over a discrete-valued context."""

    __slots__ = ("key", "literal", "equal")

    def __init__(self, key: str, literal: str, equal: bool = True):
        self.key = key
        self.literal = literal
        self.equal = equal

    def to_str(self) -> str:
        op = "==" if self.equal else "!="
        return f"{self.key} {op} {self.literal}"

    def _identity(self) -> tuple:
        return (self.key, self.literal, self.equal)


class WhenAnd(WhenNode):
    """AND-expression node."""

    __slots__ = ("children",)

    def __init__(self, children: tuple[WhenNode, ...]):
        self.children = tuple(children)

    def to_str(self) -> str:
        return " && ".join(serialize(child) for child in self.children)

    def _identity(self) -> tuple:
        return self.children


class WhenOr(WhenNode):
    """OR-expression node."""

    __slots__ = ("children",)

    def __init__(self, children: tuple[WhenNode, ...]):
        self.children = tuple(children)

    def to_str(self) -> str:
        return " || ".join(serialize(child) for child in self.children)

    def _identity(self) -> tuple:
        return self.children


def atom(name: str) -> WhenLeaf:
    """Return a bare context atom; `atom("")` means always."""
    return WhenLeaf(name)


ALWAYS = atom("")


def cmp(key: str, literal: str, equal: bool = True) -> WhenCompare:
    """Return a comparison; the literal is rendered verbatim (quote it yourself)."""
    return WhenCompare(key, literal, equal=equal)


def and_(a: WhenNode, b: WhenNode) -> WhenAnd:
    return WhenAnd((_check(a), _check(b)))


def or_(a: WhenNode, b: WhenNode) -> WhenOr:
    return WhenOr((_check(a), _check(b)))


def not_(node: WhenNode) -> WhenNode:
    """Negate an atom or an `==` comparison.

    Negating a negated atom gives back the plain atom. Everything else is an
    `InvalidNegation`: compound expressions, the always atom, and any `!=`
    comparison (whether built that way or produced by an earlier negation).
    """
    _check(node)
    if isinstance(node, WhenLeaf):
        if not node.name:
            raise InvalidNegation("cannot negate the always atom", condition="")
        return WhenLeaf(node.name, negated=not node.negated)
    if isinstance(node, WhenCompare):
        if not node.equal:
            raise InvalidNegation("cannot re-negate a != comparison", condition=node.to_str())
        return WhenCompare(node.key, node.literal, equal=False)
    raise InvalidNegation("only atoms and comparisons can be negated", condition=node.to_str())


def serialize(node: WhenNode) -> str:
    """Render a condition to its canonical when-clause string."""
    return _check(node).to_str()


def when_key(condition: WhenNode | str) -> str:
    """Return the table key for a condition, accepting pre-serialized strings."""
    if isinstance(condition, str):
        return condition
    return serialize(condition)


def require_simple_context(context: str) -> str:
    if not SIMPLE_CONTEXT_REGEX.match(context):
        raise InvalidContextKey(
            f"context key does not match required regexp ({SIMPLE_CONTEXT_REGEX.pattern})",
            condition=context,
        )
    return context


def _check(node: object) -> WhenNode:
    if not isinstance(node, WhenNode):
        raise TypeError(f"expected a when condition, got {type(node).__name__}")
    return node
