"""Value model: the tagged union every Lispy expression and result is made of.

A Value is one of five kinds. Numbers, errors and symbols are leaves; S- and
Q-expressions own an ordered list of child Values. Ownership is single and
explicit:

    - append(parent, child) moves `child` into `parent`
    - remove_at(parent, i) moves child `i` out to the caller
    - take_at(parent, i) is remove_at followed by destroy(parent)
    - destroy(v) releases `v` and everything it owns

Python reclaims memory on its own, so "destroy" here is bookkeeping: a
destroyed Value is marked dead and any later use raises LispyOwnershipError.
Together with the optional AllocationTracker this makes leaks and double
releases observable in tests.
"""

from __future__ import annotations

from enum import Enum
from io import StringIO

from lispy.errors import LispyIndexError, LispyOwnershipError, LispyTypeError
from lispy.runtime_context import get_current_tracker


class ValueKind(Enum):
    NUMBER = "number"
    ERROR = "error"
    SYMBOL = "symbol"
    SEXPR = "sexpr"
    QEXPR = "qexpr"


class ErrorKind(Enum):
    GENERIC = "generic"
    INVALID_NUMBER = "invalid-number"
    NOT_A_SYMBOL = "not-a-symbol"
    UNKNOWN_FUNCTION = "unknown-function"
    WRONG_ARG_COUNT = "wrong-arg-count"
    WRONG_ARG_TYPE = "wrong-arg-type"
    EMPTY_QEXPR = "empty-qexpr"
    DIVISION_BY_ZERO = "division-by-zero"
    NEGATIVE_EXPONENT = "negative-exponent"


LIST_KINDS = (ValueKind.SEXPR, ValueKind.QEXPR)


class Value:
    __slots__ = ("kind", "num", "err", "err_kind", "sym", "cells", "parent", "alive", "_tracker")

    def __init__(self, kind: ValueKind):
        self.kind: ValueKind = kind
        self.num: int = 0
        self.err: str = ""
        self.err_kind: ErrorKind | None = None
        self.sym: str = ""
        self.cells: list[Value] = []
        self.parent: Value | None = None
        self.alive: bool = True
        self._tracker = get_current_tracker()
        if self._tracker is not None:
            self._tracker.record_create(self)

    # --- Kind predicates ---
    @property
    def is_number(self) -> bool:
        return self.kind is ValueKind.NUMBER

    @property
    def is_error(self) -> bool:
        return self.kind is ValueKind.ERROR

    @property
    def is_symbol(self) -> bool:
        return self.kind is ValueKind.SYMBOL

    @property
    def is_sexpr(self) -> bool:
        return self.kind is ValueKind.SEXPR

    @property
    def is_qexpr(self) -> bool:
        return self.kind is ValueKind.QEXPR

    @property
    def count(self) -> int:
        return len(self.cells)

    def retag(self, kind: ValueKind) -> Value:
        """Switch between SEXPR and QEXPR in place; the only sanctioned kind change."""
        _check_alive(self)
        if self.kind not in LIST_KINDS or kind not in LIST_KINDS:
            raise LispyTypeError(f"Cannot retag {self.kind.value} as {kind.value}")
        self.kind = kind
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        pairs = [(self, other)]
        while pairs:
            a, b = pairs.pop()
            if a.kind is not b.kind:
                return False
            match a.kind:
                case ValueKind.NUMBER:
                    same = a.num == b.num
                case ValueKind.ERROR:
                    same = a.err == b.err
                case ValueKind.SYMBOL:
                    same = a.sym == b.sym
                case _:
                    same = len(a.cells) == len(b.cells)
                    pairs.extend(zip(a.cells, b.cells))
            if not same:
                return False
        return True

    __hash__ = None  # mutable

    def __str__(self) -> str:
        return format_value(self)

    def __repr__(self) -> str:
        state = "" if self.alive else " dead"
        match self.kind:
            case ValueKind.NUMBER:
                return f"Value(number {self.num}{state})"
            case ValueKind.ERROR:
                return f"Value(error {self.err!r}{state})"
            case ValueKind.SYMBOL:
                return f"Value(symbol {self.sym!r}{state})"
            case _:
                return f"Value({self.kind.value} of {len(self.cells)}{state})"


# ----------------- Construction -----------------
def make_number(n: int) -> Value:
    v = Value(ValueKind.NUMBER)
    v.num = int(n)
    return v


def make_error(message: str, kind: ErrorKind = ErrorKind.GENERIC) -> Value:
    v = Value(ValueKind.ERROR)
    v.err = message
    v.err_kind = kind
    return v


def make_symbol(name: str) -> Value:
    v = Value(ValueKind.SYMBOL)
    v.sym = name
    return v


def make_sexpr() -> Value:
    return Value(ValueKind.SEXPR)


def make_qexpr() -> Value:
    return Value(ValueKind.QEXPR)


# ----------------- Structural mutation -----------------
def _check_alive(v: Value) -> None:
    if not v.alive:
        raise LispyOwnershipError(f"Use of destroyed value {v!r}")


def _check_list(v: Value, op: str) -> None:
    if v.kind not in LIST_KINDS:
        raise LispyTypeError(f"{op} requires an S-expression or Q-expression, got {v.kind.value}")


def append(parent: Value, child: Value) -> Value:
    """Move `child` to the end of `parent` and return `parent`."""
    _check_alive(parent)
    _check_alive(child)
    _check_list(parent, "append")
    if child.parent is not None:
        raise LispyOwnershipError(f"{child!r} already belongs to another expression")
    node: Value | None = parent
    while node is not None:
        if node is child:
            raise LispyOwnershipError("Appending a value into itself would create a cycle")
        node = node.parent
    child.parent = parent
    parent.cells.append(child)
    return parent


def remove_at(parent: Value, index: int) -> Value:
    """Remove child `index` from `parent`, shifting later children down; the caller owns it."""
    _check_alive(parent)
    _check_list(parent, "remove_at")
    if not 0 <= index < len(parent.cells):
        raise LispyIndexError(f"Index {index} out of range for expression of {len(parent.cells)} elements")
    child = parent.cells.pop(index)
    child.parent = None
    return child


def take_at(parent: Value, index: int) -> Value:
    """remove_at followed by destroying what is left of `parent`."""
    child = remove_at(parent, index)
    destroy(parent)
    return child


def destroy(v: Value) -> None:
    """Release `v` and every value it owns."""
    _check_alive(v)
    if v.parent is not None:
        raise LispyOwnershipError(f"{v!r} is still owned by an expression; remove it first")
    stack = [v]
    while stack:
        node = stack.pop()
        _check_alive(node)
        stack.extend(node.cells)
        node.cells = []
        node.parent = None
        node.alive = False
        if node._tracker is not None:
            node._tracker.record_destroy(node)


def count_values(v: Value) -> int:
    """Number of Values in the tree rooted at `v`."""
    n = 0
    stack = [v]
    while stack:
        node = stack.pop()
        n += 1
        stack.extend(node.cells)
    return n


# ----------------- Printing -----------------
def _write_value(v: Value, buffer: StringIO) -> None:
    # Pending items are Values still to print or literal text (separators, closers).
    stack: list[Value | str] = [v]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            buffer.write(item)
            continue
        _check_alive(item)
        match item.kind:
            case ValueKind.NUMBER:
                buffer.write(str(item.num))
            case ValueKind.ERROR:
                buffer.write(f"Error: {item.err}")
            case ValueKind.SYMBOL:
                buffer.write(item.sym)
            case ValueKind.SEXPR | ValueKind.QEXPR:
                open_ch, close_ch = ("(", ")") if item.kind is ValueKind.SEXPR else ("{", "}")
                buffer.write(open_ch)
                stack.append(close_ch)
                for i in reversed(range(len(item.cells))):
                    stack.append(item.cells[i])
                    if i:
                        stack.append(" ")


def format_value(v: Value) -> str:
    with StringIO() as buffer:
        _write_value(v, buffer)
        return buffer.getvalue()
