"""Core evaluator for the Lispy interpreter.

Reduces S-expressions by evaluating their children depth-first, left to
right, then applying the leading symbol as a built-in. Errors are ordinary
values: the first one produced wins and everything else is released.

Nested S-expressions are walked with an explicit stack of frames rather than
Python recursion, so nesting depth is bounded by memory, not by the
interpreter's recursion limit.
"""

from __future__ import annotations

import logging

from lispy import LispValue
from lispy.builtin.builtins import call_builtin
from lispy.types.value import (
    ErrorKind,
    append,
    destroy,
    make_error,
    remove_at,
    take_at,
)

logger = logging.getLogger(__name__)


class _Frame:
    """An S-expression being reduced and how many of its children are still unevaluated."""

    __slots__ = ("expr", "pending")

    def __init__(self, expr: LispValue):
        self.expr = expr
        self.pending = expr.count


def evaluate(v: LispValue) -> LispValue:
    """Evaluate `v`, taking ownership of it. Anything but an S-expression evaluates to itself."""
    if v.is_sexpr:
        return evaluate_sexpr(v)
    return v


def evaluate_sexpr(v: LispValue) -> LispValue:
    # Each frame rotates its children: pop the front one, evaluate it, append
    # the reduced value at the back. `result` carries a finished child up to
    # the frame below it.
    stack = [_Frame(v)]
    result: LispValue | None = None
    while True:
        frame = stack[-1]
        if result is not None:
            if result.is_error:
                # The first error stops evaluation; unevaluated siblings are released with the parent.
                logger.debug("evaluate: short-circuit on error %r", result.err)
                destroy(frame.expr)
                stack.pop()
                if not stack:
                    return result
                continue
            append(frame.expr, result)
            result = None

        if frame.pending > 0:
            frame.pending -= 1
            child = remove_at(frame.expr, 0)
            if child.is_sexpr:
                stack.append(_Frame(child))
            else:
                result = child
            continue

        stack.pop()
        result = reduce_sexpr(frame.expr)
        if not stack:
            return result


def reduce_sexpr(v: LispValue) -> LispValue:
    """Collapse an S-expression whose children are all evaluated and error-free."""
    # Empty expression
    if v.count == 0:
        return v

    # Single expression
    if v.count == 1:
        return take_at(v, 0)

    f = remove_at(v, 0)
    if not f.is_symbol:
        destroy(f)
        destroy(v)
        return make_error("S-expression does not start with symbol.", ErrorKind.NOT_A_SYMBOL)

    result = call_builtin(f.sym, v, evaluate)
    destroy(f)
    return result
