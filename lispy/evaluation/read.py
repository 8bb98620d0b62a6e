"""Structural read: parse tree -> unevaluated Value.

No computation happens here. Leaves become numbers or symbols, list nodes
become empty S-/Q-expressions filled with their read children.
"""

from __future__ import annotations

from lispy import LispValue, ParseTree
from lispy.config import get_int_range
from lispy.errors import LispyError, LispySyntaxError
from lispy.reader.ast import REGEX_TAG, ROOT_TAG
from lispy.types.value import (
    ErrorKind,
    append,
    destroy,
    make_error,
    make_number,
    make_qexpr,
    make_sexpr,
    make_symbol,
)

DELIMITERS = frozenset("(){}")


def read_number(node: ParseTree) -> LispValue:
    lo, hi = get_int_range()
    try:
        n = int(node.contents)
    except ValueError:
        return make_error("Invalid number", ErrorKind.INVALID_NUMBER)
    if not lo <= n <= hi:
        return make_error("Invalid number", ErrorKind.INVALID_NUMBER)
    return make_number(n)


def _is_skipped(child: ParseTree) -> bool:
    return child.contents in DELIMITERS or child.tag == REGEX_TAG


def read_node(node: ParseTree) -> LispValue:
    """Value for a single node; list nodes come back empty, their children are read by `read`."""
    if "number" in node.tag:
        return read_number(node)
    if "symbol" in node.tag:
        return make_symbol(node.contents)
    if node.tag == ROOT_TAG or "sexpr" in node.tag:
        return make_sexpr()
    if "qexpr" in node.tag:
        return make_qexpr()
    raise LispySyntaxError(f"Unexpected parse tree node tagged {node.tag!r}",
                           line=node.line, column=node.column)


def read(node: ParseTree) -> LispValue:
    x = read_node(node)
    if not (x.is_sexpr or x.is_qexpr):
        return x

    # Explicit stack of (list value, iterator over its node's children), so
    # nesting depth is not limited by Python recursion. A list is attached to
    # its parent once all of its children are read.
    stack = [(x, iter(node.children))]
    try:
        while stack:
            parent, children = stack[-1]
            child = next(children, None)
            if child is None:
                stack.pop()
                if stack:
                    append(stack[-1][0], parent)
                continue
            if _is_skipped(child):
                continue
            v = read_node(child)
            if v.is_sexpr or v.is_qexpr:
                stack.append((v, iter(child.children)))
            else:
                append(parent, v)
    except LispyError:
        for v, _ in stack:
            destroy(v)
        raise
    return x
