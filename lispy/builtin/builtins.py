from __future__ import annotations
import logging
from typing import Optional

from lispy import EvaluatorFn, LispValue
from lispy.builtin.ops import Builtin
from lispy.config import get_int_bits
from lispy.errors import LispyConfigError
from lispy.types.value import (
    ErrorKind,
    ValueKind,
    append,
    destroy,
    make_error,
    remove_at,
    take_at,
)

logger = logging.getLogger(__name__)


def _fail(args: LispValue, message: str, kind: ErrorKind) -> LispValue:
    """Release the whole argument list, then build the error."""
    destroy(args)
    logger.debug("builtin failed: %s (%s)", message, kind.value)
    return make_error(message, kind)


# -------------------------------
# Fixed-width integer helpers
# -------------------------------
def wrap_int(n: int, bits: int) -> int:
    """Reduce `n` to a signed two's complement integer of `bits` bits."""
    n &= (1 << bits) - 1
    if n >> (bits - 1):
        n -= 1 << bits
    return n


def trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def trunc_mod(a: int, b: int) -> int:
    return a - b * trunc_div(a, b)


# -------------------------------
# Arithmetic
# -------------------------------
def builtin_op(op: Builtin, args: LispValue) -> LispValue:
    if args.count == 0:
        return _fail(args, f"Function '{op.value}' passed no arguments", ErrorKind.WRONG_ARG_COUNT)
    for cell in args.cells:
        if not cell.is_number:
            return _fail(args, "Cannot operate on non-number", ErrorKind.WRONG_ARG_TYPE)

    try:
        bits = get_int_bits()
    except LispyConfigError:
        destroy(args)
        raise
    x = remove_at(args, 0)

    if op is Builtin.SUB and args.count == 0:
        x.num = wrap_int(-x.num, bits)

    while args.count > 0:
        y = remove_at(args, 0)
        match op:
            case Builtin.ADD:
                x.num = wrap_int(x.num + y.num, bits)
            case Builtin.SUB:
                x.num = wrap_int(x.num - y.num, bits)
            case Builtin.MUL:
                x.num = wrap_int(x.num * y.num, bits)
            case Builtin.DIV | Builtin.MOD:
                if y.num == 0:
                    destroy(x)
                    destroy(y)
                    return _fail(args, "Division by zero", ErrorKind.DIVISION_BY_ZERO)
                if op is Builtin.DIV:
                    x.num = wrap_int(trunc_div(x.num, y.num), bits)
                else:
                    x.num = wrap_int(trunc_mod(x.num, y.num), bits)
            case Builtin.POW:
                if y.num < 0:
                    destroy(x)
                    destroy(y)
                    return _fail(args, "Negative exponent", ErrorKind.NEGATIVE_EXPONENT)
                x.num = wrap_int(pow(x.num, y.num, 1 << bits), bits)
            case Builtin.MIN:
                x.num = min(x.num, y.num)
            case Builtin.MAX:
                x.num = max(x.num, y.num)
        destroy(y)

    destroy(args)
    return x


# -------------------------------
# Q-expression operations
# -------------------------------
def _check_single_qexpr(op: Builtin, args: LispValue, non_empty: bool = True) -> Optional[LispValue]:
    """Error value (with `args` destroyed) unless `args` is exactly one suitable Q-expression."""
    if args.count != 1:
        return _fail(
            args,
            f"Function '{op.value}' passed {args.count} arguments, expected 1",
            ErrorKind.WRONG_ARG_COUNT,
        )
    if not args.cells[0].is_qexpr:
        return _fail(args, f"Function '{op.value}' passed incorrect type", ErrorKind.WRONG_ARG_TYPE)
    if non_empty and args.cells[0].count == 0:
        return _fail(args, f"Function '{op.value}' passed {{}}", ErrorKind.EMPTY_QEXPR)
    return None


def builtin_head(args: LispValue) -> LispValue:
    err = _check_single_qexpr(Builtin.HEAD, args)
    if err is not None:
        return err
    v = take_at(args, 0)
    while v.count > 1:
        destroy(remove_at(v, 1))
    return v


def builtin_tail(args: LispValue) -> LispValue:
    err = _check_single_qexpr(Builtin.TAIL, args)
    if err is not None:
        return err
    v = take_at(args, 0)
    destroy(remove_at(v, 0))
    return v


def builtin_list(args: LispValue) -> LispValue:
    return args.retag(ValueKind.QEXPR)


def builtin_eval(args: LispValue, evaluate_fn: EvaluatorFn) -> LispValue:
    err = _check_single_qexpr(Builtin.EVAL, args, non_empty=False)
    if err is not None:
        return err
    x = take_at(args, 0)
    x.retag(ValueKind.SEXPR)
    return evaluate_fn(x)


def builtin_join(args: LispValue) -> LispValue:
    if args.count == 0:
        return _fail(args, "Function 'join' passed no arguments", ErrorKind.WRONG_ARG_COUNT)
    for cell in args.cells:
        if not cell.is_qexpr:
            return _fail(args, "Function 'join' passed incorrect type", ErrorKind.WRONG_ARG_TYPE)

    x = remove_at(args, 0)
    while args.count > 0:
        y = remove_at(args, 0)
        while y.count > 0:
            append(x, remove_at(y, 0))
        destroy(y)
    destroy(args)
    return x


# -------------------------------
# Dispatch
# -------------------------------
def call_builtin(
    name: str | Builtin, args: LispValue, evaluate_fn: EvaluatorFn | None = None
) -> LispValue:
    """
    Apply the built-in called `name` to `args`, an owned S-expression of
    already-evaluated arguments. Ownership of `args` always passes to the
    built-in, on success and on failure alike.
    """
    op = name if isinstance(name, Builtin) else Builtin.lookup(name)
    if evaluate_fn is None:
        # Lazy import to avoid circular imports
        from lispy.evaluation.evaluator import evaluate as evaluate_fn

    logger.debug("call_builtin %s with %d arguments", name, args.count)
    match op:
        case None:
            return _fail(args, "Unknown function", ErrorKind.UNKNOWN_FUNCTION)
        case Builtin.LIST:
            return builtin_list(args)
        case Builtin.HEAD:
            return builtin_head(args)
        case Builtin.TAIL:
            return builtin_tail(args)
        case Builtin.JOIN:
            return builtin_join(args)
        case Builtin.EVAL:
            return builtin_eval(args, evaluate_fn)
        case (Builtin.ADD | Builtin.SUB | Builtin.MUL | Builtin.DIV
              | Builtin.MOD | Builtin.POW | Builtin.MIN | Builtin.MAX):
            return builtin_op(op, args)
