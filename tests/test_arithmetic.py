import pytest

from lispy.builtin.builtins import call_builtin, trunc_div, trunc_mod, wrap_int
from lispy.errors import LispyConfigError
from lispy.types.value import append, make_number, make_sexpr


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(+ 1 2 3)", "6"),
        ("(- 10 3 2)", "5"),
        ("(* 2 3 4)", "24"),
        ("(/ 12 3)", "4"),
        ("(+ (* 2 3) (- 10 4))", "12"),
        ("(/ (+ 20 10) (* 2 5))", "3"),
        ("(+ -1 5 -3)", "1"),
        ("(- -10 -5)", "-5"),
        ("(- 5)", "-5"),
        ("(- -5)", "5"),
        ("(+ 5)", "5"),
        ("(/ 5)", "5"),
        ("(+ 1 (* 2 (+ 3 4) (- 10 6)))", "57"),
        ("(/ 7 2)", "3"),
        ("(/ -7 2)", "-3"),
        ("(/ 7 -2)", "-3"),
        ("(% 7 2)", "1"),
        ("(% -7 2)", "-1"),
        ("(% 7 -2)", "1"),
        ("(^ 2 10)", "1024"),
        ("(^ 5 0)", "1"),
        ("(^ -2 3)", "-8"),
        ("(^ 2 3 2)", "64"),
        ("(min 3 1 2)", "1"),
        ("(max 3 1 2)", "3"),
        ("(max -3 (min 4 9))", "4"),
    ]
)
def test_arithmetic(interp, source, expected):
    assert interp.eval_to_string(source) == expected


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(+ 9223372036854775807 1)", "-9223372036854775808"),
        ("(- -9223372036854775808 1)", "9223372036854775807"),
        ("(- -9223372036854775808)", "-9223372036854775808"),
        ("(* 4611686018427387904 2)", "-9223372036854775808"),
        ("(^ 2 63)", "-9223372036854775808"),
        ("(^ 2 64)", "0"),
        ("(^ 3 1000000000000)", None),
    ]
)
def test_arithmetic_wraps_to_fixed_width(interp, source, expected):
    result = interp.eval_to_string(source)
    if expected is None:
        assert -(2 ** 63) <= int(result) < 2 ** 63
    else:
        assert result == expected


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(/ 1 0)", "Error: Division by zero"),
        ("(/ 10 2 0)", "Error: Division by zero"),
        ("(/ 10 0 5 6)", "Error: Division by zero"),
        ("(% 1 0)", "Error: Division by zero"),
        ("(^ 2 -1)", "Error: Negative exponent"),
        ("(+ 1 {2})", "Error: Cannot operate on non-number"),
        ("(* 2 head)", "Error: Cannot operate on non-number"),
        ("(- {} 1)", "Error: Cannot operate on non-number"),
    ]
)
def test_arithmetic_errors(interp, source, expected):
    assert interp.eval_to_string(source) == expected


def test_int_width_is_configurable(interp, monkeypatch):
    monkeypatch.setenv("LISPY_INT_BITS", "8")
    assert interp.eval_to_string("(+ 127 1)") == "-128"
    assert interp.eval_to_string("(* 16 16)") == "0"
    assert interp.eval_to_string("128") == "Error: Invalid number"
    assert interp.eval_to_string("-128") == "-128"


@pytest.mark.parametrize(
    "n,bits,expected",
    [
        (0, 8, 0),
        (127, 8, 127),
        (128, 8, -128),
        (255, 8, -1),
        (256, 8, 0),
        (-129, 8, 127),
        (2 ** 63, 64, -(2 ** 63)),
    ]
)
def test_wrap_int(n, bits, expected):
    assert wrap_int(n, bits) == expected


@pytest.mark.parametrize(
    "a,b,q,r",
    [(7, 2, 3, 1), (-7, 2, -3, -1), (7, -2, -3, 1), (-7, -2, 3, -1), (6, 3, 2, 0)],
)
def test_truncating_division(a, b, q, r):
    assert trunc_div(a, b) == q
    assert trunc_mod(a, b) == r


def test_bad_int_width_releases_arguments(monkeypatch, tracker):
    args = make_sexpr()
    append(args, make_number(1))
    append(args, make_number(2))
    monkeypatch.setenv("LISPY_INT_BITS", "nope")
    with pytest.raises(LispyConfigError):
        call_builtin("+", args)
    assert tracker.live_count == 0
