# Core type aliases for Lispy's data model.
# Every runtime value is a lispy.types.value.Value (a tagged union over five kinds).
#
# Naming guidance:
# - ParseTree: Use in reader code to denote the tagged tree produced by the parser.
# - LispValue: Use in evaluator/builtin code to denote a Value the caller owns.
# Both aliases resolve to `Any` here to avoid import cycles with the concrete classes.

from typing import Any, Callable

# Runtime value alias
LispValue = Any
# Tagged parse tree produced by lispy.reader.parser
ParseTree = Any

# Evaluator function type: used by builtins that re-enter evaluation (eval)
EvaluatorFn = Callable[[LispValue], LispValue]

__version__ = "0.0.0.5"
