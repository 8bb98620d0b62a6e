from __future__ import annotations
import logging
from typing import Callable

from lispy import LispValue
from lispy.reader.parser import parse
from lispy.evaluation.read import read
from lispy.types.value import destroy, format_value

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Orchestrates parsing, reading and evaluating Lispy code via a pluggable evaluator.
    Holds no state between calls: every input is evaluated on its own.
    """

    def __init__(
        self,
        eval_fn: Callable[[LispValue], LispValue] | None = None,
        filename: str = "<stdin>",
    ):
        if eval_fn is None:
            from lispy.evaluation.evaluator import evaluate
            eval_fn = evaluate
        self.eval_fn = eval_fn
        self.filename = filename

    def read(self, code: str) -> LispValue:
        """Parse `code` and read it into an unevaluated root S-expression."""
        tree = parse(code, self.filename)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("parse tree:\n%s", tree.pretty())
        return read(tree)

    def eval(self, code: str) -> LispValue:
        """Evaluate all of `code` as one root S-expression. The caller owns the result."""
        return self.eval_fn(self.read(code))

    def eval_to_string(self, code: str) -> str:
        result = self.eval(code)
        try:
            return format_value(result)
        finally:
            destroy(result)
