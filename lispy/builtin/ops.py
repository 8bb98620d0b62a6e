from __future__ import annotations
from enum import Enum
from typing import Optional


class Builtin(Enum):
    """Closed set of built-in operations, valued by their source-level names."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    POW = "^"
    MIN = "min"
    MAX = "max"
    LIST = "list"
    HEAD = "head"
    TAIL = "tail"
    JOIN = "join"
    EVAL = "eval"

    @classmethod
    def lookup(cls, name: str) -> Optional[Builtin]:
        try:
            return cls(name)
        except ValueError:
            return None
