"""Tagged parse tree produced by the reader.

Tags follow the layout of a combinator-grammar AST: rule names joined by `|`
from outermost to innermost (`expr|number|regex`), `>` for interior nodes,
`char` for literal delimiters and `regex` for anchor leaves.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from io import StringIO

ROOT_TAG = ">"
NUMBER_TAG = "expr|number|regex"
SYMBOL_TAG = "expr|symbol|regex"
SEXPR_TAG = "expr|sexpr|>"
QEXPR_TAG = "expr|qexpr|>"
CHAR_TAG = "char"
REGEX_TAG = "regex"


@dataclass
class AstNode:
    tag: str
    contents: str = ""
    children: list[AstNode] = field(default_factory=list)
    line: int = 1
    column: int = 1

    @property
    def children_num(self) -> int:
        return len(self.children)

    def pretty(self) -> str:
        """Indented dump of the tree, one node per line."""
        with StringIO() as buffer:
            stack = [(self, 0)]
            while stack:
                node, depth = stack.pop()
                buffer.write("  " * depth)
                buffer.write(node.tag)
                if node.contents:
                    buffer.write(f": '{node.contents}'")
                buffer.write("\n")
                stack.extend((child, depth + 1) for child in reversed(node.children))
            return buffer.getvalue()
