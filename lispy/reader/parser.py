"""
  Lispy Lexer and Parser

- Regex tokenizer, stack-based descent over a one-token lookahead stream
- Emits the tagged AstNode tree the evaluator reads, not Values:

    - whole input      -> ">" root, wrapped in two "regex" anchor leaves
    - numbers          -> "expr|number|regex" leaf
    - symbols          -> "expr|symbol|regex" leaf
    - ( ... )          -> "expr|sexpr|>" with "char" delimiter leaves
    - { ... }          -> "expr|qexpr|>" with "char" delimiter leaves

Grammar:

    number : /-?[0-9]+/
    symbol : /[a-zA-Z0-9_+\\-*\\/\\\\=<>!&%^]+/   (anything that is not a number)
    sexpr  : '(' <expr>* ')'
    qexpr  : '{' <expr>* '}'
    expr   : <number> | <symbol> | <sexpr> | <qexpr>
    lispy  : /^/ <expr>* /$/

`;` starts a comment that runs to the end of the line.
"""

from __future__ import annotations

import logging
import re
from typing import Iterator, NamedTuple, Optional

from lispy.errors import LispySyntaxError
from lispy.reader.ast import (
    AstNode,
    CHAR_TAG,
    NUMBER_TAG,
    QEXPR_TAG,
    REGEX_TAG,
    ROOT_TAG,
    SEXPR_TAG,
    SYMBOL_TAG,
)

logger = logging.getLogger(__name__)


TOKEN_RE = re.compile(
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<lbrace>\{)"  # {
    r"|(?P<rbrace>\})"  # }
    r"|(?P<atom>[A-Za-z0-9_+\-*/\\=<>!&%^]+)"  # numbers and symbols
)

NUMBER_RE = re.compile(r"-?[0-9]+")

CLOSERS = {"lparen": "rparen", "lbrace": "rbrace"}
DELIMITERS = {"lparen": "(", "rparen": ")", "lbrace": "{", "rbrace": "}"}


class Token(NamedTuple):
    kind: str
    text: str
    line: int
    column: int


def _position(source: str, pos: int) -> tuple[int, int]:
    line = source.count("\n", 0, pos) + 1
    column = pos - (source.rfind("\n", 0, pos) + 1) + 1
    return line, column


def lex(source: str, filename: str = "<stdin>") -> Iterator[Token]:
    """Token generator: yields Tokens, skipping whitespace and comments."""
    pos = 0
    n = len(source)
    while pos < n:
        if source[pos].isspace():
            pos += 1
            continue
        m = TOKEN_RE.match(source, pos)
        if not m:
            line, column = _position(source, pos)
            raise LispySyntaxError(f"unexpected character {source[pos]!r}", filename, line, column)
        start = pos
        pos = m.end()
        kind = m.lastgroup
        if kind == "comment":
            continue
        text = m.group(kind)
        if kind == "atom":
            kind = "number" if NUMBER_RE.fullmatch(text) else "symbol"
        line, column = _position(source, start)
        yield Token(kind, text, line, column)


class TokenStream:
    def __init__(self, token_iter: Iterator[Token], filename: str = "<stdin>"):
        self.tokens = iter(token_iter)
        self.buffer: list[Token] = []
        self.filename = filename
        self.last: Optional[Token] = None

    def peek(self) -> Optional[Token]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None
        return self.buffer[0]

    def advance(self) -> Optional[Token]:
        tok = self.buffer.pop(0) if self.buffer else next(self.tokens, None)
        if tok is not None:
            self.last = tok
        return tok

    def _error(self, message: str, tok: Optional[Token]) -> LispySyntaxError:
        """Syntax error at `tok`, or just past the last token when input ran out."""
        if tok is not None:
            line, column = tok.line, tok.column
        elif self.last is not None:
            line, column = self.last.line, self.last.column + len(self.last.text)
        else:
            line, column = 1, 1
        return LispySyntaxError(message, self.filename, line, column)

    def parse_expr(self) -> Optional[AstNode]:
        if self.peek() is None:
            return None

        # Open lists waiting for their closing delimiter, innermost last.
        stack: list[tuple[AstNode, str]] = []
        while True:
            tok = self.advance()
            if tok is None:
                closer = stack[-1][1]
                raise self._error(f"expected '{DELIMITERS[closer]}' at end of input", None)

            if tok.kind == "number":
                node = AstNode(NUMBER_TAG, tok.text, line=tok.line, column=tok.column)
            elif tok.kind == "symbol":
                node = AstNode(SYMBOL_TAG, tok.text, line=tok.line, column=tok.column)
            elif tok.kind in CLOSERS:
                # S-expression or Q-expression
                node = AstNode(
                    SEXPR_TAG if tok.kind == "lparen" else QEXPR_TAG, line=tok.line, column=tok.column
                )
                node.children.append(AstNode(CHAR_TAG, tok.text, line=tok.line, column=tok.column))
                stack.append((node, CLOSERS[tok.kind]))
                continue
            elif not stack:
                raise self._error(f"unexpected '{tok.text}'", tok)
            elif tok.kind != stack[-1][1]:
                raise self._error(
                    f"unexpected '{tok.text}', expected '{DELIMITERS[stack[-1][1]]}'", tok
                )
            else:
                node, _ = stack.pop()
                node.children.append(AstNode(CHAR_TAG, tok.text, line=tok.line, column=tok.column))

            if not stack:
                return node
            stack[-1][0].children.append(node)

    def parse_all(self) -> Iterator[AstNode]:
        while self.peek() is not None:
            yield self.parse_expr()


def parse(source: str, filename: str = "<stdin>") -> AstNode:
    """Parse a whole input into a root node whose children are its expressions."""
    stream = TokenStream(lex(source, filename), filename)
    root = AstNode(ROOT_TAG)
    root.children.append(AstNode(REGEX_TAG))
    root.children.extend(stream.parse_all())
    root.children.append(AstNode(REGEX_TAG))
    logger.debug("parsed %s: %d top-level expressions", filename, root.children_num - 2)
    return root
