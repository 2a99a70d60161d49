"""Token model shared by the lexer and the parsers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class TokenKind(Enum):
    NUMBER = 'Number'
    IDENTIFIER = 'Identifier'
    KEYWORD = 'Keyword'
    OPERATOR = 'Operator'
    SYMBOL = 'Symbol'
    STRING = 'String'
    EOF = 'EndOfInput'


KEYWORDS = frozenset({'if', 'else', 'while', 'true', 'false', 'print'})

OPERATORS = frozenset({
    '+', '-', '*', '/', '%',
    '==', '!=', '<', '>', '<=', '>=',
    '&&', '||', '!',
})

SYMBOLS = frozenset({'=', ';', '(', ')', '{', '}'})


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    # positions are informational only; two tokens are equal when kind and text match
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)

    @property
    def lexeme(self) -> str:
        """Source form of the token (string contents re-quoted)."""
        if self.kind is TokenKind.STRING:
            return '"' + self.text + '"'
        return self.text

    def describe(self) -> str:
        if self.kind is TokenKind.EOF:
            return 'end of input'
        return f"{self.kind.value} {self.lexeme!r}"

    def __repr__(self) -> str:
        return f"{self.kind.name}({self.text!r})"
