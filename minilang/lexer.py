"""Lexical scanner for minilang.

The scanner makes one left-to-right pass over the source and dispatches on
the class of the current character: whitespace is skipped, a double quote
opens a string, a digit opens a number, a letter or underscore opens an
identifier or keyword, and anything else must be an operator or symbol.
"""

from __future__ import annotations

from typing import Iterable, List

from .errors import LexError
from .tokens import KEYWORDS, OPERATORS, SYMBOLS, Token, TokenKind

# longest operator/symbol lexeme tried first
MAX_LEXEME = 3


def tokenize(source: str) -> List[Token]:
    """Convert source code into a list of tokens ending with an EOF token."""
    tokens: List[Token] = []
    i = 0
    line = 1
    col = 1
    length = len(source)

    def advance(n: int = 1):
        nonlocal i, col, line
        for _ in range(n):
            if i < length and source[i] == '\n':
                line += 1
                col = 1
            else:
                col += 1
            i += 1

    while i < length:
        c = source[i]
        if c.isspace():
            advance()
            continue
        # String literal: raw contents, no escape processing
        if c == '"':
            start_line, start_col = line, col
            advance()
            start_i = i
            while i < length and source[i] != '"':
                advance()
            if i >= length:
                raise LexError(f"unterminated string literal at {start_line}:{start_col}")
            tokens.append(Token(TokenKind.STRING, source[start_i:i], start_line, start_col))
            advance()  # closing quote
            continue
        # Numbers: any run of digits and dots, validated by the parser
        if c.isdecimal():
            start_col = col
            start_i = i
            while i < length and (source[i].isdecimal() or source[i] == '.'):
                advance()
            tokens.append(Token(TokenKind.NUMBER, source[start_i:i], line, start_col))
            continue
        # Identifiers or keywords
        if c.isalpha() or c == '_':
            start_col = col
            start_i = i
            while i < length and (source[i].isalnum() or source[i] == '_'):
                advance()
            value = source[start_i:i]
            kind = TokenKind.KEYWORD if value in KEYWORDS else TokenKind.IDENTIFIER
            tokens.append(Token(kind, value, line, start_col))
            continue
        # Operators and symbols, longest match first
        for size in range(MAX_LEXEME, 0, -1):
            if i + size > length:
                continue
            text = source[i:i + size]
            if text in OPERATORS:
                tokens.append(Token(TokenKind.OPERATOR, text, line, col))
                advance(size)
                break
            if text in SYMBOLS:
                tokens.append(Token(TokenKind.SYMBOL, text, line, col))
                advance(size)
                break
        else:
            raise LexError(f"unexpected character {c!r} at {line}:{col}")
    tokens.append(Token(TokenKind.EOF, '', line, col))
    return tokens


def render_tokens(tokens: Iterable[Token]) -> str:
    """Re-serialize tokens as source text separated by single spaces.

    Tokenizing the result gives back an equal token sequence, though the
    original whitespace is not preserved.
    """
    return ' '.join(tok.lexeme for tok in tokens if tok.kind is not TokenKind.EOF)
