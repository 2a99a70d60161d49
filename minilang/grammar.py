"""Declarative grammar for minilang.

This module describes the same language as ``minilang.parser`` as a Lark
grammar. The parse tree produced by Lark is transformed into the very same
AST classes, which makes it possible to check the hand-written
recursive-descent parser against an independent description of the syntax
and to select either parser from the command line.

Lexing failures are reported as ``LexError`` and grammar failures as
``ParseError`` so that callers can treat both parsers identically.
"""

from __future__ import annotations

from typing import List

from lark import Lark, Transformer
from lark.exceptions import UnexpectedCharacters, UnexpectedInput, UnexpectedToken, VisitError

from .ast import (
    Stmt, Literal, Variable, UnaryOp, BinaryOp,
    ExprStmt, Assign, PrintStmt, IfStmt, WhileStmt, Block,
)
from .errors import LexError, MiniError, ParseError
from .tokens import OPERATORS, Token, TokenKind
from .types import FALSE, TRUE, String
from .parser import number_literal


MINILANG_GRAMMAR = r"""
    ?start: program
    program: statement*

    // Statements
    ?statement: if_stmt
              | while_stmt
              | print_stmt
              | assign_stmt
              | block_stmt
              | expr_stmt

    if_stmt: "if" "(" expression ")" statement ["else" statement]
    while_stmt: "while" "(" expression ")" statement
    print_stmt: "print" expression ";"
    assign_stmt: NAME "=" expression ";"
    block_stmt: block [";"]
    block: "{" statement* "}"
    expr_stmt: expression ";"

    // Expressions with precedence
    ?expression: equality
    ?equality: comparison ((EQ | NE) comparison)*
    ?comparison: term ((LT | LE | GT | GE) term)*
    ?term: factor ((PLUS | MINUS) factor)*
    ?factor: unary ((STAR | SLASH | PERCENT) unary)*
    ?unary: (BANG | MINUS) unary
          | primary
    ?primary: number
            | string
            | true_lit
            | false_lit
            | variable
            | "(" expression ")"
    number: NUMBER
    string: STRING
    true_lit: "true"
    false_lit: "false"
    variable: NAME

    // Tokens
    NAME: /[^\W\d]\w*/
    NUMBER: /\d[\d.]*/
    STRING: /"[^"]*"/
    EQ: "=="
    NE: "!="
    LE: "<="
    GE: ">="
    LT: "<"
    GT: ">"
    PLUS: "+"
    MINUS: "-"
    STAR: "*"
    SLASH: "/"
    PERCENT: "%"
    BANG: "!"

    %ignore /\s+/
"""


def check_name(token):
    # \w also admits non-decimal digits such as '²', which cannot start a name
    if not (token[0].isalpha() or token[0] == '_'):
        raise LexError(f"unexpected character {token[0]!r} at {token.line}:{token.column}")
    return token


MINILANG_PARSER = Lark(
    MINILANG_GRAMMAR,
    parser='lalr',
    lexer='basic',
    propagate_positions=True,
    maybe_placeholders=False,
    lexer_callbacks={'NAME': check_name},
)


class ASTTransformer(Transformer):
    """Transforms the raw parse tree into an AST."""

    def program(self, items):
        return list(items)

    def if_stmt(self, items):
        condition = items[0]
        then_branch = items[1]
        else_branch = items[2] if len(items) > 2 else None
        return IfStmt(condition, then_branch, else_branch)

    def while_stmt(self, items):
        return WhileStmt(items[0], items[1])

    def print_stmt(self, items):
        return PrintStmt(items[0])

    def assign_stmt(self, items):
        name = str(items[0])
        return Assign(name, items[1])

    def block_stmt(self, items):
        # the optional trailing ';' is an anonymous token and already filtered out
        return items[0]

    def block(self, items):
        return Block(list(items))

    def expr_stmt(self, items):
        return ExprStmt(items[0])

    # Expressions
    def binary_chain(self, items):
        # items pattern: expr (op expr)*, folded left to right
        left = items[0]
        i = 1
        while i < len(items):
            op = items[i]
            right = items[i + 1]
            left = BinaryOp(str(op), left, right)
            i += 2
        return left

    equality = binary_chain
    comparison = binary_chain
    term = binary_chain
    factor = binary_chain

    def unary(self, items):
        op = str(items[0])
        return UnaryOp(op, items[1])

    def number(self, items):
        token = items[0]
        return Literal(number_literal(Token(TokenKind.NUMBER, str(token), token.line, token.column)))

    def string(self, items):
        raw = str(items[0])
        return Literal(String(raw[1:-1]))

    def true_lit(self, items):
        return Literal(TRUE)

    def false_lit(self, items):
        return Literal(FALSE)

    def variable(self, items):
        return Variable(str(items[0]))


def parse_with_lark(source: str) -> List[Stmt]:
    """Parse minilang source with the Lark grammar into a list of statements."""
    try:
        tree = MINILANG_PARSER.parse(source)
    except UnexpectedCharacters as e:
        if e.char == '"':
            raise LexError(f"unterminated string literal at {e.line}:{e.column}")
        # '&&' and '||' are operators of the language that no grammar rule uses
        lexeme = source[e.pos_in_stream:e.pos_in_stream + 2]
        if lexeme in OPERATORS:
            raise ParseError(f"unexpected token {lexeme!r} at {e.line}:{e.column}")
        raise LexError(f"unexpected character {e.char!r} at {e.line}:{e.column}")
    except UnexpectedToken as e:
        if e.token.type == '$END':
            raise ParseError('unexpected end of input')
        raise ParseError(f"unexpected token {str(e.token)!r} at {e.line}:{e.column}")
    except UnexpectedInput as e:
        raise ParseError(f"unexpected input at {e.line}:{e.column}")
    try:
        return ASTTransformer().transform(tree)
    except RecursionError:
        # the transformer walks the tree recursively
        raise ParseError('program nested too deeply')
    except VisitError as e:
        # errors raised inside transformer callbacks arrive wrapped
        if isinstance(e.orig_exc, MiniError):
            raise e.orig_exc
        if isinstance(e.orig_exc, RecursionError):
            raise ParseError('program nested too deeply')
        raise
