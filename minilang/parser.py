"""Recursive-descent parser for minilang.

Statements are chosen by looking at the leading token. Expressions use one
method per precedence level, lowest first::

    equality       == !=
    comparison     < <= > >=
    term           + -
    factor         * / %
    unary          ! -   (prefix, right associative)
    primary        number, string, true, false, identifier, ( expression )

Every binary level parses an operand at the next level up and then folds
operators of its own level from left to right, so precedence and left
associativity follow from the call structure. The lexer also produces
``&&`` and ``||``, but no level accepts them, so they end an expression
and the fragment fails at the following ``;`` check.

Parentheses, prefix operators, blocks, ``if`` and ``while`` together may
nest at most ``MAX_NESTING`` levels deep; deeper input is rejected with a
``ParseError``.

The parser never recovers: the first mismatch raises ``ParseError`` and the
whole fragment is rejected.
"""

from __future__ import annotations

from typing import List

from .ast import (
    Expr, Stmt, Literal, Variable, UnaryOp, BinaryOp,
    ExprStmt, Assign, PrintStmt, IfStmt, WhileStmt, Block,
)
from .errors import ParseError
from .lexer import tokenize
from .tokens import Token, TokenKind
from .types import Number, String, boolean

EQUALITY_OPS = ('==', '!=')
COMPARISON_OPS = ('<', '<=', '>', '>=')
TERM_OPS = ('+', '-')
FACTOR_OPS = ('*', '/', '%')
UNARY_OPS = ('!', '-')
MAX_NESTING = 48


class Parser:
    def __init__(self, tokens: List[Token]):
        if not tokens or tokens[-1].kind is not TokenKind.EOF:
            tokens = list(tokens) + [Token(TokenKind.EOF, '')]
        self.tokens = tokens
        self.pos = 0
        self.nesting = 0

    def peek(self) -> Token:
        return self.tokens[self.pos]

    def peek_next(self) -> Token:
        if self.pos + 1 < len(self.tokens):
            return self.tokens[self.pos + 1]
        return self.tokens[-1]

    def at_end(self) -> bool:
        return self.peek().kind is TokenKind.EOF

    def advance(self) -> Token:
        token = self.peek()
        if not self.at_end():
            self.pos += 1
        return token

    def check(self, kind: TokenKind, *texts: str) -> bool:
        token = self.peek()
        if token.kind is not kind:
            return False
        return not texts or token.text in texts

    def match(self, kind: TokenKind, *texts: str) -> bool:
        if self.check(kind, *texts):
            self.advance()
            return True
        return False

    def consume(self, kind: TokenKind, text: str) -> Token:
        if self.check(kind, text):
            return self.advance()
        token = self.peek()
        raise ParseError(f"expected '{text}' at {token.line}:{token.column}, got {token.describe()}", token)

    def parse(self) -> List[Stmt]:
        statements: List[Stmt] = []
        while not self.at_end():
            statements.append(self.parse_statement())
        return statements

    def parse_statement(self) -> Stmt:
        token = self.peek()
        if self.check(TokenKind.KEYWORD, 'if', 'while') or self.check(TokenKind.SYMBOL, '{'):
            self.descend(token)
            stmt = self.parse_compound_stmt()
            self.nesting -= 1
            return stmt
        if self.match(TokenKind.KEYWORD, 'print'):
            return self.parse_print_stmt()
        if self.check(TokenKind.IDENTIFIER):
            following = self.peek_next()
            if following.kind is TokenKind.SYMBOL and following.text == '=':
                return self.parse_assign()
        expr = self.parse_expression()
        self.consume(TokenKind.SYMBOL, ';')
        return ExprStmt(expr)

    def parse_compound_stmt(self) -> Stmt:
        if self.match(TokenKind.KEYWORD, 'if'):
            return self.parse_if_stmt()
        if self.match(TokenKind.KEYWORD, 'while'):
            return self.parse_while_stmt()
        self.consume(TokenKind.SYMBOL, '{')
        block = self.parse_block()
        # a trailing ';' after a block is allowed and ignored
        self.match(TokenKind.SYMBOL, ';')
        return block

    def parse_assign(self) -> Assign:
        name_token = self.advance()
        self.consume(TokenKind.SYMBOL, '=')
        value = self.parse_expression()
        self.consume(TokenKind.SYMBOL, ';')
        return Assign(name_token.text, value)

    def parse_print_stmt(self) -> PrintStmt:
        expr = self.parse_expression()
        self.consume(TokenKind.SYMBOL, ';')
        return PrintStmt(expr)

    def parse_if_stmt(self) -> IfStmt:
        self.consume(TokenKind.SYMBOL, '(')
        condition = self.parse_expression()
        self.consume(TokenKind.SYMBOL, ')')
        then_branch = self.parse_statement()
        else_branch = None
        if self.match(TokenKind.KEYWORD, 'else'):
            else_branch = self.parse_statement()
        return IfStmt(condition, then_branch, else_branch)

    def parse_while_stmt(self) -> WhileStmt:
        self.consume(TokenKind.SYMBOL, '(')
        condition = self.parse_expression()
        self.consume(TokenKind.SYMBOL, ')')
        body = self.parse_statement()
        return WhileStmt(condition, body)

    def parse_block(self) -> Block:
        # the opening '{' has already been consumed
        statements: List[Stmt] = []
        while not self.check(TokenKind.SYMBOL, '}') and not self.at_end():
            statements.append(self.parse_statement())
        self.consume(TokenKind.SYMBOL, '}')
        return Block(statements)

    # Expression parsing
    def parse_expression(self) -> Expr:
        return self.parse_equality()

    def parse_binary(self, operand, ops) -> Expr:
        node = operand()
        while self.check(TokenKind.OPERATOR, *ops):
            op_token = self.advance()
            right = operand()
            node = BinaryOp(op_token.text, node, right)
        return node

    def parse_equality(self) -> Expr:
        return self.parse_binary(self.parse_comparison, EQUALITY_OPS)

    def parse_comparison(self) -> Expr:
        return self.parse_binary(self.parse_term, COMPARISON_OPS)

    def parse_term(self) -> Expr:
        return self.parse_binary(self.parse_factor, TERM_OPS)

    def parse_factor(self) -> Expr:
        return self.parse_binary(self.parse_unary, FACTOR_OPS)

    def parse_unary(self) -> Expr:
        if self.check(TokenKind.OPERATOR, *UNARY_OPS):
            op_token = self.advance()
            self.descend(op_token)
            operand = self.parse_unary()
            self.nesting -= 1
            return UnaryOp(op_token.text, operand)
        return self.parse_primary()

    def descend(self, token: Token):
        self.nesting += 1
        if self.nesting > MAX_NESTING:
            raise ParseError(f"nested too deeply at {token.line}:{token.column}", token)

    def parse_primary(self) -> Expr:
        token = self.peek()
        if token.kind is TokenKind.NUMBER:
            self.advance()
            return Literal(number_literal(token))
        if token.kind is TokenKind.STRING:
            self.advance()
            return Literal(String(token.text))
        if self.match(TokenKind.KEYWORD, 'true', 'false'):
            return Literal(boolean(token.text == 'true'))
        if token.kind is TokenKind.IDENTIFIER:
            self.advance()
            return Variable(token.text)
        if self.match(TokenKind.SYMBOL, '('):
            self.descend(token)
            expr = self.parse_expression()
            self.consume(TokenKind.SYMBOL, ')')
            self.nesting -= 1
            return expr
        raise ParseError(f"expected expression at {token.line}:{token.column}, got {token.describe()}", token)


def number_literal(token: Token) -> Number:
    """Convert a Number token to a value.

    The lexer accepts any run of digits and dots, so text such as ``1.2.3``
    only fails here.
    """
    try:
        return Number(float(token.text))
    except ValueError:
        raise ParseError(f"malformed number literal {token.text!r} at {token.line}:{token.column}", token)


def parse_program(source: str) -> List[Stmt]:
    """Tokenize and parse a fragment into its list of top-level statements."""
    tokens = tokenize(source)
    parser = Parser(tokens)
    return parser.parse()
