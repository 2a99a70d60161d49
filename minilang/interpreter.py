"""Tree-walking evaluator for minilang.

The interpreter executes statements and evaluates expressions directly on
the AST against an ``Environment`` object passed in by the caller, so that a
session can keep its variables across fragments and tests can run side by
side without sharing state.

Runtime type rules are checked here: conditions of ``if`` must be Boolean,
unary ``-`` needs a Number and ``!`` a Boolean, and each binary operator is
only defined for the operand types listed in ``apply_binary_op``.
"""

from __future__ import annotations

import math
from typing import IO, List, Optional

from .ast import (
    Expr, Stmt, Literal, Variable, UnaryOp, BinaryOp,
    ExprStmt, Assign, PrintStmt, IfStmt, WhileStmt, Block,
)
from .environment import Environment
from .errors import MiniArithmeticError, MiniTypeError
from .parser import parse_program
from .types import (
    Value, Number, Boolean, String,
    boolean, concat_text, to_string, type_name,
)


class Interpreter:
    """Core interpreter that executes minilang ASTs."""
    def __init__(self, env: Optional[Environment] = None, out: Optional[IO[str]] = None,
                 debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.env = env if env is not None else Environment()
        # None means "whatever sys.stdout is when print runs"
        self.out = out
        self.debug_level = debug_level
        self.debug_file = debug_file
        self.debug_fp: Optional[IO[str]] = None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp is None:
                self.debug_fp = open(self.debug_file, 'w', encoding='utf-8')
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    def close(self):
        if self.debug_fp is not None:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def run(self, statements: List[Stmt]):
        if self.debug_level >= 1:
            self.debug(f"run fragment: {len(statements)} statement(s)")
        for stmt in statements:
            self.execute(stmt)

    def execute(self, node: Stmt):
        if isinstance(node, ExprStmt):
            self.evaluate(node.expr)
            return
        if isinstance(node, Assign):
            value = self.evaluate(node.value)
            self.env.set(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"assign {node.name}: {type_name(value)} = {to_string(value)}")
            return
        if isinstance(node, PrintStmt):
            value = self.evaluate(node.expr)
            print(to_string(value), file=self.out)
            return
        if isinstance(node, IfStmt):
            cond = self.evaluate(node.condition)
            if not isinstance(cond, Boolean):
                raise MiniTypeError(f'condition must evaluate to a Boolean, got {type_name(cond)}')
            if self.debug_level >= 3:
                self.debug(f"if condition -> {to_string(cond)}")
            if cond.value:
                self.execute(node.then_branch)
            elif node.else_branch is not None:
                self.execute(node.else_branch)
            return
        if isinstance(node, WhileStmt):
            # only an exact Boolean true keeps the loop going; any other value ends it
            while True:
                cond = self.evaluate(node.condition)
                if self.debug_level >= 3:
                    self.debug(f"while condition -> {to_string(cond)}")
                if not (isinstance(cond, Boolean) and cond.value):
                    break
                self.execute(node.body)
            return
        if isinstance(node, Block):
            with self.env.scope():
                if self.debug_level >= 2:
                    self.debug(f"enter scope (depth {self.env.depth})")
                for stmt in node.statements:
                    self.execute(stmt)
            if self.debug_level >= 2:
                self.debug(f"exit scope (depth {self.env.depth})")
            return
        raise NotImplementedError(f"execute: unexpected node type {type(node).__name__}")

    def evaluate(self, node: Expr) -> Value:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Variable):
            return self.env.get(node.name)
        if isinstance(node, UnaryOp):
            operand = self.evaluate(node.operand)
            if node.op == '-' and isinstance(operand, Number):
                return Number(-operand.value)
            if node.op == '!' and isinstance(operand, Boolean):
                return boolean(not operand.value)
            raise MiniTypeError(f'invalid operand for unary {node.op}: {to_string(operand)} ({type_name(operand)})')
        if isinstance(node, BinaryOp):
            # no short-circuit: both sides are always evaluated
            left = self.evaluate(node.left)
            right = self.evaluate(node.right)
            return self.apply_binary_op(node.op, left, right)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node).__name__}")

    def apply_binary_op(self, op: str, a: Value, b: Value) -> Value:
        if isinstance(a, Number) and isinstance(b, Number):
            x, y = a.value, b.value
            if op == '+': return Number(x + y)
            if op == '-': return Number(x - y)
            if op == '*': return Number(x * y)
            if op == '/':
                if y == 0.0:
                    raise MiniArithmeticError('division by zero')
                return Number(x / y)
            if op == '%':
                if y == 0.0:
                    raise MiniArithmeticError('modulo by zero')
                return Number(remainder(x, y))
            if op == '==': return boolean(x == y)
            if op == '!=': return boolean(x != y)
            if op == '<': return boolean(x < y)
            if op == '>': return boolean(x > y)
            if op == '<=': return boolean(x <= y)
            if op == '>=': return boolean(x >= y)
        elif isinstance(a, Boolean) and isinstance(b, Boolean):
            p, q = a.value, b.value
            if op == '&&': return boolean(p and q)
            if op == '||': return boolean(p or q)
            if op == '==': return boolean(p == q)
            if op == '!=': return boolean(p != q)
        elif isinstance(a, String) or isinstance(b, String):
            if op == '+':
                return String(concat_text(a) + concat_text(b))
        raise MiniTypeError(
            f'type mismatch in binary expression: '
            f'{to_string(a)} ({type_name(a)}) {op} {to_string(b)} ({type_name(b)})'
        )


def remainder(x: float, y: float) -> float:
    """Floating-point remainder carrying the sign of the dividend."""
    if math.isinf(x) or math.isnan(x) or math.isnan(y):
        return math.nan
    return math.fmod(x, y)


def execute(statements: List[Stmt], env: Environment, out: Optional[IO[str]] = None):
    """Run already-parsed statements against a caller-owned environment."""
    Interpreter(env, out=out).run(statements)


def run_program(source: str, env: Optional[Environment] = None,
                out: Optional[IO[str]] = None, debug_level: int = 0) -> Environment:
    """Convenience function to parse and run source, returning the environment used."""
    statements = parse_program(source)
    interpreter = Interpreter(env, out=out, debug_level=debug_level)
    try:
        interpreter.run(statements)
    finally:
        interpreter.close()
    return interpreter.env
