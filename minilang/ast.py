"""Abstract Syntax Tree (AST) definitions for minilang.

Two closed families of nodes: expressions, which produce a value, and
statements, which produce effects. Each node owns its children, so a parsed
program is always a tree.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .types import Value


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass
class Expr(Node):
    pass


@dataclass
class Stmt(Node):
    pass


@dataclass
class Literal(Expr):
    value: Value


@dataclass
class Variable(Expr):
    name: str


@dataclass
class UnaryOp(Expr):
    op: str
    operand: Expr


@dataclass
class BinaryOp(Expr):
    op: str
    left: Expr
    right: Expr


@dataclass
class ExprStmt(Stmt):
    expr: Expr


@dataclass
class Assign(Stmt):
    name: str
    value: Expr


@dataclass
class PrintStmt(Stmt):
    expr: Expr


@dataclass
class IfStmt(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt]


@dataclass
class WhileStmt(Stmt):
    condition: Expr
    body: Stmt


@dataclass
class Block(Stmt):
    statements: List[Stmt]
