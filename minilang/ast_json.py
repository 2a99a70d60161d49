"""JSON serialization/deserialization for minilang ASTs.

This module converts between AST dataclasses and plain Python dict/list
structures suitable for JSON encoding. A parsed program (a list of
statements) is wrapped in a ``Program`` object so that saved files are
self-describing. Conversion is lossless: loading a dumped tree gives back an
equal tree.
"""

from __future__ import annotations

from typing import Any, Dict, List

from .ast import (
    Stmt,
    Literal,
    Variable,
    UnaryOp,
    BinaryOp,
    ExprStmt,
    Assign,
    PrintStmt,
    IfStmt,
    WhileStmt,
    Block,
)
from .types import NULL, Boolean, Null, Number, String, Value


def value_to_obj(value: Value) -> Dict[str, Any]:
    if isinstance(value, Number):
        return {"kind": "Number", "value": value.value}
    if isinstance(value, Boolean):
        return {"kind": "Boolean", "value": value.value}
    if isinstance(value, String):
        return {"kind": "String", "value": value.value}
    if isinstance(value, Null):
        return {"kind": "Null"}
    raise TypeError(f"Unsupported value for serialization: {value!r}")


def value_from_obj(o: Dict[str, Any]) -> Value:
    kind = o.get("kind")
    if kind == "Number":
        return Number(float(o["value"]))
    if kind == "Boolean":
        return Boolean(bool(o["value"]))
    if kind == "String":
        return String(o["value"])
    if kind == "Null":
        return NULL
    raise ValueError(f"Unknown value kind: {kind}")


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None

    if isinstance(node, Block):
        return {"type": "Block", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, IfStmt):
        return {
            "type": "IfStmt",
            "condition": ast_to_obj(node.condition),
            "then_branch": ast_to_obj(node.then_branch),
            "else_branch": ast_to_obj(node.else_branch),
        }
    if isinstance(node, WhileStmt):
        return {"type": "WhileStmt", "condition": ast_to_obj(node.condition), "body": ast_to_obj(node.body)}
    if isinstance(node, PrintStmt):
        return {"type": "PrintStmt", "expr": ast_to_obj(node.expr)}
    if isinstance(node, ExprStmt):
        return {"type": "ExprStmt", "expr": ast_to_obj(node.expr)}
    if isinstance(node, Assign):
        return {"type": "Assign", "name": node.name, "value": ast_to_obj(node.value)}
    if isinstance(node, BinaryOp):
        return {"type": "BinaryOp", "op": node.op, "left": ast_to_obj(node.left), "right": ast_to_obj(node.right)}
    if isinstance(node, UnaryOp):
        return {"type": "UnaryOp", "op": node.op, "operand": ast_to_obj(node.operand)}
    if isinstance(node, Literal):
        return {"type": "Literal", "value": value_to_obj(node.value)}
    if isinstance(node, Variable):
        return {"type": "Variable", "name": node.name}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Block":
        return Block(statements=[ast_from_obj(s) for s in obj["statements"]])
    if t == "IfStmt":
        return IfStmt(
            condition=ast_from_obj(obj["condition"]),
            then_branch=ast_from_obj(obj["then_branch"]),
            else_branch=ast_from_obj(obj.get("else_branch")),
        )
    if t == "WhileStmt":
        return WhileStmt(condition=ast_from_obj(obj["condition"]), body=ast_from_obj(obj["body"]))
    if t == "PrintStmt":
        return PrintStmt(expr=ast_from_obj(obj["expr"]))
    if t == "ExprStmt":
        return ExprStmt(expr=ast_from_obj(obj["expr"]))
    if t == "Assign":
        return Assign(name=obj["name"], value=ast_from_obj(obj["value"]))
    if t == "BinaryOp":
        return BinaryOp(op=obj["op"], left=ast_from_obj(obj["left"]), right=ast_from_obj(obj["right"]))
    if t == "UnaryOp":
        return UnaryOp(op=obj["op"], operand=ast_from_obj(obj["operand"]))
    if t == "Literal":
        return Literal(value=value_from_obj(obj["value"]))
    if t == "Variable":
        return Variable(name=obj["name"])

    raise ValueError(f"Unknown AST node type: {t}")


def program_to_obj(statements: List[Stmt]) -> Dict[str, Any]:
    return {"type": "Program", "body": [ast_to_obj(s) for s in statements]}


def program_from_obj(obj: Any) -> List[Stmt]:
    if not isinstance(obj, dict) or obj.get("type") != "Program":
        raise ValueError("expected a Program object")
    return [ast_from_obj(s) for s in obj["body"]]
