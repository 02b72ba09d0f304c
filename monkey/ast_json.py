"""JSON serialization/deserialization for the Monkey AST.

This module converts between AST dataclasses and plain Python dict/list
structures suitable for JSON encoding. Each node becomes a dict tagged
with its class name under `__node__`; tokens become dicts with their kind
name, literal and position. The conversion round-trips: for any parsed
program `p`, `ast_from_obj(ast_to_obj(p)) == p`.
"""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from typing import Any, Dict

from .ast import (
    Program,
    LetStatement,
    ReturnStatement,
    ExpressionStatement,
    BlockStatement,
    Identifier,
    IntegerLiteral,
    StringLiteral,
    BooleanLiteral,
    ArrayLiteral,
    PrefixExpression,
    InfixExpression,
    IfExpression,
    FunctionLiteral,
    CallExpression,
    IndexExpression,
)
from .token import Token, TokenKind


NODE_TYPES: Dict[str, type] = {
    cls.__name__: cls for cls in (
        Program,
        LetStatement,
        ReturnStatement,
        ExpressionStatement,
        BlockStatement,
        Identifier,
        IntegerLiteral,
        StringLiteral,
        BooleanLiteral,
        ArrayLiteral,
        PrefixExpression,
        InfixExpression,
        IfExpression,
        FunctionLiteral,
        CallExpression,
        IndexExpression,
    )
}


def token_to_obj(tok: Token) -> Dict[str, Any]:
    return {"kind": tok.kind.name, "literal": tok.literal, "line": tok.line, "column": tok.column}


def token_from_obj(o: Dict[str, Any]) -> Token:
    return Token(TokenKind[o["kind"]], o["literal"], o.get("line", 0), o.get("column", 0))


def ast_to_obj(node: Any) -> Any:
    # Primitives
    if node is None or isinstance(node, (int, str, bool)):
        return node
    if isinstance(node, list):
        return [ast_to_obj(x) for x in node]
    if isinstance(node, Token):
        return token_to_obj(node)
    if is_dataclass(node) and type(node).__name__ in NODE_TYPES:
        obj: Dict[str, Any] = {"__node__": type(node).__name__}
        for f in fields(node):
            obj[f.name] = ast_to_obj(getattr(node, f.name))
        return obj
    raise TypeError(f"Unsupported AST node for serialization: {type(node).__name__}")


def ast_from_obj(o: Any) -> Any:
    if o is None or isinstance(o, (int, str, bool)):
        return o
    if isinstance(o, list):
        return [ast_from_obj(x) for x in o]
    if isinstance(o, dict):
        if "__node__" in o:
            name = o["__node__"]
            cls = NODE_TYPES.get(name)
            if cls is None:
                raise ValueError(f"Unknown AST node type in JSON: {name}")
            kwargs = {}
            for f in fields(cls):
                if f.name == "token":
                    kwargs[f.name] = token_from_obj(o[f.name])
                else:
                    kwargs[f.name] = ast_from_obj(o.get(f.name))
            return cls(**kwargs)
        if "kind" in o and "literal" in o:
            return token_from_obj(o)
    raise ValueError(f"Invalid AST JSON object: {o!r}")
