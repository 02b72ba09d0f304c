"""Abstract Syntax Tree (AST) definitions for the Monkey language.

The parser builds these nodes and the interpreter walks them. Every node
keeps the token it started at, so `token_literal()` can report the text of
that token, and every node renders back to source text with `str()`. The
rendering fully parenthesizes operator expressions, which makes the
precedence the parser chose visible and keeps the output re-parseable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .token import Token


@dataclass
class Node:
    """Base class for all AST nodes."""
    token: Token

    def token_literal(self) -> str:
        return self.token.literal


class Statement(Node):
    pass


class Expression(Node):
    pass


def join_statements(statements: List[Statement]) -> str:
    parts = []
    for i, stmt in enumerate(statements):
        text = str(stmt)
        if i < len(statements) - 1 and not text.endswith(';'):
            text += ';'
        parts.append(text)
    return ' '.join(parts)


@dataclass
class Program:
    statements: List[Statement]

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ''

    def __str__(self) -> str:
        return join_statements(self.statements)


# Expressions

@dataclass
class Identifier(Expression):
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass
class IntegerLiteral(Expression):
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass
class StringLiteral(Expression):
    value: str

    def __str__(self) -> str:
        return f'"{self.value}"'


@dataclass
class BooleanLiteral(Expression):
    value: bool

    def __str__(self) -> str:
        return 'true' if self.value else 'false'


@dataclass
class ArrayLiteral(Expression):
    elements: List[Expression]

    def __str__(self) -> str:
        return '[' + ', '.join(str(el) for el in self.elements) + ']'


@dataclass
class PrefixExpression(Expression):
    operator: str
    operand: Expression

    def __str__(self) -> str:
        return f"({self.operator}{self.operand})"


@dataclass
class InfixExpression(Expression):
    operator: str
    left: Expression
    right: Expression

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass
class IfExpression(Expression):
    condition: Expression
    consequence: 'BlockStatement'
    alternative: Optional['BlockStatement'] = None

    def __str__(self) -> str:
        text = f"if ({self.condition}) {self.consequence}"
        if self.alternative is not None:
            text += f" else {self.alternative}"
        return text


@dataclass
class FunctionLiteral(Expression):
    parameters: List[Identifier]
    body: 'BlockStatement'

    def __str__(self) -> str:
        params = ', '.join(str(p) for p in self.parameters)
        return f"fn({params}) {self.body}"


@dataclass
class CallExpression(Expression):
    callee: Expression
    arguments: List[Expression]

    def __str__(self) -> str:
        args = ', '.join(str(a) for a in self.arguments)
        return f"{self.callee}({args})"


@dataclass
class IndexExpression(Expression):
    collection: Expression
    index: Expression

    def __str__(self) -> str:
        return f"({self.collection}[{self.index}])"


# Statements

@dataclass
class LetStatement(Statement):
    name: Identifier
    value: Expression

    def __str__(self) -> str:
        return f"let {self.name} = {self.value};"


@dataclass
class ReturnStatement(Statement):
    value: Optional[Expression] = None

    def __str__(self) -> str:
        if self.value is None:
            return 'return;'
        return f"return {self.value};"


@dataclass
class ExpressionStatement(Statement):
    expression: Expression

    def __str__(self) -> str:
        return str(self.expression)


@dataclass
class BlockStatement(Statement):
    statements: List[Statement]

    def __str__(self) -> str:
        if not self.statements:
            return '{ }'
        return '{ ' + join_statements(self.statements) + ' }'
