"""Tree-walking interpreter for the Monkey language.

`Interpreter.evaluate(node, env)` dispatches on the node type and returns
a runtime value. Runtime faults (unknown names, type mismatches, wrong
arity, division by zero, ...) are `Error` values. As soon as a
sub-evaluation yields one, the enclosing construct returns that same
value without evaluating anything further. `return` works the same way
through `ReturnValue`, which a function call unwraps.

Only function calls open a new scope. Blocks, including the branches of
an `if`, evaluate in the environment of the enclosing construct, so a
`let` inside them stays visible after the block ends.
"""

from __future__ import annotations

import sys
from typing import Dict, List, Optional, TextIO, Union

from .ast import (
    Node, Program, LetStatement, ReturnStatement, ExpressionStatement,
    BlockStatement, Identifier, IntegerLiteral, StringLiteral,
    BooleanLiteral, ArrayLiteral, PrefixExpression, InfixExpression,
    IfExpression, FunctionLiteral, CallExpression, IndexExpression,
    Expression,
)
from .environment import Environment
from .parser import parse_program
from .std import builtin_registry
from .types import (
    Value, Integer, Boolean, Null, String, Array, Function, Builtin,
    ReturnValue, Error, TRUE, FALSE, NULL, native_bool, is_signal,
    is_truthy, wrap_int64, trunc_div,
)

# Each Monkey call nests about ten Python frames.
RECURSION_LIMIT = 20000

COMPARISON_OPERATORS = ('<', '>', '==', '!=')


class Interpreter:
    """Evaluates Monkey ASTs against a persistent global environment."""
    def __init__(self, debug_level: int = 0, debug_file: Optional[str] = None):
        self.global_env = Environment()
        self.builtins: Dict[str, Builtin] = builtin_registry()
        self.debug_level = debug_level
        self.debug_fp: Optional[TextIO] = None
        if debug_level > 0 and debug_file is not None:
            self.debug_fp = open(debug_file, 'w', encoding='utf-8')

    def debug(self, level: int, msg: str):
        if self.debug_level < level:
            return
        if self.debug_fp:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()
        else:
            print(msg, file=sys.stderr)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def __enter__(self) -> 'Interpreter':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None) -> Value:
        if env is None:
            env = self.global_env
        self.debug(1, f"run program with {len(program.statements)} statement(s)")
        if sys.getrecursionlimit() < RECURSION_LIMIT:
            sys.setrecursionlimit(RECURSION_LIMIT)
        try:
            result = self.eval_program(program, env)
        except RecursionError:
            result = Error("maximum recursion depth exceeded")
        self.debug(1, f"result {result.TYPE}: {result.inspect()}")
        return result

    def eval_program(self, program: Program, env: Environment) -> Value:
        result: Value = NULL
        for stmt in program.statements:
            result = self.evaluate(stmt, env)
            if isinstance(result, ReturnValue):
                return result.value
            if isinstance(result, Error):
                return result
        return result

    def eval_block(self, block: BlockStatement, env: Environment) -> Value:
        result: Value = NULL
        for stmt in block.statements:
            result = self.evaluate(stmt, env)
            # leave the wrapper in place so enclosing blocks stop too
            if is_signal(result):
                return result
        return result

    def evaluate(self, node: Union[Node, Program], env: Environment) -> Value:
        # Statements
        if isinstance(node, Program):
            return self.eval_program(node, env)
        if isinstance(node, ExpressionStatement):
            return self.evaluate(node.expression, env)
        if isinstance(node, BlockStatement):
            return self.eval_block(node, env)
        if isinstance(node, LetStatement):
            value = self.evaluate(node.value, env)
            if is_signal(value):
                return value
            env.set(node.name.name, value)
            self.debug(2, f"let {node.name.name} = {value.inspect()}")
            return NULL
        if isinstance(node, ReturnStatement):
            if node.value is None:
                return ReturnValue(NULL)
            value = self.evaluate(node.value, env)
            if is_signal(value):
                return value
            return ReturnValue(value)

        # Literals
        if isinstance(node, IntegerLiteral):
            return Integer(node.value)
        if isinstance(node, StringLiteral):
            return String(node.value)
        if isinstance(node, BooleanLiteral):
            return native_bool(node.value)
        if isinstance(node, ArrayLiteral):
            elements = self.eval_expressions(node.elements, env)
            if is_signal(elements):
                return elements
            return Array(elements)
        if isinstance(node, FunctionLiteral):
            # captures env by reference, later rebinding is visible to the closure
            return Function(node.parameters, node.body, env)

        # Expressions
        if isinstance(node, Identifier):
            return self.eval_identifier(node, env)
        if isinstance(node, PrefixExpression):
            operand = self.evaluate(node.operand, env)
            if is_signal(operand):
                return operand
            return self.eval_prefix_expression(node.operator, operand)
        if isinstance(node, InfixExpression):
            left = self.evaluate(node.left, env)
            if is_signal(left):
                return left
            right = self.evaluate(node.right, env)
            if is_signal(right):
                return right
            return self.eval_infix_expression(node.operator, left, right)
        if isinstance(node, IfExpression):
            condition = self.evaluate(node.condition, env)
            if is_signal(condition):
                return condition
            self.debug(3, f"if condition {condition.inspect()} -> {is_truthy(condition)}")
            if is_truthy(condition):
                return self.evaluate(node.consequence, env)
            if node.alternative is not None:
                return self.evaluate(node.alternative, env)
            return NULL
        if isinstance(node, CallExpression):
            callee = self.evaluate(node.callee, env)
            if is_signal(callee):
                return callee
            args = self.eval_expressions(node.arguments, env)
            if is_signal(args):
                return args
            return self.apply_function(callee, args)
        if isinstance(node, IndexExpression):
            collection = self.evaluate(node.collection, env)
            if is_signal(collection):
                return collection
            index = self.evaluate(node.index, env)
            if is_signal(index):
                return index
            return self.eval_index_expression(collection, index)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def eval_expressions(self, nodes: List[Expression], env: Environment) -> Union[List[Value], Value]:
        """Evaluate left to right, stopping at the first error or return."""
        values: List[Value] = []
        for node in nodes:
            value = self.evaluate(node, env)
            if is_signal(value):
                return value
            values.append(value)
        return values

    def eval_identifier(self, node: Identifier, env: Environment) -> Value:
        value = env.get(node.name)
        if value is not None:
            return value
        builtin = self.builtins.get(node.name)
        if builtin is not None:
            return builtin
        return Error(f"identifier not found: {node.name}")

    def eval_prefix_expression(self, op: str, operand: Value) -> Value:
        if op == '!':
            return FALSE if is_truthy(operand) else TRUE
        if op == '-':
            if not isinstance(operand, Integer):
                return Error(f"unknown operator: -{operand.TYPE}")
            return Integer(wrap_int64(-operand.value))
        return Error(f"unknown operator: {op}{operand.TYPE}")

    def eval_infix_expression(self, op: str, left: Value, right: Value) -> Value:
        if isinstance(left, Integer) and isinstance(right, Integer):
            return self.eval_integer_infix_expression(op, left.value, right.value)
        if isinstance(left, String) and isinstance(right, String) and op == '+':
            return String(left.value + right.value)
        if op in ('==', '!=') and isinstance(left, (Boolean, Null)) and isinstance(right, (Boolean, Null)):
            # singletons, so identity is equality
            same = left is right
            return native_bool(same if op == '==' else not same)
        if left.TYPE != right.TYPE or op in COMPARISON_OPERATORS:
            return Error(f"type mismatch: {left.TYPE} {op} {right.TYPE}")
        return Error(f"unknown operator: {left.TYPE} {op} {right.TYPE}")

    def eval_integer_infix_expression(self, op: str, a: int, b: int) -> Value:
        if op == '+':
            return Integer(wrap_int64(a + b))
        if op == '-':
            return Integer(wrap_int64(a - b))
        if op == '*':
            return Integer(wrap_int64(a * b))
        if op == '/':
            if b == 0:
                return Error('division by zero')
            return Integer(trunc_div(a, b))
        if op == '<':
            return native_bool(a < b)
        if op == '>':
            return native_bool(a > b)
        if op == '==':
            return native_bool(a == b)
        if op == '!=':
            return native_bool(a != b)
        return Error(f"unknown operator: INTEGER {op} INTEGER")

    def eval_index_expression(self, collection: Value, index: Value) -> Value:
        if not isinstance(collection, Array):
            return Error(f"index operator not supported: {collection.TYPE}")
        if not isinstance(index, Integer):
            return Error(f"index must be INTEGER, got {index.TYPE}")
        self.debug(3, f"index {collection.inspect()}[{index.value}]")
        i = index.value
        # out of range is null, not an error
        if i < 0 or i >= len(collection.elements):
            return NULL
        return collection.elements[i]

    def apply_function(self, func: Value, args: List[Value]) -> Value:
        if isinstance(func, Function):
            if len(args) != len(func.parameters):
                return Error(f"wrong number of arguments: want={len(func.parameters)}, got={len(args)}")
            self.debug(2, f"call {func!r} with ({', '.join(a.inspect() for a in args)})")
            call_env = func.env.enclosed()
            for param, arg in zip(func.parameters, args):
                call_env.set(param.name, arg)
            result = self.eval_block(func.body, call_env)
            if isinstance(result, ReturnValue):
                return result.value
            return result
        if isinstance(func, Builtin):
            if func.arity is not None and len(args) != func.arity:
                return Error(f"wrong number of arguments: want={func.arity}, got={len(args)}")
            self.debug(2, f"call builtin {func.name} with ({', '.join(a.inspect() for a in args)})")
            return func.fn(args)
        return Error(f"not a function: {func.TYPE}")


def run_program(source: str, env: Optional[Environment] = None, debug_level: int = 0) -> Value:
    """Convenience function to parse and evaluate Monkey source.

    Raises `ParseError` if the source does not parse.
    """
    program = parse_program(source)
    interpreter = Interpreter(debug_level=debug_level)
    return interpreter.run(program, env)
