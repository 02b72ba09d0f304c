"""Runtime values for the Monkey interpreter.

Every value the interpreter produces is one of the classes below. Each
carries a `TYPE` tag used in error messages and an `inspect()` method
giving its user visible text. `true`, `false` and `null` are singletons
(`TRUE`, `FALSE`, `NULL`), so the interpreter compares them by identity.

`ReturnValue` and `Error` are control-flow values: the interpreter
unwraps or propagates them immediately and they never end up inside an
array, an argument list or an operand.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, ClassVar, List, Optional

from .ast import BlockStatement, Identifier

if TYPE_CHECKING:
    from .environment import Environment


INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


def wrap_int64(n: int) -> int:
    """Reduce an integer to signed 64-bit two's complement."""
    n &= (1 << 64) - 1
    if n > INT64_MAX:
        n -= 1 << 64
    return n


def trunc_div(a: int, b: int) -> int:
    """Integer division truncating toward zero; `b` must be non-zero."""
    q = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        q = -q
    return wrap_int64(q)


class Value:
    TYPE: ClassVar[str] = ''

    def inspect(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.inspect()


@dataclass(frozen=True)
class Integer(Value):
    TYPE: ClassVar[str] = 'INTEGER'
    value: int

    def inspect(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Boolean(Value):
    TYPE: ClassVar[str] = 'BOOLEAN'
    value: bool

    def inspect(self) -> str:
        return 'true' if self.value else 'false'


class Null(Value):
    TYPE: ClassVar[str] = 'NULL'

    def inspect(self) -> str:
        return 'null'

    def __repr__(self) -> str:
        return 'NULL'


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool(value: bool) -> Boolean:
    return TRUE if value else FALSE


@dataclass(frozen=True)
class String(Value):
    TYPE: ClassVar[str] = 'STRING'
    value: str

    def inspect(self) -> str:
        return self.value


@dataclass
class Array(Value):
    """An ordered sequence of values.

    Arrays are shared by reference; built-ins that "modify" an array
    (`push`, `rest`) build a new one instead.
    """
    TYPE: ClassVar[str] = 'ARRAY'
    elements: List[Value]

    def inspect(self) -> str:
        return '[' + ', '.join(el.inspect() for el in self.elements) + ']'


@dataclass(eq=False)
class Function(Value):
    """A closure: parameters and body plus the environment it was defined in."""
    TYPE: ClassVar[str] = 'FUNCTION'
    parameters: List[Identifier]
    body: BlockStatement
    env: 'Environment'

    def inspect(self) -> str:
        params = ', '.join(p.name for p in self.parameters)
        return f"fn({params}) {self.body}"

    def __repr__(self) -> str:
        return f"<function fn({', '.join(p.name for p in self.parameters)})>"


@dataclass(eq=False)
class Builtin(Value):
    """A function implemented in Python.

    `fn` receives the evaluated argument list and returns a Value. When
    `arity` is set, the interpreter checks the argument count before
    calling it.
    """
    TYPE: ClassVar[str] = 'BUILTIN'
    name: str
    arity: Optional[int]
    fn: Callable[[List[Value]], Value]

    def inspect(self) -> str:
        return f"builtin function {self.name}"

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"


@dataclass(frozen=True)
class ReturnValue(Value):
    TYPE: ClassVar[str] = 'RETURN_VALUE'
    value: Value

    def inspect(self) -> str:
        return self.value.inspect()


@dataclass(frozen=True)
class Error(Value):
    TYPE: ClassVar[str] = 'ERROR'
    message: str

    def inspect(self) -> str:
        return f"ERROR: {self.message}"


def is_signal(value: Optional[Value]) -> bool:
    """True for the values that must stop evaluation of the enclosing construct."""
    return isinstance(value, (Error, ReturnValue))


def is_truthy(value: Value) -> bool:
    # Only false and null are falsy; 0, "" and [] are truthy.
    return value is not FALSE and value is not NULL
