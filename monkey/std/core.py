"""Core built-in functions: `len`, `first`, `last`, `rest` and `push`.

Argument counts are checked by the interpreter before these run, so each
function only validates argument types. Faults are returned as `Error`
values, never raised.
"""

from typing import List

from monkey.types import Value, Integer, String, Array, Error, NULL


def std_len(args: List[Value]) -> Value:
    arg = args[0]
    if isinstance(arg, String):
        return Integer(len(arg.value))
    if isinstance(arg, Array):
        return Integer(len(arg.elements))
    return Error(f"argument to `len` not supported, got {arg.TYPE}")


def std_first(args: List[Value]) -> Value:
    arr = args[0]
    if not isinstance(arr, Array):
        return Error(f"argument to `first` must be ARRAY, got {arr.TYPE}")
    if arr.elements:
        return arr.elements[0]
    return NULL


def std_last(args: List[Value]) -> Value:
    arr = args[0]
    if not isinstance(arr, Array):
        return Error(f"argument to `last` must be ARRAY, got {arr.TYPE}")
    if arr.elements:
        return arr.elements[-1]
    return NULL


def std_rest(args: List[Value]) -> Value:
    arr = args[0]
    if not isinstance(arr, Array):
        return Error(f"argument to `rest` must be ARRAY, got {arr.TYPE}")
    if arr.elements:
        return Array(list(arr.elements[1:]))
    return NULL


def std_push(args: List[Value]) -> Value:
    arr, item = args
    if not isinstance(arr, Array):
        return Error(f"argument to `push` must be ARRAY, got {arr.TYPE}")
    # copy, the original array stays as it was
    return Array(arr.elements + [item])
