"""Built-in functions available to every Monkey program.

The registry is consulted after the environment chain, so a program can
shadow any of these names with its own `let` binding.
"""

from typing import Dict

from monkey.types import Builtin
from .core import std_len, std_first, std_last, std_rest, std_push
from .io import std_puts


def builtin_registry() -> Dict[str, Builtin]:
    return {
        'len': Builtin('len', 1, std_len),
        'first': Builtin('first', 1, std_first),
        'last': Builtin('last', 1, std_last),
        'rest': Builtin('rest', 1, std_rest),
        'push': Builtin('push', 2, std_push),
        # variadic
        'puts': Builtin('puts', None, std_puts),
    }


BUILTINS: Dict[str, Builtin] = builtin_registry()

__all__ = ['BUILTINS', 'builtin_registry']
