from typing import List

from monkey.types import Value, NULL


def std_puts(args: List[Value]) -> Value:
    """Print the inspection of each argument on its own line."""
    for arg in args:
        print(arg.inspect())
    return NULL
