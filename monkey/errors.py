from typing import List


class MonkeyError(Exception):
    """Base class for host-level errors raised by the Monkey toolchain.

    Runtime faults inside a Monkey program are not exceptions; they are
    `Error` values returned by the interpreter.
    """


class ParseError(MonkeyError):
    """Raised by `parse_program` when the parser recorded syntax errors."""
    def __init__(self, errors: List[str]):
        super().__init__('; '.join(errors))
        self.errors = list(errors)
