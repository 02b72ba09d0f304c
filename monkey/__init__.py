# Monkey language package
# This package provides a tokenizer, a Pratt parser and a tree-walking
# interpreter for the Monkey language.
from .errors import MonkeyError, ParseError
from .interpreter import run_program, Interpreter
from .parser import parse_program, Parser
from .lexer import Lexer, tokenize

__all__ = [
    'run_program',
    'parse_program',
    'Interpreter',
    'Parser',
    'Lexer',
    'tokenize',
    'MonkeyError',
    'ParseError',
]
