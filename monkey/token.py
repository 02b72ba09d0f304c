"""Token definitions for the Monkey language.

A token is a classified lexeme: its kind and the raw text it was read
from. Keywords are not a separate lexical class; identifiers are looked up
in `KEYWORDS` once they have been scanned.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict


class TokenKind(Enum):
    ILLEGAL = 'ILLEGAL'
    EOF = 'EOF'

    # Identifiers and literals
    IDENT = 'IDENT'
    INT = 'INT'
    STRING = 'STRING'

    # Operators
    ASSIGN = '='
    PLUS = '+'
    MINUS = '-'
    BANG = '!'
    ASTERISK = '*'
    SLASH = '/'
    LT = '<'
    GT = '>'
    EQ = '=='
    NOT_EQ = '!='

    # Delimiters
    COMMA = ','
    SEMICOLON = ';'
    LPAREN = '('
    RPAREN = ')'
    LBRACE = '{'
    RBRACE = '}'
    LBRACKET = '['
    RBRACKET = ']'

    # Keywords
    FUNCTION = 'FUNCTION'
    LET = 'LET'
    IF = 'IF'
    ELSE = 'ELSE'
    TRUE = 'TRUE'
    FALSE = 'FALSE'
    RETURN = 'RETURN'

    def __str__(self) -> str:
        return self.value


KEYWORDS: Dict[str, TokenKind] = {
    'fn': TokenKind.FUNCTION,
    'let': TokenKind.LET,
    'if': TokenKind.IF,
    'else': TokenKind.ELSE,
    'true': TokenKind.TRUE,
    'false': TokenKind.FALSE,
    'return': TokenKind.RETURN,
}


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    literal: str
    # Source position of the first character; not part of token identity.
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.literal!r})"


def lookup_ident(ident: str) -> TokenKind:
    """Classify a scanned word as a keyword or a plain identifier."""
    return KEYWORDS.get(ident, TokenKind.IDENT)
