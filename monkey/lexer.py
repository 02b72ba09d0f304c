"""Tokenizer for the Monkey language.

The lexer walks the source one character at a time and hands out tokens
on demand through `Lexer.next_token`. Whitespace is skipped and never
emitted. Once the input is exhausted every further call returns an EOF
token.
"""

from __future__ import annotations

from typing import Dict, Iterator

from .token import Token, TokenKind, lookup_ident


WHITESPACE = ' \t\n\r'

SINGLE_CHAR_TOKENS: Dict[str, TokenKind] = {
    '=': TokenKind.ASSIGN,
    '+': TokenKind.PLUS,
    '-': TokenKind.MINUS,
    '!': TokenKind.BANG,
    '*': TokenKind.ASTERISK,
    '/': TokenKind.SLASH,
    '<': TokenKind.LT,
    '>': TokenKind.GT,
    ',': TokenKind.COMMA,
    ';': TokenKind.SEMICOLON,
    '(': TokenKind.LPAREN,
    ')': TokenKind.RPAREN,
    '{': TokenKind.LBRACE,
    '}': TokenKind.RBRACE,
    '[': TokenKind.LBRACKET,
    ']': TokenKind.RBRACKET,
}

# Operators that need one character of lookahead.
TWO_CHAR_TOKENS: Dict[str, TokenKind] = {
    '==': TokenKind.EQ,
    '!=': TokenKind.NOT_EQ,
}


def is_letter(ch: str) -> bool:
    return ('a' <= ch <= 'z') or ('A' <= ch <= 'Z') or ch == '_'


def is_digit(ch: str) -> bool:
    return '0' <= ch <= '9'


class Lexer:
    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1

    def current(self) -> str:
        if self.pos < len(self.source):
            return self.source[self.pos]
        return ''

    def peek_char(self) -> str:
        if self.pos + 1 < len(self.source):
            return self.source[self.pos + 1]
        return ''

    def advance(self, n: int = 1):
        for _ in range(n):
            if self.pos >= len(self.source):
                return
            if self.source[self.pos] == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def skip_whitespace(self):
        while self.current() and self.current() in WHITESPACE:
            self.advance()

    def next_token(self) -> Token:
        self.skip_whitespace()
        line, column = self.line, self.column
        c = self.current()
        if c == '':
            return Token(TokenKind.EOF, '', line, column)
        # Words: keywords or identifiers
        if is_letter(c):
            start = self.pos
            while is_letter(self.current()):
                self.advance()
            word = self.source[start:self.pos]
            return Token(lookup_ident(word), word, line, column)
        # Integer literal
        if is_digit(c):
            start = self.pos
            while is_digit(self.current()):
                self.advance()
            return Token(TokenKind.INT, self.source[start:self.pos], line, column)
        # String literal, no escape processing
        if c == '"':
            self.advance()
            start = self.pos
            while self.current() and self.current() != '"':
                self.advance()
            if self.current() == '':
                # unterminated: hand back what was read, EOF comes next
                return Token(TokenKind.ILLEGAL, '"' + self.source[start:self.pos], line, column)
            text = self.source[start:self.pos]
            self.advance()  # closing quote
            return Token(TokenKind.STRING, text, line, column)
        pair = c + self.peek_char()
        if pair in TWO_CHAR_TOKENS:
            self.advance(2)
            return Token(TWO_CHAR_TOKENS[pair], pair, line, column)
        kind = SINGLE_CHAR_TOKENS.get(c, TokenKind.ILLEGAL)
        self.advance()
        return Token(kind, c, line, column)

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenKind.EOF:
                return


def tokenize(source: str) -> Iterator[Token]:
    """Yield the tokens of `source`, ending with a single EOF token."""
    return iter(Lexer(source))
