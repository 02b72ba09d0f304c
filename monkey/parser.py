"""Parser for the Monkey language.

Statements are parsed by recursive descent. Expressions use precedence
climbing (Pratt parsing): every token kind that can start an expression
has a prefix rule, every token kind that can continue one has an infix
rule and a binding precedence. `parse_expression(precedence)` keeps
folding infix rules into the left operand while the next operator binds
strictly tighter than `precedence`, which makes all binary operators left
associative.

Syntax errors do not stop the parser. The message is recorded in
`Parser.errors`, the top-level statement containing the fault is
abandoned, and parsing resumes after the next `;` at bracket depth zero.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Callable, Dict, List, Optional

from .ast import (
    Program, Statement, Expression, LetStatement, ReturnStatement,
    ExpressionStatement, BlockStatement, Identifier, IntegerLiteral,
    StringLiteral, BooleanLiteral, ArrayLiteral, PrefixExpression,
    InfixExpression, IfExpression, FunctionLiteral, CallExpression,
    IndexExpression,
)
from .errors import ParseError
from .lexer import Lexer
from .token import Token, TokenKind
from .types import INT64_MAX


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2       # == !=
    LESSGREATER = 3  # < >
    SUM = 4          # + -
    PRODUCT = 5      # * /
    PREFIX = 6       # -x !x
    CALL = 7         # f(x) a[i]


PRECEDENCES: Dict[TokenKind, Precedence] = {
    TokenKind.EQ: Precedence.EQUALS,
    TokenKind.NOT_EQ: Precedence.EQUALS,
    TokenKind.LT: Precedence.LESSGREATER,
    TokenKind.GT: Precedence.LESSGREATER,
    TokenKind.PLUS: Precedence.SUM,
    TokenKind.MINUS: Precedence.SUM,
    TokenKind.ASTERISK: Precedence.PRODUCT,
    TokenKind.SLASH: Precedence.PRODUCT,
    TokenKind.LPAREN: Precedence.CALL,
    TokenKind.LBRACKET: Precedence.CALL,
}

OPENERS = {TokenKind.LPAREN, TokenKind.LBRACE, TokenKind.LBRACKET}
CLOSERS = {TokenKind.RPAREN, TokenKind.RBRACE, TokenKind.RBRACKET}

PrefixParseFn = Callable[[], Expression]
InfixParseFn = Callable[[Expression], Expression]


class _Abandon(Exception):
    """Unwinds out of a statement after its syntax error was recorded."""


class Parser:
    def __init__(self, lexer: Lexer):
        self.lexer = lexer
        self.errors: List[str] = []
        # bracket nesting of the current token, used for error recovery
        self.depth = 0

        self.prefix_parse_fns: Dict[TokenKind, PrefixParseFn] = {
            TokenKind.IDENT: self.parse_identifier,
            TokenKind.INT: self.parse_integer_literal,
            TokenKind.STRING: self.parse_string_literal,
            TokenKind.TRUE: self.parse_boolean,
            TokenKind.FALSE: self.parse_boolean,
            TokenKind.BANG: self.parse_prefix_expression,
            TokenKind.MINUS: self.parse_prefix_expression,
            TokenKind.LPAREN: self.parse_grouped_expression,
            TokenKind.LBRACKET: self.parse_array_literal,
            TokenKind.IF: self.parse_if_expression,
            TokenKind.FUNCTION: self.parse_function_literal,
        }
        self.infix_parse_fns: Dict[TokenKind, InfixParseFn] = {
            kind: self.parse_infix_expression
            for kind in (TokenKind.PLUS, TokenKind.MINUS, TokenKind.ASTERISK, TokenKind.SLASH,
                         TokenKind.EQ, TokenKind.NOT_EQ, TokenKind.LT, TokenKind.GT)
        }
        self.infix_parse_fns[TokenKind.LPAREN] = self.parse_call_expression
        self.infix_parse_fns[TokenKind.LBRACKET] = self.parse_index_expression

        # Read two tokens, so cur_token and peek_token are both set
        self.cur_token: Token = self.lexer.next_token()
        self.peek_token: Token = self.lexer.next_token()

    # Token handling

    def next_token(self):
        if self.cur_token.kind in OPENERS:
            self.depth += 1
        elif self.cur_token.kind in CLOSERS and self.depth > 0:
            self.depth -= 1
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, kind: TokenKind) -> bool:
        return self.cur_token.kind is kind

    def peek_token_is(self, kind: TokenKind) -> bool:
        return self.peek_token.kind is kind

    def expect_peek(self, kind: TokenKind):
        """Advance if the next token has the given kind, otherwise fail."""
        if not self.peek_token_is(kind):
            tok = self.peek_token
            self.fail(f"expected next token to be {kind}, got {tok.kind} instead", tok)
        self.next_token()

    def peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek_token.kind, Precedence.LOWEST)

    def cur_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.cur_token.kind, Precedence.LOWEST)

    def fail(self, message: str, token: Token):
        self.errors.append(f"{message} at {token.line}:{token.column}")
        raise _Abandon()

    def synchronize(self):
        """Skip past the next top-level `;`, or up to end of input."""
        while not self.cur_token_is(TokenKind.EOF):
            if self.cur_token_is(TokenKind.SEMICOLON) and self.depth == 0:
                self.next_token()
                return
            self.next_token()

    # Statements

    def parse_program(self) -> Program:
        statements: List[Statement] = []
        while not self.cur_token_is(TokenKind.EOF):
            if self.cur_token_is(TokenKind.SEMICOLON):
                self.next_token()
                continue
            try:
                statements.append(self.parse_statement())
            except _Abandon:
                self.synchronize()
                self.depth = 0
                continue
            self.next_token()
        return Program(statements)

    def parse_statement(self) -> Statement:
        if self.cur_token_is(TokenKind.LET):
            return self.parse_let_statement()
        if self.cur_token_is(TokenKind.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> LetStatement:
        token = self.cur_token
        self.expect_peek(TokenKind.IDENT)
        name = Identifier(self.cur_token, self.cur_token.literal)
        self.expect_peek(TokenKind.ASSIGN)
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if self.peek_token_is(TokenKind.SEMICOLON):
            self.next_token()
        return LetStatement(token, name, value)

    def parse_return_statement(self) -> ReturnStatement:
        token = self.cur_token
        if self.peek_token_is(TokenKind.SEMICOLON):
            self.next_token()
            return ReturnStatement(token, None)
        if self.peek_token_is(TokenKind.RBRACE) or self.peek_token_is(TokenKind.EOF):
            return ReturnStatement(token, None)
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if self.peek_token_is(TokenKind.SEMICOLON):
            self.next_token()
        return ReturnStatement(token, value)

    def parse_expression_statement(self) -> ExpressionStatement:
        token = self.cur_token
        expression = self.parse_expression(Precedence.LOWEST)
        if self.peek_token_is(TokenKind.SEMICOLON):
            self.next_token()
        return ExpressionStatement(token, expression)

    def parse_block_statement(self) -> BlockStatement:
        token = self.cur_token
        statements: List[Statement] = []
        self.next_token()
        while not self.cur_token_is(TokenKind.RBRACE):
            if self.cur_token_is(TokenKind.EOF):
                self.fail("expected next token to be }, got EOF instead", self.cur_token)
            # stray semicolons
            if self.cur_token_is(TokenKind.SEMICOLON):
                self.next_token()
                continue
            statements.append(self.parse_statement())
            self.next_token()
        return BlockStatement(token, statements)

    # Expressions

    def parse_expression(self, precedence: Precedence) -> Expression:
        prefix = self.prefix_parse_fns.get(self.cur_token.kind)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.cur_token)
        left = prefix()
        while not self.peek_token_is(TokenKind.SEMICOLON) and precedence < self.peek_precedence():
            infix = self.infix_parse_fns.get(self.peek_token.kind)
            if infix is None:
                return left
            self.next_token()
            left = infix(left)
        return left

    def no_prefix_parse_fn_error(self, token: Token):
        if token.kind is TokenKind.ILLEGAL:
            self.fail(f"illegal token {token.literal}", token)
        self.fail(f"no prefix parse function for {token.kind} found", token)

    def parse_identifier(self) -> Identifier:
        return Identifier(self.cur_token, self.cur_token.literal)

    def parse_integer_literal(self) -> IntegerLiteral:
        token = self.cur_token
        value = int(token.literal)
        if value > INT64_MAX:
            self.fail(f"could not parse {token.literal} as integer", token)
        return IntegerLiteral(token, value)

    def parse_string_literal(self) -> StringLiteral:
        return StringLiteral(self.cur_token, self.cur_token.literal)

    def parse_boolean(self) -> BooleanLiteral:
        return BooleanLiteral(self.cur_token, self.cur_token_is(TokenKind.TRUE))

    def parse_prefix_expression(self) -> PrefixExpression:
        token = self.cur_token
        self.next_token()
        operand = self.parse_expression(Precedence.PREFIX)
        return PrefixExpression(token, token.literal, operand)

    def parse_infix_expression(self, left: Expression) -> InfixExpression:
        token = self.cur_token
        precedence = self.cur_precedence()
        self.next_token()
        right = self.parse_expression(precedence)
        return InfixExpression(token, token.literal, left, right)

    def parse_grouped_expression(self) -> Expression:
        self.next_token()
        expression = self.parse_expression(Precedence.LOWEST)
        self.expect_peek(TokenKind.RPAREN)
        return expression

    def parse_array_literal(self) -> ArrayLiteral:
        token = self.cur_token
        return ArrayLiteral(token, self.parse_expression_list(TokenKind.RBRACKET))

    def parse_if_expression(self) -> IfExpression:
        token = self.cur_token
        self.expect_peek(TokenKind.LPAREN)
        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        self.expect_peek(TokenKind.RPAREN)
        self.expect_peek(TokenKind.LBRACE)
        consequence = self.parse_block_statement()
        alternative: Optional[BlockStatement] = None
        if self.peek_token_is(TokenKind.ELSE):
            self.next_token()
            self.expect_peek(TokenKind.LBRACE)
            alternative = self.parse_block_statement()
        return IfExpression(token, condition, consequence, alternative)

    def parse_function_literal(self) -> FunctionLiteral:
        token = self.cur_token
        self.expect_peek(TokenKind.LPAREN)
        parameters = self.parse_function_parameters()
        self.expect_peek(TokenKind.LBRACE)
        body = self.parse_block_statement()
        return FunctionLiteral(token, parameters, body)

    def parse_function_parameters(self) -> List[Identifier]:
        parameters: List[Identifier] = []
        if self.peek_token_is(TokenKind.RPAREN):
            self.next_token()
            return parameters
        self.expect_peek(TokenKind.IDENT)
        parameters.append(Identifier(self.cur_token, self.cur_token.literal))
        while self.peek_token_is(TokenKind.COMMA):
            self.next_token()
            self.expect_peek(TokenKind.IDENT)
            parameters.append(Identifier(self.cur_token, self.cur_token.literal))
        self.expect_peek(TokenKind.RPAREN)
        return parameters

    def parse_call_expression(self, callee: Expression) -> CallExpression:
        token = self.cur_token
        return CallExpression(token, callee, self.parse_expression_list(TokenKind.RPAREN))

    def parse_index_expression(self, collection: Expression) -> IndexExpression:
        token = self.cur_token
        self.next_token()
        index = self.parse_expression(Precedence.LOWEST)
        self.expect_peek(TokenKind.RBRACKET)
        return IndexExpression(token, collection, index)

    def parse_expression_list(self, end: TokenKind) -> List[Expression]:
        """Parse comma separated expressions up to the closing `end` token."""
        items: List[Expression] = []
        if self.peek_token_is(end):
            self.next_token()
            return items
        self.next_token()
        items.append(self.parse_expression(Precedence.LOWEST))
        while self.peek_token_is(TokenKind.COMMA):
            self.next_token()
            self.next_token()
            items.append(self.parse_expression(Precedence.LOWEST))
        self.expect_peek(end)
        return items


def parse_program(source: str) -> Program:
    """Parse Monkey source code into a Program AST.

    Raises `ParseError` with every recorded message if the source has
    syntax errors.
    """
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    if parser.errors:
        raise ParseError(parser.errors)
    return program
