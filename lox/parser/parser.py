"""
Lox Recursive Descent Parser

One method per precedence level, lowest to highest:

    expression -> equality
    equality   -> comparison ( ( "!=" | "==" ) comparison )*
    comparison -> term ( ( ">" | ">=" | "<" | "<=" ) term )*
    term       -> factor ( ( "-" | "+" ) factor )*
    factor     -> unary ( ( "/" | "*" ) unary )*
    unary      -> ( "!" | "-" ) unary | primary
    primary    -> NUMBER | STRING | "true" | "false" | "nil" | "(" expression ")"

Binary levels loop and fold to the left, so they are left associative.
Unary recurses on itself and is right associative. Groupings and unary
operators together may nest at most ``Parser.MAX_NESTING`` levels deep.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional

from ..lexer.tokens import Token, TokenType
from ..lexer.scanner import Scanner
from .ast_nodes import Expr, Literal, Grouping, Unary, Binary
from .errors import (
    ParseWarning, create_unexpected_token_error,
    create_unexpected_eof_error, create_unclosed_delimiter_error,
    create_trailing_tokens_warning, create_nesting_too_deep_error
)


class Parser:
    """
    Lox expression parser.

    Reads the scanner's tokens through ``token_at`` and ``len`` only, and
    never reads past the last token: exhaustion is detected by comparing the
    cursor with the token count.
    """

    EQUALITY_OPERATORS = (TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)
    COMPARISON_OPERATORS = (
        TokenType.GREATER, TokenType.GREATER_EQUAL,
        TokenType.LESS, TokenType.LESS_EQUAL,
    )
    TERM_OPERATORS = (TokenType.MINUS, TokenType.PLUS)
    FACTOR_OPERATORS = (TokenType.SLASH, TokenType.STAR)
    UNARY_OPERATORS = (TokenType.BANG, TokenType.MINUS)

    # Each level costs several stack frames in the parser and two in a visitor
    MAX_NESTING = 100

    def __init__(self, scanner: Scanner):
        """
        Initialize parser with a scanner that has already scanned its source.

        Args:
            scanner: Scanner holding the token sequence
        """
        self.scanner = scanner
        self.current = 0
        self.warnings: List[ParseWarning] = []
        self._depth = 0
        self._logger = logging.getLogger("Parser")

    def parse(self) -> Expr:
        """
        Parse one expression from the token sequence.

        Returns:
            Root of the expression tree

        Raises:
            ParseError: If the tokens do not form an expression, or nest
                deeper than ``MAX_NESTING`` or the interpreter stack allows
        """
        self._depth = 0
        try:
            expr = self.expression()

        except RecursionError:
            line = self._last_line() if self.at_end() else self.peek().line
            self._logger.debug("recursion limit reached at token %d", self.current)
            raise create_nesting_too_deep_error(line, self.MAX_NESTING) from None

        if not self.at_end():
            warning = create_trailing_tokens_warning(self.peek())
            self.warnings.append(warning)
            self._logger.warning("%s", warning)

        return expr

    # Grammar rules

    def expression(self) -> Expr:
        return self.equality()

    def equality(self) -> Expr:
        expr = self.comparison()

        while self._match(*self.EQUALITY_OPERATORS):
            operator = self.previous()
            right = self.comparison()
            expr = Binary(expr, operator, right)

        return expr

    def comparison(self) -> Expr:
        expr = self.term()

        while self._match(*self.COMPARISON_OPERATORS):
            operator = self.previous()
            right = self.term()
            expr = Binary(expr, operator, right)

        return expr

    def term(self) -> Expr:
        expr = self.factor()

        while self._match(*self.TERM_OPERATORS):
            operator = self.previous()
            right = self.factor()
            expr = Binary(expr, operator, right)

        return expr

    def factor(self) -> Expr:
        expr = self.unary()

        while self._match(*self.FACTOR_OPERATORS):
            operator = self.previous()
            right = self.unary()
            expr = Binary(expr, operator, right)

        return expr

    def unary(self) -> Expr:
        if self._match(*self.UNARY_OPERATORS):
            operator = self.previous()
            with self._nested(operator):
                operand = self.unary()
            return Unary(operator, operand)

        return self.primary()

    def primary(self) -> Expr:
        """Parse a literal or a parenthesized expression."""
        if self.at_end():
            raise create_unexpected_eof_error("expression", self._last_line())

        token = self.peek()

        if token.is_literal:
            self.advance()
            return Literal(token)

        if token.type == TokenType.LEFT_PAREN:
            self.advance()
            with self._nested(token):
                inner = self.expression()
            self._consume_closing_paren(token)
            return Grouping(inner, token)

        raise create_unexpected_token_error(token)

    # Cursor

    def advance(self) -> Token:
        """Consume and return current token."""
        token = self.peek()
        self.current += 1
        return token

    def peek(self) -> Token:
        """Return current token without consuming. Callers check at_end first."""
        return self.scanner.token_at(self.current)

    def previous(self) -> Token:
        """Return the token just consumed."""
        return self.scanner.token_at(self.current - 1)

    def at_end(self) -> bool:
        return self.current == len(self.scanner)

    def _check(self, token_type: TokenType) -> bool:
        if self.at_end():
            return False
        return self.peek().type == token_type

    def _match(self, *token_types: TokenType) -> bool:
        """Consume the current token if it has one of ``token_types``."""
        for token_type in token_types:
            if self._check(token_type):
                self.advance()
                return True

        return False

    @contextmanager
    def _nested(self, token: Token) -> Iterator[None]:
        """Track one level of grouping or unary nesting opened by ``token``."""
        self._depth += 1
        try:
            if self._depth > self.MAX_NESTING:
                raise create_nesting_too_deep_error(token.line, self.MAX_NESTING)
            yield
        finally:
            self._depth -= 1

    def _consume_closing_paren(self, open_token: Token) -> None:
        if self._match(TokenType.RIGHT_PAREN):
            return

        found: Optional[Token] = None if self.at_end() else self.peek()
        line = found.line if found is not None else self._last_line()
        raise create_unclosed_delimiter_error(open_token, found, line)

    def _last_line(self) -> int:
        """Line of the final token, or 1 when there are no tokens."""
        count = len(self.scanner)
        if count == 0:
            return 1

        return self.scanner.token_at(count - 1).line


def parse_string(source: str) -> Expr:
    """
    Convenience function to parse a source string.

    Args:
        source: Source code string

    Returns:
        Expression AST

    Raises:
        LoxError: If scanning fails
        ParseError: If parsing fails
    """
    scanner = Scanner(source)
    scanner.scan_tokens()
    return Parser(scanner).parse()

