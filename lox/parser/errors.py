"""
Error handling for the Lox parser.

Parse errors are raised, not printed: the caller decides whether to stop or
to attempt recovery.
"""

from typing import Optional, List

from ..lexer.tokens import Token, TokenType
from ..lexer.errors import Diagnostic


class ParseError(Exception):
    """
    Exception raised when the parser encounters a syntax error.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        line: int,
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.line_number = line
        self.diagnostic = Diagnostic(
            message=message,
            line=line,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )
        self.token = token

    def __str__(self) -> str:
        return self.diagnostic.short()


class ParseWarning:
    """
    Represents a parser warning that doesn't stop parsing.
    """

    def __init__(
        self,
        message: str,
        line: int,
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None
    ):
        self.diagnostic = Diagnostic(
            message=message,
            line=line,
            severity="warning",
            code=code,
            help_text=help_text
        )
        self.token = token

    def __str__(self) -> str:
        return self.diagnostic.short()


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P004": "Unclosed delimiter",
    "P010": "Unexpected end of input",
    "P013": "Unexpected trailing tokens",
    "P014": "Expression nested too deeply",
}


def _suggest_for_token(found: Token) -> List[str]:
    """Suggest fixes for tokens that commonly land where an operand belongs."""
    if found.type == TokenType.IDENTIFIER:
        return ["Variables are not supported in expressions; use a literal value"]

    if found.type in (TokenType.RIGHT_PAREN, TokenType.STAR, TokenType.SLASH, TokenType.PLUS):
        return ["Check for a missing operand before this token"]

    return []


def create_unexpected_token_error(found: Token) -> ParseError:
    """Create an error for a token that cannot begin an expression."""
    return ParseError(
        message=f"Expected expression, found '{found.lexeme}'",
        line=found.line,
        token=found,
        code="P001",
        help_text="An expression must start with a number, string, true, false, nil, "
                  "'(', '!' or '-'.",
        suggestions=_suggest_for_token(found)
    )


def create_unexpected_eof_error(expected: str, line: int) -> ParseError:
    """Create an error for unexpected end of input."""
    return ParseError(
        message=f"Unexpected end of input, expected {expected}",
        line=line,
        code="P010",
        help_text=f"The parser ran out of tokens while expecting {expected}.",
        suggestions=[f"Add the missing {expected}"]
    )


def create_unclosed_delimiter_error(open_token: Token, found: Optional[Token], line: int) -> ParseError:
    """Create an error for a '(' without its matching ')'."""
    found_text = f"'{found.lexeme}'" if found is not None else "end of input"

    return ParseError(
        message=f"Expected ')' after expression, found {found_text}",
        line=line,
        token=found,
        code="P004",
        help_text=f"The '(' on line {open_token.line} was never closed.",
        suggestions=["Add a closing ')'"]
    )


def create_trailing_tokens_warning(first_unused: Token) -> ParseWarning:
    """Create a warning for tokens left over after a complete expression."""
    return ParseWarning(
        message=f"Ignoring tokens after complete expression, starting at '{first_unused.lexeme}'",
        line=first_unused.line,
        token=first_unused,
        code="P013",
        help_text="Only a single expression is parsed."
    )


def create_nesting_too_deep_error(line: int, limit: int) -> ParseError:
    """Create an error for groupings and unary operators nested past the limit."""
    return ParseError(
        message="Expression nested too deeply",
        line=line,
        code="P014",
        help_text=f"At most {limit} levels of '(', '!' and '-' may be nested.",
        suggestions=["Split the expression or remove redundant parentheses"]
    )
