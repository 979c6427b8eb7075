"""
Lox Lexer Package

Implements the lexical scanner for Lox expressions.

Key Features:
- Single pass, character at a time scanning
- Maximal munch with one character of lookahead
- Exact-match keyword recognition
- Line tracking for diagnostics
- Fails fast on the first lexical error
"""

from .tokens import Token, TokenType, KEYWORDS, format_number
from .scanner import Scanner, tokenize_string
from .errors import Diagnostic, LoxError

__all__ = [
    "Scanner",
    "Token",
    "TokenType",
    "KEYWORDS",
    "format_number",
    "Diagnostic",
    "LoxError",
    "tokenize_string",
]
