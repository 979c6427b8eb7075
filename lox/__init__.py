"""
Lox Front End Package

Scanner and recursive descent parser for Lox expressions.

Architecture:
    lox/
    ├── lexer/           # Tokenization and lexical analysis
    ├── parser/          # Syntax analysis, AST and AST printing
    └── cli.py           # rlox command line entry point

License: MIT
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .lexer import Scanner, Token, TokenType, LoxError
from .parser import Parser, ParseError, print_ast

__all__ = [
    # Core classes
    "Scanner",
    "Parser",
    "Token",
    "TokenType",
    "print_ast",

    # Errors
    "LoxError",
    "ParseError",

    # Version info
    "__version__",
    "__license__",
]
