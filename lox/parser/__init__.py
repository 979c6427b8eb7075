"""
Lox Parser Package

Implements a recursive descent parser for Lox expressions, one function per
precedence level, producing an immutable expression tree.

Key Features:
- Left associative binary operators, right associative prefix operators
- Owning, immutable AST nodes with structural equality
- Parse errors raised as exceptions carrying the offending line
- Prefix-form printer for the resulting tree
"""

from .ast_nodes import Expr, ExprVisitor, Literal, Grouping, Unary, Binary
from .parser import Parser, parse_string
from .printer import AstPrinter, print_ast
from .errors import ParseError, ParseWarning

__all__ = [
    # Core parser
    "Parser",
    "parse_string",

    # AST nodes
    "Expr", "ExprVisitor",
    "Literal", "Grouping", "Unary", "Binary",

    # Printing
    "AstPrinter", "print_ast",

    # Error handling
    "ParseError", "ParseWarning",
]
