"""
Abstract Syntax Tree node definitions for Lox expressions.

Every node is an immutable dataclass that owns its children outright; the
tree has no parent links and is never mutated once the parser builds it.
Nodes support the visitor pattern, and every visitor must handle every
node type.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional, TypeVar, Generic

from ..lexer.tokens import Token


R = TypeVar("R")


class ExprVisitor(ABC, Generic[R]):
    """Visitor interface for traversing expression trees."""

    @abstractmethod
    def visit_literal(self, expr: 'Literal') -> R:
        """Visit a literal leaf."""

    @abstractmethod
    def visit_grouping(self, expr: 'Grouping') -> R:
        """Visit a parenthesized expression."""

    @abstractmethod
    def visit_unary(self, expr: 'Unary') -> R:
        """Visit a prefix operator expression."""

    @abstractmethod
    def visit_binary(self, expr: 'Binary') -> R:
        """Visit an infix operator expression."""


class Expr(ABC):
    """Base class for all expression nodes."""

    @abstractmethod
    def accept(self, visitor: ExprVisitor[R]) -> R:
        """Accept a visitor (visitor pattern)."""

    @abstractmethod
    def children(self) -> List['Expr']:
        """Get all child nodes."""

    @property
    @abstractmethod
    def line(self) -> int:
        """Line of the token that anchors this node."""


@dataclass(frozen=True)
class Literal(Expr):
    """A number, string, true, false or nil."""
    token: Token

    def accept(self, visitor: ExprVisitor[R]) -> R:
        return visitor.visit_literal(self)

    def children(self) -> List[Expr]:
        return []

    @property
    def line(self) -> int:
        return self.token.line

    @property
    def value(self) -> Any:
        return self.token.value


@dataclass(frozen=True)
class Grouping(Expr):
    """
    Parenthesized sub-expression.

    ``paren`` is the opening '(' token. Nodes built by hand may omit it, and
    then take their line from ``inner``.
    """
    inner: Expr
    paren: Optional[Token] = None

    def accept(self, visitor: ExprVisitor[R]) -> R:
        return visitor.visit_grouping(self)

    def children(self) -> List[Expr]:
        return [self.inner]

    @property
    def line(self) -> int:
        if self.paren is not None:
            return self.paren.line
        return self.inner.line


@dataclass(frozen=True)
class Unary(Expr):
    """Prefix operation, operator is '!' or '-'."""
    operator: Token
    operand: Expr

    def accept(self, visitor: ExprVisitor[R]) -> R:
        return visitor.visit_unary(self)

    def children(self) -> List[Expr]:
        return [self.operand]

    @property
    def line(self) -> int:
        return self.operator.line


@dataclass(frozen=True)
class Binary(Expr):
    """Infix operation."""
    left: Expr
    operator: Token
    right: Expr

    def accept(self, visitor: ExprVisitor[R]) -> R:
        return visitor.visit_binary(self)

    def children(self) -> List[Expr]:
        return [self.left, self.right]

    @property
    def line(self) -> int:
        return self.operator.line
