"""Fully parenthesized prefix rendering of expression trees."""

from .ast_nodes import Expr, ExprVisitor, Literal, Grouping, Unary, Binary


class AstPrinter(ExprVisitor[str]):
    """
    Renders an expression tree in prefix form.

    Binary nodes print as ``(<op> <left> <right>)``, groupings as
    ``(group <inner>)``, unary nodes as ``(<op> <operand>)`` and literals by
    their textual form.
    """

    def print(self, expr: Expr) -> str:
        return expr.accept(self)

    def visit_literal(self, expr: Literal) -> str:
        return expr.token.text

    def visit_grouping(self, expr: Grouping) -> str:
        return f"(group {expr.inner.accept(self)})"

    def visit_unary(self, expr: Unary) -> str:
        return f"({expr.operator.text} {expr.operand.accept(self)})"

    def visit_binary(self, expr: Binary) -> str:
        return f"({expr.operator.text} {expr.left.accept(self)} {expr.right.accept(self)})"


def print_ast(expr: Expr) -> str:
    """Render ``expr`` in prefix form."""
    return AstPrinter().print(expr)
