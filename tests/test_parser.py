"""
Test suite for the Lox parser.

Tests cover:
- Precedence and associativity of every operator level
- Literals and groupings
- Parse errors and their lines
- Trailing token warnings
- Tree immutability and structural equality
"""

import dataclasses
import unittest
from unittest import mock
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from lox.lexer.scanner import Scanner
from lox.lexer.tokens import TokenType
from lox.lexer.errors import LoxError
from lox.parser.parser import Parser, parse_string
from lox.parser.ast_nodes import Literal, Grouping, Unary, Binary
from lox.parser.errors import ParseError
from lox.parser.printer import print_ast


class TestParser(unittest.TestCase):
    """Test cases for the parser."""

    def _parser(self, source: str) -> Parser:
        scanner = Scanner(source)
        scanner.scan_tokens()
        return Parser(scanner)

    def _parse(self, source: str) -> str:
        return print_ast(self._parser(source).parse())

    def test_precedence_of_factor_over_term(self):
        self.assertEqual(self._parse("1 + 2 * 3"), "(+ 1 (* 2 3))")

    def test_grouping_overrides_precedence(self):
        self.assertEqual(self._parse("(1 + 2) * 3"), "(* (group (+ 1 2)) 3)")

    def test_term_is_left_associative(self):
        self.assertEqual(self._parse("1 - 2 - 3"), "(- (- 1 2) 3)")
        self.assertEqual(self._parse("1 + 2 - 3 + 4"), "(+ (- (+ 1 2) 3) 4)")

    def test_factor_is_left_associative(self):
        self.assertEqual(self._parse("8 / 4 / 2"), "(/ (/ 8 4) 2)")
        self.assertEqual(self._parse("2 * 3 / 4"), "(/ (* 2 3) 4)")

    def test_unary_is_right_associative(self):
        self.assertEqual(self._parse("- - 3"), "(- (- 3))")
        self.assertEqual(self._parse("!!true"), "(! (! true))")
        self.assertEqual(self._parse("!-1"), "(! (- 1))")

    def test_unary_binds_tighter_than_factor(self):
        self.assertEqual(self._parse("-1 * 2"), "(* (- 1) 2)")
        self.assertEqual(self._parse("2 - -1"), "(- 2 (- 1))")

    def test_comparison_and_equality(self):
        self.assertEqual(self._parse("1 + 2 < 3 * 4 == true"),
                         "(== (< (+ 1 2) (* 3 4)) true)")
        self.assertEqual(self._parse("1 != 2 == false"), "(== (!= 1 2) false)")

    def test_comparison_is_left_associative(self):
        self.assertEqual(self._parse("1 >= 2 <= 3 > 4 < 5"),
                         "(< (> (<= (>= 1 2) 3) 4) 5)")

    def test_literals(self):
        self.assertEqual(self._parse('"hello"'), '"hello"')
        self.assertEqual(self._parse("nil"), "nil")
        self.assertEqual(self._parse("false"), "false")
        self.assertEqual(self._parse("1.5 * 2"), "(* 1.5 2)")

    def test_nested_groups(self):
        self.assertEqual(self._parse("((1))"), "(group (group 1))")
        self.assertEqual(self._parse("-(1 - 2)"), "(- (group (- 1 2)))")

    def test_multiline_expression(self):
        self.assertEqual(self._parse("1\n+\n2 // sum\n"), "(+ 1 2)")

    def test_tree_shape(self):
        expr = self._parser("1 + -2").parse()
        self.assertIsInstance(expr, Binary)
        self.assertEqual(expr.operator.type, TokenType.PLUS)
        self.assertIsInstance(expr.left, Literal)
        self.assertEqual(expr.left.value, 1.0)
        self.assertIsInstance(expr.right, Unary)
        self.assertEqual(expr.right.operator.type, TokenType.MINUS)
        self.assertEqual(expr.children(), [expr.left, expr.right])

    def test_grouping_node(self):
        expr = self._parser("(nil)").parse()
        self.assertIsInstance(expr, Grouping)
        self.assertIsInstance(expr.inner, Literal)
        self.assertEqual(expr.inner.token.type, TokenType.NIL)

    def test_grouping_line_is_opening_paren(self):
        expr = self._parser("\n(\n1\n)").parse()
        self.assertIsInstance(expr, Grouping)
        self.assertEqual(expr.paren.type, TokenType.LEFT_PAREN)
        self.assertEqual(expr.line, 2)
        self.assertEqual(expr.inner.line, 3)

    def test_nesting_up_to_limit(self):
        depth = Parser.MAX_NESTING
        self.assertEqual(self._parse("(" * depth + "1" + ")" * depth),
                         "(group " * depth + "1" + ")" * depth)
        self.assertEqual(self._parse("!" * depth + "true"),
                         "(! " * depth + "true" + ")" * depth)

    def test_deeply_nested_groups_are_parse_error(self):
        with self.assertRaises(ParseError) as ctx:
            self._parser("(" * 200 + "1" + ")" * 200).parse()

        self.assertEqual(ctx.exception.diagnostic.code, "P014")
        self.assertEqual(ctx.exception.message, "Expression nested too deeply")
        self.assertEqual(ctx.exception.line_number, 1)

    def test_long_unary_chain_is_parse_error(self):
        with self.assertRaises(ParseError) as ctx:
            self._parser("-" * 1200 + "1").parse()

        self.assertEqual(ctx.exception.diagnostic.code, "P014")

    def test_nesting_error_reports_line_of_first_excess_level(self):
        source = "(\n" * 150 + "1" + ")" * 150
        with self.assertRaises(ParseError) as ctx:
            self._parser(source).parse()

        self.assertEqual(ctx.exception.line_number, Parser.MAX_NESTING + 1)

    def test_recursion_limit_is_parse_error(self):
        parser = self._parser("(" * 5000 + "1" + ")" * 5000)
        with mock.patch.object(Parser, "MAX_NESTING", 10 ** 6):
            with self.assertRaises(ParseError) as ctx:
                parser.parse()

        self.assertEqual(ctx.exception.diagnostic.code, "P014")
        self.assertEqual(ctx.exception.line_number, 1)

    def test_parser_is_usable_after_nesting_error(self):
        scanner = Scanner("(" * 200 + "1" + ")" * 200)
        scanner.scan_tokens()
        with self.assertRaises(ParseError):
            Parser(scanner).parse()

        self.assertEqual(self._parse("-(1)"), "(- (group 1))")

    def test_nodes_are_immutable(self):
        expr = self._parser("1 + 2").parse()
        with self.assertRaises(dataclasses.FrozenInstanceError):
            expr.left = expr.right

    def test_parsing_is_idempotent(self):
        scanner = Scanner("(1 + 2) * -3 >= 4 != !nil")
        scanner.scan_tokens()

        first = Parser(scanner).parse()
        second = Parser(scanner).parse()
        self.assertEqual(first, second)
        self.assertIsNot(first, second)
        self.assertEqual(print_ast(first), print_ast(second))

    def test_zero_tokens_is_parse_error(self):
        with self.assertRaises(ParseError) as ctx:
            self._parser("").parse()

        self.assertEqual(ctx.exception.line_number, 1)
        self.assertEqual(ctx.exception.diagnostic.code, "P010")

    def test_comment_only_is_parse_error(self):
        with self.assertRaises(ParseError):
            self._parser("// nothing here\n").parse()

    def test_missing_right_operand(self):
        with self.assertRaises(ParseError) as ctx:
            self._parser("1\n+").parse()

        self.assertEqual(ctx.exception.diagnostic.code, "P010")
        self.assertEqual(ctx.exception.line_number, 2)

    def test_operator_without_left_operand(self):
        with self.assertRaises(ParseError) as ctx:
            self._parser("\n* 2").parse()

        self.assertEqual(ctx.exception.message, "Expected expression, found '*'")
        self.assertEqual(ctx.exception.line_number, 2)
        self.assertEqual(ctx.exception.diagnostic.code, "P001")
        self.assertEqual(ctx.exception.token.type, TokenType.STAR)

    def test_identifier_is_not_a_primary(self):
        with self.assertRaises(ParseError) as ctx:
            self._parser("foo + 1").parse()

        self.assertEqual(ctx.exception.diagnostic.code, "P001")

    def test_missing_closing_paren_at_end(self):
        with self.assertRaises(ParseError) as ctx:
            self._parser("(1 + 2").parse()

        self.assertEqual(ctx.exception.diagnostic.code, "P004")
        self.assertEqual(ctx.exception.line_number, 1)
        self.assertIsNone(ctx.exception.token)
        self.assertEqual(str(ctx.exception),
                         "[Line 1] Expected ')' after expression, found end of input")

    def test_missing_closing_paren_names_offending_token(self):
        with self.assertRaises(ParseError) as ctx:
            self._parser("(1\n\n2)").parse()

        self.assertEqual(ctx.exception.line_number, 3)
        self.assertEqual(ctx.exception.token.value, 2.0)

    def test_unexpected_closing_paren(self):
        with self.assertRaises(ParseError) as ctx:
            self._parser("\n\n)").parse()

        self.assertEqual(ctx.exception.line_number, 3)

    def test_parse_error_is_not_lox_error(self):
        self.assertFalse(issubclass(ParseError, LoxError))

    def test_trailing_tokens_warn(self):
        parser = self._parser("1 2")
        with self.assertLogs("Parser", level="WARNING"):
            expr = parser.parse()

        self.assertEqual(print_ast(expr), "1")
        self.assertEqual(len(parser.warnings), 1)
        self.assertEqual(parser.warnings[0].diagnostic.code, "P013")
        self.assertFalse(parser.at_end())

    def test_complete_parse_has_no_warnings(self):
        parser = self._parser("1 + 2")
        parser.parse()
        self.assertEqual(parser.warnings, [])
        self.assertTrue(parser.at_end())

    def test_cursor_contract(self):
        parser = self._parser("1")
        parser.advance()
        self.assertTrue(parser.at_end())
        self.assertEqual(parser.previous().value, 1.0)

        with self.assertRaises(IndexError):
            parser.peek()

    def test_parse_string(self):
        self.assertEqual(print_ast(parse_string("2 * (3 + 4)")), "(* 2 (group (+ 3 4)))")

        with self.assertRaises(LoxError):
            parse_string('"open')

        with self.assertRaises(ParseError):
            parse_string("1 +")


if __name__ == '__main__':
    unittest.main()
