"""
rlox command line entry point.

Usage:
    rlox <file.lox> [options]

Options:
    --tokens        Dump the scanned tokens before parsing
    --log-level     Logging level (DEBUG, INFO, WARNING, ERROR)
    --verbose       Print full diagnostics instead of one line summaries

The file is scanned and parsed as a single expression and the tree is
printed in prefix form. The first error is reported on stderr as
``[Line <n>] <message>`` and nothing is printed on stdout.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .lexer import Scanner, LoxError
from .parser import Parser, ParseError, print_ast


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rlox",
        description="Scan and parse a Lox expression, printing its syntax tree",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    rlox expr.lox                     # Print the tree
    rlox expr.lox --tokens            # Dump tokens, then print the tree
    rlox expr.lox --log-level DEBUG   # Show scanner and parser logging
        """
    )

    parser.add_argument('source', help='Path of the Lox source file')
    parser.add_argument('--tokens', action='store_true',
                        help='Dump the scanned tokens before parsing')
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level (default: WARNING)')
    parser.add_argument('--verbose', action='store_true',
                        help='Print full diagnostics with help text')

    return parser


def _report(error, verbose: bool) -> None:
    if verbose:
        print(error.diagnostic, file=sys.stderr, end="")
        return

    print(error, file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point, returns the process exit status."""
    args = _build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s"
    )
    logger = logging.getLogger("Cli")

    try:
        with open(args.source, 'r', encoding='utf-8') as f:
            source = f.read()

    except (OSError, UnicodeDecodeError) as e:
        logger.debug("failed to read %s", args.source, exc_info=True)
        print(f"rlox: cannot read '{args.source}': {e}", file=sys.stderr)
        return 1

    scanner = Scanner(source)
    try:
        scanner.scan_tokens()

    except LoxError as e:
        _report(e, args.verbose)
        return 1

    if args.tokens:
        for line in scanner.dump_tokens():
            print(line)

    parser = Parser(scanner)
    try:
        expr = parser.parse()

    except ParseError as e:
        _report(e, args.verbose)
        return 1

    print(print_ast(expr))
    return 0


if __name__ == "__main__":
    sys.exit(main())
