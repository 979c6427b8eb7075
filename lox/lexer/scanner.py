"""
Lox Scanner - turns source text into tokens

Single pass, one character at a time, with one character of lookahead
for the two character operators and comments. Source text must be ASCII;
anything else is reported as an unrecognized character.
"""

import logging
from typing import Iterator, List, Optional

from .tokens import (
    Token, TokenType, KEYWORDS, SINGLE_CHAR_TOKENS, EQUAL_SUFFIX_TOKENS
)
from .errors import (
    LoxError, create_unrecognized_character_error, create_unclosed_string_error
)


def _is_digit(char: str) -> bool:
    return '0' <= char <= '9'


def _is_alpha(char: str) -> bool:
    return ('a' <= char <= 'z') or ('A' <= char <= 'Z')


def _is_alphanumeric(char: str) -> bool:
    return _is_alpha(char) or _is_digit(char)


class Scanner:
    """
    Lox lexical analyzer.

    Converts source code text into a list of tokens, tracking the current
    line. Scanning stops at the first lexical error.
    """

    def __init__(self, source: str):
        """
        Initialize the scanner with source code.

        Args:
            source: Source code string (ASCII)
        """
        self.source = source
        self.tokens: List[Token] = []
        self.current = 0
        self.line = 1
        self.keyword_map = KEYWORDS
        self.error: Optional[LoxError] = None
        self._start = 0
        self._logger = logging.getLogger("Scanner")

    def scan_tokens(self) -> None:
        """
        Scan the entire source.

        Raises:
            LoxError: On the first lexical error. Tokens scanned before the
                error remain available.
        """
        while not self._at_end():
            try:
                self._scan_token()

            except LoxError as e:
                self.error = e
                raise

        self._logger.debug("scanned %d tokens over %d lines", len(self.tokens), self.line)

    def token_at(self, index: int) -> Token:
        """
        Return the token at ``index``.

        Raises:
            IndexError: If ``index`` is outside the scanned sequence. This is a
                caller bug, not a diagnostic.
        """
        if not 0 <= index < len(self.tokens):
            raise IndexError(f"token index {index} out of range for {len(self.tokens)} tokens")

        return self.tokens[index]

    def len(self) -> int:
        """Number of tokens scanned so far."""
        return len(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)

    def has_error(self) -> bool:
        """Check if the last scan pass failed."""
        return self.error is not None

    def dump_tokens(self) -> List[str]:
        """Debug listing, one line per token."""
        return [f"{token.line:4d} {token}" for token in self.tokens]

    def _scan_token(self) -> None:
        """Scan a single lexeme starting at the current position."""
        self._start = self.current
        char = self._advance()

        if char in (' ', '\t', '\r'):
            return

        if char == '\n':
            self.line += 1
            return

        token_type = SINGLE_CHAR_TOKENS.get(char)
        if token_type is not None:
            self._add_token(token_type)
            return

        if char in EQUAL_SUFFIX_TOKENS:
            single, double = EQUAL_SUFFIX_TOKENS[char]
            self._add_token(double if self._match('=') else single)
            return

        if char == '/':
            if self._match('/'):
                # Line comment runs to the end of the line
                while not self._at_end() and self._peek() != '\n':
                    self._advance()

                return

            self._add_token(TokenType.SLASH)
            return

        if char == '"':
            self._string()
            return

        if _is_digit(char):
            self._number()
            return

        if _is_alpha(char) or char == '_':
            self._identifier()
            return

        raise create_unrecognized_character_error(char, self.line)

    def _string(self) -> None:
        """Scan a string literal; contents are taken verbatim."""
        while not self._at_end() and self._peek() != '"':
            if self._peek() == '\n':
                self.line += 1

            self._advance()

        if self._at_end():
            raise create_unclosed_string_error(self.line)

        contents = self.source[self._start + 1:self.current]
        self._advance()  # Closing quote

        self._logger.debug("adding string with len %d", len(contents))

        # Multi-line strings are stamped with the line they close on
        self._add_token(TokenType.STRING, contents)

    def _number(self) -> None:
        """Scan a number literal: digits, optionally '.' and more digits."""
        while _is_digit(self._peek()):
            self._advance()

        # A trailing '.' is only a decimal point if a digit follows it
        if self._peek() == '.' and _is_digit(self._peek_next()):
            self._advance()
            while _is_digit(self._peek()):
                self._advance()

        lexeme = self.source[self._start:self.current]
        self._add_token(TokenType.NUMBER, float(lexeme))

    def _identifier(self) -> None:
        """Scan an identifier or keyword."""
        while _is_alphanumeric(self._peek()):
            self._advance()

        lexeme = self.source[self._start:self.current]
        token_type = self.keyword_map.get(lexeme)

        if token_type is None:
            self._add_token(TokenType.IDENTIFIER, lexeme)
            return

        value = None
        if token_type in (TokenType.TRUE, TokenType.FALSE):
            value = token_type == TokenType.TRUE

        self._add_token(token_type, value)

    def _add_token(self, token_type: TokenType, value=None) -> None:
        lexeme = self.source[self._start:self.current]
        self.tokens.append(Token(token_type, lexeme, value, self.line))

    def _at_end(self) -> bool:
        return self.current >= len(self.source)

    def _advance(self) -> str:
        """Consume and return the current character."""
        char = self._peek()
        self.current += 1
        return char

    def _match(self, expected: str) -> bool:
        """Consume the current character if it is ``expected``."""
        if self._at_end() or self.source[self.current] != expected:
            return False

        self.current += 1
        return True

    def _peek(self) -> str:
        """Current character without advancing, '\\0' at end."""
        if self._at_end():
            return '\0'

        return self.source[self.current]

    def _peek_next(self) -> str:
        """Character after the current one, '\\0' past the end."""
        if self.current + 1 >= len(self.source):
            return '\0'

        return self.source[self.current + 1]


def tokenize_string(source: str) -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string

    Returns:
        List of tokens

    Raises:
        LoxError: If scanning fails
    """
    scanner = Scanner(source)
    scanner.scan_tokens()
    return scanner.tokens

