"""
Error handling for the Lox scanner.

Provides error reporting with the source line, a short error code and
help text for the common mistakes.
"""

from typing import Optional, List
from dataclasses import dataclass


@dataclass
class Diagnostic:
    """Base class for diagnostics (errors, warnings)."""
    message: str
    line: int
    severity: str  # "error", "warning"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        code = f"[{self.code}]" if self.code else ""
        result = f"{severity_prefix}{code}: {self.message}\n"
        result += f"  --> line {self.line}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result

    def short(self) -> str:
        """One line form, ``[Line <n>] <message>``."""
        return f"[Line {self.line}] {self.message}"


class LoxError(Exception):
    """
    Exception raised when the scanner encounters a lexical error.

    The first lexical error terminates the scan pass.
    """

    def __init__(
        self,
        message: str,
        line_number: int,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.line_number = line_number
        self.diagnostic = Diagnostic(
            message=message,
            line=line_number,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    def __str__(self) -> str:
        return self.diagnostic.short()


# Common error codes for categorization
ERROR_CODES = {
    "L001": "Unrecognized character",
    "L002": "Unclosed string",
}

# Characters people reach for from other languages
_OPERATOR_ALTERNATIVES = {
    '&': ['and'],
    '|': ['or'],
    '%': ['/'],
    "'": ['"'],
}


def suggest_alternatives(char: str) -> List[str]:
    """Suggest Lox spellings for a character borrowed from another language."""
    return _OPERATOR_ALTERNATIVES.get(char, [])


def create_unrecognized_character_error(char: str, line: int) -> LoxError:
    """Create an error for a character the scanner cannot classify."""
    suggestions = suggest_alternatives(char)

    if suggestions:
        help_text = f"Did you mean: {', '.join(suggestions)}?"
    elif char.isprintable() and char.isascii():
        help_text = f"The character '{char}' is not valid in Lox source code."
    else:
        help_text = f"Non-ASCII or non-printable character (U+{ord(char):04X}) is not allowed."

    return LoxError(
        message=f"Unrecognized character '{char}'",
        line_number=line,
        code="L001",
        help_text=help_text,
        suggestions=suggestions
    )


def create_unclosed_string_error(line: int) -> LoxError:
    """Create an error for a string literal that runs to the end of input."""
    return LoxError(
        message="Unclosed string",
        line_number=line,
        code="L002",
        help_text='String literals must be closed with a matching " quote.',
        suggestions=['Add a closing " quote']
    )
