# errors.py

"""
Error classes for the calculator.

Every input-driven failure is raised as a subclass of CalculatorError. The
evaluator never catches them: the first error raised ends the evaluation and
reaches the caller unchanged.
"""

from enum import Enum
from typing import Any, Optional


class ErrorKind(Enum):
    INVALID_CHARACTER = 'Invalid character'
    OVERFLOW = 'Overflow'
    DIVISION_BY_ZERO = 'Division by zero'
    UNEXPECTED_TOKEN = 'Unexpected token'


class CalculatorError(Exception):
    """Base class for calculator errors."""
    kind: ErrorKind

    def __init__(self, message: str, pos: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.pos = pos

    def describe(self) -> str:
        """Return the message prefixed with the error kind label."""
        return f"{self.kind.value}: {self.message}"


class InvalidCharacterError(CalculatorError):
    """Raised when an unsupported character is consumed where a token is expected."""
    kind = ErrorKind.INVALID_CHARACTER

    def __init__(self, char: str, pos: int):
        super().__init__(f"Unexpected character {char!r} at position {pos}", pos)
        self.char = char


class IntegerOverflowError(CalculatorError):
    """Raised when a literal or an arithmetic result leaves the signed 64-bit range."""
    kind = ErrorKind.OVERFLOW

    def __init__(self, operation: str, message: Optional[str] = None, pos: Optional[int] = None):
        super().__init__(message or f"Overflow on {operation}", pos)
        self.operation = operation


class DivisionByZeroError(CalculatorError):
    """Raised when the right operand of a division evaluates to 0."""
    kind = ErrorKind.DIVISION_BY_ZERO

    def __init__(self, pos: Optional[int] = None):
        super().__init__("Division by zero", pos)


class UnexpectedTokenError(CalculatorError):
    """Raised when the grammar requires a different token than the one found."""
    kind = ErrorKind.UNEXPECTED_TOKEN

    def __init__(self, expected: Optional[str], found: Any, message: Optional[str] = None):
        pos = getattr(found, 'pos', None)
        if message is None:
            message = f"Expected {expected}, got {found.type} at position {pos}"
        super().__init__(message, pos)
        self.expected = expected
        self.found = found
