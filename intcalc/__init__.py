"""Single-pass evaluator for signed 64-bit integer arithmetic expressions."""

from intcalc.errors import (
    CalculatorError,
    DivisionByZeroError,
    ErrorKind,
    IntegerOverflowError,
    InvalidCharacterError,
    UnexpectedTokenError,
)
from intcalc.evaluator import evaluate

__version__ = '0.1.0'

__all__ = [
    'CalculatorError',
    'DivisionByZeroError',
    'ErrorKind',
    'IntegerOverflowError',
    'InvalidCharacterError',
    'UnexpectedTokenError',
    'evaluate',
]
