# evaluator.py

"""
Single-pass recursive-descent evaluator for signed 64-bit integer expressions.

Grammar:
    expression ::= term (("+" | "-") term)*
    term       ::= factor (("*" | "/") factor)*
    factor     ::= INT | "-" factor | "(" expression ")"

Each grammar rule pulls tokens from a Cursor and folds them straight into an
int, so neither a token list nor a syntax tree is ever built. All arithmetic
is checked against the signed 64-bit range. The first error raised aborts the
evaluation; nothing is caught here.
"""

import logging

from intcalc.cursor import I64_MAX, I64_MIN, Cursor, Token, TokenType
from intcalc.errors import (
    DivisionByZeroError,
    IntegerOverflowError,
    InvalidCharacterError,
    UnexpectedTokenError,
)

logger = logging.getLogger(__name__)


# ---------------------------
# Checked arithmetic
# ---------------------------

def _checked(value: int, operation: str) -> int:
    if value < I64_MIN or value > I64_MAX:
        raise IntegerOverflowError(operation)
    return value


def checked_add(a: int, b: int) -> int:
    return _checked(a + b, 'addition')


def checked_sub(a: int, b: int) -> int:
    return _checked(a - b, 'subtraction')


def checked_mul(a: int, b: int) -> int:
    return _checked(a * b, 'multiplication')


def checked_div(a: int, b: int) -> int:
    """Integer division truncating toward zero, like 64-bit machine division."""
    if b == 0:
        raise DivisionByZeroError()
    quotient = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        quotient = -quotient
    return _checked(quotient, 'division')


def checked_neg(a: int) -> int:
    return _checked(-a, 'negation')


# ---------------------------
# Evaluator
# ---------------------------

class Evaluator:
    """
    Recursive-descent evaluator over one line of input.

    An Evaluator owns its Cursor and is meant to be used for a single call to
    evaluate().
    """

    def __init__(self, text: str):
        self.text = text
        self.cursor = Cursor(text)

    def evaluate(self) -> int:
        """Evaluate the whole input; anything left after the expression is an error."""
        value = self.expression()
        token = self.cursor.next()
        if token.type != TokenType.EOF:
            self._fail(token, 'end of input')
        return value

    def expression(self) -> int:
        """
        expression : term ((PLUS|MINUS) term)*
        """
        logger.debug(f"Start evaluating expression from {self.cursor.peek()!r}")
        value = self.term()
        while self.cursor.peek().type in (TokenType.PLUS, TokenType.MINUS):
            op_token = self.cursor.next()
            logger.debug(f"Operate: {op_token.type}")
            rhs = self.term()
            if op_token.type == TokenType.PLUS:
                value = checked_add(value, rhs)
            else:
                value = checked_sub(value, rhs)
            logger.debug(f"New expression value {value}")
        return value

    def term(self) -> int:
        """
        term : factor ((MUL|DIV) factor)*
        """
        logger.debug(f"Start evaluating term from {self.cursor.peek()!r}")
        value = self.factor()
        while self.cursor.peek().type in (TokenType.MUL, TokenType.DIV):
            op_token = self.cursor.next()
            logger.debug(f"Operate: {op_token.type}")
            rhs = self.factor()
            if op_token.type == TokenType.MUL:
                value = checked_mul(value, rhs)
            else:
                value = checked_div(value, rhs)
            logger.debug(f"New term value {value}")
        return value

    def factor(self) -> int:
        """
        factor : INT | MINUS factor | LPAREN expression RPAREN

        Handles:
        - Integer literals (i.e. 42)
        - Negation, nested to any depth (i.e. -7, --7)
        - Parenthesized sub-expressions (i.e. (1+2))
        """
        token = self.cursor.peek()
        logger.debug(f"Evaluate {token!r} as factor")
        if token.type == TokenType.INT:
            self.cursor.next()
            return token.value
        if token.type == TokenType.MINUS:
            self.cursor.next()
            value = checked_neg(self.factor())
            logger.debug(f"New factor value {value}")
            return value
        if token.type == TokenType.LPAREN:
            self.cursor.next()
            value = self.expression()
            closing = self.cursor.next()
            if closing.type != TokenType.RPAREN:
                self._fail(closing, "')'")
            logger.debug(f"New factor value (via parentheses) {value}")
            return value
        if token.type == TokenType.INVALID:
            raise InvalidCharacterError(token.value, token.pos)
        raise UnexpectedTokenError(
            "integer, '-' or '('",
            token,
            f"Unexpected token in factor: {token.type} at position {token.pos}",
        )

    def _fail(self, token: Token, expected: str) -> None:
        if token.type == TokenType.INVALID:
            raise InvalidCharacterError(token.value, token.pos)
        raise UnexpectedTokenError(expected, token)


def evaluate(text: str) -> int:
    """
    Evaluate one arithmetic expression and return its signed 64-bit result.

    Raises a CalculatorError subclass on the first error encountered.
    """
    return Evaluator(text).evaluate()
