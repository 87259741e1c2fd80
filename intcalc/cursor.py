# cursor.py

"""
Character Cursor: a forward-only reader that decodes one token at a time.

The cursor never builds a token list. Each call to peek() or next() decodes
at most one token starting at the current position; a peeked token is kept
as the single lookahead so it is not decoded twice. Unsupported characters
are not rejected here: they come out as INVALID tokens and the evaluator
raises when it meets one where a token is expected.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from intcalc.config import TRACE
from intcalc.errors import IntegerOverflowError

logger = logging.getLogger(__name__)

# Signed 64-bit integer bounds
I64_MIN = -(2 ** 63)
I64_MAX = 2 ** 63 - 1

_I64_MAX_DIGITS = len(str(I64_MAX))


class TokenType:
    """Enumeration of token types."""
    INT = 'INT'
    PLUS = 'PLUS'
    MINUS = 'MINUS'
    MUL = 'MUL'
    DIV = 'DIV'
    LPAREN = 'LPAREN'
    RPAREN = 'RPAREN'
    EOF = 'EOF'
    INVALID = 'INVALID'


_SINGLE_CHAR_TOKENS = {
    '+': TokenType.PLUS,
    '-': TokenType.MINUS,
    '*': TokenType.MUL,
    '/': TokenType.DIV,
    '(': TokenType.LPAREN,
    ')': TokenType.RPAREN,
}


@dataclass
class Token:
    """A decoded token with its type, value and character position."""
    type: str
    value: Any
    pos: int

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value!r}, pos={self.pos})"


def _is_digit(ch: str) -> bool:
    # str.isdigit() also accepts non-ASCII digits such as '²'
    return '0' <= ch <= '9'


class Cursor:
    """
    Pull-based token source over one line of input.

    Exposes peek() (look at the next token without consuming it) and next()
    (consume and return it). At end of input both return an EOF token, as
    many times as they are called.
    """

    def __init__(self, text: str):
        self.text = text
        self.len = len(text)
        self._pos = 0
        self._lookahead: Optional[Tuple[Token, int]] = None

    @property
    def pos(self) -> int:
        """Index of the first character not yet consumed."""
        return self._pos

    def peek(self) -> Token:
        """Return the next token without consuming it."""
        if self._lookahead is None:
            self._lookahead = self._scan()
        return self._lookahead[0]

    def next(self) -> Token:
        """Consume and return the next token."""
        if self._lookahead is None:
            token, end = self._scan()
        else:
            token, end = self._lookahead
            self._lookahead = None
        self._pos = end
        logger.log(TRACE, f"Consumed {token!r}")
        return token

    def _scan(self) -> Tuple[Token, int]:
        """Decode the token starting at the current position. Returns (token, end position)."""
        i = self._pos
        while i < self.len and self.text[i].isspace():
            i += 1
        if i >= self.len:
            return Token(TokenType.EOF, None, i), i

        ch = self.text[i]
        if _is_digit(ch):
            return self._read_int(i)
        if ch in _SINGLE_CHAR_TOKENS:
            return Token(_SINGLE_CHAR_TOKENS[ch], ch, i), i + 1
        return Token(TokenType.INVALID, ch, i), i + 1

    def _read_int(self, start: int) -> Tuple[Token, int]:
        end = start
        while end < self.len and _is_digit(self.text[end]):
            end += 1
        raw = self.text[start:end]
        significant = raw.lstrip('0')
        # Length check first: int() refuses very long digit strings
        if len(significant) > _I64_MAX_DIGITS or int(significant or '0') > I64_MAX:
            raise IntegerOverflowError(
                'literal',
                f"Integer literal {raw} at position {start} does not fit in a signed 64-bit integer",
                start,
            )
        return Token(TokenType.INT, int(significant or '0'), start), end
