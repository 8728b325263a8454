"""
Expression tokenizer.

Scans the raw expression left to right, longest match first, into a flat
tuple of Token values. Invalid characters, numbers and identifiers are
reported immediately.
"""

import math
import string
from typing import Iterable

from exprcalc.errors import (
    EmptyExpressionError,
    InvalidCharacterError,
    InvalidNumberFormatError,
    UnknownFunctionOrConstantError,
)
from exprcalc.tokens import (
    CONSTANTS,
    UNARY_FUNCTIONS,
    VARIADIC_FUNCTIONS,
    Token,
    TokenKind,
)

_DIGITS = frozenset(string.digits)
_IDENT_START = frozenset(string.ascii_letters + "π")
_IDENT_CHARS = _IDENT_START | _DIGITS

_SINGLE_CHAR_OPERATORS = frozenset("+-/%^")
_PUNCTUATION = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ",": TokenKind.COMMA,
}


def tokenize(expression: str, variables: Iterable[str] = ()) -> tuple[Token, ...]:
    """Tokenize an expression string.

    Args:
        expression: Source text, e.g. ``"sqrt(16) + 2 * pi"``.
        variables: Names to emit as VARIABLE tokens instead of rejecting
            them as unknown identifiers.

    Raises:
        EmptyExpressionError: The expression is empty or whitespace only.
        InvalidCharacterError: A character outside the supported alphabet.
        InvalidNumberFormatError: A malformed or non-finite literal.
        UnknownFunctionOrConstantError: An unrecognised identifier.
    """
    if not expression or not expression.strip():
        raise EmptyExpressionError()

    bound = frozenset(variables)
    tokens: list[Token] = []
    i = 0
    n = len(expression)

    while i < n:
        c = expression[i]

        if c.isspace():
            i += 1
            continue

        if c in _DIGITS or c == ".":
            j = _scan_number(expression, i)
            tokens.append(Token(TokenKind.NUMBER, _parse_number(expression[i:j], i), i))
            i = j
            continue

        # ** must win over *
        if c == "*":
            if i + 1 < n and expression[i + 1] == "*":
                tokens.append(Token(TokenKind.OPERATOR, "**", i))
                i += 2
            else:
                tokens.append(Token(TokenKind.OPERATOR, "*", i))
                i += 1
            continue

        if c in _SINGLE_CHAR_OPERATORS:
            tokens.append(Token(TokenKind.OPERATOR, c, i))
            i += 1
            continue

        if c in _PUNCTUATION:
            tokens.append(Token(_PUNCTUATION[c], c, i))
            i += 1
            continue

        if c in _IDENT_START:
            j = i
            while j < n and expression[j] in _IDENT_CHARS:
                j += 1
            tokens.append(_identifier_token(expression[i:j], i, bound))
            i = j
            continue

        raise InvalidCharacterError(c, i)

    return tuple(tokens)


def _scan_number(text: str, start: int) -> int:
    """Return the end offset of the numeric literal starting at ``start``."""
    n = len(text)
    j = start
    while j < n and (text[j] in _DIGITS or text[j] == "."):
        j += 1

    mantissa = text[start:j]
    if mantissa.count(".") > 1:
        raise InvalidNumberFormatError(mantissa, start)

    # Exponent only counts when digits follow: "2e" is 2 then the constant e.
    if j < n and text[j] in "eE":
        k = j + 1
        if k < n and text[k] in "+-":
            k += 1
        if k < n and text[k] in _DIGITS:
            while k < n and text[k] in _DIGITS:
                k += 1
            j = k

    return j


def _parse_number(literal: str, position: int) -> float:
    try:
        value = float(literal)
    except ValueError:
        raise InvalidNumberFormatError(literal, position) from None
    if not math.isfinite(value):
        raise InvalidNumberFormatError(literal, position)
    return value


def _identifier_token(name: str, position: int, variables: frozenset[str]) -> Token:
    if name in CONSTANTS:
        return Token(TokenKind.CONSTANT, name, position)
    if name in UNARY_FUNCTIONS or name in VARIADIC_FUNCTIONS:
        return Token(TokenKind.FUNCTION, name, position)
    if name in variables:
        return Token(TokenKind.VARIABLE, name, position)
    raise UnknownFunctionOrConstantError(name)
