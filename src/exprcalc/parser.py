"""
Recursive-descent parser with immediate evaluation.

Each grammar rule consumes its production and returns the numeric value
directly; no syntax tree is built.

    expression     := additive
    additive       := multiplicative (('+'|'-') multiplicative)*
    multiplicative := unary (('*'|'/'|'%') unary)*
    unary          := '-' unary | exponent
    exponent       := primary (('^'|'**') unary)?
    primary        := NUMBER | CONSTANT | VARIABLE | call | '(' expression ')'
    call           := FUNCTION '(' [expression (',' expression)*] ')'

Additive and multiplicative levels fold in a loop (left-associative);
the right operand of an exponent is a unary, which recurses back into
exponent (right-associative). Unary minus sits above exponent, so ``-2^2``
is ``-(2^2)`` while ``2^-1`` is still ``0.5``.
"""

import math
import sys
from contextlib import contextmanager
from typing import Iterator, Mapping, Sequence

from exprcalc.errors import (
    DivisionByZeroError,
    MaxNestingExceededError,
    MissingOperandError,
    TrailingTokensError,
    UnexpectedTokenError,
    UnmatchedParenthesesError,
)
from exprcalc.functions import resolve_constant, resolve_function
from exprcalc.tokens import (
    ADDITIVE_OPERATORS,
    EXPONENT_OPERATORS,
    MULTIPLICATIVE_OPERATORS,
    Token,
    TokenKind,
)

DEFAULT_MAX_DEPTH = 100

# Python frames per nesting level on the deepest path (a function call)
FRAMES_PER_LEVEL = 7

# Largest accepted bound, leaving headroom below the interpreter recursion limit
MAX_NESTING_LIMIT = max(DEFAULT_MAX_DEPTH, (sys.getrecursionlimit() - 200) // FRAMES_PER_LEVEL)


def check_parentheses(tokens: Sequence[Token]) -> None:
    """Verify that parentheses balance across the whole token sequence."""
    depth = 0
    for token in tokens:
        if token.kind == TokenKind.LPAREN:
            depth += 1
        elif token.kind == TokenKind.RPAREN:
            depth -= 1
            if depth < 0:
                raise UnmatchedParenthesesError()
    if depth != 0:
        raise UnmatchedParenthesesError()


def remainder(left: float, right: float) -> float:
    """Floating remainder whose sign follows the dividend (C ``fmod``).

    This is not Euclidean modulo: ``-7 % 3`` is ``-1``.
    """
    try:
        return math.fmod(left, right)
    except ValueError:
        # fmod(x, 0) and fmod(inf, y)
        return math.nan


def power(base: float, exponent: float) -> float:
    """Real exponentiation; undefined results are NaN rather than errors."""
    try:
        return math.pow(base, exponent)
    except (OverflowError, ValueError) as e:
        odd = float(exponent).is_integer() and exponent % 2 == 1
        if isinstance(e, OverflowError) or base == 0:
            # Odd integer powers keep the sign of the base, including -0.0
            return math.copysign(math.inf, base) if odd else math.inf
        return math.nan


class Parser:
    """Single-use parser over one token sequence.

    The cursor only moves forward; one token of lookahead is enough at
    every level of the grammar.
    """

    def __init__(
        self,
        tokens: Sequence[Token],
        bindings: Mapping[str, float] | None = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        if not 1 <= max_depth <= MAX_NESTING_LIMIT:
            raise ValueError(
                f"max_depth must be between 1 and {MAX_NESTING_LIMIT}, got {max_depth}"
            )
        self.tokens = tokens
        self.bindings = dict(bindings or {})
        self.max_depth = max_depth
        self.index = 0
        self._depth = 0

    def parse(self) -> float:
        """Parse and evaluate the full token sequence."""
        check_parentheses(self.tokens)
        try:
            result = self.parse_expression()
        except RecursionError:
            # Caller stack already deep; the configured bound was not reached
            raise MaxNestingExceededError(self.max_depth) from None
        if self.index < len(self.tokens):
            raise TrailingTokensError()
        return result

    # -------------------------------------------------------------------------
    # Cursor
    # -------------------------------------------------------------------------

    def _current(self) -> Token | None:
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def _advance(self) -> Token:
        token = self.tokens[self.index]
        self.index += 1
        return token

    def _at(self, kind: TokenKind) -> bool:
        token = self._current()
        return token is not None and token.kind == kind

    def _current_operator(self, allowed: frozenset[str]) -> str | None:
        token = self._current()
        if token is not None and token.kind == TokenKind.OPERATOR and token.value in allowed:
            return token.value
        return None

    def _expect(self, kind: TokenKind, description: str) -> Token:
        token = self._current()
        if token is None:
            raise UnexpectedTokenError(f"Expected {description}, got end of expression")
        if token.kind != kind:
            raise UnexpectedTokenError(
                f"Expected {description}, got {token.describe()} at position {token.position}"
            )
        return self._advance()

    @contextmanager
    def _nested(self) -> Iterator[None]:
        self._depth += 1
        if self._depth > self.max_depth:
            raise MaxNestingExceededError(self.max_depth)
        try:
            yield
        finally:
            self._depth -= 1

    # -------------------------------------------------------------------------
    # Grammar rules
    # -------------------------------------------------------------------------

    def parse_expression(self) -> float:
        return self.parse_additive()

    def parse_additive(self) -> float:
        left = self.parse_multiplicative()
        op = self._current_operator(ADDITIVE_OPERATORS)
        while op is not None:
            self._advance()
            right = self.parse_multiplicative()
            left = left + right if op == "+" else left - right
            op = self._current_operator(ADDITIVE_OPERATORS)
        return left

    def parse_multiplicative(self) -> float:
        left = self.parse_unary()
        op = self._current_operator(MULTIPLICATIVE_OPERATORS)
        while op is not None:
            self._advance()
            right = self.parse_unary()
            if op == "*":
                left = left * right
            elif op == "/":
                if right == 0:
                    raise DivisionByZeroError()
                left = left / right
            else:
                left = remainder(left, right)
            op = self._current_operator(MULTIPLICATIVE_OPERATORS)
        return left

    def parse_unary(self) -> float:
        token = self._current()
        if token is None:
            raise MissingOperandError()
        if token.kind == TokenKind.OPERATOR and token.value == "-":
            self._advance()
            with self._nested():
                return -self.parse_unary()
        return self.parse_exponent()

    def parse_exponent(self) -> float:
        base = self.parse_primary()
        if self._current_operator(EXPONENT_OPERATORS) is None:
            return base
        self._advance()
        with self._nested():
            exponent = self.parse_unary()
        return power(base, exponent)

    def parse_primary(self) -> float:
        token = self._current()
        if token is None:
            raise MissingOperandError()

        if token.kind == TokenKind.NUMBER:
            self._advance()
            return token.value

        if token.kind == TokenKind.CONSTANT:
            self._advance()
            return resolve_constant(token.value)

        if token.kind == TokenKind.VARIABLE:
            self._advance()
            return float(self.bindings[token.value])

        if token.kind == TokenKind.FUNCTION:
            self._advance()
            with self._nested():
                args = self._parse_arguments(token.value)
            return resolve_function(token.value, args)

        if token.kind == TokenKind.LPAREN:
            self._advance()
            with self._nested():
                value = self.parse_expression()
            self._expect(TokenKind.RPAREN, "')'")
            return value

        raise UnexpectedTokenError(
            f"Unexpected token: {token.describe()} at position {token.position}"
        )

    def _parse_arguments(self, name: str) -> list[float]:
        self._expect(TokenKind.LPAREN, f"'(' after function {name}")
        args: list[float] = []

        if self._at(TokenKind.RPAREN):
            self._advance()
            return args

        args.append(self.parse_expression())
        while self._at(TokenKind.COMMA):
            self._advance()
            args.append(self.parse_expression())

        self._expect(TokenKind.RPAREN, "')' or ','")
        return args
