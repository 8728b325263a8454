"""
Token types and the fixed lookup tables shared by the lexer, parser and
function resolver.

The tables are built once at import time and exposed through read-only
views (frozenset / MappingProxyType).
"""

import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType


# =============================================================================
# Tokens
# =============================================================================

class TokenKind(str, Enum):
    """Kinds of lexical tokens."""
    NUMBER = "number"
    OPERATOR = "operator"
    FUNCTION = "function"
    CONSTANT = "constant"
    VARIABLE = "variable"
    LPAREN = "lparen"
    RPAREN = "rparen"
    COMMA = "comma"


@dataclass(frozen=True)
class Token:
    """A single lexical token.

    ``value`` is a float for NUMBER tokens and the source text for every
    other kind. ``position`` is the 0-based offset into the expression.
    """
    kind: TokenKind
    value: float | str
    position: int = 0

    def describe(self) -> str:
        if self.kind == TokenKind.NUMBER:
            return f"number {self.value:g}"
        return f"{self.kind.value} '{self.value}'"


# =============================================================================
# Lookup tables
# =============================================================================

PRECEDENCE = MappingProxyType({
    "+": 2,
    "-": 2,
    "*": 3,
    "/": 3,
    "%": 3,
    "^": 4,
    "**": 4,
})

RIGHT_ASSOCIATIVE = frozenset({"^", "**"})

# One operator set per binary grammar level
ADDITIVE_OPERATORS = frozenset(op for op, prec in PRECEDENCE.items() if prec == 2)
MULTIPLICATIVE_OPERATORS = frozenset(op for op, prec in PRECEDENCE.items() if prec == 3)
EXPONENT_OPERATORS = frozenset(op for op, prec in PRECEDENCE.items() if prec == 4)

UNARY_FUNCTIONS = frozenset({
    "sqrt", "abs", "sin", "cos", "tan", "log", "log10", "ceil", "floor", "round",
})
VARIADIC_FUNCTIONS = frozenset({"max", "min"})

CONSTANTS = MappingProxyType({
    "pi": math.pi,
    "π": math.pi,
    "e": math.e,
})
