"""
Function and constant resolution.

Applies the named functions recognised by the lexer to already-evaluated
arguments, enforcing each function's arity and real-number domain.
"""

import math
from typing import Callable, Sequence

from exprcalc.errors import (
    DomainError,
    UnknownFunctionOrConstantError,
    WrongNumberOfArgumentsError,
)
from exprcalc.tokens import CONSTANTS, UNARY_FUNCTIONS, VARIADIC_FUNCTIONS


def _sqrt(x: float) -> float:
    if x < 0:
        raise DomainError("Square root of negative number is not allowed")
    return math.sqrt(x)


def _log(x: float) -> float:
    if x <= 0:
        raise DomainError("Logarithm of zero or negative number is not allowed")
    return math.log(x)


def _log10(x: float) -> float:
    if x <= 0:
        raise DomainError("Logarithm of zero or negative number is not allowed")
    return math.log10(x)


def _trig(fn: Callable[[float], float]) -> Callable[[float], float]:
    def apply(x: float) -> float:
        # math.sin and friends raise on infinities instead of returning NaN
        if math.isinf(x):
            return math.nan
        return fn(x)
    return apply


def _integral(fn: Callable[[float], int]) -> Callable[[float], float]:
    def apply(x: float) -> float:
        if not math.isfinite(x):
            return x
        return float(fn(x))
    return apply


def _round_half_up(x: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    lower = math.floor(x)
    return lower + 1 if x - lower >= 0.5 else lower


_UNARY: dict[str, Callable[[float], float]] = {
    "sqrt": _sqrt,
    "abs": abs,
    "sin": _trig(math.sin),
    "cos": _trig(math.cos),
    "tan": _trig(math.tan),
    "log": _log,
    "log10": _log10,
    "ceil": _integral(math.ceil),
    "floor": _integral(math.floor),
    "round": _integral(_round_half_up),
}


def resolve_function(name: str, args: Sequence[float]) -> float:
    """Evaluate a named function on its arguments.

    Unary functions take exactly one argument; ``max`` and ``min`` take one
    or more.

    Raises:
        WrongNumberOfArgumentsError: Arity violated.
        DomainError: ``sqrt`` of a negative, ``log``/``log10`` of a
            non-positive argument.
        UnknownFunctionOrConstantError: ``name`` is not a known function.
    """
    if name in UNARY_FUNCTIONS:
        if len(args) != 1:
            raise WrongNumberOfArgumentsError(name, "1 argument", len(args))
        return float(_UNARY[name](args[0]))

    if name in VARIADIC_FUNCTIONS:
        if len(args) < 1:
            raise WrongNumberOfArgumentsError(name, "at least 1 argument", len(args))
        if any(math.isnan(a) for a in args):
            return math.nan
        return float(max(args) if name == "max" else min(args))

    raise UnknownFunctionOrConstantError(name)


def resolve_constant(name: str) -> float:
    """Look up a symbolic constant (``pi``, ``π``, ``e``)."""
    try:
        return CONSTANTS[name]
    except KeyError:
        raise UnknownFunctionOrConstantError(name) from None
