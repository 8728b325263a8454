"""
exprcalc - Safe Mathematical Expression Evaluator

Evaluates arithmetic expression strings with a hand-written lexer and a
recursive-descent parser instead of the host interpreter's ``eval``, and
builds numerical calculus (derivatives, integrals, roots, limits, extrema)
on top of it.
"""

from exprcalc.errors import (
    CalculusError,
    ConvergenceError,
    DivisionByZeroError,
    DomainError,
    EmptyExpressionError,
    EvaluationError,
    ExpressionSyntaxError,
    InvalidCharacterError,
    InvalidNumberFormatError,
    LimitNotFoundError,
    MaxNestingExceededError,
    MissingOperandError,
    TrailingTokensError,
    UnexpectedTokenError,
    UnknownFunctionOrConstantError,
    UnmatchedParenthesesError,
    WrongNumberOfArgumentsError,
)
from exprcalc.evaluator import evaluate, evaluate_at

__version__ = "1.0.0"

__all__ = [
    "evaluate",
    "evaluate_at",
    "CalculusError",
    "ConvergenceError",
    "DivisionByZeroError",
    "DomainError",
    "EmptyExpressionError",
    "EvaluationError",
    "ExpressionSyntaxError",
    "InvalidCharacterError",
    "InvalidNumberFormatError",
    "LimitNotFoundError",
    "MaxNestingExceededError",
    "MissingOperandError",
    "TrailingTokensError",
    "UnexpectedTokenError",
    "UnknownFunctionOrConstantError",
    "UnmatchedParenthesesError",
    "WrongNumberOfArgumentsError",
]
