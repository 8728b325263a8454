"""
Public evaluation entry points.

``evaluate`` computes a closed expression. ``evaluate_at`` computes a
one-variable template with ``x`` bound to a value; the value is never
spliced into the source text, so ``-x^2`` at ``x = -3`` is ``-9``.
"""

import structlog

from exprcalc.config import settings
from exprcalc.lexer import tokenize
from exprcalc.parser import Parser

logger = structlog.get_logger()

VARIABLE_NAME = "x"


def evaluate(expression: str, *, max_depth: int | None = None) -> float:
    """Evaluate a mathematical expression string.

    Supports ``+ - * / % ^ **``, parentheses, unary minus, the functions
    ``sqrt abs sin cos tan log log10 ceil floor round max min`` and the
    constants ``pi``/``π`` and ``e``.

    Raises:
        EvaluationError: A subclass describing the first failure.
        ValueError: ``max_depth`` is outside the accepted range.
    """
    if max_depth is None:
        max_depth = settings.max_nesting_depth
    tokens = tokenize(expression)
    parser = Parser(tokens, max_depth=max_depth)
    result = parser.parse()
    logger.debug("Evaluated expression", expression=expression, result=result)
    return result


def evaluate_at(template: str, x: float, *, max_depth: int | None = None) -> float:
    """Evaluate a template in the free variable ``x`` at the given value."""
    if max_depth is None:
        max_depth = settings.max_nesting_depth
    tokens = tokenize(template, variables=(VARIABLE_NAME,))
    parser = Parser(
        tokens,
        bindings={VARIABLE_NAME: x},
        max_depth=max_depth,
    )
    return parser.parse()
