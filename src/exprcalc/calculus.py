"""
Numerical calculus over one-variable expression templates.

Every helper takes a template in the free variable ``x`` (e.g.
``"x^2 - 2"``) and samples it through ``evaluate_at``. Step sizes and
tolerances default to the values in ``exprcalc.config.settings``.
"""

import math
from typing import Callable, Literal

import structlog

from exprcalc.config import settings
from exprcalc.errors import (
    ConvergenceError,
    DivisionByZeroError,
    DomainError,
    LimitNotFoundError,
)
from exprcalc.evaluator import evaluate_at

logger = structlog.get_logger()

_INV_PHI = (math.sqrt(5) - 1) / 2
_LIMIT_REFINEMENTS = 5


def _sampler(template: str) -> Callable[[float], float]:
    def f(x: float) -> float:
        return evaluate_at(template, x)
    return f


def _close(a: float, b: float, tolerance: float) -> bool:
    return abs(a - b) <= tolerance * max(1.0, abs(a), abs(b))


def _positive(name: str, value: float | None, default: float) -> float:
    """Return ``value``, or ``default`` when it is None; must be positive."""
    if value is None:
        value = default
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


# =============================================================================
# Differentiation and integration
# =============================================================================

def derivative(template: str, x: float, step: float | None = None) -> float:
    """Central-difference approximation of f'(x)."""
    h = _positive("step", step, settings.derivative_step)
    f = _sampler(template)
    return (f(x + h) - f(x - h)) / (2 * h)


def integrate(
    template: str,
    lower: float,
    upper: float,
    intervals: int | None = None,
) -> float:
    """Definite integral by composite Simpson's rule.

    An odd interval count is rounded up to the next even number. Swapped
    bounds give the negated integral.
    """
    n = settings.integration_intervals if intervals is None else intervals
    if n < 2:
        raise ValueError("At least 2 intervals are required")
    if n % 2:
        n += 1
    if lower == upper:
        return 0.0

    f = _sampler(template)
    h = (upper - lower) / n
    total = f(lower) + f(upper)
    for i in range(1, n):
        total += (4 if i % 2 else 2) * f(lower + i * h)
    return total * h / 3


# =============================================================================
# Root finding
# =============================================================================

def find_root(
    template: str,
    guess: float = 0.0,
    tolerance: float | None = None,
    max_iterations: int | None = None,
) -> float:
    """Find a root of the template with Newton's method.

    Raises:
        ConvergenceError: The derivative vanishes, the iterate leaves the
            finite reals, or the iteration budget runs out.
    """
    tol = _positive("tolerance", tolerance, settings.root_tolerance)
    iterations = _positive("max_iterations", max_iterations, settings.root_max_iterations)
    f = _sampler(template)

    x = guess
    for iteration in range(iterations):
        fx = f(x)
        if not math.isfinite(fx):
            raise ConvergenceError(f"Function is not finite at x = {x}")
        if abs(fx) < tol:
            logger.debug("Root found", template=template, x=x, iterations=iteration)
            return x

        slope = derivative(template, x)
        if slope == 0 or not math.isfinite(slope):
            raise ConvergenceError(f"Derivative vanished at x = {x}")

        next_x = x - fx / slope
        if abs(next_x - x) < tol:
            logger.debug("Root found", template=template, x=next_x, iterations=iteration + 1)
            return next_x
        x = next_x

    raise ConvergenceError(
        f"Root finding did not converge after {iterations} iterations"
    )


# =============================================================================
# Limits and extrema
# =============================================================================

def _approach(
    f: Callable[[float], float],
    x: float,
    direction: int,
    step: float,
    tolerance: float,
) -> float | None:
    """Approach ``x`` from one side; None when that side is undefined."""
    values = []
    h = step
    for _ in range(_LIMIT_REFINEMENTS):
        try:
            value = f(x + direction * h)
        except (DivisionByZeroError, DomainError):
            return None
        if not math.isfinite(value):
            return None
        values.append(value)
        h /= 10

    if not _close(values[-1], values[-2], tolerance):
        raise LimitNotFoundError(f"Function diverges as x approaches {x}")
    return values[-1]


def limit(
    template: str,
    x: float,
    step: float | None = None,
    tolerance: float | None = None,
) -> float:
    """Limit of the template as the variable approaches ``x``.

    Returns f(x) when it is defined and finite. Otherwise both sides are
    approached with shrinking steps; a single defined side gives a one-sided
    limit.

    Raises:
        LimitNotFoundError: The sides disagree, diverge or are both undefined.
    """
    h = _positive("step", step, settings.limit_step)
    tol = _positive("tolerance", tolerance, settings.limit_tolerance)
    f = _sampler(template)

    try:
        value = f(x)
    except (DivisionByZeroError, DomainError):
        value = math.nan
    if math.isfinite(value):
        return value

    left = _approach(f, x, -1, h, tol)
    right = _approach(f, x, 1, h, tol)
    logger.debug("Limit approach", template=template, x=x, left=left, right=right)

    if left is None and right is None:
        raise LimitNotFoundError(f"Function is undefined around x = {x}")
    if left is None:
        return right
    if right is None:
        return left
    if not _close(left, right, tol):
        raise LimitNotFoundError(
            f"Left and right limits differ at x = {x}: {left} vs {right}"
        )
    return (left + right) / 2


def find_extremum(
    template: str,
    lower: float,
    upper: float,
    kind: Literal["min", "max"] = "min",
    tolerance: float | None = None,
) -> tuple[float, float]:
    """Locate a minimum or maximum on [lower, upper] by golden-section search.

    Returns:
        ``(x, f(x))`` at the extremum found.
    """
    if kind not in ("min", "max"):
        raise ValueError(f"kind must be 'min' or 'max', got {kind!r}")
    tol = _positive("tolerance", tolerance, settings.extremum_tolerance)
    f = _sampler(template)
    sign = 1.0 if kind == "min" else -1.0

    a, b = min(lower, upper), max(lower, upper)
    c = b - _INV_PHI * (b - a)
    d = a + _INV_PHI * (b - a)
    fc, fd = sign * f(c), sign * f(d)

    # The bracket shrinks by _INV_PHI per step; a fixed count avoids looping
    # forever when tol is finer than the float spacing near the bracket.
    steps = 0
    if b - a > tol:
        steps = math.ceil(math.log(tol / (b - a)) / math.log(_INV_PHI))
    for _ in range(steps):
        if fc < fd:
            b, d, fd = d, c, fc
            c = b - _INV_PHI * (b - a)
            fc = sign * f(c)
        else:
            a, c, fc = c, d, fd
            d = a + _INV_PHI * (b - a)
            fd = sign * f(d)

    x = (a + b) / 2
    return x, f(x)
