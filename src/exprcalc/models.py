"""
Result models for exprcalc.

Used by the CLI to render calculations as JSON.
"""

from enum import Enum

from pydantic import BaseModel, Field


class Operation(str, Enum):
    """Calculations exposed by the CLI."""
    EVAL = "eval"
    DERIVATIVE = "derivative"
    INTEGRATE = "integrate"
    ROOT = "root"
    LIMIT = "limit"
    EXTREMUM = "extremum"


class CalculationResult(BaseModel):
    """Outcome of a single calculation."""
    operation: Operation
    expression: str
    result: float
    x: float | None = Field(default=None, description="Location of a root or extremum")
    parameters: dict[str, float | str] = Field(default_factory=dict)


class FunctionInfo(BaseModel):
    """A name the evaluator understands."""
    name: str
    kind: str
    arity: str
