"""
Command-line interface for exprcalc.

Provides commands for:
- Evaluating expressions
- Numerical calculus on expressions in x
- Listing supported functions and constants
"""

from pathlib import Path
from typing import Callable, List, Optional

import typer
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from exprcalc.config import Settings, settings, settings_from_yaml
from exprcalc.errors import EvaluationError
from exprcalc.logging_setup import configure_logging
from exprcalc.models import CalculationResult, FunctionInfo, Operation

app = typer.Typer(
    name="exprcalc",
    help="exprcalc - safe mathematical expression evaluator",
    add_completion=False,
)

console = Console(highlight=False)
err_console = Console(stderr=True)


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML settings file"),
    json_output: bool = typer.Option(False, "--json", help="Print results as JSON"),
):
    """Evaluate expressions and run numerical calculus on them."""
    cfg = settings
    if config is not None:
        if not config.exists():
            err_console.print(f"[red]Config file not found: {escape(str(config))}[/]")
            raise typer.Exit(1)
        try:
            cfg = settings_from_yaml(config)
        except (ValueError, yaml.YAMLError) as e:
            err_console.print(f"[red]Invalid config file:[/] {escape(str(e))}")
            raise typer.Exit(1)
    configure_logging(cfg.log_level)
    ctx.obj = {"settings": cfg, "json": json_output}


# =============================================================================
# Evaluation Commands
# =============================================================================

@app.command("eval")
def eval_(
    ctx: typer.Context,
    expression: List[str] = typer.Argument(..., help="Expression (arguments are joined with spaces)"),
):
    """Evaluate a mathematical expression."""
    from exprcalc.evaluator import evaluate

    cfg: Settings = ctx.obj["settings"]
    text = " ".join(expression)
    _report(
        ctx,
        Operation.EVAL,
        text,
        lambda: evaluate(text, max_depth=cfg.max_nesting_depth),
    )


@app.command("functions")
def functions_():
    """List supported functions and constants."""
    table = Table(title="Functions and Constants")
    table.add_column("Name", style="cyan")
    table.add_column("Kind", style="magenta")
    table.add_column("Arity", style="green")

    for info in _function_catalog():
        table.add_row(info.name, info.kind, info.arity)

    console.print(table)


# =============================================================================
# Calculus Commands
# =============================================================================

@app.command()
def derivative(
    ctx: typer.Context,
    template: str = typer.Argument(..., help="Expression in x"),
    at: float = typer.Option(..., "--at", help="Point to differentiate at"),
):
    """Numerical derivative of an expression in x."""
    from exprcalc import calculus

    cfg: Settings = ctx.obj["settings"]
    _report(
        ctx,
        Operation.DERIVATIVE,
        template,
        lambda: calculus.derivative(template, at, step=cfg.derivative_step),
        at=at,
    )


@app.command()
def integrate(
    ctx: typer.Context,
    template: str = typer.Argument(..., help="Expression in x"),
    lower: float = typer.Option(..., "--from", help="Lower bound"),
    upper: float = typer.Option(..., "--to", help="Upper bound"),
    intervals: Optional[int] = typer.Option(
        None, "--intervals", "-n", min=2, help="Simpson intervals"
    ),
):
    """Definite integral of an expression in x."""
    from exprcalc import calculus

    cfg: Settings = ctx.obj["settings"]
    n = cfg.integration_intervals if intervals is None else intervals
    _report(
        ctx,
        Operation.INTEGRATE,
        template,
        lambda: calculus.integrate(template, lower, upper, intervals=n),
        lower=lower,
        upper=upper,
        intervals=n,
    )


@app.command()
def root(
    ctx: typer.Context,
    template: str = typer.Argument(..., help="Expression in x"),
    guess: float = typer.Option(0.0, "--guess", "-g", help="Starting point"),
):
    """Find a root of an expression in x."""
    from exprcalc import calculus

    cfg: Settings = ctx.obj["settings"]

    def _solve() -> tuple[float, float]:
        x = calculus.find_root(
            template,
            guess,
            tolerance=cfg.root_tolerance,
            max_iterations=cfg.root_max_iterations,
        )
        return x, x

    _report(ctx, Operation.ROOT, template, _solve, guess=guess)


@app.command()
def limit(
    ctx: typer.Context,
    template: str = typer.Argument(..., help="Expression in x"),
    at: float = typer.Option(..., "--at", help="Point approached by x"),
):
    """Limit of an expression in x."""
    from exprcalc import calculus

    cfg: Settings = ctx.obj["settings"]
    _report(
        ctx,
        Operation.LIMIT,
        template,
        lambda: calculus.limit(template, at, step=cfg.limit_step, tolerance=cfg.limit_tolerance),
        at=at,
    )


@app.command()
def extremum(
    ctx: typer.Context,
    template: str = typer.Argument(..., help="Expression in x"),
    lower: float = typer.Option(..., "--from", help="Lower bound"),
    upper: float = typer.Option(..., "--to", help="Upper bound"),
    maximum: bool = typer.Option(False, "--max", help="Search for a maximum instead of a minimum"),
):
    """Find a minimum (or maximum) of an expression in x on an interval."""
    from exprcalc import calculus

    cfg: Settings = ctx.obj["settings"]
    kind = "max" if maximum else "min"

    def _search() -> tuple[float, float]:
        x, value = calculus.find_extremum(
            template, lower, upper, kind=kind, tolerance=cfg.extremum_tolerance
        )
        return value, x

    _report(
        ctx,
        Operation.EXTREMUM,
        template,
        _search,
        lower=lower,
        upper=upper,
        kind=kind,
    )


# =============================================================================
# Helpers
# =============================================================================

def _report(
    ctx: typer.Context,
    operation: Operation,
    expression: str,
    compute: Callable[[], float | tuple[float, float]],
    **parameters,
) -> None:
    """Run a calculation and print it, exiting with status 1 on failure."""
    try:
        outcome = compute()
    except (EvaluationError, ValueError) as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1)

    x = None
    if isinstance(outcome, tuple):
        outcome, x = outcome

    result = CalculationResult(
        operation=operation,
        expression=expression,
        result=outcome,
        x=x,
        parameters=parameters,
    )

    if ctx.obj["json"]:
        typer.echo(result.model_dump_json())
        return

    label = operation.value.capitalize()
    if x is not None and operation == Operation.EXTREMUM:
        console.print(f"{label} Result: {format_number(result.result)} at x = {format_number(x)}")
    else:
        console.print(f"{label} Result: {format_number(result.result)}")


def format_number(value: float) -> str:
    """Render integral floats without a trailing .0."""
    if value.is_integer() and abs(value) < 1e15:
        return str(int(value))
    return repr(value)


def _function_catalog() -> list[FunctionInfo]:
    from exprcalc.tokens import CONSTANTS, UNARY_FUNCTIONS, VARIADIC_FUNCTIONS

    catalog = [FunctionInfo(name=name, kind="function", arity="1") for name in sorted(UNARY_FUNCTIONS)]
    catalog += [FunctionInfo(name=name, kind="function", arity="1+") for name in sorted(VARIADIC_FUNCTIONS)]
    catalog += [FunctionInfo(name=name, kind="constant", arity="-") for name in CONSTANTS]
    return catalog


if __name__ == "__main__":
    app()
