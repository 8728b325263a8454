"""
Exception hierarchy for exprcalc.

Every failure during evaluation is raised as a subclass of EvaluationError
at the point where it is detected. Nothing is recovered locally, so the
first error aborts the whole call.
"""


class EvaluationError(Exception):
    """Base exception for expression evaluation errors."""
    pass


class EmptyExpressionError(EvaluationError):
    """Raised when the expression is empty or whitespace only."""

    def __init__(self):
        super().__init__("Empty expression")


class InvalidCharacterError(EvaluationError):
    """Raised when the lexer meets a character outside the alphabet."""

    def __init__(self, char: str, position: int):
        self.char = char
        self.position = position
        super().__init__(f"Invalid character: {char}")


class InvalidNumberFormatError(EvaluationError):
    """Raised for a malformed or non-finite numeric literal."""

    def __init__(self, literal: str, position: int):
        self.literal = literal
        self.position = position
        super().__init__(f"Invalid number format: {literal}")


class UnknownFunctionOrConstantError(EvaluationError):
    """Raised when an identifier is neither a constant nor a function."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown function or constant: {name}")


class UnmatchedParenthesesError(EvaluationError):
    """Raised when parentheses do not balance."""

    def __init__(self):
        super().__init__("Unmatched parentheses in expression")


class ExpressionSyntaxError(EvaluationError):
    """Base for grammar violations found while parsing."""
    pass


class MissingOperandError(ExpressionSyntaxError):
    """Raised when an operand is expected but the input is exhausted."""

    def __init__(self):
        super().__init__("Invalid expression: missing operand")


class UnexpectedTokenError(ExpressionSyntaxError):
    """Raised when a token cannot appear at the current position."""
    pass


class TrailingTokensError(ExpressionSyntaxError):
    """Raised when tokens remain after a complete expression."""

    def __init__(self):
        super().__init__("Unexpected tokens at end of expression")


class WrongNumberOfArgumentsError(EvaluationError):
    """Raised when a function is called outside its declared arity."""

    def __init__(self, name: str, expected: str, got: int):
        self.name = name
        self.got = got
        super().__init__(
            f"Wrong number of arguments: Function {name} expects {expected}, got {got}"
        )


class DomainError(EvaluationError):
    """Raised when a function argument lies outside its real domain."""
    pass


class DivisionByZeroError(EvaluationError):
    """Raised when the right operand of a division is zero."""

    def __init__(self):
        super().__init__("Division by zero is not allowed")


class MaxNestingExceededError(EvaluationError):
    """Raised when the expression nests deeper than the configured bound."""

    def __init__(self, max_depth: int):
        self.max_depth = max_depth
        super().__init__(f"Maximum nesting depth of {max_depth} exceeded")


class CalculusError(EvaluationError):
    """Base for failures of the numerical calculus helpers."""
    pass


class ConvergenceError(CalculusError):
    """Raised when an iterative method fails to converge."""
    pass


class LimitNotFoundError(CalculusError):
    """Raised when one-sided approaches do not agree on a finite value."""
    pass
