"""
Arithmetic - The four integer operations.

Every function here is pure: two integers in, one integer out.
Division by zero returns DIVISION_BY_ZERO_SENTINEL unless strict mode is requested.
"""
from dataclasses import dataclass, field
from typing import Callable, Dict, Tuple


# Returned by divide() when the divisor is zero (compatibility mode)
DIVISION_BY_ZERO_SENTINEL = 0


class CalculatorError(Exception):
    """Base class for calculator errors."""


class DivisionByZeroError(CalculatorError, ArithmeticError):
    """Raised by divide() in strict mode when the divisor is zero."""

    def __init__(self, dividend: int):
        super().__init__(f"Division by zero: {dividend} / 0")
        self.dividend = dividend


class UnknownOperationError(CalculatorError, ValueError):
    """Raised when an operation name or symbol is not recognised."""

    def __init__(self, token: str):
        super().__init__(f"Unknown operation: {token!r}")
        self.token = token


def add(a: int, b: int) -> int:
    return a + b


def subtract(a: int, b: int) -> int:
    return a - b


def multiply(a: int, b: int) -> int:
    return a * b


def divide(a: int, b: int, strict: bool = False) -> int:
    """
    Integer division truncated toward zero.

    Args:
        a: Dividend
        b: Divisor
        strict: Raise DivisionByZeroError instead of returning the sentinel

    Returns:
        The quotient, or DIVISION_BY_ZERO_SENTINEL when b is zero
    """
    if b == 0:
        if strict:
            raise DivisionByZeroError(a)
        return DIVISION_BY_ZERO_SENTINEL

    # Python's // floors; truncate on the magnitudes and fix the sign instead
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


@dataclass(frozen=True)
class Operation:
    """A binary integer operation and the tokens that name it."""
    name: str
    symbol: str
    func: Callable[..., int]
    aliases: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def tokens(self) -> Tuple[str, ...]:
        return (self.name, self.symbol) + self.aliases

    def __call__(self, a: int, b: int) -> int:
        return self.func(a, b)


OPERATIONS: Tuple[Operation, ...] = (
    Operation("add", "+", add, ("plus",)),
    Operation("subtract", "-", subtract, ("sub", "minus")),
    Operation("multiply", "*", multiply, ("mul", "times", "x")),
    Operation("divide", "/", divide, ("div",)),
)

_OPERATION_INDEX: Dict[str, Operation] = {
    token: op for op in OPERATIONS for token in op.tokens
}


def get_operation(token: str) -> Operation:
    """
    Look up an operation by name, alias or symbol (case-insensitive).

    Raises:
        UnknownOperationError: If nothing matches
    """
    op = _OPERATION_INDEX.get(token.strip().lower())
    if op is None:
        raise UnknownOperationError(token)
    return op
