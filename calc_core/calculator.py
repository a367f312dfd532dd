"""
Calculator - Front door to the arithmetic module for the CLI and REPL.

Resolves operations by name or symbol, parses operands from text,
applies the division policy and reports every step through the event emitter.
"""
import re
from typing import List, Optional, Tuple, Union

from .arithmetic import (
    CalculatorError,
    Operation,
    divide,
    get_operation,
)
from .events import EventEmitter, EventType, get_event_emitter


_INTEGER_RE = re.compile(r"^[+-]?[0-9]+$")


class InvalidOperandError(CalculatorError, ValueError):
    """Raised when text cannot be read as a base-10 integer."""

    def __init__(self, text: str):
        super().__init__(f"Not an integer: {text!r}")
        self.text = text


class InvalidExpressionError(CalculatorError, ValueError):
    """Raised when input is not a single binary operation."""


def parse_operand(text: str) -> int:
    """
    Parse a signed base-10 integer.

    Args:
        text: Operand text, e.g. "42", "-7", " +3 "

    Returns:
        The integer value

    Raises:
        InvalidOperandError: For anything else (floats, hex, words)
    """
    stripped = str(text).strip()
    if not _INTEGER_RE.match(stripped):
        raise InvalidOperandError(text)
    return int(stripped)


# (operation name, a, b, result)
HistoryEntry = Tuple[str, int, int, int]


class Calculator:
    """
    Stateless arithmetic behind a small stateful shell.

    The only state is the division policy and an in-memory history
    of results for the current process.
    """

    def __init__(self, strict: bool = False, emitter: Optional[EventEmitter] = None):
        """
        Initialize the Calculator.

        Args:
            strict: Raise DivisionByZeroError instead of returning the sentinel
            emitter: Event emitter to report through (defaults to the global one)
        """
        self.strict = strict
        self.emitter = emitter or get_event_emitter()
        self.history: List[HistoryEntry] = []

    def calculate(self, operation: Union[str, Operation], a: int, b: int) -> int:
        """
        Run one operation.

        Args:
            operation: Operation record, or its name, alias or symbol
            a: Left operand
            b: Right operand

        Returns:
            The integer result
        """
        op = operation if isinstance(operation, Operation) else get_operation(operation)

        self.emitter.emit_simple(
            EventType.OPERATION_START,
            f"{op.name}({a}, {b})",
            operation=op.name, a=a, b=b,
        )

        try:
            if op.name == "divide":
                if b == 0:
                    self.emitter.emit_simple(
                        EventType.DIVISION_BY_ZERO,
                        f"{a} / 0",
                        operation=op.name, a=a, strict=self.strict,
                    )
                result = divide(a, b, strict=self.strict)
            else:
                result = op(a, b)
        except CalculatorError as e:
            self.emitter.emit_simple(
                EventType.OPERATION_ERROR,
                str(e),
                operation=op.name, a=a, b=b, error=str(e),
            )
            raise

        self.history.append((op.name, a, b, result))
        self.emitter.emit_simple(
            EventType.OPERATION_COMPLETE,
            f"{a} {op.symbol} {b} = {result}",
            operation=op.name, a=a, b=b, result=result,
        )
        return result

    def add(self, a: int, b: int) -> int:
        return self.calculate("add", a, b)

    def subtract(self, a: int, b: int) -> int:
        return self.calculate("subtract", a, b)

    def multiply(self, a: int, b: int) -> int:
        return self.calculate("multiply", a, b)

    def divide(self, a: int, b: int) -> int:
        return self.calculate("divide", a, b)

    def evaluate(self, text: str) -> Tuple[Operation, int, int, int]:
        """
        Evaluate a single binary operation written as text.

        Accepted forms are "<a> <symbol> <b>" (e.g. "7 / 3")
        and "<op> <a> <b>" (e.g. "div 7 3"). Nothing else is parsed.

        Returns:
            Tuple of (operation, a, b, result)
        """
        parts = text.split()
        if len(parts) != 3:
            raise InvalidExpressionError(
                f"Expected 'A OP B' or 'OP A B', got {text.strip()!r}"
            )

        first, middle, last = parts
        if _INTEGER_RE.match(first):
            op_token, a_text, b_text = middle, first, last
        else:
            op_token, a_text, b_text = first, middle, last

        op = get_operation(op_token)
        a = parse_operand(a_text)
        b = parse_operand(b_text)
        return op, a, b, self.calculate(op, a, b)

    def clear_history(self):
        """Forget results from this session."""
        self.history.clear()
