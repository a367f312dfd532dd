# Calc Core - Four-function integer calculator
__version__ = "0.1.0"

from .arithmetic import (
    DIVISION_BY_ZERO_SENTINEL,
    OPERATIONS,
    CalculatorError,
    DivisionByZeroError,
    Operation,
    UnknownOperationError,
    add,
    divide,
    get_operation,
    multiply,
    subtract,
)
from .calculator import Calculator, InvalidExpressionError, InvalidOperandError, parse_operand

__all__ = [
    'DIVISION_BY_ZERO_SENTINEL',
    'OPERATIONS',
    'Calculator',
    'CalculatorError',
    'DivisionByZeroError',
    'InvalidExpressionError',
    'InvalidOperandError',
    'Operation',
    'UnknownOperationError',
    'add',
    'divide',
    'get_operation',
    'multiply',
    'parse_operand',
    'subtract',
]
