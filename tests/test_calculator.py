#!/usr/bin/env python3
"""
Tests for the Calculator facade: operand parsing, evaluation and events.
"""
import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from calc_core.arithmetic import DivisionByZeroError, UnknownOperationError, get_operation
from calc_core.calculator import (
    Calculator,
    InvalidExpressionError,
    InvalidOperandError,
    parse_operand,
)
from calc_core.events import EventEmitter, EventType


@pytest.fixture
def emitter():
    return EventEmitter()


@pytest.fixture
def calc(emitter):
    return Calculator(emitter=emitter)


@pytest.mark.parametrize("text, expected", [
    ("42", 42),
    ("-7", -7),
    ("+3", 3),
    ("  12 ", 12),
    ("0", 0),
])
def test_parse_operand(text, expected):
    assert parse_operand(text) == expected


@pytest.mark.parametrize("text", ["2.5", "abc", "", "0x10", "1e3", "--1", "1 2", "٣", "-١٢", "１２"])
def test_parse_operand_rejects(text):
    with pytest.raises(InvalidOperandError):
        parse_operand(text)


def test_convenience_methods(calc):
    assert calc.add(2, 3) == 5
    assert calc.subtract(0, 5) == -5
    assert calc.multiply(-2, 3) == -6
    assert calc.divide(7, 3) == 2
    assert calc.divide(5, 0) == 0


def test_calculate_by_symbol_and_record(calc):
    assert calc.calculate("*", 3, 4) == 12
    assert calc.calculate(get_operation("-"), 10, 10) == 0
    assert calc.history == [("multiply", 3, 4, 12), ("subtract", 10, 10, 0)]

    calc.clear_history()
    assert calc.history == []


def test_unknown_operation(calc):
    with pytest.raises(UnknownOperationError):
        calc.calculate("mod", 1, 2)


@pytest.mark.parametrize("text, name, a, b, result", [
    ("7 / 3", "divide", 7, 3, 2),
    ("div 7 3", "divide", 7, 3, 2),
    ("-1 + 1", "add", -1, 1, 0),
    ("sub -1 1", "subtract", -1, 1, -2),
    ("- 0 5", "subtract", 0, 5, -5),
    ("  3   x  4 ", "multiply", 3, 4, 12),
    ("5 / 0", "divide", 5, 0, 0),
])
def test_evaluate(calc, text, name, a, b, result):
    op, got_a, got_b, got = calc.evaluate(text)
    assert (op.name, got_a, got_b, got) == (name, a, b, result)


@pytest.mark.parametrize("text", ["", "1 + 2 + 3", "1 +", "add 1"])
def test_evaluate_rejects_wrong_shape(calc, text):
    with pytest.raises(InvalidExpressionError):
        calc.evaluate(text)


def test_evaluate_rejects_bad_parts(calc):
    with pytest.raises(UnknownOperationError):
        calc.evaluate("1 % 2")
    with pytest.raises(InvalidOperandError):
        calc.evaluate("1 + 2.5")


def test_events_for_successful_operation(calc, emitter):
    calc.add(2, 3)
    types = [event.event_type for event in emitter.get_history()]
    assert types == [EventType.OPERATION_START, EventType.OPERATION_COMPLETE]

    complete = emitter.get_history()[-1]
    assert complete.data["result"] == 5
    assert complete.message == "2 + 3 = 5"


def test_division_by_zero_event_in_compat_mode(calc, emitter):
    seen = []
    emitter.on(EventType.DIVISION_BY_ZERO, seen.append)

    assert calc.divide(9, 0) == 0

    assert len(seen) == 1
    assert seen[0].data == {"operation": "divide", "a": 9, "strict": False}
    assert emitter.get_history()[-1].event_type == EventType.OPERATION_COMPLETE


def test_strict_mode_raises_and_reports(emitter):
    calc = Calculator(strict=True, emitter=emitter)

    with pytest.raises(DivisionByZeroError):
        calc.divide(9, 0)

    types = [event.event_type for event in emitter.get_history()]
    assert types == [
        EventType.OPERATION_START,
        EventType.DIVISION_BY_ZERO,
        EventType.OPERATION_ERROR,
    ]
    assert calc.history == []


def test_default_emitter_is_global():
    from calc_core.events import get_event_emitter, reset_event_emitter

    reset_event_emitter()
    calc = Calculator()
    assert calc.emitter is get_event_emitter()
