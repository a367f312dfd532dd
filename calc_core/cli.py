#!/usr/bin/env python3
"""
CLI entry point for intcalc.

This module provides the main entry point for the intcalc and icalc commands.
"""
import argparse
import sys
from typing import List, Optional

from . import __version__
from .arithmetic import OPERATIONS, CalculatorError, get_operation
from .calculator import Calculator, parse_operand
from .config import ConfigError, ConfigManager
from .console_output import OutputMode, ResultReporter
from .interface.repl import CalcREPL


# Operands used by the demo command: (operation, a, b)
DEMO_CASES = [
    ("add", 2, 3),
    ("add", -1, 1),
    ("add", 0, 0),
    ("subtract", 5, 3),
    ("subtract", 0, 5),
    ("subtract", 10, 10),
    ("multiply", 3, 4),
    ("multiply", -2, 3),
    ("multiply", 0, 5),
    ("divide", 10, 2),
    ("divide", 7, 3),
    ("divide", 5, 0),
]


def resolve_output_mode(args, config: dict) -> OutputMode:
    """Command-line flags win over the configured output mode."""
    if args.quiet:
        return OutputMode.QUIET
    if args.plain:
        return OutputMode.PLAIN
    return OutputMode(config.get("output", {}).get("mode", "rich"))


def create_calculator(args, config: dict) -> Calculator:
    """Create a calculator from config and flags."""
    strict = args.strict or config.get("arithmetic", {}).get("strict_division", False)
    config.setdefault("arithmetic", {})["strict_division"] = strict
    return Calculator(strict=strict)


def cmd_calculate(args, calc: Calculator, reporter: ResultReporter, config: dict) -> int:
    """Run one of the four operations."""
    op = get_operation(args.operation)
    a = parse_operand(args.a)
    b = parse_operand(args.b)
    result = calc.calculate(op, a, b)
    reporter.show_result(op, a, b, result)
    return 0


def cmd_eval(args, calc: Calculator, reporter: ResultReporter, config: dict) -> int:
    """Evaluate 'A OP B' or 'OP A B'."""
    op, a, b, result = calc.evaluate(" ".join(args.expression))
    reporter.show_result(op, a, b, result)
    return 0


def cmd_demo(args, calc: Calculator, reporter: ResultReporter, config: dict) -> int:
    """Exercise the four operations and print the results."""
    rows = []
    for name, a, b in DEMO_CASES:
        op = get_operation(name)
        rows.append((op, a, b, calc.calculate(op, a, b)))
    reporter.show_table(rows, title="Integer Calculator")
    return 0


def cmd_repl(args, calc: Calculator, reporter: ResultReporter, config: dict) -> int:
    """Start interactive REPL."""
    repl = CalcREPL(calculator=calc, reporter=reporter, config=config)
    repl.run()
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="intcalc",
        description="intcalc - four-function integer calculator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
    repl                  - Start interactive REPL (default)
    add A B               - A + B
    subtract A B          - A - B
    multiply A B          - A * B
    divide A B            - A / B truncated toward zero (A / 0 = 0 unless --strict)
    eval "A OP B"         - One operation, e.g. "7 / 3" or "div 7 3"
    demo                  - Run the reference calculations
"""
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"intcalc {__version__}"
    )

    parser.add_argument(
        "-c", "--config",
        help="Path to config file (default: ./intcalc.yaml, then ~/.intcalc/config.yaml)"
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on division by zero instead of returning 0"
    )

    output = parser.add_mutually_exclusive_group()
    output.add_argument("--plain", action="store_true", help="Plain text output")
    output.add_argument("-q", "--quiet", action="store_true", help="Print bare results only")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # arithmetic commands
    for op in OPERATIONS:
        aliases = [alias for alias in op.aliases if alias in ("sub", "mul", "div")]
        op_parser = subparsers.add_parser(op.name, aliases=aliases, help=f"A {op.symbol} B")
        op_parser.add_argument("a", help="Left operand")
        op_parser.add_argument("b", help="Right operand")
        op_parser.set_defaults(operation=op.name)

    # eval command
    eval_parser = subparsers.add_parser("eval", help="Evaluate 'A OP B' or 'OP A B'")
    eval_parser.add_argument("expression", nargs="+", help="Operation text")

    # demo command
    subparsers.add_parser("demo", help="Run the reference calculations")

    # repl command (default)
    subparsers.add_parser("repl", help="Start interactive REPL (default)")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Default to repl if no command specified
    if not args.command:
        args.command = "repl"

    try:
        config = ConfigManager().load_config(args.config)
    except ConfigError as e:
        reporter = ResultReporter(mode=OutputMode.PLAIN)
        reporter.error(str(e))
        reporter.close()
        return 1

    calc = create_calculator(args, config)
    reporter = ResultReporter(mode=resolve_output_mode(args, config), emitter=calc.emitter)

    # Dispatch to command handler
    commands = {
        "eval": cmd_eval,
        "demo": cmd_demo,
        "repl": cmd_repl,
    }
    handler = cmd_calculate if getattr(args, "operation", None) else commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args, calc, reporter, config)
    except CalculatorError as e:
        reporter.error(str(e))
        return 1
    finally:
        reporter.close()


if __name__ == "__main__":
    sys.exit(main())
