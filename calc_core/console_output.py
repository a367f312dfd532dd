"""
Console Output - Rich console output for calculator results.

Provides:
1. OutputMode: rich, plain or quiet rendering
2. ResultReporter: prints results, result tables and status messages,
   and warns when a division by zero returns the sentinel
"""
from enum import Enum
from typing import Iterable, Optional, Tuple

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .arithmetic import DIVISION_BY_ZERO_SENTINEL, Operation
from .events import CalcEvent, EventEmitter, EventType, get_event_emitter


class OutputMode(Enum):
    """Output mode for the console reporter."""
    RICH = "rich"
    PLAIN = "plain"
    QUIET = "quiet"


# (operation, a, b, result)
ResultRow = Tuple[Operation, int, int, int]


class ResultReporter:
    """
    Console reporter for calculator results.

    Displays:
    - a + b = result
    - [WARN] lines for division by zero
    - a summary table for the demo command
    """

    def __init__(
        self,
        mode: OutputMode = OutputMode.RICH,
        emitter: Optional[EventEmitter] = None,
        console: Optional[Console] = None,
    ):
        """
        Initialize the reporter.

        Args:
            mode: Output mode (rich, plain, quiet)
            emitter: Event emitter to subscribe to (defaults to the global one)
            console: Rich console to print to
        """
        self.mode = mode
        self.console = console or Console(highlight=False)
        self.emitter = emitter or get_event_emitter()
        self.emitter.on(EventType.DIVISION_BY_ZERO, self._on_division_by_zero)

    def close(self):
        """Stop listening for events."""
        self.emitter.off(EventType.DIVISION_BY_ZERO, self._on_division_by_zero)

    def _on_division_by_zero(self, event: CalcEvent):
        if event.data.get("strict"):
            # Strict mode raises; the caller reports the error
            return
        self.warning(
            f"Division by zero: {event.data.get('a')} / 0 "
            f"returned sentinel {DIVISION_BY_ZERO_SENTINEL}"
        )

    def _print(self, message: str, plain: Optional[str] = None):
        """Print rich markup, or the plain fallback text."""
        if self.mode == OutputMode.QUIET:
            return
        if self.mode == OutputMode.RICH:
            self.console.print(message)
        else:
            self.console.print(plain if plain is not None else message, markup=False)

    def show_result(self, operation: Operation, a: int, b: int, result: int):
        """Print one result; quiet mode prints the bare number."""
        if self.mode == OutputMode.QUIET:
            self.console.print(str(result), markup=False)
            return
        line = f"{a} {operation.symbol} {b} = {result}"
        self._print(f"{escape(f'{a} {operation.symbol} {b} =')} [bold green]{result}[/bold green]", line)

    def show_table(self, rows: Iterable[ResultRow], title: str = "Results"):
        """Print several results as a table."""
        rows = list(rows)
        if self.mode == OutputMode.QUIET:
            for _, _, _, result in rows:
                self.console.print(str(result), markup=False)
            return

        if self.mode == OutputMode.PLAIN:
            self.console.print(f"=== {title} ===", markup=False)
            for op, a, b, result in rows:
                self.console.print(f"  {op.name:<9} {a} {op.symbol} {b} = {result}", markup=False)
            return

        table = Table(title=title, box=box.SIMPLE)
        table.add_column("Operation", style="cyan")
        table.add_column("Expression", style="white")
        table.add_column("Result", style="bold green", justify="right")
        for op, a, b, result in rows:
            table.add_row(op.name, escape(f"{a} {op.symbol} {b}"), str(result))
        self.console.print(table)

    def info(self, message: str):
        """Print info message."""
        self._print(f"[blue]ℹ[/blue] {escape(message)}", f"[INFO] {message}")

    def success(self, message: str):
        """Print success message."""
        self._print(f"[green]✓[/green] {escape(message)}", f"[OK] {message}")

    def warning(self, message: str):
        """Print warning message."""
        self._print(f"[yellow]⚠[/yellow] {escape(message)}", f"[WARN] {message}")

    def error(self, message: str):
        """Print error message. Errors are shown even in quiet mode."""
        if self.mode == OutputMode.RICH:
            self.console.print(f"[red]✗[/red] {escape(message)}")
        else:
            self.console.print(f"[ERROR] {message}", markup=False)
