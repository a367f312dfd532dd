"""
Interactive REPL Interface for the calculator.
Reads one binary operation per line, with slash commands for session settings.
"""
import yaml
from typing import Any, Callable, Dict, Optional, Tuple

from prompt_toolkit import PromptSession
from prompt_toolkit.auto_suggest import AutoSuggestFromHistory
from prompt_toolkit.completion import Completer, NestedCompleter
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style
from rich.panel import Panel
from rich.markup import escape

from ..arithmetic import CalculatorError, OPERATIONS
from ..calculator import Calculator
from ..console_output import OutputMode, ResultReporter
from ..events import EventType


ON_VALUES = ("on", "true", "yes", "1")
OFF_VALUES = ("off", "false", "no", "0")


class CalcREPL:
    """
    Interactive REPL for the calculator.
    Supports "A OP B" / "OP A B" input and slash commands.
    """

    # Slash commands registry
    COMMANDS = {
        "help": "Show available commands",
        "strict": "Show or set division policy: /strict [on|off]",
        "mode": "Set output mode: /mode <rich|plain|quiet>",
        "history": "Show results from this session",
        "config": "Show current configuration",
        "clear": "Clear session history",
        "exit": "Exit the REPL",
        "quit": "Exit the REPL",
    }

    def __init__(
        self,
        calculator: Optional[Calculator] = None,
        reporter: Optional[ResultReporter] = None,
        config: Optional[Dict[str, Any]] = None,
        interactive: bool = True,
    ):
        """
        Initialize the CalcREPL.

        Args:
            calculator: Calculator instance
            reporter: ResultReporter for output
            config: Configuration dictionary
            interactive: Create a prompt_toolkit session (False for tests)
        """
        self.config = config if config is not None else {}
        self.calculator = calculator or Calculator(
            strict=self.config.get("arithmetic", {}).get("strict_division", False)
        )
        self.reporter = reporter or ResultReporter(emitter=self.calculator.emitter)

        self._completer = self._create_completer()
        self.prompt_session = None
        if interactive:
            self.prompt_session = PromptSession(
                history=InMemoryHistory(),
                auto_suggest=AutoSuggestFromHistory(),
                completer=self._completer,
                complete_while_typing=False,
                style=Style.from_dict({
                    'prompt': '#00aa00 bold',
                }),
            )

        # Command handlers
        self._command_handlers: Dict[str, Callable[[str], bool]] = {
            "help": self._handle_help,
            "strict": self._handle_strict,
            "mode": self._handle_mode,
            "history": self._handle_history,
            "config": self._handle_config,
            "clear": self._handle_clear,
            "exit": self._handle_exit,
            "quit": self._handle_exit,
        }

    def _create_completer(self) -> Completer:
        """Create a nested completer for slash commands and operation names."""
        completions: Dict[str, Any] = {f"/{cmd}": None for cmd in self.COMMANDS}
        completions["/strict"] = {"on": None, "off": None}
        completions["/mode"] = {mode.value: None for mode in OutputMode}
        for op in OPERATIONS:
            completions[op.name] = None
        return NestedCompleter.from_nested_dict(completions)

    def get_completer(self) -> Completer:
        """Get the current completer (for testing)."""
        return self._completer

    def parse_input(self, user_input: str) -> Tuple[str, Any]:
        """
        Parse user input to determine action type.

        Returns:
            Tuple of (action_type, payload)
            - ("empty", None) for blank lines
            - ("command", (cmd_name, args)) for slash commands
            - ("calc", text) for anything else
        """
        user_input = user_input.strip()

        if not user_input:
            return ("empty", None)

        if user_input.startswith("/"):
            parts = user_input[1:].split(maxsplit=1)
            cmd_name = parts[0].lower() if parts else ""
            cmd_args = parts[1] if len(parts) > 1 else ""
            return ("command", (cmd_name, cmd_args))

        return ("calc", user_input)

    def handle_command(self, cmd_name: str, cmd_args: str) -> bool:
        """
        Handle a slash command.

        Returns:
            False if the REPL should exit, True otherwise
        """
        handler = self._command_handlers.get(cmd_name)
        if handler:
            return handler(cmd_args)

        self.reporter.error(f"Unknown command: /{cmd_name}")
        self.reporter.info("Type /help for available commands")
        return True

    def run_calculation(self, text: str) -> Optional[int]:
        """Evaluate one line and print the result, or the error."""
        try:
            op, a, b, result = self.calculator.evaluate(text)
        except CalculatorError as e:
            self.reporter.error(str(e))
            return None
        self.reporter.show_result(op, a, b, result)
        return result

    def _handle_help(self, args: str) -> bool:
        """Handle /help command."""
        rows = "\n".join(f"[cyan]/{cmd:<8}[/cyan] {escape(desc)}" for cmd, desc in self.COMMANDS.items())
        ops = ", ".join(f"{op.name} ({op.symbol})" for op in OPERATIONS)
        if self.reporter.mode == OutputMode.RICH:
            self.reporter.console.print(Panel(rows, title="Available Commands"))
            self.reporter.console.print(f"[dim]Operations: {escape(ops)}[/dim]")
            self.reporter.console.print("[dim]Enter 'A OP B' (7 / 3) or 'OP A B' (div 7 3)[/dim]")
        else:
            self.reporter.console.print("=== Available Commands ===", markup=False)
            for cmd, desc in self.COMMANDS.items():
                self.reporter.console.print(f"  /{cmd:<8} - {desc}", markup=False)
            self.reporter.console.print(f"Operations: {ops}", markup=False)
        return True

    def _handle_strict(self, args: str) -> bool:
        """Handle /strict command."""
        value = args.strip().lower()
        if value in ON_VALUES:
            self.calculator.strict = True
        elif value in OFF_VALUES:
            self.calculator.strict = False
        elif value:
            self.reporter.error(f"Expected on or off, got {args.strip()!r}")
            return True

        self.config.setdefault("arithmetic", {})["strict_division"] = self.calculator.strict
        policy = "raise an error" if self.calculator.strict else "return 0"
        self.reporter.info(f"Strict division {'on' if self.calculator.strict else 'off'}: x / 0 will {policy}")
        return True

    def _handle_mode(self, args: str) -> bool:
        """Handle /mode command."""
        try:
            mode = OutputMode(args.strip().lower())
        except ValueError:
            self.reporter.error(f"Unknown mode: {args.strip()!r} (rich, plain or quiet)")
            return True

        self.reporter.mode = mode
        self.config.setdefault("output", {})["mode"] = mode.value
        self.reporter.success(f"Output mode: {mode.value}")
        return True

    def _handle_history(self, args: str) -> bool:
        """Handle /history command."""
        if not self.calculator.history:
            self.reporter.info("No calculations yet.")
            return True

        by_name = {op.name: op for op in OPERATIONS}
        rows = [(by_name[name], a, b, result) for name, a, b, result in self.calculator.history]
        self.reporter.show_table(rows, title="Session History")
        return True

    def _handle_config(self, args: str) -> bool:
        """Handle /config command."""
        text = yaml.safe_dump(self.config, default_flow_style=False, allow_unicode=True, sort_keys=False)
        if self.reporter.mode == OutputMode.RICH:
            self.reporter.console.print(Panel(escape(text), title="Current Configuration"))
        else:
            self.reporter.console.print("=== Current Configuration ===", markup=False)
            self.reporter.console.print(text, markup=False)
        return True

    def _handle_clear(self, args: str) -> bool:
        """Handle /clear command."""
        self.calculator.clear_history()
        self.reporter.success("History cleared")
        return True

    def _handle_exit(self, args: str) -> bool:
        """Handle /exit command."""
        self.reporter.info("Goodbye!")
        return False

    def get_prompt(self) -> str:
        return self.config.get("repl", {}).get("prompt", "calc ❯ ")

    def get_bottom_toolbar(self):
        """Get the bottom toolbar text."""
        policy = "strict" if self.calculator.strict else "x/0 = 0"
        return HTML(
            f'<b>Division:</b> <style bg="ansiblue">{policy}</style> | '
            f'<b>Results:</b> {len(self.calculator.history)} | '
            f'<style fg="ansigray">/help for commands</style>'
        )

    def handle_line(self, user_input: str) -> bool:
        """
        Process one line of input.

        Returns:
            False if the REPL should exit
        """
        action, payload = self.parse_input(user_input)
        if action == "command":
            cmd_name, cmd_args = payload
            return self.handle_command(cmd_name, cmd_args)
        if action == "calc":
            self.run_calculation(payload)
        return True

    def run(self):
        """Run the main REPL loop."""
        if self.reporter.mode == OutputMode.RICH:
            self.reporter.console.print(Panel(
                "[bold]Integer Calculator[/bold]\n\n"
                "Enter [cyan]A OP B[/cyan] or [cyan]OP A B[/cyan], e.g. 7 / 3 or div 7 3.\n"
                "Use [bold]Tab[/bold] for autocompletion, /help for commands.",
                title="Welcome",
                border_style="blue"
            ))
        elif self.reporter.mode == OutputMode.PLAIN:
            self.reporter.console.print("=== Integer Calculator ===", markup=False)
            self.reporter.console.print("Enter 'A OP B' or 'OP A B', /help for commands.", markup=False)

        self.calculator.emitter.emit_simple(EventType.SESSION_START, "REPL started")

        running = True
        while running:
            try:
                if self.prompt_session:
                    user_input = self.prompt_session.prompt(
                        self.get_prompt(),
                        bottom_toolbar=self.get_bottom_toolbar
                    )
                else:
                    user_input = input(self.get_prompt())

                running = self.handle_line(user_input)

            except KeyboardInterrupt:
                self.reporter.info("Interrupted. Type /exit to quit.")
            except EOFError:
                running = False

        self.calculator.emitter.emit_simple(
            EventType.SESSION_END,
            "REPL ended",
            calculations=len(self.calculator.history),
        )
