"""Confirmation prompt for system commands."""

import logging
import subprocess
from collections.abc import Callable, Sequence

from rich.console import Console
from rich.syntax import Syntax

logger = logging.getLogger(__name__)
console = Console()

CommandRunner = Callable[[Sequence[str]], subprocess.CompletedProcess]


class CommandCancelledError(RuntimeError):
    """Raised when the user declines to run a command."""


def run_command(args: Sequence[str]) -> subprocess.CompletedProcess:
    """Run a command and capture its text output.

    Args:
        args: Program and arguments.

    Returns:
        The completed process. A non-zero exit code is not raised.
    """
    logger.debug(f"Running: {' '.join(args)}")
    return subprocess.run(
        list(args),
        capture_output=True,
        text=True,
        check=False,
    )


def _prompt_for_confirmation() -> bool:
    """Prompt user for confirmation to run a command.

    Returns:
        True if user confirms (y), False if user declines (n).
    """
    while True:
        response = console.input(
            "[bold cyan]Run this command? [y/n][/bold cyan] "
        ).strip().lower()

        if response in ("y", "yes"):
            return True
        elif response in ("n", "no"):
            return False
        else:
            console.print("[yellow]Please enter 'y' or 'n'[/yellow]")


class ConfirmingRunner:
    """Command runner that shows each command and asks before running it."""

    def __init__(self, runner: CommandRunner = run_command) -> None:
        """Initialize confirming runner with the underlying runner.

        Args:
            runner: The runner that executes confirmed commands.
        """
        self.runner = runner

    def __call__(self, args: Sequence[str]) -> subprocess.CompletedProcess:
        """Show the command, prompt, then delegate.

        Args:
            args: Program and arguments.

        Returns:
            The completed process from the underlying runner.

        Raises:
            CommandCancelledError: If user declines confirmation.
        """
        console.print("\n" + "=" * 80)
        console.print("[bold blue]System Command[/bold blue]")
        console.print("=" * 80)
        console.print(Syntax(" ".join(args), "powershell", theme="monokai", word_wrap=True))
        console.print("=" * 80)

        if not _prompt_for_confirmation():
            console.print("[bold red]✗ Command cancelled by user[/bold red]\n")
            raise CommandCancelledError("Command cancelled by user")

        console.print("[bold green]✓ Running command[/bold green]\n")
        return self.runner(args)
