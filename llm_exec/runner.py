import os
import subprocess

from typing import Dict, Optional

from rich.console import Console
from rich.text import Text

from .errors import ExecutionError

AFFIRMATIVE_ANSWERS = ("y", "yes")
DEFAULT_SHELL = "/bin/sh"


def print_suggestion(command: str, console: Optional[Console] = None):
    console = console or Console()
    console.print("Suggested command:", style="bold cyan")
    console.print(Text(f"  {command}", style="bold yellow"), soft_wrap=True)
    console.print()


def print_dry_run(request: Dict, console: Optional[Console] = None):
    """Shows what would be sent to the API, without sending it."""
    console = console or Console()
    console.print(Text.assemble(("Model: ", "bold cyan"), request["model"]))
    console.print(
        Text.assemble(("Max tokens: ", "bold cyan"), str(request["max_tokens"]))
    )
    console.print()
    console.print("Prompt:", style="bold cyan")
    for message in request["messages"]:
        console.print(Text(message["content"]), soft_wrap=True)


def confirm(message: str = "Execute this command?") -> bool:
    """Asks a yes/no question. Anything but an explicit yes is a no."""
    try:
        answer = input(f"{message} [y/N]: ")
    except (KeyboardInterrupt, EOFError):
        print()
        return False
    return answer.strip().lower() in AFFIRMATIVE_ANSWERS


def execute_command(command: str) -> int:
    """
    Runs `command` through the user's interactive shell with inherited stdio.

    Returns:
        The command's exit status. A command killed by a signal maps to
        128 + the signal number, like the shell reports it.

    Raises:
        ExecutionError: If the shell itself could not be launched.
    """
    shell = os.environ.get("SHELL") or DEFAULT_SHELL
    try:
        result = subprocess.run([shell, "-i", "-c", command])
    except OSError as e:
        raise ExecutionError(shell, e.strerror or str(e)) from e

    if result.returncode < 0:
        return 128 - result.returncode
    return result.returncode
