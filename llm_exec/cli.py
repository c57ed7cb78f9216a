#!/usr/bin/env python3

import argparse
import argcomplete
import os
import sys

from abc import ABC, abstractmethod
from typing import List, Optional

from rich.console import Console
from rich.text import Text

from .ai import LLMClient, build_prompt, build_request, suggest_command
from .config import load_config
from .errors import LlmExecError
from .history import read_history
from .runner import confirm, execute_command, print_dry_run, print_suggestion

PROGRAM_NAME = "llm-exec"
EXIT_INTERRUPTED = 130


class Argument(ABC):
    def __init__(self, help: str, kwargs: Optional[dict] = None):
        self.help = help
        self.kwargs = kwargs if kwargs is not None else {}

    @abstractmethod
    def add_to_parser(self, parser: argparse.ArgumentParser):
        pass


class OptionalArg(Argument):
    def __init__(
        self,
        long_option: str,
        help: str,
        short_option: Optional[str] = None,
        kwargs: Optional[dict] = None,
    ):
        super().__init__(help=help, kwargs=kwargs)
        self.short_option = short_option
        self.long_option = long_option

    def add_to_parser(self, parser: argparse.ArgumentParser):
        flags = [self.short_option, self.long_option] if self.short_option else [self.long_option]
        parser.add_argument(*flags, help=self.help, **self.kwargs)


class PositionalArg(Argument):
    def __init__(self, name: str, help: str, kwargs: Optional[dict] = None):
        super().__init__(help=help, kwargs=kwargs)
        self.name = name

    def add_to_parser(self, parser: argparse.ArgumentParser):
        parser.add_argument(self.name, help=self.help, **self.kwargs)


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid non-negative integer: '{value}'")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be a non-negative integer, got {number}")
    return number


_ARGUMENTS: List[Argument] = [
    PositionalArg(
        name="prompt",
        help="The natural language description of the command you want to run.",
        kwargs={"nargs": "*"},
    ),
    OptionalArg(
        short_option="-n",
        long_option="--history-lines",
        help="Number of shell history lines to include (overrides the config file).",
        kwargs={"type": _non_negative_int, "metavar": "N"},
    ),
    OptionalArg(
        short_option="-y",
        long_option="--yes",
        help="Skip confirmation and execute the suggested command immediately.",
        kwargs={"action": "store_true"},
    ),
    OptionalArg(
        long_option="--dry-run",
        help="Show what would be sent to the API without making a request.",
        kwargs={"action": "store_true"},
    ),
]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROGRAM_NAME,
        description="Execute terminal commands based on LLM instructions.",
    )
    for arg in _ARGUMENTS:
        arg.add_to_parser(parser)
    return parser


def _program_name() -> str:
    return os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else PROGRAM_NAME


def _read_prompt(words: List[str]) -> str:
    if words:
        return " ".join(words).strip()
    try:
        Console(stderr=True).print("What do you want to do? ", end="")
        return input().strip()
    except EOFError:
        return ""


def _run(args: argparse.Namespace) -> int:
    prompt = _read_prompt(args.prompt)
    if not prompt:
        raise LlmExecError("No prompt provided")

    config = load_config()
    history = read_history(config.resolve_history_lines(args.history_lines))
    full_prompt = build_prompt(
        config.effective_system_prompt(_program_name()), history, prompt
    )

    if args.dry_run:
        print_dry_run(build_request(config, full_prompt))
        return 0

    # Fail on missing credentials before touching the network.
    client = LLMClient.from_env()
    with Console(stderr=True).status("Thinking..."):
        command = suggest_command(client, config, full_prompt)

    print_suggestion(command)

    if not args.yes and not confirm():
        Console().print("Cancelled.")
        return 0

    return execute_command(command)


def run_cli(argv: Optional[List[str]] = None) -> int:
    """
    Parses command-line arguments and runs the suggest-confirm-execute pipeline.

    Args:
        argv: A list of strings representing the command-line arguments.
              If None, `sys.argv[1:]` is used automatically by `parse_intermixed_args`.

    Returns:
        The process exit code: 0 on success or declined confirmation, the
        executed command's own status when it ran, or the error's exit code.
    """
    parser = build_parser()

    # Enable argument auto-completion.
    argcomplete.autocomplete(parser)

    # Flags may sit between prompt words: `llm-exec list -y files`.
    args = parser.parse_intermixed_args(argv)
    try:
        return _run(args)
    except LlmExecError as e:
        Console(stderr=True).print(
            Text.assemble(("Error:", "bold red"), f" {e}"), soft_wrap=True
        )
        return e.exit_code
    except KeyboardInterrupt:
        return EXIT_INTERRUPTED


def main():
    """The entry point for the `llm-exec` script."""
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
