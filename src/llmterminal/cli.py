"""Command-line interface for llmterminal.

Provides an interactive simulated shell plus one-shot helpers for
running a single command or inspecting the rendered prompt.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Callable

from llmterminal.adapter import CompletionAdapter, TerminalSimError, create_adapter
from llmterminal.domain.models import HistoryLedger
from llmterminal.transport.httpx_transport import HttpxTransport

logger = logging.getLogger(__name__)

EXIT_COMMANDS = frozenset({"exit", "logout"})
DEFAULT_PS1 = "user@ubuntu:~$ "


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="llmterminal",
        description="Linux terminal simulated by a remote language model",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: config/llmterminal.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--adapter",
        choices=["legacy", "messages"],
        default=None,
        help="Override the upstream wire protocol from the config",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    shell_parser = subparsers.add_parser("shell", help="Start an interactive simulated shell")
    shell_parser.add_argument(
        "--ps1", type=str, default=DEFAULT_PS1,
        help="Prompt string shown before each command",
    )

    run_parser = subparsers.add_parser("run", help="Simulate a single command")
    run_parser.add_argument("line", type=str, help="The command to simulate")

    prompt_parser = subparsers.add_parser(
        "prompt", help="Print the rendered prompt for a command without calling the API",
    )
    prompt_parser.add_argument("line", type=str, help="The command to render")

    return parser.parse_args(argv)


def run_shell(
    adapter: CompletionAdapter,
    ledger: HistoryLedger,
    read_line: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
    ps1: str = DEFAULT_PS1,
) -> int:
    """Read commands until exit/EOF, printing the simulated output.

    Each successful completion is recorded into the ledger so the next
    prompt replays it. Failures are reported and the loop continues.

    Returns:
        Number of commands recorded into the ledger.
    """
    recorded = 0
    while True:
        try:
            line = read_line(ps1)
        except (EOFError, KeyboardInterrupt):
            write("")
            break

        command = line.strip()
        if not command:
            continue
        if command in EXIT_COMMANDS:
            break

        try:
            output = adapter.complete(command)
        except TerminalSimError as e:
            logger.warning("Completion failed (%s): %s", e.adapter, e)
            write(f"llmterminal: {e}")
            continue

        write(output)
        ledger.record(command, output)
        recorded += 1

    logger.info("Shell session ended after %d commands", recorded)
    return recorded


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the llmterminal CLI."""
    args = parse_args(argv)

    if args.command is None:
        parse_args(["--help"])
        return 0

    from llmterminal.config.settings import load_settings
    from llmterminal.utils.logging import setup_logging

    settings = load_settings(args.config)

    if args.verbose:
        settings.logging.level = "DEBUG"
    if args.adapter:
        settings.adapter = args.adapter

    setup_logging(settings.logging)

    ledger = HistoryLedger()
    with HttpxTransport(timeout=settings.transport.timeout) as transport:
        adapter = create_adapter(settings, ledger, transport=transport)
        return _dispatch(args, adapter, ledger)


def _dispatch(args: argparse.Namespace, adapter: CompletionAdapter, ledger: HistoryLedger) -> int:
    """Run the selected subcommand against a ready adapter."""
    if args.command == "prompt":
        print(adapter.build_prompt(args.line))
        return 0

    if args.command == "run":
        logger.info("Simulating single command with %s adapter", adapter.name)
        try:
            print(adapter.complete(args.line))
        except TerminalSimError as e:
            print(f"llmterminal: {e}")
            return 1
        return 0

    if args.command == "shell":
        logger.info("Starting simulated shell with %s adapter (model=%s)", adapter.name, adapter.model)
        run_shell(adapter, ledger, ps1=args.ps1)
        return 0

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
