"""Command line entry points for ``gx`` and ``gxx``.

``gx "find all large files over 100mb"`` prints a command and stages it
in ``~/.gx``; ``gx -x`` runs the staged command; ``gx -y`` (or ``gxx``)
runs it immediately.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional, Sequence, TextIO

from . import __version__
from .api_registry import get_client
from .config import Settings, load_settings
from .engine import ConversationEngine
from .environment import build_context
from .exceptions import GxError, HistoryError
from .executor import execute_command
from .history import HistoryEntry, HistoryManager
from .tools import ToolRegistry
from .transcript import Transcript

STDIN_MARKER = "-"
STDIN_SEPARATOR = "\n\n---\n\n"

EPILOG = """\
Stdin Support:
  -               Read additional input from stdin and append to prompt

Examples:
  gx "find all large files over 100mb"
  gx -x                    # Execute staged command
  gx -y "list docker containers"
  gx -p "list files"       # Print prompt without sending
  cat error.log | gx - "explain this error"   # Read from stdin
  docker ps | gx -         # Use only stdin as prompt

Environment:
  GX_PROVIDER       Model provider: gemini or openai (default: gemini)
  GX_MODEL          Model to use (default: gemini-2.5-flash-lite)
  GX_HISTORY        Max history entries (default: 10)
  GX_HISTORY_CONTEXT  History entries sent with each prompt (default: 3)
  GX_PROMPT_OUTPUT  Path to write prompt logs (default: ~/.gxprompt)
  GX_MAX_TURNS      Max tool-calling rounds, 0 for no limit (default: 0)

Setup (required):
  export GEMINI_API_KEY=...
"""


def build_parser(force_yolo: bool = False) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gxx" if force_yolo else "gx",
        description="gx - Convert natural language to shell commands",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-x", dest="execute", action="store_true", help="Execute the staged command from ~/.gx")
    parser.add_argument("-y", dest="yolo", action="store_true", default=force_yolo,
                        help="YOLO mode - generate and execute immediately")
    parser.add_argument("-v", dest="verbose", action="store_true", help="Verbose mode - include detailed comments")
    parser.add_argument("-c", dest="clear", action="store_true", help="Clear history and staged commands")
    parser.add_argument("-n", dest="no_tools", action="store_true", help="Disable LLM tools (no file system access)")
    parser.add_argument("-p", dest="print_prompt", action="store_true",
                        help="Print the prompt that would be sent to the LLM (don't send it)")
    parser.add_argument("--version", action="store_true", help="Show version information")
    parser.add_argument("prompt", nargs="*", help="Natural language request; '-' reads stdin")
    return parser


def read_prompt(words: Sequence[str], stdin: TextIO) -> str:
    """Join prompt words, appending stdin content when ``-`` is present."""
    use_stdin = STDIN_MARKER in words
    prompt = " ".join(word for word in words if word != STDIN_MARKER)
    if use_stdin:
        content = stdin.read().strip()
        prompt = f"{prompt}{STDIN_SEPARATOR}{content}" if prompt else content
    return prompt


def _recent_history(history: HistoryManager, settings: Settings) -> List[HistoryEntry]:
    try:
        return history.recent(settings.history_context)
    except HistoryError:
        return []


def _configure_logging() -> None:
    level = logging.DEBUG if os.getenv("GX_DEBUG") else logging.WARNING
    logging.basicConfig(level=level, format="%(name)s: %(message)s")


def _execute_staged(history: HistoryManager) -> int:
    command = history.staged_command()
    print(f"Executing: {command}")
    print("---")
    return execute_command(command)


def run(argv: Optional[Sequence[str]] = None, force_yolo: bool = False, stdin: Optional[TextIO] = None) -> int:
    """Run the CLI and return the process exit code."""
    parser = build_parser(force_yolo)
    args = parser.parse_args(argv)

    if args.version:
        print(f"gx version {__version__}")
        return 0

    settings = load_settings()

    try:
        history = HistoryManager(max_history=settings.max_history)
    except HistoryError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.clear:
        try:
            history.clear()
        except HistoryError as exc:
            print(f"Error clearing: {exc}", file=sys.stderr)
            return 1
        print("History and staged commands cleared.")
        return 0

    if args.execute:
        try:
            return _execute_staged(history)
        except (GxError, OSError) as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1

    try:
        prompt = read_prompt(args.prompt, stdin or sys.stdin)
    except OSError as exc:
        print(f"Error reading stdin: {exc}", file=sys.stderr)
        return 1

    if not prompt:
        parser.print_help(sys.stderr)
        return 1

    context = build_context(verbose=args.verbose, tools_enabled=not args.no_tools)
    registry = ToolRegistry(enabled=not args.no_tools)
    recent = _recent_history(history, settings)

    if args.print_prompt:
        engine = ConversationEngine(None, registry, context, model=settings.model)
        print(engine.build_preview(prompt, recent))
        return 0

    try:
        client = get_client(settings.provider, settings.model)
        engine = ConversationEngine(
            client,
            registry,
            context,
            model=settings.model,
            transcript=Transcript(settings.prompt_output),
            max_turns=settings.max_turns,
        )
        command = engine.generate(prompt, recent)
    except GxError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(command)

    try:
        history.stage(command)
    except HistoryError as exc:
        print(f"Warning: failed to stage command: {exc}", file=sys.stderr)

    try:
        history.append(prompt, command)
    except HistoryError as exc:
        print(f"Warning: failed to save history: {exc}", file=sys.stderr)

    if args.yolo:
        print("\n--- Executing ---", file=sys.stderr)
        try:
            return execute_command(command)
        except OSError as exc:
            print(f"Execution error: {exc}", file=sys.stderr)
            return 1

    return 0


def main() -> None:
    _configure_logging()
    sys.exit(run())


def main_yolo() -> None:
    """``gxx``: ``gx`` with YOLO mode forced on."""
    _configure_logging()
    sys.exit(run(force_yolo=True))


if __name__ == "__main__":
    main()
