"""intcode-dbg CLI entry point."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List

from intcode.constants import DEFAULT_CAPACITY, ENV_CAPACITY, ENV_DBG_LOG_LEVEL
from intcode.cli import parse_capacity
from intcode.errors import ProgramFormatError

from .commands import build_registry
from .context import DebuggerContext
from .history import HistoryStore
from .repl import DebuggerREPL

LOG = logging.getLogger("intcode_dbg.cli")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Intcode interactive debugger")
    parser.add_argument("program", nargs="?", help="Program file to load at startup")
    parser.add_argument("-i", "--input", type=int, action="append", default=[], help="Queue an input value at startup and after reset")
    parser.add_argument(
        "--capacity",
        type=parse_capacity,
        default=os.environ.get(ENV_CAPACITY, str(DEFAULT_CAPACITY)),
        help="Minimum memory size in cells",
    )
    parser.add_argument("--trace", action="store_true", help="Print each executed instruction to stderr")
    parser.add_argument("--json", action="store_true", help="Emit JSON output")
    parser.add_argument("--log-level", default=os.environ.get(ENV_DBG_LOG_LEVEL, "INFO"), help="Logging level (default INFO)")
    parser.add_argument(
        "-c",
        "--command",
        action="append",
        help="Execute a command non-interactively (repeatable; quote the command string)",
    )
    parser.add_argument(
        "--history",
        type=Path,
        default=Path.home() / ".intcode-dbg-history",
        help="Path to command history file",
    )
    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)
    ctx = DebuggerContext(
        json_output=args.json,
        capacity=args.capacity,
        trace=args.trace,
        initial_input=list(args.input),
    )
    if args.program:
        try:
            ctx.load_program(args.program)
        except (OSError, ProgramFormatError) as exc:
            LOG.error("cannot load %s: %s", args.program, exc)
            return 1
    registry = build_registry()
    if args.command:
        repl = DebuggerREPL(ctx, registry)
        return _run_commands(repl, args.command)
    repl = DebuggerREPL(ctx, registry, history_store=HistoryStore(str(args.history)))
    try:
        return repl.run()
    except SystemExit as exc:
        return int(exc.code or 0)
    except KeyboardInterrupt:
        print()
        return 0


def _run_commands(repl: DebuggerREPL, commands: List[str]) -> int:
    status = 0
    for command_line in commands:
        try:
            status = repl.dispatch(command_line)
        except SystemExit as exc:
            return int(exc.code or 0)
        if status:
            break
    return status


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
