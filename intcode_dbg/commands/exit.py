"""Exit command."""

from __future__ import annotations

from typing import List

from .base import Command
from ..context import DebuggerContext
from ..output import emit_error
from ..parser import parse_int


class ExitCommand(Command):
    """``exit [STATUS]``: leave the debugger with an optional process status."""

    def __init__(self) -> None:
        super().__init__("exit", "Leave the debugger (exit [STATUS])", aliases=("quit", "q"))

    def run(self, ctx: DebuggerContext, argv: List[str]) -> int:
        status = 0
        if argv:
            parsed = parse_int(argv[0])
            if parsed is None:
                emit_error(ctx, message=f"invalid exit status {argv[0]!r}")
                return 1
            status = parsed
        raise SystemExit(status)
