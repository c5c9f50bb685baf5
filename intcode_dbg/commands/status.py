"""Machine status command."""

from __future__ import annotations

from typing import List

from .base import Command
from ..context import DebuggerContext
from ..output import emit_result, render_state


class StatusCommand(Command):
    def __init__(self) -> None:
        super().__init__("status", "Show machine registers and queues", aliases=("info",))

    def run(self, ctx: DebuggerContext, argv: List[str]) -> int:
        machine = ctx.machine
        if machine is None:
            emit_result(ctx, message="No program loaded", data={"state": "empty"})
            return 0
        state = machine.snapshot_state()
        source = str(ctx.program_path) if ctx.program_path else "<inline>"
        emit_result(ctx, message=f"Machine: {source}", data=state)
        if not ctx.json_output:
            render_state(state)
        return 0
