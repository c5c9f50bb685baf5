"""Command base classes for intcode-dbg."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from intcode.machine import IntcodeMachine

from ..context import DebuggerContext, DebuggerError
from ..output import emit_error


@dataclass
class Command:
    """Abstract command description."""

    name: str
    description: str
    aliases: Sequence[str] = field(default_factory=tuple)

    def run(self, ctx: DebuggerContext, argv: List[str]) -> int:
        raise NotImplementedError("Command must implement run()")

    def format_help(self) -> str:
        names = self.name
        if self.aliases:
            names += f" ({', '.join(self.aliases)})"
        return f"{names:<24} {self.description}"

    @staticmethod
    def require_machine(ctx: DebuggerContext) -> Optional[IntcodeMachine]:
        """Return the current machine, or report the problem and return None."""
        try:
            return ctx.ensure_machine()
        except DebuggerError as exc:
            emit_error(ctx, message=str(exc))
            return None
