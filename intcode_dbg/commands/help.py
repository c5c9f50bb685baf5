"""Help command."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from .base import Command
from ..context import DebuggerContext
from ..output import emit_error, emit_result

if TYPE_CHECKING:  # pragma: no cover
    from . import CommandRegistry


class HelpCommand(Command):
    def __init__(self) -> None:
        super().__init__("help", "List commands, or describe one (help COMMAND)", aliases=("?",))
        self._registry: Optional["CommandRegistry"] = None

    def bind(self, registry: "CommandRegistry") -> None:
        self._registry = registry

    def run(self, ctx: DebuggerContext, argv: List[str]) -> int:
        if self._registry is None:
            emit_error(ctx, message="help is not bound to a command registry")
            return 1
        if argv:
            command = self._registry.get(ctx.resolve_alias(argv[0]))
            if command is None:
                emit_error(ctx, message=f"unknown command {argv[0]!r}")
                return 1
            commands = [command]
        else:
            commands = list(self._registry.list_commands())
        rows = [
            {"name": command.name, "aliases": list(command.aliases), "description": command.description}
            for command in commands
        ]
        emit_result(ctx, message="\n".join(command.format_help() for command in commands), data={"commands": rows})
        return 0
