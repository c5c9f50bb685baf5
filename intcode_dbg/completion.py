"""prompt_toolkit completer for intcode-dbg."""

from __future__ import annotations

import shlex
from typing import Iterable, List

from prompt_toolkit.completion import Completer, Completion, PathCompleter
from prompt_toolkit.document import Document

from .commands import CommandRegistry
from .context import DebuggerContext

PATH_COMMANDS = {"load"}
SUBCOMMANDS = {"mem": ("read", "write")}
REGISTER_NAMES = ("pc", "rb")


def _normalise_tokens(text: str) -> List[str]:
    if not text:
        return []
    try:
        tokens = shlex.split(text, posix=True)
        trailing = text[-1].isspace()
    except ValueError:
        tokens = text.strip().split()
        trailing = text.endswith((" ", "\t"))
    if trailing:
        tokens.append("")
    return tokens


class DebuggerCompleter(Completer):
    """Completes command names, ``load`` paths, ``mem`` subcommands and register names in addresses."""

    def __init__(self, ctx: DebuggerContext, registry: CommandRegistry) -> None:
        self.ctx = ctx
        self.registry = registry
        self._path = PathCompleter(expanduser=True)

    def get_completions(self, document: Document, complete_event) -> Iterable[Completion]:
        tokens = _normalise_tokens(document.text_before_cursor)
        if len(tokens) <= 1:
            prefix = tokens[0] if tokens else ""
            yield from self._completions(self.registry.names(), prefix)
            return
        command = self.registry.get(self.ctx.resolve_alias(tokens[0]))
        if command is None:
            return
        if command.name in PATH_COMMANDS and len(tokens) == 2:
            path_document = Document(tokens[1], cursor_position=len(tokens[1]))
            yield from self._path.get_completions(path_document, complete_event)
            return
        if command.name in SUBCOMMANDS and len(tokens) == 2:
            yield from self._completions(SUBCOMMANDS[command.name], tokens[1])
            return
        if self._takes_address(command.name, tokens):
            yield from self._completions(REGISTER_NAMES, tokens[-1])

    @staticmethod
    def _takes_address(name: str, tokens: List[str]) -> bool:
        if name == "disasm":
            return len(tokens) == 2
        return name == "mem" and len(tokens) == 3

    @staticmethod
    def _completions(candidates: Iterable[str], prefix: str) -> Iterable[Completion]:
        needle = prefix.lower()
        for entry in sorted(dict.fromkeys(candidates)):
            if entry.lower().startswith(needle):
                yield Completion(entry, start_position=-len(prefix))
