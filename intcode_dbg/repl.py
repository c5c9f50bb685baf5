"""Interactive REPL for intcode-dbg.

An empty line repeats the previous command, so ``step`` followed by a few
presses of Enter walks through a program. A trailing backslash continues a
command on the next line.
"""

from __future__ import annotations

import logging
import sys
from typing import Callable, List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.patch_stdout import patch_stdout

from .commands import CommandRegistry
from .completion import DebuggerCompleter
from .context import DebuggerContext
from .history import HistoryStore
from .parser import PARSE_ERROR_PREFIX, split_command

LOGGER = logging.getLogger("intcode_dbg.repl")


class DebuggerREPL:
    def __init__(
        self,
        ctx: DebuggerContext,
        registry: CommandRegistry,
        *,
        history_store: Optional[HistoryStore] = None,
    ) -> None:
        self.ctx = ctx
        self.registry = registry
        self.history_store = history_store
        self._last_line: Optional[str] = None
        self._pending: List[str] = []

    def prompt_text(self) -> str:
        machine = self.ctx.machine
        if machine is None:
            return "(intcode) "
        state = machine.snapshot_state()["state"]
        if state == "ready":
            return f"(intcode pc={machine.pc}) "
        return f"(intcode {state}) "

    def run(self) -> int:
        if not sys.stdin.isatty():
            return self._loop(input, record=False)
        history = InMemoryHistory()
        if self.history_store:
            for entry in self.history_store.snapshot():
                history.append_string(entry)
        session = PromptSession(
            history=history,
            completer=DebuggerCompleter(self.ctx, self.registry),
            complete_while_typing=True,
        )

        def read_line() -> str:
            with patch_stdout():
                return session.prompt(self.prompt_text)

        return self._loop(read_line, record=True)

    def _loop(self, read_line: Callable[[], str], *, record: bool) -> int:
        while True:
            try:
                line = read_line()
            except (EOFError, KeyboardInterrupt):
                if record:
                    print()
                return 0
            payload = self.feed(line)
            if payload is None:
                continue
            if record and self.history_store:
                self.history_store.append(payload)
            self.dispatch(payload)

    def feed(self, line: str) -> Optional[str]:
        """Collect one physical line; return the command to run, or None while continuing."""
        text = line.rstrip()
        if text.endswith("\\"):
            self._pending.append(text[:-1])
            return None
        if self._pending:
            self._pending.append(text)
            text = " ".join(part.strip() for part in self._pending)
            self._pending.clear()
        if not text.strip():
            return self._last_line
        self._last_line = text
        return text

    def dispatch(self, line: str) -> int:
        """Run one command line and return its status (0 ok, 1 usage, 2 machine error)."""
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            return 0
        argv = split_command(stripped)
        if not argv:
            return 0
        name, *args = argv
        if name.startswith(PARSE_ERROR_PREFIX):
            print(f"Parse error: {name[len(PARSE_ERROR_PREFIX) + 1:]}")
            return 1
        name = self.ctx.resolve_alias(name)
        command = self.registry.get(name)
        if command is None:
            print(f"Unknown command: {name}")
            return 1
        try:
            return command.run(self.ctx, args)
        except SystemExit:
            raise
        except Exception as exc:
            LOGGER.exception("command %s failed", name)
            print(f"Command '{name}' failed: {exc}")
            return 1
