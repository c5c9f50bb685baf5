"""Debugger context: the machine under inspection plus shared CLI state."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from intcode.constants import DEFAULT_CAPACITY
from intcode.loader import load_program
from intcode.machine import IntcodeMachine

LOGGER = logging.getLogger("intcode_dbg.context")


class DebuggerError(RuntimeError):
    """Raised when a command needs state the debugger does not have."""


@dataclass
class DebuggerContext:
    """Holds shared CLI debugger state."""

    json_output: bool = False
    capacity: int = DEFAULT_CAPACITY
    trace: bool = False
    program_path: Optional[Path] = None
    program: Optional[List[int]] = None
    initial_input: List[int] = field(default_factory=list)
    aliases: Dict[str, str] = field(default_factory=dict)
    _machine: Optional[IntcodeMachine] = field(default=None, init=False, repr=False)

    @property
    def machine(self) -> Optional[IntcodeMachine]:
        return self._machine

    def set_program(self, cells: Sequence[int], *, path: Optional[Path] = None) -> IntcodeMachine:
        self.program = list(cells)
        self.program_path = path
        return self.reset()

    def load_program(self, path: str) -> IntcodeMachine:
        candidate = Path(path).expanduser()
        if not candidate.is_absolute():
            candidate = (Path.cwd() / candidate).resolve()
        cells = load_program(candidate)
        LOGGER.info("loaded %d cells from %s", len(cells), candidate)
        return self.set_program(cells, path=candidate)

    def reset(self) -> IntcodeMachine:
        """Recreate the machine from the loaded program and the startup input."""
        if self.program is None:
            raise DebuggerError("no program loaded (use 'load PATH')")
        self._machine = IntcodeMachine(
            self.program,
            capacity=self.capacity,
            inputs=self.initial_input,
            trace=self.trace,
        )
        return self._machine

    def ensure_machine(self) -> IntcodeMachine:
        if self._machine is None:
            raise DebuggerError("no program loaded (use 'load PATH')")
        return self._machine

    def resolve_alias(self, name: str) -> str:
        return self.aliases.get(name, name)

    def set_alias(self, alias: str, command: str) -> None:
        if alias == command:
            self.aliases.pop(alias, None)
            return
        self.aliases[alias] = command
