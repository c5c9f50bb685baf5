"""Operand addressing modes.

Every operand wraps the raw cell that followed the instruction word. How that
raw value turns into a readable value or a writable address depends on the
mode digit taken from the instruction cell:

    0  Position   value = mem[raw]               target = raw
    1  Immediate  value = raw                    not writable
    2  Relative   value = mem[base + raw]        target = base + raw
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .constants import MODE_DIGITS_BASE, MODE_IMMEDIATE, MODE_POSITION, MODE_RELATIVE
from .errors import InvalidOperandMode, InvalidWriteTarget
from .memory import Memory


@dataclass(frozen=True)
class Immediate:
    raw: int

    mode = MODE_IMMEDIATE

    def read(self, memory: Memory, relative_base: int) -> int:
        return self.raw

    def target(self, relative_base: int) -> int:
        raise InvalidWriteTarget(self.raw)


@dataclass(frozen=True)
class Position:
    raw: int

    mode = MODE_POSITION

    def read(self, memory: Memory, relative_base: int) -> int:
        return memory.read(self.raw)

    def target(self, relative_base: int) -> int:
        return self.raw


@dataclass(frozen=True)
class Relative:
    raw: int

    mode = MODE_RELATIVE

    def read(self, memory: Memory, relative_base: int) -> int:
        return memory.read(relative_base + self.raw)

    def target(self, relative_base: int) -> int:
        return relative_base + self.raw


Operand = Union[Immediate, Position, Relative]

_MODES = {
    MODE_POSITION: Position,
    MODE_IMMEDIATE: Immediate,
    MODE_RELATIVE: Relative,
}


def operand_mode(cell: int, index: int) -> int:
    """Return the addressing-mode digit for operand ``index`` (0-based)."""
    return (cell // MODE_DIGITS_BASE // (10 ** index)) % 10


def make_operand(mode: int, raw: int, *, index: int | None = None) -> Operand:
    try:
        kind = _MODES[mode]
    except KeyError:
        raise InvalidOperandMode(mode, index=index) from None
    return kind(raw)


__all__ = [
    "Immediate",
    "Position",
    "Relative",
    "Operand",
    "operand_mode",
    "make_operand",
]
