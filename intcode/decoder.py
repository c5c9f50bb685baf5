"""Instruction decoding."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .constants import OPCODE_MODULUS
from .errors import InvalidOpcode, IntcodeError
from .memory import Memory
from .opcodes import OPCODE_ARITY, Opcode
from .operands import Operand, make_operand, operand_mode


@dataclass(frozen=True)
class Instruction:
    """One decoded instruction: where it lives, what it does, its operands."""

    address: int
    cell: int
    opcode: Opcode
    operands: Tuple[Operand, ...]

    @property
    def size(self) -> int:
        return 1 + len(self.operands)

    @property
    def next_pc(self) -> int:
        return self.address + self.size


def decode_opcode(cell: int, *, pc: int | None = None) -> Opcode:
    if cell < 0:
        raise InvalidOpcode(cell, pc=pc)
    value = cell % OPCODE_MODULUS
    try:
        return Opcode(value)
    except ValueError:
        raise InvalidOpcode(value, pc=pc) from None


def decode(memory: Memory, pc: int) -> Instruction:
    """Decode the instruction starting at ``pc`` without changing any state."""
    try:
        cell = memory.read(pc)
        opcode = decode_opcode(cell, pc=pc)
        operands = tuple(
            make_operand(operand_mode(cell, index), memory.read(pc + 1 + index), index=index)
            for index in range(OPCODE_ARITY[opcode])
        )
    except IntcodeError as exc:
        if exc.pc is None:
            exc.pc = pc
        raise
    return Instruction(address=pc, cell=cell, opcode=opcode, operands=operands)


__all__ = ["Instruction", "decode", "decode_opcode"]
