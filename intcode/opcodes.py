"""Shared opcode definitions for the Intcode machine.

Keeping the canonical mapping in a single module prevents drift between the
decoder, the disassembler and the debugger. Tests assert that all consumers
use these tables unchanged.
"""

from __future__ import annotations

import enum
from typing import Dict, Iterable, Tuple


class Opcode(enum.IntEnum):
    ADD = 1
    MUL = 2
    IN = 3
    OUT = 4
    JNZ = 5
    JZ = 6
    LT = 7
    EQ = 8
    ARB = 9
    HALT = 99


# Ordered list so docs and tooling can iterate in a stable order.
# (mnemonic, opcode, arity, writes_last_operand)
OPCODE_LIST: Tuple[Tuple[str, Opcode, int, bool], ...] = (
    ("ADD", Opcode.ADD, 3, True),
    ("MUL", Opcode.MUL, 3, True),
    ("IN", Opcode.IN, 1, True),
    ("OUT", Opcode.OUT, 1, False),
    ("JNZ", Opcode.JNZ, 2, False),
    ("JZ", Opcode.JZ, 2, False),
    ("LT", Opcode.LT, 3, True),
    ("EQ", Opcode.EQ, 3, True),
    ("ARB", Opcode.ARB, 1, False),
    ("HALT", Opcode.HALT, 0, False),
)

OPCODE_NAMES: Dict[int, str] = {int(opcode): mnemonic for mnemonic, opcode, _, _ in OPCODE_LIST}
OPCODE_ARITY: Dict[Opcode, int] = {opcode: arity for _, opcode, arity, _ in OPCODE_LIST}
WRITES_DESTINATION: Dict[Opcode, bool] = {opcode: writes for _, opcode, _, writes in OPCODE_LIST}

__all__ = [
    "Opcode",
    "OPCODE_LIST",
    "OPCODE_NAMES",
    "OPCODE_ARITY",
    "WRITES_DESTINATION",
    "opcode_values",
]


def opcode_values() -> Iterable[int]:
    """Return all machine opcode numeric values."""

    return OPCODE_NAMES.keys()
