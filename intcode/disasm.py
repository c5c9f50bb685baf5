"""Human readable rendering of Intcode instructions.

Operand syntax used in listings and traces:

    [12]     position operand (cell 12)
    12       immediate operand
    [rb+3]   relative operand (relative base + 3)

When memory is supplied, source operands are annotated with the value they
currently resolve to, e.g. ``ADD [9]=30, [10]=40, [3]``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Union

from .decoder import Instruction, decode
from .errors import AddressError, DecodeError
from .memory import Memory
from .opcodes import OPCODE_NAMES, WRITES_DESTINATION
from .operands import Immediate, Operand, Position, Relative

DATA_MNEMONIC = "DATA"


def format_operand(operand: Operand) -> str:
    if isinstance(operand, Immediate):
        return str(operand.raw)
    if isinstance(operand, Position):
        return f"[{operand.raw}]"
    if isinstance(operand, Relative):
        sign = "+" if operand.raw >= 0 else "-"
        return f"[rb{sign}{abs(operand.raw)}]"
    raise TypeError(f"unknown operand {operand!r}")


def format_instruction(
    instruction: Instruction,
    *,
    memory: Optional[Memory] = None,
    relative_base: int = 0,
) -> str:
    """Render a decoded instruction as ``MNEMONIC op, op, ...``."""

    mnemonic = OPCODE_NAMES[int(instruction.opcode)]
    if not instruction.operands:
        return mnemonic
    last = len(instruction.operands) - 1
    writes = WRITES_DESTINATION[instruction.opcode]
    parts: List[str] = []
    for index, operand in enumerate(instruction.operands):
        text = format_operand(operand)
        is_destination = writes and index == last
        if memory is not None and not is_destination and not isinstance(operand, Immediate):
            try:
                text += f"={operand.read(memory, relative_base)}"
            except AddressError:
                text += "=?"
        parts.append(text)
    return f"{mnemonic} {', '.join(parts)}"


def trace_line(instruction: Instruction, memory: Memory, relative_base: int) -> str:
    text = format_instruction(instruction, memory=memory, relative_base=relative_base)
    return f"[TRACE] {instruction.address:04d}: {text} (rb={relative_base})"


def disassemble(
    program: Union[Memory, Sequence[int]],
    *,
    start: int = 0,
    count: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """Linear sweep over ``program`` producing one entry per instruction.

    Cells that do not decode (data, or an instruction truncated by the end of
    memory) are emitted as single-cell ``DATA`` entries.
    """

    memory = program if isinstance(program, Memory) else Memory(program, capacity=0)
    listing: List[Dict[str, Any]] = []
    if start < 0:
        return listing
    address = start
    while address < len(memory) and (count is None or len(listing) < count):
        try:
            instruction = decode(memory, address)
        except (DecodeError, AddressError):
            cell = memory.read(address)
            listing.append(
                {
                    "address": address,
                    "cells": [cell],
                    "mnemonic": DATA_MNEMONIC,
                    "text": f"{DATA_MNEMONIC} {cell}",
                }
            )
            address += 1
            continue
        listing.append(
            {
                "address": address,
                "cells": memory.cells(address, instruction.size),
                "mnemonic": OPCODE_NAMES[int(instruction.opcode)],
                "text": format_instruction(instruction),
            }
        )
        address = instruction.next_pc
    return listing


def render_listing(listing: Sequence[Dict[str, Any]], *, current_pc: Optional[int] = None) -> List[str]:
    lines: List[str] = []
    for entry in listing:
        marker = "=>" if current_pc is not None and entry["address"] == current_pc else "  "
        raw = ",".join(str(cell) for cell in entry["cells"])
        lines.append(f"{marker} {entry['address']:04d}: {entry['text']:<32} ; {raw}")
    return lines


__all__ = [
    "DATA_MNEMONIC",
    "format_operand",
    "format_instruction",
    "trace_line",
    "disassemble",
    "render_listing",
]
