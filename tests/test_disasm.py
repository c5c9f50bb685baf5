"""Tests for instruction rendering and listings."""

from __future__ import annotations

from intcode.decoder import decode
from intcode.disasm import (
    DATA_MNEMONIC,
    disassemble,
    format_instruction,
    format_operand,
    render_listing,
    trace_line,
)
from intcode.memory import Memory
from intcode.operands import Immediate, Position, Relative

GRAVITY = [1, 9, 10, 3, 2, 3, 11, 0, 99, 30, 40, 50]


def test_format_operand_syntax():
    assert format_operand(Position(12)) == "[12]"
    assert format_operand(Immediate(-3)) == "-3"
    assert format_operand(Relative(3)) == "[rb+3]"
    assert format_operand(Relative(-2)) == "[rb-2]"


def test_format_instruction_plain_and_annotated():
    memory = Memory(GRAVITY, capacity=0)
    instruction = decode(memory, 0)
    assert format_instruction(instruction) == "ADD [9], [10], [3]"
    assert format_instruction(instruction, memory=memory) == "ADD [9]=30, [10]=40, [3]"


def test_immediate_operands_are_not_annotated():
    memory = Memory([1101, 1, 2, 0], capacity=0)
    assert format_instruction(decode(memory, 0), memory=memory) == "ADD 1, 2, [0]"


def test_relative_annotation_and_unreadable_operand():
    memory = Memory([204, -1, 99], capacity=0)
    instruction = decode(memory, 0)
    assert format_instruction(instruction, memory=memory, relative_base=1) == "OUT [rb-1]=204"
    assert format_instruction(instruction, memory=memory, relative_base=0) == "OUT [rb-1]=?"


def test_trace_line_format():
    memory = Memory(GRAVITY, capacity=0)
    line = trace_line(decode(memory, 0), memory, 0)
    assert line == "[TRACE] 0000: ADD [9]=30, [10]=40, [3] (rb=0)"


def test_disassemble_marks_data_cells():
    listing = disassemble(GRAVITY)
    assert [entry["address"] for entry in listing] == [0, 4, 8, 9, 10, 11]
    assert [entry["mnemonic"] for entry in listing] == ["ADD", "MUL", "HALT", DATA_MNEMONIC, DATA_MNEMONIC, DATA_MNEMONIC]
    assert listing[0]["cells"] == [1, 9, 10, 3]
    assert listing[3]["text"] == "DATA 30"


def test_disassemble_truncated_instruction_is_data():
    listing = disassemble([1, 0])
    assert [entry["text"] for entry in listing] == ["DATA 1", "DATA 0"]


def test_disassemble_start_and_count():
    listing = disassemble(GRAVITY, start=4, count=2)
    assert [entry["mnemonic"] for entry in listing] == ["MUL", "HALT"]


def test_render_listing_marks_current_pc():
    lines = render_listing(disassemble(GRAVITY, count=3), current_pc=4)
    assert lines[0].startswith("   0000: ADD")
    assert lines[1].startswith("=> 0004: MUL")
    assert lines[2].endswith("; 99")
