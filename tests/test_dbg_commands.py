"""Unit tests for intcode-dbg commands."""

from __future__ import annotations

import json

import pytest

from intcode_dbg.commands import build_registry
from intcode_dbg.commands.control import ResetCommand, RunCommand, StepCommand, UntilOutputCommand
from intcode_dbg.commands.disasm import DisasmCommand
from intcode_dbg.commands.exit import ExitCommand
from intcode_dbg.commands.io import AsciiCommand, InputCommand, OutputCommand
from intcode_dbg.commands.load import LoadCommand
from intcode_dbg.commands.memory import MemoryCommand
from intcode_dbg.commands.status import StatusCommand
from intcode_dbg.context import DebuggerContext, DebuggerError

GRAVITY = [1, 9, 10, 3, 2, 3, 11, 0, 99, 30, 40, 50]


def _context(cells, *, inputs=(), json_output=False, capacity=None):
    ctx = DebuggerContext(json_output=json_output, initial_input=list(inputs))
    if capacity is not None:
        ctx.capacity = capacity
    ctx.set_program(cells)
    return ctx


def test_commands_need_a_program(capsys):
    ctx = DebuggerContext()
    assert StepCommand().run(ctx, []) == 1
    assert RunCommand().run(ctx, []) == 1
    assert "no program loaded" in capsys.readouterr().out
    with pytest.raises(DebuggerError):
        ctx.reset()


def test_step_single_and_count(capsys):
    ctx = _context([1, 0, 0, 0, 99])
    assert StepCommand().run(ctx, []) == 0
    assert "Stepped 1 instruction(s); stopped at pc=4" in capsys.readouterr().out
    assert StepCommand().run(ctx, ["5"]) == 0
    assert "Stepped 1 instruction(s); halted" in capsys.readouterr().out
    assert StepCommand().run(ctx, []) == 1
    assert "machine has halted" in capsys.readouterr().out


def test_step_stops_when_waiting_for_input(capsys):
    ctx = _context([3, 0, 99])
    assert StepCommand().run(ctx, []) == 0
    assert "Stepped 0 instruction(s); waiting for input at pc=0" in capsys.readouterr().out
    assert ctx.machine.pc == 0


def test_step_reports_machine_errors(capsys):
    ctx = _context([42])
    assert StepCommand().run(ctx, []) == 2
    assert "step failed: invalid opcode 42" in capsys.readouterr().out


def test_run_and_output(capsys):
    ctx = _context([3, 0, 4, 0, 99], inputs=[7])
    assert RunCommand().run(ctx, []) == 0
    assert "Ran 3 instruction(s); halted; 1 output value(s) buffered" in capsys.readouterr().out
    assert OutputCommand().run(ctx, []) == 0
    assert capsys.readouterr().out.strip() == "7"
    assert OutputCommand().run(ctx, []) == 0
    assert capsys.readouterr().out.strip() == "(no output)"


def test_output_keep_and_ascii(capsys):
    ctx = _context([104, 72, 104, 105, 104, 10, 104, 500, 99])
    RunCommand().run(ctx, [])
    capsys.readouterr()
    assert OutputCommand().run(ctx, ["--keep", "--ascii"]) == 0
    assert capsys.readouterr().out.splitlines() == ["Hi", "500"]
    assert ctx.machine.get_output() == [72, 105, 10, 500]


def test_run_waits_for_input_then_resumes(capsys):
    ctx = _context([3, 0, 4, 0, 99])
    assert RunCommand().run(ctx, []) == 0
    assert "waiting for input at pc=0" in capsys.readouterr().out
    assert InputCommand().run(ctx, ["9"]) == 0
    assert "Queued 1 value(s); 1 pending" in capsys.readouterr().out
    assert UntilOutputCommand().run(ctx, []) == 0
    assert capsys.readouterr().out.strip() == "9"


def test_until_output_errors_after_halt(capsys):
    ctx = _context([104, 1, 99])
    assert UntilOutputCommand().run(ctx, []) == 0
    assert capsys.readouterr().out.strip() == "1"
    assert UntilOutputCommand().run(ctx, []) == 2
    assert "until-output failed" in capsys.readouterr().out


def test_input_replace(capsys):
    ctx = _context([3, 0, 99], inputs=[1, 2])
    assert InputCommand().run(ctx, ["5", "6", "--replace"]) == 0
    assert ctx.machine.pending_input == [5, 6]
    assert InputCommand().run(ctx, ["abc"]) == 1


def test_ascii_command_queues_line(capsys):
    ctx = _context([3, 0, 99])
    assert AsciiCommand().run(ctx, ["hi", "there"]) == 0
    assert "Queued 9 character(s)" in capsys.readouterr().out
    assert ctx.machine.pending_input[-1] == 10


def test_memory_read_and_write(capsys):
    ctx = _context([1, 0, 0, 0, 99])
    cmd = MemoryCommand()
    assert cmd.run(ctx, ["read", "0", "--count", "2"]) == 0
    assert capsys.readouterr().out.splitlines() == ["0000: 1", "0001: 0"]
    assert cmd.run(ctx, ["write", "0x10", "7"]) == 0
    assert capsys.readouterr().out.strip() == "0016 <- 7"
    assert ctx.machine.read(16) == 7


def test_memory_errors(capsys):
    ctx = _context([1, 0, 0, 0, 99], capacity=0)
    cmd = MemoryCommand()
    assert cmd.run(ctx, ["read", "4", "--count", "4"]) == 2
    assert "memory read failed" in capsys.readouterr().out
    assert cmd.run(ctx, ["write", "zz", "1"]) == 1
    assert "invalid address" in capsys.readouterr().out
    assert cmd.run(ctx, []) == 1


def test_disasm_marks_pc(capsys):
    ctx = _context(GRAVITY)
    assert DisasmCommand().run(ctx, ["--count", "3"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 3
    assert lines[0].startswith("=> 0000: ADD [9], [10], [3]")
    assert lines[2].startswith("   0008: HALT")


def test_disasm_json(capsys):
    ctx = _context(GRAVITY, json_output=True)
    assert DisasmCommand().run(ctx, ["4", "--count", "1"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["status"] == "ok"
    assert payload["result"]["instructions"][0]["mnemonic"] == "MUL"


def test_status_plain_and_json(capsys):
    ctx = DebuggerContext()
    assert StatusCommand().run(ctx, []) == 0
    assert capsys.readouterr().out.strip() == "No program loaded"

    ctx.set_program([3, 0, 99])
    assert StatusCommand().run(ctx, []) == 0
    out = capsys.readouterr().out
    assert "Machine: <inline>" in out
    assert "state        : waiting" in out
    assert "next         : IN [0]" in out

    ctx.json_output = True
    assert StatusCommand().run(ctx, []) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["result"]["state"] == "waiting"
    assert payload["result"]["pc"] == 0


def test_reset_restores_initial_state(capsys):
    ctx = _context([3, 0, 4, 0, 99], inputs=[4])
    RunCommand().run(ctx, [])
    assert ctx.machine.is_halted()
    assert ResetCommand().run(ctx, []) == 0
    assert "Reset (10000 cells)" in capsys.readouterr().out
    assert ctx.machine.pc == 0
    assert ctx.machine.pending_input == [4]


def test_load_command(program_file, capsys):
    path = program_file([104, 1, 99])
    ctx = DebuggerContext()
    assert LoadCommand().run(ctx, [str(path)]) == 0
    assert "Loaded 3 cells from" in capsys.readouterr().out
    assert ctx.program == [104, 1, 99]
    assert LoadCommand().run(ctx, [str(path.parent / "missing.txt")]) == 1
    assert "cannot read" in capsys.readouterr().out


def test_load_command_rejects_bad_program(tmp_path, capsys):
    path = tmp_path / "bad.txt"
    path.write_text("1,two,3", encoding="utf-8")
    assert LoadCommand().run(DebuggerContext(), [str(path)]) == 1
    assert "invalid program" in capsys.readouterr().out


def test_help_lists_commands(capsys):
    registry = build_registry()
    assert registry.get("?").run(DebuggerContext(), []) == 0
    out = capsys.readouterr().out
    assert "step (s, next)" in out
    assert "until-output (uo)" in out


def test_registry_aliases():
    registry = build_registry()
    assert registry.get("c") is registry.get("run")
    assert registry.get("x") is registry.get("mem")
    assert "quit" in registry.names()


def test_exit_command_raises_system_exit():
    with pytest.raises(SystemExit):
        ExitCommand().run(DebuggerContext(), [])


def test_memory_register_expressions(capsys):
    ctx = _context([109, 10, 99])
    StepCommand().run(ctx, [])
    capsys.readouterr()
    cmd = MemoryCommand()
    assert cmd.run(ctx, ["write", "rb+2", "5"]) == 0
    assert capsys.readouterr().out.strip() == "0012 <- 5"
    assert cmd.run(ctx, ["read", "pc", "--count", "1"]) == 0
    assert capsys.readouterr().out.strip() == "0002: 99"


def test_disasm_rejects_bad_address(capsys):
    ctx = _context(GRAVITY)
    assert DisasmCommand().run(ctx, ["pc*2"]) == 1
    assert "invalid address" in capsys.readouterr().out
    assert DisasmCommand().run(ctx, ["-4"]) == 1
    assert "outside memory" in capsys.readouterr().out


def test_help_for_one_command(capsys):
    registry = build_registry()
    help_command = registry.get("help")
    assert help_command.run(DebuggerContext(), ["x"]) == 0
    assert capsys.readouterr().out.strip().startswith("mem (memory, x)")
    assert help_command.run(DebuggerContext(), ["nope"]) == 1
    assert "unknown command" in capsys.readouterr().out


def test_exit_command_status():
    with pytest.raises(SystemExit) as excinfo:
        ExitCommand().run(DebuggerContext(), ["3"])
    assert excinfo.value.code == 3
