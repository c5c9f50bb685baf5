"""Execution control commands (step/run/until-output/reset)."""

from __future__ import annotations

import argparse
from typing import List

from intcode.errors import IntcodeError
from intcode.machine import StepResult

from .base import Command
from ..context import DebuggerContext, DebuggerError
from ..output import emit_error, emit_result


def _stop_message(result: StepResult, pc: int) -> str:
    if result is StepResult.HALTED:
        return "halted"
    if result is StepResult.NEEDS_INPUT:
        return f"waiting for input at pc={pc}"
    return f"stopped at pc={pc}"


class StepCommand(Command):
    def __init__(self) -> None:
        super().__init__("step", "Execute instructions one at a time", aliases=("s", "next"))
        self._parser = argparse.ArgumentParser(prog="step", add_help=False)
        self._parser.add_argument("count", nargs="?", type=int, default=1, help="Instruction count (default 1)")

    def run(self, ctx: DebuggerContext, argv: List[str]) -> int:
        try:
            args = self._parser.parse_args(argv)
        except SystemExit:
            return 1
        machine = self.require_machine(ctx)
        if machine is None:
            return 1
        if machine.is_halted():
            emit_error(ctx, message="machine has halted (use 'reset')")
            return 1
        executed = 0
        result = StepResult.RUNNING
        try:
            while executed < max(1, args.count):
                result = machine.step()
                if result is StepResult.NEEDS_INPUT:
                    break
                executed += 1
                if result is StepResult.HALTED:
                    break
        except IntcodeError as exc:
            emit_error(ctx, message=f"step failed: {exc}", data={"pc": exc.pc, "executed": executed})
            return 2
        message = f"Stepped {executed} instruction(s); {_stop_message(result, machine.pc)}"
        emit_result(
            ctx,
            message=message,
            data={"executed": executed, "result": result.value, "pc": machine.pc},
        )
        return 0


class RunCommand(Command):
    def __init__(self) -> None:
        super().__init__("run", "Run until halted or blocked on input", aliases=("continue", "c"))

    def run(self, ctx: DebuggerContext, argv: List[str]) -> int:
        machine = self.require_machine(ctx)
        if machine is None:
            return 1
        before = machine.steps
        try:
            result = machine.run_until_input()
        except IntcodeError as exc:
            emit_error(ctx, message=f"run failed: {exc}", data={"pc": exc.pc})
            return 2
        executed = machine.steps - before
        buffered = len(machine.get_output())
        message = f"Ran {executed} instruction(s); {_stop_message(result, machine.pc)}; {buffered} output value(s) buffered"
        emit_result(
            ctx,
            message=message,
            data={"executed": executed, "result": result.value, "pc": machine.pc, "buffered_output": buffered},
        )
        return 0


class UntilOutputCommand(Command):
    def __init__(self) -> None:
        super().__init__("until-output", "Run until the next output value and print it", aliases=("uo",))

    def run(self, ctx: DebuggerContext, argv: List[str]) -> int:
        machine = self.require_machine(ctx)
        if machine is None:
            return 1
        try:
            value = machine.run_until_output()
        except IntcodeError as exc:
            emit_error(ctx, message=f"until-output failed: {exc}", data={"pc": exc.pc})
            return 2
        emit_result(ctx, message=str(value), data={"value": value, "pc": machine.pc})
        return 0


class ResetCommand(Command):
    def __init__(self) -> None:
        super().__init__("reset", "Recreate the machine from the loaded program")

    def run(self, ctx: DebuggerContext, argv: List[str]) -> int:
        try:
            machine = ctx.reset()
        except DebuggerError as exc:
            emit_error(ctx, message=str(exc))
            return 1
        emit_result(ctx, message=f"Reset ({machine.memory.capacity} cells)", data={"capacity": machine.memory.capacity})
        return 0
