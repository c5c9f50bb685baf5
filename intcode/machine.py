"""Intcode machine: executor plus the execution controller.

The machine is single threaded and cooperative. ``step`` never blocks: when
the next instruction is an input and the input queue is empty it reports
``StepResult.NEEDS_INPUT`` without executing anything, which lets a caller
feed more input (or service other machines) and resume later.
"""

from __future__ import annotations

import enum
import logging
import sys
from collections import deque
from typing import Any, Callable, Deque, Dict, Iterable, List, Optional, TextIO

from .constants import DEFAULT_CAPACITY
from .decoder import Instruction, decode
from .disasm import format_instruction, trace_line
from .errors import (
    AddressError,
    DecodeError,
    EmptyInputQueue,
    EmptyOutputBuffer,
    IntcodeError,
    SteppedWhileHalted,
)
from .memory import Memory
from .opcodes import Opcode
from .operands import Operand

LOGGER = logging.getLogger("intcode.machine")


class StepResult(enum.Enum):
    RUNNING = "running"
    NEEDS_INPUT = "needs_input"
    HALTED = "halted"


class IntcodeMachine:
    def __init__(
        self,
        program: Iterable[int],
        *,
        capacity: int = DEFAULT_CAPACITY,
        inputs: Optional[Iterable[int]] = None,
        trace: bool = False,
        trace_file: Optional[TextIO] = None,
        name: Optional[str] = None,
    ) -> None:
        self.memory = Memory(program, capacity=capacity)
        self.pc = 0
        self.relative_base = 0
        self.halted = False
        self.steps = 0
        self.name = name
        self.trace = trace
        self.trace_out = trace_file
        self._inputs: Deque[int] = deque(int(value) for value in (inputs or ()))
        self._outputs: Deque[int] = deque()

    def __repr__(self) -> str:
        label = f" {self.name!r}" if self.name else ""
        state = "halted" if self.halted else "running"
        return f"<IntcodeMachine{label} pc={self.pc} rb={self.relative_base} {state}>"

    def _log(self, msg: str) -> None:
        if self.trace_out:
            self.trace_out.write(msg + "\n")
            self.trace_out.flush()
        if self.trace:
            print(msg, file=sys.stderr)
        if self.name:
            LOGGER.debug("[%s] %s", self.name, msg)
        else:
            LOGGER.debug("%s", msg)

    # ------------------------------------------------------------------
    # Memory access

    def read(self, address: int) -> int:
        return self.memory.read(address)

    def write(self, address: int, value: int) -> None:
        self.memory.write(address, value)

    # ------------------------------------------------------------------
    # Input / output queues

    def add_input(self, value: int) -> None:
        self._inputs.append(int(value))

    def extend_input(self, values: Iterable[int]) -> None:
        self._inputs.extend(int(value) for value in values)

    def set_input(self, values: Iterable[int]) -> None:
        """Replace the whole input queue."""
        self._inputs = deque(int(value) for value in values)

    @property
    def pending_input(self) -> List[int]:
        return list(self._inputs)

    def pop_output(self) -> int:
        if not self._outputs:
            raise EmptyOutputBuffer(pc=self.pc)
        return self._outputs.popleft()

    def get_output(self) -> List[int]:
        """Snapshot of the buffered output; the buffer is left untouched."""
        return list(self._outputs)

    def drain_output(self) -> List[int]:
        values = list(self._outputs)
        self._outputs.clear()
        return values

    def clear_output(self) -> None:
        self._outputs.clear()

    # ------------------------------------------------------------------
    # Executor

    def _value(self, operand: Operand) -> int:
        return operand.read(self.memory, self.relative_base)

    def _store(self, operand: Operand, value: int) -> None:
        self.memory.write(operand.target(self.relative_base), value)

    def _op_add(self, ins: Instruction) -> None:
        left, right, dest = ins.operands
        self._store(dest, self._value(left) + self._value(right))

    def _op_mul(self, ins: Instruction) -> None:
        left, right, dest = ins.operands
        self._store(dest, self._value(left) * self._value(right))

    def _op_in(self, ins: Instruction) -> None:
        (dest,) = ins.operands
        if not self._inputs:
            raise EmptyInputQueue(pc=ins.address)
        self._store(dest, self._inputs.popleft())

    def _op_out(self, ins: Instruction) -> None:
        (source,) = ins.operands
        self._outputs.append(self._value(source))

    def _op_jnz(self, ins: Instruction) -> None:
        test, target = ins.operands
        if self._value(test) != 0:
            self.pc = self._value(target)

    def _op_jz(self, ins: Instruction) -> None:
        test, target = ins.operands
        if self._value(test) == 0:
            self.pc = self._value(target)

    def _op_lt(self, ins: Instruction) -> None:
        left, right, dest = ins.operands
        self._store(dest, 1 if self._value(left) < self._value(right) else 0)

    def _op_eq(self, ins: Instruction) -> None:
        left, right, dest = ins.operands
        self._store(dest, 1 if self._value(left) == self._value(right) else 0)

    def _op_arb(self, ins: Instruction) -> None:
        (offset,) = ins.operands
        self.relative_base += self._value(offset)

    def _op_halt(self, ins: Instruction) -> None:
        self.halted = True

    _HANDLERS: Dict[Opcode, Callable[["IntcodeMachine", Instruction], None]] = {
        Opcode.ADD: _op_add,
        Opcode.MUL: _op_mul,
        Opcode.IN: _op_in,
        Opcode.OUT: _op_out,
        Opcode.JNZ: _op_jnz,
        Opcode.JZ: _op_jz,
        Opcode.LT: _op_lt,
        Opcode.EQ: _op_eq,
        Opcode.ARB: _op_arb,
        Opcode.HALT: _op_halt,
    }

    def execute(self, instruction: Instruction) -> None:
        """Apply one decoded instruction.

        PC moves past the instruction first so jumps can overwrite it. An
        input with an empty queue raises ``EmptyInputQueue``; use ``step`` for
        the suspension-aware path.
        """
        if self.trace or self.trace_out:
            self._log(trace_line(instruction, self.memory, self.relative_base))
        self.pc = instruction.next_pc
        try:
            self._HANDLERS[instruction.opcode](self, instruction)
        except IntcodeError as exc:
            if exc.pc is None:
                exc.pc = instruction.address
            raise
        self.steps += 1
        if self.halted:
            LOGGER.debug("%s halted at pc=%d after %d steps", self.name or "machine", instruction.address, self.steps)

    # ------------------------------------------------------------------
    # Execution controller

    def is_halted(self) -> bool:
        return self.halted

    def peek(self) -> Instruction:
        """Decode the instruction at PC without executing it."""
        return decode(self.memory, self.pc)

    def step(self) -> StepResult:
        if self.halted:
            raise SteppedWhileHalted(pc=self.pc)
        instruction = self.peek()
        if instruction.opcode is Opcode.IN and not self._inputs:
            return StepResult.NEEDS_INPUT
        self.execute(instruction)
        return StepResult.HALTED if self.halted else StepResult.RUNNING

    def run(self) -> int:
        """Run to completion and return cell 0."""
        while not self.halted:
            if self.step() is StepResult.NEEDS_INPUT:
                raise EmptyInputQueue(pc=self.pc)
        return self.memory.read(0)

    def run_until_input(self) -> StepResult:
        """Run until halted or blocked on an input instruction with no queued value."""
        while not self.halted:
            result = self.step()
            if result is StepResult.NEEDS_INPUT:
                LOGGER.debug("%s waiting for input at pc=%d", self.name or "machine", self.pc)
                return result
        return StepResult.HALTED

    def run_until_output(self) -> int:
        """Run until a value is buffered, then remove and return the earliest one."""
        while not self._outputs and not self.halted:
            if self.step() is StepResult.NEEDS_INPUT:
                raise EmptyInputQueue(pc=self.pc)
        if not self._outputs:
            raise EmptyOutputBuffer("machine halted without producing output", pc=self.pc)
        return self._outputs.popleft()

    # ------------------------------------------------------------------
    # Copies and inspection

    def clone(self) -> "IntcodeMachine":
        """Independent copy of the complete machine state."""
        other = IntcodeMachine.__new__(IntcodeMachine)
        other.memory = self.memory.copy()
        other.pc = self.pc
        other.relative_base = self.relative_base
        other.halted = self.halted
        other.steps = self.steps
        other.name = self.name
        other.trace = self.trace
        other.trace_out = self.trace_out
        other._inputs = deque(self._inputs)
        other._outputs = deque(self._outputs)
        return other

    def snapshot_state(self) -> Dict[str, Any]:
        next_text: Optional[str] = None
        waiting = False
        if not self.halted:
            try:
                instruction = self.peek()
            except (DecodeError, AddressError) as exc:
                next_text = f"<{exc}>"
            else:
                next_text = format_instruction(instruction, memory=self.memory, relative_base=self.relative_base)
                waiting = instruction.opcode is Opcode.IN and not self._inputs
        if self.halted:
            state = "halted"
        elif waiting:
            state = "waiting"
        else:
            state = "ready"
        return {
            "name": self.name,
            "state": state,
            "pc": self.pc,
            "relative_base": self.relative_base,
            "halted": self.halted,
            "steps": self.steps,
            "capacity": self.memory.capacity,
            "pending_input": list(self._inputs),
            "pending_output": list(self._outputs),
            "next": next_text,
        }


__all__ = ["IntcodeMachine", "StepResult"]
