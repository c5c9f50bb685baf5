"""Exception hierarchy raised by the Intcode machine and its helpers."""

from __future__ import annotations

from typing import Optional


class IntcodeError(RuntimeError):
    """Base class for every machine failure."""

    def __init__(self, message: str, *, pc: Optional[int] = None) -> None:
        super().__init__(message)
        self.pc = pc


class DecodeError(IntcodeError):
    """The instruction cell at PC cannot be decoded."""


class InvalidOpcode(DecodeError):
    def __init__(self, opcode: int, *, pc: Optional[int] = None) -> None:
        location = f" at pc={pc}" if pc is not None else ""
        super().__init__(f"invalid opcode {opcode}{location}", pc=pc)
        self.opcode = opcode


class InvalidOperandMode(DecodeError):
    def __init__(self, mode: int, *, index: Optional[int] = None, pc: Optional[int] = None) -> None:
        where = f" for operand {index}" if index is not None else ""
        super().__init__(f"invalid addressing mode {mode}{where}", pc=pc)
        self.mode = mode
        self.index = index


class AddressError(IntcodeError):
    """Memory access outside the machine's address space."""


class OutOfBoundsAddress(AddressError):
    def __init__(self, address: int, capacity: int, *, pc: Optional[int] = None) -> None:
        super().__init__(f"address {address} outside memory [0, {capacity})", pc=pc)
        self.address = address
        self.capacity = capacity


class WriteTargetError(IntcodeError):
    """An instruction tried to store through an operand that has no address."""


class InvalidWriteTarget(WriteTargetError):
    def __init__(self, value: int, *, pc: Optional[int] = None) -> None:
        super().__init__(f"cannot write through immediate operand {value}", pc=pc)
        self.value = value


class QueueError(IntcodeError):
    """Input or output queue was empty when a value was required."""


class EmptyInputQueue(QueueError):
    def __init__(self, *, pc: Optional[int] = None) -> None:
        location = f" at pc={pc}" if pc is not None else ""
        super().__init__(f"input queue is empty{location}", pc=pc)


class EmptyOutputBuffer(QueueError):
    def __init__(self, message: str = "output buffer is empty", *, pc: Optional[int] = None) -> None:
        super().__init__(message, pc=pc)


class LifecycleError(IntcodeError):
    """Operation not permitted in the machine's current lifecycle state."""


class SteppedWhileHalted(LifecycleError):
    def __init__(self, *, pc: Optional[int] = None) -> None:
        super().__init__("attempted to step a halted machine", pc=pc)


class ProgramFormatError(IntcodeError, ValueError):
    """Program text is not a comma separated list of integers."""

    def __init__(self, message: str, *, index: Optional[int] = None) -> None:
        super().__init__(message)
        self.index = index


class PipelineError(IntcodeError):
    """Machines composed into a pipeline disagree about their state."""


__all__ = [
    "IntcodeError",
    "DecodeError",
    "InvalidOpcode",
    "InvalidOperandMode",
    "AddressError",
    "OutOfBoundsAddress",
    "WriteTargetError",
    "InvalidWriteTarget",
    "QueueError",
    "EmptyInputQueue",
    "EmptyOutputBuffer",
    "LifecycleError",
    "SteppedWhileHalted",
    "ProgramFormatError",
    "PipelineError",
]
