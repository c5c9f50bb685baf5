"""
intcode - an Intcode virtual machine.

The machine interprets a program of signed integer cells and exposes
suspension points (blocked on input, output produced, halted) so callers can
interleave several machines or an interactive device in one thread.

    memory.py    → fixed-capacity cell store
    operands.py  → position / immediate / relative addressing
    decoder.py   → instruction decoding
    machine.py   → executor and execution controller
    pipeline.py  → amplifier pipelines built from several machines
    ascii.py     → ASCII device helpers
    disasm.py    → listings and trace lines
    loader.py    → program text parsing
"""

from .errors import (  # noqa: F401
    AddressError,
    DecodeError,
    EmptyInputQueue,
    EmptyOutputBuffer,
    IntcodeError,
    InvalidOpcode,
    InvalidOperandMode,
    InvalidWriteTarget,
    LifecycleError,
    OutOfBoundsAddress,
    PipelineError,
    ProgramFormatError,
    QueueError,
    SteppedWhileHalted,
    WriteTargetError,
)
from .memory import Memory  # noqa: F401
from .operands import Immediate, Position, Relative  # noqa: F401
from .decoder import Instruction, decode  # noqa: F401
from .machine import IntcodeMachine, StepResult  # noqa: F401
from .pipeline import Pipeline, run_pipeline  # noqa: F401
from .loader import load_program, parse_program  # noqa: F401

__all__ = [
    "IntcodeMachine",
    "StepResult",
    "Memory",
    "Instruction",
    "decode",
    "Immediate",
    "Position",
    "Relative",
    "Pipeline",
    "run_pipeline",
    "load_program",
    "parse_program",
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

__version__ = "0.1.0"
