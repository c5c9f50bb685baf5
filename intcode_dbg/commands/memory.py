"""Memory inspection and patching."""

from __future__ import annotations

import argparse
from typing import List

from intcode.errors import IntcodeError
from intcode.machine import IntcodeMachine

from .base import Command
from ..context import DebuggerContext
from ..output import emit_error, emit_result
from ..parser import parse_address, parse_int


class MemoryCommand(Command):
    """``mem read ADDR [--count N]`` and ``mem write ADDR VALUE``.

    ADDR may be an integer or a register expression such as ``rb-1``.
    """

    def __init__(self) -> None:
        super().__init__("mem", "Read or write memory cells", aliases=("memory", "x"))
        parser = argparse.ArgumentParser(prog="mem", add_help=False)
        sub = parser.add_subparsers(dest="subcmd")
        sub.required = True

        read = sub.add_parser("read", add_help=False)
        read.add_argument("address")
        read.add_argument("--count", type=int, default=8)

        write = sub.add_parser("write", add_help=False)
        write.add_argument("address")
        write.add_argument("value")

        self._parser = parser

    def run(self, ctx: DebuggerContext, argv: List[str]) -> int:
        try:
            args = self._parser.parse_args(argv)
        except SystemExit:
            return 1
        machine = self.require_machine(ctx)
        if machine is None:
            return 1
        address = parse_address(args.address, pc=machine.pc, relative_base=machine.relative_base)
        if address is None:
            emit_error(ctx, message=f"invalid address {args.address!r}")
            return 1
        if args.subcmd == "read":
            return self._read(ctx, machine, address, args.count)
        value = parse_int(args.value)
        if value is None:
            emit_error(ctx, message=f"invalid value {args.value!r}")
            return 1
        return self._write(ctx, machine, address, value)

    def _read(self, ctx: DebuggerContext, machine: IntcodeMachine, address: int, count: int) -> int:
        try:
            cells = machine.memory.cells(address, max(1, count))
        except IntcodeError as exc:
            emit_error(ctx, message=f"memory read failed: {exc}")
            return 2
        rows = [{"address": address + offset, "value": value} for offset, value in enumerate(cells)]
        emit_result(
            ctx,
            message="\n".join(f"{row['address']:04d}: {row['value']}" for row in rows),
            data={"cells": rows},
        )
        return 0

    def _write(self, ctx: DebuggerContext, machine: IntcodeMachine, address: int, value: int) -> int:
        try:
            machine.write(address, value)
        except IntcodeError as exc:
            emit_error(ctx, message=f"memory write failed: {exc}")
            return 2
        emit_result(ctx, message=f"{address:04d} <- {value}", data={"address": address, "value": value})
        return 0
