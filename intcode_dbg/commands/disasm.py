"""Disassembly command."""

from __future__ import annotations

import argparse
from typing import List

from intcode.disasm import disassemble, render_listing

from .base import Command
from ..context import DebuggerContext
from ..output import emit_error, emit_result
from ..parser import parse_address


class DisasmCommand(Command):
    def __init__(self) -> None:
        super().__init__("disasm", "Disassemble from ADDR (default: PC)", aliases=("d",))
        parser = argparse.ArgumentParser(prog="disasm", add_help=False)
        parser.add_argument("address", nargs="?", default="pc")
        parser.add_argument("--count", type=int, default=10)
        self._parser = parser

    def run(self, ctx: DebuggerContext, argv: List[str]) -> int:
        try:
            args = self._parser.parse_args(argv)
        except SystemExit:
            return 1
        machine = self.require_machine(ctx)
        if machine is None:
            return 1
        start = parse_address(args.address, pc=machine.pc, relative_base=machine.relative_base)
        if start is None:
            emit_error(ctx, message=f"invalid address {args.address!r}")
            return 1
        listing = disassemble(machine.memory, start=start, count=max(1, args.count))
        if not listing:
            emit_error(ctx, message=f"address {start} outside memory")
            return 1
        emit_result(
            ctx,
            message="\n".join(render_listing(listing, current_pc=machine.pc)),
            data={"current_pc": machine.pc, "instructions": listing},
        )
        return 0
