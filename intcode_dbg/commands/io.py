"""Input and output queue commands."""

from __future__ import annotations

import argparse
from typing import List

from intcode.ascii import encode_line, split_output

from .base import Command
from ..context import DebuggerContext
from ..output import emit_error, emit_result


class InputCommand(Command):
    def __init__(self) -> None:
        super().__init__("input", "Queue integer input values", aliases=("in",))
        parser = argparse.ArgumentParser(prog="input", add_help=False)
        parser.add_argument("values", nargs="+", type=int)
        parser.add_argument("--replace", action="store_true", help="Replace the queue instead of appending")
        self._parser = parser

    def run(self, ctx: DebuggerContext, argv: List[str]) -> int:
        try:
            args = self._parser.parse_args(argv)
        except SystemExit:
            return 1
        machine = self.require_machine(ctx)
        if machine is None:
            return 1
        if args.replace:
            machine.set_input(args.values)
        else:
            machine.extend_input(args.values)
        pending = machine.pending_input
        emit_result(ctx, message=f"Queued {len(args.values)} value(s); {len(pending)} pending", data={"pending_input": pending})
        return 0


class AsciiCommand(Command):
    def __init__(self) -> None:
        super().__init__("ascii", "Queue a line of text (newline appended)")

    def run(self, ctx: DebuggerContext, argv: List[str]) -> int:
        machine = self.require_machine(ctx)
        if machine is None:
            return 1
        text = " ".join(argv)
        try:
            cells = encode_line(text)
        except ValueError as exc:
            emit_error(ctx, message=str(exc))
            return 1
        machine.extend_input(cells)
        emit_result(ctx, message=f"Queued {len(cells)} character(s)", data={"cells": cells})
        return 0


class OutputCommand(Command):
    def __init__(self) -> None:
        super().__init__("output", "Print (and drain) the output buffer", aliases=("out",))
        parser = argparse.ArgumentParser(prog="output", add_help=False)
        parser.add_argument("--keep", action="store_true", help="Leave the values in the buffer")
        parser.add_argument("--ascii", action="store_true", help="Decode values as ASCII text")
        self._parser = parser

    def run(self, ctx: DebuggerContext, argv: List[str]) -> int:
        try:
            args = self._parser.parse_args(argv)
        except SystemExit:
            return 1
        machine = self.require_machine(ctx)
        if machine is None:
            return 1
        values = machine.get_output() if args.keep else machine.drain_output()
        if args.ascii:
            text, extra = split_output(values)
            message = text.rstrip("\n")
            if extra:
                message += ("\n" if message else "") + "\n".join(str(value) for value in extra)
            emit_result(ctx, message=message or "(no output)", data={"text": text, "values": extra})
            return 0
        message = "\n".join(str(value) for value in values) if values else "(no output)"
        emit_result(ctx, message=message, data={"values": values})
        return 0
