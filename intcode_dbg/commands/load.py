"""Program loading command."""

from __future__ import annotations

import argparse
from typing import List

from intcode.errors import ProgramFormatError

from .base import Command
from ..context import DebuggerContext
from ..output import emit_error, emit_result


class LoadCommand(Command):
    def __init__(self) -> None:
        super().__init__("load", "Load a program file and start a fresh machine")
        self._parser = argparse.ArgumentParser(prog="load", add_help=False)
        self._parser.add_argument("path")

    def run(self, ctx: DebuggerContext, argv: List[str]) -> int:
        try:
            args = self._parser.parse_args(argv)
        except SystemExit:
            return 1
        try:
            machine = ctx.load_program(args.path)
        except OSError as exc:
            emit_error(ctx, message=f"cannot read {args.path}: {exc}")
            return 1
        except ProgramFormatError as exc:
            emit_error(ctx, message=f"invalid program {args.path}: {exc}")
            return 1
        cells = len(ctx.program or [])
        emit_result(
            ctx,
            message=f"Loaded {cells} cells from {ctx.program_path}",
            data={"path": str(ctx.program_path), "cells": cells, "capacity": machine.memory.capacity},
        )
        return 0
