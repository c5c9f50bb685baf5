"""``intcode`` command line runner."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional, Tuple

from .ascii import encode_line, split_output
from .constants import DEFAULT_CAPACITY, ENV_CAPACITY, ENV_LOG_LEVEL
from .errors import IntcodeError
from .loader import load_program
from .machine import IntcodeMachine, StepResult
from .pipeline import Pipeline

LOG = logging.getLogger("intcode.cli")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _parse_patch(text: str) -> Tuple[int, int]:
    address, sep, value = text.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"patch must look like ADDR=VALUE (got {text!r})")
    try:
        return int(address, 0), int(value, 0)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid patch {text!r}: {exc}") from exc


def parse_capacity(text: str) -> int:
    try:
        value = int(text, 10)
    except ValueError:
        raise argparse.ArgumentTypeError(f"capacity must be an integer (got {text!r})") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"capacity must be non-negative (got {value})")
    return value


def _parse_phases(text: str) -> List[int]:
    try:
        return [int(token) for token in text.split(",") if token.strip()]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"phases must be comma separated integers: {exc}") from exc


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Intcode machine runner")
    ap.add_argument("program", help="file holding comma separated program cells")
    ap.add_argument("-i", "--input", type=int, action="append", default=[], help="queue an input value (repeatable)")
    ap.add_argument("--ascii-input", action="append", default=[], help="queue a line of ASCII text (repeatable)")
    ap.add_argument("--ascii", action="store_true", help="print output as ASCII text")
    ap.add_argument("--patch", type=_parse_patch, action="append", default=[], help="write VALUE to ADDR before running")
    ap.add_argument("--phases", type=_parse_phases, help="run an amplifier pipeline with these phase settings")
    ap.add_argument("--feedback", action="store_true", help="loop the pipeline's last stage back to the first")
    ap.add_argument(
        "--capacity",
        type=parse_capacity,
        default=os.environ.get(ENV_CAPACITY, str(DEFAULT_CAPACITY)),
        help=f"minimum memory size in cells (default {DEFAULT_CAPACITY}, or ${ENV_CAPACITY})",
    )
    ap.add_argument("--trace", action="store_true", help="print each executed instruction to stderr")
    ap.add_argument("--trace-file", help="write trace output to a file")
    ap.add_argument("--log-level", default=os.environ.get(ENV_LOG_LEVEL, "WARNING"), help="logging level (default WARNING)")
    ap.add_argument("-v", "--verbose", action="store_true", help="print cell 0 and step count after the run")
    return ap


def _print_output(values: List[int], *, as_ascii: bool) -> None:
    if not as_ascii:
        for value in values:
            print(value)
        return
    text, extra = split_output(values)
    if text:
        sys.stdout.write(text)
        if not text.endswith("\n"):
            sys.stdout.write("\n")
    for value in extra:
        print(value)


def _run_pipeline(args: argparse.Namespace, program: List[int]) -> int:
    pipeline = Pipeline(program, args.phases, feedback=args.feedback, capacity=args.capacity, trace=args.trace)
    signal = args.input[0] if args.input else 0
    print(pipeline.run(signal))
    if args.verbose:
        print(f"[intcode] {pipeline.passes} pass(es) through {len(pipeline.stages)} stage(s)")
    return 0


def _run_machine(args: argparse.Namespace, program: List[int], ascii_cells: List[int]) -> int:
    machine = IntcodeMachine(program, capacity=args.capacity, trace=args.trace)
    trace_fp = open(args.trace_file, "w", encoding="utf-8") if args.trace_file else None
    machine.trace_out = trace_fp
    try:
        for address, value in args.patch:
            machine.write(address, value)
        machine.extend_input(args.input)
        machine.extend_input(ascii_cells)
        result = machine.run_until_input()
    except IntcodeError as exc:
        _print_output(machine.drain_output(), as_ascii=args.ascii)
        LOG.error("machine error: %s", exc)
        return 1
    finally:
        if trace_fp:
            trace_fp.close()

    _print_output(machine.drain_output(), as_ascii=args.ascii)
    if args.verbose:
        print(f"[intcode] cell0={machine.read(0)} steps={machine.steps} pc={machine.pc}")
    if result is StepResult.NEEDS_INPUT:
        LOG.error("program is waiting for input at pc=%d", machine.pc)
        return 2
    return 0


def _check_pipeline_args(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    unsupported = []
    if len(args.input) > 1:
        unsupported.append("more than one --input")
    if args.patch:
        unsupported.append("--patch")
    if args.ascii_input:
        unsupported.append("--ascii-input")
    if args.ascii:
        unsupported.append("--ascii")
    if args.trace_file:
        unsupported.append("--trace-file")
    if unsupported:
        parser.error(f"--phases cannot be combined with {', '.join(unsupported)}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if args.phases:
        _check_pipeline_args(parser, args)
    elif args.feedback:
        parser.error("--feedback requires --phases")
    ascii_cells: List[int] = []
    for line in args.ascii_input:
        try:
            ascii_cells.extend(encode_line(line))
        except ValueError as exc:
            parser.error(f"--ascii-input: {exc}")
    _configure_logging(args.log_level)
    try:
        program = load_program(args.program)
    except OSError as exc:
        LOG.error("cannot read %s: %s", args.program, exc)
        return 1
    except IntcodeError as exc:
        LOG.error("invalid program %s: %s", args.program, exc)
        return 1
    if not args.phases:
        return _run_machine(args, program, ascii_cells)
    try:
        return _run_pipeline(args, program)
    except IntcodeError as exc:
        LOG.error("pipeline error: %s", exc)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
