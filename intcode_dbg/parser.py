"""Argument helpers for intcode-dbg: command splitting and address parsing.

Addresses accept plain integers (``12``, ``0x1f``, ``-3``) and expressions
relative to the machine registers: ``pc``, ``rb``, ``pc+4``, ``rb-1``.
"""

from __future__ import annotations

import shlex
from typing import List, Optional

PARSE_ERROR_PREFIX = "#parse-error"

_REGISTERS = ("pc", "rb")


def split_command(line: str) -> List[str]:
    if not line:
        return []
    try:
        return shlex.split(line, comments=False, posix=True)
    except ValueError as exc:
        return [f"{PARSE_ERROR_PREFIX}:{exc}", line.strip()]


def parse_int(text: str) -> Optional[int]:
    try:
        return int(text.strip(), 0)
    except ValueError:
        return None


def parse_address(text: str, *, pc: int = 0, relative_base: int = 0) -> Optional[int]:
    """Resolve an address token; None when it is not understood."""
    token = text.strip().lower()
    registers = dict(zip(_REGISTERS, (pc, relative_base)))
    for name, base in registers.items():
        if not token.startswith(name):
            continue
        rest = token[len(name):].replace(" ", "")
        if not rest:
            return base
        if rest[0] not in "+-":
            return None
        offset = parse_int(rest[1:])
        if offset is None:
            return None
        return base + offset if rest[0] == "+" else base - offset
    return parse_int(token)


__all__ = ["PARSE_ERROR_PREFIX", "split_command", "parse_int", "parse_address"]
