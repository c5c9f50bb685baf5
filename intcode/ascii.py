"""Helpers for programs that talk ASCII over their input/output queues."""

from __future__ import annotations

from typing import Iterable, List, Tuple

from .constants import ASCII_MAX, ASCII_NEWLINE
from .machine import IntcodeMachine


def encode_line(text: str) -> List[int]:
    """Encode ``text`` followed by a newline as input cells."""
    cells = []
    for char in text:
        code = ord(char)
        if code > ASCII_MAX:
            raise ValueError(f"character {char!r} is not ASCII")
        cells.append(code)
    cells.append(ASCII_NEWLINE)
    return cells


def split_output(values: Iterable[int]) -> Tuple[str, List[int]]:
    """Split output cells into decoded text and the non-ASCII values."""
    chars: List[str] = []
    extra: List[int] = []
    for value in values:
        if 0 <= value <= ASCII_MAX:
            chars.append(chr(value))
        else:
            extra.append(value)
    return "".join(chars), extra


def decode_output(values: Iterable[int]) -> str:
    text, extra = split_output(values)
    if extra:
        raise ValueError(f"output contains non-ASCII values: {extra}")
    return text


def feed_line(machine: IntcodeMachine, text: str) -> None:
    machine.extend_input(encode_line(text))


def read_text(machine: IntcodeMachine) -> str:
    """Drain the machine's output buffer as text.

    The buffer is left untouched when it holds non-ASCII values.
    """
    text = decode_output(machine.get_output())
    machine.clear_output()
    return text


__all__ = ["encode_line", "split_output", "decode_output", "feed_line", "read_text"]
