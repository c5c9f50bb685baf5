"""Program text parsing."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Union

from .errors import ProgramFormatError

_CELL = re.compile(r"[+-]?[0-9]+")


def parse_program(text: str) -> List[int]:
    """Parse ``"1,0,0,3,99"`` style program text into a list of cells.

    Surrounding whitespace and one trailing comma are tolerated.
    """
    body = text.strip()
    if body.endswith(","):
        body = body[:-1].rstrip()
    if not body:
        raise ProgramFormatError("program text is empty")
    cells: List[int] = []
    for index, token in enumerate(body.split(",")):
        token = token.strip()
        if not _CELL.fullmatch(token):
            raise ProgramFormatError(f"cell {index} is not an integer: {token!r}", index=index)
        cells.append(int(token, 10))
    return cells


def load_program(path: Union[str, Path]) -> List[int]:
    return parse_program(Path(path).read_text(encoding="utf-8"))


def format_program(cells: List[int]) -> str:
    return ",".join(str(cell) for cell in cells)


__all__ = ["parse_program", "load_program", "format_program"]
