"""Fixed-capacity cell store backing an Intcode machine."""

from __future__ import annotations

from typing import Iterable, List

from .constants import DEFAULT_CAPACITY
from .errors import OutOfBoundsAddress


class Memory:
    """Flat array of signed integer cells addressed from zero.

    The program is copied in and right-padded with zeros to ``capacity``
    cells. A program longer than ``capacity`` keeps its full length. The
    size never changes afterwards.
    """

    __slots__ = ("_cells",)

    def __init__(self, program: Iterable[int] = (), *, capacity: int = DEFAULT_CAPACITY) -> None:
        cells = [int(value) for value in program]
        if capacity < 0:
            raise ValueError("capacity must be non-negative")
        if len(cells) < capacity:
            cells.extend([0] * (capacity - len(cells)))
        self._cells: List[int] = cells

    @property
    def capacity(self) -> int:
        return len(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def _check(self, address: int) -> int:
        address = int(address)
        if address < 0 or address >= len(self._cells):
            raise OutOfBoundsAddress(address, len(self._cells))
        return address

    def read(self, address: int) -> int:
        return self._cells[self._check(address)]

    def write(self, address: int, value: int) -> None:
        self._cells[self._check(address)] = int(value)

    def cells(self, start: int, count: int) -> List[int]:
        """Return ``count`` cells starting at ``start``; the range must be in bounds."""
        if count <= 0:
            return []
        first = self._check(start)
        self._check(first + count - 1)
        return self._cells[first : first + count]

    def snapshot(self) -> List[int]:
        return list(self._cells)

    def copy(self) -> "Memory":
        clone = Memory.__new__(Memory)
        clone._cells = list(self._cells)
        return clone


__all__ = ["Memory"]
