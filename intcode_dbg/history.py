"""Command history kept across debugger sessions."""

from __future__ import annotations

import logging
from collections import deque
from pathlib import Path
from typing import Deque, Iterable, List, Optional, Union

LOGGER = logging.getLogger("intcode_dbg.history")


class HistoryStore:
    """Most recent ``limit`` command lines, mirrored to ``path`` when one is given.

    Blank lines and immediate repeats are not recorded. Read or write
    failures are logged and otherwise ignored so the session keeps running.
    """

    def __init__(self, path: Optional[Union[str, Path]], *, limit: int = 1000) -> None:
        self.path = Path(path).expanduser() if path else None
        self._entries: Deque[str] = deque(maxlen=max(1, int(limit or 1)))
        if self.path is not None and self.path.exists():
            self._read()

    @property
    def limit(self) -> int:
        return self._entries.maxlen or 1

    def _read(self) -> None:
        try:
            with self.path.open(encoding="utf-8") as handle:
                for raw in handle:
                    line = raw.strip()
                    if line:
                        self._entries.append(line)
        except OSError as exc:
            LOGGER.warning("cannot read history %s: %s", self.path, exc)

    def _write(self) -> None:
        if self.path is None:
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as handle:
                for line in self._entries:
                    handle.write(line + "\n")
        except OSError as exc:
            LOGGER.warning("cannot write history %s: %s", self.path, exc)

    def append(self, line: str) -> None:
        text = line.strip()
        if not text or (self._entries and self._entries[-1] == text):
            return
        self._entries.append(text)
        self._write()

    def extend(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.append(line)

    def snapshot(self) -> List[str]:
        return list(self._entries)
