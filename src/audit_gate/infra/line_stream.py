from __future__ import annotations

from pathlib import Path
from typing import Iterator

from ..core.ports import LineAction


class LineStream:
    """Lazy, re-iterable view of a text file as lines.

    Every iteration opens the file afresh and holds only the current line,
    so memory stays flat no matter how large the audit output grows. The
    handle is closed when iteration finishes, stops early, or raises.
    """

    def __init__(self, path: Path, *, encoding: str = "utf-8") -> None:
        self._path = path
        self._encoding = encoding

    @property
    def path(self) -> Path:
        return self._path

    def __iter__(self) -> Iterator[str]:
        with open(self._path, "r", encoding=self._encoding, errors="replace") as fh:
            for line in fh:
                yield line.rstrip("\r\n")

    def for_each_line(self, action: LineAction) -> int:
        """Call ``action`` once per line, in file order.

        Returns:
            Number of lines read
        """
        count = 0
        for line in self:
            action(line)
            count += 1
        return count
