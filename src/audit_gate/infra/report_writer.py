from __future__ import annotations

import sys
from pathlib import Path


class FileReportWriter:
    def __init__(self, *, path: Path) -> None:
        self._path = path

    def write(self, text: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(text + "\n", encoding="utf-8")


class ConsoleReportWriter:
    def write(self, text: str) -> None:
        sys.stdout.write(text + "\n")
        sys.stdout.flush()
