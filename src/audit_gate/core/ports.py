from __future__ import annotations

from pathlib import Path
from typing import IO, Any, Callable, Iterator, Optional, Protocol


class ScratchSinkPort(Protocol):
    """Port for the temporary byte store holding raw audit output.

    Exactly one sink exists per run. It has a single writer (the audit tool)
    and any number of sequential readers.
    """

    @property
    def path(self) -> Path:
        ...

    def open_for_write(self) -> IO[bytes]:
        """Truncate the sink and return a binary handle for the writer."""
        ...

    def lines(self) -> Iterator[str]:
        """Yield the sink contents line by line (fresh read on every call)."""
        ...

    def read_text(self) -> str:
        """Return the whole sink contents, for error reporting only."""
        ...


class AuditToolPort(Protocol):
    """Port for the external audit command."""

    def run(self, *, severity: str, ignore_dev_dependencies: bool, output: IO[bytes]) -> int:
        """Run the audit, writing combined stdout/stderr into ``output``.

        Returns:
            The raw process exit status
        """
        ...


class ReportWriterPort(Protocol):
    """Port for emitting the final report text."""

    def write(self, text: str) -> None:
        ...


class LoggerPort(Protocol):
    """Port for structured logging.

    Messages are short event names; extra keyword fields are structured data.
    """

    def debug(self, message: str, **kwargs: Any) -> None:
        ...

    def info(self, message: str, **kwargs: Any) -> None:
        ...

    def warning(self, message: str, **kwargs: Any) -> None:
        ...


Sleeper = Callable[[float], None]
LineAction = Callable[[str], Optional[Any]]
