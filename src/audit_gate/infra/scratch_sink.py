from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import IO, Iterator

from dependency_injector.resources import Resource

from ..shared.remove_force import remove_force
from .line_stream import LineStream

logger = logging.getLogger(__name__)


class ScratchSink:
    """Temporary file receiving the audit tool's combined output."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @classmethod
    def create(cls, directory: Path | None = None) -> "ScratchSink":
        fd, name = tempfile.mkstemp(prefix="audit-gate-", suffix=".jsonl", dir=directory)
        os.close(fd)
        return cls(Path(name))

    @property
    def path(self) -> Path:
        return self._path

    def open_for_write(self) -> IO[bytes]:
        return open(self._path, "wb")

    def stream(self) -> LineStream:
        return LineStream(self._path)

    def lines(self) -> Iterator[str]:
        return iter(self.stream())

    def read_text(self) -> str:
        return self._path.read_text(encoding="utf-8", errors="replace")

    def remove(self) -> None:
        remove_force(self._path)


class ScratchSinkResource(Resource):
    """Container resource: one sink per run, removed on shutdown."""

    def init(self, *, directory: Path | None = None) -> ScratchSink:
        sink = ScratchSink.create(directory)
        logger.debug("scratch_sink_created", extra={"payload": {"path": str(sink.path)}})
        return sink

    def shutdown(self, resource: ScratchSink) -> None:
        resource.remove()
        logger.debug("scratch_sink_removed", extra={"payload": {"path": str(resource.path)}})
