from __future__ import annotations

import logging
from pathlib import Path

from dependency_injector.resources import Resource

from .handlers import build_json_file_handler, build_human_console_handler


class AuditLogger(Resource):
    """Structured logger for the audit run.

    Provides convenience methods that pass keyword fields through as logging
    ``extra``. Handlers are attached to the package logger, so module loggers
    under ``audit_gate.*`` share them.
    """

    def init(
        self,
        *,
        logger_name: str = "audit_gate",
        console_output: bool = True,
        log_file: Path | None = None,
        level: str = "INFO",
    ) -> "AuditLogger":
        """Initialize handlers.

        Args:
            logger_name: Logger name
            console_output: Whether to log to stderr
            log_file: Optional JSONL log file
            level: Logging level (DEBUG, INFO, WARNING, ERROR)

        Returns:
            Self for dependency_injector Resource pattern
        """
        numeric_level = getattr(logging, level.upper(), logging.INFO)

        self._logger = logging.getLogger(logger_name)
        self._logger.setLevel(numeric_level)
        self._logger.propagate = False

        self._logger.handlers.clear()
        self._handlers = []

        if log_file is not None:
            file_handler = build_json_file_handler(log_file, level=numeric_level)
            self._logger.addHandler(file_handler)
            self._handlers.append(file_handler)

        if console_output:
            console_handler = build_human_console_handler(level=numeric_level)
            self._logger.addHandler(console_handler)
            self._handlers.append(console_handler)

        return self

    def shutdown(self, resource: "AuditLogger") -> None:
        """Flush and close all handlers."""
        for handler in self._handlers:
            handler.flush()
            handler.close()

        self._logger.handlers.clear()

    def debug(self, message: str, **kwargs) -> None:
        if kwargs:
            self._logger.debug(message, extra=kwargs)
        else:
            self._logger.debug(message)

    def info(self, message: str, **kwargs) -> None:
        if kwargs:
            self._logger.info(message, extra=kwargs)
        else:
            self._logger.info(message)

    def warning(self, message: str, **kwargs) -> None:
        if kwargs:
            self._logger.warning(message, extra=kwargs)
        else:
            self._logger.warning(message)

