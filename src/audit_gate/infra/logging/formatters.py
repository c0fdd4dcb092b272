from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter


class JSONFormatter(JsonFormatter):
    """JSON formatter using python-json-logger.

    Formats log records as JSON with support for structured data via extra fields.
    """

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['message'] = record.getMessage()

        if hasattr(record, 'payload'):
            log_record['payload'] = record.payload  # type: ignore[attr-defined]


class HumanReadableFormatter(logging.Formatter):
    """Console formatter: ``LEVEL: message``, with a timestamp in debug mode."""

    def __init__(self, *, with_timestamp: bool = False) -> None:
        if with_timestamp:
            super().__init__(fmt='%(asctime)s - %(levelname)s - %(message)s', datefmt='%Y-%m-%d %H:%M:%S')
        else:
            super().__init__(fmt='%(levelname)s: %(message)s')
