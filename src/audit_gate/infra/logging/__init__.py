from __future__ import annotations

from .logger import AuditLogger
from .handlers import build_json_file_handler, build_human_console_handler
from .formatters import JSONFormatter

__all__ = [
    "AuditLogger",
    "build_json_file_handler",
    "build_human_console_handler",
    "JSONFormatter",
]
