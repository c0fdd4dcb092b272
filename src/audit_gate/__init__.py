__version__ = "0.1.0"

from .app.main import run_audit

__all__ = [
    "run_audit",
]

# stdlib logging defaults: attach NullHandler to prevent 'No handler' warnings
import logging
_logger = logging.getLogger(__name__)
_logger.addHandler(logging.NullHandler())
