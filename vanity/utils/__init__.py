"""
Utilities package for the vanity import server.

Exports shared helpers for logging and request logging.
Keep this package lightweight and free of domain-specific logic.
"""

from vanity.utils.logging import configure_logging, current_level, get_logger, set_level
from vanity.utils.middleware import RequestLoggingMiddleware

__all__ = [
    "configure_logging",
    "current_level",
    "get_logger",
    "set_level",
    "RequestLoggingMiddleware",
]
