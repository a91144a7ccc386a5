"""
Vanity import server - answers `go get` discovery requests for custom import paths.

Import records are resolved from an ordered chain of read-only stores:

- A JSON file of records, re-read on every request
- DNS TXT entries (`go-import=<prefix> <vcs> <root>[ <proxy>]`) on the request host

The first store that knows the request's host + path wins; its record is
rendered as an HTML page carrying the `go-import` meta tag.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from vanity.config import Settings, get_settings
from vanity.domain.models import ImportRecord
from vanity.handler import ImportHandler
from vanity.infrastructure import DNSPythonResolver, bytes_opener, file_opener
from vanity.renderer import ImportRenderer
from vanity.server import create_app
from vanity.stores import AbstractImportStore, CompositeStore, DNSStore, ImportStore, JSONStore
from vanity.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "ImportRecord",
    # Stores
    "ImportStore",
    "AbstractImportStore",
    "CompositeStore",
    "DNSStore",
    "JSONStore",
    # I/O
    "DNSPythonResolver",
    "bytes_opener",
    "file_opener",
    # HTTP
    "ImportHandler",
    "ImportRenderer",
    "create_app",
    # Logging
    "configure_logging",
    "get_logger",
]
