"""
Infrastructure package for the vanity import server.

Centralizes I/O concerns the stores depend on: byte-stream openers for the
record file and the TXT resolver. Keep this layer focused on I/O and resource
management, decoupled from matching logic.
"""

from vanity.infrastructure.resolver import DNSPythonResolver, TXTResolver
from vanity.infrastructure.sources import Opener, bytes_opener, file_opener

__all__ = [
    "DNSPythonResolver",
    "TXTResolver",
    "Opener",
    "bytes_opener",
    "file_opener",
]
