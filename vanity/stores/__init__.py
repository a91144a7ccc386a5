"""
Stores package for the vanity import server.

This module re-exports the abstract interfaces and the concrete store classes
so downstream code can import from `vanity.stores` directly.
"""

from vanity.stores.abstract import AbstractImportStore, ImportStore, lookup_key
from vanity.stores.composite import CompositeStore
from vanity.stores.dns_store import DNSStore
from vanity.stores.json_store import JSONStore

__all__ = [
    # Abstracts
    "AbstractImportStore",
    "ImportStore",
    "lookup_key",
    # Concrete stores
    "CompositeStore",
    "DNSStore",
    "JSONStore",
]
