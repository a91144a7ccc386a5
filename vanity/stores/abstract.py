"""
Abstract store interfaces for the vanity import server.

Concrete stores (JSON file, DNS TXT) implement the ImportStore protocol and
return an ImportRecord, or None when they cannot resolve the request. A store
never raises for missing or malformed backing data: failures are logged and
reported as a miss.
"""

from __future__ import annotations

import abc
from typing import Optional, Protocol, runtime_checkable
from urllib.parse import SplitResult

from vanity.domain.models import ImportRecord


def lookup_key(url: SplitResult) -> str:
    """
    Host plus path of a request URL; scheme and query are not part of the key.
    """
    return url.netloc + url.path


@runtime_checkable
class ImportStore(Protocol):
    """
    Common interface all record stores implement.

    Attributes
    ----------
    name : str
        A short machine-friendly identifier.
    """

    name: str

    def lookup(self, url: SplitResult) -> Optional[ImportRecord]:
        """
        Find the import record for a request URL.

        Parameters
        ----------
        url : SplitResult
            The request URL; its netloc is the request's Host.

        Returns
        -------
        ImportRecord | None
            The matching record, or None when this store has no match.
        """
        ...


class AbstractImportStore(abc.ABC):
    """
    Optional ABC helper for class-based implementations.

    Subclasses should set `name` and implement `lookup`.
    """

    name: str

    @abc.abstractmethod
    def lookup(self, url: SplitResult) -> Optional[ImportRecord]:  # pragma: no cover - interface only
        """Resolve the URL to a record, or None."""
        raise NotImplementedError


__all__ = [
    "ImportStore",
    "AbstractImportStore",
    "lookup_key",
]
