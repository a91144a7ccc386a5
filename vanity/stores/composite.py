"""
Composite store: an ordered chain of stores where the first match wins.
"""

from __future__ import annotations

from typing import Iterable, Optional, Tuple
from urllib.parse import SplitResult

from vanity.domain.models import ImportRecord
from vanity.stores.abstract import AbstractImportStore, ImportStore
from vanity.utils.logging import get_logger

log = get_logger(__name__)


class CompositeStore(AbstractImportStore):
    """
    Consult member stores in construction order.

    The member list is fixed once built; when several stores know the same
    key, the earlier one answers.
    """

    name: str = "composite"

    def __init__(self, stores: Iterable[ImportStore]) -> None:
        self._stores: Tuple[ImportStore, ...] = tuple(stores)

    @property
    def stores(self) -> Tuple[ImportStore, ...]:
        return self._stores

    def lookup(self, url: SplitResult) -> Optional[ImportRecord]:
        for store in self._stores:
            record = store.lookup(url)
            if record is not None:
                log.debug(
                    f"{store.name} store resolved {url.netloc}{url.path}",
                    extra={"store": store.name, "prefix": record.prefix},
                )
                return record

        return None


__all__ = ["CompositeStore"]
