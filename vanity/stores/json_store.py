"""
JSON file store: import records read from a JSON array.

The document is re-read on every lookup through the configured opener, so
edits to the file take effect without a restart. Matching is exact,
case-sensitive equality between a record's prefix and the request's
host + path.
"""

from __future__ import annotations

from typing import List, Optional
from urllib.parse import SplitResult

from pydantic import TypeAdapter, ValidationError

from vanity.domain.models import ImportRecord
from vanity.infrastructure.sources import Opener
from vanity.stores.abstract import AbstractImportStore, lookup_key
from vanity.utils.logging import get_logger

log = get_logger(__name__)

_RECORDS = TypeAdapter(List[ImportRecord])


def match_record(url: SplitResult, record: ImportRecord) -> bool:
    """Exact prefix equality; an empty prefix never matches."""
    return bool(record.prefix) and record.prefix == lookup_key(url)


class JSONStore(AbstractImportStore):
    """
    Resolve imports from a JSON document such as:

        [{"prefix": "example.org/x", "vcs": "git", "root": "https://example.com/x"}]

    Open and decode failures are logged and reported as a miss.
    """

    name: str = "json"

    def __init__(self, opener: Opener) -> None:
        self._opener = opener

    def _load(self, url: SplitResult) -> Optional[List[ImportRecord]]:
        try:
            stream, release = self._opener()
        except Exception as exc:  # noqa: BLE001 - openers are caller-supplied
            log.error(f"JSONStore.lookup({url.geturl()!r}): open error: {exc}")
            return None

        try:
            return _RECORDS.validate_json(stream.read())
        except (ValidationError, ValueError, OSError) as exc:
            log.error(f"JSONStore.lookup({url.geturl()!r}): decode error: {exc}")
            return None
        finally:
            release()

    def lookup(self, url: SplitResult) -> Optional[ImportRecord]:
        records = self._load(url)
        if records is None:
            return None

        for record in records:
            if match_record(url, record):
                return record

        return None


__all__ = ["JSONStore", "match_record"]
