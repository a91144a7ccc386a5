"""
DNS store: import records published as TXT entries on the request host.

A host advertises its imports with TXT values of the form

    go-import=<prefix> <vcs> <root>[ <proxy>]

Every lookup queries DNS again; answers are never cached here.
"""

from __future__ import annotations

from typing import Iterable, Optional
from urllib.parse import SplitResult

from vanity.domain.models import ImportRecord
from vanity.infrastructure.resolver import DNSPythonResolver, TXTResolver
from vanity.stores.abstract import AbstractImportStore, lookup_key
from vanity.utils.logging import get_logger

log = get_logger(__name__)

TXT_KEY = "go-import"
MIN_RECORD_FIELDS = 3
MAX_RECORD_FIELDS = 4
DEFAULT_TIMEOUT = 15.0


def parse_txt_record(txt: str, key: str) -> Optional[ImportRecord]:
    """
    Parse one TXT value against the lookup key (request host + path).

    Returns None unless the value is a well-formed `go-import` entry whose
    content starts with the key and whose prefix field equals the key,
    ignoring case.
    """
    name, sep, value = txt.partition("=")
    if not sep or name != TXT_KEY:
        return None

    if not value.startswith(key):
        return None

    fields = value.split(" ", MAX_RECORD_FIELDS - 1)
    if len(fields) < MIN_RECORD_FIELDS:
        log.debug(f"Malformed TXT record skipped: {txt!r}", extra={"key": key})
        return None

    if fields[0].casefold() != key.casefold():
        return None

    return ImportRecord(
        prefix=fields[0],
        vcs=fields[1],
        root=fields[2],
        proxy=fields[3] if len(fields) > MIN_RECORD_FIELDS else "",
    )


def first_match(records: Iterable[str], key: str) -> Optional[ImportRecord]:
    for txt in records:
        record = parse_txt_record(txt, key)
        if record is not None:
            return record
    return None


class DNSStore(AbstractImportStore):
    """
    Resolve imports from TXT records on the request's host.

    Parameters
    ----------
    resolver : TXTResolver | None
        Object providing `lookup_txt(name, timeout)`. Defaults to dnspython.
    timeout : float
        Deadline in seconds for a single TXT query.
    """

    name: str = "dns"

    def __init__(
        self,
        resolver: Optional[TXTResolver] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._resolver = resolver if resolver is not None else DNSPythonResolver()
        self.timeout = timeout

    def lookup(self, url: SplitResult) -> Optional[ImportRecord]:
        host = url.hostname or url.netloc
        if not host:
            return None

        try:
            records = self._resolver.lookup_txt(host, self.timeout)
        except Exception as exc:  # noqa: BLE001 - any resolver failure is a miss
            log.warning(
                f"DNSStore.lookup({url.geturl()!r}): TXT lookup error: {exc}",
                extra={"host": host},
            )
            return None

        return first_match(records, lookup_key(url))


__all__ = ["DNSStore", "parse_txt_record", "first_match"]
