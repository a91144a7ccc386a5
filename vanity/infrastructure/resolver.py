"""
TXT resolver capability used by the DNS store.

The DNS store only needs `lookup_txt(name, timeout) -> list[str]`; tests pass
a fake object with that method. The default implementation wraps dnspython and
keeps the whole call, retries included, inside the caller's deadline.

Includes retry logic for transient nameserver failures using tenacity.
"""

from __future__ import annotations

import time
from typing import List, Optional, Protocol, runtime_checkable

import dns.exception
import dns.resolver
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    stop_after_delay,
    wait_exponential,
)

from vanity.exceptions import ResolverError
from vanity.utils.logging import get_logger

log = get_logger(__name__)


@runtime_checkable
class TXTResolver(Protocol):
    def lookup_txt(self, name: str, timeout: float) -> List[str]:
        """
        Return the TXT strings published for `name`.

        Raises on any failure, including exceeding `timeout` seconds.
        """
        ...


def _txt_string(rdata) -> str:
    # A TXT record may hold several character-strings; they form one value.
    return b"".join(rdata.strings).decode("utf-8", errors="replace")


class DNSPythonResolver:
    """
    TXT lookups through the system-configured dnspython resolver.

    Only `NoNameservers` (every server answered SERVFAIL/REFUSED or was
    unreachable) is retried; NXDOMAIN, empty answers and timeouts fail
    immediately. Each attempt gets the time left before the deadline.
    """

    def __init__(
        self,
        resolver: Optional[dns.resolver.Resolver] = None,
        retry_attempts: int = 2,
    ) -> None:
        self._resolver = resolver
        self.retry_attempts = max(1, retry_attempts)

    @property
    def resolver(self) -> dns.resolver.Resolver:
        # Reads resolv.conf on first use rather than at construction.
        if self._resolver is None:
            self._resolver = dns.resolver.Resolver(configure=True)
        return self._resolver

    def lookup_txt(self, name: str, timeout: float) -> List[str]:
        deadline = time.monotonic() + timeout
        retrying = Retrying(
            stop=stop_after_attempt(self.retry_attempts) | stop_after_delay(timeout),
            wait=wait_exponential(multiplier=0.1, max=1),
            retry=retry_if_exception_type(dns.resolver.NoNameservers),
            before_sleep=lambda state: log.debug(
                f"Retrying TXT lookup for {name}",
                extra={"host": name, "attempt": state.attempt_number},
            ),
            reraise=True,
        )

        try:
            for attempt in retrying:
                with attempt:
                    remaining = deadline - time.monotonic()
                    if remaining <= 0:
                        raise dns.exception.Timeout(timeout=timeout)
                    answer = self.resolver.resolve(name, "TXT", lifetime=remaining)
        except dns.exception.DNSException as exc:
            raise ResolverError(f"TXT lookup for {name!r} failed: {exc}") from exc

        return [_txt_string(rdata) for rdata in answer]


__all__ = ["TXTResolver", "DNSPythonResolver"]
