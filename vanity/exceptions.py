"""
Shared exception classes for the vanity import server.

Stores never let these escape `lookup`; they exist so the layers below a
store (resolvers, renderer) can fail loudly and be caught in one place.
"""

from __future__ import annotations


class VanityError(Exception):
    """Base class for errors raised inside the vanity package."""


class ResolverError(VanityError):
    """
    Raised when a TXT lookup fails.

    Examples:
        - NXDOMAIN or empty answer
        - All nameservers failed (SERVFAIL/REFUSED)
        - Lookup deadline exceeded
    """


class RenderError(VanityError):
    """Raised when the import document template cannot be rendered."""


__all__ = [
    "VanityError",
    "ResolverError",
    "RenderError",
]
