"""
Domain package for the vanity import server.

Exports the import record model shared by the stores, the renderer, and the CLI.
Keep this package focused on data definitions and validation concerns.
"""

from vanity.domain.models import VCS_KINDS, ImportRecord

__all__ = [
    "ImportRecord",
    "VCS_KINDS",
]
