"""
Domain models for the vanity import server.

Defines the import record served in the `go-import` meta tag. The same model
is used to validate the JSON record file and to carry records parsed from
DNS TXT entries.
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

VCS_KINDS = ("bzr", "fossil", "git", "hg", "svn")


class ImportRecord(BaseModel):
    """
    Maps an import prefix to the repository (or module proxy) serving it.
    """

    prefix: str = Field("", description="Import path corresponding to the repository root.")
    vcs: str = Field("", description="One of bzr, fossil, git, hg, svn.")
    root: str = Field("", description="Repository root URL, e.g. https://example.org/foo/bar.")
    proxy: str = Field("", description="Optional module proxy URL; overrides vcs/root.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "extra": "ignore",
    }

    @field_validator("prefix", "vcs", "root", "proxy", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def is_proxy(self) -> bool:
        return bool(self.proxy)


__all__ = ["ImportRecord", "VCS_KINDS"]
