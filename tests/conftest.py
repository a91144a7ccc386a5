"""
Pytest configuration for the vanity import server.

Provides fixtures for:
- Settings isolated from the developer's environment
- A fake TXT resolver standing in for DNS
- In-memory JSON record documents
"""

from __future__ import annotations

import io
import logging
from typing import Dict, List

import pytest

from vanity.config import Settings, get_settings

RECORDS_JSON = """[
{"prefix":"example.org/tempusbreve/vanity","vcs":"git","root":"https://github.com/tempusbreve/vanity","proxy":""},
{"prefix":"example.org/tempusbreve/proxy","vcs":"git","root":"https://github.com/tempusbreve/proxy","proxy":"https://proxy.golang.org/"},
{}]"""

TXT_RECORDS = {
    "example.org": [
        "go-import=example.org/tempusbreve/vanity git https://github.com/tempusbreve/vanity",
        "go-import=example.org/tempusbreve/proxy git https://github.com/tempusbreve/proxy https://proxy.golang.org/",
    ],
}


class FakeResolver:
    """Map of host name to TXT strings; unknown hosts fail like NXDOMAIN."""

    def __init__(self, records: Dict[str, List[str]]) -> None:
        self.records = records
        self.calls: List[tuple] = []

    def lookup_txt(self, name: str, timeout: float) -> List[str]:
        self.calls.append((name, timeout))
        if name in self.records:
            return list(self.records[name])
        raise LookupError(f"no TXT records for {name}")


class Recorder:
    """Opener wrapper counting opens and releases."""

    def __init__(self, data: bytes) -> None:
        self.data = data
        self.opened = 0
        self.released = 0

    def __call__(self):
        self.opened += 1
        buf = io.BytesIO(self.data)

        def _release() -> None:
            self.released += 1
            buf.close()

        return buf, _release


@pytest.fixture(autouse=True)
def _clear_settings_cache(monkeypatch):
    """
    Keep VANITY_* variables from the shell out of tests and reset the cache.
    """
    for name in (
        "VANITY_BIND_LISTEN",
        "VANITY_JSON_PATH",
        "VANITY_STATIC_FILES",
        "VANITY_DNS_TIMEOUT",
        "VANITY_DNS_RETRY_ATTEMPTS",
        "VANITY_DOC_BASE_URL",
        "LOG_LEVEL",
        "LOG_JSON",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """
    Settings pointing at a temporary record file that does not exist yet.
    """
    return Settings(
        json_path=str(tmp_path / "import_db.json"),
        static_files="",
        log_level="DEBUG",
    )


@pytest.fixture
def restore_root_level():
    """Undo runtime log level changes made by a test."""
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)


@pytest.fixture
def fake_resolver() -> FakeResolver:
    return FakeResolver(TXT_RECORDS)


@pytest.fixture
def make_resolver():
    """Factory for fake resolvers over an arbitrary host -> TXT mapping."""
    return FakeResolver


@pytest.fixture
def make_opener():
    """Factory for openers that count opens and releases."""
    return Recorder


@pytest.fixture
def records_json() -> str:
    return RECORDS_JSON
