"""
Tests for application assembly: store wiring, fallback, and operational routes.
"""

from __future__ import annotations

import logging

import pytest
from fastapi.testclient import TestClient

from vanity.config import Settings
from vanity.handler import ImportHandler
from vanity.infrastructure.sources import bytes_opener
from vanity.server import build_fallback, build_stores, create_app
from vanity.stores.dns_store import DNSStore
from vanity.stores.json_store import JSONStore


@pytest.fixture
def client(make_resolver, records_json) -> TestClient:
    handler = ImportHandler(
        None,
        JSONStore(bytes_opener(records_json)),
        DNSStore(make_resolver({"example.org": ["go-import=example.org/dns git https://example.com/dns"]})),
    )
    return TestClient(create_app(Settings(), handler=handler))


class TestBuildStores:
    def test_missing_record_file_leaves_only_dns(self, test_settings: Settings):
        stores = build_stores(test_settings)

        assert [store.name for store in stores] == ["dns"]

    def test_empty_record_file_is_skipped(self, test_settings: Settings, tmp_path):
        (tmp_path / "import_db.json").write_text("", encoding="utf-8")

        assert [store.name for store in build_stores(test_settings)] == ["dns"]

    def test_directory_is_skipped(self, tmp_path):
        settings = Settings(json_path=str(tmp_path))

        assert [store.name for store in build_stores(settings)] == ["dns"]

    def test_record_file_comes_before_dns(self, test_settings: Settings, tmp_path, records_json):
        (tmp_path / "import_db.json").write_text(records_json, encoding="utf-8")

        stores = build_stores(test_settings)

        assert [store.name for store in stores] == ["json", "dns"]
        assert stores[1].timeout == test_settings.dns_timeout

    def test_dns_can_be_left_out(self, test_settings: Settings):
        assert build_stores(test_settings, use_dns=False) == []


class TestFallback:
    def test_no_static_dir_means_no_fallback(self, test_settings: Settings):
        assert build_fallback(test_settings) is None

    def test_static_files_serve_unmatched_requests(self, tmp_path, records_json):
        static = tmp_path / "static"
        static.mkdir()
        (static / "index.html").write_text("<p>home</p>", encoding="utf-8")
        settings = Settings(json_path=str(tmp_path / "none.json"), static_files=str(static))

        handler = ImportHandler(build_fallback(settings), JSONStore(bytes_opener(records_json)))
        client = TestClient(create_app(settings, handler=handler))

        home = client.get("http://example.org/")
        assert home.status_code == 200
        assert "<p>home</p>" in home.text

        assert client.get("http://example.org/nothing/here").status_code == 404

        matched = client.get("https://example.org/tempusbreve/vanity?go-get=1")
        assert matched.status_code == 200
        assert 'name="go-import"' in matched.text


class TestRoutes:
    def test_healthz(self, client: TestClient):
        response = client.get("/healthz")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_logger_reports_and_sets_level(self, client: TestClient, restore_root_level):
        response = client.put("/logger", json={"level": "debug"})
        assert response.status_code == 200
        assert response.json() == {"level": "DEBUG"}

        assert client.get("/logger").json() == {"level": "DEBUG"}

    def test_logger_rejects_unknown_level(self, client: TestClient, restore_root_level):
        response = client.put("/logger", json={"level": "chatty"})

        assert response.status_code == 400

    def test_import_requests_reach_handler(self, client: TestClient):
        from_file = client.get("https://example.org/tempusbreve/vanity?go-get=1")
        from_dns = client.get("https://example.org/dns?go-get=1")

        assert from_file.status_code == 200
        assert from_dns.status_code == 200
        assert "example.org/dns git https://example.com/dns" in from_dns.text

    def test_unmatched_request_is_404(self, client: TestClient):
        response = client.get("https://example.org/unknown")

        assert response.status_code == 404
        assert response.text == "Not Found"

    def test_requests_are_logged(self, client: TestClient, caplog):
        with caplog.at_level(logging.INFO, logger="vanity.access"):
            client.get("https://example.org/tempusbreve/vanity?go-get=1")
            client.get("/healthz")

        messages = [r.getMessage() for r in caplog.records if r.name == "vanity.access"]
        assert messages == ["GET example.org/tempusbreve/vanity 200"]
