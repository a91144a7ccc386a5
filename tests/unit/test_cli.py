from __future__ import annotations

from typing import Any, Dict

import pytest
from typer.testing import CliRunner

from vanity import main as cli

runner = CliRunner()


@pytest.fixture(autouse=True)
def _keep_logging_config(monkeypatch):
    # Handlers bound to the runner's temporary streams would outlive the test.
    monkeypatch.setattr(cli, "configure_logging", lambda **kwargs: None)


def test_info_prints_settings() -> None:
    result = runner.invoke(cli.app, ["info"])

    assert result.exit_code == 0
    assert "listen=127.0.0.1:39999" in result.output
    assert "json=import_db.json" in result.output


def test_lookup_prints_record_from_file(tmp_path, records_json) -> None:
    path = tmp_path / "import_db.json"
    path.write_text(records_json, encoding="utf-8")

    result = runner.invoke(
        cli.app,
        ["lookup", "https://example.org/tempusbreve/proxy?go-get=1", "--json-path", str(path), "--no-dns"],
    )

    assert result.exit_code == 0
    assert "https://proxy.golang.org/" in result.output
    assert "example.org/tempusbreve/proxy" in result.output


def test_lookup_accepts_bare_import_path(tmp_path, records_json) -> None:
    path = tmp_path / "import_db.json"
    path.write_text(records_json, encoding="utf-8")

    result = runner.invoke(
        cli.app, ["lookup", "example.org/tempusbreve/vanity", "-j", str(path), "--no-dns"]
    )

    assert result.exit_code == 0
    assert "https://github.com/tempusbreve/vanity" in result.output


def test_lookup_miss_exits_nonzero(tmp_path) -> None:
    result = runner.invoke(
        cli.app, ["lookup", "https://example.org/unknown", "-j", str(tmp_path / "none.json"), "--no-dns"]
    )

    assert result.exit_code == 1
    assert "No import record for example.org/unknown" in result.output


def test_serve_runs_uvicorn_with_overrides(monkeypatch, tmp_path) -> None:
    captured: Dict[str, Any] = {}

    def _fake_run(app, **kwargs):
        captured["app"] = app
        captured.update(kwargs)

    monkeypatch.setattr(cli.uvicorn, "run", _fake_run)

    result = runner.invoke(
        cli.app,
        ["serve", "-b", "0.0.0.0:8080", "-j", str(tmp_path / "db.json"), "--log-level", "WARNING"],
    )

    assert result.exit_code == 0, result.output
    assert captured["host"] == "0.0.0.0"
    assert captured["port"] == 8080
    assert captured["app"].state.import_handler.fallback is None


def test_serve_rejects_bad_bind(monkeypatch) -> None:
    monkeypatch.setattr(cli.uvicorn, "run", lambda app, **kwargs: None)

    result = runner.invoke(cli.app, ["serve", "-b", "nowhere"])

    assert result.exit_code != 0
