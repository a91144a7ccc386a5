from __future__ import annotations

import sys
from typing import Optional, Tuple
from urllib.parse import urlsplit

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from vanity.config import get_settings
from vanity.server import build_stores, create_app
from vanity.stores.composite import CompositeStore
from vanity.utils.logging import configure_logging, get_logger

app = typer.Typer(help="Vanity import server CLI.")
console = Console()
log = get_logger(__name__)


def parse_bind(value: str) -> Tuple[str, int]:
    """
    Split a HOST:PORT listen address; IPv6 hosts may be bracketed.
    """
    host, sep, port = value.rpartition(":")
    if not sep or not port.isdigit() or not 0 < int(port) < 65536:
        raise typer.BadParameter(f"expected HOST:PORT, got {value!r}")
    return host.strip("[]") or "0.0.0.0", int(port)


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"listen={settings.bind_listen} | json={settings.json_path} "
        f"static={settings.static_files or '-'} | dns_timeout={settings.dns_timeout}s "
        f"retries={settings.dns_retry_attempts} | docs={settings.doc_base_url}"
    )


@app.command()
def serve(
    bind_listen: Optional[str] = typer.Option(
        None,
        "--bind-listen",
        "-b",
        help="Interface and port to listen on (default from settings).",
    ),
    json_path: Optional[str] = typer.Option(
        None,
        "--json-path",
        "-j",
        help="Path to the JSON record file.",
    ),
    static_files: Optional[str] = typer.Option(
        None,
        "--static-files",
        "-s",
        help="Directory served for requests no store resolves.",
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Root log level."),
) -> None:
    """
    Run the import web server.
    """
    overrides = {
        key: value
        for key, value in {
            "bind_listen": bind_listen,
            "json_path": json_path,
            "static_files": static_files,
            "log_level": log_level,
        }.items()
        if value is not None
    }
    settings = get_settings().model_copy(update=overrides)
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    host, port = parse_bind(settings.bind_listen)

    log.info(f"starting server; listening on {host}:{port}")
    uvicorn.run(
        create_app(settings),
        host=host,
        port=port,
        log_config=None,
        timeout_graceful_shutdown=30,
    )
    log.info("server stopped")


@app.command()
def lookup(
    url: str = typer.Argument(..., help="Import URL, e.g. https://example.org/pkg?go-get=1"),
    json_path: Optional[str] = typer.Option(None, "--json-path", "-j", help="Path to the JSON record file."),
    dns: bool = typer.Option(True, "--dns/--no-dns", help="Include the DNS TXT store."),
) -> None:
    """
    Resolve a URL against the configured stores and print the record.
    """
    settings = get_settings()
    configure_logging(level="WARNING", json_logs=settings.log_json)
    if json_path is not None:
        settings = settings.model_copy(update={"json_path": json_path})

    target = urlsplit(url if "://" in url else f"https://{url}")
    record = CompositeStore(build_stores(settings, use_dns=dns)).lookup(target)
    if record is None:
        typer.echo(f"No import record for {target.netloc}{target.path}", err=True)
        raise typer.Exit(code=1)

    table = Table(title=f"{target.netloc}{target.path}")
    table.add_column("Field", style="bold")
    table.add_column("Value")
    for field in ("prefix", "vcs", "root", "proxy"):
        table.add_row(field, getattr(record, field) or "-")
    console.print(table)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
