"""
Application assembly for the vanity import server.

Builds the store chain and the fallback from settings and mounts the import
handler behind a small FastAPI app that also serves the operational routes:

- GET /healthz        liveness probe
- GET /logger         current root log level
- PUT /logger         change the root log level, body {"level": "DEBUG"}

Every other request reaches the import handler.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from starlette.staticfiles import StaticFiles
from starlette.types import ASGIApp

from vanity.config import Settings, get_settings
from vanity.handler import ImportHandler
from vanity.infrastructure.resolver import DNSPythonResolver
from vanity.infrastructure.sources import file_opener
from vanity.renderer import ImportRenderer
from vanity.stores.abstract import ImportStore
from vanity.stores.dns_store import DNSStore
from vanity.stores.json_store import JSONStore
from vanity.utils.logging import current_level, get_logger, set_level
from vanity.utils.middleware import RequestLoggingMiddleware

log = get_logger(__name__)


class LogLevel(BaseModel):
    level: str


def _usable_record_file(path: str) -> bool:
    if not path:
        return False
    file_path = Path(path)
    return file_path.is_file() and file_path.stat().st_size > 0


def build_stores(settings: Settings, use_dns: bool = True) -> List[ImportStore]:
    """
    JSON file store first (when the file exists and is non-empty), then DNS.
    """
    stores: List[ImportStore] = []

    if _usable_record_file(settings.json_path):
        stores.append(JSONStore(file_opener(settings.json_path)))
        log.info(f"Serving records from: {settings.json_path!r}")
    else:
        log.info(f"No record file at {settings.json_path!r}; JSON store disabled")

    if use_dns:
        resolver = DNSPythonResolver(retry_attempts=settings.dns_retry_attempts)
        stores.append(DNSStore(resolver, timeout=settings.dns_timeout))

    return stores


def build_fallback(settings: Settings) -> Optional[ASGIApp]:
    """Static file server for unmatched requests, when configured."""
    if not settings.static_files:
        return None
    log.info(f"fallback serving from: {settings.static_files!r}")
    return StaticFiles(directory=settings.static_files, html=True)


def build_handler(settings: Settings, use_dns: bool = True) -> ImportHandler:
    return ImportHandler(
        build_fallback(settings),
        *build_stores(settings, use_dns=use_dns),
        renderer=ImportRenderer(settings.doc_base_url),
    )


def create_app(
    settings: Optional[Settings] = None,
    handler: Optional[ImportHandler] = None,
) -> FastAPI:
    """
    Build the ASGI app; `handler` overrides the one derived from settings.
    """
    settings = settings or get_settings()
    import_handler = handler or build_handler(settings)

    app = FastAPI(title="Vanity Import Server", docs_url=None, redoc_url=None, openapi_url=None)
    app.add_middleware(RequestLoggingMiddleware)

    @app.get("/healthz")
    def healthz() -> dict:
        return {"status": "ok"}

    @app.get("/logger")
    def get_log_level() -> LogLevel:
        return LogLevel(level=current_level())

    @app.put("/logger")
    def put_log_level(body: LogLevel) -> LogLevel:
        try:
            level = set_level(body.level)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        log.info(f"Log level set to {level}")
        return LogLevel(level=level)

    app.mount("/", import_handler)
    app.state.import_handler = import_handler
    return app


__all__ = ["build_stores", "build_fallback", "build_handler", "create_app"]
