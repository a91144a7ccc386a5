"""
ASGI handler answering `go get` discovery requests.

Usage:
    from vanity.handler import ImportHandler
    from vanity.stores import DNSStore

    app = ImportHandler(None, DNSStore())

A request is resolved against the stores in order. The first match is
rendered as the import document; a miss is handed to the fallback app, or
answered with a plain 404 when there is none.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Optional
from urllib.parse import SplitResult

from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import HTMLResponse, PlainTextResponse, Response
from starlette.types import ASGIApp, Receive, Scope, Send

from vanity.domain.models import ImportRecord
from vanity.exceptions import RenderError
from vanity.renderer import ImportRenderer
from vanity.stores.abstract import ImportStore
from vanity.stores.composite import CompositeStore
from vanity.utils.logging import get_logger

log = get_logger(__name__)

GO_GET_PARAM = "go-get"


def request_url(request: Request) -> SplitResult:
    """
    The URL handed to the stores: request scheme, Host header, path and query.

    Built from the ASGI scope directly; the path is already decoded, so a
    `%3F` or `%23` in it must stay part of the path.
    """
    scope = request.scope
    return SplitResult(
        scheme=scope.get("scheme", "http"),
        netloc=request.headers.get("host") or request.url.netloc,
        path=scope["path"],
        query=scope.get("query_string", b"").decode("latin-1"),
        fragment="",
    )


def status_response(status: HTTPStatus) -> PlainTextResponse:
    return PlainTextResponse(status.phrase, status_code=status.value)


class ImportHandler:
    """
    Resolve import paths through a chain of stores and render the winner.

    Parameters
    ----------
    fallback : ASGIApp | None
        App that owns the response when no store matches.
    *stores : ImportStore
        Stores consulted in the given order.
    renderer : ImportRenderer | None
        Document renderer; defaults to one linking to pkg.go.dev.
    """

    def __init__(
        self,
        fallback: Optional[ASGIApp] = None,
        *stores: ImportStore,
        renderer: Optional[ImportRenderer] = None,
    ) -> None:
        self.fallback = fallback
        self.store = CompositeStore(stores)
        self.renderer = renderer or ImportRenderer()

    def _render(self, record: ImportRecord, from_go: bool) -> Response:
        # Rendered in full before any status is committed.
        try:
            body = self.renderer.render(record, from_go)
        except RenderError:
            log.exception("Import page render failed", extra={"prefix": record.prefix})
            return status_response(HTTPStatus.INTERNAL_SERVER_ERROR)
        return HTMLResponse(body, status_code=HTTPStatus.OK)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            return

        request = Request(scope, receive)
        record = await run_in_threadpool(self.store.lookup, request_url(request))

        if record is not None:
            # First value wins when the parameter repeats.
            from_go = request.query_params.getlist(GO_GET_PARAM)[:1] == ["1"]
            response = self._render(record, from_go)
        elif self.fallback is not None:
            await self.fallback(scope, receive, send)
            return
        else:
            response = status_response(HTTPStatus.NOT_FOUND)

        await response(scope, receive, send)


__all__ = ["ImportHandler", "request_url", "GO_GET_PARAM"]
