"""
HTML rendering of import records.

The `go` tool only reads the `go-import` meta tag; browsers additionally get
a short page that redirects to the package documentation after 10 seconds.
Every record field is HTML-escaped since records come from files and DNS.
"""

from __future__ import annotations

from jinja2 import Environment, TemplateError

from vanity.domain.models import ImportRecord
from vanity.exceptions import RenderError

DEFAULT_DOC_BASE_URL = "https://pkg.go.dev/"
REFRESH_SECONDS = 10

IMPORT_TEMPLATE = """<!DOCTYPE html>
<html>
  <head>
  {%- if record.proxy %}
    <meta name="go-import" content="{{ record.prefix }} mod {{ record.proxy }}">
  {%- else %}
    <meta name="go-import" content="{{ record.prefix }} {{ record.vcs }} {{ record.root }}">
  {%- endif %}
  {%- if not from_go %}
    <meta http-equiv="Content-Type" content="text/html; charset=utf-8" />
    <meta http-equiv="refresh" content="{{ refresh_seconds }}; url={{ doc_base_url }}{{ record.prefix }}" />
  {%- endif %}
  </head>
  <body>
  {%- if not from_go %}
    <div>
      <h1>{{ record.prefix }} Found</h1>
      <p>Documentation at <a href="{{ doc_base_url }}{{ record.prefix }}">{{ doc_host }}{{ record.prefix }}</a></p>
      <p>Redirecting . . .</p>
    </div>
  {%- endif %}
  </body>
</html>
"""


class ImportRenderer:
    """
    Render the import document for a record.

    Parameters
    ----------
    doc_base_url : str
        Documentation viewer the browser page links and redirects to; the
        record prefix is appended to it.
    """

    def __init__(self, doc_base_url: str = DEFAULT_DOC_BASE_URL) -> None:
        if not doc_base_url.endswith("/"):
            doc_base_url += "/"
        self.doc_base_url = doc_base_url
        self._env = Environment(autoescape=True)
        self._template = self._env.from_string(IMPORT_TEMPLATE)

    @property
    def doc_host(self) -> str:
        return self.doc_base_url.split("://", 1)[-1]

    def render(self, record: ImportRecord, from_go: bool) -> str:
        """
        Render `record`; `from_go` drops the human-readable redirect content.
        """
        try:
            return self._template.render(
                record=record,
                from_go=from_go,
                doc_base_url=self.doc_base_url,
                doc_host=self.doc_host,
                refresh_seconds=REFRESH_SECONDS,
            )
        except TemplateError as exc:
            raise RenderError(f"cannot render import page for {record.prefix!r}: {exc}") from exc


__all__ = ["ImportRenderer", "IMPORT_TEMPLATE", "DEFAULT_DOC_BASE_URL", "REFRESH_SECONDS"]
