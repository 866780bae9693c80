"""WSGI middleware chaining and request logging.

A middleware is any callable taking a WSGI application and returning
another one.  :class:`Middlewares` keeps them in the order they were
added; the first one added ends up outermost.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable, Iterator
from datetime import datetime, timezone
from typing import Any

from structlog.typing import FilteringBoundLogger

StartResponse = Callable[..., Any]
WSGIApp = Callable[[dict[str, Any], StartResponse], Iterable[bytes]]
Middleware = Callable[[WSGIApp], WSGIApp]


class Middlewares(list[Middleware]):
    """Ordered chain of WSGI middlewares."""

    def add(self, middleware: Middleware) -> None:
        self.append(middleware)

    def wrap(self, app: WSGIApp) -> WSGIApp:
        """Wrap *app* so the first added middleware handles requests first."""
        wrapped = app
        for middleware in reversed(self):
            wrapped = middleware(wrapped)
        return wrapped


def _request_uri(environ: dict[str, Any]) -> str:
    uri = environ.get("RAW_URI") or environ.get("REQUEST_URI")
    if uri:
        return str(uri)
    uri = environ.get("SCRIPT_NAME", "") + environ.get("PATH_INFO", "")
    query = environ.get("QUERY_STRING")
    return f"{uri}?{query}" if query else uri


def request_logger(log: FilteringBoundLogger) -> Middleware:
    """Middleware logging ``request completed`` once a response is sent."""

    def middleware(app: WSGIApp) -> WSGIApp:
        def logged(environ: dict[str, Any], start_response: StartResponse) -> Iterator[bytes]:
            started_at = datetime.now(timezone.utc)
            start = time.monotonic()
            status = 0
            written = 0

            def capture(status_line: str, headers: list[tuple[str, str]], *exc_info: Any) -> Any:
                nonlocal status
                status = int(status_line.split(" ", 1)[0])
                return start_response(status_line, headers, *exc_info)

            body = app(environ, capture)
            try:
                for chunk in body:
                    written += len(chunk)
                    yield chunk
            finally:
                close = getattr(body, "close", None)
                if close is not None:
                    close()
                log.info(
                    "request completed",
                    time=started_at.isoformat(),
                    method=environ.get("REQUEST_METHOD", ""),
                    uri=_request_uri(environ),
                    status=status,
                    bytes=written,
                    duration=time.monotonic() - start,
                )

        return logged

    return middleware
