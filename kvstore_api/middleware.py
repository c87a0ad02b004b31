"""WSGI middleware: composition and request logging."""

from __future__ import annotations

import logging
import time
from datetime import timedelta
from typing import Any, Callable, Iterable

WSGIApp = Callable[[dict, Callable[..., Any]], Iterable[bytes]]
Middleware = Callable[[WSGIApp], WSGIApp]


def chain(*middlewares: Middleware) -> Middleware:
    """Compose middlewares so the first one listed is the outermost."""

    def apply(app: WSGIApp) -> WSGIApp:
        for middleware in reversed(middlewares):
            app = middleware(app)
        return app

    return apply


def logging_middleware(logger: logging.Logger) -> Middleware:
    """Log status, method, URL and duration of every request once it completes."""

    def middleware(app: WSGIApp) -> WSGIApp:
        def wrapped(environ: dict, start_response: Callable[..., Any]) -> Iterable[bytes]:
            start = time.perf_counter()
            status = 200

            def recording_start_response(status_line, headers, exc_info=None):
                nonlocal status
                status = int(status_line.split(" ", 1)[0])
                return start_response(status_line, headers, exc_info)

            result = app(environ, recording_start_response)
            url = environ.get("PATH_INFO", "")
            if environ.get("QUERY_STRING"):
                url += "?" + environ["QUERY_STRING"]
            logger.info(
                "request completed",
                extra={
                    "status": status,
                    "method": environ.get("REQUEST_METHOD", ""),
                    "url": url,
                    "duration": timedelta(seconds=time.perf_counter() - start),
                },
            )
            return result

        return wrapped

    return middleware