"""WSGI application wiring and the server entry point."""

from __future__ import annotations

import argparse
import logging
import signal
import threading
from typing import Any, Callable, Iterable

from werkzeug.serving import make_server
from werkzeug.wrappers import Request, Response

from kvstore_api.config import Config, load
from kvstore_api.docs import swagger_spec
from kvstore_api.handler import KVStoreHandler, View
from kvstore_api.middleware import WSGIApp, chain, logging_middleware
from kvstore_api.repository import KVRepository
from kvstore_api.res import json_response
from kvstore_api.service import KVService, Storage
from kvstore_api.storage import TarantoolError, new_tarantool_storage

log = logging.getLogger(__name__)

API_PREFIX = "/api/v1"
SHUTDOWN_TIMEOUT = 10.0


def health_handler(request: Request) -> Response:
    """Report that the server is alive."""
    return Response(b"ok", status=200, content_type="text/plain; charset=utf-8")


def _swagger_doc(request: Request) -> Response:
    return json_response(swagger_spec(), 200)


def _not_found() -> Response:
    return Response(
        "404 page not found\n", status=404, content_type="text/plain; charset=utf-8"
    )


def _router(routes: dict[str, View]) -> WSGIApp:
    def app(environ: dict, start_response: Callable[..., Any]) -> Iterable[bytes]:
        request = Request(environ)
        view = routes.get(request.path)
        response = view(request) if view is not None else _not_found()
        return response(environ, start_response)

    return app


def create_app(config: Config, store: Storage | None = None) -> WSGIApp:
    """Build the WSGI application.

    ``store`` is the key-value storage the service uses; when omitted, a
    Tarantool-backed repository is connected using ``config``.
    """
    if store is None:
        connection = new_tarantool_storage(config.tt.host, config.tt.port)
        store = KVRepository(connection, log)

    handler = KVStoreHandler(KVService(store), log)
    api = chain(logging_middleware(log))(_router(handler.routes()))
    root = _router({"/health": health_handler, "/swagger/doc.json": _swagger_doc})

    def app(environ: dict, start_response: Callable[..., Any]) -> Iterable[bytes]:
        path = environ.get("PATH_INFO", "") or "/"
        if path.startswith(API_PREFIX + "/"):
            inner = dict(environ)
            inner["PATH_INFO"] = path[len(API_PREFIX):]
            inner["SCRIPT_NAME"] = environ.get("SCRIPT_NAME", "") + API_PREFIX
            return api(inner, start_response)
        return root(environ, start_response)

    return app


def main(argv: list[str] | None = None) -> int:
    """Run the HTTP server until SIGINT or SIGTERM."""
    parser = argparse.ArgumentParser(
        prog="kvstore-api", description="Key-value HTTP API backed by Tarantool."
    )
    parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    config = load()
    try:
        app = create_app(config)
    except TarantoolError as exc:
        log.error("%s", exc)
        return 1

    try:
        server = make_server("", int(config.server.port), app, threaded=True)
    except (OSError, ValueError) as exc:
        log.error("Server failed with: %s", exc)
        return 1

    stop = threading.Event()

    def on_signal(signum: int, frame: Any) -> None:
        stop.set()

    previous = {sig: signal.signal(sig, on_signal) for sig in (signal.SIGINT, signal.SIGTERM)}
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    log.info("Server running at :%s", config.server.port)
    thread.start()
    try:
        while not stop.wait(0.5):
            if not thread.is_alive():
                break
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)

    log.info("Server shutdown")
    server.shutdown()
    server.server_close()
    thread.join(SHUTDOWN_TIMEOUT)
    if thread.is_alive():
        log.error("Server forced to shutdown")
        return 1
    log.info("Server stopped gracefully")
    return 0