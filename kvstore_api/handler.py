"""HTTP handlers for the key-value endpoints."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from werkzeug.wrappers import Request, Response

from kvstore_api.req import BadRequestError, get_query_param, handle_body
from kvstore_api.res import error_response, json_response
from kvstore_api.service import KeyNotFoundError, KVService

View = Callable[[Request], Response]


@dataclass
class SetRequest:
    """Body of a set request; both fields must be non-empty."""

    key: str = field(metadata={"json": "key", "validate": "required"})
    value: str = field(metadata={"json": "value", "validate": "required"})


@dataclass
class GetResponse:
    """Body returned for a successful get."""

    key: str
    value: str


class KVStoreHandler:
    """Translates HTTP requests into :class:`KVService` calls."""

    def __init__(self, kvservice: KVService, logger: logging.Logger | None = None) -> None:
        self.kvservice = kvservice
        self.log = logger or logging.getLogger(__name__)

    def routes(self) -> dict[str, View]:
        """Map each endpoint path to its view."""
        return {"/get": self.get, "/set": self.set, "/delete": self.delete}

    def get(self, request: Request) -> Response:
        """Return the value stored under the ``key`` query parameter."""
        try:
            key = get_query_param(request, "key")
        except BadRequestError as exc:
            self.log.warning("GET: missing or invalid query param", extra={"error": str(exc)})
            return error_response(str(exc), 400)

        try:
            value = self.kvservice.get(key)
        except KeyNotFoundError:
            self.log.info("GET: key not found", extra={"key": key})
            return error_response("key not found", 404)
        except Exception as exc:
            self.log.error("GET: internal error", extra={"key": key, "error": str(exc)})
            return error_response("internal server error", 500)

        return json_response(GetResponse(key, value), 200)

    def set(self, request: Request) -> Response:
        """Store the key and value given in the JSON body."""
        try:
            body = handle_body(request, SetRequest)
        except BadRequestError as exc:
            self.log.warning("SET: invalid body", extra={"error": str(exc)})
            return exc.response or json_response(str(exc), 400)

        try:
            self.kvservice.set(body.key, body.value)
        except Exception as exc:
            self.log.error("SET failed", extra={"key": body.key, "error": str(exc)})
            return error_response("failed to set", 500)

        return json_response(None, 201)

    def delete(self, request: Request) -> Response:
        """Remove the entry named by the ``key`` query parameter."""
        try:
            key = get_query_param(request, "key")
        except BadRequestError as exc:
            self.log.warning("DELETE: missing or invalid query param", extra={"error": str(exc)})
            return error_response(str(exc), 400)

        try:
            self.kvservice.delete(key)
        except KeyNotFoundError:
            self.log.info("DELETE: key not found", extra={"key": key})
            return error_response("key not found", 404)
        except Exception as exc:
            self.log.error("DELETE failed", extra={"key": key, "error": str(exc)})
            return error_response("internal server error", 500)

        return json_response(None, 204)