"""OpenAPI (Swagger 2.0) description of the key-value API."""

from __future__ import annotations

import copy
from typing import Any


def _string_response(description: str) -> dict[str, Any]:
    return {"description": description, "schema": {"type": "string"}}


def _key_query_param() -> dict[str, Any]:
    return {
        "type": "string",
        "description": "Key",
        "name": "key",
        "in": "query",
        "required": True,
    }


def _operation(description: str, summary: str, parameters, responses) -> dict[str, Any]:
    return {
        "description": description,
        "consumes": ["application/json"],
        "produces": ["application/json"],
        "tags": ["kvstore"],
        "summary": summary,
        "parameters": parameters,
        "responses": responses,
    }


_KV_PROPERTIES = {"key": {"type": "string"}, "value": {"type": "string"}}

_SPEC: dict[str, Any] = {
    "schemes": [],
    "swagger": "2.0",
    "info": {"description": "", "title": "", "contact": {}, "version": ""},
    "host": "",
    "basePath": "",
    "paths": {
        "/api/v1/delete": {
            "delete": _operation(
                "Delete a key-value entry by key",
                "Delete key",
                [_key_query_param()],
                {
                    "204": _string_response("No Content"),
                    "400": _string_response("Bad Request"),
                    "404": _string_response("Key not found"),
                    "500": _string_response("Internal error"),
                },
            )
        },
        "/api/v1/get": {
            "get": _operation(
                "Retrieve the value for a given key",
                "Get value by key",
                [_key_query_param()],
                {
                    "200": {
                        "description": "OK",
                        "schema": {"$ref": "#/definitions/kvstore.GetResponse"},
                    },
                    "400": _string_response("Bad Request"),
                    "404": _string_response("Key not found"),
                    "500": _string_response("Internal error"),
                },
            )
        },
        "/api/v1/set": {
            "post": _operation(
                "Store a key-value entry in the store",
                "Set a key-value pair",
                [
                    {
                        "description": "Key-Value Pair",
                        "name": "data",
                        "in": "body",
                        "required": True,
                        "schema": {"$ref": "#/definitions/kvstore.SetRequest"},
                    }
                ],
                {
                    "201": _string_response("Created"),
                    "400": _string_response("Bad Request"),
                    "500": _string_response("Internal error"),
                },
            )
        },
    },
    "definitions": {
        "kvstore.GetResponse": {"type": "object", "properties": dict(_KV_PROPERTIES)},
        "kvstore.SetRequest": {
            "type": "object",
            "required": ["key", "value"],
            "properties": dict(_KV_PROPERTIES),
        },
    },
}


def swagger_spec() -> dict[str, Any]:
    """Return a fresh copy of the API description."""
    return copy.deepcopy(_SPEC)