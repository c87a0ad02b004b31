"""Request helpers: body decoding, validation and query parameters."""

from __future__ import annotations

import dataclasses
import json
from typing import Any, TypeVar

from werkzeug.wrappers import Request, Response

from kvstore_api.res import json_response

T = TypeVar("T")


class BadRequestError(ValueError):
    """The request could not be accepted; ``response`` is set when one is ready to send."""

    def __init__(self, message: str, response: Response | None = None) -> None:
        super().__init__(message)
        self.response = response


def decode(body: Any, cls: type[T]) -> T:
    """Decode the first JSON object in ``body`` into the dataclass ``cls``."""
    if hasattr(body, "read"):
        body = body.read()
    if isinstance(body, (bytes, bytearray)):
        body = bytes(body).decode("utf-8", "replace")
    text = body.lstrip()
    if not text:
        raise BadRequestError("EOF")
    try:
        data, _ = json.JSONDecoder().raw_decode(text)
    except json.JSONDecodeError as exc:
        raise BadRequestError(f"invalid JSON: {exc.msg}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise BadRequestError(f"cannot decode JSON {type(data).__name__} into {cls.__name__}")

    folded = {k.lower(): v for k, v in data.items()}
    kwargs = {}
    for f in dataclasses.fields(cls):
        value = folded.get(f.name.lower())
        if value is None:
            value = ""
        elif not isinstance(value, str):
            raise BadRequestError(f"cannot decode {type(value).__name__} into field {f.name}")
        kwargs[f.name] = value
    return cls(**kwargs)


def is_valid(payload: Any) -> None:
    """Raise ``BadRequestError`` if a field marked ``validate="required"`` is empty."""
    name = type(payload).__name__
    failures = [
        f"Key: '{name}.{f.name}' Error:Field validation for '{f.name}' failed on the 'required' tag"
        for f in dataclasses.fields(payload)
        if f.metadata.get("validate") == "required" and not getattr(payload, f.name)
    ]
    if failures:
        raise BadRequestError("\n".join(failures))


def handle_body(request: Request, cls: type[T]) -> T:
    """Decode and validate the request body; failures carry a 400 response."""
    try:
        payload = decode(request.get_data(), cls)
        is_valid(payload)
    except BadRequestError as exc:
        raise BadRequestError(str(exc), json_response(str(exc), 400)) from exc
    return payload


def get_query_param(request: Request, name: str) -> str:
    """Return a non-empty query parameter or raise ``BadRequestError``."""
    value = request.args.get(name, "")
    if not value:
        raise BadRequestError(f"missing {name} parameter")
    return value