"""JSON response helpers."""

from __future__ import annotations

import dataclasses
import json
from typing import Any

from werkzeug.wrappers import Response


def json_response(data: Any, status_code: int) -> Response:
    """Return a JSON response; ``None`` gives an empty body."""
    response = Response(status=status_code, content_type="application/json")
    if data is not None:
        if dataclasses.is_dataclass(data) and not isinstance(data, type):
            data = dataclasses.asdict(data)
        response.set_data(json.dumps(data, separators=(",", ":")) + "\n")
    return response


def error_response(msg: str, status_code: int) -> Response:
    """Return a JSON body of the form ``{"error": msg}``."""
    return json_response({"error": msg}, status_code)