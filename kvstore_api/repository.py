"""Key-value repository backed by the Tarantool ``kvstore`` space."""

from __future__ import annotations

import logging

from kvstore_api.service import InternalError, KeyNotFoundError
from kvstore_api.storage import TarantoolError, TarantoolStorage

SPACE = "kvstore"


class KVRepository:
    """Stores string values under string keys in a Tarantool space."""

    def __init__(self, storage: TarantoolStorage, logger: logging.Logger | None = None) -> None:
        self.storage = storage
        self.log = logger or logging.getLogger(__name__)

    def get(self, key: str) -> str:
        """Return the value for ``key``."""
        self.log.info("GET request", extra={"key": key})
        try:
            data = self.storage.select(SPACE, [key])
        except TarantoolError as exc:
            self.log.error("GET failed", extra={"key": key, "error": str(exc)})
            raise InternalError() from exc

        if not data:
            self.log.warning("GET key not found", extra={"key": key})
            raise KeyNotFoundError()

        row = data[0]
        value = row[1] if isinstance(row, (list, tuple)) and len(row) > 1 else None
        if not isinstance(value, str):
            self.log.error("GET value type mismatch", extra={"key": key})
            raise KeyNotFoundError()

        self.log.info("GET success", extra={"key": key, "value": value})
        return value

    def set(self, key: str, value: str) -> None:
        """Insert or overwrite the value for ``key``."""
        self.log.info("SET request", extra={"key": key, "value": value})
        try:
            self.storage.upsert(SPACE, [key, value], [("=", 1, value)])
        except TarantoolError as exc:
            self.log.error("SET failed", extra={"key": key, "error": str(exc)})
            raise
        self.log.info("SET success", extra={"key": key})

    def delete(self, key: str) -> None:
        """Remove ``key``."""
        self.log.info("DELETE request", extra={"key": key})
        try:
            data = self.storage.delete(SPACE, [key])
        except TarantoolError as exc:
            self.log.error("DELETE failed", extra={"key": key, "error": str(exc)})
            raise InternalError() from exc

        if not data:
            self.log.warning("DELETE key not found", extra={"key": key})
            raise KeyNotFoundError()

        self.log.info("DELETE success", extra={"key": key})