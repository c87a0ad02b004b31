"""Key-value service and the errors its storage layer raises."""

from __future__ import annotations

from typing import Protocol


class KVStoreError(Exception):
    """Base class for key-value store failures."""


class KeyNotFoundError(KVStoreError):
    """The requested key does not exist."""

    def __init__(self, message: str = "key not found") -> None:
        super().__init__(message)


class InternalError(KVStoreError):
    """The backing store failed."""

    def __init__(self, message: str = "internal server error") -> None:
        super().__init__(message)


class Storage(Protocol):
    """What the service needs from a backing store."""

    def get(self, key: str) -> str: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class KVService:
    """Business layer over a :class:`Storage`."""

    def __init__(self, store: Storage) -> None:
        self.store = store

    def get(self, key: str) -> str:
        """Return the value stored under ``key``."""
        return self.store.get(key)

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        self.store.set(key, value)

    def delete(self, key: str) -> None:
        """Remove ``key`` from the store."""
        self.store.delete(key)