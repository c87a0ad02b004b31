"""Minimal Tarantool client speaking the binary IPROTO protocol."""

from __future__ import annotations

import itertools
import socket
import threading
from typing import Any, Iterable, Sequence

import msgpack

_SELECT, _DELETE, _UPSERT = 0x01, 0x05, 0x09
_CODE, _SYNC = 0x00, 0x01
_SPACE_ID, _INDEX_ID, _LIMIT, _OFFSET, _ITERATOR = 0x10, 0x11, 0x12, 0x13, 0x14
_KEY, _TUPLE, _OPS, _DATA, _ERROR = 0x20, 0x21, 0x28, 0x30, 0x31
_ERROR_FLAG = 0x8000
_VSPACE_ID, _VSPACE_NAME_INDEX = 281, 2


class TarantoolError(Exception):
    """A Tarantool request or connection failed."""


class TarantoolStorage:
    """A connection to a Tarantool instance."""

    def __init__(self, host: str, port: str | int, timeout: float = 1.0) -> None:
        self._lock = threading.Lock()
        self._sync = itertools.count(1)
        self._space_ids: dict[str, int] = {}
        try:
            self._sock = socket.create_connection((host, int(port)), timeout=timeout)
        except (OSError, ValueError) as exc:
            raise TarantoolError("failed to connect to tarantool") from exc
        try:
            greeting = self._recv_exact(128)
        except (OSError, TarantoolError) as exc:
            self._sock.close()
            raise TarantoolError("failed to connect to tarantool") from exc
        if not greeting.startswith(b"Tarantool"):
            self._sock.close()
            raise TarantoolError("failed to connect to tarantool")

    def close(self) -> None:
        """Close the connection."""
        self._sock.close()

    def select(self, space: str | int, key: Sequence[Any]) -> list[Any]:
        """Return the tuples of ``space`` whose primary key equals ``key``."""
        return self._select(self._resolve_space(space), 0, key)

    def upsert(
        self, space: str | int, tuple_: Sequence[Any], operations: Iterable[Sequence[Any]]
    ) -> list[Any]:
        """Insert ``tuple_`` or, if its key exists, apply ``operations`` to it."""
        body = {
            _SPACE_ID: self._resolve_space(space),
            _TUPLE: list(tuple_),
            _OPS: [list(op) for op in operations],
        }
        return self._request(_UPSERT, body)

    def delete(self, space: str | int, key: Sequence[Any]) -> list[Any]:
        """Delete by primary key; return the deleted tuples (empty if none)."""
        body = {_SPACE_ID: self._resolve_space(space), _INDEX_ID: 0, _KEY: list(key)}
        return self._request(_DELETE, body)

    def _select(self, space_id: int, index_id: int, key: Sequence[Any]) -> list[Any]:
        body = {
            _SPACE_ID: space_id,
            _INDEX_ID: index_id,
            _LIMIT: 0xFFFFFFFF,
            _OFFSET: 0,
            _ITERATOR: 0,
            _KEY: list(key),
        }
        return self._request(_SELECT, body)

    def _resolve_space(self, space: str | int) -> int:
        if isinstance(space, int):
            return space
        if space not in self._space_ids:
            rows = self._select(_VSPACE_ID, _VSPACE_NAME_INDEX, [space])
            if not rows:
                raise TarantoolError(f"unknown space {space!r}")
            self._space_ids[space] = rows[0][0]
        return self._space_ids[space]

    def _recv_exact(self, size: int) -> bytes:
        buf = bytearray()
        while len(buf) < size:
            chunk = self._sock.recv(size - len(buf))
            if not chunk:
                raise TarantoolError("connection closed by server")
            buf += chunk
        return bytes(buf)

    def _request(self, code: int, body: dict[int, Any]) -> list[Any]:
        with self._lock:
            sync = next(self._sync)
            payload = msgpack.packb({_CODE: code, _SYNC: sync}) + msgpack.packb(body)
            try:
                self._sock.sendall(b"\xce" + len(payload).to_bytes(4, "big") + payload)
                raw = self._recv_exact(msgpack.unpackb(self._recv_exact(5)))
            except OSError as exc:
                raise TarantoolError(f"request failed: {exc}") from exc

        unpacker = msgpack.Unpacker(raw=False, strict_map_key=False)
        unpacker.feed(raw)
        header = next(unpacker, None)
        if not header or header.get(_SYNC) != sync:
            raise TarantoolError("invalid response")
        reply = next(unpacker, None) or {}
        if header.get(_CODE, 0) & _ERROR_FLAG:
            raise TarantoolError(reply.get(_ERROR) or "tarantool error")
        return list(reply.get(_DATA, []))


def new_tarantool_storage(host: str, port: str | int) -> TarantoolStorage:
    """Connect to Tarantool at ``host:port`` with a one-second timeout."""
    return TarantoolStorage(host, port)