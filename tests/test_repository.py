import logging

import pytest

from kvstore_api.repository import SPACE, KVRepository
from kvstore_api.service import InternalError, KeyNotFoundError, KVService
from kvstore_api.storage import TarantoolError


class FakeTarantool:
    def __init__(self):
        self.rows = {}
        self.calls = []

    def select(self, space, key):
        self.calls.append(("select", space, list(key)))
        row = self.rows.get(key[0])
        return [row] if row is not None else []

    def upsert(self, space, tuple_, operations):
        self.calls.append(("upsert", space, list(tuple_), list(operations)))
        key = tuple_[0]
        if key in self.rows:
            row = list(self.rows[key])
            for op, field, value in operations:
                if op == "=":
                    row[field] = value
            self.rows[key] = row
        else:
            self.rows[key] = list(tuple_)
        return []

    def delete(self, space, key):
        self.calls.append(("delete", space, list(key)))
        row = self.rows.pop(key[0], None)
        return [row] if row is not None else []


class FailingTarantool:
    def select(self, space, key):
        raise TarantoolError("connection lost")

    def upsert(self, space, tuple_, operations):
        raise TarantoolError("connection lost")

    def delete(self, space, key):
        raise TarantoolError("connection lost")


@pytest.fixture
def fake():
    return FakeTarantool()


@pytest.fixture
def repo(fake):
    return KVRepository(fake, logging.getLogger("test"))


def test_get_reads_from_kvstore_space(repo, fake):
    fake.rows["alpha"] = ["alpha", "one"]
    assert repo.get("alpha") == "one"
    assert fake.calls == [("select", "kvstore", ["alpha"])]
    assert fake.calls[0][1] == SPACE


def test_set_then_get(repo):
    repo.set("alpha", "one")
    assert repo.get("alpha") == "one"


def test_set_sends_upsert_with_assign(repo, fake):
    repo.set("alpha", "one")
    assert fake.calls == [("upsert", "kvstore", ["alpha", "one"], [("=", 1, "one")])]
    assert repo.get("alpha") == "one"


def test_set_overwrites_value(repo):
    repo.set("alpha", "one")
    repo.set("alpha", "two")
    assert repo.get("alpha") == "two"


def test_get_missing_raises_not_found(repo):
    with pytest.raises(KeyNotFoundError, match="key not found"):
        repo.get("missing")


def test_get_non_string_value_is_not_found(repo, fake):
    fake.rows["alpha"] = ["alpha", b"bytes"]
    with pytest.raises(KeyNotFoundError):
        repo.get("alpha")


def test_get_short_tuple_is_not_found(repo, fake):
    fake.rows["alpha"] = ["alpha"]
    with pytest.raises(KeyNotFoundError):
        repo.get("alpha")


def test_get_storage_failure_is_internal():
    repo = KVRepository(FailingTarantool())
    with pytest.raises(InternalError, match="internal server error"):
        repo.get("alpha")


def test_set_storage_failure_propagates():
    repo = KVRepository(FailingTarantool())
    with pytest.raises(TarantoolError, match="connection lost"):
        repo.set("alpha", "one")


def test_delete_existing(repo, fake):
    repo.set("alpha", "one")
    repo.delete("alpha")
    assert "alpha" not in fake.rows
    with pytest.raises(KeyNotFoundError):
        repo.get("alpha")


def test_delete_missing_raises_not_found(repo):
    with pytest.raises(KeyNotFoundError):
        repo.delete("missing")


def test_delete_storage_failure_is_internal():
    repo = KVRepository(FailingTarantool())
    with pytest.raises(InternalError):
        repo.delete("alpha")


def test_service_over_repository(fake):
    service = KVService(KVRepository(fake))
    service.set("alpha", "one")
    assert service.get("alpha") == "one"
    service.delete("alpha")
    with pytest.raises(KeyNotFoundError):
        service.get("alpha")