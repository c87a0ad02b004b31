import pytest

from kvstore_api.service import (
    InternalError,
    KeyNotFoundError,
    KVService,
    KVStoreError,
)


class DictStore:
    def __init__(self):
        self.data = {}
        self.calls = []

    def get(self, key):
        self.calls.append(("get", key))
        try:
            return self.data[key]
        except KeyError:
            raise KeyNotFoundError() from None

    def set(self, key, value):
        self.calls.append(("set", key, value))
        self.data[key] = value

    def delete(self, key):
        self.calls.append(("delete", key))
        if key not in self.data:
            raise KeyNotFoundError()
        del self.data[key]


class BrokenStore:
    def __init__(self):
        self.calls = []

    def get(self, key):
        self.calls.append(("get", key))
        raise InternalError()

    def set(self, key, value):
        self.calls.append(("set", key, value))
        raise InternalError()

    def delete(self, key):
        self.calls.append(("delete", key))
        raise InternalError()


def test_error_messages_match_source():
    assert str(KeyNotFoundError()) == "key not found"
    assert str(InternalError()) == "internal server error"


def test_errors_share_base_class():
    service = KVService(DictStore())
    with pytest.raises(KVStoreError) as not_found:
        service.get("missing")
    assert isinstance(not_found.value, KeyNotFoundError)
    assert str(not_found.value) == "key not found"

    broken = KVService(BrokenStore())
    with pytest.raises(KVStoreError) as internal:
        broken.get("missing")
    assert isinstance(internal.value, InternalError)
    assert str(internal.value) == "internal server error"


def test_set_then_get_round_trip():
    store = DictStore()
    service = KVService(store)
    service.set("alpha", "one")
    assert service.get("alpha") == "one"
    assert store.calls == [("set", "alpha", "one"), ("get", "alpha")]


def test_set_overwrites():
    service = KVService(DictStore())
    service.set("alpha", "one")
    service.set("alpha", "two")
    assert service.get("alpha") == "two"


def test_get_missing_raises_not_found():
    service = KVService(DictStore())
    with pytest.raises(KeyNotFoundError):
        service.get("missing")


def test_delete_removes_key():
    store = DictStore()
    service = KVService(store)
    service.set("alpha", "one")
    service.delete("alpha")
    assert "alpha" not in store.data
    with pytest.raises(KeyNotFoundError):
        service.get("alpha")


def test_delete_missing_raises_not_found():
    service = KVService(DictStore())
    with pytest.raises(KeyNotFoundError):
        service.delete("missing")


@pytest.mark.parametrize(
    "method, args",
    [
        ("get", ("k",)),
        ("set", ("k", "v")),
        ("delete", ("k",)),
    ],
)
def test_internal_errors_propagate(method, args):
    store = BrokenStore()
    service = KVService(store)
    with pytest.raises(InternalError, match="internal server error"):
        getattr(service, method)(*args)
    assert store.calls == [(method, *args)]