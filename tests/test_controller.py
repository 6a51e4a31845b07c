import logging
import pytest
from fdb_core.controller import AuthorizedWriteController
from fdb_core.crypto import generate_identity
from fdb_core.errors import MessageBindingError, OwnershipError, StoreUninitializedError
from fdb_core.storage import InMemoryStorage


class SpyStorage(InMemoryStorage):
    def __init__(self):
        super().__init__()
        self.writes = 0

    def insert_or_update(self, key, cid, owner_public_key):
        self.writes += 1
        return super().insert_or_update(key, cid, owner_public_key)


def test_authorized_write_creates_then_updates(store, owner):
    pub, sign = owner
    ctl = AuthorizedWriteController(store)

    msg, sig = sign("topic1", "Qm111")
    first = ctl.write("topic1", "Qm111", pub, sig, msg)
    msg, sig = sign("topic1", "Qm222")
    second = ctl.write("topic1", "Qm222", pub, sig, msg)

    assert first.id == second.id
    assert store.fetch_latest_by_key_and_owner("topic1", pub).cid == "Qm222"
    assert len(store.fetch_by_key("topic1")) == 1


def test_bad_signature_never_touches_storage(owner, caplog):
    pub, sign = owner
    storage = SpyStorage()
    storage.initialize()
    ctl = AuthorizedWriteController(storage)

    msg, _ = sign("topic1", "Qm111")
    _, other_sig = sign("topic1", "Qm999")
    with caplog.at_level(logging.WARNING):
        with pytest.raises(OwnershipError, match="not the owner"):
            ctl.write("topic1", "Qm111", pub, other_sig, msg)

    assert storage.writes == 0
    assert storage.count() == 0
    assert "rejected write" in caplog.text


def test_foreign_key_rejected(owner):
    _, sign = owner
    _, intruder = generate_identity()
    storage = SpyStorage()
    storage.initialize()

    msg, sig = sign("topic1", "Qm111")
    with pytest.raises(OwnershipError):
        AuthorizedWriteController(storage).write("topic1", "Qm111", intruder, sig, msg)
    assert storage.writes == 0


def test_replayed_signature_for_other_write_rejected(owner):
    pub, sign = owner
    storage = SpyStorage()
    storage.initialize()
    ctl = AuthorizedWriteController(storage)

    msg, sig = sign("topic1", "Qm111")
    ctl.write("topic1", "Qm111", pub, sig, msg)

    with pytest.raises(MessageBindingError):
        ctl.write("topic1", "QmEVIL", pub, sig, msg)
    with pytest.raises(MessageBindingError):
        ctl.write("topic2", "Qm111", pub, sig, msg)

    assert storage.writes == 1
    assert storage.fetch_latest_by_key_and_owner("topic1", pub).cid == "Qm111"


def test_verifier_only_called_with_bound_message():
    calls = []

    def verifier(pk, sig, msg):
        calls.append((pk, sig, msg))
        return False

    storage = SpyStorage()
    storage.initialize()
    ctl = AuthorizedWriteController(storage, verifier=verifier)

    with pytest.raises(MessageBindingError):
        ctl.write("k", "c", "P", "sig", "unrelated")
    assert calls == []

    with pytest.raises(OwnershipError):
        ctl.write("k", "c", "P", "sig", '{"cid":"c","key":"k"}')
    assert calls == [("P", "sig", b'{"cid":"c","key":"k"}')]
    assert storage.writes == 0


def test_storage_error_propagates(owner):
    pub, sign = owner
    ctl = AuthorizedWriteController(InMemoryStorage())
    msg, sig = sign("k", "c")
    with pytest.raises(StoreUninitializedError):
        ctl.write("k", "c", pub, sig, msg)


def test_unencodable_text_is_a_binding_error(owner):
    pub, sign = owner
    storage = SpyStorage()
    storage.initialize()
    ctl = AuthorizedWriteController(storage)

    msg, sig = sign("topic1", "Qm111")
    with pytest.raises(MessageBindingError):
        ctl.write("\ud800", "Qm111", pub, sig, msg)
    with pytest.raises(MessageBindingError):
        ctl.write("topic1", "Qm111", pub, sig, "\ud800")
    with pytest.raises(OwnershipError):
        ctl.write("topic1", "Qm111", "\ud800", sig, msg)
    assert storage.writes == 0
