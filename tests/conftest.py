import pytest
from fdb_core.crypto import generate_identity, sign_record
from fdb_core.storage import SQLiteStorage, InMemoryStorage


@pytest.fixture(params=["sqlite", "memory"])
def store(request, tmp_path):
    if request.param == "sqlite":
        s = SQLiteStorage(str(tmp_path / "db" / "dht.sqlite"))
    else:
        s = InMemoryStorage()
    s.initialize()
    yield s
    s.close()


@pytest.fixture
def owner():
    priv, pub = generate_identity()

    def sign(key, cid):
        return sign_record(priv, key, cid)

    return pub, sign
