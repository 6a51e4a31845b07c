from typing import List, Optional
import threading
from fdb_core.errors import StoreUninitializedError
from fdb_core.storage.models import Record
from fdb_core.storage.provider import StorageProvider


class InMemoryStorage(StorageProvider):
    name = "memory"

    def __init__(self):
        self.records = None  # (key, owner_public_key) -> Record; None until initialize()
        self._next_id = 1
        self._lock = threading.Lock()

    def _require(self):
        if self.records is None:
            raise StoreUninitializedError()
        return self.records

    def initialize(self):
        with self._lock:
            if self.records is None:
                self.records = {}

    def teardown(self):
        # ids keep counting across teardown so they are never reused
        with self._lock:
            self.records = None

    def insert_or_update(self, key: str, cid: str, owner_public_key: str) -> Record:
        with self._lock:
            records = self._require()
            rec = records.get((key, owner_public_key))
            if rec is None:
                rec = Record(id=self._next_id, key=key, cid=cid, owner_public_key=owner_public_key)
                self._next_id += 1
                records[(key, owner_public_key)] = rec
            else:
                rec.cid = cid
            return Record(**vars(rec))

    def fetch_by_key(self, key: str) -> List[Record]:
        with self._lock:
            found = [r for r in self._require().values() if r.key == key]
            return [Record(**vars(r)) for r in sorted(found, key=lambda r: r.id)]

    def fetch_latest_by_key_and_owner(self, key: str, owner_public_key: str) -> Optional[Record]:
        with self._lock:
            rec = self._require().get((key, owner_public_key))
            return Record(**vars(rec)) if rec else None

    def count(self) -> int:
        with self._lock:
            return len(self._require())
