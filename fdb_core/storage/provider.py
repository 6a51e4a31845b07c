# fdb_core/storage/provider.py
from __future__ import annotations
from typing import List, Optional
from fdb_core.storage.models import Record


class StorageProvider:
    """
    Record store interface.

    Providers raise StoreUninitializedError for any read/write before
    initialize() or after teardown(), and StorageError for backend failures.
    """
    name: str = "base"

    def initialize(self) -> None:
        raise NotImplementedError

    def teardown(self) -> None:
        raise NotImplementedError

    def insert_or_update(self, key: str, cid: str, owner_public_key: str) -> Record:
        raise NotImplementedError

    def fetch_by_key(self, key: str) -> List[Record]:
        raise NotImplementedError

    def fetch_latest_by_key_and_owner(self, key: str, owner_public_key: str) -> Optional[Record]:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError

    def close(self) -> None:
        return
