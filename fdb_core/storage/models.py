# fdb_core/storage/models.py
from __future__ import annotations
from dataclasses import dataclass
from fdb_core.result import DhtEntry


@dataclass
class Record:
    """
    Storage-level representation of one DHT record.

    ``id`` is assigned by the provider and only orders records; ``cid`` is
    the single mutable field.
    """
    id: int
    key: str
    cid: str
    owner_public_key: str

    def to_entry(self) -> DhtEntry:
        return DhtEntry(owner_public_key=self.owner_public_key, cid=self.cid, key=self.key)
