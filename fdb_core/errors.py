# fdb_core/errors.py
from __future__ import annotations


class FdbError(Exception):
    pass


class OwnershipError(FdbError):
    """Signature did not prove control of the claimed owner key."""
    pass


class MessageBindingError(OwnershipError):
    """Signed message does not bind the (key, cid) being written."""
    pass


class StoreUninitializedError(FdbError):
    def __init__(self, msg: str = "Store is not initialized"):
        super().__init__(msg)


class StorageError(FdbError):
    pass
