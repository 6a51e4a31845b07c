"""
FDB Core Package
================
Local, authenticated record store for a single DHT node.

Provides:
- Ed25519 ownership gate for writes
- Record storage (SQLite default, in-memory for tests)
- Uniform result envelope and command-handler surface for the host
"""

from fdb_core.errors import (
    FdbError,
    OwnershipError,
    MessageBindingError,
    StoreUninitializedError,
    StorageError,
)
from fdb_core.result import FdbResult, DhtEntry
from fdb_core.controller import AuthorizedWriteController
from fdb_core.service import DhtService

__all__ = [
    "FdbError",
    "OwnershipError",
    "MessageBindingError",
    "StoreUninitializedError",
    "StorageError",
    "FdbResult",
    "DhtEntry",
    "AuthorizedWriteController",
    "DhtService",
]
