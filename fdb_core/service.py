"""
fdb_core.service
----------------
Command-handler surface for the host runtime.

Each operation takes plain arguments and returns an FdbResult; dispatch()
takes a command name plus a params dict and returns the result as a dict.
Unknown commands and bad params come back as ``{"error": ...}``.
"""

from __future__ import annotations
from typing import Any, Dict, Optional
import inspect
from fdb_core.controller import AuthorizedWriteController
from fdb_core.logger import get_logger
from fdb_core.result import FdbResult
from fdb_core.storage import StorageProvider, load_storage_provider

log = get_logger("fdb.service")


class DhtService:
    def __init__(self, storage: Optional[StorageProvider] = None,
                 controller: Optional[AuthorizedWriteController] = None):
        self.storage = storage or load_storage_provider()
        self.controller = controller or AuthorizedWriteController(self.storage)
        self._handlers = {
            "initialize": self.initialize,
            "teardown": self.teardown,
            "shutdown": self.shutdown,
            "write": self.write,
            "insert": self.write,
            "list_by_key": self.list_by_key,
            "latest_by_key_and_owner": self.latest_by_key_and_owner,
        }

    def initialize(self) -> FdbResult:
        return FdbResult.capture(self.storage.initialize)

    def teardown(self) -> FdbResult:
        return FdbResult.capture(self.storage.teardown)

    shutdown = teardown

    def write(self, key: str, cid: str, owner_public_key: str, signature: str, message: str) -> FdbResult:
        res = FdbResult.capture(self.controller.write, key, cid, owner_public_key, signature, message)
        # the stored row is internal; callers only learn the write landed
        return FdbResult.ok() if res.success else res

    def list_by_key(self, key: str) -> FdbResult:
        return FdbResult.capture(
            lambda: [r.to_entry() for r in self.storage.fetch_by_key(key)]
        )

    def latest_by_key_and_owner(self, key: str, owner_public_key: str) -> FdbResult:
        def _latest():
            rec = self.storage.fetch_latest_by_key_and_owner(key, owner_public_key)
            return rec.to_entry() if rec else None
        return FdbResult.capture(_latest)

    def dispatch(self, command: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        handler = self._handlers.get(command)
        if handler is None:
            log.warning(f"unknown command: {command!r}")
            return FdbResult.error(f"Unknown command: {command}").to_dict()
        params = params or {}
        try:
            inspect.signature(handler).bind(**params)
        except TypeError as e:
            log.warning(f"bad params for {command!r}: {e}")
            return FdbResult.error(f"Invalid parameters for {command}: {e}").to_dict()
        for name, value in params.items():
            if not isinstance(value, str):
                return FdbResult.error(f"Parameter {name} must be a string").to_dict()
        return handler(**params).to_dict()
