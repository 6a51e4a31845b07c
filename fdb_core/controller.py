"""
fdb_core.controller
-------------------
The only path that mutates records.

A write is rejected before storage is touched unless
1. the signed message is exactly the canonical message for (key, cid), and
2. the signature over it validates under the claimed owner key.
"""

from __future__ import annotations
from typing import Callable, Union
from fdb_core.constants import NOT_OWNER_MSG
from fdb_core.errors import MessageBindingError, OwnershipError
from fdb_core.logger import get_logger
from fdb_core.storage.models import Record
from fdb_core.storage.provider import StorageProvider
from fdb_core.utils import fingerprint, record_message
from fdb_core import crypto

log = get_logger("fdb.controller")

Verifier = Callable[[str, str, Union[str, bytes]], bool]


class AuthorizedWriteController:
    def __init__(self, storage: StorageProvider, verifier: Verifier = crypto.verify):
        self.storage = storage
        self.verifier = verifier

    def write(self, key: str, cid: str, owner_public_key: str, signature: str,
              message: Union[str, bytes]) -> Record:
        try:
            data = message.encode("utf-8") if isinstance(message, str) else message
            expected = record_message(key, cid)
        except UnicodeEncodeError:
            log.warning("rejected write: key, cid or message is not valid UTF-8")
            raise MessageBindingError(f"{NOT_OWNER_MSG} Key, cid and message must be valid UTF-8")
        if data != expected:
            log.warning(f"rejected write key={key!r}: message does not bind key and cid")
            raise MessageBindingError(f"{NOT_OWNER_MSG} Signed message does not match key and cid")

        if not self.verifier(owner_public_key, signature, data):
            log.warning(f"rejected write key={key!r} owner={fingerprint(owner_public_key)}: bad signature")
            raise OwnershipError(NOT_OWNER_MSG)

        return self.storage.insert_or_update(key, cid, owner_public_key)
