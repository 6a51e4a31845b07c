"""
fdb_core.utils
--------------
Base64 helpers and the canonical record message that writers sign.
"""

from __future__ import annotations
import base64, binascii, hashlib, json


def b64e(b: bytes) -> str:
    return base64.b64encode(b).decode("ascii")

def b64d(s: str) -> bytes:
    # validate=True rejects stray characters instead of silently dropping them
    return base64.b64decode(s.encode("ascii"), validate=True)

def try_b64d(s: str):
    try:
        return b64d(s)
    except (binascii.Error, UnicodeEncodeError, ValueError, AttributeError):
        return None

def record_message(key: str, cid: str) -> bytes:
    """
    Canonical signed content for a write of ``cid`` under ``key``.

    Compact, key-sorted JSON so that ("ab", "c") and ("a", "bc") never
    produce the same bytes.
    """
    body = {"key": key, "cid": cid}
    return json.dumps(body, separators=(",", ":"), sort_keys=True, ensure_ascii=False).encode("utf-8")

def fingerprint(pubkey_b64: str) -> str:
    # short, log-safe identifier for an owner key
    return hashlib.sha256(pubkey_b64.encode("utf-8", "surrogatepass")).hexdigest()[:16]
