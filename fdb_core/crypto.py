"""
fdb_core.crypto
---------------
Ed25519 primitives behind the ownership gate.

- ed25519_generate / ed25519_sign / ed25519_verify work on raw bytes
- verify() is the text-level check used by the write controller: base64
  public key, base64 signature, exact signed message
- sign_record() builds and signs the canonical record message, for
  publishers and tests
"""

from __future__ import annotations
from typing import Tuple, Union
from cryptography.hazmat.primitives.asymmetric import ed25519
from .utils import b64e, try_b64d, record_message

PUBLIC_KEY_LEN = 32
SIGNATURE_LEN = 64


# --------- Ed25519 (sign/verify) ----------
def ed25519_generate() -> Tuple[bytes, bytes]:
    sk = ed25519.Ed25519PrivateKey.generate()
    pk = sk.public_key()
    return sk.private_bytes_raw(), pk.public_bytes_raw()

def ed25519_sign(priv_raw: bytes, data: bytes) -> bytes:
    sk = ed25519.Ed25519PrivateKey.from_private_bytes(priv_raw)
    return sk.sign(data)

def ed25519_verify(pub_raw: bytes, sig: bytes, data: bytes) -> bool:
    try:
        ed25519.Ed25519PublicKey.from_public_bytes(pub_raw).verify(sig, data)
        return True
    except Exception:
        return False


# --------- Text-level helpers ----------
def generate_identity() -> Tuple[bytes, str]:
    """Return (raw private key, base64 public key) for a new owner."""
    priv, pub = ed25519_generate()
    return priv, b64e(pub)

def verify(public_key: str, signature: str, message: Union[str, bytes]) -> bool:
    """
    True iff ``signature`` is a valid Ed25519 signature over exactly
    ``message`` under ``public_key``. Malformed input yields False.
    """
    if not isinstance(public_key, str) or not isinstance(signature, str):
        return False
    if isinstance(message, str):
        try:
            data = message.encode("utf-8")
        except UnicodeEncodeError:
            return False
    elif isinstance(message, (bytes, bytearray)):
        data = bytes(message)
    else:
        return False

    pub_raw = try_b64d(public_key)
    sig_raw = try_b64d(signature)
    if pub_raw is None or len(pub_raw) != PUBLIC_KEY_LEN:
        return False
    if sig_raw is None or len(sig_raw) != SIGNATURE_LEN:
        return False
    return ed25519_verify(pub_raw, sig_raw, data)

def sign_record(priv_raw: bytes, key: str, cid: str) -> Tuple[str, str]:
    """Return (message, base64 signature) authorizing ``cid`` under ``key``."""
    msg = record_message(key, cid)
    return msg.decode("utf-8"), b64e(ed25519_sign(priv_raw, msg))
