from __future__ import annotations

import hashlib
import hmac
import re

SIGNATURE_HEADER = "X-Retell-Signature"

_HEX = re.compile(r"[0-9a-fA-F]+")


def compute_signature(secret: str, raw: bytes) -> str:
    """Hex HMAC-SHA256 of the raw body, keyed by the Retell API key."""
    return hmac.new(secret.encode("utf-8"), raw, hashlib.sha256).hexdigest()


def verify_signature(raw: bytes, signature: str | None, secret: str) -> bool:
    """
    Check a caller-supplied X-Retell-Signature against the raw request body.

    Fails closed: a missing header, non-hex value or a digest of the wrong
    length all return False instead of raising. An empty secret is still
    used as the HMAC key.
    """
    provided = (signature or "").strip()
    # bytes.fromhex skips inner whitespace, so check the alphabet first
    if not provided or not _HEX.fullmatch(provided):
        return False

    expected = bytes.fromhex(compute_signature(secret, raw))
    try:
        candidate = bytes.fromhex(provided)
    except ValueError:
        return False

    if len(candidate) != len(expected):
        return False
    return hmac.compare_digest(candidate, expected)
