from __future__ import annotations

import hashlib
import hmac

import pytest

from retell_textable.signature import compute_signature, verify_signature

SECRET = "retell-secret"


@pytest.mark.parametrize(
    "raw",
    [b"", b"{}", b'{"name":"send_textable_sms"}', bytes(range(256))],
)
def test_matching_signature_is_accepted(raw: bytes) -> None:
    signature = hmac.new(SECRET.encode(), raw, hashlib.sha256).hexdigest()
    assert compute_signature(SECRET, raw) == signature
    assert verify_signature(raw, signature, SECRET) is True


def test_uppercase_and_padded_hex_is_accepted() -> None:
    raw = b'{"a":1}'
    signature = compute_signature(SECRET, raw).upper()
    assert verify_signature(raw, f"  {signature}\n", SECRET) is True


def test_signature_for_other_body_is_rejected() -> None:
    signature = compute_signature(SECRET, b'{"a":1}')
    assert verify_signature(b'{"a":2}', signature, SECRET) is False


def test_signature_with_other_secret_is_rejected() -> None:
    raw = b'{"a":1}'
    assert verify_signature(raw, compute_signature("other", raw), SECRET) is False


@pytest.mark.parametrize("header", [None, "", "   "])
def test_missing_header_is_rejected(header: str | None) -> None:
    assert verify_signature(b"{}", header, SECRET) is False


@pytest.mark.parametrize("header", ["not-hex", "zz" * 32, "abc", "ab cd", "0x" + "ab" * 32])
def test_non_hex_header_is_rejected(header: str) -> None:
    assert verify_signature(b"{}", header, SECRET) is False


def test_hex_with_inner_whitespace_is_rejected() -> None:
    raw = b'{"name":"send_textable_sms"}'
    signature = compute_signature(SECRET, raw)
    spaced = " ".join(signature[i : i + 2] for i in range(0, len(signature), 2))
    assert verify_signature(raw, spaced, SECRET) is False
    assert verify_signature(raw, "ab cd", SECRET) is False


def test_wrong_length_header_is_rejected() -> None:
    raw = b"{}"
    signature = compute_signature(SECRET, raw)
    assert verify_signature(raw, signature[:32], SECRET) is False
    assert verify_signature(raw, signature + "00", SECRET) is False


def test_empty_secret_still_verifies() -> None:
    raw = b'{"name":"send_textable_sms"}'
    signature = hmac.new(b"", raw, hashlib.sha256).hexdigest()
    assert verify_signature(raw, signature, "") is True
    assert verify_signature(raw, compute_signature(SECRET, raw), "") is False
