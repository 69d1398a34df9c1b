"""VNPay secure-hash (HMAC-SHA512) signing and verification."""

import hashlib
import hmac
from typing import Mapping
from urllib.parse import quote_plus

HASH_FIELDS = ("vnp_SecureHash", "vnp_SecureHashType")


def build_hash_data(params: Mapping[str, str]) -> str:
    """
    Canonical string VNPay signs: ``vnp_*`` fields except the hash itself,
    sorted by key, empty values dropped, form-urlencoded.
    """
    items = sorted(
        (key, value)
        for key, value in params.items()
        if key.startswith("vnp_") and key not in HASH_FIELDS and value not in (None, "")
    )
    return "&".join(f"{quote_plus(key)}={quote_plus(str(value))}" for key, value in items)


def sign_params(params: Mapping[str, str], secret: str) -> str:
    return hmac.new(secret.encode("utf-8"), build_hash_data(params).encode("utf-8"), hashlib.sha512).hexdigest()


def verify_secure_hash(params: Mapping[str, str], secret: str) -> bool:
    """True if ``vnp_SecureHash`` matches the parameters signed with ``secret``."""
    received = params.get("vnp_SecureHash")
    if not received:
        return False
    expected = sign_params(params, secret)
    return hmac.compare_digest(expected.lower(), received.lower())
