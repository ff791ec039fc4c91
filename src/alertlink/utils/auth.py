"""Keyed authentication tags.

This module computes and verifies the HMAC-SHA1 tag carried in every envelope.
The tag covers the serialized record body only, never the type id or marker byte.
"""

from __future__ import annotations

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, hmac

TAG_SIZE = 20


def _key_bytes(key: str | bytes) -> bytes:
    if isinstance(key, str):
        return key.encode("utf-8")
    return bytes(key)


def _hmac(key: str | bytes) -> hmac.HMAC:
    return hmac.HMAC(_key_bytes(key), hashes.SHA1())


def hmac_sha1(key: str | bytes, body: bytes) -> bytes:
    """Calculate the HMAC-SHA1 tag of a body.

    An empty key is valid; it is the CLI default.

    Args:
        key: Shared key (str keys are UTF-8 encoded)
        body: Serialized record body

    Returns:
        20-byte tag

    Example:
        >>> hmac_sha1("", b"").hex()
        'fbdb1d1b18aa6c08324b7d64b71fb76370690e1d'
    """
    mac = _hmac(key)
    mac.update(body)
    return mac.finalize()


def verify_hmac_sha1(key: str | bytes, body: bytes, tag: bytes) -> bool:
    """Verify an HMAC-SHA1 tag in constant time.

    Args:
        key: Shared key
        body: Serialized record body
        tag: Expected 20-byte tag

    Returns:
        True if the tag matches, False otherwise

    Raises:
        ValueError: If tag is not 20 bytes

    Example:
        >>> tag = hmac_sha1("secret", b"body")
        >>> verify_hmac_sha1("secret", b"body", tag)
        True
    """
    if len(tag) != TAG_SIZE:
        raise ValueError(f"HMAC-SHA1 tag must be {TAG_SIZE} bytes, got {len(tag)}")

    mac = _hmac(key)
    mac.update(body)
    try:
        mac.verify(tag)
    except InvalidSignature:
        return False
    return True
