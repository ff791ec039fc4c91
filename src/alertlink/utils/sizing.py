"""Encoded size calculation utilities.

This module provides functions to calculate how large a record becomes at each
stage of encoding: body bytes, envelope bytes, and characters of text.
"""

from __future__ import annotations

from ..codec.encoder import serialize
from ..models.base import BaseRecord
from ..transport import base32768
from ..transport.schemes import Scheme


def body_size(record: BaseRecord) -> int:
    """Calculate the serialized body size of a record in bytes."""
    return len(serialize(record))


def envelope_size(record: BaseRecord, scheme: Scheme | str) -> int:
    """Calculate the envelope size of a record in bytes.

    The size is the scheme's header plus the body. For base65536 a record with only
    ``time=1`` set takes 1 type id byte, 20 tag bytes and a 2-byte body.

    Example:
        >>> envelope_size(QuakePrefectureData(time=1), Scheme.BASE65536)
        23
    """
    # Import here to avoid circular dependency (framing uses utils.auth)
    from ..framing.envelope import header_size

    return header_size(scheme) + body_size(record)


def text_length(num_bytes: int, scheme: Scheme | str) -> int:
    """Calculate the number of characters needed to carry num_bytes.

    Args:
        num_bytes: Number of bytes to encode
        scheme: Text scheme

    Returns:
        Length of the encoded string in characters
    """
    if num_bytes < 0:
        raise ValueError(f"num_bytes must be >= 0, got {num_bytes}")

    if Scheme(scheme) is Scheme.BASE65536:
        return (num_bytes + 1) // 2

    bits = num_bytes * 8
    return (bits + base32768.BITS_PER_CHAR - 1) // base32768.BITS_PER_CHAR


def encoded_length(record: BaseRecord, scheme: Scheme | str) -> int:
    """Calculate the encoded text length of a record (excluding any display prefix)."""
    return text_length(envelope_size(record, scheme), scheme)
