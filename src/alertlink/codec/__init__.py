"""Record body codec for alertlink.

This module provides serialization and deserialization of alert records to and
from the proto3 wire encoding carried in the envelope body.
"""

from __future__ import annotations

from .decoder import decode_message, deserialize
from .encoder import serialize
from .schema import FieldSchema, MessageSchema

__all__ = [
    "serialize",
    "deserialize",
    "decode_message",
    "MessageSchema",
    "FieldSchema",
]
