"""Text transport for alertlink.

This module maps envelope bytes to and from compact Unicode strings using one of
two interchangeable schemes, base32768 and base65536.
"""

from __future__ import annotations

from . import base32768, base65536
from .schemes import Scheme, decode_text, detect_scheme, encode_text

__all__ = [
    "Scheme",
    "encode_text",
    "decode_text",
    "detect_scheme",
    "base32768",
    "base65536",
]
