"""Utility functions for alertlink.

This module provides authentication tags, size calculation, and other utilities.
"""

from __future__ import annotations

from .auth import TAG_SIZE, hmac_sha1, verify_hmac_sha1
from .sizing import body_size, encoded_length, envelope_size, text_length

__all__ = [
    # Authentication
    "TAG_SIZE",
    "hmac_sha1",
    "verify_hmac_sha1",
    # Sizing functions
    "body_size",
    "envelope_size",
    "text_length",
    "encoded_length",
]
