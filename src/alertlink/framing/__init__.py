"""Envelope framing utilities for alertlink.

This module provides the binary envelope that combines a type id, an optional
scheme marker, an authentication tag and a serialized record body.
"""

from __future__ import annotations

from .envelope import MARKER, Envelope, frame_envelope, header_size, unframe_envelope

__all__ = [
    "Envelope",
    "MARKER",
    "frame_envelope",
    "unframe_envelope",
    "header_size",
]
