"""Envelope framing.

The envelope wraps a serialized record body for text transport:

- [Type id (1 byte)] [Marker 0xFF (1 byte, base32768 only)] [Tag (20 bytes)] [Body]

Whether the marker is present is decided by the text scheme, never by the envelope
content. Unframing exposes the tag and body without checking one against the other;
callers verify with ``alertlink.utils.auth.verify_hmac_sha1`` when they choose to.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..exceptions import EnvelopeTooShort
from ..transport.schemes import Scheme
from ..utils.auth import TAG_SIZE

MARKER = 0xFF
TYPE_ID_SIZE = 1
MARKER_SIZE = 1


@dataclass(frozen=True)
class Envelope:
    """Parsed envelope.

    Attributes:
        type_id: Record shape selector
        scheme: Text scheme the envelope was carried in
        tag: 20-byte authentication tag, unverified
        body: Serialized record body
        marker: Marker byte as found (base32768 only; its value is not checked)
    """

    type_id: int
    scheme: Scheme
    tag: bytes
    body: bytes
    marker: Optional[int] = None


def header_size(scheme: Scheme | str) -> int:
    """Return the number of bytes before the body for a scheme."""
    marker_size = MARKER_SIZE if Scheme(scheme).uses_marker else 0
    return TYPE_ID_SIZE + marker_size + TAG_SIZE


def frame_envelope(type_id: int, scheme: Scheme | str, tag: bytes, body: bytes) -> bytes:
    """Assemble an envelope.

    Args:
        type_id: Record shape selector (0-255)
        scheme: Text scheme the envelope will be carried in
        tag: 20-byte authentication tag of body
        body: Serialized record body

    Returns:
        Envelope bytes

    Raises:
        ValueError: If type_id is out of range or tag is not 20 bytes

    Example:
        >>> framed = frame_envelope(0, Scheme.BASE32768, bytes(20), b"\\x08\\x01")
        >>> framed[:2]
        b'\\x00\\xff'
    """
    if not 0 <= type_id <= 255:
        raise ValueError(f"Type id must be 0-255, got {type_id}")
    if len(tag) != TAG_SIZE:
        raise ValueError(f"Tag must be {TAG_SIZE} bytes, got {len(tag)}")

    result = bytearray()
    result.append(type_id)
    if Scheme(scheme).uses_marker:
        result.append(MARKER)
    result.extend(tag)
    result.extend(body)
    return bytes(result)


def unframe_envelope(data: bytes, scheme: Scheme | str) -> Envelope:
    """Parse envelope bytes using the layout of an already-detected scheme.

    Args:
        data: Envelope bytes from the text transport
        scheme: Scheme the bytes were decoded with

    Returns:
        Parsed Envelope (body may be empty)

    Raises:
        EnvelopeTooShort: If data is shorter than 21 bytes (base65536) or
            22 bytes (base32768)

    Example:
        >>> envelope = unframe_envelope(b"\\x00" + bytes(20) + b"\\x08\\x01", Scheme.BASE65536)
        >>> envelope.body
        b'\\x08\\x01'
    """
    scheme = Scheme(scheme)
    minimum = header_size(scheme)
    if len(data) < minimum:
        raise EnvelopeTooShort(
            f"Minimum length is not satisfied ({scheme.value}): need at least {minimum} bytes, "
            f"got {len(data)} bytes"
        )

    type_id = data[0]
    position = TYPE_ID_SIZE
    marker = None
    if scheme.uses_marker:
        marker = data[position]
        position += MARKER_SIZE

    tag = bytes(data[position : position + TAG_SIZE])
    body = bytes(data[position + TAG_SIZE :])

    return Envelope(type_id=type_id, scheme=scheme, tag=tag, body=body, marker=marker)
