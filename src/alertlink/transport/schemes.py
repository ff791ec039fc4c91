"""Scheme selection and detection for the text transport.

Encoding takes an explicit scheme. Decoding has no out-of-band scheme tag, so the
scheme is inferred from the first character:

- base65536 characters carry the first byte of their pair in the low 8 bits, so an
  envelope that starts with type id 0 begins with a character whose low byte is 0.
- base32768 envelopes start with ``[type id][0xFF]``; the first character is then
  U+06BF (type id 0) or U+101F (type id 1), whose low bytes are non-zero.

``detect_scheme`` therefore returns BASE65536 exactly when ``ord(text[0]) & 0xFF == 0``.
"""

from __future__ import annotations

import enum

from ..exceptions import EmptyEncoding
from . import base32768, base65536

DETECTION_MASK = 0xFF


class Scheme(str, enum.Enum):
    """Text packing scheme."""

    BASE32768 = "base32768"
    BASE65536 = "base65536"

    @property
    def uses_marker(self) -> bool:
        """Whether envelopes in this scheme carry the 0xFF marker byte."""
        return self is Scheme.BASE32768


def detect_scheme(text: str) -> Scheme:
    """Infer the scheme of an encoded string from its first character.

    Args:
        text: Encoded string (without any display prefix)

    Returns:
        BASE65536 if the first character's low byte is zero, otherwise BASE32768

    Raises:
        EmptyEncoding: If text is empty

    Example:
        >>> detect_scheme("\\u3400")
        <Scheme.BASE65536: 'base65536'>
        >>> detect_scheme("\\u06bf")
        <Scheme.BASE32768: 'base32768'>
    """
    if not text:
        raise EmptyEncoding("Cannot detect scheme of empty input")

    if ord(text[0]) & DETECTION_MASK == 0:
        return Scheme.BASE65536
    return Scheme.BASE32768


def encode_text(data: bytes, scheme: Scheme | str) -> str:
    """Render bytes as text in the given scheme.

    Args:
        data: Bytes to encode
        scheme: Scheme to use (a Scheme or its string value)

    Returns:
        Encoded string
    """
    scheme = Scheme(scheme)
    if scheme is Scheme.BASE65536:
        return base65536.encode(data)
    return base32768.encode(data)


def decode_text(text: str) -> tuple[Scheme, bytes]:
    """Detect the scheme of a string and decode it.

    Args:
        text: Encoded string

    Returns:
        Tuple of (detected scheme, decoded bytes)

    Raises:
        EmptyEncoding: If text is empty
        InvalidCodepoint: If a character is not legal for the detected scheme
        TruncatedEncoding: If the final characters do not resolve to whole bytes
    """
    scheme = detect_scheme(text)
    if scheme is Scheme.BASE65536:
        return scheme, base65536.decode(text)
    return scheme, base32768.decode(text)
