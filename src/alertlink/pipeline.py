"""End-to-end encoding and decoding of alert records.

Encode direction:
    record -> serialize -> HMAC-SHA1 tag -> envelope -> text (+ display prefix)

Decode direction:
    URL or token -> percent-decode, last path segment -> detect scheme -> bytes
    -> envelope -> record (tag verified only when the caller asks)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import unquote

import structlog

from .codec.decoder import deserialize
from .codec.encoder import serialize
from .command import DEFAULT_PROGRAM, reconstruct_command
from .exceptions import AuthenticationError, InvalidCodepoint, UnsupportedSchemeForPayload
from .framing.envelope import Envelope, frame_envelope, unframe_envelope
from .models.base import BaseRecord
from .transport.schemes import Scheme, decode_text, encode_text
from .utils.auth import hmac_sha1, verify_hmac_sha1

log = structlog.get_logger()


@dataclass(frozen=True)
class DecodedAlert:
    """Result of decoding an encoded alert.

    Attributes:
        envelope: Parsed envelope (scheme, type id, tag, body)
        record: Decoded record
        verified: True/False if the tag was checked, None if it was not
    """

    envelope: Envelope
    record: BaseRecord
    verified: Optional[bool] = None

    @property
    def scheme(self) -> Scheme:
        return self.envelope.scheme

    @property
    def type_id(self) -> int:
        return self.envelope.type_id

    @property
    def tag(self) -> bytes:
        return self.envelope.tag

    @property
    def body(self) -> bytes:
        return self.envelope.body

    def verify(self, key: str | bytes) -> bool:
        """Check the envelope tag against the body with a key."""
        return verify_hmac_sha1(key, self.envelope.body, self.envelope.tag)

    def command(self, program: str = DEFAULT_PROGRAM) -> str:
        """Render the encode invocation that re-produces this record."""
        return reconstruct_command(self.record, self.envelope.scheme, program=program)


def encode_record(
    record: BaseRecord,
    scheme: Scheme | str,
    key: str | bytes = "",
    prefix: str = "",
) -> str:
    """Encode a record as a shareable string.

    Args:
        record: QuakePrefectureData or TsunamiForecastData instance
        scheme: Text scheme to encode with
        key: HMAC key (empty by default)
        prefix: Literal display prefix, e.g. a URL ending in '/'

    Returns:
        prefix followed by the encoded envelope

    Raises:
        UnsupportedSchemeForPayload: If the record shape may not use scheme
        EncodeError: If the record cannot be serialized

    Example:
        >>> record = QuakePrefectureData(time=1700000000, one=[130000])
        >>> token = encode_record(record, Scheme.BASE32768)
        >>> decode_token(token).record == record
        True
    """
    scheme = Scheme(scheme)
    record_class = type(record)
    type_id = record_class.type_id
    if type_id is None or scheme not in record_class.allowed_schemes:
        raise UnsupportedSchemeForPayload(
            f"Unsupported payload for {scheme.value} format: {record_class.__name__}"
        )

    body = serialize(record)
    tag = hmac_sha1(key, body)
    framed = frame_envelope(type_id, scheme, tag, body)
    encoded = encode_text(framed, scheme)

    log.debug(
        "record_encoded",
        record_type=record_class.__name__,
        scheme=scheme.value,
        body_bytes=len(body),
        envelope_bytes=len(framed),
        chars=len(encoded),
    )
    return f"{prefix}{encoded}"


def extract_token(value: str) -> str:
    """Extract the encoded token from a URL or bare token.

    The value is percent-decoded and everything up to the last '/' is dropped.

    Raises:
        InvalidCodepoint: If percent-decoding does not yield valid UTF-8
    """
    try:
        decoded = unquote(value, errors="strict")
    except UnicodeDecodeError as e:
        raise InvalidCodepoint(f"Failed to URL-decode input: {e}") from e
    return decoded.rsplit("/", 1)[-1]


def decode_token(
    value: str,
    key: str | bytes | None = None,
    verify: bool = False,
) -> DecodedAlert:
    """Decode a URL or token back into a record.

    Args:
        value: Encoded token, optionally inside a URL path
        key: HMAC key; when given, the tag is checked and the result reported
        verify: If True, a tag mismatch is an error (an absent key means the empty key)

    Returns:
        DecodedAlert with the envelope, record and verification result

    Raises:
        TransportError: If the text cannot be decoded
        EnvelopeTooShort: If the envelope is truncated
        UnsupportedTypeId: If the envelope type id is unknown
        MalformedPayload: If the body does not parse
        AuthenticationError: If verify is True and the tag does not match
    """
    token = extract_token(value)
    scheme, data = decode_text(token)
    log.debug("scheme_detected", scheme=scheme.value, first_codepoint=f"U+{ord(token[0]):04X}")

    envelope = unframe_envelope(data, scheme)

    verified: Optional[bool] = None
    if key is not None or verify:
        verified = verify_hmac_sha1(key if key is not None else "", envelope.body, envelope.tag)
        log.debug("tag_verified", verified=verified)
        # Fail closed before parsing an untrusted body
        if verify and not verified:
            raise AuthenticationError("Authentication tag does not match the payload body")

    record = deserialize(envelope.body, envelope.type_id)
    log.debug(
        "token_decoded",
        record_type=type(record).__name__,
        type_id=envelope.type_id,
        body_bytes=len(envelope.body),
    )
    return DecodedAlert(envelope=envelope, record=record, verified=verified)
