"""alertlink: Shareable Disaster Alert Strings

A Python library for packing earthquake and tsunami alert records into short,
URL-safe Unicode strings. A record is serialized with the proto3 wire encoding,
tagged with HMAC-SHA1, framed in a small envelope, and rendered as text with one
of two dense packings (base32768 or base65536). Decoding detects the packing from
the first character and can reconstruct the command that produced a record.

Quick Start:
    >>> from alertlink import QuakePrefectureData, Epicenter, Scheme, encode_record, decode_token
    >>>
    >>> record = QuakePrefectureData(
    ...     time=1700000000,
    ...     epicenter=Epicenter.from_degrees(35.6, 139.7),
    ...     one=[130000],
    ... )
    >>> token = encode_record(record, Scheme.BASE32768, prefix="https://example.org/a/")
    >>> decoded = decode_token(token)
    >>> decoded.record == record
    True
"""

from __future__ import annotations

from .codec import deserialize, serialize
from .command import reconstruct_command
from .exceptions import (
    AlertlinkError,
    AuthenticationError,
    EmptyEncoding,
    EncodeError,
    EnvelopeError,
    EnvelopeTooShort,
    InvalidCodepoint,
    MalformedPayload,
    PayloadError,
    SchemaError,
    TransportError,
    TruncatedEncoding,
    UnsupportedSchemeForPayload,
    UnsupportedTypeId,
)
from .framing import Envelope, frame_envelope, unframe_envelope
from .models import (
    BaseRecord,
    Epicenter,
    QuakePrefectureData,
    Record,
    TsunamiForecastData,
    TypeId,
)
from .pipeline import DecodedAlert, decode_token, encode_record, extract_token
from .transport import Scheme, decode_text, detect_scheme, encode_text
from .utils import encoded_length, envelope_size, hmac_sha1, verify_hmac_sha1

__version__ = "0.1.0"

__all__ = [
    # Core API
    "encode_record",
    "decode_token",
    "extract_token",
    "DecodedAlert",
    "reconstruct_command",
    # Records
    "BaseRecord",
    "Epicenter",
    "QuakePrefectureData",
    "TsunamiForecastData",
    "Record",
    "TypeId",
    # Body codec
    "serialize",
    "deserialize",
    # Envelope
    "Envelope",
    "frame_envelope",
    "unframe_envelope",
    # Text transport
    "Scheme",
    "encode_text",
    "decode_text",
    "detect_scheme",
    # Authentication
    "hmac_sha1",
    "verify_hmac_sha1",
    # Sizing
    "envelope_size",
    "encoded_length",
    # Exceptions
    "AlertlinkError",
    "SchemaError",
    "PayloadError",
    "UnsupportedTypeId",
    "MalformedPayload",
    "EnvelopeError",
    "EnvelopeTooShort",
    "TransportError",
    "InvalidCodepoint",
    "TruncatedEncoding",
    "EmptyEncoding",
    "EncodeError",
    "UnsupportedSchemeForPayload",
    "AuthenticationError",
    # Version
    "__version__",
]
