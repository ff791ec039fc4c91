"""Exception hierarchy for alertlink.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from AlertlinkError for easy catching of any alertlink-specific error.
Every exception names the pipeline stage that failed in its ``stage`` attribute, so a
caller can report where an encode or decode was aborted.
"""

from __future__ import annotations


class AlertlinkError(Exception):
    """Base exception for all alertlink errors."""

    stage: str = "alertlink"


class SchemaError(AlertlinkError):
    """Raised when a record class declares an invalid wire schema.

    Examples:
        - Field without a protobuf field number or type
        - Two fields sharing a field number
        - Unsupported annotation for a declared wire type
    """

    stage = "schema"


class PayloadError(AlertlinkError):
    """Base class for failures while parsing a serialized record body."""

    stage = "payload"


class UnsupportedTypeId(PayloadError):
    """Raised when an envelope names a type id with no registered record shape."""

    def __init__(self, type_id: int | None) -> None:
        super().__init__(f"Unsupported type id {type_id}")
        self.type_id = type_id


class MalformedPayload(PayloadError):
    """Raised when a body does not parse as a well-formed record.

    Examples:
        - Truncated varint or length-delimited field
        - Varint longer than 10 bytes
        - Group wire types or field number 0
        - Wire type that does not match the declared field type
    """


class EnvelopeError(AlertlinkError):
    """Base class for failures while parsing the binary envelope."""

    stage = "envelope"


class EnvelopeTooShort(EnvelopeError):
    """Raised when the envelope cannot hold the type id, marker and tag."""


class TransportError(AlertlinkError):
    """Base class for failures while decoding the Unicode text representation."""

    stage = "transport"


class InvalidCodepoint(TransportError):
    """Raised when a character falls outside the scheme's repertoire or position rules."""


class TruncatedEncoding(TransportError):
    """Raised when the final group of characters does not resolve to whole bytes."""


class EmptyEncoding(TransportError):
    """Raised when there is no text to decode, so no scheme can be detected."""


class EncodeError(AlertlinkError):
    """Raised when encoding a record fails.

    Examples:
        - Record shape not allowed with the requested text scheme
        - Field value outside its wire range
    """

    stage = "encode"


class UnsupportedSchemeForPayload(EncodeError):
    """Raised when a record shape is paired with a scheme it may not use."""


class AuthenticationError(AlertlinkError):
    """Raised when fail-closed verification finds a tag that does not match the body."""

    stage = "auth"
