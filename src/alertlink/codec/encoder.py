"""Record serializer.

This module provides serialize(), which converts a record to the proto3 wire
encoding. Output is deterministic: fields are written in field-number order,
zero scalars, absent messages and empty code buckets are omitted, and codes are
written packed.
"""

from __future__ import annotations

from typing import Any

from ..exceptions import EncodeError
from ..models.base import BaseRecord
from ..models.fields import PROTO_CODES, PROTO_INT32, PROTO_MESSAGE, PROTO_UINT64
from .schema import FieldSchema, MessageSchema
from .wire import WireWriter

# CodeArray { repeated uint32 codes = 1; }
CODES_FIELD_NUMBER = 1


def serialize(record: BaseRecord) -> bytes:
    """Serialize a record to its canonical body bytes.

    Args:
        record: Record (or nested message) instance to serialize

    Returns:
        proto3 wire encoding of the record

    Raises:
        SchemaError: If the record class declares an invalid schema
        EncodeError: If a field value cannot be represented on the wire

    Example:
        >>> serialize(Epicenter(lat_x10=356, lon_x10=1397))
        b'\\x08\\xe4\\x02\\x10\\xf5\\n'
    """
    schema = MessageSchema.from_model(type(record))
    writer = WireWriter()

    for field_schema in schema.fields:
        value = getattr(record, field_schema.name)
        try:
            _encode_field(writer, field_schema, value)
        except ValueError as e:
            raise EncodeError(f"Field {field_schema.name}: {e}") from e

    return writer.to_bytes()


def _encode_field(writer: WireWriter, field_schema: FieldSchema, value: Any) -> None:
    """Encode a single field value, skipping values proto3 leaves off the wire."""
    if field_schema.proto_type in (PROTO_UINT64, PROTO_INT32):
        if value:
            writer.write_varint_field(field_schema.number, value)
        return

    if field_schema.proto_type == PROTO_MESSAGE:
        # Present messages are written even when all their fields are zero
        if value is not None:
            writer.write_length_delimited(field_schema.number, serialize(value))
        return

    if field_schema.proto_type == PROTO_CODES:
        if value:
            writer.write_length_delimited(field_schema.number, _encode_codes(value))
        return

    raise EncodeError(f"Field {field_schema.name}: unsupported proto type {field_schema.proto_type}")


def _encode_codes(codes: tuple[int, ...]) -> bytes:
    """Encode a CodeArray sub-message with its codes packed."""
    packed = WireWriter()
    for code in codes:
        packed.write_varint(code)

    message = WireWriter()
    message.write_length_delimited(CODES_FIELD_NUMBER, packed.to_bytes())
    return message.to_bytes()
