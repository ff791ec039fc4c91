"""Record deserializer.

This module provides deserialize(), which parses body bytes back into the record
shape selected by an envelope type id. Parsing follows proto3 rules: unknown
fields are skipped, absent fields take their defaults, repeated occurrences of a
message field are merged, and repeated codes may arrive packed or unpacked.
"""

from __future__ import annotations

from typing import Any, cast

from pydantic import ValidationError

from ..exceptions import MalformedPayload
from ..models.base import BaseRecord
from ..models.fields import PROTO_CODES, PROTO_INT32, PROTO_MESSAGE, PROTO_UINT64, UINT32_MAX
from ..models.records import record_class_for
from .encoder import CODES_FIELD_NUMBER
from .schema import FieldSchema, MessageSchema
from .wire import UINT64_MASK, WIRE_LEN, WIRE_VARINT, WireReader


def deserialize(data: bytes, type_id: int) -> BaseRecord:
    """Deserialize body bytes as the record shape for a type id.

    Args:
        data: Serialized record body
        type_id: Envelope type id selecting the record shape

    Returns:
        Decoded record instance

    Raises:
        UnsupportedTypeId: If type_id has no registered record shape
        MalformedPayload: If data is not a well-formed record of that shape
    """
    record_class = record_class_for(type_id)
    return decode_message(record_class, data)


def decode_message(message_class: type[BaseRecord], data: bytes) -> BaseRecord:
    """Decode body bytes into an instance of a specific record class.

    Raises:
        MalformedPayload: If data is truncated, structurally invalid, or decodes
            to values the record class rejects
    """
    schema = MessageSchema.from_model(message_class)
    reader = WireReader(data)

    field_values: dict[str, Any] = {}
    # Length-delimited payloads per field; concatenating them merges occurrences
    pending: dict[str, bytearray] = {}

    try:
        while not reader.at_end():
            number, wire_type = reader.read_tag()
            field_schema = schema.field_for_number(number)
            if field_schema is None:
                reader.skip_field(wire_type)
                continue
            _decode_field(reader, field_schema, wire_type, field_values, pending)
    except IndexError as e:
        raise MalformedPayload(f"Truncated data while decoding {message_class.__name__}: {e}") from e
    except ValueError as e:
        raise MalformedPayload(f"Error decoding {message_class.__name__}: {e}") from e

    for field_schema in schema.fields:
        payload = pending.get(field_schema.name)
        if payload is not None:
            if field_schema.proto_type == PROTO_CODES:
                field_values[field_schema.name] = _decode_codes(bytes(payload))
            else:
                # MessageSchema resolves the nested class for every message field
                message_type = cast("type[BaseRecord]", field_schema.message_class)
                field_values[field_schema.name] = decode_message(message_type, bytes(payload))
        elif field_schema.name not in field_values:
            field_values[field_schema.name] = field_schema.default_value()

    try:
        return message_class(**field_values)
    except ValidationError as e:
        raise MalformedPayload(f"Failed to construct {message_class.__name__}: {e}") from e


def _decode_field(
    reader: WireReader,
    field_schema: FieldSchema,
    wire_type: int,
    field_values: dict[str, Any],
    pending: dict[str, bytearray],
) -> None:
    """Decode a single known field occurrence.

    Raises:
        ValueError: If the wire type does not match the field
        IndexError: If data is truncated
    """
    if field_schema.proto_type in (PROTO_UINT64, PROTO_INT32):
        if wire_type != WIRE_VARINT:
            raise ValueError(
                f"Field {field_schema.name}: expected varint, got wire type {wire_type}"
            )
        raw = reader.read_varint()
        if field_schema.proto_type == PROTO_UINT64:
            field_values[field_schema.name] = raw & UINT64_MASK
        else:
            field_values[field_schema.name] = _to_int32(raw)
        return

    if field_schema.proto_type in (PROTO_MESSAGE, PROTO_CODES):
        if wire_type != WIRE_LEN:
            raise ValueError(
                f"Field {field_schema.name}: expected length-delimited, got wire type {wire_type}"
            )
        pending.setdefault(field_schema.name, bytearray()).extend(reader.read_length_delimited())
        return

    raise ValueError(f"Field {field_schema.name}: unsupported proto type {field_schema.proto_type}")


def _decode_codes(data: bytes) -> tuple[int, ...]:
    """Decode a CodeArray sub-message, accepting packed and unpacked codes."""
    codes: list[int] = []
    reader = WireReader(data)

    try:
        while not reader.at_end():
            number, wire_type = reader.read_tag()
            if number != CODES_FIELD_NUMBER:
                reader.skip_field(wire_type)
            elif wire_type == WIRE_VARINT:
                codes.append(reader.read_varint() & UINT32_MAX)
            elif wire_type == WIRE_LEN:
                packed = WireReader(reader.read_length_delimited())
                while not packed.at_end():
                    codes.append(packed.read_varint() & UINT32_MAX)
            else:
                raise ValueError(f"CodeArray.codes: unexpected wire type {wire_type}")
    except IndexError as e:
        raise MalformedPayload(f"Truncated data while decoding CodeArray: {e}") from e
    except ValueError as e:
        raise MalformedPayload(f"Error decoding CodeArray: {e}") from e

    return tuple(codes)


def _to_int32(raw: int) -> int:
    """Truncate a varint to 32 bits and reinterpret it as two's complement."""
    value = raw & 0xFFFFFFFF
    if value & 0x80000000:
        return value - (1 << 32)
    return value
