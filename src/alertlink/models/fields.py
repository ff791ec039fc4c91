"""Field type helpers and utilities.

This module provides convenience functions and type aliases for declaring record
fields together with their protobuf field number and wire type.
"""

from __future__ import annotations

from typing import Annotated, Any, cast

from pydantic import Field
from pydantic.fields import FieldInfo

UINT32_MAX = 2**32 - 1
UINT64_MAX = 2**64 - 1
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

# Wire types understood by alertlink.codec
PROTO_UINT64 = "uint64"
PROTO_INT32 = "int32"
PROTO_MESSAGE = "message"
PROTO_CODES = "codes"

UInt32 = Annotated[int, Field(ge=0, le=UINT32_MAX)]

# Ordered region/intensity codes; lists are accepted and stored as tuples
CodeArray = tuple[UInt32, ...]


def ProtoField(*, number: int, proto_type: str, **kwargs: Any) -> FieldInfo:
    """Create a field carrying protobuf metadata.

    Args:
        number: Protobuf field number (>= 1)
        proto_type: One of the PROTO_* wire types
        **kwargs: Additional Field() arguments (constraints, default, description)

    Returns:
        Pydantic FieldInfo suitable for use as a field default/metadata.
    """
    return cast(
        FieldInfo,
        Field(json_schema_extra={"proto_field": number, "proto_type": proto_type}, **kwargs),
    )


def UInt64Field(number: int, **kwargs: Any) -> FieldInfo:
    """Create an unsigned 64-bit integer field.

    Example:
        >>> class Message(BaseRecord):
        ...     time: int = UInt64Field(1)
    """
    return ProtoField(number=number, proto_type=PROTO_UINT64, ge=0, le=UINT64_MAX, **kwargs)


def Int32Field(number: int, **kwargs: Any) -> FieldInfo:
    """Create a signed 32-bit integer field."""
    return ProtoField(number=number, proto_type=PROTO_INT32, ge=INT32_MIN, le=INT32_MAX, **kwargs)


def MessageField(number: int, **kwargs: Any) -> FieldInfo:
    """Create an optional nested-message field (absent by default).

    Example:
        >>> class Message(BaseRecord):
        ...     epicenter: Optional[Epicenter] = MessageField(2)
    """
    return ProtoField(number=number, proto_type=PROTO_MESSAGE, default=None, **kwargs)


def CodeArrayField(number: int, **kwargs: Any) -> FieldInfo:
    """Create a code bucket field (empty by default).

    On the wire a bucket is a ``CodeArray { repeated uint32 codes = 1; }`` sub-message.
    An empty bucket is omitted, so empty and absent are the same thing.

    Example:
        >>> class Message(BaseRecord):
        ...     one: CodeArray = CodeArrayField(3)
    """
    return ProtoField(number=number, proto_type=PROTO_CODES, default=(), **kwargs)
