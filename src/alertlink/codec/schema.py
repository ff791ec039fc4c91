"""Schema introspection for alertlink records.

This module analyzes record classes and extracts the wire-relevant information
attached by the field helpers: protobuf field number, wire type, and for nested
messages the record class to recurse into.
"""

from __future__ import annotations

import types
from dataclasses import dataclass
from typing import Any, List, Optional, Type, Union, get_args, get_origin

from pydantic.fields import FieldInfo

from ..exceptions import SchemaError
from ..models.base import BaseRecord
from ..models.fields import PROTO_CODES, PROTO_INT32, PROTO_MESSAGE, PROTO_UINT64

_PROTO_TYPES = (PROTO_UINT64, PROTO_INT32, PROTO_MESSAGE, PROTO_CODES)


@dataclass(frozen=True)
class FieldSchema:
    """Schema information for a single field.

    Attributes:
        name: Field name
        number: Protobuf field number
        proto_type: Wire type (uint64, int32, message, codes)
        message_class: Nested record class for message fields
    """

    name: str
    number: int
    proto_type: str
    message_class: Optional[Type[BaseRecord]] = None

    def default_value(self) -> Any:
        """Value a field takes when it is absent from the wire."""
        if self.proto_type == PROTO_MESSAGE:
            return None
        if self.proto_type == PROTO_CODES:
            return ()
        return 0


class MessageSchema:
    """Schema information for an entire record class.

    Fields are kept in field-number order, which is also the order they are written.

    Example:
        >>> schema = MessageSchema.from_model(QuakePrefectureData)
        >>> [field.name for field in schema.code_fields()][:2]
        ['one', 'two']
    """

    _cache: dict[type, MessageSchema] = {}

    def __init__(self, model_class: Type[BaseRecord]) -> None:
        """Initialize schema from a record class.

        Args:
            model_class: Record class to introspect
        """
        self.model_class = model_class
        self.fields: List[FieldSchema] = []
        self._introspect()
        self._by_number = {field.number: field for field in self.fields}

    @classmethod
    def from_model(cls, model_class: Type[BaseRecord]) -> MessageSchema:
        """Create (or reuse) a schema for a record class."""
        schema = cls._cache.get(model_class)
        if schema is None:
            schema = cls(model_class)
            cls._cache[model_class] = schema
        return schema

    def field_for_number(self, number: int) -> Optional[FieldSchema]:
        """Return the field with the given number, or None for unknown fields."""
        return self._by_number.get(number)

    def code_fields(self) -> List[FieldSchema]:
        """Return the code bucket fields in declaration order."""
        return [field for field in self.fields if field.proto_type == PROTO_CODES]

    def _introspect(self) -> None:
        """Introspect the model and populate field schemas."""
        seen: dict[int, str] = {}
        for field_name, field_info in self.model_class.model_fields.items():
            field_schema = self._extract_field_schema(field_name, field_info)
            if field_schema.number in seen:
                raise SchemaError(
                    f"{self.model_class.__name__}: fields {seen[field_schema.number]} and "
                    f"{field_name} share field number {field_schema.number}"
                )
            seen[field_schema.number] = field_name
            self.fields.append(field_schema)

        self.fields.sort(key=lambda field: field.number)

    def _extract_field_schema(self, name: str, field_info: FieldInfo) -> FieldSchema:
        """Extract schema information from a Pydantic FieldInfo."""
        extra = field_info.json_schema_extra
        if not isinstance(extra, dict) or "proto_field" not in extra:
            raise SchemaError(
                f"{self.model_class.__name__}.{name}: missing protobuf field metadata "
                f"(declare it with a field helper from alertlink.models.fields)"
            )

        number = extra["proto_field"]
        proto_type = extra.get("proto_type")
        if not isinstance(number, int) or number < 1:
            raise SchemaError(f"{self.model_class.__name__}.{name}: invalid field number {number}")
        if proto_type not in _PROTO_TYPES:
            raise SchemaError(
                f"{self.model_class.__name__}.{name}: unsupported proto type {proto_type}"
            )

        message_class = None
        if proto_type == PROTO_MESSAGE:
            message_class = self._message_class(name, field_info.annotation)

        return FieldSchema(
            name=name,
            number=number,
            proto_type=proto_type,
            message_class=message_class,
        )

    def _message_class(self, name: str, annotation: Any) -> Type[BaseRecord]:
        """Unwrap Optional[...] and return the nested record class."""
        if get_origin(annotation) in (Union, types.UnionType):
            non_none_args = [arg for arg in get_args(annotation) if arg is not type(None)]
            if len(non_none_args) != 1:
                raise SchemaError(
                    f"{self.model_class.__name__}.{name}: complex Union types not supported"
                )
            annotation = non_none_args[0]

        if not (isinstance(annotation, type) and issubclass(annotation, BaseRecord)):
            raise SchemaError(
                f"{self.model_class.__name__}.{name}: message fields must be BaseRecord "
                f"subclasses, got {annotation}"
            )
        return annotation
