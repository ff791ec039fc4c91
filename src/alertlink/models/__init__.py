"""Pydantic record modeling for alertlink.

This module provides the BaseRecord class, the two alert record shapes, and field
utilities for declaring protobuf-backed fields.
"""

from __future__ import annotations

from .base import BaseRecord
from .fields import CodeArray, CodeArrayField, Int32Field, MessageField, ProtoField, UInt64Field
from .records import (
    RECORD_TYPES,
    Epicenter,
    QuakePrefectureData,
    Record,
    TsunamiForecastData,
    TypeId,
    record_class_for,
    register_record,
)

__all__ = [
    "BaseRecord",
    "Epicenter",
    "QuakePrefectureData",
    "TsunamiForecastData",
    "Record",
    "TypeId",
    "RECORD_TYPES",
    "record_class_for",
    "register_record",
    "CodeArray",
    "ProtoField",
    "UInt64Field",
    "Int32Field",
    "MessageField",
    "CodeArrayField",
]
