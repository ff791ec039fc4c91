"""Alert record shapes and the type id registry.

Two closed record shapes are supported, selected by the single-byte envelope type id:

- QuakePrefectureData (type id 0): regions per seismic-intensity level
- TsunamiForecastData (type id 1): regions per tsunami forecast level

Both optionally carry an Epicenter in fixed-point tenths of a degree.
"""

from __future__ import annotations

import enum
from typing import ClassVar, Optional, Union

from ..exceptions import UnsupportedTypeId
from ..transport.schemes import Scheme
from .base import BaseRecord
from .fields import CodeArray, CodeArrayField, Int32Field, MessageField, UInt64Field


class TypeId(enum.IntEnum):
    """Envelope type ids."""

    QUAKE_PREFECTURE = 0
    TSUNAMI_FORECAST = 1


class Epicenter(BaseRecord):
    """Fixed-point epicenter location.

    Coordinates are decimal degrees multiplied by 10, so only one decimal place
    survives a round trip.

    Example:
        >>> Epicenter.from_degrees(35.6, 139.7)
        Epicenter(lat_x10=356, lon_x10=1397)
    """

    lat_x10: int = Int32Field(1)
    lon_x10: int = Int32Field(2)

    @classmethod
    def from_degrees(cls, lat: float, lon: float) -> Epicenter:
        """Build an epicenter from decimal degrees, rounding to the nearest tenth."""
        return cls(lat_x10=round(lat * 10), lon_x10=round(lon * 10))

    @property
    def lat(self) -> float:
        return self.lat_x10 / 10

    @property
    def lon(self) -> float:
        return self.lon_x10 / 10


class QuakePrefectureData(BaseRecord):
    """Earthquake intensity report, grouping region codes by intensity level."""

    time: int = UInt64Field(1, description="Unix seconds")
    epicenter: Optional[Epicenter] = MessageField(2)
    one: CodeArray = CodeArrayField(3)
    two: CodeArray = CodeArrayField(4)
    three: CodeArray = CodeArrayField(5)
    four: CodeArray = CodeArrayField(6)
    five_minus: CodeArray = CodeArrayField(7)
    five_plus: CodeArray = CodeArrayField(8)
    six_minus: CodeArray = CodeArrayField(9)
    six_plus: CodeArray = CodeArrayField(10)
    seven: CodeArray = CodeArrayField(11)

    type_id: ClassVar[int | None] = TypeId.QUAKE_PREFECTURE
    command_name: ClassVar[str | None] = "v0"
    allowed_schemes: ClassVar[frozenset[Scheme]] = frozenset(
        {Scheme.BASE32768, Scheme.BASE65536}
    )


class TsunamiForecastData(BaseRecord):
    """Tsunami forecast report, grouping region codes by forecast level.

    Type id 1 cannot be carried by base65536 (its first character would not be
    detected as base65536), so this shape is restricted to base32768.
    """

    time: int = UInt64Field(1, description="Unix seconds")
    epicenter: Optional[Epicenter] = MessageField(2)
    forecast: CodeArray = CodeArrayField(3)
    advisory: CodeArray = CodeArrayField(4)
    warning: CodeArray = CodeArrayField(5)
    major_warning: CodeArray = CodeArrayField(6)

    type_id: ClassVar[int | None] = TypeId.TSUNAMI_FORECAST
    command_name: ClassVar[str | None] = "tsunami"
    allowed_schemes: ClassVar[frozenset[Scheme]] = frozenset({Scheme.BASE32768})


Record = Union[QuakePrefectureData, TsunamiForecastData]

# Global registry: type id -> record class
RECORD_TYPES: dict[int, type[BaseRecord]] = {}


def register_record(record_class: type[BaseRecord]) -> None:
    """Register a record class for decode by type id.

    Args:
        record_class: Record class with a type_id class variable

    Raises:
        ValueError: If record_class has no type_id, or the id is already taken
    """
    type_id = record_class.type_id
    if type_id is None:
        raise ValueError(
            f"{record_class.__name__} has no type_id attribute. Cannot register for decode."
        )

    if not 0 <= type_id <= 255:
        raise ValueError(f"type_id must be 0-255, got {type_id}")

    existing = RECORD_TYPES.get(type_id)
    if existing is not None and existing is not record_class:
        raise ValueError(
            f"Type id {type_id} already registered to {existing.__name__}. "
            f"Cannot register {record_class.__name__} with the same id."
        )

    RECORD_TYPES[type_id] = record_class


def record_class_for(type_id: int) -> type[BaseRecord]:
    """Look up the record class for an envelope type id.

    Raises:
        UnsupportedTypeId: If no record shape is registered for type_id
    """
    record_class = RECORD_TYPES.get(type_id)
    if record_class is None:
        raise UnsupportedTypeId(type_id)
    return record_class


register_record(QuakePrefectureData)
register_record(TsunamiForecastData)
