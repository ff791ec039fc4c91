"""Tests for record models and the type id registry."""

from __future__ import annotations

from typing import ClassVar

import pytest
from pydantic import ValidationError

from alertlink import Epicenter, QuakePrefectureData, Scheme, TsunamiForecastData, TypeId
from alertlink.exceptions import UnsupportedTypeId
from alertlink.models import RECORD_TYPES, BaseRecord, UInt64Field, record_class_for, register_record


class TestEpicenter:
    """Test the fixed-point epicenter."""

    def test_from_degrees_rounds(self) -> None:
        """Test degrees are rounded to the nearest tenth."""
        assert Epicenter.from_degrees(35.6, 139.7) == Epicenter(lat_x10=356, lon_x10=1397)
        assert Epicenter.from_degrees(-0.5, 139.04) == Epicenter(lat_x10=-5, lon_x10=1390)

    def test_degrees_properties(self) -> None:
        """Test conversion back to degrees."""
        epicenter = Epicenter(lat_x10=356, lon_x10=-1397)
        assert epicenter.lat == pytest.approx(35.6)
        assert epicenter.lon == pytest.approx(-139.7)

    def test_int32_range(self) -> None:
        """Test coordinates must fit in int32."""
        with pytest.raises(ValidationError):
            Epicenter(lat_x10=2**31, lon_x10=0)


class TestRecords:
    """Test record shapes."""

    def test_lists_become_tuples(self) -> None:
        """Test code buckets accept lists and store tuples."""
        record = QuakePrefectureData(time=1, one=[1, 2])
        assert record.one == (1, 2)
        assert record.seven == ()
        assert record.epicenter is None

    def test_frozen(self) -> None:
        """Test records are immutable."""
        record = QuakePrefectureData(time=1)
        with pytest.raises(ValidationError):
            record.time = 2  # type: ignore[misc]

    def test_extra_fields_forbidden(self) -> None:
        """Test unknown keyword arguments are rejected."""
        with pytest.raises(ValidationError):
            TsunamiForecastData(time=1, one=[1])  # type: ignore[call-arg]

    @pytest.mark.parametrize("code", [-1, 2**32])
    def test_code_range(self, code: int) -> None:
        """Test codes must be uint32."""
        with pytest.raises(ValidationError):
            TsunamiForecastData(time=1, forecast=[code])

    def test_time_range(self) -> None:
        """Test time must be uint64."""
        with pytest.raises(ValidationError):
            QuakePrefectureData(time=-1)
        assert QuakePrefectureData(time=2**64 - 1).time == 2**64 - 1

    def test_class_metadata(self) -> None:
        """Test type ids, payload commands and allowed schemes."""
        assert QuakePrefectureData.type_id == TypeId.QUAKE_PREFECTURE == 0
        assert TsunamiForecastData.type_id == TypeId.TSUNAMI_FORECAST == 1
        assert QuakePrefectureData.command_name == "v0"
        assert TsunamiForecastData.command_name == "tsunami"
        assert QuakePrefectureData.allowed_schemes == {Scheme.BASE32768, Scheme.BASE65536}
        assert TsunamiForecastData.allowed_schemes == {Scheme.BASE32768}


class TestRegistry:
    """Test the type id registry."""

    def test_lookup(self) -> None:
        """Test built-in shapes are registered."""
        assert record_class_for(0) is QuakePrefectureData
        assert record_class_for(1) is TsunamiForecastData

    def test_unknown(self) -> None:
        """Test unknown ids raise UnsupportedTypeId."""
        with pytest.raises(UnsupportedTypeId):
            record_class_for(255)

    def test_reregister_same_class(self) -> None:
        """Test registering a class twice is harmless."""
        register_record(QuakePrefectureData)
        assert RECORD_TYPES[0] is QuakePrefectureData

    def test_duplicate_id(self) -> None:
        """Test a second class cannot take a registered id."""

        class Impostor(BaseRecord):
            time: int = UInt64Field(1)

            type_id: ClassVar[int | None] = 0

        with pytest.raises(ValueError, match="already registered"):
            register_record(Impostor)

    def test_missing_id(self) -> None:
        """Test classes without a type id cannot be registered."""
        with pytest.raises(ValueError, match="no type_id"):
            register_record(Epicenter)

    def test_id_out_of_range(self) -> None:
        """Test ids must fit in the envelope byte."""

        class TooLarge(BaseRecord):
            time: int = UInt64Field(1)

            type_id: ClassVar[int | None] = 256

        with pytest.raises(ValueError, match="0-255"):
            register_record(TooLarge)

    def test_register_new_shape(self) -> None:
        """Test a new shape becomes decodable once registered."""

        class Drill(BaseRecord):
            time: int = UInt64Field(1)

            type_id: ClassVar[int | None] = 7

        try:
            register_record(Drill)
            assert record_class_for(7) is Drill
        finally:
            RECORD_TYPES.pop(7, None)
