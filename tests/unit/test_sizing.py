"""Tests for size calculation utilities."""

from __future__ import annotations

import pytest

from alertlink import QuakePrefectureData, Scheme, TsunamiForecastData, encode_record
from alertlink.utils import body_size, encoded_length, envelope_size, text_length


class TestSizing:
    """Test size calculations at each encoding stage."""

    def test_body_size(self, quake_record: QuakePrefectureData) -> None:
        """Test body size matches the serialized bytes."""
        assert body_size(quake_record) == 21
        assert body_size(QuakePrefectureData(time=0)) == 0

    def test_envelope_size(self) -> None:
        """Test the envelope adds the scheme header."""
        record = QuakePrefectureData(time=1)
        assert envelope_size(record, Scheme.BASE65536) == 23
        assert envelope_size(record, Scheme.BASE32768) == 24

    @pytest.mark.parametrize(
        ("num_bytes", "scheme", "chars"),
        [
            (0, Scheme.BASE32768, 0),
            (1, Scheme.BASE32768, 1),
            (2, Scheme.BASE32768, 2),
            (15, Scheme.BASE32768, 8),
            (43, Scheme.BASE32768, 23),
            (0, Scheme.BASE65536, 0),
            (3, Scheme.BASE65536, 2),
            (42, Scheme.BASE65536, 21),
        ],
    )
    def test_text_length(self, num_bytes: int, scheme: Scheme, chars: int) -> None:
        """Test character counts for each scheme."""
        assert text_length(num_bytes, scheme) == chars

    def test_text_length_negative(self) -> None:
        """Test negative sizes are rejected."""
        with pytest.raises(ValueError):
            text_length(-1, Scheme.BASE32768)

    def test_encoded_length_matches_output(
        self, quake_record: QuakePrefectureData, tsunami_record: TsunamiForecastData
    ) -> None:
        """Test predicted lengths match real encodings."""
        for record, scheme in [
            (quake_record, Scheme.BASE32768),
            (quake_record, Scheme.BASE65536),
            (tsunami_record, Scheme.BASE32768),
        ]:
            assert encoded_length(record, scheme) == len(encode_record(record, scheme))
