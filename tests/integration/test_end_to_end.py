"""End-to-end integration tests."""

from __future__ import annotations

from urllib.parse import quote

import pytest

from alertlink import (
    AlertlinkError,
    Epicenter,
    InvalidCodepoint,
    QuakePrefectureData,
    Scheme,
    TsunamiForecastData,
    TruncatedEncoding,
    UnsupportedSchemeForPayload,
    decode_text,
    decode_token,
    encode_record,
    encode_text,
    hmac_sha1,
    serialize,
    unframe_envelope,
)

PREFIX = "https://example.org/a/"


class TestEndToEndWorkflow:
    """Test complete end-to-end workflows."""

    def test_quake_report_workflow(self, quake_body: bytes) -> None:
        """Test an earthquake report from degrees to URL and back."""
        # 1. Create record
        record = QuakePrefectureData(
            time=1700000000,
            epicenter=Epicenter.from_degrees(35.6, 139.7),
            one=[130000],
            seven=[],
        )

        # 2. Encode as a shareable URL
        url = encode_record(record, Scheme.BASE32768, prefix=PREFIX)
        token = url[len(PREFIX) :]
        assert len(token) == 23  # 43 envelope bytes at 15 bits per character

        # 3. Decode (URL or bare token)
        decoded = decode_token(url)
        assert decoded.record == record
        assert decoded.record.seven == ()  # type: ignore[attr-defined]
        assert decoded.body == quake_body
        assert decoded.tag == hmac_sha1("", quake_body)
        assert decode_token(token).record == record

        # 4. Verify and reconstruct
        assert decoded.verify("")
        assert decoded.command() == (
            "alertlink encode base32768 v0 --time 2023-11-14T22:13:20Z "
            "--epicenter 35.6,139.7 --one 130000"
        )

    def test_percent_encoded_url(self, quake_record: QuakePrefectureData) -> None:
        """Test a URL whose token was percent-encoded by a browser."""
        for scheme in Scheme:
            token = encode_record(quake_record, scheme)
            decoded = decode_token(PREFIX + quote(token))
            assert decoded.record == quake_record
            assert decoded.scheme is scheme

    def test_base65536_is_shorter(self, quake_record: QuakePrefectureData) -> None:
        """Test the two schemes produce different lengths for the same record."""
        assert len(encode_record(quake_record, Scheme.BASE65536)) == 21
        assert len(encode_record(quake_record, Scheme.BASE32768)) == 23

    def test_tsunami_workflow(self, tsunami_record: TsunamiForecastData) -> None:
        """Test a tsunami forecast through base32768 with a shared key."""
        url = encode_record(tsunami_record, Scheme.BASE32768, key="shared", prefix=PREFIX)
        decoded = decode_token(url, key="shared", verify=True)
        assert decoded.record == tsunami_record
        assert decoded.type_id == 1
        assert decoded.verified is True
        assert decoded.body == serialize(tsunami_record)

    def test_tsunami_base65536_rejected(self, tsunami_record: TsunamiForecastData) -> None:
        """Test the tsunami/base65536 pairing fails before any output."""
        with pytest.raises(UnsupportedSchemeForPayload):
            encode_record(tsunami_record, Scheme.BASE65536, prefix=PREFIX)


class TestCorruption:
    """Test corrupted strings are rejected or detectable."""

    def test_first_character_bit_flip(self, quake_record: QuakePrefectureData) -> None:
        """Test flipping the low bit of the first base32768 character.

        The first character carries the type id and seven marker bits. Flipping its
        lowest bit alters the marker, so the envelope bytes change while the body and
        tag survive; the tag does not cover the marker.
        """
        token = encode_record(quake_record, Scheme.BASE32768)
        corrupted = chr(ord(token[0]) ^ 1) + token[1:]

        try:
            _, corrupted_bytes = decode_text(corrupted)
        except AlertlinkError as e:
            assert isinstance(e, InvalidCodepoint)
            return

        _, original_bytes = decode_text(token)
        assert corrupted_bytes != original_bytes

        envelope = unframe_envelope(corrupted_bytes, Scheme.BASE32768)
        assert envelope.marker != 0xFF
        assert envelope.body == serialize(quake_record)
        assert decode_token(corrupted).verify("")

    def test_body_character_flip_detected(self, quake_record: QuakePrefectureData) -> None:
        """Test a flipped body character is caught by verification or parsing."""
        token = encode_record(quake_record, Scheme.BASE32768, key="k")
        index = len(token) - 3
        corrupted = token[:index] + chr(ord(token[index]) ^ 1) + token[index + 1 :]

        with pytest.raises(AlertlinkError):
            decode_token(corrupted, key="k", verify=True)

    def test_truncated_token(self, quake_record: QuakePrefectureData) -> None:
        """Test a token cut short is rejected."""
        token = encode_record(quake_record, Scheme.BASE32768)
        with pytest.raises(AlertlinkError):
            decode_token(token[:5])

    def test_base32768_bad_padding(self) -> None:
        """Test a base32768 string whose final character leaves non-padding bits."""
        with pytest.raises(TruncatedEncoding):
            decode_token(encode_text(b"\x00\xff" + bytes(20), Scheme.BASE32768)[:-1] + "\u04a0")
