"""Property-based tests using hypothesis."""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from alertlink import (
    Epicenter,
    QuakePrefectureData,
    Scheme,
    TsunamiForecastData,
    decode_token,
    deserialize,
    encode_record,
    encoded_length,
    serialize,
)
from alertlink.framing import frame_envelope
from alertlink.models.fields import INT32_MAX, INT32_MIN, UINT32_MAX, UINT64_MAX
from alertlink.transport import base32768, base65536, detect_scheme, encode_text
from alertlink.utils.auth import hmac_sha1, verify_hmac_sha1

codes = st.lists(st.integers(min_value=0, max_value=UINT32_MAX), max_size=4)
epicenters = st.none() | st.builds(
    Epicenter,
    lat_x10=st.integers(min_value=INT32_MIN, max_value=INT32_MAX),
    lon_x10=st.integers(min_value=INT32_MIN, max_value=INT32_MAX),
)
times = st.integers(min_value=0, max_value=UINT64_MAX)

quake_records = st.builds(
    QuakePrefectureData,
    time=times,
    epicenter=epicenters,
    one=codes,
    three=codes,
    five_plus=codes,
    seven=codes,
)
tsunami_records = st.builds(
    TsunamiForecastData,
    time=times,
    epicenter=epicenters,
    forecast=codes,
    advisory=codes,
    warning=codes,
    major_warning=codes,
)
tags = st.binary(min_size=20, max_size=20)
# HMAC zero-pads keys, so keys differing only by trailing NULs collide
keys = st.text(alphabet="abcdefghijklmnopqrstuvwxyz0123456789-_", max_size=8)


class TestTransportProperties:
    """Property-based tests for the text transports."""

    @given(data=st.binary(max_size=200))
    def test_base32768_roundtrip(self, data: bytes) -> None:
        """Test base32768 decode inverts encode."""
        assert base32768.decode(base32768.encode(data)) == data

    @given(data=st.binary(max_size=200))
    def test_base65536_roundtrip(self, data: bytes) -> None:
        """Test base65536 decode inverts encode."""
        assert base65536.decode(base65536.encode(data)) == data

    @given(tag=tags, body=st.binary(max_size=64), type_id=st.sampled_from([0, 1]))
    def test_detects_base32768_envelopes(self, tag: bytes, body: bytes, type_id: int) -> None:
        """Test base32768 envelopes are never mistaken for base65536."""
        framed = frame_envelope(type_id, Scheme.BASE32768, tag, body)
        assert detect_scheme(encode_text(framed, Scheme.BASE32768)) is Scheme.BASE32768

    @given(tag=tags, body=st.binary(max_size=64))
    def test_detects_base65536_envelopes(self, tag: bytes, body: bytes) -> None:
        """Test base65536 envelopes with type id 0 are always detected."""
        framed = frame_envelope(0, Scheme.BASE65536, tag, body)
        assert detect_scheme(encode_text(framed, Scheme.BASE65536)) is Scheme.BASE65536


class TestCodecProperties:
    """Property-based tests for the body codec."""

    @given(record=quake_records)
    def test_quake_roundtrip(self, record: QuakePrefectureData) -> None:
        """Test quake bodies deserialize to the same record."""
        assert deserialize(serialize(record), 0) == record

    @given(record=tsunami_records)
    def test_tsunami_roundtrip(self, record: TsunamiForecastData) -> None:
        """Test tsunami bodies deserialize to the same record."""
        assert deserialize(serialize(record), 1) == record

    @given(record=quake_records)
    def test_serialize_deterministic(self, record: QuakePrefectureData) -> None:
        """Test equal records serialize identically."""
        copy = QuakePrefectureData(**record.model_dump())
        assert serialize(copy) == serialize(record)


class TestPipelineProperties:
    """Property-based tests for the full pipeline."""

    @given(record=quake_records, scheme=st.sampled_from(list(Scheme)), key=keys)
    def test_quake_pipeline(self, record: QuakePrefectureData, scheme: Scheme, key: str) -> None:
        """Test quake records survive either scheme with any key."""
        token = encode_record(record, scheme, key=key)
        decoded = decode_token(token, key=key, verify=True)
        assert decoded.record == record
        assert decoded.scheme is scheme
        assert len(token) == encoded_length(record, scheme)

    @given(record=tsunami_records)
    def test_tsunami_pipeline(self, record: TsunamiForecastData) -> None:
        """Test tsunami records survive base32768."""
        assert decode_token(encode_record(record, Scheme.BASE32768)).record == record


class TestAuthProperties:
    """Property-based tests for tamper detection."""

    @given(
        body=st.binary(min_size=1, max_size=64),
        position=st.integers(min_value=0),
        bit=st.integers(min_value=0, max_value=7),
        key=st.binary(max_size=16),
    )
    def test_bit_flip_detected(self, body: bytes, position: int, bit: int, key: bytes) -> None:
        """Test flipping any body bit invalidates the tag."""
        tag = hmac_sha1(key, body)
        tampered = bytearray(body)
        tampered[position % len(body)] ^= 1 << bit
        assert verify_hmac_sha1(key, body, tag)
        assert not verify_hmac_sha1(key, bytes(tampered), tag)

    @given(body=st.binary(max_size=64), key=keys, other=keys)
    def test_key_mismatch_detected(self, body: bytes, key: str, other: str) -> None:
        """Test a tag made with one key fails under another."""
        if key != other:
            assert not verify_hmac_sha1(other, body, hmac_sha1(key, body))
