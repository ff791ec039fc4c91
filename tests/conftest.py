"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from alertlink import Epicenter, QuakePrefectureData, TsunamiForecastData


@pytest.fixture
def quake_record() -> QuakePrefectureData:
    """Sample earthquake report with an epicenter and one intensity bucket."""
    return QuakePrefectureData(
        time=1700000000,
        epicenter=Epicenter(lat_x10=356, lon_x10=1397),
        one=[130000],
        seven=[],
    )


@pytest.fixture
def quake_body() -> bytes:
    """Serialized body of quake_record."""
    return bytes.fromhex(
        "0880e2cfaa06"  # time = 1700000000
        "120608e40210f50a"  # epicenter { lat_x10 = 356, lon_x10 = 1397 }
        "1a050a03d0f707"  # one { codes = [130000] }
    )


@pytest.fixture
def tsunami_record() -> TsunamiForecastData:
    """Sample tsunami forecast with two buckets."""
    return TsunamiForecastData(time=1700000000, forecast=[10, 20], major_warning=[30])


@pytest.fixture
def sample_tag() -> bytes:
    """Arbitrary 20-byte tag for framing tests."""
    return bytes(range(20))


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove ALERTLINK_* overrides so the CLI runs with defaults."""
    for name in ("ALERTLINK_LOG_LEVEL", "ALERTLINK_LOG_FORMAT", "ALERTLINK_HMAC_KEY", "ALERTLINK_PROGRAM"):
        monkeypatch.delenv(name, raising=False)
