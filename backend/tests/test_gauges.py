import pytest

from envhealth.schemas import AirQualityReading
from envhealth.services.gauges import POLLUTANT_CEILINGS, normalize, pollutant_gauges, uv_gauge_percent


def test_normalize_scales_against_ceiling() -> None:
    assert normalize(0, 50) == 0.0
    assert normalize(40, 50) == 80.0
    assert normalize(None, 100) == 0.0


def test_normalize_saturates_at_ceiling() -> None:
    assert normalize(50, 50) == 100.0
    assert normalize(500, 50) == 100.0


def test_normalize_is_monotonic() -> None:
    values = [0, 5, 10, 49.9, 50, 75, 200]
    results = [normalize(value, 50) for value in values]
    assert results == sorted(results)


def test_normalize_floors_negative_values() -> None:
    assert normalize(-10, 50) == 0.0


def test_normalize_rejects_non_positive_ceiling() -> None:
    with pytest.raises(ValueError):
        normalize(10, 0)


def test_uv_gauge_is_clamped() -> None:
    assert uv_gauge_percent(5.5) == 50.0
    assert uv_gauge_percent(14) == 100.0
    assert uv_gauge_percent(None) == 0.0


def test_pollutant_gauges_keep_missing_values_unknown() -> None:
    gauges = pollutant_gauges(AirQualityReading(aqi=80, pm2_5=40.0, no2=250.0))

    assert [gauge.key for gauge in gauges] == list(POLLUTANT_CEILINGS)
    by_key = {gauge.key: gauge for gauge in gauges}
    assert by_key["pm2_5"].percent == 80.0
    assert by_key["pm2_5"].display == "40.0"
    assert by_key["pm10"].value is None
    assert by_key["pm10"].display == "N/A"
    assert by_key["pm10"].percent == 0.0
    assert by_key["no2"].percent == 100.0
    assert by_key["o3"].label == "O₃"
