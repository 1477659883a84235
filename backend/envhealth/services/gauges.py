from __future__ import annotations

from envhealth.schemas import AirQualityReading, PollutantGauge
from envhealth.services.classifier import display_value


# Reference ceilings in μg/m³; a reading at or above the ceiling fills the gauge.
POLLUTANT_CEILINGS: dict[str, float] = {
    "pm2_5": 50.0,
    "pm10": 100.0,
    "no2": 200.0,
    "o3": 180.0,
}

POLLUTANT_LABELS: dict[str, str] = {
    "pm2_5": "PM2.5",
    "pm10": "PM10",
    "no2": "NO₂",
    "o3": "O₃",
}

UV_INDEX_CEILING = 11.0


def normalize(value: float | None, ceiling: float) -> float:
    """Maps ``value`` onto a percentage in [0, 100] relative to ``ceiling``."""
    if ceiling <= 0:
        raise ValueError(f"Gauge ceiling must be positive, got {ceiling}.")
    if value is None:
        return 0.0
    return max(0.0, min(value / ceiling * 100, 100.0))


def uv_gauge_percent(index: float | None) -> float:
    return normalize(index, UV_INDEX_CEILING)


def pollutant_gauges(reading: AirQualityReading) -> list[PollutantGauge]:
    gauges: list[PollutantGauge] = []
    for key, ceiling in POLLUTANT_CEILINGS.items():
        value = getattr(reading, key)
        gauges.append(
            PollutantGauge(
                key=key,
                label=POLLUTANT_LABELS[key],
                value=value,
                display=display_value(value, digits=1),
                percent=normalize(value, ceiling),
            )
        )
    return gauges
