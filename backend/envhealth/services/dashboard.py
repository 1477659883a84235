from __future__ import annotations

from typing import TypeVar

from pydantic import BaseModel

from envhealth.schemas import (
    CurrentConditionsPayload,
    DailyPollenPayload,
    HourlyForecastPayload,
    RecommendationsPayload,
    UserProfilePayload,
)
from envhealth.services.classifier import aqi_gauge_percent, classify, describe_general_population, display_value
from envhealth.services.forecast import format_daily, format_hourly
from envhealth.services.gauges import pollutant_gauges
from envhealth.services.recommender import recommend


ModelT = TypeVar("ModelT", bound=BaseModel)


def build_health_dashboard(
    *,
    view: str | None = None,
    current: CurrentConditionsPayload | dict | None = None,
    forecast: HourlyForecastPayload | dict | None = None,
    recommendations: RecommendationsPayload | dict | None = None,
    pollen: DailyPollenPayload | dict | None = None,
    profile: UserProfilePayload | dict | None = None,
) -> dict:
    """Composes every engine output for one dashboard render.

    Any payload may be ``None`` while it is still loading or unavailable; the
    matching section is then rendered from placeholders instead of failing.
    """
    current_payload = _coerce(CurrentConditionsPayload, current)
    recommendations_payload = _coerce(RecommendationsPayload, recommendations)
    health_profile = _coerce(UserProfilePayload, profile).to_profile()

    reading = current_payload.to_reading()
    category = classify(reading.aqi)
    advisories = recommend(
        category,
        reading.aqi,
        recommendations_payload.to_uv(),
        recommendations_payload.to_temperature(),
        health_profile,
    )

    return {
        "view": view,
        "air_quality": {
            "available": current is not None,
            "aqi": reading.aqi,
            "aqi_display": display_value(reading.aqi),
            "category": category.model_dump(),
            "gauge_percent": aqi_gauge_percent(reading.aqi),
            "general_population": describe_general_population(reading.aqi),
            "pollutants": [gauge.model_dump() for gauge in pollutant_gauges(reading)],
        },
        "forecast": {
            "available": forecast is not None,
            "hourly": [point.model_dump() for point in format_hourly(forecast)],
        },
        "pollen": {
            "available": pollen is not None,
            "daily": [point.model_dump() for point in format_daily(pollen)],
        },
        "advisories": advisories.model_dump(),
        "profile": health_profile.model_dump(),
    }


def _coerce(model: type[ModelT], payload: ModelT | dict | None) -> ModelT:
    if payload is None:
        return model()
    if isinstance(payload, model):
        return payload
    return model.model_validate(payload)
