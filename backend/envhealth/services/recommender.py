from __future__ import annotations

from envhealth.schemas import (
    AdvisoryBlock,
    AdvisoryResult,
    Alert,
    AQICategory,
    HealthProfile,
    TemperatureReading,
    UVReading,
)
from envhealth.services.classifier import PLACEHOLDER, display_value
from envhealth.services.gauges import uv_gauge_percent


ALLERGY_AQI_THRESHOLD = 50
HIGH_UV_SENSITIVITY = 4

RESPIRATORY_PRECAUTIONS = (
    "Limit outdoor activities, especially during peak traffic hours",
    "Carry your rescue medications when going out",
    "Wear a proper mask outdoors (N95 recommended)",
    "Keep windows closed during poor air quality periods",
    "Use air purifiers indoors if available",
)
MINIMAL_RESPIRATORY_RISK = (
    "Current air quality presents minimal respiratory risks for people without pre-existing "
    "conditions. General precautions are recommended during high pollution days."
)

UV_PROTECTION_TAIL = (
    "Wear a hat and sunglasses when outdoors",
    "Seek shade during peak sun hours (10am-4pm)",
    "Consider UV-protective clothing",
)
HIGH_UV_NOTICE = "With your high UV sensitivity, extra protection is needed."
STANDARD_UV_NOTICE = "Recommended sun protection measures:"

HOT_HEADLINE = "High temperature alert - take precautions:"
COLD_HEADLINE = "Cooler temperature - stay warm:"
COMFORTABLE_HEADLINE = "Comfortable temperature range today:"


def recommend(
    category: AQICategory,
    aqi_value: float | None,
    uv: UVReading | None,
    temperature: TemperatureReading | None,
    profile: HealthProfile | None,
) -> AdvisoryResult:
    """Builds the personalized advisory set for one set of readings.

    Missing readings and a missing profile never raise: they fall back to the
    "N/A" placeholder, an empty bullet list, or the least restrictive advice.
    """
    profile = profile or HealthProfile()
    uv = uv or UVReading()
    temperature = temperature or TemperatureReading()

    return AdvisoryResult(
        respiratory=_respiratory_block(category, aqi_value, profile),
        uv=_uv_block(uv, profile),
        temperature=_temperature_block(temperature),
        alerts=_build_alerts(category, aqi_value, profile),
    )


def _respiratory_block(category: AQICategory, aqi_value: float | None, profile: HealthProfile) -> AdvisoryBlock:
    if not profile.has_respiratory_conditions:
        return AdvisoryBlock(headline=MINIMAL_RESPIRATORY_RISK, badge=category.label)

    return AdvisoryBlock(
        headline=f"With your respiratory conditions, current AQI of {display_value(aqi_value)} means you should:",
        bullets=list(RESPIRATORY_PRECAUTIONS),
        badge=category.label,
    )


def _uv_block(uv: UVReading, profile: HealthProfile) -> AdvisoryBlock:
    high_sensitivity = profile.uv_sensitivity >= HIGH_UV_SENSITIVITY
    spf = "50+" if high_sensitivity else "30+"
    return AdvisoryBlock(
        headline=f"{display_value(uv.index)} - {uv.category or PLACEHOLDER}",
        notice=HIGH_UV_NOTICE if high_sensitivity else STANDARD_UV_NOTICE,
        bullets=[f"Use SPF {spf} sunscreen", *UV_PROTECTION_TAIL],
        gauge=uv_gauge_percent(uv.index),
    )


def _temperature_block(temperature: TemperatureReading) -> AdvisoryBlock:
    if temperature.is_hot:
        headline = HOT_HEADLINE
    elif temperature.is_cold:
        headline = COLD_HEADLINE
    else:
        headline = COMFORTABLE_HEADLINE

    return AdvisoryBlock(
        headline=headline,
        bullets=list(temperature.recommendations),
        badge=f"{display_value(temperature.current)}°C",
    )


def _build_alerts(category: AQICategory, aqi_value: float | None, profile: HealthProfile) -> list[Alert]:
    alerts: list[Alert] = []
    if profile.has_respiratory_conditions:
        alerts.append(
            Alert(
                kind="respiratory",
                title="Respiratory Condition Alert",
                message=(
                    "With your respiratory conditions, current air quality may affect your breathing. "
                    "Consider limiting outdoor activities and using an air purifier."
                ),
                severity="warning" if category.tier >= 2 else "attention",
            )
        )
    if profile.has_allergies and (aqi_value or 0) > ALLERGY_AQI_THRESHOLD:
        alerts.append(
            Alert(
                kind="allergy",
                title="Allergy Sensitivity",
                message=(
                    "Today's air quality may trigger your allergies. "
                    "Keep medications handy and consider wearing a mask outdoors."
                ),
                severity="attention",
            )
        )
    return alerts
