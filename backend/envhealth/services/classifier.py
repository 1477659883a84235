"""
Classifies a numeric air-quality index into one of six severity tiers.

Breakpoints follow the US EPA AQI bands. The styling tokens attached to each
tier are passed through to the renderer untouched.
"""

from __future__ import annotations

import logging

from envhealth.schemas import AQICategory


log = logging.getLogger(__name__)

PLACEHOLDER = "N/A"
AQI_GAUGE_CEILING = 300

# (upper bound inclusive, category); the last tier has no upper bound.
AQI_TIERS: tuple[tuple[float | None, AQICategory], ...] = (
    (50, AQICategory(label="Good", tier=0, color="bg-green-100 text-green-800", progress_color="bg-green-500")),
    (100, AQICategory(label="Moderate", tier=1, color="bg-yellow-100 text-yellow-800", progress_color="bg-yellow-500")),
    (
        150,
        AQICategory(
            label="Unhealthy for Sensitive Groups",
            tier=2,
            color="bg-orange-100 text-orange-800",
            progress_color="bg-orange-500",
        ),
    ),
    (200, AQICategory(label="Unhealthy", tier=3, color="bg-red-100 text-red-800", progress_color="bg-red-500")),
    (
        300,
        AQICategory(label="Very Unhealthy", tier=4, color="bg-purple-100 text-purple-800", progress_color="bg-purple-500"),
    ),
    (None, AQICategory(label="Hazardous", tier=5, color="bg-rose-100 text-rose-800", progress_color="bg-rose-800")),
)

GENERAL_POPULATION_NARRATIVES: tuple[tuple[float | None, str], ...] = (
    (50, "Air quality is considered satisfactory, and air pollution poses little or no risk."),
    (
        100,
        "Air quality is acceptable; however, there may be a moderate health concern "
        "for a very small number of people.",
    ),
    (
        150,
        "Members of sensitive groups may experience health effects. "
        "The general public is not likely to be affected.",
    ),
    (
        None,
        "Everyone may begin to experience health effects; members of sensitive groups "
        "may experience more serious health effects.",
    ),
)


def classify(aqi: float | None) -> AQICategory:
    """Returns the tier for ``aqi``; a missing value is classified as Good.

    Callers that need to show "N/A" for missing data must check for ``None``
    themselves, the category alone does not distinguish the two cases.
    """
    value = _coerce(aqi)
    if value < 0:
        log.debug("Negative AQI %s classified as Good.", value)
    for upper, category in AQI_TIERS:
        if upper is None or value <= upper:
            return category
    return AQI_TIERS[-1][1]


def describe_general_population(aqi: float | None) -> str:
    value = _coerce(aqi)
    for upper, text in GENERAL_POPULATION_NARRATIVES:
        if upper is None or value <= upper:
            return text
    return GENERAL_POPULATION_NARRATIVES[-1][1]


def aqi_gauge_percent(aqi: float | None) -> float:
    value = _coerce(aqi)
    return max(0.0, min(value / AQI_GAUGE_CEILING * 100, 100.0))


def display_value(value: float | int | None, digits: int | None = None) -> str:
    if value is None:
        return PLACEHOLDER
    if digits is None:
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)
    return f"{value:.{digits}f}"


def _coerce(aqi: float | None) -> float:
    return 0.0 if aqi is None else float(aqi)
