"""
Reshapes columnar forecast payloads into per-time-step records for charting.

Upstream payloads carry parallel arrays keyed by variable; the chart layer wants
one record per time step. Source order is preserved and assumed chronological.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TypeVar

from pydantic import BaseModel

from envhealth.schemas import DailyPollenPayload, ForecastPoint, HourlyForecastPayload, PollenPoint


log = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

HOURLY_WINDOW = 24
WEEKDAY_ABBREVIATIONS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def format_hourly(payload: HourlyForecastPayload | dict | None) -> list[ForecastPoint]:
    forecast = _as_model(HourlyForecastPayload, payload)
    if forecast is None or forecast.hourly is None:
        return []

    hourly = forecast.hourly
    rows: list[ForecastPoint] = []
    for idx, stamp in enumerate(hourly.time[:HOURLY_WINDOW]):
        rows.append(
            ForecastPoint(
                time_label=_hour_label(stamp),
                aqi=_value_at(hourly.european_aqi, idx),
                pm2_5=_value_at(hourly.pm2_5, idx),
                pm10=_value_at(hourly.pm10, idx),
            )
        )
    return rows


def format_daily(payload: DailyPollenPayload | dict | None) -> list[PollenPoint]:
    forecast = _as_model(DailyPollenPayload, payload)
    if forecast is None or forecast.daily is None:
        return []

    daily = forecast.daily
    rows: list[PollenPoint] = []
    for idx, date_value in enumerate(daily.time):
        rows.append(
            PollenPoint(
                day_label=_weekday_label(date_value),
                grass=_value_at(daily.grass_pollen, idx),
                tree=_value_at(daily.tree_pollen, idx),
                weed=_value_at(daily.weed_pollen, idx),
            )
        )
    return rows


def _as_model(model: type[ModelT], payload: ModelT | dict | None) -> ModelT | None:
    if payload is None or isinstance(payload, model):
        return payload
    return model.model_validate(payload)


def _value_at(series: list[float | None], idx: int) -> float | None:
    if idx < len(series):
        return series[idx]
    return None


def _parse_stamp(stamp: str) -> datetime | None:
    try:
        return datetime.fromisoformat(stamp)
    except ValueError:
        log.debug("Unparseable forecast timestamp %r kept as raw label.", stamp)
        return None


def _hour_label(stamp: str) -> int | str:
    parsed = _parse_stamp(stamp)
    if parsed is None:
        return stamp
    # Offset-aware stamps are shown in the local zone; naive stamps are already local.
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.hour


def _weekday_label(date_value: str) -> str:
    parsed = _parse_stamp(date_value)
    if parsed is None:
        return date_value
    return WEEKDAY_ABBREVIATIONS[parsed.weekday()]
