from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any

import httpx

from envhealth.config import Settings
from envhealth.services.scheduler import ResourceScheduler


RETRYABLE_HTTP_STATUS = {408, 429, 500, 502, 503, 504}

CURRENT_CONDITIONS = "/api/weather/air-quality"
AQI_FORECAST = "/api/weather/air-quality/forecast"
HEALTH_RECOMMENDATIONS = "/api/health/recommendations"
POLLEN_FORECAST = "/api/weather/pollen"

# Resources each dashboard view needs; nothing else is fetched for that view.
VIEW_RESOURCES: dict[str, tuple[str, ...]] = {
    "air-quality": (CURRENT_CONDITIONS, AQI_FORECAST),
    "recommendations": (CURRENT_CONDITIONS, HEALTH_RECOMMENDATIONS),
    "pollen": (POLLEN_FORECAST,),
}


@dataclass
class UpstreamClient:
    settings: Settings
    transport: httpx.AsyncBaseTransport | None = None
    _client: httpx.AsyncClient = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._client = httpx.AsyncClient(
            base_url=self.settings.upstream_base_url,
            timeout=self.settings.request_timeout_seconds,
            transport=self.transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def fetch_current_conditions(self) -> dict:
        return await self._get_json(CURRENT_CONDITIONS)

    async def fetch_aqi_forecast(self) -> dict:
        return await self._get_json(AQI_FORECAST)

    async def fetch_recommendations(self) -> dict:
        return await self._get_json(HEALTH_RECOMMENDATIONS)

    async def fetch_pollen(self) -> dict:
        return await self._get_json(POLLEN_FORECAST)

    def build_scheduler(self) -> ResourceScheduler:
        scheduler = ResourceScheduler(ttl_seconds=self.settings.api_cache_ttl_seconds)
        scheduler.register(CURRENT_CONDITIONS, self.fetch_current_conditions)
        scheduler.register(AQI_FORECAST, self.fetch_aqi_forecast)
        scheduler.register(HEALTH_RECOMMENDATIONS, self.fetch_recommendations)
        scheduler.register(POLLEN_FORECAST, self.fetch_pollen)
        return scheduler

    async def _get_json(self, path: str) -> Any:
        attempts = self.settings.api_retry_attempts
        for attempt in range(attempts + 1):
            try:
                response = await self._client.get(path)
                response.raise_for_status()
                return response.json()
            except httpx.HTTPStatusError as exc:
                status_code = exc.response.status_code
                if status_code not in RETRYABLE_HTTP_STATUS or attempt >= attempts:
                    raise
            except httpx.RequestError:
                if attempt >= attempts:
                    raise
            await asyncio.sleep(0.35 * (attempt + 1))

        raise RuntimeError("Failed to fetch upstream JSON payload.")
