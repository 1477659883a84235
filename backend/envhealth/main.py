from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ValidationError

from envhealth.config import configure_logging, get_settings
from envhealth.schemas import (
    AdvisoryRequest,
    CurrentConditionsPayload,
    DailyPollenPayload,
    HourlyForecastPayload,
    RecommendationsPayload,
    UserProfilePayload,
)
from envhealth.services.dashboard import build_health_dashboard
from envhealth.services.upstream import (
    AQI_FORECAST,
    CURRENT_CONDITIONS,
    HEALTH_RECOMMENDATIONS,
    POLLEN_FORECAST,
    VIEW_RESOURCES,
    UpstreamClient,
)


log = logging.getLogger(__name__)

settings = get_settings()
configure_logging(settings.log_level)
upstream_client = UpstreamClient(settings=settings)
scheduler = upstream_client.build_scheduler()

RESOURCE_MODELS: dict[str, type[BaseModel]] = {
    CURRENT_CONDITIONS: CurrentConditionsPayload,
    AQI_FORECAST: HourlyForecastPayload,
    HEALTH_RECOMMENDATIONS: RecommendationsPayload,
    POLLEN_FORECAST: DailyPollenPayload,
}

app = FastAPI(title=settings.app_name, version=settings.app_version)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.frontend_origins),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("shutdown")
async def shutdown_event() -> None:
    await upstream_client.close()


@app.get("/api/health")
async def health() -> dict:
    return {
        "status": "ok",
        "service": settings.app_name,
        "timestamp_utc": datetime.now(tz=timezone.utc).isoformat(),
    }


@app.post("/api/advisories")
async def advisories(payload: AdvisoryRequest) -> dict:
    return build_health_dashboard(
        current=payload.current,
        forecast=payload.forecast,
        recommendations=payload.recommendations,
        pollen=payload.pollen,
        profile=payload.profile,
    )


@app.post("/api/dashboard/{view}")
async def dashboard(view: str, profile: UserProfilePayload | None = None) -> dict:
    normalized_view = view.strip().lower()
    resources = VIEW_RESOURCES.get(normalized_view)
    if resources is None:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported dashboard view '{view}'. Use one of: {sorted(VIEW_RESOURCES)}.",
        )

    fetched = await scheduler.gather(resources)
    validated = {key: _validate_resource(key, payload) for key, payload in fetched.items()}
    if all(payload is None for payload in validated.values()):
        raise HTTPException(status_code=502, detail=f"No upstream data available for view '{normalized_view}'.")

    return build_health_dashboard(
        view=normalized_view,
        current=validated.get(CURRENT_CONDITIONS),
        forecast=validated.get(AQI_FORECAST),
        recommendations=validated.get(HEALTH_RECOMMENDATIONS),
        pollen=validated.get(POLLEN_FORECAST),
        profile=profile,
    )


@app.post("/api/cache/invalidate")
async def invalidate_cache(resource: str | None = Query(default=None, max_length=120)) -> dict:
    if resource is not None and resource not in scheduler.keys:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown resource '{resource}'. Use one of: {sorted(scheduler.keys)}.",
        )
    scheduler.invalidate(resource)
    return {"invalidated": [resource] if resource else sorted(scheduler.keys)}


def _validate_resource(key: str, payload: object) -> BaseModel | None:
    if payload is None:
        return None
    try:
        return RESOURCE_MODELS[key].model_validate(payload)
    except ValidationError as exc:
        # A malformed body must not stay memoized until the TTL runs out.
        log.warning("Resource %s returned a malformed payload: %s", key, exc)
        scheduler.invalidate(key)
        return None
