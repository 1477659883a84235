from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    app_name: str = "Environmental Health Advisory API"
    app_version: str = "1.0.0"
    upstream_base_url: str = "http://localhost:5000"
    api_cache_ttl_seconds: int = 600
    api_retry_attempts: int = 2
    request_timeout_seconds: float = 12.0
    log_level: str = "INFO"
    frontend_origins: tuple[str, ...] = ("http://localhost:5173", "http://127.0.0.1:5173")


def get_settings() -> Settings:
    origins_raw = os.getenv("FRONTEND_ORIGINS", "").strip()
    app_name_raw = os.getenv("APP_NAME", "").strip()
    upstream_raw = os.getenv("UPSTREAM_BASE_URL", "").strip()
    cache_ttl_raw = os.getenv("API_CACHE_TTL_SECONDS", "").strip()
    retry_attempts_raw = os.getenv("API_RETRY_ATTEMPTS", "").strip()
    timeout_raw = os.getenv("REQUEST_TIMEOUT_SECONDS", "").strip()
    log_level_raw = os.getenv("LOG_LEVEL", "").strip().upper()

    parsed_origins = tuple(item.strip() for item in origins_raw.split(",") if item.strip())

    try:
        cache_ttl_seconds = int(cache_ttl_raw) if cache_ttl_raw else 600
    except ValueError:
        cache_ttl_seconds = 600

    try:
        retry_attempts = int(retry_attempts_raw) if retry_attempts_raw else 2
    except ValueError:
        retry_attempts = 2

    try:
        request_timeout_seconds = float(timeout_raw) if timeout_raw else 12.0
    except ValueError:
        request_timeout_seconds = 12.0

    if log_level_raw not in logging.getLevelNamesMapping():
        log_level_raw = Settings.log_level

    return Settings(
        app_name=app_name_raw or Settings.app_name,
        upstream_base_url=(upstream_raw or Settings.upstream_base_url).rstrip("/"),
        api_cache_ttl_seconds=max(60, cache_ttl_seconds),
        api_retry_attempts=max(0, retry_attempts),
        request_timeout_seconds=max(1.0, request_timeout_seconds),
        log_level=log_level_raw,
        frontend_origins=parsed_origins or Settings.frontend_origins,
    )


def configure_logging(level: str = "INFO") -> None:
    """Attach a single stdout handler to the root logger, replacing any existing ones."""
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s - [%(levelname)s] - %(name)s - %(message)s"))
    root_logger.addHandler(handler)
