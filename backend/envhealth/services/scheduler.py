"""
On-demand retrieval scheduler.

A resource is fetched only when a consumer subscribes to it. Results are
memoized per resource key for a TTL, concurrent subscribers share a single
in-flight fetch, and entries can be dropped explicitly with ``invalidate``.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from time import monotonic
from typing import Any, Awaitable, Callable, Iterable


log = logging.getLogger(__name__)

Loader = Callable[[], Awaitable[Any]]


@dataclass
class ResourceScheduler:
    ttl_seconds: int = 600
    _loaders: dict[str, Loader] = field(default_factory=dict, init=False)
    _cache: dict[str, tuple[float, Any]] = field(default_factory=dict, init=False)
    _inflight: dict[str, asyncio.Task] = field(default_factory=dict, init=False)

    def register(self, key: str, loader: Loader) -> None:
        self._loaders[key] = loader
        self.invalidate(key)

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(self._loaders)

    def is_cached(self, key: str) -> bool:
        return self._cache_get(key) is not None

    async def subscribe(self, key: str) -> Any:
        loader = self._loaders.get(key)
        if loader is None:
            raise KeyError(f"No loader registered for resource '{key}'.")

        cached = self._cache_get(key)
        if cached is not None:
            return cached

        task = self._inflight.get(key)
        if task is None:
            log.debug("Fetching resource %s", key)
            task = asyncio.ensure_future(self._load(key, loader))
            self._inflight[key] = task
        return await asyncio.shield(task)

    async def gather(self, keys: Iterable[str]) -> dict[str, Any]:
        """Fetches ``keys`` concurrently; a failed resource maps to ``None``."""
        ordered = list(dict.fromkeys(keys))
        results = await asyncio.gather(*(self.subscribe(key) for key in ordered), return_exceptions=True)
        resolved: dict[str, Any] = {}
        for key, result in zip(ordered, results):
            if isinstance(result, Exception):
                log.warning("Resource %s unavailable: %s", key, result)
                resolved[key] = None
                continue
            resolved[key] = result
        return resolved

    def invalidate(self, key: str | None = None) -> None:
        if key is None:
            self._cache.clear()
            return
        self._cache.pop(key, None)

    async def _load(self, key: str, loader: Loader) -> Any:
        try:
            payload = await loader()
            if payload is not None:
                self._cache_set(key, payload)
            return payload
        finally:
            self._inflight.pop(key, None)

    def _cache_get(self, key: str) -> Any | None:
        entry = self._cache.get(key)
        if entry is None:
            return None
        expires_at, payload = entry
        if monotonic() >= expires_at:
            self._cache.pop(key, None)
            return None
        return payload

    def _cache_set(self, key: str, payload: Any) -> None:
        self._cache[key] = (monotonic() + max(1, self.ttl_seconds), payload)
