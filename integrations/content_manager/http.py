"""HTTP helper for the Content Manager ServiceAPI.

Same shape as the Adobe Sign helper but authenticates with HTTP basic auth
(the ServiceAPI account) and always speaks JSON.
"""
from __future__ import annotations

import time
from typing import Any, Optional

import httpx

from signed_records.metrics import http_latency_seconds, http_requests_total

from . import API_BASE_URL

__all__ = ["ContentManagerHTTP"]

_SYSTEM = "content_manager"


class ContentManagerHTTP:
    def __init__(
        self,
        *,
        username: str,
        password: str,
        base_url: str = API_BASE_URL,
        timeout: float = 30,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url,
            auth=httpx.BasicAuth(username, password),
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    async def post_json(self, url: str, payload: dict[str, Any]) -> httpx.Response:
        start = time.perf_counter()
        resp = await self._client.post(url, json=payload)
        http_latency_seconds.labels(_SYSTEM, url).observe(time.perf_counter() - start)
        http_requests_total.labels(_SYSTEM, url, "post", resp.status_code).inc()
        resp.raise_for_status()
        return resp

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()
