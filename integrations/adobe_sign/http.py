"""Shared HTTP helper for the Adobe Sign REST API.

Uses `httpx.AsyncClient` with:
* Base URL from settings (see `integrations.adobe_sign`)
* Automatic bearer-token injection via `TokenProvider`
* Prometheus counter + histogram (labels: system, endpoint, method, status)

No retries: a non-2xx response raises `httpx.HTTPStatusError` straight away.
Tests patch the transport with `httpx.MockTransport`.
"""
from __future__ import annotations

import time
from typing import Optional

import httpx

from signed_records.metrics import http_latency_seconds, http_requests_total

from . import BASE_URL
from .auth import TokenProvider

__all__ = ["AdobeSignHTTP"]

_SYSTEM = "adobe_sign"


class AdobeSignHTTP:
    def __init__(
        self,
        token_provider: TokenProvider,
        *,
        base_url: str = BASE_URL,
        timeout: float = 30,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._token_provider = token_provider
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:  # noqa: D401 – imperative
        headers_template = kwargs.pop("headers", {})
        token = await self._token_provider.token()
        headers = {**headers_template, "Authorization": f"Bearer {token}"}
        endpoint_label = url.split("?", 1)[0]

        start = time.perf_counter()
        resp = await self._client.request(method, url, headers=headers, **kwargs)
        http_latency_seconds.labels(_SYSTEM, endpoint_label).observe(time.perf_counter() - start)
        http_requests_total.labels(_SYSTEM, endpoint_label, method.lower(), resp.status_code).inc()
        resp.raise_for_status()
        return resp

    async def get(self, url: str, **kw) -> httpx.Response:  # noqa: D401 – imperative
        return await self._request("GET", url, **kw)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()
