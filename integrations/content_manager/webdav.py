"""Minimal WebDAV writer for the Content Manager upload folder.

The ServiceAPI can only attach files that already sit in its configured
upload directory, which is exposed over WebDAV. Writing a file is a plain
``PUT`` of the raw bytes to the target path.
"""
from __future__ import annotations

import time
from typing import Optional

import httpx

from signed_records.metrics import http_latency_seconds, http_requests_total

from . import WEBDAV_URL

__all__ = ["WebDAVClient"]

_SYSTEM = "content_manager_webdav"


class WebDAVClient:
    def __init__(
        self,
        *,
        username: str,
        password: str,
        base_url: str = WEBDAV_URL,
        timeout: float = 30,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        # keep the base path: "/Uploads" + "/x.pdf" must not collapse to "/x.pdf"
        self._base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            auth=httpx.BasicAuth(username, password),
            timeout=timeout,
            transport=transport,
        )

    async def put_file_contents(
        self, path: str, data: bytes, *, content_type: str = "application/octet-stream"
    ) -> httpx.Response:
        path = path if path.startswith("/") else f"/{path}"
        start = time.perf_counter()
        resp = await self._client.put(
            f"{self._base_url}{path}",
            content=data,
            headers={"Content-Type": content_type},
        )
        http_latency_seconds.labels(_SYSTEM, "put").observe(time.perf_counter() - start)
        http_requests_total.labels(_SYSTEM, "put", "put", resp.status_code).inc()
        resp.raise_for_status()
        return resp

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()
