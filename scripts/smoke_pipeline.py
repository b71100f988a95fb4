from __future__ import annotations

"""Offline smoke script for the Adobe Sign -> Content Manager transfer.

Every external call is answered by ``httpx.MockTransport``; nothing leaves the
machine. Prints the stage trail and the requests the pipeline issued.
"""

import asyncio
import json

import httpx

from common.logging import configure_logging
from signed_records.config import PipelineSettings
from signed_records.pipeline import DocumentPipeline

PDF_BYTES = b"%PDF-1.4\n% smoke\n"


async def main():  # noqa: D401
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:  # noqa: D401
        seen.append(f"{request.method} {request.url.copy_with(query=None)}")
        path = request.url.path
        if path.endswith("/oauth/refresh"):
            return httpx.Response(200, json={"access_token": "smoke-token", "expires_in": 3600})
        if path.endswith("/combinedDocument"):
            return httpx.Response(200, content=PDF_BYTES)
        if path.endswith("/Record"):
            body = json.loads(request.content)
            if "Uri" in body:
                return httpx.Response(200, json={"Results": [{"Uri": body["Uri"]}]})
            return httpx.Response(201, json={"Results": [{"Uri": 42}]})
        if request.method == "PUT":
            return httpx.Response(201)
        return httpx.Response(404)

    settings = PipelineSettings(
        adobe_sign_client_id="cid",
        adobe_sign_client_secret="secret",
        adobe_sign_refresh_token="refresh",
        adobe_sign_base_url="https://sign.mock",
        content_manager_username="svc",
        content_manager_password="pw",
        content_manager_api_base_url="https://cm.mock/ServiceAPI",
        content_manager_webdav_url="https://cm.mock/Uploads",
    )
    async with DocumentPipeline(settings, transport=httpx.MockTransport(handler)) as pipeline:
        outcome = await pipeline.run("AGR-SMOKE")

    for stage in outcome.stages:
        print(f"{stage.stage.value:<22} {'ok' if stage.ok else 'FAILED'}")
    for line in seen:
        print(line)
    print(outcome.summary())


if __name__ == "__main__":
    configure_logging("text")
    asyncio.run(main())
