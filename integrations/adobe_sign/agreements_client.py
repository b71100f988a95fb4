"""Client for Adobe Sign agreement documents."""
from __future__ import annotations

import httpx

from . import API_PREFIX
from .http import AdobeSignHTTP

__all__ = ["AgreementsClient"]


class AgreementsClient:
    def __init__(self, http: AdobeSignHTTP) -> None:
        self.http = http

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.http.aclose()

    async def combined_document(
        self, agreement_id: str, *, attach_supporting_documents: bool = False
    ) -> bytes:
        """Download the finalised agreement as a single PDF."""
        url = f"{API_PREFIX}/agreements/{agreement_id}/combinedDocument"
        params = {"attachSupportingDocuments": str(attach_supporting_documents).lower()}
        resp: httpx.Response = await self.http.get(url, params=params)
        return bytes(resp.content)

