"""Client for the Content Manager ``/Record`` endpoint.

Record creation and document attachment both POST to ``/Record``; the
ServiceAPI tells them apart by payload shape (a body carrying ``Uri`` updates
the existing record instead of creating one).
"""
from __future__ import annotations

import logging
from typing import Any

from signed_records.models import AttachDocumentRequest, CreateRecordRequest, RecordUri

from . import RECORD_PATH
from .http import ContentManagerHTTP

__all__ = ["RecordsAPIError", "RecordsClient"]

_LOG = logging.getLogger(__name__)


class RecordsAPIError(RuntimeError):
    """ServiceAPI answered 2xx with a body we cannot use."""


class RecordsClient:
    def __init__(self, http: ContentManagerHTTP) -> None:
        self.http = http

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.http.aclose()

    async def _post_record(self, payload: dict[str, Any]) -> dict[str, Any]:
        resp = await self.http.post_json(RECORD_PATH, payload)
        try:
            body = resp.json()
        except ValueError as exc:
            raise RecordsAPIError("Record endpoint returned a non-JSON body") from exc
        if not isinstance(body, dict):
            raise RecordsAPIError(f"Record endpoint returned {type(body).__name__}, expected an object")
        return body

    async def create_record(self, request: CreateRecordRequest) -> RecordUri:
        """Create a record and return its URI as sent by the ServiceAPI."""
        body = await self._post_record(request.model_dump(by_alias=True))
        results = body.get("Results")
        first = results[0] if isinstance(results, list) and results else None
        if not isinstance(first, dict) or "Uri" not in first:
            raise RecordsAPIError("Record creation response has no Results[0].Uri")
        uri = first["Uri"]
        _LOG.debug("Created record uri=%s title=%s", uri, request.record_title)
        return uri

    async def attach_document(self, request: AttachDocumentRequest) -> dict[str, Any]:
        """Link a file already in the upload folder to an existing record."""
        return await self._post_record(request.model_dump(by_alias=True))
