"""Single-pass transfer of a signed agreement into Content Manager.

Stages run strictly in order; each one is awaited and produces a
:class:`StageResult`. The first failure is logged and ends the run:

    START → TOKEN_REFRESHED → DOCUMENT_DOWNLOADED → RECORD_CREATED
          → DOCUMENT_UPLOADED → DOCUMENT_ATTACHED

Nothing is retried or rolled back. A record created before a failed upload
or attach stays in Content Manager, and its URI is reported on the outcome.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, List, Optional

import httpx

from integrations.adobe_sign.agreements_client import AgreementsClient
from integrations.adobe_sign.auth import RefreshTokenProvider, TokenProvider, TokenRefreshError
from integrations.adobe_sign.http import AdobeSignHTTP
from integrations.content_manager.http import ContentManagerHTTP
from integrations.content_manager.records_client import RecordsAPIError, RecordsClient
from integrations.content_manager.webdav import WebDAVClient

from .config import PipelineSettings
from .metrics import pipeline_stage_total
from .models import AttachDocumentRequest, CreateRecordRequest, RecordUri

__all__ = [
    "DOCUMENT_EXTENSION",
    "DocumentPipeline",
    "PipelineOutcome",
    "PipelineState",
    "StageResult",
    "new_upload_filename",
]

_LOG = logging.getLogger(__name__)

DOCUMENT_EXTENSION = ".pdf"

# Errors a stage turns into a failed result; anything else is a bug and propagates.
_STAGE_ERRORS = (httpx.HTTPError, TokenRefreshError, RecordsAPIError, ValueError, KeyError)


class PipelineState(str, Enum):
    START = "start"
    TOKEN_REFRESHED = "token_refreshed"
    DOCUMENT_DOWNLOADED = "document_downloaded"
    RECORD_CREATED = "record_created"
    DOCUMENT_UPLOADED = "document_uploaded"
    DOCUMENT_ATTACHED = "document_attached"
    FAILED = "failed"


@dataclass
class StageResult:
    stage: PipelineState
    ok: bool
    value: Any = None
    error: Optional[BaseException] = None


@dataclass
class PipelineOutcome:
    agreement_id: str
    state: PipelineState = PipelineState.START
    stages: List[StageResult] = field(default_factory=list)
    record_uri: Optional[RecordUri] = None
    file_path: Optional[str] = None
    failed_stage: Optional[PipelineState] = None
    error: Optional[BaseException] = None

    @property
    def succeeded(self) -> bool:
        return self.state is PipelineState.DOCUMENT_ATTACHED

    def summary(self) -> str:
        if self.succeeded:
            return f"agreement {self.agreement_id} attached to {self.record_uri} as {self.file_path}"
        orphan = f"; record {self.record_uri} left without document" if self.record_uri is not None else ""
        return f"agreement {self.agreement_id} failed at {self.failed_stage.value}: {self.error}{orphan}"


def new_upload_filename() -> str:
    """Random name for the file written to the upload folder."""
    return f"{uuid.uuid4()}{DOCUMENT_EXTENSION}"


# (stage, success message, failure message)
_MESSAGES = {
    PipelineState.TOKEN_REFRESHED: (
        "Adobe Sign access token updated.",
        "Error updating Adobe Sign access token.",
    ),
    PipelineState.DOCUMENT_DOWNLOADED: (
        "Document downloaded from Adobe Sign.",
        "Error downloading document from Adobe Sign.",
    ),
    PipelineState.RECORD_CREATED: (
        "New Content Manager record created.",
        "Error creating Content Manager record.",
    ),
    PipelineState.DOCUMENT_UPLOADED: (
        "Document transferred to WebDAV folder.",
        "Error transferring file to WebDAV folder.",
    ),
    PipelineState.DOCUMENT_ATTACHED: (
        "Document attached to the Content Manager record.",
        "Error attaching document to the Content Manager record.",
    ),
}


class DocumentPipeline:
    """Run the four transfer stages for one agreement.

    Every collaborator can be injected; whatever is not supplied is built
    from *settings*. ``transport`` is handed to every client the pipeline
    builds itself, which is how the smoke script runs fully offline.
    """

    def __init__(
        self,
        settings: PipelineSettings,
        *,
        token_provider: Optional[TokenProvider] = None,
        agreements: Optional[AgreementsClient] = None,
        records: Optional[RecordsClient] = None,
        webdav: Optional[WebDAVClient] = None,
        filename_factory: Callable[[], str] = new_upload_filename,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._settings = settings
        self._filename_factory = filename_factory
        self._owned: list = []

        self._token_provider = token_provider or RefreshTokenProvider(
            client_id=settings.adobe_sign_client_id,
            client_secret=settings.adobe_sign_client_secret,
            refresh_token=settings.adobe_sign_refresh_token,
            base_url=settings.adobe_sign_base_url,
            timeout=settings.http_timeout,
            transport=transport,
        )
        if agreements is None:
            agreements = AgreementsClient(
                AdobeSignHTTP(
                    self._token_provider,
                    base_url=settings.adobe_sign_base_url,
                    timeout=settings.http_timeout,
                    transport=transport,
                )
            )
            self._owned.append(agreements.http)
        if records is None:
            records = RecordsClient(
                ContentManagerHTTP(
                    username=settings.content_manager_username,
                    password=settings.content_manager_password,
                    base_url=settings.content_manager_api_base_url,
                    timeout=settings.http_timeout,
                    transport=transport,
                )
            )
            self._owned.append(records.http)
        if webdav is None:
            # WebDAV reuses the ServiceAPI account
            webdav = WebDAVClient(
                username=settings.content_manager_username,
                password=settings.content_manager_password,
                base_url=settings.content_manager_webdav_url,
                timeout=settings.http_timeout,
                transport=transport,
            )
            self._owned.append(webdav)
        self._agreements = agreements
        self._records = records
        self._webdav = webdav

    async def aclose(self) -> None:
        for client in self._owned:
            await client.aclose()
        self._owned = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    def record_request(self) -> CreateRecordRequest:
        return CreateRecordRequest(
            record_title=self._settings.record_title,
            record_type=self._settings.record_type,
        )

    async def _stage(
        self,
        outcome: PipelineOutcome,
        stage: PipelineState,
        call: Callable[[], Awaitable[Any]],
    ) -> StageResult:
        ok_msg, err_msg = _MESSAGES[stage]
        log_extra = {"agreement_id": outcome.agreement_id, "stage": stage.value}
        if outcome.record_uri is not None:
            log_extra["record_uri"] = outcome.record_uri
        if outcome.file_path is not None:
            log_extra["file_path"] = outcome.file_path
        try:
            value = await call()
        except _STAGE_ERRORS as exc:
            _LOG.error("%s %s", err_msg, exc, exc_info=exc, extra=log_extra)
            pipeline_stage_total.labels(stage=stage.value, result="error").inc()
            result = StageResult(stage=stage, ok=False, error=exc)
            outcome.stages.append(result)
            outcome.state = PipelineState.FAILED
            outcome.failed_stage = stage
            outcome.error = exc
            return result

        _LOG.info(ok_msg, extra=log_extra)
        pipeline_stage_total.labels(stage=stage.value, result="ok").inc()
        result = StageResult(stage=stage, ok=True, value=value)
        outcome.stages.append(result)
        outcome.state = stage
        return result

    async def run(self, agreement_id: str) -> PipelineOutcome:
        """Transfer *agreement_id*; never raises for remote failures."""
        outcome = PipelineOutcome(agreement_id=agreement_id)

        token = await self._stage(outcome, PipelineState.TOKEN_REFRESHED, self._token_provider.token)
        if not token.ok:
            return outcome

        document = await self._stage(
            outcome,
            PipelineState.DOCUMENT_DOWNLOADED,
            lambda: self._agreements.combined_document(agreement_id),
        )
        if not document.ok:
            return outcome

        record_request = self.record_request()
        created = await self._stage(
            outcome,
            PipelineState.RECORD_CREATED,
            lambda: self._records.create_record(record_request),
        )
        if not created.ok:
            return outcome
        outcome.record_uri = created.value

        filename = self._filename_factory()
        uploaded = await self._stage(
            outcome,
            PipelineState.DOCUMENT_UPLOADED,
            lambda: self._webdav.put_file_contents(
                f"/{filename}", document.value, content_type="application/pdf"
            ),
        )
        if not uploaded.ok:
            return outcome
        outcome.file_path = filename

        attach_request = AttachDocumentRequest(uri=created.value, record_file_path=filename)
        await self._stage(
            outcome,
            PipelineState.DOCUMENT_ATTACHED,
            lambda: self._records.attach_document(attach_request),
        )
        return outcome
