"""Payload models for the Adobe Sign -> Content Manager transfer."""
from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from common.datetime import parse_iso8601

DEFAULT_RECORD_TITLE = "Adobe Sign Integration Demo 3"
DEFAULT_RECORD_TYPE = "Document"

# Content Manager URIs are usually numeric but are sent back exactly as received.
RecordUri = Union[int, str]


class WebhookAgreement(BaseModel):
    """The ``agreement`` block of a webhook notification."""
    model_config = ConfigDict(extra="ignore")

    id: str
    name: Optional[str] = None
    status: Optional[str] = None


class WebhookEvent(BaseModel):
    """Adobe Sign webhook notification (only the fields we read)."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    event: Optional[str] = None
    event_date: Optional[datetime] = Field(default=None, alias="eventDate")
    agreement: WebhookAgreement

    @field_validator("event_date", mode="before")
    @classmethod
    def _parse_event_date(cls, value):
        if value in (None, ""):
            return None
        if not isinstance(value, (str, datetime)):
            raise ValueError(f"eventDate must be an ISO-8601 string, got {type(value).__name__}")
        return parse_iso8601(value)

    @property
    def agreement_id(self) -> str:
        return self.agreement.id

    @property
    def occurred_at(self) -> Optional[datetime]:
        return self.event_date


class CreateRecordRequest(BaseModel):
    """Body for creating a new Content Manager record."""
    model_config = ConfigDict(populate_by_name=True)

    record_title: str = Field(default=DEFAULT_RECORD_TITLE, alias="RecordTitle")
    record_type: str = Field(default=DEFAULT_RECORD_TYPE, alias="RecordRecordType")


class AttachDocumentRequest(BaseModel):
    """Body linking an uploaded file to an existing record.

    Only the record URI and the file path relative to the upload folder are
    required by the ServiceAPI.
    """
    model_config = ConfigDict(populate_by_name=True)

    uri: RecordUri = Field(alias="Uri")
    record_file_path: str = Field(alias="RecordFilePath")
