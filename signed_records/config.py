"""Runtime settings, resolved once at startup and passed to the pipeline."""
from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from common.secrets import get_secret
from integrations.adobe_sign import BASE_URL as ADOBE_SIGN_BASE_URL
from integrations.content_manager import API_BASE_URL, WEBDAV_URL

from .models import DEFAULT_RECORD_TITLE, DEFAULT_RECORD_TYPE

__all__ = ["PipelineSettings", "REQUIRED_KEYS"]

# field name -> secret / environment key
_CREDENTIAL_KEYS = {
    "adobe_sign_client_id": "ADOBE_SIGN_CLIENT_ID",
    "adobe_sign_client_secret": "ADOBE_SIGN_CLIENT_SECRET",
    "adobe_sign_refresh_token": "ADOBE_SIGN_REFRESH_TOKEN",
    "content_manager_username": "CONTENT_MANAGER_USERNAME",
    "content_manager_password": "CONTENT_MANAGER_PASSWORD",
}
_URL_KEYS = {
    "adobe_sign_base_url": ("ADOBE_SIGN_BASE_URL", ADOBE_SIGN_BASE_URL),
    "content_manager_api_base_url": ("CONTENT_MANAGER_API_BASE_URL", API_BASE_URL),
    "content_manager_webdav_url": ("CONTENT_MANAGER_WEBDAV_URL", WEBDAV_URL),
}

REQUIRED_KEYS = tuple(_CREDENTIAL_KEYS.values())


@dataclass(frozen=True)
class PipelineSettings:
    adobe_sign_client_id: Optional[str] = None
    adobe_sign_client_secret: Optional[str] = None
    adobe_sign_refresh_token: Optional[str] = None
    adobe_sign_base_url: str = ADOBE_SIGN_BASE_URL
    content_manager_username: Optional[str] = None
    content_manager_password: Optional[str] = None
    content_manager_api_base_url: str = API_BASE_URL
    content_manager_webdav_url: str = WEBDAV_URL
    record_title: str = DEFAULT_RECORD_TITLE
    record_type: str = DEFAULT_RECORD_TYPE
    webhook_fixture: Path = Path("AdobeSignWebhookExample.json")
    http_timeout: float = 30.0

    @classmethod
    def from_env(cls, dotenv_path: str | Path | None = None) -> "PipelineSettings":
        """Build settings from the secrets file and environment.

        A ``.env`` file is loaded first (without overriding variables that
        are already exported).
        """
        load_dotenv(dotenv_path=dotenv_path, override=False)
        values = {name: get_secret(key) for name, key in _CREDENTIAL_KEYS.items()}
        values.update(
            {name: get_secret(key, default) for name, (key, default) in _URL_KEYS.items()}
        )
        return cls(
            **values,
            record_title=get_secret("CONTENT_MANAGER_RECORD_TITLE", DEFAULT_RECORD_TITLE),
            record_type=get_secret("CONTENT_MANAGER_RECORD_TYPE", DEFAULT_RECORD_TYPE),
            webhook_fixture=Path(
                get_secret("ADOBE_SIGN_WEBHOOK_FIXTURE", "AdobeSignWebhookExample.json")
            ),
            http_timeout=float(get_secret("HTTP_TIMEOUT_SECONDS", 30)),
        )

    def missing(self) -> List[str]:
        """Return the secret keys of required settings that are unset."""
        return [key for name, key in _CREDENTIAL_KEYS.items() if not getattr(self, name)]

    def redacted(self) -> dict:
        """Settings as a dict with credentials masked, for debug logging."""
        out = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value and any(s in f.name for s in ("secret", "token", "password")):
                value = "***"
            out[f.name] = str(value) if isinstance(value, Path) else value
        return out
