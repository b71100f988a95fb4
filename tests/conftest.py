import pytest

from common import secrets as secrets_module

_SETTING_KEYS = (
    "ADOBE_SIGN_CLIENT_ID",
    "ADOBE_SIGN_CLIENT_SECRET",
    "ADOBE_SIGN_REFRESH_TOKEN",
    "ADOBE_SIGN_BASE_URL",
    "ADOBE_SIGN_WEBHOOK_FIXTURE",
    "CONTENT_MANAGER_USERNAME",
    "CONTENT_MANAGER_PASSWORD",
    "CONTENT_MANAGER_API_BASE_URL",
    "CONTENT_MANAGER_WEBDAV_URL",
    "CONTENT_MANAGER_RECORD_TITLE",
    "CONTENT_MANAGER_RECORD_TYPE",
    "HTTP_TIMEOUT_SECONDS",
)


@pytest.fixture
def anyio_backend():
    return "asyncio"


# ---------------------------------------------------------------------------
# Isolate tests from the developer's shell and secrets file
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _secrets(monkeypatch):
    """Start every test with an empty secrets cache and no setting env vars."""

    for key in _SETTING_KEYS:
        monkeypatch.delenv(key, raising=False)
    secrets_module.secrets.set_override({})
    yield
    secrets_module.secrets.set_override({})
