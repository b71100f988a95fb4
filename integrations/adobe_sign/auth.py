"""Auth helpers for the Adobe Sign REST API.

Two strategies are supported:

* ``StaticTokenProvider`` – a bearer token supplied up front (offline runs).
* ``RefreshTokenProvider`` – exchanges the stored OAuth refresh token for a
  short-lived access token via ``/oauth/refresh``.

Neither strategy retries; a failed refresh propagates to the caller.
"""
from __future__ import annotations

import logging
from typing import Optional, Protocol, runtime_checkable

import httpx

from signed_records.metrics import token_refresh_errors_total, tokens_issued_total

from . import BASE_URL

_LOG = logging.getLogger(__name__)

__all__ = [
    "TokenProvider",
    "TokenRefreshError",
    "StaticTokenProvider",
    "RefreshTokenProvider",
]


class TokenRefreshError(RuntimeError):
    """Refresh endpoint answered 2xx but without a usable access token."""


@runtime_checkable
class TokenProvider(Protocol):
    """Return a valid OAuth2 bearer token string."""

    async def token(self) -> str:  # noqa: D401 – imperative form
        ...

    async def refresh(self) -> str:  # noqa: D401 – imperative form
        """Force-refresh token ignoring any cache."""


class StaticTokenProvider:
    """Simple provider that returns a fixed token."""

    def __init__(self, token: str) -> None:
        self._token = token

    async def token(self) -> str:  # type: ignore[override]
        return self._token

    async def refresh(self) -> str:  # type: ignore[override]
        return self._token


class RefreshTokenProvider:
    """Uses a stored refresh token to mint a new access token.

    The access token is cached for the lifetime of the provider; the transfer
    runs once per process so no expiry tracking is needed.
    """

    def __init__(
        self,
        *,
        client_id: str,
        client_secret: str,
        refresh_token: str,
        base_url: str = BASE_URL,
        timeout: float = 30,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client_id = client_id
        self._client_secret = client_secret
        self._refresh_token = refresh_token
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._token: str | None = None

    async def token(self) -> str:  # type: ignore[override]
        if self._token:
            return self._token
        return await self.refresh()

    async def refresh(self) -> str:  # type: ignore[override]
        # Adobe Sign expects the grant in the query string, not the body.
        params = {
            "refresh_token": self._refresh_token,
            "client_id": self._client_id,
            "client_secret": self._client_secret,
            "grant_type": "refresh_token",
        }
        headers = {"Content-Type": "application/x-www-form-urlencoded"}
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            try:
                resp = await client.post(
                    f"{self._base_url}/oauth/refresh", params=params, headers=headers
                )
                resp.raise_for_status()
            except httpx.HTTPStatusError as exc:
                token_refresh_errors_total.labels(reason=str(exc.response.status_code)).inc()
                raise
            except httpx.RequestError:
                token_refresh_errors_total.labels(reason="transport").inc()
                raise

        payload = resp.json()
        if not isinstance(payload, dict):
            token_refresh_errors_total.labels(reason="malformed_body").inc()
            raise TokenRefreshError(f"Refresh response is {type(payload).__name__}, expected an object")
        token = payload.get("access_token")
        if not token:
            token_refresh_errors_total.labels(reason="missing_token").inc()
            raise TokenRefreshError("Refresh response missing 'access_token'")

        self._token = token
        tokens_issued_total.inc()
        _LOG.debug("Issued Adobe Sign access token; expires_in=%s", payload.get("expires_in"))
        return token
