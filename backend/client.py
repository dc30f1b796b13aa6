"""Async HTTP client for the Attio REST API."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp

from backend.errors import AttioApiError
from backend.settings import ATTIO_BASE_URL, REQUEST_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


class AttioClient:
    """Thin JSON client around a lazily created ``aiohttp.ClientSession``.

    Every non-2xx response becomes an AttioApiError carrying the status and the
    API's error code. Transport failures become an AttioApiError flagged as a
    network error. The session is created on first use so the client can be
    constructed outside a running event loop.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = ATTIO_BASE_URL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        session: aiohttp.ClientSession | None = None,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "AttioClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={
                    "Authorization": f"Bearer {self._api_key}",
                    "Accept": "application/json",
                },
                timeout=self._timeout,
            )
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the underlying session if this client created it."""
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send a request and return the decoded JSON body ({} for empty bodies)."""
        url = f"{self._base_url}{path}"
        session = self._get_session()
        try:
            async with session.request(method, url, params=params, json=json) as response:
                if response.status == 204:
                    return {}
                try:
                    body = await response.json(content_type=None)
                except ValueError:
                    body = None
                if response.status >= 400:
                    raise _error_from_response(response.status, body)
                return body or {}
        except AttioApiError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise AttioApiError(
                str(exc) or exc.__class__.__name__, is_network_error=True
            ) from exc

    async def get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: dict[str, Any] | None = None) -> dict[str, Any]:
        return await self.request("POST", path, json=json)

    async def patch(self, path: str, json: dict[str, Any] | None = None) -> dict[str, Any]:
        return await self.request("PATCH", path, json=json)

    async def delete(self, path: str) -> dict[str, Any]:
        return await self.request("DELETE", path)


def _error_from_response(status: int, body: Any) -> AttioApiError:
    """Build an AttioApiError from an Attio error payload."""
    message = f"Request failed with status {status}"
    code = None
    if isinstance(body, dict):
        message = str(body.get("message") or message)
        code = body.get("code")
    return AttioApiError(message, status=status, code=code)
