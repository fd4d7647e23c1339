"""httpx-based page fetcher for the admin REST backend."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx

from ..config import REQUEST_TIMEOUT_SEC
from ..domain.models import Page, PageQuery
from ..errors import AuthError, NetworkError, ServerError
from .profiles import CollectionProfile

_LOGGER = logging.getLogger(__name__)


class RestPageFetcher:
    """Fetch pages of one collection from the REST backend.

    The bearer *token* is handed in explicitly; the fetcher never looks up
    credentials on its own.  When no *client* is supplied a fresh
    ``httpx.AsyncClient`` is opened per request, which keeps the fetcher
    usable across event loops.  Pass a shared client (and close it yourself)
    to reuse connections; the fetcher's *timeout* still applies per request.
    """

    def __init__(
        self,
        base_url: str,
        profile: CollectionProfile,
        *,
        token: Optional[str] = None,
        timeout: float = REQUEST_TIMEOUT_SEC,
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._profile = profile
        self._token = token
        self._timeout = httpx.Timeout(timeout)
        self._client = client
        self._transport = transport

    @property
    def profile(self) -> CollectionProfile:
        return self._profile

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def fetch_page(self, query: PageQuery) -> Page:
        params = self._profile.build_params(query)
        _LOGGER.debug("GET %s%s %s", self._base_url, self._profile.path, params)
        try:
            response = await self._get(params)
        except httpx.TimeoutException as exc:
            raise NetworkError(f"{self._profile.name}: request timed out after {self._timeout.read}s") from exc
        except httpx.TransportError as exc:
            raise NetworkError(f"{self._profile.name}: backend unreachable ({exc})") from exc

        if response.status_code == 401:
            raise AuthError(_error_message(response) or "Session expired or invalid")
        if not response.is_success:
            message = _error_message(response) or f"HTTP {response.status_code}"
            raise ServerError(message, status=response.status_code)

        try:
            payload = response.json()
        except ValueError as exc:
            raise ServerError(
                f"{self._profile.name}: response is not valid JSON", status=response.status_code
            ) from exc
        return self._profile.parse_page(payload, query)

    async def _get(self, params: Mapping[str, Any]) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(
                self._base_url + self._profile.path,
                params=params,
                headers=self._headers(),
                timeout=self._timeout,
            )
        async with httpx.AsyncClient(
            base_url=self._base_url, timeout=self._timeout, transport=self._transport
        ) as client:
            return await client.get(self._profile.path, params=params, headers=self._headers())


def _error_message(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return text[:200] or None
    if isinstance(body, Mapping):
        for key in ("message", "error", "detail"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return None
