"""
HTTP transport for the settings service: GET/POST of the whole document.
Requires httpx. Pass a configured httpx.AsyncClient to share connections or to test.
"""

from typing import Optional

import httpx

from shared.config import get_api_url

_REQUEST_TIMEOUT = 10.0


class SyncError(Exception):
    """Settings could not be fetched from or saved to the service."""


class SettingsClient:
    def __init__(self, api_url: Optional[str] = None, http: Optional[httpx.AsyncClient] = None):
        self.api_url = api_url or get_api_url()
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(timeout=_REQUEST_TIMEOUT)

    async def fetch(self) -> dict:
        """GET the document. Raises SyncError on transport errors, non-2xx answers or non-object bodies."""
        try:
            resp = await self._http.get(self.api_url)
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise SyncError(f"Failed to fetch settings: {e}") from e
        if not isinstance(data, dict):
            raise SyncError("Failed to fetch settings: response is not a JSON object")
        return data

    async def save(self, document: dict) -> None:
        """POST the full document."""
        try:
            resp = await self._http.post(self.api_url, json=document)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise SyncError(f"Failed to save settings: {e}") from e

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "SettingsClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()
