"""Async HTTP client for the AI-Concert REST endpoints."""

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


def auth_headers(token: str | None = None) -> dict[str, str]:
    headers = {"Content-Type": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


class ApiClient:
    """Thin wrapper over httpx for the stateless file/analysis/test/project API."""

    def __init__(
        self,
        api_url: str,
        token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self._api_url,
            headers=auth_headers(token),
            timeout=timeout,
            transport=transport,
        )

    @property
    def api_url(self) -> str:
        return self._api_url

    async def request(
        self,
        method: str,
        path: str,
        json: dict | None = None,
        params: dict | None = None,
    ) -> Any:
        """Send a request and return the decoded body.

        JSON bodies are decoded; an empty body gives None and any other body
        is returned as text. Raises httpx.HTTPError on transport failures and
        non-2xx responses.
        """
        logger.debug("%s %s%s", method, self._api_url, path)
        response = await self._client.request(method, path, json=json, params=params)
        response.raise_for_status()
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            logger.debug("Non-JSON response from %s, keeping text body", path)
            return response.text

    async def get(self, path: str, params: dict | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: dict | None = None) -> Any:
        return await self.request("POST", path, json=json)

    async def close(self) -> None:
        await self._client.aclose()
