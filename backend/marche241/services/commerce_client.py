"""Async HTTP client for the remote Marché241 commerce API.

Keep this module as the only place that talks HTTP to the commerce API.
"""

import logging
from typing import Any

import httpx

from marche241.core.config import settings

logger = logging.getLogger(__name__)


class CommerceApiError(Exception):
    """Commerce API call failed (status 0 means no HTTP response)."""

    def __init__(self, message: str, status: int, payload: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.payload = payload


class CommerceClient:
    def __init__(self, http: httpx.AsyncClient, token: str | None = None):
        self._http = http
        self._token = token

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict | None = None,
        json: Any = None,
    ) -> Any:
        headers = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        try:
            response = await self._http.request(
                method, path, params=params, json=json, headers=headers
            )
        except httpx.HTTPError as exc:
            logger.warning("Commerce API %s %s unreachable: %s", method, path, exc)
            raise CommerceApiError(str(exc) or "Erreur de connexion", 0) from exc

        if response.is_error:
            try:
                payload = response.json()
            except ValueError:
                payload = None
            message = None
            if isinstance(payload, dict):
                message = payload.get("message")
            raise CommerceApiError(
                message or f"Erreur HTTP {response.status_code}",
                response.status_code,
                payload,
            )

        if "application/json" in response.headers.get("content-type", ""):
            try:
                return response.json()
            except ValueError as exc:
                raise CommerceApiError(
                    "Réponse JSON invalide", response.status_code, response.text
                ) from exc
        return response.text

    async def get(self, path: str, *, params: dict | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, data: Any = None) -> Any:
        return await self.request("POST", path, json=data)


def expect_object(data: Any, what: str) -> dict:
    """Return ``data`` if it is a JSON object, else fail as a bad upstream answer (502)."""
    if not isinstance(data, dict):
        raise CommerceApiError(f"Réponse inattendue pour {what}", 502, data)
    return data


def build_http_client(transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=settings.commerce_api_base_url,
        timeout=settings.COMMERCE_API_TIMEOUT,
        transport=transport,
    )
