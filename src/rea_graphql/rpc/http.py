"""HTTP/JSON transport to a conductor gateway."""

from __future__ import annotations

from typing import Any

import httpx

from ..errors import RemoteCallError


class HttpTransport:
    """
    Sends zome calls to a conductor gateway as JSON over HTTP.

    Each call is one ``POST <conductor_uri>/call`` with body
    ``{"cell", "zome", "fn", "payload"}``. The gateway answers ``{"result": ...}``
    on success and ``{"error": ...}`` (or a non-2xx status) on failure.
    """

    def __init__(
        self,
        conductor_uri: str,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the transport.

        Args:
            conductor_uri: Base URL of the conductor gateway
            timeout: Per-request timeout in seconds
            client: Optional preconfigured client (the transport then does not own it)
        """
        self.conductor_uri = conductor_uri.rstrip("/")
        self._owns_client = client is None
        self._http_client = client or httpx.AsyncClient(timeout=timeout)

    async def call(self, cell: str, zome: str, fn: str, payload: Any) -> Any:
        request = {"cell": cell, "zome": zome, "fn": fn, "payload": payload}
        try:
            response = await self._http_client.post(f"{self.conductor_uri}/call", json=request)
        except httpx.HTTPError as e:
            raise RemoteCallError(f"transport failure calling {zome}.{fn}: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise RemoteCallError(
                f"undecodable response from {zome}.{fn} (HTTP {response.status_code})",
                payload=response.text,
            ) from e

        if response.is_error or (isinstance(body, dict) and "error" in body):
            error = body.get("error", body) if isinstance(body, dict) else body
            raise RemoteCallError(f"{zome}.{fn} failed: {_describe(error)}", payload=error)

        if not isinstance(body, dict) or "result" not in body:
            raise RemoteCallError(f"malformed response from {zome}.{fn}", payload=body)

        return body["result"]

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http_client.aclose()


def _describe(error: Any) -> str:
    if isinstance(error, dict):
        return str(error.get("message") or error.get("type") or error)
    return str(error)
