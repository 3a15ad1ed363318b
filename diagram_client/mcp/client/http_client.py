"""Minimal HTTP client posting JSON-RPC tool calls."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from diagram_client.errors import TransportFailure
from diagram_client.utils.config import settings

logger = logging.getLogger(__name__)


class MCPHTTPClient:
    """Convenience wrapper around the service's JSON-RPC message endpoint."""

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        *,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._url = url or settings.mcp_server_url
        self._client = httpx.Client(
            timeout=timeout if timeout is not None else settings.mcp_timeout_seconds,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    @property
    def url(self) -> str:
        return self._url

    def send(self, payload: Dict[str, Any], *, step: str = "request") -> str:
        """POST ``payload`` and return the raw response body.

        Non-2xx statuses are not raised: a JSON-RPC error body can arrive
        with any status and is classified by the interpreter.
        """
        logger.debug("POST %s %s", self._url, payload.get("params", {}).get("name"))
        try:
            response = self._client.post(self._url, json=payload)
        except (httpx.TimeoutException, httpx.ConnectError) as exc:
            raise TransportFailure(step, f"could not reach {self._url}: {exc}", retryable=True) from exc
        except httpx.HTTPError as exc:
            raise TransportFailure(step, f"request to {self._url} failed: {exc}") from exc
        if response.is_error:
            logger.debug("HTTP %s from %s", response.status_code, self._url)
        return response.text

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "MCPHTTPClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # type: ignore[override]
        self.close()


def send_tool_call(
    payload: Dict[str, Any],
    url: Optional[str] = None,
    *,
    timeout: Optional[float] = None,
) -> str:
    with MCPHTTPClient(url, timeout=timeout) as client:
        return client.send(payload)
