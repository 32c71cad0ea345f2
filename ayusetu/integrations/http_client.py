"""
Shared HTTP client for the live (REAL_HTTP) service clients.

One request per call: no retries, no backoff, no caching. Any non-2xx status
or transport failure is raised as ServiceError carrying the caller's static
message.
"""

from __future__ import annotations

import logging
import secrets
from typing import Any, Dict, Mapping, Optional

import httpx

from .errors import ServiceError

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {"Content-Type": "application/json"}


def _clean_params(params: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    if params is None:
        return None
    cleaned: Dict[str, Any] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        cleaned[key] = value
    return cleaned


def _safe_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class ApiClient:
    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=DEFAULT_HEADERS,
            timeout=timeout_seconds,
            transport=transport,
        )

    async def _send(
        self,
        method: str,
        path: str,
        *,
        error_message: str,
        params: Optional[Mapping[str, Any]] = None,
        json: Any = None,
        data: Optional[Mapping[str, Any]] = None,
        files: Any = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> httpx.Response:
        request_headers = dict(headers or {})
        if files:
            # Overrides the JSON default; httpx encodes the body with this boundary
            request_headers["Content-Type"] = f"multipart/form-data; boundary={secrets.token_hex(16)}"
        elif data is not None:
            request_headers["Content-Type"] = "application/x-www-form-urlencoded"

        request = self._client.build_request(
            method,
            path,
            params=_clean_params(params),
            json=json,
            data=data,
            files=files,
            headers=request_headers,
        )

        logger.info("%s %s", method, request.url)
        try:
            response = await self._client.send(request)
            logger.info("%s %s -> %s", method, path, response.status_code)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            body = _safe_body(e.response)
            logger.error("%s %s failed: HTTP %s %s", method, path, e.response.status_code, body)
            raise ServiceError(error_message, status_code=e.response.status_code, payload=body) from e
        except httpx.RequestError as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise ServiceError(error_message) from e
        return response

    async def request(self, method: str, path: str, *, error_message: str, **kwargs: Any) -> Any:
        """Issue one request and return the parsed JSON body (None when empty)."""
        response = await self._send(method, path, error_message=error_message, **kwargs)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.error("%s %s returned a non-JSON body", method, path)
            raise ServiceError(error_message, status_code=response.status_code) from e

    async def get_bytes(self, path: str, *, error_message: str, **kwargs: Any) -> bytes:
        response = await self._send("GET", path, error_message=error_message, **kwargs)
        return response.content

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
