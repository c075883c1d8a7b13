"""Async HTTP client for the PhysioFlow REST API."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Mapping, Optional

import httpx
from pydantic import BaseModel

from physioflow.client.errors import ApiError
from physioflow.config import get_settings
from physioflow.models.base import PageMeta
from physioflow.observability import ObservabilityLogger, get_observability_logger

logger = logging.getLogger(__name__)

_FILENAME_RE = re.compile(r'filename="?([^";]+)"?')


class ApiResponse(BaseModel):
    """Response envelope returned by every endpoint."""

    data: Any = None
    message: Optional[str] = None
    meta: Optional[PageMeta] = None


def clean_params(params: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    """Drop query parameters whose value is None."""
    if not params:
        return {}
    cleaned: dict[str, Any] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        cleaned[key] = value
    return cleaned


def filename_from_disposition(header: Optional[str], default: str) -> str:
    """Extract the filename from a Content-Disposition header."""
    if header:
        match = _FILENAME_RE.search(header)
        if match:
            # Never let the server choose a directory.
            name = Path(match.group(1).strip()).name
            if name not in ("", ".", ".."):
                return name
    return default


class ApiClient:
    """Thin async wrapper around ``httpx.AsyncClient``.

    Every call returns an ``ApiResponse``; every failure raises ``ApiError``.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        observability: Optional[ObservabilityLogger] = None,
    ):
        """Initialize the API client.

        Args:
            base_url: API root (default: settings.api_base_url)
            token: Bearer token (default: settings.api_token)
            timeout: Request timeout in seconds
            transport: Custom httpx transport (tests use ASGITransport)
            observability: Event logger (default: global instance)
        """
        settings = get_settings()
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.token = token if token is not None else settings.api_token
        self.timeout = timeout or settings.api_timeout
        self.obs = observability or get_observability_logger()

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            transport=transport,
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _headers(
        self,
        accept: str = "application/json",
        skip_auth: bool = False,
        extra: Optional[Mapping[str, str]] = None,
    ) -> dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": accept}
        if self.token and not skip_auth:
            headers["Authorization"] = f"Bearer {self.token}"
        if extra:
            headers.update(extra)
        return headers

    async def _send(
        self,
        method: str,
        endpoint: str,
        *,
        body: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> httpx.Response:
        try:
            return await self._client.request(
                method,
                endpoint,
                json=body if body is not None else None,
                params=clean_params(params),
                headers=headers,
            )
        except httpx.HTTPError as e:
            raise ApiError(f"Network error: {e}", 0, "network_error") from e

    @staticmethod
    def _error_from_response(response: httpx.Response, default_message: str) -> ApiError:
        message = default_message
        code: Optional[str] = None
        details: Optional[dict[str, Any]] = None
        try:
            error_body = response.json()
        except ValueError:
            error_body = None
        if isinstance(error_body, dict):
            message = error_body.get("message") or message
            code = error_body.get("code")
            details = error_body.get("details")
        return ApiError(message, response.status_code, code, details)

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        body: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        skip_auth: bool = False,
        headers: Optional[Mapping[str, str]] = None,
    ) -> ApiResponse:
        """Issue a request and unwrap the JSON envelope."""
        with self.obs.api_call(method, endpoint) as event:
            response = await self._send(
                method,
                endpoint,
                body=body,
                params=params,
                headers=self._headers(skip_auth=skip_auth, extra=headers),
            )
            event.status_code = response.status_code

            if response.status_code == 401 and not skip_auth:
                raise ApiError("Session expired. Please login again.", 401, "session_expired")

            if response.is_error:
                raise self._error_from_response(response, "An error occurred")

            if response.status_code == 204 or not response.content:
                return ApiResponse(data=None)

            try:
                payload = response.json()
            except ValueError as e:
                raise ApiError("Invalid response from server", response.status_code, "invalid_response") from e

        if isinstance(payload, dict) and "data" in payload:
            return ApiResponse.model_validate(payload)
        return ApiResponse(data=payload)

    async def get(self, endpoint: str, **kwargs) -> ApiResponse:
        return await self.request("GET", endpoint, **kwargs)

    async def post(self, endpoint: str, body: Any = None, **kwargs) -> ApiResponse:
        return await self.request("POST", endpoint, body=body, **kwargs)

    async def put(self, endpoint: str, body: Any = None, **kwargs) -> ApiResponse:
        return await self.request("PUT", endpoint, body=body, **kwargs)

    async def patch(self, endpoint: str, body: Any = None, **kwargs) -> ApiResponse:
        return await self.request("PATCH", endpoint, body=body, **kwargs)

    async def delete(self, endpoint: str, **kwargs) -> ApiResponse:
        return await self.request("DELETE", endpoint, **kwargs)

    async def download(
        self,
        endpoint: str,
        dest_dir: Optional[Path] = None,
        *,
        filename: str = "report.pdf",
        params: Optional[Mapping[str, Any]] = None,
        accept: str = "application/pdf",
        error_message: str = "Failed to download file",
    ) -> Path:
        """Download a file endpoint and write it under ``dest_dir``.

        The filename comes from Content-Disposition when the server sends one.
        """
        dest_dir = dest_dir or get_settings().download_dir

        with self.obs.api_call("GET", endpoint) as event:
            response = await self._send(
                "GET",
                endpoint,
                params=params,
                headers=self._headers(accept=accept),
            )
            event.status_code = response.status_code
            if response.is_error:
                raise self._error_from_response(response, error_message)

        name = filename_from_disposition(response.headers.get("content-disposition"), filename)
        dest_dir.mkdir(parents=True, exist_ok=True)
        path = dest_dir / name
        path.write_bytes(response.content)
        logger.info("Downloaded %s (%d bytes)", path, len(response.content))
        return path
