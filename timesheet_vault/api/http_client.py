"""
Async HTTP client for the Google Drive and OAuth endpoints.

Provides a clean interface for making API requests with bearer
authentication from the TokenStore and mapping of HTTP failures onto
the timesheet_vault error hierarchy.
"""

import asyncio
from typing import Any

import httpx
import structlog

from timesheet_vault.auth.token_store import TokenStore
from timesheet_vault.config import VaultConfig
from timesheet_vault.exceptions import (
    AuthorizationRequiredError,
    NetworkError,
    RemoteError,
)

logger = structlog.get_logger(__name__)

SENSITIVE_KEYS = frozenset(
    {
        "access_token",
        "refresh_token",
        "id_token",
        "token",
        "code",
        "code_verifier",
        "client_secret",
        "password",
    }
)

_MAX_LOGGED_BODY = 500


def sanitize_for_log(data: dict[str, Any]) -> dict[str, Any]:
    """
    Remove sensitive fields from a dict before logging.

    Recursively sanitizes nested dictionaries and lists.

    Args:
        data: Dictionary that may contain sensitive values.

    Returns:
        Copy with sensitive values replaced by "***".
    """
    result = {}
    for key, value in data.items():
        if key.lower() in SENSITIVE_KEYS:
            result[key] = "***"
        elif isinstance(value, dict):
            result[key] = sanitize_for_log(value)
        elif isinstance(value, list):
            result[key] = [
                sanitize_for_log(item) if isinstance(item, dict) else item for item in value
            ]
        else:
            result[key] = value
    return result


class AsyncHttpClient:
    """Async HTTP client shared by the Drive and OAuth endpoints."""

    def __init__(
        self,
        config: VaultConfig,
        token_store: TokenStore,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            config: Client configuration.
            token_store: Source of the bearer token.
            transport: Optional transport for testing (mock transport).
        """
        self._config = config
        self._token_store = token_store
        self._transport = transport

        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()

    @property
    def config(self) -> VaultConfig:
        return self._config

    async def __aenter__(self) -> "AsyncHttpClient":
        await self._ensure_client()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self._close()

    async def _ensure_client(self) -> httpx.AsyncClient:
        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    timeout=self._config.timeout,
                    transport=self._transport,
                    headers={"Accept": "application/json"},
                )
        return self._client

    async def _close(self) -> None:
        async with self._client_lock:
            if self._client is None:
                logger.debug("Client not open.")
                return
            await self._client.aclose()
            self._client = None

    @property
    def is_open(self) -> bool:
        return self._client is not None

    async def request(
        self,
        method: str,
        url: str,
        *,
        json: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
        authenticated: bool = True,
    ) -> dict[str, Any]:
        """
        Make an API request and return the decoded JSON body.

        Args:
            method: HTTP method (GET, POST, etc.).
            url: Absolute endpoint URL.
            json: JSON body.
            data: Form-encoded body.
            params: Query parameters.
            content: Raw body (multipart uploads).
            headers: Extra request headers.
            authenticated: Whether to send the bearer token.

        Returns:
            Response JSON data, empty dict for an empty body.

        Raises:
            AuthorizationRequiredError: On HTTP 401, or when no token is held
                for an authenticated request.
            RemoteError: On any other non-success status or malformed body.
            NetworkError: If the request fails due to network issues.
        """
        response = await self.request_raw(
            method,
            url,
            json=json,
            data=data,
            params=params,
            content=content,
            headers=headers,
            authenticated=authenticated,
        )

        if not response.content:
            return {}
        try:
            body = response.json()
        except ValueError as e:
            raise RemoteError(
                "Invalid JSON response from API",
                status=response.status_code,
                body=response.text[:_MAX_LOGGED_BODY],
                endpoint=url,
            ) from e
        if not isinstance(body, dict):
            raise RemoteError(
                "Unexpected JSON payload from API",
                status=response.status_code,
                body=response.text[:_MAX_LOGGED_BODY],
                endpoint=url,
            )

        logger.debug("Response received", url=url, data=sanitize_for_log(body))
        return body

    async def request_raw(
        self,
        method: str,
        url: str,
        *,
        json: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
        authenticated: bool = True,
    ) -> httpx.Response:
        """
        Make a request and return the response after status checks.

        Raises:
            AuthorizationRequiredError: On HTTP 401.
            RemoteError: On any other non-success status.
            NetworkError: If the request fails due to network issues.
        """
        request_headers = dict(headers or {})
        if authenticated:
            token = self._token_store.get()
            if token is None or not token.is_usable:
                msg = "No access token held, authorize first"
                raise AuthorizationRequiredError(msg, status=None)
            request_headers["Authorization"] = f"Bearer {token.access_token}"

        if self._client is None:
            msg = "HTTP client not initialized. Use 'async with' first."
            raise RuntimeError(msg)

        logger.debug("Sending request", method=method, url=url)
        try:
            response = await self._client.request(
                method=method,
                url=url,
                json=json,
                data=data,
                params=params,
                content=content,
                headers=request_headers,
            )
        except httpx.HTTPError as e:
            logger.warning("Request failed", url=url, error_type=type(e).__name__)
            msg = f"Network error: {e}"
            raise NetworkError(msg, endpoint=url) from e

        if not response.is_success:
            self._raise_api_error(response, url)
        return response

    @staticmethod
    def _raise_api_error(response: httpx.Response, endpoint: str) -> None:
        body = response.text
        status = response.status_code

        if status == httpx.codes.UNAUTHORIZED:
            raise AuthorizationRequiredError(
                "Access token rejected, authorize again", status=status, body=body
            )

        msg = f"Request failed: {status} - {body[:_MAX_LOGGED_BODY]}"
        raise RemoteError(msg, status=status, body=body, endpoint=endpoint)
