"""
Identity provider adapters.

The provider runs the OAuth consent flow and revokes tokens. Results that a
browser SDK would deliver through callbacks are returned from awaitables.
"""

import asyncio
import base64
import hashlib
import hmac
import secrets
import webbrowser
from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable
from urllib.parse import parse_qsl, urlencode, urlsplit

import structlog

from timesheet_vault.api.endpoints.oauth import exchange_code, revoke_token
from timesheet_vault.api.http_client import AsyncHttpClient
from timesheet_vault.exceptions import UninitializedError, VaultError

logger = structlog.get_logger(__name__)

_LOOPBACK_HOST = "127.0.0.1"
_CALLBACK_PAGE = (
    b"<html><body><h3>Authorization complete.</h3>"
    b"<p>You can close this window and return to Timesheet Vault.</p></body></html>"
)


@runtime_checkable
class IdentityProvider(Protocol):
    """Interface the AuthController needs from an OAuth identity provider."""

    async def initialize(self, client_id: str, scope: str) -> None:
        """Register the client id and scope used by later consent flows."""
        ...

    async def request_token(self) -> dict[str, Any]:
        """
        Run the interactive consent flow.

        Returns:
            Token response, or a dict with an ``error`` key on failure.

        Raises:
            UninitializedError: If ``initialize`` has not completed.
        """
        ...

    async def revoke(self, access_token: str) -> None:
        """
        Revoke a token at the provider.

        Raises:
            VaultError: If the provider reports a failure.
        """
        ...


def make_pkce_pair() -> tuple[str, str]:
    """Return a PKCE (verifier, S256 challenge) pair."""
    verifier = secrets.token_urlsafe(64)
    digest = hashlib.sha256(verifier.encode("ascii")).digest()
    challenge = base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")
    return verifier, challenge


class LoopbackIdentityProvider:
    """
    Google OAuth for installed apps, with a loopback redirect and PKCE.

    Opens the consent page in the user's browser, waits for the redirect on
    a one-shot local listener, then exchanges the code for an access token.
    """

    def __init__(
        self,
        http: AsyncHttpClient,
        *,
        open_browser: Callable[[str], Any] = webbrowser.open,
    ) -> None:
        """
        Args:
            http: HTTP client used for the token and revoke endpoints.
            open_browser: Opens the consent URL. Replaced in tests.
        """
        self._http = http
        self._open_browser = open_browser
        self._client_id: str | None = None
        self._scope: str | None = None

    @property
    def is_initialized(self) -> bool:
        return self._client_id is not None

    async def initialize(self, client_id: str, scope: str) -> None:
        self._client_id = client_id
        self._scope = scope
        logger.debug("Identity client registered", scope=scope)

    def build_authorization_url(self, *, redirect_uri: str, state: str, code_challenge: str) -> str:
        """Build the consent page URL."""
        if self._client_id is None or self._scope is None:
            raise UninitializedError()
        query = urlencode(
            {
                "client_id": self._client_id,
                "redirect_uri": redirect_uri,
                "response_type": "code",
                "scope": self._scope,
                "state": state,
                "code_challenge": code_challenge,
                "code_challenge_method": "S256",
            }
        )
        return f"{self._http.config.auth_url}?{query}"

    async def request_token(self) -> dict[str, Any]:
        if not self.is_initialized:
            raise UninitializedError()

        config = self._http.config
        verifier, challenge = make_pkce_pair()
        state = secrets.token_urlsafe(32)
        loop = asyncio.get_running_loop()
        redirect: asyncio.Future[dict[str, str]] = loop.create_future()

        async def _handle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
            try:
                params = await self._read_redirect(reader)
                if not params:
                    writer.write(b"HTTP/1.1 404 Not Found\r\nContent-Length: 0\r\n\r\n")
                    await writer.drain()
                    return
                writer.write(
                    b"HTTP/1.1 200 OK\r\nContent-Type: text/html; charset=utf-8\r\n"
                    + f"Content-Length: {len(_CALLBACK_PAGE)}\r\n\r\n".encode()
                    + _CALLBACK_PAGE
                )
                await writer.drain()
                if not redirect.done():
                    redirect.set_result(params)
            finally:
                writer.close()

        try:
            server = await asyncio.start_server(_handle, _LOOPBACK_HOST, config.redirect_port)
        except OSError as e:
            logger.warning("Loopback listener unavailable", port=config.redirect_port, error=str(e))
            return {"error": "loopback_unavailable", "error_description": str(e)}

        try:
            port = server.sockets[0].getsockname()[1]
            redirect_uri = f"http://{_LOOPBACK_HOST}:{port}"
            url = self.build_authorization_url(
                redirect_uri=redirect_uri, state=state, code_challenge=challenge
            )
            logger.info("Opening consent page", redirect_uri=redirect_uri)
            try:
                self._open_browser(url)
            except (OSError, webbrowser.Error) as e:
                logger.warning("Browser could not be opened", error=str(e))
                return {"error": "browser_unavailable", "error_description": str(e)}

            try:
                params = await asyncio.wait_for(redirect, timeout=config.authorization_timeout)
            except asyncio.TimeoutError:
                logger.warning("Consent flow timed out")
                return {"error": "timeout", "error_description": "No authorization response received"}
        finally:
            server.close()
            await server.wait_closed()

        return await self._complete(params, state=state, verifier=verifier, redirect_uri=redirect_uri)

    async def _complete(
        self,
        params: dict[str, str],
        *,
        state: str,
        verifier: str,
        redirect_uri: str,
    ) -> dict[str, Any]:
        if "error" in params:
            return {"error": params["error"], "error_description": params.get("error_description")}

        if not hmac.compare_digest(params.get("state", ""), state):
            return {"error": "state_mismatch", "error_description": "OAuth state did not match"}

        if not (code := params.get("code")):
            return {"error": "missing_code", "error_description": "Redirect carried no code"}

        try:
            return await exchange_code(
                self._http, code=code, code_verifier=verifier, redirect_uri=redirect_uri
            )
        except VaultError as e:
            logger.warning("Token exchange failed", error_type=type(e).__name__)
            return {"error": "token_exchange_failed", "error_description": e.message}

    @staticmethod
    async def _read_redirect(reader: asyncio.StreamReader) -> dict[str, str]:
        request_line = await reader.readline()
        # Skip headers
        while await reader.readline() not in (b"\r\n", b"\n", b""):
            pass
        parts = request_line.decode("latin-1").split()
        if len(parts) < 2:
            return {}
        return dict(parse_qsl(urlsplit(parts[1]).query))

    async def revoke(self, access_token: str) -> None:
        await revoke_token(self._http, access_token)
