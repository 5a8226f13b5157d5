"""
Authorization service for Timesheet Vault.

Owns the OAuth token lifecycle: client initialization, consent, sign-out,
and the state reported to the UI.
"""

import asyncio
from collections.abc import Callable
from typing import Any

import structlog

from timesheet_vault.api.http_client import AsyncHttpClient
from timesheet_vault.auth.identity import IdentityProvider
from timesheet_vault.auth.token_store import TokenStore
from timesheet_vault.config import VaultConfig
from timesheet_vault.exceptions import (
    AuthorizationFailedError,
    UninitializedError,
    VaultError,
)
from timesheet_vault.models.auth import AccessToken, AuthState

logger = structlog.get_logger(__name__)

AuthObserver = Callable[[AuthState, VaultError | None], None]


class AuthController:
    """
    Handles Google authorization.

    State machine:
    - UNINITIALIZED until both the API client and the identity client are ready.
      They become ready independently and in any order; no decided state is
      reported before both are.
    - UNAUTHORIZED once ready and no usable token is held.
    - AUTHORIZED while a token with a non-empty access token is held.

    Observers are called on every transition and on authorization failures.
    Tokens live exclusively in the TokenStore, which this controller owns and
    hands by reference to the HTTP client.
    """

    def __init__(
        self,
        config: VaultConfig,
        http_client: AsyncHttpClient,
        identity: IdentityProvider,
        token_store: TokenStore,
    ) -> None:
        """
        Args:
            config: Client configuration (client id and scope).
            http_client: Storage API client to ready on initialize.
            identity: OAuth identity provider.
            token_store: Token holder shared with the HTTP client.
        """
        self._config = config
        self._http = http_client
        self._identity = identity
        self._token_store = token_store

        self._api_ready = False
        self._identity_ready = False
        self._observers: list[AuthObserver] = []
        self._init_lock = asyncio.Lock()

    @property
    def token_store(self) -> TokenStore:
        return self._token_store

    @property
    def is_initialized(self) -> bool:
        return self._api_ready and self._identity_ready

    @property
    def is_authorized(self) -> bool:
        """True iff a token with a non-empty access token is held."""
        token = self.current_token()
        return token is not None and token.is_usable

    @property
    def state(self) -> AuthState:
        if not self.is_initialized:
            return AuthState.UNINITIALIZED
        return AuthState.AUTHORIZED if self.is_authorized else AuthState.UNAUTHORIZED

    def current_token(self) -> AccessToken | None:
        return self._token_store.get()

    def subscribe(self, observer: AuthObserver) -> None:
        self._observers.append(observer)

    def unsubscribe(self, observer: AuthObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    async def initialize(self) -> None:
        """
        Ready the API client and register the identity client.

        Both steps run concurrently and each reports its own completion.
        Calling this again after success is a no-op.
        """
        async with self._init_lock:
            if self.is_initialized:
                return
            await asyncio.gather(self._init_api_client(), self._init_identity_client())
            logger.info("Auth controller initialized", state=self.state)

    async def shutdown(self) -> None:
        """
        Close the API client and drop back to UNINITIALIZED.

        The identity client stays registered; a later initialize() reopens
        the API client.
        """
        async with self._init_lock:
            if self._api_ready:
                await self._http.__aexit__(None, None, None)
                self._api_ready = False
                logger.debug("API client closed")

    async def _init_api_client(self) -> None:
        if not self._api_ready:
            await self._http.__aenter__()
            self._api_ready = True
            logger.debug("API client ready")
        self._maybe_render()

    async def _init_identity_client(self) -> None:
        if not self._identity_ready:
            await self._identity.initialize(self._config.client_id, self._config.scope)
            self._identity_ready = True
            logger.debug("Identity client ready")
        self._maybe_render()

    async def request_authorization(self) -> AccessToken:
        """
        Run the consent flow and store the resulting token.

        Returns:
            The new access token.

        Raises:
            UninitializedError: If initialize() has not completed.
            AuthorizationFailedError: If the provider denied or failed consent.
        """
        if not self._identity_ready:
            raise UninitializedError()

        logger.info("Requesting authorization")
        response = await self._identity.request_token()

        if (error := self.on_authorized(response)) is not None:
            raise error

        token = self.current_token()
        if token is None:
            raise AuthorizationFailedError(reason="no_token")
        return token

    def on_authorized(self, response: dict[str, Any]) -> AuthorizationFailedError | None:
        """
        Handle a provider token response.

        On success the token is stored and observers are told the new state.
        On error observers receive an AuthorizationFailedError and the stored
        token is left untouched.

        Returns:
            The error reported to observers, or None on success.
        """
        if "error" in response or not response.get("access_token"):
            reason = response.get("error", "missing_access_token")
            error = AuthorizationFailedError(reason=reason)
            logger.warning(
                "Authorization failed",
                reason=reason,
                description=response.get("error_description"),
            )
            self._notify(error)
            return error

        self._token_store.set(AccessToken.from_response(response))
        logger.info("Authorization granted")
        self._maybe_render()
        return None

    async def sign_out(self) -> None:
        """
        Revoke the held token and clear it.

        The token is cleared and observers notified whatever the revocation
        outcome. Revocation failures are logged and not retried.
        """
        token = self._token_store.get()
        if token is None:
            logger.debug("Sign-out without a token, nothing to do")
            return

        logger.info("Signing out")
        try:
            await self._identity.revoke(token.access_token)
        except Exception as e:
            logger.warning("Token revocation failed", error_type=type(e).__name__)

        self._token_store.clear()
        self._maybe_render()

    def _maybe_render(self) -> None:
        if not self.is_initialized:
            logger.debug(
                "Waiting for both clients",
                api_ready=self._api_ready,
                identity_ready=self._identity_ready,
            )
            return
        self._notify(None)

    def _notify(self, error: VaultError | None) -> None:
        state = self.state
        for observer in list(self._observers):
            try:
                observer(state, error)
            except Exception as e:
                logger.warning("Auth observer failed", error_type=type(e).__name__, exc_info=e)
