"""
Timesheet Vault client facade.

This is the main entry point for users of the library. It wires the token
store, HTTP client, identity provider and services together behind a small
async API.
"""

import asyncio
from typing import Self

import httpx
import structlog

from timesheet_vault.api.http_client import AsyncHttpClient
from timesheet_vault.auth.identity import IdentityProvider, LoopbackIdentityProvider
from timesheet_vault.auth.token_store import TokenStore
from timesheet_vault.config import VaultConfig
from timesheet_vault.crypto.cipher import OpenSSLAesCipher
from timesheet_vault.crypto.protocol import PasswordCipher
from timesheet_vault.models.auth import AccessToken, AuthState
from timesheet_vault.models.drive import RemoteFile
from timesheet_vault.services.auth_service import AuthController, AuthObserver
from timesheet_vault.services.folder_service import FolderResolver
from timesheet_vault.services.upload_service import UploadPipeline

logger = structlog.get_logger(__name__)


class TimesheetVaultClient:
    """
    Async client for saving encrypted timesheet entries to Google Drive.

    Example:
        ```python
        config = VaultConfig(client_id="1234.apps.googleusercontent.com")
        async with TimesheetVaultClient(config) as client:
            await client.authorize()
            remote = await client.save(
                name="Jane Doe", shift="Morning", hours="8", password="secret123"
            )
            print(remote.file_id)
            await client.sign_out()
        ```

    Args:
        config: Client configuration.
        identity: Identity provider. Defaults to the loopback OAuth flow.
        cipher: Password cipher. Defaults to OpenSSL-compatible AES-256-CBC.
        transport: Optional httpx transport for testing (mock transport).
    """

    def __init__(
        self,
        config: VaultConfig,
        *,
        identity: IdentityProvider | None = None,
        cipher: PasswordCipher | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._token_store = TokenStore()
        self._http = AsyncHttpClient(config, self._token_store, transport=transport)
        self._identity = identity or LoopbackIdentityProvider(self._http)
        self._cipher = cipher or OpenSSLAesCipher()

        self._auth = AuthController(config, self._http, self._identity, self._token_store)
        self._folders = FolderResolver(self._http)
        self._pipeline = UploadPipeline(
            self._http, self._auth, self._folders, self._cipher, config
        )
        self._init_lock = asyncio.Lock()

    async def __aenter__(self) -> Self:
        await self.initialize()
        return self

    async def __aexit__(
        self, exc_type: type | None, exc_val: BaseException | None, exc_tb: object
    ) -> None:
        await self.close()

    @property
    def auth(self) -> AuthController:
        return self._auth

    @property
    def pipeline(self) -> UploadPipeline:
        return self._pipeline

    @property
    def folders(self) -> FolderResolver:
        return self._folders

    @property
    def state(self) -> AuthState:
        return self._auth.state

    @property
    def is_authorized(self) -> bool:
        return self._auth.is_authorized

    def subscribe(self, observer: AuthObserver) -> None:
        self._auth.subscribe(observer)

    async def initialize(self) -> None:
        async with self._init_lock:
            await self._auth.initialize()

    async def close(self) -> None:
        """Close the HTTP client. The held token is dropped, not revoked."""
        async with self._init_lock:
            self._token_store.clear()
            await self._auth.shutdown()
            logger.debug("Client closed")

    async def authorize(self) -> AccessToken:
        """
        Run the OAuth consent flow.

        Raises:
            UninitializedError: If the client was not initialized.
            AuthorizationFailedError: If consent failed or was denied.
        """
        return await self._auth.request_authorization()

    async def sign_out(self) -> None:
        await self._auth.sign_out()

    async def save(self, *, name: str, shift: str, hours: str, password: str) -> RemoteFile:
        """
        Encrypt and upload one timesheet entry.

        See UploadPipeline.save for the raised errors.
        """
        return await self._pipeline.save(name=name, shift=shift, hours=hours, password=password)
