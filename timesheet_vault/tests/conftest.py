from collections.abc import AsyncIterator
from unittest.mock import AsyncMock, Mock

import pytest
import pytest_asyncio

from timesheet_vault.api.http_client import AsyncHttpClient
from timesheet_vault.auth.token_store import TokenStore
from timesheet_vault.config import VaultConfig
from timesheet_vault.models.auth import AccessToken
from timesheet_vault.tests.utils.constants import ACCESS_TOKEN, CLIENT_ID
from timesheet_vault.tests.utils.mock_transport import MockTransport


@pytest.fixture
def config() -> VaultConfig:
    return VaultConfig(client_id=CLIENT_ID)


@pytest.fixture
def token_store() -> TokenStore:
    return TokenStore()


@pytest.fixture
def authorized_store(token_store: TokenStore) -> TokenStore:
    token_store.set(AccessToken(access_token=ACCESS_TOKEN, scope="drive.file", expires_in=3599))
    return token_store


@pytest.fixture
def mock_transport() -> MockTransport:
    return MockTransport()


@pytest_asyncio.fixture
async def http(
    config: VaultConfig, authorized_store: TokenStore, mock_transport: MockTransport
) -> AsyncIterator[AsyncHttpClient]:
    async with AsyncHttpClient(config, authorized_store, transport=mock_transport) as client:
        yield client


@pytest.fixture
def mock_identity() -> Mock:
    identity = Mock()
    identity.initialize = AsyncMock()
    identity.request_token = AsyncMock(
        return_value={"access_token": ACCESS_TOKEN, "expires_in": 3599, "token_type": "Bearer"}
    )
    identity.revoke = AsyncMock()
    return identity
