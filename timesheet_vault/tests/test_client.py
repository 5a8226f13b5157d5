from unittest.mock import Mock

import pytest

from timesheet_vault import TimesheetVaultClient
from timesheet_vault.config import VaultConfig
from timesheet_vault.crypto.cipher import OpenSSLAesCipher
from timesheet_vault.exceptions import AuthorizationRequiredError, UninitializedError
from timesheet_vault.models.auth import AuthState
from timesheet_vault.tests.utils.constants import ACCESS_TOKEN, FILE_ID, FOLDER_ID
from timesheet_vault.tests.utils.mock_transport import MockTransport


@pytest.mark.asyncio
async def test_client_lifecycle(config: VaultConfig, mock_identity: Mock, mock_transport: MockTransport) -> None:
    """Test initialize → authorize → save → sign out through the facade."""
    mock_transport.add_response(json_data={"files": [{"id": FOLDER_ID}]})
    mock_transport.add_response(json_data={"id": FILE_ID, "name": "attendance_entry_1.vocos"})
    states: list[AuthState] = []

    async with TimesheetVaultClient(config, identity=mock_identity, transport=mock_transport) as client:
        client.subscribe(lambda state, error: states.append(state))
        assert client.state is AuthState.UNAUTHORIZED

        await client.authorize()
        assert client.is_authorized

        remote = await client.save(name="Jane Doe", shift="Morning", hours="8", password="secret123")
        assert remote.file_id == FILE_ID
        assert all(r.headers["Authorization"] == f"Bearer {ACCESS_TOKEN}" for r in mock_transport.requests)

        await client.sign_out()
        assert client.state is AuthState.UNAUTHORIZED

    assert states == [AuthState.AUTHORIZED, AuthState.UNAUTHORIZED]
    mock_identity.revoke.assert_awaited_once_with(ACCESS_TOKEN)


@pytest.mark.asyncio
async def test_authorize_requires_initialize(config: VaultConfig, mock_identity: Mock) -> None:
    client = TimesheetVaultClient(config, identity=mock_identity)

    with pytest.raises(UninitializedError):
        await client.authorize()


@pytest.mark.asyncio
async def test_save_before_authorize_raises(
    config: VaultConfig, mock_identity: Mock, mock_transport: MockTransport
) -> None:
    async with TimesheetVaultClient(config, identity=mock_identity, transport=mock_transport) as client:
        with pytest.raises(AuthorizationRequiredError):
            await client.save(name="Jane Doe", shift="Morning", hours="8", password="secret123")

    assert mock_transport.requests == []


@pytest.mark.asyncio
async def test_close_drops_token(config: VaultConfig, mock_identity: Mock, mock_transport: MockTransport) -> None:
    client = TimesheetVaultClient(config, identity=mock_identity, transport=mock_transport)
    await client.initialize()
    await client.authorize()

    await client.close()

    assert client.auth.current_token() is None
    mock_identity.revoke.assert_not_awaited()


def test_default_collaborators(config: VaultConfig) -> None:
    client = TimesheetVaultClient(config)

    assert client.state is AuthState.UNINITIALIZED
    assert client.auth.token_store.get() is None
    assert isinstance(client._cipher, OpenSSLAesCipher)


@pytest.mark.asyncio
async def test_client_can_be_entered_again_after_close(
    config: VaultConfig, mock_identity: Mock, mock_transport: MockTransport
) -> None:
    mock_transport.add_response(json_data={"files": [{"id": FOLDER_ID}]})
    mock_transport.add_response(json_data={"id": FILE_ID})
    client = TimesheetVaultClient(config, identity=mock_identity, transport=mock_transport)

    async with client:
        pass
    assert client.state is AuthState.UNINITIALIZED

    async with client:
        assert client.state is AuthState.UNAUTHORIZED
        await client.authorize()
        remote = await client.save(name="Jane Doe", shift="Morning", hours="8", password="secret123")

    assert remote.file_id == FILE_ID
    assert len(mock_transport.requests) == 2
