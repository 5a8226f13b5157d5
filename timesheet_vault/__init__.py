"""
Timesheet Vault.

An async Python client that encrypts timesheet entries with a password and
saves them to a dedicated Google Drive folder.

Example:
    ```python
    from timesheet_vault import TimesheetVaultClient, VaultConfig

    config = VaultConfig(client_id="1234.apps.googleusercontent.com")
    async with TimesheetVaultClient(config) as client:
        await client.authorize()
        remote = await client.save(
            name="Jane Doe", shift="Morning", hours="8", password="secret123"
        )
        print(remote.file_id, remote.web_view_link)
    ```
"""

from timesheet_vault.client import TimesheetVaultClient
from timesheet_vault.config import VaultConfig
from timesheet_vault.exceptions import (
    AuthenticationError,
    AuthorizationFailedError,
    AuthorizationRequiredError,
    CryptoError,
    NetworkError,
    RemoteError,
    SaveInProgressError,
    UninitializedError,
    ValidationError,
    VaultError,
)
from timesheet_vault.models.auth import AccessToken, AuthState
from timesheet_vault.models.drive import FolderHandle, RemoteFile
from timesheet_vault.models.record import AttendanceRecord, Shift

__version__ = "0.1.0"

__all__ = [
    # Main client
    "TimesheetVaultClient",
    "VaultConfig",
    # Models
    "AccessToken",
    "AuthState",
    "AttendanceRecord",
    "Shift",
    "FolderHandle",
    "RemoteFile",
    # Exceptions
    "VaultError",
    "ValidationError",
    "AuthenticationError",
    "UninitializedError",
    "AuthorizationFailedError",
    "AuthorizationRequiredError",
    "RemoteError",
    "NetworkError",
    "CryptoError",
    "SaveInProgressError",
]
