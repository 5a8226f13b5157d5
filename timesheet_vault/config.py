"""
Timesheet Vault client configuration.
"""

import os
from dataclasses import dataclass
from typing import Any, Self

DRIVE_FILE_SCOPE = "https://www.googleapis.com/auth/drive.file"


@dataclass(frozen=True, kw_only=True)
class VaultConfig:
    """
    Attributes:
        client_id: OAuth client identifier registered with Google.
        client_secret: OAuth client secret, only for clients that need one.
        scope: OAuth scope, restricted to files the app itself creates.
        api_url: Base URL of the Drive REST API.
        upload_url: Multipart upload endpoint.
        auth_url: OAuth consent page.
        token_url: OAuth code exchange endpoint.
        revoke_url: OAuth token revocation endpoint.
        folder_name: Drive folder receiving the encrypted entries.
        file_prefix: Prefix of uploaded file names.
        file_extension: Extension of uploaded file names.
        file_mime_type: Content type of uploaded files.
        timeout: Request timeout in seconds.
        redirect_port: Loopback port for the OAuth redirect (0 picks a free port).
        authorization_timeout: Maximum wait for the user to finish consent, in seconds.
        reject_concurrent_saves: Reject a save while another one is in flight.
    """

    client_id: str
    client_secret: str | None = None
    scope: str = DRIVE_FILE_SCOPE
    api_url: str = "https://www.googleapis.com/drive/v3"
    upload_url: str = "https://www.googleapis.com/upload/drive/v3/files"
    auth_url: str = "https://accounts.google.com/o/oauth2/v2/auth"
    token_url: str = "https://oauth2.googleapis.com/token"
    revoke_url: str = "https://oauth2.googleapis.com/revoke"
    folder_name: str = "HR_Attendance_Data"
    file_prefix: str = "attendance_entry_"
    file_extension: str = ".vocos"
    file_mime_type: str = "text/plain"
    timeout: float = 30.0
    redirect_port: int = 0
    authorization_timeout: float = 300.0
    reject_concurrent_saves: bool = True

    def __post_init__(self) -> None:
        if not self.client_id:
            msg = "client_id must not be empty"
            raise ValueError(msg)
        if not self.folder_name:
            msg = "folder_name must not be empty"
            raise ValueError(msg)
        if self.timeout <= 0:
            msg = "timeout must be positive"
            raise ValueError(msg)
        if self.authorization_timeout <= 0:
            msg = "authorization_timeout must be positive"
            raise ValueError(msg)
        if not 0 <= self.redirect_port <= 65535:
            msg = "redirect_port must be between 0 and 65535"
            raise ValueError(msg)

    @classmethod
    def from_env(cls, **overrides: Any) -> Self:
        """
        Build a config from ``TIMESHEET_VAULT_*`` environment variables.

        Args:
            overrides: Field values taking precedence over the environment.
                ``None`` values are ignored.

        Raises:
            ValueError: If the client id is missing or a value is invalid.
        """
        kwargs: dict[str, Any] = {
            "client_id": os.environ.get("TIMESHEET_VAULT_CLIENT_ID", ""),
            "client_secret": os.environ.get("TIMESHEET_VAULT_CLIENT_SECRET") or None,
        }
        if folder := os.environ.get("TIMESHEET_VAULT_FOLDER"):
            kwargs["folder_name"] = folder
        if port := os.environ.get("TIMESHEET_VAULT_REDIRECT_PORT"):
            kwargs["redirect_port"] = int(port)
        if timeout := os.environ.get("TIMESHEET_VAULT_TIMEOUT"):
            kwargs["timeout"] = float(timeout)
        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)
