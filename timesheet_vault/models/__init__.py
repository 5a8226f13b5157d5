"""
Domain models for Timesheet Vault.

These are immutable (frozen) dataclasses representing the core domain concepts.
"""

from timesheet_vault.models.auth import AccessToken, AuthState
from timesheet_vault.models.drive import FOLDER_MIME_TYPE, FolderHandle, RemoteFile
from timesheet_vault.models.record import AttendanceRecord, Shift

__all__ = [
    # Auth
    "AccessToken",
    "AuthState",
    # Drive
    "FOLDER_MIME_TYPE",
    "FolderHandle",
    "RemoteFile",
    # Records
    "AttendanceRecord",
    "Shift",
]
