"""
Business logic services for Timesheet Vault.
"""

from timesheet_vault.services.auth_service import AuthController
from timesheet_vault.services.folder_service import FolderResolver
from timesheet_vault.services.upload_service import UploadPipeline

__all__ = [
    "AuthController",
    "FolderResolver",
    "UploadPipeline",
]
