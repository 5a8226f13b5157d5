"""
Folder lookup-or-create for the upload target.
"""

import structlog

from timesheet_vault.api.endpoints.drive import create_file, list_files
from timesheet_vault.api.http_client import AsyncHttpClient
from timesheet_vault.exceptions import RemoteError
from timesheet_vault.models.drive import FOLDER_MIME_TYPE, FolderHandle

logger = structlog.get_logger(__name__)


def folder_query(name: str) -> str:
    """Drive search expression for a non-trashed folder with an exact name."""
    escaped = name.replace("\\", "\\\\").replace("'", "\\'")
    return f"name = '{escaped}' and mimeType = '{FOLDER_MIME_TYPE}' and trashed = false"


class FolderResolver:
    """
    Resolves a folder name to its Drive ID, creating the folder if absent.

    Nothing is cached: each call queries Drive again. When several folders
    share the name, the first one Drive returns is used.
    """

    def __init__(self, http: AsyncHttpClient) -> None:
        self._http = http

    async def resolve(self, name: str) -> FolderHandle:
        """
        Args:
            name: Exact folder name.

        Returns:
            Handle of the existing or newly created folder.

        Raises:
            AuthorizationRequiredError: If Drive rejects the token.
            RemoteError: If a Drive call fails or returns no ID.
        """
        matches = await list_files(self._http, folder_query(name))
        if matches:
            if len(matches) > 1:
                logger.warning("Several folders share the name, using the first", count=len(matches))
            if not (folder_id := matches[0].get("id")):
                msg = "Folder listing returned an entry without id"
                raise RemoteError(msg, status=None, endpoint="files.list")
            logger.debug("Folder found", folder_id=folder_id)
            return FolderHandle(folder_id=folder_id, name=name)

        created = await create_file(self._http, {"name": name, "mimeType": FOLDER_MIME_TYPE})
        if not (folder_id := created.get("id")):
            msg = "Folder creation returned no id"
            raise RemoteError(msg, status=None, endpoint="files.create")

        logger.info("Folder created", folder_id=folder_id)
        return FolderHandle(folder_id=folder_id, name=name)
