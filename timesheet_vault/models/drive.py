"""
Drive-related domain models.
"""

from dataclasses import dataclass, field
from typing import Any, Self

FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"


@dataclass(frozen=True, kw_only=True)
class FolderHandle:
    """A Drive folder resolved by name."""

    folder_id: str
    name: str


@dataclass(frozen=True, kw_only=True)
class RemoteFile:
    """
    File created by an upload.

    Attributes:
        file_id: Drive file ID.
        name: File name, when returned.
        mime_type: Content type, when returned.
        web_view_link: Link to open the file in Drive, when returned.
        raw: Full JSON response.
    """

    file_id: str
    name: str | None = None
    mime_type: str | None = None
    web_view_link: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> Self:
        return cls(
            file_id=data["id"],
            name=data.get("name"),
            mime_type=data.get("mimeType"),
            web_view_link=data.get("webViewLink"),
            raw=data,
        )
