"""Drive-related API endpoints (list, create, multipart upload)."""

import json
import secrets
from typing import Any

from timesheet_vault.api.http_client import AsyncHttpClient


async def list_files(
    http: AsyncHttpClient,
    query: str,
    *,
    fields: str = "files(id)",
    spaces: str = "drive",
) -> list[dict[str, Any]]:
    """
    List files or folders matching a Drive search query.

    Args:
        http: Configured async HTTP client.
        query: Drive ``q`` search expression.
        fields: Partial response selector.
        spaces: Corpus to search.

    Returns:
        Matching file metadata dicts, in provider order.
    """
    response = await http.request(
        "GET",
        f"{http.config.api_url}/files",
        params={"q": query, "fields": fields, "spaces": spaces},
    )
    return response.get("files", [])


async def create_file(
    http: AsyncHttpClient,
    resource: dict[str, Any],
    *,
    fields: str = "id",
) -> dict[str, Any]:
    """Create a metadata-only file or folder and return its metadata."""
    return await http.request(
        "POST",
        f"{http.config.api_url}/files",
        json=resource,
        params={"fields": fields},
    )


async def upload_multipart(
    http: AsyncHttpClient,
    metadata: dict[str, Any],
    content: bytes,
    *,
    content_type: str,
    fields: str = "id,name,mimeType,webViewLink",
) -> dict[str, Any]:
    """
    Create a file with metadata and content in one request.

    Args:
        http: Configured async HTTP client.
        metadata: File resource (name, mimeType, parents).
        content: File bytes.
        content_type: Content type of the media part.
        fields: Partial response selector.

    Returns:
        Created file metadata.
    """
    body, multipart_type = build_multipart_body(metadata, content, content_type)
    return await http.request(
        "POST",
        http.config.upload_url,
        params={"uploadType": "multipart", "fields": fields},
        content=body,
        headers={"Content-Type": multipart_type},
    )


def build_multipart_body(
    metadata: dict[str, Any],
    content: bytes,
    content_type: str,
    *,
    boundary: str | None = None,
) -> tuple[bytes, str]:
    """
    Build a ``multipart/related`` body: JSON metadata part, then media part.

    Returns:
        Tuple of (body bytes, Content-Type header value).
    """
    boundary = boundary or f"vault_{secrets.token_hex(16)}"
    delimiter = f"--{boundary}\r\n".encode()
    body = b"".join(
        [
            delimiter,
            b"Content-Type: application/json; charset=UTF-8\r\n\r\n",
            json.dumps(metadata).encode(),
            b"\r\n",
            delimiter,
            f"Content-Type: {content_type}\r\n\r\n".encode(),
            content,
            b"\r\n",
            f"--{boundary}--\r\n".encode(),
        ]
    )
    return body, f"multipart/related; boundary={boundary}"
