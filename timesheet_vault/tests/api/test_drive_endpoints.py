import json

import pytest

from timesheet_vault.api.endpoints.drive import (
    build_multipart_body,
    create_file,
    list_files,
    upload_multipart,
)
from timesheet_vault.api.http_client import AsyncHttpClient
from timesheet_vault.tests.utils.mock_transport import MockTransport


@pytest.mark.asyncio
async def test_list_files_sends_query_and_fields(
    http: AsyncHttpClient, mock_transport: MockTransport
) -> None:
    mock_transport.add_response(json_data={"files": [{"id": "F1"}, {"id": "F2"}]})

    files = await list_files(http, "name = 'x'")

    request = mock_transport.requests[0]
    assert request.method == "GET"
    assert request.url.path == "/drive/v3/files"
    assert request.url.params["q"] == "name = 'x'"
    assert request.url.params["fields"] == "files(id)"
    assert request.url.params["spaces"] == "drive"
    assert files == [{"id": "F1"}, {"id": "F2"}]


@pytest.mark.asyncio
async def test_list_files_without_files_key_returns_empty(
    http: AsyncHttpClient, mock_transport: MockTransport
) -> None:
    mock_transport.add_response(json_data={})

    assert await list_files(http, "name = 'x'") == []


@pytest.mark.asyncio
async def test_create_file_posts_resource(http: AsyncHttpClient, mock_transport: MockTransport) -> None:
    mock_transport.add_response(json_data={"id": "F9"})

    result = await create_file(http, {"name": "HR_Attendance_Data"})

    request = mock_transport.requests[0]
    assert request.method == "POST"
    assert request.url.params["fields"] == "id"
    assert json.loads(request.content) == {"name": "HR_Attendance_Data"}
    assert result == {"id": "F9"}


@pytest.mark.asyncio
async def test_upload_multipart_posts_related_body(
    http: AsyncHttpClient, mock_transport: MockTransport
) -> None:
    mock_transport.add_response(json_data={"id": "X1"})

    result = await upload_multipart(
        http, {"name": "a.vocos", "parents": ["F1"]}, b"CIPHERTEXT", content_type="text/plain"
    )

    request = mock_transport.requests[0]
    assert request.url.host == "www.googleapis.com"
    assert request.url.path == "/upload/drive/v3/files"
    assert request.url.params["uploadType"] == "multipart"
    assert request.headers["content-type"].startswith("multipart/related; boundary=")
    assert request.headers["authorization"] == "Bearer T1"
    assert b"CIPHERTEXT" in request.content
    assert result == {"id": "X1"}


def test_build_multipart_body_layout() -> None:
    body, content_type = build_multipart_body(
        {"name": "a.vocos"}, b"payload", "text/plain", boundary="b0"
    )

    assert content_type == "multipart/related; boundary=b0"
    assert body == (
        b"--b0\r\n"
        b"Content-Type: application/json; charset=UTF-8\r\n\r\n"
        b'{"name": "a.vocos"}\r\n'
        b"--b0\r\n"
        b"Content-Type: text/plain\r\n\r\n"
        b"payload\r\n"
        b"--b0--\r\n"
    )
