import json

import httpx
import pytest

from timesheet_vault.api.http_client import AsyncHttpClient
from timesheet_vault.exceptions import AuthorizationRequiredError, RemoteError
from timesheet_vault.models.drive import FOLDER_MIME_TYPE
from timesheet_vault.services.folder_service import FolderResolver, folder_query
from timesheet_vault.tests.utils.constants import FOLDER_ID
from timesheet_vault.tests.utils.mock_transport import MockTransport

FOLDER_NAME = "HR_Attendance_Data"


@pytest.fixture
def resolver(http: AsyncHttpClient) -> FolderResolver:
    return FolderResolver(http)


def test_folder_query_matches_name_type_and_trash() -> None:
    assert folder_query(FOLDER_NAME) == (
        "name = 'HR_Attendance_Data' and "
        "mimeType = 'application/vnd.google-apps.folder' and trashed = false"
    )


def test_folder_query_escapes_quotes_and_backslashes() -> None:
    assert folder_query("Bob's \\data").startswith("name = 'Bob\\'s \\\\data' and")


@pytest.mark.asyncio
async def test_existing_folder_is_reused(resolver: FolderResolver, mock_transport: MockTransport) -> None:
    mock_transport.add_response(json_data={"files": [{"id": FOLDER_ID}]})

    folder = await resolver.resolve(FOLDER_NAME)

    assert folder.folder_id == FOLDER_ID
    assert folder.name == FOLDER_NAME
    assert len(mock_transport.requests) == 1
    request = mock_transport.requests[0]
    assert request.method == "GET"
    assert request.url.path == "/drive/v3/files"
    assert request.url.params["q"] == folder_query(FOLDER_NAME)
    assert request.url.params["spaces"] == "drive"
    assert request.url.params["fields"] == "files(id)"


@pytest.mark.asyncio
async def test_missing_folder_is_created(resolver: FolderResolver, mock_transport: MockTransport) -> None:
    mock_transport.add_response(json_data={"files": []})
    mock_transport.add_response(json_data={"id": FOLDER_ID})

    folder = await resolver.resolve(FOLDER_NAME)

    assert folder.folder_id == FOLDER_ID
    create = mock_transport.requests[1]
    assert create.method == "POST"
    assert json.loads(create.content) == {"name": FOLDER_NAME, "mimeType": FOLDER_MIME_TYPE}


@pytest.mark.asyncio
async def test_second_resolve_finds_created_folder(
    resolver: FolderResolver, mock_transport: MockTransport
) -> None:
    mock_transport.add_response(json_data={"files": []})
    mock_transport.add_response(json_data={"id": FOLDER_ID})
    mock_transport.add_response(json_data={"files": [{"id": FOLDER_ID}]})

    first = await resolver.resolve(FOLDER_NAME)
    second = await resolver.resolve(FOLDER_NAME)

    assert first == second
    methods = [r.method for r in mock_transport.requests]
    assert methods == ["GET", "POST", "GET"]


@pytest.mark.asyncio
async def test_duplicate_folders_use_first_match(
    resolver: FolderResolver, mock_transport: MockTransport
) -> None:
    mock_transport.add_response(json_data={"files": [{"id": "F-first"}, {"id": "F-second"}]})

    folder = await resolver.resolve(FOLDER_NAME)

    assert folder.folder_id == "F-first"


@pytest.mark.asyncio
async def test_listing_without_id_raises(resolver: FolderResolver, mock_transport: MockTransport) -> None:
    mock_transport.add_response(json_data={"files": [{"name": FOLDER_NAME}]})

    with pytest.raises(RemoteError, match="without id"):
        await resolver.resolve(FOLDER_NAME)


@pytest.mark.asyncio
async def test_creation_without_id_raises(resolver: FolderResolver, mock_transport: MockTransport) -> None:
    mock_transport.add_response(json_data={"files": []})
    mock_transport.add_response(json_data={})

    with pytest.raises(RemoteError, match="no id"):
        await resolver.resolve(FOLDER_NAME)


@pytest.mark.asyncio
async def test_rejected_token_raises_authorization_required(
    resolver: FolderResolver, mock_transport: MockTransport
) -> None:
    mock_transport.add_response(
        status_code=httpx.codes.UNAUTHORIZED, json_data={"error": {"code": 401}}
    )

    with pytest.raises(AuthorizationRequiredError):
        await resolver.resolve(FOLDER_NAME)

    assert len(mock_transport.requests) == 1


@pytest.mark.asyncio
async def test_list_failure_raises_remote_error(
    resolver: FolderResolver, mock_transport: MockTransport
) -> None:
    mock_transport.add_response(status_code=httpx.codes.FORBIDDEN, json_data={"error": "rateLimitExceeded"})

    with pytest.raises(RemoteError) as exc_info:
        await resolver.resolve(FOLDER_NAME)

    assert exc_info.value.status == 403
