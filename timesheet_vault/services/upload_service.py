"""
Encrypted timesheet upload service.

Builds the record, encrypts it, resolves the target folder and uploads the
ciphertext with a multipart request.
"""

import time
from collections.abc import Callable
from datetime import date, datetime, timezone

import structlog

from timesheet_vault.api.endpoints.drive import upload_multipart
from timesheet_vault.api.http_client import AsyncHttpClient
from timesheet_vault.config import VaultConfig
from timesheet_vault.crypto.protocol import PasswordCipher
from timesheet_vault.exceptions import (
    AuthorizationRequiredError,
    RemoteError,
    SaveInProgressError,
    ValidationError,
)
from timesheet_vault.models.drive import RemoteFile
from timesheet_vault.models.record import AttendanceRecord
from timesheet_vault.services.auth_service import AuthController
from timesheet_vault.services.folder_service import FolderResolver

logger = structlog.get_logger(__name__)


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class UploadPipeline:
    """
    Service for saving one encrypted timesheet entry per call.

    Steps run strictly in order and nothing is rolled back on failure; a
    folder created during a failed save is simply reused by the next one.
    """

    def __init__(
        self,
        http: AsyncHttpClient,
        auth: AuthController,
        folder_resolver: FolderResolver,
        cipher: PasswordCipher,
        config: VaultConfig,
        *,
        today: Callable[[], date] = _utc_today,
        now_ms: Callable[[], int] = _now_ms,
    ) -> None:
        """
        Args:
            http: Async HTTP client.
            auth: Auth controller, checked before any network call.
            folder_resolver: Resolves the target folder by name.
            cipher: Password cipher for the CSV line.
            config: Folder name, file naming and concurrency settings.
            today: Clock for the record date.
            now_ms: Millisecond clock for the file name.
        """
        self._http = http
        self._auth = auth
        self._folder_resolver = folder_resolver
        self._cipher = cipher
        self._config = config
        self._today = today
        self._now_ms = now_ms
        self._in_flight = 0

    @property
    def in_flight(self) -> int:
        return self._in_flight

    async def save(self, *, name: str, shift: str, hours: str, password: str) -> RemoteFile:
        """
        Encrypt one entry and upload it to the configured Drive folder.

        Args:
            name: Employee name (surrounding whitespace ignored).
            shift: Shift label.
            hours: Hours worked, as entered.
            password: Encryption password (surrounding whitespace ignored).

        Returns:
            The created Drive file.

        Raises:
            ValidationError: If a field is empty. No network call is made.
            AuthorizationRequiredError: If no token is held or Drive returns 401.
            SaveInProgressError: If another save is running and concurrent
                saves are rejected.
            CryptoError: If encryption fails.
            RemoteError: If a Drive call fails.
        """
        name = (name or "").strip()
        password = (password or "").strip()
        shift = shift or ""
        hours = hours or ""

        fields = {"name": name, "shift": shift, "hours": hours, "password": password}
        missing = [field for field, value in fields.items() if not value]
        if missing:
            raise ValidationError(missing_fields=missing)

        if not self._auth.is_authorized:
            msg = "Not authorized. Authorize before saving."
            raise AuthorizationRequiredError(msg, status=None)

        if self._in_flight and self._config.reject_concurrent_saves:
            raise SaveInProgressError()

        self._in_flight += 1
        try:
            return await self._save(name=name, shift=shift, hours=hours, password=password)
        finally:
            self._in_flight -= 1

    async def _save(self, *, name: str, shift: str, hours: str, password: str) -> RemoteFile:
        record = AttendanceRecord(date=self._today(), name=name, shift=shift, hours=hours)
        ciphertext = self._cipher.encrypt(record.to_csv_line(), password)
        logger.debug("Record encrypted", date=record.date.isoformat())

        folder = await self._folder_resolver.resolve(self._config.folder_name)

        file_name = f"{self._config.file_prefix}{self._now_ms()}{self._config.file_extension}"
        metadata = {
            "name": file_name,
            "mimeType": self._config.file_mime_type,
            "parents": [folder.folder_id],
        }
        response = await upload_multipart(
            self._http,
            metadata,
            ciphertext.encode("utf-8"),
            content_type=self._config.file_mime_type,
        )

        if "id" not in response:
            msg = "Upload response carried no file id"
            raise RemoteError(msg, status=None, endpoint=self._config.upload_url)

        remote = RemoteFile.from_response(response)
        logger.info("File uploaded", file_id=remote.file_id, link=remote.web_view_link)
        return remote
