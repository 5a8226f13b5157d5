"""
Timesheet Vault exception hierarchy.

All exceptions inherit from VaultError for easy catching.
"""

from typing import Any


class VaultError(Exception):
    """Base exception for all timesheet_vault errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class ValidationError(VaultError):
    """One or more required form fields are empty."""

    def __init__(self, message: str = "Missing required fields", *, missing_fields: list[str]) -> None:
        super().__init__(message, missing_fields=missing_fields)
        self.missing_fields = missing_fields


class AuthenticationError(VaultError):
    """Authentication or authorization problem."""


class UninitializedError(AuthenticationError):
    """Identity client used before initialize() completed."""

    def __init__(self, message: str = "Identity client not initialized") -> None:
        super().__init__(message)


class AuthorizationFailedError(AuthenticationError):
    """The provider denied or failed the consent flow."""

    def __init__(self, message: str = "Authorization failed", *, reason: str | None = None) -> None:
        super().__init__(message, reason=reason)
        self.reason = reason


class AuthorizationRequiredError(AuthenticationError):
    """The held token is missing, stale or rejected (HTTP 401)."""

    def __init__(
        self,
        message: str = "Authorization required",
        *,
        status: int | None = 401,
        body: str | None = None,
    ) -> None:
        super().__init__(message, status=status)
        self.status = status
        self.body = body


class RemoteError(VaultError):
    """Storage or identity provider returned a non-success response."""

    def __init__(
        self,
        message: str,
        *,
        status: int | None,
        body: str | None = None,
        endpoint: str | None = None,
    ) -> None:
        super().__init__(message, status=status, endpoint=endpoint)
        self.status = status
        self.body = body
        self.endpoint = endpoint


class NetworkError(RemoteError):
    """Network-level error (connection failed, timeout)."""

    def __init__(self, message: str, *, endpoint: str | None = None) -> None:
        super().__init__(message, status=None, endpoint=endpoint)


class CryptoError(VaultError):
    """Encryption or decryption failed."""


class SaveInProgressError(VaultError):
    """A save is already running and concurrent saves are rejected."""

    def __init__(self, message: str = "A save is already in progress") -> None:
        super().__init__(message)
