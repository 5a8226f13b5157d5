"""
Authentication-related domain models.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any, Self


class AuthState(StrEnum):
    """Authorization state rendered by the UI."""

    UNINITIALIZED = "uninitialized"
    UNAUTHORIZED = "unauthorized"
    AUTHORIZED = "authorized"


@dataclass(frozen=True, kw_only=True)
class AccessToken:
    """
    OAuth access token held by the TokenStore.

    Attributes:
        access_token: Bearer credential sent to the storage API.
        token_type: Token type, always "Bearer" for Google.
        expires_in: Lifetime in seconds reported by the provider.
        scope: Granted scope string.
        refresh_token: Refresh token, if the provider issued one.
        issued_at: When the token was received.
    """

    access_token: str
    token_type: str = "Bearer"
    expires_in: int | None = None
    scope: str = ""
    refresh_token: str | None = None
    issued_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> Self:
        """Build a token from a provider token response."""
        expires_in = data.get("expires_in")
        return cls(
            access_token=data.get("access_token", ""),
            token_type=data.get("token_type", "Bearer"),
            expires_in=int(expires_in) if expires_in is not None else None,
            scope=data.get("scope", ""),
            refresh_token=data.get("refresh_token"),
        )

    @property
    def is_usable(self) -> bool:
        """Non-empty bearer credential."""
        return bool(self.access_token)

    def __repr__(self) -> str:
        return f"AccessToken(token_type={self.token_type!r}, scope={self.scope!r})"
