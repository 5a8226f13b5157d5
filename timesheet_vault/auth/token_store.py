"""
In-memory holder for the current OAuth access token.
"""

from timesheet_vault.models.auth import AccessToken


class TokenStore:
    """
    Holds at most one access token.

    Written only by AuthController; read by the HTTP layer and services.
    Never persisted.
    """

    def __init__(self) -> None:
        self._token: AccessToken | None = None

    def get(self) -> AccessToken | None:
        return self._token

    def set(self, token: AccessToken) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None

    @property
    def has_token(self) -> bool:
        """True iff a token with a non-empty access token is held."""
        return self._token is not None and self._token.is_usable
