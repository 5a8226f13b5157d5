"""
Token storage and identity provider adapters.

Identity providers live in ``timesheet_vault.auth.identity``; they depend on
the HTTP layer, which itself reads the TokenStore, so only the store is
re-exported here.
"""

from timesheet_vault.auth.token_store import TokenStore

__all__ = ["TokenStore"]
