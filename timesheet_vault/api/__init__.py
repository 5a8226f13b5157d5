"""
Google API client layer.

Provides async HTTP communication with the Drive and OAuth endpoints.
"""

from timesheet_vault.api.http_client import AsyncHttpClient, sanitize_for_log

__all__ = ["AsyncHttpClient", "sanitize_for_log"]
