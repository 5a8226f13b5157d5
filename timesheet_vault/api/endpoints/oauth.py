"""OAuth 2.0 token endpoints (code exchange, revocation)."""

from typing import Any

from timesheet_vault.api.http_client import AsyncHttpClient


async def exchange_code(
    http: AsyncHttpClient,
    *,
    code: str,
    code_verifier: str,
    redirect_uri: str,
) -> dict[str, Any]:
    """
    Exchange an authorization code for tokens.

    Args:
        http: Configured async HTTP client.
        code: Authorization code from the redirect.
        code_verifier: PKCE verifier matching the challenge sent at consent.
        redirect_uri: Redirect URI used at consent.

    Returns:
        Token response with access_token, expires_in, scope, token_type.
    """
    config = http.config
    form = {
        "grant_type": "authorization_code",
        "code": code,
        "code_verifier": code_verifier,
        "client_id": config.client_id,
        "redirect_uri": redirect_uri,
    }
    if config.client_secret:
        form["client_secret"] = config.client_secret
    return await http.request("POST", config.token_url, data=form, authenticated=False)


async def revoke_token(http: AsyncHttpClient, access_token: str) -> None:
    """Revoke an access token at the provider."""
    await http.request(
        "POST",
        http.config.revoke_url,
        data={"token": access_token},
        authenticated=False,
    )
