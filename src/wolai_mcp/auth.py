"""Token issue and refresh against the Wolai token endpoint."""

import logging
from functools import cache

from pydantic import ValidationError

from .client import WolaiClient, get_client
from .exceptions import ConfigError, WolaiMCPError
from .models import TokenData

logger = logging.getLogger("wolai-mcp.auth")


class AuthManager:
    """Authentication token manager.

    Responsibilities:
    - Resolve app credentials from arguments or config
    - Request new tokens from the token endpoint
    - Write every newly obtained token into the token cache
    """

    def __init__(self, client: WolaiClient):
        """Initialize AuthManager.

        Args:
            client: WolaiClient whose HTTP client and token store are used.
        """
        self.client = client
        self.config = client.config

    async def issue_token(
        self, app_id: str | None = None, app_secret: str | None = None
    ) -> TokenData:
        """Obtain a token with the app id and secret and cache it.

        Args:
            app_id: Application ID. Defaults to WOLAI_APP_ID.
            app_secret: Application secret. Defaults to WOLAI_APP_SECRET.

        Returns:
            Token data from the response.

        Raises:
            ConfigError: If app id or secret is neither passed nor configured.
            WolaiMCPError: If the token response is malformed.
            httpx.HTTPStatusError: For HTTP 4xx/5xx responses.
            httpx.RequestError: For network errors.
        """
        app_id = app_id or self.config.app_id
        app_secret = app_secret or self.config.app_secret

        if not app_id:
            raise ConfigError(
                "App ID is required",
                suggestions=[
                    "Pass app_id or set the WOLAI_APP_ID environment variable"
                ],
            )
        if not app_secret:
            raise ConfigError(
                "App Secret is required",
                suggestions=[
                    "Pass app_secret or set the WOLAI_APP_SECRET environment variable"
                ],
            )

        logger.debug("Requesting new app token")
        # Issuing needs no Authorization header, so bypass client token resolution
        response = await self.client.http_client.post(
            self.config.token_url, json={"appId": app_id, "appSecret": app_secret}
        )
        response.raise_for_status()

        token_data = self._parse(response.json())
        self.client.token_store.store(token_data.app_token, token_data.expires_at)
        logger.info("Token obtained successfully")
        return token_data

    async def refresh_token(self, token: str | None = None) -> TokenData:
        """Reset a token and cache the new one.

        Args:
            token: Token to refresh. Defaults to the cached token.

        Returns:
            Token data from the response.

        Raises:
            MissingCredentialError: If no token is passed and none is cached.
            WolaiMCPError: If the token response is malformed.
            httpx.HTTPStatusError: For HTTP 4xx/5xx responses.
            httpx.RequestError: For network errors.
        """
        logger.debug("Refreshing app token")
        payload = await self.client.put_json(self.config.token_url, token=token)

        token_data = self._parse(payload)
        self.client.token_store.store(token_data.app_token, token_data.expires_at)
        logger.info("Token refreshed successfully")
        return token_data

    def _parse(self, payload) -> TokenData:
        """Validate the data object of a token response."""
        data = payload.get("data") if isinstance(payload, dict) else None
        try:
            return TokenData.model_validate(data)
        except ValidationError as e:
            logger.error("Malformed token response")
            raise WolaiMCPError(
                "Token endpoint returned a malformed token response",
                errors=[
                    f"{'.'.join(str(part) for part in err['loc']) or 'data'}: {err['msg']}"
                    for err in e.errors()
                ],
                suggestions=[
                    "This may indicate a Wolai API change",
                    "Check the app id and secret and try again",
                ],
                context={"token_url": self.config.token_url},
            ) from e


@cache
def get_auth_manager() -> AuthManager:
    """Get a cached AuthManager bound to the default client."""
    return AuthManager(get_client())
