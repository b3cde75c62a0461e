"""Wolai client — handles low-level API calls."""

import logging
from functools import cache
from typing import Any

import httpx

from .config import Config, get_config
from .consts import USER_AGENT
from .exceptions import MissingCredentialError
from .protocols import TokenStore
from .token_cache import get_token_cache

logger = logging.getLogger("wolai-mcp.client")


class WolaiClient:
    """Wolai API client with token resolution.

    Responsibilities:
    - Resolve the token for each call (explicit, else cached)
    - Provide JSON HTTP methods
    - Drop a cached token the server has rejected
    """

    def __init__(
        self,
        config: Config | None = None,
        token_store: TokenStore | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize WolaiClient.

        Args:
            config: Config instance. If None, uses get_config().
            token_store: Token cache. If None, uses the process-wide cache.
            http_client: HTTP client. If None, creates a new one.
        """
        self.config = config or get_config()
        self.token_store = token_store or get_token_cache()

        self.http_client = http_client or httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT, "Content-Type": "application/json"},
            timeout=self.config.timeout_seconds,
            follow_redirects=True,
        )

        logger.info(f"Wolai client created for {self.config.base_url}")

    async def __aenter__(self) -> "WolaiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self.http_client.aclose()

    def resolve_token(self, token: str | None = None) -> tuple[str, bool]:
        """Pick the token for a protected call.

        Args:
            token: Explicit token. Takes precedence over the cache.

        Returns:
            (token, from_cache) tuple.

        Raises:
            MissingCredentialError: If no token is passed and none is cached.
        """
        if token:
            return token, False

        cached = self.token_store.read()
        if cached is None:
            raise MissingCredentialError(
                "No token available - obtain one first",
                suggestions=[
                    "Call get_token to obtain a token",
                    "Or pass a token explicitly",
                ],
            )
        return cached, True

    async def get_json(self, url: str, token: str | None = None, **kwargs) -> Any:
        """Get JSON from URL with authentication.

        Args:
            url: Complete URL to fetch.
            token: Explicit token. If None, the cached token is used.
            **kwargs: Additional arguments for httpx.get.

        Returns:
            Parsed JSON data.

        Raises:
            MissingCredentialError: If no token is available.
            httpx.HTTPStatusError: For HTTP 4xx/5xx responses.
            httpx.RequestError: For network errors, timeouts, DNS failures.
        """
        return await self._send("GET", url, token, **kwargs)

    async def post_json(self, url: str, token: str | None = None, **kwargs) -> Any:
        """Post JSON to URL with authentication.

        Raises:
            MissingCredentialError: If no token is available.
            httpx.HTTPStatusError: For HTTP 4xx/5xx responses.
            httpx.RequestError: For network errors, timeouts, DNS failures.
        """
        return await self._send("POST", url, token, **kwargs)

    async def put_json(self, url: str, token: str | None = None, **kwargs) -> Any:
        """Put to URL with authentication and parse the JSON response.

        Raises:
            MissingCredentialError: If no token is available.
            httpx.HTTPStatusError: For HTTP 4xx/5xx responses.
            httpx.RequestError: For network errors, timeouts, DNS failures.
        """
        return await self._send("PUT", url, token, **kwargs)

    async def _send(self, method: str, url: str, token: str | None, **kwargs) -> Any:
        token, from_cache = self.resolve_token(token)

        headers = kwargs.pop("headers", {})
        # Wolai expects the raw token, not "Bearer <token>"
        headers["Authorization"] = token

        send = getattr(self.http_client, method.lower())
        logger.debug(f"{method} {url}")
        response = await send(url, headers=headers, **kwargs)
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            if from_cache and e.response.status_code == 401:
                logger.warning("Cached token rejected by Wolai, discarding it")
                self.token_store.discard(token)
            raise
        logger.debug(f"{method} {url} successful")
        return response.json()


@cache
def get_client() -> WolaiClient:
    """Get a cached WolaiClient instance with default configuration.

    Raises:
        No exceptions raised directly.
        May propagate exceptions from Config() initialization via get_config().
    """
    return WolaiClient()
