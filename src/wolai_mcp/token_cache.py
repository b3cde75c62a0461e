"""In-memory single-slot token cache with lazy expiry."""

import logging
import threading
from collections.abc import Callable
from datetime import UTC, datetime
from functools import cache

from .models import Credential

logger = logging.getLogger("wolai-mcp.token_cache")


def _utc_now() -> datetime:
    return datetime.now(UTC)


class TokenCache:
    """Holds at most one token and decides whether it is still safe to use.

    States are ``Empty`` and ``Holding(token, expires_at)``. ``store`` always
    replaces the held credential, ``clear`` always empties the slot, and
    expiry is only discovered on ``read``: an expired credential is dropped
    by the read that finds it, there is no background timer.

    All four operations take an internal lock and never do I/O, so they are
    safe to call from the event loop and from worker threads alike.
    """

    def __init__(self, clock: Callable[[], datetime] = _utc_now):
        """Initialize an empty TokenCache.

        Args:
            clock: Returns the current time as an aware datetime. Tests
                inject a fake clock to move time without sleeping.
        """
        self._clock = clock
        self._lock = threading.Lock()
        self._credential: Credential | None = None

    def store(self, token: str, expires_at: datetime | None = None) -> None:
        """Replace the cached credential.

        Args:
            token: Token value. An empty token is not a credential, so
                storing one leaves the cache empty.
            expires_at: Absolute expiry, or None if the token never expires.
                A time already in the past is accepted; the next read drops it.
        """
        with self._lock:
            if not token:
                logger.debug("Empty token stored, cache cleared")
                self._credential = None
                return
            self._credential = Credential(token=token, expires_at=expires_at)
        logger.debug(
            "Token cached (expires_at=%s)",
            expires_at.isoformat() if expires_at else "never",
        )

    def read(self) -> str | None:
        """Return the cached token, or None if the cache is empty or expired.

        Reading an expired credential clears the cache.
        """
        with self._lock:
            credential = self._credential
            if credential is None:
                return None
            if credential.is_expired(self._clock()):
                self._credential = None
                logger.debug("Cached token expired, cache cleared")
                return None
            return credential.token

    def clear(self) -> None:
        """Empty the cache. Safe to call when already empty."""
        with self._lock:
            self._credential = None
        logger.debug("Token cache cleared")

    def discard(self, token: str) -> None:
        """Empty the cache only if it still holds ``token``.

        A token stored after ``token`` was read is left in place.
        """
        with self._lock:
            if self._credential is None or self._credential.token != token:
                return
            self._credential = None
        logger.debug("Rejected token discarded from cache")

    def is_valid(self) -> bool:
        """True if read() would return a token."""
        return self.read() is not None


@cache
def get_token_cache() -> TokenCache:
    """Get the process-wide TokenCache shared by all tools."""
    return TokenCache()
