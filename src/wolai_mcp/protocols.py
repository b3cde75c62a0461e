"""Protocol definitions for dependency injection and interface contracts."""

from datetime import datetime
from typing import Protocol


class TokenStore(Protocol):
    """Protocol for the store that holds the current token."""

    def store(self, token: str, expires_at: datetime | None = None) -> None:
        """Replace the held token."""
        ...

    def read(self) -> str | None:
        """Return the held token if it is still valid, else None."""
        ...

    def clear(self) -> None:
        """Drop the held token."""
        ...

    def discard(self, token: str) -> None:
        """Drop the held token only if it is ``token``."""
        ...

    def is_valid(self) -> bool:
        """True if read() would return a token."""
        ...
