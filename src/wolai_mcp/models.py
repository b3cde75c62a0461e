from datetime import UTC, datetime
from typing import Any, Literal

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .consts import NO_EXPIRATION
from .exceptions import WolaiMCPError

# =============================================================================
# UNIFIED RESPONSE MODEL
# =============================================================================
# Single response type for all service operations and MCP tools


class Response(BaseModel):
    """Unified response type for all service operations and MCP tools."""

    status: Literal["success", "error"] = Field(
        ..., description="Response status indicating outcome"
    )
    message: str = Field(..., description="Human-readable summary of the response")
    data: Any | None = Field(
        None,
        description="Response payload - can be dict, list, or any serializable type",
    )
    errors: list[str] = Field(
        default_factory=list, description="List of error messages"
    )
    suggestions: list[str] = Field(
        default_factory=list, description="Actionable suggestions for the user"
    )
    metadata: dict[str, Any] | None = Field(
        None, description="Additional context and domain-specific information"
    )

    @classmethod
    def from_error(cls, error: Exception) -> "Response":
        """Create Response from any Exception, with potentially helpful info for recovery.

        Args:
            error: Any Exception instance

        Returns:
            Response object with error details
        """
        if isinstance(error, WolaiMCPError):
            # Use rich context from WolaiMCPError
            return cls(
                status="error",
                message=error.message,
                errors=error.errors,
                suggestions=error.suggestions,
                metadata={**error.context, "exception_type": type(error).__name__},
            )
        elif isinstance(error, httpx.HTTPStatusError):
            status_code = error.response.status_code
            detail, error_code = _error_body(error.response)
            if status_code >= 500:
                message = f"Wolai server error ({status_code}): {detail}"
                suggestions = ["Try again later"]
            elif status_code == 401:
                message = f"Authentication failed ({status_code}): {detail}"
                suggestions = [
                    "Call get_token to obtain a new token",
                    "Use refresh_token if the token has been compromised",
                ]
            elif status_code == 403:
                message = f"Permission denied ({status_code}): {detail}"
                suggestions = [
                    "Add the application to the page in the page collaboration settings",
                ]
            elif status_code == 404:
                message = f"Resource not found ({status_code}): {detail}"
                suggestions = [
                    "Check the id - it is the part of the page URL after wolai.com/",
                ]
            else:
                message = f"HTTP error ({status_code}): {detail}"
                suggestions = ["Check the request and try again"]

            metadata = {
                "exception_type": type(error).__name__,
                "status_code": status_code,
                "url": str(error.response.url),
            }
            if error_code is not None:
                metadata["error_code"] = error_code

            return cls(
                status="error",
                message=message,
                errors=[detail],
                suggestions=suggestions,
                metadata=metadata,
            )
        elif isinstance(error, httpx.RequestError):
            # Network/connection errors
            metadata = {"exception_type": type(error).__name__}
            if hasattr(error, "request") and hasattr(error.request, "url"):
                metadata["url"] = str(error.request.url)

            return cls(
                status="error",
                message=f"Network error: {str(error)}",
                errors=[str(error)],
                suggestions=[
                    "Check your internet connection",
                    "Verify the Wolai API base URL is correct",
                    "Try again - this may be a temporary network issue",
                ],
                metadata=metadata,
            )
        else:
            # Generic exception handling
            return cls(
                status="error",
                message=f"Unexpected error: {str(error)}",
                errors=[str(error)],
                suggestions=[
                    "Check server logs for detailed information",
                    "Try again - this may be a temporary issue",
                ],
                metadata={"exception_type": type(error).__name__},
            )


def _error_body(response: httpx.Response) -> tuple[str, Any]:
    """Extract (message, error_code) from a Wolai error response.

    Falls back to the HTTP reason phrase when the body is not a JSON object.
    """
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and body.get("message"):
        return str(body["message"]), body.get("error_code")
    return response.reason_phrase or f"HTTP {response.status_code}", None


# =============================================================================
# CREDENTIAL MODELS
# =============================================================================


def _as_utc(value: datetime) -> datetime:
    """Read naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class Credential(BaseModel):
    """A token together with the instant after which it must not be used."""

    model_config = ConfigDict(frozen=True)

    token: str = Field(..., description="Opaque token sent as the Authorization header")
    expires_at: datetime | None = Field(
        None, description="Absolute expiry (UTC); None means the token never expires"
    )

    @field_validator("expires_at")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value) if value is not None else None

    def is_expired(self, now: datetime) -> bool:
        """True when the credential is no longer usable at ``now``."""
        return self.expires_at is not None and _as_utc(now) >= self.expires_at


class TokenData(BaseModel):
    """The ``data`` object of a Wolai token issue/refresh response."""

    model_config = ConfigDict(extra="allow")

    app_token: str = Field(..., description="Token to send as the Authorization header")
    app_id: str | None = Field(None, description="Application the token belongs to")
    create_time: int | None = Field(None, description="Creation time (ms epoch)")
    expire_time: int | None = Field(
        NO_EXPIRATION,
        description="Expiry time (ms epoch), -1 or null if it never expires",
    )
    update_time: int | None = Field(None, description="Last update time (ms epoch)")

    @property
    def expires_at(self) -> datetime | None:
        """Expiry as an aware datetime, or None for a token that never expires."""
        if self.expire_time is None or self.expire_time == NO_EXPIRATION:
            return None
        return datetime.fromtimestamp(self.expire_time / 1000, UTC)
