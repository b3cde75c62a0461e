"""Wolai MCP custom exceptions.

Exception Design Principles:
1. Use these custom exceptions only when additional useful context can be provided
2. Handle exceptions as late as possible (preserve details until domain context is available)
3. Split on domain of actionable information:
   - Recoverable by user reconfiguration outside session (ConfigError)
   - Potentially recoverable by LLM action in-session (MissingCredentialError,
     InvalidParameterError)
"""


class WolaiMCPError(Exception):
    """Base exception for all Wolai MCP errors.

    Provides rich context and actionable suggestions beyond standard exceptions.
    All Wolai MCP custom exceptions inherit from this base class.
    """

    def __init__(
        self,
        message: str,  # the error message
        *,
        errors: list[str] = None,  # detailed list of errors (if available)
        suggestions: list[str] = None,  # remedial actions
        context: dict = None,  # additional detailed context
    ):
        """Initialize WolaiMCPError.

        Args:
            message: Primary error message for users
            errors: List of specific error details
            suggestions: List of actionable suggestions for resolution
            context: Additional context information as key-value pairs
        """
        super().__init__(message)
        self.message = message
        self.errors = errors or []
        self.suggestions = suggestions or []
        self.context = context or {}


class ConfigError(WolaiMCPError):
    """Application configuration errors - recoverable by user reconfiguration.

    Covers setup issues that can be resolved by user action outside the
    current session:
    - Missing app id or app secret when obtaining a token
    - Missing default parent block or database when none is passed

    Does NOT include runtime HTTP errors (401, 403, 5xx) - those remain as
    httpx exceptions and are handled in Response.from_error().
    """

    pass


class MissingCredentialError(WolaiMCPError):
    """No token was passed and none is cached - recoverable in-session.

    Raised by protected operations that were not given an explicit token
    when the token cache is empty or its token has expired. The caller
    recovers by calling get_token (or passing a token explicitly).
    """

    pass


class InvalidParameterError(WolaiMCPError):
    """A required tool parameter is missing or malformed - recoverable in-session.

    Examples: empty block id, empty blocks array, rows that are not objects.
    """

    pass
