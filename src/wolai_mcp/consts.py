"""High-value constants for the Wolai MCP package."""

# Package metadata
PACKAGE_VERSION = "0.3.0"
SERVER_NAME = "wolai-mcp"
USER_AGENT = f"{SERVER_NAME}/{PACKAGE_VERSION}"

# External API contract consts
TOKEN_URL_PATH = "/v1/token"
BLOCKS_URL_PATH = "/v1/blocks"
DATABASES_URL_PATH = "/v1/databases"

# Wolai reports a token that never expires with this expire_time
NO_EXPIRATION = -1
