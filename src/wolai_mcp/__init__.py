"""Wolai MCP Server Package

A Model Context Protocol (MCP) server for the Wolai open API, with a shared
token cache so tools can run without passing a token on every call.
"""

from .auth import AuthManager, get_auth_manager
from .blocks import BlockService, get_block_service
from .client import WolaiClient, get_client
from .config import Config, get_config
from .consts import PACKAGE_VERSION
from .databases import DatabaseService, get_database_service
from .exceptions import (
    ConfigError,
    InvalidParameterError,
    MissingCredentialError,
    WolaiMCPError,
)
from .token_cache import TokenCache, get_token_cache

__version__ = PACKAGE_VERSION

__all__ = [
    "__version__",
    "get_config",
    "get_client",
    "get_token_cache",
    "get_auth_manager",
    "get_block_service",
    "get_database_service",
    "Config",
    "WolaiClient",
    "TokenCache",
    "AuthManager",
    "BlockService",
    "DatabaseService",
    "WolaiMCPError",
    "ConfigError",
    "MissingCredentialError",
    "InvalidParameterError",
]
