"""Database service for reading Wolai databases and inserting rows."""

import logging
from functools import cache
from typing import Any

from .client import WolaiClient, get_client
from .exceptions import ConfigError
from .utils import require_id, require_objects, unwrap_data

logger = logging.getLogger("wolai-mcp.databases")


class DatabaseService:
    """Database operations: retrieve a database, insert rows.

    Databases themselves cannot be created through the API; rows can only
    be inserted into a database that already exists in Wolai.
    """

    def __init__(self, client: WolaiClient):
        self.client = client
        self.config = client.config

    async def get_database(self, database_id: str, token: str | None = None) -> Any:
        """Retrieve a database by id.

        Raises:
            MissingCredentialError: If no token is available.
            InvalidParameterError: If database_id is empty.
            httpx.HTTPError: For HTTP/network errors.
        """
        database_id = require_id(database_id, "Database ID")

        logger.info(f"Retrieving database {database_id}")
        payload = await self.client.get_json(
            f"{self.config.databases_url}/{database_id}", token=token
        )
        return unwrap_data(payload)

    async def create_rows(
        self,
        rows: list[dict[str, Any]],
        database_id: str | None = None,
        token: str | None = None,
    ) -> Any:
        """Insert rows into an existing database.

        Args:
            rows: Row objects keyed by column name.
            database_id: Target database. Defaults to WOLAI_DATABASE_ID.
            token: Explicit token. Defaults to the cached token.

        Raises:
            ConfigError: If no database id is passed or configured.
            MissingCredentialError: If no token is available.
            InvalidParameterError: If rows is empty or malformed.
            httpx.HTTPError: For HTTP/network errors.
        """
        database_id = database_id or self.config.database_id
        if not database_id:
            raise ConfigError(
                "Database ID is required",
                suggestions=[
                    "Pass database_id or set the WOLAI_DATABASE_ID environment variable"
                ],
            )
        rows = require_objects(rows, "rows")

        logger.info(f"Inserting {len(rows)} row(s) into database {database_id}")
        payload = await self.client.post_json(
            f"{self.config.databases_url}/{database_id}/rows",
            token=token,
            json={"rows": rows},
        )
        return unwrap_data(payload)


@cache
def get_database_service() -> DatabaseService:
    """Get a cached DatabaseService bound to the default client."""
    return DatabaseService(get_client())
