"""Wolai MCP server implementation."""

import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from .auth import get_auth_manager
from .blocks import get_block_service
from .config import get_config
from .consts import SERVER_NAME
from .databases import get_database_service
from .models import Response, TokenData

logger = logging.getLogger("wolai-mcp.server")

mcp = FastMCP(
    name=SERVER_NAME,
    instructions="""
    Wolai MCP server.

    This MCP server allows you to:
    1. Obtain and refresh a Wolai app token.
    2. Read pages, blocks and databases in a Wolai workspace.
    3. Create blocks and insert database rows.

    Call get_token first. The token is cached and used by the other tools
    whenever no token is passed explicitly.
    """,
    log_level=get_config().log_level,
)


def _token_response(token_data: TokenData, message: str) -> Response:
    expires_at = token_data.expires_at
    return Response(
        status="success",
        message=message,
        data=token_data.model_dump(),
        suggestions=[
            "The token is cached - other tools use it when no token is passed",
            "Use app_token directly as the Authorization header value (not Bearer)",
        ],
        metadata={
            "expires_at": expires_at.isoformat() if expires_at else "never",
        },
    )


@mcp.tool()
async def get_token(app_id: str | None = None, app_secret: str | None = None) -> Response:
    """Obtain a token from the Wolai API.

    The response data contains "app_token" (the token to use), "app_id",
    "create_time", "expire_time" (-1 means no expiration) and "update_time".
    The token is cached for the other tools.

    Args:
        app_id: Application ID. If not provided, uses WOLAI_APP_ID.
        app_secret: Application secret. If not provided, uses WOLAI_APP_SECRET.

    Workflow: **Start here** → get_block / get_database → create_blocks / create_database_rows
    """
    logger.info("Obtaining app token")

    try:
        token_data = await get_auth_manager().issue_token(app_id, app_secret)
        return _token_response(token_data, "Token obtained and cached")
    except Exception as e:
        return Response.from_error(e)


@mcp.tool()
async def refresh_token(token: str | None = None) -> Response:
    """Refresh a Wolai token.

    Use this if your token has been compromised or needs to be reset. The
    new token replaces the cached one.

    Args:
        token: The token to refresh (app_token from get_token). Defaults to
            the cached token.
    """
    logger.info("Refreshing app token")

    try:
        token_data = await get_auth_manager().refresh_token(token)
        return _token_response(token_data, "Token refreshed and cached")
    except Exception as e:
        return Response.from_error(e)


@mcp.tool()
async def get_block(id: str, token: str | None = None) -> Response:
    """Retrieve a specific block from Wolai by its ID.

    Args:
        id: The ID of the block to retrieve. A page ID is the part of a
            Wolai page URL after wolai.com/.
        token: Wolai token. Defaults to the cached token from get_token.
    """
    logger.info(f"Retrieving block: {id}")

    try:
        block = await get_block_service().get_block(id, token)
        return Response(
            status="success",
            message=f"Block '{id}' retrieved",
            data=block,
            suggestions=["Use get_block_children to read the blocks inside it"],
            metadata={"block_id": id},
        )
    except Exception as e:
        return Response.from_error(e)


@mcp.tool()
async def get_block_children(
    id: str,
    token: str | None = None,
    start_cursor: str | None = None,
    page_size: int | None = None,
) -> Response:
    """Retrieve the children (sub-blocks) of a specific block.

    This is a paginated query. When more children exist, metadata carries
    has_more=true and the next_cursor to pass as start_cursor.

    Args:
        id: The ID of the parent block or page.
        token: Wolai token. Defaults to the cached token from get_token.
        start_cursor: Cursor returned by the previous page.
        page_size: Maximum number of children to return.
    """
    logger.info(f"Retrieving children of block: {id}")

    try:
        page = await get_block_service().get_block_children(
            id, token, start_cursor, page_size
        )
        suggestions = []
        if page["has_more"]:
            suggestions.append(
                "More children available - call again with start_cursor=next_cursor"
            )
        return Response(
            status="success",
            message=f"Children of block '{id}' retrieved",
            data=page["data"],
            suggestions=suggestions,
            metadata={
                "block_id": id,
                "has_more": page["has_more"],
                "next_cursor": page["next_cursor"],
            },
        )
    except Exception as e:
        return Response.from_error(e)


@mcp.tool()
async def create_blocks(
    blocks: list[dict[str, Any]],
    parent_id: str | None = None,
    token: str | None = None,
) -> Response:
    """Create one or more blocks in Wolai.

    The blocks are inserted into the given parent block or page. Each block
    needs a "type" (e.g. "text", "heading"). For text blocks "content" is a
    string; for headings it can be an object with "title" and "front_color",
    plus a "level" from 1 to 6. "text_alignment" may be "left", "center" or
    "right".

    Args:
        blocks: Block objects to create.
        parent_id: Parent block or page ID. If not provided, uses WOLAI_BLOCK_ID.
        token: Wolai token. Defaults to the cached token from get_token.
    """
    logger.info(f"Creating {len(blocks) if isinstance(blocks, list) else 0} block(s)")

    try:
        created = await get_block_service().create_blocks(blocks, parent_id, token)
        return Response(
            status="success",
            message="Blocks created",
            data=created,
            metadata={"block_count": len(blocks)},
        )
    except Exception as e:
        return Response.from_error(e)


@mcp.tool()
async def get_database(id: str, token: str | None = None) -> Response:
    """Retrieve a specific database from Wolai by its ID.

    Args:
        id: The database ID - the part of the database page URL after
            wolai.com/. For https://www.wolai.com/wolai/abc123xyz the ID is
            "abc123xyz". The database must already exist in Wolai.
        token: Wolai token. Defaults to the cached token from get_token.
    """
    logger.info(f"Retrieving database: {id}")

    try:
        database = await get_database_service().get_database(id, token)
        return Response(
            status="success",
            message=f"Database '{id}' retrieved",
            data=database,
            suggestions=["Use create_database_rows to insert rows"],
            metadata={"database_id": id},
        )
    except Exception as e:
        return Response.from_error(e)


@mcp.tool()
async def create_database_rows(
    rows: list[dict[str, Any]],
    database_id: str | None = None,
    token: str | None = None,
) -> Response:
    """Insert rows into an existing Wolai database.

    Databases cannot be created through the API; only rows can be inserted.

    Args:
        rows: Row objects to create.
        database_id: Target database ID. If not provided, uses WOLAI_DATABASE_ID.
        token: Wolai token. Defaults to the cached token from get_token.
    """
    logger.info(f"Inserting {len(rows) if isinstance(rows, list) else 0} row(s)")

    try:
        result = await get_database_service().create_rows(rows, database_id, token)
        return Response(
            status="success",
            message="Rows inserted",
            data=result,
            metadata={"row_count": len(rows)},
        )
    except Exception as e:
        return Response.from_error(e)


def main() -> None:
    """Run the MCP server."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
