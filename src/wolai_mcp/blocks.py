"""Block service for reading and creating Wolai blocks."""

import logging
from functools import cache
from typing import Any

from .client import WolaiClient, get_client
from .exceptions import ConfigError, InvalidParameterError
from .utils import require_id, require_objects, unwrap_data

logger = logging.getLogger("wolai-mcp.blocks")


class BlockService:
    """Block operations: retrieve a block, list its children, create blocks."""

    def __init__(self, client: WolaiClient):
        self.client = client
        self.config = client.config

    async def get_block(self, block_id: str, token: str | None = None) -> Any:
        """Retrieve a block by id.

        Args:
            block_id: Block or page id.
            token: Explicit token. Defaults to the cached token.

        Returns:
            The block data.

        Raises:
            MissingCredentialError: If no token is available.
            InvalidParameterError: If block_id is empty.
            httpx.HTTPError: For HTTP/network errors.
        """
        block_id = require_id(block_id, "Block ID")

        logger.info(f"Retrieving block {block_id}")
        payload = await self.client.get_json(
            f"{self.config.blocks_url}/{block_id}", token=token
        )
        return unwrap_data(payload)

    async def get_block_children(
        self,
        block_id: str,
        token: str | None = None,
        start_cursor: str | None = None,
        page_size: int | None = None,
    ) -> dict[str, Any]:
        """Retrieve one page of a block's children.

        Args:
            block_id: Parent block or page id.
            token: Explicit token. Defaults to the cached token.
            start_cursor: Cursor from a previous page's next_cursor.
            page_size: Maximum number of children to return.

        Returns:
            Dict with ``data`` (the children) plus ``has_more`` and
            ``next_cursor`` when Wolai reports more pages.

        Raises:
            MissingCredentialError: If no token is available.
            InvalidParameterError: If block_id is empty or page_size < 1.
            httpx.HTTPError: For HTTP/network errors.
        """
        block_id = require_id(block_id, "Block ID")

        params: dict[str, Any] = {}
        if start_cursor:
            params["start_cursor"] = start_cursor
        if page_size is not None:
            if page_size < 1:
                raise InvalidParameterError(
                    "page_size must be a positive integer",
                    context={"page_size": page_size},
                )
            params["page_size"] = page_size

        logger.info(f"Retrieving children of block {block_id}")
        payload = await self.client.get_json(
            f"{self.config.blocks_url}/{block_id}/children",
            token=token,
            params=params or None,
        )

        # Keep pagination fields alongside the children
        if isinstance(payload, dict):
            return {
                "data": payload.get("data"),
                "has_more": payload.get("has_more", False),
                "next_cursor": payload.get("next_cursor"),
            }
        return {"data": payload, "has_more": False, "next_cursor": None}

    async def create_blocks(
        self,
        blocks: list[dict[str, Any]],
        parent_id: str | None = None,
        token: str | None = None,
    ) -> Any:
        """Create blocks under a parent block or page.

        Args:
            blocks: Block objects, each with at least a ``type``.
            parent_id: Parent block or page id. Defaults to WOLAI_BLOCK_ID.
            token: Explicit token. Defaults to the cached token.

        Returns:
            The created block data.

        Raises:
            ConfigError: If no parent id is passed or configured.
            MissingCredentialError: If no token is available.
            InvalidParameterError: If blocks is empty or malformed.
            httpx.HTTPError: For HTTP/network errors.
        """
        parent_id = parent_id or self.config.block_id
        if not parent_id:
            raise ConfigError(
                "Parent ID is required",
                suggestions=[
                    "Pass parent_id or set the WOLAI_BLOCK_ID environment variable"
                ],
            )

        blocks = require_objects(blocks, "blocks")

        untyped = [i for i, block in enumerate(blocks) if not block.get("type")]
        if untyped:
            raise InvalidParameterError(
                "Every block must have a type",
                errors=[f"blocks[{i}] has no type" for i in untyped],
                suggestions=['Use a block type such as "text" or "heading"'],
            )

        logger.info(f"Creating {len(blocks)} block(s) under {parent_id}")
        payload = await self.client.post_json(
            self.config.blocks_url,
            token=token,
            json={"parent_id": parent_id, "blocks": blocks},
        )
        return unwrap_data(payload)


@cache
def get_block_service() -> BlockService:
    """Get a cached BlockService bound to the default client."""
    return BlockService(get_client())
