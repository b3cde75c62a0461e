"""Tests for the MCP tools"""

from unittest.mock import AsyncMock, patch

import pytest

from wolai_mcp import server
from wolai_mcp.auth import AuthManager
from wolai_mcp.blocks import BlockService
from wolai_mcp.databases import DatabaseService

TOKEN_PAYLOAD = {"data": {"app_token": "new-token", "expire_time": -1}}


@pytest.fixture
def services(client):
    """Patch the server's service factories to use the mocked client"""
    with (
        patch.object(server, "get_auth_manager", return_value=AuthManager(client)),
        patch.object(server, "get_block_service", return_value=BlockService(client)),
        patch.object(
            server, "get_database_service", return_value=DatabaseService(client)
        ),
    ):
        yield


class TestToolRegistration:
    """Tools exposed by the server"""

    @pytest.mark.asyncio
    async def test_all_tools_registered(self):
        """Every Wolai operation is available as a tool"""
        tools = await server.mcp.list_tools()
        names = {tool.name for tool in tools}

        assert names == {
            "get_token",
            "refresh_token",
            "get_block",
            "get_block_children",
            "create_blocks",
            "get_database",
            "create_database_rows",
        }


@pytest.mark.usefixtures("services")
class TestTokenTools:
    """get_token and refresh_token"""

    @pytest.mark.asyncio
    async def test_get_token_then_get_block(
        self, mock_http_client, token_cache, response_factory
    ):
        """A token obtained by get_token is used by later tools"""
        mock_http_client.post = AsyncMock(
            return_value=response_factory(TOKEN_PAYLOAD, method="POST")
        )
        mock_http_client.get = AsyncMock(
            return_value=response_factory({"data": {"id": "page"}})
        )

        token_response = await server.get_token()
        block_response = await server.get_block("page")

        assert token_response.status == "success"
        assert token_response.data["app_token"] == "new-token"
        assert token_response.metadata == {"expires_at": "never"}
        assert token_cache.is_valid()

        assert block_response.status == "success"
        assert block_response.data == {"id": "page"}
        _, kwargs = mock_http_client.get.call_args
        assert kwargs["headers"]["Authorization"] == "new-token"

    @pytest.mark.asyncio
    async def test_refresh_token_without_cached_token(self, mock_http_client):
        """refresh_token reports the missing credential"""
        response = await server.refresh_token()

        assert response.status == "error"
        assert response.metadata["exception_type"] == "MissingCredentialError"
        mock_http_client.put.assert_not_called()

    @pytest.mark.asyncio
    async def test_refresh_token_replaces_cached(
        self, mock_http_client, token_cache, response_factory
    ):
        """refresh_token stores the new token"""
        token_cache.store("old-token", None)
        mock_http_client.put = AsyncMock(
            return_value=response_factory(TOKEN_PAYLOAD, method="PUT")
        )

        response = await server.refresh_token()

        assert response.status == "success"
        assert token_cache.read() == "new-token"


@pytest.mark.usefixtures("services")
class TestBlockTools:
    """Block tools"""

    @pytest.mark.asyncio
    async def test_get_block_without_token(self, mock_http_client):
        """Tools fail with a helpful error when no token is available"""
        response = await server.get_block("page")

        assert response.status == "error"
        assert "obtain one first" in response.message
        assert any("get_token" in s for s in response.suggestions)

    @pytest.mark.asyncio
    async def test_get_block_http_error(self, mock_http_client, response_factory):
        """HTTP errors are converted to error responses"""
        mock_http_client.get = AsyncMock(
            return_value=response_factory({"message": "not found"}, status_code=404)
        )

        response = await server.get_block("missing", token="tok")

        assert response.status == "error"
        assert response.metadata["status_code"] == 404
        assert response.errors == ["not found"]

    @pytest.mark.asyncio
    async def test_get_block_children_has_more(
        self, mock_http_client, response_factory
    ):
        """Pagination is reported in metadata"""
        mock_http_client.get = AsyncMock(
            return_value=response_factory(
                {"data": [{"id": "c1"}], "has_more": True, "next_cursor": "n"}
            )
        )

        response = await server.get_block_children("page", token="tok")

        assert response.data == [{"id": "c1"}]
        assert response.metadata["has_more"] is True
        assert response.metadata["next_cursor"] == "n"
        assert any("start_cursor" in s for s in response.suggestions)

    @pytest.mark.asyncio
    async def test_create_blocks(self, mock_http_client, response_factory):
        """create_blocks reports how many blocks were sent"""
        mock_http_client.post = AsyncMock(
            return_value=response_factory({"data": ["url"]}, method="POST")
        )

        response = await server.create_blocks(
            [{"type": "text", "content": "hi"}], "parent", "tok"
        )

        assert response.status == "success"
        assert response.data == ["url"]
        assert response.metadata == {"block_count": 1}

    @pytest.mark.asyncio
    async def test_create_blocks_empty(self, mock_http_client):
        """Parameter errors come back as error responses"""
        response = await server.create_blocks([], "parent", "tok")

        assert response.status == "error"
        assert response.metadata["exception_type"] == "InvalidParameterError"


@pytest.mark.usefixtures("services")
class TestDatabaseTools:
    """Database tools"""

    @pytest.mark.asyncio
    async def test_get_database(self, mock_http_client, response_factory):
        """get_database returns the database data"""
        mock_http_client.get = AsyncMock(
            return_value=response_factory({"data": {"rows": []}})
        )

        response = await server.get_database("db1", token="tok")

        assert response.status == "success"
        assert response.data == {"rows": []}
        assert response.metadata == {"database_id": "db1"}

    @pytest.mark.asyncio
    async def test_create_database_rows(self, mock_http_client, response_factory):
        """create_database_rows falls back to WOLAI_DATABASE_ID"""
        mock_http_client.post = AsyncMock(
            return_value=response_factory({"data": ["r1"]}, method="POST")
        )

        response = await server.create_database_rows([{"Name": "A"}], token="tok")

        assert response.status == "success"
        assert response.metadata == {"row_count": 1}
        args, _ = mock_http_client.post.call_args
        assert args[0].endswith("/v1/databases/default-database/rows")
