import pytest
from fastmcp import Client

@pytest.mark.asyncio
async def test_server_name_and_ping():
    from pemlens.server import mcp

    assert getattr(mcp, "name", "") == "PemLens"

    async with Client(mcp) as client:
        result = await client.call_tool("ping", {})
        assert result.data == "pong"
