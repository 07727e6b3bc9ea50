"""
Server テスト — MCP サーバーのツール定義

FastMCP サーバーが名前とツール一覧を正しく公開することを検証する。
"""

from __future__ import annotations

import pytest
from fastmcp import Client

from pwmcp.config import ServerConfig
from pwmcp.server import SERVER_NAME, create_server

BROWSER_TOOLS = [
    "playwright_navigate",
    "playwright_go_back",
    "playwright_go_forward",
    "playwright_reload",
    "playwright_click",
    "playwright_fill",
    "playwright_type",
    "playwright_hover",
    "playwright_select",
    "playwright_press_key",
    "playwright_checkbox",
    "playwright_drag_and_drop",
    "playwright_wait_for_selector",
    "playwright_set_viewport",
    "playwright_screenshot",
    "playwright_extract_text",
    "playwright_evaluate",
    "playwright_get_attribute",
    "playwright_get_page_info",
]

RECORDING_TOOLS = [
    "playwright_record_start",
    "playwright_record_stop",
    "playwright_generate_test",
    "playwright_record_export",
]


class TestCreateServer:
    """create_server() のテスト。"""

    def test_server_has_name(self, tmp_path):
        """サーバー名が playwright-mcp-server であること。"""
        server = create_server(ServerConfig(output_dir=str(tmp_path)))
        assert server.name == SERVER_NAME == "playwright-mcp-server"

    def test_server_without_config(self):
        """設定省略時も環境変数から生成できること。"""
        assert create_server() is not None


class TestServerTools:
    """サーバーに登録されたツールの存在確認テスト。"""

    @pytest.fixture
    def server(self, tmp_path):
        return create_server(ServerConfig(output_dir=str(tmp_path)))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", BROWSER_TOOLS + RECORDING_TOOLS + ["playwright_close"])
    async def test_tool_is_registered(self, server, name):
        """各ツールが登録されていること。"""
        async with Client(server) as client:
            tools = await client.list_tools()
        assert name in [t.name for t in tools]

    @pytest.mark.asyncio
    async def test_tool_count(self, server):
        """ツール数が一致すること。"""
        async with Client(server) as client:
            tools = await client.list_tools()
        assert len(tools) == len(BROWSER_TOOLS) + len(RECORDING_TOOLS) + 1
