"""
記録制御ツール — 記録の開始・停止・テスト生成・エクスポート

MCP サーバーに登録する記録制御ツールを定義する。
処理本体は RecordingControl に委譲する。
"""

from __future__ import annotations

import logging
from typing import Literal

from fastmcp import FastMCP

from .control import RecordingControl

logger = logging.getLogger(__name__)


def register_recording_tools(mcp: FastMCP, control: RecordingControl) -> None:
    """記録制御ツールを MCP サーバーに登録する。

    Args:
        mcp: FastMCP サーバーインスタンス
        control: 記録制御
    """

    @mcp.tool
    async def playwright_record_start(name: str) -> str:
        """Start recording browser actions for test generation.

        Starting a new recording discards any previous, unexported recording.

        Args:
            name: Name for the recording session

        Returns:
            Status message
        """
        try:
            return control.start(name)
        except ValueError as exc:
            return f"Error: {exc}"

    @mcp.tool
    async def playwright_record_stop() -> str:
        """Stop recording browser actions.

        Returns:
            Status message with the number of recorded actions
        """
        return control.stop()

    @mcp.tool
    async def playwright_generate_test(
        framework: Literal["playwright", "puppeteer", "selenium"],
        language: Literal["typescript", "javascript", "python"],
        file_name: str,
    ) -> str:
        """Generate a test script from recorded actions.

        Recorded values are inserted into the generated source as-is
        unless the server runs with value escaping enabled.

        Args:
            framework: Test framework
            language: Programming language
            file_name: Output file name inside the output directory

        Returns:
            Status message with the saved file path and generated code
        """
        try:
            outcome = control.generate(framework, language, file_name)
        except ValueError as exc:
            return f"Error: {exc}"
        return outcome.message

    @mcp.tool
    async def playwright_record_export(file_name: str) -> str:
        """Save the recorded actions as YAML for later regeneration.

        Args:
            file_name: Output file name (e.g. 'login.yaml')

        Returns:
            Status message with the saved file path
        """
        try:
            return control.export(file_name)
        except ValueError as exc:
            return f"Error: {exc}"
