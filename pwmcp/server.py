"""
pwmcp MCP Server — ブラウザ操作 + 操作記録 + テストコード生成サーバー

FastMCP を使用して、AI エージェントが Playwright でブラウザを操作し、
記録した操作から playwright / puppeteer / selenium のテストコードを
生成する MCP サーバーを提供する。

ツール定義は以下のモジュールに分離:
  - tools_browser: ブラウザ操作ツール（navigate, click, fill 等）
  - tools_recording: 記録制御ツール（record_start, generate_test 等）

本モジュールは共有状態の生成とライフサイクル管理（close）を担当する。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastmcp import FastMCP

from .artifacts import ArtifactWriter
from .config import ServerConfig, load_config_from_env
from .control import RecordingControl
from .recording import ActionRecorder, RecordingSession
from .session import BrowserSession
from .tools_browser import register_browser_tools
from .tools_recording import register_recording_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "playwright-mcp-server"


def create_server(config: Optional[ServerConfig] = None) -> FastMCP:
    """pwmcp MCP サーバーを生成する。

    記録セッションはサーバーごとに 1 つ生成し、レコーダーと制御層へ渡す。

    Args:
        config: サーバー設定。None の場合は環境変数から読み込む。

    Returns:
        設定済みの FastMCP サーバーインスタンス
    """
    if config is None:
        config = load_config_from_env()

    mcp = FastMCP(SERVER_NAME)

    # 共有状態（ツール間で共有）
    session = BrowserSession(config)
    recording = RecordingSession()
    recorder = ActionRecorder(recording)
    control = RecordingControl(
        recording,
        ArtifactWriter(Path(config.output_dir)),
        escape=config.escape_values,
    )

    # -------------------------------------------------------------------
    # ライフサイクルツール
    # -------------------------------------------------------------------

    @mcp.tool
    async def playwright_close() -> str:
        """Close the browser instance.

        Any in-progress or unexported recording is discarded.

        Returns:
            Status message
        """
        await session.close()
        control.reset()
        return "Browser closed successfully"

    register_browser_tools(mcp, session, recorder)
    register_recording_tools(mcp, control)

    logger.info("MCP サーバーを生成しました: %s (出力先: %s)", SERVER_NAME, config.output_dir)
    return mcp
