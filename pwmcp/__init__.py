"""
pwmcp — Playwright MCP Server パッケージ

AI エージェントがブラウザを操作し、記録した操作から
テストコードを生成する MCP (Model Context Protocol) サーバーを提供する。

主な構成:
  - server: FastMCP サーバー本体（ライフサイクル管理）
  - tools_browser: ブラウザ操作ツール（navigate, click, fill 等）
  - tools_recording: 記録制御ツール（record_start, generate_test 等）
  - session: ブラウザセッション管理
  - actions: 記録アクションのモデル
  - recording: 記録セッションと操作レコーダー
  - control: 記録の開始・停止・生成・エクスポート
  - codegen: テストコード生成
  - artifacts: 生成物のファイル保存
  - cli: コマンドラインインターフェース
"""

from __future__ import annotations

__version__ = "2.0.0"


def create_server(config=None):  # type: ignore[no-untyped-def]
    """pwmcp MCP サーバーを生成する（遅延インポート）。

    fastmcp / playwright の import をサーバー生成時まで遅延させる。

    Args:
        config: ServerConfig インスタンス（None で環境変数から読み込み）

    Returns:
        設定済みの FastMCP サーバーインスタンス
    """
    from .server import create_server as _create
    return _create(config=config)


__all__ = [
    "create_server",
]
