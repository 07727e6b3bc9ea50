"""
pwmcp CLI エントリポイント

python -m pwmcp で CLI を起動する。

使用例:
  python -m pwmcp serve                         # MCP サーバーを起動
  python -m pwmcp serve --headed                # ブラウザを表示して起動
  python -m pwmcp generate login.yaml -l python # 記録 YAML からテスト生成

環境変数:
  PWMCP_HEADED=true                             # ブラウザ表示モード
  PWMCP_OUTPUT_DIR=e2e                          # 出力ディレクトリ変更
  PWMCP_ESCAPE_VALUES=true                      # 文字列値をエスケープ
"""

from __future__ import annotations

from .cli import main

main()
