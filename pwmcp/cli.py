"""
CLI エントリポイント — Typer ベースのコマンドラインインターフェース

pwmcp コマンドとして以下のサブコマンドを提供する:
  - serve: MCP サーバーを stdio で起動
  - generate: エクスポート済みの記録 YAML からテストコードを生成

stdout は MCP の通信路として使われるため、ログは stderr に出力する。
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import typer

from .codegen import Framework, Language

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Typer アプリ定義
# ---------------------------------------------------------------------------

app = typer.Typer(
    help=(
        "pwmcp — Playwright MCP サーバー（操作記録・テストコード生成）\n\n"
        "基本の流れ:\n"
        "  1. pwmcp serve              MCP サーバーを起動\n"
        "  2. playwright_record_start などのツールで操作を記録\n"
        "  3. playwright_generate_test でテストコードを生成\n\n"
        "詳しくは各コマンドに --help を付けてください。"
    ),
    no_args_is_help=True,
)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
        stream=sys.stderr,
    )


# ---------------------------------------------------------------------------
# serve コマンド
# ---------------------------------------------------------------------------

@app.command()
def serve(
    headless: Optional[bool] = typer.Option(
        None, "--headless/--headed", help="ブラウザ表示モード（デフォルト: ヘッドレス）",
    ),
    output_dir: Optional[str] = typer.Option(
        None, "--output-dir", "-o", help="生成テストの出力先（デフォルト: generated-tests）",
    ),
    viewport: Optional[str] = typer.Option(
        None, "--viewport", help="ビューポートサイズ WIDTHxHEIGHT（例: 1920x1080）",
    ),
    escape_values: Optional[bool] = typer.Option(
        None, "--escape-values/--no-escape-values",
        help="生成コード内の文字列値をエスケープする",
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="ログレベル (DEBUG / INFO / WARNING / ERROR)",
    ),
) -> None:
    """MCP サーバーを stdio で起動する。

    環境変数（PWMCP_*）で設定した値は、オプション指定で上書きされる。
    """
    from .config import apply_cli_options, load_config_from_env
    from .server import create_server

    config = load_config_from_env()
    config = apply_cli_options(
        config,
        headless=headless,
        output_dir=output_dir,
        viewport=viewport,
        escape_values=escape_values,
        log_level=log_level,
    )
    _setup_logging(config.log_level)

    server = create_server(config=config)
    logger.info("Playwright MCP Server を stdio で起動します")
    server.run()


# ---------------------------------------------------------------------------
# generate コマンド
# ---------------------------------------------------------------------------

@app.command()
def generate(
    recording_file: Path = typer.Argument(..., help="playwright_record_export で保存した YAML"),
    framework: Framework = typer.Option(
        Framework.PLAYWRIGHT, "--framework", "-f", help="テストフレームワーク",
    ),
    language: Language = typer.Option(
        Language.TYPESCRIPT, "--language", "-l", help="言語",
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="出力先ファイルパス（省略時は標準出力）",
    ),
    escape_values: bool = typer.Option(
        False, "--escape-values", help="生成コード内の文字列値をエスケープする",
    ),
) -> None:
    """記録 YAML からテストコードを生成する。"""
    from .artifacts import ArtifactWriter
    from .codegen import generate as generate_code
    from .control import load_recording

    try:
        name, actions = load_recording(recording_file)
        if not actions:
            typer.echo(f"エラー: {recording_file} にアクションが記録されていません", err=True)
            raise typer.Exit(code=1)

        result = generate_code(actions, name, framework, language, escape=escape_values)

        if output is None:
            typer.echo(result.code, nl=False)
        else:
            writer = ArtifactWriter(output.parent)
            path = writer.write(output.name, result.code)
            typer.echo(f"テストコードを生成しました: {path} ({result.statement_count} 文)")

        for action in result.skipped:
            typer.echo(f"スキップ: {action.kind} ({result.strategy} に対応なし)", err=True)
        if result.fallback:
            typer.echo(f"注意: {result.fallback}", err=True)
    except typer.Exit:
        raise
    except Exception as exc:
        typer.echo(f"エラー: {exc}", err=True)
        raise typer.Exit(code=1)


def main() -> None:
    """コンソールスクリプトのエントリポイント。"""
    app()
