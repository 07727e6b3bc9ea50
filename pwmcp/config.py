"""
MCP サーバー設定 — 環境変数・CLI オプションからの設定読み込み

環境変数または CLI オプションで MCP サーバーの動作を制御する。
CLI オプション > 環境変数 > デフォルト値 の優先順位で適用される。

環境変数一覧:
  PWMCP_HEADED         : ブラウザ表示モード（true/false, デフォルト: false）
  PWMCP_OUTPUT_DIR     : 生成テストの出力先（デフォルト: generated-tests）
  PWMCP_VIEWPORT_WIDTH : ビューポート幅（デフォルト: 1280）
  PWMCP_VIEWPORT_HEIGHT: ビューポート高さ（デフォルト: 720）
  PWMCP_ESCAPE_VALUES  : 生成コード内の文字列値をエスケープ（デフォルト: false）
  PWMCP_LOG_LEVEL      : ログレベル（デフォルト: INFO）
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from .artifacts import DEFAULT_OUTPUT_DIR

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# 環境変数キー定数
# ---------------------------------------------------------------------------

_ENV_HEADED = "PWMCP_HEADED"
_ENV_OUTPUT_DIR = "PWMCP_OUTPUT_DIR"
_ENV_VIEWPORT_WIDTH = "PWMCP_VIEWPORT_WIDTH"
_ENV_VIEWPORT_HEIGHT = "PWMCP_VIEWPORT_HEIGHT"
_ENV_ESCAPE_VALUES = "PWMCP_ESCAPE_VALUES"
_ENV_LOG_LEVEL = "PWMCP_LOG_LEVEL"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
)


# ---------------------------------------------------------------------------
# 設定データクラス
# ---------------------------------------------------------------------------

@dataclass
class ServerConfig:
    """MCP サーバーの実行時設定。

    Attributes:
        headed: ブラウザ表示モード（True=表示, False=ヘッドレス）
        output_dir: 生成テスト・エクスポートの出力ディレクトリ
        viewport_width: ビューポート幅
        viewport_height: ビューポート高さ
        user_agent: ブラウザコンテキストの User-Agent
        escape_values: 生成コード内の文字列値をエスケープするか
        log_level: ログレベル名
    """

    headed: bool = False
    output_dir: str = DEFAULT_OUTPUT_DIR
    viewport_width: int = 1280
    viewport_height: int = 720
    user_agent: str = DEFAULT_USER_AGENT
    escape_values: bool = False
    log_level: str = "INFO"


# ---------------------------------------------------------------------------
# 環境変数からの読み込み
# ---------------------------------------------------------------------------

def _parse_bool(value: str) -> bool:
    """文字列を bool に変換する。

    Args:
        value: "true", "1", "yes" → True、それ以外 → False

    Returns:
        変換結果
    """
    return value.lower() in ("true", "1", "yes")


def _parse_int(key: str, current: int) -> int:
    try:
        return int(os.environ[key])
    except ValueError:
        logger.warning("%s の値が不正です: %s", key, os.environ[key])
        return current


def load_config_from_env() -> ServerConfig:
    """環境変数から ServerConfig を生成する。

    設定されていない環境変数はデフォルト値を使用する。

    Returns:
        環境変数から読み込んだ設定
    """
    config = ServerConfig()

    if _ENV_HEADED in os.environ:
        config.headed = _parse_bool(os.environ[_ENV_HEADED])

    if _ENV_OUTPUT_DIR in os.environ:
        config.output_dir = os.environ[_ENV_OUTPUT_DIR]

    if _ENV_VIEWPORT_WIDTH in os.environ:
        config.viewport_width = _parse_int(_ENV_VIEWPORT_WIDTH, config.viewport_width)

    if _ENV_VIEWPORT_HEIGHT in os.environ:
        config.viewport_height = _parse_int(_ENV_VIEWPORT_HEIGHT, config.viewport_height)

    if _ENV_ESCAPE_VALUES in os.environ:
        config.escape_values = _parse_bool(os.environ[_ENV_ESCAPE_VALUES])

    if _ENV_LOG_LEVEL in os.environ:
        val = os.environ[_ENV_LOG_LEVEL].upper()
        if val in _LOG_LEVELS:
            config.log_level = val
        else:
            logger.warning("%s の値が不正です: %s", _ENV_LOG_LEVEL, val)

    logger.debug("設定を読み込みました: %s", config)
    return config


# ---------------------------------------------------------------------------
# CLI オプションの適用
# ---------------------------------------------------------------------------

def apply_cli_options(
    config: ServerConfig,
    headless: Optional[bool] = None,
    output_dir: Optional[str] = None,
    viewport: Optional[str] = None,
    escape_values: Optional[bool] = None,
    log_level: Optional[str] = None,
) -> ServerConfig:
    """CLI オプションを ServerConfig に適用する。

    指定されたオプションのみ上書きする。

    Args:
        config: ベースとなる設定（環境変数から読み込み済み）
        headless: True でヘッドレス、False で表示モード
        output_dir: 出力ディレクトリ
        viewport: WIDTHxHEIGHT 形式のビューポートサイズ
        escape_values: 文字列値のエスケープ有無
        log_level: ログレベル名

    Returns:
        CLI オプションが適用された設定
    """
    if headless is not None:
        config.headed = not headless

    if output_dir is not None:
        config.output_dir = output_dir

    if viewport is not None:
        try:
            w, h = str(viewport).lower().split("x")
            config.viewport_width = int(w)
            config.viewport_height = int(h)
        except ValueError:
            logger.warning("--viewport の形式が不正です: %s (WIDTHxHEIGHT)", viewport)

    if escape_values is not None:
        config.escape_values = escape_values

    if log_level is not None:
        if log_level.upper() in _LOG_LEVELS:
            config.log_level = log_level.upper()
        else:
            logger.warning("--log-level の値が不正です: %s", log_level)

    return config
