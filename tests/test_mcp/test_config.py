"""
Config テスト — 環境変数・CLI オプションからの設定読み込み

優先順位（CLI オプション > 環境変数 > デフォルト値）と
不正値の扱いを検証する。
"""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from pwmcp.config import (
    ServerConfig,
    _parse_bool,
    apply_cli_options,
    load_config_from_env,
)


class TestServerConfigDefaults:
    """ServerConfig のデフォルト値テスト。"""

    def test_defaults(self):
        """デフォルト値が設定されていること。"""
        config = ServerConfig()
        assert config.headed is False
        assert config.output_dir == "generated-tests"
        assert (config.viewport_width, config.viewport_height) == (1280, 720)
        assert config.escape_values is False
        assert config.log_level == "INFO"


class TestParseBool:
    """_parse_bool() のテスト。"""

    @pytest.mark.parametrize("value", ["true", "TRUE", "1", "yes"])
    def test_truthy(self, value):
        """真とみなす値。"""
        assert _parse_bool(value) is True

    @pytest.mark.parametrize("value", ["false", "0", "no", ""])
    def test_falsy(self, value):
        """偽とみなす値。"""
        assert _parse_bool(value) is False


class TestLoadConfigFromEnv:
    """load_config_from_env() のテスト。"""

    def test_no_env_uses_defaults(self):
        """環境変数が無ければデフォルト値になること。"""
        with patch.dict(os.environ, {}, clear=True):
            assert load_config_from_env() == ServerConfig()

    def test_reads_all_variables(self):
        """全環境変数が反映されること。"""
        env = {
            "PWMCP_HEADED": "true",
            "PWMCP_OUTPUT_DIR": "/tmp/out",
            "PWMCP_VIEWPORT_WIDTH": "1920",
            "PWMCP_VIEWPORT_HEIGHT": "1080",
            "PWMCP_ESCAPE_VALUES": "1",
            "PWMCP_LOG_LEVEL": "debug",
        }
        with patch.dict(os.environ, env, clear=True):
            config = load_config_from_env()
        assert config.headed is True
        assert config.output_dir == "/tmp/out"
        assert (config.viewport_width, config.viewport_height) == (1920, 1080)
        assert config.escape_values is True
        assert config.log_level == "DEBUG"

    def test_invalid_int_keeps_default(self):
        """数値でないビューポート指定はデフォルト値のままであること。"""
        with patch.dict(os.environ, {"PWMCP_VIEWPORT_WIDTH": "wide"}, clear=True):
            config = load_config_from_env()
        assert config.viewport_width == 1280

    def test_invalid_log_level_keeps_default(self):
        """不正なログレベルはデフォルト値のままであること。"""
        with patch.dict(os.environ, {"PWMCP_LOG_LEVEL": "LOUD"}, clear=True):
            config = load_config_from_env()
        assert config.log_level == "INFO"


class TestApplyCliOptions:
    """apply_cli_options() のテスト。"""

    def test_none_keeps_base(self):
        """未指定のオプションは上書きしないこと。"""
        base = ServerConfig(headed=True, output_dir="env-dir")
        config = apply_cli_options(base)
        assert config.headed is True
        assert config.output_dir == "env-dir"

    def test_cli_overrides_env(self):
        """CLI オプションが環境変数より優先されること。"""
        with patch.dict(os.environ, {"PWMCP_HEADED": "true", "PWMCP_OUTPUT_DIR": "env"}, clear=True):
            config = load_config_from_env()
        config = apply_cli_options(config, headless=True, output_dir="cli")
        assert config.headed is False
        assert config.output_dir == "cli"

    def test_viewport(self):
        """WIDTHxHEIGHT 形式が反映されること。"""
        config = apply_cli_options(ServerConfig(), viewport="1920x1080")
        assert (config.viewport_width, config.viewport_height) == (1920, 1080)

    def test_invalid_viewport_is_ignored(self):
        """不正なビューポート形式は無視されること。"""
        config = apply_cli_options(ServerConfig(), viewport="big")
        assert (config.viewport_width, config.viewport_height) == (1280, 720)

    def test_escape_and_log_level(self):
        """エスケープとログレベルが反映されること。"""
        config = apply_cli_options(ServerConfig(), escape_values=True, log_level="warning")
        assert config.escape_values is True
        assert config.log_level == "WARNING"
