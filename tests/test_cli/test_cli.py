"""
CLI テスト — generate コマンド

エクスポート済みの記録 YAML から、標準出力またはファイルへ
テストコードを生成できることを検証する。
"""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from pwmcp.actions import CheckAction, ClickAction, NavigateAction
from pwmcp.cli import app
from pwmcp.control import dump_recording

runner = CliRunner()


@pytest.fixture
def recording_file(tmp_path: Path) -> Path:
    """navigate → check → click を含む記録 YAML。"""
    path = tmp_path / "login.yaml"
    path.write_text(
        dump_recording("login", [
            NavigateAction(url="https://a.test"),
            CheckAction(selector="#agree"),
            ClickAction(selector="#go"),
        ]),
        encoding="utf-8",
    )
    return path


class TestGenerateCommand:
    """pwmcp generate のテスト。"""

    def test_generate_to_stdout(self, recording_file: Path):
        """--output 省略時は標準出力にコードを出すこと。"""
        result = runner.invoke(app, ["generate", str(recording_file)])
        assert result.exit_code == 0
        assert "test('login', async ({ page }) => {" in result.stdout
        assert "await page.click('#go');" in result.stdout

    def test_generate_to_file(self, recording_file: Path, tmp_path: Path):
        """--output 指定時はファイルに書き込むこと。"""
        out = tmp_path / "out" / "test_login.py"
        result = runner.invoke(app, [
            "generate", str(recording_file),
            "--framework", "selenium", "--language", "python",
            "--output", str(out),
        ])
        assert result.exit_code == 0
        assert out.exists()
        assert "def test_login():" in out.read_text(encoding="utf-8")

    def test_missing_file(self, tmp_path: Path):
        """存在しないファイルは終了コード 1 になること。"""
        result = runner.invoke(app, ["generate", str(tmp_path / "nope.yaml")])
        assert result.exit_code == 1

    def test_empty_actions(self, tmp_path: Path):
        """アクションが空の記録は終了コード 1 になること。"""
        path = tmp_path / "empty.yaml"
        path.write_text("name: empty\nactions: []\n", encoding="utf-8")
        result = runner.invoke(app, ["generate", str(path)])
        assert result.exit_code == 1

    def test_invalid_framework(self, recording_file: Path):
        """未知のフレームワークは Typer の引数エラーになること。"""
        result = runner.invoke(app, ["generate", str(recording_file), "-f", "cypress"])
        assert result.exit_code != 0
