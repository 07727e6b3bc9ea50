"""
テスト共通フィクスチャ定義

全テストモジュールで共有するフィクスチャを提供する。
Playwright の Page は unittest.mock.AsyncMock で代替する。
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from pwmcp.artifacts import ArtifactWriter
from pwmcp.control import RecordingControl
from pwmcp.recording import ActionRecorder, RecordingSession


# ---------------------------------------------------------------------------
# pytest フィクスチャ
# ---------------------------------------------------------------------------

@pytest.fixture
def recording() -> RecordingSession:
    """未開始の RecordingSession。"""
    return RecordingSession()


@pytest.fixture
def recorder(recording: RecordingSession) -> ActionRecorder:
    """recording に紐づく ActionRecorder。"""
    return ActionRecorder(recording)


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """生成物の出力先（まだ存在しないディレクトリ）。"""
    return tmp_path / "generated-tests"


@pytest.fixture
def writer(output_dir: Path) -> ArtifactWriter:
    """一時ディレクトリに書き込む ArtifactWriter。"""
    return ArtifactWriter(output_dir)


@pytest.fixture
def control(recording: RecordingSession, writer: ArtifactWriter) -> RecordingControl:
    """recording と writer を使う RecordingControl。"""
    return RecordingControl(recording, writer)


@pytest.fixture
def mock_page() -> MagicMock:
    """Playwright Page のモック。

    非同期メソッドは AsyncMock、keyboard は子モックとして持つ。
    """
    page = MagicMock()
    for name in (
        "goto", "click", "fill", "type", "hover", "select_option", "check",
        "uncheck", "wait_for_selector", "drag_and_drop", "go_back",
        "go_forward", "reload", "text_content", "eval_on_selector_all",
        "evaluate", "get_attribute", "title",
    ):
        setattr(page, name, AsyncMock())
    page.screenshot = AsyncMock(return_value=b"\x89PNG\r\n")
    page.keyboard.press = AsyncMock()
    page.url = "https://example.test/"
    return page

