"""
RecordingControl — 記録制御の操作面

MCP ツール（および CLI）から呼ばれる記録の開始・停止・テスト生成・
ログのエクスポートを提供する。各操作は人間向けのステータス文字列を返す。

記録が空の状態でのテスト生成は例外ではなく、記録を促すメッセージを
通常の応答として返す（ArtifactWriter は呼ばない）。
保存時の OSError はそのまま呼び出し元へ伝播する。
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence

from ruamel.yaml import YAML

from .actions import RecordedAction, parse_action_log
from .artifacts import ArtifactWriter
from .codegen import GenerationResult, generate
from .recording import RecordingSession

logger = logging.getLogger(__name__)

NO_ACTIONS_MESSAGE = (
    "No actions recorded. Start recording with playwright_record_start first."
)


# ---------------------------------------------------------------------------
# 生成結果
# ---------------------------------------------------------------------------

@dataclass
class GenerateOutcome:
    """テスト生成要求の結果。

    Attributes:
        message: 呼び出し元へ返すメッセージ（生成コードを含む）
        code: 生成コード（記録が空なら空文字列）
        path: 保存先の絶対パス（記録が空なら None）
        result: コード生成の詳細（記録が空なら None）
    """

    message: str
    code: str = ""
    path: Optional[Path] = None
    result: Optional[GenerationResult] = None

    @property
    def generated(self) -> bool:
        """コードが生成・保存されたかどうかを返す。"""
        return self.result is not None


# ---------------------------------------------------------------------------
# RecordingControl 本体
# ---------------------------------------------------------------------------

class RecordingControl:
    """記録セッションに対する制御操作。"""

    def __init__(
        self,
        session: RecordingSession,
        writer: ArtifactWriter,
        escape: bool = False,
    ) -> None:
        """RecordingControl を初期化する。

        Args:
            session: 制御対象の記録セッション
            writer: 生成物の保存先
            escape: 生成コード内の文字列値をエスケープするか
        """
        self.session = session
        self.writer = writer
        self.escape = escape

    def start(self, name: str) -> str:
        """記録を開始する。以前の未出力ログは破棄される。"""
        self.session.start(name)
        return f"Recording started: {name}. All subsequent actions will be recorded."

    def stop(self) -> str:
        """記録を停止する。ログは保持され、停止後に生成できる。"""
        self.session.stop()
        return (
            f"Recording stopped. {self.session.action_count} actions recorded. "
            "Use playwright_generate_test to create a test script."
        )

    def generate(self, framework: str, language: str, file_name: str) -> GenerateOutcome:
        """記録ログからテストコードを生成し、ファイルに保存する。

        Args:
            framework: playwright / puppeteer / selenium
            language: typescript / javascript / python
            file_name: 出力ファイル名

        Returns:
            生成結果（記録が空の場合はメッセージのみ）
        """
        actions = self.session.actions
        if not actions:
            logger.info("記録が空のためテスト生成をスキップしました")
            return GenerateOutcome(message=NO_ACTIONS_MESSAGE)

        result = generate(
            actions, self.session.name, framework, language, escape=self.escape,
        )
        path = self.writer.write(file_name, result.code)

        message = (
            "Test generated successfully!\n"
            f"File: {path}\n"
            f"Framework: {result.framework.value}\n"
            f"Language: {result.language.value}\n"
            f"Actions: {len(actions)}\n"
        )
        if result.skipped:
            skipped = ", ".join(sorted({a.kind for a in result.skipped}))
            message += f"Skipped: {len(result.skipped)} ({skipped})\n"
        if result.fallback:
            message += f"Note: {result.fallback}\n"
        message += f"\n{result.code}"

        return GenerateOutcome(message=message, code=result.code, path=path, result=result)

    def export(self, file_name: str) -> str:
        """記録ログを YAML として保存する。

        保存した YAML は CLI の generate コマンドで再生成に使える。
        """
        actions = self.session.actions
        if not actions:
            return NO_ACTIONS_MESSAGE

        text = dump_recording(self.session.name, actions)
        path = self.writer.write(file_name, text)
        return f"Recording exported: {path} ({len(actions)} actions)"

    def reset(self) -> None:
        """ブラウザ終了時に記録状態を破棄する。"""
        self.session.reset()


# ---------------------------------------------------------------------------
# YAML 入出力
# ---------------------------------------------------------------------------

def dump_recording(name: str, actions: Sequence[RecordedAction]) -> str:
    """記録ログを YAML 文字列に変換する。"""
    yaml = YAML()
    yaml.default_flow_style = False

    data: dict[str, Any] = {
        "name": name,
        "actions": [action.to_dict() for action in actions],
    }
    buf = io.StringIO()
    yaml.dump(data, buf)
    return buf.getvalue()


def load_recording(path: Path) -> tuple[str, list[RecordedAction]]:
    """YAML ファイルから記録ログを読み込む。

    Returns:
        (セッション名, アクションログ)

    Raises:
        ValueError: YAML の構造が不正な場合
        pydantic.ValidationError: アクションの内容が不正な場合
    """
    yaml = YAML(typ="safe")
    with open(path, encoding="utf-8") as f:
        data = yaml.load(f)

    if not isinstance(data, dict) or not isinstance(data.get("actions"), list):
        raise ValueError(f"記録ファイルの形式が不正です: {path}")

    name = str(data.get("name") or "")
    return name, parse_action_log(data["actions"])
