"""
Recording — 記録セッションと操作レコーダー

MCP ツール経由で実行されたブラウザ操作を記録セッションの
アクションログに蓄積する。

主な構成:
  - RecordingSession: 記録中フラグ・セッション名・アクションログの保持
  - ActionRecorder: 自動化プリミティブからの記録通知の唯一の入口

RecordingSession はサーバーごとに 1 インスタンスを create_server() が生成し、
レコーダー・制御層・コード生成へ明示的に渡す（モジュールグローバルは持たない）。

ログのクリアは記録開始時とブラウザ終了時（reset）のみ行い、
記録停止ではクリアしない（停止後にテストコードを生成するため）。
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Mapping
from typing import Any, Optional, Union

from .actions import ACTION_TYPES, RecordedAction, parse_action

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# RecordingSession 本体
# ---------------------------------------------------------------------------

class RecordingSession:
    """記録セッションの状態管理クラス。

    active / name / log の 3 つは 1 つのロックで一体として更新する。
    FastMCP が同期ハンドラをワーカースレッドで実行する場合に備えたもの。
    """

    def __init__(self) -> None:
        """RecordingSession を初期化する。"""
        self._lock = threading.Lock()
        self._active: bool = False
        self._name: str = ""
        self._log: list[RecordedAction] = []

    @property
    def active(self) -> bool:
        """記録中かどうかを返す。"""
        return self._active

    @property
    def name(self) -> str:
        """現在（または直近）のセッション名を返す。未開始なら空文字列。"""
        return self._name

    @property
    def actions(self) -> tuple[RecordedAction, ...]:
        """アクションログのスナップショットを記録順で返す。"""
        with self._lock:
            return tuple(self._log)

    @property
    def action_count(self) -> int:
        """記録済みアクション数を返す。"""
        return len(self._log)

    def start(self, name: str) -> None:
        """記録を開始する。

        既存のログは確認なしで破棄する。記録中に呼ばれた場合も
        エラーにはせず、新しいセッションとして開始し直す。

        Args:
            name: セッション名（空文字列不可）

        Raises:
            ValueError: name が空の場合
        """
        if not name or not name.strip():
            raise ValueError("セッション名を指定してください")

        with self._lock:
            if self._log:
                logger.warning(
                    "未出力のアクションログを破棄します: %s (%d 件)",
                    self._name, len(self._log),
                )
            self._active = True
            self._name = name
            self._log = []
        logger.info("記録を開始しました: %s", name)

    def stop(self) -> None:
        """記録を停止する。ログとセッション名は保持する。

        記録中でない場合は何もしない。
        """
        with self._lock:
            if not self._active:
                return
            self._active = False
            count = len(self._log)
        logger.info("記録を停止しました: %s (%d 件)", self._name, count)

    def reset(self) -> None:
        """ブラウザ終了に伴い記録状態を破棄する。"""
        with self._lock:
            self._active = False
            self._log = []
        logger.info("記録状態をリセットしました")

    def append(self, action: RecordedAction) -> bool:
        """記録中であればアクションをログ末尾に追加する。

        Args:
            action: 追加するアクション

        Returns:
            追加した場合 True、記録中でなかった場合 False
        """
        with self._lock:
            if not self._active:
                return False
            self._log.append(action)
            return True


# ---------------------------------------------------------------------------
# ActionRecorder 本体
# ---------------------------------------------------------------------------

class ActionRecorder:
    """自動化プリミティブからの記録通知を受け付けるレコーダー。

    各プリミティブはブラウザ操作が成功した直後にのみ record() を呼ぶ。
    失敗した操作は記録しない。
    """

    def __init__(self, session: RecordingSession) -> None:
        """ActionRecorder を初期化する。

        Args:
            session: 記録先のセッション
        """
        self.session = session

    def record(
        self,
        candidate: Union[RecordedAction, Mapping[str, Any]],
    ) -> Optional[RecordedAction]:
        """操作を記録する。

        記録中でなければ何もしない（エラーにもしない）。
        記録中であれば、タイムスタンプを記録時刻で付け直してログに追加する。

        Args:
            candidate: アクションモデル、または kind と必須フィールドを含む辞書

        Returns:
            記録したアクション。記録中でなかった場合は None。
        """
        if not self.session.active:
            return None

        if isinstance(candidate, ACTION_TYPES):
            action = candidate.model_copy(update={"timestamp": time.monotonic()})
        else:
            payload = dict(candidate)
            payload["timestamp"] = time.monotonic()
            action = parse_action(payload)

        if not self.session.append(action):
            # 判定後に停止された場合
            return None

        logger.debug("アクションを記録しました: %s", action.kind)
        return action
