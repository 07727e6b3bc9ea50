"""
Recording テスト — 記録セッションと操作レコーダーの単体テスト

記録の開始・停止・リセットとログ追加の条件を検証する。
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pwmcp.actions import ClickAction, NavigateAction
from pwmcp.recording import ActionRecorder, RecordingSession


# ---------------------------------------------------------------------------
# RecordingSession のテスト
# ---------------------------------------------------------------------------

class TestRecordingSession:
    """RecordingSession の状態遷移テスト。"""

    def test_initial_state(self, recording: RecordingSession):
        """初期状態は非記録・名前なし・ログ空であること。"""
        assert recording.active is False
        assert recording.name == ""
        assert recording.actions == ()

    def test_start_sets_state(self, recording: RecordingSession):
        """start() で記録中になり名前が設定されること。"""
        recording.start("login")
        assert recording.active is True
        assert recording.name == "login"

    def test_start_requires_name(self, recording: RecordingSession):
        """空の名前では開始できないこと。"""
        with pytest.raises(ValueError):
            recording.start("")
        with pytest.raises(ValueError):
            recording.start("   ")
        assert recording.active is False

    def test_start_clears_log(self, recording: RecordingSession, recorder: ActionRecorder):
        """start() は既存ログを破棄すること。"""
        recording.start("first")
        recorder.record(NavigateAction(url="https://a.test"))
        recording.stop()

        recording.start("second")
        assert recording.actions == ()
        assert recording.name == "second"

    def test_restart_while_active(self, recording: RecordingSession, recorder: ActionRecorder):
        """記録中の start() はエラーにならず記録をやり直すこと。"""
        recording.start("first")
        recorder.record(ClickAction(selector="#a"))
        recording.start("second")
        assert recording.active is True
        assert recording.action_count == 0

    def test_stop_keeps_log_and_name(self, recording: RecordingSession, recorder: ActionRecorder):
        """stop() はログと名前を保持すること。"""
        recording.start("keep")
        recorder.record(ClickAction(selector="#a"))
        recording.stop()
        assert recording.active is False
        assert recording.name == "keep"
        assert recording.action_count == 1

    def test_stop_is_idempotent(self, recording: RecordingSession):
        """非記録中の stop() は何もしないこと。"""
        recording.stop()
        recording.stop()
        assert recording.active is False

    def test_reset_clears_log(self, recording: RecordingSession, recorder: ActionRecorder):
        """reset() は記録を停止しログを破棄すること。"""
        recording.start("teardown")
        recorder.record(ClickAction(selector="#a"))
        recording.reset()
        assert recording.active is False
        assert recording.actions == ()

    def test_actions_is_snapshot(self, recording: RecordingSession, recorder: ActionRecorder):
        """actions は追加後のログに影響されないスナップショットであること。"""
        recording.start("snap")
        recorder.record(ClickAction(selector="#a"))
        snapshot = recording.actions
        recorder.record(ClickAction(selector="#b"))
        assert len(snapshot) == 1
        assert recording.action_count == 2


# ---------------------------------------------------------------------------
# ActionRecorder のテスト
# ---------------------------------------------------------------------------

class TestActionRecorder:
    """ActionRecorder の記録条件テスト。"""

    def test_record_when_inactive_is_noop(self, recording: RecordingSession, recorder: ActionRecorder):
        """非記録中の record() はログを変更しないこと。"""
        result = recorder.record(ClickAction(selector="#a"))
        assert result is None
        assert recording.actions == ()

    def test_record_after_stop_is_noop(self, recording: RecordingSession, recorder: ActionRecorder):
        """停止後の record() はログを変更しないこと。"""
        recording.start("s")
        recorder.record(ClickAction(selector="#a"))
        recording.stop()
        recorder.record(ClickAction(selector="#b"))
        assert [a.selector for a in recording.actions] == ["#a"]

    def test_record_appends_in_order(self, recording: RecordingSession, recorder: ActionRecorder):
        """記録順にログへ追加されること。"""
        recording.start("order")
        recorder.record(NavigateAction(url="https://a.test"))
        recorder.record(ClickAction(selector="#go"))
        recorder.record(ClickAction(selector="#go"))
        kinds = [a.kind for a in recording.actions]
        assert kinds == ["navigate", "click", "click"]

    def test_record_accepts_mapping(self, recording: RecordingSession, recorder: ActionRecorder):
        """辞書形式の候補も記録できること。"""
        recording.start("dict")
        action = recorder.record({"kind": "fill", "selector": "#q", "value": "x"})
        assert action is not None
        assert action.kind == "fill"
        assert recording.actions[0].value == "x"

    def test_record_assigns_fresh_timestamp(self, recording: RecordingSession, recorder: ActionRecorder):
        """記録時にタイムスタンプが付け直されること。"""
        recording.start("ts")
        candidate = ClickAction(selector="#a", timestamp=0.0)
        stored = recorder.record(candidate)
        assert stored is not None
        assert stored.timestamp > 0.0
        assert candidate.timestamp == 0.0

    def test_record_invalid_mapping_raises(self, recording: RecordingSession, recorder: ActionRecorder):
        """記録中に不正な辞書を渡すと ValidationError になること。"""
        recording.start("bad")
        with pytest.raises(ValidationError):
            recorder.record({"kind": "click"})
        assert recording.actions == ()

    def test_record_invalid_mapping_ignored_when_inactive(self, recorder: ActionRecorder):
        """非記録中は検証も行わず None を返すこと。"""
        assert recorder.record({"kind": "click"}) is None
