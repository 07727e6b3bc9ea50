"""
アクションモデル — 記録対象のブラウザ操作 1 件の表現

自動化プリミティブ（navigate, click, fill 等）の成功後に記録される操作を
kind フィールドで判別する Pydantic v2 のタグ付き Union として定義する。

各モデルは種別ごとの必須フィールドを持ち、必須フィールドが欠けた
アクションは生成されない（ValidationError となる）。
description は人間向けのラベルで、コード生成には使用しない。
"""

from __future__ import annotations

import enum
import time
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter


# ---------------------------------------------------------------------------
# アクション種別
# ---------------------------------------------------------------------------

class ActionKind(str, enum.Enum):
    """記録可能な操作の種別（判別子）。"""

    NAVIGATE = "navigate"
    CLICK = "click"
    FILL = "fill"
    TYPE = "type"
    PRESS = "press"
    SELECT = "select"
    HOVER = "hover"
    CHECK = "check"
    UNCHECK = "uncheck"
    WAIT_FOR_SELECTOR = "waitForSelector"
    SCREENSHOT = "screenshot"


# ---------------------------------------------------------------------------
# 共通ベース
# ---------------------------------------------------------------------------

class _ActionBase(BaseModel):
    """全アクション共通のフィールド。"""

    timestamp: float = Field(
        default_factory=time.monotonic,
        description="記録時刻（time.monotonic() の値）",
    )
    description: Optional[str] = Field(
        default=None, description="人間向けの説明（コード生成には使用しない）",
    )

    def to_dict(self) -> dict[str, Any]:
        """YAML 出力用の辞書に変換する（None のフィールドは除外）。"""
        return self.model_dump(mode="json", exclude_none=True)


# ---------------------------------------------------------------------------
# 種別ごとのアクション
# ---------------------------------------------------------------------------

class NavigateAction(_ActionBase):
    """URL への遷移。"""

    kind: Literal["navigate"] = "navigate"
    url: str = Field(..., description="遷移先 URL")


class ClickAction(_ActionBase):
    """要素のクリック。"""

    kind: Literal["click"] = "click"
    selector: str = Field(..., description="クリック対象の CSS セレクタ")


class FillAction(_ActionBase):
    """入力欄への値の設定。"""

    kind: Literal["fill"] = "fill"
    selector: str = Field(..., description="入力対象の CSS セレクタ")
    value: str = Field(..., description="入力値")


class TypeAction(_ActionBase):
    """1 文字ずつのキー入力。

    delay は対応する API を持たないジェネレータでは無視される。
    """

    kind: Literal["type"] = "type"
    selector: str = Field(..., description="入力対象の CSS セレクタ")
    value: str = Field(..., description="入力テキスト")
    delay: Optional[float] = Field(default=None, description="キー入力間隔（ms）")


class PressAction(_ActionBase):
    """キーボードのキー押下。"""

    kind: Literal["press"] = "press"
    key: str = Field(..., description="キー名（Enter, Escape 等）")


class SelectAction(_ActionBase):
    """セレクトボックスのオプション選択。"""

    kind: Literal["select"] = "select"
    selector: str = Field(..., description="select 要素の CSS セレクタ")
    value: str = Field(..., description="選択する値")


class HoverAction(_ActionBase):
    """要素へのマウスホバー。"""

    kind: Literal["hover"] = "hover"
    selector: str = Field(..., description="ホバー対象の CSS セレクタ")


class CheckAction(_ActionBase):
    """チェックボックスのチェック。"""

    kind: Literal["check"] = "check"
    selector: str = Field(..., description="チェックボックスの CSS セレクタ")


class UncheckAction(_ActionBase):
    """チェックボックスのチェック解除。"""

    kind: Literal["uncheck"] = "uncheck"
    selector: str = Field(..., description="チェックボックスの CSS セレクタ")


class WaitForSelectorAction(_ActionBase):
    """要素の出現待機。"""

    kind: Literal["waitForSelector"] = "waitForSelector"
    selector: str = Field(..., description="待機対象の CSS セレクタ")


class ScreenshotAction(_ActionBase):
    """スクリーンショット取得。value は記録時の出力名。"""

    kind: Literal["screenshot"] = "screenshot"
    value: str = Field(..., description="スクリーンショットの出力パス / 名前")


# ---------------------------------------------------------------------------
# タグ付き Union
# ---------------------------------------------------------------------------

ACTION_TYPES: tuple[type[_ActionBase], ...] = (
    NavigateAction,
    ClickAction,
    FillAction,
    TypeAction,
    PressAction,
    SelectAction,
    HoverAction,
    CheckAction,
    UncheckAction,
    WaitForSelectorAction,
    ScreenshotAction,
)

RecordedAction = Annotated[
    Union[
        NavigateAction,
        ClickAction,
        FillAction,
        TypeAction,
        PressAction,
        SelectAction,
        HoverAction,
        CheckAction,
        UncheckAction,
        WaitForSelectorAction,
        ScreenshotAction,
    ],
    Field(discriminator="kind"),
]
"""記録アクションの閉じた Union 型（kind で判別）。"""

_ADAPTER: TypeAdapter = TypeAdapter(RecordedAction)
_LOG_ADAPTER: TypeAdapter = TypeAdapter(list[RecordedAction])


def parse_action(payload: dict[str, Any]) -> RecordedAction:
    """辞書からアクションを生成する。

    Args:
        payload: kind と種別ごとの必須フィールドを含む辞書

    Returns:
        kind に対応するアクションモデル

    Raises:
        pydantic.ValidationError: kind が不明、または必須フィールドが欠けている場合
    """
    return _ADAPTER.validate_python(payload)


def parse_action_log(items: list[dict[str, Any]]) -> list[RecordedAction]:
    """辞書のリストからアクションログを復元する（YAML 読み込み用）。"""
    return _LOG_ADAPTER.validate_python(items)
