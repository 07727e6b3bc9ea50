"""
コードジェネレータ — (アクションログ, フレームワーク, 言語) → テストコード

記録済みアクションログから対象フレームワーク / 言語のテストコードを
生成する純粋関数 generate() を提供する。ストレージには一切触れない。

戦略の選択:
  - typescript / javascript: (フレームワーク, 言語) をキーとする戦略表で選択
  - python: 戦略表とは独立した専用経路で、playwright なら sync_playwright、
    それ以外はドライバベース（selenium）の戦略を使う

9 通りの組み合わせすべてを受け付ける。本来そのエコシステムに無い組み合わせ
（python × puppeteer）は近い戦略で代替し、fallback に記録する。
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence, Union

from ..actions import RecordedAction
from .strategies import (
    PlaywrightTestStrategy,
    PuppeteerScriptStrategy,
    PythonPlaywrightStrategy,
    PythonSeleniumStrategy,
    RenderStrategy,
    SeleniumWebDriverJsStrategy,
)
from .templates import escaped_literal, verbatim_literal

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# 対象フレームワーク / 言語
# ---------------------------------------------------------------------------

class Framework(str, enum.Enum):
    """生成対象のテストフレームワーク。"""

    PLAYWRIGHT = "playwright"
    PUPPETEER = "puppeteer"
    SELENIUM = "selenium"


class Language(str, enum.Enum):
    """生成対象の言語。"""

    TYPESCRIPT = "typescript"
    JAVASCRIPT = "javascript"
    PYTHON = "python"


# ---------------------------------------------------------------------------
# 戦略表（JavaScript / TypeScript）
# ---------------------------------------------------------------------------

_SCRIPT_STRATEGIES: dict[tuple[Framework, Language], RenderStrategy] = {
    (Framework.PLAYWRIGHT, Language.TYPESCRIPT): PlaywrightTestStrategy(typescript=True),
    (Framework.PLAYWRIGHT, Language.JAVASCRIPT): PlaywrightTestStrategy(typescript=False),
    (Framework.PUPPETEER, Language.TYPESCRIPT): PuppeteerScriptStrategy(typescript=True),
    (Framework.PUPPETEER, Language.JAVASCRIPT): PuppeteerScriptStrategy(typescript=False),
    (Framework.SELENIUM, Language.TYPESCRIPT): SeleniumWebDriverJsStrategy(typescript=True),
    (Framework.SELENIUM, Language.JAVASCRIPT): SeleniumWebDriverJsStrategy(typescript=False),
}

_PYTHON_PLAYWRIGHT = PythonPlaywrightStrategy()
_PYTHON_SELENIUM = PythonSeleniumStrategy()


def _select_python_strategy(
    framework: Framework,
) -> tuple[RenderStrategy, Optional[str]]:
    """Python 用の戦略を選択する。

    Returns:
        (戦略, 代替した場合の説明)
    """
    if framework is Framework.PLAYWRIGHT:
        return _PYTHON_PLAYWRIGHT, None
    if framework is Framework.SELENIUM:
        return _PYTHON_SELENIUM, None
    return _PYTHON_SELENIUM, f"{framework.value} is not available for python; generated selenium code"


# ---------------------------------------------------------------------------
# 生成結果
# ---------------------------------------------------------------------------

@dataclass
class GenerationResult:
    """コード生成の結果。

    Attributes:
        code: 生成されたソースコード
        framework: 指定フレームワーク
        language: 指定言語
        strategy: 使用した戦略名
        emitted: コード文に変換されたアクション
        skipped: 対応テンプレートが無くスキップされたアクション
        fallback: 代替戦略を使った場合の説明
    """

    code: str
    framework: Framework
    language: Language
    strategy: str
    emitted: list[RecordedAction] = field(default_factory=list)
    skipped: list[RecordedAction] = field(default_factory=list)
    fallback: Optional[str] = None

    @property
    def statement_count(self) -> int:
        """生成されたアクション文の数を返す。"""
        return len(self.emitted)


# ---------------------------------------------------------------------------
# generate 本体
# ---------------------------------------------------------------------------

def generate(
    actions: Sequence[RecordedAction],
    session_name: str,
    framework: Union[Framework, str],
    language: Union[Language, str],
    *,
    escape: bool = False,
) -> GenerationResult:
    """アクションログからテストコードを生成する。

    文字列値はデフォルトでそのままシングルクォート内に埋め込む。
    値にクォートやコードが含まれると生成コードが壊れる / 改変される
    既知の制約がある。escape=True でエスケープを有効化できる。

    Args:
        actions: 記録順のアクションログ（空不可）
        session_name: 記録セッション名（空の場合は既定名を使用）
        framework: playwright / puppeteer / selenium
        language: typescript / javascript / python
        escape: 文字列値をエスケープするか

    Returns:
        生成結果

    Raises:
        ValueError: actions が空、または未知のフレームワーク / 言語の場合
    """
    if not actions:
        raise ValueError("アクションが記録されていません")

    fw = Framework(framework)
    lang = Language(language)

    fallback: Optional[str] = None
    if lang is Language.PYTHON:
        strategy, fallback = _select_python_strategy(fw)
    else:
        strategy = _SCRIPT_STRATEGIES[(fw, lang)]

    if fallback:
        logger.warning("代替戦略を使用します: %s", fallback)

    quote = escaped_literal if escape else verbatim_literal
    rendered = strategy.render(actions, session_name, quote)

    logger.info(
        "テストコードを生成しました: %s (%d 文, スキップ %d 件)",
        strategy.name, len(rendered.emitted), len(rendered.skipped),
    )
    return GenerationResult(
        code=rendered.code,
        framework=fw,
        language=lang,
        strategy=strategy.name,
        emitted=rendered.emitted,
        skipped=rendered.skipped,
        fallback=fallback,
    )
