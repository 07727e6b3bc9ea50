"""
レンダリング戦略 — アクションログ → テストソースコード

(フレームワーク, 言語) ごとのコード生成手順を戦略クラスとして定義する。
各戦略は以下の 4 部で構成されるソースを出力する:

  1. import / セットアップ定型文
  2. テスト（スクリプト）エントリポイント
  3. アクション 1 件につき 1 文（ログ順、テンプレート表に無い種別はスキップ）
  4. ブラウザ / ドライバの終了定型文

JavaScript / TypeScript の差は import 文のみ。
Python はフレームワークによって呼び出し形が根本的に異なる
（sync_playwright のコンテキストブロック / 明示的な driver オブジェクト）ため、
それぞれ独立した戦略とする。
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Sequence

from ..actions import ActionKind, RecordedAction
from .templates import (
    PLAYWRIGHT_JS,
    PLAYWRIGHT_PY,
    PUPPETEER_JS,
    SELENIUM_JS,
    SELENIUM_PY,
    Quote,
    TemplateTable,
)

logger = logging.getLogger(__name__)

_NON_IDENTIFIER = re.compile(r"[^a-zA-Z0-9]")


def python_test_name(session_name: str) -> str:
    """セッション名から Python のテスト関数名を生成する。

    英数字以外を "_" に置換する。空の場合は "test_recorded"。
    """
    safe = _NON_IDENTIFIER.sub("_", session_name)
    return f"test_{safe or 'recorded'}"


# ---------------------------------------------------------------------------
# レンダリング結果
# ---------------------------------------------------------------------------

@dataclass
class Rendered:
    """1 回のレンダリング結果。

    Attributes:
        code: 生成されたソースコード
        emitted: コード文に変換されたアクション（ログ順）
        skipped: テンプレートが無くスキップされたアクション（ログ順）
    """

    code: str
    emitted: list[RecordedAction] = field(default_factory=list)
    skipped: list[RecordedAction] = field(default_factory=list)


# ---------------------------------------------------------------------------
# 戦略ベース
# ---------------------------------------------------------------------------

class RenderStrategy(ABC):
    """レンダリング戦略の基底クラス。

    サブクラスは table / indent / header() / footer() を定義する。
    """

    name: str = ""
    table: TemplateTable = {}
    indent: str = "  "

    @abstractmethod
    def header(self, session_name: str, quote: Quote) -> list[str]:
        """import・エントリポイント開始までの行を返す。"""

    @abstractmethod
    def footer(self) -> list[str]:
        """終了定型文の行を返す。"""

    def render(
        self,
        actions: Sequence[RecordedAction],
        session_name: str,
        quote: Quote,
    ) -> Rendered:
        """アクションログをソースコードに変換する。

        Args:
            actions: 記録順のアクションログ
            session_name: 記録セッション名
            quote: 文字列リテラル生成関数

        Returns:
            生成コードと、変換 / スキップしたアクションの内訳
        """
        result = Rendered(code="")
        lines = self.header(session_name, quote)

        for action in actions:
            template = self.table.get(ActionKind(action.kind))
            if template is None:
                logger.debug(
                    "テンプレートが無いためスキップしました: %s (%s)",
                    action.kind, self.name,
                )
                result.skipped.append(action)
                continue
            lines.append(self.indent + template(action, quote))
            result.emitted.append(action)

        lines.extend(self.footer())
        result.code = "\n".join(lines) + "\n"
        return result


# ---------------------------------------------------------------------------
# JavaScript / TypeScript 戦略
# ---------------------------------------------------------------------------

class PlaywrightTestStrategy(RenderStrategy):
    """@playwright/test のテストブロックを生成する。"""

    table = PLAYWRIGHT_JS

    def __init__(self, typescript: bool) -> None:
        self.typescript = typescript
        self.name = f"playwright-{'typescript' if typescript else 'javascript'}"

    def header(self, session_name: str, quote: Quote) -> list[str]:
        if self.typescript:
            imports = "import { test, expect } from '@playwright/test';"
        else:
            imports = "const { test, expect } = require('@playwright/test');"
        title = quote(session_name or "recorded test")
        return [imports, "", f"test({title}, async ({{ page }}) => {{"]

    def footer(self) -> list[str]:
        return ["});"]


class PuppeteerScriptStrategy(RenderStrategy):
    """puppeteer の即時実行 async 関数スクリプトを生成する。"""

    table = PUPPETEER_JS

    def __init__(self, typescript: bool) -> None:
        self.typescript = typescript
        self.name = f"puppeteer-{'typescript' if typescript else 'javascript'}"

    def header(self, session_name: str, quote: Quote) -> list[str]:
        if self.typescript:
            imports = "import puppeteer from 'puppeteer';"
        else:
            imports = "const puppeteer = require('puppeteer');"
        return [
            imports,
            "",
            "(async () => {",
            "  const browser = await puppeteer.launch();",
            "  const page = await browser.newPage();",
            "",
        ]

    def footer(self) -> list[str]:
        return ["", "  await browser.close();", "})();"]


class SeleniumWebDriverJsStrategy(RenderStrategy):
    """selenium-webdriver (JavaScript バインディング) のスクリプトを生成する。"""

    table = SELENIUM_JS

    def __init__(self, typescript: bool) -> None:
        self.typescript = typescript
        self.name = f"selenium-{'typescript' if typescript else 'javascript'}"

    def header(self, session_name: str, quote: Quote) -> list[str]:
        if self.typescript:
            imports = [
                "import * as fs from 'fs';",
                "import { Builder, By, until } from 'selenium-webdriver';",
            ]
        else:
            imports = [
                "const fs = require('fs');",
                "const { Builder, By, until } = require('selenium-webdriver');",
            ]
        return imports + [
            "",
            "(async () => {",
            "  const driver = await new Builder().forBrowser('chrome').build();",
            "",
        ]

    def footer(self) -> list[str]:
        return ["", "  await driver.quit();", "})();"]


# ---------------------------------------------------------------------------
# Python 戦略
# ---------------------------------------------------------------------------

class PythonPlaywrightStrategy(RenderStrategy):
    """sync_playwright のコンテキストブロックを使う pytest 関数を生成する。"""

    name = "playwright-python"
    table = PLAYWRIGHT_PY
    indent = "        "

    def header(self, session_name: str, quote: Quote) -> list[str]:
        return [
            "from playwright.sync_api import sync_playwright",
            "",
            "",
            f"def {python_test_name(session_name)}():",
            "    with sync_playwright() as p:",
            "        browser = p.chromium.launch()",
            "        page = browser.new_page()",
            "",
        ]

    def footer(self) -> list[str]:
        return ["", "        browser.close()"]


class PythonSeleniumStrategy(RenderStrategy):
    """明示的な webdriver オブジェクトを使う pytest 関数を生成する。"""

    name = "selenium-python"
    table = SELENIUM_PY
    indent = "    "

    def header(self, session_name: str, quote: Quote) -> list[str]:
        return [
            "from selenium import webdriver",
            "from selenium.webdriver.common.by import By",
            "from selenium.webdriver.support.ui import WebDriverWait",
            "from selenium.webdriver.support import expected_conditions as EC",
            "",
            "",
            f"def {python_test_name(session_name)}():",
            "    driver = webdriver.Chrome()",
            "",
        ]

    def footer(self) -> list[str]:
        return ["", "    driver.quit()"]
