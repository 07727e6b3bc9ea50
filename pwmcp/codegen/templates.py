"""
テンプレート表 — アクション種別 → 1 文のコード片

フレームワーク（と言語）ごとに、アクション種別からコード文 1 行を
生成する小さな整形関数の対応表を定義する。表に無い種別は
そのフレームワークでは生成対象外となり、ジェネレータがスキップする。

各整形関数は (action, quote) を受け取る。quote は文字列値を
シングルクォートのリテラルに変換する関数で、デフォルトでは値を
そのまま埋め込む（エスケープしない）。
"""

from __future__ import annotations

from typing import Any, Callable

from ..actions import ActionKind

Quote = Callable[[str], str]
"""文字列値 → ソースコード上のリテラル。"""

Template = Callable[[Any, Quote], str]
"""(action, quote) → コード文 1 行（インデントなし）。"""

TemplateTable = dict[ActionKind, Template]


# ---------------------------------------------------------------------------
# リテラル生成
# ---------------------------------------------------------------------------

def verbatim_literal(value: str) -> str:
    """値をそのままシングルクォートで囲む。

    値にクォートやコードが含まれると生成スクリプトが壊れる、
    または意味が変わる点に注意（既知の制約）。
    """
    return f"'{value}'"


def escaped_literal(value: str) -> str:
    """バックスラッシュ・シングルクォート・改行をエスケープして囲む。"""
    escaped = (
        value.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    return f"'{escaped}'"


# ---------------------------------------------------------------------------
# JavaScript / TypeScript
# ---------------------------------------------------------------------------

PLAYWRIGHT_JS: TemplateTable = {
    ActionKind.NAVIGATE: lambda a, q: f"await page.goto({q(a.url)});",
    ActionKind.CLICK: lambda a, q: f"await page.click({q(a.selector)});",
    ActionKind.FILL: lambda a, q: f"await page.fill({q(a.selector)}, {q(a.value)});",
    ActionKind.TYPE: lambda a, q: f"await page.type({q(a.selector)}, {q(a.value)});",
    ActionKind.PRESS: lambda a, q: f"await page.keyboard.press({q(a.key)});",
    ActionKind.SELECT: lambda a, q: f"await page.selectOption({q(a.selector)}, {q(a.value)});",
    ActionKind.HOVER: lambda a, q: f"await page.hover({q(a.selector)});",
    ActionKind.CHECK: lambda a, q: f"await page.check({q(a.selector)});",
    ActionKind.UNCHECK: lambda a, q: f"await page.uncheck({q(a.selector)});",
    ActionKind.WAIT_FOR_SELECTOR: lambda a, q: f"await page.waitForSelector({q(a.selector)});",
    ActionKind.SCREENSHOT: lambda a, q: f"await page.screenshot({{ path: {q(a.value)} }});",
}

# puppeteer には check / uncheck 相当の API が無い。fill は type で代替する
PUPPETEER_JS: TemplateTable = {
    ActionKind.NAVIGATE: lambda a, q: f"await page.goto({q(a.url)});",
    ActionKind.CLICK: lambda a, q: f"await page.click({q(a.selector)});",
    ActionKind.FILL: lambda a, q: f"await page.type({q(a.selector)}, {q(a.value)});",
    ActionKind.TYPE: lambda a, q: f"await page.type({q(a.selector)}, {q(a.value)});",
    ActionKind.PRESS: lambda a, q: f"await page.keyboard.press({q(a.key)});",
    ActionKind.SELECT: lambda a, q: f"await page.select({q(a.selector)}, {q(a.value)});",
    ActionKind.HOVER: lambda a, q: f"await page.hover({q(a.selector)});",
    ActionKind.WAIT_FOR_SELECTOR: lambda a, q: f"await page.waitForSelector({q(a.selector)});",
    ActionKind.SCREENSHOT: lambda a, q: f"await page.screenshot({{ path: {q(a.value)} }});",
}

SELENIUM_JS: TemplateTable = {
    ActionKind.NAVIGATE: lambda a, q: f"await driver.get({q(a.url)});",
    ActionKind.CLICK: lambda a, q: f"await driver.findElement(By.css({q(a.selector)})).click();",
    ActionKind.FILL: lambda a, q: (
        f"await driver.findElement(By.css({q(a.selector)})).sendKeys({q(a.value)});"
    ),
    ActionKind.TYPE: lambda a, q: (
        f"await driver.findElement(By.css({q(a.selector)})).sendKeys({q(a.value)});"
    ),
    ActionKind.WAIT_FOR_SELECTOR: lambda a, q: (
        f"await driver.wait(until.elementLocated(By.css({q(a.selector)})), 10000);"
    ),
    ActionKind.SCREENSHOT: lambda a, q: (
        f"fs.writeFileSync({q(a.value)}, await driver.takeScreenshot(), 'base64');"
    ),
}


# ---------------------------------------------------------------------------
# Python
# ---------------------------------------------------------------------------

# python の playwright 表には check / uncheck を持たない
PLAYWRIGHT_PY: TemplateTable = {
    ActionKind.NAVIGATE: lambda a, q: f"page.goto({q(a.url)})",
    ActionKind.CLICK: lambda a, q: f"page.click({q(a.selector)})",
    ActionKind.FILL: lambda a, q: f"page.fill({q(a.selector)}, {q(a.value)})",
    ActionKind.TYPE: lambda a, q: f"page.type({q(a.selector)}, {q(a.value)})",
    ActionKind.PRESS: lambda a, q: f"page.keyboard.press({q(a.key)})",
    ActionKind.SELECT: lambda a, q: f"page.select_option({q(a.selector)}, {q(a.value)})",
    ActionKind.HOVER: lambda a, q: f"page.hover({q(a.selector)})",
    ActionKind.WAIT_FOR_SELECTOR: lambda a, q: f"page.wait_for_selector({q(a.selector)})",
    ActionKind.SCREENSHOT: lambda a, q: f"page.screenshot(path={q(a.value)})",
}

SELENIUM_PY: TemplateTable = {
    ActionKind.NAVIGATE: lambda a, q: f"driver.get({q(a.url)})",
    ActionKind.CLICK: lambda a, q: f"driver.find_element(By.CSS_SELECTOR, {q(a.selector)}).click()",
    ActionKind.FILL: lambda a, q: (
        f"driver.find_element(By.CSS_SELECTOR, {q(a.selector)}).send_keys({q(a.value)})"
    ),
    ActionKind.TYPE: lambda a, q: (
        f"driver.find_element(By.CSS_SELECTOR, {q(a.selector)}).send_keys({q(a.value)})"
    ),
    ActionKind.WAIT_FOR_SELECTOR: lambda a, q: (
        "WebDriverWait(driver, 10).until("
        f"EC.presence_of_element_located((By.CSS_SELECTOR, {q(a.selector)})))"
    ),
    ActionKind.SCREENSHOT: lambda a, q: f"driver.save_screenshot({q(a.value)})",
}
