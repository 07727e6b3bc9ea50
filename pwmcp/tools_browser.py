"""
ブラウザ操作ツール — ナビゲーション・操作・状態確認

MCP サーバーに登録するブラウザ操作ツールを定義する。
各ツールは Playwright の操作をそのまま実行し、成功した場合のみ
ActionRecorder に操作を通知する（記録中でなければ通知は無視される）。
Playwright の例外はそのまま伝播し、FastMCP がツールエラーとして返す。

記録されない操作:
  extract_text, evaluate, get_attribute, go_back, go_forward, reload,
  set_viewport, drag_and_drop, get_page_info
"""

from __future__ import annotations

import base64
import json
import logging
from typing import Literal, Optional

from fastmcp import FastMCP

from .actions import (
    CheckAction,
    ClickAction,
    FillAction,
    HoverAction,
    NavigateAction,
    PressAction,
    ScreenshotAction,
    SelectAction,
    TypeAction,
    UncheckAction,
    WaitForSelectorAction,
)
from .recording import ActionRecorder
from .session import BrowserSession

logger = logging.getLogger(__name__)


def register_browser_tools(
    mcp: FastMCP,
    session: BrowserSession,
    recorder: ActionRecorder,
) -> None:
    """ブラウザ操作ツールを MCP サーバーに登録する。

    Args:
        mcp: FastMCP サーバーインスタンス
        session: ブラウザセッション
        recorder: 操作レコーダー
    """

    # -------------------------------------------------------------------
    # ナビゲーションツール
    # -------------------------------------------------------------------

    @mcp.tool
    async def playwright_navigate(
        url: str,
        wait_until: Optional[Literal["load", "domcontentloaded", "networkidle", "commit"]] = None,
    ) -> str:
        """Navigate to a URL in the browser.

        Args:
            url: The URL to navigate to
            wait_until: When to consider navigation succeeded (default: networkidle)

        Returns:
            Status message
        """
        page = await session.ensure_page()
        await page.goto(url, wait_until=wait_until or "networkidle")
        recorder.record(NavigateAction(url=url, description=f"Navigate to {url}"))
        return f"Successfully navigated to {url}"

    @mcp.tool
    async def playwright_go_back() -> str:
        """Navigate back in browser history."""
        page = await session.ensure_page()
        await page.go_back()
        return "Navigated back"

    @mcp.tool
    async def playwright_go_forward() -> str:
        """Navigate forward in browser history."""
        page = await session.ensure_page()
        await page.go_forward()
        return "Navigated forward"

    @mcp.tool
    async def playwright_reload() -> str:
        """Reload the current page."""
        page = await session.ensure_page()
        await page.reload()
        return "Page reloaded"

    # -------------------------------------------------------------------
    # 操作ツール
    # -------------------------------------------------------------------

    @mcp.tool
    async def playwright_click(
        selector: str,
        button: Optional[Literal["left", "right", "middle"]] = None,
        click_count: Optional[int] = None,
    ) -> str:
        """Click an element on the page.

        Args:
            selector: CSS selector of element to click
            button: Mouse button to use
            click_count: Number of clicks

        Returns:
            Status message
        """
        page = await session.ensure_page()
        await page.click(selector, button=button, click_count=click_count)
        recorder.record(ClickAction(selector=selector, description=f"Click {selector}"))
        return f"Clicked element: {selector}"

    @mcp.tool
    async def playwright_fill(selector: str, value: str) -> str:
        """Fill an input field with a value.

        Args:
            selector: CSS selector of input element
            value: Value to fill into the input

        Returns:
            Status message
        """
        page = await session.ensure_page()
        await page.fill(selector, value)
        recorder.record(FillAction(selector=selector, value=value, description=f"Fill {selector}"))
        return f"Filled {selector} with: {value}"

    @mcp.tool
    async def playwright_type(selector: str, text: str, delay: Optional[float] = None) -> str:
        """Type text into an element character by character.

        Args:
            selector: CSS selector of input element
            text: Text to type
            delay: Delay between keystrokes in ms

        Returns:
            Status message
        """
        page = await session.ensure_page()
        await page.type(selector, text, delay=delay)
        recorder.record(TypeAction(
            selector=selector, value=text, delay=delay,
            description=f"Type into {selector}",
        ))
        return f'Typed "{text}" into {selector}'

    @mcp.tool
    async def playwright_hover(selector: str) -> str:
        """Hover over an element.

        Args:
            selector: CSS selector of element to hover

        Returns:
            Status message
        """
        page = await session.ensure_page()
        await page.hover(selector)
        recorder.record(HoverAction(selector=selector, description=f"Hover {selector}"))
        return f"Hovered over: {selector}"

    @mcp.tool
    async def playwright_select(selector: str, value: str) -> str:
        """Select an option in a select element.

        Args:
            selector: CSS selector of select element
            value: Value to select

        Returns:
            Status message
        """
        page = await session.ensure_page()
        await page.select_option(selector, value)
        recorder.record(SelectAction(
            selector=selector, value=value,
            description=f"Select option in {selector}",
        ))
        return f'Selected "{value}" in {selector}'

    @mcp.tool
    async def playwright_press_key(key: str) -> str:
        """Press a keyboard key.

        Args:
            key: Key to press (e.g. 'Enter', 'Escape', 'ArrowDown')

        Returns:
            Status message
        """
        page = await session.ensure_page()
        await page.keyboard.press(key)
        recorder.record(PressAction(key=key, description=f"Press {key}"))
        return f"Pressed key: {key}"

    @mcp.tool
    async def playwright_checkbox(selector: str, checked: bool) -> str:
        """Check or uncheck a checkbox.

        Args:
            selector: CSS selector of checkbox
            checked: Check (true) or uncheck (false)

        Returns:
            Status message
        """
        page = await session.ensure_page()
        if checked:
            await page.check(selector)
            recorder.record(CheckAction(selector=selector, description=f"Check {selector}"))
        else:
            await page.uncheck(selector)
            recorder.record(UncheckAction(selector=selector, description=f"Uncheck {selector}"))
        return f"Checkbox {'checked' if checked else 'unchecked'}: {selector}"

    @mcp.tool
    async def playwright_drag_and_drop(source_selector: str, target_selector: str) -> str:
        """Drag an element and drop it onto another element.

        Args:
            source_selector: CSS selector of element to drag
            target_selector: CSS selector of drop target

        Returns:
            Status message
        """
        page = await session.ensure_page()
        await page.drag_and_drop(source_selector, target_selector)
        return f"Dragged {source_selector} to {target_selector}"

    @mcp.tool
    async def playwright_wait_for_selector(
        selector: str,
        timeout: Optional[float] = None,
        state: Optional[Literal["attached", "detached", "visible", "hidden"]] = None,
    ) -> str:
        """Wait for an element to appear.

        Args:
            selector: CSS selector to wait for
            timeout: Timeout in ms (default: 30000)
            state: Element state to wait for

        Returns:
            Status message
        """
        page = await session.ensure_page()
        await page.wait_for_selector(selector, timeout=timeout, state=state)
        recorder.record(WaitForSelectorAction(selector=selector, description=f"Wait for {selector}"))
        return f"Element appeared: {selector}"

    @mcp.tool
    async def playwright_set_viewport(width: int, height: int) -> str:
        """Set the browser viewport size.

        Args:
            width: Viewport width
            height: Viewport height

        Returns:
            Status message
        """
        await session.set_viewport(width, height)
        return f"Viewport set to {width}x{height}"

    # -------------------------------------------------------------------
    # 状態確認ツール
    # -------------------------------------------------------------------

    @mcp.tool
    async def playwright_screenshot(name: str, full_page: bool = False) -> str:
        """Take a screenshot of the current page.

        Args:
            name: Name for the screenshot file
            full_page: Capture full page screenshot

        Returns:
            Status message and base64 encoded screenshot image (PNG)
        """
        page = await session.ensure_page()
        screenshot_bytes = await page.screenshot(full_page=full_page, type="png")
        recorder.record(ScreenshotAction(value=name, description="Take screenshot"))

        b64 = base64.b64encode(screenshot_bytes).decode("ascii")
        return f"Screenshot captured: {name}\ndata:image/png;base64,{b64}"

    @mcp.tool
    async def playwright_extract_text(selector: str, multiple: bool = False) -> str:
        """Extract text content from elements.

        Args:
            selector: CSS selector of element to extract text from
            multiple: Extract from all matching elements

        Returns:
            Extracted text
        """
        page = await session.ensure_page()
        if multiple:
            texts = await page.eval_on_selector_all(
                selector, "els => els.map(el => el.textContent || '')",
            )
            return "\n".join(texts) if texts else "(no elements found)"

        text = await page.text_content(selector)
        return text or "(empty)"

    @mcp.tool
    async def playwright_evaluate(script: str) -> str:
        """Execute JavaScript in the browser and return the result as JSON.

        Args:
            script: JavaScript code to execute in the browser

        Returns:
            JSON encoded result
        """
        page = await session.ensure_page()
        result = await page.evaluate(script)
        return json.dumps(result, indent=2, ensure_ascii=False, default=str)

    @mcp.tool
    async def playwright_get_attribute(selector: str, attribute: str) -> str:
        """Get an attribute value of an element.

        Args:
            selector: CSS selector of element
            attribute: Attribute name to get

        Returns:
            Attribute value
        """
        page = await session.ensure_page()
        value = await page.get_attribute(selector, attribute)
        return f'{attribute}="{value}"' if value else "(attribute not found)"

    @mcp.tool
    async def playwright_get_page_info() -> str:
        """Get the current page URL and title."""
        page = await session.ensure_page()
        title = await page.title()
        return f"URL: {page.url}\nTitle: {title}"
