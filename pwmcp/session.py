"""
Session — ブラウザセッション管理

Playwright ブラウザの起動・終了・状態管理を担当する。
最初のブラウザ操作ツールの呼び出し時に遅延起動し、
playwright_close まで Browser / BrowserContext / Page を保持する。
"""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from playwright.async_api import Browser, BrowserContext, Page

    from .config import ServerConfig

logger = logging.getLogger(__name__)

_LAUNCH_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]


# ---------------------------------------------------------------------------
# セッション状態
# ---------------------------------------------------------------------------

class SessionState(enum.Enum):
    """ブラウザセッションの状態。"""

    IDLE = "idle"
    LAUNCHING = "launching"
    ACTIVE = "active"
    CLOSING = "closing"
    CLOSED = "closed"


# ---------------------------------------------------------------------------
# BrowserSession 本体
# ---------------------------------------------------------------------------

class BrowserSession:
    """Playwright ブラウザセッションの管理クラス。

    ensure_page() で必要に応じてブラウザを起動し、Page を返す。
    close() 後に再度 ensure_page() を呼ぶと新しいブラウザを起動する。
    """

    def __init__(self, config: Optional[ServerConfig] = None) -> None:
        """BrowserSession を初期化する。

        Args:
            config: サーバー設定（None でデフォルト値）
        """
        if config is None:
            from .config import ServerConfig
            config = ServerConfig()
        self.config = config
        self._state: SessionState = SessionState.IDLE
        self._pw_instance: Optional[object] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    @property
    def state(self) -> SessionState:
        """現在のセッション状態を返す。"""
        return self._state

    @property
    def is_active(self) -> bool:
        """セッションがアクティブかどうかを返す。"""
        return self._state == SessionState.ACTIVE

    @property
    def page(self) -> Optional[Page]:
        """現在の Page オブジェクトを返す。非アクティブ時は None。"""
        if not self.is_active:
            return None
        return self._page

    async def ensure_page(self) -> Page:
        """Page を返す。ブラウザが未起動なら起動する。"""
        if not self.is_active or self._page is None:
            await self.launch()
        if self._page is None:
            raise RuntimeError("ブラウザの起動後に Page が取得できませんでした")
        return self._page

    async def launch(self) -> None:
        """ブラウザを起動し、Page を生成する。

        Raises:
            RuntimeError: 既にアクティブなセッションがある場合
        """
        if self._state == SessionState.ACTIVE:
            raise RuntimeError(
                "既にアクティブなセッションがあります。"
                "先に close() を呼んでください。"
            )

        self._state = SessionState.LAUNCHING
        cfg = self.config
        logger.info("ブラウザを起動しています... (headed=%s)", cfg.headed)

        try:
            from playwright.async_api import async_playwright

            pw = await async_playwright().start()
            self._pw_instance = pw

            self._browser = await pw.chromium.launch(
                headless=not cfg.headed,
                args=_LAUNCH_ARGS,
            )
            self._context = await self._browser.new_context(
                viewport={"width": cfg.viewport_width, "height": cfg.viewport_height},
                user_agent=cfg.user_agent,
            )
            self._page = await self._context.new_page()
            self._state = SessionState.ACTIVE
            logger.info("ブラウザを起動しました")

        except Exception:
            self._state = SessionState.IDLE
            logger.exception("ブラウザの起動に失敗しました")
            raise

    async def set_viewport(self, width: int, height: int) -> None:
        """ビューポートサイズを変更する。"""
        page = await self.ensure_page()
        await page.set_viewport_size({"width": width, "height": height})

    async def close(self) -> None:
        """ブラウザを終了し、リソースをクリーンアップする。"""
        if self._state in (SessionState.IDLE, SessionState.CLOSED, SessionState.CLOSING):
            self._state = SessionState.CLOSED
            return

        self._state = SessionState.CLOSING
        logger.info("ブラウザを終了しています...")

        try:
            if self._page is not None:
                await self._page.close()
            if self._context is not None:
                await self._context.close()
            if self._browser is not None:
                await self._browser.close()
            if self._pw_instance is not None and hasattr(self._pw_instance, "stop"):
                await self._pw_instance.stop()
        except Exception:
            logger.exception("ブラウザの終了中にエラーが発生しました")
        finally:
            self._browser = None
            self._context = None
            self._page = None
            self._pw_instance = None
            self._state = SessionState.CLOSED
            logger.info("ブラウザを終了しました")
