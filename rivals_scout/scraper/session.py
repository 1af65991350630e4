# rivals_scout/scraper/session.py
"""
Browser session management for Playwright-based scraping.

Every handle gets its own Playwright instance, browser, context and page.
Sessions are never pooled; closing is idempotent and never raises.
"""

from __future__ import annotations

import logging
from typing import Optional

from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright

logger = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)
VIEWPORT = {"width": 1280, "height": 900}

LAUNCH_ARGS = [
    '--disable-blink-features=AutomationControlled',
    '--disable-dev-shm-usage',
    '--no-sandbox',
]

STEALTH_INIT_SCRIPT = """
    Object.defineProperty(navigator, 'webdriver', { get: () => undefined });
    Object.defineProperty(navigator, 'languages', { get: () => ['en-US', 'en'] });
    window.chrome = { runtime: {} };
"""


class ScrapeSession:
    """An exclusively-owned browser session bound to one handle."""

    def __init__(
        self,
        page: Page,
        context: Optional[BrowserContext] = None,
        browser: Optional[Browser] = None,
        playwright: Optional[Playwright] = None,
    ):
        self.page = page
        self.context = context
        self.browser = browser
        self._playwright = playwright
        self.closed = False

    async def close(self) -> None:
        """Force-close every open page, then the context, browser and driver."""
        if self.closed:
            return
        self.closed = True

        pages = list(self.context.pages) if self.context else [self.page]
        for page in pages:
            try:
                if not page.is_closed():
                    await page.close()
            except Exception as exc:
                logger.warning("Failed to close page: %s", exc)

        for label, resource in (("context", self.context), ("browser", self.browser)):
            if resource is None:
                continue
            try:
                await resource.close()
            except Exception as exc:
                logger.warning("Failed to close %s: %s", label, exc)

        if self._playwright:
            try:
                await self._playwright.stop()
            except Exception as exc:
                logger.warning("Failed to stop Playwright: %s", exc)

        self.page = None
        self.context = None
        self.browser = None
        self._playwright = None

    async def __aenter__(self) -> "ScrapeSession":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


async def launch_session(headless: bool = True, navigation_timeout_ms: int = 30000) -> ScrapeSession:
    """
    Start a fresh Chromium session with anti-detection settings.

    Args:
        headless: Run without a visible window
        navigation_timeout_ms: Default timeout applied to the context

    Returns:
        ScrapeSession with one open page

    Raises:
        RuntimeError: If the browser cannot be launched
    """
    playwright = await async_playwright().start()
    browser = None
    try:
        browser = await playwright.chromium.launch(headless=headless, args=LAUNCH_ARGS)
        context = await browser.new_context(
            user_agent=USER_AGENT,
            viewport=VIEWPORT,
            locale="en-US",
            extra_http_headers={"Accept-Language": "en-US,en;q=0.9"},
        )
        await context.add_init_script(STEALTH_INIT_SCRIPT)
        context.set_default_timeout(navigation_timeout_ms)
        page = await context.new_page()
    except Exception as exc:
        if browser:
            try:
                await browser.close()
            except Exception:
                logger.debug("Browser close after failed launch also failed", exc_info=True)
        try:
            await playwright.stop()
        except Exception:
            logger.debug("Playwright stop after failed launch also failed", exc_info=True)
        raise RuntimeError(f"Failed to create browser context: {exc}") from exc

    return ScrapeSession(page=page, context=context, browser=browser, playwright=playwright)
