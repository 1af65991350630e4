from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Callable, List, Optional, Sequence
from urllib.parse import quote

from ..models import PlayerResult
from .profile import ProfileScraper
from .readiness import PageReadinessPoller, ReadinessState
from .session import ScrapeSession, launch_session

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], Awaitable[ScrapeSession]]

TIMEOUT_MESSAGE = "Could not load profile page after maximum attempts"


class ProfileLoadTimeout(Exception):
    """Raised when the profile never shows a readiness marker."""

    def __init__(self, message: str = TIMEOUT_MESSAGE):
        super().__init__(message)


class PlayerNotFoundError(Exception):
    """Raised when the handle has no profile on the tracker."""


class ScraperBlockedError(Exception):
    """Raised when the tracker refuses the request (403/429)."""


def build_profile_url(handle: str, encode: bool = True) -> str:
    """Interpolate a handle into the profile overview URL."""
    name = quote(handle, safe="") if encode else handle
    return TrackerScraper.BASE_URL.format(handle=name)


class TrackerScraper:
    """Run one isolated scrape pipeline per handle, concurrently."""

    BASE_URL = "https://tracker.gg/marvel-rivals/profile/ign/{handle}/overview"

    def __init__(
        self,
        session_factory: Optional[SessionFactory] = None,
        poller: Optional[PageReadinessPoller] = None,
        profile_scraper: Optional[ProfileScraper] = None,
        headless: bool = True,
        navigation_timeout_ms: int = 30000,
        encode_handles: bool = True,
        screenshot_dir: Optional[Path] = None,
    ):
        self.headless = headless
        self.navigation_timeout_ms = navigation_timeout_ms
        self.encode_handles = encode_handles
        self.screenshot_dir = Path(screenshot_dir) if screenshot_dir else None
        self.poller = poller or PageReadinessPoller()
        self.profile_scraper = profile_scraper or ProfileScraper()
        self._session_factory = session_factory or self._launch

    # --- Main entry points ---

    async def scrape_players(self, handles: Sequence[str]) -> List[PlayerResult]:
        """
        Scrape every handle concurrently.

        Returns one PlayerResult per handle in submission order; a failing
        handle never cancels the others.
        """
        if not handles:
            return []
        logger.info("Scraping %d handle(s)", len(handles))
        results = await asyncio.gather(*(self.scrape_player(handle) for handle in handles))
        failed = sum(1 for r in results if not r.ok)
        logger.info("Scrape finished: %d succeeded, %d failed", len(results) - failed, failed)
        return list(results)

    async def scrape_player(self, handle: str) -> PlayerResult:
        """Acquire a session, navigate, wait for readiness, scrape, and always release."""
        session: Optional[ScrapeSession] = None
        state = ReadinessState.NAVIGATING
        try:
            session = await self._session_factory()
            url = build_profile_url(handle, encode=self.encode_handles)
            logger.info("[%s] Navigating to %s", handle, url)
            await self._navigate(session.page, url)

            state = ReadinessState.POLLING
            readiness = await self.poller.wait_until_ready(session.page)
            state = readiness.state
            if not readiness.ready:
                raise ProfileLoadTimeout()

            stats = await self.profile_scraper.scrape(session.page)
            logger.info("[%s] Extracted %d role(s), %d hero(es)", handle, len(stats.roles), len(stats.heroes))

            await self._save_screenshot(session.page, handle)
            try:
                await session.page.close()
            except Exception:
                logger.debug("[%s] Page close on success path failed", handle, exc_info=True)

            return PlayerResult.success(handle, stats.roles, stats.heroes)

        except Exception as exc:
            message = str(exc) or exc.__class__.__name__
            logger.warning("[%s] Scrape failed while %s: %s", handle, state.value, message)
            return PlayerResult.error(handle, message)

        finally:
            if session is not None:
                await self._release(session, handle)

    # --- Internal helpers ---

    async def _launch(self) -> ScrapeSession:
        return await launch_session(headless=self.headless, navigation_timeout_ms=self.navigation_timeout_ms)

    async def _navigate(self, page, url: str) -> None:
        """Navigate and reject blocked or missing profiles."""
        response = await page.goto(url, wait_until="domcontentloaded", timeout=self.navigation_timeout_ms)
        if response is not None:
            if response.status in (403, 429):
                raise ScraperBlockedError(f"Tracker refused the request ({response.status})")
            if response.status == 404:
                raise PlayerNotFoundError(f"Profile page not found at {url}")

    async def _save_screenshot(self, page, handle: str) -> None:
        if not self.screenshot_dir:
            return
        safe_name = "".join(ch if ch.isalnum() else "_" for ch in handle) or "player"
        path = self.screenshot_dir / f"{safe_name}.png"
        try:
            self.screenshot_dir.mkdir(parents=True, exist_ok=True)
            await page.screenshot(path=str(path))
            logger.debug("[%s] Screenshot saved to %s", handle, path)
        except Exception as exc:
            logger.warning("[%s] Screenshot failed: %s", handle, exc)

    @staticmethod
    async def _release(session: ScrapeSession, handle: str) -> None:
        try:
            await session.close()
        except Exception as exc:
            logger.warning("[%s] Session cleanup failed: %s", handle, exc)
