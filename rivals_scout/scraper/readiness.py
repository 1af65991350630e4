# rivals_scout/scraper/readiness.py
"""
Bounded polling for client-rendered tracker profile pages.

The profile overview renders its cards after the initial document load and
may sit behind a consent dialog, so readiness is decided by looking for
marker text in the rendered content a fixed number of times.
"""

from __future__ import annotations

import asyncio
import enum
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

logger = logging.getLogger(__name__)


class ReadinessState(enum.Enum):
    NAVIGATING = "navigating"
    POLLING = "polling"
    READY = "ready"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class ReadinessResult:
    state: ReadinessState
    attempts: int
    marker: Optional[str] = None

    @property
    def ready(self) -> bool:
        return self.state is ReadinessState.READY


class PageReadinessPoller:
    """Decide whether a navigated page has rendered the profile content."""

    CONSENT_SELECTOR = "#onetrust-accept-btn-handler"
    MARKERS = ("Top Heroes", "trn-card")

    def __init__(
        self,
        max_attempts: int = 12,
        poll_interval: float = 5.0,
        initial_delay: float = 5.0,
        consent_timeout_ms: int = 5000,
        consent_settle: float = 1.0,
        markers: Sequence[str] = MARKERS,
    ):
        self.max_attempts = max_attempts
        self.poll_interval = poll_interval
        self.initial_delay = initial_delay
        self.consent_timeout_ms = consent_timeout_ms
        self.consent_settle = consent_settle
        self.markers = tuple(markers)

    async def wait_until_ready(self, page) -> ReadinessResult:
        """
        Dismiss the consent dialog, wait, then poll for a readiness marker.

        Args:
            page: Playwright page already navigated to the profile URL

        Returns:
            ReadinessResult with state READY or TIMED_OUT
        """
        await self._dismiss_consent(page)

        if self.initial_delay > 0:
            await asyncio.sleep(self.initial_delay)

        attempts = 0
        while attempts < self.max_attempts:
            attempts += 1
            logger.debug("Readiness attempt %d of %d", attempts, self.max_attempts)
            try:
                content = await page.content()
            except Exception as exc:
                logger.debug("Content inspection failed on attempt %d: %s", attempts, exc)
                continue

            marker = self._find_marker(content)
            if marker is not None:
                logger.info("Profile page ready after %d attempt(s) (marker %r)", attempts, marker)
                return ReadinessResult(ReadinessState.READY, attempts, marker)

            if self.poll_interval > 0:
                await asyncio.sleep(self.poll_interval)

        logger.warning("Profile page not ready after %d attempts", attempts)
        return ReadinessResult(ReadinessState.TIMED_OUT, attempts)

    def _find_marker(self, content: str) -> Optional[str]:
        for marker in self.markers:
            if marker in (content or ""):
                return marker
        return None

    async def _dismiss_consent(self, page) -> bool:
        """Click the cookie consent button if it shows up; absence is fine."""
        try:
            button = await page.wait_for_selector(self.CONSENT_SELECTOR, timeout=self.consent_timeout_ms)
        except Exception:
            logger.debug("No consent dialog found")
            return False
        if button is None:
            return False

        try:
            await button.click()
        except Exception as exc:
            logger.debug("Consent button click failed: %s", exc)
            return False
        if self.consent_settle > 0:
            await asyncio.sleep(self.consent_settle)
        return True
