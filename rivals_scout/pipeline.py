"""
Screenshot-to-recommendations flow shared by the web app and the CLI.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from rivals_scout import config
from rivals_scout.models import PlayerResult
from rivals_scout.names import extract_candidate_handles
from rivals_scout.ocr import recognize_text
from rivals_scout.recommender import BanRecommender, format_summary
from rivals_scout.scraper import PageReadinessPoller, TrackerScraper

logger = logging.getLogger(__name__)

Recognizer = Callable[[bytes], str]


def build_scraper(headless: Optional[bool] = None) -> TrackerScraper:
    """Create a TrackerScraper wired from environment settings; `headless` overrides SCOUT_HEADLESS."""
    poller = PageReadinessPoller(
        max_attempts=config.MAX_ATTEMPTS,
        poll_interval=config.POLL_INTERVAL_SECONDS,
        initial_delay=config.INITIAL_DELAY_SECONDS,
        consent_timeout_ms=config.CONSENT_TIMEOUT_MS,
    )
    return TrackerScraper(
        poller=poller,
        headless=config.HEADLESS if headless is None else headless,
        navigation_timeout_ms=config.NAVIGATION_TIMEOUT_MS,
        encode_handles=config.ENCODE_HANDLES,
        screenshot_dir=config.SCREENSHOT_DIR,
    )


def _default_recognizer(image_bytes: bytes) -> str:
    return recognize_text(image_bytes, language=config.OCR_LANGUAGE, tesseract_cmd=config.TESSERACT_CMD)


class ScoutPipeline:
    """OCR -> handles -> concurrent scrape -> ban ranking."""

    def __init__(
        self,
        scraper: Optional[TrackerScraper] = None,
        recognizer: Optional[Recognizer] = None,
        recommender: Optional[BanRecommender] = None,
        headless: Optional[bool] = None,
    ):
        self.scraper = scraper or build_scraper(headless=headless)
        self.recognizer = recognizer or _default_recognizer
        self.recommender = recommender or BanRecommender()

    async def process_image(self, image_bytes: bytes) -> Dict[str, Any]:
        """
        Run the full flow for an uploaded screenshot.

        OCR failures propagate (the whole batch is unusable); per-handle scrape
        failures are reported inside ``trackerResults``.
        """
        logger.info("Starting OCR on %d byte upload", len(image_bytes))
        extracted_text = await asyncio.to_thread(self.recognizer, image_bytes)
        handles = extract_candidate_handles(extracted_text)
        logger.info("OCR produced %d candidate handle(s)", len(handles))

        response = await self.process_handles(handles)
        response["extractedText"] = extracted_text
        return response

    async def process_handles(self, handles: Sequence[str]) -> Dict[str, Any]:
        """Scrape the given handles and rank ban candidates."""
        results = await self.scraper.scrape_players(list(handles))
        return self.build_response(results)

    def build_response(self, results: List[PlayerResult]) -> Dict[str, Any]:
        recommendations = self.recommender.recommend(results)
        return {
            "success": True,
            "trackerResults": [result.to_dict() for result in results],
            "banRecommendations": [rec.to_dict() for rec in recommendations],
            "banSummary": format_summary(recommendations),
        }
