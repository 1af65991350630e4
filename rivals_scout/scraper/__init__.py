"""
Web scraping module for tracker.gg Marvel Rivals profiles.

Playwright sessions are opened per handle and scraped concurrently.
"""

from .core import (
    TrackerScraper,
    ProfileLoadTimeout,
    PlayerNotFoundError,
    ScraperBlockedError,
    build_profile_url,
)
from .profile import ProfileScraper, ProfileStats
from .readiness import PageReadinessPoller, ReadinessResult, ReadinessState
from .session import ScrapeSession, launch_session

__all__ = [
    'TrackerScraper',
    'ProfileLoadTimeout',
    'PlayerNotFoundError',
    'ScraperBlockedError',
    'build_profile_url',
    'ProfileScraper',
    'ProfileStats',
    'PageReadinessPoller',
    'ReadinessResult',
    'ReadinessState',
    'ScrapeSession',
    'launch_session',
]
