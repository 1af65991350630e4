# tests/helpers.py

import os
from typing import Dict, Iterable, List, Optional
from urllib.parse import unquote

from rivals_scout.scraper.session import ScrapeSession

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), 'fixtures')

LOADING_HTML = "<html><head><title>Tracker</title></head><body><div>Loading...</div></body></html>"


def read_fixture(filename: str) -> str:
    with open(os.path.join(FIXTURES_DIR, filename), 'r', encoding='utf-8') as f:
        return f.read()


class FakeResponse:
    def __init__(self, status: int = 200):
        self.status = status


class FakeElement:
    def __init__(self):
        self.clicks = 0

    async def click(self):
        self.clicks += 1


class FakePage:
    """Stand-in for a Playwright page driven by scripted content."""

    def __init__(self, contents: Optional[Iterable] = None, title: str = "Tracker",
                 consent: bool = False, status: int = 200, goto_error: Optional[Exception] = None):
        self.contents: List = list(contents or [LOADING_HTML])
        self._title = title
        self.consent_button = FakeElement() if consent else None
        self.status = status
        self.goto_error = goto_error
        self.visited: List[str] = []
        self.content_calls = 0
        self.close_calls = 0
        self.screenshots: List[str] = []
        self._closed = False

    async def goto(self, url, wait_until=None, timeout=None):
        self.visited.append(url)
        if self.goto_error is not None:
            raise self.goto_error
        return FakeResponse(self.status)

    async def title(self):
        return self._title

    async def wait_for_selector(self, selector, timeout=None):
        if self.consent_button is None:
            raise TimeoutError(f"Timeout {timeout}ms exceeded waiting for {selector}")
        return self.consent_button

    async def content(self):
        index = min(self.content_calls, len(self.contents) - 1)
        self.content_calls += 1
        item = self.contents[index]
        if isinstance(item, Exception):
            raise item
        return item

    async def screenshot(self, path=None):
        self.screenshots.append(path)

    async def close(self):
        self.close_calls += 1
        self._closed = True

    def is_closed(self):
        return self._closed


class FakeContext:
    def __init__(self, pages):
        self.pages = list(pages)
        self.close_calls = 0

    async def close(self):
        self.close_calls += 1


class FakeBrowser:
    def __init__(self, fail_on_close: bool = False):
        self.fail_on_close = fail_on_close
        self.close_calls = 0

    async def close(self):
        self.close_calls += 1
        if self.fail_on_close:
            raise RuntimeError("browser already gone")


def make_session(page: FakePage, fail_on_close: bool = False) -> ScrapeSession:
    return ScrapeSession(page=page, context=FakeContext([page]), browser=FakeBrowser(fail_on_close))


class FakeTracker:
    """
    Session factory serving scripted profiles keyed by handle.

    The handle is read back from the navigated URL, so one factory can serve
    many concurrent pipelines.
    """

    def __init__(self, profiles: Dict[str, str], goto_errors: Optional[Dict[str, Exception]] = None,
                 fail_on_close: bool = False):
        self.profiles = profiles
        self.goto_errors = goto_errors or {}
        self.fail_on_close = fail_on_close
        self.sessions: List[ScrapeSession] = []
        self.pages: List['RoutedPage'] = []

    async def __call__(self) -> ScrapeSession:
        page = RoutedPage(self)
        session = make_session(page, fail_on_close=self.fail_on_close)
        self.pages.append(page)
        self.sessions.append(session)
        return session


class RoutedPage(FakePage):
    def __init__(self, tracker: FakeTracker):
        super().__init__()
        self.tracker = tracker
        self.handle = None

    async def goto(self, url, wait_until=None, timeout=None):
        self.visited.append(url)
        self.handle = unquote(url.split('/ign/', 1)[1].split('/', 1)[0])
        error = self.tracker.goto_errors.get(self.handle)
        if error is not None:
            raise error
        self.contents = [self.tracker.profiles.get(self.handle, LOADING_HTML)]
        return FakeResponse(200)
