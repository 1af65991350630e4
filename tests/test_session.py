import asyncio

import pytest

from rivals_scout.scraper import session as session_module
from rivals_scout.scraper.session import ScrapeSession
from tests.helpers import FakeBrowser, FakeContext, FakePage


class FakePlaywright:
    def __init__(self):
        self.stop_calls = 0

    async def stop(self):
        self.stop_calls += 1


class ExplodingPage(FakePage):
    async def close(self):
        self.close_calls += 1
        raise RuntimeError("Target closed")


def test_close_releases_every_page_and_resource():
    main_page, popup = FakePage(), FakePage()
    context = FakeContext([main_page, popup])
    browser = FakeBrowser()
    driver = FakePlaywright()
    session = ScrapeSession(page=main_page, context=context, browser=browser, playwright=driver)

    asyncio.run(session.close())

    assert session.closed
    assert main_page.close_calls == 1 and popup.close_calls == 1
    assert context.close_calls == 1
    assert browser.close_calls == 1
    assert driver.stop_calls == 1


def test_double_close_is_noop():
    page = FakePage()
    context = FakeContext([page])
    browser = FakeBrowser()
    session = ScrapeSession(page=page, context=context, browser=browser)

    async def run():
        await session.close()
        await session.close()

    asyncio.run(run())
    assert page.close_calls == 1
    assert context.close_calls == 1
    assert browser.close_calls == 1


def test_close_never_raises():
    page = ExplodingPage()
    context = FakeContext([page])
    browser = FakeBrowser(fail_on_close=True)
    session = ScrapeSession(page=page, context=context, browser=browser)

    asyncio.run(session.close())

    assert session.closed
    assert browser.close_calls == 1


def test_async_context_manager_closes():
    page = FakePage()
    session = ScrapeSession(page=page, context=FakeContext([page]))

    async def run():
        async with session as s:
            assert s.page is page

    asyncio.run(run())
    assert session.closed
    assert page.is_closed()


class _FailingChromium:
    async def launch(self, **kwargs):
        raise RuntimeError("Executable doesn't exist")


class _FailingDriver:
    chromium = _FailingChromium()

    async def stop(self):
        raise RuntimeError("driver connection closed")


class _DriverStarter:
    async def start(self):
        return _FailingDriver()


def test_launch_failure_reports_launch_error_even_if_stop_fails(monkeypatch):
    monkeypatch.setattr(session_module, "async_playwright", lambda: _DriverStarter())

    with pytest.raises(RuntimeError) as exc:
        asyncio.run(session_module.launch_session())

    assert "Executable doesn't exist" in str(exc.value)
    assert "driver connection closed" not in str(exc.value)
