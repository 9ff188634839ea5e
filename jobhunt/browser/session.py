"""One signed-in patchright Chromium page for the whole search run.

LinkedIn hides job search behind a login, so the context is seeded from the
cookie file written by scripts/extract_cookies.py; this module never types
credentials. The window is always visible because LinkedIn treats headless
Chromium as a bot, which is also why patchright is used over playwright.
"""

import json
import logging
from pathlib import Path
from types import TracebackType
from typing import Any

from patchright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright

from jobhunt.core.config import BrowserConfig

logger = logging.getLogger(__name__)


class BrowserSession:
    """Async context manager that owns one patchright browser + context + page.

    The page is exclusively owned by whichever stream is consuming it; nothing
    else should navigate it while a search is running.

    Usage::

        async with BrowserSession(config) as session:
            adapter = LinkedInAdapter(session.page)
            async for link, title, company in adapter.stream(criteria):
                ...
    """

    def __init__(self, config: BrowserConfig) -> None:
        self._config = config
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._page: Page | None = None

    @property
    def page(self) -> Page:
        if self._page is None:
            msg = "BrowserSession not entered; open it with 'async with' first"
            raise RuntimeError(msg)
        return self._page

    async def __aenter__(self) -> "BrowserSession":
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(
            headless=False, slow_mo=self._config.slow_mo_ms,
        )
        self._context = await self._signed_in_context(self._browser)
        self._page = await self._context.new_page()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        for closable in (self._context, self._browser):
            if closable is not None:
                await closable.close()
        if self._playwright is not None:
            await self._playwright.stop()
        self._context = self._browser = self._playwright = None
        self._page = None

    async def _signed_in_context(self, browser: Browser) -> BrowserContext:
        # Result-count parsing assumes English digit grouping.
        context = await browser.new_context(locale=self._config.locale)
        context.set_default_timeout(self._config.timeout_ms)

        cookies = load_cookies(self._config.cookies_path)
        if not cookies:
            logger.warning(
                "No LinkedIn cookies in %s; job search needs a signed-in session, "
                "run scripts/extract_cookies.py first",
                self._config.cookies_path,
            )
            return context

        await context.add_cookies(cookies)
        logger.info("Loaded %d cookies from %s", len(cookies), self._config.cookies_path)
        return context


def load_cookies(path: str) -> list[Any]:
    """Read a cookie export (JSON array). Any unreadable file yields ``[]``."""
    cookie_path = Path(path)
    if not cookie_path.is_file():
        logger.debug("No cookie file at %s", path)
        return []
    try:
        data = json.loads(cookie_path.read_text())
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Could not read cookies from %s: %s", path, e)
        return []
    if not isinstance(data, list):
        logger.warning("Cookie file %s does not hold a JSON array", path)
        return []
    return data
