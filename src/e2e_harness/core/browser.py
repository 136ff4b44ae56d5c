"""Browser session lifecycle for scenarios.

A BrowserSession owns one Playwright browser, context and page for the
lifetime of one scenario. It is created explicitly and handed to the page
objects and the Waiter that need it; :func:`open_session` guarantees the
browser is closed on every exit path.
"""

import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from playwright.sync_api import Browser, BrowserContext, Locator, Page, Playwright
from playwright.sync_api import Error as PlaywrightError

from e2e_harness.core.config import BrowserSettings, HarnessSettings
from e2e_harness.core.locators import resolve_all, resolve_target
from e2e_harness.core.logging import ErrorIds, logError, logEvent, logForDebugging
from e2e_harness.models.state import PageState
from e2e_harness.models.target import Target


class SessionClosedError(RuntimeError):
    """Raised when the page is used before start() or after quit()."""


class NavigationError(RuntimeError):
    """Raised when navigation keeps failing after all retries."""

    def __init__(self, url: str, attempts: int, last_error: BaseException | None) -> None:
        self.url = url
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"Navigation to {url!r} failed after {attempts} attempt(s): {last_error}")


def normalize_url(url: str) -> str:
    """Strip whitespace and add ``https://`` when no scheme is given.

    Raises:
        ValueError: If ``url`` is empty.
    """
    url = (url or "").strip()
    if not url:
        raise ValueError("URL must not be empty")
    if not url.startswith(("http://", "https://", "about:", "file://")):
        logForDebugging(f"URL missing scheme, assuming https: {url}", level="warning")
        url = f"https://{url}"
    return url


def _launch_browser(playwright: Playwright, settings: BrowserSettings) -> Browser:
    browser_type = getattr(playwright, settings.name)
    if settings.channel:
        return browser_type.launch(headless=settings.headless, channel=settings.channel)
    return browser_type.launch(headless=settings.headless)


class BrowserSession:
    """One browser, context and page, owned by a single scenario."""

    def __init__(
        self,
        playwright: Playwright,
        settings: HarnessSettings,
        sleep=time.sleep,
    ) -> None:
        self._playwright = playwright
        self.settings = settings
        self._sleep = sleep
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._page: Page | None = None
        self._started_at: float | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> "BrowserSession":
        """Launch the browser and open a page.

        Returns:
            self, for chaining.
        """
        if self._page is not None:
            return self

        browser_settings = self.settings.browser
        self._browser = _launch_browser(self._playwright, browser_settings)
        self._context = self._browser.new_context(
            viewport={
                "width": browser_settings.viewport_width,
                "height": browser_settings.viewport_height,
            },
        )
        self._page = self._context.new_page()

        timeouts = self.settings.timeouts
        self._page.set_default_timeout(timeouts.default_seconds * 1000)
        self._page.set_default_navigation_timeout(timeouts.page_load_seconds * 1000)

        self._started_at = time.monotonic()
        logEvent(
            "session_started",
            {"browser": browser_settings.name, "headless": browser_settings.headless},
        )
        return self

    @property
    def is_open(self) -> bool:
        return self._page is not None

    @property
    def page(self) -> Page:
        if self._page is None:
            raise SessionClosedError("Browser session is not open")
        return self._page

    def quit(self) -> None:
        """Close context and browser. Safe to call more than once."""
        if self._browser is None and self._context is None:
            return

        duration = time.monotonic() - self._started_at if self._started_at else 0.0
        for name, closeable in (("context", self._context), ("browser", self._browser)):
            if closeable is None:
                continue
            try:
                closeable.close()
            except PlaywrightError as e:
                logError(
                    ErrorIds.SESSION_CLEANUP_FAILED,
                    f"Error closing {name}",
                    extra={"error": e},
                )

        self._page = None
        self._context = None
        self._browser = None
        self._started_at = None
        logEvent("session_closed", {"duration_s": round(duration, 1)})

    def __enter__(self) -> "BrowserSession":
        return self.start()

    def __exit__(self, *exc_info: object) -> None:
        self.quit()

    # ------------------------------------------------------------------
    # Navigation and state
    # ------------------------------------------------------------------

    def navigate(self, url: str) -> None:
        """Go to ``url``, retrying with exponential backoff.

        Raises:
            NavigationError: If every attempt fails.
        """
        url = normalize_url(url)
        policy = self.settings.navigation
        last_error: BaseException | None = None

        for attempt in range(1, policy.retries + 1):
            try:
                logForDebugging(
                    f"Navigating to {url}",
                    level="info",
                    extra={"attempt": f"{attempt}/{policy.retries}"},
                )
                started = time.monotonic()
                self.page.goto(url, wait_until="load")
                logEvent(
                    "navigation_done",
                    {"url": url, "ms": int((time.monotonic() - started) * 1000)},
                )
                return
            except PlaywrightError as e:
                last_error = e
                logError(
                    ErrorIds.NAVIGATION_RETRY,
                    f"Navigation attempt {attempt}/{policy.retries} failed",
                    extra={"url": url, "error": e},
                )
                if attempt < policy.retries:
                    self._sleep(policy.backoff_seconds * (2 ** (attempt - 1)))

        logError(ErrorIds.NAVIGATION_FAILED, f"Navigation failed after {policy.retries} attempts: {url}")
        raise NavigationError(url, policy.retries, last_error)

    def current_state(self) -> PageState:
        """Read title, URL and readyState from the live page."""
        page = self.page
        ready_state = page.evaluate("() => document.readyState")
        return PageState(url=page.url, title=page.title(), ready_state=str(ready_state))

    def pause(self, seconds: float) -> None:
        """Sleep while letting Playwright dispatch page events (dialogs, etc.)."""
        self.page.wait_for_timeout(seconds * 1000)

    def locate(self, target: Target) -> Locator:
        """Resolve ``target`` to a single-element locator on the current page."""
        return resolve_target(self.page, target)

    def locate_all(self, target: Target) -> Locator:
        """Resolve ``target`` to a locator over every matching element."""
        return resolve_all(self.page, target)

    # ------------------------------------------------------------------
    # Evidence primitives
    # ------------------------------------------------------------------

    def screenshot(self, path: Path, full_page: bool = False) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        self.page.screenshot(path=str(path), full_page=full_page)
        return path

    def page_source(self) -> str:
        return self.page.content()


@contextmanager
def open_session(playwright: Playwright, settings: HarnessSettings) -> Iterator[BrowserSession]:
    """Open a browser session and always close it on exit.

    Example:
        from playwright.sync_api import sync_playwright

        with sync_playwright() as p:
            with open_session(p, settings) as session:
                session.navigate(settings.base_url)
    """
    session = BrowserSession(playwright, settings)
    try:
        session.start()
        yield session
    finally:
        session.quit()
