"""Explicit waits for browser scenarios.

This module provides the polling engine every wait is built on, the named
wait operations page objects use, and the timeout classification that turns
an expired deadline into a descriptive :class:`TimeoutFailure`.

Contract:
- A wait either returns normally or raises TimeoutFailure. It never returns
  a boolean sentinel.
- Predicate errors in the transient set (see :func:`is_transient`) count as
  "not yet" and are retried until the deadline.
- Any other predicate error propagates immediately.
- Every wait is bounded; non-positive timeouts raise ConfigurationError
  before the first evaluation.
"""

import time
import warnings
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Locator
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from e2e_harness.core.config import ConfigurationError, TimeoutSettings
from e2e_harness.core.logging import ErrorIds, logError, logForDebugging
from e2e_harness.models.target import Target, by_css

if TYPE_CHECKING:
    from e2e_harness.core.browser import BrowserSession

T = TypeVar("T")

DEFAULT_POLL_INTERVAL = 0.5

# Upper bound (ms) for single Playwright probes made inside a predicate.
PROBE_TIMEOUT_MS = 1000

# Playwright error messages raised while the page is between documents.
TRANSIENT_ERROR_MARKERS = (
    "Execution context was destroyed",
    "Cannot find context with specified id",
    "Element is not attached to the DOM",
    "frame was detached",
)

PRODUCT_TITLES = by_css(".card-title", "product titles")


class TransientEvaluationError(Exception):
    """Raised by a predicate when the awaited state has not arrived yet."""


class TimeoutFailure(TimeoutError):
    """Raised when a wait's deadline elapses without the condition holding.

    Attributes:
        description: What was awaited.
        timeout: The timeout that applied, in seconds.
        snapshot: Diagnostic state captured at the moment of failure, if any.
        last_error: The last transient error swallowed while polling, if any.
    """

    def __init__(
        self,
        description: str,
        timeout: float,
        snapshot: str | None = None,
        last_error: BaseException | None = None,
    ) -> None:
        self.description = description
        self.timeout = timeout
        self.snapshot = snapshot
        self.last_error = last_error

        message = f"Timed out after {timeout:g}s waiting for {description}"
        if snapshot:
            message += f" ({snapshot})"
        if last_error is not None:
            message += f"; last error: {type(last_error).__name__}: {last_error}"
        super().__init__(message)


def is_transient(exc: BaseException) -> bool:
    """Return True if a predicate error means "not yet" rather than "broken"."""
    if isinstance(exc, (TransientEvaluationError, PlaywrightTimeoutError)):
        return True
    if isinstance(exc, PlaywrightError):
        message = str(exc)
        return any(marker in message for marker in TRANSIENT_ERROR_MARKERS)
    return False


def classify_timeout(
    description: str,
    timeout: float,
    snapshot: Callable[[], str] | None = None,
    last_error: BaseException | None = None,
) -> TimeoutFailure:
    """Build the TimeoutFailure for an expired wait.

    The snapshot callback is best-effort: if it raises, the failure is still
    produced without it.
    """
    snapshot_value: str | None = None
    if snapshot is not None:
        try:
            snapshot_value = snapshot()
        except Exception as e:
            logError(
                ErrorIds.WAIT_SNAPSHOT_FAILED,
                f"Could not capture diagnostics for {description!r}",
                extra={"error": e},
            )

    failure = TimeoutFailure(description, timeout, snapshot_value, last_error)
    logError(ErrorIds.WAIT_TIMEOUT, str(failure))
    return failure


def _check_timeout(timeout: float) -> float:
    if timeout <= 0:
        raise ConfigurationError(f"Wait timeout must be positive, got {timeout}")
    return timeout


class Poller:
    """Evaluates a condition until it yields a truthy value or a deadline passes."""

    def __init__(
        self,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Any] = time.sleep,
    ) -> None:
        if poll_interval <= 0:
            raise ConfigurationError(f"Poll interval must be positive, got {poll_interval}")
        self.poll_interval = poll_interval
        self._clock = clock
        self._sleep = sleep

    def until(
        self,
        condition: Callable[[], T],
        timeout: float,
        description: str,
        snapshot: Callable[[], str] | None = None,
    ) -> T:
        """Poll ``condition`` until it returns a truthy value.

        Args:
            condition: Zero-argument callable evaluated against live state.
            timeout: Seconds before giving up.
            description: What is being awaited, used in the failure message.
            snapshot: Optional callback producing diagnostics on timeout.

        Returns:
            The first truthy value returned by ``condition``.

        Raises:
            ConfigurationError: If ``timeout`` is not positive.
            TimeoutFailure: If the deadline passes first.
            Exception: Any non-transient error raised by ``condition``.
        """
        _check_timeout(timeout)
        deadline = self._clock() + timeout
        attempts = 0
        last_error: BaseException | None = None

        while True:
            attempts += 1
            try:
                result = condition()
            except Exception as e:
                if not is_transient(e):
                    raise
                last_error = e
            else:
                if result:
                    if attempts > 1:
                        logForDebugging(f"Condition met: {description}", extra={"attempts": attempts})
                    return result

            remaining = deadline - self._clock()
            if remaining <= 0:
                break
            self._sleep(min(self.poll_interval, remaining))

        raise classify_timeout(description, timeout, snapshot, last_error)


class Waiter:
    """Named wait operations bound to one browser session.

    Create one per session and reuse it for every wait in that session. Each
    operation accepts an optional ``timeout`` (seconds); without it the
    default tier from :class:`TimeoutSettings` applies.
    """

    def __init__(
        self,
        session: "BrowserSession",
        timeouts: TimeoutSettings | None = None,
        poller: Poller | None = None,
    ) -> None:
        self.session = session
        self.timeouts = timeouts or TimeoutSettings()
        self.poller = poller or Poller(self.timeouts.poll_interval_seconds, sleep=session.pause)

    @property
    def default_timeout(self) -> float:
        return self.timeouts.default_seconds

    def _timeout(self, timeout: float | None) -> float:
        return _check_timeout(self.default_timeout if timeout is None else timeout)

    # ------------------------------------------------------------------
    # Element waits
    # ------------------------------------------------------------------

    def wait_until_visible(self, target: Target, timeout: float | None = None) -> Locator:
        """Wait until ``target`` is visible; returns its locator."""
        locator = self.session.locate(target)
        self.poller.until(
            locator.is_visible,
            self._timeout(timeout),
            f"{target.label} to be visible",
        )
        return locator

    def wait_until_clickable(self, target: Target, timeout: float | None = None) -> Locator:
        """Wait until ``target`` is visible and enabled; returns its locator."""
        locator = self.session.locate(target)
        self.poller.until(
            lambda: locator.is_visible() and locator.is_enabled(timeout=PROBE_TIMEOUT_MS),
            self._timeout(timeout),
            f"{target.label} to be clickable",
        )
        return locator

    def wait_until_invisible(self, target: Target, timeout: float | None = None) -> None:
        """Wait until ``target`` is absent or hidden."""
        locator = self.session.locate(target)
        self.poller.until(
            locator.is_hidden,
            self._timeout(timeout),
            f"{target.label} to disappear",
        )

    def wait_until_count_at_least(self, target: Target, minimum: int, timeout: float | None = None) -> int:
        """Wait until at least ``minimum`` elements match ``target``; returns the count."""
        if minimum < 1:
            raise ConfigurationError(f"minimum must be at least 1, got {minimum}")
        locator = self.session.locate_all(target)

        def enough() -> int:
            count = locator.count()
            return count if count >= minimum else 0

        return self.poller.until(
            enough,
            self._timeout(timeout),
            f"at least {minimum} x {target.label}",
            snapshot=lambda: f"found {locator.count()}",
        )

    # ------------------------------------------------------------------
    # Generic and page-level waits
    # ------------------------------------------------------------------

    def wait_until_condition(
        self,
        predicate: Callable[[], T],
        description: str = "custom condition",
        timeout: float | None = None,
    ) -> T:
        """Wait until ``predicate()`` is truthy; returns its value."""
        return self.poller.until(predicate, self._timeout(timeout), description)

    def wait_until_page_ready(self, timeout: float | None = None) -> None:
        """Wait until the document reports readyState "complete"."""
        self.poller.until(
            lambda: self.session.current_state().is_loaded,
            self._timeout(timeout),
            "page to finish loading",
            snapshot=lambda: self.session.current_state().summary(),
        )

    def wait_until_title_contains(self, text: str, timeout: float | None = None) -> None:
        """Wait until the page title contains ``text``."""
        page = self.session.page
        self.poller.until(
            lambda: text in page.title(),
            self._timeout(timeout),
            f"title containing {text!r}",
            snapshot=lambda: f"current title: {page.title()!r}",
        )

    def wait_until_url_contains(self, fragment: str, timeout: float | None = None) -> None:
        """Wait until the current URL contains ``fragment``."""
        page = self.session.page
        self.poller.until(
            lambda: fragment in page.url,
            self._timeout(timeout),
            f"URL containing {fragment!r}",
            snapshot=lambda: f"current url: {page.url!r}",
        )

    def is_ready(self, target: Target) -> bool:
        """Check once, without waiting, whether ``target`` is visible and enabled."""
        locator = self.session.locate(target)
        try:
            return locator.is_visible() and locator.is_enabled(timeout=PROBE_TIMEOUT_MS)
        except PlaywrightError as e:
            if is_transient(e):
                return False
            raise

    # ------------------------------------------------------------------
    # Storefront composites (sequential; the first failing step aborts)
    # ------------------------------------------------------------------

    def wait_until_storefront_home_ready(self) -> None:
        """Page loaded, title contains "STORE", and product cards rendered."""
        self.wait_until_page_ready()
        self.wait_until_title_contains("STORE", timeout=self.timeouts.quick_seconds)
        self.wait_until_count_at_least(PRODUCT_TITLES, 1)
        logForDebugging("Storefront home is ready", level="info")

    def wait_until_modal_ready(self, modal: Target) -> Locator:
        """Modal visible, shown (``show`` class or ``display: block``), and interactive."""
        locator = self.wait_until_visible(modal)

        def shown() -> bool:
            classes = locator.get_attribute("class", timeout=PROBE_TIMEOUT_MS) or ""
            style = locator.get_attribute("style", timeout=PROBE_TIMEOUT_MS) or ""
            return "show" in classes.split() or "block" in style

        self.wait_until_condition(
            shown,
            f"{modal.label} to be shown",
            timeout=self.timeouts.quick_seconds,
        )
        self.wait_until_clickable(modal, timeout=self.timeouts.quick_seconds)
        return locator

    def wait_until_product_page_ready(self, name: Target, add_button: Target) -> None:
        """Product name visible, add-to-cart clickable, page loaded."""
        self.wait_until_visible(name)
        self.wait_until_clickable(add_button)
        self.wait_until_page_ready(timeout=self.timeouts.quick_seconds)

    def wait_until_cart_ready(
        self,
        container: Target,
        rows: Target,
        expected_rows: int | None = None,
    ) -> int:
        """Cart table visible and its rows settled; returns the row count.

        With ``expected_rows`` the wait holds until exactly that many rows are
        present (0 for an emptied cart). Without it, the wait holds until rows
        are present or the container reports the cart as empty.
        """
        table = self.wait_until_visible(container)
        locator = self.session.locate_all(rows)
        if expected_rows is None:
            def settled() -> tuple[int] | None:
                count = locator.count()
                if count > 0 or "empty" in table.inner_text(timeout=PROBE_TIMEOUT_MS).lower():
                    return (count,)
                return None

            (count,) = self.poller.until(
                settled,
                self._timeout(None),
                f"{rows.label} or an empty-cart message",
                snapshot=lambda: f"found {locator.count()}",
            )
            return count

        self.poller.until(
            lambda: locator.count() == expected_rows,
            self._timeout(None),
            f"cart to contain exactly {expected_rows} row(s)",
            snapshot=lambda: f"found {locator.count()}",
        )
        return expected_rows


# ----------------------------------------------------------------------
# Deprecated boolean API. Kept for old call sites only: it discards the
# TimeoutFailure message. Use Waiter instead.
# ----------------------------------------------------------------------


def _legacy(name: str, call: Callable[[], Any]) -> bool:
    warnings.warn(
        f"{name}() is deprecated; use the matching Waiter method instead",
        DeprecationWarning,
        stacklevel=3,
    )
    try:
        call()
    except TimeoutFailure as e:
        logForDebugging(f"{name}: {e}", level="warning")
        return False
    return True


def _legacy_waiter(session: "BrowserSession", timeout: float | None) -> Waiter:
    timeouts = session.settings.timeouts
    if timeout is not None:
        _check_timeout(timeout)
        timeouts = TimeoutSettings(
            default_seconds=timeout,
            quick_seconds=min(timeout, timeouts.quick_seconds),
            extended_seconds=max(timeout, timeouts.extended_seconds),
            poll_interval_seconds=timeouts.poll_interval_seconds,
            page_load_seconds=timeouts.page_load_seconds,
        )
    return Waiter(session, timeouts)


def wait_for_visible(session: "BrowserSession", target: Target, timeout: float) -> bool:
    """Deprecated: True if ``target`` became visible within ``timeout``."""
    return _legacy("wait_for_visible", lambda: _legacy_waiter(session, timeout).wait_until_visible(target))


def wait_for_clickable(session: "BrowserSession", target: Target, timeout: float) -> bool:
    """Deprecated: True if ``target`` became clickable within ``timeout``."""
    return _legacy("wait_for_clickable", lambda: _legacy_waiter(session, timeout).wait_until_clickable(target))


def wait_for_condition(session: "BrowserSession", predicate: Callable[[], Any], timeout: float) -> bool:
    """Deprecated: True if ``predicate`` held within ``timeout``."""
    return _legacy(
        "wait_for_condition",
        lambda: _legacy_waiter(session, timeout).wait_until_condition(predicate, "legacy condition"),
    )


def wait_for_storefront_home(session: "BrowserSession") -> bool:
    """Deprecated: True if the storefront home page became ready."""
    return _legacy("wait_for_storefront_home", lambda: _legacy_waiter(session, None).wait_until_storefront_home_ready())
