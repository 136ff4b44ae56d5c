"""Shared behaviour for storefront page objects."""

from typing import TypeVar

from playwright.sync_api import Locator

from e2e_harness.core.browser import BrowserSession
from e2e_harness.core.dialogs import DialogWatcher
from e2e_harness.core.logging import logForDebugging
from e2e_harness.core.waits import Waiter
from e2e_harness.models.target import Target

P = TypeVar("P", bound="BasePage")


class BasePage:
    """A page object bound to one browser session and its Waiter.

    Subclasses declare their elements as ``Target`` class constants and use
    the helpers below, which always wait before interacting.
    """

    def __init__(
        self,
        session: BrowserSession,
        waiter: Waiter,
        dialogs: DialogWatcher | None = None,
    ) -> None:
        self.session = session
        self.waiter = waiter
        self.dialogs = dialogs

    def find(self, target: Target, timeout: float | None = None) -> Locator:
        return self.waiter.wait_until_visible(target, timeout=timeout)

    def click(self, target: Target, timeout: float | None = None) -> None:
        logForDebugging(f"Click {target.label}")
        self.waiter.wait_until_clickable(target, timeout=timeout).click()

    def fill(self, target: Target, text: str) -> None:
        self.find(target).fill(text)

    def text_of(self, target: Target, timeout: float | None = None) -> str:
        return self.find(target, timeout=timeout).inner_text().strip()

    def is_displayed(self, target: Target) -> bool:
        """Non-waiting visibility check."""
        return self.session.locate(target).is_visible()

    def expect_dialog(self, expected: str | None = None, timeout: float | None = None) -> str:
        """Wait for the next native dialog and return its message.

        Raises:
            RuntimeError: If the page was built without a DialogWatcher.
            TimeoutFailure: If no dialog appears in time.
        """
        if self.dialogs is None:
            raise RuntimeError(f"{type(self).__name__} has no DialogWatcher attached")
        return self.dialogs.wait_for_dialog(self.waiter, expected, timeout=timeout)

    @property
    def title(self) -> str:
        return self.session.page.title()

    @property
    def url(self) -> str:
        return self.session.page.url

    def open_page(self, page_class: type["P"]) -> "P":
        """Build another page object sharing this one's session, waiter and dialogs."""
        return page_class(self.session, self.waiter, self.dialogs)
