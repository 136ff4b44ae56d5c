"""Native dialog (alert/confirm) handling.

The storefront reports most outcomes through ``window.alert``. Playwright
auto-dismisses dialogs unless a handler is registered, so the watcher
records each message and answers it as soon as it opens. Tests then wait
for the recorded message instead of racing the dialog itself.
"""

from typing import TYPE_CHECKING

from playwright.sync_api import Dialog, Page

from e2e_harness.core.logging import ErrorIds, logError, logEvent

if TYPE_CHECKING:
    from e2e_harness.core.waits import Waiter


class DialogWatcher:
    """Accepts (or dismisses) every dialog on a page and remembers its text."""

    def __init__(self, page: Page, accept: bool = True, max_history_length: int = 50) -> None:
        self._page = page
        self.accept = accept
        self._max_history_length = max_history_length
        self._history: list[str] = []
        self._pending: list[str] = []
        self._attached = True
        page.on("dialog", self._handle)

    def _handle(self, dialog: Dialog) -> None:
        message = dialog.message
        self._history.append(message)
        if len(self._history) > self._max_history_length:
            self._history = self._history[-self._max_history_length :]
        self._pending.append(message)
        logEvent("dialog_handled", {"type": dialog.type, "message": message, "accepted": self.accept})
        if self.accept:
            dialog.accept()
        else:
            dialog.dismiss()

    @property
    def history(self) -> list[str]:
        """The most recent dialog messages (up to ``max_history_length``), oldest first."""
        return list(self._history)

    def drain(self) -> list[str]:
        """Return and forget messages not yet consumed by wait_for_dialog()."""
        pending, self._pending = self._pending, []
        return pending

    def poll(self, expected: str | None = None) -> str | None:
        """Consume and return the next pending message (containing ``expected``), if any.

        Messages that do not match ``expected`` are consumed too.
        """
        while self._pending:
            message = self._pending.pop(0)
            if expected is None or expected in message:
                return message
        return None

    def _poll_boxed(self, expected: str | None) -> tuple[str] | None:
        # Wrapped so an empty alert() message still counts as a dialog.
        message = self.poll(expected)
        return None if message is None else (message,)

    def wait_for_dialog(
        self,
        waiter: "Waiter",
        expected: str | None = None,
        timeout: float | None = None,
    ) -> str:
        """Wait for the next dialog and return its message.

        Args:
            waiter: Wait facade bound to the same session.
            expected: If given, wait for a message containing this text;
                      unrelated messages seen meanwhile are consumed.
            timeout: Seconds to wait; defaults to the waiter's default tier.

        Raises:
            TimeoutFailure: If no (matching) dialog appears in time.
        """
        description = "a dialog" if expected is None else f"a dialog containing {expected!r}"
        try:
            (message,) = waiter.wait_until_condition(
                lambda: self._poll_boxed(expected),
                description,
                timeout=timeout,
            )
            return message
        except TimeoutError:
            logError(ErrorIds.DIALOG_MISSING, f"No dialog appeared: expected {expected!r}", extra={"seen": self._history})
            raise

    def detach(self) -> None:
        """Stop handling dialogs on the page. Safe to call more than once."""
        if not self._attached:
            return
        self._page.remove_listener("dialog", self._handle)
        self._attached = False
