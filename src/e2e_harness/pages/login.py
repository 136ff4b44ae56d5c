"""Log-in modal."""

from e2e_harness.core.logging import logEvent, logForDebugging
from e2e_harness.models.target import by_css, by_id
from e2e_harness.pages.base import BasePage


class LoginPage(BasePage):
    MODAL = by_id("logInModal", "log-in modal")
    TITLE = by_css("#logInModal .modal-title", "log-in modal title")
    USERNAME = by_id("loginusername", "log-in username field")
    PASSWORD = by_id("loginpassword", "log-in password field")
    SUBMIT = by_css("#logInModal .btn-primary", "Log in button")
    CLOSE = by_css("#logInModal .modal-footer .btn-secondary", "log-in Close button")

    def wait_until_open(self) -> "LoginPage":
        self.waiter.wait_until_modal_ready(self.MODAL)
        self.waiter.wait_until_clickable(self.USERNAME, timeout=self.waiter.timeouts.quick_seconds)
        return self

    def is_open(self) -> bool:
        return self.is_displayed(self.MODAL)

    def modal_title(self) -> str:
        return self.text_of(self.TITLE)

    def enter_username(self, username: str) -> "LoginPage":
        self.fill(self.USERNAME, username)
        return self

    def enter_password(self, password: str) -> "LoginPage":
        self.fill(self.PASSWORD, password)
        return self

    def submit(self) -> str | None:
        """Click "Log in" and wait for the outcome.

        Returns:
            None when the modal closed (logged in), otherwise the text of
            the alert the site raised ("Wrong password.", ...).

        Raises:
            TimeoutFailure: If neither happens within the default timeout.
        """
        self.click(self.SUBMIT)
        modal = self.session.locate(self.MODAL)

        def outcome() -> tuple[str, str | None] | None:
            if self.dialogs is not None:
                message = self.dialogs.poll()
                if message is not None:
                    return ("alert", message)
            if modal.is_hidden():
                return ("closed", None)
            return None

        kind, message = self.waiter.wait_until_condition(outcome, "log-in alert or modal to close")
        logEvent("login_submitted", {"outcome": kind, "message": message})
        return message

    def login(self, username: str, password: str) -> str | None:
        """Fill the form and submit it; see :meth:`submit` for the result."""
        logForDebugging(f"Logging in as {username!r}", level="info")
        self.enter_username(username)
        self.enter_password(password)
        return self.submit()

    def close(self) -> None:
        self.click(self.CLOSE)
        self.waiter.wait_until_invisible(self.MODAL, timeout=self.waiter.timeouts.quick_seconds)
