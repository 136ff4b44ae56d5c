"""Sign-up modal."""

from e2e_harness.core.logging import logEvent
from e2e_harness.models.target import by_css, by_id
from e2e_harness.pages.base import BasePage

SIGN_UP_SUCCESS = "Sign up successful"


class SignUpPage(BasePage):
    MODAL = by_id("signInModal", "sign-up modal")
    USERNAME = by_id("sign-username", "sign-up username field")
    PASSWORD = by_id("sign-password", "sign-up password field")
    SUBMIT = by_css("#signInModal .btn-primary", "Sign up button")
    CLOSE = by_css("#signInModal .modal-footer .btn-secondary", "sign-up Close button")

    def wait_until_open(self) -> "SignUpPage":
        self.waiter.wait_until_modal_ready(self.MODAL)
        self.waiter.wait_until_clickable(self.USERNAME, timeout=self.waiter.timeouts.quick_seconds)
        return self

    def is_open(self) -> bool:
        return self.is_displayed(self.MODAL)

    def sign_up(self, username: str, password: str) -> str:
        """Submit the form and return the site's alert text.

        On success the site closes the modal; this waits for that too.
        """
        self.fill(self.USERNAME, username)
        self.fill(self.PASSWORD, password)
        self.click(self.SUBMIT)

        message = self.expect_dialog()
        logEvent("sign_up_submitted", {"username": username, "message": message})
        if SIGN_UP_SUCCESS in message:
            self.waiter.wait_until_invisible(self.MODAL, timeout=self.waiter.timeouts.quick_seconds)
        return message

    def close(self) -> None:
        self.click(self.CLOSE)
        self.waiter.wait_until_invisible(self.MODAL, timeout=self.waiter.timeouts.quick_seconds)
