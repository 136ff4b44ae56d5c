"""Place-order modal opened from the cart."""

from e2e_harness.core.logging import logForDebugging
from e2e_harness.models.shop import CheckoutDetails
from e2e_harness.models.target import by_id, by_xpath
from e2e_harness.pages.base import BasePage
from e2e_harness.pages.confirmation import OrderConfirmationPage

MISSING_FIELDS_ALERT = "Please fill out Name and Creditcard."


class CheckoutPage(BasePage):
    MODAL = by_id("orderModal", "place-order modal")
    NAME = by_id("name", "order name field")
    COUNTRY = by_id("country", "order country field")
    CITY = by_id("city", "order city field")
    CARD = by_id("card", "order credit card field")
    MONTH = by_id("month", "order month field")
    YEAR = by_id("year", "order year field")
    PURCHASE = by_xpath("//div[@id='orderModal']//button[text()='Purchase']", "Purchase button")
    CLOSE = by_xpath("//div[@id='orderModal']//button[text()='Close']", "place-order Close button")

    def wait_until_open(self) -> "CheckoutPage":
        self.waiter.wait_until_modal_ready(self.MODAL)
        return self

    def is_open(self) -> bool:
        return self.is_displayed(self.MODAL)

    def fill_form(self, details: CheckoutDetails) -> "CheckoutPage":
        fields = (
            (self.NAME, details.name),
            (self.COUNTRY, details.country),
            (self.CITY, details.city),
            (self.CARD, details.card),
            (self.MONTH, details.month),
            (self.YEAR, details.year),
        )
        for target, value in fields:
            self.fill(target, value)
        logForDebugging("Checkout form filled", extra={"name": details.name})
        return self

    def purchase(self) -> OrderConfirmationPage:
        """Submit a complete form and wait for the confirmation."""
        self.click(self.PURCHASE)
        return self.open_page(OrderConfirmationPage).wait_until_shown()

    def attempt_purchase(self) -> str:
        """Submit an incomplete form and return the validation alert text."""
        self.click(self.PURCHASE)
        return self.expect_dialog()

    def close(self) -> None:
        self.click(self.CLOSE)
        self.waiter.wait_until_invisible(self.MODAL, timeout=self.waiter.timeouts.quick_seconds)
