"""Purchase confirmation dialog (SweetAlert) shown after checkout."""

from e2e_harness.models.shop import OrderConfirmation
from e2e_harness.models.target import by_css
from e2e_harness.pages.base import BasePage

THANK_YOU = "Thank you for your purchase!"


class OrderConfirmationPage(BasePage):
    ALERT = by_css(".sweet-alert", "purchase confirmation")
    HEADING = by_css(".sweet-alert h2", "purchase confirmation heading")
    DETAILS = by_css(".sweet-alert p.lead", "order details")
    OK = by_css(".sweet-alert button.confirm", "confirmation OK button")

    def wait_until_shown(self) -> "OrderConfirmationPage":
        self.waiter.wait_until_visible(self.ALERT, timeout=self.waiter.timeouts.extended_seconds)
        self.waiter.wait_until_visible(self.HEADING)
        return self

    def heading(self) -> str:
        return self.text_of(self.HEADING)

    def is_order_confirmed(self) -> bool:
        return THANK_YOU in self.heading()

    def details(self) -> OrderConfirmation:
        """Parse the receipt (id, amount, card, name, date)."""
        return OrderConfirmation.parse(self.text_of(self.DETAILS))

    def confirm(self) -> None:
        """Click OK; the site then returns to the home page."""
        self.click(self.OK)
        self.waiter.wait_until_invisible(self.ALERT)
