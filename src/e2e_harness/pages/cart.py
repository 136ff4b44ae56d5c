"""Cart page (``cart.html``)."""

from e2e_harness.core.locators import xpath_literal
from e2e_harness.core.logging import logEvent
from e2e_harness.models.shop import CartItem, parse_price
from e2e_harness.models.target import by_css, by_id, by_xpath
from e2e_harness.pages.base import BasePage
from e2e_harness.pages.checkout import CheckoutPage

_ROW_CELLS_JS = "rows => rows.map(r => Array.from(r.cells).map(c => c.innerText.trim()))"


class CartPage(BasePage):
    TABLE = by_css("div.table-responsive table", "cart table")
    ROWS = by_css("#tbodyid > tr", "cart rows")
    TOTAL = by_id("totalp", "cart total")
    PLACE_ORDER = by_xpath("//button[text()='Place Order']", "Place Order button")

    def wait_until_loaded(self, expected_rows: int | None = None) -> "CartPage":
        """Wait for the cart table; with ``expected_rows`` also for that many rows."""
        self.waiter.wait_until_url_contains("cart.html")
        if expected_rows is not None:
            self.waiter.wait_until_cart_ready(self.TABLE, self.ROWS, expected_rows=expected_rows)
        else:
            self.waiter.wait_until_visible(self.TABLE)
        return self

    def items(self) -> list[CartItem]:
        """Rows currently in the table (picture, title, price, delete)."""
        rows = self.session.locate_all(self.ROWS).evaluate_all(_ROW_CELLS_JS)
        return [CartItem(title=cells[1], price=parse_price(cells[2])) for cells in rows if len(cells) >= 3]

    def item_titles(self) -> list[str]:
        return [item.title for item in self.items()]

    def contains(self, title: str) -> bool:
        return title in self.item_titles()

    def row_count(self) -> int:
        return self.session.locate_all(self.ROWS).count()

    def is_empty(self) -> bool:
        return self.row_count() == 0

    def total(self) -> int | None:
        """The displayed total, or None while the site has not rendered one."""
        text = self.session.locate(self.TOTAL).inner_text().strip()
        return parse_price(text) if text else None

    def wait_until_total_matches(self) -> int:
        """Wait until the displayed total equals the sum of the row prices."""

        def settled() -> int | None:
            items = self.items()
            total = self.total()
            if items and total == sum(item.price for item in items):
                return total
            return None

        return self.waiter.wait_until_condition(settled, "cart total to match its rows")

    def wait_until_contains(self, title: str) -> None:
        self.waiter.wait_until_condition(lambda: self.contains(title), f"cart to contain {title!r}")

    def remove(self, title: str) -> None:
        """Delete the row for ``title`` and wait until it is gone."""
        delete_link = by_xpath(
            f"//tbody[@id='tbodyid']/tr[td[normalize-space()={xpath_literal(title)}]]//a[text()='Delete']",
            f"Delete link for {title!r}",
        )
        self.click(delete_link)
        self.waiter.wait_until_condition(
            lambda: not self.contains(title),
            f"{title!r} to leave the cart",
        )
        logEvent("cart_item_removed", {"title": title})

    def place_order(self) -> CheckoutPage:
        self.click(self.PLACE_ORDER)
        return self.open_page(CheckoutPage).wait_until_open()
