"""Product detail page (``prod.html``)."""

from e2e_harness.core.logging import logForDebugging
from e2e_harness.models.shop import parse_price
from e2e_harness.models.target import by_css, by_xpath
from e2e_harness.pages.base import BasePage

PRODUCT_ADDED = "Product added"


class ProductPage(BasePage):
    NAME = by_css("h2.name", "product name")
    PRICE = by_css("h3.price-container", "product price")
    DESCRIPTION = by_css("#more-information p", "product description")
    IMAGE = by_css(".item.active img", "product image")
    ADD_TO_CART = by_xpath("//a[text()='Add to cart']", "Add to cart button")

    def wait_until_loaded(self) -> "ProductPage":
        self.waiter.wait_until_url_contains("prod.html")
        self.waiter.wait_until_product_page_ready(self.NAME, self.ADD_TO_CART)
        return self

    def name(self) -> str:
        return self.text_of(self.NAME)

    def price(self) -> int:
        return parse_price(self.text_of(self.PRICE))

    def description(self) -> str:
        return self.text_of(self.DESCRIPTION)

    def is_image_loaded(self) -> bool:
        image = self.find(self.IMAGE)
        return bool(image.evaluate("img => img.complete && img.naturalWidth > 0"))

    def is_add_to_cart_enabled(self) -> bool:
        return self.waiter.is_ready(self.ADD_TO_CART)

    def add_to_cart(self) -> str:
        """Click "Add to cart" and return the confirmation alert text."""
        product = self.name()
        self.click(self.ADD_TO_CART)
        message = self.expect_dialog(PRODUCT_ADDED, timeout=self.waiter.timeouts.extended_seconds)
        logForDebugging(f"Added {product!r} to cart", level="info")
        return message
