"""Storefront home page: navigation bar, categories and product grid."""

from e2e_harness.core.logging import logForDebugging
from e2e_harness.core.waits import PRODUCT_TITLES
from e2e_harness.models.target import by_css, by_id, by_link_text
from e2e_harness.pages.base import BasePage
from e2e_harness.pages.cart import CartPage
from e2e_harness.pages.login import LoginPage
from e2e_harness.pages.product import ProductPage
from e2e_harness.pages.signup import SignUpPage

CATEGORIES = ("Phones", "Laptops", "Monitors")


class HomePage(BasePage):
    NAV_BAR = by_id("narvbarx", "navigation bar")
    HOME_LINK = by_css("#navbarExample a.nav-link[href='index.html']", "Home link")
    LOGIN_LINK = by_id("login2", "Log in link")
    SIGNUP_LINK = by_id("signin2", "Sign up link")
    CART_LINK = by_id("cartur", "Cart link")
    LOGOUT_LINK = by_id("logout2", "Log out link")
    WELCOME = by_id("nameofuser", "welcome message")
    PRODUCT_GRID = by_id("tbodyid", "product grid")
    PRODUCT_TITLES = PRODUCT_TITLES
    CAROUSEL = by_id("carouselExampleIndicators", "carousel")

    def open(self, base_url: str) -> "HomePage":
        """Navigate to the storefront and wait until products are rendered."""
        self.session.navigate(base_url)
        return self.wait_until_loaded()

    def wait_until_loaded(self) -> "HomePage":
        self.waiter.wait_until_storefront_home_ready()
        return self

    def go_home(self) -> "HomePage":
        self.click(self.HOME_LINK)
        return self.wait_until_loaded()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def open_login(self) -> LoginPage:
        self.click(self.LOGIN_LINK)
        return self.open_page(LoginPage).wait_until_open()

    def open_sign_up(self) -> SignUpPage:
        self.click(self.SIGNUP_LINK)
        return self.open_page(SignUpPage).wait_until_open()

    def open_cart(self, expected_rows: int | None = None) -> CartPage:
        self.click(self.CART_LINK)
        return self.open_page(CartPage).wait_until_loaded(expected_rows)

    def log_out(self) -> "HomePage":
        self.click(self.LOGOUT_LINK)
        self.waiter.wait_until_visible(self.LOGIN_LINK)
        return self

    def select_category(self, category: str) -> "HomePage":
        """Filter the grid by category and wait for it to re-render."""
        if category not in CATEGORIES:
            raise ValueError(f"Unknown category {category!r}; expected one of {', '.join(CATEGORIES)}")
        before = self.product_names()
        self.click(by_link_text(category).within(by_css(".list-group", "categories")))
        self.waiter.wait_until_condition(
            lambda: self._grid_titles() and self._grid_titles() != before,
            f"product grid to show {category}",
        )
        logForDebugging(f"Selected category {category}", level="info")
        return self

    def select_product(self, name: str) -> ProductPage:
        self.waiter.wait_until_count_at_least(self.PRODUCT_TITLES, 1)
        self.click(by_link_text(name).within(self.PRODUCT_GRID))
        return self.open_page(ProductPage).wait_until_loaded()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _grid_titles(self) -> list[str]:
        texts = self.session.locate_all(self.PRODUCT_TITLES).all_inner_texts()
        return [text.strip() for text in texts]

    def product_names(self) -> list[str]:
        self.waiter.wait_until_count_at_least(self.PRODUCT_TITLES, 1)
        return self._grid_titles()

    def product_count(self) -> int:
        return len(self.product_names())

    def welcome_message(self) -> str:
        return self.text_of(self.WELCOME)

    def wait_until_logged_in(self, username: str) -> str:
        """Wait for "Welcome <username>" in the navigation bar; returns the text."""
        welcome = self.find(self.WELCOME)
        expected = f"Welcome {username}"
        self.waiter.wait_until_condition(
            lambda: welcome.inner_text().strip() == expected,
            f"welcome message {expected!r}",
        )
        return expected

    def is_user_logged_in(self) -> bool:
        return self.is_displayed(self.LOGOUT_LINK)

    def is_login_link_visible(self) -> bool:
        return self.is_displayed(self.LOGIN_LINK)

    def is_carousel_displayed(self) -> bool:
        return self.is_displayed(self.CAROUSEL)
