"""Tests for HomePage."""

from unittest.mock import MagicMock

import pytest

from e2e_harness.models.target import by_css, by_link_text
from e2e_harness.pages.cart import CartPage
from e2e_harness.pages.home import HomePage
from e2e_harness.pages.login import LoginPage
from e2e_harness.pages.product import ProductPage
from e2e_harness.pages.signup import SignUpPage


@pytest.fixture
def home(mock_session: MagicMock, mock_waiter: MagicMock, mock_dialogs: MagicMock) -> HomePage:
    return HomePage(mock_session, mock_waiter, mock_dialogs)


class TestNavigation:
    def test_open(self, home: HomePage, mock_session: MagicMock, mock_waiter: MagicMock) -> None:
        assert home.open("https://www.demoblaze.com") is home
        mock_session.navigate.assert_called_once_with("https://www.demoblaze.com")
        mock_waiter.wait_until_storefront_home_ready.assert_called_once()

    def test_open_login(self, home: HomePage, mock_waiter: MagicMock, mock_dialogs: MagicMock) -> None:
        login = home.open_login()
        assert isinstance(login, LoginPage)
        assert login.dialogs is mock_dialogs
        mock_waiter.wait_until_clickable.assert_any_call(HomePage.LOGIN_LINK, timeout=None)
        mock_waiter.wait_until_modal_ready.assert_called_once_with(LoginPage.MODAL)

    def test_open_sign_up(self, home: HomePage, mock_waiter: MagicMock) -> None:
        assert isinstance(home.open_sign_up(), SignUpPage)
        mock_waiter.wait_until_modal_ready.assert_called_once_with(SignUpPage.MODAL)

    def test_open_cart(self, home: HomePage, mock_waiter: MagicMock) -> None:
        assert isinstance(home.open_cart(expected_rows=1), CartPage)
        mock_waiter.wait_until_url_contains.assert_called_once_with("cart.html")
        mock_waiter.wait_until_cart_ready.assert_called_once_with(CartPage.TABLE, CartPage.ROWS, expected_rows=1)

    def test_log_out(self, home: HomePage, mock_waiter: MagicMock) -> None:
        home.log_out()
        mock_waiter.wait_until_clickable.assert_called_once_with(HomePage.LOGOUT_LINK, timeout=None)
        mock_waiter.wait_until_visible.assert_called_once_with(HomePage.LOGIN_LINK)

    def test_select_product(self, home: HomePage, mock_waiter: MagicMock) -> None:
        product = home.select_product("Samsung galaxy s6")
        assert isinstance(product, ProductPage)
        mock_waiter.wait_until_clickable.assert_any_call(
            by_link_text("Samsung galaxy s6").within(HomePage.PRODUCT_GRID), timeout=None
        )
        mock_waiter.wait_until_url_contains.assert_called_once_with("prod.html")


class TestCategories:
    def test_waits_for_grid_to_change(self, home: HomePage, mock_session: MagicMock, mock_waiter: MagicMock) -> None:
        titles = mock_session.locate_all.return_value.all_inner_texts
        titles.side_effect = [["Samsung galaxy s6", "Nokia lumia 1520"], ["Sony vaio i5 "], ["Sony vaio i5 "]]
        home.select_category("Laptops")
        mock_waiter.wait_until_clickable.assert_called_once_with(
            by_link_text("Laptops").within(by_css(".list-group", "categories")), timeout=None
        )
        assert mock_waiter.wait_until_condition.call_args.args[1] == "product grid to show Laptops"

    def test_unknown_category(self, home: HomePage, mock_waiter: MagicMock) -> None:
        with pytest.raises(ValueError, match="Unknown category 'Tablets'"):
            home.select_category("Tablets")
        mock_waiter.wait_until_clickable.assert_not_called()


class TestQueries:
    def test_product_names_are_stripped(self, home: HomePage, mock_session: MagicMock) -> None:
        mock_session.locate_all.return_value.all_inner_texts.return_value = [" Samsung galaxy s6\n", "Nokia lumia 1520"]
        assert home.product_names() == ["Samsung galaxy s6", "Nokia lumia 1520"]
        assert home.product_count() == 2

    def test_wait_until_logged_in(self, home: HomePage, mock_waiter: MagicMock) -> None:
        mock_waiter.wait_until_visible.return_value.inner_text.return_value = "Welcome jdoe"
        assert home.wait_until_logged_in("jdoe") == "Welcome jdoe"
        mock_waiter.wait_until_visible.assert_called_once_with(HomePage.WELCOME, timeout=None)

    def test_logged_in_checks(self, home: HomePage, mock_session: MagicMock) -> None:
        mock_session.locate.return_value.is_visible.return_value = True
        assert home.is_user_logged_in()
        assert home.is_carousel_displayed()
        mock_session.locate.assert_any_call(HomePage.LOGOUT_LINK)
        mock_session.locate.assert_any_call(HomePage.CAROUSEL)

    def test_title_and_url(self, home: HomePage) -> None:
        assert home.title == "STORE"
        assert home.url.endswith("index.html")
