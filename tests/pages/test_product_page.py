"""Tests for ProductPage."""

from unittest.mock import MagicMock

import pytest

from e2e_harness.pages.product import ProductPage


@pytest.fixture
def locators(mock_waiter: MagicMock) -> dict:
    """One locator double per target, returned by wait_until_visible."""
    by_target = {
        ProductPage.NAME: MagicMock(**{"inner_text.return_value": "Samsung galaxy s6"}),
        ProductPage.PRICE: MagicMock(**{"inner_text.return_value": "$360 *includes tax"}),
        ProductPage.DESCRIPTION: MagicMock(**{"inner_text.return_value": " The Samsung Galaxy S6 is powered by... "}),
        ProductPage.IMAGE: MagicMock(**{"evaluate.return_value": True}),
    }
    mock_waiter.wait_until_visible.side_effect = lambda target, timeout=None: by_target[target]
    return by_target


@pytest.fixture
def product(mock_session: MagicMock, mock_waiter: MagicMock, mock_dialogs: MagicMock, locators: dict) -> ProductPage:
    return ProductPage(mock_session, mock_waiter, mock_dialogs)


def test_wait_until_loaded(product: ProductPage, mock_waiter: MagicMock) -> None:
    assert product.wait_until_loaded() is product
    mock_waiter.wait_until_url_contains.assert_called_once_with("prod.html")
    mock_waiter.wait_until_product_page_ready.assert_called_once_with(ProductPage.NAME, ProductPage.ADD_TO_CART)


def test_details(product: ProductPage) -> None:
    assert product.name() == "Samsung galaxy s6"
    assert product.price() == 360
    assert product.description().startswith("The Samsung")
    assert product.is_image_loaded()


def test_add_to_cart_waits_for_alert(product: ProductPage, mock_waiter: MagicMock, mock_dialogs: MagicMock) -> None:
    mock_dialogs.wait_for_dialog.return_value = "Product added."
    assert product.add_to_cart() == "Product added."
    mock_waiter.wait_until_clickable.assert_called_once_with(ProductPage.ADD_TO_CART, timeout=None)
    mock_dialogs.wait_for_dialog.assert_called_once_with(mock_waiter, "Product added", timeout=30.0)


def test_add_to_cart_enabled(product: ProductPage, mock_waiter: MagicMock) -> None:
    mock_waiter.is_ready.return_value = False
    assert not product.is_add_to_cart_enabled()
    mock_waiter.is_ready.assert_called_once_with(ProductPage.ADD_TO_CART)
