"""Step definitions for the Demoblaze storefront features."""

import uuid

import pytest
from pytest_bdd import given, parsers, then, when

from e2e_harness.core.browser import BrowserSession
from e2e_harness.core.config import HarnessSettings
from e2e_harness.core.dialogs import DialogWatcher
from e2e_harness.core.logging import logEvent
from e2e_harness.core.waits import Waiter
from e2e_harness.models.shop import CheckoutDetails
from e2e_harness.pages.cart import CartPage
from e2e_harness.pages.confirmation import OrderConfirmationPage
from e2e_harness.pages.home import HomePage
from e2e_harness.pages.product import ProductPage
from e2e_harness.steps.api_steps import table_to_records
from e2e_harness.steps.context import ScenarioContext


def unique_username(prefix: str = "e2e") -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


@pytest.fixture
def home_page(browser_session: BrowserSession, waiter: Waiter, dialogs: DialogWatcher) -> HomePage:
    return HomePage(browser_session, waiter, dialogs)


def _current_product(home_page: HomePage) -> ProductPage:
    return home_page.open_page(ProductPage)


def _current_cart(home_page: HomePage) -> CartPage:
    return home_page.open_page(CartPage)


def _sign_up(home_page: HomePage, scenario_context: ScenarioContext, username: str, password: str) -> str:
    message = home_page.open_sign_up().sign_up(username, password)
    scenario_context.record_dialog(message)
    return message


def _log_in(home_page: HomePage, scenario_context: ScenarioContext, username: str, password: str) -> None:
    message = home_page.open_login().login(username, password)
    scenario_context.record_dialog(message)


def _add_product_to_cart(home_page: HomePage, scenario_context: ScenarioContext, product: str) -> None:
    product_page = home_page.select_product(product)
    scenario_context.record_dialog(product_page.add_to_cart())
    scenario_context.product = product


# ----------------------------------------------------------------------
# Given
# ----------------------------------------------------------------------


@given("I am on the storefront home page")
def on_home_page(home_page: HomePage, harness_settings: HarnessSettings) -> None:
    home_page.open(harness_settings.base_url)


@given(parsers.parse('I have registered a new random account with password "{password}"'))
def registered_account(home_page: HomePage, scenario_context: ScenarioContext, password: str) -> None:
    username = unique_username()
    message = _sign_up(home_page, scenario_context, username, password)
    assert "Sign up successful" in message, f"Registration of {username!r} failed: {message!r}"
    scenario_context.remember_credentials(username, password)


@given(parsers.parse('the cart contains the product "{product}"'))
def cart_contains_product(home_page: HomePage, scenario_context: ScenarioContext, product: str) -> None:
    _add_product_to_cart(home_page, scenario_context, product)
    home_page.go_home()
    home_page.open_cart().wait_until_contains(product)


# ----------------------------------------------------------------------
# When: accounts
# ----------------------------------------------------------------------


@when(parsers.parse('I sign up with a new random username and password "{password}"'))
def sign_up_random(home_page: HomePage, scenario_context: ScenarioContext, password: str) -> None:
    username = unique_username()
    _sign_up(home_page, scenario_context, username, password)
    scenario_context.remember_credentials(username, password)


@when(parsers.parse('I sign up with username "{username}" and password "{password}"'))
def sign_up_with(home_page: HomePage, scenario_context: ScenarioContext, username: str, password: str) -> None:
    _sign_up(home_page, scenario_context, username, password)


@when("I log in with the registered account")
def log_in_registered(home_page: HomePage, scenario_context: ScenarioContext) -> None:
    username, password = scenario_context.require_credentials()
    _log_in(home_page, scenario_context, username, password)


@when(parsers.parse('I log in with the registered username and password "{password}"'))
def log_in_registered_with_password(home_page: HomePage, scenario_context: ScenarioContext, password: str) -> None:
    username, _ = scenario_context.require_credentials()
    _log_in(home_page, scenario_context, username, password)


@when(parsers.parse('I log in with username "{username}" and password "{password}"'))
def log_in_with(home_page: HomePage, scenario_context: ScenarioContext, username: str, password: str) -> None:
    _log_in(home_page, scenario_context, username, password)


@when(parsers.parse('I log in with a random unknown username and password "{password}"'))
def log_in_unknown(home_page: HomePage, scenario_context: ScenarioContext, password: str) -> None:
    _log_in(home_page, scenario_context, unique_username("nobody"), password)


@when("I log out")
def log_out(home_page: HomePage) -> None:
    home_page.log_out()


# ----------------------------------------------------------------------
# When: catalogue and cart
# ----------------------------------------------------------------------


@when(parsers.parse('I select the category "{category}"'))
def select_category(home_page: HomePage, category: str) -> None:
    home_page.select_category(category)


@when(parsers.parse('I open the product "{product}"'))
def open_product(home_page: HomePage, scenario_context: ScenarioContext, product: str) -> None:
    home_page.select_product(product)
    scenario_context.product = product


@when("I add the product to the cart")
def add_current_product(home_page: HomePage, scenario_context: ScenarioContext) -> None:
    scenario_context.record_dialog(_current_product(home_page).add_to_cart())


@when("I open the cart")
def open_cart(home_page: HomePage) -> None:
    home_page.open_cart()


@when(parsers.parse('I remove "{product}" from the cart'))
def remove_from_cart(home_page: HomePage, product: str) -> None:
    _current_cart(home_page).remove(product)


@when("I place an order with the details:")
def place_order(home_page: HomePage, scenario_context: ScenarioContext, datatable: list[list[str]]) -> None:
    details = CheckoutDetails.model_validate(table_to_records(datatable)[0])
    checkout = _current_cart(home_page).place_order()
    confirmation = checkout.fill_form(details).purchase()
    scenario_context.values["confirmation"] = confirmation.details()
    scenario_context.values["confirmation_heading"] = confirmation.heading()
    logEvent("order_placed", {"product": scenario_context.product, "name": details.name})


@when("I try to purchase without filling in the form")
def purchase_empty_form(home_page: HomePage, scenario_context: ScenarioContext) -> None:
    checkout = _current_cart(home_page).place_order()
    scenario_context.record_dialog(checkout.attempt_purchase())


# ----------------------------------------------------------------------
# Then
# ----------------------------------------------------------------------


@then(parsers.parse('I should see the alert "{text}"'))
def alert_shown(scenario_context: ScenarioContext, text: str) -> None:
    last = scenario_context.last_dialog
    assert last is not None, f"Expected alert {text!r}, but no alert was shown"
    assert text in last, f"Expected alert {text!r}, got {last!r}"


@then("I should be logged in as the registered user")
def logged_in_as_registered(home_page: HomePage, scenario_context: ScenarioContext) -> None:
    username, _ = scenario_context.require_credentials()
    home_page.wait_until_logged_in(username)
    assert home_page.is_user_logged_in()


@then("I should be logged out")
def logged_out(home_page: HomePage) -> None:
    assert home_page.is_login_link_visible()
    assert not home_page.is_user_logged_in()


@then("the product list should not be empty")
def product_list_not_empty(home_page: HomePage) -> None:
    assert home_page.product_count() > 0


@then(parsers.parse('the product list should contain "{product}"'))
def product_list_contains(home_page: HomePage, product: str) -> None:
    names = home_page.product_names()
    assert product in names, f"{product!r} not in {names}"


@then("the carousel should be displayed")
def carousel_displayed(home_page: HomePage) -> None:
    assert home_page.is_carousel_displayed()


@then(parsers.parse('the product page should show the name "{name}" and price {price:d}'))
def product_page_shows(home_page: HomePage, name: str, price: int) -> None:
    product = _current_product(home_page)
    assert product.name() == name
    assert product.price() == price
    assert product.is_add_to_cart_enabled()


@then(parsers.parse('the cart should contain "{product}"'))
def cart_contains(home_page: HomePage, product: str) -> None:
    _current_cart(home_page).wait_until_contains(product)


@then(parsers.parse("the cart total should be {total:d}"))
def cart_total_is(home_page: HomePage, total: int) -> None:
    assert _current_cart(home_page).wait_until_total_matches() == total


@then("the cart should be empty")
def cart_is_empty(home_page: HomePage) -> None:
    assert _current_cart(home_page).is_empty()


@then("the order should be confirmed")
def order_confirmed(home_page: HomePage, scenario_context: ScenarioContext) -> None:
    heading = scenario_context.values.get("confirmation_heading", "")
    assert "Thank you for your purchase!" in heading, f"Unexpected confirmation heading {heading!r}"
    home_page.open_page(OrderConfirmationPage).wait_until_shown()


@then(parsers.parse("the order amount should be {amount:d}"))
def order_amount_is(scenario_context: ScenarioContext, amount: int) -> None:
    assert scenario_context.values["confirmation"].amount == amount


@then(parsers.parse('the order should be placed in the name of "{name}"'))
def order_name_is(scenario_context: ScenarioContext, name: str) -> None:
    assert scenario_context.values["confirmation"].name == name
