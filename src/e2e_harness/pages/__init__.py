"""Page objects for the Demoblaze storefront."""

from e2e_harness.pages.base import BasePage
from e2e_harness.pages.cart import CartPage
from e2e_harness.pages.checkout import CheckoutPage
from e2e_harness.pages.confirmation import OrderConfirmationPage
from e2e_harness.pages.home import HomePage
from e2e_harness.pages.login import LoginPage
from e2e_harness.pages.product import ProductPage
from e2e_harness.pages.signup import SignUpPage

__all__ = [
    "BasePage",
    "CartPage",
    "CheckoutPage",
    "HomePage",
    "LoginPage",
    "OrderConfirmationPage",
    "ProductPage",
    "SignUpPage",
]
