"""Harness data models."""

from e2e_harness.models.api import ApiResponse, PostPayload, UserPayload
from e2e_harness.models.shop import CartItem, CheckoutDetails, OrderConfirmation, parse_price
from e2e_harness.models.state import PageState
from e2e_harness.models.target import (
    Target,
    by_css,
    by_id,
    by_link_text,
    by_role,
    by_text,
    by_xpath,
)

__all__ = [
    "ApiResponse",
    "CartItem",
    "CheckoutDetails",
    "OrderConfirmation",
    "PageState",
    "PostPayload",
    "Target",
    "UserPayload",
    "by_css",
    "by_id",
    "by_link_text",
    "by_role",
    "by_text",
    "by_xpath",
    "parse_price",
]
