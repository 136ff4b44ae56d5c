"""Storefront domain models: cart lines, checkout form data and order receipts."""

import re

from pydantic import BaseModel, ConfigDict


class CartItem(BaseModel):
    """One row of the cart table."""

    model_config = ConfigDict(frozen=True)

    title: str
    price: int


class CheckoutDetails(BaseModel):
    """Fields of the "Place order" form. Name and card are required by the site."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    country: str = ""
    city: str = ""
    card: str = ""
    month: str = ""
    year: str = ""


_FIELD_PATTERN = re.compile(r"^(Id|Amount|Card Number|Name|Date):\s*(.*)$")


class OrderConfirmation(BaseModel):
    """Receipt shown after a successful purchase.

    Attributes:
        order_id: Order id assigned by the site.
        amount: Charged amount in USD.
        card_number: Card number as entered.
        name: Buyer name as entered.
        date: Order date as printed by the site (d/m/yyyy).
    """

    model_config = ConfigDict(frozen=True)

    order_id: str
    amount: int
    card_number: str = ""
    name: str = ""
    date: str = ""

    @classmethod
    def parse(cls, text: str) -> "OrderConfirmation":
        """Parse the receipt paragraph ("Id: 1\\nAmount: 360 USD\\n...").

        Raises:
            ValueError: If the id or amount line is missing.
        """
        fields: dict[str, str] = {}
        for line in text.splitlines():
            match = _FIELD_PATTERN.match(line.strip())
            if match:
                fields[match.group(1)] = match.group(2).strip()

        if "Id" not in fields or "Amount" not in fields:
            raise ValueError(f"Not an order receipt: {text!r}")

        amount = re.sub(r"[^0-9]", "", fields["Amount"])
        return cls(
            order_id=fields["Id"],
            amount=int(amount or 0),
            card_number=fields.get("Card Number", ""),
            name=fields.get("Name", ""),
            date=fields.get("Date", ""),
        )


def parse_price(text: str) -> int:
    """Extract the integer price from strings like "$360 *includes tax" or "790".

    Raises:
        ValueError: If ``text`` contains no digits.
    """
    match = re.search(r"\d+", text.replace(",", ""))
    if match is None:
        raise ValueError(f"No price in {text!r}")
    return int(match.group())
