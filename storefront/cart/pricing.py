"""
Pricing Calculator

Pure functions that derive money figures from a ledger. All figures keep full
Decimal precision; rounding happens only in the display helpers.
"""
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Dict, Iterable

from storefront.services.money import format_money, multiply, to_kobo
from .models import CartItem

FREE_DELIVERY_THRESHOLD = Decimal("5000")
DELIVERY_FEE = Decimal("500")
TAX_RATE = Decimal("0.075")
TAX_LABEL = "Tax (7.5%)"
FREE_LABEL = "Free"


class Fulfillment(str, Enum):
    """How the order reaches the shopper."""
    DELIVERY = "delivery"
    PICKUP = "pickup"  # Collected in store, no delivery fee


def subtotal(items: Iterable[CartItem]) -> Decimal:
    """Sum of unit price × quantity; zero for an empty cart."""
    return sum((item.line_total for item in items), Decimal("0"))


def delivery_fee(amount: Decimal, fulfillment: Fulfillment = Fulfillment.DELIVERY) -> Decimal:
    """Flat fee unless the subtotal is strictly above the free-delivery threshold."""
    if fulfillment == Fulfillment.PICKUP:
        return Decimal("0")
    return Decimal("0") if amount > FREE_DELIVERY_THRESHOLD else DELIVERY_FEE


def tax(amount: Decimal) -> Decimal:
    """Tax on the subtotal only; delivery is not taxed."""
    return multiply(amount, TAX_RATE)


@dataclass(frozen=True)
class PricingSnapshot:
    """Derived money figures for a ledger. Never persisted."""
    subtotal: Decimal
    delivery_fee: Decimal
    tax: Decimal
    grand_total: Decimal

    @property
    def free_delivery(self) -> bool:
        return self.subtotal > FREE_DELIVERY_THRESHOLD

    @property
    def grand_total_kobo(self) -> int:
        return to_kobo(self.grand_total)

    def display(self) -> Dict[str, str]:
        """Formatted strings for every figure, rounded to whole naira."""
        return {
            "subtotal": format_price(self.subtotal),
            "delivery_fee": format_delivery(self.delivery_fee),
            "tax": format_price(self.tax),
            "grand_total": format_price(self.grand_total),
        }


ZERO_PRICING = PricingSnapshot(Decimal("0"), Decimal("0"), Decimal("0"), Decimal("0"))


def price_ledger(items: Iterable[CartItem], fulfillment: Fulfillment = Fulfillment.DELIVERY) -> PricingSnapshot:
    """
    Price a ledger.

    An empty ledger prices to zero across the board since there is nothing to
    deliver. Any non-empty ledger pays delivery under the usual rule, even when
    its subtotal is zero.
    """
    lines = list(items)
    if not lines:
        return ZERO_PRICING

    amount = subtotal(lines)
    fee = delivery_fee(amount, fulfillment)
    tax_amount = tax(amount)
    return PricingSnapshot(
        subtotal=amount,
        delivery_fee=fee,
        tax=tax_amount,
        grand_total=amount + fee + tax_amount,
    )


def grand_total(items: Iterable[CartItem], fulfillment: Fulfillment = Fulfillment.DELIVERY) -> Decimal:
    return price_ledger(items, fulfillment).grand_total


def format_price(value) -> str:
    """Render an amount for display, e.g. ₦6,450."""
    return format_money(value)


def format_delivery(fee: Decimal) -> str:
    return FREE_LABEL if fee == 0 else format_price(fee)
